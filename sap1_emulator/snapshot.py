"""
SAP-1 Emulator — VM State Snapshots

A VMState is a point-in-time copy of the full machine: every register
plus all 16 RAM cells. It shares nothing with the live machine, so
stepping the emulator after capture() never changes a snapshot, and
nothing done to a snapshot reaches the emulator.

Ownership is exclusive and explicit. Each successful capture() must be
matched by exactly one release(); the context-manager form does that
on exit. capture() returns None when the copy cannot be allocated, so
check before entering the block:

    state = emu.snapshot()
    if state is not None:
        with state:
            print(state.regs.display())

Releasing twice, or reading a released snapshot, raises
SnapshotReleasedError.
"""

import logging
from typing import Optional

from .config import PROG_SIZE
from .cpu.regs import Registers

log = logging.getLogger(__name__)


class SnapshotReleasedError(Exception):
    """Raised on use of a snapshot after release()."""
    pass


class VMState:
    """Independently owned copy of registers + RAM."""

    __slots__ = ('_regs', '_ram', '_released')

    def __init__(self, regs: Registers, ram: bytes):
        self._regs = regs
        self._ram = ram
        self._released = False

    def _check(self):
        if self._released:
            raise SnapshotReleasedError("VM state used after release")

    @property
    def regs(self) -> Registers:
        self._check()
        return self._regs

    @property
    def ram(self) -> bytes:
        self._check()
        return self._ram

    @property
    def released(self) -> bool:
        return self._released

    def release(self):
        """Free the copied state. Must be called exactly once."""
        self._check()
        self._regs = None
        self._ram = None
        self._released = True

    def __enter__(self) -> 'VMState':
        self._check()
        return self

    def __exit__(self, exc_type, exc, tb):
        if not self._released:
            self.release()
        return False

    def __repr__(self):
        if self._released:
            return "VMState(<released>)"
        return f"VMState({self._regs.display()}, ram={self._ram.hex()})"


def capture(emu) -> Optional[VMState]:
    """Copy the emulator's registers and RAM into a new VMState.

    Returns None (and logs) if the copy cannot be allocated; the live
    machine is left untouched either way.
    """
    try:
        regs = emu.regs.copy()
        ram = emu.mem.save()
        return VMState(regs, ram)
    except MemoryError:
        log.error("Memory Error.")
        return None


def release(state: VMState):
    """Free a snapshot returned by capture()."""
    state.release()


def restore(emu, state: VMState):
    """Write a snapshot back into the emulator's registers and RAM."""
    regs = state.regs
    for name, value in regs.as_dict().items():
        setattr(emu.regs, name, value)
    ram = state.ram
    for addr in range(PROG_SIZE):
        emu.mem.write8(addr, ram[addr])
