"""
SAP-1 Emulator — Main Emulator Class

This is the top-level class that integrates:
  - CPU registers (regs.py)
  - 16-cell RAM (memory.py)
  - Opcode decoder (decoder.py)
  - ALU operations (alu.py)
  - Cycle gate (clock.py)

Execution model (one step() = one full instruction):
  1. Fetch:   BUS ← PC, MAR ← BUS, wait,
              BUS ← RAM[MAR], IR ← BUS, PC ← PC + 1, wait
  2. Decode:  IR opcode nibble → handler (reserved opcode → INVALID_OPCODE)
  3. Execute: handler routes values across the bus with its own waits
              and returns a Status

Every implemented instruction paces 5 waits in total (2 fetch + 3
execute). Address-taking instructions recombine the whole instruction
register onto the bus and mask the low nibble off it, as the hardware
does.

Status values:
  CONTINUE        0   keep stepping
  HALTED          1   HLT executed
  INVALID_OPCODE -1   reserved opcode decoded; terminal for this run
"""

import logging
from enum import IntEnum
from typing import Callable, Optional

from .config import DEFAULT_CLOCK_MS, NIBBLE_MASK, WORD_MASK
from .cpu.regs import Registers
from .cpu.decoder import Opcode, IllegalOpcode, decode, disassemble
from .cpu import alu
from .mem.memory import Memory
from .clock import Clock, CycleGate
from .programs import SAMPLE
from . import snapshot as _snapshot

log = logging.getLogger(__name__)


class Status(IntEnum):
    CONTINUE = 0
    HALTED = 1
    INVALID_OPCODE = -1


class SAP1Emulator:
    """SAP-1 virtual machine.

    Owns its register file, RAM and cycle gate; any number of
    emulators can run side by side without sharing state.

    Usage:
        emu = SAP1Emulator(clock=NullClock())
        emu.load_sample()
        status = emu.run()
        print(f"{emu.regs.OUT:X}")   # 0
    """

    def __init__(self, clock: Optional[CycleGate] = None):
        self.regs = Registers()
        self.mem = Memory()
        self.clock = clock if clock is not None else Clock(DEFAULT_CLOCK_MS)

        # Completed instruction fetches since reset
        self.cycles = 0

        self._trace = False
        self._trace_output = []

        self._dispatch = self._build_dispatch()

    # ══════════════════════════════════════════════
    # Loading
    # ══════════════════════════════════════════════

    def load_program(self, data) -> int:
        """Load a program image into RAM (truncated to 16 cells)."""
        count = self.mem.load(data)
        if len(data) > count:
            log.debug("Program truncated: %d bytes given, %d loaded", len(data), count)
        return count

    def save_program(self, dest=None):
        """Copy RAM out; see Memory.save()."""
        return self.mem.save(dest)

    def load_sample(self):
        """Load the built-in count-to-wraparound program."""
        self.mem.load(SAMPLE)

    # ══════════════════════════════════════════════
    # Clock
    # ══════════════════════════════════════════════

    def set_clock(self, interval_ms: int):
        """Set the pacing interval for every later wait on this machine.

        The injected gate is always kept. Gates without an adjustable
        interval (NullClock, CountingClock, host step gates) ignore it.
        """
        if hasattr(self.clock, "interval_ms"):
            self.clock.interval_ms = interval_ms
        else:
            log.debug("Cycle gate %r has no interval; set_clock(%d) ignored",
                      self.clock, interval_ms)

    def _wait(self, count: int = 1):
        for _ in range(count):
            self.clock.wait()

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self) -> Status:
        """Execute one instruction cycle and return its Status."""
        pc = self.regs.PC
        self._fetch()
        self.cycles += 1

        try:
            _, op, _ = decode(self.regs.IR)
        except IllegalOpcode as e:
            log.warning("Invalid opcode at $%X: %s", pc, e)
            self._record_trace(pc)
            return Status.INVALID_OPCODE

        status = self._dispatch[op]()
        self._record_trace(pc)

        if status == Status.HALTED:
            log.info("HLT at $%X after %d cycles, OUT=$%02X", pc, self.cycles, self.regs.OUT)
        return status

    def run(self, max_steps: Optional[int] = None,
            on_step: Optional[Callable[['SAP1Emulator', Status], None]] = None) -> Status:
        """Step until HLT or an invalid opcode.

        Args:
            max_steps: Stop after this many cycles and return CONTINUE
            on_step: Observer called as on_step(emu, status) after each cycle

        Returns:
            The Status that ended the run
        """
        steps = 0
        while max_steps is None or steps < max_steps:
            status = self.step()
            steps += 1
            if on_step is not None:
                on_step(self, status)
            if status != Status.CONTINUE:
                return status
        return Status.CONTINUE

    def _fetch(self):
        regs = self.regs
        regs.BUS = regs.PC
        regs.MAR = regs.BUS

        self._wait()

        regs.BUS = self.mem.read8(regs.MAR)
        regs.IR_INS = regs.BUS >> 4
        regs.IR_OPR = regs.BUS & NIBBLE_MASK
        regs.PC = regs.PC + 1

        self._wait()

    def _ir_to_mar(self):
        """BUS ← IR, MAR ← BUS & 0xF"""
        self.regs.BUS = self.regs.IR
        self.regs.MAR = self.regs.BUS & NIBBLE_MASK

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════

    def _build_dispatch(self) -> dict:
        """Build opcode → handler dispatch table."""
        return {
            Opcode.NOP: self._op_nop,
            Opcode.LDA: self._op_lda,
            Opcode.ADD: self._op_add,
            Opcode.SUB: self._op_sub,
            Opcode.STA: self._op_sta,
            Opcode.LDI: self._op_ldi,
            Opcode.JMP: self._op_jmp,
            Opcode.JC:  self._op_jc,
            Opcode.JZ:  self._op_jz,
            Opcode.OUT: self._op_out,
            Opcode.HLT: self._op_hlt,
        }

    def _op_nop(self) -> Status:
        self._wait(3)
        return Status.CONTINUE

    def _op_lda(self) -> Status:
        self._ir_to_mar()
        self._wait()
        self.regs.BUS = self.mem.read8(self.regs.MAR)
        self.regs.A = self.regs.BUS & WORD_MASK
        self._wait(2)
        return Status.CONTINUE

    def _alu_op(self, fn) -> Status:
        regs = self.regs
        self._ir_to_mar()
        self._wait()
        regs.BUS = self.mem.read8(regs.MAR)
        regs.B = regs.BUS & WORD_MASK
        self._wait()
        regs.BUS, regs.A, regs.CF, regs.ZF = fn(regs.A, regs.B)
        self._wait()
        return Status.CONTINUE

    def _op_add(self) -> Status:
        return self._alu_op(alu.add8)

    def _op_sub(self) -> Status:
        return self._alu_op(alu.sub8)

    def _op_sta(self) -> Status:
        self._ir_to_mar()
        self._wait()
        self.regs.BUS = self.regs.A
        self.mem.write8(self.regs.MAR, self.regs.BUS & WORD_MASK)
        self._wait(2)
        return Status.CONTINUE

    def _op_ldi(self) -> Status:
        # The whole instruction byte lands in A, opcode nibble included:
        # LDI $3 (0x53) loads 0x53, not 0x03.
        self.regs.BUS = self.regs.IR
        self.regs.A = self.regs.BUS & WORD_MASK
        self._wait(3)
        return Status.CONTINUE

    def _op_jmp(self) -> Status:
        self.regs.BUS = self.regs.IR
        self.regs.PC = self.regs.BUS & NIBBLE_MASK
        self._wait(3)
        return Status.CONTINUE

    def _op_jc(self) -> Status:
        if self.regs.CF:
            self.regs.BUS = self.regs.IR
            self.regs.PC = self.regs.BUS & NIBBLE_MASK
            self.regs.CF = 0
        self._wait(3)
        return Status.CONTINUE

    def _op_jz(self) -> Status:
        if self.regs.ZF:
            self.regs.BUS = self.regs.IR
            self.regs.PC = self.regs.BUS & NIBBLE_MASK
            self.regs.ZF = 0
        self._wait(3)
        return Status.CONTINUE

    def _op_out(self) -> Status:
        self.regs.BUS = self.regs.A
        self.regs.OUT = self.regs.BUS & WORD_MASK
        self._wait(3)
        return Status.CONTINUE

    def _op_hlt(self) -> Status:
        self._wait(3)
        return Status.HALTED

    # ══════════════════════════════════════════════
    # Snapshots
    # ══════════════════════════════════════════════

    def snapshot(self) -> Optional['_snapshot.VMState']:
        """Capture an independently owned copy of the machine state."""
        return _snapshot.capture(self)

    def restore(self, state: '_snapshot.VMState'):
        """Copy a live snapshot back into this machine."""
        _snapshot.restore(self, state)

    # ══════════════════════════════════════════════
    # Trace / Debug
    # ══════════════════════════════════════════════

    def enable_trace(self, enable: bool = True):
        """Enable instruction trace logging."""
        self._trace = enable

    def _record_trace(self, pc: int):
        if not self._trace:
            return
        line = f"${pc:X}: {disassemble(self.regs.IR):8s} {self.regs.display()}"
        self._trace_output.append(line)
        log.debug(line)

    def get_trace(self) -> str:
        return '\n'.join(self._trace_output)

    def clear_trace(self):
        self._trace_output.clear()

    def reset(self):
        """Full machine reset: registers, RAM, cycle count and trace."""
        self.regs.reset()
        self.mem.reset()
        self.cycles = 0
        self._trace_output.clear()
