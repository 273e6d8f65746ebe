"""
SAP-1 Emulator
==============
A cycle-paced emulator of the SAP-1 (Simple As Possible) 8-bit teaching
computer: 16 bytes of RAM, one accumulator, an 11-instruction ISA and
carry/zero conditional jumps.

Architecture:
    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌──────────┐
    │  Memory  │───>│  Fetch   │───>│  Decode  │───>│ Execute  │──> Status
    │ (16 × 8) │    │ (PC→MAR) │    │ (opcode) │    │ (bus/ALU)│
    └──────────┘    └──────────┘    └──────────┘    └──────────┘

    - cpu/regs.py:    register file, every field masked to its width
    - cpu/decoder.py: opcode table, encode/decode, disassembly
    - cpu/alu.py:     9-bit bus add/sub with carry + zero
    - mem/memory.py:  16-cell RAM with truncating load/save
    - clock.py:       cycle gate (pacing only, swappable for a no-op)
    - emu.py:         SAP1Emulator.step() / run()
    - snapshot.py:    independently owned VM state copies
"""

__version__ = "0.1.0"

from .cpu.regs import Registers
from .cpu.decoder import Opcode, IllegalOpcode, asm, decode, disassemble, disassemble_program
from .mem.memory import Memory
from .clock import Clock, NullClock, CountingClock, CycleGate
from .emu import SAP1Emulator, Status
from .snapshot import VMState, SnapshotReleasedError, capture, release, restore
from .programs import SAMPLE
