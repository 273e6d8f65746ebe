"""
Built-in SAP-1 programs.

SAMPLE counts up from 0xFE by one, printing each value, and halts once
the addition wraps to zero:

  0: LDA $F      ; A = mem[F]
  1: ADD $E      ; A = A + mem[E]      (mem[E] = 1)
  2: STA $F      ; mem[F] = A
  3: OUT         ; show A
  4: JZ  $6      ; wrapped to 0 → stop
  5: JMP $0
  6: HLT
  E: 01
  F: FE

Output sequence: FF, 00. The second ADD sets both carry and zero.
"""

from .cpu.decoder import Opcode, asm


SAMPLE = bytes([
    asm(Opcode.LDA, 0xF),
    asm(Opcode.ADD, 0xE),
    asm(Opcode.STA, 0xF),
    asm(Opcode.OUT),
    asm(Opcode.JZ,  0x6),
    asm(Opcode.JMP, 0x0),
    asm(Opcode.HLT),
    0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
    0x01,
    0xFE,
])
