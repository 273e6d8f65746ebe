"""
SAP-1 Emulator — Opcode Table / Instruction Decoder

One byte per instruction: high nibble = opcode, low nibble = operand.

  value  mnemonic  operand
  0      NOP       —
  1      LDA       address
  2      ADD       address
  3      SUB       address
  4      STA       address
  5      LDI       value
  6      JMP       address
  7      JC        address
  8      JZ        address
  9–13   (reserved — decoding one is a terminal error)
  14     OUT       —
  15     HLT       —
"""

from enum import IntEnum
from typing import Tuple


class Opcode(IntEnum):
    NOP = 0x0
    LDA = 0x1
    ADD = 0x2
    SUB = 0x3
    STA = 0x4
    LDI = 0x5
    JMP = 0x6
    JC  = 0x7
    JZ  = 0x8
    NI0 = 0x9
    NI1 = 0xA
    NI2 = 0xB
    NI3 = 0xC
    NI4 = 0xD
    OUT = 0xE
    HLT = 0xF


# Not implemented on the machine; decoding one stops the program
RESERVED = frozenset({Opcode.NI0, Opcode.NI1, Opcode.NI2, Opcode.NI3, Opcode.NI4})

# Implemented opcode -> mnemonic
MNEMONICS = {op: op.name for op in Opcode if op not in RESERVED}

# Instructions whose operand nibble means something
TAKES_OPERAND = frozenset({
    Opcode.LDA, Opcode.ADD, Opcode.SUB, Opcode.STA,
    Opcode.LDI, Opcode.JMP, Opcode.JC, Opcode.JZ,
})


class IllegalOpcode(Exception):
    """Raised when a reserved opcode is decoded."""
    pass


def asm(opcode: int, operand: int = 0) -> int:
    """Encode one instruction byte: (opcode << 4) | operand."""
    return ((opcode & 0xF) << 4) | (operand & 0xF)


def split(byte: int) -> Tuple[int, int]:
    """Split an instruction byte into (opcode, operand) nibbles."""
    return (byte >> 4) & 0xF, byte & 0xF


def decode(byte: int) -> Tuple[str, Opcode, int]:
    """Decode an instruction byte.

    Returns: (mnemonic, opcode, operand)
    Raises IllegalOpcode for the five reserved opcodes.
    """
    opcode, operand = split(byte)
    op = Opcode(opcode)
    if op in RESERVED:
        raise IllegalOpcode(f"Reserved opcode ${opcode:X} in byte ${byte:02X}")
    return MNEMONICS[op], op, operand


def disassemble(byte: int) -> str:
    """Render one byte as SAP-1 assembly ('LDA $F', 'OUT', '???')."""
    try:
        mnem, op, operand = decode(byte)
    except IllegalOpcode:
        return '???'
    if op in TAKES_OPERAND:
        return f'{mnem} ${operand:X}'
    return mnem


def disassemble_program(data) -> str:
    """List a program image one cell per line: address, byte, mnemonic."""
    lines = []
    for addr, byte in enumerate(data):
        lines.append(f'{addr:X}: {byte:02X}  {disassemble(byte)}')
    return '\n'.join(lines)
