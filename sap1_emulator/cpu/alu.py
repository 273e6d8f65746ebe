"""
SAP-1 Emulator — ALU Operations

The SAP-1 ALU only adds and subtracts. Both work on a 9-bit bus value:
the sum/difference of two 8-bit operands is formed on the bus, the low
8 bits go back into A and bit 8 becomes the carry flag.

  add: bus = (A + B) & 0x1FF    CF = bus bit 8 (unsigned overflow)
  sub: bus = (A - B) & 0x1FF    CF = bus bit 8 (two's-complement borrow,
                                     set exactly when B > A)
  both: ZF = (A' == 0)
"""

from ..config import BUS_MASK, WORD_MASK


# ══════════════════════════════════════════════
# 8-bit ALU functions — return (bus, result, carry, zero)
# ══════════════════════════════════════════════

def _flags(bus: int) -> tuple:
    result = bus & WORD_MASK
    carry = (bus >> 8) & 1
    zero = 1 if result == 0 else 0
    return (bus, result, carry, zero)


def add8(a: int, b: int) -> tuple:
    """Add two 8-bit values on the 9-bit bus."""
    return _flags((a + b) & BUS_MASK)


def sub8(a: int, b: int) -> tuple:
    """Subtract b from a on the 9-bit bus.

    0x00 - 0x01 → bus 0x1FF, result 0xFF, carry 1
    0x05 - 0x05 → bus 0x000, result 0x00, carry 0, zero 1
    """
    return _flags((a - b) & BUS_MASK)
