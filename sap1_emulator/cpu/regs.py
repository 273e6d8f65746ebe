"""
SAP-1 Emulator — CPU Register File

Register model for the SAP-1:
  A    — 8-bit accumulator
  B    — 8-bit secondary (ALU operand) register
  OUT  — 8-bit output register, the only value with a display
  MAR  — 4-bit memory address register
  PC   — 4-bit program counter (wraps modulo 16)
  IR   — 8-bit instruction register, split into
         IR_INS (opcode, high nibble) and IR_OPR (operand, low nibble)
  CF   — carry flag (1 bit)
  ZF   — zero flag (1 bit)
  BUS  — 9-bit internal bus, the last value routed across it

Every field is masked to its width on assignment, so no reachable
state can hold an out-of-range value.
"""

from ..config import WORD_MASK, NIBBLE_MASK, BUS_MASK, FLAG_MASK


# Field name -> width mask
FIELD_MASKS = {
    'A':      WORD_MASK,
    'B':      WORD_MASK,
    'OUT':    WORD_MASK,
    'MAR':    NIBBLE_MASK,
    'PC':     NIBBLE_MASK,
    'IR_INS': NIBBLE_MASK,
    'IR_OPR': NIBBLE_MASK,
    'CF':     FLAG_MASK,
    'ZF':     FLAG_MASK,
    'BUS':    BUS_MASK,
}


class Registers:
    """SAP-1 CPU register set."""

    __slots__ = tuple(f'_{name}' for name in FIELD_MASKS)

    def __init__(self):
        self.reset()

    def __setattr__(self, name, value):
        mask = FIELD_MASKS.get(name)
        if mask is not None:
            object.__setattr__(self, f'_{name}', int(value) & mask)
        else:
            object.__setattr__(self, name, value)

    def __getattr__(self, name):
        # Only reached when normal lookup fails, i.e. for public field names
        if name in FIELD_MASKS:
            return object.__getattribute__(self, f'_{name}')
        raise AttributeError(f"{type(self).__name__!s} has no register {name!r}")

    # --- Instruction register ---

    @property
    def IR(self) -> int:
        """Recombined instruction byte = (IR_INS << 4) | IR_OPR"""
        return (self.IR_INS << 4) | self.IR_OPR

    # --- Flags ---

    @property
    def carry(self) -> bool:
        return bool(self.CF)

    @property
    def zero(self) -> bool:
        return bool(self.ZF)

    # --- Copy / inspect ---

    def copy(self) -> 'Registers':
        """Return an independent register set holding the same values."""
        other = Registers()
        for name in FIELD_MASKS:
            setattr(other, name, getattr(self, name))
        return other

    def as_dict(self) -> dict:
        return {name: getattr(self, name) for name in FIELD_MASKS}

    def __eq__(self, other):
        if not isinstance(other, Registers):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self):
        return f"Registers({self.display()})"

    def display(self) -> str:
        """Format register state for debugging."""
        flags = ('C' if self.CF else '.') + ('Z' if self.ZF else '.')
        return (f"PC={self.PC:X} MAR={self.MAR:X} IR={self.IR:02X} "
                f"A={self.A:02X} B={self.B:02X} OUT={self.OUT:02X} "
                f"BUS={self.BUS:03X} [{flags}]")

    def reset(self):
        """Zero every register, both flags and the bus."""
        for name in FIELD_MASKS:
            setattr(self, name, 0)
