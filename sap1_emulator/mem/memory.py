"""
SAP-1 Emulator — 16-Byte Program/Data RAM

The SAP-1 has a single 16-cell RAM holding both program and data,
addressed by the 4-bit MAR. There is no memory map, no I/O region and
no write protection: every cell is plain read/write.

Bulk load/save clip to capacity:
  - load(data)   copies min(len(data), 16) bytes into cells 0..n-1,
                 leaving the cells past a short input untouched
  - save(dest)   copies min(len(dest), 16) cells into dest, leaving
                 dest past 16 bytes untouched
Truncation is accepted behavior, not an error.
"""

from typing import Optional, Union

from ..config import PROG_SIZE, NIBBLE_MASK, WORD_MASK


class Memory:
    """16-cell byte-addressable RAM."""

    SIZE = PROG_SIZE

    def __init__(self):
        self._mem = bytearray(self.SIZE)

    # --- Core read/write ---

    def read8(self, addr: int) -> int:
        """Read the cell at addr (address wraps to 4 bits)."""
        return self._mem[addr & NIBBLE_MASK]

    def write8(self, addr: int, value: int):
        """Write an 8-bit value to the cell at addr."""
        self._mem[addr & NIBBLE_MASK] = value & WORD_MASK

    def __getitem__(self, addr: int) -> int:
        return self.read8(addr)

    def __setitem__(self, addr: int, value: int):
        self.write8(addr, value)

    def __len__(self) -> int:
        return self.SIZE

    # --- Bulk load/save ---

    def load(self, data) -> int:
        """Copy a program image into RAM starting at cell 0.

        Returns the number of cells written. Input past 16 bytes is
        ignored; cells past a shorter input keep their prior value.
        """
        count = min(len(data), self.SIZE)
        for i in range(count):
            self._mem[i] = data[i] & WORD_MASK
        return count

    def save(self, dest: Optional[Union[bytearray, list]] = None):
        """Copy RAM out in address order.

        With no destination, returns all 16 cells as bytes. With a
        caller-supplied mutable buffer, fills min(len(dest), 16) entries
        and returns that count.
        """
        if dest is None:
            return bytes(self._mem)
        count = min(len(dest), self.SIZE)
        for i in range(count):
            dest[i] = self._mem[i]
        return count

    def reset(self):
        """Zero all 16 cells."""
        for i in range(self.SIZE):
            self._mem[i] = 0

    # --- Hex dump ---

    def hexdump(self) -> str:
        """Produce a hex dump of RAM for debugging (two rows of 8)."""
        lines = []
        for offset in range(0, self.SIZE, 8):
            hex_bytes = ' '.join(f'{self._mem[offset + i]:02X}' for i in range(8))
            lines.append(f'{offset:X}  {hex_bytes}')
        return '\n'.join(lines)
