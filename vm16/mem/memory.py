"""
vm16 - 32K Word Memory

Memory map:
  $0000-$7FFF  32768 cells of 16 bits, zero at power-on

Programs load at $0000 and may rewrite themselves; writes are never
validated. A cell can hold a word that would be rejected if executed
(>= 32776), and that is only an error when the engine fetches it.

Addresses are 15 bits wide. Any address handed to read/write is masked
to $0000-$7FFF, the same way the HC11 map masks to 16 bits.
"""

from array import array
from typing import Iterable, List

from ..config import MEMORY_SIZE, ADDRESS_MASK, WORD_MASK
from ..errors import ImageFormatError


class Memory:
    """Flat word-addressable memory."""

    def __init__(self):
        self._mem = array('H', bytes(2 * MEMORY_SIZE))

    def __len__(self) -> int:
        return MEMORY_SIZE

    # --- Core read/write ---

    def read(self, addr: int) -> int:
        return self._mem[addr & ADDRESS_MASK]

    def write(self, addr: int, value: int):
        self._mem[addr & ADDRESS_MASK] = value & WORD_MASK

    # --- Bulk load ---

    def load_words(self, words: Iterable[int], base_addr: int = 0) -> int:
        """Copy words verbatim into memory starting at base_addr.

        No value checks. Returns the number of words written.
        Raises ImageFormatError if the words do not fit.
        """
        data = array('H', (w & WORD_MASK for w in words))
        end = base_addr + len(data)
        if base_addr < 0 or end > MEMORY_SIZE:
            raise ImageFormatError(
                f"Image of {len(data)} words at ${base_addr:04X} "
                f"does not fit in {MEMORY_SIZE} words of memory")
        self._mem[base_addr:end] = data
        return len(data)

    # --- Snapshots ---

    def snapshot(self, start: int = 0, end: int = MEMORY_SIZE - 1) -> List[int]:
        """Copy of the inclusive range start..end."""
        return self._mem[start:end + 1].tolist()

    def clear(self):
        self._mem = array('H', bytes(2 * MEMORY_SIZE))

    # --- Hex dump ---

    def hexdump(self, start: int, length: int = 64) -> str:
        """Word dump, eight cells per line, for failure reports."""
        lines = []
        for offset in range(0, length, 8):
            addr = (start + offset) & ADDRESS_MASK
            words = ' '.join(f'{self._mem[(addr + i) & ADDRESS_MASK]:04X}'
                             for i in range(min(8, length - offset)))
            lines.append(f'{addr:04X}  {words}')
        return '\n'.join(lines)
