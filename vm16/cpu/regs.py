"""
vm16 - CPU Register File

Register model:
  R0..R7  - 16-bit general-purpose registers, zero at power-on
  IP      - instruction pointer, address of the next word to fetch

Registers are only ever named by a decoded RegisterRef (words
32768..32775). Arithmetic results land here already reduced modulo
32768; rmem, pop and in may store any word value verbatim.
"""

from typing import List

from ..config import NUM_REGISTERS, WORD_MASK


class Registers:
    """The eight general registers plus the instruction pointer."""

    __slots__ = ('_r', 'IP', 'steps')

    def __init__(self):
        self._r: List[int] = [0] * NUM_REGISTERS
        self.IP: int = 0      # Instruction pointer
        self.steps: int = 0   # Instructions retired

    def __getitem__(self, index: int) -> int:
        return self._r[index]

    def __setitem__(self, index: int, value: int):
        self._r[index] = value & WORD_MASK

    def __len__(self) -> int:
        return NUM_REGISTERS

    def as_list(self) -> List[int]:
        return list(self._r)

    # --- Display ---

    def display(self) -> str:
        """Format register state for trace lines and failure reports."""
        regs = ' '.join(f"R{i}={v:04X}" for i, v in enumerate(self._r))
        return f"IP={self.IP:04X} {regs}"

    def reset(self):
        """Reset to power-on state."""
        self._r = [0] * NUM_REGISTERS
        self.IP = 0
        self.steps = 0
