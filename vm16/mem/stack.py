"""
vm16 - Call / Operand Stack

Unbounded LIFO of words. Unlike the HC11 stack it does not live in
addressable memory: programs cannot see or corrupt it through rmem/wmem.
"""

from typing import List

from ..config import WORD_MASK
from ..errors import StackUnderflow


class Stack:

    def __init__(self):
        self._items: List[int] = []

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def push(self, value: int):
        self._items.append(value & WORD_MASK)

    def pop(self, mnemonic: str = 'pop') -> int:
        """Pop the top word. ``mnemonic`` names the instruction in the error."""
        if not self._items:
            raise StackUnderflow(mnemonic)
        return self._items.pop()

    def peek(self) -> int:
        if not self._items:
            raise StackUnderflow('peek')
        return self._items[-1]

    def as_list(self) -> List[int]:
        """Bottom-to-top copy of the stack."""
        return list(self._items)

    def clear(self):
        self._items.clear()
