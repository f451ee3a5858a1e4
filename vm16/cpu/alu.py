"""
vm16 - ALU Operations

Pure functions over word values. add and mult wrap into the 15-bit
literal range (modulo 32768); not flips the low 15 bits only, leaving
bit 15 as it was. Comparisons return 1 or 0.

IMPORTANT: inputs are resolved operand values and may exceed 32767
(rmem can load any 16-bit word into a register). The modulo reduction
is applied to the full-precision result, so no 16-bit wraparound
happens before it.
"""

from ..config import MODULO, VALUE_MASK
from ..errors import DivisionByZero


def add(b: int, c: int) -> int:
    return (b + c) % MODULO


def mult(b: int, c: int) -> int:
    return (b * c) % MODULO


def mod(b: int, c: int) -> int:
    """Remainder of b / c. A zero divisor is an error, not a wrap."""
    if c == 0:
        raise DivisionByZero()
    return b % c


def and_(b: int, c: int) -> int:
    return b & c


def or_(b: int, c: int) -> int:
    return b | c


def not_(b: int) -> int:
    """15-bit complement."""
    return b ^ VALUE_MASK


def eq(b: int, c: int) -> int:
    return 1 if b == c else 0


def gt(b: int, c: int) -> int:
    return 1 if b > c else 0
