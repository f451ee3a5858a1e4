"""
vm16 - Operand Decoder + Opcode Table

Every word fetched from memory, opcode or operand, passes through
decode_word():

  0     .. 32767   Literal(value)
  32768 .. 32775   RegisterRef(index 0..7)
  32776 .. 65535   InvalidInstructionValue

Memory itself may hold any 16-bit value; validity is only checked here,
at fetch time.

The opcode table maps each of the 22 codes to (mnemonic, arity). Arity
is the number of operand words following the opcode word.
"""

from dataclasses import dataclass
from typing import Dict, Tuple, Union

from ..config import REGISTER_BASE, INVALID_WORD_START
from ..errors import InvalidInstructionValue, ExpectedRegisterOperand, InvalidOpCode


# ──────────────────────────────────────────────
# Operands
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class Literal:
    value: int

    @property
    def register_index(self) -> int:
        raise ExpectedRegisterOperand(self.value)

    def resolve(self, regs) -> int:
        return self.value


@dataclass(frozen=True)
class RegisterRef:
    index: int

    @property
    def register_index(self) -> int:
        return self.index

    def resolve(self, regs) -> int:
        """Read the register. The only path register contents take into computation."""
        return regs[self.index]


Operand = Union[Literal, RegisterRef]


def decode_word(word: int) -> Operand:
    """Classify a raw word as a literal or a register reference."""
    if 0 <= word < REGISTER_BASE:
        return Literal(word)
    if REGISTER_BASE <= word < INVALID_WORD_START:
        return RegisterRef(word - REGISTER_BASE)
    raise InvalidInstructionValue(word)


# ──────────────────────────────────────────────
# Opcode table
# ──────────────────────────────────────────────
# Format: code -> (mnemonic, arity)

OPCODES: Dict[int, Tuple[str, int]] = {
    0:  ('halt', 0),
    1:  ('set',  2),
    2:  ('push', 1),
    3:  ('pop',  1),
    4:  ('eq',   3),
    5:  ('gt',   3),
    6:  ('jmp',  1),
    7:  ('jt',   2),
    8:  ('jf',   2),
    9:  ('add',  3),
    10: ('mult', 3),
    11: ('mod',  3),
    12: ('and',  3),
    13: ('or',   3),
    14: ('not',  2),
    15: ('rmem', 2),
    16: ('wmem', 2),
    17: ('call', 1),
    18: ('ret',  0),
    19: ('out',  1),
    20: ('in',   1),
    21: ('noop', 0),
}

# Mnemonic -> code, for hand-assembling test programs
CODES: Dict[str, int] = {mnem: code for code, (mnem, _) in OPCODES.items()}

# Opcodes whose first operand is a write destination and must name a register
REGISTER_DEST = frozenset((
    'set', 'pop', 'eq', 'gt', 'add', 'mult', 'mod',
    'and', 'or', 'not', 'rmem', 'in',
))


def decode_opcode(code: int) -> Tuple[str, int]:
    """Look up (mnemonic, arity) for a raw opcode value."""
    try:
        return OPCODES[code]
    except KeyError:
        raise InvalidOpCode(code) from None
