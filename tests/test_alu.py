"""
Tests for the ALU: modulo-32768 closure, 15-bit complement, comparisons.
"""

import pytest

from vm16.cpu import alu
from vm16.errors import DivisionByZero


SAMPLES = [0, 1, 2, 5, 255, 1000, 16384, 32766, 32767]


@pytest.mark.parametrize("b", SAMPLES)
@pytest.mark.parametrize("c", SAMPLES)
def test_add_mult_commutative_and_closed(b, c):
    assert alu.add(b, c) == alu.add(c, b)
    assert alu.mult(b, c) == alu.mult(c, b)
    assert 0 <= alu.add(b, c) <= 32767
    assert 0 <= alu.mult(b, c) <= 32767


def test_add_wraps():
    assert alu.add(32767, 5) == 4
    assert alu.add(32767, 1) == 0


def test_add_full_word_inputs():
    """Register values above 32767 still reduce into range."""
    assert alu.add(65535, 65535) == (65535 + 65535) % 32768


def test_mult_wraps():
    assert alu.mult(32767, 32767) == (32767 * 32767) % 32768
    assert alu.mult(16384, 2) == 0


def test_mod():
    assert alu.mod(10, 3) == 1
    assert alu.mod(3, 10) == 3
    assert alu.mod(32767, 32767) == 0


def test_mod_zero_divisor():
    with pytest.raises(DivisionByZero):
        alu.mod(5, 0)


def test_bitwise():
    assert alu.and_(0b1100, 0b1010) == 0b1000
    assert alu.or_(0b1100, 0b1010) == 0b1110


def test_not_examples():
    assert alu.not_(0) == 32767
    assert alu.not_(32767) == 0
    assert alu.not_(0x5555) == 0x2AAA


@pytest.mark.parametrize("v", SAMPLES)
def test_not_involution(v):
    assert alu.not_(alu.not_(v)) == v


def test_comparisons():
    assert alu.eq(3, 3) == 1
    assert alu.eq(3, 4) == 0
    assert alu.gt(4, 3) == 1
    assert alu.gt(3, 3) == 0
    assert alu.gt(3, 4) == 0
