"""
Tests for word memory, the stack and the register file.
"""

import pytest

from vm16.cpu.regs import Registers
from vm16.errors import ImageFormatError, StackUnderflow
from vm16.mem.memory import Memory
from vm16.mem.stack import Stack


class TestMemory:

    def test_zero_initialised(self):
        mem = Memory()
        assert len(mem) == 32768
        assert mem.snapshot() == [0] * 32768

    def test_write_read(self):
        mem = Memory()
        mem.write(0x1234, 0xBEEF)
        assert mem.read(0x1234) == 0xBEEF

    def test_last_write_wins(self):
        mem = Memory()
        for value in (1, 2, 3):
            mem.write(500, value)
        assert mem.read(500) == 3

    def test_address_masked_to_15_bits(self):
        mem = Memory()
        mem.write(0x8005, 7)
        assert mem.read(5) == 7

    def test_load_words_verbatim(self):
        """Loading does not validate; invalid instruction words are kept."""
        mem = Memory()
        assert mem.load_words([9, 32768, 40000, 65535]) == 4
        assert mem.snapshot(0, 3) == [9, 32768, 40000, 65535]

    def test_load_words_at_base(self):
        mem = Memory()
        mem.load_words([1, 2], base_addr=100)
        assert mem.snapshot(99, 102) == [0, 1, 2, 0]

    def test_load_fills_memory(self):
        mem = Memory()
        mem.load_words([7] * 32768)
        assert mem.read(32767) == 7

    def test_load_too_large(self):
        mem = Memory()
        with pytest.raises(ImageFormatError):
            mem.load_words([0] * 32769)

    def test_load_past_end(self):
        mem = Memory()
        with pytest.raises(ImageFormatError):
            mem.load_words([1, 2, 3], base_addr=32766)

    def test_hexdump(self):
        mem = Memory()
        mem.load_words([0x0013, 0x0041, 0x0000])
        dump = mem.hexdump(0, 16)
        assert dump.splitlines()[0].startswith("0000  0013 0041 0000")
        assert len(dump.splitlines()) == 2


class TestStack:

    def test_lifo(self):
        stack = Stack()
        stack.push(1)
        stack.push(2)
        assert stack.pop() == 2
        assert stack.pop() == 1
        assert not stack

    def test_underflow(self):
        with pytest.raises(StackUnderflow) as exc:
            Stack().pop('ret')
        assert exc.value.mnemonic == 'ret'

    def test_unbounded(self):
        stack = Stack()
        for i in range(100000):
            stack.push(i & 0x7FFF)
        assert len(stack) == 100000
        assert stack.peek() == 99999 & 0x7FFF


class TestRegisters:

    def test_power_on(self):
        regs = Registers()
        assert regs.as_list() == [0] * 8
        assert regs.IP == 0

    def test_word_width(self):
        regs = Registers()
        regs[2] = 0x1FFFF
        assert regs[2] == 0xFFFF

    def test_display(self):
        regs = Registers()
        regs[7] = 0x7FFF
        regs.IP = 0x10
        assert regs.display() == (
            "IP=0010 R0=0000 R1=0000 R2=0000 R3=0000 "
            "R4=0000 R5=0000 R6=0000 R7=7FFF")
