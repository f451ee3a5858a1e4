"""
vm16 - Main Emulator Class

This is the top-level class that integrates:
  - Register file (cpu/regs.py)
  - Word memory (mem/memory.py)
  - Stack (mem/stack.py)
  - Operand decoder + opcode table (cpu/decoder.py)
  - ALU operations (cpu/alu.py)
  - Console device (periph/console.py)

Execution model:
  1. Fetch the word at IP, advance IP
  2. Decode it (words >= 32776 fail here) and dispatch on its raw value
  3. The handler fetches its own operand words, validates all of them,
     then commits its effect
  4. Repeat until halt or error

Every handler finishes all fetches and checks before it mutates
registers, memory or the stack. If a handler fails, IP is put back on
the failing instruction, so a failed step leaves the machine exactly as
it found it.

Stop reasons:
  - CONTINUE: step() only, the instruction retired normally
  - HALT:     opcode 0, successful termination
  - ERROR:    a VMError stopped the machine (run() only)
  - TIMEOUT:  the caller's step limit was reached (run() only)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Union

from .config import ADDRESS_MASK
from .cpu.regs import Registers
from .cpu.decoder import decode_word, decode_opcode
from .cpu import alu
from .errors import VMError
from .loader import words_from_bytes, read_image
from .mem.memory import Memory
from .mem.stack import Stack
from .periph.console import ConsoleDevice

logger = logging.getLogger(__name__)


class StopReason(Enum):
    CONTINUE = 'CONTINUE'
    HALT = 'HALT'
    ERROR = 'ERROR'
    TIMEOUT = 'TIMEOUT'


@dataclass
class RunResult:
    """Terminal outcome of run()."""
    reason: StopReason
    error: Optional[VMError] = None
    steps: int = 0
    ip: int = 0

    @property
    def ok(self) -> bool:
        return self.reason is StopReason.HALT


class VirtualMachine:
    """16-bit word machine: 32K words, 8 registers, unbounded stack.

    Usage:
        vm = VirtualMachine(ConsoleDevice(sys.stdin.buffer, sys.stdout.buffer))
        vm.load_image('challenge.bin')
        result = vm.run()
        if not result.ok:
            print(result.error)
    """

    DEFAULT_MAX_STEPS = None

    def __init__(self, console: Optional[ConsoleDevice] = None, trace: bool = False):
        self.regs = Registers()
        self.mem = Memory()
        self.stack = Stack()
        self.console = console if console is not None else ConsoleDevice()

        self.halted = False
        self._trace = trace

        self._dispatch = self._build_dispatch()

    # ══════════════════════════════════════════════
    # Loading
    # ══════════════════════════════════════════════

    def load_words(self, words: Iterable[int], base_addr: int = 0) -> int:
        """Write already-decoded words into memory. Pure memory write."""
        count = self.mem.load_words(words, base_addr)
        logger.info("Loaded %d words at $%04X", count, base_addr)
        return count

    def load_image(self, path_or_data: Union[str, Path, bytes, bytearray]) -> int:
        """Load a little-endian image file (or its raw bytes) at $0000."""
        if isinstance(path_or_data, (str, Path)):
            words = read_image(path_or_data)
        else:
            words = words_from_bytes(bytes(path_or_data))
        return self.load_words(words)

    def reset(self):
        """Power-on state. Memory is cleared too; reload the image after."""
        self.regs.reset()
        self.mem.clear()
        self.stack.clear()
        self.console.reset()
        self.halted = False

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self) -> StopReason:
        """Execute one instruction. Returns CONTINUE or HALT, raises VMError."""
        if self.halted:
            return StopReason.HALT

        ip = self.regs.IP
        try:
            code = self._fetch_word()
            decode_word(code)
            mnem, arity = decode_opcode(code)

            if self._trace:
                self._trace_line(ip, mnem, arity)

            reason = self._dispatch[code]()
        except VMError as e:
            self.regs.IP = ip
            if e.ip is None:
                e.ip = ip
            raise

        self.regs.steps += 1
        if reason is StopReason.HALT:
            self.halted = True
        return reason

    def run(self, max_steps: Optional[int] = None) -> RunResult:
        """Run until halt, error, or (if given) max_steps instructions."""
        if max_steps is None:
            max_steps = self.DEFAULT_MAX_STEPS

        start = self.regs.steps
        while max_steps is None or self.regs.steps - start < max_steps:
            try:
                reason = self.step()
            except VMError as e:
                logger.error("%s: %s", type(e).__name__, e)
                logger.debug("Registers: %s", self.regs.display())
                logger.debug("Stack depth: %d", len(self.stack))
                return RunResult(StopReason.ERROR, e, self.regs.steps - start, self.regs.IP)

            if reason is StopReason.HALT:
                logger.info("Halted at $%04X after %d steps",
                            self.regs.IP, self.regs.steps - start)
                return RunResult(StopReason.HALT, None, self.regs.steps - start, self.regs.IP)

        logger.warning("Step limit of %d reached at $%04X", max_steps, self.regs.IP)
        return RunResult(StopReason.TIMEOUT, None, self.regs.steps - start, self.regs.IP)

    def _trace_line(self, ip: int, mnem: str, arity: int):
        words = ' '.join(str(self.mem.read(ip + 1 + i)) for i in range(arity))
        logger.debug("$%04X: %-4s %-17s %s", ip, mnem, words, self.regs.display())

    # ══════════════════════════════════════════════
    # Operand fetch
    # ══════════════════════════════════════════════

    def _fetch_word(self) -> int:
        """Fetch raw word at IP, advance IP (15-bit wrap)."""
        word = self.mem.read(self.regs.IP)
        self.regs.IP = (self.regs.IP + 1) & ADDRESS_MASK
        return word

    def _fetch_dest(self) -> int:
        """Fetch a write destination. Must decode as a register."""
        return decode_word(self._fetch_word()).register_index

    def _fetch_value(self) -> int:
        """Fetch an operand and resolve it to a number."""
        return decode_word(self._fetch_word()).resolve(self.regs)

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════
    # Handler signature: handler() -> StopReason
    # Each handler fetches its own operands in order.

    def _build_dispatch(self) -> dict:
        """Build opcode -> handler dispatch table."""
        return {
            # ── Control ──
            0:  self._op_halt,
            21: self._op_noop,

            # ── Register / compare ──
            1:  self._op_set,
            4:  self._op_eq,
            5:  self._op_gt,

            # ── Stack ──
            2:  self._op_push,
            3:  self._op_pop,

            # ── Jump / call ──
            6:  self._op_jmp,
            7:  self._op_jt,
            8:  self._op_jf,
            17: self._op_call,
            18: self._op_ret,

            # ── Arithmetic / logic ──
            9:  self._op_add,
            10: self._op_mult,
            11: self._op_mod,
            12: self._op_and,
            13: self._op_or,
            14: self._op_not,

            # ── Memory ──
            15: self._op_rmem,
            16: self._op_wmem,

            # ── Console ──
            19: self._op_out,
            20: self._op_in,
        }

    # ── Control ──

    def _op_halt(self):
        return StopReason.HALT

    def _op_noop(self):
        return StopReason.CONTINUE

    # ── Register / compare ──

    def _op_set(self):
        a = self._fetch_dest()
        b = self._fetch_value()
        self.regs[a] = b
        return StopReason.CONTINUE

    def _binary(self, fn):
        """Common shape of eq/gt/add/mult/mod/and/or: reg[a] := fn(b, c)."""
        a = self._fetch_dest()
        b = self._fetch_value()
        c = self._fetch_value()
        self.regs[a] = fn(b, c)
        return StopReason.CONTINUE

    def _op_eq(self):
        return self._binary(alu.eq)

    def _op_gt(self):
        return self._binary(alu.gt)

    # ── Stack ──

    def _op_push(self):
        self.stack.push(self._fetch_value())
        return StopReason.CONTINUE

    def _op_pop(self):
        a = self._fetch_dest()
        self.regs[a] = self.stack.pop('pop')
        return StopReason.CONTINUE

    # ── Jump / call ──

    def _op_jmp(self):
        self.regs.IP = self._fetch_value() & ADDRESS_MASK
        return StopReason.CONTINUE

    def _op_jt(self):
        a = self._fetch_value()
        b = self._fetch_value()
        if a != 0:
            self.regs.IP = b & ADDRESS_MASK
        return StopReason.CONTINUE

    def _op_jf(self):
        a = self._fetch_value()
        b = self._fetch_value()
        if a == 0:
            self.regs.IP = b & ADDRESS_MASK
        return StopReason.CONTINUE

    def _op_call(self):
        a = self._fetch_value()
        # Return address is the word after the operand
        self.stack.push(self.regs.IP)
        self.regs.IP = a & ADDRESS_MASK
        return StopReason.CONTINUE

    def _op_ret(self):
        self.regs.IP = self.stack.pop('ret') & ADDRESS_MASK
        return StopReason.CONTINUE

    # ── Arithmetic / logic ──

    def _op_add(self):
        return self._binary(alu.add)

    def _op_mult(self):
        return self._binary(alu.mult)

    def _op_mod(self):
        return self._binary(alu.mod)

    def _op_and(self):
        return self._binary(alu.and_)

    def _op_or(self):
        return self._binary(alu.or_)

    def _op_not(self):
        a = self._fetch_dest()
        b = self._fetch_value()
        self.regs[a] = alu.not_(b)
        return StopReason.CONTINUE

    # ── Memory ──

    def _op_rmem(self):
        a = self._fetch_dest()
        b = self._fetch_value()
        self.regs[a] = self.mem.read(b)
        return StopReason.CONTINUE

    def _op_wmem(self):
        a = self._fetch_value()
        b = self._fetch_value()
        self.mem.write(a, b)
        return StopReason.CONTINUE

    # ── Console ──

    def _op_out(self):
        self.console.write_char(self._fetch_value())
        return StopReason.CONTINUE

    def _op_in(self):
        a = self._fetch_dest()
        self.regs[a] = self.console.read_char()
        return StopReason.CONTINUE
