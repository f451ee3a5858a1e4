"""
vm16 - 16-bit Word Virtual Machine
==================================
Loads a little-endian word image at address 0 and executes it on a
machine with 32768 words of memory, 8 registers, an unbounded stack and
22 opcodes.

Architecture:
    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌────────────┐
    │  Image   │───>│  Loader  │───>│  Memory  │<──>│  Emulator  │<──> Console
    │  (.bin)  │    │ (words)  │    │ (32K x16)│    │ fetch/exec │     (stdin/out)
    └──────────┘    └──────────┘    └──────────┘    └────────────┘

    - loader.py:          bytes -> words (little-endian)
    - cpu/decoder.py:     word -> Literal / RegisterRef, opcode table
    - cpu/alu.py:         modulo-32768 arithmetic and 15-bit logic
    - emu.py:             fetch/decode/dispatch loop and handlers
    - periph/console.py:  out / in byte streams
"""

__version__ = "0.1.0"

from .emu import VirtualMachine, StopReason, RunResult
from .errors import (
    VMError, InvalidInstructionValue, ExpectedRegisterOperand,
    InvalidOpCode, StackUnderflow, InputReadFailure, OutputWriteFailure,
    DivisionByZero, ImageFormatError,
)
from .periph.console import ConsoleDevice
from .loader import read_image, words_from_bytes, words_to_bytes
