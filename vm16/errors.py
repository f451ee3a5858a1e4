"""
vm16 - Machine Error Taxonomy

Every failure the engine can report derives from VMError. None of them
are recoverable inside the engine: the first one raised stops the
fetch/dispatch loop and is handed to the caller as the run outcome.

Halt is NOT in this module. It is the designed successful termination
and travels as StopReason.HALT (see emu.py), never as an exception.
"""

from typing import Optional

__all__ = [
    'VMError', 'InvalidInstructionValue', 'ExpectedRegisterOperand',
    'InvalidOpCode', 'StackUnderflow', 'InputReadFailure',
    'OutputWriteFailure', 'DivisionByZero', 'ImageFormatError',
]


class VMError(Exception):
    """Base class for machine errors.

    ``ip`` is the address of the opcode word of the failing instruction,
    filled in by the engine when the error escapes a handler.
    """
    def __init__(self, message: str, ip: Optional[int] = None):
        self.message = message
        self.ip = ip
        super().__init__(message)

    def __str__(self) -> str:
        if self.ip is None:
            return self.message
        return f"{self.message} (at ${self.ip:04X})"


class InvalidInstructionValue(VMError):
    """A fetched word is >= 32776: neither literal nor register."""
    def __init__(self, word: int, ip: Optional[int] = None):
        self.word = word
        super().__init__(f"Invalid instruction value: {word}", ip)


class ExpectedRegisterOperand(VMError):
    """A write destination decoded as a literal instead of a register."""
    def __init__(self, value: int, ip: Optional[int] = None):
        self.value = value
        super().__init__(f"Expected register operand, got literal {value}", ip)


class InvalidOpCode(VMError):
    def __init__(self, code: int, ip: Optional[int] = None):
        self.code = code
        super().__init__(f"Invalid opcode: {code}", ip)


class StackUnderflow(VMError):
    def __init__(self, mnemonic: str, ip: Optional[int] = None):
        self.mnemonic = mnemonic
        super().__init__(f"{mnemonic}: stack is empty", ip)


class InputReadFailure(VMError):
    """No byte available for ``in``: end of input or an I/O fault."""
    def __init__(self, reason: str = "end of input", ip: Optional[int] = None):
        self.reason = reason
        super().__init__(f"Input read failure: {reason}", ip)


class OutputWriteFailure(VMError):
    """The output stream rejected a byte from ``out`` (closed pipe, I/O fault)."""
    def __init__(self, reason: str, ip: Optional[int] = None):
        self.reason = reason
        super().__init__(f"Output write failure: {reason}", ip)


class DivisionByZero(VMError):
    def __init__(self, ip: Optional[int] = None):
        super().__init__("mod: division by zero", ip)


class ImageFormatError(VMError):
    """Raised by the loader on a malformed program image."""
