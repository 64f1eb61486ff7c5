"""
Execution faults raised inside the interpreter.

None of these cross the public ``execute`` boundary: the execution loop
converts them into a failed result.
"""

from typing import Optional


class VMError(Exception):
    """Base class for faults that abort an execution."""


class UnrecognizedOpcode(VMError):
    def __init__(self, byte: int, pc: Optional[int] = None):
        self.byte = byte
        self.pc = pc
        location = f" at pc={pc}" if pc is not None else ""
        super().__init__(f"Unrecognized opcode 0x{byte:02x}{location}")


class StackUnderflow(VMError):
    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(
            f"Stack underflow: {required} operand(s) required, {available} available"
        )


class InvalidBytecode(ValueError):
    """Raised when input cannot be turned into a byte sequence (e.g. bad hex)."""
