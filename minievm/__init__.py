"""
Single-threaded interpreter for a subset of EVM-style opcodes over 256-bit words.
"""

from .config import VMConfig
from .core.errors import InvalidBytecode, StackUnderflow, UnrecognizedOpcode, VMError
from .core.opcodes import Opcode, decode, disassemble_bytecode
from .core.stack import Stack
from .interpreter import (
    ExecutionResult,
    ExecutionStatus,
    Interpreter,
    TraceStep,
    execute,
    run,
)

__version__ = "0.1.0"

__all__ = [
    "execute",
    "run",
    "Interpreter",
    "ExecutionResult",
    "ExecutionStatus",
    "TraceStep",
    "VMConfig",
    "Opcode",
    "decode",
    "disassemble_bytecode",
    "Stack",
    "VMError",
    "UnrecognizedOpcode",
    "StackUnderflow",
    "InvalidBytecode",
]
