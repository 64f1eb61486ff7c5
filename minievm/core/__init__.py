"""Core data model: words, opcodes, the stack and execution faults."""

from .errors import VMError, UnrecognizedOpcode, StackUnderflow, InvalidBytecode
from .opcodes import (
    Opcode,
    PUSH_BYTES,
    STACK_EFFECTS,
    decode,
    disassemble_bytecode,
    get_stack_effect,
    normalize_bytecode,
)
from .stack import Stack
from .word import MODULUS, MAX_WORD, SIGN_BIT, is_negative, negate, to_signed, to_word

__all__ = [
    "VMError",
    "UnrecognizedOpcode",
    "StackUnderflow",
    "InvalidBytecode",
    "Opcode",
    "PUSH_BYTES",
    "STACK_EFFECTS",
    "decode",
    "disassemble_bytecode",
    "get_stack_effect",
    "normalize_bytecode",
    "Stack",
    "MODULUS",
    "MAX_WORD",
    "SIGN_BIT",
    "is_negative",
    "negate",
    "to_signed",
    "to_word",
]
