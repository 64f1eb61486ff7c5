"""Unsigned arithmetic over 256-bit words."""

from ..core.opcodes import Opcode
from ..core.word import MODULUS, to_word


def add(a: int, b: int) -> int:
    """Addition (wrapping at 2^256)."""
    return to_word(a + b)


def sub(a: int, b: int) -> int:
    """Subtraction a - b (wrapping at 2^256); a is the first popped operand."""
    return to_word(a - b)


def mul(a: int, b: int) -> int:
    """Multiplication (wrapping at 2^256)."""
    return to_word(a * b)


def div(a: int, b: int) -> int:
    """Unsigned floor division (x / 0 = 0)."""
    if b == 0:
        return 0
    return to_word(a // b)


def mod(a: int, b: int) -> int:
    """Unsigned modulo (x % 0 = 0)."""
    if b == 0:
        return 0
    return to_word(a % b)


def addmod(a: int, b: int, n: int) -> int:
    """(a + b) % n computed without 256-bit truncation of the sum (x % 0 = 0)."""
    if n == 0:
        return 0
    return to_word((a + b) % n)


def mulmod(a: int, b: int, n: int) -> int:
    """(a * b) % n computed without 256-bit truncation of the product (x % 0 = 0)."""
    if n == 0:
        return 0
    return to_word((a * b) % n)


def exp(a: int, b: int) -> int:
    """
    Exponentiation a ** b reduced mod 2^256.

    Three-argument pow keeps every intermediate below 2^512, so large
    exponents never build the full power.
    """
    return pow(a, b, MODULUS)


BINARY_OPS = {
    Opcode.ADD: add,
    Opcode.SUB: sub,
    Opcode.MUL: mul,
    Opcode.DIV: div,
    Opcode.MOD: mod,
    Opcode.EXP: exp,
}

TERNARY_OPS = {
    Opcode.ADDMOD: addmod,
    Opcode.MULMOD: mulmod,
}
