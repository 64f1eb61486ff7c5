"""Unsigned and signed comparisons producing word 1 (true) or 0 (false)."""

from ..core.opcodes import Opcode
from ..core.word import is_negative, negate


def lt(a: int, b: int) -> int:
    """Unsigned a < b."""
    return 1 if a < b else 0


def gt(a: int, b: int) -> int:
    """Unsigned a > b."""
    return 1 if a > b else 0


def slt(a: int, b: int) -> int:
    """
    Signed a < b.

    A negative operand is always below a non-negative one. When both are
    negative the one with the larger magnitude is the smaller value.
    """
    a_negative = is_negative(a)
    b_negative = is_negative(b)
    if a_negative and not b_negative:
        return 1
    if b_negative and not a_negative:
        return 0
    if a_negative and b_negative:
        return 1 if negate(a) > negate(b) else 0
    return 1 if a < b else 0


def sgt(a: int, b: int) -> int:
    """Signed a > b."""
    a_negative = is_negative(a)
    b_negative = is_negative(b)
    if a_negative and not b_negative:
        return 0
    if b_negative and not a_negative:
        return 1
    if a_negative and b_negative:
        return 1 if negate(a) < negate(b) else 0
    return 1 if a > b else 0


COMPARISON_OPS = {
    Opcode.LT: lt,
    Opcode.GT: gt,
    Opcode.SLT: slt,
    Opcode.SGT: sgt,
}
