"""
Signed (two's-complement) division and modulus.

Operands are stored unsigned; a word with bit 255 set is treated as
negative. Both operations work on magnitudes obtained through ``negate``
and re-apply the sign at the end.
"""

from ..core.opcodes import Opcode
from ..core.word import is_negative, negate, to_word


def _magnitude(word: int) -> int:
    return negate(word) if is_negative(word) else word


def sdiv(a: int, b: int) -> int:
    """
    Signed division truncating toward zero (x / 0 = 0).

    The quotient is negated when the operand signs differ, so
    sdiv(-2^255, -1) wraps back to -2^255.
    """
    if b == 0:
        return 0
    quotient = _magnitude(a) // _magnitude(b)
    if is_negative(a) != is_negative(b):
        quotient = negate(to_word(quotient))
    return to_word(quotient)


def smod(a: int, b: int) -> int:
    """Signed modulus; the result takes the sign of the dividend (x % 0 = 0)."""
    if b == 0:
        return 0
    remainder = _magnitude(a) % _magnitude(b)
    if is_negative(a):
        remainder = negate(remainder)
    return to_word(remainder)


SIGNED_OPS = {
    Opcode.SDIV: sdiv,
    Opcode.SMOD: smod,
}
