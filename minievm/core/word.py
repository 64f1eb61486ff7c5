"""
256-bit word helpers.

Words are plain Python ints kept in the canonical unsigned range
[0, 2**256). The signed view is two's complement: bit 255 set means negative.
"""

from typing import Union

WORD_BITS = 256
WORD_BYTES = 32
MODULUS = 1 << WORD_BITS
MAX_WORD = MODULUS - 1
SIGN_BIT = 1 << (WORD_BITS - 1)


def to_word(value: int) -> int:
    """Reduce an arbitrary int modulo 2^256."""
    return value % MODULUS


def is_word(value: int) -> bool:
    return isinstance(value, int) and 0 <= value <= MAX_WORD


def is_negative(word: int) -> bool:
    """Check the sign bit (bit 255) of a word."""
    return word & SIGN_BIT != 0


def negate(word: int) -> int:
    """
    Two's-complement negation, wrapping within 256 bits.

    The minimum negative value (only bit 255 set) negates to itself and
    zero negates to zero.
    """
    return (MODULUS - word) % MODULUS


def to_signed(word: int) -> int:
    """Interpret a word as a two's-complement signed integer."""
    if is_negative(word):
        return word - MODULUS
    return word


def from_signed(value: int) -> int:
    """Encode a signed integer as a word (wraps values outside int256)."""
    return to_word(value)


def word_to_bytes(word: int) -> bytes:
    """Big-endian 32-byte encoding of a word."""
    return to_word(word).to_bytes(WORD_BYTES, "big")


def word_from_bytes(data: Union[bytes, bytearray, memoryview]) -> int:
    """
    Decode big-endian bytes into a word.

    Accepts fewer than 32 bytes (left-padded with zeros). The input is copied
    before decoding so the result never aliases the caller's buffer.
    """
    return to_word(int.from_bytes(bytes(data), "big"))
