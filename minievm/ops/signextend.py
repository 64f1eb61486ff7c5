"""SIGNEXTEND: propagate the sign of one byte across the rest of a word."""

from ..core.word import WORD_BYTES, word_from_bytes, word_to_bytes


def signextend(k: int, x: int) -> int:
    """
    Extend the sign of byte ``k`` of ``x`` (byte 0 is the least significant).

    Every byte more significant than ``k`` becomes 0xFF when the sign byte is
    above 0x7F and 0x00 otherwise. For ``k > 31`` there is nothing left to
    extend and ``x`` is returned unchanged.

    Args:
        k: Index of the sign byte, counted from the least significant byte
        x: The word to extend

    Returns:
        The extended word
    """
    if k > WORD_BYTES - 1:
        return x

    # word_to_bytes hands back a fresh buffer, so editing it never touches x
    data = bytearray(word_to_bytes(x))
    sign_index = WORD_BYTES - 1 - k
    fill = 0xFF if data[sign_index] > 0x7F else 0x00
    for i in range(sign_index):
        data[i] = fill

    return word_from_bytes(data)
