import pytest

from minievm.core.word import MAX_WORD, SIGN_BIT


@pytest.fixture
def edge_words():
    return [0, 1, 2, 0x7F, 0x80, 0xFF, SIGN_BIT - 1, SIGN_BIT, SIGN_BIT + 1, MAX_WORD - 1, MAX_WORD]
