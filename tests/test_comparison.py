from hypothesis import given, settings
from hypothesis import strategies as st

from minievm.core.word import MAX_WORD, SIGN_BIT, negate, to_signed
from minievm.ops.comparison import gt, lt, sgt, slt

words = st.integers(min_value=0, max_value=MAX_WORD)


def test_unsigned():
    assert lt(1, 2) == 1
    assert lt(2, 1) == 0
    assert gt(2, 1) == 1
    assert gt(1, 1) == 0
    assert lt(1, MAX_WORD) == 1


def test_signed_mixed_signs():
    assert slt(MAX_WORD, 0) == 1
    assert sgt(MAX_WORD, 0) == 0
    assert slt(0, MAX_WORD) == 0
    assert sgt(0, MAX_WORD) == 1


def test_signed_both_negative():
    assert slt(negate(5), negate(3)) == 1
    assert sgt(negate(5), negate(3)) == 0
    assert slt(SIGN_BIT, MAX_WORD) == 1
    assert sgt(MAX_WORD, SIGN_BIT) == 1


def test_equal_operands_are_neither(edge_words):
    for x in edge_words:
        assert lt(x, x) == gt(x, x) == slt(x, x) == sgt(x, x) == 0


@settings(max_examples=300)
@given(a=words, b=words)
def test_totality(a, b):
    if a != b:
        assert lt(a, b) + gt(a, b) == 1
        assert slt(a, b) + sgt(a, b) == 1


@settings(max_examples=300)
@given(a=words, b=words)
def test_signed_matches_python_ints(a, b):
    assert slt(a, b) == int(to_signed(a) < to_signed(b))
    assert sgt(a, b) == int(to_signed(a) > to_signed(b))
