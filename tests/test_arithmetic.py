import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from minievm.core.word import MAX_WORD, MODULUS, SIGN_BIT
from minievm.ops.arithmetic import add, addmod, div, exp, mod, mul, mulmod, sub

words = st.integers(min_value=0, max_value=MAX_WORD)
nonzero_words = st.integers(min_value=1, max_value=MAX_WORD)


def test_add_wraps():
    assert add(2, 3) == 5
    assert add(MAX_WORD, 1) == 0
    assert add(MAX_WORD, MAX_WORD) == MAX_WORD - 1


def test_sub_uses_first_popped_as_minuend():
    assert sub(5, 3) == 2
    assert sub(3, 5) == MAX_WORD - 1
    assert sub(0, 1) == MAX_WORD


def test_mul_wraps():
    assert mul(6, 7) == 42
    assert mul(SIGN_BIT, 2) == 0
    assert mul(MAX_WORD, MAX_WORD) == 1


def test_div_and_mod():
    assert div(10, 3) == 3
    assert mod(10, 3) == 1
    assert div(3, 10) == 0
    assert mod(MAX_WORD, 2) == 1


@pytest.mark.parametrize("op", [div, mod])
@given(a=words)
def test_division_by_zero_yields_zero(op, a):
    assert op(a, 0) == 0


def test_addmod_uses_full_precision_sum():
    assert addmod(10, 10, 8) == 4
    assert addmod(MAX_WORD, 2, 3) == (MAX_WORD + 2) % 3
    assert addmod(MAX_WORD, MAX_WORD, MAX_WORD) == 0


def test_mulmod_uses_full_precision_product():
    assert mulmod(10, 10, 8) == 4
    assert mulmod(MAX_WORD, MAX_WORD, 12) == (MAX_WORD * MAX_WORD) % 12


@given(a=words, b=words)
def test_addmod_mulmod_zero_modulus(a, b):
    assert addmod(a, b, 0) == 0
    assert mulmod(a, b, 0) == 0


def test_exp():
    assert exp(2, 10) == 1024
    assert exp(2, 255) == SIGN_BIT
    assert exp(2, 256) == 0
    assert exp(0, 0) == 1
    assert exp(3, MAX_WORD) == pow(3, MAX_WORD, MODULUS)


@settings(max_examples=200)
@given(a=words, b=words)
def test_add_then_sub_restores(a, b):
    assert sub(add(a, b), b) == a


@settings(max_examples=200)
@given(a=words, b=nonzero_words)
def test_div_mod_identity(a, b):
    assert add(mul(div(a, b), b), mod(a, b)) == a


@given(a=words, b=words)
def test_results_are_words(a, b):
    for result in (add(a, b), sub(a, b), mul(a, b), div(a, b), mod(a, b), exp(a, b % 512)):
        assert 0 <= result <= MAX_WORD
