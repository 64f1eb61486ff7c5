import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from hypothesis.strategies import composite

from helpers import binary_program, push32, ternary_program
from minievm import VMConfig
from minievm.analysis.bitvec import BitVecExecutor, cross_check
from minievm.core.opcodes import PUSH_BYTES, STACK_EFFECTS, Opcode
from minievm.core.word import MAX_WORD, SIGN_BIT

words = st.one_of(
    st.integers(min_value=0, max_value=MAX_WORD),
    st.sampled_from([0, 1, 2, 31, 32, SIGN_BIT - 1, SIGN_BIT, MAX_WORD - 1, MAX_WORD]),
)

BINARY = [op for op, (pops, _) in STACK_EFFECTS.items() if pops == 2 and op != Opcode.EXP]
TERNARY = [Opcode.ADDMOD, Opcode.MULMOD]


@composite
def straight_line_program(draw):
    """Random programs mixing pushes with supported operations (possibly underflowing)."""
    parts = []
    length = draw(st.integers(min_value=0, max_value=12))
    for _ in range(length):
        opcode = draw(st.sampled_from(list(Opcode)))
        if opcode == Opcode.EXP:
            # keep exponents small for the square-and-multiply model
            parts.append(bytes([Opcode.PUSH1, draw(st.integers(0, 255))]))
            parts.append(push32(draw(words)))
        parts.append(bytes([opcode]))
        width = PUSH_BYTES.get(opcode, 0)
        if width:
            parts.append(draw(st.binary(min_size=width, max_size=width)))
    return b"".join(parts)


@settings(max_examples=150, deadline=None)
@given(opcode=st.sampled_from(BINARY), a=words, b=words)
def test_binary_ops_agree_with_bitvec_model(opcode, a, b):
    report = cross_check(binary_program(opcode, a, b))
    assert report.agrees, (opcode.name, hex(a), hex(b))


@settings(max_examples=60, deadline=None)
@given(opcode=st.sampled_from(TERNARY), a=words, b=words, n=words)
def test_ternary_ops_agree_with_bitvec_model(opcode, a, b, n):
    report = cross_check(ternary_program(opcode, a, b, n))
    assert report.agrees, (opcode.name, hex(a), hex(b), hex(n))


@settings(max_examples=50, deadline=None)
@given(a=words, e=st.integers(min_value=0, max_value=300))
def test_exp_agrees_with_bitvec_model(a, e):
    assert cross_check(binary_program(Opcode.EXP, a, e)).agrees


@settings(max_examples=100, deadline=None)
@given(code=straight_line_program())
def test_random_programs_agree(code):
    assert cross_check(code).agrees


@settings(max_examples=50, deadline=None)
@given(code=st.binary(max_size=40).filter(lambda c: Opcode.EXP not in c))
def test_random_bytes_agree_under_both_push_policies(code):
    assert cross_check(code).agrees
    assert cross_check(code, VMConfig(truncated_push="pad")).agrees


def test_reference_model_reports_faults():
    assert BitVecExecutor(bytes([Opcode.POP])).run() is None
    assert BitVecExecutor(bytes([0xFF])).run() is None
    assert BitVecExecutor(b"").run() == []


def test_report_fields():
    report = cross_check(bytes([0x60, 0x05, 0x60, 0x03, 0x01, 0x00]))
    assert report.agrees
    assert report.reference == [8]
    assert report.concrete.stack == [8]
    assert report.to_dict() == {
        "agrees": True,
        "reference_success": True,
        "reference_stack": ["0x8"],
    }


@pytest.mark.parametrize("k", [0, 1, 15, 30, 31, 32, MAX_WORD])
def test_signextend_index_edges(k):
    assert cross_check(binary_program(Opcode.SIGNEXTEND, k, SIGN_BIT | 0x80_8080)).agrees
