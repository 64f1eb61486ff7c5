"""
Reference model of the opcode set over z3 256-bit bit-vectors.

The interpreter works on Python ints; this module replays the same bytecode
using z3's bit-vector theory (UDiv, URem, signed division, SRem, ULT,
SignExt, ...) so the two can be compared instruction set wide.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import structlog
import z3

from ..config import DEFAULT_CONFIG, TRUNCATED_PUSH_PAD, VMConfig
from ..core.opcodes import PUSH_BYTES, Opcode, decode, normalize_bytecode
from ..core.word import WORD_BITS, WORD_BYTES
from ..interpreter import ExecutionResult, run

logger = structlog.wrap_logger(logging.getLogger(__name__))

ZERO = z3.BitVecVal(0, WORD_BITS)
ONE = z3.BitVecVal(1, WORD_BITS)


def bv(value: int) -> z3.BitVecRef:
    return z3.BitVecVal(value, WORD_BITS)


def bv_add(a: z3.BitVecRef, b: z3.BitVecRef) -> z3.BitVecRef:
    """Addition (wrapping at 2^256)."""
    return z3.simplify(a + b)


def bv_sub(a: z3.BitVecRef, b: z3.BitVecRef) -> z3.BitVecRef:
    """Subtraction (wrapping at 2^256)."""
    return z3.simplify(a - b)


def bv_mul(a: z3.BitVecRef, b: z3.BitVecRef) -> z3.BitVecRef:
    """Multiplication (wrapping at 2^256)."""
    return z3.simplify(a * b)


def bv_div(a: z3.BitVecRef, b: z3.BitVecRef) -> z3.BitVecRef:
    """Unsigned division (x / 0 = 0)."""
    return z3.simplify(z3.If(b == 0, ZERO, z3.UDiv(a, b)))


def bv_sdiv(a: z3.BitVecRef, b: z3.BitVecRef) -> z3.BitVecRef:
    """Signed division (x / 0 = 0)."""
    return z3.simplify(z3.If(b == 0, ZERO, a / b))


def bv_mod(a: z3.BitVecRef, b: z3.BitVecRef) -> z3.BitVecRef:
    """Unsigned modulo (x % 0 = 0)."""
    return z3.simplify(z3.If(b == 0, ZERO, z3.URem(a, b)))


def bv_smod(a: z3.BitVecRef, b: z3.BitVecRef) -> z3.BitVecRef:
    """Signed modulo, sign of the dividend (x % 0 = 0)."""
    return z3.simplify(z3.If(b == 0, ZERO, z3.SRem(a, b)))


def bv_addmod(a: z3.BitVecRef, b: z3.BitVecRef, n: z3.BitVecRef) -> z3.BitVecRef:
    """(a + b) % n with the sum widened to 257 bits (x % 0 = 0)."""
    wide = z3.URem(z3.ZeroExt(1, a) + z3.ZeroExt(1, b), z3.ZeroExt(1, n))
    return z3.simplify(z3.If(n == 0, ZERO, z3.Extract(WORD_BITS - 1, 0, wide)))


def bv_mulmod(a: z3.BitVecRef, b: z3.BitVecRef, n: z3.BitVecRef) -> z3.BitVecRef:
    """(a * b) % n with the product widened to 512 bits (x % 0 = 0)."""
    ext = WORD_BITS
    wide = z3.URem(z3.ZeroExt(ext, a) * z3.ZeroExt(ext, b), z3.ZeroExt(ext, n))
    return z3.simplify(z3.If(n == 0, ZERO, z3.Extract(WORD_BITS - 1, 0, wide)))


def bv_exp(a: z3.BitVecRef, b: z3.BitVecRef) -> z3.BitVecRef:
    """
    Exponentiation a ^ b by square-and-multiply.

    z3 has no bit-vector power, so the exponent must simplify to a numeral.
    """
    exponent = z3.simplify(b)
    if not z3.is_bv_value(exponent):
        raise ValueError("EXP reference model needs a concrete exponent")
    result = ONE
    base = a
    e = exponent.as_long()
    while e:
        if e & 1:
            result = z3.simplify(result * base)
        base = z3.simplify(base * base)
        e >>= 1
    return result


def bv_signextend(k: z3.BitVecRef, x: z3.BitVecRef) -> z3.BitVecRef:
    """Sign-extend byte k of x (needs a concrete k)."""
    index = z3.simplify(k)
    if not z3.is_bv_value(index):
        raise ValueError("SIGNEXTEND reference model needs a concrete byte index")
    byte_index = index.as_long()
    if byte_index >= WORD_BYTES - 1:
        return x
    width = 8 * (byte_index + 1)
    return z3.simplify(z3.SignExt(WORD_BITS - width, z3.Extract(width - 1, 0, x)))


def bv_lt(a: z3.BitVecRef, b: z3.BitVecRef) -> z3.BitVecRef:
    """Unsigned less than comparison."""
    return z3.simplify(z3.If(z3.ULT(a, b), ONE, ZERO))


def bv_gt(a: z3.BitVecRef, b: z3.BitVecRef) -> z3.BitVecRef:
    """Unsigned greater than comparison."""
    return z3.simplify(z3.If(z3.UGT(a, b), ONE, ZERO))


def bv_slt(a: z3.BitVecRef, b: z3.BitVecRef) -> z3.BitVecRef:
    """Signed less than comparison."""
    return z3.simplify(z3.If(a < b, ONE, ZERO))


def bv_sgt(a: z3.BitVecRef, b: z3.BitVecRef) -> z3.BitVecRef:
    """Signed greater than comparison."""
    return z3.simplify(z3.If(a > b, ONE, ZERO))


BITVEC_OPS = {
    Opcode.ADD: bv_add,
    Opcode.SUB: bv_sub,
    Opcode.MUL: bv_mul,
    Opcode.DIV: bv_div,
    Opcode.SDIV: bv_sdiv,
    Opcode.MOD: bv_mod,
    Opcode.SMOD: bv_smod,
    Opcode.EXP: bv_exp,
    Opcode.SIGNEXTEND: bv_signextend,
    Opcode.LT: bv_lt,
    Opcode.GT: bv_gt,
    Opcode.SLT: bv_slt,
    Opcode.SGT: bv_sgt,
}

BITVEC_TERNARY_OPS = {
    Opcode.ADDMOD: bv_addmod,
    Opcode.MULMOD: bv_mulmod,
}


class BitVecExecutor:
    """Replays bytecode over z3 bit-vectors."""

    def __init__(self, bytecode, config: Optional[VMConfig] = None):
        self.code = normalize_bytecode(bytecode)
        self.config = config or DEFAULT_CONFIG

    def run(self) -> Optional[List[int]]:
        """
        Returns:
            The final stack (top last) as ints, or None if execution faults
        """
        code = self.code
        stack: List[z3.BitVecRef] = []
        pc = 0

        while pc < len(code):
            opcode = decode(code[pc])
            if opcode is None:
                logger.debug("Reference model hit unknown opcode", pc=pc, byte=code[pc])
                return None
            if opcode is Opcode.STOP:
                break

            if opcode in PUSH_BYTES:
                width = PUSH_BYTES[opcode]
                data = code[pc + 1 : pc + 1 + width]
                if len(data) == width:
                    stack.append(bv(int.from_bytes(data, "big")))
                    pc += 1 + width
                elif self.config.truncated_push == TRUNCATED_PUSH_PAD:
                    padded = data + bytes(width - len(data))
                    stack.append(bv(int.from_bytes(padded, "big")))
                    pc = len(code)
                else:
                    pc += 1
                continue

            if opcode is Opcode.POP:
                if not stack:
                    return None
                stack.pop()
            elif opcode in BITVEC_TERNARY_OPS:
                if len(stack) < 3:
                    return None
                a, b, n = stack.pop(), stack.pop(), stack.pop()
                stack.append(BITVEC_TERNARY_OPS[opcode](a, b, n))
            else:
                if len(stack) < 2:
                    return None
                a, b = stack.pop(), stack.pop()
                stack.append(BITVEC_OPS[opcode](a, b))
            pc += 1

        return [z3.simplify(value).as_long() for value in stack]


@dataclass
class CrossCheckReport:
    agrees: bool
    concrete: ExecutionResult
    reference: Optional[List[int]]

    def to_dict(self):
        return {
            "agrees": self.agrees,
            "reference_success": self.reference is not None,
            "reference_stack": (
                [hex(w) for w in self.reference] if self.reference is not None else None
            ),
        }


def cross_check(bytecode, config: Optional[VMConfig] = None) -> CrossCheckReport:
    """
    Run bytecode through both the interpreter and the bit-vector model.

    Args:
        bytecode: Raw bytes or a hex string
        config: Interpreter configuration shared by both runs

    Returns:
        CrossCheckReport describing whether the two agree
    """
    concrete = run(bytecode, config)
    reference = BitVecExecutor(bytecode, config).run()

    if reference is None:
        agrees = not concrete.success
    else:
        agrees = concrete.success and concrete.stack == reference

    if agrees:
        logger.debug("Cross-check passed", success=concrete.success)
    else:
        logger.warning(
            "Cross-check mismatch",
            concrete_success=concrete.success,
            concrete_stack=[hex(w) for w in concrete.stack],
            reference_stack=[hex(w) for w in reference] if reference is not None else None,
        )
    return CrossCheckReport(agrees=agrees, concrete=concrete, reference=reference)
