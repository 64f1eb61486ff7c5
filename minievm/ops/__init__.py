"""Opcode semantics grouped by unit."""

from .arithmetic import add, sub, mul, div, mod, addmod, mulmod, exp, BINARY_OPS, TERNARY_OPS
from .signed import sdiv, smod, SIGNED_OPS
from .signextend import signextend
from .comparison import lt, gt, slt, sgt, COMPARISON_OPS

__all__ = [
    "add",
    "sub",
    "mul",
    "div",
    "mod",
    "addmod",
    "mulmod",
    "exp",
    "sdiv",
    "smod",
    "signextend",
    "lt",
    "gt",
    "slt",
    "sgt",
    "BINARY_OPS",
    "TERNARY_OPS",
    "SIGNED_OPS",
    "COMPARISON_OPS",
]
