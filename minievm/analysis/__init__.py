"""Bit-vector reference model used to cross-check the interpreter."""

from .bitvec import BitVecExecutor, CrossCheckReport, cross_check

__all__ = ["BitVecExecutor", "CrossCheckReport", "cross_check"]
