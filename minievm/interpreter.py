"""
Execution loop: decodes bytecode one instruction at a time and dispatches to
the arithmetic, signed, sign-extend and comparison units.

The public contract is ``execute(bytecode) -> (stack, success)``. Faults
(unrecognized opcodes, stack underflow) never escape it; they turn into
``success=False`` with an empty stack.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import structlog

from .config import DEFAULT_CONFIG, TRUNCATED_PUSH_PAD, VMConfig
from .core.errors import UnrecognizedOpcode, VMError
from .core.opcodes import OPCODE_NAMES, PUSH_BYTES, Opcode, decode, normalize_bytecode
from .core.stack import Stack
from .core.word import word_from_bytes
from .ops.arithmetic import BINARY_OPS, TERNARY_OPS
from .ops.comparison import COMPARISON_OPS
from .ops.signed import SIGNED_OPS
from .ops.signextend import signextend

# Bound to a stdlib logger so nothing is emitted until logging is configured
logger = structlog.wrap_logger(logging.getLogger(__name__))


class ExecutionStatus(str, Enum):
    RUNNING = "running"
    HALTED = "halted"  # STOP reached
    COMPLETED = "completed"  # ran off the end of the bytecode
    ABORTED = "aborted"


@dataclass
class TraceStep:
    """One executed instruction with the stack before and after it (top last)."""

    pc: int
    opcode: str
    push_data: Optional[bytes] = None
    stack_in: List[int] = field(default_factory=list)
    stack_out: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pc": self.pc,
            "opcode": self.opcode,
            "push_data": "0x" + self.push_data.hex() if self.push_data is not None else None,
            "stack_in": [hex(w) for w in self.stack_in],
            "stack_out": [hex(w) for w in self.stack_out],
        }


@dataclass
class ExecutionResult:
    stack: List[int]
    success: bool
    status: ExecutionStatus
    pc: int
    steps: int
    error: Optional[str] = None
    trace: List[TraceStep] = field(default_factory=list)

    def as_tuple(self) -> Tuple[List[int], bool]:
        return self.stack, self.success

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "status": self.status.value,
            "stack": [hex(w) for w in self.stack],
            "pc": self.pc,
            "steps": self.steps,
            "error": self.error,
            "trace": [step.to_dict() for step in self.trace],
        }


class Interpreter:
    """
    Runs a single bytecode sequence.

    An instance owns its program counter and stack; create a new one per
    execution.
    """

    def __init__(self, bytecode, config: Optional[VMConfig] = None):
        self.code = normalize_bytecode(bytecode)
        self.config = config or DEFAULT_CONFIG
        self.pc = 0
        self.stack = Stack()
        self.status = ExecutionStatus.RUNNING
        self.steps = 0
        self.trace: List[TraceStep] = []
        self._push_data: Optional[bytes] = None

    def run(self) -> ExecutionResult:
        """Execute until STOP, end of bytecode, or a fault."""
        logger.debug("Starting execution", code_size=len(self.code), config=self.config)
        try:
            while self.status is ExecutionStatus.RUNNING:
                self.step()
        except VMError as e:
            self.status = ExecutionStatus.ABORTED
            logger.info(
                "Execution aborted",
                pc=self.pc,
                steps=self.steps,
                error_type=type(e).__name__,
                error=str(e),
            )
            return ExecutionResult(
                stack=[],
                success=False,
                status=self.status,
                pc=self.pc,
                steps=self.steps,
                error=str(e),
                trace=self.trace,
            )

        logger.debug(
            "Execution finished",
            status=self.status.value,
            pc=self.pc,
            steps=self.steps,
            stack_size=len(self.stack),
        )
        return ExecutionResult(
            stack=self.stack.to_list(),
            success=True,
            status=self.status,
            pc=self.pc,
            steps=self.steps,
            trace=self.trace,
        )

    def step(self) -> None:
        """
        Execute the instruction at the current PC.

        Raises:
            UnrecognizedOpcode: If the byte at PC is not a supported opcode
            StackUnderflow: If the instruction needs more operands than present
        """
        if self.status is not ExecutionStatus.RUNNING:
            return
        if self.pc >= len(self.code):
            self.status = ExecutionStatus.COMPLETED
            return

        pc = self.pc
        byte = self.code[pc]
        opcode = decode(byte)
        if opcode is None:
            raise UnrecognizedOpcode(byte, pc)

        stack_in = self.stack.to_list() if self.config.trace else []
        self._push_data = None

        self._dispatch(opcode)
        self.steps += 1

        if self.config.trace:
            self.trace.append(
                TraceStep(
                    pc=pc,
                    opcode=OPCODE_NAMES[opcode],
                    push_data=self._push_data,
                    stack_in=stack_in,
                    stack_out=self.stack.to_list(),
                )
            )

        if self.status is ExecutionStatus.RUNNING and self.pc >= len(self.code):
            self.status = ExecutionStatus.COMPLETED

    def _dispatch(self, opcode: Opcode) -> None:
        if opcode is Opcode.STOP:
            self.status = ExecutionStatus.HALTED
        elif opcode in PUSH_BYTES:
            self._push(opcode)
        elif opcode is Opcode.POP:
            self.stack.pop()
            self.pc += 1
        elif opcode in BINARY_OPS:
            a, b = self.stack.pop_n(2)
            self.stack.push(BINARY_OPS[opcode](a, b))
            self.pc += 1
        elif opcode in TERNARY_OPS:
            a, b, n = self.stack.pop_n(3)
            self.stack.push(TERNARY_OPS[opcode](a, b, n))
            self.pc += 1
        elif opcode in SIGNED_OPS:
            a, b = self.stack.pop_n(2)
            self.stack.push(SIGNED_OPS[opcode](a, b))
            self.pc += 1
        elif opcode is Opcode.SIGNEXTEND:
            k, x = self.stack.pop_n(2)
            self.stack.push(signextend(k, x))
            self.pc += 1
        elif opcode in COMPARISON_OPS:
            a, b = self.stack.pop_n(2)
            self.stack.push(COMPARISON_OPS[opcode](a, b))
            self.pc += 1
        else:
            raise RuntimeError(f"No handler for opcode {opcode.name}")

    def _push(self, opcode: Opcode) -> None:
        width = PUSH_BYTES[opcode]
        start = self.pc + 1
        end = start + width

        if end <= len(self.code):
            data = self.code[start:end]
            self._push_data = data
            self.stack.push(word_from_bytes(data))
            self.pc = end
            return

        available = self.code[start:]
        logger.debug(
            "Truncated push operand",
            pc=self.pc,
            opcode=opcode.name,
            needed=width,
            available=len(available),
            policy=self.config.truncated_push,
        )
        if self.config.truncated_push == TRUNCATED_PUSH_PAD:
            data = available + bytes(width - len(available))
            self._push_data = data
            self.stack.push(word_from_bytes(data))
            self.pc = len(self.code)
        else:
            # Skip the push; the leftover bytes are decoded as instructions
            self.pc = start


def run(bytecode, config: Optional[VMConfig] = None) -> ExecutionResult:
    """Execute bytecode and return the full result record."""
    return Interpreter(bytecode, config).run()


def execute(bytecode, config: Optional[VMConfig] = None) -> Tuple[List[int], bool]:
    """
    Execute bytecode and return the final stack and a success flag.

    Args:
        bytecode: Raw bytes or a hex string
        config: Optional interpreter configuration

    Returns:
        Tuple of (stack with the top last, success). On any fault the stack
        is empty and success is False.

    Raises:
        InvalidBytecode: If a hex string cannot be decoded
    """
    return run(bytecode, config).as_tuple()
