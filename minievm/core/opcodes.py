"""
Opcode definitions and utilities for the interpreter.
"""

from enum import IntEnum
from typing import Dict, List, Optional, Tuple, Union

from .errors import InvalidBytecode


class Opcode(IntEnum):
    """Supported opcodes"""

    STOP = 0x00
    ADD = 0x01
    MUL = 0x02
    SUB = 0x03
    DIV = 0x04
    SDIV = 0x05
    MOD = 0x06
    SMOD = 0x07
    ADDMOD = 0x08
    MULMOD = 0x09
    EXP = 0x0A
    SIGNEXTEND = 0x0B

    LT = 0x10
    GT = 0x11
    SLT = 0x12
    SGT = 0x13

    POP = 0x50

    PUSH0 = 0x5F
    PUSH1 = 0x60
    PUSH2 = 0x61
    PUSH4 = 0x63
    PUSH6 = 0x65
    PUSH10 = 0x69
    PUSH11 = 0x6A
    PUSH32 = 0x7F


# Map from opcode value to name
OPCODE_NAMES = {int(code): name for name, code in Opcode.__members__.items()}

# Map from opcode to number of operand bytes to read
PUSH_BYTES: Dict[Opcode, int] = {
    Opcode.PUSH0: 0,
    Opcode.PUSH1: 1,
    Opcode.PUSH2: 2,
    Opcode.PUSH4: 4,
    Opcode.PUSH6: 6,
    Opcode.PUSH10: 10,
    Opcode.PUSH11: 11,
    Opcode.PUSH32: 32,
}

# Map from opcode to stack in, stack out counts
STACK_EFFECTS: Dict[Opcode, Tuple[int, int]] = {
    # 0s arithmetic
    Opcode.STOP: (0, 0),
    Opcode.ADD: (2, 1),
    Opcode.MUL: (2, 1),
    Opcode.SUB: (2, 1),
    Opcode.DIV: (2, 1),
    Opcode.SDIV: (2, 1),
    Opcode.MOD: (2, 1),
    Opcode.SMOD: (2, 1),
    Opcode.ADDMOD: (3, 1),
    Opcode.MULMOD: (3, 1),
    Opcode.EXP: (2, 1),
    Opcode.SIGNEXTEND: (2, 1),
    # 10s comparisons
    Opcode.LT: (2, 1),
    Opcode.GT: (2, 1),
    Opcode.SLT: (2, 1),
    Opcode.SGT: (2, 1),
    # 50s stack
    Opcode.POP: (1, 0),
}

# Add PUSH operations
for _push in PUSH_BYTES:
    STACK_EFFECTS[_push] = (0, 1)


def decode(byte: int) -> Optional[Opcode]:
    """
    Map a single byte to its opcode.

    Args:
        byte: The byte value (0-255)

    Returns:
        The Opcode, or None if the byte is not a supported instruction
    """
    try:
        return Opcode(byte)
    except ValueError:
        return None


def get_stack_effect(opcode):
    """
    Get the stack effect of an opcode (how many items it pops and pushes).

    Args:
        opcode: The opcode value

    Returns:
        Tuple (stack_in, stack_out)
    """
    return STACK_EFFECTS.get(opcode, (0, 0))


def normalize_bytecode(bytecode: Union[bytes, bytearray, memoryview, str]) -> bytes:
    """
    Turn bytecode given as raw bytes or a hex string into an immutable bytes copy.

    Raises:
        InvalidBytecode: If a hex string cannot be decoded
    """
    if isinstance(bytecode, str):
        text = "".join(bytecode.split())
        if text[:2].lower() == "0x":
            text = text[2:]
        try:
            return bytes.fromhex(text)
        except ValueError as e:
            raise InvalidBytecode(f"Invalid hex bytecode: {e}") from e
    if isinstance(bytecode, (bytes, bytearray, memoryview)):
        return bytes(bytecode)
    if isinstance(bytecode, int):
        raise InvalidBytecode("Bytecode must be a byte sequence or hex string, not int")
    try:
        return bytes(bytecode)
    except (TypeError, ValueError) as e:
        raise InvalidBytecode(f"Cannot interpret {type(bytecode).__name__} as bytecode") from e


def disassemble_bytecode(bytecode) -> List[Tuple[str, int, Optional[bytes], int]]:
    """
    Disassemble bytecode into a list of operations.

    Args:
        bytecode: Raw bytes or a hexadecimal string (optionally 0x-prefixed)

    Returns:
        List of tuples (opcode_name, opcode_value, push_data, offset)
    """
    bytecode_bytes = normalize_bytecode(bytecode)
    operations = []
    i = 0

    while i < len(bytecode_bytes):
        opcode_value = bytecode_bytes[i]
        offset = i
        i += 1

        opcode_name = OPCODE_NAMES.get(opcode_value, f"UNKNOWN_{opcode_value:02x}")

        push_data = None
        push_bytes = PUSH_BYTES.get(opcode_value)
        if push_bytes:
            if i + push_bytes <= len(bytecode_bytes):
                push_data = bytecode_bytes[i : i + push_bytes]
                i += push_bytes
            else:
                # Not enough bytes for push operation
                push_data = bytecode_bytes[i:]
                i = len(bytecode_bytes)

        operations.append((opcode_name, opcode_value, push_data, offset))

    return operations
