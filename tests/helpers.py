from minievm.core.opcodes import Opcode


def push32(value: int) -> bytes:
    """PUSH32 instruction carrying a full-width word."""
    return bytes([Opcode.PUSH32]) + value.to_bytes(32, "big")


def program(*parts) -> bytes:
    """Join instruction fragments (bytes or single opcodes) into bytecode."""
    out = bytearray()
    for part in parts:
        if isinstance(part, int):
            out.append(part)
        else:
            out += part
    return bytes(out)


def binary_program(opcode: int, a: int, b: int) -> bytes:
    """Bytecode computing ``opcode(a, b)`` where ``a`` ends up on top."""
    return program(push32(b), push32(a), opcode)


def ternary_program(opcode: int, a: int, b: int, n: int) -> bytes:
    """Bytecode computing ``opcode(a, b, n)`` where ``a`` ends up on top."""
    return program(push32(n), push32(b), push32(a), opcode)
