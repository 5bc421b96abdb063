from __future__ import annotations

from r6 import printer

from .chunk import Chunk
from .function import Function
from .opcodes import OPERANDS, Opcode

_WIDTH = {"u8": 1, "u16": 2, "s16": 2}


def _decode(code: bytearray, ip: int, kind: str) -> int:
    if kind == "u8":
        return code[ip]
    v = (code[ip] << 8) | code[ip + 1]
    if kind == "s16" and v & 0x8000:
        v -= 1 << 16
    return v


def _format(op: Opcode | int, operands: list[int], next_ip: int) -> str:
    if op == Opcode.LOAD_VAR:
        return f" depth={operands[0]} slot={operands[1]}"
    if op == Opcode.CALL:
        return f" argc={operands[0]}"
    if op in (Opcode.JUMP, Opcode.JUMP_IF_FALSE):
        return f" {operands[0]:+d} -> {next_ip + operands[0]}"
    return "".join(f" {v}" for v in operands)


def disassemble_chunk(chunk: Chunk, indent: str = "") -> str:
    """Render `chunk` one instruction per line, followed by its constants.

    Function constants are disassembled recursively, indented one level.
    """
    code = chunk.code
    out = []
    ip = 0
    while ip < len(code):
        start = ip
        try:
            op = Opcode(code[ip])
            name = op.name
        except ValueError:
            op, name = code[ip], f"OP_{code[ip]:02X}"
        ip += 1
        operands = []
        for kind in OPERANDS.get(op, ()):
            operands.append(_decode(code, ip, kind))
            ip += _WIDTH[kind]
        out.append(f"{indent}{start:04d}: {name}{_format(op, operands, ip)}")

    out.append(f"{indent}-- constants --")
    for idx, c in enumerate(chunk.constants):
        if isinstance(c, Function):
            out.append(f"{indent}[{idx}] <Function arity={c.arity} rest={c.rest} captures={c.captures}>")
            out.append(disassemble_chunk(c.chunk, indent + "    "))
        else:
            out.append(f"{indent}[{idx}] {printer.to_external(c)}")
    return "\n".join(out)
