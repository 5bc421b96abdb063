from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

from r6.compiler.opcodes import Opcode
from r6.types.datum import Character
from r6.types.symbol import Symbol


_SHAREABLE = (int, Character, Symbol)


@dataclass
class Chunk:
    """A chunk of bytecode with a constants table.

    Operands are fixed-size raw bytes: u8, u16 (big-endian) and s16.
    """

    code: bytearray = field(default_factory=bytearray)
    constants: List[Any] = field(default_factory=list)

    def add_const(self, value: Any) -> int:
        # Only immutable atoms are shared; exact type keeps True and 1 apart
        if isinstance(value, _SHAREABLE):
            for idx, c in enumerate(self.constants):
                if type(c) is type(value) and c == value:
                    return idx
        self.constants.append(value)
        if len(self.constants) > 0xFFFF:
            raise OverflowError("constant table overflow")
        return len(self.constants) - 1

    # --- Emit helpers ---
    def emit_op(self, op: Opcode) -> int:
        self.code.append(int(op))
        return len(self.code) - 1

    def emit_u8(self, v: int) -> None:
        self.code.append(v & 0xFF)

    def emit_u16(self, v: int) -> None:
        self.code.extend(((v >> 8) & 0xFF, v & 0xFF))

    def emit_s16(self, v: int) -> None:
        if v < 0:
            v = (1 << 16) + v
        self.emit_u16(v)

    # --- high-level convenience ---
    def emit_const(self, value: Any) -> None:
        idx = self.add_const(value)
        self.emit_op(Opcode.PUSH_CONST)
        self.emit_u16(idx)

    def emit_jump(self, op: Opcode) -> int:
        """Emit a jump with a placeholder offset; returns the operand position to patch."""
        self.emit_op(op)
        pos = len(self.code)
        self.emit_s16(0)
        return pos

    def patch_jump(self, pos: int) -> None:
        """Point the jump whose operand starts at `pos` to the current end of code."""
        self.patch_s16_at(pos, len(self.code) - (pos + 2))

    def patch_s16_at(self, ip: int, rel: int) -> None:
        # ip points to the first byte after the opcode
        if rel < -32768 or rel > 32767:
            raise OverflowError("jump offset out of range")
        if rel < 0:
            rel = (1 << 16) + rel
        self.code[ip] = (rel >> 8) & 0xFF
        self.code[ip + 1] = rel & 0xFF
