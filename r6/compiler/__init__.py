from __future__ import annotations

# Public surface for the compiler package
from .opcodes import Opcode
from .chunk import Chunk
from .function import Function, Closure, Frame
from .compiler import compile_module, compile_expr
from .vm import VM, run_chunk

__all__ = [
    "Opcode",
    "Chunk",
    "Function",
    "Closure",
    "Frame",
    "compile_module",
    "compile_expr",
    "VM",
    "run_chunk",
]
