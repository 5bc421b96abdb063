from __future__ import annotations

import logging
from typing import Mapping, Union

from r6 import Datum
from r6.config import disasm_enabled
from r6.errors import R6CompileError, R6SyntaxError
from r6.types.datum import Character, Number
from r6.types.environment import Binding, CompileEnvironment, Primitive, Syntax, Variable
from r6.types.nil import Nil
from r6.types.pair import Pair, split_list
from r6.types.symbol import Symbol

from .chunk import Chunk
from .disasm import disassemble_chunk
from .forms import FORMS, MAX_ARGS, emit_value
from .opcodes import Opcode

logger = logging.getLogger(__name__)

# LOAD_VAR carries a u8 frame depth
MAX_DEPTH = 0xFF

EnvironmentLike = Union[CompileEnvironment, Mapping[str, Binding]]


def compile_module(datum: Datum, environment: EnvironmentLike) -> Chunk:
    """Compile a single top-level datum into a chunk that leaves its value for HALT.

    `environment` is either a CompileEnvironment or the embedder's global
    mapping of names to Syntax/Primitive bindings.
    """
    env = environment if isinstance(environment, CompileEnvironment) else CompileEnvironment.global_(environment)
    chunk = Chunk()
    try:
        compile_expr(datum, chunk, env)
    except RecursionError:
        raise R6CompileError("Expression nested too deeply to compile") from None
    chunk.emit_op(Opcode.HALT)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("compiled %d bytes, %d constants", len(chunk.code), len(chunk.constants))
        if disasm_enabled():
            logger.debug("disassembly:\n%s", disassemble_chunk(chunk))
    return chunk


def compile_expr(expr: Datum, chunk: Chunk, env: CompileEnvironment) -> None:
    # Self-evaluating atoms
    if isinstance(expr, bool):
        emit_value(chunk, expr)
        return
    if isinstance(expr, Number):
        chunk.emit_const(int(expr.text))
        return
    if isinstance(expr, Character):
        chunk.emit_const(expr)
        return
    if expr is Nil:
        chunk.emit_op(Opcode.PUSH_NIL)
        return
    if isinstance(expr, Symbol):
        compile_symbol(expr, chunk, env)
        return
    if isinstance(expr, Pair):
        head = expr.head
        if isinstance(head, Symbol):
            _, binding = env.lookup(head.id)
            if isinstance(binding, Syntax):
                FORMS[binding](expr.tail, chunk, env, compile_expr)
                return
        compile_call(expr, chunk, env)
        return
    raise R6CompileError(f"Cannot compile {expr!r}")


def compile_symbol(sym: Symbol, chunk: Chunk, env: CompileEnvironment) -> None:
    depth, binding = env.lookup(sym.id)
    if isinstance(binding, Variable):
        if depth > MAX_DEPTH:
            raise R6CompileError(f"{sym} is nested too deeply ({depth} > {MAX_DEPTH} frames)")
        chunk.emit_op(Opcode.LOAD_VAR)
        chunk.emit_u8(depth)
        chunk.emit_u16(binding.index)
    elif isinstance(binding, Syntax):
        raise R6SyntaxError(f"Syntax keyword {sym} cannot be used as a value")
    elif isinstance(binding, Primitive):
        chunk.emit_const(binding)
    else:
        raise R6CompileError(f"Unknown binding for {sym}: {binding!r}")


def compile_call(expr: Pair, chunk: Chunk, env: CompileEnvironment) -> None:
    # Callee first, then arguments left-to-right; the VM dispatches on the callee's kind
    args, end = split_list(expr.tail)
    if end is not Nil:
        raise R6SyntaxError("Ill-formed call: improper argument list")
    if len(args) > MAX_ARGS:
        raise R6CompileError(f"Too many arguments in call ({len(args)} > {MAX_ARGS})")
    compile_expr(expr.head, chunk, env)
    for arg in args:
        compile_expr(arg, chunk, env)
    chunk.emit_op(Opcode.CALL)
    chunk.emit_u8(len(args))
