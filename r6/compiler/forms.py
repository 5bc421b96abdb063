"""Compilers for the special forms.

Each handler receives the form's tail (everything after the keyword), the
chunk being emitted into, the compile environment in effect, and the
expression compiler to recurse with. FORMS maps each Syntax binding to its
handler; the compiler consults it before treating a list as a call.
"""

from __future__ import annotations

from typing import Any, Callable

from r6 import Datum, printer
from r6.errors import R6CompileError, R6SyntaxError
from r6.types.datum import to_runtime
from r6.types.environment import CompileEnvironment, Syntax
from r6.types.nil import Nil
from r6.types.pair import split_list
from r6.types.symbol import Symbol

from .chunk import Chunk
from .function import Function
from .opcodes import Opcode

CompileFn = Callable[[Datum, Chunk, CompileEnvironment], None]

# CALL carries a u8 argument count
MAX_ARGS = 0xFF


def _form_items(tail: Datum, keyword: str) -> list[Datum]:
    items, end = split_list(tail)
    if end is not Nil:
        raise R6SyntaxError(f"Ill-formed {keyword}: improper list")
    return items


def emit_value(chunk: Chunk, value: Any) -> None:
    """Push a runtime value, using the dedicated opcodes for #t, #f and ()."""
    if value is True:
        chunk.emit_op(Opcode.PUSH_TRUE)
    elif value is False:
        chunk.emit_op(Opcode.PUSH_FALSE)
    elif value is Nil:
        chunk.emit_op(Opcode.PUSH_NIL)
    else:
        chunk.emit_const(value)


def compile_sequence(body: list[Datum], chunk: Chunk, env: CompileEnvironment, compile_fn: CompileFn) -> None:
    """All but the last expression are evaluated for effect; the last is the value."""
    if not body:
        chunk.emit_op(Opcode.PUSH_NIL)
        return
    for i, expr in enumerate(body):
        compile_fn(expr, chunk, env)
        if i < len(body) - 1:
            chunk.emit_op(Opcode.POP)


def parse_formals(formals: Datum) -> tuple[list[str], bool]:
    """Return (names, rest) for a proper list, improper list, or lone symbol of formals."""
    params, rest_tail = split_list(formals)
    names: list[str] = []
    for p in params:
        if not isinstance(p, Symbol):
            raise R6SyntaxError(f"lambda formal must be a symbol, got {printer.to_external(p)}")
        names.append(p.id)
    rest = rest_tail is not Nil
    if rest:
        if not isinstance(rest_tail, Symbol):
            raise R6SyntaxError(f"lambda rest formal must be a symbol, got {printer.to_external(rest_tail)}")
        names.append(rest_tail.id)
    seen: set[str] = set()
    for n in names:
        if n in seen:
            raise R6SyntaxError(f"Duplicate lambda formal: {n}")
        seen.add(n)
    return names, rest


def compile_function(names: list[str], rest: bool, body: list[Datum], env: CompileEnvironment,
                     compile_fn: CompileFn, name: str | None = None) -> Function:
    inner = env.extend(names)
    fn_chunk = Chunk()
    compile_sequence(body, fn_chunk, inner, compile_fn)
    fn_chunk.emit_op(Opcode.RETURN)
    arity = len(names) - (1 if rest else 0)
    return Function(chunk=fn_chunk, arity=arity, rest=rest, captures=sorted(inner.captures), name=name)


def emit_closure(chunk: Chunk, fn: Function) -> None:
    fidx = chunk.add_const(fn)
    chunk.emit_op(Opcode.MAKE_CLOSURE)
    chunk.emit_u16(fidx)


def lambda_form(tail: Datum, chunk: Chunk, env: CompileEnvironment, compile_fn: CompileFn) -> None:
    # (lambda formals body...)
    items = _form_items(tail, "lambda")
    if len(items) < 2:
        raise R6SyntaxError("lambda requires a formal parameter list and at least one body expression")
    names, rest = parse_formals(items[0])
    emit_closure(chunk, compile_function(names, rest, items[1:], env, compile_fn))


def quote_form(tail: Datum, chunk: Chunk, env: CompileEnvironment, compile_fn: CompileFn) -> None:
    items = _form_items(tail, "quote")
    if len(items) != 1:
        raise R6SyntaxError("quote takes exactly one argument")
    emit_value(chunk, to_runtime(items[0]))


def if_form(tail: Datum, chunk: Chunk, env: CompileEnvironment, compile_fn: CompileFn) -> None:
    # (if test consequent [alternative]); only #f is false
    items = _form_items(tail, "if")
    if len(items) not in (2, 3):
        raise R6SyntaxError("if requires 2 or 3 arguments")
    compile_fn(items[0], chunk, env)
    jfalse = chunk.emit_jump(Opcode.JUMP_IF_FALSE)
    compile_fn(items[1], chunk, env)
    jend = chunk.emit_jump(Opcode.JUMP)
    chunk.patch_jump(jfalse)
    if len(items) == 3:
        compile_fn(items[2], chunk, env)
    else:
        chunk.emit_op(Opcode.PUSH_NIL)
    chunk.patch_jump(jend)


def begin_form(tail: Datum, chunk: Chunk, env: CompileEnvironment, compile_fn: CompileFn) -> None:
    compile_sequence(_form_items(tail, "begin"), chunk, env, compile_fn)


def let_form(tail: Datum, chunk: Chunk, env: CompileEnvironment, compile_fn: CompileFn) -> None:
    # (let ((name init) ...) body...) runs as ((lambda (name ...) body...) init ...)
    items = _form_items(tail, "let")
    if len(items) < 2:
        raise R6SyntaxError("let requires a bindings list and at least one body expression")
    names: list[str] = []
    inits: list[Datum] = []
    for b in _form_items(items[0], "let bindings"):
        parts, end = split_list(b)
        if end is not Nil or len(parts) != 2 or not isinstance(parts[0], Symbol):
            raise R6SyntaxError(f"let binding must be (name value), got {printer.to_external(b)}")
        if parts[0].id in names:
            raise R6SyntaxError(f"Duplicate let binding: {parts[0].id}")
        names.append(parts[0].id)
        inits.append(parts[1])
    if len(inits) > MAX_ARGS:
        raise R6CompileError(f"let has too many bindings ({len(inits)} > {MAX_ARGS})")
    emit_closure(chunk, compile_function(names, False, items[1:], env, compile_fn, name="let"))
    for init in inits:
        compile_fn(init, chunk, env)
    chunk.emit_op(Opcode.CALL)
    chunk.emit_u8(len(inits))


FORMS: dict[Syntax, Callable[[Datum, Chunk, CompileEnvironment, CompileFn], None]] = {
    Syntax.LAMBDA: lambda_form,
    Syntax.QUOTE: quote_form,
    Syntax.IF: if_form,
    Syntax.BEGIN: begin_form,
    Syntax.LET: let_form,
}
