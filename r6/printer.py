"""External representation of data and runtime values.

    #t #f        booleans
    #\\a          characters
    123          numbers (parsed text or int)
    foo          symbols
    (a b . c)    pairs
    ()           the empty list
    #<procedure> closures
    #<primitive +>
"""

from __future__ import annotations

from io import StringIO
from typing import Any

from r6.compiler.function import Closure
from r6.types.datum import Character, Number
from r6.types.environment import Primitive, Syntax
from r6.types.nil import Nil
from r6.types.pair import Pair, split_list
from r6.types.symbol import Symbol


def kind_of(value: Any) -> str:
    """Name of the variant `value` belongs to, for error messages."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, Number)):
        return "number"
    if isinstance(value, Character):
        return "character"
    if isinstance(value, Symbol):
        return "symbol"
    if isinstance(value, Pair):
        return "pair"
    if value is Nil:
        return "empty list"
    if isinstance(value, Closure):
        return "procedure"
    if isinstance(value, Primitive):
        return "primitive"
    if isinstance(value, Syntax):
        return "syntax"
    return type(value).__name__


class _Text(str):
    """Literal output queued alongside values still to be written."""


def _write(value: Any, out: StringIO) -> None:
    # Work stack, popped from the end; nested pairs never recurse
    pending: list[Any] = [value]
    while pending:
        item = pending.pop()
        if isinstance(item, _Text):
            out.write(item)
        elif isinstance(item, Pair):
            items, tail = split_list(item)
            pending.append(_Text(")"))
            if tail is not Nil:
                pending.append(tail)
                pending.append(_Text(" . "))
            for i in range(len(items) - 1, 0, -1):
                pending.append(items[i])
                pending.append(_Text(" "))
            pending.append(items[0])
            pending.append(_Text("("))
        else:
            _write_atom(item, out)


def _write_atom(value: Any, out: StringIO) -> None:
    if value is True:
        out.write("#t")
    elif value is False:
        out.write("#f")
    elif isinstance(value, (int, Number, Character, Symbol)):
        out.write(str(value))
    elif value is Nil:
        out.write("()")
    elif isinstance(value, Closure):
        name = value.fn.name
        out.write(f"#<procedure {name}>" if name else "#<procedure>")
    elif isinstance(value, Primitive):
        out.write(f"#<primitive {value.name}>")
    elif isinstance(value, Syntax):
        out.write(f"#<syntax {value.value}>")
    else:
        out.write(f"#<{type(value).__name__} {value!r}>")


def to_external(value: Any) -> str:
    with StringIO() as buffer:
        _write(value, buffer)
        return buffer.getvalue()
