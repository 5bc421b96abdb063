"""Atomic datum types and structural equality.

Booleans are plain Python `bool`s. Characters and numbers keep their source
text at this layer; numbers become `int` once compiled.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from r6.types.nil import Nil
from r6.types.pair import Pair
from r6.types.symbol import Symbol


@dataclass(frozen=True)
class Character:
    text: str

    def __str__(self):
        return f"#\\{self.text}"


@dataclass(frozen=True)
class Number:
    text: str

    def __str__(self):
        return self.text


def equals(a: Any, b: Any) -> bool:
    """Structural equality: same variant, recursively equal contents.

    `True` and `1` are different variants and never compare equal. Pairs are
    walked with an explicit work list, so neither long nor deeply nested data
    exhaust the recursion limit.
    """
    pending = [(a, b)]
    while pending:
        a, b = pending.pop()
        if a is b:
            continue
        if type(a) is not type(b):
            return False
        if isinstance(a, Pair):
            pending.append((a.tail, b.tail))
            pending.append((a.head, b.head))
        elif a != b:
            return False
    return True


def to_runtime(datum: Any) -> Any:
    """Convert a parsed datum into the runtime value it denotes.

    Only numbers change representation (`Number` text -> `int`); pairs are
    rebuilt so the parsed tree is never shared with running code.
    """
    if isinstance(datum, Number):
        return int(datum.text)
    if isinstance(datum, Pair):
        items: list[Any] = []
        while isinstance(datum, Pair):
            items.append(to_runtime(datum.head))
            datum = datum.tail
        result = to_runtime(datum)
        for item in reversed(items):
            result = Pair(item, result)
        return result
    if isinstance(datum, (bool, Character, Symbol)) or datum is Nil:
        return datum
    raise TypeError(f"not a datum: {datum!r}")
