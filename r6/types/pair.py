"""Cons cells and list helpers.

A list `(a b c)` is a right-nested chain of `Pair`s terminated by `Nil`; an
improper list `(a . b)` ends in a tail that is not `Nil`.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from r6.types.nil import Nil


class Pair:
    """A cons cell."""

    __slots__ = ("head", "tail")

    def __init__(self, head: Any, tail: Any):
        self.head = head
        self.tail = tail

    def __eq__(self, other: object) -> bool:
        from r6.types.datum import equals
        return isinstance(other, Pair) and equals(self, other)

    __hash__ = None  # mutable container semantics, like list

    def __iter__(self) -> Iterator[Any]:
        """Iterate the elements of a proper list. Raises ValueError on an improper tail."""
        items, tail = split_list(self)
        if tail is not Nil:
            raise ValueError("cannot iterate an improper list")
        return iter(items)

    def __str__(self) -> str:
        from r6 import printer
        return printer.to_external(self)

    def __repr__(self) -> str:
        items, tail = split_list(self)
        inner = ", ".join(repr(x) for x in items)
        if tail is Nil:
            return f"list({inner})"
        return f"Pair({inner}, tail={tail!r})"


def make_list(items: Iterable[Any], tail: Any = Nil) -> Any:
    """Build a (possibly improper) list from `items` ending in `tail`."""
    result = tail
    for item in reversed(list(items)):
        result = Pair(item, result)
    return result


def split_list(value: Any) -> tuple[list[Any], Any]:
    """Return (elements, final tail) of a pair chain. `tail` is Nil for a proper list."""
    items: list[Any] = []
    while isinstance(value, Pair):
        items.append(value.head)
        value = value.tail
    return items, value


def is_proper_list(value: Any) -> bool:
    while isinstance(value, Pair):
        value = value.tail
    return value is Nil
