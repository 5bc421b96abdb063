from __future__ import annotations


class EmptyListType:
    """The empty list `()`. There is exactly one instance, `Nil`."""

    _instance: EmptyListType | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "Nil"
    def __str__(self): return "()"

    # Equal only to the empty list itself
    def __eq__(self, other):
        return isinstance(other, EmptyListType)

    def __hash__(self):
        return hash(EmptyListType)

    def __iter__(self):
        return iter(())


Nil = EmptyListType()
