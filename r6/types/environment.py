"""Compile-time environment for r6.

A CompileEnvironment maps names to bindings and supports nested lexical
scopes via an `outer` link. Each `lambda` opens one new frame; the outermost
frame is the global mapping supplied by the embedder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Union

from r6 import PrimitiveFn
from r6.errors import R6CompileError, R6UnboundSymbol
from r6.types.symbol import Symbol


class Syntax(Enum):
    """Special forms recognized by the compiler."""
    LAMBDA = "lambda"
    QUOTE = "quote"
    IF = "if"
    BEGIN = "begin"
    LET = "let"


@dataclass(frozen=True)
class Variable:
    """A storage location: slot `index` of the frame that binds it."""
    index: int


@dataclass(eq=False)
class Primitive:
    """A built-in procedure. Also the runtime value pushed when it is referenced."""
    name: str
    function: PrimitiveFn = field(repr=False)
    min_args: int = 0
    max_args: int | None = None


Binding = Union[Variable, Syntax, Primitive]


class CompileEnvironment:
    """Chain of frames from innermost to the global frame."""

    __slots__ = ("vars", "outer", "captures")

    def __init__(self, bindings: Mapping[str, Binding] | None = None,
                 outer: Optional[CompileEnvironment] = None):
        self.vars: dict[str, Binding] = dict(bindings or {})
        self.outer: CompileEnvironment | None = outer
        # (depth, index) pairs referenced from this frame's body that live in
        # enclosing frames; depth 0 is the frame the closure is created in.
        self.captures: set[tuple[int, int]] = set()

    @classmethod
    def global_(cls, bindings: Mapping[str | Symbol, Binding]) -> CompileEnvironment:
        """Build the global frame. Only syntax and primitive bindings are allowed here."""
        env = cls()
        for name, binding in bindings.items():
            if not isinstance(binding, (Syntax, Primitive)):
                raise R6CompileError(
                    f"global binding for {name} must be syntax or a primitive, got {binding!r}")
            env.vars[str(name)] = binding
        return env

    def extend(self, names: list[str]) -> CompileEnvironment:
        """Open a new frame binding each name to the next slot."""
        return CompileEnvironment({n: Variable(i) for i, n in enumerate(names)}, self)

    @property
    def is_global(self) -> bool:
        return self.outer is None

    def lookup(self, name: str) -> tuple[int, Binding]:
        """Resolve `name`, returning (frame depth, binding).

        Depth counts the lambda frames between this frame and the one holding
        the binding. Variables found in an enclosing frame are recorded as
        captures on every frame crossed on the way.

        Raises R6UnboundSymbol if the name is not bound anywhere in the chain.
        """
        env: Optional[CompileEnvironment] = self
        crossed: list[CompileEnvironment] = []
        depth = 0
        while env is not None:
            binding = env.vars.get(name)
            if binding is not None:
                if isinstance(binding, Variable):
                    for k, frame in enumerate(crossed):
                        frame.captures.add((depth - k - 1, binding.index))
                return depth, binding
            crossed.append(env)
            env = env.outer
            depth += 1
        raise R6UnboundSymbol(name)
