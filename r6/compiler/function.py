from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class Function:
    """A compiled lambda body.

    `captures` lists the (depth, slot) locations in enclosing frames that the
    body reads; depth 0 is the frame the closure is created in.
    """
    chunk: Any  # Chunk
    arity: int = 0
    rest: bool = False
    captures: List[tuple[int, int]] = field(default_factory=list)
    name: str | None = None

    @property
    def frame_size(self) -> int:
        return self.arity + (1 if self.rest else 0)


@dataclass(eq=False)
class Frame:
    """One level of a runtime lexical environment: the slots bound by one call."""
    slots: List[Any]
    parent: Optional[Frame] = None


@dataclass(eq=False)
class Closure:
    fn: Function
    frame: Optional[Frame]
