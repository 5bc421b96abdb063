from r6.types.symbol import Symbol
from r6.types.nil import Nil, EmptyListType
from r6.types.pair import Pair, make_list, split_list, is_proper_list
from r6.types.datum import Character, Number, equals, to_runtime
from r6.types.environment import (
    Binding,
    CompileEnvironment,
    Primitive,
    Syntax,
    Variable,
)

__all__ = [
    "Symbol",
    "Nil",
    "EmptyListType",
    "Pair",
    "make_list",
    "split_list",
    "is_proper_list",
    "Character",
    "Number",
    "equals",
    "to_runtime",
    "Binding",
    "CompileEnvironment",
    "Primitive",
    "Syntax",
    "Variable",
]
