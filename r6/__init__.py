# Core type aliases for r6's data model.
# Parsed data and runtime values share most of their representation:
#
#   booleans   -> bool
#   characters -> r6.types.datum.Character
#   numbers    -> r6.types.datum.Number (parsed text) / int (runtime)
#   symbols    -> r6.types.symbol.Symbol
#   pairs      -> r6.types.pair.Pair
#   ()         -> r6.types.nil.Nil
#
# Naming guidance:
# - Datum:        Use in reader/compiler code to denote parsed forms (code-as-data).
# - RuntimeValue: Use in VM/builtin code to denote evaluated values.

from typing import Any, Callable

Datum = Any
RuntimeValue = Any

# Primitive implementation: receives the evaluated argument list
PrimitiveFn = Callable[[list], RuntimeValue]

__version__ = "0.1.0"
