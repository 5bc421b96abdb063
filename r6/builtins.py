"""Built-in procedures for the r6 runtime.

This module defines integer arithmetic, comparison, pair/list operations and
predicates, plus the registration helpers that populate a global environment
with them and with the special forms.
"""
from __future__ import annotations

from typing import Any, MutableMapping

from r6 import RuntimeValue, printer
from r6.errors import R6TypeError
from r6.types.datum import equals
from r6.types.environment import Binding, Primitive, Syntax
from r6.types.nil import Nil
from r6.types.pair import Pair, make_list


def _check_integers(name: str, args: list[RuntimeValue]) -> None:
    for a in args:
        # bool is an int subclass in Python but not a number here
        if isinstance(a, bool) or not isinstance(a, int):
            raise R6TypeError(f"{name} expects numbers, got {printer.kind_of(a)}: {printer.to_external(a)}")


def _check_pair(name: str, value: RuntimeValue) -> Pair:
    if not isinstance(value, Pair):
        raise R6TypeError(f"{name} expects a pair, got {printer.kind_of(value)}: {printer.to_external(value)}")
    return value


# -------------------------------
# Arithmetic
# -------------------------------
def add(args: list[RuntimeValue]) -> int:
    """(+ n ...) - sum of the arguments; (+) is 0."""
    _check_integers("+", args)
    return sum(args)


def sub(args: list[RuntimeValue]) -> int:
    """(- n) negates; (- n m ...) subtracts the rest from the first."""
    _check_integers("-", args)
    if len(args) == 1:
        return -args[0]
    result = args[0]
    for x in args[1:]:
        result -= x
    return result


def mul(args: list[RuntimeValue]) -> int:
    _check_integers("*", args)
    result = 1
    for x in args:
        result *= x
    return result


# -------------------------------
# Comparison
# -------------------------------
def _chain(name: str, args: list[RuntimeValue], test) -> bool:
    _check_integers(name, args)
    return all(test(a, b) for a, b in zip(args, args[1:]))


def num_eq(args: list[RuntimeValue]) -> bool:
    return _chain("=", args, lambda a, b: a == b)


def lt(args: list[RuntimeValue]) -> bool:
    return _chain("<", args, lambda a, b: a < b)


def gt(args: list[RuntimeValue]) -> bool:
    return _chain(">", args, lambda a, b: a > b)


# -------------------------------
# Pairs and lists
# -------------------------------
def cons(args: list[RuntimeValue]) -> Pair:
    return Pair(args[0], args[1])


def car(args: list[RuntimeValue]) -> RuntimeValue:
    return _check_pair("car", args[0]).head


def cdr(args: list[RuntimeValue]) -> RuntimeValue:
    return _check_pair("cdr", args[0]).tail


def list_builtin(args: list[RuntimeValue]) -> RuntimeValue:
    return make_list(args)


# -------------------------------
# Predicates
# -------------------------------
def is_null(args: list[RuntimeValue]) -> bool:
    return args[0] is Nil


def is_pair(args: list[RuntimeValue]) -> bool:
    return isinstance(args[0], Pair)


def logical_not(args: list[RuntimeValue]) -> bool:
    return args[0] is False


def is_eqv(a: Any, b: Any) -> bool:
    """Identity for compound values; value equality for atoms of the same variant."""
    if a is b:
        return True
    if isinstance(a, Pair) or isinstance(b, Pair):
        return False
    return type(a) is type(b) and a == b


def eq(args: list[RuntimeValue]) -> bool:
    return is_eqv(args[0], args[1])


def equal(args: list[RuntimeValue]) -> bool:
    return equals(args[0], args[1])


PRIMITIVES: list[Primitive] = [
    Primitive("+", add),
    Primitive("-", sub, 1),
    Primitive("*", mul),
    Primitive("=", num_eq, 1),
    Primitive("<", lt, 1),
    Primitive(">", gt, 1),
    Primitive("cons", cons, 2, 2),
    Primitive("car", car, 1, 1),
    Primitive("cdr", cdr, 1, 1),
    Primitive("list", list_builtin),
    Primitive("null?", is_null, 1, 1),
    Primitive("pair?", is_pair, 1, 1),
    Primitive("not", logical_not, 1, 1),
    Primitive("eq?", eq, 2, 2),
    Primitive("equal?", equal, 2, 2),
]


def register(env: MutableMapping[str, Binding]) -> None:
    """Register the special forms and all builtin primitives into the given global mapping."""
    env.update({form.value: form for form in Syntax})
    env.update({p.name: p for p in PRIMITIVES})


def default_environment() -> dict[str, Binding]:
    env: dict[str, Binding] = {}
    register(env)
    return env
