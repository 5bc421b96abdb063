import pytest

from r6.errors import R6UnboundSymbol
from r6.types import (CompileEnvironment, EmptyListType, Nil, Pair, Primitive, Symbol, Syntax, Variable,
                      equals, is_proper_list, make_list, split_list, to_runtime)
from r6.types.datum import Character, Number


def test_nil_is_a_singleton():
    assert EmptyListType() is Nil
    assert list(Nil) == []
    assert Nil != 0 and Nil != False  # noqa: E712


def test_symbols_compare_by_name():
    assert Symbol("abc") == Symbol("abc")
    assert Symbol("abc") != Symbol("abd")
    assert len({Symbol("x"), Symbol("x")}) == 1


def test_list_helpers():
    lst = make_list([1, 2], 3)
    assert split_list(lst) == ([1, 2], 3)
    assert not is_proper_list(lst)
    assert is_proper_list(make_list([1, 2]))
    assert is_proper_list(Nil)
    with pytest.raises(ValueError):
        list(lst)


def test_pairs_are_unhashable():
    with pytest.raises(TypeError):
        hash(Pair(1, Nil))


@pytest.mark.parametrize(
    "a,b,expected",
    [
        (True, 1, False),
        (False, 0, False),
        (Number("1"), Number("1"), True),
        (Character("a"), Character("a"), True),
        (Character("a"), Symbol("a"), False),
        (make_list([1, make_list([2])]), make_list([1, make_list([2])]), True),
        (Pair(1, 2), Pair(1, Nil), False),
    ]
)
def test_structural_equality(a, b, expected):
    assert equals(a, b) is expected
    assert equals(b, a) is expected


def test_to_runtime_converts_numbers():
    value = to_runtime(make_list([Number("12"), Symbol("x")], Number("3")))
    assert split_list(value) == ([12, Symbol("x")], 3)


def test_to_runtime_rejects_non_data():
    with pytest.raises(TypeError):
        to_runtime(object())


def test_compile_environment_lookup():
    glob = CompileEnvironment.global_({"lambda": Syntax.LAMBDA})
    outer = glob.extend(["a", "b"])
    inner = outer.extend(["c"])
    assert inner.lookup("c") == (0, Variable(0))
    assert inner.lookup("b") == (1, Variable(1))
    assert inner.lookup("lambda") == (2, Syntax.LAMBDA)
    assert inner.captures == {(0, 1)}
    assert outer.captures == set()
    assert glob.is_global and not inner.is_global
    with pytest.raises(R6UnboundSymbol):
        inner.lookup("zzz")


def test_primitive_identity():
    p = Primitive("id", lambda args: args[0], 1, 1)
    assert p == p
    assert p != Primitive("id", lambda args: args[0], 1, 1)


def test_pair_str_is_external_form():
    assert str(make_list([5, 5])) == "(5 5)"
    assert str(Pair(Symbol("a"), Character("b"))) == "(a . #\\b)"


def _nested(depth, innermost):
    value = innermost
    for _ in range(depth):
        value = Pair(value, Nil)
    return value


def test_equality_of_deeply_nested_data():
    assert equals(_nested(5000, Nil), _nested(5000, Nil))
    assert not equals(_nested(5000, Nil), _nested(5000, True))
