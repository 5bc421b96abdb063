import pytest

from r6.builtins import PRIMITIVES, default_environment, register
from r6.errors import R6ArityError, R6TypeError
from r6.types.environment import Primitive, Syntax

from conftest import assert_evaluates_to, run_source


@pytest.mark.parametrize(
    "source,expected",
    [
        # arithmetic
        ("(+ )", "0"),
        ("(+ 1 2 3)", "6"),
        ("(- 0 (- 5))", "5"),
        ("(+ (- 5) 5)", "0"),
        ("(- 10 3 2)", "5"),
        ("(*)", "1"),
        ("(* 2 3 4)", "24"),
        ("(* 99999999999 99999999999)", "9999999999800000000001"),
        # comparison
        ("(= 1 1 1)", "#t"),
        ("(= 1 2)", "#f"),
        ("(< 1 2 3)", "#t"),
        ("(< 1 3 2)", "#f"),
        ("(> 3 2 1)", "#t"),
        ("(> 1)", "#t"),
        # pairs and lists
        ("(cons 1 2)", "(1 . 2)"),
        ("(car (cons 1 2))", "1"),
        ("(cdr (cons 1 2))", "2"),
        ("(list 1 2 3)", "(1 2 3)"),
        ("(list)", "()"),
        # predicates
        ("(null? (list))", "#t"),
        ("(null? (list 1))", "#f"),
        ("(pair? (cons 1 2))", "#t"),
        ("(pair? ())", "#f"),
        ("(not #f)", "#t"),
        ("(not 0)", "#f"),
        ("(not ())", "#f"),
        ("(eq? 1 1)", "#t"),
        ("(eq? (quote a) (quote a))", "#t"),
        ("(eq? (list 1) (list 1))", "#f"),
        ("(eq? #t 1)", "#f"),
        ("(equal? (list 1 (list 2)) (quote (1 (2))))", "#t"),
        ("(equal? (cons 1 2) (cons 1 3))", "#f"),
    ]
)
def test_primitives(source, expected, global_env):
    assert_evaluates_to(source, expected, global_env)


@pytest.mark.parametrize(
    "source",
    [
        "(+ 1 #t)",
        "(- (quote a))",
        "(< 1 #\\a)",
        "(car ())",
        "(cdr 5)",
    ]
)
def test_primitive_type_errors(source, global_env):
    with pytest.raises(R6TypeError):
        run_source(source, global_env)


@pytest.mark.parametrize(
    "source,message",
    [
        ("(- )", "- expects at least 1 argument"),
        ("(car)", "car expects 1 argument"),
        ("(cons 1)", "cons expects 2 argument"),
        ("(not 1 2)", "not expects 1 argument"),
    ]
)
def test_primitive_arity_errors(source, message, global_env):
    with pytest.raises(R6ArityError, match=message):
        run_source(source, global_env)


def test_register_adds_forms_and_primitives():
    env = {}
    register(env)
    assert env["lambda"] is Syntax.LAMBDA
    assert env["let"] is Syntax.LET
    assert all(isinstance(env[p.name], Primitive) for p in PRIMITIVES)


def test_default_environment_is_fresh():
    a = default_environment()
    a.pop("car")
    assert "car" in default_environment()

