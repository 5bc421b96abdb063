import pytest

from r6.errors import R6SyntaxError, R6UnboundSymbol
from r6.types.nil import Nil

from conftest import assert_evaluates_to, run_source


@pytest.mark.parametrize(
    "source,expected",
    [
        # quote
        ("(quote a)", "a"),
        ("(quote (1 . (2 3)))", "(1 2 3)"),
        ("(quote (lambda (x) x))", "(lambda (x) x)"),
        ("(quote #\\a)", "#\\a"),
        # if: only #f is false
        ("(if #t 1 2)", "1"),
        ("(if #f 1 2)", "2"),
        ("(if 0 1 2)", "1"),
        ("(if () 1 2)", "1"),
        ("(if #f 1)", "()"),
        ("(if (< 1 2) (quote yes) (quote no))", "yes"),
        # begin
        ("(begin)", "()"),
        ("(begin 1 2 3)", "3"),
        # let
        ("(let () 5)", "5"),
        ("(let ((x 1) (y 2)) (+ x y))", "3"),
        ("(let ((x 1)) (let ((x 2) (y x)) y))", "1"),
        ("(let ((f (lambda (n) (* n n)))) (f 7))", "49"),
        # lambda bodies are sequences
        ("((lambda (x) 1 2 x) 3)", "3"),
        # evaluation order is left to right, callee first
        ("((if #t + *) 2 3)", "5"),
        ("((if #f + *) 2 3)", "6"),
    ]
)
def test_special_forms(source, expected, global_env):
    assert_evaluates_to(source, expected, global_env)


def test_only_the_taken_branch_runs(global_env):
    assert run_source("(if #t 1 (car ()))", global_env) == 1


def test_empty_begin_is_empty_list(global_env):
    assert run_source("(begin)", global_env) is Nil


def test_let_initializers_see_the_outer_scope(global_env):
    source = "((lambda (x) (let ((x (+ x 1)) (y x)) (list x y))) 10)"
    assert_evaluates_to(source, "(11 10)", global_env)


def test_local_binding_shadows_a_special_form(global_env):
    assert run_source("((lambda (if) (if 1 2)) + )", global_env) == 3


def test_special_forms_need_their_global_binding(minimal_env):
    # `quote` is not bound here, so (quote a) is an ordinary call
    with pytest.raises(R6UnboundSymbol) as info:
        run_source("(quote a)", minimal_env)
    assert info.value.name == "quote"


def test_special_form_keyword_as_value(global_env):
    with pytest.raises(R6SyntaxError):
        run_source("(list if)", global_env)


def test_map_via_self_application(global_env):
    source = """
    (let ((map (lambda (self f xs)
                 (if (null? xs)
                     ()
                     (cons (f (car xs)) (self self f (cdr xs)))))))
      (map map (lambda (x) (* x 10)) (list 1 2 3)))
    """
    assert_evaluates_to(source, "(10 20 30)", global_env)


def test_counter_closures_are_independent(global_env):
    source = """
    (let ((make (lambda (n) (lambda () n))))
      (let ((a (make 1)) (b (make 2)))
        (list (a) (b) (a))))
    """
    assert_evaluates_to(source, "(1 2 1)", global_env)
