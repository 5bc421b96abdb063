import io
import logging

import pytest

from r6.errors import R6Error, R6ParseError, R6UnboundSymbol
from r6.interpreter import Interpreter, evaluate
from r6.types.nil import Nil


def test_eval_empty_source(interp):
    assert interp.eval("") is Nil
    assert interp.eval("  ; nothing here\n") is Nil


def test_eval_single_datum(interp):
    assert interp.eval("(+ 1 2)") == 3


def test_eval_many_data(interp):
    assert interp.eval("1 (+ 1 1) #t") == [1, 2, True]


def test_eval_reads_from_stream(interp):
    assert interp.eval(io.StringIO("(car (list 4 5))")) == 4


def test_top_level_data_are_independent(interp):
    with pytest.raises(R6UnboundSymbol):
        interp.eval("(let ((x 1)) x) x")


def test_parse_errors_propagate(interp):
    with pytest.raises(R6ParseError):
        interp.eval("(+ 1")


def test_minimal_environment(minimal_env):
    interp = Interpreter(minimal_env)
    assert interp.eval("((lambda (x y) (+ x y)) 1 2)") == 3
    with pytest.raises(R6UnboundSymbol):
        interp.eval("(quote a)")


def test_evaluate_one_datum():
    assert evaluate("((lambda (x) x) 9)") == 9


def test_evaluate_rejects_trailing_data():
    with pytest.raises(R6ParseError):
        evaluate("1 2")


def test_evaluate_with_custom_environment(minimal_env):
    assert evaluate("(+ 2 2)", minimal_env) == 4


def test_results_are_logged_at_debug(interp, caplog):
    caplog.set_level(logging.DEBUG, logger="r6.interpreter")
    interp.eval("(list 1 2)")
    assert "(list 1 2) => (1 2)" in caplog.text


def test_deeply_nested_source_reports_an_r6_error(interp):
    with pytest.raises(R6Error):
        interp.eval("(list " * 2000 + "1" + ")" * 2000)
