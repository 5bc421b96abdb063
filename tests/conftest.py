import pytest

from r6.builtins import add, default_environment
from r6.compiler.compiler import compile_module
from r6.compiler.vm import VM
from r6.interpreter import Interpreter
from r6.reader.parser import read
from r6.types.datum import equals, to_runtime
from r6.types.environment import Primitive, Syntax

# Most tests run against the full default environment. The `minimal_env`
# fixture reproduces the smallest useful embedding: only `lambda` and an
# addition primitive are bound.


@pytest.fixture
def minimal_env():
    return {
        "lambda": Syntax.LAMBDA,
        "+": Primitive("+", add),
    }


@pytest.fixture
def global_env():
    return default_environment()


@pytest.fixture
def interp():
    return Interpreter()


def run_source(source, env):
    """Parse one datum, compile it against `env` and run it on a fresh VM."""
    return VM().run(compile_module(read(source), env))


def assert_evaluates_to(source, expected_source, env):
    result = run_source(source, env)
    expected = to_runtime(read(expected_source))
    assert equals(result, expected) and equals(expected, result), \
        f"expected {expected_source!r} but got {result!r}"
