from __future__ import annotations

import logging
from typing import Mapping

from r6 import RuntimeValue, printer
from r6.builtins import default_environment
from r6.compiler.compiler import compile_module
from r6.compiler.vm import VM
from r6.reader.lexer import Source
from r6.reader.parser import Parser, read
from r6.types.environment import Binding, CompileEnvironment
from r6.types.nil import Nil

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Reads, compiles and runs r6 code against one global environment.
    The global environment holds syntax and primitive bindings only, so every
    top-level datum is evaluated independently of the others.
    """

    def __init__(self, environment: Mapping[str, Binding] | None = None):
        bindings = default_environment() if environment is None else environment
        self.env: CompileEnvironment = CompileEnvironment.global_(bindings)
        self.vm = VM()

    def eval_datum(self, datum) -> RuntimeValue:
        chunk = compile_module(datum, self.env)
        return self.vm.run(chunk)

    def eval(self, code: Source) -> RuntimeValue:
        """Evaluate every datum in `code` in order.

        Returns Nil when there is no datum, the value when there is one, and a
        list of values otherwise.
        """
        results: list[RuntimeValue] = []
        for datum in Parser(code).parse_all():
            value = self.eval_datum(datum)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("%s => %s", printer.to_external(datum), printer.to_external(value))
            results.append(value)
        if not results:
            return Nil
        if len(results) == 1:
            return results[0]
        return results


def evaluate(source: Source, environment: Mapping[str, Binding] | None = None) -> RuntimeValue:
    """Read exactly one datum from `source`, compile it and run it."""
    bindings = default_environment() if environment is None else environment
    return VM().run(compile_module(read(source), bindings))
