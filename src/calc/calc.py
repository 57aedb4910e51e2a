"""Main Calc class: evaluates parsed calculator programs."""

import logging
from typing import Any, Callable, Mapping

from calc.calc_ast import CalcASTNode
from calc.calc_error import CalcError
from calc.calc_evaluator import CalcEvaluator
from calc.calc_value import DEFAULT_TOLERANCE, CalcValue, CalcNumber, CalcList, PythonValue


class Calc:
    """
    Calculator language front end.

    Takes program trees built by an upstream parser and evaluates each one
    in a fresh evaluator, so independent programs never see each other's
    variables.  Every run starts from the same initial variables.

    Failures surface as CalcError subclasses carrying the error kind, a
    message naming the offending construct, and the source location when
    the parser recorded one.
    """

    def __init__(
        self,
        initial_variables: Mapping[str, CalcValue | PythonValue] | None = None,
        tolerance: float = DEFAULT_TOLERANCE,
        max_depth: int = 500,
        output: Callable[[str], None] | None = None
    ):
        """
        Initialize Calc.

        Args:
            initial_variables: Bindings applied before the first statement of each program
            tolerance: Tolerance for treating floats as zero, integral or equal
            max_depth: Maximum parse tree nesting depth
            output: Sink receiving one formatted line per print statement (defaults to print)
        """
        self.initial_variables = dict(initial_variables or {})
        self.tolerance = tolerance
        self.max_depth = max_depth
        self.output = output
        self._logger = logging.getLogger("Calc")

    def create_evaluator(self) -> CalcEvaluator:
        """Create an evaluator with this instance's configuration and a fresh environment."""
        return CalcEvaluator(
            initial_variables=self.initial_variables,
            tolerance=self.tolerance,
            max_depth=self.max_depth,
            output=self.output
        )

    def run(self, program: CalcASTNode) -> CalcValue | None:
        """
        Evaluate a program tree.

        Args:
            program: Program tree produced by the parser

        Returns:
            Value of the last statement, or None if the program is empty

        Raises:
            CalcEvalError: If evaluation fails (with detailed context)
        """
        result = self.run_with(self.create_evaluator(), program)
        self._logger.debug("Calc program result: %s", result)
        return result

    def evaluate(self, program: CalcASTNode) -> Any:
        """
        Evaluate a program tree and convert the result to Python types.

        Numbers with an integral value are returned as int.

        Returns:
            float, int, bool, str, complex, (nested) list, or None for an empty program

        Raises:
            CalcEvalError: If evaluation fails (with detailed context)
        """
        result = self.run(program)
        if result is None:
            return None

        return self._to_python(result)

    def evaluate_and_format(self, program: CalcASTNode) -> str:
        """
        Evaluate a program tree and return the result formatted the way print shows it.

        Returns:
            Formatted result, or an empty string for an empty program

        Raises:
            CalcEvalError: If evaluation fails (with detailed context)
        """
        evaluator = self.create_evaluator()
        result = self.run_with(evaluator, program)
        if result is None:
            return ""

        return evaluator.format_result(result)

    def run_with(self, evaluator: CalcEvaluator, program: CalcASTNode) -> CalcValue | None:
        """
        Evaluate a program on an existing evaluator, keeping its variables.

        Raises:
            CalcEvalError: If evaluation fails (with detailed context)
        """
        try:
            return evaluator.evaluate_program(program)

        except CalcError as e:
            self._logger.warning("Calc program failed with %s: %s", e.kind, e.message, exc_info=True)
            raise

    def _to_python(self, value: CalcValue) -> Any:
        if isinstance(value, CalcNumber) and value.value.is_integer():
            return int(value.value)

        if isinstance(value, CalcList):
            return [self._to_python(element) for element in value.elements]

        return value.to_python()
