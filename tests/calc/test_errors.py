"""Tests for error messages, error kinds and source locations."""

import logging

import pytest

from calc import (
    CalcError, CalcEvalError, CalcArityError, CalcDivisionByZeroError, CalcTypeError, CalcUnknownFunctionError,
    CalcUnknownIdentifierError, CalcUnknownConstantError, CalcUndefinedVariableError, CalcDuplicateDefinitionError,
    CalcModuloByZeroError, CalcComplexExponentError, CalcComplexPowerError, CalcFactorialError, CalcLogBaseError,
    CalcUnsupportedOperatorError, CalcUnsupportedAtomError, CalcImplicitMultiplicationError, CalcEmptyResultError,
    CalcUnexpectedTokenError, CalcDepthError, CalcNumberLiteral, CalcIdentifier, CalcArith, CalcTerm,
    ErrorMessageBuilder
)


class TestErrorFormatting:
    """Test the detailed error message layout."""

    def test_message_only(self):
        """Test an error with just a message."""
        error = CalcEvalError("Something failed")
        assert str(error) == "Error: Something failed"
        assert error.message == "Something failed"

    def test_all_details(self):
        """Test the order of every detail line."""
        error = CalcEvalError(
            message="Bad call",
            context="Inside sum",
            expected="number",
            received="string",
            suggestion="Pass numbers",
            example="sum(1, 2)",
            line=2,
            column=7
        )
        assert str(error).split("\n") == [
            "Error: Bad call",
            "Location: line 2, column 7",
            "Received: string",
            "Expected: number",
            "Context: Inside sum",
            "Suggestion: Pass numbers",
            "Example: sum(1, 2)",
        ]

    def test_line_without_column(self):
        """Test a location that only has a line."""
        error = CalcEvalError("Bad", line=4)
        assert "Location: line 4" in str(error)
        assert "column" not in str(error)

    def test_set_location_refreshes_message(self):
        """Test that adding a location updates str()."""
        error = CalcEvalError("Bad")
        error.set_location(9, 1)
        assert str(error) == "Error: Bad\nLocation: line 9, column 1"


class TestErrorKinds:
    """Test the error taxonomy."""

    @pytest.mark.parametrize("error_class,kind", [
        (CalcError, "CalcError"),
        (CalcEvalError, "EvalError"),
        (CalcUndefinedVariableError, "UndefinedVariable"),
        (CalcDuplicateDefinitionError, "DuplicateDefinition"),
        (CalcUnknownIdentifierError, "UnknownIdentifier"),
        (CalcUnknownConstantError, "UnknownConstant"),
        (CalcUnknownFunctionError, "UnknownFunction"),
        (CalcArityError, "ArityMismatch"),
        (CalcTypeError, "TypeMismatch"),
        (CalcDivisionByZeroError, "DivisionByZero"),
        (CalcModuloByZeroError, "ModuloByZero"),
        (CalcComplexExponentError, "ComplexExponentUnsupported"),
        (CalcComplexPowerError, "NonIntegerComplexPowerUnsupported"),
        (CalcFactorialError, "InvalidFactorialArgument"),
        (CalcLogBaseError, "InvalidLogBase"),
        (CalcUnsupportedOperatorError, "UnsupportedOperator"),
        (CalcUnsupportedAtomError, "UnsupportedAtom"),
        (CalcImplicitMultiplicationError, "UnsupportedImplicitMultiplication"),
        (CalcEmptyResultError, "EmptyExpressionResult"),
        (CalcUnexpectedTokenError, "UnexpectedToken"),
        (CalcDepthError, "MaxDepthExceeded"),
    ])
    def test_kind(self, error_class, kind):
        """Test that every error class carries a stable kind."""
        assert error_class.kind == kind
        assert error_class("x").kind == kind

    def test_all_evaluation_errors_share_a_base(self):
        """Test that callers can catch every failure with one class."""
        for error_class in (CalcTypeError, CalcDepthError, CalcUnknownConstantError):
            assert issubclass(error_class, CalcEvalError)
            assert issubclass(error_class, CalcError)


class TestErrorLocations:
    """Test that errors report where they happened."""

    def test_location_from_failing_node(self, calc, helpers):
        """Test that the failing node's location is reported."""
        h = helpers
        tree = CalcTerm(h.num(1), '/', CalcNumberLiteral("0", line=3, column=5), line=3, column=1)
        with pytest.raises(CalcDivisionByZeroError) as exc_info:
            calc.run(h.single(tree))

        # The division node is the innermost located node on the failing path
        assert exc_info.value.line == 3
        assert exc_info.value.column == 1
        assert "Location: line 3, column 1" in str(exc_info.value)

    def test_innermost_location_wins(self, calc, helpers):
        """Test that an inner location is not overwritten by outer nodes."""
        h = helpers
        inner = CalcIdentifier("missing", line=2, column=8)
        tree = CalcArith(h.num(1), '+', inner, line=2, column=1)
        with pytest.raises(CalcUnknownIdentifierError) as exc_info:
            calc.run(h.single(tree))

        assert (exc_info.value.line, exc_info.value.column) == (2, 8)

    def test_location_falls_back_to_outer_node(self, calc, helpers):
        """Test that an unlocated failing node takes its parent's location."""
        h = helpers
        tree = CalcArith(h.num(1), '+', h.ident("missing"), line=5, column=3)
        with pytest.raises(CalcUnknownIdentifierError) as exc_info:
            calc.run(h.single(tree))

        assert "Location: line 5, column 3" in str(exc_info.value)

    def test_no_location(self, calc, helpers):
        """Test that errors from unlocated trees have no location line."""
        h = helpers
        with pytest.raises(CalcUnknownIdentifierError) as exc_info:
            calc.run(h.single(h.ident("missing")))

        assert exc_info.value.line is None
        assert "Location" not in str(exc_info.value)


class TestErrorMessageBuilder:
    """Test suggestion and example helpers."""

    def test_suggest_similar_names(self):
        """Test close-name matching."""
        names = ['sqrt', 'sum', 'sin', 'floor']
        assert ErrorMessageBuilder.suggest_similar_names('sqr', names)[0] == 'sqrt'
        assert not ErrorMessageBuilder.suggest_similar_names('zzzz', names)
        assert not ErrorMessageBuilder.suggest_similar_names('sqr', [])

    def test_format_suggestion(self):
        """Test the 'did you mean' text."""
        assert ErrorMessageBuilder.format_suggestion('flor', ['floor', 'ceil']) == "Did you mean 'floor'?"
        assert ErrorMessageBuilder.format_suggestion('zzzz', ['floor']) is None

    def test_function_examples(self):
        """Test usage examples for builtins and unknown names."""
        assert ErrorMessageBuilder.create_function_example('log') == "log(8, 2) → 3"
        assert ErrorMessageBuilder.create_function_example('mystery') == "mystery(...)"

    def test_unknown_function_lists_builtins(self, calc, helpers):
        """Test that unknown function errors name what is available."""
        h = helpers
        with pytest.raises(CalcUnknownFunctionError) as exc_info:
            calc.run(h.single(h.call("sqr", h.num(4), h.num(1))))

        message = str(exc_info.value)
        assert "Did you mean 'sqrt'" in message
        assert "Available functions: abs, ceil, cos" in message
        assert "Received: 2 argument(s)" in message


class TestErrorLogging:
    """Test that failures are logged before they propagate."""

    def test_failure_is_logged(self, calc, helpers, caplog):
        """Test the warning record for a failed program."""
        h = helpers
        with caplog.at_level(logging.WARNING, logger="Calc"):
            with pytest.raises(CalcModuloByZeroError):
                calc.run(h.single(h.mod(h.num(1), h.num(0))))

        assert any(
            record.levelno == logging.WARNING and "ModuloByZero" in record.getMessage()
            for record in caplog.records
        )

    def test_statements_are_logged_at_debug(self, calc, helpers, caplog):
        """Test debug records for definitions and print output."""
        h = helpers
        with caplog.at_level(logging.DEBUG, logger="CalcEvaluator"):
            calc.run(h.program(h.define('x', h.num(1)), h.print_(h.ident('x'))))

        messages = [record.getMessage() for record in caplog.records]
        assert "Defined variable 'x'" in messages
        assert "print: 1" in messages
