"""Exception classes for Calc evaluation with detailed context."""

from typing import Optional
import difflib


class CalcError(Exception):
    """Base exception for Calc errors with detailed context information."""

    kind = "CalcError"

    def __init__(
        self,
        message: str,
        context: Optional[str] = None,
        expected: Optional[str] = None,
        received: Optional[str] = None,
        suggestion: Optional[str] = None,
        example: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None
    ):
        """
        Initialize detailed error.

        Args:
            message: Core error description
            context: Additional context information
            expected: What was expected
            received: What was actually received
            suggestion: Suggestion for fixing the error
            example: Example of correct usage
            line: Source line of the offending construct, if known
            column: Source column of the offending construct, if known
        """
        self.message = message
        self.context = context
        self.expected = expected
        self.received = received
        self.suggestion = suggestion
        self.example = example
        self.line = line
        self.column = column

        super().__init__(self._format_detailed_message())

    def set_location(self, line: int, column: Optional[int] = None) -> None:
        """Record where the error occurred and refresh the formatted message."""
        self.line = line
        self.column = column
        self.args = (self._format_detailed_message(),)

    def _format_detailed_message(self) -> str:
        """Format the error message with all available details."""
        parts = [f"Error: {self.message}"]

        if self.line is not None:
            if self.column is not None:
                parts.append(f"Location: line {self.line}, column {self.column}")

            else:
                parts.append(f"Location: line {self.line}")

        if self.received:
            parts.append(f"Received: {self.received}")

        if self.expected:
            parts.append(f"Expected: {self.expected}")

        if self.context:
            parts.append(f"Context: {self.context}")

        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")

        if self.example:
            parts.append(f"Example: {self.example}")

        return "\n".join(parts)


class CalcEvalError(CalcError):
    """Evaluation errors with detailed context."""

    kind = "EvalError"


class CalcUndefinedVariableError(CalcEvalError):
    """Assignment to a variable that was never defined."""

    kind = "UndefinedVariable"


class CalcDuplicateDefinitionError(CalcEvalError):
    """Definition of a variable that already exists."""

    kind = "DuplicateDefinition"


class CalcUnknownIdentifierError(CalcEvalError):
    """Reference to a name that is neither a variable nor a constant."""

    kind = "UnknownIdentifier"


class CalcUnknownConstantError(CalcUnknownIdentifierError):
    """Reference to a constant token that has no value."""

    kind = "UnknownConstant"


class CalcUnknownFunctionError(CalcEvalError):
    """Call to a function that is not a builtin."""

    kind = "UnknownFunction"


class CalcArityError(CalcEvalError):
    """Builtin called with the wrong number of arguments."""

    kind = "ArityMismatch"


class CalcTypeError(CalcEvalError):
    """Operand of the wrong kind for an operation."""

    kind = "TypeMismatch"


class CalcDivisionByZeroError(CalcEvalError):
    """Division by a value whose magnitude is within tolerance of zero."""

    kind = "DivisionByZero"


class CalcModuloByZeroError(CalcEvalError):
    """Modulo by a value within tolerance of zero."""

    kind = "ModuloByZero"


class CalcComplexExponentError(CalcEvalError):
    """Exponent with a non-zero imaginary part."""

    kind = "ComplexExponentUnsupported"


class CalcComplexPowerError(CalcEvalError):
    """Non-integer power of a complex base."""

    kind = "NonIntegerComplexPowerUnsupported"


class CalcFactorialError(CalcEvalError):
    """Factorial of a negative or non-integer value."""

    kind = "InvalidFactorialArgument"


class CalcLogBaseError(CalcEvalError):
    """Logarithm base that is not positive or is equal to 1."""

    kind = "InvalidLogBase"


class CalcUnsupportedOperatorError(CalcEvalError):
    """Operator token the evaluator does not know."""

    kind = "UnsupportedOperator"


class CalcUnsupportedAtomError(CalcEvalError):
    """Atom that cannot be evaluated."""

    kind = "UnsupportedAtom"


class CalcImplicitMultiplicationError(CalcEvalError):
    """Juxtaposition that matches none of the implicit multiplication shapes."""

    kind = "UnsupportedImplicitMultiplication"


class CalcEmptyResultError(CalcEvalError):
    """A node was evaluated for its value but produced none."""

    kind = "EmptyExpressionResult"


class CalcUnexpectedTokenError(CalcEvalError):
    """Evaluation reached a node the parser marked as erroneous."""

    kind = "UnexpectedToken"


class CalcDepthError(CalcEvalError):
    """Expression tree nested deeper than the configured limit."""

    kind = "MaxDepthExceeded"


class ErrorMessageBuilder:
    """Helper class for building detailed error messages."""

    @staticmethod
    def suggest_similar_names(target: str, available_names: list[str], max_suggestions: int = 3) -> list[str]:
        """Suggest similar names using fuzzy matching."""
        if not target or not available_names:
            return []

        return difflib.get_close_matches(target, available_names, n=max_suggestions, cutoff=0.6)

    @staticmethod
    def format_suggestion(target: str, available_names: list[str]) -> Optional[str]:
        """Build a 'did you mean' suggestion, or None if nothing is close."""
        matches = ErrorMessageBuilder.suggest_similar_names(target, available_names)
        if not matches:
            return None

        quoted = ", ".join(f"'{name}'" for name in matches)
        return f"Did you mean {quoted}?"

    @staticmethod
    def create_function_example(func_name: str) -> str:
        """Create usage example for a builtin function."""
        examples = {
            'abs': "abs(-3) → 3",
            'ceil': "ceil(1.2) → 2",
            'cos': "cos(0) → 1",
            'exp': "exp(0) → 1",
            'floor': "floor(1.8) → 1",
            'len': "len([1, 2, 3]) → 3",
            'log': "log(8, 2) → 3",
            'max': "max(1, 5, 3) → 5",
            'min': "min([4, 2, 8]) → 2",
            'round': "round(2.5) → 3",
            'sin': "sin(0) → 0",
            'sqrt': "sqrt(-4) → 2i",
            'sum': "sum([1, 2, 3]) → 6",
            'tan': "tan(0) → 0",
        }

        return examples.get(func_name, f"{func_name}(...)")
