"""Arithmetic and complex number engine for Calc.

Every binary arithmetic operator promotes both operands to complex, computes
in the complex domain, and normalizes the result back to a real number when
the imaginary part is within tolerance of zero.
"""

import math

from calc.calc_error import (
    CalcComplexExponentError, CalcComplexPowerError, CalcDivisionByZeroError, CalcFactorialError,
    CalcModuloByZeroError, CalcTypeError, CalcUnsupportedOperatorError
)
from calc.calc_value import (
    DEFAULT_TOLERANCE, CalcValue, CalcNumber, CalcBoolean, CalcString, CalcComplex, CalcList
)


class CalcArithmetic:
    """Numeric tower operations over Calc values."""

    COMPARISON_OPERATORS = ('==', '!=', '<', '<=', '>', '>=')

    def __init__(self, tolerance: float = DEFAULT_TOLERANCE) -> None:
        """
        Initialize the arithmetic engine.

        Args:
            tolerance: Values whose magnitude is at most this are treated as zero
        """
        self.tolerance = tolerance

    # Tolerance helpers
    def approx_zero(self, value: float) -> bool:
        """Check if a float is within tolerance of zero."""
        return abs(value) <= self.tolerance

    def normalize_number(self, value: float) -> float:
        """Snap near-zero floats to exactly zero."""
        return 0.0 if self.approx_zero(value) else value

    def is_integer(self, value: float) -> bool:
        """Check if a float is within tolerance of an integer."""
        if not math.isfinite(value):
            return False

        return abs(value - round(value)) <= self.tolerance

    # Coercions
    def to_complex(self, value: CalcValue, context: str) -> CalcComplex:
        """
        Promote a scalar to complex.

        Args:
            value: Value to promote
            context: Operation name for error messages

        Returns:
            Complex form of the value (not normalized)

        Raises:
            CalcTypeError: If the value is a string or a list
        """
        if isinstance(value, CalcComplex):
            return value

        if isinstance(value, CalcNumber):
            return CalcComplex(value.value, 0.0)

        if isinstance(value, CalcBoolean):
            return CalcComplex(1.0 if value.value else 0.0, 0.0)

        raise CalcTypeError(
            message=f"{context} expects numeric arguments",
            received=f"{value.type_name()}",
            expected="number, boolean or complex"
        )

    def to_number(self, value: CalcValue, context: str) -> float:
        """
        Reduce a scalar to a real float.

        Args:
            value: Value to reduce
            context: Operation name for error messages

        Returns:
            Real value

        Raises:
            CalcTypeError: If the value is a string, a list, or has a non-zero imaginary part
        """
        if isinstance(value, CalcNumber):
            return value.value

        if isinstance(value, CalcBoolean):
            return 1.0 if value.value else 0.0

        if isinstance(value, CalcComplex):
            if not self.approx_zero(value.imag):
                raise CalcTypeError(
                    message=f"{context} does not support complex values",
                    received=f"complex with imaginary part {value.imag}",
                    expected="real number"
                )

            return value.real

        raise CalcTypeError(
            message=f"{context} expects numeric arguments",
            received=f"{value.type_name()}",
            expected="number, boolean or real-valued complex"
        )

    def from_complex(self, value: CalcComplex) -> CalcValue:
        """Normalize a complex result, collapsing it to a number when the imaginary part is negligible."""
        real = self.normalize_number(value.real)
        imag = self.normalize_number(value.imag)
        if imag == 0.0:
            return CalcNumber(real)

        return CalcComplex(real, imag)

    # Arithmetic operations
    def add(self, left: CalcValue, right: CalcValue) -> CalcValue:
        """Implement + operation."""
        a = self.to_complex(left, "addition")
        b = self.to_complex(right, "addition")
        return self.from_complex(CalcComplex(a.real + b.real, a.imag + b.imag))

    def subtract(self, left: CalcValue, right: CalcValue) -> CalcValue:
        """Implement - operation."""
        a = self.to_complex(left, "subtraction")
        b = self.to_complex(right, "subtraction")
        return self.from_complex(CalcComplex(a.real - b.real, a.imag - b.imag))

    def multiply(self, left: CalcValue, right: CalcValue) -> CalcValue:
        """Implement * operation."""
        a = self.to_complex(left, "multiplication")
        b = self.to_complex(right, "multiplication")
        real = a.real * b.real - a.imag * b.imag
        imag = a.real * b.imag + a.imag * b.real
        return self.from_complex(CalcComplex(real, imag))

    def divide(self, left: CalcValue, right: CalcValue) -> CalcValue:
        """Implement / operation using the conjugate of the divisor."""
        a = self.to_complex(left, "division")
        b = self.to_complex(right, "division")
        denominator = b.real * b.real + b.imag * b.imag
        if self.approx_zero(denominator):
            raise CalcDivisionByZeroError(
                message="Division by zero",
                received=f"divisor with squared magnitude {denominator}"
            )

        real = (a.real * b.real + a.imag * b.imag) / denominator
        imag = (a.imag * b.real - a.real * b.imag) / denominator
        return self.from_complex(CalcComplex(real, imag))

    def modulo(self, left: CalcValue, right: CalcValue) -> CalcValue:
        """Implement % operation; the sign of the result follows the dividend."""
        dividend = self.to_number(left, "modulo")
        divisor = self.to_number(right, "modulo")
        if self.approx_zero(divisor):
            raise CalcModuloByZeroError(message="Modulo by zero")

        if not math.isfinite(dividend):
            return CalcNumber(math.nan)

        return CalcNumber(math.fmod(dividend, divisor))

    def power(self, base: CalcValue, exponent: CalcValue) -> CalcValue:
        """
        Implement ^ operation.

        Integer exponents are computed by repeated complex multiplication and
        inverted through divide() when negative.  Non-integer exponents are
        only allowed for real bases.

        Args:
            base: Base value
            exponent: Exponent value, which must be real

        Returns:
            base raised to exponent

        Raises:
            CalcComplexExponentError: If the exponent has a non-zero imaginary part
            CalcComplexPowerError: If a complex base is raised to a non-integer power
        """
        exp = self.to_complex(exponent, "power")
        if not self.approx_zero(exp.imag):
            raise CalcComplexExponentError(
                message="Complex exponents are not supported",
                received=f"exponent with imaginary part {exp.imag}"
            )

        exponent_value = exp.real
        base_complex = self.to_complex(base, "power")

        if self.is_integer(exponent_value):
            result: CalcValue = CalcComplex(1.0, 0.0)
            for _ in range(abs(round(exponent_value))):
                result = self.to_complex(self.multiply(result, base_complex), "power")

            if exponent_value < 0:
                result = self.to_complex(self.divide(CalcNumber(1.0), result), "power")

            return self.from_complex(self.to_complex(result, "power"))

        if not self.approx_zero(base_complex.imag):
            raise CalcComplexPowerError(
                message="Non-integer powers of complex numbers are not supported",
                received=f"exponent {exponent_value}"
            )

        return CalcNumber(self._real_pow(base_complex.real, exponent_value))

    def _real_pow(self, base: float, exponent: float) -> float:
        if math.isnan(exponent):
            return math.nan

        try:
            return math.pow(base, exponent)

        except ValueError:
            if base == 0:
                return math.inf

            # Negative base with a fractional exponent has no real result
            return math.nan

        except OverflowError:
            if base < 0 and self.is_integer(exponent) and round(exponent) % 2 == 1:
                return -math.inf

            return math.inf

    def factorial(self, value: CalcValue) -> CalcValue:
        """
        Implement postfix ! operation.

        Raises:
            CalcFactorialError: If the operand is negative or not an integer
        """
        number = self.to_number(value, "factorial")
        if number < 0 or not self.is_integer(number):
            raise CalcFactorialError(
                message="Factorial expects a non-negative integer",
                received=f"{number}"
            )

        result = 1.0
        # Multiplies every integer up to the operand, so 2.9999999999! is 2
        for i in range(2, math.floor(number) + 1):
            result *= i
            if math.isinf(result):
                break

        return CalcNumber(result)

    # Equality, ordering and truthiness
    def equals(self, left: CalcValue, right: CalcValue) -> bool:
        """
        Structural equality with tolerance for numeric values.

        Numeric kinds compare as complex within tolerance, strings compare
        exactly, lists compare element-wise.  A string compared with a list is
        unequal.

        Raises:
            CalcTypeError: If one side is numeric and the other is a string or list
        """
        numeric = (CalcNumber, CalcBoolean, CalcComplex)
        if isinstance(left, numeric) or isinstance(right, numeric):
            a = self.to_complex(left, "equality")
            b = self.to_complex(right, "equality")
            return self.approx_zero(a.real - b.real) and self.approx_zero(a.imag - b.imag)

        if isinstance(left, CalcString) and isinstance(right, CalcString):
            return left.value == right.value

        if isinstance(left, CalcList) and isinstance(right, CalcList):
            if left.length() != right.length():
                return False

            return all(self.equals(a, b) for a, b in zip(left.elements, right.elements))

        return False

    def compare(self, operator: str, left: CalcValue, right: CalcValue) -> bool:
        """
        Apply a comparison operator.

        Raises:
            CalcUnsupportedOperatorError: If the operator is not a comparison
            CalcTypeError: If an ordering operand is not real
        """
        if operator == '==':
            return self.equals(left, right)

        if operator == '!=':
            return not self.equals(left, right)

        if operator not in self.COMPARISON_OPERATORS:
            raise CalcUnsupportedOperatorError(
                message=f"Unsupported operator '{operator}'",
                expected=", ".join(self.COMPARISON_OPERATORS)
            )

        a = self.to_number(left, "comparison")
        b = self.to_number(right, "comparison")

        if operator == '<':
            return a < b

        if operator == '<=':
            return a <= b

        if operator == '>':
            return a > b

        return a >= b

    def is_truthy(self, value: CalcValue | None) -> bool:
        """Decide the truth value of any Calc value."""
        if value is None:
            return False

        if isinstance(value, CalcBoolean):
            return value.value

        if isinstance(value, CalcNumber):
            return not self.approx_zero(value.value)

        if isinstance(value, CalcComplex):
            return not self.approx_zero(value.real) or not self.approx_zero(value.imag)

        if isinstance(value, CalcString):
            return len(value.value) > 0

        if isinstance(value, CalcList):
            return not value.is_empty()

        return False
