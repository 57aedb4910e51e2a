"""Built-in math functions for Calc."""

import math
from typing import Callable, Dict, List

from calc.calc_arithmetic import CalcArithmetic
from calc.calc_error import CalcArityError, CalcLogBaseError, CalcTypeError, ErrorMessageBuilder
from calc.calc_value import CalcValue, CalcNumber, CalcString, CalcComplex, CalcList


BuiltinHandler = Callable[[List[CalcValue]], CalcValue]


class CalcBuiltinFunctions:
    """Handlers for the fixed set of Calc builtin functions."""

    def __init__(self, arithmetic: CalcArithmetic) -> None:
        """
        Initialize builtin functions.

        Args:
            arithmetic: Engine used for coercions and for folding sums
        """
        self.arithmetic = arithmetic

    def get_functions(self) -> Dict[str, BuiltinHandler]:
        """Return dictionary of builtin function implementations."""
        return {
            'abs': self._builtin_abs,
            'ceil': self._builtin_ceil,
            'cos': self._builtin_cos,
            'exp': self._builtin_exp,
            'floor': self._builtin_floor,
            'len': self._builtin_len,
            'log': self._builtin_log,
            'max': self._builtin_max,
            'min': self._builtin_min,
            'round': self._builtin_round,
            'sin': self._builtin_sin,
            'sqrt': self._builtin_sqrt,
            'sum': self._builtin_sum,
            'tan': self._builtin_tan,
        }

    def _builtin_abs(self, args: List[CalcValue]) -> CalcValue:
        """Implement abs function; complex values give their magnitude."""
        self._expect_arg_count("abs", args, 1)
        value = args[0]
        if isinstance(value, CalcComplex):
            return CalcNumber(math.hypot(value.real, value.imag))

        return CalcNumber(abs(self.arithmetic.to_number(value, "abs")))

    def _builtin_ceil(self, args: List[CalcValue]) -> CalcValue:
        """Implement ceil function."""
        return self._number_unary("ceil", args, self._finite_only(math.ceil))

    def _builtin_floor(self, args: List[CalcValue]) -> CalcValue:
        """Implement floor function."""
        return self._number_unary("floor", args, self._finite_only(math.floor))

    def _builtin_round(self, args: List[CalcValue]) -> CalcValue:
        """Implement round function; halves round toward positive infinity."""
        return self._number_unary("round", args, self._finite_only(self._round_half_up))

    def _builtin_sin(self, args: List[CalcValue]) -> CalcValue:
        """Implement sin function."""
        return self._number_unary("sin", args, self._nan_on_domain_error(math.sin))

    def _builtin_cos(self, args: List[CalcValue]) -> CalcValue:
        """Implement cos function."""
        return self._number_unary("cos", args, self._nan_on_domain_error(math.cos))

    def _builtin_tan(self, args: List[CalcValue]) -> CalcValue:
        """Implement tan function."""
        return self._number_unary("tan", args, self._nan_on_domain_error(math.tan))

    def _builtin_exp(self, args: List[CalcValue]) -> CalcValue:
        """Implement exp function."""
        return self._number_unary("exp", args, self._exp)

    def _builtin_sqrt(self, args: List[CalcValue]) -> CalcValue:
        """Implement sqrt function; negative inputs give an imaginary result."""
        self._expect_arg_count("sqrt", args, 1)
        value = self.arithmetic.to_number(args[0], "sqrt")
        if value < 0:
            magnitude = math.sqrt(abs(value))
            return self.arithmetic.from_complex(CalcComplex(0.0, magnitude))

        return CalcNumber(math.sqrt(value))

    def _builtin_log(self, args: List[CalcValue]) -> CalcValue:
        """Implement log function: natural log, or log to a base with two arguments."""
        if len(args) == 1:
            return CalcNumber(self._ln(self.arithmetic.to_number(args[0], "log")))

        if len(args) == 2:
            value = self.arithmetic.to_number(args[0], "log")
            base = self.arithmetic.to_number(args[1], "log")
            if base <= 0 or base == 1:
                raise CalcLogBaseError(
                    message="log base must be positive and not equal to 1",
                    received=f"base {base}",
                    example=ErrorMessageBuilder.create_function_example("log")
                )

            return CalcNumber(self._ln(value) / self._ln(base))

        raise CalcArityError(
            message=f"log expects one or two arguments, got {len(args)}",
            example=ErrorMessageBuilder.create_function_example("log")
        )

    def _builtin_min(self, args: List[CalcValue]) -> CalcValue:
        """Implement min function over varargs or a single list."""
        values = self._number_variadic("min", args)
        return CalcNumber(min(values, default=math.inf))

    def _builtin_max(self, args: List[CalcValue]) -> CalcValue:
        """Implement max function over varargs or a single list."""
        values = self._number_variadic("max", args)
        return CalcNumber(max(values, default=-math.inf))

    def _builtin_sum(self, args: List[CalcValue]) -> CalcValue:
        """Implement sum function, folding with addition so complex values are allowed."""
        items = args
        if len(args) == 1 and isinstance(args[0], CalcList):
            items = list(args[0].elements)

        total: CalcValue = CalcNumber(0.0)
        for item in items:
            total = self.arithmetic.add(total, item)

        return total

    def _builtin_len(self, args: List[CalcValue]) -> CalcValue:
        """Implement len function for lists and strings."""
        self._expect_arg_count("len", args, 1)
        target = args[0]
        if isinstance(target, CalcList):
            return CalcNumber(float(target.length()))

        if isinstance(target, CalcString):
            return CalcNumber(float(len(target.value)))

        raise CalcTypeError(
            message="len expects an array or string",
            received=target.type_name(),
            example=ErrorMessageBuilder.create_function_example("len")
        )

    # Helper methods for arity and type checking
    def _expect_arg_count(self, name: str, args: List[CalcValue], count: int) -> None:
        if len(args) != count:
            raise CalcArityError(
                message=f"{name} expects {count} argument(s), got {len(args)}",
                example=ErrorMessageBuilder.create_function_example(name)
            )

    def _number_unary(self, name: str, args: List[CalcValue], fn: Callable[[float], float]) -> CalcValue:
        self._expect_arg_count(name, args, 1)
        return CalcNumber(float(fn(self.arithmetic.to_number(args[0], name))))

    def _number_variadic(self, name: str, args: List[CalcValue]) -> List[float]:
        if len(args) == 1 and isinstance(args[0], CalcList):
            return [self.arithmetic.to_number(item, name) for item in args[0].elements]

        if not args:
            raise CalcArityError(
                message=f"{name} expects at least one argument",
                example=ErrorMessageBuilder.create_function_example(name)
            )

        return [self.arithmetic.to_number(item, name) for item in args]

    @staticmethod
    def _finite_only(fn: Callable[[float], float]) -> Callable[[float], float]:
        """Apply fn to finite values; infinities and nan pass through unchanged."""
        return lambda x: fn(x) if math.isfinite(x) else x

    @staticmethod
    def _nan_on_domain_error(fn: Callable[[float], float]) -> Callable[[float], float]:
        """Trigonometric functions of infinity have no value."""
        return lambda x: fn(x) if math.isfinite(x) else math.nan

    @staticmethod
    def _round_half_up(x: float) -> float:
        # Nearest integer, ties toward positive infinity
        lower = math.floor(x)
        return lower + 1 if x - lower >= 0.5 else lower

    @staticmethod
    def _exp(x: float) -> float:
        try:
            return math.exp(x)

        except OverflowError:
            return math.inf

    @staticmethod
    def _ln(x: float) -> float:
        if math.isnan(x) or x < 0:
            return math.nan

        if x == 0:
            return -math.inf

        return math.log(x)
