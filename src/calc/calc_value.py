"""Calc value hierarchy - immutable runtime values produced by evaluation."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Mapping, Tuple, Union

from calc.calc_error import CalcTypeError


# Tolerance used to treat near-zero floats as exactly zero
DEFAULT_TOLERANCE = 1e-9


class CalcValue(ABC):
    """
    Abstract base class for all Calc runtime values.

    The set of values is closed: Number, Boolean, String, Complex and List.
    All values are immutable.
    """

    @abstractmethod
    def to_python(self) -> Any:
        """Convert to Python value."""

    @abstractmethod
    def type_name(self) -> str:
        """Return Calc type name for error messages."""


@dataclass(frozen=True)
class CalcNumber(CalcValue):
    """Represents real scalars as 64-bit floats."""
    value: float

    def to_python(self) -> float:
        return self.value

    def type_name(self) -> str:
        return "number"


@dataclass(frozen=True)
class CalcBoolean(CalcValue):
    """Represents boolean values."""
    value: bool

    def to_python(self) -> bool:
        return self.value

    def type_name(self) -> str:
        return "boolean"


@dataclass(frozen=True)
class CalcString(CalcValue):
    """Represents text values, produced only from raw terminal tokens."""
    value: str

    def to_python(self) -> str:
        return self.value

    def type_name(self) -> str:
        return "string"


@dataclass(frozen=True)
class CalcComplex(CalcValue):
    """
    Represents complex numbers as a (real, imag) pair of floats.

    Values whose imaginary part is within tolerance of zero must be
    represented as CalcNumber instead; CalcArithmetic.from_complex is the
    one place that enforces this.
    """
    real: float
    imag: float

    def to_python(self) -> complex:
        return complex(self.real, self.imag)

    def type_name(self) -> str:
        return "complex"


@dataclass(frozen=True)
class CalcList(CalcValue):
    """Represents vectors (flat) and matrices (lists of row lists)."""
    elements: Tuple[CalcValue, ...] = ()

    def to_python(self) -> List[Any]:
        """Convert to Python list with Python values."""
        return [elem.to_python() for elem in self.elements]

    def type_name(self) -> str:
        return "list"

    def length(self) -> int:
        """Return the length of the list."""
        return len(self.elements)

    def is_empty(self) -> bool:
        """Check if the list is empty."""
        return len(self.elements) == 0


PythonValue = Union[int, float, bool, str, complex, list, tuple]


def from_python(value: Union[CalcValue, PythonValue]) -> CalcValue:
    """
    Convert a plain Python value into a Calc value.

    Args:
        value: Python scalar, (nested) list/tuple, or an existing CalcValue

    Returns:
        Equivalent Calc value

    Raises:
        CalcTypeError: If the value has no Calc representation
    """
    if isinstance(value, CalcValue):
        return value

    # bool is a subclass of int, so it has to be checked first
    if isinstance(value, bool):
        return CalcBoolean(value)

    if isinstance(value, (int, float)):
        return CalcNumber(float(value))

    if isinstance(value, complex):
        if abs(value.imag) <= DEFAULT_TOLERANCE:
            return CalcNumber(value.real)

        return CalcComplex(value.real, value.imag)

    if isinstance(value, str):
        return CalcString(value)

    if isinstance(value, (list, tuple)):
        return CalcList(tuple(from_python(elem) for elem in value))

    raise CalcTypeError(
        message=f"Cannot convert Python value of type {type(value).__name__} to a Calc value",
        expected="int, float, bool, str, complex, list or tuple"
    )


def bindings_from_python(bindings: Mapping[str, Union[CalcValue, PythonValue]] | None) -> dict[str, CalcValue]:
    """Convert a name → value mapping into Calc values."""
    if not bindings:
        return {}

    return {name: from_python(value) for name, value in bindings.items()}
