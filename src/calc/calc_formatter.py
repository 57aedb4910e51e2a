"""Text formatting of Calc values for print output."""

import math
from decimal import Decimal

from calc.calc_value import DEFAULT_TOLERANCE, CalcValue, CalcNumber, CalcBoolean, CalcString, CalcComplex, CalcList


class CalcFormatter:
    """Formats values the way `print` shows them."""

    def __init__(self, tolerance: float = DEFAULT_TOLERANCE) -> None:
        """
        Initialize formatter.

        Args:
            tolerance: Parts of a complex number within this of zero are shown as zero
        """
        self.tolerance = tolerance

    def format(self, value: CalcValue) -> str:
        """
        Format a value for display.

        Numbers print without a trailing `.0` when integral, booleans as
        `true`/`false`, complex numbers as `a + bi`, and lists as
        `[e1, e2, ...]` with nested lists for matrices.

        Args:
            value: The value to format

        Returns:
            String representation of the value
        """
        if isinstance(value, CalcBoolean):
            return "true" if value.value else "false"

        if isinstance(value, CalcString):
            return value.value

        if isinstance(value, CalcNumber):
            return self.format_number(value.value)

        if isinstance(value, CalcComplex):
            return self._format_complex(value)

        if isinstance(value, CalcList):
            items = [self.format(element) for element in value.elements]
            return f"[{', '.join(items)}]"

        return str(value)

    def format_number(self, value: float) -> str:
        """Format a float with the shortest text that round-trips."""
        if math.isnan(value):
            return "NaN"

        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"

        if value == 0:
            return "0"

        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))

        text = repr(value)
        if 'e' not in text:
            return text

        # Only very large or very small magnitudes use exponent notation
        if 1e-6 <= abs(value) < 1e21:
            return format(Decimal(text), 'f')

        mantissa, exponent = text.split('e')
        sign = '-' if exponent.startswith('-') else '+'
        return f"{mantissa}e{sign}{exponent.lstrip('+-').lstrip('0') or '0'}"

    def _format_complex(self, value: CalcComplex) -> str:
        real = 0.0 if abs(value.real) <= self.tolerance else value.real
        imag = 0.0 if abs(value.imag) <= self.tolerance else value.imag

        if imag == 0.0:
            return self.format_number(real)

        if real == 0.0:
            return f"{self.format_number(imag)}i"

        sign = "+" if imag >= 0 else "-"
        return f"{self.format_number(real)} {sign} {self.format_number(abs(imag))}i"
