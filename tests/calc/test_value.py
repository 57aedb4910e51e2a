"""Tests for Calc runtime values and Python conversion."""

import dataclasses

import pytest

from calc import (
    CalcNumber, CalcBoolean, CalcString, CalcComplex, CalcList, CalcTypeError, from_python
)
from calc.calc_value import bindings_from_python


class TestValues:
    """Test the closed set of runtime values."""

    def test_type_names(self):
        """Test the names used in error messages."""
        assert CalcNumber(1.0).type_name() == "number"
        assert CalcBoolean(True).type_name() == "boolean"
        assert CalcString("x").type_name() == "string"
        assert CalcComplex(1.0, 2.0).type_name() == "complex"
        assert CalcList().type_name() == "list"

    def test_to_python(self):
        """Test conversion back to Python values."""
        assert CalcNumber(2.5).to_python() == 2.5
        assert CalcBoolean(False).to_python() is False
        assert CalcString("abc").to_python() == "abc"
        assert CalcComplex(1.0, -2.0).to_python() == complex(1, -2)
        nested = CalcList((CalcNumber(1.0), CalcList((CalcNumber(2.0),))))
        assert nested.to_python() == [1.0, [2.0]]

    def test_values_are_immutable(self):
        """Test that values cannot be modified after creation."""
        number = CalcNumber(1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            number.value = 2.0  # type: ignore[misc]

    def test_values_compare_structurally(self):
        """Test dataclass equality between values."""
        assert CalcNumber(3.0) == CalcNumber(3.0)
        assert CalcList((CalcNumber(1.0),)) == CalcList((CalcNumber(1.0),))
        assert CalcComplex(0.0, 1.0) != CalcComplex(0.0, -1.0)

    def test_list_helpers(self):
        """Test list length and emptiness."""
        assert CalcList().is_empty()
        assert CalcList().length() == 0
        three = CalcList((CalcNumber(1.0), CalcNumber(2.0), CalcNumber(3.0)))
        assert not three.is_empty()
        assert three.length() == 3


class TestFromPython:
    """Test conversion of Python values into Calc values."""

    @pytest.mark.parametrize("value,expected", [
        (3, CalcNumber(3.0)),
        (2.5, CalcNumber(2.5)),
        (True, CalcBoolean(True)),
        (False, CalcBoolean(False)),
        ("hello", CalcString("hello")),
        (complex(1, 2), CalcComplex(1.0, 2.0)),
        (complex(4, 0), CalcNumber(4.0)),
        ([1, 2], CalcList((CalcNumber(1.0), CalcNumber(2.0)))),
        ((), CalcList()),
    ])
    def test_conversion(self, value, expected):
        """Test scalar and list conversion."""
        assert from_python(value) == expected

    def test_nested_lists_become_matrices(self):
        """Test that nested lists convert row by row."""
        result = from_python([[1, 2], [3, 4]])
        assert isinstance(result, CalcList)
        assert result.length() == 2
        assert result.elements[1] == CalcList((CalcNumber(3.0), CalcNumber(4.0)))

    def test_calc_values_pass_through(self):
        """Test that existing values are returned unchanged."""
        value = CalcComplex(0.0, 1.0)
        assert from_python(value) is value

    def test_unsupported_type(self):
        """Test that unconvertible values raise a type error."""
        with pytest.raises(CalcTypeError, match="Cannot convert Python value of type dict"):
            from_python({"a": 1})  # type: ignore[arg-type]

    def test_bindings(self):
        """Test conversion of an initial variable mapping."""
        assert not bindings_from_python(None)
        assert bindings_from_python({"x": 2, "flag": True}) == {
            "x": CalcNumber(2.0),
            "flag": CalcBoolean(True),
        }
