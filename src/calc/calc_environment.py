"""Variable and constant bindings for one Calc program run."""

import math
from typing import Dict, List, Mapping

from calc.calc_error import (
    CalcDuplicateDefinitionError, CalcUndefinedVariableError, CalcUnknownIdentifierError,
    CalcUnknownConstantError, ErrorMessageBuilder
)
from calc.calc_value import CalcValue, CalcNumber


class CalcEnvironment:
    """
    Mutable variable bindings plus a fixed table of constants.

    Variables are created exactly once with define() and may only be
    changed afterwards with assign().  Constants are keyed by lowercase
    name and never change for the lifetime of the environment.
    """

    CONSTANTS: Dict[str, CalcNumber] = {
        'pi': CalcNumber(math.pi),
        'e': CalcNumber(math.e),
    }

    def __init__(self, initial_variables: Mapping[str, CalcValue] | None = None) -> None:
        """
        Initialize environment.

        Args:
            initial_variables: Bindings applied before any statement executes
        """
        self.variables: Dict[str, CalcValue] = dict(initial_variables or {})
        self.constants: Dict[str, CalcNumber] = dict(self.CONSTANTS)

    def has_variable(self, name: str) -> bool:
        """Check if a variable is bound."""
        return name in self.variables

    def has_constant(self, name: str) -> bool:
        """Check if a constant exists under exactly this name."""
        return name in self.constants

    def define(self, name: str, value: CalcValue) -> None:
        """
        Create a new variable.

        Args:
            name: Variable name
            value: Initial value

        Raises:
            CalcDuplicateDefinitionError: If the variable already exists
        """
        if name in self.variables:
            raise CalcDuplicateDefinitionError(
                message=f"Variable '{name}' already defined",
                suggestion=f"Use '{name} = ...' to change an existing variable",
                example=f"{name} = 2"
            )

        self.variables[name] = value

    def assign(self, name: str, value: CalcValue) -> None:
        """
        Rebind an existing variable.

        Args:
            name: Variable name
            value: New value

        Raises:
            CalcUndefinedVariableError: If the variable has not been defined
        """
        if name not in self.variables:
            raise CalcUndefinedVariableError(
                message=f"Variable '{name}' is not defined",
                suggestion=f"Define it first with 'var {name} = ...'",
                example=f"var {name} = 1"
            )

        self.variables[name] = value

    def lookup(self, name: str) -> CalcValue:
        """
        Resolve an identifier, preferring variables over constants.

        Args:
            name: Identifier to resolve

        Returns:
            Bound value

        Raises:
            CalcUnknownIdentifierError: If the name is neither a variable nor a constant
        """
        if name in self.variables:
            return self.variables[name]

        if name in self.constants:
            return self.constants[name]

        raise CalcUnknownIdentifierError(
            message=f"Identifier '{name}' is not defined",
            context=self._describe_available(),
            suggestion=ErrorMessageBuilder.format_suggestion(name, self.get_available_bindings())
        )

    def lookup_constant(self, text: str) -> CalcNumber:
        """
        Resolve a constant token case-insensitively.

        Args:
            text: Constant token text as written in the source

        Returns:
            The constant's value

        Raises:
            CalcUnknownConstantError: If there is no such constant
        """
        value = self.constants.get(text.lower())
        if value is None:
            raise CalcUnknownConstantError(
                message=f"Unknown constant '{text}'",
                expected=", ".join(sorted(self.constants))
            )

        return value

    def get_available_bindings(self) -> List[str]:
        """Get all names that resolve in this environment."""
        return list(self.variables.keys()) + list(self.constants.keys())

    def _describe_available(self) -> str:
        available = sorted(self.get_available_bindings())
        shown = ", ".join(available[:10])
        if len(available) > 10:
            shown += ", ..."

        return f"Available names: {shown}"

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"CalcEnvironment(variables={list(self.variables.keys())})"
