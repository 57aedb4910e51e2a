"""
Static builtin function registry for Calc.

This module is the single source of truth for which names are builtin
functions. Each handler validates its own arity.
"""

from typing import Dict, List

from calc.calc_arithmetic import CalcArithmetic
from calc.calc_builtins import BuiltinHandler, CalcBuiltinFunctions


class CalcBuiltinRegistry:
    """
    Central registry for all builtin functions.

    Maps each builtin name to its handler, checking at construction time that
    the table and the implementations agree.
    """

    # Authoritative list of builtin names
    BUILTIN_TABLE = [
        'abs', 'ceil', 'cos', 'exp', 'floor', 'len', 'log', 'max', 'min', 'round', 'sin', 'sqrt', 'sum', 'tan',
    ]

    def __init__(self, arithmetic: CalcArithmetic) -> None:
        """
        Initialize the builtin registry.

        Args:
            arithmetic: Engine shared with the evaluator
        """
        self.builtin_functions = CalcBuiltinFunctions(arithmetic)
        self._functions = self._build_function_table()

    def _build_function_table(self) -> Dict[str, BuiltinHandler]:
        """
        Build the name -> handler table in BUILTIN_TABLE order.

        Raises:
            RuntimeError: If the table and the implementations disagree
        """
        implementations = self.builtin_functions.get_functions()

        functions: Dict[str, BuiltinHandler] = {}
        for name in self.BUILTIN_TABLE:
            if name not in implementations:
                raise RuntimeError(f"Builtin function '{name}' in BUILTIN_TABLE but not implemented")

            functions[name] = implementations[name]

        extra = set(implementations) - set(self.BUILTIN_TABLE)
        if extra:
            raise RuntimeError(f"Builtin functions {sorted(extra)} implemented but missing from BUILTIN_TABLE")

        return functions

    def is_builtin(self, name: str) -> bool:
        """Check if a name is a builtin function."""
        return name in self._functions

    def lookup(self, name: str) -> BuiltinHandler | None:
        """Get the handler for a builtin, or None if the name is not a builtin."""
        return self._functions.get(name)

    def names(self) -> List[str]:
        """Get all builtin names."""
        return list(self._functions.keys())
