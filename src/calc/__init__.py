"""Calc: semantic evaluator for a small calculator language."""

# Main API
from calc.calc import Calc

# Exceptions (for error handling)
from calc.calc_error import (
    CalcError, CalcEvalError, CalcUndefinedVariableError, CalcDuplicateDefinitionError,
    CalcUnknownIdentifierError, CalcUnknownConstantError, CalcUnknownFunctionError, CalcArityError,
    CalcTypeError, CalcDivisionByZeroError, CalcModuloByZeroError, CalcComplexExponentError,
    CalcComplexPowerError, CalcFactorialError, CalcLogBaseError, CalcUnsupportedOperatorError,
    CalcUnsupportedAtomError, CalcImplicitMultiplicationError, CalcEmptyResultError,
    CalcUnexpectedTokenError, CalcDepthError, ErrorMessageBuilder
)

# Value types
from calc.calc_value import (
    CalcValue, CalcNumber, CalcBoolean, CalcString, CalcComplex, CalcList, from_python
)

# Parse tree nodes (input contract for the upstream parser)
from calc.calc_ast import (
    CalcASTNode, CalcProgram, CalcStatement, CalcDefineStmt, CalcAssignment, CalcEquation, CalcEquationStmt,
    CalcPrintStmt, CalcExprStmt, CalcOrExpr, CalcAndExpr, CalcNotExpr, CalcComparison, CalcArith, CalcTerm,
    CalcFactor, CalcUnary, CalcAtom, CalcNumberLiteral, CalcImagLiteral, CalcIdentifier, CalcConstant,
    CalcParenExpr, CalcFactorial, CalcImplicitMul, CalcFunctionCall, CalcArgList, CalcVector, CalcMatrix,
    CalcRow, CalcExprList, CalcTerminal, CalcErrorNode
)

# Lower-level components (for advanced usage)
from calc.calc_arithmetic import CalcArithmetic
from calc.calc_builtin_registry import CalcBuiltinRegistry
from calc.calc_environment import CalcEnvironment
from calc.calc_evaluator import CalcEvaluator
from calc.calc_formatter import CalcFormatter


__all__ = [
    # Main API
    "Calc",

    # Exceptions
    "CalcError", "CalcEvalError", "CalcUndefinedVariableError", "CalcDuplicateDefinitionError",
    "CalcUnknownIdentifierError", "CalcUnknownConstantError", "CalcUnknownFunctionError", "CalcArityError",
    "CalcTypeError", "CalcDivisionByZeroError", "CalcModuloByZeroError", "CalcComplexExponentError",
    "CalcComplexPowerError", "CalcFactorialError", "CalcLogBaseError", "CalcUnsupportedOperatorError",
    "CalcUnsupportedAtomError", "CalcImplicitMultiplicationError", "CalcEmptyResultError",
    "CalcUnexpectedTokenError", "CalcDepthError", "ErrorMessageBuilder",

    # Value types
    "CalcValue", "CalcNumber", "CalcBoolean", "CalcString", "CalcComplex", "CalcList", "from_python",

    # Parse tree nodes
    "CalcASTNode", "CalcProgram", "CalcStatement", "CalcDefineStmt", "CalcAssignment", "CalcEquation",
    "CalcEquationStmt", "CalcPrintStmt", "CalcExprStmt", "CalcOrExpr", "CalcAndExpr", "CalcNotExpr",
    "CalcComparison", "CalcArith", "CalcTerm", "CalcFactor", "CalcUnary", "CalcAtom", "CalcNumberLiteral",
    "CalcImagLiteral", "CalcIdentifier", "CalcConstant", "CalcParenExpr", "CalcFactorial", "CalcImplicitMul",
    "CalcFunctionCall", "CalcArgList", "CalcVector", "CalcMatrix", "CalcRow", "CalcExprList", "CalcTerminal",
    "CalcErrorNode",

    # Lower-level components
    "CalcArithmetic", "CalcBuiltinRegistry", "CalcEnvironment", "CalcEvaluator", "CalcFormatter",
]
