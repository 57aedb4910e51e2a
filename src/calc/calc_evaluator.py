"""Evaluator for Calc parse trees with detailed error messages."""

import logging
from typing import Callable, List, Mapping

from calc.calc_arithmetic import CalcArithmetic
from calc.calc_ast import (
    CalcASTNode, CalcProgram, CalcStatement, CalcDefineStmt, CalcAssignment, CalcEquation, CalcEquationStmt,
    CalcPrintStmt, CalcExprStmt, CalcOrExpr, CalcAndExpr, CalcNotExpr, CalcComparison, CalcArith, CalcTerm,
    CalcFactor, CalcUnary, CalcAtom, CalcNumberLiteral, CalcImagLiteral, CalcIdentifier, CalcConstant,
    CalcParenExpr, CalcFactorial, CalcImplicitMul, CalcFunctionCall, CalcArgList, CalcVector, CalcMatrix,
    CalcRow, CalcExprList, CalcTerminal, CalcErrorNode
)
from calc.calc_builtin_registry import CalcBuiltinRegistry
from calc.calc_environment import CalcEnvironment
from calc.calc_error import (
    CalcError, CalcEvalError, CalcDepthError, CalcDuplicateDefinitionError, CalcEmptyResultError,
    CalcImplicitMultiplicationError, CalcUndefinedVariableError, CalcUnexpectedTokenError,
    CalcUnknownFunctionError, CalcUnsupportedAtomError, CalcUnsupportedOperatorError, ErrorMessageBuilder
)
from calc.calc_formatter import CalcFormatter
from calc.calc_value import (
    DEFAULT_TOLERANCE, CalcValue, CalcNumber, CalcBoolean, CalcString, CalcComplex, CalcList, PythonValue,
    bindings_from_python
)


class CalcEvaluator:
    """
    Evaluates Calc parse trees.

    One evaluator owns one environment.  Programs evaluated on the same
    evaluator see each other's variables; use a new evaluator for an
    independent run.
    """

    def __init__(
        self,
        initial_variables: Mapping[str, CalcValue | PythonValue] | None = None,
        tolerance: float = DEFAULT_TOLERANCE,
        max_depth: int = 500,
        output: Callable[[str], None] | None = None
    ):
        """
        Initialize evaluator.

        Args:
            initial_variables: Bindings applied before any statement executes
            tolerance: Tolerance for treating floats as zero, integral or equal
            max_depth: Maximum parse tree nesting depth
            output: Sink receiving one formatted line per print statement
        """
        self.tolerance = tolerance
        self.max_depth = max_depth
        self.output: Callable[[str], None] = output if output is not None else print

        self.arithmetic = CalcArithmetic(tolerance)
        self.registry = CalcBuiltinRegistry(self.arithmetic)
        self.formatter = CalcFormatter(tolerance)
        self.environment = CalcEnvironment(bindings_from_python(initial_variables))

        self._depth = 0
        self._logger = logging.getLogger("CalcEvaluator")

    def evaluate_program(self, program: CalcASTNode) -> CalcValue | None:
        """
        Evaluate a whole program.

        Args:
            program: Program node (any other node is evaluated on its own)

        Returns:
            Value of the last statement, or None for an empty program

        Raises:
            CalcEvalError: If evaluation fails; the remaining statements are not run
        """
        self._depth = 0

        try:
            return self.visit(program)

        except CalcError:
            raise

        except RecursionError as e:
            raise CalcDepthError(
                message="Expression too deeply nested (Python recursion limit reached)",
                suggestion="Split the expression into smaller statements using variables"
            ) from e

        except Exception as e:
            raise CalcEvalError(
                message=f"Unexpected error during evaluation: {e}",
                suggestion="This is an internal error - please report this issue"
            ) from e

    def evaluate(self, node: CalcASTNode) -> CalcValue:
        """
        Evaluate a node that must produce a value.

        Raises:
            CalcEmptyResultError: If the node produced no value
        """
        value = self.visit(node)
        if value is None:
            raise CalcEmptyResultError(
                message="Expression did not return a value",
                received=type(node).__name__,
                line=node.line,
                column=node.column
            )

        return value

    def visit(self, node: CalcASTNode) -> CalcValue | None:
        """
        Dispatch on node kind.

        Args:
            node: Node to evaluate

        Returns:
            The node's value, or None for nodes that produce no value
        """
        self._depth += 1
        try:
            if self._depth > self.max_depth:
                raise CalcDepthError(
                    message=f"Expression too deeply nested (max depth: {self.max_depth})",
                    suggestion="Split the expression into smaller statements using variables"
                )

            return self._dispatch(node)

        except CalcError as e:
            self._attach_location(e, node)
            raise

        finally:
            self._depth -= 1

    def _dispatch(self, node: CalcASTNode) -> CalcValue | None:
        match node:
            case CalcProgram():
                return self._visit_program(node)

            case CalcStatement():
                return self.visit(node.body) if node.body is not None else None

            case CalcDefineStmt():
                return self._visit_define(node)

            case CalcAssignment():
                return self._visit_assignment(node)

            case CalcEquationStmt():
                return self.visit(node.equation)

            case CalcEquation():
                left = self.evaluate(node.left)
                right = self.evaluate(node.right)
                return CalcBoolean(self.arithmetic.equals(left, right))

            case CalcPrintStmt():
                return self._visit_print(node)

            case CalcExprStmt():
                return self.evaluate(node.expr)

            case CalcOrExpr():
                if self.arithmetic.is_truthy(self.evaluate(node.left)):
                    return CalcBoolean(True)

                return CalcBoolean(self.arithmetic.is_truthy(self.evaluate(node.right)))

            case CalcAndExpr():
                if not self.arithmetic.is_truthy(self.evaluate(node.left)):
                    return CalcBoolean(False)

                return CalcBoolean(self.arithmetic.is_truthy(self.evaluate(node.right)))

            case CalcNotExpr():
                return CalcBoolean(not self.arithmetic.is_truthy(self.visit(node.operand)))

            case CalcComparison():
                return self._visit_comparison(node)

            case CalcArith():
                return self._visit_arith(node)

            case CalcTerm():
                return self._visit_term(node)

            case CalcFactor():
                base = self.evaluate(node.base)
                if node.exponent is None:
                    return base

                return self.arithmetic.power(base, self.evaluate(node.exponent))

            case CalcUnary():
                return self._visit_unary(node)

            case CalcAtom():
                return self._visit_atom(node)

            case CalcArgList() | CalcExprList():
                return CalcList(tuple(self.evaluate(expr) for expr in node.exprs))

            case CalcRow():
                return self.evaluate(node.items)

            case CalcTerminal():
                return CalcString(node.text)

            case CalcErrorNode():
                raise CalcUnexpectedTokenError(message=f"Unexpected token '{node.text}'")

            case _:
                return None

    # Statements
    def _visit_program(self, node: CalcProgram) -> CalcValue | None:
        result: CalcValue | None = None
        for statement in node.statements:
            result = self.visit(statement)

        self._logger.debug("Program finished after %d statement(s)", len(node.statements))
        return result

    def _visit_define(self, node: CalcDefineStmt) -> CalcValue:
        if self.environment.has_variable(node.name):
            raise CalcDuplicateDefinitionError(
                message=f"Variable '{node.name}' already defined",
                suggestion=f"Use '{node.name} = ...' to change an existing variable"
            )

        value = self.evaluate(node.expr)
        self.environment.define(node.name, value)
        self._logger.debug("Defined variable '%s'", node.name)
        return value

    def _visit_assignment(self, node: CalcAssignment) -> CalcValue:
        if not self.environment.has_variable(node.name):
            raise CalcUndefinedVariableError(
                message=f"Variable '{node.name}' is not defined",
                suggestion=f"Define it first with 'var {node.name} = ...'"
            )

        value = self.evaluate(node.expr)
        self.environment.assign(node.name, value)
        self._logger.debug("Assigned variable '%s'", node.name)
        return value

    def _visit_print(self, node: CalcPrintStmt) -> CalcValue:
        value = self.evaluate(node.expr)
        text = self.format_result(value)
        self._logger.debug("print: %s", text)
        self.output(text)
        return value

    # Precedence chain
    def _visit_comparison(self, node: CalcComparison) -> CalcValue:
        current = self.evaluate(node.first)
        if not node.rest:
            return current

        for operator, operand in node.rest:
            next_value = self.evaluate(operand)
            if not self.arithmetic.compare(operator, current, next_value):
                return CalcBoolean(False)

            current = next_value

        return CalcBoolean(True)

    def _visit_arith(self, node: CalcArith) -> CalcValue:
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)

        if node.operator == '+':
            return self.arithmetic.add(left, right)

        if node.operator == '-':
            return self.arithmetic.subtract(left, right)

        raise self._unsupported_operator(node.operator, "+, -")

    def _visit_term(self, node: CalcTerm) -> CalcValue:
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)

        if node.operator == '*':
            return self.arithmetic.multiply(left, right)

        if node.operator == '/':
            return self.arithmetic.divide(left, right)

        if node.operator == '%':
            return self.arithmetic.modulo(left, right)

        raise self._unsupported_operator(node.operator, "*, /, %")

    def _visit_unary(self, node: CalcUnary) -> CalcValue:
        if node.operator is None or node.operator == '+':
            return self.evaluate(node.operand)

        if node.operator == '-':
            return self.arithmetic.multiply(CalcNumber(-1.0), self.evaluate(node.operand))

        raise self._unsupported_operator(node.operator, "+, -")

    # Atoms
    def _visit_atom(self, node: CalcAtom) -> CalcValue:
        match node:
            case CalcFactorial():
                return self.arithmetic.factorial(self.evaluate(node.operand))

            case CalcImplicitMul():
                return self._visit_implicit_mul(node)

            case CalcFunctionCall():
                return self._visit_function_call(node)

            case CalcVector():
                if node.items is None:
                    return CalcList()

                return self.evaluate(node.items)

            case CalcMatrix():
                return CalcList(tuple(self.evaluate(row) for row in node.rows))

            case CalcParenExpr():
                return self.evaluate(node.expr)

            case CalcConstant():
                return self.environment.lookup_constant(node.text)

            case CalcIdentifier():
                return self.environment.lookup(node.name)

            case CalcImagLiteral():
                return self.parse_imag(node.text)

            case CalcNumberLiteral():
                return CalcNumber(self.parse_number(node.text))

        raise CalcUnsupportedAtomError(
            message=f"Unsupported atom: {type(node).__name__}",
            line=node.line,
            column=node.column
        )

    def _visit_implicit_mul(self, node: CalcImplicitMul) -> CalcValue:
        """
        Resolve juxtaposition to a single multiplication.

        Supported shapes:
            2 a       number * variable
            2(a + 1)  number * expression
            pi a      constant * variable
            a b       variable * variable
            a(b + 1)  variable * expression
        """
        number = node.number
        constant = node.constant
        identifiers = node.identifiers
        group = node.expr if node.parenthesized else None
        bare = not node.parenthesized and node.expr is None

        # Each shape requires every other slot to be empty
        if constant is None and number is not None:
            if len(identifiers) == 1 and bare:
                scalar = CalcNumber(self.parse_number(number))
                return self.arithmetic.multiply(scalar, self.environment.lookup(identifiers[0]))

            if not identifiers and group is not None:
                scalar = CalcNumber(self.parse_number(number))
                return self.arithmetic.multiply(scalar, self.evaluate(group))

        elif constant is not None and number is None:
            if len(identifiers) == 1 and bare:
                constant_value = self.evaluate(constant)
                return self.arithmetic.multiply(constant_value, self.environment.lookup(identifiers[0]))

        elif number is None:
            if len(identifiers) == 2 and bare:
                left = self.environment.lookup(identifiers[0])
                right = self.environment.lookup(identifiers[1])
                return self.arithmetic.multiply(left, right)

            if len(identifiers) == 1 and group is not None:
                left = self.environment.lookup(identifiers[0])
                return self.arithmetic.multiply(left, self.evaluate(group))

        raise CalcImplicitMultiplicationError(
            message="Unsupported implicit multiplication",
            received=self._describe_implicit_mul(node),
            expected="number identifier, number(expr), constant identifier, identifier identifier, "
                "or identifier(expr)"
        )

    def _describe_implicit_mul(self, node: CalcImplicitMul) -> str:
        parts: List[str] = []
        if node.number is not None:
            parts.append(node.number)

        if node.constant is not None:
            parts.append(node.constant.text)

        parts.extend(node.identifiers)
        if node.parenthesized:
            parts.append("(...)")

        return " ".join(parts) if parts else "empty juxtaposition"

    def _visit_function_call(self, node: CalcFunctionCall) -> CalcValue:
        args = [self.evaluate(expr) for expr in node.args.exprs] if node.args is not None else []

        handler = self.registry.lookup(node.name)
        if handler is not None:
            return handler(args)

        # Not a function: `a(2)` or `pi(2)` with a bound name is a multiplication
        if len(args) == 1:
            left: CalcValue | None = None
            if self.environment.has_variable(node.name):
                left = self.environment.variables[node.name]

            elif self.environment.has_constant(node.name):
                left = self.environment.constants[node.name]

            if left is not None:
                return self.arithmetic.multiply(left, args[0])

        raise CalcUnknownFunctionError(
            message=f"Unknown function '{node.name}'",
            received=f"{len(args)} argument(s)",
            context=f"Available functions: {', '.join(sorted(self.registry.names()))}",
            suggestion=ErrorMessageBuilder.format_suggestion(node.name, self.registry.names())
        )

    # Literals
    def parse_number(self, text: str) -> float:
        """
        Parse numeric literal text.

        Args:
            text: Decimal/float text, or binary/octal/hex with a 0b/0o/0x prefix

        Returns:
            The literal's value

        Raises:
            CalcUnsupportedAtomError: If the text is not a valid numeric literal
        """
        prefixes = {'0b': 2, '0o': 8, '0x': 16}
        base = prefixes.get(text[:2].lower())

        try:
            if base is not None:
                return float(int(text[2:], base))

            return float(text)

        except ValueError as e:
            raise CalcUnsupportedAtomError(
                message=f"Invalid numeric literal '{text}'",
                expected="decimal, float, or 0b/0o/0x prefixed integer"
            ) from e

    def parse_imag(self, text: str) -> CalcValue:
        """
        Parse imaginary literal text such as `2i`, `i`, `+i` or `-i`.

        Returns:
            Normalized value (`0i` is the number 0)
        """
        raw = text[:-1] if text.endswith('i') else text

        if raw in ('', '+'):
            imag = 1.0

        elif raw == '-':
            imag = -1.0

        else:
            imag = self.parse_number(raw)

        return self.arithmetic.from_complex(CalcComplex(0.0, imag))

    # Output
    def format_result(self, value: CalcValue) -> str:
        """Format a value the way print shows it."""
        return self.formatter.format(value)

    # Error helpers
    def _unsupported_operator(self, operator: str, expected: str) -> CalcUnsupportedOperatorError:
        return CalcUnsupportedOperatorError(
            message=f"Unsupported operator '{operator}'",
            expected=expected
        )

    @staticmethod
    def _attach_location(error: CalcError, node: CalcASTNode) -> None:
        """Record the innermost node location that has one."""
        if error.line is not None or node.line is None:
            return

        error.set_location(node.line, node.column)
