"""Shared fixtures and utilities for Calc tests."""

from typing import List

import pytest

from calc import (
    Calc, CalcArithmetic, CalcASTNode, CalcProgram, CalcStatement, CalcDefineStmt, CalcAssignment, CalcEquation,
    CalcEquationStmt, CalcPrintStmt, CalcExprStmt, CalcOrExpr, CalcAndExpr, CalcNotExpr, CalcComparison,
    CalcArith, CalcTerm, CalcFactor, CalcUnary, CalcNumberLiteral, CalcImagLiteral, CalcIdentifier,
    CalcConstant, CalcParenExpr, CalcFactorial, CalcImplicitMul, CalcFunctionCall, CalcArgList, CalcVector,
    CalcMatrix, CalcRow, CalcExprList, CalcTerminal
)


@pytest.fixture
def calc():
    """Create a fresh Calc instance for each test, collecting printed lines."""
    lines: List[str] = []
    instance = Calc(output=lines.append)
    instance.printed = lines
    return instance


@pytest.fixture
def calc_custom():
    """Factory for Calc instances with custom configuration."""
    def _create_calc(**kwargs) -> Calc:
        return Calc(**kwargs)
    return _create_calc


@pytest.fixture
def arithmetic():
    """Create an arithmetic engine with the default tolerance."""
    return CalcArithmetic()


class CalcTreeBuilder:
    """
    Builds parse trees the way the upstream parser would.

    Method names follow the source construct, e.g. `add(num(1), num(2))`
    is the tree for `1 + 2`.
    """

    @staticmethod
    def num(text) -> CalcNumberLiteral:
        return CalcNumberLiteral(str(text))

    @staticmethod
    def imag(text: str) -> CalcImagLiteral:
        return CalcImagLiteral(text)

    @staticmethod
    def ident(name: str) -> CalcIdentifier:
        return CalcIdentifier(name)

    @staticmethod
    def const(text: str) -> CalcConstant:
        return CalcConstant(text)

    @staticmethod
    def text(value: str) -> CalcTerminal:
        return CalcTerminal(value)

    @staticmethod
    def paren(expr: CalcASTNode) -> CalcParenExpr:
        return CalcParenExpr(expr)

    @staticmethod
    def add(left: CalcASTNode, right: CalcASTNode) -> CalcArith:
        return CalcArith(left, '+', right)

    @staticmethod
    def sub(left: CalcASTNode, right: CalcASTNode) -> CalcArith:
        return CalcArith(left, '-', right)

    @staticmethod
    def mul(left: CalcASTNode, right: CalcASTNode) -> CalcTerm:
        return CalcTerm(left, '*', right)

    @staticmethod
    def div(left: CalcASTNode, right: CalcASTNode) -> CalcTerm:
        return CalcTerm(left, '/', right)

    @staticmethod
    def mod(left: CalcASTNode, right: CalcASTNode) -> CalcTerm:
        return CalcTerm(left, '%', right)

    @staticmethod
    def pow(base: CalcASTNode, exponent: CalcASTNode) -> CalcFactor:
        return CalcFactor(base, exponent)

    @staticmethod
    def neg(operand: CalcASTNode) -> CalcUnary:
        return CalcUnary('-', operand)

    @staticmethod
    def pos(operand: CalcASTNode) -> CalcUnary:
        return CalcUnary('+', operand)

    @staticmethod
    def fact(operand: CalcASTNode) -> CalcFactorial:
        return CalcFactorial(operand)

    @staticmethod
    def cmp(first: CalcASTNode, *pairs) -> CalcComparison:
        return CalcComparison(first, tuple(pairs))

    @staticmethod
    def or_(left: CalcASTNode, right: CalcASTNode) -> CalcOrExpr:
        return CalcOrExpr(left, right)

    @staticmethod
    def and_(left: CalcASTNode, right: CalcASTNode) -> CalcAndExpr:
        return CalcAndExpr(left, right)

    @staticmethod
    def not_(operand: CalcASTNode) -> CalcNotExpr:
        return CalcNotExpr(operand)

    @staticmethod
    def call(name: str, *args: CalcASTNode) -> CalcFunctionCall:
        return CalcFunctionCall(name, CalcArgList(tuple(args)) if args else None)

    @staticmethod
    def vector(*items: CalcASTNode) -> CalcVector:
        return CalcVector(CalcExprList(tuple(items)) if items else None)

    @staticmethod
    def matrix(*rows) -> CalcMatrix:
        return CalcMatrix(tuple(CalcRow(CalcExprList(tuple(row))) for row in rows))

    @staticmethod
    def implicit(**kwargs) -> CalcImplicitMul:
        return CalcImplicitMul(**kwargs)

    @staticmethod
    def define(name: str, expr: CalcASTNode) -> CalcDefineStmt:
        return CalcDefineStmt(name, expr)

    @staticmethod
    def assign(name: str, expr: CalcASTNode) -> CalcAssignment:
        return CalcAssignment(name, expr)

    @staticmethod
    def equation(left: CalcASTNode, right: CalcASTNode) -> CalcEquationStmt:
        return CalcEquationStmt(CalcEquation(left, right))

    @staticmethod
    def print_(expr: CalcASTNode) -> CalcPrintStmt:
        return CalcPrintStmt(expr)

    @staticmethod
    def expr(expr: CalcASTNode) -> CalcExprStmt:
        return CalcExprStmt(expr)

    @staticmethod
    def program(*statements: CalcASTNode) -> CalcProgram:
        return CalcProgram(tuple(CalcStatement(statement) for statement in statements))

    @staticmethod
    def single(expr: CalcASTNode) -> CalcProgram:
        """Program with one expression statement."""
        return CalcProgram((CalcStatement(CalcExprStmt(expr)),))


@pytest.fixture
def helpers():
    """Provide the parse tree builder."""
    return CalcTreeBuilder
