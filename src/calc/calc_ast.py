"""Calc parse tree node hierarchy.

These are the node kinds an upstream parser hands to the evaluator. The tree
mirrors the grammar's precedence levels (or, and, not, comparison, arith,
term, factor, unary, atom), so a node is only present where the grammar
produced that construct.

Every node is immutable and carries optional source location metadata that
the evaluator attaches to error messages.
"""

from abc import ABC
from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class CalcASTNode(ABC):
    """
    Abstract base class for all Calc parse tree nodes.

    Source location fields are keyword-only so node constructors keep their
    natural positional order.
    """
    line: int | None = field(default=None, kw_only=True)
    column: int | None = field(default=None, kw_only=True)


# Statements

@dataclass(frozen=True)
class CalcStatement(CalcASTNode):
    """Statement wrapper; an empty body yields no value."""
    body: CalcASTNode | None = None


@dataclass(frozen=True)
class CalcProgram(CalcASTNode):
    """Sequence of statements evaluated in order."""
    statements: Tuple[CalcASTNode, ...] = ()


@dataclass(frozen=True)
class CalcDefineStmt(CalcASTNode):
    """`var name = expr` - creates a new variable."""
    name: str
    expr: CalcASTNode


@dataclass(frozen=True)
class CalcAssignment(CalcASTNode):
    """`name = expr` - rebinds an existing variable."""
    name: str
    expr: CalcASTNode


@dataclass(frozen=True)
class CalcEquation(CalcASTNode):
    """`left = right` tested for numeric equality; binds nothing."""
    left: CalcASTNode
    right: CalcASTNode


@dataclass(frozen=True)
class CalcEquationStmt(CalcASTNode):
    """Statement holding an equation."""
    equation: CalcEquation


@dataclass(frozen=True)
class CalcPrintStmt(CalcASTNode):
    """`print(expr)`."""
    expr: CalcASTNode


@dataclass(frozen=True)
class CalcExprStmt(CalcASTNode):
    """Bare expression statement."""
    expr: CalcASTNode


# Precedence chain

@dataclass(frozen=True)
class CalcOrExpr(CalcASTNode):
    """`left or right`."""
    left: CalcASTNode
    right: CalcASTNode


@dataclass(frozen=True)
class CalcAndExpr(CalcASTNode):
    """`left and right`."""
    left: CalcASTNode
    right: CalcASTNode


@dataclass(frozen=True)
class CalcNotExpr(CalcASTNode):
    """`not operand`."""
    operand: CalcASTNode


@dataclass(frozen=True)
class CalcComparison(CalcASTNode):
    """
    Chained comparison such as `a < b <= c`.

    `rest` holds (operator, operand) pairs following the first operand.
    """
    first: CalcASTNode
    rest: Tuple[Tuple[str, CalcASTNode], ...] = ()


@dataclass(frozen=True)
class CalcArith(CalcASTNode):
    """Additive level: `left + right` or `left - right`."""
    left: CalcASTNode
    operator: str
    right: CalcASTNode


@dataclass(frozen=True)
class CalcTerm(CalcASTNode):
    """Multiplicative level: `*`, `/` or `%`."""
    left: CalcASTNode
    operator: str
    right: CalcASTNode


@dataclass(frozen=True)
class CalcFactor(CalcASTNode):
    """Power level: `base ^ exponent`, right-associative through `exponent`."""
    base: CalcASTNode
    exponent: CalcASTNode | None = None


@dataclass(frozen=True)
class CalcUnary(CalcASTNode):
    """Prefix `+` or `-`; no operator means a plain atom."""
    operator: str | None
    operand: CalcASTNode


# Atoms

@dataclass(frozen=True)
class CalcAtom(CalcASTNode):
    """Base class for atom nodes."""


@dataclass(frozen=True)
class CalcNumberLiteral(CalcAtom):
    """Numeric literal text: decimal, float, or 0b/0o/0x prefixed."""
    text: str


@dataclass(frozen=True)
class CalcImagLiteral(CalcAtom):
    """Imaginary literal text such as `2i`, `i`, `+i` or `-i`."""
    text: str


@dataclass(frozen=True)
class CalcIdentifier(CalcAtom):
    """Variable or constant reference."""
    name: str


@dataclass(frozen=True)
class CalcConstant(CalcAtom):
    """Constant keyword token (`pi`, `e`), looked up case-insensitively."""
    text: str


@dataclass(frozen=True)
class CalcParenExpr(CalcAtom):
    """Parenthesised expression."""
    expr: CalcASTNode


@dataclass(frozen=True)
class CalcFactorial(CalcAtom):
    """Postfix `!` applied to an atom."""
    operand: CalcASTNode


@dataclass(frozen=True)
class CalcImplicitMul(CalcAtom):
    """
    Juxtaposition without an explicit operator.

    Fields record which tokens the grammar matched so the evaluator can
    pick one of the supported shapes:
        number      - numeric literal text, if present
        constant    - constant token, if present
        identifiers - zero to two identifier names, in source order
        expr        - the parenthesised expression, if present
        parenthesized - whether a `(` token was present
    """
    number: str | None = None
    constant: CalcConstant | None = None
    identifiers: Tuple[str, ...] = ()
    expr: CalcASTNode | None = None
    parenthesized: bool = False


@dataclass(frozen=True)
class CalcArgList(CalcASTNode):
    """Comma separated call arguments."""
    exprs: Tuple[CalcASTNode, ...] = ()


@dataclass(frozen=True)
class CalcFunctionCall(CalcAtom):
    """`name(args)`."""
    name: str
    args: CalcArgList | None = None


@dataclass(frozen=True)
class CalcExprList(CalcASTNode):
    """Comma separated expressions inside brackets."""
    exprs: Tuple[CalcASTNode, ...] = ()


@dataclass(frozen=True)
class CalcVector(CalcAtom):
    """`[e1, e2, ...]`; `items` is None for `[]`."""
    items: CalcExprList | None = None


@dataclass(frozen=True)
class CalcRow(CalcASTNode):
    """One matrix row."""
    items: CalcExprList


@dataclass(frozen=True)
class CalcMatrix(CalcAtom):
    """`[[...], [...]]` as a sequence of rows."""
    rows: Tuple[CalcRow, ...] = ()


# Raw tokens

@dataclass(frozen=True)
class CalcTerminal(CalcASTNode):
    """Raw terminal token; evaluates to its text."""
    text: str


@dataclass(frozen=True)
class CalcErrorNode(CalcASTNode):
    """Token the parser could not place during error recovery."""
    text: str
