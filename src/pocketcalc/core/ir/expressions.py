"""
Expression tree types for pocketcalc.

A line of input parses into a ``Program``: zero or more ``def`` bindings
followed by one trailing expression.

Supports:
- Arithmetic: +, -, *, /
- Grouping: ( expr )
- Numeric literals, kept as source text until evaluation: 1, 2.5, 10.
- Name references to earlier bindings: def x = 2; x * 3
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary arithmetic operators."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


# ---------------------------------------------------------------------------
# Expression nodes
# ---------------------------------------------------------------------------


class NumericLiteral(BaseModel):
    """A numeric literal, holding the exact source text."""

    text: str = Field(description="Literal text as it appeared in the source")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.text


class NameReference(BaseModel):
    """Reference to a name bound by an earlier ``def`` statement."""

    name: str = Field(description="Bound name")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name


class Grouping(BaseModel):
    """A parenthesised sub-expression. Shape only; evaluates to ``inner``."""

    inner: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        # BinaryExpr already renders its own parentheses
        if isinstance(self.inner, BinaryExpr):
            return str(self.inner)
        return f"({self.inner})"


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.left} {self.op.value} {self.right})"


Expr = NumericLiteral | NameReference | Grouping | BinaryExpr

# Rebuild models for recursive forward references
Grouping.model_rebuild()
BinaryExpr.model_rebuild()


# ---------------------------------------------------------------------------
# Statements and programs
# ---------------------------------------------------------------------------


class NamedValueBinding(BaseModel):
    """
    ``def name = value;``

    Binds ``name`` to the evaluated ``value`` for every statement and
    expression that follows it on the same line. Rebinding shadows.
    """

    name: str = Field(description="Name being bound")
    value: Expr = Field(description="Expression whose result is bound")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"def {self.name} = {self.value};"


Statement = NamedValueBinding


class Program(BaseModel):
    """Statements in source order followed by the trailing expression."""

    statements: tuple[Statement, ...] = Field(default=(), description="Bindings, in order")
    expression: Expr = Field(description="The expression whose value is the line's result")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        parts = [str(s) for s in self.statements]
        parts.append(str(self.expression))
        return " ".join(parts)


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------


class Number(BaseModel):
    """The result of evaluating a program."""

    value: float

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return repr(self.value)

    def __float__(self) -> float:
        return self.value
