"""
pocketcalc intermediate representation.

All tree and value types are re-exported from this package.
"""

from .expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    Grouping,
    NamedValueBinding,
    NameReference,
    Number,
    NumericLiteral,
    Program,
    Statement,
)

__all__ = [
    "BinaryExpr",
    "BinaryOp",
    "Expr",
    "Grouping",
    "NameReference",
    "NamedValueBinding",
    "Number",
    "NumericLiteral",
    "Program",
    "Statement",
]
