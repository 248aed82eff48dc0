"""
Evaluator for pocketcalc programs.

Walks the tree produced by the parser and reduces it to a ``Number``.
Pure evaluation: no I/O, no state kept between calls. Does NOT use
Python's eval().
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from types import MappingProxyType

from pocketcalc.core.environment import DivisionPolicy, get_division_policy
from pocketcalc.core.errors import (
    DivisionByZeroError,
    EvalError,
    InvalidNumberError,
    UndefinedNameError,
)
from pocketcalc.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    Grouping,
    NameReference,
    Number,
    NumericLiteral,
    Program,
)

logger = logging.getLogger(__name__)


class Environment:
    """Names bound so far on the current line.

    Bindings are only ever added; binding an existing name shadows it.
    """

    def __init__(self, bindings: Mapping[str, float] | None = None) -> None:
        self._values: dict[str, float] = dict(bindings or {})

    def bind(self, name: str, value: float) -> None:
        if name in self._values:
            logger.debug("Shadowing binding for %r", name)
        self._values[name] = value

    def lookup(self, name: str) -> float:
        try:
            return self._values[name]
        except KeyError:
            raise UndefinedNameError(name) from None

    def freeze(self) -> Mapping[str, float]:
        """Read-only view of the current bindings."""
        return MappingProxyType(self._values)


def evaluate(program: Program, *, division: DivisionPolicy | None = None) -> Number:
    """Evaluate a program to a single number.

    Statements are evaluated in order, each seeing the bindings made
    before it. The trailing expression is evaluated against the final
    bindings.

    Args:
        program: Parsed program.
        division: Division-by-zero policy. Defaults to the configured
            policy (see ``pocketcalc.core.environment``).

    Returns:
        The value of the trailing expression.

    Raises:
        EvalError: If evaluation fails.
    """
    policy = division if division is not None else get_division_policy()
    logger.debug("Evaluating %d statement(s) with division policy %s", len(program.statements), policy)

    env = Environment()
    for statement in program.statements:
        value = _interpret(statement.value, env, policy)
        env.bind(statement.name, value)

    return Number(value=_interpret(program.expression, env, policy))


def evaluate_expr(
    expr: Expr,
    bindings: Mapping[str, float] | None = None,
    *,
    division: DivisionPolicy | None = None,
) -> float:
    """Evaluate a single expression against an optional set of bindings."""
    policy = division if division is not None else get_division_policy()
    return _interpret(expr, Environment(bindings), policy)


def _interpret(expr: Expr, env: Environment, policy: DivisionPolicy) -> float:
    """Reduce an expression to a float.

    Uses an explicit work stack so long operator chains do not grow the
    Python call stack. A ``BinaryOp`` on the stack means both of its
    operands are already on ``values``; the left operand is always
    evaluated first.
    """
    pending: list[Expr | BinaryOp] = [expr]
    values: list[float] = []

    while pending:
        item = pending.pop()

        if isinstance(item, BinaryOp):
            right = values.pop()
            left = values.pop()
            values.append(_apply(item, left, right, policy))
        elif isinstance(item, NumericLiteral):
            values.append(_parse_number(item.text))
        elif isinstance(item, NameReference):
            values.append(env.lookup(item.name))
        elif isinstance(item, Grouping):
            pending.append(item.inner)
        elif isinstance(item, BinaryExpr):
            pending.extend((item.op, item.right, item.left))
        else:
            raise EvalError(f"Unknown expression type: {type(item).__name__}")

    return values.pop()


def _parse_number(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise InvalidNumberError(text) from None


def _apply(op: BinaryOp, left: float, right: float, policy: DivisionPolicy) -> float:
    if op == BinaryOp.ADD:
        return left + right
    if op == BinaryOp.SUB:
        return left - right
    if op == BinaryOp.MUL:
        return left * right
    if op == BinaryOp.DIV:
        return _divide(left, right, policy)

    raise EvalError(f"Unknown binary op: {op}")


def _divide(left: float, right: float, policy: DivisionPolicy) -> float:
    if right != 0.0:
        return left / right

    if policy == DivisionPolicy.ERROR:
        raise DivisionByZeroError(left)

    # IEEE-754: x/±0 is ±inf with the XOR of the signs, 0/0 and nan/0 are nan
    if left == 0.0 or math.isnan(left):
        return math.nan
    return math.copysign(math.inf, left) * math.copysign(1.0, right)
