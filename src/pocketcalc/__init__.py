"""
pocketcalc - a one-line arithmetic interpreter.

Evaluates numeric literals, ``+ - * /``, parentheses and ``def`` bindings:

    >>> from pocketcalc import evaluate_line
    >>> str(evaluate_line("def x = 1; def x = x + 1; x * 3"))
    '6.0'
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import EvalError, LexError, ParseError, PocketcalcError
from .core.runner import LineRunner, evaluate_line

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "EvalError",
    "LexError",
    "LineRunner",
    "ParseError",
    "PocketcalcError",
    "evaluate_line",
]
