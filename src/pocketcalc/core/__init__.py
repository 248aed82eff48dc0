"""Core pocketcalc functionality: IR, tokenizer, parser, evaluator, line runner."""

from . import ir
from .errors import (
    ErrorContext,
    EvalError,
    LexError,
    ParseError,
    PocketcalcError,
)
from .runner import LineRunner, evaluate_line

__all__ = [
    "ir",
    "ErrorContext",
    "EvalError",
    "LexError",
    "LineRunner",
    "ParseError",
    "PocketcalcError",
    "evaluate_line",
]
