"""
Error types for pocketcalc lexing, parsing, and evaluation.

Each pipeline stage raises one family of errors. The first error raised
aborts the line; nothing is recovered or defaulted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from pocketcalc.core.expression_lang.tokenizer import Token


@dataclass(frozen=True)
class ErrorContext:
    """
    Source location of an error within a single input line.

    Attributes:
        source: The full input line
        column: Column number (1-indexed)
        length: Width of the offending span, at least 1
    """

    source: str
    column: int
    length: int = 1

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like "col 5" followed by the source line and
            a marker under the offending span.
        """
        return f"col {self.column}\n{self._format_snippet()}"

    def _format_snippet(self) -> str:
        prefix = "  | "
        marker_pos = len(prefix) + self.column - 1
        marker = "^" * max(1, self.length)
        return f"{prefix}{self.source}\n{' ' * marker_pos}{marker}"


class PocketcalcError(Exception):
    """Base exception for all pocketcalc errors."""

    stage: ClassVar[str] = "pocketcalc"
    kind: ClassVar[str] = "Error"

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        return f"{self.stage} error: {self.message}"

    def with_context(self, context: ErrorContext) -> PocketcalcError:
        """Attach source context in place and return the same error."""
        self.context = context
        return self


# ---------------------------------------------------------------------------
# Lexing
# ---------------------------------------------------------------------------


class LexError(PocketcalcError):
    """Raised when input text cannot be split into tokens."""

    stage = "lex"


class UnrecognizedCharacterError(LexError):
    """A character no token class accepts (strict lexer only)."""

    kind = "UnrecognizedCharacter"

    def __init__(self, char: str, pos: int):
        self.char = char
        self.pos = pos
        super().__init__(f"Unrecognized character {char!r} at position {pos}")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class ParseError(PocketcalcError):
    """
    Raised when a token sequence is not a valid program.

    Examples:
    - Empty input
    - An operator where a number was expected
    - A ``def`` without ``=`` or ``;``
    - An unclosed ``(``
    """

    stage = "parse"

    def __init__(self, message: str, pos: int, context: ErrorContext | None = None):
        self.pos = pos
        super().__init__(message, context)


class UnexpectedEndOfInputError(ParseError):
    kind = "UnexpectedEndOfInput"

    def __init__(self, pos: int):
        super().__init__("Unexpected end of input", pos)


class UnexpectedTokenError(ParseError):
    kind = "UnexpectedToken"

    def __init__(self, token: Token, message: str | None = None):
        self.token = token
        super().__init__(message or f"Unexpected token {token.value!r}", token.pos)


class MalformedStatementError(ParseError):
    kind = "MalformedStatement"

    def __init__(self, token: Token, expected: str):
        self.token = token
        self.expected = expected
        found = repr(token.value) if token.value else "end of input"
        super().__init__(f"Malformed statement: expected {expected}, found {found}", token.pos)


class UnclosedGroupError(ParseError):
    kind = "UnclosedGroup"

    def __init__(self, token: Token, open_pos: int):
        self.token = token
        self.open_pos = open_pos
        found = repr(token.value) if token.value else "end of input"
        super().__init__(
            f"Unclosed group: '(' at position {open_pos} needs ')', found {found}",
            token.pos,
        )


class NestingTooDeepError(ParseError):
    kind = "NestingTooDeep"

    def __init__(self, token: Token, limit: int):
        self.token = token
        self.limit = limit
        super().__init__(f"Groups nested deeper than {limit} levels", token.pos)


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


class EvalError(PocketcalcError):
    """Raised when a well-formed program cannot be reduced to a number."""

    stage = "eval"


class InvalidNumberError(EvalError):
    kind = "InvalidNumber"

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Invalid number: {text!r}")


class UndefinedNameError(EvalError):
    kind = "UndefinedName"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Undefined name: {name!r}")


class DivisionByZeroError(EvalError):
    kind = "DivisionByZero"

    def __init__(self, dividend: float):
        self.dividend = dividend
        super().__init__(f"Division by zero: {dividend!r} / 0")
