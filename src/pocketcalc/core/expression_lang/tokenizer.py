"""
Tokenizer for pocketcalc.

Converts one line of input into a sequence of typed tokens. Numeric
literals keep their exact source text; conversion to a number happens
at evaluation time.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import StrEnum, auto

from pocketcalc.core.errors import UnrecognizedCharacterError

logger = logging.getLogger(__name__)


class TokenKind(StrEnum):
    """Token types for pocketcalc."""

    # Literals and names
    NUMBER = auto()
    IDENT = auto()

    # Keywords and statement punctuation
    DEF = auto()
    EQUAL = auto()
    SEMICOLON = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()

    # Grouping
    LPAREN = auto()
    RPAREN = auto()

    # End of input
    EOF = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A single token. ``value`` is the exact source text, ``pos`` its offset."""

    kind: TokenKind
    value: str
    pos: int

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"


_SINGLE_CHAR: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "=": TokenKind.EQUAL,
    ";": TokenKind.SEMICOLON,
}

_KEYWORDS: dict[str, TokenKind] = {
    "def": TokenKind.DEF,
}

# digits, at most one dot, digits; no exponent
_NUMBER_RE = re.compile(r"[0-9]+(\.[0-9]*)?")
# Strict-mode identifier: ASCII letter or underscore, then alphanumerics/underscores
_STRICT_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def tokenize(source: str, *, identifier_fallback: bool = True) -> list[Token]:
    """Tokenize a line into a list of tokens ending with ``EOF``.

    Args:
        source: One line of input, newline already stripped.
        identifier_fallback: When true (the default) any run of characters
            that is not whitespace, an operator, or punctuation becomes an
            identifier, so tokenizing never fails. When false, identifiers
            are restricted to ``[A-Za-z_][A-Za-z0-9_]*`` and anything else
            raises.

    Raises:
        UnrecognizedCharacterError: Only when ``identifier_fallback`` is false.
    """
    tokens: list[Token] = []
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        # Skip whitespace
        if c.isspace():
            i += 1
            continue

        # Numbers
        if "0" <= c <= "9":
            m = _NUMBER_RE.match(source, i)
            assert m is not None
            tokens.append(Token(TokenKind.NUMBER, m.group(0), i))
            i = m.end()
            continue

        # Operators and punctuation
        if c in _SINGLE_CHAR:
            tokens.append(Token(_SINGLE_CHAR[c], c, i))
            i += 1
            continue

        # Identifiers and keywords
        if identifier_fallback:
            end = _scan_identifier(source, i)
        else:
            m = _STRICT_IDENT_RE.match(source, i)
            if m is None:
                raise UnrecognizedCharacterError(c, i)
            end = m.end()
        word = source[i:end]
        tokens.append(Token(_KEYWORDS.get(word, TokenKind.IDENT), word, i))
        i = end

    tokens.append(Token(TokenKind.EOF, "", n))
    logger.debug("Tokenized %d characters into %d tokens", n, len(tokens))
    return tokens


def _scan_identifier(source: str, start: int) -> int:
    """Return the end of the maximal identifier run starting at ``start``."""
    i = start
    n = len(source)
    while i < n and not source[i].isspace() and source[i] not in _SINGLE_CHAR:
        i += 1
    return i
