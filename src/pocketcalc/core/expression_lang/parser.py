"""
Recursive descent parser for pocketcalc.

Grammar (precedence low to high):
    program     → statement* expression
    statement   → "def" IDENT "=" expression ";"
    expression  → term
    term        → factor (("+"|"-") factor)*
    factor      → primary (("*"|"/") primary)*
    primary     → NUMBER | IDENT | "(" expression ")"

Both binary levels fold to the left, so ``10 - 3 - 2`` is ``(10 - 3) - 2``.
Operator chains are parsed in loops; only parentheses recurse, and at most
``MAX_NESTING_DEPTH`` groups may be open at once.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pocketcalc.core.errors import (
    ErrorContext,
    MalformedStatementError,
    NestingTooDeepError,
    ParseError,
    PocketcalcError,
    UnclosedGroupError,
    UnexpectedEndOfInputError,
    UnexpectedTokenError,
)
from pocketcalc.core.expression_lang.tokenizer import Token, TokenKind, tokenize
from pocketcalc.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    Grouping,
    NamedValueBinding,
    NameReference,
    NumericLiteral,
    Program,
)

logger = logging.getLogger(__name__)

MAX_NESTING_DEPTH = 100

_TERM_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.PLUS: BinaryOp.ADD,
    TokenKind.MINUS: BinaryOp.SUB,
}

_FACTOR_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.STAR: BinaryOp.MUL,
    TokenKind.SLASH: BinaryOp.DIV,
}


class _Parser:
    """Recursive descent parser over a token sequence."""

    def __init__(self, tokens: Sequence[Token]) -> None:
        self.tokens = tokens
        self.pos = 0
        self.depth = 0
        self._end = tokens[-1].pos + len(tokens[-1].value) if tokens else 0

    @property
    def current(self) -> Token:
        # Running off the end reads as EOF, same as an explicit EOF token
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return Token(TokenKind.EOF, "", self._end)

    def at_end(self) -> bool:
        return self.current.kind == TokenKind.EOF

    def advance(self) -> Token:
        tok = self.current
        if self.pos < len(self.tokens):
            self.pos += 1
        return tok

    def match(self, *kinds: TokenKind) -> Token | None:
        if self.current.kind in kinds:
            return self.advance()
        return None

    # -- Grammar rules --

    def parse_program(self) -> Program:
        """statement* expression"""
        statements: list[NamedValueBinding] = []
        while self.current.kind == TokenKind.DEF:
            statements.append(self.parse_statement())

        expression = self.parse_expression()

        if not self.at_end():
            raise UnexpectedTokenError(
                self.current,
                f"Unexpected token after expression: {self.current.value!r}",
            )

        return Program(statements=tuple(statements), expression=expression)

    def parse_statement(self) -> NamedValueBinding:
        """'def' IDENT '=' expression ';'"""
        self.advance()  # def

        name_tok = self.match(TokenKind.IDENT)
        if name_tok is None:
            raise MalformedStatementError(self.current, "a name after 'def'")

        if self.match(TokenKind.EQUAL) is None:
            raise MalformedStatementError(self.current, f"'=' after {name_tok.value!r}")

        value = self.parse_expression()

        if self.match(TokenKind.SEMICOLON) is None:
            raise MalformedStatementError(self.current, f"';' to end the binding of {name_tok.value!r}")

        logger.debug("Parsed binding for %r", name_tok.value)
        return NamedValueBinding(name=name_tok.value, value=value)

    def parse_expression(self) -> Expr:
        return self.parse_term()

    def parse_term(self) -> Expr:
        """factor (('+' | '-') factor)*"""
        left = self.parse_factor()
        while self.current.kind in _TERM_OPS:
            op = _TERM_OPS[self.advance().kind]
            right = self.parse_factor()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_factor(self) -> Expr:
        """primary (('*' | '/') primary)*"""
        left = self.parse_primary()
        while self.current.kind in _FACTOR_OPS:
            op = _FACTOR_OPS[self.advance().kind]
            right = self.parse_primary()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_primary(self) -> Expr:
        """NUMBER | IDENT | '(' expression ')'"""
        tok = self.current

        if tok.kind == TokenKind.EOF:
            raise UnexpectedEndOfInputError(tok.pos)

        if tok.kind == TokenKind.NUMBER:
            self.advance()
            return NumericLiteral(text=tok.value)

        if tok.kind == TokenKind.IDENT:
            self.advance()
            return NameReference(name=tok.value)

        if tok.kind == TokenKind.LPAREN:
            if self.depth >= MAX_NESTING_DEPTH:
                raise NestingTooDeepError(tok, MAX_NESTING_DEPTH)
            self.advance()
            self.depth += 1
            inner = self.parse_expression()
            self.depth -= 1
            if self.match(TokenKind.RPAREN) is None:
                raise UnclosedGroupError(self.current, tok.pos)
            return Grouping(inner=inner)

        raise UnexpectedTokenError(tok)


def parse(tokens: Sequence[Token]) -> Program:
    """Parse a token sequence into a program.

    An empty sequence, or one without a trailing ``EOF``, is accepted;
    reading past the last token behaves like reading ``EOF``.

    Raises:
        ParseError: On the first syntax error. No partial tree is returned.
    """
    return _Parser(tokens).parse_program()


def parse_program(source: str, *, identifier_fallback: bool = True) -> Program:
    """Tokenize and parse a line of source text.

    Errors raised here carry an ``ErrorContext`` pointing into ``source``.

    Args:
        source: Line of input (e.g., "def x = 2; x * 1.5")
        identifier_fallback: Passed through to ``tokenize``.

    Raises:
        LexError: If tokenization fails (strict lexer only).
        ParseError: If the token sequence is not a valid program.
    """
    try:
        tokens = tokenize(source, identifier_fallback=identifier_fallback)
        return parse(tokens)
    except PocketcalcError as e:
        attach_source_context(e, source)
        raise


def attach_source_context(error: PocketcalcError, source: str) -> PocketcalcError:
    """Give a lex or parse error an ``ErrorContext`` if it has a position."""
    if error.context is not None:
        return error
    pos = getattr(error, "pos", None)
    if pos is None:
        return error
    length = 1
    token = getattr(error, "token", None)
    if isinstance(token, Token) and token.value:
        length = len(token.value)
    return error.with_context(ErrorContext(source=source, column=pos + 1, length=length))


__all__ = ["MAX_NESTING_DEPTH", "ParseError", "parse", "parse_program"]
