"""
pocketcalc expression language.

Tokenizer, parser, and evaluator for one line of arithmetic with
``def`` bindings.

Usage:
    from pocketcalc.core.expression_lang import evaluate, parse_program

    program = parse_program("def x = 2; x * (1 + 3)")
    result = evaluate(program)
    # result.value == 8.0
"""

from pocketcalc.core.expression_lang.evaluator import Environment, evaluate, evaluate_expr
from pocketcalc.core.expression_lang.parser import parse, parse_program
from pocketcalc.core.expression_lang.tokenizer import Token, TokenKind, tokenize

__all__ = [
    "Environment",
    "Token",
    "TokenKind",
    "evaluate",
    "evaluate_expr",
    "parse",
    "parse_program",
    "tokenize",
]
