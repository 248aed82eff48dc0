"""
One-shot CLI commands.

- eval: Evaluate a line and print its value
- tokens: Show the token stream for a line
- tree: Show the parsed program as a tree
"""

from __future__ import annotations

import json
import math
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from pocketcalc.cli.utils import resolve_settings
from pocketcalc.core.environment import DivisionPolicy
from pocketcalc.core.errors import PocketcalcError
from pocketcalc.core.expression_lang.parser import attach_source_context, parse_program
from pocketcalc.core.expression_lang.tokenizer import tokenize
from pocketcalc.core.ir.expressions import (
    BinaryExpr,
    Expr,
    Grouping,
    NameReference,
    NumericLiteral,
    Program,
)
from pocketcalc.core.runner import evaluate_line, format_error

console = Console()

_DIVISION_HELP = "Division-by-zero policy (overrides POCKETCALC_DIVISION)"
_STRICT_HELP = "Reject characters that are not valid in identifiers"


def _fail(error: PocketcalcError) -> NoReturn:
    typer.echo(format_error(error), err=True)
    raise typer.Exit(code=1)


def eval_command(
    expression: str = typer.Argument(..., help="Line to evaluate, e.g. 'def x = 2; x * 3'"),
    division: DivisionPolicy | None = typer.Option(None, "--division", "-d", help=_DIVISION_HELP),
    strict: bool | None = typer.Option(None, "--strict/--no-strict", help=_STRICT_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Evaluate one line and print its value."""
    settings = resolve_settings(division, strict)
    try:
        result = evaluate_line(expression, settings)
    except PocketcalcError as e:
        if as_json:
            payload = {"error": {"stage": e.stage, "kind": e.kind, "message": e.message}}
            typer.echo(json.dumps(payload))
            raise typer.Exit(code=1)
        _fail(e)

    if as_json:
        # Strict JSON has no inf or nan: those report a null value
        value = result.value if math.isfinite(result.value) else None
        typer.echo(json.dumps({"value": value, "text": str(result)}, allow_nan=False))
    else:
        typer.echo(str(result))


def tokens_command(
    expression: str = typer.Argument(..., help="Line to tokenize"),
    strict: bool | None = typer.Option(None, "--strict/--no-strict", help=_STRICT_HELP),
) -> None:
    """Show the tokens a line produces."""
    settings = resolve_settings(strict=strict)
    try:
        tokens = tokenize(expression, identifier_fallback=settings.identifier_fallback)
    except PocketcalcError as e:
        _fail(attach_source_context(e, expression))

    table = Table(title="Tokens")
    table.add_column("Kind", style="cyan")
    table.add_column("Text")
    table.add_column("Pos", justify="right")
    for tok in tokens:
        table.add_row(tok.kind.value, escape(tok.value), str(tok.pos))
    console.print(table)


def tree_command(
    expression: str = typer.Argument(..., help="Line to parse"),
    strict: bool | None = typer.Option(None, "--strict/--no-strict", help=_STRICT_HELP),
    flat: bool = typer.Option(False, "--flat", help="Print the fully parenthesised form instead"),
) -> None:
    """Show the parsed program."""
    settings = resolve_settings(strict=strict)
    try:
        program = parse_program(expression, identifier_fallback=settings.identifier_fallback)
    except PocketcalcError as e:
        _fail(e)

    if flat:
        typer.echo(str(program))
    else:
        console.print(_program_tree(program))


def _program_tree(program: Program) -> Tree:
    root = Tree("[bold]program[/bold]")
    for statement in program.statements:
        branch = root.add(f"[green]def[/green] {escape(statement.name)}")
        _add_expr(branch, statement.value)
    _add_expr(root.add("[bold]result[/bold]"), program.expression)
    return root


def _add_expr(parent: Tree, expr: Expr) -> None:
    if isinstance(expr, NumericLiteral):
        parent.add(f"[cyan]{escape(expr.text)}[/cyan]")
    elif isinstance(expr, NameReference):
        parent.add(f"[magenta]{escape(expr.name)}[/magenta]")
    elif isinstance(expr, Grouping):
        _add_expr(parent.add("( )"), expr.inner)
    elif isinstance(expr, BinaryExpr):
        node = parent.add(f"[yellow]{expr.op.value}[/yellow]")
        _add_expr(node, expr.left)
        _add_expr(node, expr.right)
