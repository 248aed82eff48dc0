"""Interactive read/evaluate/print loop."""

from __future__ import annotations

import typer
from rich.console import Console

from pocketcalc.cli.utils import resolve_settings
from pocketcalc.core.environment import DivisionPolicy
from pocketcalc.core.runner import LineRunner

console = Console()


def repl_command(
    division: DivisionPolicy | None = typer.Option(
        None,
        "--division",
        "-d",
        help="Division-by-zero policy (overrides POCKETCALC_DIVISION)",
    ),
    strict: bool | None = typer.Option(
        None,
        "--strict/--no-strict",
        help="Reject characters that are not valid in identifiers",
    ),
) -> None:
    """Evaluate lines until 'quit' or end of input."""
    runner = LineRunner(
        read=console.input,
        write=lambda text: console.print(text, markup=False, highlight=False),
        settings=resolve_settings(division, strict),
    )
    try:
        runner.run()
    except KeyboardInterrupt:
        console.print()
        raise typer.Exit(code=130) from None
