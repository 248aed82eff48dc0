"""
pocketcalc CLI Package.

- evaluate.py: eval, tokens and tree commands
- repl.py: interactive loop
- utils.py: Shared utilities
"""

from __future__ import annotations

import typer

from pocketcalc._version import get_version
from pocketcalc.cli.evaluate import eval_command, tokens_command, tree_command
from pocketcalc.cli.repl import repl_command
from pocketcalc.cli.utils import configure_logging, version_callback

__version__ = get_version()

app = typer.Typer(
    help="""pocketcalc: one-line arithmetic interpreter

Examples:
  pocketcalc eval "1 + 2 * 3"
  pocketcalc eval "def r = 2; 3.14159 * r * r"
  pocketcalc repl
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Log level (overrides POCKETCALC_LOG_LEVEL)",
    ),
) -> None:
    """pocketcalc CLI main callback for global options."""
    configure_logging(log_level)


app.command(name="eval")(eval_command)
app.command(name="tokens")(tokens_command)
app.command(name="tree")(tree_command)
app.command(name="repl")(repl_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = ["__version__", "app", "main"]
