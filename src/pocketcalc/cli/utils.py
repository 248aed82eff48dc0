"""
pocketcalc CLI Utilities.

Shared helpers used across CLI modules.
"""

from __future__ import annotations

import dataclasses
import logging
import platform

import typer

from pocketcalc._version import get_version
from pocketcalc.core.environment import DivisionPolicy, Settings, get_settings


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        settings = get_settings()
        typer.echo(f"pocketcalc version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:        {platform.python_implementation()} {platform.python_version()}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        typer.echo("")
        typer.echo("Settings:")
        typer.echo(f"  Division:      {settings.division.value}")
        typer.echo(f"  Strict lexer:  {'yes' if settings.strict_lexer else 'no'}")
        typer.echo(f"  Log level:     {settings.log_level}")
        raise typer.Exit()


def configure_logging(level: str | None) -> None:
    """Configure root logging once, from the option or the environment."""
    name = (level or get_settings().log_level).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        typer.echo(f"Unknown log level: {level}", err=True)
        raise typer.Exit(code=2)
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def resolve_settings(division: DivisionPolicy | None = None, strict: bool | None = None) -> Settings:
    """Environment settings with CLI overrides applied."""
    settings = get_settings()
    overrides: dict[str, object] = {}
    if division is not None:
        overrides["division"] = division
    if strict is not None:
        overrides["strict_lexer"] = strict
    return dataclasses.replace(settings, **overrides) if overrides else settings
