"""Version lookup for pocketcalc."""

from __future__ import annotations

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION = "pocketcalc"

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_version() -> str:
    """Installed distribution version.

    An uninstalled source checkout falls back to the ``[project]`` table
    of its pyproject.toml.
    """
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        return _version_from_pyproject()


def _version_from_pyproject() -> str:
    try:
        with _PYPROJECT.open("rb") as f:
            return str(tomllib.load(f)["project"]["version"])
    except (OSError, KeyError, tomllib.TOMLDecodeError):
        return "0+unknown"
