"""Shared pytest fixtures for pocketcalc tests."""

from __future__ import annotations

import pytest

from pocketcalc.core.environment import (
    DIVISION_ENV_VAR,
    LOG_LEVEL_ENV_VAR,
    STRICT_LEXER_ENV_VAR,
)


@pytest.fixture(autouse=True)
def _clean_pocketcalc_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test with no POCKETCALC_* variables set."""
    for name in (DIVISION_ENV_VAR, STRICT_LEXER_ENV_VAR, LOG_LEVEL_ENV_VAR):
        monkeypatch.delenv(name, raising=False)
