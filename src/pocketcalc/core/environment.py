"""
Environment configuration for pocketcalc.

Settings are read from environment variables. Unknown values are logged
and replaced by the default rather than rejected.

Environment variables:
    - POCKETCALC_DIVISION: division-by-zero policy, "error" (default) or "ieee"
    - POCKETCALC_STRICT_LEXER: "1"/"true"/"yes" to disable identifier fallback
    - POCKETCALC_LOG_LEVEL: root log level used by the CLI (default WARNING)

Usage:
    from pocketcalc.core.environment import get_settings

    settings = get_settings()
    settings.division  # DivisionPolicy.ERROR
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import StrEnum

logger = logging.getLogger(__name__)

DIVISION_ENV_VAR = "POCKETCALC_DIVISION"
STRICT_LEXER_ENV_VAR = "POCKETCALC_STRICT_LEXER"
LOG_LEVEL_ENV_VAR = "POCKETCALC_LOG_LEVEL"


class DivisionPolicy(StrEnum):
    """What dividing by zero produces."""

    ERROR = "error"  # raise DivisionByZeroError
    IEEE = "ieee"  # inf, -inf or nan


_DEFAULT_DIVISION = DivisionPolicy.ERROR
_DEFAULT_LOG_LEVEL = "WARNING"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one pipeline run."""

    division: DivisionPolicy = _DEFAULT_DIVISION
    strict_lexer: bool = False
    log_level: str = _DEFAULT_LOG_LEVEL

    @property
    def identifier_fallback(self) -> bool:
        return not self.strict_lexer


def get_division_policy() -> DivisionPolicy:
    """Get the division-by-zero policy from POCKETCALC_DIVISION.

    Examples:
        >>> import os
        >>> os.environ["POCKETCALC_DIVISION"] = "ieee"
        >>> get_division_policy()
        <DivisionPolicy.IEEE: 'ieee'>
    """
    raw = os.environ.get(DIVISION_ENV_VAR, "").lower().strip()
    if raw == "":
        return _DEFAULT_DIVISION
    try:
        return DivisionPolicy(raw)
    except ValueError:
        logger.warning(
            "Unknown %s value '%s'. Valid values: error, ieee. Defaulting to %s.",
            DIVISION_ENV_VAR,
            raw,
            _DEFAULT_DIVISION.value,
        )
        return _DEFAULT_DIVISION


def is_strict_lexer() -> bool:
    """Check POCKETCALC_STRICT_LEXER."""
    raw = os.environ.get(STRICT_LEXER_ENV_VAR, "").lower().strip()
    if raw in _TRUE_VALUES:
        return True
    if raw not in _FALSE_VALUES:
        logger.warning(
            "Unknown %s value '%s'. Defaulting to false.",
            STRICT_LEXER_ENV_VAR,
            raw,
        )
    return False


def get_log_level() -> str:
    """Get the log level name from POCKETCALC_LOG_LEVEL."""
    raw = os.environ.get(LOG_LEVEL_ENV_VAR, "").upper().strip()
    if raw == "":
        return _DEFAULT_LOG_LEVEL
    if not isinstance(logging.getLevelName(raw), int):
        logger.warning(
            "Unknown %s value '%s'. Defaulting to %s.",
            LOG_LEVEL_ENV_VAR,
            raw,
            _DEFAULT_LOG_LEVEL,
        )
        return _DEFAULT_LOG_LEVEL
    return raw


def get_settings() -> Settings:
    """Read all settings from the environment."""
    return Settings(
        division=get_division_policy(),
        strict_lexer=is_strict_lexer(),
        log_level=get_log_level(),
    )
