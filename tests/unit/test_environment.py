"""Tests for pocketcalc.core.environment."""

from __future__ import annotations

import logging

import pytest

from pocketcalc.core.environment import (
    DivisionPolicy,
    Settings,
    get_division_policy,
    get_log_level,
    get_settings,
    is_strict_lexer,
)


class TestDivisionPolicy:
    def test_default(self) -> None:
        assert get_division_policy() == DivisionPolicy.ERROR

    @pytest.mark.parametrize("raw", ["ieee", "IEEE", "  ieee "])
    def test_ieee(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv("POCKETCALC_DIVISION", raw)
        assert get_division_policy() == DivisionPolicy.IEEE

    def test_unknown_value_warns(self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
        monkeypatch.setenv("POCKETCALC_DIVISION", "saturate")
        with caplog.at_level(logging.WARNING, logger="pocketcalc.core.environment"):
            assert get_division_policy() == DivisionPolicy.ERROR
        assert "saturate" in caplog.text


class TestStrictLexer:
    def test_default(self) -> None:
        assert is_strict_lexer() is False

    @pytest.mark.parametrize("raw", ["1", "true", "YES", "on"])
    def test_enabled(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv("POCKETCALC_STRICT_LEXER", raw)
        assert is_strict_lexer() is True

    @pytest.mark.parametrize("raw", ["0", "false", "no", "off"])
    def test_disabled(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv("POCKETCALC_STRICT_LEXER", raw)
        assert is_strict_lexer() is False

    def test_unknown_value_warns(self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
        monkeypatch.setenv("POCKETCALC_STRICT_LEXER", "maybe")
        with caplog.at_level(logging.WARNING, logger="pocketcalc.core.environment"):
            assert is_strict_lexer() is False
        assert "maybe" in caplog.text


class TestLogLevel:
    def test_default(self) -> None:
        assert get_log_level() == "WARNING"

    def test_valid(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("POCKETCALC_LOG_LEVEL", "debug")
        assert get_log_level() == "DEBUG"

    def test_unknown_value_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("POCKETCALC_LOG_LEVEL", "chatty")
        assert get_log_level() == "WARNING"


class TestSettings:
    def test_defaults(self) -> None:
        settings = get_settings()
        assert settings == Settings()
        assert settings.identifier_fallback is True

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("POCKETCALC_DIVISION", "ieee")
        monkeypatch.setenv("POCKETCALC_STRICT_LEXER", "1")
        monkeypatch.setenv("POCKETCALC_LOG_LEVEL", "INFO")
        assert get_settings() == Settings(
            division=DivisionPolicy.IEEE,
            strict_lexer=True,
            log_level="INFO",
        )
        assert get_settings().identifier_fallback is False
