"""Tests for the pocketcalc CLI commands."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from pocketcalc.cli import __version__, app
from pocketcalc.cli import repl as repl_module

runner = CliRunner()


# ---------------------------------------------------------------------------
# pocketcalc eval
# ---------------------------------------------------------------------------


class TestEval:
    def test_precedence(self) -> None:
        result = runner.invoke(app, ["eval", "1 + 2 * 3"])
        assert result.exit_code == 0
        assert result.output.strip() == "7.0"

    def test_bindings(self) -> None:
        result = runner.invoke(app, ["eval", "def x = 1; def x = x + 1; x"])
        assert result.exit_code == 0
        assert result.output.strip() == "2.0"

    def test_parse_error(self) -> None:
        result = runner.invoke(app, ["eval", "(1 + 2"])
        assert result.exit_code == 1
        assert "parse error: Unclosed group" in result.output
        assert "^" in result.output

    def test_division_by_zero_default(self) -> None:
        result = runner.invoke(app, ["eval", "1 / 0"])
        assert result.exit_code == 1
        assert "Division by zero" in result.output

    def test_division_option(self) -> None:
        result = runner.invoke(app, ["eval", "--division", "ieee", "1 / 0"])
        assert result.exit_code == 0
        assert result.output.strip() == "inf"

    def test_division_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("POCKETCALC_DIVISION", "ieee")
        result = runner.invoke(app, ["eval", "0 / 0"])
        assert result.exit_code == 0
        assert result.output.strip() == "nan"

    def test_strict_option(self) -> None:
        result = runner.invoke(app, ["eval", "--strict", "def a@b = 1; a@b"])
        assert result.exit_code == 1
        assert "lex error" in result.output

    def test_json_value(self) -> None:
        result = runner.invoke(app, ["eval", "--json", "def r = 2; r * r"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"value": 4.0, "text": "4.0"}

    @pytest.mark.parametrize(("expression", "text"), [("1 / 0", "inf"), ("0 - 1 / 0", "-inf"), ("0 / 0", "nan")])
    def test_json_non_finite_is_strict(self, expression: str, text: str) -> None:
        result = runner.invoke(app, ["eval", "--json", "--division", "ieee", expression])
        assert result.exit_code == 0
        assert "Infinity" not in result.output
        assert "NaN" not in result.output
        assert json.loads(result.output) == {"value": None, "text": text}

    def test_json_error(self) -> None:
        result = runner.invoke(app, ["eval", "--json", "y + 1"])
        assert result.exit_code == 1
        payload = json.loads(result.output)
        assert payload["error"]["stage"] == "eval"
        assert payload["error"]["kind"] == "UndefinedName"
        assert payload["error"]["message"] == "Undefined name: 'y'"


# ---------------------------------------------------------------------------
# pocketcalc tokens / tree
# ---------------------------------------------------------------------------


class TestTokens:
    def test_table(self) -> None:
        result = runner.invoke(app, ["tokens", "def x = 1;"])
        assert result.exit_code == 0
        for kind in ("def", "ident", "equal", "number", "semicolon", "eof"):
            assert kind in result.output

    def test_strict_error(self) -> None:
        result = runner.invoke(app, ["tokens", "--strict", "a $ b"])
        assert result.exit_code == 1
        assert "Unrecognized character" in result.output


class TestTree:
    def test_flat(self) -> None:
        result = runner.invoke(app, ["tree", "--flat", "def x = 1; x + 2 * 3"])
        assert result.exit_code == 0
        assert result.output.strip() == "def x = 1; (x + (2 * 3))"

    def test_tree(self) -> None:
        result = runner.invoke(app, ["tree", "def x = 1; (x + 2) * 3"])
        assert result.exit_code == 0
        assert "program" in result.output
        assert "def" in result.output
        assert "x" in result.output
        assert "result" in result.output

    def test_parse_error(self) -> None:
        result = runner.invoke(app, ["tree", "def x 1; x"])
        assert result.exit_code == 1
        assert "Malformed statement" in result.output


# ---------------------------------------------------------------------------
# pocketcalc repl
# ---------------------------------------------------------------------------


class TestRepl:
    def test_evaluates_until_quit(self) -> None:
        result = runner.invoke(app, ["repl"], input="1 + 2\ny\nquit\n4 * 4\n")
        assert result.exit_code == 0
        assert "3.0" in result.output
        assert "Undefined name" in result.output
        assert "16.0" not in result.output

    def test_stops_at_end_of_input(self) -> None:
        result = runner.invoke(app, ["repl", "--division", "ieee"], input="1 / 0\n")
        assert result.exit_code == 0
        assert "inf" in result.output

    def test_interrupt_exits_without_traceback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def interrupted(prompt: str = "") -> str:
            raise KeyboardInterrupt

        monkeypatch.setattr(repl_module.console, "input", interrupted)
        result = runner.invoke(app, ["repl"])
        assert result.exit_code == 130
        assert "Traceback" not in result.output
        assert not isinstance(result.exception, KeyboardInterrupt)


# ---------------------------------------------------------------------------
# Global options
# ---------------------------------------------------------------------------


class TestGlobalOptions:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"pocketcalc version {__version__}" in result.output
        assert "Division:      error" in result.output

    def test_unknown_log_level(self) -> None:
        result = runner.invoke(app, ["--log-level", "chatty", "eval", "1"])
        assert result.exit_code == 2
        assert "Unknown log level" in result.output

    def test_no_args_shows_help(self) -> None:
        result = runner.invoke(app, [])
        assert "eval" in result.output
        assert "repl" in result.output
