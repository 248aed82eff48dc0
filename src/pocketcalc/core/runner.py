"""
Line runner: tokenize, parse, and evaluate one line at a time.

``evaluate_line`` is the whole pipeline for a single line. ``LineRunner``
is the read/print loop around it; it never stops on an evaluation error,
only on ``quit`` or end of input.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from pocketcalc.core.environment import Settings, get_settings
from pocketcalc.core.errors import PocketcalcError
from pocketcalc.core.expression_lang.evaluator import evaluate
from pocketcalc.core.expression_lang.parser import attach_source_context, parse
from pocketcalc.core.expression_lang.tokenizer import tokenize
from pocketcalc.core.ir.expressions import Number

logger = logging.getLogger(__name__)

PROMPT = "> "
QUIT_COMMAND = "quit"


def evaluate_line(line: str, settings: Settings | None = None) -> Number:
    """Run one line through the whole pipeline.

    Args:
        line: Input text, newline already stripped.
        settings: Pipeline settings. Read from the environment if omitted.

    Returns:
        The line's value.

    Raises:
        PocketcalcError: The first lex, parse, or eval error encountered.
    """
    settings = settings or get_settings()
    try:
        tokens = tokenize(line, identifier_fallback=settings.identifier_fallback)
        program = parse(tokens)
    except PocketcalcError as e:
        attach_source_context(e, line)
        raise
    return evaluate(program, division=settings.division)


def format_error(error: PocketcalcError) -> str:
    """Render an error message, followed by its source marker if known."""
    if error.context is None:
        return str(error)
    return f"{error}\n{error.context.format()}"


class LineRunner:
    """Read lines, evaluate them, and write results until ``quit``.

    Args:
        read: Called with the prompt; returns the next line or raises
            ``EOFError`` when input is exhausted.
        write: Called with each rendered result or error message.
        settings: Pipeline settings shared by every line.
    """

    def __init__(
        self,
        read: Callable[[str], str],
        write: Callable[[str], None],
        settings: Settings | None = None,
    ) -> None:
        self.read = read
        self.write = write
        self.settings = settings or get_settings()

    def run(self) -> int:
        """Run until ``quit`` or end of input. Returns lines evaluated."""
        evaluated = 0
        while True:
            try:
                raw = self.read(PROMPT)
            except EOFError:
                logger.debug("End of input after %d line(s)", evaluated)
                break

            line = raw.strip()
            if line == QUIT_COMMAND:
                break

            self.write(self.run_line(line))
            evaluated += 1
        return evaluated

    def run_line(self, line: str) -> str:
        """Evaluate one line and render its value or error."""
        try:
            return str(evaluate_line(line, self.settings))
        except PocketcalcError as e:
            logger.debug("Line failed at %s stage: %s", e.stage, e.kind)
            return format_error(e)
