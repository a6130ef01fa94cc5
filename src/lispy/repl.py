"""Interactive read-eval-print loop.

A ReplSession owns the process-lifetime resources (the compiled grammar and
the line history) and releases them on every exit path:

    with ReplSession(config) as session:
        print(session.process_line("(+ 1 2)"))
"""

import logging
from pathlib import Path
from typing import Callable

import click

from lispy.config import ReplConfig
from lispy.evaluator import Evaluator
from lispy.grammar import Grammar, NestingError, ParseError
from lispy.printer import to_text
from lispy.reader import read

try:
    import readline
except ImportError:  # no GNU readline on this platform
    readline = None

logger = logging.getLogger(__name__)

VERSION = "0.0.1"
BANNER = f"Lispy version {VERSION}"

COMMENT_PREFIX = "/"


def should_process(line: str) -> bool:
    """Check whether a line is evaluated and kept in history.

    Blank lines and lines starting with ``/`` are skipped entirely.
    """
    return bool(line.strip()) and not line.startswith(COMMENT_PREFIX)


class History:
    """Line history persisted to a file through readline."""

    def __init__(self, path: Path, max_length: int = 1000):
        self.path = path
        self.max_length = max_length

    @property
    def enabled(self) -> bool:
        return readline is not None

    def load(self) -> None:
        """Replace the in-memory history with the file's contents."""
        if not self.enabled:
            logger.warning("readline is not available; history is disabled")
            return

        readline.clear_history()
        readline.set_history_length(self.max_length)
        # Only lines passed to add() are remembered
        readline.set_auto_history(False)

        if not self.path.exists():
            logger.debug("No history file at %s", self.path)
            return
        try:
            readline.read_history_file(str(self.path))
        except OSError as e:
            logger.warning("Could not read history file %s: %s", self.path, e)
            return
        logger.debug("Loaded %d history entries from %s", len(self), self.path)

    def add(self, line: str) -> None:
        if self.enabled:
            readline.add_history(line)

    def save(self) -> None:
        """Write the history to its file, creating parent directories."""
        if not self.enabled:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            readline.write_history_file(str(self.path))
        except OSError as e:
            logger.warning("Could not write history file %s: %s", self.path, e)
            return
        logger.debug("Saved %d history entries to %s", len(self), self.path)

    def entries(self) -> list[str]:
        if not self.enabled:
            return []
        return [readline.get_history_item(i) for i in range(1, len(self) + 1)]

    def __len__(self) -> int:
        if not self.enabled:
            return 0
        return readline.get_current_history_length()


class ReplSession:
    """Scoped owner of the grammar and history for one interactive run."""

    def __init__(self, config: ReplConfig | None = None):
        self.config = config or ReplConfig()
        self.evaluator = Evaluator()
        self.grammar: Grammar | None = None
        self.history: History | None = None
        if self.config.history_enabled:
            self.history = History(self.config.history_path, self.config.history_length)

    def __enter__(self) -> "ReplSession":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        self.grammar = Grammar()
        if self.history is not None:
            self.history.load()

    def close(self) -> None:
        try:
            if self.history is not None:
                self.history.save()
        finally:
            self.grammar = None

    def process_line(self, line: str) -> str | None:
        """Evaluate one input line and return the text to print.

        Returns None for skipped lines, and a diagnostic for lines that do
        not parse or nest too deeply to evaluate.
        """
        if self.grammar is None:
            raise RuntimeError("ReplSession is not open")

        if not should_process(line):
            return None

        if self.history is not None:
            self.history.add(line)

        try:
            node = self.grammar.parse(line)
            result = to_text(self.evaluator.evaluate(read(node)))
            tree = node.pretty() if self.config.show_tree else None
        except ParseError as e:
            return e.diagnostic()
        except RecursionError:
            logger.debug("Nesting limit hit for line of length %d", len(line))
            return NestingError().diagnostic()

        if tree is not None:
            return f"{tree}\n{result}"
        return result


def run_repl(
    config: ReplConfig | None = None,
    input_func: Callable[[str], str] = input,
    output: Callable[[str], None] = click.echo,
) -> None:
    """Run the loop until end of input or Ctrl+C."""
    config = config or ReplConfig()

    output(BANNER)
    output("Press Ctrl+C to exit\n")

    with ReplSession(config) as session:
        while True:
            try:
                line = input_func(config.prompt)
            except (EOFError, KeyboardInterrupt):
                output("")
                break

            result = session.process_line(line)
            if result is not None:
                output(result)
