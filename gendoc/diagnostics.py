"""Error and warning reporting for a document build."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import replace

from .models import Position

Sink = Callable[[str], None]


class Diagnostics:
    """Collect soft errors and warnings while a document is built.

    Every message is prefixed with the current file and line, stored, and
    forwarded to `sink` when one is given. Errors increment `error_count`;
    warnings do not.

    Attributes:
        position: Current file and line, advanced by the scanner.
        error_count: Number of errors reported so far.
        messages: Every formatted message, in report order.
    """

    def __init__(self, sink: Sink | None = None):
        self.position = Position()
        self.error_count = 0
        self.messages: list[str] = []
        self._sink = sink

    def error(self, message: str, position: Position | None = None) -> None:
        where = position or self.position
        self._emit(f"gendoc error: {where}: {message}")
        self.error_count += 1

    def warning(self, message: str) -> None:
        self._emit(f"gendoc warning: {self.position}: {message}")

    def io_error(self, filename: object, message: str) -> None:
        """Report a problem with a whole file, using line 0."""
        self.error(message, Position(str(filename), 0))

    def snapshot(self) -> Position:
        return replace(self.position)

    def advance(self, text: str) -> None:
        """Move the line counter past every newline in `text`."""
        self.position.line += text.count("\n")

    @contextmanager
    def entering(self, filename: object) -> Iterator[Position]:
        """Switch to a new file for the duration of a nested parse.

        The previous position is restored on exit, also when the nested
        parse raises.
        """
        saved = self.position
        self.position = Position(str(filename), 1)
        try:
            yield self.position
        finally:
            self.position = saved

    def _emit(self, message: str) -> None:
        self.messages.append(message)
        if self._sink is not None:
            self._sink(message)
