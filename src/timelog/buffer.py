"""Line buffer protocol and an in-memory implementation."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol

from .models.editor import Position


def utf16_length(text: str) -> int:
    """Length of text in UTF-16 code units."""
    return len(text.encode("utf-16-le")) // 2


def to_utf16_column(text: str, index: int) -> int:
    """Convert a str index into a UTF-16 column."""
    return utf16_length(text[:index])


def from_utf16_column(text: str, column: int) -> int:
    """Convert a UTF-16 column into a str index.

    Columns past the end clamp to the line length; a column inside a
    surrogate pair rounds up to the following character.
    """
    units = 0
    for index, char in enumerate(text):
        if units >= column:
            return index
        units += 2 if ord(char) > 0xFFFF else 1
    return len(text)


class LineBuffer(Protocol):
    """The editing surface the core reads from and mutates."""

    def line_count(self) -> int:
        ...

    def get_line(self, index: int) -> str:
        ...

    def get_cursor(self) -> Position:
        ...

    def set_cursor(self, position: Position) -> None:
        ...

    def replace_range(self, text: str, start: Position, end: Optional[Position] = None) -> None:
        ...

    def scroll_into_view(self, start: Position, end: Position, center: bool = False) -> None:
        ...


class TextBuffer:
    """In-memory LineBuffer over a list of lines."""

    def __init__(self, lines: list[str] | None = None, cursor: Position | None = None):
        self._lines = list(lines) if lines else [""]
        self._cursor = cursor or Position(line=0, column=0)
        self.scrolled_to: Optional[tuple[Position, Position, bool]] = None

    @classmethod
    def from_text(cls, text: str, cursor: Position | None = None) -> "TextBuffer":
        return cls(text.split("\n"), cursor)

    @classmethod
    def from_path(cls, path: Path, cursor: Position | None = None) -> "TextBuffer":
        return cls.from_text(path.read_text(encoding="utf-8"), cursor)

    def text(self) -> str:
        return "\n".join(self._lines)

    def lines(self) -> list[str]:
        return list(self._lines)

    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def get_cursor(self) -> Position:
        return self._cursor

    def set_cursor(self, position: Position) -> None:
        self._cursor = self._clip(position)

    def replace_range(self, text: str, start: Position, end: Optional[Position] = None) -> None:
        start = self._clip(start)
        end = self._clip(end) if end is not None else start
        if (end.line, end.column) < (start.line, start.column):
            start, end = end, start

        first = self._lines[start.line]
        last = self._lines[end.line]
        head = first[: from_utf16_column(first, start.column)]
        tail = last[from_utf16_column(last, end.column):]

        replacement = (head + text + tail).split("\n")
        self._lines[start.line : end.line + 1] = replacement

    def scroll_into_view(self, start: Position, end: Position, center: bool = False) -> None:
        self.scrolled_to = (start, end, center)

    def _clip(self, position: Position) -> Position:
        line = min(position.line, len(self._lines) - 1)
        column = min(position.column, utf16_length(self._lines[line]))
        if (line, column) == (position.line, position.column):
            return position
        return Position(line=line, column=column)
