"""Source text with line bookkeeping and location lookup."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """A position in a source file; line and column are 1-based."""

    filename: str = ""
    line: int = 1
    column: int = 1
    offset: int = 0

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


class SourceBuffer:
    """Immutable source text that maps offsets to lines and columns."""

    def __init__(self, content: str, filename: str = "") -> None:
        self._content = content
        self._filename = filename
        self._line_starts = [0]
        self._line_starts.extend(
            index + 1 for index, ch in enumerate(content) if ch == "\n"
        )

    @property
    def content(self) -> str:
        return self._content

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def __len__(self) -> int:
        return len(self._content)

    def location_at(self, offset: int) -> SourceLocation:
        """Return the location of the character at ``offset``."""
        line, column = self.line_column_at(offset)
        return SourceLocation(self._filename, line, column, offset)

    def line_column_at(self, offset: int) -> tuple[int, int]:
        """Return the 1-based (line, column) of ``offset``, clamped to the end."""
        offset = min(offset, len(self._content))
        index = bisect_right(self._line_starts, offset) - 1
        return index + 1, offset - self._line_starts[index] + 1

    def line_content(self, line_number: int) -> str:
        """Return a line's text without its line ending, or '' if out of range."""
        if line_number < 1 or line_number > len(self._line_starts):
            return ""
        index = line_number - 1
        start = self._line_starts[index]
        if index + 1 < len(self._line_starts):
            end = self._line_starts[index + 1] - 1
        else:
            end = len(self._content)
        if end > start and self._content[end - 1] == "\r":
            end -= 1
        return self._content[start:end]

    def slice(self, start: int, end: int) -> str:
        """Return the text between two offsets, clamped to the buffer."""
        return self._content[start:end]

    def at(self, offset: int) -> str:
        """Return the character at ``offset``, or NUL outside the buffer."""
        if 0 <= offset < len(self._content):
            return self._content[offset]
        return "\0"