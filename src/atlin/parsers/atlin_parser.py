# src/atlin/parsers/atlin_parser.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .lines import split_lines
from .markers import BLANK_CHARS, COMMENT_CHAR, ESCAPE_CHAR, MarkerSet

if TYPE_CHECKING:
    from atlin.config import AtlinConfig


@dataclass
class _ScanState:
    """Mutable state for a single parse call. Never shared between calls."""

    result: dict[str, str] = field(default_factory=dict)
    current_key: str | None = None  # None = orphan text, stored under ""
    buffer: list[str] = field(default_factory=list)
    has_value: bool = False
    pending_blanks: int = 0

    def add_blank(self) -> None:
        # Blank lines before the first key or value never surface
        if self.has_value or self.current_key is not None:
            self.pending_blanks += 1

    def add_line(self, line: str) -> None:
        if self.pending_blanks:
            self.buffer.append("\n" * self.pending_blanks)
            self.pending_blanks = 0

        if self.has_value:
            self.buffer.append("\n")
        self.buffer.append(line)
        self.has_value = True

    def start_key(self, key: str) -> None:
        # One blank is the visual separator; the rest belong to the value
        extra = self.pending_blanks - 1
        if extra > 0 and (self.has_value or self.current_key is not None):
            self.buffer.append("\n" * extra)
        self.pending_blanks = 0

        self.flush()
        self.current_key = key

    def finish(self) -> dict[str, str]:
        # Trailing blank lines at end of input are dropped
        self.pending_blanks = 0
        self.flush()
        return self.result

    def flush(self) -> None:
        if self.current_key is None and not self.has_value:
            self.pending_blanks = 0
            return

        key = self.current_key or ""
        value = "".join(self.buffer)

        if key in self.result:
            existing = self.result[key]
            if existing and value:
                self.result[key] = f"{existing}\n{value}"
            else:
                self.result[key] = existing + value
        else:
            self.result[key] = value

        self.buffer = []
        self.has_value = False
        self.pending_blanks = 0


class AtlinParser:
    """
    Single-pass parser for Atlin text.

    - Line starting with a marker declares a key
    - Following lines are the value
    - One blank line before a key is a separator, any others are content
    - Duplicate keys are concatenated
    - Leading backslash escapes a marker (or "#" when comments are on)

    Holds configuration only; safe to share between threads.
    """

    def __init__(
        self,
        markers: MarkerSet | None = None,
        comments: bool = True,
    ) -> None:
        self.markers = markers or MarkerSet.from_config(())
        # A "#" marker takes precedence over "#" comments
        self.comments = comments and COMMENT_CHAR not in self.markers

    @classmethod
    def from_config(cls, config: AtlinConfig) -> AtlinParser:
        return cls(
            markers=MarkerSet.from_config(config.markers),
            comments=config.comments,
        )

    def parse(self, source: str | bytes) -> dict[str, str]:
        if isinstance(source, bytes):
            source = source.decode("utf-8", errors="surrogateescape")

        state = _ScanState()

        for line in split_lines(source):
            if self.comments and line.startswith(COMMENT_CHAR):
                continue

            if len(line) > 1 and line[0] == ESCAPE_CHAR and self._escapable(line[1]):
                line = line[1:]
            elif line and line[0] in self.markers:
                state.start_key(line[1:])
                continue

            if not line.strip(BLANK_CHARS):
                state.add_blank()
                continue

            state.add_line(line)

        return state.finish()

    def _escapable(self, char: str) -> bool:
        return char in self.markers or (self.comments and char == COMMENT_CHAR)
