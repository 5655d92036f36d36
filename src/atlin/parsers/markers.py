# src/atlin/parsers/markers.py

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

DEFAULT_MARKER = "@"
COMMENT_CHAR = "#"
ESCAPE_CHAR = "\\"
# Characters that make a line blank; other whitespace is content
BLANK_CHARS = " \t\n\r\0\x0b"


@dataclass(frozen=True)
class MarkerSet:
    """Ordered set of key-marker characters.

    The first marker is the primary one, used when serializing.
    Membership checks go through a frozenset built once at construction.
    """

    markers: tuple[str, ...]
    _lookup: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.markers:
            raise ValueError("MarkerSet requires at least one marker")
        object.__setattr__(self, "_lookup", frozenset(self.markers))

    @classmethod
    def from_config(cls, markers: Iterable[str]) -> "MarkerSet":
        """
        Build a marker set from user configuration.

        - Empty strings are ignored
        - Duplicates keep their first position
        - Falls back to "@" when nothing usable is left
        """
        ordered: list[str] = []
        for marker in markers:
            if not marker:
                continue
            if len(marker) != 1:
                raise ValueError(f"Marker must be a single character: {marker!r}")
            if marker == ESCAPE_CHAR or marker.isspace():
                raise ValueError(f"Invalid marker character: {marker!r}")
            if marker not in ordered:
                ordered.append(marker)

        return cls(tuple(ordered) or (DEFAULT_MARKER,))

    @property
    def primary(self) -> str:
        return self.markers[0]

    def __contains__(self, char: object) -> bool:
        return char in self._lookup

    def __iter__(self) -> Iterator[str]:
        return iter(self.markers)

    def __len__(self) -> int:
        return len(self.markers)
