from .atlin_parser import AtlinParser
from .lines import split_lines
from .markers import COMMENT_CHAR, DEFAULT_MARKER, ESCAPE_CHAR, MarkerSet
from .serializer import serialize

__all__ = [
    "AtlinParser",
    "MarkerSet",
    "serialize",
    "split_lines",
    "COMMENT_CHAR",
    "DEFAULT_MARKER",
    "ESCAPE_CHAR",
]
