# src/atlin/parsers/serializer.py

from collections.abc import Mapping

from .markers import DEFAULT_MARKER


def serialize(
    data: Mapping[str, str],
    *,
    marker: str = DEFAULT_MARKER,
    blank_lines: bool = True,
) -> str:
    """
    Render a mapping as Atlin text.

    Values are written verbatim. A value line that starts with a marker
    or comment character is not escaped and will not read back as-is.
    """
    if not data:
        return ""

    separator = "\n\n" if blank_lines else "\n"
    return separator.join(f"{marker}{key}\n{value}" for key, value in data.items())
