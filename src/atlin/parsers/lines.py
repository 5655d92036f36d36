# src/atlin/parsers/lines.py


def split_lines(text: str) -> list[str]:
    """Split text into logical lines, treating \\r\\n, \\r and \\n alike."""
    if not text:
        return []
    # str.splitlines() would also break on \f, \v and unicode separators
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
