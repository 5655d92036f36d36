# src/atlin/errors.py


class AtlinError(Exception):
    """Base class for errors raised by atlin."""


class SourceReadError(AtlinError):
    """A source file could not be read."""


class CacheError(AtlinError):
    """A cache backend failed to complete an operation."""
