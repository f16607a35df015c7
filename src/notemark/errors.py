"""Exception classes for notemark.

Grammar mismatches never raise: recognizers return ``None`` and the next
alternative is tried. Exceptions are reserved for failures a caller must see.
"""

from __future__ import annotations


class NotemarkError(Exception):
    """Base exception for all notemark errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(NotemarkError):
    """A block could not be parsed.

    Raised by the top-level entry point when the input cannot be decoded or
    an internal scanner invariant is violated. Ordinary malformed markup is
    never an error; it falls back to literal text.
    """

    def __init__(self, message: str, offset: int | None = None) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            offset: Character (or byte, for undecodable input) offset where
                the error occurred
        """
        self.message = message
        self.offset = offset

        location = f"offset {offset}: " if offset is not None else ""
        super().__init__(f"{location}{message}")


class ConfigError(NotemarkError):
    """Invalid configuration value."""

    def __init__(self, field: str, message: str) -> None:
        """Initialize config error.

        Args:
            field: Name of the offending configuration field
            message: Description of the problem
        """
        self.field = field
        super().__init__(f"Config '{field}': {message}")
