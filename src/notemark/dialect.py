"""Markup dialects understood by the parser.

Roam and Logseq share most of their inline syntax. Where they differ
(italic delimiters, embed separators, task keywords, attribute names) the
dialect is passed explicitly to every recognizer.

"""

from __future__ import annotations

from enum import Enum


class Dialect(Enum):
    """Closed set of supported note dialects."""

    ROAM = "roam"
    LOGSEQ = "logseq"

    @classmethod
    def coerce(cls, value: Dialect | str) -> Dialect:
        """Accept a Dialect or its case-insensitive name/value.

        Raises:
            ValueError: If ``value`` names no dialect.

        Example:
            >>> Dialect.coerce("Logseq")
            <Dialect.LOGSEQ: 'logseq'>

        """
        if isinstance(value, Dialect):
            return value
        key = str(value).strip().lower()
        for dialect in cls:
            if key == dialect.value:
                return dialect
        msg = f"Unknown dialect: {value!r} (expected one of: roam, logseq)"
        raise ValueError(msg)


__all__ = ["Dialect"]
