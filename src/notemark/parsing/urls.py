"""Incremental raw URL recognition.

``UrlLocator`` is a small character-at-a-time automaton. After each
character it reports whether it is still reading a known scheme, the end of
the longest valid URL seen so far, or a reset (the input can no longer be a
URL). ``try_parse_raw_url`` drives it over the remaining input.

URL rules:
- The URL must start with a known scheme and its separator (``https://``,
  ``mailto:``), followed by at least one URL character
- Whitespace, control characters and ``< > " ` { | } \\ ^`` end the URL
- ``)`` and ``]`` end the URL unless they close a ``(`` or ``[`` opened
  inside it
- Trailing ``. , : ; ? ! ( [ '`` are valid inside a URL but never end one

Example:
    >>> try_parse_raw_url("https://example.com/def. More", 0, 29)
    ('https://example.com/def', 23)

Thread Safety:
    A UrlLocator holds per-scan state; create one per scan.
    try_parse_raw_url is pure.

"""

from __future__ import annotations

from enum import Enum, auto
from typing import NamedTuple

from notemark.parsing.charsets import (
    URL_ILLEGAL,
    URL_TRAILING_PUNCTUATION,
    is_url_control,
)

# Scheme name -> separator that must follow it
SCHEMES: dict[str, str] = {
    "http": "://",
    "https": "://",
    "ftp": "://",
    "file": "://",
    "git": "://",
    "ssh": "://",
    "gemini": "://",
    "gopher": "://",
    "ipfs": "://",
    "ipns": "://",
    "mailto": ":",
    "news": ":",
    "magnet": ":",
}

_SCHEME_PREFIXES: frozenset[str] = frozenset(
    name[:i] for name in SCHEMES for i in range(1, len(name) + 1)
)


class UrlState(Enum):
    """What the locator reported after the last character."""

    SCHEME = auto()
    URL = auto()
    RESET = auto()


class UrlLocation(NamedTuple):
    """Result of advancing the locator by one character.

    ``end`` is the length of the longest valid URL seen so far, counted from
    the first character fed. It is only meaningful when ``state`` is URL.
    """

    state: UrlState
    end: int = 0


_SCHEME = UrlLocation(UrlState.SCHEME)
_RESET = UrlLocation(UrlState.RESET)


class UrlLocator:
    """Character-at-a-time URL automaton.

    Usage:
        >>> locator = UrlLocator()
        >>> [locator.advance(c).state.name for c in "ftp://x"][-1]
        'URL'

    """

    __slots__ = (
        "_scheme",
        "_separator",
        "_in_url",
        "_length",
        "_trailing",
        "_url_chars",
        "_open_parens",
        "_open_brackets",
        "_reset",
    )

    def __init__(self) -> None:
        self._scheme = ""
        self._separator = ""
        self._in_url = False
        self._length = 0
        self._trailing = 0
        self._url_chars = 0
        self._open_parens = 0
        self._open_brackets = 0
        self._reset = False

    def advance(self, char: str) -> UrlLocation:
        """Feed one character and report the automaton state."""
        if self._reset:
            return _RESET

        self._length += 1

        if self._in_url:
            return self._advance_url(char)

        if self._separator:
            # Still reading "://" or ":"
            if char != self._separator[0]:
                return self._do_reset()
            self._separator = self._separator[1:]
            if not self._separator:
                self._in_url = True
            return _SCHEME

        lowered = char.lower()
        if char == ":" and self._scheme in SCHEMES:
            self._separator = SCHEMES[self._scheme][1:]
            if not self._separator:
                self._in_url = True
            return _SCHEME
        if lowered.isascii() and self._scheme + lowered in _SCHEME_PREFIXES:
            self._scheme += lowered
            return _SCHEME
        return self._do_reset()

    def _advance_url(self, char: str) -> UrlLocation:
        if is_url_control(char) or char in URL_ILLEGAL:
            return self._do_reset()

        if char == "(":
            self._open_parens += 1
        elif char == "[":
            self._open_brackets += 1
        elif char == ")":
            if self._open_parens == 0:
                return self._do_reset()
            self._open_parens -= 1
        elif char == "]":
            if self._open_brackets == 0:
                return self._do_reset()
            self._open_brackets -= 1

        if char in URL_TRAILING_PUNCTUATION:
            self._trailing += 1
        else:
            self._trailing = 0
            self._url_chars += 1

        if self._url_chars == 0:
            # Only punctuation after the scheme so far
            return _SCHEME
        return UrlLocation(UrlState.URL, self._length - self._trailing)

    def _do_reset(self) -> UrlLocation:
        self._reset = True
        return _RESET


def try_parse_raw_url(text: str, pos: int, end: int) -> tuple[str, int] | None:
    """Recognize a bare URL starting exactly at ``pos``.

    Feeds ``text[pos:end]`` to a UrlLocator until it resets, remembering the
    last reported URL end.

    Returns:
        (url, end_pos) or None if no URL starts at ``pos``

    """
    locator = UrlLocator()
    url_end = 0
    for i in range(pos, end):
        location = locator.advance(text[i])
        if location.state is UrlState.URL:
            url_end = location.end
        elif location.state is UrlState.RESET:
            break

    if url_end > 0:
        return text[pos : pos + url_end], pos + url_end
    return None


__all__ = [
    "SCHEMES",
    "UrlLocation",
    "UrlLocator",
    "UrlState",
    "try_parse_raw_url",
]
