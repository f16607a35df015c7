"""Bracket-balanced extraction.

Finds the end of a delimited payload while tracking nested delimiter pairs
and backslash escapes. Works on index ranges of the source text; nothing
is copied.

Example:
    >>> take_until_unbalanced("sp(i)ped.html) is nice", 0, 22, "(", ")")
    13

Thread Safety:
    Pure functions, safe to call from any thread.

"""

from __future__ import annotations


def take_until_unbalanced(
    text: str,
    pos: int,
    end: int,
    opening: str,
    closing: str,
) -> int | None:
    """Scan ``text[pos:end]`` for the first unmatched closing delimiter.

    A backslash makes the following character non-significant, whatever it
    is. Opening delimiters raise the depth, closing delimiters lower it.

    Args:
        text: Source text
        pos: Start of the span to scan
        end: End of the span (exclusive)
        opening: Opening delimiter character
        closing: Closing delimiter character

    Returns:
        Index of the unmatched closing delimiter (the payload is
        ``text[pos:index]`` and the delimiter itself is left unconsumed),
        ``end`` when the span is exhausted with every opener matched, or
        None when the span ends with openers still pending.

    """
    depth = 0
    i = pos
    while i < end:
        char = text[i]
        if char == "\\":
            # Skip the escape and the character it protects
            i += 2
            continue
        if char == opening:
            depth += 1
        elif char == closing:
            if depth == 0:
                return i
            depth -= 1
        i += 1

    if depth == 0:
        return end
    return None


__all__ = ["take_until_unbalanced"]
