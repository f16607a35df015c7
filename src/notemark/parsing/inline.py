"""Inline scanning: interleave literal text with directives.

The scanner looks for the *leftmost* position where any directive matches,
not the highest-priority directive anywhere in the span. Everything it skips
over becomes a Text node.

Example:
    >>> from notemark.dialect import Dialect
    >>> scan_inline("I want an [[astrolabe]]", 0, 23, Dialect.ROAM)
    [Text(content='I want an '), Link(page='astrolabe')]

Thread Safety:
    Pure functions over their arguments. Safe to call from any thread.

"""

from __future__ import annotations

from notemark.dialect import Dialect
from notemark.errors import ParseError
from notemark.nodes import Expression, Text
from notemark.parsing.charsets import DIRECTIVE_TRIGGERS
from notemark.parsing.directives import match_directive


def scan_inline(
    text: str,
    start: int,
    end: int,
    dialect: Dialect,
    allow_attributes: bool = True,
) -> list[Expression]:
    """Parse ``text[start:end]`` into a sequence of expressions.

    Never fails on well-formed strings: if no directive matches, the whole
    span is returned as a single Text node. An empty span yields an empty
    list.

    Args:
        text: Source text
        start: Start of the span
        end: End of the span (exclusive)
        dialect: Grammar variant
        allow_attributes: Recognize ``name:: value``. False inside styled
            spans and attribute values.

    Returns:
        Expressions covering the span, in order

    Raises:
        ParseError: If a directive reports a match that does not advance,
            which would otherwise loop forever.

    """
    output: list[Expression] = []
    output_append = output.append  # Local reference for speed
    current = start

    while current < end:
        pos = current
        found = None
        while pos < end:
            # Without attributes, a directive can only start on a trigger
            # character or a letter (URL scheme)
            char = text[pos]
            if allow_attributes or char in DIRECTIVE_TRIGGERS or char.isalpha():
                found = match_directive(text, pos, end, dialect, allow_attributes)
                if found is not None:
                    break
            pos += 1

        if found is None:
            output_append(Text(text[current:end]))
            break

        node, new_pos = found
        if new_pos <= pos or new_pos > end:
            msg = f"{type(node).__name__} match did not advance the scanner"
            raise ParseError(msg, offset=pos)

        if pos > current:
            output_append(Text(text[current:pos]))
        output_append(node)
        current = new_pos

    return output


__all__ = ["scan_inline"]
