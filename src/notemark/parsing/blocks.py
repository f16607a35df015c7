"""Block classification: whole-block forms, then inline scanning.

A block is one pre-segmented bullet of note text. Before scanning inline,
the classifier checks forms that only count when they cover the entire
block:

1. ``---``                      HRule
2. ``> quoted text``            BlockQuote
3. ``name:: value`` (Roam)      Attribute
4. ``TODO rest`` (Logseq)       Todo followed by the rest
5. anything else                inline expressions

Thread Safety:
    Pure functions. Independent blocks can be parsed from many threads.

"""

from __future__ import annotations

from notemark.dialect import Dialect
from notemark.errors import ParseError
from notemark.nodes import BlockQuote, Expression, HRule, Todo
from notemark.parsing.directives import try_parse_attribute
from notemark.parsing.inline import scan_inline
from notemark.utils.logger import get_logger

logger = get_logger(__name__)

# Logseq task keywords that may open a block
LOGSEQ_TASK_KEYWORDS: tuple[tuple[str, bool], ...] = (
    ("TODO", False),
    ("DOING", False),
    ("NOW", False),
    ("LATER", False),
    ("DONE", True),
)


def _decode(block: str | bytes) -> str:
    if isinstance(block, str):
        return block
    try:
        return bytes(block).decode("utf-8")
    except UnicodeDecodeError as e:
        logger.debug("Rejecting block that is not valid UTF-8: %s", e.reason)
        raise ParseError(f"Block is not valid UTF-8: {e.reason}", offset=e.start) from e


def _try_logseq_task(text: str) -> tuple[Todo, int] | None:
    for keyword, done in LOGSEQ_TASK_KEYWORDS:
        if text.startswith(keyword):
            return Todo(done=done), len(keyword)
    return None


def parse_block(block: str | bytes, dialect: Dialect) -> list[Expression]:
    """Parse one block of note text.

    Args:
        block: Block text. Bytes are decoded as UTF-8.
        dialect: Grammar variant

    Returns:
        Expressions for the block, in order

    Raises:
        ParseError: If the block is undecodable bytes or the scanner hits an
            internal invariant violation.

    Example:
        >>> parse_block("---", Dialect.ROAM)
        [HRule()]

    """
    text = _decode(block)
    end = len(text)

    if text == "---":
        return [HRule()]

    if text.startswith("> "):
        return [BlockQuote(tuple(scan_inline(text, 2, end, dialect, allow_attributes=True)))]

    if dialect is Dialect.ROAM:
        attribute = try_parse_attribute(text, 0, end, dialect)
        if attribute is not None and attribute[1] == end:
            return [attribute[0]]

    if dialect is Dialect.LOGSEQ:
        task = _try_logseq_task(text)
        if task is not None:
            todo, rest = task
            return [todo, *scan_inline(text, rest, end, dialect, allow_attributes=True)]

    return scan_inline(text, 0, end, dialect, allow_attributes=True)


__all__ = ["LOGSEQ_TASK_KEYWORDS", "parse_block"]
