"""Directive grammar: one recognizer per inline construct.

Every recognizer has the same shape::

    try_parse_x(text, pos, end, dialect) -> tuple[Expression, int] | None

It either matches starting exactly at ``pos`` (never reading past ``end``)
and returns the node plus the position after the match, or returns None.
``match_directive`` tries them in priority order and the first match wins.

Priority:
    1. ```code```          TripleBacktick
    2. `code`              SingleBacktick
    3. {{...}}             Table / Video / embeds / Todo / BraceDirective
    4. #tag                Hashtag
    5. [[page]]            Link
    6. ((uid))             BlockRef
    7. ![alt](url)         Image
    8. @@html: ...@@       RawHtml
    9. [title](url)        MarkdownInternalLink / MarkdownExternalLink
    10. bold               Bold
    11. italic             Italic
    12. ~~text~~           Strike
    13. ^^text^^           Highlight
    14. $$math$$           Latex
    15. https://...        RawHyperlink
    16. name:: value       Attribute (only where attributes are allowed)

Thread Safety:
    All functions are pure. Safe to call from any thread.

"""

from __future__ import annotations

from collections.abc import Callable

from notemark.dialect import Dialect
from notemark.nodes import (
    Attribute,
    BlockEmbed,
    BlockRef,
    Bold,
    BraceDirective,
    Expression,
    Hashtag,
    Highlight,
    Image,
    Italic,
    Latex,
    Link,
    MarkdownExternalLink,
    MarkdownInternalLink,
    PageEmbed,
    RawHtml,
    RawHyperlink,
    SingleBacktick,
    Strike,
    Table,
    Todo,
    TripleBacktick,
    Video,
)
from notemark.parsing.brackets import take_until_unbalanced
from notemark.parsing.charsets import (
    LOGSEQ_ATTRIBUTE_TERMINATORS,
    MULTISPACE,
    ROAM_ATTRIBUTE_TERMINATORS,
    is_word_char,
)
from notemark.parsing.urls import try_parse_raw_url

type DirectiveMatch = tuple[Expression, int]
type Recognizer = Callable[[str, int, int, Dialect], DirectiveMatch | None]

# Brace directive task keywords (Roam only)
_ROAM_BRACE_TASKS: tuple[tuple[str, bool], ...] = (
    ("TODO", False),
    ("DOING", False),
    ("DONE", True),
)

# Style boundaries in the order they are tried
_BOLD_BOUNDARIES: dict[Dialect, tuple[str, ...]] = {
    Dialect.ROAM: ("**",),
    Dialect.LOGSEQ: ("**", "__"),
}
_ITALIC_BOUNDARIES: dict[Dialect, tuple[str, ...]] = {
    Dialect.ROAM: ("__",),
    Dialect.LOGSEQ: ("_", "*"),
}


# =============================================================================
# Shared helpers
# =============================================================================


def _skip_multispace(text: str, pos: int, end: int) -> int:
    """Return the first position at or after ``pos`` that is not whitespace."""
    while pos < end and text[pos] in MULTISPACE:
        pos += 1
    return pos


def _fenced(text: str, pos: int, end: int, start: str, stop: str) -> tuple[int, int] | None:
    """Match ``start``, anything up to the first ``stop``, then ``stop``.

    Returns:
        (inner_end, end_pos) or None. The payload is
        ``text[pos + len(start):inner_end]``.

    """
    if not text.startswith(start, pos, end):
        return None
    inner_end = text.find(stop, pos + len(start), end)
    if inner_end == -1:
        return None
    return inner_end, inner_end + len(stop)


def _balanced(
    text: str, pos: int, end: int, opening: str, closing: str
) -> tuple[int, int] | None:
    """Match a doubled delimiter pair such as ``[[...]]`` with nesting.

    Returns:
        (inner_end, end_pos) or None. The payload starts at ``pos + 2``.

    """
    start = opening * 2
    stop = closing * 2
    if not text.startswith(start, pos, end):
        return None
    inner_end = take_until_unbalanced(text, pos + 2, end, opening, closing)
    if inner_end is None or not text.startswith(stop, inner_end, end):
        return None
    return inner_end, inner_end + 2


def try_parse_link_target(text: str, pos: int, end: int) -> tuple[str, int] | None:
    """Parse ``[[page]]`` and return (page, end_pos)."""
    result = _balanced(text, pos, end, "[", "]")
    if result is None:
        return None
    inner_end, new_pos = result
    return text[pos + 2 : inner_end], new_pos


def try_parse_block_ref_target(text: str, pos: int, end: int) -> tuple[str, int] | None:
    """Parse ``((uid))`` and return (uid, end_pos)."""
    result = _balanced(text, pos, end, "(", ")")
    if result is None:
        return None
    inner_end, new_pos = result
    return text[pos + 2 : inner_end], new_pos


def try_parse_word(text: str, pos: int, end: int) -> tuple[str, int] | None:
    """Parse a run of non-whitespace characters other than ``,``."""
    i = pos
    while i < end and is_word_char(text[i]):
        i += 1
    if i == pos:
        return None
    return text[pos:i], i


def try_parse_link_or_word(text: str, pos: int, end: int) -> tuple[str, int] | None:
    """Parse ``[[page]]`` (returning the page) or else a bare word."""
    return try_parse_link_target(text, pos, end) or try_parse_word(text, pos, end)


def _fixed_link_or_word(text: str, pos: int, end: int, word: str) -> int | None:
    """Match ``word`` or ``[[word]]`` exactly, returning the end position."""
    if text.startswith(word, pos, end):
        return pos + len(word)
    linked = f"[[{word}]]"
    if text.startswith(linked, pos, end):
        return pos + len(linked)
    return None


# =============================================================================
# Code
# =============================================================================


def try_parse_triple_backtick(
    text: str, pos: int, end: int, dialect: Dialect
) -> DirectiveMatch | None:
    """Parse ```code```. The fence contents are kept verbatim."""
    result = _fenced(text, pos, end, "```", "```")
    if result is None:
        return None
    inner_end, new_pos = result
    return TripleBacktick(text[pos + 3 : inner_end]), new_pos


def try_parse_single_backtick(
    text: str, pos: int, end: int, dialect: Dialect
) -> DirectiveMatch | None:
    """Parse `code`. The code must be non-empty."""
    if not text.startswith("`", pos, end):
        return None
    close = text.find("`", pos + 1, end)
    if close == -1 or close == pos + 1:
        return None
    return SingleBacktick(text[pos + 1 : close]), close + 1


# =============================================================================
# Brace directives
# =============================================================================


def _try_parse_brace_contents(
    text: str, pos: int, end: int, dialect: Dialect
) -> DirectiveMatch | None:
    """Parse the trimmed contents of ``{{...}}``.

    Returns the first alternative that matches, which may leave input
    unconsumed. The caller decides whether a partial match counts.

    """
    if dialect is Dialect.ROAM:
        for keyword, done in _ROAM_BRACE_TASKS:
            after = _fixed_link_or_word(text, pos, end, keyword)
            if after is not None:
                return Todo(done=done), after

    after = _fixed_link_or_word(text, pos, end, "table")
    if after is not None:
        return Table(), after

    after = _fixed_link_or_word(text, pos, end, "video")
    if after is not None:
        url_start = _skip_multispace(text, after, end)
        if url_start > after:
            url = try_parse_raw_url(text, url_start, end)
            if url is not None:
                return Video(url[0]), url[1]

    after = _fixed_link_or_word(text, pos, end, "embed")
    if after is not None:
        # Roam writes "embed:", Logseq "embed <target>"
        target_start: int | None = None
        if dialect is Dialect.ROAM:
            if text.startswith(":", after, end):
                target_start = _skip_multispace(text, after + 1, end)
        else:
            skipped = _skip_multispace(text, after, end)
            if skipped > after:
                target_start = skipped

        if target_start is not None:
            block = try_parse_block_ref_target(text, target_start, end)
            if block is not None:
                return BlockEmbed(block[0]), block[1]
            page = try_parse_link_target(text, target_start, end)
            if page is not None:
                return PageEmbed(page[0]), page[1]

    word = try_parse_link_or_word(text, pos, end)
    if word is not None:
        return BraceDirective(word[0]), word[1]
    return None


def try_parse_brace_directive(
    text: str, pos: int, end: int, dialect: Dialect
) -> DirectiveMatch | None:
    """Parse ``{{table}}``, ``{{embed: [[Page]]}}`` and friends.

    Anything between the braces that is not a recognized form becomes a
    BraceDirective holding the trimmed inner text.

    """
    result = _fenced(text, pos, end, "{{", "}}")
    if result is None:
        return None
    inner_end, new_pos = result

    start = pos + 2
    stop = inner_end
    while start < stop and text[start].isspace():
        start += 1
    while stop > start and text[stop - 1].isspace():
        stop -= 1

    contents = _try_parse_brace_contents(text, start, stop, dialect)
    if contents is not None and contents[1] == stop:
        return contents[0], new_pos
    return BraceDirective(text[start:stop]), new_pos


# =============================================================================
# Tags, links and references
# =============================================================================


def try_parse_hashtag(text: str, pos: int, end: int) -> tuple[str, bool, int] | None:
    """Parse ``#tag``, ``#.tag`` or ``#[[multi word]]``.

    Returns:
        (tag, has_dot, end_pos) or None

    """
    if not text.startswith("#", pos, end):
        return None
    i = pos + 1
    has_dot = text.startswith(".", i, end)
    if has_dot:
        i += 1
    tag = try_parse_link_or_word(text, i, end)
    if tag is None:
        return None
    return tag[0], has_dot, tag[1]


def _hashtag_directive(text: str, pos: int, end: int, dialect: Dialect) -> DirectiveMatch | None:
    result = try_parse_hashtag(text, pos, end)
    if result is None:
        return None
    tag, has_dot, new_pos = result
    return Hashtag(tag, has_dot), new_pos


def try_parse_link(text: str, pos: int, end: int, dialect: Dialect) -> DirectiveMatch | None:
    """Parse ``[[page]]``. Nested brackets are balanced."""
    result = try_parse_link_target(text, pos, end)
    if result is None:
        return None
    return Link(result[0]), result[1]


def try_parse_block_ref(text: str, pos: int, end: int, dialect: Dialect) -> DirectiveMatch | None:
    """Parse ``((uid))``."""
    result = try_parse_block_ref_target(text, pos, end)
    if result is None:
        return None
    return BlockRef(result[0]), result[1]


def _markdown_link_parts(text: str, pos: int, end: int) -> tuple[int, int, int, int] | None:
    """Locate ``[title](url)`` starting at ``pos``.

    The title runs to the first ``]``; the URL may contain balanced
    parentheses.

    Returns:
        (title_end, url_start, url_end, end_pos) or None. The title starts
        at ``pos + 1``.

    """
    title = _fenced(text, pos, end, "[", "]")
    if title is None:
        return None
    title_end, after_title = title
    if not text.startswith("(", after_title, end):
        return None
    url_start = after_title + 1
    url_end = take_until_unbalanced(text, url_start, end, "(", ")")
    if url_end is None or not text.startswith(")", url_end, end):
        return None
    return title_end, url_start, url_end, url_end + 1


def try_parse_image(text: str, pos: int, end: int, dialect: Dialect) -> DirectiveMatch | None:
    """Parse ``![alt](url)``."""
    if not text.startswith("!", pos, end):
        return None
    parts = _markdown_link_parts(text, pos + 1, end)
    if parts is None:
        return None
    alt_end, url_start, url_end, new_pos = parts
    return Image(alt=text[pos + 2 : alt_end], url=text[url_start:url_end]), new_pos


def try_parse_raw_html(text: str, pos: int, end: int, dialect: Dialect) -> DirectiveMatch | None:
    """Parse ``@@html: <markup>@@``."""
    result = _fenced(text, pos, end, "@@html: ", "@@")
    if result is None:
        return None
    inner_end, new_pos = result
    return RawHtml(text[pos + 8 : inner_end]), new_pos


def try_parse_markdown_link(
    text: str, pos: int, end: int, dialect: Dialect
) -> DirectiveMatch | None:
    """Parse ``[title](url)``.

    When the URL is itself exactly a ``[[page]]`` link the result is a
    MarkdownInternalLink to that page, otherwise a MarkdownExternalLink.

    """
    parts = _markdown_link_parts(text, pos, end)
    if parts is None:
        return None
    title_end, url_start, url_end, new_pos = parts
    title = text[pos + 1 : title_end]

    page = try_parse_link_target(text, url_start, url_end)
    if page is not None and page[1] == url_end:
        return MarkdownInternalLink(label=title, page=page[0]), new_pos
    return MarkdownExternalLink(title=title, url=text[url_start:url_end]), new_pos


# =============================================================================
# Styled spans
# =============================================================================


def _try_parse_styled(
    text: str, pos: int, end: int, dialect: Dialect, boundary: str
) -> tuple[list[Expression], int] | None:
    """Match ``boundary``...``boundary`` and parse the inside recursively.

    Attributes are never recognized inside a styled span.

    """
    from notemark.parsing.inline import scan_inline

    result = _fenced(text, pos, end, boundary, boundary)
    if result is None:
        return None
    inner_end, new_pos = result
    children = scan_inline(text, pos + len(boundary), inner_end, dialect, allow_attributes=False)
    return children, new_pos


def try_parse_bold(text: str, pos: int, end: int, dialect: Dialect) -> DirectiveMatch | None:
    """Parse ``**bold**`` (and ``__bold__`` in Logseq)."""
    for boundary in _BOLD_BOUNDARIES[dialect]:
        result = _try_parse_styled(text, pos, end, dialect, boundary)
        if result is not None:
            return Bold(tuple(result[0])), result[1]
    return None


def try_parse_italic(text: str, pos: int, end: int, dialect: Dialect) -> DirectiveMatch | None:
    """Parse ``__italic__`` (Roam) or ``_italic_`` / ``*italic*`` (Logseq)."""
    for boundary in _ITALIC_BOUNDARIES[dialect]:
        result = _try_parse_styled(text, pos, end, dialect, boundary)
        if result is not None:
            return Italic(tuple(result[0])), result[1]
    return None


def try_parse_strike(text: str, pos: int, end: int, dialect: Dialect) -> DirectiveMatch | None:
    """Parse ``~~strike~~``."""
    result = _try_parse_styled(text, pos, end, dialect, "~~")
    if result is None:
        return None
    return Strike(tuple(result[0])), result[1]


def try_parse_highlight(text: str, pos: int, end: int, dialect: Dialect) -> DirectiveMatch | None:
    """Parse ``^^highlight^^``."""
    result = _try_parse_styled(text, pos, end, dialect, "^^")
    if result is None:
        return None
    return Highlight(tuple(result[0])), result[1]


def try_parse_latex(text: str, pos: int, end: int, dialect: Dialect) -> DirectiveMatch | None:
    """Parse ``$$math$$``."""
    result = _fenced(text, pos, end, "$$", "$$")
    if result is None:
        return None
    inner_end, new_pos = result
    return Latex(text[pos + 2 : inner_end]), new_pos


def try_parse_raw_hyperlink(
    text: str, pos: int, end: int, dialect: Dialect
) -> DirectiveMatch | None:
    """Parse a bare URL, excluding trailing punctuation."""
    result = try_parse_raw_url(text, pos, end)
    if result is None:
        return None
    return RawHyperlink(result[0]), result[1]


# =============================================================================
# Attributes
# =============================================================================


def try_parse_attribute(text: str, pos: int, end: int, dialect: Dialect) -> DirectiveMatch | None:
    """Parse ``name:: value``. The value runs to ``end``.

    Roam keeps the name exactly as written (leading spaces included) and
    needs only ``::``. Logseq skips leading whitespace, stops the name at
    whitespace, ``,`` or ``:``, and needs ``:: `` with a space.

    """
    from notemark.parsing.inline import scan_inline

    if dialect is Dialect.ROAM:
        name_start = pos
        name_end = pos
        while name_end < end and text[name_end] not in ROAM_ATTRIBUTE_TERMINATORS:
            name_end += 1
        separator = "::"
    else:
        name_start = _skip_multispace(text, pos, end)
        name_end = name_start
        while (
            name_end < end
            and is_word_char(text[name_end])
            and text[name_end] not in LOGSEQ_ATTRIBUTE_TERMINATORS
        ):
            name_end += 1
        separator = ":: "

    if name_end == name_start or not text.startswith(separator, name_end, end):
        return None

    value_start = _skip_multispace(text, name_end + len(separator), end)
    value = scan_inline(text, value_start, end, dialect, allow_attributes=False)
    return Attribute(text[name_start:name_end], tuple(value)), end


# =============================================================================
# Dispatch
# =============================================================================

# Tried in order at every position; the first match wins
DIRECTIVES: tuple[Recognizer, ...] = (
    try_parse_triple_backtick,
    try_parse_single_backtick,
    try_parse_brace_directive,
    _hashtag_directive,
    try_parse_link,
    try_parse_block_ref,
    try_parse_image,
    try_parse_raw_html,
    try_parse_markdown_link,
    try_parse_bold,
    try_parse_italic,
    try_parse_strike,
    try_parse_highlight,
    try_parse_latex,
    try_parse_raw_hyperlink,
)


def match_directive(
    text: str,
    pos: int,
    end: int,
    dialect: Dialect,
    allow_attributes: bool,
) -> DirectiveMatch | None:
    """Try every directive at ``pos`` in priority order.

    Args:
        text: Source text
        pos: Position the directive must start at
        end: End of the span being scanned (exclusive)
        dialect: Grammar variant
        allow_attributes: Whether ``name:: value`` is recognized here

    Returns:
        (node, end_pos) for the first directive that matches, or None

    """
    for recognizer in DIRECTIVES:
        result = recognizer(text, pos, end, dialect)
        if result is not None:
            return result
    if allow_attributes:
        return try_parse_attribute(text, pos, end, dialect)
    return None


__all__ = [
    "DIRECTIVES",
    "DirectiveMatch",
    "Recognizer",
    "match_directive",
    "try_parse_attribute",
    "try_parse_block_ref",
    "try_parse_block_ref_target",
    "try_parse_bold",
    "try_parse_brace_directive",
    "try_parse_hashtag",
    "try_parse_highlight",
    "try_parse_image",
    "try_parse_italic",
    "try_parse_latex",
    "try_parse_link",
    "try_parse_link_or_word",
    "try_parse_link_target",
    "try_parse_markdown_link",
    "try_parse_raw_html",
    "try_parse_raw_hyperlink",
    "try_parse_single_backtick",
    "try_parse_strike",
    "try_parse_triple_backtick",
    "try_parse_word",
]
