"""Tests for individual directive recognizers and their priority."""

import pytest

from notemark import (
    Attribute,
    BlockEmbed,
    BlockRef,
    Bold,
    BraceDirective,
    Dialect,
    Hashtag,
    Highlight,
    Italic,
    Latex,
    Link,
    MarkdownExternalLink,
    MarkdownInternalLink,
    PageEmbed,
    RawHtml,
    SingleBacktick,
    Strike,
    Table,
    Text,
    Todo,
    TripleBacktick,
    Video,
)
from notemark.parsing.directives import (
    match_directive,
    try_parse_brace_directive,
    try_parse_hashtag,
    try_parse_link_or_word,
    try_parse_markdown_link,
    try_parse_single_backtick,
    try_parse_word,
)

ROAM = Dialect.ROAM
LOGSEQ = Dialect.LOGSEQ


def directive(text: str, dialect: Dialect = ROAM, allow_attributes: bool = False):
    """Match at position 0 over the whole string."""
    return match_directive(text, 0, len(text), dialect, allow_attributes)


def brace(text: str, dialect: Dialect):
    result = try_parse_brace_directive(text, 0, len(text), dialect)
    assert result is not None
    node, end = result
    assert end == len(text)
    return node


class TestCode:
    """Backtick code spans and fences."""

    def test_triple_backtick(self) -> None:
        assert directive("```x = 1```") == (TripleBacktick("x = 1"), 11)

    def test_triple_backtick_keeps_markup(self) -> None:
        assert directive("```**not bold**```") == (TripleBacktick("**not bold**"), 18)

    def test_triple_backtick_unterminated_falls_back(self) -> None:
        # Not a fence, but the first two backticks form no code span either
        assert directive("```abc") is None

    def test_single_backtick(self) -> None:
        assert directive("`code` after") == (SingleBacktick("code"), 6)

    def test_single_backtick_must_be_non_empty(self) -> None:
        assert try_parse_single_backtick("``", 0, 2, ROAM) is None

    def test_single_backtick_unterminated(self) -> None:
        assert directive("`code") is None


class TestBraceDirectives:
    """``{{...}}`` alternatives per dialect."""

    @pytest.mark.parametrize("dialect", [ROAM, LOGSEQ])
    @pytest.mark.parametrize("text", ["{{table}}", "{{ table }}", "{{[[table]]}}"])
    def test_table(self, text: str, dialect: Dialect) -> None:
        assert brace(text, dialect) == Table()

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("{{TODO}}", Todo(done=False)),
            ("{{[[TODO]]}}", Todo(done=False)),
            ("{{DOING}}", Todo(done=False)),
            ("{{[[DONE]]}}", Todo(done=True)),
        ],
    )
    def test_roam_tasks(self, text: str, expected: Todo) -> None:
        assert brace(text, ROAM) == expected

    def test_tasks_are_plain_directives_in_logseq(self) -> None:
        assert brace("{{[[DONE]]}}", LOGSEQ) == BraceDirective("DONE")

    @pytest.mark.parametrize("dialect", [ROAM, LOGSEQ])
    def test_video(self, dialect: Dialect) -> None:
        assert brace("{{video https://youtu.be/abc}}", dialect) == Video("https://youtu.be/abc")

    def test_video_link_form(self) -> None:
        assert brace("{{[[video]]: https://youtu.be/abc}}", ROAM) == BraceDirective(
            "[[video]]: https://youtu.be/abc"
        )

    def test_roam_page_embed(self) -> None:
        assert brace("{{embed: [[Page]]}}", ROAM) == PageEmbed("Page")

    def test_roam_block_embed(self) -> None:
        assert brace("{{[[embed]]: ((abc123))}}", ROAM) == BlockEmbed("abc123")

    def test_roam_embed_without_colon(self) -> None:
        assert brace("{{embed [[Page]]}}", ROAM) == BraceDirective("embed [[Page]]")

    def test_logseq_page_embed(self) -> None:
        assert brace("{{embed [[Page]]}}", LOGSEQ) == PageEmbed("Page")

    def test_logseq_block_embed(self) -> None:
        assert brace("{{embed ((abc123))}}", LOGSEQ) == BlockEmbed("abc123")

    def test_logseq_embed_with_colon(self) -> None:
        assert brace("{{embed: [[Page]]}}", LOGSEQ) == BraceDirective("embed: [[Page]]")

    def test_partial_match_keeps_whole_contents(self) -> None:
        assert brace("{{query: (and [[a]] [[b]])}}", ROAM) == BraceDirective(
            "query: (and [[a]] [[b]])"
        )

    def test_table_with_trailing_text(self) -> None:
        assert brace("{{table of contents}}", ROAM) == BraceDirective("table of contents")

    def test_empty(self) -> None:
        assert brace("{{}}", ROAM) == BraceDirective("")

    def test_whitespace_only(self) -> None:
        assert brace("{{   }}", LOGSEQ) == BraceDirective("")

    def test_unterminated(self) -> None:
        assert try_parse_brace_directive("{{table", 0, 7, ROAM) is None


class TestTagsAndLinks:
    """Hashtags, page links, block refs and markdown links."""

    def test_hashtag_word_stops_at_comma(self) -> None:
        assert try_parse_hashtag("#a,b", 0, 4) == ("a", False, 2)

    def test_hashtag_needs_a_word(self) -> None:
        assert try_parse_hashtag("# heading", 0, 9) is None

    def test_hashtag_dot_link(self) -> None:
        assert directive("#.[[my tag]]") == (Hashtag("my tag", True), 12)

    def test_word(self) -> None:
        assert try_parse_word("abc def", 0, 7) == ("abc", 3)
        assert try_parse_word(" abc", 0, 4) is None

    def test_link_or_word_prefers_link(self) -> None:
        assert try_parse_link_or_word("[[a b]] c", 0, 9) == ("a b", 7)

    def test_link(self) -> None:
        assert directive("[[Page]] rest") == (Link("Page"), 8)

    def test_unterminated_link(self) -> None:
        assert directive("[[Page") is None

    def test_block_ref(self) -> None:
        assert directive("((uid-1))") == (BlockRef("uid-1"), 9)

    def test_markdown_internal_link(self) -> None:
        assert directive("[t]([[page]])") == (MarkdownInternalLink(label="t", page="page"), 13)

    def test_markdown_external_link(self) -> None:
        assert directive("[t](u)") == (MarkdownExternalLink(title="t", url="u"), 6)

    def test_markdown_link_with_link_and_suffix_is_external(self) -> None:
        text = "[t]([[page]]x)"
        assert try_parse_markdown_link(text, 0, len(text), ROAM) == (
            MarkdownExternalLink(title="t", url="[[page]]x"),
            len(text),
        )

    def test_markdown_link_needs_paren(self) -> None:
        assert try_parse_markdown_link("[t] (u)", 0, 7, ROAM) is None

    def test_raw_html(self) -> None:
        assert directive("@@html: <b>x</b>@@") == (RawHtml("<b>x</b>"), 18)


class TestStyledSpans:
    """Bold, italic, strike, highlight and latex."""

    def test_roam_bold(self) -> None:
        assert directive("**b**") == (Bold((Text("b"),)), 5)

    def test_roam_italic(self) -> None:
        assert directive("__i__") == (Italic((Text("i"),)), 5)

    def test_roam_single_underscore_is_not_italic(self) -> None:
        assert directive("_x_") is None

    def test_logseq_double_underscore_is_bold(self) -> None:
        assert directive("__b__", LOGSEQ) == (Bold((Text("b"),)), 5)

    @pytest.mark.parametrize("text", ["_i_", "*i*"])
    def test_logseq_italic(self, text: str) -> None:
        assert directive(text, LOGSEQ) == (Italic((Text("i"),)), 3)

    def test_strike(self) -> None:
        assert directive("~~s~~") == (Strike((Text("s"),)), 5)

    def test_highlight(self) -> None:
        assert directive("^^h^^") == (Highlight((Text("h"),)), 5)

    def test_latex_is_verbatim(self) -> None:
        assert directive("$$x^2 + **y**$$") == (Latex("x^2 + **y**"), 15)

    def test_nested_styles(self) -> None:
        assert directive("**a __b__ [[c]]**") == (
            Bold((Text("a "), Italic((Text("b"),)), Text(" "), Link("c"))),
            17,
        )

    def test_logseq_nested_styles(self) -> None:
        assert directive("**a __b__**", LOGSEQ) == (
            Bold((Text("a "), Bold((Text("b"),)))),
            11,
        )

    def test_styled_span_never_holds_attribute(self) -> None:
        assert directive("**a:: b**", LOGSEQ) == (Bold((Text("a:: b"),)), 9)

    def test_empty_styled_span(self) -> None:
        assert directive("~~~~") == (Strike(()), 4)


class TestAttributes:
    """Attributes are tried last and only when allowed."""

    def test_not_tried_unless_allowed(self) -> None:
        assert directive("name:: value") is None

    def test_roam_attribute(self) -> None:
        assert directive("name::value", allow_attributes=True) == (
            Attribute("name", (Text("value"),)),
            11,
        )

    def test_logseq_needs_space_after_separator(self) -> None:
        assert directive("name::value", LOGSEQ, allow_attributes=True) is None

    def test_logseq_skips_leading_whitespace(self) -> None:
        assert directive("\n  name:: v", LOGSEQ, allow_attributes=True) == (
            Attribute("name", (Text("v"),)),
            11,
        )

    def test_value_is_parsed(self) -> None:
        assert directive("tags:: [[a]], #b", LOGSEQ, allow_attributes=True) == (
            Attribute("tags", (Link("a"), Text(", "), Hashtag("b", False))),
            16,
        )

    def test_value_never_holds_attribute(self) -> None:
        assert directive("a:: b:: c", LOGSEQ, allow_attributes=True) == (
            Attribute("a", (Text("b:: c"),)),
            9,
        )

    def test_empty_value(self) -> None:
        assert directive("a:: ", LOGSEQ, allow_attributes=True) == (Attribute("a", ()), 4)

    def test_other_directives_win(self) -> None:
        assert directive("[[a]]:: b", LOGSEQ, allow_attributes=True) == (Link("a"), 5)
