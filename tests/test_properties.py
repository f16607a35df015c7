"""Property-based tests for the block parser using Hypothesis.

These tests verify invariants that should hold for any input:
1. Parsing a string never fails, in either dialect
2. Text nodes are never empty and never adjacent
3. Input without markup comes back as a single Text node
4. Parsing is deterministic
"""

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from notemark import Dialect, Node, Text, iter_expressions, parse

dialects = st.sampled_from(list(Dialect))

# Characters that start or end most directives, mixed with plain text
markup_alphabet = st.sampled_from(
    [*"ab :`{}#[]()!@*_~^$\\\n.,-", "https://", "TODO ", "> "]
)
markup_text = st.lists(markup_alphabet, max_size=40).map("".join)

# No directive can start in this alphabet
plain_text = st.text(alphabet="abcxyz ,.-'\n", min_size=1)


def check_text_runs(expressions) -> None:
    previous_was_text = False
    for node in expressions:
        is_text = isinstance(node, Text)
        if is_text:
            assert node.content != ""
            assert not previous_was_text
        previous_was_text = is_text


class TestParserProperties:
    """Invariants over arbitrary blocks."""

    @given(text=st.text(max_size=200), dialect=dialects)
    @settings(max_examples=300)
    def test_parsing_is_total(self, text: str, dialect: Dialect) -> None:
        result = parse(text, dialect=dialect)
        assert isinstance(result, list)
        assert all(isinstance(node, Node) for node in result)

    @given(text=markup_text, dialect=dialects)
    @settings(max_examples=500)
    def test_markup_heavy_input_is_total(self, text: str, dialect: Dialect) -> None:
        result = parse(text, dialect=dialect)
        assert all(isinstance(node, Node) for node in iter_expressions(result))

    @given(text=markup_text, dialect=dialects)
    @settings(max_examples=300)
    def test_text_nodes_are_non_empty_and_never_adjacent(
        self, text: str, dialect: Dialect
    ) -> None:
        check_text_runs(parse(text, dialect=dialect))

    @given(text=plain_text, dialect=dialects)
    def test_plain_text_round_trips(self, text: str, dialect: Dialect) -> None:
        assume(text != "---")
        assert parse(text, dialect=dialect) == [Text(text)]

    @given(text=markup_text, dialect=dialects)
    @settings(max_examples=100)
    def test_deterministic(self, text: str, dialect: Dialect) -> None:
        assert parse(text, dialect=dialect) == parse(text, dialect=dialect)

    @given(text=markup_text)
    @settings(max_examples=100)
    def test_bytes_and_str_agree(self, text: str) -> None:
        assert parse(text.encode("utf-8")) == parse(text)
