"""Tests for expression serialization (JSON round-trip)."""

import json

import pytest

from notemark import (
    Attribute,
    Bold,
    Dialect,
    Hashtag,
    HRule,
    Link,
    Table,
    Text,
    Todo,
    from_dict,
    from_json,
    parse,
    to_dict,
    to_json,
)


class TestToDict:
    """Dict conversion of single nodes."""

    def test_leaf(self) -> None:
        assert to_dict(Hashtag("tag", True)) == {"_type": "Hashtag", "tag": "tag", "has_dot": True}

    def test_fieldless(self) -> None:
        assert to_dict(Table()) == {"_type": "Table"}

    def test_children_become_lists(self) -> None:
        assert to_dict(Bold((Text("a"), Link("b")))) == {
            "_type": "Bold",
            "children": [
                {"_type": "Text", "content": "a"},
                {"_type": "Link", "page": "b"},
            ],
        }

    def test_attribute_value(self) -> None:
        data = to_dict(Attribute("name", (Text("v"),)))
        assert data["name"] == "name"
        assert data["value"] == [{"_type": "Text", "content": "v"}]


class TestFromDict:
    """Reconstruction from dicts."""

    def test_round_trip(self) -> None:
        node = Attribute("tags", (Link("a"), Text(", "), Bold((Text("b"),))))
        assert from_dict(to_dict(node)) == node

    def test_children_become_tuples(self) -> None:
        node = from_dict({"_type": "Bold", "children": [{"_type": "Text", "content": "x"}]})
        assert isinstance(node, Bold)
        assert node.children == (Text("x"),)

    def test_missing_fields_use_defaults(self) -> None:
        assert from_dict({"_type": "Hashtag", "tag": "t"}) == Hashtag("t", False)

    def test_missing_type(self) -> None:
        with pytest.raises(ValueError, match="_type"):
            from_dict({"content": "x"})

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown node type"):
            from_dict({"_type": "Paragraph"})


class TestJson:
    """Whole-block JSON round trips."""

    @pytest.mark.parametrize(
        ("text", "dialect"),
        [
            ("**Algorithm - Difference Engine** #roam/templates", Dialect.ROAM),
            ("> [[Some]] **text** with ((ref)) and $$x$$", Dialect.ROAM),
            ("{{embed [[Page]]}} ![alt](https://x.com/a.png)", Dialect.LOGSEQ),
            ("DONE read [t](https://example.com) ^^now^^", Dialect.LOGSEQ),
            ("Some text\n   completed:: true", Dialect.LOGSEQ),
            ("---", Dialect.ROAM),
            ("", Dialect.ROAM),
        ],
    )
    def test_round_trip(self, text: str, dialect: Dialect) -> None:
        expressions = parse(text, dialect=dialect)
        assert from_json(to_json(expressions)) == expressions

    def test_output_is_array_with_sorted_keys(self) -> None:
        data = json.loads(to_json([Todo(done=True), HRule()]))
        assert data == [{"_type": "Todo", "done": True}, {"_type": "HRule"}]
        assert to_json([Hashtag("t")]) == '[{"_type": "Hashtag", "has_dot": false, "tag": "t"}]'

    def test_indent(self) -> None:
        assert "\n" in to_json([Text("x")], indent=2)

    def test_rejects_non_array(self) -> None:
        with pytest.raises(ValueError, match="JSON array"):
            from_json('{"_type": "Text", "content": "x"}')


class TestRegistry:
    """Every expression variant is known to the deserializer."""

    def test_all_variants_round_trip(self) -> None:
        from typing import get_args

        from notemark import Expression

        for cls in get_args(Expression.__value__):
            data = {"_type": cls.__name__}
            assert type(from_dict(data | _required_fields(cls))) is cls


def _required_fields(cls: type) -> dict[str, object]:
    import dataclasses

    return {
        f.name: ""
        for f in dataclasses.fields(cls)
        if f.default is dataclasses.MISSING
    }
