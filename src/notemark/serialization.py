"""JSON form of parsed blocks.

A node becomes a dict tagged with its variant name under ``_type``; nested
expressions become lists of such dicts. The format lets exporters written
in other languages consume parsed notes, and lets an export run cache
blocks it has already parsed.

Example:
    from notemark import parse
    from notemark.serialization import to_json, from_json

    expressions = parse("**Hello** [[World]]")
    assert from_json(to_json(expressions)) == expressions

Thread Safety:
    Stateless. Safe to call from any thread.

"""

import json
from collections.abc import Sequence
from dataclasses import fields
from typing import Any, get_args

from notemark.nodes import Expression, Node

# Variant name -> class, for every member of the Expression union
_NODE_TYPES: dict[str, type[Node]] = {cls.__name__: cls for cls in get_args(Expression.__value__)}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert one node (and everything under it) to plain dicts and lists.

    Example:
        >>> from notemark.nodes import Hashtag
        >>> to_dict(Hashtag("tag"))
        {'_type': 'Hashtag', 'tag': 'tag', 'has_dot': False}

    """
    data: dict[str, Any] = {"_type": type(node).__name__}
    for f in fields(node):
        data[f.name] = _encode(getattr(node, f.name))
    return data


def _encode(value: Any) -> Any:
    if isinstance(value, Node):
        return to_dict(value)
    if isinstance(value, tuple):
        return [_encode(item) for item in value]
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Rebuild a node from the output of ``to_dict``.

    Fields missing from ``data`` take their defaults; keys that are not
    fields of the variant are ignored.

    Raises:
        ValueError: If ``_type`` is missing or names no known variant.

    """
    if "_type" not in data:
        msg = "Serialized node has no '_type' field"
        raise ValueError(msg)

    type_name = data["_type"]
    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs = {f.name: _decode(data[f.name]) for f in fields(node_cls) if f.name in data}
    return node_cls(**kwargs)


def _decode(value: Any) -> Any:
    if isinstance(value, dict):
        return from_dict(value)
    if isinstance(value, list):
        return tuple(_decode(item) for item in value)
    return value


def to_json(expressions: Sequence[Expression], *, indent: int | None = None) -> str:
    """Encode a parsed block as a JSON array.

    Keys are sorted, so equal blocks always encode to the same string.

    """
    return json.dumps([to_dict(node) for node in expressions], sort_keys=True, indent=indent)


def from_json(data: str) -> list[Expression]:
    """Decode a JSON array produced by ``to_json``.

    Raises:
        ValueError: If the document is not a JSON array, or holds a node
            that ``from_dict`` rejects.

    """
    raw = json.loads(data)
    if not isinstance(raw, list):
        msg = f"Expected a JSON array, got {type(raw).__name__}"
        raise ValueError(msg)
    return [from_dict(item) for item in raw]  # type: ignore[misc]


__all__ = [
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
]
