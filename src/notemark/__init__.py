"""
notemark: Roam and Logseq block markup parser

Parses one block of outliner note text into a typed, immutable expression
tree for exporters to render as HTML, plain text, or anything else.

Quick Start:
    >>> from notemark import Dialect, parse
    >>> parse("**Algorithm** #roam/templates")
    [Bold(children=(Text(content='Algorithm'),)), Text(content=' '), Hashtag(tag='roam/templates', has_dot=False)]

    >>> parse("TODO write it up", dialect=Dialect.LOGSEQ)
    [Todo(done=False), Text(content=' write it up')]

    >>> # Or bind the dialect once
    >>> from notemark import Parser
    >>> parser = Parser(dialect="logseq")
    >>> parser("completed:: true")
    [Attribute(name='completed', value=(Text(content='true'),))]

Installation:
    pip install notemark              # Parser (zero deps)
    pip install notemark[test]        # + pytest, hypothesis
"""

from notemark.config import ParseConfig
from notemark.dialect import Dialect
from notemark.errors import ConfigError, NotemarkError, ParseError
from notemark.nodes import (
    Attribute,
    BlockEmbed,
    BlockQuote,
    BlockRef,
    Bold,
    BraceDirective,
    Expression,
    Hashtag,
    Highlight,
    HRule,
    Image,
    Italic,
    Latex,
    Link,
    MarkdownExternalLink,
    MarkdownInternalLink,
    Node,
    PageEmbed,
    RawHtml,
    RawHyperlink,
    SingleBacktick,
    Strike,
    Table,
    Text,
    Todo,
    TripleBacktick,
    Video,
    contained_expressions,
    iter_expressions,
)
from notemark.parser import Parser
from notemark.parsing.blocks import parse_block
from notemark.parsing.directives import try_parse_attribute
from notemark.serialization import from_dict, from_json, to_dict, to_json
from notemark.visitor import BaseVisitor, transform

__version__ = "0.1.0"


def parse(block: str | bytes, *, dialect: Dialect | str = Dialect.ROAM) -> list[Expression]:
    """Parse one block of note text into expressions.

    Args:
        block: Block text (one outliner bullet). Bytes are decoded as UTF-8.
        dialect: Dialect or dialect name ("roam", "logseq")

    Returns:
        Top-level expressions of the block, in order

    Raises:
        ParseError: If the block cannot be decoded or scanned.
        ValueError: If ``dialect`` names no dialect.

    Example:
        >>> parse("at https://example.com/def.")
        [Text(content='at '), RawHyperlink(url='https://example.com/def'), Text(content='.')]

    """
    return parse_block(block, Dialect.coerce(dialect))


def parse_attribute(text: str, *, dialect: Dialect | str = Dialect.ROAM) -> Attribute | None:
    """Parse ``text`` as a ``name:: value`` attribute.

    Exporters use this to read page properties without parsing the whole
    block as content.

    Returns:
        The Attribute, or None if ``text`` does not start with one.

    Example:
        >>> parse_attribute("Source:: some blog")
        Attribute(name='Source', value=(Text(content='some blog'),))

    """
    result = try_parse_attribute(text, 0, len(text), Dialect.coerce(dialect))
    if result is None:
        return None
    node = result[0]
    return node if isinstance(node, Attribute) else None


__all__ = [  # noqa: RUF022
    # Version
    "__version__",
    # Core API
    "parse",
    "parse_attribute",
    "Dialect",
    "Parser",
    "ParseConfig",
    # Errors
    "NotemarkError",
    "ParseError",
    "ConfigError",
    # Nodes
    "Node",
    "Expression",
    "Text",
    "RawHtml",
    "RawHyperlink",
    "Image",
    "Video",
    "BraceDirective",
    "Table",
    "Todo",
    "PageEmbed",
    "BlockEmbed",
    "TripleBacktick",
    "SingleBacktick",
    "Hashtag",
    "Link",
    "MarkdownInternalLink",
    "MarkdownExternalLink",
    "BlockRef",
    "Attribute",
    "Bold",
    "Italic",
    "Strike",
    "Highlight",
    "Latex",
    "BlockQuote",
    "HRule",
    "contained_expressions",
    "iter_expressions",
    # Visitor + Transform
    "BaseVisitor",
    "transform",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
]
