"""Typed expression nodes for notemark.

Every node is a frozen dataclass with slots:
- Immutability: a parsed block is never updated in place
- Thread safety: trees can be shared freely across threads
- Pattern matching: ``match`` statements work on every variant

Node Hierarchy:
Node (base)
├── Leaf nodes (string payloads)
│   ├── Text, RawHtml, RawHyperlink, Image, Video
│   ├── BraceDirective, Table, Todo, PageEmbed, BlockEmbed
│   ├── TripleBacktick, SingleBacktick, Hashtag, Link
│   ├── MarkdownInternalLink, MarkdownExternalLink, BlockRef
│   ├── Latex
│   └── HRule
└── Container nodes (nested expressions)
    ├── Attribute
    ├── Bold, Italic, Strike, Highlight
    └── BlockQuote

The variant set is closed: ``Expression`` lists every node a parse can
produce, and consumers are expected to match on it exhaustively.

"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all expression nodes."""


# =============================================================================
# Leaf Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Literal text that matched no directive."""

    content: str


@dataclass(frozen=True, slots=True)
class RawHtml(Node):
    """Raw HTML passed through unchanged.

    Syntax: @@html: <b>hi</b>@@

    """

    html: str


@dataclass(frozen=True, slots=True)
class RawHyperlink(Node):
    """A bare URL found in running text, trailing punctuation excluded."""

    url: str


@dataclass(frozen=True, slots=True)
class Image(Node):
    """Image.

    Syntax: ![alt](url)

    """

    alt: str
    url: str


@dataclass(frozen=True, slots=True)
class Video(Node):
    """Embedded video.

    Syntax: {{video https://...}} or {{[[video]] https://...}}

    """

    url: str


@dataclass(frozen=True, slots=True)
class BraceDirective(Node):
    """A ``{{...}}`` directive that is not one of the known forms.

    ``content`` is the trimmed inner text, or the page name when the
    directive is a single ``[[link]]``.

    """

    content: str


@dataclass(frozen=True, slots=True)
class Table(Node):
    """Table directive: {{table}} or {{[[table]]}}."""


@dataclass(frozen=True, slots=True)
class Todo(Node):
    """Task marker.

    Roam: {{[[TODO]]}}, {{[[DOING]]}}, {{[[DONE]]}}
    Logseq: TODO, DOING, NOW, LATER, DONE at the start of a block

    """

    done: bool


@dataclass(frozen=True, slots=True)
class PageEmbed(Node):
    """Embedded page: {{embed: [[Page]]}} (Roam) or {{embed [[Page]]}} (Logseq)."""

    target: str


@dataclass(frozen=True, slots=True)
class BlockEmbed(Node):
    """Embedded block: {{embed: ((uid))}} (Roam) or {{embed ((uid))}} (Logseq)."""

    target: str


@dataclass(frozen=True, slots=True)
class TripleBacktick(Node):
    """Fenced code. The language tag, if any, is the start of ``code``."""

    code: str


@dataclass(frozen=True, slots=True)
class SingleBacktick(Node):
    """Inline code."""

    code: str


@dataclass(frozen=True, slots=True)
class Hashtag(Node):
    """Tag reference.

    Syntax: #tag, #.tag (``has_dot``), #[[multi word tag]]

    """

    tag: str
    has_dot: bool = False


@dataclass(frozen=True, slots=True)
class Link(Node):
    """Page link: [[page]]."""

    page: str


@dataclass(frozen=True, slots=True)
class MarkdownInternalLink(Node):
    """Aliased page link: [label]([[page]])."""

    label: str
    page: str


@dataclass(frozen=True, slots=True)
class MarkdownExternalLink(Node):
    """Ordinary hyperlink: [title](url)."""

    title: str
    url: str


@dataclass(frozen=True, slots=True)
class BlockRef(Node):
    """Block reference: ((uid))."""

    id: str


@dataclass(frozen=True, slots=True)
class Latex(Node):
    """Math: $$E = mc^2$$."""

    content: str


@dataclass(frozen=True, slots=True)
class HRule(Node):
    """Horizontal rule. Only a block consisting of exactly ``---``."""


# =============================================================================
# Container Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Attribute(Node):
    """Named property.

    Syntax: name:: value with [[links]]

    """

    name: str
    value: tuple[Expression, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.value, tuple):
            object.__setattr__(self, "value", tuple(self.value))


@dataclass(frozen=True, slots=True)
class Styled(Node):
    """Base for nodes wrapping a recursively parsed span."""

    children: tuple[Expression, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))


@dataclass(frozen=True, slots=True)
class Bold(Styled):
    """Bold: **text** (both dialects), __text__ (Logseq)."""


@dataclass(frozen=True, slots=True)
class Italic(Styled):
    """Italic: __text__ (Roam), _text_ or *text* (Logseq)."""


@dataclass(frozen=True, slots=True)
class Strike(Styled):
    """Strikethrough: ~~text~~."""


@dataclass(frozen=True, slots=True)
class Highlight(Styled):
    """Highlight: ^^text^^."""


@dataclass(frozen=True, slots=True)
class BlockQuote(Styled):
    """Quoted block: a block starting with ``> ``."""


# PEP 695 type alias for every node a parse can produce
type Expression = (
    Text
    | RawHtml
    | RawHyperlink
    | Image
    | Video
    | BraceDirective
    | Table
    | Todo
    | PageEmbed
    | BlockEmbed
    | TripleBacktick
    | SingleBacktick
    | Hashtag
    | Link
    | MarkdownInternalLink
    | MarkdownExternalLink
    | BlockRef
    | Attribute
    | Bold
    | Italic
    | Strike
    | Highlight
    | Latex
    | BlockQuote
    | HRule
)


def contained_expressions(node: Node) -> tuple[Expression, ...]:
    """Return the direct children of a container node.

    Leaf nodes have no children and return an empty tuple.

    Example:
        >>> contained_expressions(Bold((Text("hi"),)))
        (Text(content='hi'),)

    """
    match node:
        case Styled(children=children):
            return children
        case Attribute(value=value):
            return value
        case _:
            return ()


def iter_expressions(nodes: Iterable[Expression]) -> Iterable[Expression]:
    """Yield every node in ``nodes`` and their descendants, depth first."""
    for node in nodes:
        yield node
        yield from iter_expressions(contained_expressions(node))


__all__ = [
    "Attribute",
    "BlockEmbed",
    "BlockQuote",
    "BlockRef",
    "Bold",
    "BraceDirective",
    "Expression",
    "HRule",
    "Hashtag",
    "Highlight",
    "Image",
    "Italic",
    "Latex",
    "Link",
    "MarkdownExternalLink",
    "MarkdownInternalLink",
    "Node",
    "PageEmbed",
    "RawHtml",
    "RawHyperlink",
    "SingleBacktick",
    "Strike",
    "Styled",
    "Table",
    "Text",
    "Todo",
    "TripleBacktick",
    "Video",
    "contained_expressions",
    "iter_expressions",
]
