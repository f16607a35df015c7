"""Walking and rewriting parsed blocks.

``BaseVisitor`` calls one ``visit_*`` hook per node and then descends into
the node's children; ``transform`` rebuilds a block with some nodes
replaced or removed. Parsed trees are frozen, so nothing is edited in place.

Example (collect every page a block links to):

    class PageCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.pages: list[str] = []

        def visit_link(self, node: Link) -> None:
            self.pages.append(node.page)

        def visit_hashtag(self, node: Hashtag) -> None:
            self.pages.append(node.tag)

    collector = PageCollector()
    collector.visit_all(parse("See [[Alpha]] and #beta"))

Example (drop highlights but keep their contents' text):

    def unhighlight(node: Node) -> Node | None:
        if isinstance(node, Highlight):
            return Text("".join(c.content for c in node.children if isinstance(c, Text)))
        return node

    new_block = transform(expressions, unhighlight)

Thread Safety:
    Visitor subclasses usually collect results on ``self``; give each thread
    its own instance. ``transform`` keeps no state.

"""

import dataclasses
from collections.abc import Callable, Iterable

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
    Styled,
    Table,
    Text,
    Todo,
    TripleBacktick,
    Video,
    contained_expressions,
)


class BaseVisitor[T]:
    """Visitor over expression trees.

    Override the ``visit_*`` hooks for the variants of interest; every hook
    defaults to ``visit_default``. ``T`` is what the hooks return, ``None``
    for visitors that only collect into attributes.

    """

    def visit(self, node: Node) -> T:
        """Run the hook for ``node``, then visit its children in order.

        Returns what the hook for ``node`` returned.

        """
        result = self._dispatch(node)
        for child in contained_expressions(node):
            self.visit(child)
        return result

    def visit_all(self, nodes: Iterable[Node]) -> list[T]:
        """Visit every top-level node of a parsed block, in order."""
        return [self.visit(node) for node in nodes]

    def visit_default(self, node: Node) -> T:
        """Fallback hook for every variant without its own override."""
        return None  # type: ignore[return-value]

    # -- Leaf visitors ---------------------------------------------------------

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_raw_html(self, node: RawHtml) -> T:
        return self.visit_default(node)

    def visit_raw_hyperlink(self, node: RawHyperlink) -> T:
        return self.visit_default(node)

    def visit_image(self, node: Image) -> T:
        return self.visit_default(node)

    def visit_video(self, node: Video) -> T:
        return self.visit_default(node)

    def visit_brace_directive(self, node: BraceDirective) -> T:
        return self.visit_default(node)

    def visit_table(self, node: Table) -> T:
        return self.visit_default(node)

    def visit_todo(self, node: Todo) -> T:
        return self.visit_default(node)

    def visit_page_embed(self, node: PageEmbed) -> T:
        return self.visit_default(node)

    def visit_block_embed(self, node: BlockEmbed) -> T:
        return self.visit_default(node)

    def visit_triple_backtick(self, node: TripleBacktick) -> T:
        return self.visit_default(node)

    def visit_single_backtick(self, node: SingleBacktick) -> T:
        return self.visit_default(node)

    def visit_hashtag(self, node: Hashtag) -> T:
        return self.visit_default(node)

    def visit_link(self, node: Link) -> T:
        return self.visit_default(node)

    def visit_markdown_internal_link(self, node: MarkdownInternalLink) -> T:
        return self.visit_default(node)

    def visit_markdown_external_link(self, node: MarkdownExternalLink) -> T:
        return self.visit_default(node)

    def visit_block_ref(self, node: BlockRef) -> T:
        return self.visit_default(node)

    def visit_latex(self, node: Latex) -> T:
        return self.visit_default(node)

    def visit_hrule(self, node: HRule) -> T:
        return self.visit_default(node)

    # -- Container visitors ----------------------------------------------------

    def visit_attribute(self, node: Attribute) -> T:
        return self.visit_default(node)

    def visit_bold(self, node: Bold) -> T:
        return self.visit_default(node)

    def visit_italic(self, node: Italic) -> T:
        return self.visit_default(node)

    def visit_strike(self, node: Strike) -> T:
        return self.visit_default(node)

    def visit_highlight(self, node: Highlight) -> T:
        return self.visit_default(node)

    def visit_block_quote(self, node: BlockQuote) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        match node:
            case Text():
                return self.visit_text(node)
            case RawHtml():
                return self.visit_raw_html(node)
            case RawHyperlink():
                return self.visit_raw_hyperlink(node)
            case Image():
                return self.visit_image(node)
            case Video():
                return self.visit_video(node)
            case BraceDirective():
                return self.visit_brace_directive(node)
            case Table():
                return self.visit_table(node)
            case Todo():
                return self.visit_todo(node)
            case PageEmbed():
                return self.visit_page_embed(node)
            case BlockEmbed():
                return self.visit_block_embed(node)
            case TripleBacktick():
                return self.visit_triple_backtick(node)
            case SingleBacktick():
                return self.visit_single_backtick(node)
            case Hashtag():
                return self.visit_hashtag(node)
            case Link():
                return self.visit_link(node)
            case MarkdownInternalLink():
                return self.visit_markdown_internal_link(node)
            case MarkdownExternalLink():
                return self.visit_markdown_external_link(node)
            case BlockRef():
                return self.visit_block_ref(node)
            case Latex():
                return self.visit_latex(node)
            case HRule():
                return self.visit_hrule(node)
            case Attribute():
                return self.visit_attribute(node)
            case Bold():
                return self.visit_bold(node)
            case Italic():
                return self.visit_italic(node)
            case Strike():
                return self.visit_strike(node)
            case Highlight():
                return self.visit_highlight(node)
            case BlockQuote():
                return self.visit_block_quote(node)
            case _:
                return self.visit_default(node)


def transform(
    expressions: Iterable[Expression],
    fn: Callable[[Node], Node | None],
) -> list[Expression]:
    """Rebuild a parsed block, passing every node through ``fn``.

    Children are rebuilt before their parent, so ``fn`` always sees a
    container whose children have already been rewritten. Returning None
    from ``fn`` removes the node, and its subtree, from the result. The
    input block is left as it was.

    Args:
        expressions: Top-level expressions of a parsed block.
        fn: Replacement function. Return the node itself to keep it.

    Returns:
        The rewritten top-level expressions.

    """
    return list(_rebuild_all(tuple(expressions), fn))


def _rebuild_all(
    nodes: tuple[Node, ...], fn: Callable[[Node], Node | None]
) -> tuple[Node, ...]:
    return tuple(
        result for node in nodes
        if (result := _rebuild(node, fn)) is not None
    )


def _rebuild(node: Node, fn: Callable[[Node], Node | None]) -> Node | None:
    match node:
        case Styled(children=children):
            new_children = _rebuild_all(children, fn)
            if new_children != children:
                node = dataclasses.replace(node, children=new_children)
        case Attribute(value=value):
            new_value = _rebuild_all(value, fn)
            if new_value != value:
                node = dataclasses.replace(node, value=new_value)
    return fn(node)


__all__ = ["BaseVisitor", "transform"]
