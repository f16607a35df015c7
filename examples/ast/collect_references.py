"""Typed tree walk: build a backlink index from a handful of blocks."""

from collections import defaultdict

from notemark import BlockEmbed, BlockRef, Hashtag, Link, PageEmbed, parse
from notemark.visitor import BaseVisitor


class ReferenceCollector(BaseVisitor[None]):
    """Collect every page and block a block points at."""

    def __init__(self) -> None:
        self.pages: list[str] = []
        self.blocks: list[str] = []

    def visit_link(self, node: Link) -> None:
        self.pages.append(node.page)

    def visit_hashtag(self, node: Hashtag) -> None:
        self.pages.append(node.tag)

    def visit_page_embed(self, node: PageEmbed) -> None:
        self.pages.append(node.target)

    def visit_block_ref(self, node: BlockRef) -> None:
        self.blocks.append(node.id)

    def visit_block_embed(self, node: BlockEmbed) -> None:
        self.blocks.append(node.target)


graph = {
    "b1": "Met with [[Alice]] about #projects/atlas",
    "b2": "**Follow up** with [[Alice]] on ((b1))",
    "b3": "{{embed: [[Weekly Review]]}}",
}

backlinks: dict[str, list[str]] = defaultdict(list)
for uid, text in graph.items():
    collector = ReferenceCollector()
    collector.visit_all(parse(text))
    for target in collector.pages + collector.blocks:
        backlinks[target].append(uid)

for target, sources in sorted(backlinks.items()):
    print(f"{target}: {', '.join(sources)}")
