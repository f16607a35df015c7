"""Config-bound parser facade.

``Parser`` binds a ParseConfig once and parses any number of blocks with
it. The parsing functions themselves are pure; a Parser only saves passing
the dialect on every call.

Usage:
    >>> parser = Parser(ParseConfig(dialect=Dialect.LOGSEQ))
    >>> parser("DONE ship it")
    [Todo(done=True), Text(content=' ship it')]

Thread Safety:
    A Parser holds only an immutable config. One instance can be shared by
    any number of threads.

"""

from __future__ import annotations

from collections.abc import Iterable

from notemark.config import DEFAULT_CONFIG, ParseConfig
from notemark.dialect import Dialect
from notemark.nodes import Expression
from notemark.parsing.blocks import parse_block
from notemark.utils.logger import get_logger

logger = get_logger(__name__)


class Parser:
    """Parse note blocks with a fixed configuration."""

    __slots__ = ("_config",)

    def __init__(
        self,
        config: ParseConfig | None = None,
        *,
        dialect: Dialect | str | None = None,
    ) -> None:
        """Initialize parser.

        Args:
            config: Parse configuration (defaults to Roam)
            dialect: Shortcut for ``ParseConfig(dialect=...)``. Overrides the
                dialect of ``config`` when both are given.

        """
        config = config or DEFAULT_CONFIG
        if dialect is not None:
            config = ParseConfig(dialect=dialect)  # type: ignore[arg-type]
        self._config = config

    @property
    def config(self) -> ParseConfig:
        return self._config

    @property
    def dialect(self) -> Dialect:
        return self._config.dialect

    def __call__(self, block: str | bytes) -> list[Expression]:
        return self.parse(block)

    def __repr__(self) -> str:
        return f"Parser(dialect={self._config.dialect.value!r})"

    def parse(self, block: str | bytes) -> list[Expression]:
        """Parse one block.

        Raises:
            ParseError: If the block cannot be parsed.

        """
        return parse_block(block, self._config.dialect)

    def parse_many(self, blocks: Iterable[str | bytes]) -> list[list[Expression]]:
        """Parse several independent blocks, in order.

        The first block that cannot be parsed raises ParseError; blocks are
        never silently skipped.

        """
        dialect = self._config.dialect
        result = [parse_block(block, dialect) for block in blocks]
        logger.debug("Parsed %d %s blocks", len(result), dialect.value)
        return result


__all__ = ["Parser"]
