"""Parse configuration for notemark.

Configuration is an immutable value passed explicitly to a Parser. There is
no module-level or context-local configuration: the dialect selects the
grammar and must be visible at every call site.

Usage:
    from notemark import Dialect, Parser
    from notemark.config import ParseConfig

    parser = Parser(ParseConfig(dialect=Dialect.LOGSEQ))
    expressions = parser.parse("TODO write the report")

    # From a settings mapping (e.g. a loaded YAML/TOML file)
    config = ParseConfig.from_dict({"dialect": "logseq"})

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from notemark.dialect import Dialect
from notemark.errors import ConfigError


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        dialect: Which note dialect's grammar to apply

    """

    dialect: Dialect = Dialect.ROAM

    def __post_init__(self) -> None:
        if not isinstance(self.dialect, Dialect):
            try:
                dialect = Dialect.coerce(self.dialect)
            except ValueError as e:
                raise ConfigError("dialect", str(e)) from e
            object.__setattr__(self, "dialect", dialect)

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> ParseConfig:
        """Create ParseConfig from a mapping.

        Only includes keys that are valid ParseConfig fields; unknown keys
        are silently ignored. Dialect names are accepted case-insensitively.

        Args:
            config_dict: Mapping with config values. Keys should match
                ParseConfig attribute names.

        Returns:
            New ParseConfig instance with values from the mapping.

        Raises:
            ConfigError: If a value is invalid (e.g. an unknown dialect).

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "dialect": "logseq",
            ...     "unknown_key": "ignored",
            ... })
            >>> config.dialect
            <Dialect.LOGSEQ: 'logseq'>

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


DEFAULT_CONFIG: ParseConfig = ParseConfig()


__all__ = [
    "DEFAULT_CONFIG",
    "ParseConfig",
]
