"""Tests for notemark utility modules."""

import logging


class TestGetLogger:
    """Tests for get_logger."""

    def test_prefixes_bare_names(self) -> None:
        from notemark.utils import get_logger

        assert get_logger("exporter").name == "notemark.exporter"

    def test_keeps_package_names(self) -> None:
        from notemark.utils.logger import get_logger

        assert get_logger("notemark.parsing.blocks").name == "notemark.parsing.blocks"
        assert get_logger("notemark").name == "notemark"

    def test_returns_stdlib_logger(self) -> None:
        from notemark.utils.logger import get_logger

        logger = get_logger("x")
        assert isinstance(logger, logging.Logger)
        assert logger is logging.getLogger("notemark.x")
