"""Unit tests for console formatting and logging setup."""

import logging
from collections.abc import Iterator

import pytest
from rich.logging import RichHandler
from tracewipe.utils.formatting import format_size, setup_logging


@pytest.fixture
def clean_logger() -> Iterator[logging.Logger]:
    """The tracewipe logger, restored after the test."""
    logger = logging.getLogger("tracewipe")
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


class TestFormatSize:
    """Tests for format_size."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (None, "0 B"),
            (0, "0 B"),
            (500, "500 B"),
            (2048, "2.0 KB"),
            (5 * 1024 * 1024, "5.0 MB"),
        ],
    )
    def test_units(self, size: int | None, expected: str) -> None:
        """Sizes are rendered with a binary unit."""
        assert format_size(size) == expected


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_quiet_shows_warnings(self, clean_logger: logging.Logger) -> None:
        """Without verbose only warnings and above pass."""
        setup_logging(verbose=False)

        assert clean_logger.level == logging.WARNING

    def test_verbose_shows_info(self, clean_logger: logging.Logger) -> None:
        """Verbose lowers the threshold to INFO."""
        setup_logging(verbose=True)

        assert clean_logger.level == logging.INFO

    def test_single_rich_handler(self, clean_logger: logging.Logger) -> None:
        """Repeated setup does not stack handlers."""
        setup_logging()
        setup_logging(verbose=True)

        rich_handlers = [h for h in clean_logger.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1
