"""Shared fixtures for linkway tests."""

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def _reset_linkway_logger() -> Iterator[None]:
    """Undo ``configure_logging()`` calls made by CLI tests."""
    logger = logging.getLogger("linkway")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            logger.removeHandler(handler)
    logger.setLevel(level)
