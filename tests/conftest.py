"""Shared pytest fixtures."""

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def reset_docmark_logger() -> Iterator[None]:
    """Drop handlers installed by setup_logging between tests."""
    yield
    logger = logging.getLogger("docmark")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
