"""Shared pytest fixtures and configuration."""

import logging
from collections.abc import Iterator

import pytest


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")
    config.addinivalue_line("markers", "real: live Trello API calls (needs credentials)")


@pytest.fixture(autouse=True)
def reset_trellocli_logger() -> Iterator[None]:
    """Restore the trellocli logger after tests that reconfigure it."""
    logger = logging.getLogger("trellocli")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
