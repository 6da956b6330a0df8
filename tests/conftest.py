"""Shared pytest fixtures and configuration."""

import logging
from collections.abc import Callable, Iterator

import pytest


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


class RecordingSink:
    """Verbose sink that keeps every notice it is given."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def verbose(self, message: Callable[[], str]) -> None:
        self.messages.append(message())


@pytest.fixture
def sink() -> RecordingSink:
    """Create a verbose sink that records notices."""
    return RecordingSink()


@pytest.fixture(autouse=True)
def reset_buildstamp_logger() -> Iterator[None]:
    """Drop handlers installed by setup_logging so tests stay independent."""
    yield
    logger = logging.getLogger("buildstamp")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
