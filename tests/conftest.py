"""Pytest configuration and shared fixtures for the docbook2adoc test suite.

This module provides shared fixtures and test configuration used across
the entire test suite.
"""

import logging
import os
from pathlib import Path
from typing import Callable

import pytest

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )
    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed, skip configuration
    pass

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def sample_book_path() -> Path:
    """Path of the sample DocBook 4 book shipped with the tests."""
    return FIXTURES_DIR / "sample_book.xml"


@pytest.fixture
def write_docbook(tmp_path: Path) -> Callable[[str, str], Path]:
    """Provide a helper writing DocBook text into the temporary directory.

    Returns
    -------
    callable
        ``write_docbook(name, xml)`` returning the written path

    """

    def _write(name: str, xml: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(xml, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def restore_root_logging():
    """Restore root logger handlers and level changed by ``configure_logging``."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
