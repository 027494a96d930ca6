"""
Shared fixtures.
"""

import logging

import pytest
import structlog

from tests.fakes import FakeRenderer, RecordingExporter


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration done by entry points under test."""
    yield
    structlog.reset_defaults()
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)


@pytest.fixture
def fake_renderer():
    return FakeRenderer()


@pytest.fixture
def exporter():
    return RecordingExporter()
