"""Pytest configuration and fixtures."""

import logging

import pytest

from tapline.facade import set_session
from tapline.session import Session
from tapline.sink import MemorySink


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up tapline loggers after each test so handlers do not leak."""
    yield

    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("tapline")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        del logging.Logger.manager.loggerDict[name]


@pytest.fixture(autouse=True)
def reset_default_session():
    """Drop the facade's default session between tests."""
    yield
    set_session(None)


@pytest.fixture
def sink():
    return MemorySink()


@pytest.fixture
def tap(sink):
    """An unplanned session writing into ``sink``."""
    return Session(out=sink)
