"""Shared fixtures for ByteCalc tests."""

import pytest

from bytecalc.logging import (
    LogConfig,
    LogLevel,
    LogManager,
    MemoryHandler,
    ProgramLogFormatter,
    shutdown_logging,
)
from bytecalc.vm import PROGRAM_LOGGER_NAME


@pytest.fixture
def log_capture():
    """A program logger writing into a memory handler."""
    handler = MemoryHandler()
    handler.set_formatter(ProgramLogFormatter())
    manager = LogManager(LogConfig(level=LogLevel.INFO, handlers=["memory"]))
    manager.add_handler("memory", handler)
    yield manager.get_logger(PROGRAM_LOGGER_NAME), handler
    manager.shutdown()


@pytest.fixture(autouse=True, scope="module")
def _reset_global_logging():
    yield
    shutdown_logging()
