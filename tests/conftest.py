"""
Shared pytest configuration for the disasm6502 tests.
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """
    Fixture: Restore root logger handlers and level after each test.

    The CLI reconfigures logging on every invocation; its handlers point at
    CliRunner streams that are closed once the invocation returns.
    """
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
