"""
conftest.py
===========
Session-level pytest configuration for the test suite.

Custom marks
------------
slow
    Applied to tests that build very deep trees (thousands of nested
    levels) to check that parsing does not depend on the interpreter
    recursion limit.  Deselect with ``-m "not slow"``.

    Registration here suppresses PytestUnknownMarkWarning and makes the mark
    visible in ``pytest --markers``.

Logging
-------
The package logger is reset to NOTSET after the session so that levels set
by CLI tests do not leak into an interactive session that imports pytest.
"""

import logging


def pytest_configure(config):
    """
    Configure pytest before test collection begins.
    """
    config.addinivalue_line(
        "markers",
        "slow: deep-tree parser tests (deselect with -m 'not slow')",
    )


def pytest_unconfigure(config):
    """
    Clean up after all tests complete.
    """
    logging.getLogger("coalcovar").setLevel(logging.NOTSET)
