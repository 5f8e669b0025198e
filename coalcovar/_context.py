"""
_context.py
===========
Scoped control over coalcovar's log output.

A long run over many simulated trees logs per-sample records at DEBUG and a
summary at INFO.  These managers lower or raise a logger's threshold for the
duration of a with-block and put the previous level back afterwards, whether
the block finishes or raises.
"""

import logging
from contextlib import contextmanager


# Parent of every module logger in the package
PACKAGE_LOGGER = "coalcovar"


@contextmanager
def suppress_logger(logger_name: str, level: int = logging.CRITICAL):
    """
    Set one logger to *level* for the duration of the block.

    Handy for muting a single module (say the run summary emitted by
    ``coalcovar._logging``) while the reader and driver keep logging.

    Parameters
    ----------
    logger_name : str
        Name of the logger to change (e.g. 'coalcovar._logging').
    level : int, default logging.CRITICAL
        Temporary logging level.

    Yields
    ------
    None
        Control is yielded back to the with-block.

    Examples
    --------
    >>> with suppress_logger('coalcovar._logging'):
    ...     acc = estimate_etitj(trees)

    >>> # Mute the reader as well
    >>> with suppress_logger('coalcovar._logging'):
    ...     with suppress_logger('coalcovar._msfile'):
    ...         acc = estimate_etitj_file(path)

    Notes
    -----
    The level in force on entry is restored on exit, so nested blocks unwind
    in order and an exception inside the block leaves no lasting change.
    """
    logger = logging.getLogger(logger_name)
    original_level = logger.level

    try:
        logger.setLevel(level)
        yield
    finally:
        logger.setLevel(original_level)


@contextmanager
def quiet(level: int = logging.CRITICAL):
    """
    Temporarily suppress all coalcovar logging.

    Every module logger is a child of the ``coalcovar`` logger, so changing
    that one level covers the whole package.

    Parameters
    ----------
    level : int, default logging.CRITICAL
        Temporary logging level.

    Examples
    --------
    >>> with quiet():
    ...     acc = estimate_etitj_file('sim.out')

    >>> # Show only warnings
    >>> with quiet(logging.WARNING):
    ...     acc = estimate_etitj_file('sim.out')
    """
    with suppress_logger(PACKAGE_LOGGER, level):
        yield
