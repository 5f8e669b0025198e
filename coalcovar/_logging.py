"""
_logging.py
===========
Log records for estimation runs.

The estimation code computes; this module only describes.  Each function
receives values that were already computed, such as the sample count or one
sample's intervals, and turns them into records on the
``coalcovar._logging`` logger.  Nothing here changes state, so tests can
capture the records with ``caplog`` and callers can silence them with
``coalcovar.quiet()``.
"""

import logging

import numpy as np


logger = logging.getLogger(__name__)


# ============================================================================ #
# Run-level logging                                                            #
# ============================================================================ #


def log_run_start(source: str, mode: str) -> None:
    """
    Log the start of an estimation run at INFO level.

    Parameters
    ----------
    source : str
        Path or description of the input.
    mode : str
        'matrix' or 'scalar'.
    """
    logger.info("Estimating E(T_iT_j) from %s (%s mode)", source, mode)


def log_run_summary(n_samples: int, size: int, mode: str, elapsed: float) -> None:
    """
    Log what was accumulated once all samples have been folded.

    Parameters
    ----------
    n_samples : int
        Number of trees folded.
    size : int
        Intervals per sample (n-1 for n sampled lineages).
    mode : str
        'matrix' or 'scalar'.
    elapsed : float
        Wall-clock seconds spent parsing and folding.
    """
    logger.info(
        "Accumulated %d sample(s): %d lineages, %d intervals per sample",
        n_samples,
        size + 1,
        size,
    )
    if mode == "matrix":
        logger.info("Result: %d x %d matrix (%d values)", size, size, size * size)
    else:
        logger.info("Result: single scalar over %d pairs", size * (size + 1) // 2)

    if elapsed > 0:
        logger.info(
            "Processed in %.2f s (%.0f trees/s)", elapsed, n_samples / elapsed
        )

    if n_samples < 100:
        logger.warning(
            "Only %d sample(s) accumulated; E(T_iT_j) estimates will be noisy.",
            n_samples,
        )


# ============================================================================ #
# Per-sample logging                                                           #
# ============================================================================ #


def log_sample(index: int, intervals: np.ndarray) -> None:
    """
    Log one folded sample at DEBUG level.

    Parameters
    ----------
    index : int
        Zero-based sample index.
    intervals : np.ndarray
        The sample's inter-coalescence intervals.
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug(
        "Sample %d: %d leaves, TMRCA %.6g (2N0 generations), shortest interval %.6g",
        index,
        intervals.shape[0] + 1,
        float(intervals.sum()),
        float(intervals.min()),
    )
