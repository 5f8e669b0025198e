"""
_estimate.py
============
Run-level driver: parse every tree of an input, fold it into one
accumulator, and hand the accumulator back to the caller.

Public API
----------
  estimate_etitj(trees, mode='matrix') -> accumulator
  estimate_etitj_file(path, mode='matrix') -> accumulator

The accumulator is created here and owned by the call; nothing is kept at
module level.  The first bad tree aborts the run; samples are never skipped.
"""

import os
import time
from typing import Iterable, Union

from coalcovar._coalescence import fold_tree, make_accumulator
from coalcovar._logging import log_run_start, log_run_summary, log_sample
from coalcovar._msfile import iter_ms_trees
from coalcovar._newick import parse_newick


def estimate_etitj(trees: Iterable[str], mode: str = "matrix"):
    """
    Fold every NEWICK string in *trees* into a fresh accumulator.

    Parameters
    ----------
    trees : iterable of str
        One tree per item, already separated from any file header.
    mode : str, default 'matrix'
        'matrix' for per-pair means, 'scalar' for a single mean.

    Returns
    -------
    MatrixAccumulator | ScalarAccumulator
        Call ``.result()`` for the estimate.

    Raises
    ------
    NewickParseError, TimeConsistencyError, SampleSizeError
        On the first tree that cannot be used.

    Examples
    --------
    >>> acc = estimate_etitj(['(1:1,2:1);', '(1:3,2:3);'], mode='scalar')
    >>> acc.n_samples, acc.result()
    (2, 20.0)
    """
    accumulator = make_accumulator(mode)
    started = time.perf_counter()

    for index, line in enumerate(trees):
        root = parse_newick(line)
        intervals = fold_tree(accumulator, root)
        log_sample(index, intervals)

    if accumulator.n_samples > 0:
        log_run_summary(
            accumulator.n_samples,
            accumulator.size,
            mode,
            time.perf_counter() - started,
        )
    return accumulator


def estimate_etitj_file(path: Union[str, os.PathLike], mode: str = "matrix"):
    """
    Read simulator output from *path* and return the filled accumulator.

    The header up to the first ``//`` line is skipped; see
    :func:`coalcovar.iter_ms_trees`.

    Raises
    ------
    OSError
        If *path* cannot be opened or read.
    MsFormatError
        If the file has no ``//`` line.
    """
    log_run_start(os.fspath(path), mode)
    with open(path) as fh:
        return estimate_etitj(iter_ms_trees(fh), mode=mode)
