"""
_coalescence.py
===============
Coalescence times, inter-coalescence intervals and the running E(T_iT_j)
aggregates.

Public API
----------
  collect_coalescence_times(root) -> list[float]
  intercoalescence_intervals(times) -> np.ndarray[float64, n-1]
  ScalarAccumulator()
  MatrixAccumulator()
  make_accumulator(mode)
  fold_tree(accumulator, root) -> np.ndarray

Units
-----
Simulators write branch lengths in units of 4·N₀ generations.  Intervals are
reported in units of 2·N₀ generations, hence the factor of 2 applied when the
sorted times are differenced.

Accumulator protocol
--------------------
An accumulator is sized once with ``initialize(size)``, where ``size`` is the
number of intervals per sample (n-1 for n sampled lineages).  Every later
``accumulate(intervals)`` must receive exactly ``size`` values, otherwise
SampleSizeError is raised.  ``fold_tree`` performs the initialization on the
first sample it sees.

The fold is additive per slot, so partial accumulators built over disjoint
subsets of samples can be combined with ``merge``.
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from coalcovar._exceptions import NoSamplesError, SampleSizeError, TimeConsistencyError
from coalcovar._node import TreeNode


logger = logging.getLogger(__name__)

MODES = ("matrix", "scalar")


# ============================================================================ #
# Per-tree computations                                                        #
# ============================================================================ #


def collect_coalescence_times(root: TreeNode) -> List[float]:
    """
    Label every node with its coalescence time and return the times of the
    internal nodes in post-order.

    A leaf has time 0.  An internal node's time is its left child's time plus
    the left child's branch length.  The right branch is not consulted; for a
    time-consistent (ultrametric) tree both give the same value.

    Parameters
    ----------
    root : TreeNode
        Root of a binary tree.

    Returns
    -------
    list[float]
        One time per internal node (n-1 values for n leaves), unsorted.
    """
    times = []
    for node in root.postorder():
        if node.is_leaf:
            node.coalescence_time = 0.0
        else:
            node.coalescence_time = (
                node.left.coalescence_time + node.left.branch_length
            )
            times.append(node.coalescence_time)
    return times


def intercoalescence_intervals(times: Sequence[float]) -> np.ndarray:
    """
    Convert coalescence times into inter-coalescence intervals.

    The times are sorted ascending and scaled by 2.  The first interval is
    the first scaled time; each later interval is the difference between
    consecutive scaled times.

    Parameters
    ----------
    times : sequence of float
        Coalescence times in any order.

    Returns
    -------
    np.ndarray[float64]
        Intervals, same length as *times*.

    Raises
    ------
    TimeConsistencyError
        If any interval is negative (a negative coalescence time, which only a
        malformed tree can produce).

    Examples
    --------
    >>> intercoalescence_intervals([0.5, 0.1])
    array([0.2, 0.8])
    """
    scaled = np.sort(np.asarray(times, dtype=np.float64)) * 2.0
    intervals = np.diff(scaled, prepend=0.0)

    if np.any(intervals < 0.0):
        logger.debug(
            "Negative inter-coalescence interval in sorted times %s", scaled / 2.0
        )
        raise TimeConsistencyError()

    return intervals


# ============================================================================ #
# Accumulators                                                                 #
# ============================================================================ #


class _Accumulator:
    """
    Shared sizing, counting and merging logic.  Subclasses implement
    ``_allocate``, ``_fold``, ``_merge`` and ``_finalize``.
    """

    mode = ""

    def __init__(self) -> None:
        self.size: Optional[int] = None
        self.n_samples: int = 0

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(size={self.size}, n_samples={self.n_samples})"
        )

    @property
    def initialized(self) -> bool:
        return self.size is not None

    def initialize(self, size: int) -> None:
        """
        Fix the number of intervals per sample.  Must be called exactly once,
        before the first ``accumulate``.
        """
        if self.initialized:
            raise SampleSizeError(
                f"{type(self).__name__} is already sized for {self.size} intervals"
            )
        if size < 1:
            raise SampleSizeError(
                f"A sample needs at least one interval (got size={size})"
            )
        self.size = int(size)
        self._allocate()

    def accumulate(self, intervals) -> None:
        """
        Fold one sample's interval vector into the running aggregate.

        Raises
        ------
        SampleSizeError
            If the accumulator is not initialized or *intervals* does not
            have ``size`` entries.
        """
        if not self.initialized:
            raise SampleSizeError("accumulate() called before initialize()")

        x = np.asarray(intervals, dtype=np.float64)
        if x.ndim != 1 or x.shape[0] != self.size:
            raise SampleSizeError(
                f"Sample {self.n_samples + 1} has {x.size} intervals, expected "
                f"{self.size}. Every tree in a run must have the same number "
                f"of leaves."
            )

        self._fold(x)
        self.n_samples += 1

    def merge(self, other: "_Accumulator") -> "_Accumulator":
        """
        Add the samples folded into *other* to this accumulator and return
        self.  Both must be of the same mode and, if sized, the same size.
        """
        if type(other) is not type(self):
            raise SampleSizeError(
                f"Cannot merge {type(other).__name__} into {type(self).__name__}"
            )
        if other.n_samples == 0:
            return self
        if not self.initialized:
            self.initialize(other.size)
        elif other.size != self.size:
            raise SampleSizeError(
                f"Cannot merge accumulators of sizes {self.size} and {other.size}"
            )

        self._merge(other)
        self.n_samples += other.n_samples
        return self

    def result(self):
        """
        Return the estimate averaged over all accumulated samples.

        Raises
        ------
        NoSamplesError
            If no sample has been accumulated.
        """
        if self.n_samples == 0:
            raise NoSamplesError("No tree samples were accumulated")
        return self._finalize()


class ScalarAccumulator(_Accumulator):
    """
    Single-number E(T_iT_j).

    Each sample contributes the mean of ``x[i] * x[j]`` over all unordered
    pairs i ≤ j, self-pairs included (n(n+1)/2 pairs for n intervals).  The
    result is the arithmetic mean of those per-sample values.
    """

    mode = "scalar"

    def _allocate(self) -> None:
        self.total = 0.0
        self._n_pairs = self.size * (self.size + 1) // 2

    def _fold(self, x: np.ndarray) -> None:
        pair_sum = float(np.triu(np.outer(x, x)).sum())
        self.total += pair_sum / self._n_pairs

    def _merge(self, other: "ScalarAccumulator") -> None:
        self.total += other.total

    def _finalize(self) -> float:
        return self.total / self.n_samples


class MatrixAccumulator(_Accumulator):
    """
    Per-pair E(T_iT_j) for every ordered pair of intervals.

    Sums are kept in a flat vector of ``size**2`` slots, slot ``i*size + j``
    holding the running sum of ``x[i] * x[j]``.  Both (i, j) and (j, i) are
    stored.  Index i corresponds to lineage count i + 2.
    """

    mode = "matrix"

    def _allocate(self) -> None:
        self.sums = np.zeros(self.size * self.size, dtype=np.float64)

    def _fold(self, x: np.ndarray) -> None:
        products = np.outer(x, x).ravel()
        if self.n_samples == 0:
            self.sums[:] = products
        else:
            self.sums += products

    def _merge(self, other: "MatrixAccumulator") -> None:
        self.sums += other.sums

    def _finalize(self) -> np.ndarray:
        """Row-major flat vector of per-pair means."""
        return self.sums / self.n_samples

    def matrix(self) -> np.ndarray:
        """Per-pair means as a ``(size, size)`` array."""
        return self.result().reshape(self.size, self.size)


def make_accumulator(mode: str = "matrix") -> _Accumulator:
    """
    Return an empty accumulator for *mode* ('matrix' or 'scalar').
    """
    if mode == "matrix":
        return MatrixAccumulator()
    if mode == "scalar":
        return ScalarAccumulator()
    raise ValueError(f"Unknown mode {mode!r}; expected one of {', '.join(MODES)}")


def fold_tree(accumulator: _Accumulator, root: TreeNode) -> np.ndarray:
    """
    Derive the intervals of one tree and fold them into *accumulator*,
    sizing it from this tree if it is still empty.

    Returns
    -------
    np.ndarray
        The tree's inter-coalescence intervals.
    """
    intervals = intercoalescence_intervals(collect_coalescence_times(root))
    if not accumulator.initialized:
        accumulator.initialize(intervals.shape[0])
    accumulator.accumulate(intervals)
    return intervals
