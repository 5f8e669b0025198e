"""
coalcovar
=========

Second moments of inter-coalescence intervals from simulated genealogies.

*coalcovar* reads the NEWICK trees written by ``ms``-style coalescent
simulators, derives each tree's coalescence times, and estimates
E(T_iT_j), the expected product of the i-th and j-th inter-coalescence
intervals, averaged over all simulated samples.

Main Functions
--------------
parse_newick : Parse one binary NEWICK string into a TreeNode tree
estimate_etitj : Fold an iterable of NEWICK strings into an accumulator
estimate_etitj_file : Same, reading simulator output from a file

Tree and Statistics
-------------------
TreeNode : Binary tree node with branch length and coalescence time
collect_coalescence_times : Post-order coalescence times of a tree
intercoalescence_intervals : Sorted times to intervals (2·N₀ units)
MatrixAccumulator : Per-pair E(T_iT_j) over all ordered interval pairs
ScalarAccumulator : Single E(T_iT_j) averaged over unordered pairs
fold_tree : Add one tree to an accumulator

Context Managers
----------------
quiet : Suppress coalcovar logging
suppress_logger : Suppress a specific logger

Utilities
---------
iter_ms_trees : Yield tree lines from simulator output
format_fixed : Fixed-point formatting used for matrix output

Examples
--------
Basic usage:

>>> from coalcovar import estimate_etitj
>>> trees = ['(1:0.5,(2:0.25,3:0.25):0.25);'] * 10
>>> acc = estimate_etitj(trees)
>>> acc.matrix()
array([[0.25, 0.25],
       [0.25, 0.25]])

Scalar mode:

>>> estimate_etitj(trees, mode='scalar').result()
0.25

From a simulator output file, without log output:

>>> from coalcovar import estimate_etitj_file, quiet
>>> with quiet():
...     acc = estimate_etitj_file('ms.out')
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Main functions
from ._newick import parse_newick
from ._estimate import estimate_etitj, estimate_etitj_file

# Tree and statistics
from ._node import TreeNode
from ._coalescence import (
    collect_coalescence_times,
    intercoalescence_intervals,
    MatrixAccumulator,
    ScalarAccumulator,
    make_accumulator,
    fold_tree,
)

# Context managers (user-facing utilities)
from ._context import suppress_logger, quiet

# Utilities
from ._msfile import iter_ms_trees
from ._utils import format_fixed

# Exceptions
from ._exceptions import (
    CoalcovarError,
    NewickParseError,
    ParseError,
    TimeConsistencyError,
    SampleSizeError,
    MsFormatError,
    NoSamplesError,
)

# Public API
__all__ = [
    # Main functions
    "parse_newick",
    "estimate_etitj",
    "estimate_etitj_file",
    # Tree and statistics
    "TreeNode",
    "collect_coalescence_times",
    "intercoalescence_intervals",
    "MatrixAccumulator",
    "ScalarAccumulator",
    "make_accumulator",
    "fold_tree",
    # Context managers
    "suppress_logger",
    "quiet",
    # Utilities
    "iter_ms_trees",
    "format_fixed",
    # Exceptions
    "CoalcovarError",
    "NewickParseError",
    "ParseError",
    "TimeConsistencyError",
    "SampleSizeError",
    "MsFormatError",
    "NoSamplesError",
    # Version info
    "__version__",
]
