"""
_newick.py
==========
Parser for single-line, strictly bifurcating NEWICK trees as written by
coalescent simulators.

Public API
----------
  parse_newick(line) -> TreeNode

Grammar
-------
::

    tree          := node [':' branch_length] [';']
    node          := '(' child ',' child ')'
    child         := (node | leaf) [':' branch_length]
    leaf          := name?                    # [0-9A-Za-z]+, discarded
    branch_length := [0-9.eE]+                # sign allowed right after e/E, finite

A branch length always belongs to the child it follows.  Leaf names are
cosmetic and are not stored.  A child slot that starts with neither '(' nor
an alphanumeric character is an anonymous leaf; the scan position is left
untouched and parsing continues with the optional branch length.

Scan position
-------------
Every private parse function takes the line and a position and returns
``(result, new_position)``.  There is no parser object and no shared mutable
state, so concurrent calls on different lines are independent.  Nested
parentheses are tracked on a local stack of pending nodes, not the Python
call stack, so deep caterpillar trees parse at any depth.

Errors
------
Anything outside the grammar raises NewickParseError with the offending
position.  A partial tree is never returned.
"""

import math
import string
from typing import List, Tuple

from coalcovar._exceptions import NewickParseError
from coalcovar._node import TreeNode


_NAME_CHARS = frozenset(string.ascii_letters + string.digits)
_NUMBER_CHARS = frozenset(string.digits + ".eE")


def parse_newick(line: str) -> TreeNode:
    """
    Parse one NEWICK tree and return its root.

    Parameters
    ----------
    line : str
        A single tree, e.g. ``'(1:0.3,(2:0.1,3:0.1):0.2);'``.  Leading and
        trailing whitespace is ignored; whitespace inside the tree is not.

    Returns
    -------
    TreeNode
        Root of a binary tree whose internal nodes all have two children.

    Raises
    ------
    NewickParseError
        If the line is not a complete binary NEWICK tree.

    Examples
    --------
    >>> root = parse_newick('(A:1,(B:1,C:1):1);')
    >>> root.left.branch_length, root.right.branch_length
    (1.0, 1.0)
    >>> root.n_leaves, root.n_internal
    (3, 2)
    """
    s = line.strip()
    n = len(s)

    root, pos = _parse_node(s, 0)

    if pos < n and s[pos] == ":":
        root.branch_length, pos = _parse_branch_length(s, pos + 1)
    if pos < n and s[pos] == ";":
        pos += 1
    if pos != n:
        raise NewickParseError(
            f"Unexpected character {s[pos]!r} after the end of the tree", s, pos
        )

    return root


# ============================================================================ #
# Private helpers                                                              #
# ============================================================================ #


def _parse_node(s: str, pos: int) -> Tuple[TreeNode, int]:
    """
    Parse ``'(' child ',' child ')'`` starting at *pos*.

    Nested subtrees are handled with an explicit stack of pending internal
    nodes rather than Python recursion, so nesting depth is bounded only by
    memory.  A pending node whose ``left`` is still None is waiting for its
    first child; otherwise it is waiting for its second.
    """
    n = len(s)
    pos = _expect(s, pos, "(")
    pending: List[TreeNode] = [TreeNode()]

    while True:
        if pos < n and s[pos] == "(":
            pending.append(TreeNode())
            pos += 1
            continue

        child, pos = _parse_leaf(s, pos)

        # Attach completed children, closing every node they finish.
        while True:
            if pos < n and s[pos] == ":":
                child.branch_length, pos = _parse_branch_length(s, pos + 1)

            parent = pending[-1]
            if parent.left is None:
                parent.left = child
                pos = _expect(s, pos, ",")
                break

            parent.right = child
            if pos < n and s[pos] == ",":
                raise NewickParseError(
                    "Node has more than two children; only bifurcating trees "
                    "are supported",
                    s,
                    pos,
                )
            pos = _expect(s, pos, ")")
            pending.pop()
            if not pending:
                return parent, pos
            child = parent


def _parse_leaf(s: str, pos: int) -> Tuple[TreeNode, int]:
    """Consume an optional leaf name; zero name characters is an anonymous leaf."""
    n = len(s)
    while pos < n and s[pos] in _NAME_CHARS:
        pos += 1
    return TreeNode(), pos


def _parse_branch_length(s: str, pos: int) -> Tuple[float, int]:
    """Consume a floating-point literal starting at *pos* (just past the ':')."""
    start = pos
    n = len(s)
    while pos < n:
        c = s[pos]
        if c in _NUMBER_CHARS:
            pos += 1
        elif (c == "-" or c == "+") and pos > start and s[pos - 1] in "eE":
            pos += 1
        else:
            break

    text = s[start:pos]
    if not text:
        raise NewickParseError("Missing branch length after ':'", s, start)
    try:
        value = float(text)
    except ValueError:
        raise NewickParseError(f"Invalid branch length {text!r}", s, start) from None
    if not math.isfinite(value):
        raise NewickParseError(f"Branch length is not finite: {text!r}", s, start)

    return value, pos


def _expect(s: str, pos: int, char: str) -> int:
    if pos >= len(s):
        raise NewickParseError(f"Expected {char!r} but the line ended", s, pos)
    if s[pos] != char:
        raise NewickParseError(f"Expected {char!r} but found {s[pos]!r}", s, pos)
    return pos + 1
