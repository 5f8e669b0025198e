"""
_node.py
========
Binary tree node used by the Newick parser and the coalescence traversal.

A tree is built fresh for every input line and discarded once its
coalescence times have been extracted, so nodes are plain linked objects
rather than the flat arrays a long-lived tree collection would use.

Children are owned by their parent.  There is no parent pointer: the parser
attaches a subtree by returning it to the caller, which stores it in its
``left`` or ``right`` slot.
"""

from typing import Iterator, Optional


class TreeNode:
    """
    One coalescence event (internal node) or one sampled lineage (leaf).

    Attributes
    ----------
    left, right      : TreeNode | None   Both None for a leaf, both set otherwise.
    branch_length    : float             Length of the edge to the parent.
                                         0.0 when not given; unused for the root.
    coalescence_time : float             Filled in by the coalescence traversal;
                                         0.0 for leaves.
    """

    __slots__ = ("left", "right", "branch_length", "coalescence_time")

    def __init__(
        self,
        left: Optional["TreeNode"] = None,
        right: Optional["TreeNode"] = None,
        branch_length: float = 0.0,
    ) -> None:
        self.left = left
        self.right = right
        self.branch_length = branch_length
        self.coalescence_time = 0.0

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"TreeNode(leaf, branch_length={self.branch_length!r})"
        return (
            f"TreeNode(internal, branch_length={self.branch_length!r}, "
            f"n_leaves={self.n_leaves})"
        )

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def postorder(self) -> Iterator["TreeNode"]:
        """
        Yield every node of the subtree rooted here in post-order
        (left subtree, right subtree, then the node itself).

        Uses an explicit stack, so caterpillar-shaped trees with thousands of
        leaves do not run into the interpreter recursion limit.
        """
        stack = [(self, False)]
        while stack:
            node, expanded = stack.pop()
            if expanded or node.is_leaf:
                yield node
                continue
            stack.append((node, True))
            stack.append((node.right, False))
            stack.append((node.left, False))

    @property
    def n_leaves(self) -> int:
        """Number of leaves (sampled lineages) below and including this node."""
        return sum(1 for node in self.postorder() if node.is_leaf)

    @property
    def n_internal(self) -> int:
        """Number of internal nodes (coalescence events) in this subtree."""
        return sum(1 for node in self.postorder() if not node.is_leaf)
