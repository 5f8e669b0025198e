"""
tests/test_newick.py
====================
Pytest test suite for parse_newick and TreeNode.

Tree fixtures
-------------
Reference trees are loaded from .tree files in tests/trees/:

  balanced_4leaf.tree
      ((1:0.25,2:0.25):0.5,(3:0.625,4:0.625):0.125);

  caterpillar_5leaf.tree
      (1:2,(2:1.5,(3:1,(4:0.5,5:0.5):0.5):0.5):0.5);

  two_leaf.tree
      (1:1.5,2:1.5);

  named_3leaf.tree
      (A:1,(B:1,C:1):1);

All branch lengths are dyadic fractions, so parsed values compare exactly.
"""

import os
import sys

import pytest

_TREES_DIR = os.path.join(os.path.dirname(__file__), "trees")

# Add parent directory to path so the package can be imported regardless of
# whether it has been installed.
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from coalcovar._exceptions import NewickParseError, ParseError
from coalcovar._newick import parse_newick
from coalcovar._node import TreeNode


# ======================================================================== #
# Helper                                                                    #
# ======================================================================== #


def load_tree(filename: str) -> TreeNode:
    """
    Load a NEWICK string from *filename* (inside tests/trees/) and return
    the parsed root.
    """
    path = os.path.join(_TREES_DIR, filename)
    with open(path) as fh:
        newick = fh.read().strip()
    return parse_newick(newick)


def caterpillar_newick(n: int) -> str:
    """
    Left-nested caterpillar with *n* leaves and unit branch lengths, e.g.
    ``((1:1,2:1):1,3:1)`` for n=3.  The root carries no branch length.
    """
    inner = "".join(f",{i}:1):1" for i in range(2, n))
    return "(" * (n - 1) + "1:1" + inner + f",{n}:1)"


# ======================================================================== #
# Fixtures                                                                  #
# ======================================================================== #


@pytest.fixture
def balanced():
    """4-leaf balanced tree: ((1:0.25,2:0.25):0.5,(3:0.625,4:0.625):0.125)"""
    return load_tree("balanced_4leaf.tree")


@pytest.fixture
def caterpillar():
    """5-leaf caterpillar: (1:2,(2:1.5,(3:1,(4:0.5,5:0.5):0.5):0.5):0.5)"""
    return load_tree("caterpillar_5leaf.tree")


@pytest.fixture
def two_leaf():
    """2-leaf tree: (1:1.5,2:1.5)"""
    return load_tree("two_leaf.tree")


@pytest.fixture
def named():
    """3-leaf tree with letter names: (A:1,(B:1,C:1):1)"""
    return load_tree("named_3leaf.tree")


# ======================================================================== #
# 1. Tree shape                                                             #
# ======================================================================== #


class TestTreeShape:
    @pytest.mark.parametrize(
        "tree_name,n_leaves",
        [
            ("two_leaf.tree", 2),
            ("named_3leaf.tree", 3),
            ("balanced_4leaf.tree", 4),
            ("caterpillar_5leaf.tree", 5),
        ],
    )
    def test_leaf_and_internal_counts(self, tree_name, n_leaves):
        root = load_tree(tree_name)
        assert root.n_leaves == n_leaves
        assert root.n_internal == n_leaves - 1

    def test_every_node_has_zero_or_two_children(self, caterpillar):
        for node in caterpillar.postorder():
            assert (node.left is None) == (node.right is None)

    def test_root_is_internal(self, two_leaf):
        assert not two_leaf.is_leaf
        assert two_leaf.left.is_leaf
        assert two_leaf.right.is_leaf

    def test_caterpillar_descends_right(self, caterpillar):
        node = caterpillar
        depth = 0
        while not node.is_leaf:
            assert node.left.is_leaf
            node = node.right
            depth += 1
        assert depth == 4

    def test_postorder_visits_children_first(self, balanced):
        order = list(balanced.postorder())
        assert len(order) == 7
        assert order[-1] is balanced
        assert order[0] is balanced.left.left
        assert order[2] is balanced.left
        assert order[5] is balanced.right


# ======================================================================== #
# 2. Branch lengths                                                         #
# ======================================================================== #


class TestBranchLengths:
    def test_named_tree_literal_values(self, named):
        assert named.left.branch_length == 1.0
        assert named.right.branch_length == 1.0
        assert named.right.left.branch_length == 1.0
        assert named.right.right.branch_length == 1.0

    def test_named_tree_internal_nodes(self, named):
        # root at depth 0, (B,C) at depth 1
        assert not named.is_leaf
        assert named.left.is_leaf
        assert not named.right.is_leaf
        assert named.right.left.is_leaf
        assert named.right.right.is_leaf

    def test_length_attaches_to_following_child(self, balanced):
        assert balanced.left.branch_length == 0.5
        assert balanced.right.branch_length == 0.125
        assert balanced.left.left.branch_length == 0.25
        assert balanced.right.right.branch_length == 0.625

    def test_root_length_default(self, balanced):
        assert balanced.branch_length == 0.0

    def test_root_length_parsed(self):
        root = parse_newick("(1:1,2:1):0.75;")
        assert root.branch_length == 0.75

    @pytest.mark.parametrize(
        "literal,expected",
        [
            ("1e-3", 1e-3),
            ("2.5E+2", 250.0),
            ("3E2", 300.0),
            (".5", 0.5),
            ("7", 7.0),
        ],
    )
    def test_numeric_forms(self, literal, expected):
        root = parse_newick(f"(1:{literal},2:1);")
        assert root.left.branch_length == pytest.approx(expected)

    def test_missing_lengths_default_to_zero(self):
        root = parse_newick("((1,2),3);")
        for node in root.postorder():
            assert node.branch_length == 0.0

    def test_coalescence_time_starts_at_zero(self, balanced):
        for node in balanced.postorder():
            assert node.coalescence_time == 0.0


# ======================================================================== #
# 3. Names and anonymous leaves                                             #
# ======================================================================== #


class TestLeafNames:
    def test_alphanumeric_names(self):
        root = parse_newick("(Alpha1:1,(beta2:1,C3po:1):1);")
        assert root.n_leaves == 3

    def test_anonymous_leaves_with_lengths(self):
        root = parse_newick("(:1,(:0.5,:0.5):0.5);")
        assert root.n_leaves == 3
        assert root.left.branch_length == 1.0
        assert root.right.left.branch_length == 0.5

    def test_anonymous_leaves_without_lengths(self):
        root = parse_newick("(,);")
        assert root.n_leaves == 2

    def test_surrounding_whitespace_ignored(self):
        root = parse_newick("  (1:1,2:1);\n")
        assert root.n_leaves == 2

    def test_terminator_optional(self):
        root = parse_newick("(1:1,(2:0.5,3:0.5):0.5)")
        assert root.n_leaves == 3


# ======================================================================== #
# 4. Malformed input                                                        #
# ======================================================================== #


class TestMalformed:
    def test_unclosed_tree_raises(self):
        with pytest.raises(ParseError):
            parse_newick("(A:1,B:1")

    @pytest.mark.parametrize(
        "newick",
        [
            "",
            ";",
            "A:1;",
            "(A:1;",
            "(A:1,B:1;",
            "(A:1,B:1));",
            "(A:1,B:1);x",
            "(A:1 ,B:1);",
            "(A:1,B:1,C:1);",
            "(A:,B:1);",
            "(A:1.2.3,B:1);",
            "(A:e,B:1);",
            "(A:-1,B:1);",
            "(A:1e999,B:1);",
            "((A:1,B:1)x:1,C:1);",
            "(A:1,'B':1);",
            "(A:1,B:1[comment]);",
        ],
    )
    def test_malformed_raises(self, newick):
        with pytest.raises(NewickParseError):
            parse_newick(newick)

    def test_error_reports_position(self):
        with pytest.raises(NewickParseError) as excinfo:
            parse_newick("(A:1,B:1")
        assert excinfo.value.position == 8
        assert excinfo.value.line == "(A:1,B:1"
        assert "position 8" in str(excinfo.value)

    def test_multifurcation_message(self):
        with pytest.raises(NewickParseError, match="bifurcating"):
            parse_newick("(A:1,B:1,C:1);")

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_newick("(A:1,B:x);")

    def test_overflowing_branch_length_rejected(self):
        with pytest.raises(NewickParseError, match="not finite") as excinfo:
            parse_newick("(1:1e999,(2:1,3:1):1);")
        assert excinfo.value.position == 3

    def test_deep_unclosed_tree_raises(self):
        newick = caterpillar_newick(3000)
        with pytest.raises(NewickParseError) as excinfo:
            parse_newick(newick[:-1])
        assert excinfo.value.position == len(newick) - 1


# ======================================================================== #
# 5. Independence across calls                                              #
# ======================================================================== #


class TestReentrancy:
    def test_repeated_calls_give_fresh_trees(self):
        a = parse_newick("(1:1,2:1);")
        b = parse_newick("(1:1,2:1);")
        assert a is not b
        assert a.left is not b.left

    def test_failure_does_not_affect_next_parse(self):
        with pytest.raises(NewickParseError):
            parse_newick("((1:1,2:1):1,")
        root = parse_newick("((1:1,2:1):1,3:2);")
        assert root.n_leaves == 3

    def test_deep_caterpillar(self):
        n = 300
        root = parse_newick(caterpillar_newick(n))
        assert root.n_leaves == n
        assert root.n_internal == n - 1

    @pytest.mark.slow
    def test_very_deep_caterpillar(self):
        # Far beyond the default interpreter recursion limit
        n = 5000
        root = parse_newick(caterpillar_newick(n))
        assert root.n_leaves == n
        node = root
        depth = 0
        while not node.is_leaf:
            node = node.left
            depth += 1
        assert depth == n - 1

    def test_deep_caterpillar_with_root_length(self):
        root = parse_newick(caterpillar_newick(2500) + ":0.5")
        assert root.branch_length == 0.5
        assert root.right.branch_length == 1.0
