import numpy as np
import pytest

from forest2d.models.nodes import Branch, Leaf
from forest2d.models.params import TreeParams
from forest2d.utils.generate import generate_tree, leaf_count

SEEDS = range(10)


class ScriptedRandom:
    """Random source replaying fractions in [0, 1) scaled to each requested range."""

    def __init__(self, fractions):
        self.fractions = list(fractions)
        self.calls = 0

    def uniform(self, low, high):
        fraction = self.fractions[self.calls]
        self.calls += 1
        return low + fraction * (high - low)


def _branch_levels(node, level=0):
    """Yields (level, branch) for every branch, the trunk being level 0."""
    yield level, node
    for child in node.children:
        if isinstance(child, Branch):
            yield from _branch_levels(child, level + 1)


def _check_depths(node):
    if isinstance(node, Leaf):
        assert node.depth == 1
        return
    expected = max((1 + child.depth for child in node.children), default=1)
    assert node.depth == expected
    for child in node.children:
        _check_depths(child)


@pytest.mark.parametrize("seed", SEEDS)
def test_depth_invariant(seed):
    tree = generate_tree(TreeParams(max_depth=8), np.random.default_rng(seed))
    _check_depths(tree)


@pytest.mark.parametrize("seed", SEEDS)
def test_recursion_never_exceeds_max_depth(seed):
    params = TreeParams(max_depth=6, prob_next=1.0, prob_branch=0.4)
    tree = generate_tree(params, np.random.default_rng(seed))
    levels = [level for level, _ in _branch_levels(tree)]
    assert max(levels) == params.max_depth


@pytest.mark.parametrize("seed", SEEDS)
def test_branch_sizes_within_bounds(seed):
    params = TreeParams(max_depth=10)
    tree = generate_tree(params, np.random.default_rng(seed))
    for _, branch in _branch_levels(tree):
        assert params.min_branch_size <= branch.size <= params.max_branch_size
        assert params.min_branch_length <= branch.length <= params.max_branch_length


def test_sizes_follow_depth():
    """The trunk is the thickest and longest segment of a tree."""
    params = TreeParams(max_depth=10, prob_next=1.0)
    tree = generate_tree(params, np.random.default_rng(3))
    for _, branch in _branch_levels(tree):
        assert branch.size <= tree.size
        assert branch.length <= tree.length
    assert tree.size == pytest.approx(params.max_branch_size)


def test_no_continuation_gives_only_leaves():
    params = TreeParams(prob_next=0.0, min_num_leafs=2, max_num_leafs=5)
    for seed in SEEDS:
        tree = generate_tree(params, np.random.default_rng(seed))
        assert all(isinstance(child, Leaf) for child in tree.children)
        assert 2 <= len(tree.children) <= 5
        assert tree.depth == 2


def test_zero_max_depth_gives_single_branch():
    params = TreeParams(max_depth=0, prob_next=1.0)
    tree = generate_tree(params, np.random.default_rng(0))
    assert all(isinstance(child, Leaf) for child in tree.children)
    assert tree.children
    assert tree.depth == 2
    assert tree.size == params.max_branch_size


def test_negative_max_depth_terminates():
    tree = generate_tree(TreeParams(max_depth=-3), np.random.default_rng(0))
    assert all(isinstance(child, Leaf) for child in tree.children)


def test_leaves_use_leaf_parameters():
    params = TreeParams(
        prob_next=0.0, leaf_size=7, leaf_length=9, color_leaf="#00ff00"
    )
    tree = generate_tree(params, np.random.default_rng(1))
    for leaf in tree.children:
        assert leaf.size == 7
        assert leaf.length == 9
        assert leaf.color == "#00ff00"
        assert abs(leaf.angle) <= params.var_leaf_angle
    assert tree.color == params.color_branch
    assert abs(tree.angle) <= params.var_branch_angle


def test_same_seed_same_tree():
    params = TreeParams(max_depth=12)
    first = generate_tree(params, np.random.default_rng(42))
    second = generate_tree(params, np.random.default_rng(42))
    assert first == second


def test_scripted_randomness():
    """A scripted random sequence fully determines the generated shape."""
    params = TreeParams(
        prob_next=0.5,
        prob_branch=0.5,
        max_depth=2,
        min_num_leafs=1,
        max_num_leafs=3,
        var_branch_angle=0.1,
        var_leaf_angle=1.0,
    )
    rng = ScriptedRandom(
        [
            # trunk: angle, continue, no fork
            0.5, 0.2, 0.9,
            # level 1: angle, continue, fork, stop forking
            0.75, 0.1, 0.3, 0.8,
            # level 2, first: angle, (max depth), two leaves and their angles
            0.5, 0.0, 0.5, 0.0, 0.5,
            # level 2, second: angle, stop, one leaf and its angle
            0.25, 0.9, 0.0, 0.75,
        ]
    )
    tree = generate_tree(params, rng)

    assert rng.calls == len(rng.fractions)
    assert tree.angle == pytest.approx(0.0)
    assert len(tree.children) == 1

    (level_one,) = tree.children
    assert level_one.angle == pytest.approx(0.05)
    assert len(level_one.children) == 2

    first, second = level_one.children
    assert first.angle == pytest.approx(0.0)
    assert [leaf.angle for leaf in first.children] == pytest.approx([-1.0, 0.0])
    assert second.angle == pytest.approx(-0.05)
    assert [leaf.angle for leaf in second.children] == pytest.approx([0.5])

    assert (tree.depth, level_one.depth, first.depth, second.depth) == (4, 3, 2, 2)


@pytest.mark.parametrize(
    "value, expected", [(1.0, 1), (1.2, 2), (2.9, 3), (3.0, 3), (0.0, 0), (-1.5, 0)]
)
def test_leaf_count(value, expected):
    assert leaf_count(value) == expected
