"""Recursive, randomized generation of tree hierarchies."""

from __future__ import annotations

import math

import numpy as np

from forest2d.models.nodes import Branch, Leaf
from forest2d.models.params import TreeParams
from forest2d.utils.geometry import interpolate_by_depth


def generate_tree(
    params: TreeParams, rng=None, depth: int = 0
) -> Branch:
    """Generates a tree (or sub-tree) starting at recursion level `depth`.

    Each call draws, in order: the branch angle, whether the branch continues,
    then either the fork coin-flips (one extra sibling per success, followed by
    one guaranteed child) or the number of leaves and one angle per leaf.

    Parameters
    ----------
    params : TreeParams
        generation parameters
    rng : object with a `uniform(low, high)` method, optional
        source of randomness, defaults to a fresh `numpy.random.Generator`.
        Pass `numpy.random.default_rng(seed)` for reproducible trees.
    depth : int, optional
        recursion level of the generated branch, 0 for the trunk

    Returns
    -------
    branch : Branch
        the generated branch with all of its descendants
    """
    if rng is None:
        rng = np.random.default_rng()

    angle = _uniform(rng, -params.var_branch_angle, params.var_branch_angle)
    has_next = _uniform(rng, 0, 1) < params.prob_next

    children: list[Branch | Leaf] = []
    if depth < params.max_depth and has_next:
        has_branch = _uniform(rng, 0, 1) < params.prob_branch
        while has_branch:
            has_branch = _uniform(rng, 0, 1) < params.prob_branch
            children.append(generate_tree(params, rng, depth + 1))

        children.append(generate_tree(params, rng, depth + 1))
    else:
        children.extend(_make_leaves(params, rng))

    branch = Branch(
        angle=angle, length=0, size=0, color=params.color_branch, children=children
    )

    size = interpolate_by_depth(
        params.min_branch_size, params.max_branch_size, branch.depth, params.max_depth
    )
    length = interpolate_by_depth(
        params.min_branch_length,
        params.max_branch_length,
        branch.depth,
        params.max_depth,
    )
    return branch.model_copy(update={"size": size, "length": length})


def leaf_count(value: float) -> int:
    """Turns a continuous leaf-count draw into a number of leaves.

    Rounds up, so a draw in [min, max] yields between ceil(min) and ceil(max)
    leaves. Negative draws yield no leaves.
    """
    return max(math.ceil(value), 0)


def _make_leaves(params: TreeParams, rng) -> list[Leaf]:
    num_leafs = leaf_count(
        _uniform(rng, params.min_num_leafs, params.max_num_leafs)
    )
    return [
        Leaf(
            angle=_uniform(rng, -params.var_leaf_angle, params.var_leaf_angle),
            length=params.leaf_length,
            size=params.leaf_size,
            color=params.color_leaf,
        )
        for _ in range(num_leafs)
    ]


def _uniform(rng, low: float, high: float) -> float:
    # crossed bounds describe the same interval
    if high < low:
        low, high = high, low
    return float(rng.uniform(low, high))
