"""Container owning the currently displayed tree hierarchy."""

from __future__ import annotations

import logging
import math

import numpy as np

from forest2d.models.nodes import Branch, Leaf
from forest2d.models.params import TreeParams
from forest2d.utils.generate import generate_tree
from forest2d.utils.geometry import Vec
from forest2d.utils.render import draw_node

_LOGGER = logging.getLogger(__name__)

# trees grow upward on a y-down canvas
UP = -math.pi / 2


def count_nodes(node: Branch | Leaf) -> tuple[int, int]:
    """Returns the number of branches and leaves in a hierarchy."""
    match node:
        case Leaf():
            return 0, 1
        case Branch():
            kinds = [descendant.kind for descendant in node.iter_nodes()]
            return kinds.count("branch"), kinds.count("leaf")


class Forest:
    """Holds the generated trees and regenerates them when parameters change.

    Every call to `reset` discards the previous hierarchy and builds a new one.
    """

    def __init__(self, params: TreeParams | None = None, rng=None) -> None:
        self.params = params if params is not None else TreeParams()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.trees: list[Branch] = []
        self.reset()

    def reset(self, params: TreeParams | None = None) -> None:
        """Regenerates the forest, optionally with new parameters."""
        if params is not None:
            self.params = params

        self.trees = [generate_tree(self.params, self.rng)]

        for tree in self.trees:
            n_branches, n_leaves = count_nodes(tree)
            _LOGGER.debug(
                "Forest: generated tree (depth=%d, branches=%d, leaves=%d)",
                tree.depth,
                n_branches,
                n_leaves,
            )

    def draw(self, surface, origin: Vec, heading: float = UP) -> None:
        """Draws every tree from `origin`, growing along `heading`."""
        for tree in self.trees:
            draw_node(
                tree,
                surface,
                origin,
                heading,
                debug=self.params.debug,
                debug_color=self.params.color_debug,
            )
