from __future__ import annotations

import math

from matplotlib.colors import is_color_like
from pydantic import BaseModel, ConfigDict, Field, field_validator


class TreeParams(BaseModel):
    """Parameter container for tree generation and rendering.

    Attributes:
    -----------
    debug : bool
        whether to draw the centerline of every segment on top of it
    prob_next : numeric
        probability that a branch continues into more branches instead of
        ending in leaves
    prob_branch : numeric
        probability of forking one more sibling branch; each successful draw
        adds a branch, so the number of extra siblings is geometrically
        distributed. Must be < 1.
    max_depth : int
        maximum recursion depth, counted from the trunk
    max_branch_size, min_branch_size : numeric
        bounds of the branch width, interpolated by depth
    max_branch_length, min_branch_length : numeric
        bounds of the branch length, interpolated by depth
    min_num_leafs, max_num_leafs : numeric
        bounds of the number of leaves at the end of a branch
    leaf_size, leaf_length : numeric
        width and length of every leaf
    var_branch_angle : numeric
        branches deviate from their parent heading by at most this angle,
        in radians
    var_leaf_angle : numeric
        leaves deviate from their branch heading by at most this angle, in
        radians
    color_branch, color_leaf, color_debug : string
        any color matplotlib understands, usually a hex code
    """

    model_config = ConfigDict(frozen=True)

    debug: bool = True

    prob_next: float = Field(default=0.80, ge=0, le=1)
    prob_branch: float = Field(default=0.3, ge=0, lt=1)
    max_depth: int = 20

    max_branch_size: float = 30.0
    min_branch_size: float = 5.0

    max_branch_length: float = 50.0
    min_branch_length: float = 10.0

    min_num_leafs: float = 1.0
    max_num_leafs: float = 3.0

    leaf_size: float = 30.0
    leaf_length: float = 30.0

    var_branch_angle: float = math.pi / 15
    var_leaf_angle: float = math.pi / 2

    color_branch: str = "#9C2C77"
    color_leaf: str = "#FD841F"
    color_debug: str = "#ff4040"

    @field_validator("color_branch", "color_leaf", "color_debug")
    @classmethod
    def check_color(cls, value: str) -> str:
        """Rejects strings matplotlib cannot draw with."""
        if not is_color_like(value):
            raise ValueError(f"{value!r} is not a valid color")
        return value
