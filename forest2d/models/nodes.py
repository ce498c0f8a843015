from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    computed_field,
)


class Leaf(BaseModel):
    """Terminal segment of a tree, rendered as a symmetric lens.

    Attributes:
    -----------
    angle : numeric
        angle relative to the heading of the parent branch, in radians
    length : numeric
        distance from the leaf base to its tip
    size : numeric
        width of the leaf at its middle
    color : string
        fill color of the leaf
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["leaf"] = "leaf"
    angle: float
    length: float
    size: float
    color: str

    @computed_field
    @property
    def depth(self) -> int:
        """Leaves always have a depth of 1."""
        return 1


class Branch(BaseModel):
    """Internal segment of a tree, rendered as a tapered quadrilateral.

    Attributes:
    -----------
    angle : numeric
        angle relative to the heading of the parent branch, in radians
    length : numeric
        length of the branch
    size : numeric
        width of the branch
    color : string
        fill color of the branch
    children : list of Branch or Leaf
        segments attached to the far end of this branch
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["branch"] = "branch"
    angle: float
    length: float
    size: float
    color: str
    children: list[Node] = Field(default_factory=list)

    _depth: int = PrivateAttr(default=1)

    def model_post_init(self, __context: Any) -> None:
        # children are frozen, so the depth never changes after this point
        self._depth = max((1 + child.depth for child in self.children), default=1)

    @computed_field
    @property
    def depth(self) -> int:
        """Longest path from this branch down to a leaf."""
        return self._depth

    def iter_nodes(self):
        """Yields this branch and every node below it, depth first."""
        yield self
        for child in self.children:
            match child:
                case Branch():
                    yield from child.iter_nodes()
                case Leaf():
                    yield child


Node = Annotated[Union[Branch, Leaf], Field(discriminator="kind")]

Branch.model_rebuild()
