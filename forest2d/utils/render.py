"""Rendering of tree hierarchies as filled quadrilaterals.

The renderer only needs an immediate-mode drawing surface with five methods:
`fill(color)`, `no_stroke()`, `stroke(color)`, `quad(a, b, c, d)` and
`line(a, b)`, where points are `Vec` instances. Two surfaces are provided: one
drawing onto a matplotlib axes and one recording shapes as shapely geometries.
"""

from __future__ import annotations

from dataclasses import dataclass

from matplotlib.patches import Polygon
from shapely.geometry import GeometryCollection, LineString
from shapely.geometry import Polygon as ShapelyPolygon

from forest2d.models.nodes import Branch, Leaf
from forest2d.utils.geometry import Vec, heading_vector, tangent_vector


def segment_corners(
    node: Branch | Leaf, position: Vec, heading: float
) -> tuple[tuple[Vec, Vec, Vec, Vec], Vec, float]:
    """Computes the quadrilateral representing a single tree segment.

    Branches are tapered: the near edge is perpendicular to the incoming
    heading and the far edge to the branch's own heading. Leaves are a
    symmetric lens whose widest point is at the middle of the segment.

    Parameters
    ----------
    node : Branch or Leaf
        the segment to draw
    position : Vec
        absolute position of the segment base
    heading : numeric
        absolute heading of the parent segment, in radians

    Returns
    -------
    corners : tuple of four Vec
        corners of the quadrilateral, in drawing order
    end : Vec
        absolute position of the far end of the segment
    new_heading : float
        absolute heading of the segment
    """
    new_heading = heading + node.angle
    end = position.plus(heading_vector(new_heading).times(node.length))
    half_size = max(node.size, 0.0) / 2

    match node:
        case Leaf():
            tan = tangent_vector(new_heading)
            mid = position.plus(end.minus(position).divide(2))
            left = mid.plus(tan.times(half_size))
            right = mid.minus(tan.times(half_size))
            corners = (position, left, end, right)
        case Branch():
            pos_tan = tangent_vector(heading)
            pos_left = position.plus(pos_tan.times(half_size))
            pos_right = position.minus(pos_tan.times(half_size))

            end_tan = tangent_vector(new_heading)
            end_left = end.plus(end_tan.times(half_size))
            end_right = end.minus(end_tan.times(half_size))
            corners = (pos_right, pos_left, end_left, end_right)

    return corners, end, new_heading


def draw_node(
    node: Branch | Leaf,
    surface,
    position: Vec,
    heading: float,
    *,
    debug: bool = False,
    debug_color: str = "#ff4040",
) -> None:
    """Draws a node and, for branches, all of its descendants.

    Parameters
    ----------
    node : Branch or Leaf
        root of the (sub-)tree to draw
    surface : render surface
        object exposing `fill`, `no_stroke`, `stroke`, `quad` and `line`
    position : Vec
        absolute position of the node base
    heading : numeric
        absolute heading of the parent, in radians
    debug : bool, optional
        whether to draw the centerline of each segment
    debug_color : string, optional
        color of the centerlines
    """
    corners, end, new_heading = segment_corners(node, position, heading)

    surface.no_stroke()
    surface.fill(node.color)
    surface.quad(*corners)

    if debug:
        surface.stroke(debug_color)
        surface.line(position, end)

    match node:
        case Branch(children=children):
            for child in children:
                draw_node(
                    child,
                    surface,
                    end,
                    new_heading,
                    debug=debug,
                    debug_color=debug_color,
                )
        case Leaf():
            pass


@dataclass(frozen=True)
class Shape:
    """A shape emitted to a `RecordingSurface`."""

    kind: str  # "quad" or "line"
    points: tuple[Vec, ...]
    fill: str | None
    stroke: str | None

    @property
    def geometry(self) -> ShapelyPolygon | LineString:
        coords = [(p.x, p.y) for p in self.points]
        if self.kind == "quad":
            return ShapelyPolygon(coords)
        return LineString(coords)


class RecordingSurface:
    """Render surface that keeps every emitted shape."""

    def __init__(self) -> None:
        self.shapes: list[Shape] = []
        self._fill: str | None = None
        self._stroke: str | None = None

    def fill(self, color: str) -> None:
        self._fill = color

    def no_stroke(self) -> None:
        self._stroke = None

    def stroke(self, color: str) -> None:
        self._stroke = color

    def quad(self, a: Vec, b: Vec, c: Vec, d: Vec) -> None:
        self.shapes.append(Shape("quad", (a, b, c, d), self._fill, self._stroke))

    def line(self, a: Vec, b: Vec) -> None:
        self.shapes.append(Shape("line", (a, b), None, self._stroke))

    @property
    def quads(self) -> list[Shape]:
        return [shape for shape in self.shapes if shape.kind == "quad"]

    @property
    def lines(self) -> list[Shape]:
        return [shape for shape in self.shapes if shape.kind == "line"]

    def bounds(self) -> tuple[float, float, float, float]:
        """Returns (minx, miny, maxx, maxy) over all recorded shapes."""
        return GeometryCollection([shape.geometry for shape in self.shapes]).bounds


class MatplotlibSurface:
    """Render surface drawing onto a matplotlib axes.

    Quads become `Polygon` patches and lines are plotted on top of them.
    """

    def __init__(self, ax, linewidth: float = 1.0) -> None:
        self.ax = ax
        self.linewidth = linewidth
        self._fill: str | None = None
        self._stroke: str | None = None

    def fill(self, color: str) -> None:
        self._fill = color

    def no_stroke(self) -> None:
        self._stroke = None

    def stroke(self, color: str) -> None:
        self._stroke = color

    def quad(self, a: Vec, b: Vec, c: Vec, d: Vec) -> None:
        patch = Polygon(
            [(p.x, p.y) for p in (a, b, c, d)],
            closed=True,
            facecolor=self._fill if self._fill is not None else "none",
            edgecolor=self._stroke if self._stroke is not None else "none",
            linewidth=self.linewidth,
        )
        self.ax.add_patch(patch)

    def line(self, a: Vec, b: Vec) -> None:
        if self._stroke is None:
            return
        self.ax.plot(
            [a.x, b.x], [a.y, b.y], color=self._stroke, linewidth=self.linewidth
        )
