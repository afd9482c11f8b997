"""
Geometry primitives for cable routing.

Provides the small immutable value types every other module works with:

- Point: a canvas-space coordinate pair.
- Rect: an axis-aligned rectangle with derived edges and center.
- Edge: one of the four sides of a rectangle.
- Orientation: horizontal or vertical, used for channels and connection axes.
- NodeGeometry: per-node derived geometry computed once per routing pass.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Tuple


class Point(NamedTuple):
    """A point in canvas space."""

    x: float
    y: float


class Orientation(Enum):
    """Axis of a channel or of a dominant connection direction."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class Edge(Enum):
    """Which side of a rectangle a connection attaches to."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"

    @property
    def is_horizontal(self) -> bool:
        """True for top/bottom, whose points spread along the x axis."""
        return self in (Edge.TOP, Edge.BOTTOM)

    @property
    def opposite(self) -> "Edge":
        return _OPPOSITE[self]

    @property
    def normal(self) -> Tuple[int, int]:
        """Outward unit normal as (dx, dy) in canvas space (y grows down)."""
        return _NORMALS[self]

    def opposes(self, other: "Edge") -> bool:
        return self.opposite is other


_OPPOSITE = {
    Edge.TOP: Edge.BOTTOM,
    Edge.BOTTOM: Edge.TOP,
    Edge.LEFT: Edge.RIGHT,
    Edge.RIGHT: Edge.LEFT,
}

_NORMALS = {
    Edge.TOP: (0, -1),
    Edge.BOTTOM: (0, 1),
    Edge.LEFT: (-1, 0),
    Edge.RIGHT: (1, 0),
}


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle."""

    x: float
    y: float
    width: float
    height: float

    @property
    def x2(self) -> float:
        return self.x + self.width

    @property
    def y2(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    @property
    def center(self) -> Point:
        return Point(self.center_x, self.center_y)

    def contains(self, point: Point) -> bool:
        """Closed containment test (boundary counts as inside)."""
        return self.x <= point.x <= self.x2 and self.y <= point.y <= self.y2

    def on_boundary(self, point: Point, eps: float = 1e-9) -> bool:
        """Check whether a point lies on the rectangle's outline."""
        if not (
            self.x - eps <= point.x <= self.x2 + eps
            and self.y - eps <= point.y <= self.y2 + eps
        ):
            return False
        return (
            abs(point.x - self.x) <= eps
            or abs(point.x - self.x2) <= eps
            or abs(point.y - self.y) <= eps
            or abs(point.y - self.y2) <= eps
        )

    def interior_overlaps_segment(self, start: Point, end: Point) -> bool:
        """
        Open-interior test for an axis-aligned segment.

        Unlike the closed test used by the detour pass, touching the outline
        does not count. Used by tests and by the trace to report residual
        collisions.
        """
        if start.y == end.y:
            lo, hi = min(start.x, end.x), max(start.x, end.x)
            return self.y < start.y < self.y2 and hi > self.x and lo < self.x2
        if start.x == end.x:
            lo, hi = min(start.y, end.y), max(start.y, end.y)
            return self.x < start.x < self.x2 and hi > self.y and lo < self.y2
        return False


@dataclass(frozen=True)
class NodeGeometry:
    """
    Derived geometry for one node, computed once per routing pass.

    Attributes:
        node_id: Id of the node this geometry belongs to.
        rect: The node's bounding rectangle.
    """

    node_id: str
    rect: Rect

    @property
    def center(self) -> Point:
        return self.rect.center

    def edge_length(self, edge: Edge) -> float:
        """Width for top/bottom edges, height for left/right edges."""
        return self.rect.width if edge.is_horizontal else self.rect.height

    def edge_midpoint(self, edge: Edge) -> Point:
        rect = self.rect
        if edge is Edge.TOP:
            return Point(rect.center_x, rect.y)
        if edge is Edge.BOTTOM:
            return Point(rect.center_x, rect.y2)
        if edge is Edge.LEFT:
            return Point(rect.x, rect.center_y)
        return Point(rect.x2, rect.center_y)

    def point_on_edge(self, edge: Edge, offset: float) -> Point:
        """Point on an edge, shifted by offset from the edge midpoint."""
        mid = self.edge_midpoint(edge)
        if edge.is_horizontal:
            return Point(mid.x + offset, mid.y)
        return Point(mid.x, mid.y + offset)

    def edge_line(self, edge: Edge) -> float:
        """The fixed coordinate of an edge (y for top/bottom, x for left/right)."""
        rect = self.rect
        return {
            Edge.TOP: rect.y,
            Edge.BOTTOM: rect.y2,
            Edge.LEFT: rect.x,
            Edge.RIGHT: rect.x2,
        }[edge]
