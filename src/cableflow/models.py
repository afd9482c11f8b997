"""
Data models for cable routing.

This module contains the dataclasses that describe a routing topology (nodes,
channels, cables), the zoom transform, and the values produced while and
after routing.

Classes:
    Node: Fixed rectangle acting as cable endpoint and obstacle.
    Channel: Unbounded horizontal or vertical routing bus.
    Cable: Connector with an ordered waypoint path and a display color.
    ZoomState: Scale and translation of the canvas transform.
    NodeWaypoint / ChannelWaypoint: Resolved waypoint variants.
    CableTerminal: One end of a cable attached to a node edge.
    EdgeAssignment: Ordered terminals of one cable group on one node edge.
    Route: Routed polyline for one cable.
    Diagnostic: Why a cable was left out of the output.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

from .geometry import Edge, NodeGeometry, Orientation, Point, Rect


@dataclass(frozen=True)
class Node:
    """
    A fixed rectangular node in canvas space.

    Attributes:
        id: Unique node identifier.
        x: Left edge x-coordinate.
        y: Top edge y-coordinate.
        width: Width of the node (must be positive).
        height: Height of the node (must be positive).
    """

    id: str
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Node {self.id!r} must have a positive size, "
                f"got {self.width}x{self.height}"
            )

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    def geometry(self) -> NodeGeometry:
        return NodeGeometry(self.id, self.rect)


@dataclass(frozen=True)
class Channel:
    """
    A routing bus cables may pass through.

    Attributes:
        id: Unique channel identifier.
        orientation: Horizontal channels run along x, vertical along y.
        position: y-coordinate for horizontal channels, x for vertical ones.
        label: Optional display label, ignored by routing.
    """

    id: str
    orientation: Orientation
    position: float
    label: Optional[str] = None

    @property
    def is_horizontal(self) -> bool:
        return self.orientation is Orientation.HORIZONTAL


@dataclass(frozen=True)
class Cable:
    """
    A connector between two nodes, optionally through one channel.

    Attributes:
        id: Unique cable identifier; keys the routing output.
        path: Waypoint ids, either [node, node] or [node, channel, node].
        color: Display attribute passed through to renderers unchanged.
    """

    id: str
    path: Tuple[str, ...]
    color: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.path, str):
            raise TypeError(
                f"Cable {self.id!r} path must be a sequence of waypoint ids, "
                f"not a string: {self.path!r}"
            )
        # Accept any sequence but store a tuple so cables stay hashable.
        object.__setattr__(self, "path", tuple(self.path))


@dataclass(frozen=True)
class ZoomState:
    """
    Canvas zoom/pan transform.

    Only ``k`` affects routing; ``x`` and ``y`` are the translation used by
    renderers to map canvas space to screen space.
    """

    k: float = 1.0
    x: float = 0.0
    y: float = 0.0

    def apply(self, point: Point) -> Point:
        """Map a canvas point to screen space."""
        return Point(point.x * self.k + self.x, point.y * self.k + self.y)

    def clamped(self, lo: float, hi: float) -> "ZoomState":
        """Return a copy with the scale clamped into [lo, hi]."""
        return ZoomState(min(max(self.k, lo), hi), self.x, self.y)


@dataclass(frozen=True)
class NodeWaypoint:
    """A waypoint resolved to a node."""

    node: Node

    @property
    def id(self) -> str:
        return self.node.id


@dataclass(frozen=True)
class ChannelWaypoint:
    """A waypoint resolved to a channel."""

    channel: Channel

    @property
    def id(self) -> str:
        return self.channel.id


Waypoint = Union[NodeWaypoint, ChannelWaypoint]


class TerminalRole(Enum):
    """Whether a terminal is the start or the end of its cable's path."""

    SOURCE = "source"
    TARGET = "target"


@dataclass(frozen=True)
class CableTerminal:
    """
    One end of a cable attached to a node edge.

    Attributes:
        cable: The cable this terminal belongs to.
        role: Source or target end of the cable's declared path.
        far_node: Id of the node at the other end of the cable.
        channel: Id of the channel the cable passes through, if any.
    """

    cable: Cable
    role: TerminalRole
    far_node: str
    channel: Optional[str] = None


@dataclass
class EdgeAssignment:
    """
    Ordered terminals of one cable group on one node edge.

    Attributes:
        node_id: Node the edge belongs to.
        edge: Which side of the node.
        group: Key of the cable group, ("pair", a, b) or ("channel", id).
        terminals: Terminals in input order.
    """

    node_id: str
    edge: Edge
    group: Tuple[str, ...]
    terminals: List[CableTerminal] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.terminals)

    def index_of(self, cable_id: str, role: TerminalRole) -> int:
        for i, terminal in enumerate(self.terminals):
            if terminal.cable.id == cable_id and terminal.role is role:
                return i
        raise KeyError(f"{cable_id} ({role.value}) not assigned to {self.node_id}")


@dataclass
class Route:
    """
    A routed cable.

    Attributes:
        cable_id: Id of the routed cable.
        points: Polyline from the first to the last waypoint node.
        color: The cable's display color.
        source_edge: Edge the route leaves its first node through.
        target_edge: Edge the route enters its last node through.
        channel_id: Channel the route passes through, if any.
    """

    cable_id: str
    points: List[Point]
    color: Optional[str] = None
    source_edge: Optional[Edge] = None
    target_edge: Optional[Edge] = None
    channel_id: Optional[str] = None

    @property
    def segments(self) -> List[Tuple[Point, Point]]:
        return list(zip(self.points, self.points[1:]))

    @property
    def length(self) -> float:
        return sum(abs(b.x - a.x) + abs(b.y - a.y) for a, b in self.segments)


class DiagnosticReason(Enum):
    """Why a cable was skipped."""

    INVALID_SHAPE = "invalid_shape"
    UNKNOWN_WAYPOINT = "unknown_waypoint"
    SELF_LOOP = "self_loop"
    DUPLICATE_ID = "duplicate_id"


@dataclass(frozen=True)
class Diagnostic:
    """A cable that was skipped, and why."""

    cable_id: str
    reason: DiagnosticReason
    message: str

    def __str__(self) -> str:
        return f"{self.cable_id}: {self.message} [{self.reason.value}]"
