"""
Connection-point allocation.

Spreads the cables of one group evenly along a node edge, or alternately
around a channel's centerline.
"""

import math
from typing import Dict, List, Tuple

from .config import DEFAULT_CONFIG, RoutingConfig
from .geometry import Edge, NodeGeometry, Point
from .models import Channel, EdgeAssignment, TerminalRole
from .spacing import channel_spacing, spacing


def allocate(
    geometry: NodeGeometry,
    edge: Edge,
    count: int,
    k: float,
    config: RoutingConfig = DEFAULT_CONFIG,
) -> List[Point]:
    """
    Allocate ``count`` evenly spaced points on one edge of a node.

    Points are centered on the edge midpoint and ordered along the edge's
    tangent axis (left to right, or top to bottom). When the spacing is zero
    every point is the midpoint.

    Args:
        geometry: Geometry of the node owning the edge.
        edge: Edge to place points on.
        count: Number of points.
        k: Zoom scale.
        config: Routing parameters.

    Returns:
        List of ``count`` points lying on the edge.
    """
    if count <= 0:
        return []

    s = spacing(k, count, geometry.edge_length(edge), config)
    if s == 0 or count == 1:
        return [geometry.edge_midpoint(edge)] * count

    start = -(s * (count - 1)) / 2
    return [geometry.point_on_edge(edge, start + i * s) for i in range(count)]


def allocate_assignment(
    geometry: NodeGeometry,
    assignment: EdgeAssignment,
    k: float,
    config: RoutingConfig = DEFAULT_CONFIG,
) -> Dict[Tuple[str, TerminalRole], Point]:
    """Allocate points for every terminal of an assignment, keyed by (cable, role)."""
    points = allocate(geometry, assignment.edge, len(assignment), k, config)
    return {
        (terminal.cable.id, terminal.role): point
        for terminal, point in zip(assignment.terminals, points)
    }


def channel_offset(
    index: int, count: int, k: float, config: RoutingConfig = DEFAULT_CONFIG
) -> float:
    """
    Signed offset of cable ``index`` from a channel's centerline.

    With an even count, cables pair up on either side of the centerline at
    half-step distances. With an odd count, the first cable sits on the
    centerline and the rest alternate outward, odd indices on the negative
    side.
    """
    step = channel_spacing(k, config)
    if count % 2 == 0:
        distance = step * (index // 2 + 0.5)
        return -distance if index % 2 == 0 else distance

    if index == 0:
        return 0.0
    distance = step * math.ceil(index / 2)
    return -distance if index % 2 == 1 else distance


def channel_line(
    channel: Channel,
    index: int,
    count: int,
    k: float,
    config: RoutingConfig = DEFAULT_CONFIG,
) -> float:
    """Coordinate of the lane cable ``index`` occupies inside a channel."""
    return channel.position + channel_offset(index, count, k, config)
