"""
Route synthesis.

Builds the orthogonal polyline for one cable from its allocated connection
points. Every route leaves its source edge and enters its target edge through
a short perpendicular stub, then joins the two stub tips with one or two
bends. All routes have six points:

    connection -> stub tip -> bend -> bend -> stub tip -> connection

Consecutive points always share an x or a y coordinate.
"""

from typing import List

from .config import DEFAULT_CONFIG, RoutingConfig
from .geometry import Edge, NodeGeometry, Point
from .models import Channel
from .spacing import extension_length


def stub_point(
    geometry: NodeGeometry, point: Point, edge: Edge, extension: float
) -> Point:
    """Push a connection point ``extension`` units out along its edge normal."""
    dx, dy = edge.normal
    line = geometry.edge_line(edge)
    if edge.is_horizontal:
        return Point(point.x, line + dy * extension)
    return Point(line + dx * extension, point.y)


def synthesize(
    source_point: Point,
    target_point: Point,
    source_edge: Edge,
    target_edge: Edge,
    source_geometry: NodeGeometry,
    target_geometry: NodeGeometry,
    k: float,
    offset: float = 0.0,
    config: RoutingConfig = DEFAULT_CONFIG,
) -> List[Point]:
    """
    Build the polyline for a cable between two node edges.

    Three shapes are produced depending on how the edges face each other:

    - Opposing edges (right/left, bottom/top): a single bend segment
      midway between the stub tips, shifted by ``offset`` so cables of one
      group fan out mid-span as well as at the endpoints.
    - Perpendicular edges (e.g. bottom/left): a staircase through the
      midpoint between node centers. A top/bottom stub continues with a
      vertical run first, a left/right stub with a horizontal run first.
      The first run is clamped to the outer side of the source stub tip.
    - Same-facing edges (e.g. top/top): a run along the outermost stub line,
      so the path never cuts back across either node. ``offset`` is ignored.

    Args:
        source_point: Connection point on the source edge.
        target_point: Connection point on the target edge.
        source_edge: Edge the route leaves through.
        target_edge: Edge the route enters through.
        source_geometry: Source node geometry.
        target_geometry: Target node geometry.
        k: Zoom scale, sets the stub length.
        offset: Lateral shift of the bend for this cable.
        config: Routing parameters.

    Returns:
        Six points from source_point to target_point.
    """
    ext = extension_length(k, config)
    src_stub = stub_point(source_geometry, source_point, source_edge, ext)
    tgt_stub = stub_point(target_geometry, target_point, target_edge, ext)

    if source_edge.opposes(target_edge):
        if source_edge.is_horizontal:
            bend_y = (src_stub.y + tgt_stub.y) / 2 + offset
            bends = [Point(src_stub.x, bend_y), Point(tgt_stub.x, bend_y)]
        else:
            bend_x = (src_stub.x + tgt_stub.x) / 2 + offset
            bends = [Point(bend_x, src_stub.y), Point(bend_x, tgt_stub.y)]

    elif source_edge is target_edge:
        if source_edge.is_horizontal:
            pick = min if source_edge is Edge.TOP else max
            run_y = pick(src_stub.y, tgt_stub.y)
            bends = [Point(src_stub.x, run_y), Point(tgt_stub.x, run_y)]
        else:
            pick = min if source_edge is Edge.LEFT else max
            run_x = pick(src_stub.x, tgt_stub.x)
            bends = [Point(run_x, src_stub.y), Point(run_x, tgt_stub.y)]

    elif source_edge.is_horizontal:
        # Vertical run first, then across to the target's stub column. The run
        # never turns back past the source stub tip.
        pick = max if source_edge is Edge.BOTTOM else min
        mid_y = (source_geometry.center.y + target_geometry.center.y) / 2 + offset
        mid_y = pick(mid_y, src_stub.y)
        bends = [Point(src_stub.x, mid_y), Point(tgt_stub.x, mid_y)]

    else:
        pick = max if source_edge is Edge.RIGHT else min
        mid_x = (source_geometry.center.x + target_geometry.center.x) / 2 + offset
        mid_x = pick(mid_x, src_stub.x)
        bends = [Point(mid_x, src_stub.y), Point(mid_x, tgt_stub.y)]

    return [source_point, src_stub, bends[0], bends[1], tgt_stub, target_point]


def synthesize_channel_route(
    source_point: Point,
    target_point: Point,
    source_edge: Edge,
    target_edge: Edge,
    source_geometry: NodeGeometry,
    target_geometry: NodeGeometry,
    channel: Channel,
    lane: float,
    k: float,
    config: RoutingConfig = DEFAULT_CONFIG,
) -> List[Point]:
    """
    Build the polyline for a cable routed through a channel.

    The route stubs out of the source, runs to its lane in the channel,
    follows the channel until it lines up with the target's stub, then
    leaves the channel and stubs into the target.

    Args:
        lane: Channel coordinate this cable runs along (channel position
            plus its allocated offset).

    Returns:
        Six points from source_point to target_point.
    """
    ext = extension_length(k, config)
    src_stub = stub_point(source_geometry, source_point, source_edge, ext)
    tgt_stub = stub_point(target_geometry, target_point, target_edge, ext)

    if channel.is_horizontal:
        attach = [Point(src_stub.x, lane), Point(tgt_stub.x, lane)]
    else:
        attach = [Point(lane, src_stub.y), Point(lane, tgt_stub.y)]

    return [source_point, src_stub, attach[0], attach[1], tgt_stub, target_point]
