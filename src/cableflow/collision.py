"""
Collision detection and detours.

Post-processes a synthesized route so that it steps around nodes it is not
attached to. The pass is a single best-effort sweep: each node is tested at
most once per segment, in node-list order, and inserted detours are not
tested again. Overlapping obstacles can still leave a route colliding; that
is reported by the trace, not treated as an error.
"""

from dataclasses import dataclass
from typing import Collection, List, Sequence, Tuple

from .config import DETOUR_MARGIN
from .geometry import Point, Rect
from .models import Node


@dataclass(frozen=True)
class Detour:
    """A detour inserted around one node."""

    node_id: str
    start: Point
    end: Point
    points: Tuple[Point, Point]


def segment_intersects_rect(start: Point, end: Point, rect: Rect) -> bool:
    """
    Check whether an axis-aligned segment touches a rectangle.

    The test is closed: a segment running along the outline counts.
    Diagonal segments never intersect.
    """
    if start.y == end.y:
        lo, hi = min(start.x, end.x), max(start.x, end.x)
        if rect.y <= start.y <= rect.y2 and hi >= rect.x and lo <= rect.x2:
            return True
    if start.x == end.x:
        lo, hi = min(start.y, end.y), max(start.y, end.y)
        if rect.x <= start.x <= rect.x2 and hi >= rect.y and lo <= rect.y2:
            return True
    return False


def detour_points(
    start: Point, end: Point, rect: Rect, margin: float = DETOUR_MARGIN
) -> List[Point]:
    """
    Two points that carry a segment around a rectangle.

    A horizontal segment is moved above the rectangle if it starts at or
    above the rectangle's top, otherwise below it. Vertical segments move to
    the left or right side in the same way.

    Returns:
        Two detour points, or an empty list for a diagonal segment.
    """
    if start.y == end.y:
        detour_y = rect.y - margin if start.y <= rect.y else rect.y2 + margin
        return [Point(start.x, detour_y), Point(end.x, detour_y)]
    if start.x == end.x:
        detour_x = rect.x - margin if start.x <= rect.x else rect.x2 + margin
        return [Point(detour_x, start.y), Point(detour_x, end.y)]
    return []


def simplify_route(points: Sequence[Point]) -> List[Point]:
    """
    Remove zero-length and collinear interior points.

    The endpoints and both stub tips (second and second-to-last points)
    are always kept so routes still leave and enter nodes perpendicularly.
    """
    if len(points) <= 4:
        return list(points)

    protected = {0, 1, len(points) - 2, len(points) - 1}
    simplified = [points[0]]

    for i in range(1, len(points) - 1):
        curr = points[i]
        if i not in protected:
            prev = simplified[-1]
            next_pt = points[i + 1]
            same_x = prev.x == curr.x == next_pt.x
            same_y = prev.y == curr.y == next_pt.y
            if curr == prev or same_x or same_y:
                continue
        simplified.append(curr)

    simplified.append(points[-1])
    return simplified


def find_collisions(
    points: Sequence[Point], endpoint_ids: Collection[str], nodes: Sequence[Node]
) -> List[Tuple[int, str]]:
    """List (segment index, node id) pairs where a route touches a foreign node."""
    hits = []
    for i, (start, end) in enumerate(zip(points, points[1:])):
        for node in nodes:
            if node.id in endpoint_ids:
                continue
            if segment_intersects_rect(start, end, node.rect):
                hits.append((i, node.id))
    return hits


def resolve_collisions(
    points: Sequence[Point],
    endpoint_ids: Collection[str],
    nodes: Sequence[Node],
    margin: float = DETOUR_MARGIN,
) -> Tuple[List[Point], List[Detour]]:
    """
    Insert detours around non-endpoint nodes.

    Routes without any collision are returned unchanged. Otherwise the
    route is simplified first, then swept once: for each segment, each
    foreign node is tested against the part of the segment not yet
    detoured, and a hit inserts two detour points.

    Args:
        points: Route to adjust.
        endpoint_ids: Ids of the cable's own nodes, which are never obstacles.
        nodes: All nodes, in input order.
        margin: Clearance kept from an obstacle's side.

    Returns:
        (adjusted points, detours inserted)
    """
    if not find_collisions(points, endpoint_ids, nodes):
        return list(points), []

    route = simplify_route(points)
    adjusted = [route[0]]
    detours: List[Detour] = []

    for i in range(len(route) - 1):
        start = adjusted[-1]
        end = route[i + 1]
        for node in nodes:
            if node.id in endpoint_ids:
                continue
            if not segment_intersects_rect(start, end, node.rect):
                continue
            detour = detour_points(start, end, node.rect, margin)
            if len(detour) == 2:
                adjusted.extend(detour)
                detours.append(Detour(node.id, start, end, (detour[0], detour[1])))
                start = detour[1]
        adjusted.append(end)

    return adjusted, detours


def adjust_for_collisions(
    points: Sequence[Point],
    endpoint_ids: Collection[str],
    nodes: Sequence[Node],
    margin: float = DETOUR_MARGIN,
) -> List[Point]:
    """Like resolve_collisions, returning only the adjusted route."""
    adjusted, _ = resolve_collisions(points, endpoint_ids, nodes, margin)
    return adjusted
