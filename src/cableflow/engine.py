"""
Cable routing engine.

Runs one stateless routing pass over a topology at a given zoom:

1. Analyze: validate cables, group them, and register edge assignments.
2. Allocate: spread each group's connection points along its node edges.
3. Synthesize: build a six-point orthogonal polyline per cable.
4. Detour: step routes around nodes they are not attached to.

Nothing is cached between passes; every call recomputes all routes from the
full node, channel and cable lists.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import (
    Dict,
    FrozenSet,
    List,
    NamedTuple,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from .allocator import allocate_assignment, channel_line
from .collision import find_collisions, resolve_collisions
from .config import DEFAULT_CONFIG, RoutingConfig
from .geometry import Point
from .models import (
    Cable,
    Channel,
    Diagnostic,
    Node,
    Route,
    TerminalRole,
    ZoomState,
)
from .spacing import fan_offset
from .synthesizer import synthesize, synthesize_channel_route
from .topology import TopologyAnalysis, TopologyAnalyzer
from .tracer import RoutingTrace

log = logging.getLogger(__name__)

Connections = Dict[Tuple[str, TerminalRole], Point]


class PendingRoute(NamedTuple):
    """A synthesized route waiting for the detour pass."""

    route: Route
    endpoint_ids: FrozenSet[str]
    reverse: bool


def zoom_scale(zoom: Union[float, ZoomState]) -> float:
    """
    Extract the scale factor from a zoom value.

    Raises:
        ValueError: If the scale is not a positive finite number.
    """
    k = zoom.k if isinstance(zoom, ZoomState) else float(zoom)
    if not math.isfinite(k) or k <= 0:
        raise ValueError(f"Zoom scale must be positive and finite, got {k}")
    return k


@dataclass
class RoutingResult:
    """
    Output of a routing pass.

    Attributes:
        routes: Routed cables keyed by cable id, in input order.
        diagnostics: Cables that were skipped, and why.
        zoom: Zoom scale the routes were computed at.
    """

    routes: Dict[str, Route] = field(default_factory=dict)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    zoom: float = 1.0

    def polylines(self) -> Dict[str, List[Point]]:
        """Plain mapping of cable id to polyline."""
        return {cable_id: list(r.points) for cable_id, r in self.routes.items()}

    def __getitem__(self, cable_id: str) -> Route:
        return self.routes[cable_id]

    def __contains__(self, cable_id: object) -> bool:
        return cable_id in self.routes

    def __len__(self) -> int:
        return len(self.routes)


class CableRouter:
    """
    Routes cables between nodes using orthogonal paths.

    Example:
        >>> router = CableRouter()
        >>> result = router.route(nodes, channels, cables, zoom=1.0)
        >>> result["c1"].points
    """

    def __init__(self, config: Optional[RoutingConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self._trace: Optional[RoutingTrace] = None

    def get_trace(self) -> Optional[RoutingTrace]:
        """Trace of the last pass run with debug=True, if any."""
        return self._trace

    def route(
        self,
        nodes: Sequence[Node],
        channels: Sequence[Channel],
        cables: Sequence[Cable],
        zoom: Union[float, ZoomState] = 1.0,
        debug: bool = False,
    ) -> RoutingResult:
        """
        Route all cables.

        Args:
            nodes: Node rectangles, in input order.
            channels: Routing channels.
            cables: Cables to route, in input order.
            zoom: Zoom scale or full zoom state; only the scale is used.
            debug: Record a RoutingTrace, available from get_trace().

        Returns:
            RoutingResult with one route per routable cable.

        Raises:
            ValueError: If the zoom scale is not a positive finite number.
        """
        k = zoom_scale(zoom)
        trace = RoutingTrace(zoom=k) if debug else None
        self._trace = trace

        analyzer = TopologyAnalyzer(nodes, channels)
        analysis = analyzer.analyze(cables)
        obstacles = list(analyzer.nodes.values())

        if trace:
            trace.add_stage(
                "analysis",
                {
                    "direct_groups": [g.key for g in analysis.direct_groups],
                    "channel_groups": [g.key for g in analysis.channel_groups],
                    "skipped": [str(d) for d in analysis.diagnostics],
                },
            )

        connections = self._allocate(analysis, k)
        if trace:
            trace.add_stage(
                "allocation",
                {
                    "edge_assignments": len(analysis.edges),
                    "connection_points": len(connections),
                },
            )

        raw = self._synthesize(analysis, connections, k)
        if trace:
            trace.add_stage("synthesis", {"routes": len(raw)})

        routes: Dict[str, Route] = {}
        for route, endpoint_ids, reverse in raw:
            points, detours = resolve_collisions(
                route.points, endpoint_ids, obstacles, self.config.detour_margin
            )
            if reverse:
                points.reverse()
            route.points = points
            routes[route.cable_id] = route

            if trace:
                trace.add_detours(route.cable_id, detours)
                for _, node_id in find_collisions(points, endpoint_ids, obstacles):
                    trace.add_residual(route.cable_id, node_id)

        if trace:
            trace.add_stage(
                "collisions",
                {
                    "detours": len(trace.detours),
                    "residual": len(trace.residual_collisions),
                },
            )

        ordered = dict(
            sorted(routes.items(), key=lambda item: analysis.cable_order[item[0]])
        )
        log.debug(
            "Routed %d cables at zoom %.3f (%d skipped)",
            len(ordered),
            k,
            len(analysis.diagnostics),
        )
        return RoutingResult(
            routes=ordered, diagnostics=list(analysis.diagnostics), zoom=k
        )

    def _allocate(self, analysis: TopologyAnalysis, k: float) -> Connections:
        """Connection point for every (cable id, role) terminal."""
        connections: Connections = {}
        for assignment in analysis.edges:
            geometry = analysis.geometries[assignment.node_id]
            connections.update(
                allocate_assignment(geometry, assignment, k, self.config)
            )
        return connections

    def _synthesize(
        self, analysis: TopologyAnalysis, connections: Connections, k: float
    ) -> List[PendingRoute]:
        """
        Build raw routes in group order.

        Direct routes are built from the group's anchor source to its anchor
        target; ``reverse`` says whether the route must be reversed to start at
        the cable's own first waypoint.
        """
        config = self.config
        raw: List[PendingRoute] = []

        for group in analysis.direct_groups:
            n = len(group.cables)
            edge_length = group.source.edge_length(group.source_edge)
            for idx, cable in enumerate(group.cables):
                src_role, tgt_role = group.roles(cable)
                points = synthesize(
                    connections[(cable.id, src_role)],
                    connections[(cable.id, tgt_role)],
                    group.source_edge,
                    group.target_edge,
                    group.source,
                    group.target,
                    k,
                    offset=fan_offset(idx, n, k, edge_length, config),
                    config=config,
                )
                reverse = group.is_reversed(cable)
                source_edge, target_edge = group.source_edge, group.target_edge
                if reverse:
                    source_edge, target_edge = target_edge, source_edge
                route = Route(
                    cable_id=cable.id,
                    points=points,
                    color=cable.color,
                    source_edge=source_edge,
                    target_edge=target_edge,
                )
                endpoints = frozenset((group.source.node_id, group.target.node_id))
                raw.append(PendingRoute(route, endpoints, reverse))

        for group in analysis.channel_groups:
            n = len(group)
            for idx, member in enumerate(group.members):
                cable = member.cable
                points = synthesize_channel_route(
                    connections[(cable.id, TerminalRole.SOURCE)],
                    connections[(cable.id, TerminalRole.TARGET)],
                    member.source_edge,
                    member.target_edge,
                    member.source,
                    member.target,
                    group.channel,
                    channel_line(group.channel, idx, n, k, config),
                    k,
                    config=config,
                )
                route = Route(
                    cable_id=cable.id,
                    points=points,
                    color=cable.color,
                    source_edge=member.source_edge,
                    target_edge=member.target_edge,
                    channel_id=group.channel.id,
                )
                endpoints = frozenset((member.source.node_id, member.target.node_id))
                raw.append(PendingRoute(route, endpoints, False))

        return raw


def compute_routes(
    nodes: Sequence[Node],
    channels: Sequence[Channel],
    cables: Sequence[Cable],
    zoom: Union[float, ZoomState] = 1.0,
    config: Optional[RoutingConfig] = None,
) -> Dict[str, List[Point]]:
    """
    Convenience function returning cable id -> polyline.

    Args:
        nodes: Node rectangles.
        channels: Routing channels.
        cables: Cables to route.
        zoom: Zoom scale or zoom state.
        config: Optional routing parameters.

    Returns:
        Mapping of cable id to its list of points.
    """
    return CableRouter(config).route(nodes, channels, cables, zoom).polylines()
