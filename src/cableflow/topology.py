"""
Topology analysis for cable routing.

Resolves cable waypoints against the node and channel lists, rejects cables
that cannot be routed, groups the rest, and records which cables terminate on
which node edge:

- Direct cables ([node, node]) are grouped by the unordered pair of node ids,
  so cables between the same two nodes share one fan-out regardless of their
  declared direction.
- Channel cables ([node, channel, node]) are grouped by channel id.

All ordering follows the input cable list, which keeps layouts reproducible.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .geometry import Edge, NodeGeometry, Orientation
from .models import (
    Cable,
    CableTerminal,
    Channel,
    ChannelWaypoint,
    Diagnostic,
    DiagnosticReason,
    EdgeAssignment,
    Node,
    NodeWaypoint,
    TerminalRole,
    Waypoint,
)

log = logging.getLogger(__name__)

GroupKey = Tuple[str, ...]


class TopologyError(Exception):
    """Raised when a cable cannot be resolved against the topology."""

    def __init__(self, cable_id: str, reason: DiagnosticReason, message: str):
        super().__init__(f"Cable {cable_id!r}: {message}")
        self.cable_id = cable_id
        self.reason = reason
        self.message = message

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(self.cable_id, self.reason, self.message)


def pair_key(a: str, b: str) -> GroupKey:
    """Group key shared by all direct cables between two nodes."""
    return ("pair",) + tuple(sorted((a, b)))


def channel_key(channel_id: str) -> GroupKey:
    return ("channel", channel_id)


def dominant_orientation(source: NodeGeometry, target: NodeGeometry) -> Orientation:
    """
    Axis that dominates the vector between two node centers.

    Horizontal only when |dx| is strictly greater than |dy|; ties go to
    vertical.
    """
    dx = target.center.x - source.center.x
    dy = target.center.y - source.center.y
    if abs(dx) > abs(dy):
        return Orientation.HORIZONTAL
    return Orientation.VERTICAL


def facing_edges(source: NodeGeometry, target: NodeGeometry) -> Tuple[Edge, Edge]:
    """Edges through which a direct connection leaves source and enters target."""
    if dominant_orientation(source, target) is Orientation.HORIZONTAL:
        if target.center.x > source.center.x:
            return Edge.RIGHT, Edge.LEFT
        return Edge.LEFT, Edge.RIGHT
    if target.center.y > source.center.y:
        return Edge.BOTTOM, Edge.TOP
    return Edge.TOP, Edge.BOTTOM


def channel_facing_edge(geometry: NodeGeometry, channel: Channel) -> Edge:
    """Edge of a node that faces a channel."""
    if channel.is_horizontal:
        return Edge.TOP if channel.position < geometry.center.y else Edge.BOTTOM
    return Edge.LEFT if channel.position < geometry.center.x else Edge.RIGHT


@dataclass
class DirectGroup:
    """
    Direct cables between one pair of nodes.

    The first cable in input order is the anchor: its declared source and
    target fix the group's orientation and edges for every member.

    Attributes:
        key: Pair key of the two node ids.
        source: Anchor source node geometry.
        target: Anchor target node geometry.
        orientation: Dominant connection axis.
        source_edge: Edge on the anchor source.
        target_edge: Edge on the anchor target.
        cables: Member cables in input order.
    """

    key: GroupKey
    source: NodeGeometry
    target: NodeGeometry
    orientation: Orientation
    source_edge: Edge
    target_edge: Edge
    cables: List[Cable] = field(default_factory=list)

    def is_reversed(self, cable: Cable) -> bool:
        """True if the cable runs from the anchor target to the anchor source."""
        return cable.path[0] != self.source.node_id

    def roles(self, cable: Cable) -> Tuple[TerminalRole, TerminalRole]:
        """Cable roles at the anchor source and anchor target, in that order."""
        if self.is_reversed(cable):
            return TerminalRole.TARGET, TerminalRole.SOURCE
        return TerminalRole.SOURCE, TerminalRole.TARGET


@dataclass(frozen=True)
class ChannelMember:
    """A channel cable with its resolved endpoints and edges."""

    cable: Cable
    source: NodeGeometry
    target: NodeGeometry
    source_edge: Edge
    target_edge: Edge


@dataclass
class ChannelGroup:
    """Cables passing through one channel, in input order."""

    channel: Channel
    members: List[ChannelMember] = field(default_factory=list)

    @property
    def key(self) -> GroupKey:
        return channel_key(self.channel.id)

    def __len__(self) -> int:
        return len(self.members)


class EdgeRegistry:
    """
    Terminals per node edge, built once per routing pass.

    Keyed by (node id, edge); each key holds one EdgeAssignment per cable
    group terminating on that edge, so unrelated groups never shift each
    other's connection points.
    """

    def __init__(self):
        self._edges: Dict[Tuple[str, Edge], Dict[GroupKey, EdgeAssignment]] = {}

    def add(
        self, node_id: str, edge: Edge, group: GroupKey, terminal: CableTerminal
    ) -> None:
        groups = self._edges.setdefault((node_id, edge), {})
        assignment = groups.get(group)
        if assignment is None:
            assignment = groups[group] = EdgeAssignment(node_id, edge, group)
        assignment.terminals.append(terminal)

    def get(self, node_id: str, edge: Edge, group: GroupKey) -> EdgeAssignment:
        return self._edges[(node_id, edge)][group]

    def assignments(self, node_id: str, edge: Edge) -> List[EdgeAssignment]:
        """All group assignments on one node edge, in first-seen order."""
        return list(self._edges.get((node_id, edge), {}).values())

    def keys(self) -> List[Tuple[str, Edge]]:
        return list(self._edges)

    def __iter__(self) -> Iterator[EdgeAssignment]:
        for groups in self._edges.values():
            yield from groups.values()

    def __len__(self) -> int:
        return sum(len(groups) for groups in self._edges.values())


@dataclass
class TopologyAnalysis:
    """Result of analyzing a topology."""

    geometries: Dict[str, NodeGeometry] = field(default_factory=dict)
    direct_groups: List[DirectGroup] = field(default_factory=list)
    channel_groups: List[ChannelGroup] = field(default_factory=list)
    edges: EdgeRegistry = field(default_factory=EdgeRegistry)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    cable_order: Dict[str, int] = field(default_factory=dict)

    @property
    def routable_count(self) -> int:
        return sum(len(g.cables) for g in self.direct_groups) + sum(
            len(g) for g in self.channel_groups
        )


class TopologyAnalyzer:
    """
    Classifies and groups cables against a fixed set of nodes and channels.

    Example:
        >>> analyzer = TopologyAnalyzer(nodes, channels)
        >>> analysis = analyzer.analyze(cables)
        >>> [g.key for g in analysis.direct_groups]
    """

    def __init__(self, nodes: Sequence[Node], channels: Sequence[Channel] = ()):
        self.nodes: Dict[str, Node] = {}
        self.channels: Dict[str, Channel] = {}

        for node in nodes:
            if node.id in self.nodes:
                log.warning("Duplicate node id %r; keeping the first", node.id)
                continue
            self.nodes[node.id] = node

        for channel in channels:
            if channel.id in self.channels:
                log.warning("Duplicate channel id %r; keeping the first", channel.id)
                continue
            if channel.id in self.nodes:
                log.warning(
                    "Channel id %r is also a node id; waypoints resolve to the node",
                    channel.id,
                )
            self.channels[channel.id] = channel

        self.geometries: Dict[str, NodeGeometry] = {
            node_id: node.geometry() for node_id, node in self.nodes.items()
        }

    def resolve(self, cable_id: str, waypoint_id: str) -> Waypoint:
        """
        Resolve a waypoint id to a node or channel.

        Raises:
            TopologyError: If the id names neither.
        """
        node = self.nodes.get(waypoint_id)
        if node is not None:
            return NodeWaypoint(node)
        channel = self.channels.get(waypoint_id)
        if channel is not None:
            return ChannelWaypoint(channel)
        raise TopologyError(
            cable_id,
            DiagnosticReason.UNKNOWN_WAYPOINT,
            f"unknown waypoint {waypoint_id!r}",
        )

    def classify(
        self, cable: Cable
    ) -> Tuple[NodeWaypoint, Optional[ChannelWaypoint], NodeWaypoint]:
        """
        Check a cable's shape and resolve its waypoints.

        Returns:
            (source, channel or None, target)

        Raises:
            TopologyError: If the shape is invalid or an id is unknown.
        """
        path = cable.path
        if len(path) not in (2, 3):
            raise TopologyError(
                cable.id,
                DiagnosticReason.INVALID_SHAPE,
                f"path must have 2 or 3 waypoints, got {len(path)}",
            )

        waypoints = [self.resolve(cable.id, waypoint_id) for waypoint_id in path]
        source, target = waypoints[0], waypoints[-1]
        middle = waypoints[1] if len(waypoints) == 3 else None

        if not isinstance(source, NodeWaypoint) or not isinstance(
            target, NodeWaypoint
        ):
            raise TopologyError(
                cable.id,
                DiagnosticReason.INVALID_SHAPE,
                "path must start and end at a node",
            )
        if middle is not None and not isinstance(middle, ChannelWaypoint):
            raise TopologyError(
                cable.id,
                DiagnosticReason.INVALID_SHAPE,
                f"middle waypoint {middle.id!r} must be a channel",
            )
        if middle is None and source.id == target.id:
            raise TopologyError(
                cable.id,
                DiagnosticReason.SELF_LOOP,
                f"direct cable starts and ends at node {source.id!r}",
            )
        return source, middle, target

    def analyze(self, cables: Sequence[Cable]) -> TopologyAnalysis:
        """
        Validate and group cables.

        Rejected cables are logged and reported as diagnostics; they never
        abort the analysis.

        Args:
            cables: Cables in input order.

        Returns:
            TopologyAnalysis with groups and the edge registry filled in.
        """
        analysis = TopologyAnalysis(geometries=self.geometries)
        direct: Dict[GroupKey, DirectGroup] = {}
        channel_groups: Dict[str, ChannelGroup] = {}

        for cable in cables:
            if cable.id in analysis.cable_order:
                self._reject(
                    analysis,
                    TopologyError(
                        cable.id,
                        DiagnosticReason.DUPLICATE_ID,
                        "duplicate cable id; keeping the first",
                    ),
                )
                continue

            try:
                source, channel, target = self.classify(cable)
            except TopologyError as e:
                self._reject(analysis, e)
                continue

            analysis.cable_order[cable.id] = len(analysis.cable_order)
            if channel is None:
                self._add_direct(direct, cable, source, target)
            else:
                group = channel_groups.get(channel.id)
                if group is None:
                    group = channel_groups[channel.id] = ChannelGroup(channel.channel)
                group.members.append(self._channel_member(cable, source, target, group))

        analysis.direct_groups = list(direct.values())
        analysis.channel_groups = list(channel_groups.values())
        self._register_edges(analysis)

        log.debug(
            "Analyzed %d cables: %d direct groups, %d channel groups, %d skipped",
            len(cables),
            len(analysis.direct_groups),
            len(analysis.channel_groups),
            len(analysis.diagnostics),
        )
        return analysis

    def _reject(self, analysis: TopologyAnalysis, error: TopologyError) -> None:
        log.warning("Skipping cable %r: %s", error.cable_id, error.message)
        analysis.diagnostics.append(error.to_diagnostic())

    def _add_direct(
        self,
        groups: Dict[GroupKey, DirectGroup],
        cable: Cable,
        source: NodeWaypoint,
        target: NodeWaypoint,
    ) -> None:
        key = pair_key(source.id, target.id)
        group = groups.get(key)
        if group is None:
            src_geom = self.geometries[source.id]
            tgt_geom = self.geometries[target.id]
            source_edge, target_edge = facing_edges(src_geom, tgt_geom)
            group = groups[key] = DirectGroup(
                key=key,
                source=src_geom,
                target=tgt_geom,
                orientation=dominant_orientation(src_geom, tgt_geom),
                source_edge=source_edge,
                target_edge=target_edge,
            )
        group.cables.append(cable)

    def _channel_member(
        self,
        cable: Cable,
        source: NodeWaypoint,
        target: NodeWaypoint,
        group: ChannelGroup,
    ) -> ChannelMember:
        src_geom = self.geometries[source.id]
        tgt_geom = self.geometries[target.id]
        return ChannelMember(
            cable=cable,
            source=src_geom,
            target=tgt_geom,
            source_edge=channel_facing_edge(src_geom, group.channel),
            target_edge=channel_facing_edge(tgt_geom, group.channel),
        )

    def _register_edges(self, analysis: TopologyAnalysis) -> None:
        """Fill the edge registry, group by group, in input order."""
        registry = analysis.edges

        for group in analysis.direct_groups:
            for cable in group.cables:
                src_role, tgt_role = group.roles(cable)
                registry.add(
                    group.source.node_id,
                    group.source_edge,
                    group.key,
                    CableTerminal(cable, src_role, group.target.node_id),
                )
                registry.add(
                    group.target.node_id,
                    group.target_edge,
                    group.key,
                    CableTerminal(cable, tgt_role, group.source.node_id),
                )

        for group in analysis.channel_groups:
            for member in group.members:
                registry.add(
                    member.source.node_id,
                    member.source_edge,
                    group.key,
                    CableTerminal(
                        member.cable,
                        TerminalRole.SOURCE,
                        member.target.node_id,
                        group.channel.id,
                    ),
                )
                registry.add(
                    member.target.node_id,
                    member.target_edge,
                    group.key,
                    CableTerminal(
                        member.cable,
                        TerminalRole.TARGET,
                        member.source.node_id,
                        group.channel.id,
                    ),
                )
