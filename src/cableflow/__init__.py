"""
cableflow - Orthogonal cable routing between rectangular nodes

A Python library that lays out Manhattan-style cable paths between fixed
nodes, optionally through shared horizontal or vertical channels, with
fan-out spacing that responds smoothly to the canvas zoom.

Example:
    >>> from cableflow import Cable, CableRouter, Node
    >>> nodes = [Node("A", 400, 100, 80, 80), Node("B", 200, 300, 80, 80)]
    >>> cables = [Cable("c1", ["A", "B"]), Cable("c2", ["A", "B"])]
    >>> result = CableRouter().route(nodes, [], cables, zoom=1.0)
    >>> len(result["c1"].points)
    6

Debug Mode Example:
    >>> router = CableRouter()
    >>> result = router.route(nodes, [], cables, zoom=1.0, debug=True)
    >>> print(router.get_trace().summary())
"""

from .allocator import allocate, channel_offset
from .collision import adjust_for_collisions, segment_intersects_rect
from .config import ConfigurationError, RoutingConfig
from .engine import CableRouter, RoutingResult, compute_routes
from .export import RouteExporter
from .geometry import Edge, NodeGeometry, Orientation, Point, Rect
from .models import (
    Cable,
    Channel,
    Diagnostic,
    DiagnosticReason,
    Node,
    Route,
    ZoomState,
)
from .png_renderer import PNGRenderer, render_to_png
from .spacing import spacing
from .synthesizer import synthesize
from .topology import TopologyAnalyzer, TopologyError
from .tracer import RoutingTrace

__version__ = "0.3.0"

__all__ = [
    # Main API
    "CableRouter",
    "RoutingResult",
    "compute_routes",
    # Topology
    "Node",
    "Channel",
    "Cable",
    "ZoomState",
    "Route",
    "Diagnostic",
    "DiagnosticReason",
    "TopologyAnalyzer",
    "TopologyError",
    # Geometry
    "Point",
    "Rect",
    "Edge",
    "Orientation",
    "NodeGeometry",
    # Routing stages
    "spacing",
    "allocate",
    "channel_offset",
    "synthesize",
    "adjust_for_collisions",
    "segment_intersects_rect",
    # Configuration
    "RoutingConfig",
    "ConfigurationError",
    # Output
    "RouteExporter",
    "PNGRenderer",
    "render_to_png",
    # Debug/Tracing
    "RoutingTrace",
]
