"""
Route export.

This module turns routing results into formats a rendering collaborator can
consume directly:

- SVG path data ("M x,y L x,y ...") for a single polyline
- A standalone SVG document with nodes, channels and cables
- A JSON-ready mapping of cable id to points and color

The RouteExporter never changes route geometry; it only serializes it.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence
from xml.sax.saxutils import escape, quoteattr

from .engine import RoutingResult
from .geometry import Point
from .models import Channel, Node, ZoomState


def _num(value: float) -> str:
    return f"{value:g}"


class RouteExporter:
    """
    Exports routing results to SVG and JSON.

    Attributes:
        default_color: Stroke color for cables without a color.
        stroke_width: Cable stroke width in canvas units.
    """

    def __init__(self, default_color: str = "#999", stroke_width: float = 2):
        self.default_color = default_color
        self.stroke_width = stroke_width

    @staticmethod
    def to_svg_path(points: Sequence[Point]) -> str:
        """
        SVG path data for a polyline made of straight segments.

        Example:
            >>> RouteExporter.to_svg_path([Point(0, 0), Point(10, 0)])
            'M0,0L10,0'
        """
        if not points:
            return ""
        head, *rest = points
        parts = [f"M{_num(head.x)},{_num(head.y)}"]
        parts.extend(f"L{_num(p.x)},{_num(p.y)}" for p in rest)
        return "".join(parts)

    def to_svg(
        self,
        nodes: Sequence[Node],
        channels: Sequence[Channel],
        result: RoutingResult,
        width: float = 1000,
        height: float = 800,
        zoom: Optional[ZoomState] = None,
    ) -> str:
        """
        Render a standalone SVG document.

        Channels are drawn as dashed lines across the full canvas, nodes as
        outlined rectangles with their id as label, and cables as paths in
        their own color. The zoom transform is applied to one outer group.

        Args:
            nodes: Nodes to draw.
            channels: Channels to draw.
            result: Routing result holding the cable polylines.
            width: Document width.
            height: Document height.
            zoom: Optional transform for the outer group.

        Returns:
            The SVG document as a string.
        """
        zoom = zoom or ZoomState(k=result.zoom)
        transform = (
            f"translate({_num(zoom.x)},{_num(zoom.y)}) scale({_num(zoom.k)})"
        )
        lines = [
            '<svg xmlns="http://www.w3.org/2000/svg" '
            f'width="{_num(width)}" height="{_num(height)}">',
            f'  <g transform="{transform}">',
        ]

        for channel in channels:
            if channel.is_horizontal:
                x1, y1, x2, y2 = 0, channel.position, width, channel.position
            else:
                x1, y1, x2, y2 = channel.position, 0, channel.position, height
            lines.append(
                f'    <line class="channel" id={quoteattr("channel-" + channel.id)} '
                f'x1="{_num(x1)}" y1="{_num(y1)}" x2="{_num(x2)}" y2="{_num(y2)}" '
                'stroke="#444" stroke-width="2" stroke-dasharray="5,5"/>'
            )
            if channel.label:
                lines.append(
                    f'    <text x="{_num(x1 + 10)}" y="{_num(y1 - 10)}" '
                    f'font-size="16">{escape(channel.label)}</text>'
                )

        for node in nodes:
            lines.append(
                f'    <rect class="node" id={quoteattr("node-" + node.id)} '
                f'x="{_num(node.x)}" y="{_num(node.y)}" '
                f'width="{_num(node.width)}" height="{_num(node.height)}" '
                'fill="white" stroke="black" stroke-width="2"/>'
            )

        for cable_id, route in result.routes.items():
            color = route.color or self.default_color
            lines.append(
                f'    <path class="cable" id={quoteattr("cable-" + cable_id)} '
                f'd="{self.to_svg_path(route.points)}" '
                f"stroke={quoteattr(color)} "
                f'stroke-width="{_num(self.stroke_width)}" fill="none"/>'
            )

        for node in nodes:
            center = node.rect.center
            lines.append(
                f'    <text class="label" x="{_num(center.x)}" y="{_num(center.y)}" '
                'text-anchor="middle" dominant-baseline="middle" '
                f'font-size="24" font-weight="bold">{escape(node.id)}</text>'
            )

        lines.append("  </g>")
        lines.append("</svg>")
        return "\n".join(lines)

    def save_svg(
        self,
        nodes: Sequence[Node],
        channels: Sequence[Channel],
        result: RoutingResult,
        filename: str,
        **kwargs: Any,
    ) -> None:
        """Write the SVG document produced by to_svg() to a file."""
        svg = self.to_svg(nodes, channels, result, **kwargs)
        Path(filename).write_text(svg, encoding="utf-8")

    @staticmethod
    def to_dict(result: RoutingResult) -> Dict[str, Any]:
        """JSON-ready mapping of the routes and diagnostics."""
        routes: Dict[str, Dict[str, Any]] = {}
        for cable_id, route in result.routes.items():
            points: List[List[float]] = [[p.x, p.y] for p in route.points]
            routes[cable_id] = {"points": points, "color": route.color}
        return {
            "zoom": result.zoom,
            "routes": routes,
            "skipped": [
                {"cable": d.cable_id, "reason": d.reason.value, "message": d.message}
                for d in result.diagnostics
            ],
        }

    def save_json(self, result: RoutingResult, filename: str) -> None:
        """Write to_dict() output as indented JSON."""
        Path(filename).write_text(
            json.dumps(self.to_dict(result), indent=2), encoding="utf-8"
        )
