"""
PNG preview renderer for routed cables.

Draws nodes, channels and cable routes into a PNG image using Pillow. The
image is fitted to its content: routes are scaled by the zoom factor they
were computed at, then shifted so everything sits inside the margin.
"""

import logging
import os
from typing import Iterable, List, Optional, Sequence, Tuple

from PIL import Image, ImageColor, ImageDraw, ImageFont

from .engine import RoutingResult
from .geometry import Point
from .models import Channel, Node

log = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


class PNGRenderer:
    """Renders routing results as PNG images."""

    def __init__(
        self,
        scale: int = 2,  # For high-resolution output
        margin: int = 50,
        line_width: int = 2,
        font_size: int = 16,
        font_path: Optional[str] = None,
        dash_length: int = 5,
    ):
        self.scale = scale
        self.margin = margin
        self.line_width = line_width
        self.font_size = font_size
        self.font_path = font_path
        self.dash_length = dash_length

        # Colors
        self.bg_color: RGB = (255, 255, 255)
        self.node_fill: RGB = (255, 255, 255)
        self.node_outline: RGB = (0, 0, 0)
        self.channel_color: RGB = (68, 68, 68)
        self.text_color: RGB = (0, 0, 0)
        self.default_cable_color: RGB = (153, 153, 153)

        self.font = None
        self._k = 1.0
        self._origin = Point(0.0, 0.0)

    def _get_font(self) -> ImageFont.ImageFont:
        """Get a font for node labels."""
        if self.font is not None:
            return self.font

        font_size = self.font_size * self.scale
        candidates = [self.font_path] if self.font_path else []
        candidates += [
            "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
            "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
        ]
        for path in candidates:
            if path and os.path.exists(path):
                try:
                    self.font = ImageFont.truetype(path, font_size)
                    return self.font
                except OSError:
                    continue

        self.font = ImageFont.load_default()
        return self.font

    def _color(self, value: Optional[str]) -> RGB:
        """Resolve a cable color name or hex string, falling back to grey."""
        if not value:
            return self.default_cable_color
        try:
            return ImageColor.getrgb(value)[:3]
        except ValueError:
            log.warning("Unknown cable color %r; using default", value)
            return self.default_cable_color

    def _to_image(self, point: Point) -> Tuple[float, float]:
        """Map a canvas point to image pixels."""
        x = (point.x * self._k - self._origin.x + self.margin) * self.scale
        y = (point.y * self._k - self._origin.y + self.margin) * self.scale
        return x, y

    def _content_points(
        self, nodes: Sequence[Node], result: RoutingResult
    ) -> Iterable[Point]:
        for node in nodes:
            yield Point(node.x, node.y)
            yield Point(node.rect.x2, node.rect.y2)
        for route in result.routes.values():
            yield from route.points

    def render(
        self,
        nodes: Sequence[Node],
        channels: Sequence[Channel],
        result: RoutingResult,
        output_path: str = "cables.png",
    ) -> str:
        """
        Render nodes, channels and routes to a PNG file.

        Args:
            nodes: Nodes to draw.
            channels: Channels to draw across the full image.
            result: Routing result to draw.
            output_path: Path to save the PNG file.

        Returns:
            Path to the saved PNG file.
        """
        self._k = result.zoom
        points = list(self._content_points(nodes, result))
        if not points:
            img = Image.new("RGB", (200, 100), self.bg_color)
            img.save(output_path)
            return output_path

        min_x = min(p.x for p in points) * self._k
        min_y = min(p.y for p in points) * self._k
        max_x = max(p.x for p in points) * self._k
        max_y = max(p.y for p in points) * self._k
        self._origin = Point(min_x, min_y)

        width = int((max_x - min_x + 2 * self.margin) * self.scale) + 1
        height = int((max_y - min_y + 2 * self.margin) * self.scale) + 1

        img = Image.new("RGB", (width, height), self.bg_color)
        draw = ImageDraw.Draw(img)

        for channel in channels:
            self._draw_channel(draw, channel, width, height)
            self._draw_channel_label(draw, channel)
        for node in nodes:
            self._draw_node(draw, node)
        for route in result.routes.values():
            self._draw_route(draw, route.points, self._color(route.color))
        for node in nodes:
            self._draw_label(draw, node)

        img.save(output_path, "PNG")
        return output_path

    def _draw_channel(
        self, draw: ImageDraw.ImageDraw, channel: Channel, width: int, height: int
    ) -> None:
        """Draw a channel as a dashed line across the image."""
        if channel.is_horizontal:
            _, y = self._to_image(Point(0, channel.position))
            start, end, horizontal = 0, width, True
        else:
            x, _ = self._to_image(Point(channel.position, 0))
            start, end, horizontal = 0, height, False

        dash = self.dash_length * self.scale
        for pos in range(start, end, dash * 2):
            stop = min(pos + dash, end)
            segment = [(pos, y), (stop, y)] if horizontal else [(x, pos), (x, stop)]
            draw.line(segment, fill=self.channel_color, width=self.scale)

    def _draw_channel_label(self, draw: ImageDraw.ImageDraw, channel: Channel) -> None:
        """Draw a channel's label just off the start of its line."""
        if not channel.label:
            return
        font = self._get_font()
        offset = 10 * self.scale
        if channel.is_horizontal:
            _, y = self._to_image(Point(0, channel.position))
            bbox = draw.textbbox((0, 0), channel.label, font=font)
            position = (offset, y - offset - (bbox[3] - bbox[1]))
        else:
            x, _ = self._to_image(Point(channel.position, 0))
            position = (x + offset, offset)
        draw.text(position, channel.label, fill=self.channel_color, font=font)

    def _draw_node(self, draw: ImageDraw.ImageDraw, node: Node) -> None:
        x1, y1 = self._to_image(Point(node.x, node.y))
        x2, y2 = self._to_image(Point(node.rect.x2, node.rect.y2))
        draw.rectangle(
            [x1, y1, x2, y2],
            fill=self.node_fill,
            outline=self.node_outline,
            width=max(1, self.line_width * self.scale),
        )

    def _draw_label(self, draw: ImageDraw.ImageDraw, node: Node) -> None:
        cx, cy = self._to_image(node.rect.center)
        font = self._get_font()
        bbox = draw.textbbox((0, 0), node.id, font=font)
        text_w, text_h = bbox[2] - bbox[0], bbox[3] - bbox[1]
        draw.text(
            (cx - text_w / 2, cy - text_h / 2), node.id, fill=self.text_color, font=font
        )

    def _draw_route(
        self, draw: ImageDraw.ImageDraw, points: List[Point], color: RGB
    ) -> None:
        """Draw a route segment by segment."""
        if len(points) < 2:
            return
        width = max(1, self.line_width * self.scale)
        for p1, p2 in zip(points, points[1:]):
            draw.line([self._to_image(p1), self._to_image(p2)], fill=color, width=width)


def render_to_png(
    nodes: Sequence[Node],
    channels: Sequence[Channel],
    result: RoutingResult,
    output_path: str = "cables.png",
    **kwargs,
) -> str:
    """
    Convenience function to render routes to PNG.

    Args:
        nodes: Nodes to draw.
        channels: Channels to draw.
        result: Routing result to draw.
        output_path: Path to save the PNG file.
        **kwargs: Additional parameters for PNGRenderer.

    Returns:
        Path to the saved PNG file.
    """
    renderer = PNGRenderer(**kwargs)
    return renderer.render(nodes, channels, result, output_path)
