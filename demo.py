#!/usr/bin/env python3
"""
Demo script for cableflow.

Routes a sample topology of five nodes, two channels and twenty-three cables
at several zoom levels, prints a short report for each, and writes PNG and
SVG previews next to this script.
"""

import logging
import sys

from cableflow import (
    Cable,
    CableRouter,
    Channel,
    Node,
    Orientation,
    RouteExporter,
    ZoomState,
    render_to_png,
)
from cableflow.config import MAX_ZOOM_EXTENT, MIN_ZOOM_EXTENT

NODES = [
    Node("A", 400, 100, 80, 80),
    Node("B", 200, 300, 80, 80),
    Node("C", 600, 300, 80, 80),
    Node("D", 500, 200, 80, 80),
    Node("E", 250, 125, 80, 80),
]

CHANNELS = [
    Channel("channel1", Orientation.HORIZONTAL, 50, label="Channel"),
    Channel("channel2", Orientation.VERTICAL, 150, label="Channel2"),
]

CABLES = [
    Cable("c1", ["A", "B"], "blue"),
    Cable("c2", ["A", "B"], "orange"),
    Cable("c3", ["A", "B"], "green"),
    Cable("c4", ["B", "C"], "red"),
    Cable("c5", ["B", "C"], "purple"),
    Cable("c6", ["A", "C"], "yellow"),
    Cable("c7", ["A", "C"], "cyan"),
    Cable("c8", ["A", "C"], "magenta"),
    Cable("c9", ["A", "C"], "lime"),
    Cable("c10", ["A", "C"], "pink"),
    Cable("c11", ["A", "C"], "teal"),
    Cable("c12", ["A", "C"], "brown"),
    Cable("c13", ["A", "C"], "coral"),
    Cable("c14", ["A", "C"], "gold"),
    Cable("c15", ["A", "C"], "indigo"),
    Cable("c16", ["C", "channel1", "A"], "maroon"),
    Cable("c17", ["C", "channel1", "A"], "olive"),
    Cable("c18", ["C", "A"], "navy"),
    Cable("c19", ["B", "channel2", "E"], "navy"),
    Cable("c20", ["A", "channel1", "E"], "navy"),
    Cable("c21", ["C", "E"], "navy"),
    Cable("c22", ["D", "E"], "navy"),
    Cable("c23", ["D", "A"], "navy"),
]


def print_header(title):
    """Print a formatted header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70 + "\n")


def demo_zoom(k):
    """Route the sample topology at one zoom level and save previews."""
    print_header(f"Zoom {k:g}")

    zoom = ZoomState(k=k).clamped(MIN_ZOOM_EXTENT, MAX_ZOOM_EXTENT)
    router = CableRouter()
    result = router.route(NODES, CHANNELS, CABLES, zoom, debug=True)

    for cable_id, route in result.routes.items():
        points = " ".join(f"({p.x:.1f},{p.y:.1f})" for p in route.points)
        print(f"{cable_id:>4} {route.color or '-':>8}: {points}")

    print()
    print(router.get_trace().summary())

    stem = f"cables_zoom_{k:g}".replace(".", "_")
    render_to_png(NODES, CHANNELS, result, f"{stem}.png")
    RouteExporter().save_svg(NODES, CHANNELS, result, f"{stem}.svg", zoom=zoom)
    print(f"\nSaved {stem}.png and {stem}.svg")


def main():
    """Run all demos."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(message)s")
    zooms = [float(arg) for arg in sys.argv[1:]] or [0.4, 1.0, 3.0]
    for k in zooms:
        demo_zoom(k)


if __name__ == "__main__":
    main()
