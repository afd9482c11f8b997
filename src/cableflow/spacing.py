"""
Zoom-responsive spacing.

Maps a zoom scale to the distances the router uses: fan-out spacing between
cables sharing an edge, the length of perpendicular stubs, and the step
between cables sharing a channel.
"""

from .config import DEFAULT_CONFIG, RoutingConfig


def smoothstep(t: float) -> float:
    """Cubic ease with zero slope at both ends of [0, 1]."""
    return t * t * (3 - 2 * t)


def spacing(
    k: float, n: int, edge_length: float, config: RoutingConfig = DEFAULT_CONFIG
) -> float:
    """
    Spacing between n connection points on an edge at zoom k.

    Spacing grows with zoom along a smoothstep curve between the zoom
    threshold and the max zoom, and is capped so that n points plus a margin
    at each end always fit on the edge.

    Args:
        k: Zoom scale.
        n: Number of connection points sharing the edge.
        edge_length: Length of the edge they are spread along.
        config: Routing parameters.

    Returns:
        Distance between neighbouring points, or 0 when the points collapse.
    """
    if n <= 1:
        return 0.0
    if k < config.zoom_threshold:
        return 0.0

    t = min(
        (k - config.zoom_threshold) / (config.max_zoom - config.zoom_threshold), 1.0
    )
    zoom_spacing = config.min_spacing + config.base_spacing * smoothstep(t)
    edge_cap = edge_length / (n + 1)
    return min(zoom_spacing, edge_cap)


def extension_length(k: float, config: RoutingConfig = DEFAULT_CONFIG) -> float:
    """Length of the perpendicular stub a route leaves a node edge with."""
    return config.extension_base + config.extension_per_zoom * k


def channel_spacing(k: float, config: RoutingConfig = DEFAULT_CONFIG) -> float:
    """Step between neighbouring cables inside a channel."""
    return config.channel_spacing_base + config.channel_spacing_per_zoom * k


def fan_offset(
    index: int,
    n: int,
    k: float,
    edge_length: float,
    config: RoutingConfig = DEFAULT_CONFIG,
) -> float:
    """Signed lateral offset of cable ``index`` in a group of ``n``, centered on 0."""
    return (index - (n - 1) / 2) * spacing(k, n, edge_length, config)
