"""
Routing configuration.

The module-level constants are the defaults. ``RoutingConfig`` carries them
as named, overridable fields so callers can tune visual density without
touching the routing code.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict

# =============================================================================
# ROUTING CONFIGURATION - Adjust these values to tune routing behavior
# =============================================================================

# --- Zoom range (scale factor k) ---

# Below this zoom, cables sharing an edge collapse onto one point
ZOOM_THRESHOLD = 0.5

# At and above this zoom, fan-out spacing is at its maximum
MAX_ZOOM = 3.0

# Zoom range an application typically clamps its transform to
MIN_ZOOM_EXTENT = 0.5
MAX_ZOOM_EXTENT = 3.0

# --- Fan-out spacing (in pixels) ---

# Floor added to every non-zero spacing value
MIN_SPACING = 1.0

# Extra spacing reached at MAX_ZOOM (eased with smoothstep)
BASE_SPACING = 80.0

# --- Stub extension: EXTENSION_BASE + EXTENSION_PER_ZOOM * k ---

EXTENSION_BASE = 1.0
EXTENSION_PER_ZOOM = 2.0

# --- Channel fan-out: CHANNEL_SPACING_BASE + CHANNEL_SPACING_PER_ZOOM * k ---

CHANNEL_SPACING_BASE = 2.0
CHANNEL_SPACING_PER_ZOOM = 5.0

# --- Collision avoidance ---

# Distance kept from an obstacle's side when detouring around it
DETOUR_MARGIN = 5.0

# =============================================================================


class ConfigurationError(ValueError):
    """Raised when a routing configuration is inconsistent."""

    pass


@dataclass(frozen=True)
class RoutingConfig:
    """
    Tunable parameters for a routing pass.

    Attributes:
        zoom_threshold: Zoom below which fan-out collapses to zero.
        max_zoom: Zoom at which fan-out spacing saturates.
        min_spacing: Uneased spacing floor.
        base_spacing: Eased spacing added on top of the floor.
        extension_base: Stub length at zoom 0.
        extension_per_zoom: Stub growth per unit of zoom.
        channel_spacing_base: Channel fan-out step at zoom 0.
        channel_spacing_per_zoom: Channel fan-out growth per unit of zoom.
        detour_margin: Clearance kept from an obstacle when detouring.
    """

    zoom_threshold: float = ZOOM_THRESHOLD
    max_zoom: float = MAX_ZOOM
    min_spacing: float = MIN_SPACING
    base_spacing: float = BASE_SPACING
    extension_base: float = EXTENSION_BASE
    extension_per_zoom: float = EXTENSION_PER_ZOOM
    channel_spacing_base: float = CHANNEL_SPACING_BASE
    channel_spacing_per_zoom: float = CHANNEL_SPACING_PER_ZOOM
    detour_margin: float = DETOUR_MARGIN

    def __post_init__(self):
        if self.max_zoom <= self.zoom_threshold:
            raise ConfigurationError(
                f"max_zoom ({self.max_zoom}) must be greater than "
                f"zoom_threshold ({self.zoom_threshold})"
            )
        for name in (
            "min_spacing",
            "base_spacing",
            "extension_base",
            "extension_per_zoom",
            "channel_spacing_base",
            "channel_spacing_per_zoom",
            "detour_margin",
        ):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must not be negative")

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "RoutingConfig":
        """
        Build a config from a mapping of parameter names to values.

        Raises:
            ConfigurationError: If the mapping contains unknown keys.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown routing parameters: {', '.join(sorted(unknown))}"
            )
        return cls(**values)

    def to_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_CONFIG = RoutingConfig()
