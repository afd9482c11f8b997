"""Unit tests for the spacing module and routing configuration."""

import pytest

from cableflow.config import (
    BASE_SPACING,
    MAX_ZOOM,
    ZOOM_THRESHOLD,
    ConfigurationError,
    RoutingConfig,
)
from cableflow.spacing import (
    channel_spacing,
    extension_length,
    fan_offset,
    smoothstep,
    spacing,
)


class TestSmoothstep:
    """Tests for the easing curve."""

    def test_endpoints(self):
        """Curve starts at 0 and ends at 1."""
        assert smoothstep(0.0) == 0.0
        assert smoothstep(1.0) == 1.0

    def test_midpoint(self):
        """Curve passes through (0.5, 0.5)."""
        assert smoothstep(0.5) == 0.5


class TestSpacing:
    """Tests for the zoom-responsive spacing function."""

    def test_single_cable_has_no_spacing(self):
        """Nothing to separate with one cable."""
        assert spacing(1.0, 1, 80) == 0
        assert spacing(3.0, 0, 80) == 0

    def test_below_threshold_collapses(self):
        """Below the zoom threshold cables coincide."""
        assert spacing(ZOOM_THRESHOLD - 0.01, 3, 80) == 0

    def test_at_threshold_is_min_spacing(self):
        """At the threshold only the floor remains."""
        assert spacing(ZOOM_THRESHOLD, 3, 1000) == pytest.approx(1.0)

    def test_halfway_zoom(self):
        """Halfway through the zoom range the ease is exactly one half."""
        assert spacing(1.75, 2, 1000) == pytest.approx(41.0)

    def test_max_zoom_uncapped(self):
        """At max zoom a long edge gets floor plus full base spacing."""
        assert spacing(MAX_ZOOM, 3, 1000) == pytest.approx(1 + BASE_SPACING)

    def test_beyond_max_zoom_saturates(self):
        """Zoom beyond the max does not grow spacing further."""
        assert spacing(5.0, 3, 1000) == spacing(MAX_ZOOM, 3, 1000)

    def test_edge_cap(self):
        """Spacing never exceeds edge_length / (n + 1)."""
        assert spacing(3.0, 3, 80) == pytest.approx(20.0)
        assert spacing(3.0, 9, 80) == pytest.approx(8.0)

    def test_scenario_value(self):
        """Three cables on an 80px edge at zoom 1."""
        # t = 0.2, eased = 0.104
        assert spacing(1.0, 3, 80) == pytest.approx(1 + 80 * 0.104)

    def test_strictly_increasing_until_cap(self):
        """Spacing grows strictly with zoom inside the zoom range."""
        zooms = [0.5, 0.75, 1.0, 1.5, 2.0, 2.5, 3.0]
        values = [spacing(k, 4, 10000) for k in zooms]
        assert all(a < b for a, b in zip(values, values[1:]))

    def test_custom_config(self):
        """Base spacing comes from the config."""
        config = RoutingConfig(base_spacing=40)
        assert spacing(3.0, 2, 1000, config) == pytest.approx(41.0)

    def test_custom_threshold(self):
        """The threshold comes from the config."""
        config = RoutingConfig(zoom_threshold=1.0)
        assert spacing(0.9, 2, 1000, config) == 0
        assert spacing(1.0, 2, 1000, config) == pytest.approx(1.0)


class TestExtensionAndChannelSpacing:
    """Tests for stub length and channel step."""

    def test_extension_length(self):
        """Stub length is 1 + 2k."""
        assert extension_length(0.5) == pytest.approx(2.0)
        assert extension_length(1.0) == pytest.approx(3.0)
        assert extension_length(3.0) == pytest.approx(7.0)

    def test_channel_spacing(self):
        """Channel step is 2 + 5k."""
        assert channel_spacing(1.0) == pytest.approx(7.0)
        assert channel_spacing(2.0) == pytest.approx(12.0)

    def test_fan_offset_is_centered(self):
        """Offsets are symmetric around zero."""
        offsets = [fan_offset(i, 3, 1.0, 80) for i in range(3)]
        assert offsets[1] == 0
        assert offsets[0] == pytest.approx(-offsets[2])

    def test_fan_offset_single_cable(self):
        """A lone cable is not shifted."""
        assert fan_offset(0, 1, 2.0, 80) == 0


class TestRoutingConfig:
    """Tests for RoutingConfig validation."""

    def test_defaults(self):
        """Defaults mirror the module constants."""
        config = RoutingConfig()
        assert config.zoom_threshold == ZOOM_THRESHOLD
        assert config.max_zoom == MAX_ZOOM
        assert config.detour_margin == 5.0

    def test_max_zoom_must_exceed_threshold(self):
        """An empty zoom range is rejected."""
        with pytest.raises(ConfigurationError):
            RoutingConfig(zoom_threshold=2.0, max_zoom=2.0)

    def test_negative_values_rejected(self):
        """Lengths must not be negative."""
        with pytest.raises(ConfigurationError, match="detour_margin"):
            RoutingConfig(detour_margin=-1)

    def test_configuration_error_is_value_error(self):
        """Callers can catch ValueError."""
        assert issubclass(ConfigurationError, ValueError)

    def test_from_dict(self):
        """Known keys override defaults."""
        config = RoutingConfig.from_dict({"base_spacing": 10, "detour_margin": 8})
        assert config.base_spacing == 10
        assert config.detour_margin == 8
        assert config.max_zoom == MAX_ZOOM

    def test_from_dict_unknown_key(self):
        """Unknown keys are reported."""
        with pytest.raises(ConfigurationError, match="spacing_factor"):
            RoutingConfig.from_dict({"spacing_factor": 2})

    def test_to_dict_round_trip(self):
        """to_dict() feeds back into from_dict()."""
        config = RoutingConfig(extension_base=2)
        assert RoutingConfig.from_dict(config.to_dict()) == config
