"""Unit tests for connection-point allocation."""

import pytest

from cableflow.allocator import (
    allocate,
    allocate_assignment,
    channel_line,
    channel_offset,
)
from cableflow.geometry import Edge, NodeGeometry, Orientation, Point, Rect
from cableflow.models import (
    Cable,
    CableTerminal,
    Channel,
    EdgeAssignment,
    TerminalRole,
)


@pytest.fixture
def geometry():
    return NodeGeometry("A", Rect(400, 100, 80, 80))


class TestAllocate:
    """Tests for allocate()."""

    def test_no_points_for_empty_group(self, geometry):
        """A count of zero yields nothing."""
        assert allocate(geometry, Edge.BOTTOM, 0, 1.0) == []

    def test_single_point_is_midpoint(self, geometry):
        """A lone cable attaches at the edge midpoint."""
        assert allocate(geometry, Edge.BOTTOM, 1, 3.0) == [Point(440, 180)]

    def test_collapsed_below_threshold(self, geometry):
        """Below the zoom threshold every point is the midpoint."""
        points = allocate(geometry, Edge.BOTTOM, 3, 0.4)
        assert points == [Point(440, 180)] * 3

    def test_three_points_at_zoom_one(self, geometry):
        """Three cables spread symmetrically around the midpoint."""
        points = allocate(geometry, Edge.BOTTOM, 3, 1.0)
        s = 1 + 80 * 0.104
        assert [p.x for p in points] == pytest.approx([440 - s, 440, 440 + s])
        assert all(p.y == 180 for p in points)

    def test_points_stay_on_edge(self, geometry):
        """Allocated points lie on the edge at every zoom."""
        for k in (0.5, 1.0, 2.0, 3.0, 10.0):
            for p in allocate(geometry, Edge.RIGHT, 5, k):
                assert p.x == 480
                assert 100 <= p.y <= 180

    def test_points_ordered_along_edge(self, geometry):
        """Vertical edges are filled top to bottom."""
        ys = [p.y for p in allocate(geometry, Edge.LEFT, 4, 2.0)]
        assert ys == sorted(ys)
        assert len(set(ys)) == 4

    def test_capped_at_max_zoom(self, geometry):
        """Spacing is capped at edge_length / (n + 1)."""
        points = allocate(geometry, Edge.TOP, 3, 3.0)
        assert [p.x for p in points] == pytest.approx([420, 440, 460])


class TestAllocateAssignment:
    """Tests for allocate_assignment()."""

    def test_keys_by_cable_and_role(self, geometry):
        """Each terminal receives its own point in terminal order."""
        c1 = Cable("c1", ["A", "B"])
        c2 = Cable("c2", ["B", "A"])
        assignment = EdgeAssignment(
            "A",
            Edge.BOTTOM,
            ("pair", "A", "B"),
            [
                CableTerminal(c1, TerminalRole.SOURCE, "B"),
                CableTerminal(c2, TerminalRole.TARGET, "B"),
            ],
        )
        points = allocate_assignment(geometry, assignment, 3.0)
        assert set(points) == {
            ("c1", TerminalRole.SOURCE),
            ("c2", TerminalRole.TARGET),
        }
        assert points[("c1", TerminalRole.SOURCE)].x < points[
            ("c2", TerminalRole.TARGET)
        ].x


class TestChannelOffset:
    """Tests for channel lane offsets."""

    def test_single_cable_on_centerline(self):
        assert channel_offset(0, 1, 1.0) == 0

    def test_odd_count_alternates(self):
        """Odd counts: center first, then negative, positive, ..."""
        offsets = [channel_offset(i, 3, 1.0) for i in range(3)]
        assert offsets == pytest.approx([0, -7, 7])

    def test_even_count_pairs(self):
        """Even counts straddle the centerline at half steps."""
        offsets = [channel_offset(i, 4, 1.0) for i in range(4)]
        assert offsets == pytest.approx([-3.5, 3.5, -10.5, 10.5])

    def test_offsets_are_distinct(self):
        """No two cables share a lane."""
        for count in range(1, 8):
            offsets = [channel_offset(i, count, 2.0) for i in range(count)]
            assert len(set(offsets)) == count

    def test_step_grows_with_zoom(self):
        assert abs(channel_offset(1, 3, 2.0)) > abs(channel_offset(1, 3, 1.0))

    def test_channel_line(self):
        """Lanes are measured from the channel position."""
        channel = Channel("ch", Orientation.HORIZONTAL, 50)
        assert channel_line(channel, 1, 3, 1.0) == pytest.approx(43)
        assert channel_line(channel, 0, 3, 1.0) == 50
