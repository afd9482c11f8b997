"""Unit tests for route export."""

import json

import pytest

from cableflow import Cable, CableRouter, Point, RouteExporter, ZoomState


@pytest.fixture
def result(pair_nodes, pair_cables):
    cables = pair_cables + [Cable("bad", ["A", "A"])]
    return CableRouter().route(pair_nodes, [], cables, zoom=1.0)


class TestSvgPath:
    """Tests for RouteExporter.to_svg_path()."""

    def test_path(self):
        path = RouteExporter.to_svg_path([Point(0, 0), Point(10, 0), Point(10, 5.5)])
        assert path == "M0,0L10,0L10,5.5"

    def test_empty(self):
        assert RouteExporter.to_svg_path([]) == ""


class TestSvgDocument:
    """Tests for RouteExporter.to_svg()."""

    def test_contains_every_element(self, pair_nodes, sample_channels, result):
        svg = RouteExporter().to_svg(pair_nodes, sample_channels, result)
        assert svg.startswith("<svg")
        assert svg.rstrip().endswith("</svg>")
        assert svg.count('class="node"') == 2
        assert svg.count('class="channel"') == 2
        assert svg.count('class="cable"') == 3
        assert 'id="cable-c1"' in svg
        assert 'stroke="blue"' in svg
        assert "stroke-dasharray" in svg
        assert ">Channel2</text>" in svg

    def test_zoom_transform(self, pair_nodes, result):
        svg = RouteExporter().to_svg(
            pair_nodes, [], result, zoom=ZoomState(k=2, x=10, y=-5)
        )
        assert 'transform="translate(10,-5) scale(2)"' in svg

    def test_default_color(self, pair_nodes):
        result = CableRouter().route(pair_nodes, [], [Cable("c", ["A", "B"])])
        svg = RouteExporter(default_color="#123456").to_svg(pair_nodes, [], result)
        assert 'stroke="#123456"' in svg

    def test_save_svg(self, pair_nodes, result, tmp_path):
        path = tmp_path / "cables.svg"
        RouteExporter().save_svg(pair_nodes, [], result, str(path), width=500)
        assert 'width="500"' in path.read_text(encoding="utf-8")


class TestJson:
    """Tests for JSON export."""

    def test_to_dict(self, result):
        data = RouteExporter.to_dict(result)
        assert data["zoom"] == 1.0
        assert list(data["routes"]) == ["c1", "c2", "c3"]
        assert data["routes"]["c2"]["color"] == "orange"
        assert len(data["routes"]["c2"]["points"]) == 6
        assert data["skipped"] == [
            {
                "cable": "bad",
                "reason": "self_loop",
                "message": "direct cable starts and ends at node 'A'",
            }
        ]

    def test_save_json(self, result, tmp_path):
        path = tmp_path / "routes.json"
        RouteExporter().save_json(result, str(path))
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["routes"]["c1"]["points"][0] == pytest.approx(
            [440 - (1 + 80 * 0.104), 180]
        )
