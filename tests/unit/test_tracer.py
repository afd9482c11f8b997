"""Unit tests for the tracer module."""

import os
import tempfile

from cableflow.collision import Detour
from cableflow.geometry import Point
from cableflow.tracer import DetourRecord, PipelineStage, RoutingTrace


def make_detour(node_id="B"):
    return Detour(
        node_id, Point(83, 40), Point(397, 40), (Point(83, 85), Point(397, 85))
    )


class TestPipelineStage:
    """Tests for PipelineStage."""

    def test_str(self):
        stage = PipelineStage("analysis", {"direct_groups": 2})
        text = str(stage)
        assert "=== Stage: analysis ===" in text
        assert "direct_groups: 2" in text

    def test_long_values_truncated(self):
        stage = PipelineStage("synthesis", {"routes": "x" * 300})
        assert "..." in str(stage)


class TestDetourRecord:
    """Tests for DetourRecord."""

    def test_str(self):
        text = str(DetourRecord("c1", make_detour()))
        assert text == "c1: around B (83,40)->(397,40) via (83,85),(397,85)"


class TestRoutingTrace:
    """Tests for RoutingTrace."""

    def test_stages(self):
        trace = RoutingTrace()
        data = {"routes": 3}
        trace.add_stage("synthesis", data)
        data["routes"] = 99
        assert trace.get_stage("synthesis").data == {"routes": 3}
        assert trace.get_stage("missing") is None

    def test_detours_for_cable(self):
        trace = RoutingTrace()
        trace.add_detours("c1", [make_detour("B"), make_detour("D")])
        trace.add_detours("c2", [make_detour("B")])
        assert [r.detour.node_id for r in trace.get_detours_for("c1")] == ["B", "D"]
        assert trace.get_detours_for("c3") == []

    def test_summary(self):
        trace = RoutingTrace(zoom=1.5)
        trace.add_stage("analysis", {})
        trace.add_detours("c1", [make_detour("B")])
        trace.add_detours("c2", [make_detour("B")])
        trace.add_residual("c3", "E")
        summary = trace.summary()
        assert "ROUTING TRACE SUMMARY" in summary
        assert "Zoom: 1.5" in summary
        assert "Detours inserted: 2" in summary
        assert "Residual collisions: 1" in summary
        assert "  B: 2" in summary

    def test_dump_lists_residuals(self):
        trace = RoutingTrace()
        trace.add_residual("c3", "E")
        dump = trace.dump()
        assert "DETAILED TRACE" in dump
        assert "c3 still crosses E" in dump

    def test_dump_to_file(self):
        trace = RoutingTrace()
        trace.add_stage("analysis", {"skipped": []})

        with tempfile.NamedTemporaryFile(suffix=".txt", delete=False) as f:
            output_path = f.name

        try:
            trace.dump_to_file(output_path)
            with open(output_path, encoding="utf-8") as f:
                assert "Stage: analysis" in f.read()
        finally:
            if os.path.exists(output_path):
                os.unlink(output_path)
