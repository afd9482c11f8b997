"""
Debug tracing for routing passes.

When debug mode is enabled, the router records a snapshot of each stage of
the pass and every detour the collision pass inserts. This is useful for:

1. Understanding why a cable took an unexpected path
2. Spotting residual collisions the single-sweep detour pass left behind
3. Writing targeted tests against intermediate routing decisions

Usage:
    >>> router = CableRouter()
    >>> result = router.route(nodes, channels, cables, zoom=1.5, debug=True)
    >>> trace = router.get_trace()
    >>> print(trace.summary())
    >>> trace.dump_to_file("routing_trace.txt")

The trace captures:
- Pipeline stages (analysis, allocation, synthesis, collisions)
- Every detour with the node it avoids and the segment it replaced
- Residual collisions remaining after the detour pass
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .collision import Detour


@dataclass
class PipelineStage:
    """
    Snapshot of state at a routing stage.

    The routing pipeline has these stages:
    1. analysis - cables validated and grouped
    2. allocation - connection points allocated per edge assignment
    3. synthesis - raw polylines built
    4. collisions - detours inserted

    Attributes:
        name: Name of this pipeline stage
        data: Dictionary of relevant data at this stage
    """

    name: str
    data: Dict[str, Any]

    def __str__(self) -> str:
        lines = [f"=== Stage: {self.name} ==="]
        for key, value in self.data.items():
            str_val = str(value)
            if len(str_val) > 100:
                str_val = str_val[:100] + "..."
            lines.append(f"  {key}: {str_val}")
        return "\n".join(lines)


@dataclass
class DetourRecord:
    """A detour inserted into one cable's route."""

    cable_id: str
    detour: Detour

    def __str__(self) -> str:
        d = self.detour
        return (
            f"{self.cable_id}: around {d.node_id} "
            f"({d.start.x:g},{d.start.y:g})->({d.end.x:g},{d.end.y:g}) "
            f"via ({d.points[0].x:g},{d.points[0].y:g}),"
            f"({d.points[1].x:g},{d.points[1].y:g})"
        )


@dataclass
class RoutingTrace:
    """
    Complete trace of a routing pass.

    Attributes:
        zoom: Zoom scale the pass ran at
        stages: Pipeline stages with their data
        detours: Every detour the collision pass inserted
        residual_collisions: (cable id, node id) pairs still overlapping
    """

    zoom: float = 1.0
    stages: List[PipelineStage] = field(default_factory=list)
    detours: List[DetourRecord] = field(default_factory=list)
    residual_collisions: List[Tuple[str, str]] = field(default_factory=list)

    def add_stage(self, name: str, data: Dict[str, Any]) -> None:
        self.stages.append(PipelineStage(name, data.copy()))

    def add_detours(self, cable_id: str, detours: List[Detour]) -> None:
        self.detours.extend(DetourRecord(cable_id, d) for d in detours)

    def add_residual(self, cable_id: str, node_id: str) -> None:
        self.residual_collisions.append((cable_id, node_id))

    def get_stage(self, name: str) -> Optional[PipelineStage]:
        """Get a specific pipeline stage by name."""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    def get_detours_for(self, cable_id: str) -> List[DetourRecord]:
        return [d for d in self.detours if d.cable_id == cable_id]

    def summary(self) -> str:
        """Generate a human-readable summary of the trace."""
        lines = [
            "=" * 60,
            "ROUTING TRACE SUMMARY",
            "=" * 60,
            "",
            f"Zoom: {self.zoom:g}",
            f"Pipeline stages: {len(self.stages)}",
        ]
        for stage in self.stages:
            lines.append(f"  {stage.name}")

        lines.extend(
            [
                "",
                f"Detours inserted: {len(self.detours)}",
                f"Residual collisions: {len(self.residual_collisions)}",
            ]
        )

        counts: Dict[str, int] = {}
        for record in self.detours:
            counts[record.detour.node_id] = counts.get(record.detour.node_id, 0) + 1
        if counts:
            lines.append("")
            lines.append("Detours by obstacle:")
            for node_id, count in sorted(counts.items(), key=lambda x: -x[1]):
                lines.append(f"  {node_id}: {count}")

        return "\n".join(lines)

    def dump(self) -> str:
        """Summary followed by every stage and detour."""
        lines = [self.summary(), "", "=" * 60, "DETAILED TRACE", "=" * 60, ""]

        lines.append("PIPELINE STAGES:")
        lines.append("-" * 40)
        for stage in self.stages:
            lines.append(str(stage))
            lines.append("")

        lines.append("DETOURS:")
        lines.append("-" * 40)
        for record in self.detours:
            lines.append(str(record))

        if self.residual_collisions:
            lines.append("")
            lines.append("RESIDUAL COLLISIONS:")
            lines.append("-" * 40)
            for cable_id, node_id in self.residual_collisions:
                lines.append(f"{cable_id} still crosses {node_id}")

        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())
