"""RoadGeometry - 3D road centerline with surface, guardrail and structure records.

Centerline points are scene meters: x along the route, y elevation, z lateral
(0 on the route axis). Surface segments and guardrails reference centerline
points by index.
"""

from dataclasses import asdict, dataclass, field
from typing import Any

from climb_profiler.constants import RoadConfig

Point3D = tuple[float, float, float]


@dataclass(frozen=True)
class SurfaceSegment:
    """Road surface over a centerline index range (inclusive)."""

    start_index: int
    end_index: int
    type: str
    quality: str
    color: tuple[float, float, float]
    roughness: float
    metalness: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Guardrail:
    """Guardrail between two adjacent centerline points.

    Attributes:
        start_index: Index of the first centerline point
        end_index: Index of the second centerline point
        side: "outer" or "both"
        height: Rail height (m)
        type: "standard" or "mountain"
    """

    start_index: int
    end_index: int
    side: str
    height: float
    type: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class RoadGeometry:
    """The road as a renderer consumes it.

    Tunnels and bridges are always empty lists for now; no data source
    describes them yet.
    """

    centerline: list[Point3D]
    width: float = RoadConfig.WIDTH_M
    surface_segments: list[SurfaceSegment] = field(default_factory=list)
    guardrails: list[Guardrail] = field(default_factory=list)
    tunnels: list[dict[str, Any]] = field(default_factory=list)
    bridges: list[dict[str, Any]] = field(default_factory=list)
    render_options: dict[str, Any] = field(default_factory=lambda: dict(RoadConfig.RENDER_OPTIONS))

    @property
    def num_points(self) -> int:
        return len(self.centerline)

    def to_dict(self) -> dict[str, Any]:
        return {
            "centerline": [list(p) for p in self.centerline],
            "width": self.width,
            "surface_segments": [s.to_dict() for s in self.surface_segments],
            "guardrails": [g.to_dict() for g in self.guardrails],
            "tunnels": list(self.tunnels),
            "bridges": list(self.bridges),
            "render_options": dict(self.render_options),
        }
