"""Segment and KeySegment - Derived gradient sections of a climb profile.

A Segment is one fixed-length window of the profile with its gradient.
The ordered segment sequence covers the whole profile contiguously.

A KeySegment is a merged run of steep Segments: one notable climbing
section of the road.
"""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class Segment:
    """A distance window of the profile with its gradient.

    Attributes:
        start_distance: Window start (km)
        end_distance: Window end (km)
        length: Horizontal length (km)
        start_elevation: Elevation at window start (m)
        end_elevation: Elevation at window end (m)
        gradient_pct: Rise/run * 100, rounded to 1 decimal
    """

    start_distance: float
    end_distance: float
    length: float
    start_elevation: float
    end_elevation: float
    gradient_pct: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def __repr__(self) -> str:
        return f"Segment({self.start_distance:.2f}-{self.end_distance:.2f}km, {self.gradient_pct:.1f}%)"


@dataclass(frozen=True)
class KeySegment:
    """A notable climbing section made of merged steep segments.

    Attributes:
        start_distance: Section start (km)
        end_distance: Section end (km)
        length: Summed length of the member segments (km)
        avg_gradient: (end elevation - start elevation) / length * 100, 1 decimal
        max_gradient: Steepest member segment gradient (%)
        elevation_gain: End elevation - start elevation (m)
        type: "section difficile" or "section très difficile"
    """

    start_distance: float
    end_distance: float
    length: float
    avg_gradient: float
    max_gradient: float
    elevation_gain: float
    type: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
