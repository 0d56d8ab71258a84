"""Color-segmented pass visualization and pass comparison records.

- KeyPoint: start, key section or summit marker on the 2D profile
- VisualizationSummary: headline numbers shown next to the profile
- ColorSegmentedVisualization: profile plus difficulty-colored segments
- MetricComparison: one metric compared across two passes
- TierComparison: one difficulty tier compared across two passes
- PassComparison: side-by-side comparison of two visualizations
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Optional

from climb_profiler.model.difficulty import DifficultyBucket
from climb_profiler.model.elevation_point import ElevationPoint


@dataclass(frozen=True)
class KeyPoint:
    """A labelled point of the 2D profile.

    Start and summit use distance/elevation. Key sections use
    distance_start/distance_end, length, gradient and severity.
    """

    name: str
    type: str
    distance: Optional[float] = None
    elevation: Optional[float] = None
    distance_start: Optional[float] = None
    distance_end: Optional[float] = None
    length: Optional[float] = None
    gradient: Optional[float] = None
    severity: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class VisualizationSummary:
    max_gradient: float
    average_gradient: float
    max_gradient_location: Optional[float]
    elevation_gain: float


@dataclass
class ColorSegmentedVisualization:
    """A pass profile split into difficulty-colored segments."""

    id: str
    name: str
    length: float
    elevation: float
    difficulty: str
    elevation_profile: list[ElevationPoint]
    segments_by_difficulty: list[DifficultyBucket]
    key_points: list[KeyPoint]
    color_scale: list[dict[str, str]]
    summary: VisualizationSummary

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "length": self.length,
            "elevation": self.elevation,
            "difficulty": self.difficulty,
            "elevation_profile": [p.to_pair() for p in self.elevation_profile],
            "segments_by_difficulty": [b.to_dict() for b in self.segments_by_difficulty],
            "key_points": [k.to_dict() for k in self.key_points],
            "color_scale": [dict(c) for c in self.color_scale],
            "summary": asdict(self.summary),
        }


@dataclass(frozen=True)
class MetricComparison:
    """A metric of pass 1 against pass 2.

    Attributes:
        pass1: Value for the first pass
        pass2: Value for the second pass (the reference)
        difference: pass1 - pass2
        percentage_diff: difference / pass2 * 100 rounded to 2 decimals,
            None when pass2 is 0
    """

    pass1: float
    pass2: float
    difference: float
    percentage_diff: Optional[float]

    @classmethod
    def of(cls, value1: float, value2: float) -> "MetricComparison":
        difference = value1 - value2
        percentage = round(difference / value2 * 100, 2) if value2 else None
        return cls(pass1=value1, pass2=value2, difference=difference, percentage_diff=percentage)


@dataclass(frozen=True)
class TierComparison:
    percentage_pass1: float
    percentage_pass2: float
    difference: float
    length_pass1: float
    length_pass2: float


@dataclass
class PassComparison:
    """Two pass visualizations compared metric by metric.

    Attributes:
        visualization1: First pass
        visualization2: Second pass (reference for differences)
        length, elevation_gain, average_gradient, max_gradient: Metric deltas
        difficulty_comparison: Sentence comparing the difficulty labels
        segments_by_difficulty: Per-tier distribution comparison
        analysis: Plain-language comparison lines, recommendation last
    """

    visualization1: ColorSegmentedVisualization
    visualization2: ColorSegmentedVisualization
    length: MetricComparison
    elevation_gain: MetricComparison
    average_gradient: MetricComparison
    max_gradient: MetricComparison
    difficulty_comparison: str
    segments_by_difficulty: dict[str, TierComparison] = field(default_factory=dict)
    analysis: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "pass1": {"id": self.visualization1.id, "name": self.visualization1.name},
            "pass2": {"id": self.visualization2.id, "name": self.visualization2.name},
            "comparison": {
                "length": asdict(self.length),
                "elevation_gain": asdict(self.elevation_gain),
                "average_gradient": asdict(self.average_gradient),
                "max_gradient": asdict(self.max_gradient),
                "difficulty": {
                    "pass1": self.visualization1.difficulty,
                    "pass2": self.visualization2.difficulty,
                    "comparison": self.difficulty_comparison,
                },
                "segments_by_difficulty": {tier: asdict(c) for tier, c in self.segments_by_difficulty.items()},
            },
            "analysis_text": list(self.analysis),
        }
