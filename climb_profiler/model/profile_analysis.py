"""ProfileAnalysis - Complete result of analyzing a climb profile."""

from dataclasses import asdict, dataclass
from typing import Any, Optional

from climb_profiler.model.difficulty import DifficultyBucket, DifficultyScore, UCICategoryResult
from climb_profiler.model.segment import KeySegment, Segment


@dataclass(frozen=True)
class ProfileSummary:
    """Headline numbers of a climb profile.

    Attributes:
        max_elevation: Highest point (m)
        min_elevation: Lowest point (m)
        total_elevation_gain: Sum of positive point-to-point rises (m)
        total_distance: Last distance - first distance (km)
        average_gradient: total_elevation_gain / total_distance * 100 (%)
        max_gradient: Steepest segment gradient (%)
        max_gradient_location: Start distance of the steepest segment (km)
        max_gradient_length: Length of the steepest segment (km)
    """

    max_elevation: float
    min_elevation: float
    total_elevation_gain: float
    total_distance: float
    average_gradient: float
    max_gradient: float
    max_gradient_location: Optional[float]
    max_gradient_length: Optional[float]


@dataclass
class ProfileAnalysis:
    """Everything derived from one elevation profile.

    segments_by_difficulty is keyed by tier in DifficultyConfig.TIERS order.
    """

    summary: ProfileSummary
    segments: list[Segment]
    key_segments: list[KeySegment]
    segments_by_difficulty: dict[str, DifficultyBucket]
    difficulty_score: DifficultyScore
    uci_comparison: UCICategoryResult

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": asdict(self.summary),
            "key_segments": [k.to_dict() for k in self.key_segments],
            "segments_by_difficulty": {tier: b.to_dict() for tier, b in self.segments_by_difficulty.items()},
            "difficulty_score": self.difficulty_score.to_dict(),
            "uci_comparison": self.uci_comparison.to_dict(),
        }
