"""Difficulty records - tiers, composite score and UCI category.

- DifficultyBucket: segments falling into one gradient tier
- DifficultyScore: 0-100 composite score with its components
- UCICategoryResult: professional-cycling climb category
"""

from dataclasses import dataclass, field
from typing import Any

from climb_profiler.model.segment import Segment


@dataclass
class DifficultyBucket:
    """Segments of one difficulty tier.

    Attributes:
        difficulty: Tier key (easy, moderate, difficult, veryDifficult, extreme)
        color: Display color (hex)
        segments: Member segments, in profile order
        total_length: Sum of member segment lengths (km)
        percentage: Member count / total segment count * 100
    """

    difficulty: str
    color: str
    segments: list[Segment] = field(default_factory=list)
    total_length: float = 0.0
    percentage: float = 0.0

    @property
    def count(self) -> int:
        return len(self.segments)

    def to_dict(self) -> dict[str, Any]:
        return {
            "difficulty": self.difficulty,
            "color": self.color,
            "segments": [s.to_dict() for s in self.segments],
            "total_length": self.total_length,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class ScoreComponents:
    """Score components as integer percentages (0-100)."""

    distance: int
    elevation: int
    gradient: int


@dataclass(frozen=True)
class DifficultyScore:
    """Composite difficulty score.

    Attributes:
        score: Rounded score in [0, 100]
        category: Facile, Modéré, Difficile, Très difficile or Extrême
        components: Per-component contributions before weighting
    """

    score: int
    category: str
    components: ScoreComponents

    def __post_init__(self) -> None:
        if not 0 <= self.score <= 100:
            raise ValueError(f"Difficulty score must be in [0, 100], got {self.score}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "category": self.category,
            "components": {
                "distance": self.components.distance,
                "elevation": self.components.elevation,
                "gradient": self.components.gradient,
            },
        }


@dataclass(frozen=True)
class UCICategoryResult:
    """UCI category (HC, 1, 2, 3, 4) with its description."""

    category: str
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {"category": self.category, "description": self.description}
