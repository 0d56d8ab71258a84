"""Composite difficulty score and UCI climb category.

Score components (each saturating at 1.0):
- distance: total distance / DISTANCE_NORM_KM
- elevation: elevation gain / ELEVATION_NORM_M
- gradient: weighted share of steep and very steep segments plus the
  normalized maximum gradient

The UCI category is a priority-ordered rule table; the first rule whose
length and average gradient are both exceeded wins.
"""

import logging
import math
from typing import Sequence

from climb_profiler.constants import ScoreConfig, UCIConfig
from climb_profiler.model.difficulty import DifficultyScore, ScoreComponents, UCICategoryResult
from climb_profiler.model.segment import Segment

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return int(math.floor(value + 0.5))


def round_tenth_half_up(value: float) -> float:
    """Round to one decimal, halves away from zero (12.25 -> 12.3, -12.25 -> -12.3)."""
    rounded = math.floor(abs(value) * 10 + 0.5) / 10
    return rounded if value >= 0 else -rounded


class ScoreEngine:
    """Static methods for climb scoring."""

    @staticmethod
    def gradient_component(segments: Sequence[Segment]) -> float:
        """Gradient component in [0, 1]; 0 when there are no segments."""
        if not segments:
            return 0.0
        total = len(segments)
        steep_ratio = sum(1 for s in segments if s.gradient_pct > ScoreConfig.STEEP_PCT) / total
        very_steep_ratio = sum(1 for s in segments if s.gradient_pct > ScoreConfig.VERY_STEEP_PCT) / total
        max_gradient = max(s.gradient_pct for s in segments)
        # All-descent profiles contribute 0, not a negative share
        normalized_max = max(0.0, min(max_gradient / ScoreConfig.MAX_GRADIENT_NORM_PCT, 1.0))
        return (
            steep_ratio * ScoreConfig.STEEP_RATIO_WEIGHT
            + very_steep_ratio * ScoreConfig.VERY_STEEP_RATIO_WEIGHT
            + normalized_max * ScoreConfig.MAX_GRADIENT_WEIGHT
        )

    @staticmethod
    def difficulty_score(
        total_distance_km: float,
        total_elevation_gain_m: float,
        segments: Sequence[Segment],
    ) -> DifficultyScore:
        """Compute the 0-100 composite difficulty score.

        Args:
            total_distance_km: Profile length (km)
            total_elevation_gain_m: Sum of positive rises (m)
            segments: Gradient segments of the profile

        Returns:
            DifficultyScore with category and integer components.
        """
        distance = min(total_distance_km / ScoreConfig.DISTANCE_NORM_KM, 1.0)
        elevation = min(total_elevation_gain_m / ScoreConfig.ELEVATION_NORM_M, 1.0)
        gradient = ScoreEngine.gradient_component(segments=segments)

        raw = (
            distance * ScoreConfig.DISTANCE_WEIGHT
            + elevation * ScoreConfig.ELEVATION_WEIGHT
            + gradient * ScoreConfig.GRADIENT_WEIGHT
        ) * 100
        score = max(0, min(100, round_half_up(raw)))

        logger.debug(f"Score {score} (distance={distance:.2f}, elevation={elevation:.2f}, gradient={gradient:.2f})")
        return DifficultyScore(
            score=score,
            category=ScoreEngine.score_category(score=score),
            components=ScoreComponents(
                distance=round_half_up(distance * 100),
                elevation=round_half_up(elevation * 100),
                gradient=round_half_up(gradient * 100),
            ),
        )

    @staticmethod
    def score_category(score: float) -> str:
        """Category label for a score (strict upper bounds, 25 is Modéré)."""
        for upper, label in ScoreConfig.CATEGORIES:
            if score < upper:
                return label
        return ScoreConfig.TOP_CATEGORY

    @staticmethod
    def uci_category(length_km: float, average_gradient_pct: float) -> UCICategoryResult:
        """UCI category from climb length and average gradient.

        Rules are checked in priority order; a climb matching several
        rules gets the first (hardest) one.
        """
        category = UCIConfig.FALLBACK_CATEGORY
        for rule_category, min_length, min_gradient in UCIConfig.RULES:
            if length_km > min_length and average_gradient_pct > min_gradient:
                category = rule_category
                break
        return UCICategoryResult(category=category, description=UCIConfig.DESCRIPTIONS[category])
