"""Gradient difficulty tiers.

Each segment belongs to exactly one tier: the first tier in
DifficultyConfig.TIER_UPPER_BOUNDS whose (inclusive) upper bound it does not
exceed. Bucket percentages count segments, they are not weighted by length.
"""

import logging
from typing import Sequence

from climb_profiler.constants import DifficultyConfig
from climb_profiler.model.difficulty import DifficultyBucket
from climb_profiler.model.segment import Segment

logger = logging.getLogger(__name__)


class DifficultyClassifier:
    """Buckets segments into difficulty tiers."""

    @staticmethod
    def classify_gradient(gradient_pct: float) -> str:
        """Classify a gradient percentage into a tier.

        Args:
            gradient_pct: Segment gradient (%), negative for descents

        Returns:
            Tier key: "easy", "moderate", "difficult", "veryDifficult" or "extreme".
            Descents are "easy".
        """
        for tier, upper in DifficultyConfig.TIER_UPPER_BOUNDS.items():
            if gradient_pct <= upper:
                return tier
        return DifficultyConfig.TIERS[-1]

    @staticmethod
    def get_tier_color(gradient_pct: float) -> str:
        """Display color (hex) for a gradient percentage."""
        return DifficultyConfig.TIER_COLORS[DifficultyClassifier.classify_gradient(gradient_pct=gradient_pct)]

    @staticmethod
    def bucket(segments: Sequence[Segment]) -> dict[str, DifficultyBucket]:
        """Group segments by tier.

        Returns:
            One bucket per tier, in tier order, present even when empty.
        """
        buckets = {
            tier: DifficultyBucket(difficulty=tier, color=DifficultyConfig.TIER_COLORS[tier])
            for tier in DifficultyConfig.TIERS
        }
        for segment in segments:
            buckets[DifficultyClassifier.classify_gradient(gradient_pct=segment.gradient_pct)].segments.append(segment)

        total = len(segments)
        for bucket in buckets.values():
            bucket.total_length = sum(s.length for s in bucket.segments)
            bucket.percentage = bucket.count / total * 100 if total > 0 else 0.0

        logger.debug(
            "Difficulty distribution: " + ", ".join(f"{tier}={b.count}" for tier, b in buckets.items())
        )
        return buckets
