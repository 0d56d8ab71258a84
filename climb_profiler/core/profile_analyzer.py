"""Profile analysis pipeline.

validate -> segment -> {key sections, difficulty buckets, score, UCI}

analyze_profile() is the module-level entry point; ProfileAnalyzer lets
callers swap in differently configured components.
"""

import logging
from typing import Any, Optional, Sequence

from climb_profiler.core.difficulty_classifier import DifficultyClassifier
from climb_profiler.core.key_segment_detector import KeySegmentDetector
from climb_profiler.core.profile_segmenter import ProfileSegmenter
from climb_profiler.core.score_engine import ScoreEngine
from climb_profiler.model.elevation_point import ElevationPoint, validate_profile
from climb_profiler.model.profile_analysis import ProfileAnalysis, ProfileSummary
from climb_profiler.model.segment import Segment

logger = logging.getLogger(__name__)


class ProfileAnalyzer:
    """Runs the full analysis of one elevation profile.

    Example:
        analysis = ProfileAnalyzer().analyze([[0, 1000], [1, 1100], [2, 1300], [5, 1600]])
        print(analysis.summary.average_gradient)  # 12.0
    """

    def __init__(
        self,
        segmenter: Optional[ProfileSegmenter] = None,
        detector: Optional[KeySegmentDetector] = None,
    ):
        self._segmenter = segmenter or ProfileSegmenter()
        self._detector = detector or KeySegmentDetector()

    def analyze(self, points: Sequence[Any] | None) -> ProfileAnalysis:
        """Analyze an elevation profile.

        Args:
            points: ElevationPoints or [distance_km, elevation_m] pairs

        Returns:
            ProfileAnalysis with summary, key sections, tier buckets, score and UCI category.

        Raises:
            InvalidProfileError: If the profile is missing, too short or unordered.
        """
        profile = validate_profile(points)
        segments = self._segmenter.segment(points=profile)
        summary = self.summarize(profile=profile, segments=segments)

        analysis = ProfileAnalysis(
            summary=summary,
            segments=segments,
            key_segments=self._detector.detect(segments),
            segments_by_difficulty=DifficultyClassifier.bucket(segments=segments),
            difficulty_score=ScoreEngine.difficulty_score(
                total_distance_km=summary.total_distance,
                total_elevation_gain_m=summary.total_elevation_gain,
                segments=segments,
            ),
            uci_comparison=ScoreEngine.uci_category(
                length_km=summary.total_distance,
                average_gradient_pct=summary.average_gradient,
            ),
        )
        logger.info(
            f"Analyzed profile: {summary.total_distance:.2f} km, +{summary.total_elevation_gain:.0f} m, "
            f"score {analysis.difficulty_score.score} ({analysis.difficulty_score.category}), "
            f"UCI {analysis.uci_comparison.category}"
        )
        return analysis

    @staticmethod
    def summarize(profile: Sequence[ElevationPoint], segments: Sequence[Segment]) -> ProfileSummary:
        """Headline numbers of a validated profile and its segments."""
        elevations = [p.elevation_m for p in profile]
        gain = ProfileSegmenter.elevation_gain(profile)
        distance = profile[-1].distance_km - profile[0].distance_km
        average = gain / distance / 10.0 if distance > 0 else 0.0

        steepest = max(segments, key=lambda s: s.gradient_pct) if segments else None
        return ProfileSummary(
            max_elevation=max(elevations),
            min_elevation=min(elevations),
            total_elevation_gain=gain,
            total_distance=distance,
            average_gradient=average,
            max_gradient=steepest.gradient_pct if steepest else 0.0,
            max_gradient_location=steepest.start_distance if steepest else None,
            max_gradient_length=steepest.length if steepest else None,
        )


def analyze_profile(points: Sequence[Any] | None) -> ProfileAnalysis:
    """Analyze an elevation profile with default settings."""
    return ProfileAnalyzer().analyze(points)
