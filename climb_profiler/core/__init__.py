"""Core profile analysis and geodesic helpers.

- ProfileSegmenter: Fixed-length gradient windows
- KeySegmentDetector: Merged steep sections
- DifficultyClassifier: Gradient tiers and bucket statistics
- ScoreEngine: 0-100 difficulty score and UCI category
- ProfileAnalyzer / analyze_profile: The full analysis pipeline
- GeoCalculator: Geodesic lengths and geographic reference of tracks
- AltitudeLookup, LatitudeAltitudeLookup, DEMAltitudeLookup: Elevation sources
- ProfileBuilder: Elevation profiles from lon/lat tracks
"""

from climb_profiler.core.altitude_lookup import (
    AltitudeLookup,
    DEMAltitudeLookup,
    LatitudeAltitudeLookup,
)
from climb_profiler.core.difficulty_classifier import DifficultyClassifier
from climb_profiler.core.geo_calculator import GeoCalculator
from climb_profiler.core.key_segment_detector import KeySegmentDetector
from climb_profiler.core.profile_analyzer import ProfileAnalyzer, analyze_profile
from climb_profiler.core.profile_builder import ProfileBuilder
from climb_profiler.core.profile_segmenter import ProfileSegmenter
from climb_profiler.core.score_engine import ScoreEngine

__all__ = [
    # Analysis
    "ProfileSegmenter",
    "KeySegmentDetector",
    "DifficultyClassifier",
    "ScoreEngine",
    "ProfileAnalyzer",
    "analyze_profile",
    # Geodata
    "GeoCalculator",
    "AltitudeLookup",
    "LatitudeAltitudeLookup",
    "DEMAltitudeLookup",
    "ProfileBuilder",
]
