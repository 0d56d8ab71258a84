"""Profile segmentation into fixed-length gradient windows.

Walks the elevation profile and cuts it into windows of roughly WINDOW_KM.
A window ends at the first point at least WINDOW_KM past its start; the next
window starts where the previous one ended, so the windows tile the profile
without gaps. The last window is shorter when the data runs out.
"""

import logging
from typing import Sequence

from climb_profiler.constants import SegmentConfig
from climb_profiler.core.score_engine import round_tenth_half_up
from climb_profiler.model.elevation_point import ElevationPoint
from climb_profiler.model.segment import Segment

logger = logging.getLogger(__name__)


class ProfileSegmenter:
    """Splits an elevation profile into gradient segments.

    Example:
        segmenter = ProfileSegmenter()
        segments = segmenter.segment(points=validate_profile(raw_points))
        steepest = max(segments, key=lambda s: s.gradient_pct)
    """

    def __init__(self, window_km: float = SegmentConfig.WINDOW_KM):
        if window_km <= 0:
            raise ValueError(f"window_km must be positive, got {window_km}")
        self.window_km = window_km

    def segment(self, points: Sequence[ElevationPoint]) -> list[Segment]:
        """Cut a validated profile into contiguous gradient segments.

        Args:
            points: Profile with at least 2 points and increasing distances

        Returns:
            Segments in profile order; segment[i].end_distance equals
            segment[i + 1].start_distance.
        """
        segments: list[Segment] = []
        last = len(points) - 1
        i = 0
        while i < last:
            start = points[i]
            j = i + 1
            while j <= last and points[j].distance_km - start.distance_km < self.window_km:
                j += 1
            j = min(j, last)
            end = points[j]

            horizontal_km = end.distance_km - start.distance_km
            if horizontal_km > 0:
                gradient = (end.elevation_m - start.elevation_m) / horizontal_km / 10.0
                segments.append(
                    Segment(
                        start_distance=start.distance_km,
                        end_distance=end.distance_km,
                        length=horizontal_km,
                        start_elevation=start.elevation_m,
                        end_elevation=end.elevation_m,
                        gradient_pct=round_tenth_half_up(gradient),
                    )
                )
            else:
                logger.warning(f"Skipping zero-length window at {start.distance_km} km")
            i = j

        logger.debug(f"Segmented {len(points)} points into {len(segments)} windows of ~{self.window_km} km")
        return segments

    @staticmethod
    def elevation_gain(points: Sequence[ElevationPoint]) -> float:
        """Sum of positive point-to-point rises (m)."""
        return sum(
            max(0.0, curr.elevation_m - prev.elevation_m)
            for prev, curr in zip(points, points[1:])
        )
