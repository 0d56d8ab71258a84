"""Key climbing section detection.

Steep segments (gradient above STEEP_GRADIENT_PCT) are grouped while each
one starts within MERGE_GAP_KM of the previous one's end. A group is kept as
a key section when it is longer than KEY_SECTION_MIN_LENGTH_KM or its average
gradient exceeds KEY_SECTION_HARD_GRADIENT_PCT.
"""

import logging
from typing import Optional, Sequence

from climb_profiler.constants import SegmentConfig
from climb_profiler.core.score_engine import round_tenth_half_up
from climb_profiler.model.segment import KeySegment, Segment

logger = logging.getLogger(__name__)


class KeySegmentDetector:
    """Merges runs of steep segments into named key sections.

    Example:
        detector = KeySegmentDetector()
        for section in detector.detect(segments):
            print(f"{section.type}: {section.length:.1f} km at {section.avg_gradient}%")
    """

    def __init__(
        self,
        steep_gradient_pct: float = SegmentConfig.STEEP_GRADIENT_PCT,
        merge_gap_km: float = SegmentConfig.MERGE_GAP_KM,
    ):
        self.steep_gradient_pct = steep_gradient_pct
        self.merge_gap_km = merge_gap_km

    def detect(self, segments: Sequence[Segment]) -> list[KeySegment]:
        """Find key sections in profile order."""
        steep = [s for s in segments if s.gradient_pct > self.steep_gradient_pct]

        key_segments: list[KeySegment] = []
        group: list[Segment] = []
        for segment in steep:
            if group and abs(segment.start_distance - group[-1].end_distance) >= self.merge_gap_km:
                self._append_if_key(group=group, key_segments=key_segments)
                group = []
            group.append(segment)
        self._append_if_key(group=group, key_segments=key_segments)

        logger.debug(f"Found {len(key_segments)} key sections among {len(steep)} steep segments")
        return key_segments

    def _append_if_key(self, group: list[Segment], key_segments: list[KeySegment]) -> None:
        section = self.build_section(group)
        if section is not None:
            key_segments.append(section)

    @staticmethod
    def build_section(group: Sequence[Segment]) -> Optional[KeySegment]:
        """Turn a group of steep segments into a KeySegment, or None if it does not qualify.

        Args:
            group: Consecutive steep segments in profile order

        Returns:
            KeySegment if the group is long or steep enough, else None.
        """
        if not group:
            return None

        length = sum(s.length for s in group)
        gain = group[-1].end_elevation - group[0].start_elevation
        avg_gradient = gain / length / 10.0

        long_enough = length > SegmentConfig.KEY_SECTION_MIN_LENGTH_KM
        hard = avg_gradient > SegmentConfig.KEY_SECTION_HARD_GRADIENT_PCT
        if not (long_enough or hard):
            return None

        return KeySegment(
            start_distance=group[0].start_distance,
            end_distance=group[-1].end_distance,
            length=length,
            avg_gradient=round_tenth_half_up(avg_gradient),
            max_gradient=max(s.gradient_pct for s in group),
            elevation_gain=gain,
            type=SegmentConfig.KEY_SECTION_LABEL_HARD if hard else SegmentConfig.KEY_SECTION_LABEL,
        )
