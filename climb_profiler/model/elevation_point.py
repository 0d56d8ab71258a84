"""ElevationPoint - The fundamental atom of a climb profile.

An ElevationPoint is one sample of a road's elevation profile: how far along
the road (km) and how high (m). Profiles are ordered sequences of points with
strictly increasing distance.

Used by:
- ProfileSegmenter (windows points into gradient segments)
- TerrainSynthesizer / RoadGeometryBuilder (elevation lookups along the route)
"""

from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from climb_profiler.constants import SegmentConfig
from climb_profiler.errors import InvalidProfileError


@dataclass(frozen=True)
class ElevationPoint:
    """A point on a climb profile.

    Attributes:
        distance_km: Distance from the profile origin in kilometers
        elevation_m: Elevation in meters above sea level

    Example:
        point = ElevationPoint(distance_km=2.5, elevation_m=1340.0)
    """

    distance_km: float
    elevation_m: float

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        if np.isnan(self.distance_km) or np.isnan(self.elevation_m):
            raise InvalidProfileError(f"ElevationPoint cannot contain NaN ({self.distance_km}, {self.elevation_m})")

    @classmethod
    def from_pair(cls, pair: Any) -> "ElevationPoint":
        """Create from a [distance_km, elevation_m] pair or an existing point."""
        if isinstance(pair, ElevationPoint):
            return pair
        try:
            distance, elevation = pair
            return cls(distance_km=float(distance), elevation_m=float(elevation))
        except (TypeError, ValueError) as e:
            raise InvalidProfileError(f"Invalid elevation point {pair!r}: {e}") from e

    def to_pair(self) -> list[float]:
        """Return [distance_km, elevation_m] - the wire format of pass records."""
        return [self.distance_km, self.elevation_m]

    def __repr__(self) -> str:
        return f"ElevationPoint({self.distance_km:.3f}km, {self.elevation_m:.1f}m)"


def validate_profile(points: Sequence[Any] | None) -> list[ElevationPoint]:
    """Normalize and validate an elevation profile.

    Args:
        points: ElevationPoints or [distance_km, elevation_m] pairs

    Returns:
        List of ElevationPoint in the given order.

    Raises:
        InvalidProfileError: If missing, shorter than MIN_PROFILE_POINTS,
            or distances are not strictly increasing.
    """
    if points is None:
        raise InvalidProfileError("Elevation profile is missing")

    profile = [ElevationPoint.from_pair(p) for p in points]

    if len(profile) < SegmentConfig.MIN_PROFILE_POINTS:
        raise InvalidProfileError(
            f"Elevation profile needs at least {SegmentConfig.MIN_PROFILE_POINTS} points, got {len(profile)}"
        )

    for prev, curr in zip(profile, profile[1:]):
        if curr.distance_km <= prev.distance_km:
            raise InvalidProfileError(
                f"Elevation profile distances must be strictly increasing: "
                f"{prev.distance_km} km followed by {curr.distance_km} km"
            )

    return profile
