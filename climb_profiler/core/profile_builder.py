"""Build elevation profiles from lon/lat tracks.

Distances are cumulative geodesic distances along the track; elevations come
from an AltitudeLookup, falling back to LatitudeAltitudeLookup wherever the
primary lookup has no answer. Consecutive points with no along-track
progress are dropped so the profile keeps strictly increasing distances.
"""

import logging
from typing import Optional, Sequence

from climb_profiler.core.altitude_lookup import AltitudeLookup, LatitudeAltitudeLookup
from climb_profiler.core.geo_calculator import GeoCalculator
from climb_profiler.errors import MissingGeodataError
from climb_profiler.model.elevation_point import ElevationPoint, validate_profile

logger = logging.getLogger(__name__)


class ProfileBuilder:
    """Static methods turning tracks into ElevationPoint sequences."""

    @staticmethod
    def from_coordinates(
        coordinates: Optional[Sequence[tuple[float, float]]],
        altitude_lookup: Optional[AltitudeLookup] = None,
    ) -> list[ElevationPoint]:
        """Build a profile for a (lon, lat) track.

        Args:
            coordinates: Track points in travel order
            altitude_lookup: Elevation source (LatitudeAltitudeLookup if not given)

        Returns:
            Validated profile starting at distance 0.

        Raises:
            MissingGeodataError: If coordinates are missing.
            InvalidProfileError: If fewer than 2 distinct track points remain.
        """
        if not coordinates:
            raise MissingGeodataError("Cannot build a profile without coordinates")

        fallback = LatitudeAltitudeLookup()
        lookup = altitude_lookup or fallback
        distances = GeoCalculator.cumulative_distances_km(coordinates)

        points: list[ElevationPoint] = []
        fallbacks = 0
        for (lon, lat), distance_km in zip(coordinates, distances):
            if points and distance_km <= points[-1].distance_km:
                logger.warning(f"Dropping track point without progress at {distance_km:.3f} km ({lon}, {lat})")
                continue
            elevation = lookup.get_elevation(lon=lon, lat=lat)
            if elevation is None:
                fallbacks += 1
                elevation = fallback.get_elevation(lon=lon, lat=lat)
            points.append(ElevationPoint(distance_km=distance_km, elevation_m=elevation))

        if fallbacks:
            logger.warning(f"Altitude lookup had no data for {fallbacks} of {len(points)} points, used fallback model")
        logger.info(f"Built profile of {len(points)} points over {points[-1].distance_km:.2f} km")
        return validate_profile(points)
