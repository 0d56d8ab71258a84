"""Geodesic calculations for lon/lat road tracks.

Provides geographic helper functions for climb tracks:
- Geodesic segment and track lengths (pyproj.Geod on the WGS84 ellipsoid)
- Cumulative along-track distance
- UTM zone selection for meter-based buffering
- Geographic reference of a track (bounds, center, terrain corridor)

Coordinates are (lon, lat) in decimal degrees (WGS84). Distances are in meters
unless the name says otherwise.
"""

from math import floor
from typing import Any, Sequence

import pyproj
from shapely.geometry import LineString
from shapely.ops import transform as shapely_transform

from climb_profiler.constants import TerrainConfig
from climb_profiler.errors import MissingGeodataError

_GEOD = pyproj.Geod(ellps="WGS84")


class GeoCalculator:
    """Static methods for geodesic calculations on a lon/lat track."""

    @staticmethod
    def segment_lengths_m(coordinates: Sequence[tuple[float, float]]) -> list[float]:
        """Geodesic length of each consecutive pair of track points.

        Args:
            coordinates: (lon, lat) track

        Returns:
            len(coordinates) - 1 distances in meters.
        """
        if len(coordinates) < 2:
            return []
        lons = [c[0] for c in coordinates]
        lats = [c[1] for c in coordinates]
        _, _, distances = _GEOD.inv(lons[:-1], lats[:-1], lons[1:], lats[1:])
        return [float(d) for d in distances]

    @staticmethod
    def cumulative_distances_km(coordinates: Sequence[tuple[float, float]]) -> list[float]:
        """Along-track distance of each point from the first one (km)."""
        distances = [0.0]
        for length_m in GeoCalculator.segment_lengths_m(coordinates):
            distances.append(distances[-1] + length_m / 1000.0)
        return distances

    @staticmethod
    def track_length_m(coordinates: Sequence[tuple[float, float]]) -> float:
        """Total geodesic length of the track (m)."""
        if len(coordinates) < 2:
            return 0.0
        return float(_GEOD.line_length([c[0] for c in coordinates], [c[1] for c in coordinates]))

    @staticmethod
    def utm_crs(lon: float, lat: float) -> str:
        """UTM zone EPSG code for the given coordinates."""
        zone_number = floor((lon + 180) / 6) + 1
        if lat >= 0:
            return f"EPSG:326{zone_number:02d}"
        return f"EPSG:327{zone_number:02d}"

    @staticmethod
    def corridor_bounds(
        coordinates: Sequence[tuple[float, float]],
        width_m: float = TerrainConfig.PHYSICAL_WIDTH_M,
    ) -> tuple[float, float, float, float]:
        """Bounds of the corridor of the given width around the track.

        The track is buffered by width_m / 2 in its UTM zone and projected
        back, so the corridor width is in true meters.

        Returns:
            (min_lon, min_lat, max_lon, max_lat)
        """
        line = LineString(coordinates)
        center_lon = (line.bounds[0] + line.bounds[2]) / 2
        center_lat = (line.bounds[1] + line.bounds[3]) / 2

        wgs84 = pyproj.CRS("EPSG:4326")
        utm = pyproj.CRS(GeoCalculator.utm_crs(lon=center_lon, lat=center_lat))
        to_utm = pyproj.Transformer.from_crs(wgs84, utm, always_xy=True).transform
        to_wgs84 = pyproj.Transformer.from_crs(utm, wgs84, always_xy=True).transform

        corridor_utm = shapely_transform(to_utm, line).buffer(width_m / 2, cap_style="round", join_style="round")
        return tuple(float(b) for b in shapely_transform(to_wgs84, corridor_utm).bounds)

    @staticmethod
    def geo_reference(
        coordinates: Sequence[tuple[float, float]],
        corridor_width_m: float = TerrainConfig.PHYSICAL_WIDTH_M,
    ) -> dict[str, Any]:
        """Geographic reference of a track for placing the scene on a map.

        Args:
            coordinates: (lon, lat) track with at least 2 points
            corridor_width_m: Width of the terrain corridor (m)

        Returns:
            Dict with bounds, center, corridor_bounds (all lon/lat) and
            geodesic_length_m.

        Raises:
            MissingGeodataError: If fewer than 2 coordinates are given.
        """
        if len(coordinates) < 2:
            raise MissingGeodataError(f"Geographic reference needs at least 2 coordinates, got {len(coordinates)}")

        line = LineString(coordinates)
        # Centroid of a degenerate (zero-length) line is empty
        center = line.centroid if line.length > 0 else line.interpolate(0)
        return {
            "bounds": tuple(float(b) for b in line.bounds),
            "center": (float(center.x), float(center.y)),
            "corridor_bounds": GeoCalculator.corridor_bounds(coordinates, width_m=corridor_width_m),
            "geodesic_length_m": GeoCalculator.track_length_m(coordinates),
        }
