"""Road geometry: centerline, surface, guardrails.

The centerline samples at most MAX_CENTERLINE_POINTS profile points at even
index steps: x is the point's share of the profile distance times the
physical length, y its elevation plus VERTICAL_OFFSET_M, z is 0. Passes that
carry enough pre-built 3D coordinates use those as the centerline instead.

Guardrails are derived pairwise along the centerline from the slope in the
horizontal (x, z) plane.
"""

import logging
import math
from typing import Optional, Sequence

from climb_profiler.constants import RoadConfig
from climb_profiler.model.elevation_point import ElevationPoint
from climb_profiler.model.road_geometry import Guardrail, Point3D, RoadGeometry, SurfaceSegment

logger = logging.getLogger(__name__)


class RoadGeometryBuilder:
    """Builds RoadGeometry records.

    Example:
        road = RoadGeometryBuilder().build(profile, physical_length=13_800.0)
        print(f"{road.num_points} points, {len(road.guardrails)} guardrail spans")
    """

    def __init__(self, width: float = RoadConfig.WIDTH_M):
        self.width = width

    def build(
        self,
        profile: Sequence[ElevationPoint],
        physical_length: float,
        prebuilt_centerline: Optional[Sequence[Sequence[float]]] = None,
    ) -> RoadGeometry:
        """Build the road for a validated profile.

        Args:
            profile: Validated elevation profile
            physical_length: Along-route extent of the scene (m)
            prebuilt_centerline: Optional [x, y, z] points; used when it has at
                least MIN_PREBUILT_COORDINATES points

        Returns:
            RoadGeometry with one default surface record and derived guardrails.
        """
        if prebuilt_centerline is not None and len(prebuilt_centerline) >= RoadConfig.MIN_PREBUILT_COORDINATES:
            centerline = [(float(p[0]), float(p[1]), float(p[2])) for p in prebuilt_centerline]
            logger.debug(f"Using {len(centerline)} pre-built 3D coordinates as centerline")
        else:
            centerline = self.sample_centerline(profile=profile, physical_length=physical_length)

        road = RoadGeometry(
            centerline=centerline,
            width=self.width,
            surface_segments=self.surface_segments(centerline),
            guardrails=self.guardrails(centerline),
            tunnels=self.tunnels(centerline),
            bridges=self.bridges(centerline),
        )
        logger.info(f"Built road: {road.num_points} centerline points, {len(road.guardrails)} guardrail spans")
        return road

    @staticmethod
    def sample_centerline(profile: Sequence[ElevationPoint], physical_length: float) -> list[Point3D]:
        """Sample up to MAX_CENTERLINE_POINTS profile points into scene coordinates."""
        count = min(RoadConfig.MAX_CENTERLINE_POINTS, len(profile))
        start = profile[0].distance_km
        span = profile[-1].distance_km - start

        centerline: list[Point3D] = []
        for k in range(count):
            point = profile[math.floor(k / count * len(profile))]
            progress = (point.distance_km - start) / span if span > 0 else 0.0
            centerline.append((progress * physical_length, point.elevation_m + RoadConfig.VERTICAL_OFFSET_M, 0.0))
        return centerline

    @staticmethod
    def guardrails(centerline: Sequence[Point3D]) -> list[Guardrail]:
        """Guardrail spans between adjacent centerline points.

        A span gets a rail on steep descents or at altitude; very steep
        descents get rails on both sides.
        """
        rails: list[Guardrail] = []
        for index in range(1, len(centerline)):
            prev, curr = centerline[index - 1], centerline[index]
            horizontal = math.hypot(curr[0] - prev[0], curr[2] - prev[2])
            if horizontal == 0:
                continue
            slope = (curr[1] - prev[1]) / horizontal
            altitude = curr[1]

            if slope < RoadConfig.GUARDRAIL_DESCENT_SLOPE or altitude > RoadConfig.GUARDRAIL_ALTITUDE_M:
                rails.append(
                    Guardrail(
                        start_index=index - 1,
                        end_index=index,
                        side="both" if slope < RoadConfig.GUARDRAIL_BOTH_SIDES_SLOPE else "outer",
                        height=RoadConfig.GUARDRAIL_HEIGHT_M,
                        type="mountain" if altitude > RoadConfig.MOUNTAIN_GUARDRAIL_ALTITUDE_M else "standard",
                    )
                )
        return rails

    @staticmethod
    def surface_segments(centerline: Sequence[Point3D]) -> list[SurfaceSegment]:
        """Road surface records; a single default record spanning the whole road."""
        surface = RoadConfig.DEFAULT_SURFACE
        return [
            SurfaceSegment(
                start_index=0,
                end_index=max(0, len(centerline) - 1),
                type=surface["type"],
                quality=surface["quality"],
                color=surface["color"],
                roughness=surface["roughness"],
                metalness=surface["metalness"],
            )
        ]

    @staticmethod
    def tunnels(centerline: Sequence[Point3D]) -> list[dict]:
        # No tunnel data source yet
        return []

    @staticmethod
    def bridges(centerline: Sequence[Point3D]) -> list[dict]:
        # No bridge data source yet
        return []
