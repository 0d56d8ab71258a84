"""Vegetation, rocks and buildings around the road.

Objects are scattered with a seeded random.Random: the same pass id (or
explicit seed) always yields the same environment. Heights come from the
synthesized terrain at each object's (x, z) position.

Trees: one per TREE_SPACING_M of route, none at or above the treeline,
species by altitude band.
Rocks: one per ROCK_SPACING_M of route, always kept near or above the
treeline and kept with ROCK_LOW_ALTITUDE_PROBABILITY lower down.
Buildings: one per refuge/restaurant/hotel point of interest.
"""

import logging
import random
import re
import zlib
from typing import Optional, Sequence

from scipy.interpolate import RegularGridInterpolator

from climb_profiler.constants import EnvironmentConfig, RoadConfig
from climb_profiler.generators.terrain_synthesizer import TerrainSynthesizer
from climb_profiler.model.elevation_point import ElevationPoint
from climb_profiler.model.environment import Building, EnvironmentSet, Rock, Tree
from climb_profiler.model.pass_record import PointOfInterest
from climb_profiler.model.terrain_grid import TerrainGrid

logger = logging.getLogger(__name__)

_SWITCHBACK_PATTERN = re.compile(rf"{EnvironmentConfig.SWITCHBACK_PREFIX}\s*(\d+)", re.IGNORECASE)


def seed_for_pass(pass_id: str) -> int:
    """Stable 32-bit seed derived from a pass id."""
    return zlib.crc32(pass_id.encode("utf-8"))


def switchback_fraction(location: str) -> Optional[float]:
    """Route fraction of a "Virage N" location, or None if it names no switchback.

    Switchbacks are numbered over SWITCHBACK_COUNT; the result is clamped to [0, 1].
    """
    match = _SWITCHBACK_PATTERN.search(location or "")
    if match is None:
        return None
    return min(1.0, max(0.0, int(match.group(1)) / EnvironmentConfig.SWITCHBACK_COUNT))


def poi_route_fraction(poi: PointOfInterest, rng: random.Random) -> float:
    """Where along the route (0-1) a point of interest sits.

    Uses the switchback number when the location has one, otherwise a
    draw from rng.
    """
    fraction = switchback_fraction(poi.location)
    if fraction is None:
        logger.debug(f"No switchback in location {poi.location!r} of POI {poi.id}, placing randomly")
        return rng.random()
    return fraction


def profile_elevation_at(profile: Sequence[ElevationPoint], fraction: float) -> float:
    """Elevation of the profile point at index floor(fraction * (n - 1))."""
    return profile[int(fraction * (len(profile) - 1))].elevation_m


class EnvironmentPopulator:
    """Scatters environment objects over a terrain grid.

    Example:
        populator = EnvironmentPopulator(seed=seed_for_pass("alpe-dhuez"))
        environment = populator.populate(grid, profile, pass_record.points_of_interest)
    """

    def __init__(self, seed: int, treeline_m: float = EnvironmentConfig.TREELINE_M):
        self.seed = seed
        self.treeline_m = treeline_m

    def populate(
        self,
        grid: TerrainGrid,
        profile: Sequence[ElevationPoint],
        points_of_interest: Sequence[PointOfInterest] = (),
    ) -> EnvironmentSet:
        """Scatter trees, rocks and buildings.

        Args:
            grid: Synthesized terrain (positions and heights)
            profile: Validated elevation profile (building elevations)
            points_of_interest: POIs of the pass

        Returns:
            EnvironmentSet; water_bodies is always empty.
        """
        rng = random.Random(self.seed)
        height_at = TerrainSynthesizer.elevation_interpolator(grid)
        environment = EnvironmentSet(
            trees=self._trees(grid=grid, height_at=height_at, rng=rng),
            rocks=self._rocks(grid=grid, height_at=height_at, rng=rng),
            buildings=self._buildings(
                grid=grid, profile=profile, points_of_interest=points_of_interest, rng=rng
            ),
        )
        logger.info(
            f"Populated environment: {len(environment.trees)} trees, {len(environment.rocks)} rocks, "
            f"{len(environment.buildings)} buildings"
        )
        return environment

    def tree_species(self, altitude: float) -> str:
        for upper, species in EnvironmentConfig.TREE_SPECIES_BANDS:
            if altitude < upper:
                return species
        return EnvironmentConfig.TOP_TREE_SPECIES

    @staticmethod
    def _lateral_offset(rng: random.Random, half_width: float, minimum: float, spread: float) -> float:
        magnitude = (rng.random() * spread + minimum) * half_width
        return magnitude if rng.random() > 0.5 else -magnitude

    def _trees(self, grid: TerrainGrid, height_at: RegularGridInterpolator, rng: random.Random) -> list[Tree]:
        count = int(grid.physical_length // EnvironmentConfig.TREE_SPACING_M)
        half_width = grid.physical_width * 0.5

        trees: list[Tree] = []
        for _ in range(count):
            x = rng.random() * grid.physical_length
            z = self._lateral_offset(
                rng=rng,
                half_width=half_width,
                minimum=EnvironmentConfig.TREE_LATERAL_MIN,
                spread=EnvironmentConfig.TREE_LATERAL_RANGE,
            )
            altitude = float(height_at([[x, z]])[0])
            if altitude >= self.treeline_m:
                continue
            height = EnvironmentConfig.TREE_MIN_HEIGHT_M + rng.random() * EnvironmentConfig.TREE_HEIGHT_RANGE_M
            width = EnvironmentConfig.TREE_MIN_WIDTH_M + rng.random() * EnvironmentConfig.TREE_WIDTH_RANGE_M
            trees.append(Tree(position=(x, altitude, z), type=self.tree_species(altitude), height=height, width=width))
        logger.debug(f"Placed {len(trees)} of {count} trees below the {self.treeline_m:.0f} m treeline")
        return trees

    def _rocks(self, grid: TerrainGrid, height_at: RegularGridInterpolator, rng: random.Random) -> list[Rock]:
        count = int(grid.physical_length // EnvironmentConfig.ROCK_SPACING_M)
        half_width = grid.physical_width * 0.5
        high_band = self.treeline_m - EnvironmentConfig.ROCK_HIGH_ALTITUDE_BAND_M

        rocks: list[Rock] = []
        for _ in range(count):
            x = rng.random() * grid.physical_length
            z = self._lateral_offset(
                rng=rng,
                half_width=half_width,
                minimum=EnvironmentConfig.ROCK_LATERAL_MIN,
                spread=EnvironmentConfig.ROCK_LATERAL_RANGE,
            )
            altitude = float(height_at([[x, z]])[0])
            if altitude <= high_band and rng.random() >= EnvironmentConfig.ROCK_LOW_ALTITUDE_PROBABILITY:
                continue
            rocks.append(
                Rock(
                    position=(x, altitude, z),
                    type="alpine" if altitude > self.treeline_m else "standard",
                    size=EnvironmentConfig.ROCK_MIN_SIZE_M + rng.random() * EnvironmentConfig.ROCK_SIZE_RANGE_M,
                )
            )
        return rocks

    def _buildings(
        self,
        grid: TerrainGrid,
        profile: Sequence[ElevationPoint],
        points_of_interest: Sequence[PointOfInterest],
        rng: random.Random,
    ) -> list[Building]:
        setback = RoadConfig.WIDTH_M / 2 + EnvironmentConfig.BUILDING_SETBACK_M

        buildings: list[Building] = []
        for poi in points_of_interest:
            if poi.type not in EnvironmentConfig.BUILDING_POI_TYPES:
                continue
            fraction = poi_route_fraction(poi, rng)
            elevation = profile_elevation_at(profile, fraction) + EnvironmentConfig.BUILDING_ELEVATION_OFFSET_M
            buildings.append(
                Building(
                    position=(fraction * grid.physical_length, elevation, setback),
                    type=poi.type,
                    name=poi.name,
                    size="large" if poi.type in EnvironmentConfig.LARGE_BUILDING_TYPES else "small",
                )
            )
        return buildings
