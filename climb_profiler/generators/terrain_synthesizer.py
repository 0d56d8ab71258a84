"""Heightmap synthesis around a climb.

For each grid cell (i, j):
1. Row i maps to a fraction of the route; the nearest profile point by
   distance gives the base elevation.
2. A sinusoidal pseudo-noise term of the cell indices is added, ramping
   from 0 on the road to full strength at NOISE_FULL_FRACTION of the width.
3. Beyond VALLEY_START_FRACTION of the half-width the terrain falls away.
4. Heights are clamped to FLOOR_BELOW_MIN_M below the profile minimum.

The grid is a pure function of (profile, params): no randomness, so equal
inputs give bit-identical arrays.
"""

import logging
from typing import Sequence

import numpy as np
from scipy.interpolate import RegularGridInterpolator

from climb_profiler.constants import TerrainConfig
from climb_profiler.model.elevation_point import ElevationPoint, validate_profile
from climb_profiler.model.terrain_grid import TerrainGrid, TerrainParams

logger = logging.getLogger(__name__)


class TerrainSynthesizer:
    """Builds TerrainGrids from elevation profiles.

    Example:
        synthesizer = TerrainSynthesizer()
        grid = synthesizer.synthesize(profile, TerrainParams.for_length_km(13.8))
        heights = grid.heights  # (128, 128) meters
    """

    @staticmethod
    def pseudo_noise(i: np.ndarray, j: np.ndarray, scale: float = TerrainConfig.NOISE_SCALE) -> np.ndarray:
        """Sinusoidal stand-in for Perlin noise, in [-1, 1].

        Cell indices are scaled and floored to lattice coordinates (wrapped
        to 0-255); the value is a sine of their sum. Not gradient noise:
        neighboring cells share a value and steps occur at lattice borders.
        """
        lattice_x = np.floor(i * scale).astype(np.int64) & 255
        lattice_y = np.floor(j * scale).astype(np.int64) & 255
        return np.sin(lattice_x * 0.1 + lattice_y * 0.1)

    @staticmethod
    def base_elevations(profile: Sequence[ElevationPoint], resolution: int) -> np.ndarray:
        """Elevation of the nearest profile point for each grid row.

        Row i sits at fraction i / resolution of the profile's distance span.
        """
        distances = np.array([p.distance_km for p in profile])
        elevations = np.array([p.elevation_m for p in profile])
        targets = distances[0] + np.arange(resolution) / resolution * (distances[-1] - distances[0])

        right = np.clip(np.searchsorted(distances, targets), 1, len(distances) - 1)
        left = right - 1
        # Ties go to the earlier point
        nearest = np.where(targets - distances[left] <= distances[right] - targets, left, right)
        return elevations[nearest]

    def synthesize(self, profile: Sequence[ElevationPoint], params: TerrainParams) -> TerrainGrid:
        """Synthesize the heightmap for a profile.

        Args:
            profile: Elevation profile (ElevationPoints or pairs)
            params: Grid extents and resolution

        Returns:
            TerrainGrid with heights[i, j] in meters.

        Raises:
            InvalidProfileError: If the profile is invalid.
        """
        profile = validate_profile(profile)
        n = params.grid_resolution
        width = params.physical_width

        min_elevation = min(p.elevation_m for p in profile)
        max_elevation = max(p.elevation_m for p in profile)

        i, j = np.meshgrid(np.arange(n), np.arange(n), indexing="ij")
        lateral = np.abs((j / n - 0.5) * width)

        heights = np.repeat(self.base_elevations(profile, n)[:, np.newaxis], n, axis=1).astype(np.float64)

        variation = np.minimum(1.0, lateral / (width * TerrainConfig.NOISE_FULL_FRACTION))
        heights += self.pseudo_noise(i, j) * TerrainConfig.NOISE_AMPLITUDE_M * variation

        valley_start = TerrainConfig.VALLEY_START_FRACTION * width / 2
        valley = np.maximum(0.0, (lateral - valley_start) / (width * TerrainConfig.VALLEY_RAMP_FRACTION))
        heights -= valley * TerrainConfig.VALLEY_DEPTH_M

        np.maximum(heights, min_elevation - TerrainConfig.FLOOR_BELOW_MIN_M, out=heights)

        logger.info(
            f"Synthesized {n}x{n} terrain over {params.physical_length:.0f} x {width:.0f} m "
            f"(heights {heights.min():.0f}-{heights.max():.0f} m)"
        )
        return TerrainGrid(
            heights=heights,
            params=params,
            min_elevation=min_elevation,
            max_elevation=max_elevation,
        )

    @staticmethod
    def elevation_interpolator(grid: TerrainGrid) -> RegularGridInterpolator:
        """Bilinear height lookup at scene (x, z) positions in meters.

        Positions outside the grid are linearly extrapolated from the border cells.
        """
        return RegularGridInterpolator(
            (grid.along_axis(), grid.lateral_axis()),
            grid.heights,
            method="linear",
            bounds_error=False,
            fill_value=None,
        )
