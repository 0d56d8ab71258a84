"""TerrainGrid - Height-sampled terrain around a climb.

Grid axes:
- axis 0 (i): along-route, x = i / resolution * physical_length
- axis 1 (j): lateral, z = (j / resolution - 0.5) * physical_width

Heights are true meters; height_scale is a vertical exaggeration hint for
renderers and is never applied to the stored heights.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np

from climb_profiler.constants import TerrainConfig


@dataclass(frozen=True)
class TerrainParams:
    """Parameters of a terrain synthesis run.

    Attributes:
        physical_length: Along-route extent (m)
        physical_width: Lateral extent (m)
        grid_resolution: Cells per side
        height_scale: Renderer exaggeration hint
        texture_resolution: Texture size hint (px)
    """

    physical_length: float
    physical_width: float = TerrainConfig.PHYSICAL_WIDTH_M
    grid_resolution: int = TerrainConfig.GRID_RESOLUTION
    height_scale: float = TerrainConfig.HEIGHT_SCALE
    texture_resolution: int = TerrainConfig.TEXTURE_RESOLUTION

    def __post_init__(self) -> None:
        if self.grid_resolution < 2:
            raise ValueError(f"grid_resolution must be >= 2, got {self.grid_resolution}")
        if self.physical_length <= 0 or self.physical_width <= 0:
            raise ValueError(
                f"Terrain extents must be positive, got {self.physical_length} x {self.physical_width}"
            )

    @classmethod
    def for_length_km(cls, length_km: float, **overrides: Any) -> "TerrainParams":
        """Default parameters for a climb of the given length."""
        return cls(physical_length=length_km * 1000.0, **overrides)


@dataclass
class TerrainGrid:
    """Heightmap plus the metadata a renderer needs to place it.

    Attributes:
        heights: (resolution, resolution) float64 array, heights[i, j] in meters
        params: Parameters the grid was synthesized with
        min_elevation: Lowest profile elevation (m)
        max_elevation: Highest profile elevation (m)
    """

    heights: np.ndarray
    params: TerrainParams
    min_elevation: float
    max_elevation: float

    @property
    def resolution(self) -> int:
        return self.params.grid_resolution

    @property
    def physical_width(self) -> float:
        return self.params.physical_width

    @property
    def physical_length(self) -> float:
        return self.params.physical_length

    def along_axis(self) -> np.ndarray:
        """Along-route x coordinate of each row (m)."""
        return np.arange(self.resolution) / self.resolution * self.physical_length

    def lateral_axis(self) -> np.ndarray:
        """Lateral z coordinate of each column (m), 0 on the road."""
        return (np.arange(self.resolution) / self.resolution - 0.5) * self.physical_width

    def terrain_type_map(self) -> np.ndarray:
        """Terrain-type name per cell, from height normalized over the grid.

        Each cell takes the first TERRAIN_TYPES entry whose threshold its
        normalized height reaches.
        """
        low, high = float(self.heights.min()), float(self.heights.max())
        span = high - low
        normalized = (self.heights - low) / span if span > 0 else np.zeros_like(self.heights)

        types = np.full(self.heights.shape, TerrainConfig.TERRAIN_TYPES[-1][0], dtype=object)
        # Apply lowest threshold first so higher bands overwrite
        for name, threshold, _ in reversed(TerrainConfig.TERRAIN_TYPES):
            types[normalized >= threshold] = name
        return types

    def to_dict(self) -> dict[str, Any]:
        return {
            "heightmap": self.heights.tolist(),
            "resolution": self.resolution,
            "physical_width": self.physical_width,
            "physical_length": self.physical_length,
            "height_scale": self.params.height_scale,
            "texture_resolution": self.params.texture_resolution,
            "min_elevation": self.min_elevation,
            "max_elevation": self.max_elevation,
            "terrain_types": [
                {"name": name, "threshold": threshold, "texture": texture}
                for name, threshold, texture in TerrainConfig.TERRAIN_TYPES
            ],
        }
