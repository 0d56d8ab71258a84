"""Altitude lookups for building profiles from lon/lat tracks.

- AltitudeLookup: interface, get_elevation(lon, lat) -> meters or None
- LatitudeAltitudeLookup: deterministic placeholder model (no data needed)
- DEMAltitudeLookup: samples a local GeoTIFF elevation model with rasterio

The real altitude service is an external collaborator; these lookups only
cover offline use and tests. Nothing here touches the network.
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import numpy as np
import rasterio
from rasterio.warp import transform

from climb_profiler.constants import DEMConfig

logger = logging.getLogger(__name__)


class AltitudeLookup(ABC):
    """Elevation source keyed by WGS84 coordinates."""

    @abstractmethod
    def get_elevation(self, lon: float, lat: float) -> float | None:
        """Elevation in meters, or None if unknown at this point."""


class LatitudeAltitudeLookup(AltitudeLookup):
    """Placeholder altitude model: base + |lat - reference| * factor.

    Always answers, so it doubles as the fallback for other lookups.
    """

    def __init__(
        self,
        base_m: float = DEMConfig.FALLBACK_BASE_M,
        reference_lat: float = DEMConfig.FALLBACK_REFERENCE_LAT,
        m_per_degree: float = DEMConfig.FALLBACK_M_PER_DEGREE,
    ):
        self.base_m = base_m
        self.reference_lat = reference_lat
        self.m_per_degree = m_per_degree

    def get_elevation(self, lon: float, lat: float) -> float:
        return self.base_m + abs(lat - self.reference_lat) * self.m_per_degree


class DEMAltitudeLookup(AltitudeLookup):
    """Elevation sampling from a local GeoTIFF.

    The raster is read into memory on first access; later queries are
    direct array lookups. Each instance owns its own copy, so create one
    per DEM file and share it.

    Example:
        dem = DEMAltitudeLookup(Path("data/dem.tif"))
        elevation = dem.get_elevation(lon=6.07, lat=45.09)
    """

    def __init__(self, dem_path: Optional[Path] = None):
        self._dem_path = Path(dem_path) if dem_path else DEMConfig.DEM_PATH
        self._load_lock = threading.Lock()
        self._dem_crs: Optional[str] = None
        self._dem_array: Optional[np.ndarray] = None
        self._dem_transform = None
        self._dem_nodata = None

    @property
    def dem_path(self) -> Path:
        return self._dem_path

    @property
    def is_loaded(self) -> bool:
        """Check if DEM data has been fully loaded into memory."""
        return self._dem_transform is not None

    def _ensure_loaded(self) -> None:
        """Load DEM into memory on first access (thread-safe)."""
        if self.is_loaded:
            return

        with self._load_lock:
            if self.is_loaded:
                return

            if not self._dem_path.exists():
                raise FileNotFoundError(f"DEM file not found at {self._dem_path}")

            logger.info(f"Loading DEM from {self._dem_path}...")
            start_time = time.time()

            with rasterio.open(self._dem_path) as dem:
                self._dem_crs = dem.crs.to_string() if dem.crs else "EPSG:4326"
                self._dem_array = dem.read(1)
                self._dem_nodata = dem.nodata
                # Set transform LAST - this is what is_loaded checks
                self._dem_transform = dem.transform

            elapsed = time.time() - start_time
            logger.info(f"DEM loaded in {elapsed:.2f}s (shape: {self._dem_array.shape}, CRS: {self._dem_crs})")

    def get_elevation(self, lon: float, lat: float) -> float | None:
        """Get elevation at a single point using direct array lookup.

        Args:
            lon: Longitude in decimal degrees (WGS84)
            lat: Latitude in decimal degrees (WGS84)

        Returns:
            Elevation in meters, or None if outside coverage or no-data.

        Raises:
            FileNotFoundError: If the DEM file does not exist.
        """
        self._ensure_loaded()

        if self._dem_crs != "EPSG:4326":
            xs, ys = transform("EPSG:4326", self._dem_crs, [lon], [lat])
            x, y = xs[0], ys[0]
        else:
            x, y = lon, lat

        col, row = ~self._dem_transform * (x, y)
        col, row = int(col), int(row)

        rows, cols = self._dem_array.shape
        if row < 0 or row >= rows or col < 0 or col >= cols:
            logger.debug(f"Coordinates outside DEM bounds: lon={lon}, lat={lat} (row={row}, col={col})")
            return None

        elev = self._dem_array[row, col]
        if self._dem_nodata is not None and elev == self._dem_nodata:
            logger.debug(f"No-data value at lon={lon}, lat={lat}")
            return None
        if np.isnan(elev):
            return None

        return float(elev)
