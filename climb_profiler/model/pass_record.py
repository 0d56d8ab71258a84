"""PassRecord - A mountain pass (col) as supplied by the external pass store.

The store owns persistence; this module only gives the record a typed shape.
Records arrive as plain dicts (camelCase keys, as stored) and are converted
with PassRecord.from_dict().
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from climb_profiler.errors import NotFoundError
from climb_profiler.model.elevation_point import ElevationPoint


@dataclass(frozen=True)
class PointOfInterest:
    """A point of interest along a pass.

    Attributes:
        id: Identifier within the pass
        name: Display name
        type: refuge, restaurant, hotel, panorama, monument, ...
        location: Free-text location, e.g. "Virage 7"
        description: Optional free text
    """

    id: str
    name: str
    type: str
    location: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PointOfInterest":
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            type=data.get("type", ""),
            location=data.get("location") or "",
            description=data.get("description") or "",
        )


@dataclass
class PassRecord:
    """A climb with its profile and geographic metadata.

    Attributes:
        id: Pass identifier
        name: Display name
        length: Climb length (km)
        elevation: Summit elevation (m)
        elevation_profile: Ordered profile points (may be empty if unknown)
        coordinates: (lon, lat) track, if known
        coordinates_3d: Pre-built [x, y, z] road points in scene meters, if known
        points_of_interest: POIs along the climb
        difficulty: Editorial difficulty label, if the store has one
    """

    id: str
    name: str
    length: float
    elevation: float
    elevation_profile: list[ElevationPoint] = field(default_factory=list)
    coordinates: Optional[list[tuple[float, float]]] = None
    coordinates_3d: Optional[list[tuple[float, float, float]]] = None
    points_of_interest: list[PointOfInterest] = field(default_factory=list)
    difficulty: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PassRecord":
        """Create PassRecord from a stored dict.

        Profile entries are converted point by point; ordering and length are
        checked when the profile is analyzed, so a short or unordered profile
        surfaces as InvalidProfileError at the operation that needs it.
        """
        profile = data.get("elevationProfile") or []
        coordinates = data.get("coordinates")
        coordinates_3d = data.get("coordinates3D")
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            length=float(data.get("length", 0.0)),
            elevation=float(data.get("elevation", 0.0)),
            elevation_profile=[ElevationPoint.from_pair(p) for p in profile],
            coordinates=[_lon_lat(c) for c in coordinates] if coordinates else None,
            coordinates_3d=[tuple(float(v) for v in c) for c in coordinates_3d] if coordinates_3d else None,
            points_of_interest=[PointOfInterest.from_dict(p) for p in data.get("pointsOfInterest") or []],
            difficulty=data.get("difficulty"),
        )


def _lon_lat(coord: Any) -> tuple[float, float]:
    """Accept [lon, lat] pairs or {"lon": .., "lat": ..} / {"lng": .., "lat": ..} dicts."""
    if isinstance(coord, dict):
        lon = coord.get("lon", coord.get("lng"))
        return float(lon), float(coord["lat"])
    lon, lat = coord[0], coord[1]
    return float(lon), float(lat)


class PassRepository(Protocol):
    """Read access to the external pass store."""

    def get_pass_by_id(self, pass_id: str) -> PassRecord:
        """Return the pass, raising NotFoundError if absent."""
        ...


class InMemoryPassRepository:
    """Dict-backed PassRepository for tests and offline use.

    Example:
        repo = InMemoryPassRepository([PassRecord.from_dict(raw) for raw in rows])
        record = repo.get_pass_by_id("alpe-dhuez")
    """

    def __init__(self, passes: Optional[list[PassRecord]] = None) -> None:
        self._passes: dict[str, PassRecord] = {p.id: p for p in passes or []}

    def add(self, record: PassRecord) -> None:
        self._passes[record.id] = record

    def get_pass_by_id(self, pass_id: str) -> PassRecord:
        record = self._passes.get(pass_id)
        if record is None:
            raise NotFoundError("Pass", pass_id)
        return record
