"""Environment objects scattered around the road.

- Tree: species by altitude band
- Rock: standard or alpine
- Building: derived from points of interest
- EnvironmentSet: everything above plus water bodies
"""

from dataclasses import asdict, dataclass, field
from typing import Any

Point3D = tuple[float, float, float]


@dataclass(frozen=True)
class Tree:
    position: Point3D
    type: str
    height: float
    width: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Rock:
    position: Point3D
    type: str
    size: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Building:
    """A building standing for a point of interest.

    Attributes:
        position: Scene position (m)
        type: POI type (refuge, restaurant, hotel)
        name: POI name
        size: "small" or "large"
    """

    position: Point3D
    type: str
    name: str
    size: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class EnvironmentSet:
    trees: list[Tree] = field(default_factory=list)
    rocks: list[Rock] = field(default_factory=list)
    buildings: list[Building] = field(default_factory=list)
    water_bodies: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "trees": [t.to_dict() for t in self.trees],
            "rocks": [r.to_dict() for r in self.rocks],
            "buildings": [b.to_dict() for b in self.buildings],
            "water_bodies": list(self.water_bodies),
        }
