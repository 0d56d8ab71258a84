"""SceneDescriptor - The 3D scene handed to a rendering client.

The descriptor is pure data: terrain grid, road, environment and markers plus
the lighting, texture, effect, camera and rendering tables that go with them.
Nothing here renders.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from climb_profiler.model.environment import EnvironmentSet
from climb_profiler.model.road_geometry import RoadGeometry
from climb_profiler.model.terrain_grid import TerrainGrid

Point3D = tuple[float, float, float]


@dataclass(frozen=True)
class Marker:
    """A 3D marker: start, summit or point of interest."""

    id: str
    name: str
    position: Point3D
    type: str
    icon: str
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "position": list(self.position),
            "type": self.type,
            "icon": self.icon,
            "description": self.description,
        }


@dataclass
class SceneDescriptor:
    """Everything a client needs to render one pass in 3D.

    Attributes:
        pass_id: Source pass id
        name: Pass name
        length: Climb length (km)
        elevation: Summit elevation (m)
        terrain: Synthesized heightmap
        road: Road centerline and attachments
        environment: Trees, rocks, buildings
        markers: Start, summit and POI markers
        lighting: Lighting preset for the chosen time of day
        textures: Texture reference tables
        effects: Sky, weather and post-processing settings
        camera: Camera presets and follow mode
        interaction_settings: Client interaction toggles
        rendering_settings: Quality preset and renderer toggles
        geo_reference: bounds/center/geodesic length of the lon/lat track, if known
    """

    pass_id: str
    name: str
    length: float
    elevation: float
    terrain: TerrainGrid
    road: RoadGeometry
    environment: EnvironmentSet
    markers: list[Marker]
    lighting: dict[str, Any]
    textures: dict[str, Any]
    effects: dict[str, Any]
    camera: dict[str, Any]
    interaction_settings: dict[str, Any] = field(default_factory=dict)
    rendering_settings: dict[str, Any] = field(default_factory=dict)
    geo_reference: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.pass_id,
            "name": self.name,
            "length": self.length,
            "elevation": self.elevation,
            "terrain": self.terrain.to_dict(),
            "road": self.road.to_dict(),
            "environment": self.environment.to_dict(),
            "markers": [m.to_dict() for m in self.markers],
            "lighting": self.lighting,
            "textures": self.textures,
            "effects": self.effects,
            "camera_settings": self.camera,
            "interaction_settings": self.interaction_settings,
            "rendering_settings": self.rendering_settings,
            "geo_reference": self.geo_reference,
        }
