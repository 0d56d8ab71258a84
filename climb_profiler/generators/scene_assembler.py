"""Scene assembly: lighting, effects, textures, camera, markers, rendering.

Pure composition over the constants tables, adjusted by a few altitude and
device thresholds:
- max altitude above LightingConfig.HIGH_ALTITUDE_M: bluer ambient light, thinner fog
- max altitude above EffectsConfig.STARS_ALTITUDE_M: stars in the sky
- max altitude above EffectsConfig.HIGH_ALTITUDE_M: fewer clouds, wind
- device: rendering quality preset
"""

import copy
import logging
import random
from typing import Any, Optional, Sequence

from climb_profiler.constants import (
    CameraConfig,
    EffectsConfig,
    LightingConfig,
    MarkerConfig,
    RenderConfig,
    TextureConfig,
)
from climb_profiler.generators.environment_populator import poi_route_fraction, profile_elevation_at
from climb_profiler.model.elevation_point import ElevationPoint
from climb_profiler.model.environment import EnvironmentSet
from climb_profiler.model.pass_record import PointOfInterest
from climb_profiler.model.road_geometry import RoadGeometry
from climb_profiler.model.scene import Marker, SceneDescriptor
from climb_profiler.model.terrain_grid import TerrainGrid

logger = logging.getLogger(__name__)


class SceneAssembler:
    """Composes synthesized geometry and presets into a SceneDescriptor."""

    @staticmethod
    def lighting(max_altitude: float, time_of_day: str = "day") -> dict[str, Any]:
        """Lighting preset for the time of day, adjusted for altitude.

        Raises:
            ValueError: If time_of_day is not a known preset.
        """
        if time_of_day not in LightingConfig.PRESETS:
            raise ValueError(f"Unknown time of day '{time_of_day}', expected one of {LightingConfig.TIMES_OF_DAY}")

        lighting = copy.deepcopy(LightingConfig.PRESETS[time_of_day])
        lighting["time_of_day"] = time_of_day
        if max_altitude > LightingConfig.HIGH_ALTITUDE_M:
            lighting["ambient_color"] = LightingConfig.HIGH_ALTITUDE_AMBIENT_COLOR
            lighting["ambient_intensity"] = LightingConfig.HIGH_ALTITUDE_AMBIENT_INTENSITY
            lighting["fog"]["density"] = LightingConfig.HIGH_ALTITUDE_FOG_DENSITY
        return lighting

    @staticmethod
    def effects(max_altitude: float) -> dict[str, Any]:
        """Sky and post-processing settings for the pass altitude."""
        high = max_altitude > EffectsConfig.HIGH_ALTITUDE_M
        effects: dict[str, Any] = {
            "sky": {
                "type": EffectsConfig.SKY_TYPE,
                "hdri_texture": EffectsConfig.HDRI_TEXTURE,
                "sun_size": EffectsConfig.SUN_SIZE,
                "moon_size": EffectsConfig.MOON_SIZE,
                "stars": max_altitude > EffectsConfig.STARS_ALTITUDE_M,
                "cloud_coverage": EffectsConfig.HIGH_ALTITUDE_CLOUD_COVERAGE if high else EffectsConfig.CLOUD_COVERAGE,
                "cloud_density": EffectsConfig.HIGH_ALTITUDE_CLOUD_DENSITY if high else EffectsConfig.CLOUD_DENSITY,
            },
            "post_processing": copy.deepcopy(EffectsConfig.POST_PROCESSING),
        }
        if high:
            effects["wind"] = dict(EffectsConfig.HIGH_ALTITUDE_WIND)
        return effects

    @staticmethod
    def textures() -> dict[str, Any]:
        """Texture reference tables for terrain and road materials."""

        def material(root: str, name: str, tiling: Any) -> dict[str, Any]:
            return {
                "diffuse": f"{root}/{name}_diffuse.jpg",
                "normal": f"{root}/{name}_normal.jpg",
                "roughness": f"{root}/{name}_roughness.jpg",
                "tiling": tiling,
            }

        terrain_root, road_root = TextureConfig.TERRAIN_ROOT, TextureConfig.ROAD_ROOT
        return {
            "terrain": {
                "base_textures": {
                    name: material(terrain_root, name, tiling) for name, tiling in TextureConfig.TERRAIN_TILING.items()
                },
                "blend_map": f"{terrain_root}/blend_map.png",
                "ao_map": f"{terrain_root}/ao_map.png",
            },
            "road": {
                **{name: material(road_root, name, tiling) for name, tiling in TextureConfig.ROAD_TILING.items()},
                "markings": f"{road_root}/road_markings.png",
            },
        }

    @staticmethod
    def camera(physical_length: float) -> dict[str, Any]:
        """Camera presets at start, mid-route and summit plus follow mode."""
        mid_x = physical_length / 2
        summit_x = physical_length - CameraConfig.SUMMIT_BACKOFF_M
        return {
            "default_view": CameraConfig.DEFAULT_VIEW,
            "views": list(CameraConfig.VIEWS),
            "initial_position": CameraConfig.INITIAL_POSITION,
            "field_of_view": CameraConfig.FIELD_OF_VIEW_DEG,
            "preset_views": [
                {
                    "name": CameraConfig.START_NAME,
                    "position": CameraConfig.START_OFFSET,
                    "look_at": (CameraConfig.LOOK_AHEAD_M, 0.0, 0.0),
                },
                {
                    "name": CameraConfig.MID_NAME,
                    "position": (mid_x, CameraConfig.MID_HEIGHT_M, CameraConfig.MID_SIDE_M),
                    "look_at": (mid_x + CameraConfig.LOOK_AHEAD_M, 0.0, 0.0),
                },
                {
                    "name": CameraConfig.SUMMIT_NAME,
                    "position": (summit_x, CameraConfig.SUMMIT_HEIGHT_M, CameraConfig.SUMMIT_SIDE_M),
                    "look_at": (physical_length, 0.0, 0.0),
                },
            ],
            "follow_mode": CameraConfig.FOLLOW_MODE,
            "follow_height": CameraConfig.FOLLOW_HEIGHT_M,
            "follow_distance": CameraConfig.FOLLOW_DISTANCE_M,
        }

    @staticmethod
    def rendering_settings(device: Optional[str] = None) -> dict[str, Any]:
        """Renderer toggles and quality preset for the client device."""
        quality = RenderConfig.DEVICE_QUALITY.get(device, RenderConfig.DEFAULT_QUALITY)
        return {
            **RenderConfig.RENDER_TOGGLES,
            "quality_preset": quality,
            "optimized_for_mobile": device == RenderConfig.MOBILE_DEVICE,
        }

    @staticmethod
    def icon_for_poi_type(poi_type: str) -> str:
        return MarkerConfig.POI_ICONS.get(poi_type, MarkerConfig.DEFAULT_ICON)

    @staticmethod
    def markers(
        profile: Sequence[ElevationPoint],
        physical_length: float,
        points_of_interest: Sequence[PointOfInterest],
        rng: random.Random,
    ) -> list[Marker]:
        """Start, summit and one marker per point of interest.

        POIs are placed on the road at their switchback position, or at a
        draw from rng when the location names no switchback.
        """
        markers = [
            Marker(
                id="start",
                name=MarkerConfig.START_NAME,
                position=(0.0, profile[0].elevation_m, 0.0),
                type="start",
                icon=MarkerConfig.START_ICON,
            ),
            Marker(
                id="summit",
                name=MarkerConfig.SUMMIT_NAME,
                position=(physical_length, profile[-1].elevation_m, 0.0),
                type="summit",
                icon=MarkerConfig.SUMMIT_ICON,
            ),
        ]
        for poi in points_of_interest:
            fraction = poi_route_fraction(poi, rng)
            elevation = profile_elevation_at(profile, fraction) + MarkerConfig.POI_ELEVATION_OFFSET_M
            markers.append(
                Marker(
                    id=f"poi-{poi.id}",
                    name=poi.name,
                    position=(fraction * physical_length, elevation, 0.0),
                    type=poi.type,
                    icon=SceneAssembler.icon_for_poi_type(poi.type),
                    description=poi.description,
                )
            )
        return markers

    @staticmethod
    def assemble(
        pass_id: str,
        name: str,
        length: float,
        elevation: float,
        terrain: TerrainGrid,
        road: RoadGeometry,
        environment: EnvironmentSet,
        markers: list[Marker],
        time_of_day: str = "day",
        device: Optional[str] = None,
        geo_reference: Optional[dict[str, Any]] = None,
    ) -> SceneDescriptor:
        """Compose the final SceneDescriptor.

        Altitude-dependent presets key off the terrain's profile maximum.
        """
        max_altitude = terrain.max_elevation
        scene = SceneDescriptor(
            pass_id=pass_id,
            name=name,
            length=length,
            elevation=elevation,
            terrain=terrain,
            road=road,
            environment=environment,
            markers=markers,
            lighting=SceneAssembler.lighting(max_altitude=max_altitude, time_of_day=time_of_day),
            textures=SceneAssembler.textures(),
            effects=SceneAssembler.effects(max_altitude=max_altitude),
            camera=SceneAssembler.camera(physical_length=terrain.physical_length),
            interaction_settings=dict(RenderConfig.INTERACTION_SETTINGS),
            rendering_settings=SceneAssembler.rendering_settings(device=device),
            geo_reference=geo_reference,
        )
        quality = scene.rendering_settings["quality_preset"]
        logger.debug(f"Assembled scene for {pass_id} ({time_of_day}, quality {quality})")
        return scene
