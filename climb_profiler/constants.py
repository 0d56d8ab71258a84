"""Configuration constants for Climb Profiler.

All configurable parameters are centralized here for easy tuning.

Classes:
    SegmentConfig: Profile windowing and key-section detection
    DifficultyConfig: Gradient tiers and their display colors
    ScoreConfig: Composite difficulty score weights and categories
    UCIConfig: UCI climb category rules (priority ordered)
    TerrainConfig: Heightmap synthesis parameters
    RoadConfig: Road centerline, surface and guardrail parameters
    EnvironmentConfig: Vegetation, rocks and buildings scattering
    LightingConfig: Day/night lighting presets
    EffectsConfig: Sky and post-processing parameters
    TextureConfig: Texture reference tables
    CameraConfig: Camera presets and follow mode
    RenderConfig: Rendering quality presets per device
    MarkerConfig: 3D marker icons
    DEMConfig: Local elevation model file
"""

from pathlib import Path

# Package root directory (where climb_profiler/ lives)
PACKAGE_DIR = Path(__file__).parent

# Project root directory (parent of climb_profiler/)
PROJECT_ROOT = PACKAGE_DIR.parent

# Data directory outside package (not shipped with package)
DATA_DIR = PROJECT_ROOT / "data"


class SegmentConfig:
    """Profile segmentation and key-section detection thresholds."""

    # Target window length for gradient segments (km)
    WINDOW_KM = 0.5

    # Minimum number of points for a profile
    MIN_PROFILE_POINTS = 2

    # Segments steeper than this start a key section (%)
    STEEP_GRADIENT_PCT = 8.0

    # Steep segments closer than this are merged into one section (km)
    MERGE_GAP_KM = 0.1

    # A merged group is a key section if longer than this (km) ...
    KEY_SECTION_MIN_LENGTH_KM = 1.0
    # ... or if its average gradient exceeds this (%)
    KEY_SECTION_HARD_GRADIENT_PCT = 10.0

    KEY_SECTION_LABEL_HARD = "section très difficile"
    KEY_SECTION_LABEL = "section difficile"

    # Key points with average gradient above this are flagged "high" severity
    KEY_POINT_HIGH_SEVERITY_PCT = 8.0


class DifficultyConfig:
    """Gradient difficulty tiers (inclusive upper bound per tier, %)."""

    # Ordered: a segment goes to the first tier whose bound it does not exceed
    TIER_UPPER_BOUNDS = {
        "easy": 4.0,
        "moderate": 7.0,
        "difficult": 10.0,
        "veryDifficult": 15.0,
        "extreme": float("inf"),
    }
    TIERS = list(TIER_UPPER_BOUNDS.keys())

    TIER_COLORS = {
        "easy": "#4CAF50",  # green
        "moderate": "#FFC107",  # amber
        "difficult": "#FF9800",  # orange
        "veryDifficult": "#F44336",  # red
        "extreme": "#9C27B0",  # purple
    }
    assert set(TIER_COLORS.keys()) == set(TIERS)

    TIER_LABELS = {
        "easy": "Facile",
        "moderate": "Modéré",
        "difficult": "Difficile",
        "veryDifficult": "Très difficile",
        "extreme": "Extrême",
    }
    assert set(TIER_LABELS.keys()) == set(TIERS)

    TIER_RANGES = {
        "easy": "0-4%",
        "moderate": "4-7%",
        "difficult": "7-10%",
        "veryDifficult": "10-15%",
        "extreme": ">15%",
    }
    assert set(TIER_RANGES.keys()) == set(TIERS)


# Validate tier bounds are strictly ascending (module-level assertion)
_TIER_BOUNDS = list(DifficultyConfig.TIER_UPPER_BOUNDS.values())
assert all(low < high for low, high in zip(_TIER_BOUNDS, _TIER_BOUNDS[1:])), "Tier upper bounds must be ascending"


class ScoreConfig:
    """Composite difficulty score (0-100)."""

    # Normalizers: component saturates at 1.0 beyond these
    DISTANCE_NORM_KM = 25.0
    ELEVATION_NORM_M = 2000.0
    MAX_GRADIENT_NORM_PCT = 15.0

    # Component weights (sum to 1)
    DISTANCE_WEIGHT = 0.2
    ELEVATION_WEIGHT = 0.35
    GRADIENT_WEIGHT = 0.45

    # Gradient component sub-weights
    STEEP_PCT = 7.0
    STEEP_RATIO_WEIGHT = 0.3
    VERY_STEEP_PCT = 10.0
    VERY_STEEP_RATIO_WEIGHT = 0.4
    MAX_GRADIENT_WEIGHT = 0.3

    # Score category: first entry whose (exclusive) upper bound exceeds the score
    CATEGORIES = [
        (25, "Facile"),
        (50, "Modéré"),
        (75, "Difficile"),
        (90, "Très difficile"),
    ]
    TOP_CATEGORY = "Extrême"


assert abs(ScoreConfig.DISTANCE_WEIGHT + ScoreConfig.ELEVATION_WEIGHT + ScoreConfig.GRADIENT_WEIGHT - 1.0) < 1e-9


class UCIConfig:
    """UCI climb categories.

    RULES are evaluated in order and the first match wins. The rules overlap
    (a 16 km climb at 8% satisfies HC and category 1), so order matters.
    Each rule is (category, min_length_km, min_avg_gradient_pct), both strict.
    """

    RULES = [
        ("HC", 15.0, 7.0),
        ("1", 10.0, 6.0),
        ("2", 5.0, 5.0),
        ("3", 3.0, 4.0),
    ]
    FALLBACK_CATEGORY = "4"

    DESCRIPTIONS = {
        "HC": "Hors Catégorie - Les cols les plus difficiles",
        "1": "Catégorie 1 - Cols très difficiles",
        "2": "Catégorie 2 - Cols difficiles",
        "3": "Catégorie 3 - Cols modérément difficiles",
        "4": "Catégorie 4 - Cols faciles",
    }
    assert set(DESCRIPTIONS.keys()) == {rule[0] for rule in RULES} | {FALLBACK_CATEGORY}


class TerrainConfig:
    """Heightmap synthesis parameters."""

    # Terrain footprint across the route (meters)
    PHYSICAL_WIDTH_M = 10_000.0

    # Grid cells per side
    GRID_RESOLUTION = 128

    # Vertical exaggeration hint for renderers (heights stay in meters)
    HEIGHT_SCALE = 1.5

    TEXTURE_RESOLUTION = 2048

    # Sinusoidal pseudo-noise: sampling scale and amplitude (meters)
    NOISE_SCALE = 0.1
    NOISE_AMPLITUDE_M = 300.0

    # Noise ramps to full strength at this fraction of the full width off the road
    NOISE_FULL_FRACTION = 0.3

    # Valley falloff starts at this fraction of the half-width
    VALLEY_START_FRACTION = 0.4
    # Falloff deepens by VALLEY_DEPTH_M per (VALLEY_RAMP_FRACTION * width) beyond the start
    VALLEY_RAMP_FRACTION = 0.4
    VALLEY_DEPTH_M = 200.0

    # Heights never drop more than this below the profile minimum
    FLOOR_BELOW_MIN_M = 200.0

    # Normalized height thresholds, highest first
    TERRAIN_TYPES = [
        ("rock", 0.8, "rock"),
        ("grass", 0.4, "grass"),
        ("forest", 0.3, "forest"),
        ("dirt", 0.0, "dirt"),
    ]


class RoadConfig:
    """Road geometry parameters."""

    MAX_CENTERLINE_POINTS = 500
    VERTICAL_OFFSET_M = 0.2
    WIDTH_M = 6.0

    # Passes carrying at least this many 3D coordinates use them as centerline
    MIN_PREBUILT_COORDINATES = 10

    # Guardrails on descents steeper than this (rise/run) ...
    GUARDRAIL_DESCENT_SLOPE = -0.05
    # ... on both sides when steeper than this
    GUARDRAIL_BOTH_SIDES_SLOPE = -0.1
    # ... and everywhere above this altitude (m)
    GUARDRAIL_ALTITUDE_M = 900.0
    # Mountain-type rails above this altitude (m)
    MOUNTAIN_GUARDRAIL_ALTITUDE_M = 1200.0
    GUARDRAIL_HEIGHT_M = 1.0

    DEFAULT_SURFACE = {
        "type": "asphalt",
        "quality": "good",
        "color": (0.3, 0.3, 0.3),
        "roughness": 0.2,
        "metalness": 0.0,
    }

    RENDER_OPTIONS = {
        "texture_resolution": 1024,
        "normal_mapping": True,
        "reflective": True,
        "bump_mapping": True,
    }


class EnvironmentConfig:
    """Vegetation, rocks and buildings."""

    TREELINE_M = 1800.0

    # One tree per this many meters of route, one rock per ...
    TREE_SPACING_M = 50.0
    ROCK_SPACING_M = 100.0

    # Tree species by altitude band (exclusive upper bound, meters)
    TREE_SPECIES_BANDS = [
        (800.0, "deciduous"),
        (1500.0, "coniferous"),
    ]
    TOP_TREE_SPECIES = "alpine"

    TREE_MIN_HEIGHT_M = 5.0
    TREE_HEIGHT_RANGE_M = 10.0
    TREE_MIN_WIDTH_M = 3.0
    TREE_WIDTH_RANGE_M = 5.0

    # Lateral placement as fraction of half-width: min + random * range
    TREE_LATERAL_MIN = 0.1
    TREE_LATERAL_RANGE = 0.4
    ROCK_LATERAL_MIN = 0.05
    ROCK_LATERAL_RANGE = 0.4

    # Rocks are always placed above (treeline - band), elsewhere with probability
    ROCK_HIGH_ALTITUDE_BAND_M = 300.0
    ROCK_LOW_ALTITUDE_PROBABILITY = 0.2
    ROCK_MIN_SIZE_M = 2.0
    ROCK_SIZE_RANGE_M = 8.0

    BUILDING_POI_TYPES = ("refuge", "restaurant", "hotel")
    LARGE_BUILDING_TYPES = ("hotel",)
    BUILDING_ELEVATION_OFFSET_M = 10.0
    # Buildings sit this far beside the road edge (meters)
    BUILDING_SETBACK_M = 25.0

    # Hairpin numbering ("Virage N"), counted over this many hairpins
    SWITCHBACK_PREFIX = "Virage"
    SWITCHBACK_COUNT = 21


class LightingConfig:
    """Lighting presets keyed by time of day."""

    PRESETS = {
        "day": {
            "sun_position": (100000.0, 100000.0, 100000.0),
            "sun_color": (1.0, 0.98, 0.92),
            "sun_intensity": 1.0,
            "ambient_color": (0.6, 0.7, 0.9),
            "ambient_intensity": 0.3,
            "shadows": True,
            "shadow_quality": "high",
            "fog": {"enabled": True, "color": (0.8, 0.9, 1.0), "density": 0.0005, "start": 1000.0, "end": 8000.0},
        },
        "night": {
            "sun_position": (-100000.0, -50000.0, 100000.0),
            "sun_color": (0.6, 0.65, 0.8),
            "sun_intensity": 0.15,
            "ambient_color": (0.15, 0.18, 0.3),
            "ambient_intensity": 0.2,
            "shadows": True,
            "shadow_quality": "medium",
            "fog": {"enabled": True, "color": (0.1, 0.12, 0.2), "density": 0.0008, "start": 500.0, "end": 5000.0},
        },
    }
    TIMES_OF_DAY = list(PRESETS.keys())

    # Above this altitude the air is clearer and the ambient light bluer
    HIGH_ALTITUDE_M = 2000.0
    HIGH_ALTITUDE_AMBIENT_COLOR = (0.7, 0.8, 1.0)
    HIGH_ALTITUDE_AMBIENT_INTENSITY = 0.4
    HIGH_ALTITUDE_FOG_DENSITY = 0.0003


class EffectsConfig:
    """Sky, weather and post-processing effects."""

    SKY_TYPE = "dynamic"
    HDRI_TEXTURE = "/textures/sky/mountains_hdri.hdr"
    SUN_SIZE = 0.04
    MOON_SIZE = 0.02

    # Stars are shown above this max altitude
    STARS_ALTITUDE_M = 1500.0

    CLOUD_COVERAGE = 0.3
    CLOUD_DENSITY = 0.5
    HIGH_ALTITUDE_M = 2000.0
    HIGH_ALTITUDE_CLOUD_COVERAGE = 0.2
    HIGH_ALTITUDE_CLOUD_DENSITY = 0.3
    HIGH_ALTITUDE_WIND = {"enabled": True, "strength": 0.5, "direction": (1.0, 0.0, 0.0)}

    POST_PROCESSING = {
        "bloom": {"enabled": True, "intensity": 0.2, "threshold": 0.85},
        "dof": {"enabled": True, "focus_distance": 100.0, "aperture": 0.1},
        "ssao": {"enabled": True, "intensity": 0.3, "radius": 2.0},
        "tone_mapping_enabled": True,
        "tone_mapping": "ACESFilmic",
    }


class TextureConfig:
    """Texture reference tables (paths served by the visualization client)."""

    TERRAIN_ROOT = "/textures/terrain"
    ROAD_ROOT = "/textures/road"

    TERRAIN_TILING = {
        "rock": 20,
        "grass": 30,
        "forest": 25,
        "dirt": 15,
        "snow": 20,
    }

    ROAD_TILING = {
        "asphalt": (1, 100),
        "gravel": (1, 80),
    }


class CameraConfig:
    """Camera presets, positions in meters relative to the route start."""

    DEFAULT_VIEW = "route"
    VIEWS = ("route", "panorama", "helicopter")
    INITIAL_POSITION = (0.0, 50.0, 0.0)

    START_OFFSET = (0.0, 50.0, 20.0)
    MID_HEIGHT_M = 100.0
    MID_SIDE_M = 50.0
    SUMMIT_BACKOFF_M = 100.0
    SUMMIT_HEIGHT_M = 70.0
    SUMMIT_SIDE_M = 30.0
    LOOK_AHEAD_M = 100.0

    FIELD_OF_VIEW_DEG = 45.0
    START_NAME = "Départ"
    MID_NAME = "Mi-parcours"
    SUMMIT_NAME = "Sommet"

    FOLLOW_MODE = True
    FOLLOW_HEIGHT_M = 15.0
    FOLLOW_DISTANCE_M = 30.0


class RenderConfig:
    """Rendering quality presets."""

    DEVICE_QUALITY = {
        "desktop": "high",
        "tablet": "medium",
        "mobile": "low",
    }
    DEFAULT_QUALITY = "medium"
    QUALITY_PRESETS = ("low", "medium", "high", "ultra")
    assert set(DEVICE_QUALITY.values()) | {DEFAULT_QUALITY} <= set(QUALITY_PRESETS)

    RENDER_TOGGLES = {
        "shadows": True,
        "ambient_occlusion": True,
        "reflections": True,
        "antialiasing": True,
    }
    MOBILE_DEVICE = "mobile"

    INTERACTION_SETTINGS = {
        "allow_terrain_deformation": False,
        "allow_weather_control": True,
        "allow_time_control": True,
        "allow_virtual_riding": True,
    }


class MarkerConfig:
    """3D marker icons for points of interest."""

    POI_ICONS = {
        "ravitaillement": "restaurant",
        "panorama": "photo",
        "monument": "landmark",
        "culture": "museum",
        "nature": "tree",
        "gastronomie": "food",
    }
    DEFAULT_ICON = "info"
    START_ICON = "flag-start"
    SUMMIT_ICON = "flag-finish"
    START_NAME = "Départ"
    SUMMIT_NAME = "Sommet"
    POI_ELEVATION_OFFSET_M = 10.0


class DEMConfig:
    """Local elevation model used by DEMAltitudeLookup."""

    DEM_PATH = DATA_DIR / "dem.tif"

    # Fallback altitude model: base + |lat - reference| * factor
    FALLBACK_BASE_M = 1000.0
    FALLBACK_REFERENCE_LAT = 45.0
    FALLBACK_M_PER_DEGREE = 100.0
