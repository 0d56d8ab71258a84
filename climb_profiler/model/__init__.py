"""Data model classes for climb profiles and 3D pass scenes.

Profile side:
- ElevationPoint: Profile atom (distance km, elevation m)
- Segment / KeySegment: Gradient windows and merged steep sections
- DifficultyBucket, DifficultyScore, UCICategoryResult: Classification results
- ProfileSummary / ProfileAnalysis: Complete profile analysis
- ColorSegmentedVisualization / PassComparison: 2D visualization records

Scene side:
- TerrainParams / TerrainGrid: Heightmap around the route
- RoadGeometry, SurfaceSegment, Guardrail: Road records
- Tree, Rock, Building, EnvironmentSet: Scattered objects
- Marker / SceneDescriptor: The 3D scene handed to renderers

Input:
- PassRecord / PointOfInterest: Pass data from the external store
"""

from climb_profiler.model.difficulty import (
    DifficultyBucket,
    DifficultyScore,
    ScoreComponents,
    UCICategoryResult,
)
from climb_profiler.model.elevation_point import ElevationPoint, validate_profile
from climb_profiler.model.environment import Building, EnvironmentSet, Rock, Tree
from climb_profiler.model.pass_record import (
    InMemoryPassRepository,
    PassRecord,
    PassRepository,
    PointOfInterest,
)
from climb_profiler.model.profile_analysis import ProfileAnalysis, ProfileSummary
from climb_profiler.model.road_geometry import Guardrail, RoadGeometry, SurfaceSegment
from climb_profiler.model.scene import Marker, SceneDescriptor
from climb_profiler.model.segment import KeySegment, Segment
from climb_profiler.model.terrain_grid import TerrainGrid, TerrainParams
from climb_profiler.model.visualization import (
    ColorSegmentedVisualization,
    KeyPoint,
    MetricComparison,
    PassComparison,
    TierComparison,
    VisualizationSummary,
)

__all__ = [
    "ElevationPoint",
    "validate_profile",
    "Segment",
    "KeySegment",
    "DifficultyBucket",
    "DifficultyScore",
    "ScoreComponents",
    "UCICategoryResult",
    "ProfileSummary",
    "ProfileAnalysis",
    "KeyPoint",
    "VisualizationSummary",
    "ColorSegmentedVisualization",
    "MetricComparison",
    "TierComparison",
    "PassComparison",
    "TerrainParams",
    "TerrainGrid",
    "SurfaceSegment",
    "Guardrail",
    "RoadGeometry",
    "Tree",
    "Rock",
    "Building",
    "EnvironmentSet",
    "Marker",
    "SceneDescriptor",
    "PointOfInterest",
    "PassRecord",
    "PassRepository",
    "InMemoryPassRepository",
]
