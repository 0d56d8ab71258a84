"""Scene synthesis and pass-level visualization.

- TerrainSynthesizer: Deterministic heightmap around the route
- RoadGeometryBuilder: Centerline, surface and guardrails
- EnvironmentPopulator: Seeded trees, rocks and buildings
- SceneAssembler: Lighting, effects, textures, camera and markers
- PassComparator: Side-by-side comparison of two passes
- PassVisualizer: Entry points working on pass ids
"""

from climb_profiler.generators.environment_populator import EnvironmentPopulator, seed_for_pass
from climb_profiler.generators.pass_comparator import PassComparator
from climb_profiler.generators.pass_visualizer import PassVisualizer
from climb_profiler.generators.road_geometry_builder import RoadGeometryBuilder
from climb_profiler.generators.scene_assembler import SceneAssembler
from climb_profiler.generators.terrain_synthesizer import TerrainSynthesizer

__all__ = [
    "TerrainSynthesizer",
    "RoadGeometryBuilder",
    "EnvironmentPopulator",
    "seed_for_pass",
    "SceneAssembler",
    "PassComparator",
    "PassVisualizer",
]
