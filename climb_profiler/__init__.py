"""Climb Profiler - Analyze road climbs and synthesize 3D pass scenes.

Turns a climb's elevation profile into difficulty metrics (gradient
segments, key sections, difficulty tiers, a 0-100 score, UCI category) and
into a procedural 3D scene descriptor for visualization clients.

Modules:
    core: Profile analysis, geodesic helpers, altitude lookups
    model: Data structures (ElevationPoint, Segment, TerrainGrid, SceneDescriptor, ...)
    generators: Terrain, road, environment and scene synthesis; pass-level entry points

Example:
    from climb_profiler.core import analyze_profile
    from climb_profiler.generators import PassVisualizer
    from climb_profiler.model import InMemoryPassRepository, PassRecord
"""
