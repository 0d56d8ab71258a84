"""Pass-level entry points: 2D color visualization, 3D scene, comparison.

PassVisualizer reads passes from a PassRepository (the external store) and
runs the analysis and synthesis pipelines:

    analyze -> color visualization
    validate geodata -> terrain -> road -> environment -> markers -> scene

Errors from the repository (NotFoundError) propagate unchanged.
"""

import logging
import random
from typing import Optional

from climb_profiler.constants import DifficultyConfig, LightingConfig, SegmentConfig
from climb_profiler.core.altitude_lookup import AltitudeLookup
from climb_profiler.core.geo_calculator import GeoCalculator
from climb_profiler.core.profile_analyzer import ProfileAnalyzer
from climb_profiler.core.profile_builder import ProfileBuilder
from climb_profiler.errors import InvalidProfileError, MissingGeodataError
from climb_profiler.generators.environment_populator import EnvironmentPopulator, seed_for_pass
from climb_profiler.generators.pass_comparator import PassComparator
from climb_profiler.generators.road_geometry_builder import RoadGeometryBuilder
from climb_profiler.generators.scene_assembler import SceneAssembler
from climb_profiler.generators.terrain_synthesizer import TerrainSynthesizer
from climb_profiler.model.elevation_point import ElevationPoint, validate_profile
from climb_profiler.model.pass_record import PassRecord, PassRepository
from climb_profiler.model.profile_analysis import ProfileAnalysis
from climb_profiler.model.scene import SceneDescriptor
from climb_profiler.model.terrain_grid import TerrainParams
from climb_profiler.model.visualization import (
    ColorSegmentedVisualization,
    KeyPoint,
    PassComparison,
    VisualizationSummary,
)

logger = logging.getLogger(__name__)


class PassVisualizer:
    """Builds visualizations for passes held in a repository.

    Example:
        visualizer = PassVisualizer(repository=InMemoryPassRepository(passes))
        chart = visualizer.generate_pass_visualization("alpe-dhuez")
        scene = visualizer.generate_3d_pass_visualization("alpe-dhuez", device="mobile")
    """

    def __init__(
        self,
        repository: PassRepository,
        analyzer: Optional[ProfileAnalyzer] = None,
        synthesizer: Optional[TerrainSynthesizer] = None,
        road_builder: Optional[RoadGeometryBuilder] = None,
        comparator: Optional[PassComparator] = None,
        altitude_lookup: Optional[AltitudeLookup] = None,
    ):
        """Initialize with the pass store and optional pipeline components.

        Args:
            repository: Source of PassRecords
            analyzer: Profile analyzer (default settings if not provided)
            synthesizer: Terrain synthesizer
            road_builder: Road geometry builder
            comparator: Pass comparator
            altitude_lookup: Elevation source for passes that only carry coordinates
        """
        self._repository = repository
        self._analyzer = analyzer or ProfileAnalyzer()
        self._synthesizer = synthesizer or TerrainSynthesizer()
        self._road_builder = road_builder or RoadGeometryBuilder()
        self._comparator = comparator or PassComparator()
        self._altitude_lookup = altitude_lookup

    # =========================================================================
    # 2D VISUALIZATION
    # =========================================================================

    def generate_pass_visualization(self, pass_id: str) -> ColorSegmentedVisualization:
        """Difficulty-colored profile of a pass.

        Raises:
            NotFoundError: If the pass does not exist.
            InvalidProfileError: If the pass has no valid elevation profile.
        """
        record = self._repository.get_pass_by_id(pass_id)
        analysis = self._analyzer.analyze(record.elevation_profile)
        visualization = self._color_visualization(record=record, analysis=analysis)
        logger.info(f"Generated color visualization for {pass_id} ({len(analysis.segments)} segments)")
        return visualization

    def _color_visualization(self, record: PassRecord, analysis: ProfileAnalysis) -> ColorSegmentedVisualization:
        profile = validate_profile(record.elevation_profile)
        summary = analysis.summary

        key_points = [KeyPoint(name="Départ", type="start", distance=0.0, elevation=profile[0].elevation_m)]
        for section in analysis.key_segments:
            severity = "high" if section.avg_gradient > SegmentConfig.KEY_POINT_HIGH_SEVERITY_PCT else "medium"
            key_points.append(
                KeyPoint(
                    name=f"Section {section.type}",
                    type="key_segment",
                    distance_start=section.start_distance,
                    distance_end=section.end_distance,
                    length=section.length,
                    gradient=section.avg_gradient,
                    severity=severity,
                )
            )
        key_points.append(
            KeyPoint(name="Sommet", type="summit", distance=record.length, elevation=profile[-1].elevation_m)
        )

        color_scale = [
            {
                "gradient": DifficultyConfig.TIER_RANGES[tier],
                "color": DifficultyConfig.TIER_COLORS[tier],
                "difficulty": DifficultyConfig.TIER_LABELS[tier],
            }
            for tier in DifficultyConfig.TIERS
        ]

        return ColorSegmentedVisualization(
            id=record.id,
            name=record.name,
            length=record.length,
            elevation=record.elevation,
            difficulty=record.difficulty or analysis.difficulty_score.category,
            elevation_profile=profile,
            segments_by_difficulty=list(analysis.segments_by_difficulty.values()),
            key_points=key_points,
            color_scale=color_scale,
            summary=VisualizationSummary(
                max_gradient=summary.max_gradient,
                average_gradient=summary.average_gradient,
                max_gradient_location=summary.max_gradient_location,
                elevation_gain=summary.total_elevation_gain,
            ),
        )

    # =========================================================================
    # 3D SCENE
    # =========================================================================

    def generate_3d_pass_visualization(
        self,
        pass_id: str,
        device: Optional[str] = None,
        time_of_day: str = "day",
        seed: Optional[int] = None,
        terrain_params: Optional[TerrainParams] = None,
    ) -> SceneDescriptor:
        """3D scene descriptor of a pass.

        Args:
            pass_id: Pass to render
            device: desktop, tablet or mobile (selects the quality preset)
            time_of_day: Lighting preset ("day" or "night")
            seed: Environment seed (derived from pass_id if not given)
            terrain_params: Grid settings (defaults from the pass length)

        Raises:
            NotFoundError: If the pass does not exist.
            MissingGeodataError: If the pass has neither coordinates nor 3D coordinates.
            InvalidProfileError: If no valid elevation profile is available.
            ValueError: If time_of_day is unknown.
        """
        if time_of_day not in LightingConfig.PRESETS:
            raise ValueError(f"Unknown time of day '{time_of_day}', expected one of {LightingConfig.TIMES_OF_DAY}")

        record = self._repository.get_pass_by_id(pass_id)
        if not record.coordinates and not record.coordinates_3d:
            raise MissingGeodataError(f"Pass '{pass_id}' has no coordinates for 3D synthesis")

        profile = self._profile_for_scene(record)
        physical_length_km = record.length if record.length > 0 else profile[-1].distance_km - profile[0].distance_km
        params = terrain_params or TerrainParams.for_length_km(physical_length_km)

        terrain = self._synthesizer.synthesize(profile, params)
        road = self._road_builder.build(
            profile=profile,
            physical_length=params.physical_length,
            prebuilt_centerline=record.coordinates_3d,
        )

        seed = seed_for_pass(record.id) if seed is None else seed
        environment = EnvironmentPopulator(seed=seed).populate(
            grid=terrain,
            profile=profile,
            points_of_interest=record.points_of_interest,
        )
        # Marker placement draws from its own stream so it does not shift with environment size
        markers = SceneAssembler.markers(
            profile=profile,
            physical_length=params.physical_length,
            points_of_interest=record.points_of_interest,
            rng=random.Random(seed + 1),
        )

        geo_reference = None
        if record.coordinates and len(record.coordinates) >= 2:
            geo_reference = GeoCalculator.geo_reference(record.coordinates, corridor_width_m=params.physical_width)

        scene = SceneAssembler.assemble(
            pass_id=record.id,
            name=record.name,
            length=record.length,
            elevation=record.elevation,
            terrain=terrain,
            road=road,
            environment=environment,
            markers=markers,
            time_of_day=time_of_day,
            device=device,
            geo_reference=geo_reference,
        )
        logger.info(f"Generated 3D scene for {pass_id} (seed {seed}, device {device or 'default'})")
        return scene

    def _profile_for_scene(self, record: PassRecord) -> list[ElevationPoint]:
        """The pass profile, or one built from its coordinates when it has none."""
        if record.elevation_profile:
            return validate_profile(record.elevation_profile)
        if record.coordinates:
            logger.info(f"Pass {record.id} has no elevation profile, building one from its coordinates")
            return ProfileBuilder.from_coordinates(record.coordinates, altitude_lookup=self._altitude_lookup)
        raise InvalidProfileError(f"Pass '{record.id}' has no elevation profile")

    # =========================================================================
    # COMPARISON
    # =========================================================================

    def compare_passes(self, pass_id1: str, pass_id2: str) -> PassComparison:
        """Compare two passes; the second one is the reference.

        Raises:
            NotFoundError: If either pass does not exist.
            InvalidProfileError: If either pass has no valid profile.
        """
        return self._comparator.compare(
            self.generate_pass_visualization(pass_id1),
            self.generate_pass_visualization(pass_id2),
        )
