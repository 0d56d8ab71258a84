"""Tests for climb_profiler core functionality.

Tests: ProfileSegmenter, KeySegmentDetector, DifficultyClassifier, ScoreEngine,
ProfileAnalyzer, GeoCalculator, altitude lookups, ProfileBuilder
Focus: Hand-checked values on the sample profile, boundary cases of the tier
and category tables, and property-based checks of segmentation.

Note: Fixtures are defined in conftest.py (sample profiles, MockAltitudeLookup).
"""

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import pytest
import rasterio
from hypothesis import given, settings, strategies as st
from pyproj import Transformer
from rasterio.transform import from_origin

from climb_profiler.core.altitude_lookup import DEMAltitudeLookup, LatitudeAltitudeLookup
from climb_profiler.core.difficulty_classifier import DifficultyClassifier
from climb_profiler.core.geo_calculator import GeoCalculator
from climb_profiler.core.key_segment_detector import KeySegmentDetector
from climb_profiler.core.profile_analyzer import ProfileAnalyzer, analyze_profile
from climb_profiler.core.profile_builder import ProfileBuilder
from climb_profiler.core.profile_segmenter import ProfileSegmenter
from climb_profiler.core.score_engine import ScoreEngine, round_half_up, round_tenth_half_up
from climb_profiler.errors import InvalidProfileError, MissingGeodataError
from climb_profiler.model.elevation_point import ElevationPoint
from climb_profiler.model.segment import Segment

if TYPE_CHECKING:
    from conftest import MockAltitudeLookup


def _write_dem(path: Path, data: np.ndarray, crs: str, transform, nodata: float | None = None) -> Path:
    """Write a single-band float32 GeoTIFF."""
    with rasterio.open(
        path,
        "w",
        driver="GTiff",
        height=data.shape[0],
        width=data.shape[1],
        count=1,
        dtype="float32",
        crs=crs,
        transform=transform,
        nodata=nodata,
    ) as dst:
        dst.write(data.astype(np.float32), 1)
    return path


@pytest.fixture
def geographic_dem(tmp_path: Path) -> Path:
    """10x10 EPSG:4326 DEM of 0.1° cells from (6.0 E, 46.0 N), value row * 10 + col.

    Cell (5, 5) is nodata (-9999), cell (6, 6) is NaN.
    """
    data = np.arange(100, dtype=np.float32).reshape(10, 10)
    data[5, 5] = -9999.0
    data[6, 6] = np.nan
    return _write_dem(
        tmp_path / "dem.tif", data, crs="EPSG:4326", transform=from_origin(6.0, 46.0, 0.1, 0.1), nodata=-9999.0
    )


def _segment(start: float, end: float, start_elev: float, end_elev: float) -> Segment:
    """Segment with the gradient the segmenter would compute."""
    return Segment(
        start_distance=start,
        end_distance=end,
        length=end - start,
        start_elevation=start_elev,
        end_elevation=end_elev,
        gradient_pct=round_tenth_half_up((end_elev - start_elev) / (end - start) / 10.0),
    )


@st.composite
def profiles(draw: st.DrawFn) -> list[ElevationPoint]:
    """Random valid profiles: 2-60 points, positive steps up to 2 km."""
    steps = draw(st.lists(st.floats(min_value=0.01, max_value=2.0), min_size=1, max_size=59))
    elevations = draw(
        st.lists(st.floats(min_value=0.0, max_value=4000.0), min_size=len(steps) + 1, max_size=len(steps) + 1)
    )
    distances = [0.0]
    for step in steps:
        distances.append(distances[-1] + step)
    return [ElevationPoint(distance_km=d, elevation_m=e) for d, e in zip(distances, elevations)]


# =============================================================================
# SEGMENTATION
# =============================================================================


class TestProfileSegmenter:
    """ProfileSegmenter - fixed-length gradient windows."""

    def test_sample_profile(self, sample_profile: list[ElevationPoint]) -> None:
        """Points 1 km apart each close a window: 10%, 20%, 10%."""
        segments = ProfileSegmenter().segment(sample_profile)
        assert [s.gradient_pct for s in segments] == [10.0, 20.0, 10.0]
        assert [(s.start_distance, s.end_distance) for s in segments] == [(0.0, 1.0), (1.0, 2.0), (2.0, 5.0)]
        assert segments[2].length == 3.0

    def test_dense_profile_windows(self, dense_profile: list[ElevationPoint]) -> None:
        """100 m sampling with 0.5 km windows: 20 windows of 5 points each."""
        segments = ProfileSegmenter().segment(dense_profile)
        assert len(segments) == 20
        assert all(s.length == pytest.approx(0.5) for s in segments)
        assert segments[0].gradient_pct == 7.0
        assert segments[8].gradient_pct == 12.0

    def test_short_final_window(self) -> None:
        """The last window ends at the last point even if shorter than the window."""
        segments = ProfileSegmenter().segment([ElevationPoint(0.0, 100.0), ElevationPoint(0.2, 110.0)])
        assert len(segments) == 1
        assert segments[0].length == pytest.approx(0.2)
        assert segments[0].gradient_pct == 5.0

    def test_descent_is_negative(self) -> None:
        segments = ProfileSegmenter().segment([ElevationPoint(0.0, 1200.0), ElevationPoint(1.0, 1150.0)])
        assert segments[0].gradient_pct == -5.0

    def test_invalid_window(self) -> None:
        with pytest.raises(ValueError):
            ProfileSegmenter(window_km=0.0)

    def test_gradient_halves_round_up(self) -> None:
        """61.25 m over 0.5 km is exactly 12.25%."""
        climb = ProfileSegmenter().segment([ElevationPoint(0.0, 1000.0), ElevationPoint(0.5, 1061.25)])
        descent = ProfileSegmenter().segment([ElevationPoint(0.0, 1061.25), ElevationPoint(0.5, 1000.0)])
        assert climb[0].gradient_pct == 12.3
        assert descent[0].gradient_pct == -12.3

    def test_elevation_gain_ignores_descents(self) -> None:
        points = [ElevationPoint(0, 1000), ElevationPoint(1, 1100), ElevationPoint(2, 1050), ElevationPoint(3, 1200)]
        assert ProfileSegmenter.elevation_gain(points) == 250.0

    @given(profile=profiles())
    @settings(max_examples=60, deadline=None)
    def test_segments_tile_profile(self, profile: list[ElevationPoint]) -> None:
        """Segments are contiguous and span the profile from first to last point."""
        segments = ProfileSegmenter().segment(profile)
        assert segments
        assert segments[0].start_distance == profile[0].distance_km
        assert segments[-1].end_distance == profile[-1].distance_km
        for prev, curr in zip(segments, segments[1:]):
            assert prev.end_distance == curr.start_distance
        total = profile[-1].distance_km - profile[0].distance_km
        assert sum(s.length for s in segments) == pytest.approx(total)


# =============================================================================
# KEY SECTIONS
# =============================================================================


class TestKeySegmentDetector:
    """KeySegmentDetector - merging steep segments into key sections."""

    def test_long_contiguous_section(self, sample_profile: list[ElevationPoint]) -> None:
        """All three sample segments are steep and touch: one 5 km section at 12%."""
        sections = KeySegmentDetector().detect(ProfileSegmenter().segment(sample_profile))
        assert len(sections) == 1
        section = sections[0]
        assert (section.start_distance, section.end_distance) == (0.0, 5.0)
        assert section.length == 5.0
        assert section.avg_gradient == 12.0
        assert section.max_gradient == 20.0
        assert section.elevation_gain == 600.0
        assert section.type == "section très difficile"

    def test_short_hard_section(self, dense_profile: list[ElevationPoint]) -> None:
        """The 1 km ramp at 12% is not longer than 1 km but hard enough."""
        sections = KeySegmentDetector().detect(ProfileSegmenter().segment(dense_profile))
        assert len(sections) == 1
        assert (sections[0].start_distance, sections[0].end_distance) == pytest.approx((4.0, 5.0))
        assert sections[0].avg_gradient == 12.0

    def test_long_moderate_section_label(self) -> None:
        """Longer than 1 km at 9%: a key section, but not a very hard one."""
        segments = [_segment(0.0, 0.5, 1000, 1045), _segment(0.5, 1.0, 1045, 1090), _segment(1.0, 1.5, 1090, 1135)]
        sections = KeySegmentDetector().detect(segments)
        assert len(sections) == 1
        assert sections[0].avg_gradient == 9.0
        assert sections[0].type == "section difficile"

    def test_average_gradient_half_rounds_up(self) -> None:
        """122.5 m over 1 km averages exactly 12.25%."""
        segments = [_segment(0.0, 0.5, 1000, 1061.25), _segment(0.5, 1.0, 1061.25, 1122.5)]
        sections = KeySegmentDetector().detect(segments)
        assert sections[0].avg_gradient == 12.3
        assert sections[0].max_gradient == 12.3

    def test_short_moderate_group_dropped(self) -> None:
        """Half a kilometer at 9% is neither long nor hard."""
        assert KeySegmentDetector().detect([_segment(0.0, 0.5, 1000, 1045)]) == []

    def test_gap_splits_groups(self) -> None:
        """A flat segment between two steep runs breaks the group."""
        segments = [
            _segment(0.0, 0.5, 1000, 1060),
            _segment(0.5, 1.0, 1060, 1065),
            _segment(1.0, 1.5, 1065, 1125),
        ]
        sections = KeySegmentDetector().detect(segments)
        assert [(s.start_distance, s.end_distance) for s in sections] == [(0.0, 0.5), (1.0, 1.5)]

    def test_no_steep_segments(self) -> None:
        assert KeySegmentDetector().detect([_segment(0.0, 1.0, 1000, 1050)]) == []

    def test_build_section_empty_group(self) -> None:
        assert KeySegmentDetector.build_section([]) is None


# =============================================================================
# DIFFICULTY TIERS
# =============================================================================


class TestDifficultyClassifier:
    """DifficultyClassifier - tier boundaries are inclusive upper bounds."""

    @pytest.mark.parametrize(
        "gradient, tier",
        [
            (-8.0, "easy"),
            (0.0, "easy"),
            (4.0, "easy"),
            (4.1, "moderate"),
            (7.0, "moderate"),
            (7.1, "difficult"),
            (10.0, "difficult"),
            (10.1, "veryDifficult"),
            (15.0, "veryDifficult"),
            (15.1, "extreme"),
            (30.0, "extreme"),
        ],
    )
    def test_classify_gradient(self, gradient: float, tier: str) -> None:
        assert DifficultyClassifier.classify_gradient(gradient) == tier

    def test_tier_color(self) -> None:
        assert DifficultyClassifier.get_tier_color(2.0) == "#4CAF50"
        assert DifficultyClassifier.get_tier_color(20.0) == "#9C27B0"

    def test_bucket_sample_profile(self, sample_profile: list[ElevationPoint]) -> None:
        """Two difficult (10%) segments and one extreme (20%); percentages count segments."""
        buckets = DifficultyClassifier.bucket(ProfileSegmenter().segment(sample_profile))
        assert list(buckets.keys()) == ["easy", "moderate", "difficult", "veryDifficult", "extreme"]
        assert buckets["difficult"].count == 2
        assert buckets["difficult"].total_length == 4.0
        assert buckets["difficult"].percentage == pytest.approx(200 / 3)
        assert buckets["extreme"].percentage == pytest.approx(100 / 3)
        assert buckets["easy"].count == 0
        assert buckets["easy"].percentage == 0.0

    def test_bucket_no_segments(self) -> None:
        buckets = DifficultyClassifier.bucket([])
        assert all(b.percentage == 0.0 for b in buckets.values())

    @given(profile=profiles())
    @settings(max_examples=40, deadline=None)
    def test_buckets_partition_segments(self, profile: list[ElevationPoint]) -> None:
        """Every segment lands in exactly one tier; lengths add up to the profile."""
        segments = ProfileSegmenter().segment(profile)
        buckets = DifficultyClassifier.bucket(segments)
        assert sum(b.count for b in buckets.values()) == len(segments)
        assert sum(b.total_length for b in buckets.values()) == pytest.approx(sum(s.length for s in segments))
        assert sum(b.percentage for b in buckets.values()) == pytest.approx(100.0)


# =============================================================================
# SCORE AND UCI CATEGORY
# =============================================================================


class TestScoreEngine:
    """ScoreEngine - composite score and UCI category tables."""

    @pytest.mark.parametrize(
        "score, category",
        [
            (0, "Facile"),
            (24, "Facile"),
            (25, "Modéré"),
            (49, "Modéré"),
            (50, "Difficile"),
            (74, "Difficile"),
            (75, "Très difficile"),
            (89, "Très difficile"),
            (90, "Extrême"),
            (100, "Extrême"),
        ],
    )
    def test_score_category(self, score: int, category: str) -> None:
        assert ScoreEngine.score_category(score) == category

    @pytest.mark.parametrize(
        "length_km, gradient, category",
        [
            (16.0, 8.0, "HC"),
            (15.0, 8.0, "1"),
            (11.0, 6.5, "1"),
            (6.0, 5.5, "2"),
            (4.0, 4.5, "3"),
            (3.0, 9.0, "4"),
            (30.0, 3.0, "4"),
        ],
    )
    def test_uci_category(self, length_km: float, gradient: float, category: str) -> None:
        """Rules are strict and checked hardest first."""
        result = ScoreEngine.uci_category(length_km=length_km, average_gradient_pct=gradient)
        assert result.category == category
        assert result.description

    def test_round_half_up(self) -> None:
        assert round_half_up(24.5) == 25
        assert round_half_up(2.5) == 3
        assert round_half_up(2.4) == 2

    def test_round_tenth_half_up(self) -> None:
        assert round_tenth_half_up(12.25) == 12.3
        assert round_tenth_half_up(-12.25) == -12.3
        assert round_tenth_half_up(12.24) == 12.2
        assert round_tenth_half_up(7.0) == 7.0

    def test_sample_profile_components(self, sample_profile: list[ElevationPoint]) -> None:
        """5 km / 25 km = 20, 600 m / 2000 m = 30, gradient 0.3 + 0.4/3 + 0.3 = 73; raw 47.5 rounds up."""
        segments = ProfileSegmenter().segment(sample_profile)
        result = ScoreEngine.difficulty_score(total_distance_km=5.0, total_elevation_gain_m=600.0, segments=segments)
        assert (result.components.distance, result.components.elevation, result.components.gradient) == (20, 30, 73)
        assert result.score == 48
        assert result.category == "Modéré"

    def test_saturated_climb_scores_100(self) -> None:
        """Every component saturates: long, high and uniformly very steep."""
        segments = [_segment(k * 0.5, (k + 1) * 0.5, 1000 + k * 100, 1100 + k * 100) for k in range(60)]
        result = ScoreEngine.difficulty_score(total_distance_km=30.0, total_elevation_gain_m=6000.0, segments=segments)
        assert result.score == 100
        assert result.category == "Extrême"

    def test_no_segments(self) -> None:
        result = ScoreEngine.difficulty_score(total_distance_km=0.0, total_elevation_gain_m=0.0, segments=[])
        assert result.score == 0
        assert result.category == "Facile"

    def test_all_descent_gradient_component_is_zero(self) -> None:
        segments = [_segment(0.0, 1.0, 1500, 1400), _segment(1.0, 2.0, 1400, 1300)]
        assert ScoreEngine.gradient_component(segments) == 0.0


# =============================================================================
# ANALYSIS PIPELINE
# =============================================================================


class TestProfileAnalyzer:
    """ProfileAnalyzer - end-to-end profile analysis."""

    def test_sample_profile_summary(self, sample_profile_pairs: list[list[float]]) -> None:
        analysis = analyze_profile(sample_profile_pairs)
        summary = analysis.summary
        assert summary.total_elevation_gain == 600.0
        assert summary.total_distance == 5.0
        assert summary.average_gradient == pytest.approx(12.0)
        assert summary.max_gradient == 20.0
        assert summary.max_gradient_location == 1.0
        assert summary.max_gradient_length == 1.0
        assert (summary.min_elevation, summary.max_elevation) == (1000.0, 1600.0)
        assert analysis.uci_comparison.category == "3"
        assert len(analysis.key_segments) == 1

    def test_single_point_rejected(self) -> None:
        with pytest.raises(InvalidProfileError):
            analyze_profile([[0, 1000]])

    def test_missing_profile_rejected(self) -> None:
        with pytest.raises(InvalidProfileError):
            ProfileAnalyzer().analyze(None)

    def test_custom_segmenter(self, sample_profile: list[ElevationPoint]) -> None:
        """A 5 km window covers the whole sample profile in one segment."""
        analysis = ProfileAnalyzer(segmenter=ProfileSegmenter(window_km=5.0)).analyze(sample_profile)
        assert len(analysis.segments) == 1
        assert analysis.segments[0].gradient_pct == 12.0

    def test_first_steepest_segment_wins(self) -> None:
        """Ties on the max gradient report the earliest segment."""
        analysis = analyze_profile([[0, 1000], [1, 1100], [2, 1150], [3, 1250]])
        assert analysis.summary.max_gradient == 10.0
        assert analysis.summary.max_gradient_location == 0.0

    def test_to_dict(self, sample_profile: list[ElevationPoint]) -> None:
        data = analyze_profile(sample_profile).to_dict()
        assert data["uci_comparison"]["category"] == "3"
        assert set(data["segments_by_difficulty"]) == {"easy", "moderate", "difficult", "veryDifficult", "extreme"}
        assert data["summary"]["total_elevation_gain"] == 600.0


# =============================================================================
# GEODATA
# =============================================================================


class TestGeoCalculator:
    """GeoCalculator - geodesic lengths and geographic reference."""

    def test_one_degree_latitude(self) -> None:
        """1 degree latitude at 45°N is ~111 km on the WGS84 ellipsoid."""
        lengths = GeoCalculator.segment_lengths_m([(6.0, 45.0), (6.0, 46.0)])
        assert len(lengths) == 1
        assert 110_000 < lengths[0] < 112_000

    def test_cumulative_distances(self) -> None:
        distances = GeoCalculator.cumulative_distances_km([(6.0, 45.0), (6.0, 45.01), (6.0, 45.02)])
        assert distances[0] == 0.0
        assert distances[1] == pytest.approx(1.11, abs=0.01)
        assert distances[2] == pytest.approx(2 * distances[1], rel=1e-3)

    def test_track_length_matches_segments(self) -> None:
        track = [(6.0, 45.0), (6.01, 45.01), (6.03, 45.015)]
        assert GeoCalculator.track_length_m(track) == pytest.approx(sum(GeoCalculator.segment_lengths_m(track)))

    def test_short_tracks(self) -> None:
        assert GeoCalculator.segment_lengths_m([(6.0, 45.0)]) == []
        assert GeoCalculator.track_length_m([(6.0, 45.0)]) == 0.0

    def test_utm_crs(self) -> None:
        """6°E, 45°N is in UTM zone 32N; southern hemisphere uses 327xx."""
        assert GeoCalculator.utm_crs(lon=6.0, lat=45.0) == "EPSG:32632"
        assert GeoCalculator.utm_crs(lon=-70.0, lat=-33.0) == "EPSG:32719"

    def test_geo_reference(self) -> None:
        track = [(6.0, 45.0), (6.0, 45.02), (6.02, 45.04)]
        ref = GeoCalculator.geo_reference(track, corridor_width_m=2000.0)
        assert ref["bounds"] == (6.0, 45.0, 6.02, 45.04)
        min_lon, min_lat, max_lon, max_lat = ref["corridor_bounds"]
        # 1 km corridor half-width is ~0.009° of latitude
        assert min_lat == pytest.approx(45.0 - 0.009, abs=0.001)
        assert max_lat == pytest.approx(45.04 + 0.009, abs=0.001)
        assert min_lon < 6.0 and max_lon > 6.02
        assert 6.0 <= ref["center"][0] <= 6.02
        assert ref["geodesic_length_m"] > 4000

    def test_geo_reference_needs_two_points(self) -> None:
        with pytest.raises(MissingGeodataError):
            GeoCalculator.geo_reference([(6.0, 45.0)])


class TestAltitudeLookups:
    """LatitudeAltitudeLookup and DEMAltitudeLookup."""

    def test_latitude_model(self) -> None:
        lookup = LatitudeAltitudeLookup()
        assert lookup.get_elevation(lon=6.0, lat=45.0) == 1000.0
        assert lookup.get_elevation(lon=6.0, lat=46.5) == pytest.approx(1150.0)
        assert lookup.get_elevation(lon=6.0, lat=43.0) == pytest.approx(1200.0)

    def test_dem_missing_file(self, tmp_path: Path) -> None:
        """A missing DEM raises on first query, not at construction."""
        lookup = DEMAltitudeLookup(tmp_path / "absent.tif")
        assert not lookup.is_loaded
        with pytest.raises(FileNotFoundError):
            lookup.get_elevation(lon=6.0, lat=45.0)

    def test_dem_cell_lookup(self, geographic_dem: Path) -> None:
        """0.1° cells from (6.0 E, 46.0 N) down; each cell holds row * 10 + col."""
        lookup = DEMAltitudeLookup(geographic_dem)
        assert lookup.get_elevation(lon=6.05, lat=45.95) == 0.0
        assert lookup.is_loaded
        assert lookup.get_elevation(lon=6.25, lat=45.75) == 22.0
        assert lookup.get_elevation(lon=6.95, lat=45.05) == 99.0

    def test_dem_outside_coverage(self, geographic_dem: Path) -> None:
        lookup = DEMAltitudeLookup(geographic_dem)
        assert lookup.get_elevation(lon=7.5, lat=45.0) is None
        assert lookup.get_elevation(lon=6.5, lat=46.5) is None

    def test_dem_nodata_and_nan(self, geographic_dem: Path) -> None:
        """Cell (5, 5) holds the nodata value, cell (6, 6) holds NaN."""
        lookup = DEMAltitudeLookup(geographic_dem)
        assert lookup.get_elevation(lon=6.55, lat=45.45) is None
        assert lookup.get_elevation(lon=6.65, lat=45.35) is None

    def test_dem_projected_crs(self, tmp_path: Path) -> None:
        """A UTM raster is queried with lon/lat reprojected to its CRS."""
        x0, y0 = Transformer.from_crs("EPSG:4326", "EPSG:32632", always_xy=True).transform(6.5, 45.5)
        data = np.arange(100, dtype=np.float32).reshape(10, 10)
        path = _write_dem(
            tmp_path / "utm.tif", data, crs="EPSG:32632", transform=from_origin(x0 - 550.0, y0 + 550.0, 100.0, 100.0)
        )
        lookup = DEMAltitudeLookup(path)
        assert lookup.get_elevation(lon=6.5, lat=45.5) == 55.0
        assert lookup.get_elevation(lon=6.0, lat=45.5) is None


class TestProfileBuilder:
    """ProfileBuilder - profiles from lon/lat tracks."""

    def test_from_coordinates(self, mock_altitude_lookup: "MockAltitudeLookup") -> None:
        track = [(6.0, 45.0), (6.0, 45.01), (6.0, 45.02)]
        profile = ProfileBuilder.from_coordinates(track, altitude_lookup=mock_altitude_lookup)
        assert [p.elevation_m for p in profile] == pytest.approx([1000.0, 1100.0, 1200.0])
        assert profile[0].distance_km == 0.0
        assert profile[2].distance_km == pytest.approx(2.22, abs=0.01)

    def test_duplicate_points_dropped(self, mock_altitude_lookup: "MockAltitudeLookup") -> None:
        """Repeated track points would break strictly increasing distances."""
        track = [(6.0, 45.0), (6.0, 45.0), (6.0, 45.01)]
        profile = ProfileBuilder.from_coordinates(track, altitude_lookup=mock_altitude_lookup)
        assert len(profile) == 2
        assert len(mock_altitude_lookup.calls) == 2

    def test_fallback_when_lookup_has_no_data(self, patchy_altitude_lookup: "MockAltitudeLookup") -> None:
        """Points the lookup cannot answer use the latitude model."""
        profile = ProfileBuilder.from_coordinates(
            [(6.0, 45.0), (6.0, 45.01)], altitude_lookup=patchy_altitude_lookup
        )
        assert profile[0].elevation_m == 1000.0
        assert profile[1].elevation_m == pytest.approx(LatitudeAltitudeLookup().get_elevation(lon=6.0, lat=45.01))

    def test_default_lookup(self) -> None:
        profile = ProfileBuilder.from_coordinates([(6.0, 46.0), (6.0, 46.01)])
        assert profile[0].elevation_m == pytest.approx(1100.0)

    def test_missing_coordinates(self) -> None:
        with pytest.raises(MissingGeodataError):
            ProfileBuilder.from_coordinates([])
        with pytest.raises(MissingGeodataError):
            ProfileBuilder.from_coordinates(None)

    def test_single_point_track(self) -> None:
        with pytest.raises(InvalidProfileError):
            ProfileBuilder.from_coordinates([(6.0, 45.0)])
