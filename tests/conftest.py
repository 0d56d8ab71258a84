"""Shared pytest fixtures for climb_profiler tests.

Provides sample profiles, pass records, an in-memory pass store and a mock
altitude lookup. All fixtures use explicit values with documented rationale.

SAMPLE PROFILE:
    [[0, 1000], [1, 1100], [2, 1300], [5, 1600]] is small enough to check by
    hand: with 0.5 km windows it yields three segments (10%, 20%, 10%),
    600 m of gain over 5 km (12% average), steepest 20% at km 1.

COORDINATE SYSTEM:
    Tracks sit near 45°N, 6°E (French Alps); 0.01° of latitude is ~1.1 km,
    so short tracks of a few points give profiles of a few kilometers.
"""

import pytest

from climb_profiler.core.altitude_lookup import AltitudeLookup
from climb_profiler.model.elevation_point import ElevationPoint
from climb_profiler.model.pass_record import InMemoryPassRepository, PassRecord, PointOfInterest
from climb_profiler.model.terrain_grid import TerrainParams


# =============================================================================
# MOCK ALTITUDE LOOKUP
# =============================================================================


class MockAltitudeLookup(AltitudeLookup):
    """Altitude rising linearly with latitude, None outside its coverage.

    Elevation formula:
        elevation = base_elevation + (lat - 45.0) * m_per_degree

    Going north by 0.01° (~1.1 km) climbs m_per_degree / 100 meters; with the
    default 10,000 m/degree that is 100 m per 0.01°, a ~9% climb.

    Points with lat >= no_data_above return None, to exercise fallbacks.
    """

    def __init__(
        self,
        base_elevation: float = 1000.0,
        m_per_degree: float = 10_000.0,
        no_data_above: float = 90.0,
    ) -> None:
        self.base_elevation = base_elevation
        self.m_per_degree = m_per_degree
        self.no_data_above = no_data_above
        self.calls: list[tuple[float, float]] = []

    def get_elevation(self, lon: float, lat: float) -> float | None:
        self.calls.append((lon, lat))
        if lat >= self.no_data_above:
            return None
        return self.base_elevation + (lat - 45.0) * self.m_per_degree


@pytest.fixture
def mock_altitude_lookup() -> MockAltitudeLookup:
    """Linear altitude model: 1000 m at 45°N, +100 m per 0.01° north."""
    return MockAltitudeLookup()


@pytest.fixture
def patchy_altitude_lookup() -> MockAltitudeLookup:
    """Same linear model, but no data north of 45.005°N (tests fallbacks)."""
    return MockAltitudeLookup(no_data_above=45.005)


# =============================================================================
# PROFILES
# =============================================================================


@pytest.fixture
def sample_profile_pairs() -> list[list[float]]:
    """Hand-checkable 5 km profile as stored: [distance_km, elevation_m] pairs."""
    return [[0, 1000], [1, 1100], [2, 1300], [5, 1600]]


@pytest.fixture
def sample_profile(sample_profile_pairs: list[list[float]]) -> list[ElevationPoint]:
    """The sample profile as ElevationPoints."""
    return [ElevationPoint(distance_km=d, elevation_m=e) for d, e in sample_profile_pairs]


@pytest.fixture
def dense_profile() -> list[ElevationPoint]:
    """10 km climb sampled every 100 m, 7% steady with a 12% ramp at km 4-5.

    Elevation runs from 1000 m to roughly 1750 m: below the treeline at the
    bottom, close to it at the top.
    """
    points = []
    elevation = 1000.0
    for k in range(101):
        distance = k / 10
        if k > 0:
            gradient = 12.0 if 4.0 < distance <= 5.0 else 7.0
            elevation += gradient
        points.append(ElevationPoint(distance_km=distance, elevation_m=elevation))
    return points


@pytest.fixture
def high_profile() -> list[ElevationPoint]:
    """Short climb entirely above 2000 m (alpine terrain, high-altitude presets)."""
    return [ElevationPoint(distance_km=d / 2, elevation_m=2100.0 + 40.0 * d) for d in range(11)]


@pytest.fixture
def small_terrain_params() -> TerrainParams:
    """Low-resolution grid over a 5 km route: fast to synthesize."""
    return TerrainParams(physical_length=5000.0, grid_resolution=32)


# =============================================================================
# PASS RECORDS
# =============================================================================


@pytest.fixture
def alpe_record(dense_profile: list[ElevationPoint]) -> PassRecord:
    """Full pass record: profile, lon/lat track and points of interest.

    The track heads north from 45.05°N in 0.01° steps. POIs cover a
    switchback location, a free-text location and a non-building type.
    """
    return PassRecord(
        id="alpe-test",
        name="Alpe de Test",
        length=10.0,
        elevation=1750.0,
        elevation_profile=dense_profile,
        coordinates=[(6.05, 45.05 + k * 0.01) for k in range(10)],
        points_of_interest=[
            PointOfInterest(id="1", name="Refuge du Virage", type="refuge", location="Virage 7"),
            PointOfInterest(id="2", name="Grand Hôtel", type="hotel", location="Sommet"),
            PointOfInterest(id="3", name="Belvédère", type="panorama", location="Virage 16"),
        ],
        difficulty="Difficile",
    )


@pytest.fixture
def sample_record(sample_profile: list[ElevationPoint]) -> PassRecord:
    """Short pass built on the sample profile, no editorial difficulty."""
    return PassRecord(
        id="col-sample",
        name="Col Sample",
        length=5.0,
        elevation=1600.0,
        elevation_profile=sample_profile,
        coordinates=[(6.0, 45.0), (6.0, 45.02), (6.0, 45.045)],
    )


@pytest.fixture
def track_only_record() -> PassRecord:
    """Pass with a lon/lat track but no elevation profile."""
    return PassRecord(
        id="col-track",
        name="Col Track",
        length=0.0,
        elevation=0.0,
        coordinates=[(6.1, 45.10 + k * 0.005) for k in range(8)],
    )


@pytest.fixture
def no_geodata_record(sample_profile: list[ElevationPoint]) -> PassRecord:
    """Pass with a profile but neither coordinates nor 3D coordinates."""
    return PassRecord(
        id="col-nogeo",
        name="Col Sans Carte",
        length=5.0,
        elevation=1600.0,
        elevation_profile=sample_profile,
    )


@pytest.fixture
def repository(
    alpe_record: PassRecord,
    sample_record: PassRecord,
    track_only_record: PassRecord,
    no_geodata_record: PassRecord,
) -> InMemoryPassRepository:
    """In-memory pass store holding all fixture records."""
    return InMemoryPassRepository([alpe_record, sample_record, track_only_record, no_geodata_record])
