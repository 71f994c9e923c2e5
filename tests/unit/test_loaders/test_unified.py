import pytest
from unittest.mock import MagicMock, patch

from core.models import (
    ClimateZone,
    Coordinates,
    LocationData,
    SlopeAssessment,
    SourceStatus,
    TerrainData,
)
from loaders.base import AdapterResult, failed_result
from loaders.unified import FALLBACK_CLIMATE, UnifiedDataFetcher, get_data_fetcher

COORDS = Coordinates(-1.2921, 36.8219)


@pytest.fixture
def mock_fetcher():
    with patch('loaders.unified.get_climate_loader') as mock_climate, \
         patch('loaders.unified.get_elevation_loader') as mock_elev, \
         patch('loaders.unified.get_geocoder') as mock_geo:
        yield UnifiedDataFetcher()


def ok(data, make_source, name):
    return AdapterResult(data=data, source=make_source(name))


def setup_success(fetcher, make_snapshot, make_source):
    snapshot = make_snapshot()
    fetcher.climate.fetch.return_value = ok(snapshot.climate, make_source, "open-meteo")
    fetcher.elevation.fetch.return_value = ok(snapshot.terrain, make_source, "open-elevation")
    fetcher.geocoder.fetch.return_value = ok(snapshot.location, make_source, "nominatim")
    return snapshot


@pytest.mark.parametrize("parallel", [True, False])
def test_fetch_all_success(mock_fetcher, make_snapshot, make_source, parallel):
    expected = setup_success(mock_fetcher, make_snapshot, make_source)

    result = mock_fetcher.fetch_all(COORDS, parallel=parallel)

    assert result.warnings == []
    assert not result.all_failed
    assert result.snapshot.climate == expected.climate
    assert result.snapshot.terrain == expected.terrain
    assert [s.source for s in result.snapshot.data_sources] == ["open-meteo", "open-elevation", "nominatim"]


def test_terrain_failure_uses_fallback(mock_fetcher, make_snapshot, make_source):
    setup_success(mock_fetcher, make_snapshot, make_source)
    mock_fetcher.elevation.fetch.return_value = failed_result(
        "open-elevation", "https://x", "2026-01-01T00:00:00.000Z", Exception("timeout")
    )

    result = mock_fetcher.fetch_all(COORDS, parallel=False)

    assert result.snapshot.terrain == TerrainData(elevation_m=200, slope_assessment=SlopeAssessment.FLAT)
    assert result.warnings == ["Terrain data unavailable: timeout. Using flat/200m fallback."]
    assert result.snapshot.data_sources[1].status is SourceStatus.FAILED


def test_result_without_data_uses_fallback(mock_fetcher, make_snapshot, make_source):
    """A result that is not ok keeps its source record but contributes no data."""
    setup_success(mock_fetcher, make_snapshot, make_source)
    empty = AdapterResult(data=None, source=make_source("open-meteo"))
    assert not empty.ok
    mock_fetcher.climate.fetch.return_value = empty

    result = mock_fetcher.fetch_all(COORDS, parallel=False)

    assert result.snapshot.climate == FALLBACK_CLIMATE
    assert result.snapshot.data_sources[0].source == "open-meteo"
    assert result.warnings[0].startswith("Climate data unavailable:")


def test_raising_loader_leaves_no_record(mock_fetcher, make_snapshot, make_source):
    setup_success(mock_fetcher, make_snapshot, make_source)
    mock_fetcher.geocoder.fetch.side_effect = RuntimeError("thread died")

    result = mock_fetcher.fetch_all(COORDS, parallel=True)

    assert result.snapshot.location == LocationData(
        display_name="-1.2921, 36.8219", country="Unknown", country_code="xx", region="Unknown"
    )
    assert len(result.snapshot.data_sources) == 2
    assert result.warnings[0].startswith("Location data unavailable: thread died.")


def test_all_failed(mock_fetcher):
    for loader, name in ((mock_fetcher.climate, "open-meteo"),
                         (mock_fetcher.elevation, "open-elevation"),
                         (mock_fetcher.geocoder, "nominatim")):
        loader.fetch.return_value = failed_result(name, "https://x", "t", Exception("down"))

    result = mock_fetcher.fetch_all(COORDS, parallel=False)

    assert result.all_failed
    assert result.snapshot.climate == FALLBACK_CLIMATE
    assert result.snapshot.climate.climate_zone is ClimateZone.TEMPERATE
    assert result.warnings[0] == (
        "Climate data unavailable: down. Using global average fallback values."
    )


def test_parallel_default_from_settings(mock_fetcher, make_snapshot, make_source):
    setup_success(mock_fetcher, make_snapshot, make_source)
    settings = MagicMock(parallel_fetch=False)
    with patch('loaders.unified.get_settings', return_value=settings), \
         patch.object(mock_fetcher, '_fetch_parallel') as parallel:
        mock_fetcher.fetch_all(COORDS)
    parallel.assert_not_called()


def test_singleton():
    with patch('loaders.unified.get_climate_loader'), \
         patch('loaders.unified.get_elevation_loader'), \
         patch('loaders.unified.get_geocoder'):
        assert get_data_fetcher() is get_data_fetcher()
