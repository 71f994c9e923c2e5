import pytest

from core.models import (
    ClimateData,
    ClimateZone,
    Coordinates,
    DataSourceRecord,
    EnvironmentalSnapshot,
    LocationData,
    SeasonalVariation,
    SlopeAssessment,
    SourceStatus,
    TerrainData,
)


def source(name="open-meteo", status=SourceStatus.SUCCESS, error=None):
    return DataSourceRecord(
        source=name,
        endpoint=f"https://example.org/{name}",
        fetched_at="2026-01-01T00:00:00.000Z",
        status=status,
        error=error,
    )


def build_snapshot(
    rainfall=1050,
    zone=ClimateZone.TROPICAL,
    avg_temp=19.5,
    min_temp=11.0,
    max_temp=28.0,
    wind=12.0,
    sunshine=2200,
    elevation=1660,
    slope=SlopeAssessment.GENTLE,
    coastal=False,
    sources=None,
    lat=-1.2921,
    lon=36.8219,
):
    """Nairobi-like defaults; override whatever a test cares about."""
    if sources is None:
        sources = (source("open-meteo"), source("open-elevation"), source("nominatim"))
    return EnvironmentalSnapshot(
        coordinates=Coordinates(latitude=lat, longitude=lon),
        climate=ClimateData(
            annual_rainfall_mm=rainfall,
            avg_temperature_c=avg_temp,
            min_temperature_c=min_temp,
            max_temperature_c=max_temp,
            dominant_wind_direction="E",
            avg_wind_speed_kmh=wind,
            humidity_percent=60,
            sunshine_hours_annual=sunshine,
            climate_zone=zone,
            seasonal_variation=SeasonalVariation.MODERATE,
        ),
        terrain=TerrainData(elevation_m=elevation, slope_assessment=slope),
        location=LocationData(
            display_name="Nairobi, Kenya",
            country="Kenya",
            country_code="ke",
            region="Nairobi County",
            is_coastal=coastal,
        ),
        data_sources=tuple(sources),
    )


@pytest.fixture
def make_snapshot():
    return build_snapshot


@pytest.fixture
def make_source():
    return source
