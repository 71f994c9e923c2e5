import pytest
from core.errors import BlueprintEngineError
from core.models import ClimateZone, DataSourceRecord, EnvironmentalSnapshot, SourceStatus


def test_climate_zone_parse():
    assert ClimateZone.parse("Tropical ") is ClimateZone.TROPICAL
    assert ClimateZone.parse(ClimateZone.ARID) is ClimateZone.ARID
    assert ClimateZone.parse("savanna") is ClimateZone.UNKNOWN
    assert ClimateZone.parse(None) is ClimateZone.UNKNOWN


def test_source_record_omits_empty_error():
    record = DataSourceRecord("nominatim", "https://x", "2026-01-01T00:00:00.000Z", SourceStatus.SUCCESS)
    assert "error" not in record.to_dict()
    assert record.to_dict()["status"] == "success"


def test_snapshot_dict_round_trip(make_snapshot):
    snapshot = make_snapshot()
    data = snapshot.to_dict()
    assert data["climate"]["climate_zone"] == "tropical"
    assert data["terrain"]["slope_assessment"] == "gentle"
    assert EnvironmentalSnapshot.from_dict(data) == snapshot


def test_from_dict_missing_section(make_snapshot):
    data = make_snapshot().to_dict()
    del data["terrain"]
    with pytest.raises(BlueprintEngineError, match="terrain"):
        EnvironmentalSnapshot.from_dict(data)


def test_from_dict_non_numeric_rainfall(make_snapshot):
    data = make_snapshot().to_dict()
    data["climate"]["annual_rainfall_mm"] = "lots"
    with pytest.raises(BlueprintEngineError, match="annual_rainfall_mm"):
        EnvironmentalSnapshot.from_dict(data)


def test_from_dict_unknown_zone_kept_as_unknown(make_snapshot):
    data = make_snapshot().to_dict()
    data["climate"]["climate_zone"] = "mediterranean"
    snapshot = EnvironmentalSnapshot.from_dict(data)
    assert snapshot.climate.climate_zone is ClimateZone.UNKNOWN


def _set_sources(value):
    def mutate(data):
        data["data_sources"] = value
    return mutate


def _set_elevation(value):
    def mutate(data):
        data["terrain"]["elevation_m"] = value
    return mutate


@pytest.mark.parametrize("mutate,match", [
    (_set_sources(None), "data_sources"),
    (_set_sources(["oops"]), "data_sources"),
    (_set_sources({"source": "open-meteo"}), "data_sources"),
    (_set_elevation(float("nan")), "elevation_m"),
    (_set_elevation(float("inf")), "elevation_m"),
    (_set_elevation(float("-inf")), "elevation_m"),
])
def test_from_dict_malformed_raises_engine_error(make_snapshot, mutate, match):
    """Malformed input surfaces as BlueprintEngineError, never a builtin error."""
    data = make_snapshot().to_dict()
    mutate(data)
    with pytest.raises(BlueprintEngineError, match=match):
        EnvironmentalSnapshot.from_dict(data)


def test_from_dict_nan_rainfall(make_snapshot):
    data = make_snapshot().to_dict()
    data["climate"]["annual_rainfall_mm"] = float("nan")
    with pytest.raises(BlueprintEngineError, match="annual_rainfall_mm"):
        EnvironmentalSnapshot.from_dict(data)


def test_from_dict_without_sources(make_snapshot):
    data = make_snapshot().to_dict()
    del data["data_sources"]
    assert EnvironmentalSnapshot.from_dict(data).data_sources == ()


def test_risk_hazard_count(make_snapshot):
    from strategies.risks import risks_assessment
    risks = risks_assessment(make_snapshot(coastal=True))
    assert risks.hazard_count == len(risks.natural_hazards) + len(risks.climate_risks) + len(risks.terrain_risks)
