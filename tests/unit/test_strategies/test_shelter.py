import pytest
from core.models import ClimateZone, SlopeAssessment
from strategies.shelter import FALLBACK_PROFILE, ZONE_PROFILES, shelter_strategy


def test_tropical_bamboo(make_snapshot):
    result = shelter_strategy(make_snapshot(zone=ClimateZone.TROPICAL))
    assert any("Bamboo" in m for m in result.recommended_materials)
    assert result.reasoning_trace[0].startswith("Climate zone: tropical. Slope: gentle.")


def test_arid_thermal_mass(make_snapshot):
    result = shelter_strategy(make_snapshot(zone=ClimateZone.ARID, rainfall=150))
    assert any("Adobe" in m for m in result.recommended_materials)


@pytest.mark.parametrize("slope", [SlopeAssessment.MODERATE, SlopeAssessment.STEEP])
def test_sloped_terrain_adds_terracing(make_snapshot, slope):
    result = shelter_strategy(make_snapshot(slope=slope))
    assert any("Terraced foundation" in t for t in result.construction_techniques)
    assert any("Landslide" in c for c in result.climate_considerations)


def test_gentle_slope_no_terracing(make_snapshot):
    result = shelter_strategy(make_snapshot(slope=SlopeAssessment.GENTLE))
    assert not any("Terraced" in t for t in result.construction_techniques)


def test_lowland_flood_precaution(make_snapshot):
    result = shelter_strategy(make_snapshot(elevation=20, rainfall=1500))
    assert any("stilts" in t for t in result.construction_techniques)


def test_coastal_modifiers(make_snapshot):
    result = shelter_strategy(make_snapshot(coastal=True))
    assert result.recommended_materials[-1] == "Salt-resistant lime render for external finishes"
    assert any("Storm surge" in c for c in result.climate_considerations)


def test_high_wind_tie_downs(make_snapshot):
    result = shelter_strategy(make_snapshot(wind=35))
    assert any("tie-down" in t for t in result.construction_techniques)

    calm = shelter_strategy(make_snapshot(wind=30))
    assert not any("tie-down" in t for t in calm.construction_techniques)


def test_unknown_zone_fallback(make_snapshot):
    result = shelter_strategy(make_snapshot(zone=ClimateZone.UNKNOWN))
    assert result.recommended_materials[:len(FALLBACK_PROFILE.materials)] == list(FALLBACK_PROFILE.materials)
    assert FALLBACK_PROFILE is ZONE_PROFILES[ClimateZone.POLAR]
