import pytest
from strategies.water import (
    ARID,
    HIGH_RAINFALL,
    MODERATE_RAINFALL,
    SEMI_ARID,
    SOLAR_STILL,
    SPRING_CAPTURE,
    select_rainfall_band,
    water_strategy,
)


def test_high_rainfall_harvesting(make_snapshot):
    """Verify >1000mm picks rainwater harvesting with ferro-cement tanks."""
    result = water_strategy(make_snapshot(rainfall=1200, elevation=300))
    assert result.primary_method == "Rainwater harvesting"
    assert any("Ferro-cement" in t for t in result.techniques)
    assert result.estimated_annual_rainfall_mm == 1200
    assert "5,000 L" in result.storage_recommendation


def test_arid_deep_groundwater(make_snapshot):
    """Verify <250mm picks deep groundwater with a borehole."""
    result = water_strategy(make_snapshot(rainfall=100, elevation=300))
    assert "Deep groundwater" in result.primary_method
    assert any("Borehole" in t for t in result.techniques)


@pytest.mark.parametrize("rainfall,band", [
    (1001, HIGH_RAINFALL),
    (1000, MODERATE_RAINFALL),
    (500, MODERATE_RAINFALL),
    (499, SEMI_ARID),
    (250, SEMI_ARID),
    (249, ARID),
])
def test_band_boundaries(rainfall, band):
    assert select_rainfall_band(rainfall) is band


def test_coastal_low_rainfall_adds_solar_still(make_snapshot):
    result = water_strategy(make_snapshot(rainfall=300, elevation=10, coastal=True))
    assert SOLAR_STILL in result.techniques
    assert any("desalination" in line for line in result.reasoning_trace)


def test_coastal_wet_site_has_no_solar_still(make_snapshot):
    result = water_strategy(make_snapshot(rainfall=800, elevation=10, coastal=True))
    assert SOLAR_STILL not in result.techniques


def test_upland_spring_capture(make_snapshot):
    """Verify elevation >500m with >500mm rain adds spring capture."""
    result = water_strategy(make_snapshot(rainfall=1050, elevation=1660))
    assert result.techniques[-1] == SPRING_CAPTURE

    lowland = water_strategy(make_snapshot(rainfall=1050, elevation=500))
    assert SPRING_CAPTURE not in lowland.techniques


def test_trace_starts_with_inputs(make_snapshot):
    result = water_strategy(make_snapshot(rainfall=600))
    assert result.reasoning_trace[0] == "Annual rainfall: 600mm. Climate zone: tropical."
    assert len(result.reasoning_trace) >= 3


def test_band_techniques_not_mutated(make_snapshot):
    """Modifiers must not leak into the shared band definition."""
    water_strategy(make_snapshot(rainfall=1050, elevation=1660))
    assert SPRING_CAPTURE not in HIGH_RAINFALL.techniques
