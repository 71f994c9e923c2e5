import pytest
from strategies.energy import (
    BIOMASS,
    MICRO_HYDRO,
    MICRO_WIND,
    SOLAR,
    UNIVERSAL_TECHNIQUES,
    EnergyConditions,
    daily_sunshine_hours,
    energy_strategy,
    select_energy_profile,
)


def conditions(sun=3.0, wind=5.0, rain=400, elev=100):
    return EnergyConditions(sunshine_hours_daily=sun, avg_wind_speed_kmh=wind,
                            annual_rainfall_mm=rain, elevation_m=elev)


@pytest.mark.parametrize("c,expected", [
    (conditions(rain=1000, elev=500), MICRO_HYDRO),
    (conditions(sun=8.0, rain=1200, elev=800), MICRO_HYDRO),  # hydro outranks solar
    (conditions(sun=5.0), SOLAR),
    (conditions(sun=4.9, wind=20.0), MICRO_WIND),
    (conditions(sun=4.9, wind=19.9), BIOMASS),
    (conditions(rain=1000, elev=499), BIOMASS),
])
def test_primary_cascade(c, expected):
    assert select_energy_profile(c) is expected


def test_daily_sunshine_rounding():
    assert daily_sunshine_hours(2200) == 6.0
    assert daily_sunshine_hours(1000) == 2.7
    # 821.25 / 365 is exactly 2.25
    assert daily_sunshine_hours(821.25) == 2.3


def test_hydro_site(make_snapshot):
    result = energy_strategy(make_snapshot(rainfall=1050, elevation=1660))
    assert result.primary_source == MICRO_HYDRO.primary_source
    assert result.estimated_solar_hours_daily == 6.0


def test_solar_with_wind_secondary(make_snapshot):
    result = energy_strategy(make_snapshot(rainfall=300, elevation=100, sunshine=3000, wind=18))
    assert result.primary_source == "Solar photovoltaic"
    assert result.secondary_sources[0] == "Micro-wind turbine"
    assert any("added micro-wind" in line for line in result.reasoning_trace)


def test_solar_calm_site(make_snapshot):
    result = energy_strategy(make_snapshot(rainfall=300, elevation=100, sunshine=3000, wind=10))
    assert "Micro-wind turbine" not in result.secondary_sources


def test_universal_techniques_always_last(make_snapshot):
    result = energy_strategy(make_snapshot(rainfall=300, elevation=100, sunshine=900, wind=5))
    assert result.primary_source == BIOMASS.primary_source
    assert result.techniques[-2:] == list(UNIVERSAL_TECHNIQUES)
