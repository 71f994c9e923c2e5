import pytest
from core.classifiers import (
    classify_slope,
    count_warm_months,
    derive_climate_zone,
    derive_seasonal_variation,
    dominant_wind_direction,
    first_match,
    growing_season_label,
    monthly_temperature_profile,
    round_half_up,
    slope_percent,
    wind_direction_from_degrees,
)
from core.models import ClimateZone, SeasonalVariation, SlopeAssessment


def test_first_match_order():
    rules = ((lambda x: x > 10, "big"), (lambda x: x > 0, "positive"))
    assert first_match(rules, 20) == "big"
    assert first_match(rules, 5) == "positive"
    assert first_match(rules, -1, default="other") == "other"


@pytest.mark.parametrize("avg,lo,hi,rain,zone", [
    (-5, -30, 8, 300, ClimateZone.POLAR),
    (8, -20, 25, 600, ClimateZone.CONTINENTAL),
    (26, 20, 33, 2400, ClimateZone.TROPICAL),
    (24, 5, 45, 80, ClimateZone.ARID),
    (12, 0, 25, 700, ClimateZone.TEMPERATE),
    (26, 20, 33, 1500, ClimateZone.TEMPERATE),  # needs >1500 for tropical
])
def test_climate_zone(avg, lo, hi, rain, zone):
    assert derive_climate_zone(avg, lo, hi, rain) is zone


@pytest.mark.parametrize("lo,hi,expected", [
    (10, 19.9, SeasonalVariation.LOW),
    (0, 25, SeasonalVariation.MODERATE),
    (-10, 20, SeasonalVariation.HIGH),
])
def test_seasonal_variation(lo, hi, expected):
    assert derive_seasonal_variation(lo, hi) is expected


@pytest.mark.parametrize("degrees,direction", [
    (0, "N"), (22.4, "N"), (22.5, "NE"), (90, "E"), (200, "S"), (337.5, "N"), (359, "N"),
])
def test_wind_direction(degrees, direction):
    assert wind_direction_from_degrees(degrees) == direction


def test_dominant_wind_direction():
    assert dominant_wind_direction([90, 95, 270, None, 88]) == "E"
    assert dominant_wind_direction([]) == "unknown"
    assert dominant_wind_direction([None, None]) == "unknown"


def test_slope_classes():
    # 1110 m horizontal offset: 22.2 m rise is 2%
    assert classify_slope([100, 100, 100, 100, 100]) is SlopeAssessment.FLAT
    assert classify_slope([100, 110, 100, 100, 100]) is SlopeAssessment.FLAT
    assert classify_slope([100, 150, 100, 100, 100]) is SlopeAssessment.GENTLE
    assert classify_slope([100, 100, 10, 100, 100]) is SlopeAssessment.MODERATE
    assert classify_slope([100, 100, 100, 300, 100]) is SlopeAssessment.STEEP


def test_slope_needs_five_points():
    assert classify_slope([100, 900]) is SlopeAssessment.FLAT


def test_slope_percent():
    assert slope_percent([0, 111, 0, 0, 0]) == pytest.approx(10.0)


def test_monthly_profile_shape():
    temps = monthly_temperature_profile(10, 0, 20)
    assert len(temps) == 12
    assert temps[0] == pytest.approx(0)
    assert temps[6] == pytest.approx(20)


def test_growing_season_labels():
    assert count_warm_months(25, 20, 30) == 12
    assert growing_season_label(25, 20, 30).startswith("Year-round")
    assert growing_season_label(12, 0, 20) == "Long season (approximately 9 months)"
    assert "cold frames" in growing_season_label(-6, -20, 20)


@pytest.mark.parametrize("value,digits,expected", [
    (1000.5, 0, 1001), (2.5, 0, 3), (-2.5, 0, -2), (1660.4, 0, 1660),
    (2.25, 1, 2.3), (19.45, 1, 19.5), (12.0, 1, 12.0),
])
def test_round_half_up(value, digits, expected):
    assert round_half_up(value, digits) == expected


def test_round_half_up_whole_is_int():
    assert isinstance(round_half_up(1000.5), int)
