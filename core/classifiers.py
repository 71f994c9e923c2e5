"""
Threshold classifiers.

Pure functions turning numeric observations into categorical labels.
Each cascade is an ordered tuple of (predicate, outcome) pairs; the first
predicate that holds decides the label, so order is significant.
"""

import math
from collections import Counter
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar

from core.models import ClimateZone, SeasonalVariation, SlopeAssessment, WIND_DIRECTIONS

T = TypeVar("T")

# (predicate, outcome); predicates take the same positional args as the classifier
Rule = Tuple[Callable[..., bool], T]


def first_match(rules: Sequence[Rule], *args, default: Optional[T] = None) -> Optional[T]:
    """Return the outcome of the first rule whose predicate accepts ``args``."""
    for predicate, outcome in rules:
        if predicate(*args):
            return outcome
    return default


# ═══════════════════════════════════════════════════════════════════════════
# CLIMATE
# ═══════════════════════════════════════════════════════════════════════════
# args: avg_temp, min_temp, max_temp, rainfall_mm
_CLIMATE_ZONE_RULES: Tuple[Rule, ...] = (
    (lambda avg, lo, hi, rain: hi < 10, ClimateZone.POLAR),
    (lambda avg, lo, hi, rain: lo < -3 and hi >= 10, ClimateZone.CONTINENTAL),
    (lambda avg, lo, hi, rain: avg > 18 and rain > 1500, ClimateZone.TROPICAL),
    (lambda avg, lo, hi, rain: rain < 250, ClimateZone.ARID),
)


def derive_climate_zone(avg_temp: float, min_temp: float, max_temp: float,
                        rainfall_mm: float) -> ClimateZone:
    """Approximate Köppen classification from annual aggregates."""
    return first_match(
        _CLIMATE_ZONE_RULES, avg_temp, min_temp, max_temp, rainfall_mm,
        default=ClimateZone.TEMPERATE,
    )


_SEASONAL_RULES: Tuple[Rule, ...] = (
    (lambda spread: spread < 10, SeasonalVariation.LOW),
    (lambda spread: spread <= 25, SeasonalVariation.MODERATE),
)


def derive_seasonal_variation(min_temp: float, max_temp: float) -> SeasonalVariation:
    return first_match(_SEASONAL_RULES, max_temp - min_temp, default=SeasonalVariation.HIGH)


def round_half_up(value: float, digits: int = 0):
    """
    Round with exact halves going up (1000.5 -> 1001, 2.25 -> 2.3).
    Returns an int when ``digits`` is 0.
    """
    if digits == 0:
        return int(math.floor(value + 0.5))
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def wind_direction_from_degrees(degrees: Optional[float]) -> str:
    """Map a bearing in degrees to one of eight cardinal directions."""
    if degrees is None:
        return "unknown"
    index = int(math.floor(degrees / 45.0 + 0.5)) % 8
    return WIND_DIRECTIONS[index]


def dominant_wind_direction(bearings: Iterable[Optional[float]]) -> str:
    """Most frequent cardinal direction; ties go to the first one seen."""
    counts = Counter(wind_direction_from_degrees(b) for b in bearings if b is not None)
    if not counts:
        return "unknown"
    return counts.most_common(1)[0][0]


# ═══════════════════════════════════════════════════════════════════════════
# TERRAIN
# ═══════════════════════════════════════════════════════════════════════════
SLOPE_OFFSET_DEG = 0.01
METERS_PER_DEGREE = 111_000

_SLOPE_RULES: Tuple[Rule, ...] = (
    (lambda pct: pct < 2, SlopeAssessment.FLAT),
    (lambda pct: pct < 8, SlopeAssessment.GENTLE),
    (lambda pct: pct < 15, SlopeAssessment.MODERATE),
)


def slope_percent(elevations: Sequence[float]) -> float:
    """
    Maximum rise from the centre sample to any of its four neighbours,
    as a percentage of the ~1,110 m horizontal offset.
    """
    center = elevations[0]
    max_rise = max(abs(e - center) for e in elevations[1:])
    return max_rise / (SLOPE_OFFSET_DEG * METERS_PER_DEGREE) * 100


def classify_slope(elevations: Sequence[float]) -> SlopeAssessment:
    """
    Classify a five-point cross (centre, N, S, E, W) of elevations.
    Anything other than five samples is treated as flat.
    """
    if len(elevations) != 5:
        return SlopeAssessment.FLAT
    return first_match(_SLOPE_RULES, slope_percent(elevations), default=SlopeAssessment.STEEP)


# ═══════════════════════════════════════════════════════════════════════════
# GROWING SEASON
# ═══════════════════════════════════════════════════════════════════════════
GROWING_THRESHOLD_C = 5.0


def monthly_temperature_profile(avg_temp: float, min_temp: float, max_temp: float) -> List[float]:
    """
    Sinusoidal approximation of 12 monthly mean temperatures.
    Month 0 sits at the trough (``avg - amplitude``), month 6 at the peak.
    """
    amplitude = (max_temp - min_temp) / 2
    return [
        avg_temp + amplitude * math.sin(2 * math.pi * month / 12 - math.pi / 2)
        for month in range(12)
    ]


def count_warm_months(avg_temp: float, min_temp: float, max_temp: float) -> int:
    return sum(
        1 for t in monthly_temperature_profile(avg_temp, min_temp, max_temp)
        if t > GROWING_THRESHOLD_C
    )


_SEASON_RULES: Tuple[Rule, ...] = (
    (lambda n: n >= 11, lambda n: "Year-round growing (>10 months above 5°C)"),
    (lambda n: n >= 8, lambda n: f"Long season (approximately {n} months)"),
    (lambda n: n >= 5, lambda n: f"Moderate season (approximately {n} months)"),
    (lambda n: n >= 3, lambda n: f"Short season (approximately {n} months), cold frames advised"),
)


def growing_season_label(avg_temp: float, min_temp: float, max_temp: float) -> str:
    """Describe the growing season from the count of months above 5°C."""
    warm_months = count_warm_months(avg_temp, min_temp, max_temp)
    describe = first_match(
        _SEASON_RULES, warm_months,
        default=lambda n: "Very short season (<3 months), greenhouse or indoor growing required",
    )
    return describe(warm_months)
