"""
Water Strategy Module.

Rainfall picks one of four ordered bands (highest first); coastal and
elevation modifiers then extend the technique list.
"""

from dataclasses import dataclass
from typing import Callable, List, Tuple

from core.classifiers import first_match
from core.models import EnvironmentalSnapshot, WaterStrategy


@dataclass(frozen=True)
class RainfallBand:
    """Fixed recommendation set for one rainfall band."""
    name: str
    assessment: str
    primary_method: str
    techniques: Tuple[str, ...]
    storage_recommendation: str
    summary: str


HIGH_RAINFALL = RainfallBand(
    name="high",
    assessment="Rainfall >1000mm: primary strategy is rainwater harvesting.",
    primary_method="Rainwater harvesting",
    techniques=(
        "Roof-fed catchment systems with guttering",
        "Ferro-cement storage tanks (5,000–20,000 L)",
        "Underground cisterns with sealed covers",
        "First-flush diverters to remove contaminants",
        "Slow-sand filtration before consumption",
    ),
    # 4-person household x 5 L/day x 90-day dry buffer is ~1,800 L; 5,000 L leaves headroom
    storage_recommendation=(
        "Minimum 5,000 L per household. Target 20,000 L for 3-month dry season buffer. "
        "Elevated tank preferred for gravity-fed distribution."
    ),
    summary="Recommendation: roof catchment + ferro-cement tanks + first-flush diverter.",
)

MODERATE_RAINFALL = RainfallBand(
    name="moderate",
    assessment="Rainfall 500–1000mm: combined rainwater harvesting and groundwater recommended.",
    primary_method="Combined rainwater harvesting + groundwater",
    techniques=(
        "Roof catchment and storage tanks",
        "Shallow well installation (3–15m depth)",
        "Check dams and swales to recharge groundwater",
        "Keyline water design for landscape water retention",
        "Ceramic pot filtration for drinking water",
    ),
    storage_recommendation=(
        "Minimum 10,000 L per household. Pair with shallow well as backup. Swales and check "
        "dams to extend groundwater availability into dry season."
    ),
    summary="Recommendation: roof catchment + shallow wells + landscape water retention.",
)

SEMI_ARID = RainfallBand(
    name="semi-arid",
    assessment="Rainfall 250–500mm (semi-arid): groundwater and supplemental collection recommended.",
    primary_method="Groundwater extraction + supplemental fog/dew collection",
    techniques=(
        "Deep wells (15–60m) with hand pumps",
        "Fog collection nets (polypropylene mesh) on ridges",
        "Dew collection sheets on cool surfaces overnight",
        "Underground infiltration galleries",
        "Drip irrigation to minimize water loss",
        "Mulching at 10–15cm depth to suppress evaporation",
    ),
    storage_recommendation=(
        "Minimum 15,000 L per household. Deep well required as primary. Fog nets effective if "
        "elevation >400m with coastal or highland humidity."
    ),
    summary="Recommendation: deep wells + fog nets + aggressive mulching + drip irrigation.",
)

ARID = RainfallBand(
    name="arid",
    assessment="Rainfall <250mm (arid): deep groundwater and water recycling are essential.",
    primary_method="Deep groundwater + closed-loop water recycling",
    techniques=(
        "Borehole drilling to deep aquifers (60–200m)",
        "Solar-powered submersible pumps",
        "Greywater recycling for irrigation",
        "Atmospheric water generation (in humid desert zones)",
        "Wicking bed irrigation systems",
        "Minimal-water composting toilets",
    ),
    storage_recommendation=(
        "Minimum 20,000 L per household. Borehole essential. Greywater recycling mandatory. "
        "Target near-zero water wastage."
    ),
    summary="Recommendation: deep borehole + solar pump + greywater recycling system.",
)

# Evaluated top to bottom; ARID is the default
RAINFALL_BANDS: Tuple[Tuple[Callable[[float], bool], RainfallBand], ...] = (
    (lambda rain: rain > 1000, HIGH_RAINFALL),
    (lambda rain: rain >= 500, MODERATE_RAINFALL),
    (lambda rain: rain >= 250, SEMI_ARID),
)

SOLAR_STILL = "Small-scale solar still for supplemental fresh water from seawater"
SPRING_CAPTURE = "Spring capture from upland sources with gravity-fed pipe systems"


def select_rainfall_band(annual_rainfall_mm: float) -> RainfallBand:
    return first_match(RAINFALL_BANDS, annual_rainfall_mm, default=ARID)


def water_strategy(snapshot: EnvironmentalSnapshot) -> WaterStrategy:
    """Recommend water access methods for the snapshot's location."""
    rainfall = snapshot.climate.annual_rainfall_mm
    zone = snapshot.climate.climate_zone.value
    elevation = snapshot.terrain.elevation_m
    trace: List[str] = [f"Annual rainfall: {rainfall}mm. Climate zone: {zone}."]

    band = select_rainfall_band(rainfall)
    trace.append(band.assessment)
    techniques = list(band.techniques)
    trace.append(band.summary)

    if snapshot.location.is_coastal and rainfall < 500:
        techniques.append(SOLAR_STILL)
        trace.append("Coastal location with low rainfall: added solar desalination as supplemental source.")

    if elevation > 500 and rainfall > 500:
        techniques.append(SPRING_CAPTURE)
        trace.append(f"Elevation {elevation}m with adequate rainfall: spring capture viable.")

    return WaterStrategy(
        primary_method=band.primary_method,
        techniques=techniques,
        estimated_annual_rainfall_mm=rainfall,
        storage_recommendation=band.storage_recommendation,
        reasoning_trace=trace,
    )
