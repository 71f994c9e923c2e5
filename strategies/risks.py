"""
Risk Assessment Module.

Independent hazard checks; any number may fire. Checks with severity bands
(flood, drought, heat, cold, wind) are ordered rule lists where only the
first matching band applies. Seismic risk is always reported as not assessed.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from core.classifiers import first_match
from core.models import EnvironmentalSnapshot, RiskAssessment, SlopeAssessment

log = logging.getLogger(__name__)

NATURAL = "natural"
CLIMATE = "climate"
TERRAIN = "terrain"

NO_MAJOR_RISKS = "No major climate or terrain risks identified for this location"


@dataclass(frozen=True)
class Finding:
    """One fired hazard: where it is filed, what to do about it, and why."""
    category: str
    description: str
    mitigations: Tuple[str, ...]
    trace: str


Check = Callable[[EnvironmentalSnapshot], Optional[Finding]]
Band = Tuple[Callable[[EnvironmentalSnapshot], bool], Callable[[EnvironmentalSnapshot], Finding]]


def _banded(bands: Sequence[Band]) -> Check:
    """Build a check that reports only the first matching severity band."""
    def check(s: EnvironmentalSnapshot) -> Optional[Finding]:
        build = first_match(bands, s)
        return build(s) if build else None
    return check


def _rain(s):
    return s.climate.annual_rainfall_mm


def _elev(s):
    return s.terrain.elevation_m


def _tmax(s):
    return s.climate.max_temperature_c


def _tmin(s):
    return s.climate.min_temperature_c


def _wind(s):
    return s.climate.avg_wind_speed_kmh


flood_check = _banded((
    (lambda s: _elev(s) < 50 and _rain(s) > 1000, lambda s: Finding(
        NATURAL,
        "High flood risk: low elevation combined with high annual rainfall",
        ("Build on elevated ground (>2m above surrounding terrain); raised foundations or stilts",
         "Install swales and check dams upstream to slow runoff"),
        f"Flood risk: elevation {_elev(s)}m + {_rain(s)}mm rainfall.",
    )),
    (lambda s: _elev(s) < 100 and _rain(s) > 700, lambda s: Finding(
        NATURAL,
        "Moderate flood risk: relatively low elevation with significant rainfall",
        ("Monitor seasonal water levels; maintain clear drainage channels",),
        f"Moderate flood risk: elevation {_elev(s)}m + {_rain(s)}mm rainfall.",
    )),
))


def coastal_check(s: EnvironmentalSnapshot) -> Optional[Finding]:
    if not s.location.is_coastal:
        return None
    return Finding(
        NATURAL,
        "Coastal storm surge and tsunami risk: verify with local historical records",
        ("Build at least 30m from high-tide line; elevate floor level above storm surge estimate",),
        "Coastal location: storm surge risk flagged.",
    )


drought_check = _banded((
    (lambda s: _rain(s) < 300, lambda s: Finding(
        CLIMATE,
        "Severe drought risk: annual rainfall critically low for rain-fed agriculture",
        ("Establish water storage capacity for minimum 6-month supply before occupying site",
         "Plant drought-tolerant windbreaks and ground cover to reduce evaporation"),
        f"Drought risk: only {_rain(s)}mm annual rainfall.",
    )),
    (lambda s: _rain(s) < 500, lambda s: Finding(
        CLIMATE,
        "Drought-prone: seasonal water scarcity likely during dry months",
        ("Maintain 3-month water reserve at all times; implement greywater recycling",),
        f"Drought-prone: {_rain(s)}mm annual rainfall.",
    )),
))

heat_check = _banded((
    (lambda s: _tmax(s) > 45, lambda s: Finding(
        CLIMATE,
        f"Extreme heat risk: temperatures exceeding 45°C (recorded max: {_tmax(s)}°C)",
        ("Shade all outdoor work areas; restrict heavy labor to early morning and evening",
         "Ensure access to sufficient water (>3L/person/day during extreme heat)",
         "Passive cooling: thermal mass building, underground/semi-buried rooms"),
        f"Extreme heat: max temp {_tmax(s)}°C.",
    )),
    (lambda s: _tmax(s) > 38, lambda s: Finding(
        CLIMATE,
        f"High heat risk: temperatures above 38°C (max: {_tmax(s)}°C)",
        ("Passive cooling and shade structures essential; cross-ventilation in all buildings",),
        f"High heat: max temp {_tmax(s)}°C.",
    )),
))

cold_check = _banded((
    (lambda s: _tmin(s) < -25, lambda s: Finding(
        CLIMATE,
        f"Extreme cold risk: temperatures below -25°C (min: {_tmin(s)}°C)",
        ("All water pipes must be buried below frost depth or insulated from freezing",
         "Emergency thermal shelter capacity for human survival during cold snaps",
         "Sufficient fuel or energy storage for multi-week heating without resupply"),
        f"Extreme cold: min temp {_tmin(s)}°C.",
    )),
    (lambda s: _tmin(s) < -10, lambda s: Finding(
        CLIMATE,
        f"Severe cold risk: regular deep frost (min: {_tmin(s)}°C)",
        ("Insulate all water infrastructure; ensure reliable heating system before winter",),
        f"Severe cold: min temp {_tmin(s)}°C.",
    )),
))

wind_check = _banded((
    (lambda s: _wind(s) > 40, lambda s: Finding(
        CLIMATE,
        f"High wind and storm risk: average wind speed {_wind(s)} km/h indicates frequent storms",
        ("All structures require engineered wind bracing and secured roof connections",
         "Plant dense windbreaks on prevailing wind side before construction"),
        f"High wind risk: avg {_wind(s)} km/h.",
    )),
    (lambda s: _wind(s) > 25, lambda s: Finding(
        CLIMATE,
        f"Elevated wind exposure: average {_wind(s)} km/h",
        ("Use wind-resistant roof design; create windbreaks with fast-growing trees",),
        f"Elevated wind: avg {_wind(s)} km/h.",
    )),
))


def erosion_check(s: EnvironmentalSnapshot) -> Optional[Finding]:
    slope = s.terrain.slope_assessment
    if slope not in (SlopeAssessment.STEEP, SlopeAssessment.MODERATE) or _rain(s) <= 800:
        return None
    return Finding(
        TERRAIN,
        "Soil erosion risk: steep or moderate slope with high rainfall is a severe erosion combination",
        ("Implement contour swales immediately to slow runoff velocity",
         "Plant perennial ground cover and pioneer species on bare slopes before first rains",
         "No bare soil: mulch all disturbed areas within 48 hours"),
        f"Erosion risk: {slope.value} slope + {_rain(s)}mm rainfall.",
    )


def landslide_check(s: EnvironmentalSnapshot) -> Optional[Finding]:
    if s.terrain.slope_assessment != SlopeAssessment.STEEP or _rain(s) <= 1200:
        return None
    return Finding(
        TERRAIN,
        "Landslide risk: steep terrain with very high rainfall; do not build on or directly below steep slopes",
        ("Conduct thorough site assessment; build only on geologically stable ground",
         "Maintain >50m buffer below all steep unstable slopes"),
        "Landslide risk: steep slope + very high rainfall.",
    )


def seismic_check(s: EnvironmentalSnapshot) -> Finding:
    # No seismic source is integrated; always surfaced as a coverage gap
    return Finding(
        NATURAL,
        "Seismic risk: not assessed (no seismic data source integrated in V0.1)",
        ("Verify seismic zone with local geological survey before construction",),
        "Seismic: V0.1 limitation, flagged for future integration with USGS seismic data.",
    )


HAZARD_CHECKS: Tuple[Check, ...] = (
    flood_check,
    coastal_check,
    drought_check,
    heat_check,
    cold_check,
    wind_check,
    erosion_check,
    landslide_check,
    seismic_check,
)


def risks_assessment(snapshot: EnvironmentalSnapshot) -> RiskAssessment:
    """Identify environmental and climate hazards for the snapshot's location."""
    lists = {NATURAL: [], CLIMATE: [], TERRAIN: []}
    mitigations: List[str] = []
    trace: List[str] = [
        f"Assessing risks for {snapshot.climate.climate_zone.value} zone, "
        f"{snapshot.terrain.elevation_m}m elevation, {snapshot.terrain.slope_assessment.value} slope."
    ]

    for check in HAZARD_CHECKS:
        finding = check(snapshot)
        if finding is None:
            continue
        lists[finding.category].append(finding.description)
        mitigations.extend(finding.mitigations)
        trace.append(finding.trace)

    # Only the mandatory seismic entry fired
    if len(lists[NATURAL]) == 1 and not lists[CLIMATE] and not lists[TERRAIN]:
        lists[CLIMATE].append(NO_MAJOR_RISKS)
        trace.append("No significant hazards detected. Conditions appear relatively stable.")

    log.debug(f"Risk assessment fired {len(trace) - 1} rule(s)")

    return RiskAssessment(
        natural_hazards=lists[NATURAL],
        climate_risks=lists[CLIMATE],
        terrain_risks=lists[TERRAIN],
        mitigation_strategies=mitigations,
        reasoning_trace=trace,
    )
