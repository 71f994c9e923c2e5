"""
Energy Strategy Module.

Primary source is chosen by a priority cascade (micro-hydro, solar, wind,
biomass). Biomass closes the cascade because it needs no manufactured
equipment.
"""

from dataclasses import dataclass
from typing import Callable, List, Tuple

from core.classifiers import first_match, round_half_up
from core.models import EnergyStrategy, EnvironmentalSnapshot

SOLAR_PRIMARY_HOURS = 5.0
SOLAR_SECONDARY_WIND_KMH = 15.0
WIND_PRIMARY_KMH = 20.0
HYDRO_MIN_RAINFALL_MM = 1000
HYDRO_MIN_ELEVATION_M = 500

UNIVERSAL_TECHNIQUES = (
    "Energy audit first: reduce demand before sizing supply systems",
    "Natural ventilation/passive design reduces air conditioning to zero",
)


@dataclass(frozen=True)
class EnergyConditions:
    """Inputs the cascade predicates look at."""
    sunshine_hours_daily: float
    avg_wind_speed_kmh: float
    annual_rainfall_mm: float
    elevation_m: int


@dataclass(frozen=True)
class EnergyProfile:
    name: str
    primary_source: str
    secondary_sources: Tuple[str, ...]
    techniques: Tuple[str, ...]
    summary: str


MICRO_HYDRO = EnergyProfile(
    name="micro-hydro",
    primary_source="Micro-hydroelectric (run-of-river)",
    secondary_sources=("Solar photovoltaic", "Biomass gasification", "Solar thermal water heating"),
    techniques=(
        "Run-of-river micro-hydro (1–100kW): no large dam required",
        "Pelton wheel or Turgo turbine for high-head, low-flow sites",
        "Crossflow turbine for low-head, high-flow sites",
        "Battery bank or gravity water storage for load shifting",
        "Solar PV as backup during low-flow dry season",
        "Biomass cookstove with back-boiler for water heating",
    ),
    summary="Selected micro-hydro primary with solar + biomass backup.",
)

SOLAR = EnergyProfile(
    name="solar",
    primary_source="Solar photovoltaic",
    secondary_sources=("Solar thermal water and space heating", "Biomass cookstove and biogas"),
    techniques=(
        "Off-grid solar PV array (start with 500W–2kW per household)",
        "MPPT charge controller for battery bank",
        "Deep-cycle battery storage (lead-acid or lithium if available)",
        "Solar water heater (thermosiphon flat-plate collector)",
        "Passive solar design to reduce heating energy demand",
        "LED lighting only to minimize electrical load",
        "Biomass rocket stove for cooking (90% efficient vs. open fire)",
    ),
    summary="Selected solar PV primary with solar thermal + biomass backup.",
)

MICRO_WIND = EnergyProfile(
    name="micro-wind",
    primary_source="Micro-wind turbine",
    secondary_sources=("Solar photovoltaic", "Biomass cookstove", "Solar thermal"),
    techniques=(
        "Small wind turbine (500W–5kW) on tower 10–15m above obstacles",
        "Battery storage to smooth intermittent wind generation",
        "Hybrid controller combining wind and solar inputs",
        "Solar PV array sized to cover calm-wind periods",
        "Biomass as cooking and heating fallback",
    ),
    summary="Selected micro-wind primary with solar + biomass backup.",
)

BIOMASS = EnergyProfile(
    name="biomass",
    primary_source="Biomass (wood gasification and biogas)",
    secondary_sources=(
        "Solar photovoltaic (even low-sun panels generate useful power)",
        "Solar thermal water heating",
    ),
    techniques=(
        "High-efficiency rocket mass heater for space heating (10× less fuel than open fire)",
        "Rocket stove for cooking (uses 75–90% less wood than open fire)",
        "Biogas digester fed by animal manure and organic waste",
        "Biogas for lighting (gas mantle lamp) and cooking",
        "Even 1–2h/day sun generates useful solar PV output for LED lighting",
        "Community-scale wood lot management for sustainable fuel supply",
    ),
    summary="Selected biomass primary system with solar supplement and biogas digester.",
)

# Order matters: first match wins, BIOMASS is the default
PRIMARY_SOURCE_CASCADE: Tuple[Tuple[Callable[[EnergyConditions], bool], EnergyProfile], ...] = (
    (lambda c: c.annual_rainfall_mm >= HYDRO_MIN_RAINFALL_MM and c.elevation_m >= HYDRO_MIN_ELEVATION_M,
     MICRO_HYDRO),
    (lambda c: c.sunshine_hours_daily >= SOLAR_PRIMARY_HOURS, SOLAR),
    (lambda c: c.avg_wind_speed_kmh >= WIND_PRIMARY_KMH, MICRO_WIND),
)


def daily_sunshine_hours(sunshine_hours_annual: float) -> float:
    """Average daily sunshine, rounded to one decimal."""
    return round_half_up(sunshine_hours_annual / 365, 1)


def select_energy_profile(conditions: EnergyConditions) -> EnergyProfile:
    return first_match(PRIMARY_SOURCE_CASCADE, conditions, default=BIOMASS)


def _assessment(profile: EnergyProfile, c: EnergyConditions) -> str:
    if profile is MICRO_HYDRO:
        return (
            f"High rainfall ({c.annual_rainfall_mm}mm) + elevation ({c.elevation_m}m): "
            "micro-hydro is viable primary source."
        )
    if profile is SOLAR:
        return f"Strong sunshine ({c.sunshine_hours_daily}h/day): solar PV is viable primary source."
    if profile is MICRO_WIND:
        return f"High wind ({c.avg_wind_speed_kmh} km/h avg): micro-wind is viable primary source."
    return "Limited solar and wind resources: biomass as primary energy source."


def energy_strategy(snapshot: EnvironmentalSnapshot) -> EnergyStrategy:
    """Recommend renewable energy sources for the snapshot's location."""
    climate = snapshot.climate
    conditions = EnergyConditions(
        sunshine_hours_daily=daily_sunshine_hours(climate.sunshine_hours_annual),
        avg_wind_speed_kmh=climate.avg_wind_speed_kmh,
        annual_rainfall_mm=climate.annual_rainfall_mm,
        elevation_m=snapshot.terrain.elevation_m,
    )
    trace: List[str] = [
        f"Sunshine: {conditions.sunshine_hours_daily}h/day ({climate.sunshine_hours_annual}h/yr). "
        f"Wind: {climate.avg_wind_speed_kmh} km/h avg. Rainfall: {climate.annual_rainfall_mm}mm."
    ]

    profile = select_energy_profile(conditions)
    trace.append(_assessment(profile, conditions))

    secondary_sources = list(profile.secondary_sources)
    if profile is SOLAR and conditions.avg_wind_speed_kmh >= SOLAR_SECONDARY_WIND_KMH:
        secondary_sources.insert(0, "Micro-wind turbine")
        trace.append(f"Wind speed {conditions.avg_wind_speed_kmh} km/h: added micro-wind as secondary source.")

    trace.append(profile.summary)
    techniques = list(profile.techniques) + list(UNIVERSAL_TECHNIQUES)

    return EnergyStrategy(
        primary_source=profile.primary_source,
        secondary_sources=secondary_sources,
        estimated_solar_hours_daily=conditions.sunshine_hours_daily,
        techniques=techniques,
        reasoning_trace=trace,
    )
