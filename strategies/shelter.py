"""
Shelter Strategy Module.

Locally-sourceable materials and construction techniques per climate zone,
extended by terrain, flood, coastal and wind modifiers. Local materials only.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from core.models import ClimateZone, EnvironmentalSnapshot, ShelterStrategy, SlopeAssessment


@dataclass(frozen=True)
class ShelterProfile:
    assessment: str
    materials: Tuple[str, ...]
    techniques: Tuple[str, ...]
    considerations: Tuple[str, ...]
    summary: str


ZONE_PROFILES: Dict[ClimateZone, ShelterProfile] = {
    ClimateZone.TROPICAL: ShelterProfile(
        assessment="Tropical zone: prioritizing ventilation, rain shedding, and moisture-resistant materials.",
        materials=(
            "Bamboo (fast-growing, high tensile strength, locally abundant)",
            "Timber from sustainably managed local hardwoods",
            "Clay bricks (sun-dried adobe or fired)",
            "Thatch from local grasses (alang-alang, palm frond, sago)",
            "Split bamboo for flooring and wall screens",
            "Lime plaster from locally burned limestone",
        ),
        techniques=(
            "Raised platform foundation (0.5–1m off ground) for ventilation and flood protection",
            "Steep roof pitch (>35°) for rapid rain shedding",
            "Wide eaves (>1m overhang) to protect walls from rain",
            "Cross-ventilation: openings on opposing walls",
            "Screen walls (woven bamboo) for airflow without rain entry",
            "Covered outdoor spaces to expand usable area in rain",
        ),
        considerations=(
            "Humidity: treat bamboo with borax-boric acid solution to prevent mold and insects",
            "Termites: raise all wood off soil, use termite-resistant species",
            "Cyclone zones: use tie-downs and triangulated bracing on all roof structures",
        ),
        summary="Selected raised bamboo/timber construction with steep thatch roof.",
    ),
    ClimateZone.ARID: ShelterProfile(
        assessment="Arid zone: thermal mass materials to moderate extreme diurnal temperature swings.",
        materials=(
            "Adobe (sun-dried mud brick) as primary walling material",
            "Rammed earth (pisé) for load-bearing walls",
            "Stone (locally quarried granite, sandstone, or limestone)",
            "Lime plaster for waterproofing exterior surfaces",
            "Stabilized compressed earth blocks (SCEB) where equipment available",
            "Palm timber or desert hardwoods for roof structure",
        ),
        techniques=(
            "Thick walls (40–60cm) for thermal mass: absorbs heat by day, releases at night",
            "Small, deeply-recessed windows on sun-facing walls to reduce solar gain",
            "Flat or low-pitch roof with high parapet for shade",
            "Courtyard design: central shaded outdoor space creates microclimate",
            "Barrel-vaulted roof (no timber needed) from adobe or fired brick",
            "Buried or semi-buried rooms for natural cooling",
        ),
        considerations=(
            "Waterproofing: lime or clay render must be maintained annually",
            "Wind: seal all gaps to prevent dust/sand infiltration",
            "Flash flood risk at valley floor: build on slightly elevated ground",
        ),
        summary="Selected thick adobe/rammed earth construction with thermal mass courtyard design.",
    ),
    ClimateZone.TEMPERATE: ShelterProfile(
        assessment="Temperate zone: balanced insulation and weather resistance.",
        materials=(
            "Timber framing from locally milled softwood or hardwood",
            "Cob (clay, sand, straw mix) for thick insulating walls",
            "Stone masonry for foundations and ground-level walls",
            "Fired clay brick where kiln resources available",
            "Straw bale for super-insulated alternative walls",
            "Reed or thatch for roof (good insulation, 30+ year lifespan)",
        ),
        techniques=(
            "Insulated walls (R-value equivalent to modern standards)",
            "Moderate roof pitch (25–35°) for rain shedding and snow load",
            "South-facing main windows (northern hemisphere) for passive solar gain",
            "Thermal buffer zones: unheated porch or attached greenhouse",
            "Root cellar integrated into north side of structure",
            "Timber mortise-and-tenon joinery without metal fasteners",
        ),
        considerations=(
            "Moisture: ensure cob and straw bale have raised stone foundation",
            "Fire: wood-burning stove with proper chimney and spark protection",
            "Maintenance: external lime wash or clay render annually",
        ),
        summary="Selected timber-frame or cob construction with passive solar orientation.",
    ),
    ClimateZone.CONTINENTAL: ShelterProfile(
        assessment=(
            "Continental zone: maximum insulation and structural resilience for extreme cold and snow load."
        ),
        materials=(
            "Log construction from local timber (pine, spruce, fir)",
            "Stone for foundations and lower walls",
            "Earth-sheltered construction (high insulation, frost protection)",
            "Wool, straw, or wood fiber for wall insulation",
            "Clay tile or metal (salvaged) for steep snow-shedding roof",
            "Lime mortar for stone and log chinking",
        ),
        techniques=(
            "Steep roof pitch (>45°) to shed heavy snow loads",
            "Earth berming on north-facing walls for insulation",
            "Triple-glazed or shuttered windows on all sides",
            "Vestibule/airlock entry to prevent heat loss on entry",
            "South-facing glazing maximized for winter solar gain",
            "Compact floor plan to minimize heat loss surface area",
        ),
        considerations=(
            "Foundation frost: footings must extend below frost line depth",
            "Snow load: roof structure engineered for 200–400 kg/m² snow accumulation",
            "Ice dam prevention: continuous insulation at roof-wall junction",
        ),
        summary="Selected log or earth-sheltered construction with south-facing passive solar design.",
    ),
    ClimateZone.POLAR: ShelterProfile(
        assessment="Polar zone: extreme insulation and minimal thermal bridging are critical for survival.",
        materials=(
            "Insulated structural panels (if prefabricated materials accessible)",
            "Stone masonry for outer windbreak walls",
            "Earth-sheltering with turf roof (traditional arctic technique)",
            "Dense wool, animal hide, or cork for insulation",
            "Timber (where available) for interior structure",
        ),
        techniques=(
            "Earth-sheltered or semi-buried structure to use geothermal stability",
            "Entrance tunnel (tunnel airlock) facing away from prevailing wind",
            "Minimal window area with triple or quadruple glazing",
            "Compact dome or barrel form to minimize surface-to-volume ratio",
            "Interior thermal mass with wood or masonry stove centrally located",
            "Insulated floor slab critical: ground contact is primary heat loss path",
        ),
        considerations=(
            "Permafrost: if present, build on piles or gravel pad to prevent frost heave",
            "Wind: all penetrations heavily sealed; structure must resist 150+ km/h gusts",
            "Condensation: ventilation-heat exchanger (HRV) to prevent moisture buildup",
        ),
        summary="Selected earth-sheltered polar construction with maximum insulation and airlock entry.",
    ),
}

FALLBACK_PROFILE = ZONE_PROFILES[ClimateZone.POLAR]

SLOPED = (SlopeAssessment.STEEP, SlopeAssessment.MODERATE)


def select_shelter_profile(zone: ClimateZone) -> ShelterProfile:
    return ZONE_PROFILES.get(zone, FALLBACK_PROFILE)


def shelter_strategy(snapshot: EnvironmentalSnapshot) -> ShelterStrategy:
    """Recommend building materials and construction techniques."""
    climate = snapshot.climate
    terrain = snapshot.terrain
    zone = climate.climate_zone
    slope = terrain.slope_assessment
    trace: List[str] = [
        f"Climate zone: {zone.value}. Slope: {slope.value}. Elevation: {terrain.elevation_m}m."
    ]

    profile = select_shelter_profile(zone)
    if zone not in ZONE_PROFILES:
        trace.append(f"Unrecognized climate zone '{zone.value}': using polar construction as fallback.")
    trace.append(profile.assessment)
    materials = list(profile.materials)
    techniques = list(profile.techniques)
    considerations = list(profile.considerations)
    trace.append(profile.summary)

    # Terrain
    if slope in SLOPED:
        techniques.append("Terraced foundation on sloped ground to create level building platform")
        techniques.append("Retaining walls from local stone or gabion baskets to stabilize slope")
        considerations.append("Landslide risk on steep slopes: vegetate all disturbed soil immediately")
        trace.append(f"Slope ({slope.value}): added terracing and retaining wall guidance.")

    # Flood
    if terrain.elevation_m < 50 and climate.annual_rainfall_mm > 1000:
        techniques.append("Raised platform foundation or stilts to clear potential flood level")
        considerations.append("Flood risk: site building on slightly elevated ground; avoid valley floors")
        trace.append("Low elevation + high rainfall: raised platform recommended as flood precaution.")

    # Coastal
    if snapshot.location.is_coastal:
        materials.append("Salt-resistant lime render for external finishes")
        considerations.append("Coastal salt air: avoid uncoated steel; use galvanized or stainless fixings only")
        considerations.append("Storm surge: site above historical flood line; verify with local knowledge")
        trace.append("Coastal location: added corrosion and storm surge guidance.")

    # Wind
    if climate.avg_wind_speed_kmh > 30:
        techniques.append("Roof tie-down straps anchored through walls to foundation")
        techniques.append("Windbreak walls or dense hedgerow on prevailing wind side")
        trace.append(
            f"High average wind ({climate.avg_wind_speed_kmh} km/h): added structural wind resistance measures."
        )

    return ShelterStrategy(
        recommended_materials=materials,
        construction_techniques=techniques,
        climate_considerations=considerations,
        reasoning_trace=trace,
    )
