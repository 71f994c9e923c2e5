"""
Food Strategy Module.

Crop and technique recommendations keyed on climate zone, plus a growing
season estimate from the temperature range. The season estimate does not
look at the zone label, so the two can disagree for unusual inputs.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from core.classifiers import growing_season_label
from core.models import ClimateZone, EnvironmentalSnapshot, FoodStrategy


@dataclass(frozen=True)
class FoodProfile:
    """Fixed crop/technique set for one climate zone."""
    assessment: str
    crops: Tuple[str, ...]
    techniques: Tuple[str, ...]
    summary: str


ZONE_PROFILES: Dict[ClimateZone, FoodProfile] = {
    ClimateZone.TROPICAL: FoodProfile(
        assessment="Tropical zone: selecting high-yield year-round food crops.",
        crops=(
            "Cassava (drought-tolerant, high calorie, 12-month harvest)",
            "Sweet potato (fast-growing, nutritious ground cover)",
            "Banana and plantain (perennial, high yield)",
            "Moringa (fast-growing, highly nutritious leafy tree)",
            "Coconut (multi-purpose: food, oil, water, materials)",
            "Papaya (fast bearing, 6-month maturity)",
            "Taro (shade-tolerant, flood-resilient)",
            "Yam (high calorie, stores well)",
            "Breadfruit (tree crop, minimal maintenance)",
            "Legumes: cowpea, pigeon pea (nitrogen-fixing)",
        ),
        techniques=(
            "Agroforestry: multi-story canopy system (trees, shrubs, ground crops)",
            "Polyculture: never monoculture, always mixed species",
            "Heavy mulching (15–20cm) to maintain soil moisture",
            "Nitrogen-fixing cover crops between rows",
            "Swale-based water infiltration for root zone moisture",
            "Composting using biomass from persistent vegetation",
            "Perennial staples prioritized over annual crops",
        ),
        summary="Selected perennial-dominant tropical agroforestry approach.",
    ),
    ClimateZone.ARID: FoodProfile(
        assessment="Arid zone: selecting drought-tolerant crops and water-minimal growing systems.",
        crops=(
            "Date palm (deep-rooted, drought-tolerant, high calorie)",
            "Millet and sorghum (drought-resistant grains)",
            "Drought-resistant beans (tepary bean, moth bean)",
            "Amaranth (heat and drought tolerant, nutritious)",
            "Prickly pear cactus (water source + food)",
            "Jujube (drought-tolerant fruit tree)",
            "Barley (lower water need than wheat)",
            "Desert herbs: rosemary, thyme, sage (medicinal + culinary)",
        ),
        techniques=(
            "Drip irrigation (80% water reduction vs. flood irrigation)",
            "Wicking beds for intensive vegetable production",
            "Zai pits: micro-basins to concentrate rainfall at plant base",
            "Shade structures to reduce heat stress on crops",
            "Deep 15–20cm mulch to cut soil evaporation",
            "Keyhole garden beds for water efficiency",
            "Seasonal planting timed to any rainfall events",
        ),
        summary="Selected drought-tolerant crops with zai pit and drip irrigation approach.",
    ),
    ClimateZone.TEMPERATE: FoodProfile(
        assessment="Temperate zone: selecting diverse seasonal and perennial food crops.",
        crops=(
            "Potato (high yield per m², stores well)",
            "Wheat and rye (primary grain crops)",
            "Legumes: peas, beans, lentils (protein + nitrogen fixation)",
            "Leafy greens: kale, chard, spinach (cold-tolerant)",
            "Root vegetables: carrots, beets, parsnips, turnips",
            "Fruit trees: apple, pear, plum, cherry (perennial)",
            "Berries: strawberry, raspberry, currant, gooseberry",
            "Squash and pumpkin (stores well, high calorie)",
            "Herbs: parsley, chives, mint (year-round)",
        ),
        techniques=(
            "Crop rotation (4-year cycle: grain → legume → root → brassica)",
            "Companion planting: Three Sisters (corn, beans, squash)",
            "Hot composting to maintain soil fertility",
            "Cover cropping with clover or vetch in winter",
            "Raised beds for improved drainage and earlier spring planting",
            "Food forest design with 7-layer canopy for perennials",
            "Seed saving of locally-adapted varieties",
        ),
        summary="Selected diverse seasonal growing with crop rotation and food forest integration.",
    ),
    ClimateZone.CONTINENTAL: FoodProfile(
        assessment="Continental zone: selecting cold-hardy crops with season extension methods.",
        crops=(
            "Root vegetables: potato, carrot, beet, turnip, parsnip (store all winter)",
            "Cabbages and brassicas: cold-hardy, high nutrition",
            "Rye and barley (cold-tolerant grains)",
            "Hardy fruit trees: apple, pear, plum (cold-adapted varieties)",
            "Garlic and onion (plant autumn, harvest summer)",
            "Dried beans and lentils (long storage)",
            "Sunflower (oil + seeds + bird attraction)",
            "Herbs: dill, caraway, horseradish (cold-tolerant)",
        ),
        techniques=(
            "Cold frames and low tunnels to extend growing season 4–6 weeks",
            "Root cellars for winter storage of vegetables",
            "Short-season crop varieties (60–70 day maturity)",
            "Autumn planting of garlic and cold-tolerant greens",
            "Snow catchment and melt management for spring irrigation",
            "Windbreaks of hardy trees to protect growing areas",
            "Greenhouse or polytunnel for winter greens production",
        ),
        summary="Selected cold-hardy varieties with season extension and root cellar storage.",
    ),
    ClimateZone.POLAR: FoodProfile(
        assessment="Polar/extreme cold zone: greenhouse growing is essential for food production.",
        crops=(
            "Leafy greens: lettuce, spinach, kale (fast-growing under lights)",
            "Root vegetables: radish, carrot, beet (compact varieties)",
            "Microgreens for dense nutrition in small space",
            "Herbs: parsley, chives, mint",
            "Cherry tomatoes (with supplemental light)",
            "Dwarf pea varieties",
        ),
        techniques=(
            "Insulated greenhouse or polytunnel as primary growing structure",
            "Hydroponic nutrient film technique (NFT) for water efficiency",
            "LED supplemental lighting during polar winter",
            "Thermal mass (water barrels) inside greenhouse for overnight heat",
            "Algae cultivation for protein supplementation",
            "Preserved and fermented foods from short summer harvest",
        ),
        summary="Selected indoor/greenhouse growing system for polar conditions.",
    ),
}

# Unrecognised zones get the most conservative (indoor) set
FALLBACK_PROFILE = ZONE_PROFILES[ClimateZone.POLAR]


def select_food_profile(zone: ClimateZone) -> FoodProfile:
    return ZONE_PROFILES.get(zone, FALLBACK_PROFILE)


def food_strategy(snapshot: EnvironmentalSnapshot) -> FoodStrategy:
    """Recommend crops and growing techniques for the snapshot's climate."""
    climate = snapshot.climate
    zone = climate.climate_zone
    trace = [
        f"Climate zone: {zone.value}. Avg temp: {climate.avg_temperature_c}°C. "
        f"Rainfall: {climate.annual_rainfall_mm}mm."
    ]

    profile = select_food_profile(zone)
    if zone not in ZONE_PROFILES:
        trace.append(f"Unrecognized climate zone '{zone.value}': using indoor/greenhouse fallback set.")
    trace.append(profile.assessment)
    trace.append(profile.summary)

    growing_seasons = growing_season_label(
        climate.avg_temperature_c, climate.min_temperature_c, climate.max_temperature_c
    )
    trace.append(f"Growing season estimate: {growing_seasons}.")

    return FoodStrategy(
        climate_zone=zone.value,
        recommended_crops=list(profile.crops),
        growing_seasons=growing_seasons,
        techniques=list(profile.techniques),
        reasoning_trace=trace,
    )
