"""
Core data models for the Blueprint Engine.

The environmental snapshot is frozen: every strategy module reads the same
values. Strategy outputs and the final blueprint serialise to the JSON shape
consumed by rendering and export collaborators via ``to_dict()``.
"""

import math
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from core.errors import BlueprintEngineError


# ═══════════════════════════════════════════════════════════════════════════
# CATEGORICAL LABELS
# ═══════════════════════════════════════════════════════════════════════════
class ClimateZone(Enum):
    """Simplified Köppen-style climate zones."""
    TROPICAL = "tropical"
    ARID = "arid"
    TEMPERATE = "temperate"
    CONTINENTAL = "continental"
    POLAR = "polar"
    UNKNOWN = "unknown"  # unrecognised input; strategy modules fall back explicitly

    @classmethod
    def parse(cls, value: Any) -> "ClimateZone":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.UNKNOWN


class SeasonalVariation(Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class SlopeAssessment(Enum):
    FLAT = "flat"
    GENTLE = "gentle"
    MODERATE = "moderate"
    STEEP = "steep"


class SourceStatus(Enum):
    """Health of a single external data provider."""
    SUCCESS = "success"
    FALLBACK = "fallback"
    FAILED = "failed"


class ConfidenceLevel(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


WIND_DIRECTIONS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


def _parse_enum(enum_cls, value: Any, field_name: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        raise BlueprintEngineError(f"Invalid {field_name}: {value!r}")


def _require_number(data: Dict, key: str, section: str) -> float:
    value = data.get(key) if isinstance(data, dict) else None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise BlueprintEngineError(f"Missing or non-numeric field {section}.{key}")
    if not math.isfinite(value):
        raise BlueprintEngineError(f"Non-finite field {section}.{key}: {value!r}")
    return value


def _require_section(data: Dict, key: str) -> Dict:
    section = data.get(key) if isinstance(data, dict) else None
    if not isinstance(section, dict):
        raise BlueprintEngineError(f"Missing snapshot section: {key}")
    return section


def _require_source_list(data: Dict) -> List[Dict]:
    # An absent key means no sources; anything else must be a list of objects
    sources = data.get("data_sources", [])
    if not isinstance(sources, (list, tuple)) or not all(isinstance(s, dict) for s in sources):
        raise BlueprintEngineError(f"Malformed data_sources: expected a list of objects, got {sources!r}")
    return list(sources)


# ═══════════════════════════════════════════════════════════════════════════
# ENVIRONMENTAL SNAPSHOT
# ═══════════════════════════════════════════════════════════════════════════
@dataclass(frozen=True)
class Coordinates:
    """A WGS84 point. Range is checked by the guardrail, not here."""
    latitude: float
    longitude: float

    def to_dict(self) -> Dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True)
class ClimateData:
    """Annualised climate observations for one point."""
    annual_rainfall_mm: float
    avg_temperature_c: float
    min_temperature_c: float
    max_temperature_c: float
    dominant_wind_direction: str
    avg_wind_speed_kmh: float
    humidity_percent: float
    sunshine_hours_annual: float
    climate_zone: ClimateZone
    seasonal_variation: SeasonalVariation

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["climate_zone"] = self.climate_zone.value
        result["seasonal_variation"] = self.seasonal_variation.value
        return result

    @classmethod
    def from_dict(cls, data: Dict) -> "ClimateData":
        return cls(
            annual_rainfall_mm=_require_number(data, "annual_rainfall_mm", "climate"),
            avg_temperature_c=_require_number(data, "avg_temperature_c", "climate"),
            min_temperature_c=_require_number(data, "min_temperature_c", "climate"),
            max_temperature_c=_require_number(data, "max_temperature_c", "climate"),
            dominant_wind_direction=str(data.get("dominant_wind_direction", "unknown")),
            avg_wind_speed_kmh=_require_number(data, "avg_wind_speed_kmh", "climate"),
            humidity_percent=_require_number(data, "humidity_percent", "climate"),
            sunshine_hours_annual=_require_number(data, "sunshine_hours_annual", "climate"),
            climate_zone=ClimateZone.parse(data.get("climate_zone")),
            seasonal_variation=_parse_enum(
                SeasonalVariation, data.get("seasonal_variation", "moderate"), "seasonal_variation"
            ),
        )


@dataclass(frozen=True)
class TerrainData:
    elevation_m: int
    slope_assessment: SlopeAssessment

    def to_dict(self) -> Dict[str, Any]:
        return {"elevation_m": self.elevation_m, "slope_assessment": self.slope_assessment.value}

    @classmethod
    def from_dict(cls, data: Dict) -> "TerrainData":
        return cls(
            elevation_m=int(_require_number(data, "elevation_m", "terrain")),
            slope_assessment=_parse_enum(
                SlopeAssessment, data.get("slope_assessment"), "slope_assessment"
            ),
        )


@dataclass(frozen=True)
class LocationData:
    """Reverse-geocoded place description."""
    display_name: str
    country: str
    country_code: str
    region: str
    is_coastal: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> "LocationData":
        return cls(
            display_name=str(data.get("display_name", "Unknown location")),
            country=str(data.get("country", "Unknown")),
            country_code=str(data.get("country_code", "xx")),
            region=str(data.get("region", "Unknown")),
            is_coastal=bool(data.get("is_coastal", False)),
        )


@dataclass(frozen=True)
class DataSourceRecord:
    """One external provider consulted while building the snapshot."""
    source: str
    endpoint: str
    fetched_at: str  # ISO 8601
    status: SourceStatus
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "source": self.source,
            "endpoint": self.endpoint,
            "fetched_at": self.fetched_at,
            "status": self.status.value,
        }
        if self.error is not None:
            result["error"] = self.error
        return result

    @classmethod
    def from_dict(cls, data: Dict) -> "DataSourceRecord":
        return cls(
            source=str(data.get("source", "unknown")),
            endpoint=str(data.get("endpoint", "")),
            fetched_at=str(data.get("fetched_at", "")),
            status=_parse_enum(SourceStatus, data.get("status"), "data source status"),
            error=data.get("error"),
        )


@dataclass(frozen=True)
class EnvironmentalSnapshot:
    """
    The frozen set of climate/terrain/location values for one coordinate.
    Every strategy module receives the same instance.
    """
    coordinates: Coordinates
    climate: ClimateData
    terrain: TerrainData
    location: LocationData
    data_sources: Tuple[DataSourceRecord, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "coordinates": self.coordinates.to_dict(),
            "climate": self.climate.to_dict(),
            "terrain": self.terrain.to_dict(),
            "location": self.location.to_dict(),
            "data_sources": [s.to_dict() for s in self.data_sources],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "EnvironmentalSnapshot":
        """
        Build a snapshot from its JSON shape.

        Raises:
            BlueprintEngineError: a required section or numeric field is missing
                or non-finite, or data_sources is not a list of objects
        """
        coords = _require_section(data, "coordinates")
        return cls(
            coordinates=Coordinates(
                latitude=_require_number(coords, "latitude", "coordinates"),
                longitude=_require_number(coords, "longitude", "coordinates"),
            ),
            climate=ClimateData.from_dict(_require_section(data, "climate")),
            terrain=TerrainData.from_dict(_require_section(data, "terrain")),
            location=LocationData.from_dict(_require_section(data, "location")),
            data_sources=tuple(
                DataSourceRecord.from_dict(s) for s in _require_source_list(data)
            ),
        )


# ═══════════════════════════════════════════════════════════════════════════
# STRATEGY OUTPUTS
# ═══════════════════════════════════════════════════════════════════════════
@dataclass
class WaterStrategy:
    primary_method: str
    techniques: List[str]
    estimated_annual_rainfall_mm: float
    storage_recommendation: str
    reasoning_trace: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class FoodStrategy:
    climate_zone: str
    recommended_crops: List[str]
    growing_seasons: str
    techniques: List[str]
    reasoning_trace: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ShelterStrategy:
    recommended_materials: List[str]
    construction_techniques: List[str]
    climate_considerations: List[str]
    reasoning_trace: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class EnergyStrategy:
    primary_source: str
    secondary_sources: List[str]
    estimated_solar_hours_daily: float
    techniques: List[str]
    reasoning_trace: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class RiskAssessment:
    natural_hazards: List[str]
    climate_risks: List[str]
    terrain_risks: List[str]
    mitigation_strategies: List[str]
    reasoning_trace: List[str] = field(default_factory=list)

    @property
    def hazard_count(self) -> int:
        return len(self.natural_hazards) + len(self.climate_risks) + len(self.terrain_risks)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "natural_hazards": list(self.natural_hazards),
            "climate_risks": list(self.climate_risks),
            "terrain_risks": list(self.terrain_risks),
            "mitigation_strategies": list(self.mitigation_strategies),
            "reasoning_trace": list(self.reasoning_trace),
        }


# ═══════════════════════════════════════════════════════════════════════════
# BLUEPRINT
# ═══════════════════════════════════════════════════════════════════════════
@dataclass
class ReasoningTrace:
    """Aggregated explanation of how the blueprint was produced."""
    data_sources_used: List[DataSourceRecord]
    rules_applied: List[str]
    confidence_level: ConfidenceLevel
    limitations: List[str]
    ethical_checks_passed: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data_sources_used": [s.to_dict() for s in self.data_sources_used],
            "rules_applied": list(self.rules_applied),
            "confidence_level": self.confidence_level.value,
            "limitations": list(self.limitations),
            "ethical_checks_passed": list(self.ethical_checks_passed),
        }


@dataclass(frozen=True)
class BlueprintMetadata:
    coordinates: Coordinates
    location_name: str
    generated_at: str  # ISO 8601
    version: str
    disclaimer: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "coordinates": self.coordinates.to_dict(),
            "location_name": self.location_name,
            "generated_at": self.generated_at,
            "version": self.version,
            "disclaimer": self.disclaimer,
        }


@dataclass
class Blueprint:
    """
    The regenerative development blueprint for one request.
    Only the orchestrator's guardrail injection touches it after assembly.
    """
    metadata: BlueprintMetadata
    water_strategy: WaterStrategy
    food_strategy: FoodStrategy
    shelter_strategy: ShelterStrategy
    energy_strategy: EnergyStrategy
    risks: RiskAssessment
    reasoning_trace: ReasoningTrace

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metadata": self.metadata.to_dict(),
            "water_strategy": self.water_strategy.to_dict(),
            "food_strategy": self.food_strategy.to_dict(),
            "shelter_strategy": self.shelter_strategy.to_dict(),
            "energy_strategy": self.energy_strategy.to_dict(),
            "risks": self.risks.to_dict(),
            "reasoning_trace": self.reasoning_trace.to_dict(),
        }
