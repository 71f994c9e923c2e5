"""
Core module for the Blueprint Engine.
Contains data models, threshold classifiers, the ethical guardrail and the
reasoning trace aggregator. The orchestrator lives in ``core.analyzer`` and
the request pipeline in ``core.service``.
"""

from core.errors import BlueprintError, GuardrailRejection, DataUnavailableError, BlueprintEngineError
from core.models import (
    ClimateZone,
    SeasonalVariation,
    SlopeAssessment,
    SourceStatus,
    ConfidenceLevel,
    Coordinates,
    ClimateData,
    TerrainData,
    LocationData,
    DataSourceRecord,
    EnvironmentalSnapshot,
    WaterStrategy,
    FoodStrategy,
    ShelterStrategy,
    EnergyStrategy,
    RiskAssessment,
    ReasoningTrace,
    BlueprintMetadata,
    Blueprint,
)
from core.guardrails import GuardrailResult, evaluate_guardrail
from core.reasoning import ReasoningTraceBuilder, derive_confidence

__all__ = [
    # Errors
    "BlueprintError",
    "GuardrailRejection",
    "DataUnavailableError",
    "BlueprintEngineError",
    # Labels
    "ClimateZone",
    "SeasonalVariation",
    "SlopeAssessment",
    "SourceStatus",
    "ConfidenceLevel",
    # Snapshot
    "Coordinates",
    "ClimateData",
    "TerrainData",
    "LocationData",
    "DataSourceRecord",
    "EnvironmentalSnapshot",
    # Outputs
    "WaterStrategy",
    "FoodStrategy",
    "ShelterStrategy",
    "EnergyStrategy",
    "RiskAssessment",
    "ReasoningTrace",
    "BlueprintMetadata",
    "Blueprint",
    # Guardrail + trace
    "GuardrailResult",
    "evaluate_guardrail",
    "ReasoningTraceBuilder",
    "derive_confidence",
]
