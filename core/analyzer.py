"""
Blueprint Engine - rule engine orchestrator.

Runs all five strategy modules against one snapshot, records what each
decided, flags known limitations and assembles the final Blueprint.
All modules are pure functions: no I/O, no shared state.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from core.config import ENGINE_VERSION
from core.errors import BlueprintEngineError
from core.guardrails import GuardrailResult
from core.models import Blueprint, BlueprintMetadata, EnvironmentalSnapshot
from core.reasoning import ReasoningTraceBuilder
from strategies import (
    energy_strategy,
    food_strategy,
    risks_assessment,
    shelter_strategy,
    water_strategy,
)

log = logging.getLogger(__name__)

BLUEPRINT_DISCLAIMER = (
    "This is decision support only. Not professional engineering advice. "
    "Verify all recommendations with local experts before implementation. "
    "The Regenerative Earth Project accepts no liability for actions taken based on this output."
)

KNOWN_LIMITATIONS = (
    "V0.1: Seismic data not integrated. Verify locally.",
    "V0.1: Coastal detection is approximate. Verify locally.",
    "V0.1: Soil classification data not included. Field assessment recommended.",
    "V0.1: All strategies are rule-based. AI reasoning deferred to V0.2.",
    "V0.1: Humidity uses a global average default (60%) from the Open-Meteo free tier.",
)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(ts: datetime) -> str:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class BlueprintEngine:
    """
    Sequences the strategy modules and the trace aggregator.

    Usage:
        engine = BlueprintEngine()
        blueprint = engine.generate(snapshot, warnings)
    """

    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or _utc_now

    def generate(self, snapshot: EnvironmentalSnapshot, warnings: Sequence[str] = ()) -> Blueprint:
        """
        Build a blueprint for one snapshot.

        Args:
            snapshot: Environmental data for the requested point
            warnings: Fetch-layer warnings, surfaced as limitations

        Raises:
            BlueprintEngineError: the snapshot is malformed
        """
        if not isinstance(snapshot, EnvironmentalSnapshot):
            raise BlueprintEngineError(
                f"Expected EnvironmentalSnapshot, got {type(snapshot).__name__}"
            )

        trace = ReasoningTraceBuilder()

        try:
            water = water_strategy(snapshot)
            food = food_strategy(snapshot)
            shelter = shelter_strategy(snapshot)
            energy = energy_strategy(snapshot)
            risks = risks_assessment(snapshot)
        except (AttributeError, TypeError) as e:
            raise BlueprintEngineError(f"Malformed environmental snapshot: {e}") from e

        log.debug(
            f"Strategies: water={water.primary_method!r}, food={food.climate_zone}, "
            f"energy={energy.primary_source!r}, hazards={risks.hazard_count}"
        )

        for source in snapshot.data_sources:
            trace.add_data_source(source)

        trace.add_step("orchestrator", f'Water strategy: "{water.primary_method}"')
        trace.add_step(
            "orchestrator",
            f"Food strategy: zone={food.climate_zone}, crops={len(food.recommended_crops)}",
        )
        trace.add_step(
            "orchestrator",
            f"Shelter strategy: materials={len(shelter.recommended_materials)}",
        )
        trace.add_step("orchestrator", f'Energy strategy: primary="{energy.primary_source}"')
        trace.add_step("orchestrator", f"Risks identified: {risks.hazard_count}")

        for limitation in KNOWN_LIMITATIONS:
            trace.add_limitation(limitation)

        reasoning = trace.build(snapshot.data_sources, warnings)

        blueprint = Blueprint(
            metadata=BlueprintMetadata(
                coordinates=snapshot.coordinates,
                location_name=snapshot.location.display_name,
                generated_at=_iso(self.clock()),
                version=ENGINE_VERSION,
                disclaimer=BLUEPRINT_DISCLAIMER,
            ),
            water_strategy=water,
            food_strategy=food,
            shelter_strategy=shelter,
            energy_strategy=energy,
            risks=risks,
            reasoning_trace=reasoning,
        )

        log.info(
            f"Blueprint generated for {snapshot.location.display_name} "
            f"(confidence={reasoning.confidence_level.value})"
        )
        return blueprint


def generate_blueprint(
    snapshot: EnvironmentalSnapshot,
    warnings: Sequence[str] = (),
    clock: Optional[Clock] = None,
) -> Blueprint:
    """Build a blueprint with a fresh engine."""
    return BlueprintEngine(clock=clock).generate(snapshot, warnings)


def apply_guardrail(blueprint: Blueprint, guardrail: GuardrailResult) -> Blueprint:
    """
    Inject guardrail results into an assembled blueprint's trace.
    This is the only place a blueprint is modified after assembly.
    """
    blueprint.reasoning_trace.ethical_checks_passed.extend(guardrail.checks_passed)
    blueprint.reasoning_trace.limitations.extend(guardrail.warnings)
    return blueprint
