"""
Blueprint Service - full request pipeline.

guardrail -> fetch -> rule engine -> guardrail injection.
Shared by the CLI and the Streamlit app; holds no per-request state.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from core.analyzer import Clock, apply_guardrail, generate_blueprint
from core.config import ENGINE_VERSION
from core.errors import BlueprintEngineError, DataUnavailableError, GuardrailRejection
from core.guardrails import evaluate_guardrail
from core.models import Blueprint, Coordinates
from loaders.base import utc_timestamp
from loaders.unified import FetchResult, UnifiedDataFetcher, get_data_fetcher

log = logging.getLogger(__name__)


class BlueprintService:
    """
    Turns coordinates into a blueprint.

    Usage:
        service = BlueprintService()
        blueprint = service.run(Coordinates(-1.2921, 36.8219))
    """

    def __init__(self, fetcher: Optional[UnifiedDataFetcher] = None, clock: Optional[Clock] = None):
        self._fetcher = fetcher
        self.clock = clock

    @property
    def fetcher(self) -> UnifiedDataFetcher:
        """Lazy-load the data fetcher."""
        if self._fetcher is None:
            self._fetcher = get_data_fetcher()
        return self._fetcher

    def run(self, coords: Coordinates, parallel: Optional[bool] = None) -> Blueprint:
        """
        Run one blueprint request end to end.

        Raises:
            GuardrailRejection: coordinates failed a blocking check
            DataUnavailableError: every data source failed
            BlueprintEngineError: the rule engine failed unexpectedly
        """
        blueprint, _ = self.run_detailed(coords, parallel=parallel)
        return blueprint

    def run_detailed(self, coords: Coordinates, parallel: Optional[bool] = None) -> Tuple[Blueprint, FetchResult]:
        """Same as ``run`` but also returns the fetch result (snapshot + warnings)."""
        guardrail = evaluate_guardrail(coords)
        if not guardrail.allowed:
            log.info(f"Request rejected by guardrail: {guardrail.rejection_reason}")
            raise GuardrailRejection(guardrail.rejection_reason, guardrail.checks_passed)

        result = self.fetcher.fetch_all(coords, parallel=parallel)
        if result.all_failed:
            raise DataUnavailableError([s.source for s in result.snapshot.data_sources])

        try:
            blueprint = generate_blueprint(result.snapshot, result.warnings, clock=self.clock)
        except BlueprintEngineError:
            raise
        except Exception as e:
            log.exception("Blueprint generation failed")
            raise BlueprintEngineError(f"Blueprint generation failed: {e}") from e

        return apply_guardrail(blueprint, guardrail), result

    def health(self) -> Dict[str, Any]:
        return {"status": "ok", "version": ENGINE_VERSION, "timestamp": utc_timestamp()}
