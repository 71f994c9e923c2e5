"""
Reasoning Trace Builder.

Collects human-readable decision steps across all strategy modules so anyone
can see exactly why each recommendation was made. One builder lives for one
blueprint; it is never shared between requests.
"""

from typing import Iterable, List, Sequence, Tuple

from core.classifiers import Rule, first_match
from core.models import ConfidenceLevel, DataSourceRecord, ReasoningTrace, SourceStatus

# args: failed_count, fallback_count
_CONFIDENCE_RULES: Tuple[Rule, ...] = (
    (lambda failed, fallback: failed >= 2, ConfidenceLevel.LOW),
    (lambda failed, fallback: failed == 1 or fallback >= 1, ConfidenceLevel.MEDIUM),
)


def derive_confidence(sources: Iterable[DataSourceRecord]) -> ConfidenceLevel:
    """Coarse confidence from data-source health."""
    sources = list(sources)
    failed = sum(1 for s in sources if s.status == SourceStatus.FAILED)
    fallback = sum(1 for s in sources if s.status == SourceStatus.FALLBACK)
    return first_match(_CONFIDENCE_RULES, failed, fallback, default=ConfidenceLevel.HIGH)


class ReasoningTraceBuilder:
    """Append-only accumulator for steps, sources, limitations and checks."""

    def __init__(self):
        self.steps: List[str] = []
        self.sources: List[DataSourceRecord] = []
        self.limitations: List[str] = []
        self.ethical_checks: List[str] = []

    def add_step(self, module: str, step: str) -> "ReasoningTraceBuilder":
        self.steps.append(f"[{module}] {step}")
        return self

    def add_data_source(self, record: DataSourceRecord) -> "ReasoningTraceBuilder":
        self.sources.append(record)
        return self

    def add_limitation(self, limitation: str) -> "ReasoningTraceBuilder":
        self.limitations.append(limitation)
        return self

    def add_ethical_check(self, check: str) -> "ReasoningTraceBuilder":
        self.ethical_checks.append(check)
        return self

    def build(self, sources: Sequence[DataSourceRecord], warnings: Sequence[str] = ()) -> ReasoningTrace:
        """
        Freeze the accumulated state into a ReasoningTrace.

        Args:
            sources: Data sources the snapshot was built from (drive confidence)
            warnings: Externally supplied warnings, appended after limitations
        """
        return ReasoningTrace(
            data_sources_used=list(sources),
            rules_applied=list(self.steps),
            confidence_level=derive_confidence(sources),
            limitations=list(self.limitations) + list(warnings),
            ethical_checks_passed=list(self.ethical_checks),
        )
