"""
Error types for the Blueprint Engine.

Rejections and upstream outages are recoverable at the caller;
BlueprintEngineError is fatal for the current request.
"""

from typing import List, Optional


class BlueprintError(Exception):
    """Base class for all blueprint errors."""


class GuardrailRejection(BlueprintError):
    """Coordinates were refused by the ethical guardrail."""

    def __init__(self, rejection_reason: str, checks_passed: Optional[List[str]] = None):
        super().__init__(rejection_reason)
        self.rejection_reason = rejection_reason
        self.checks_passed = list(checks_passed or [])


class DataUnavailableError(BlueprintError):
    """Every environmental data source failed."""

    def __init__(self, failed_sources: List[str]):
        super().__init__("All environmental data sources are currently unavailable.")
        self.failed_sources = list(failed_sources)


class BlueprintEngineError(BlueprintError):
    """Malformed snapshot or unexpected fault inside the rule engine."""
