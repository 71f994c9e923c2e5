"""
Ethical Guardrails.

Every request passes through this gate before any data is fetched.
Rules run in a fixed order; the first failing rule ends evaluation and only
the checks passed so far are reported.
"""

import logging
import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, List, Optional

from core.models import Coordinates

log = logging.getLogger(__name__)

NULL_ISLAND_TOLERANCE = 0.01
ANTARCTIC_LATITUDE = -60

CHECK_RANGE = "Coordinate range validation passed"
CHECK_NULL_ISLAND = "Null Island check passed"
CHECK_ANTARCTIC = "Antarctic interior check passed"
CHECK_DISCLAIMER = "Decision-support disclaimer will be injected into output"
CHECK_NO_PERSISTENCE = "No coordinate data will be persisted; stateless request confirmed"
CHECK_HUMANITARIAN = "Request evaluated under humanitarian purpose framework"


@dataclass
class GuardrailResult:
    """Outcome of the pre-flight checks."""
    allowed: bool
    checks_passed: List[str] = field(default_factory=list)
    rejection_reason: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "allowed": self.allowed,
            "checks_passed": list(self.checks_passed),
            "warnings": list(self.warnings),
        }
        if self.rejection_reason is not None:
            result["rejection_reason"] = self.rejection_reason
        return result


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def evaluate_guardrail(coords: Coordinates) -> GuardrailResult:
    """
    Run the ethical and sanity checks over raw coordinates.

    Returns:
        GuardrailResult; ``allowed`` is False with a ``rejection_reason``
        when a blocking rule fails.
    """
    checks: List[str] = []
    warnings: List[str] = []
    lat, lon = coords.latitude, coords.longitude

    # 1. Range
    if not (_is_number(lat) and _is_number(lon)) or not (-90 <= lat <= 90 and -180 <= lon <= 180):
        log.info(f"Guardrail rejected out-of-range coordinates ({lat}, {lon})")
        return GuardrailResult(
            allowed=False,
            checks_passed=checks,
            rejection_reason="Coordinates out of valid range.",
            warnings=warnings,
        )
    checks.append(CHECK_RANGE)

    # 2. Null Island: (0, 0) is almost always an unset default, and it is open ocean
    if abs(lat) < NULL_ISLAND_TOLERANCE and abs(lon) < NULL_ISLAND_TOLERANCE:
        log.info("Guardrail rejected Null Island coordinates")
        return GuardrailResult(
            allowed=False,
            checks_passed=checks,
            rejection_reason=(
                'Coordinates (0, 0) rejected: this is "Null Island", likely an unset default '
                "value. Please provide real geographic coordinates."
            ),
            warnings=warnings,
        )
    checks.append(CHECK_NULL_ISLAND)

    # 3. Antarctic interior (warn only)
    if lat < ANTARCTIC_LATITUDE:
        warnings.append(
            f"Location is in Antarctica (lat {lat}). Recommendations may be unreliable: "
            "very limited infrastructure is feasible at this latitude."
        )
    checks.append(CHECK_ANTARCTIC)

    # 4. Standing commitments
    checks.append(CHECK_DISCLAIMER)
    checks.append(CHECK_NO_PERSISTENCE)
    checks.append(CHECK_HUMANITARIAN)

    return GuardrailResult(allowed=True, checks_passed=checks, warnings=warnings)
