"""
Shared loader types.

Every loader returns an AdapterResult: the parsed data (or None) plus the
DataSourceRecord describing how the fetch went.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from core.models import DataSourceRecord, SourceStatus


@dataclass
class AdapterResult:
    data: Optional[Any]
    source: DataSourceRecord

    @property
    def ok(self) -> bool:
        return self.data is not None


def utc_timestamp() -> str:
    """Current time as ISO 8601 with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def failed_result(source: str, endpoint: str, fetched_at: str, error: Exception) -> AdapterResult:
    return AdapterResult(
        data=None,
        source=DataSourceRecord(
            source=source,
            endpoint=endpoint,
            fetched_at=fetched_at,
            status=SourceStatus.FAILED,
            error=str(error) or type(error).__name__,
        ),
    )
