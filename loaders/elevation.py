"""
Elevation Loader - Fetch elevation and slope from Open Elevation.

Samples a five-point cross (centre, N, S, E, W at ±0.01°) in one request
and classifies the slope from the largest rise. If that fails, a single
point query still yields an elevation with the slope defaulted to flat.
"""

import logging
from typing import Dict, List, Optional, Tuple

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from core.classifiers import SLOPE_OFFSET_DEG, classify_slope, round_half_up
from core.config import get_settings
from core.models import Coordinates, DataSourceRecord, SlopeAssessment, SourceStatus, TerrainData
from loaders.base import AdapterResult, failed_result, utc_timestamp

log = logging.getLogger(__name__)

SLOPE_FALLBACK_NOTE = "Multi-point slope query failed; slope defaulted to flat"


def cross_points(coords: Coordinates) -> List[Tuple[float, float]]:
    """Centre followed by its N, S, E and W neighbours."""
    lat, lon = coords.latitude, coords.longitude
    return [
        (lat, lon),
        (lat + SLOPE_OFFSET_DEG, lon),
        (lat - SLOPE_OFFSET_DEG, lon),
        (lat, lon + SLOPE_OFFSET_DEG),
        (lat, lon - SLOPE_OFFSET_DEG),
    ]


def _elevations(payload: Dict) -> List[float]:
    results = payload.get("results") or []
    if not results:
        raise ValueError("No elevation results returned")
    return [float(r.get("elevation") or 0) for r in results]


class ElevationLoader:
    """
    Fetch elevation data from Open Elevation.

    API Documentation:
    https://open-elevation.com/
    """

    NAME = "open-elevation"
    OPEN_ELEVATION_URL = "https://api.open-elevation.com/api/v1/lookup"

    def __init__(self, timeout: Optional[float] = None):
        settings = get_settings()
        self.timeout = timeout or settings.http_timeout
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": settings.user_agent})

    def build_endpoint(self, points: List[Tuple[float, float]]) -> str:
        locations = "|".join(f"{lat},{lon}" for lat, lon in points)
        return f"{self.OPEN_ELEVATION_URL}?locations={locations}"

    @retry(
        retry=retry_if_exception_type(requests.RequestException),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=5),
        reraise=True,
    )
    def _make_request(self, endpoint: str) -> Dict:
        response = self.session.get(endpoint, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def fetch(self, coords: Coordinates) -> AdapterResult:
        """
        Get elevation and slope for a point.

        Returns:
            AdapterResult with TerrainData; status is ``fallback`` when only
            the single-point query worked, ``failed`` when both did not
        """
        fetched_at = utc_timestamp()
        endpoint = self.build_endpoint(cross_points(coords))

        try:
            elevations = _elevations(self._make_request(endpoint))
        except (requests.RequestException, ValueError, TypeError, AttributeError) as e:
            log.warning(f"Slope query failed for ({coords.latitude}, {coords.longitude}): {e}")
            fallback = self._fetch_single(coords, fetched_at)
            if fallback is not None:
                return fallback
            log.error(f"Elevation request failed for ({coords.latitude}, {coords.longitude}): {e}")
            return failed_result(self.NAME, endpoint, fetched_at, e)

        data = TerrainData(elevation_m=round_half_up(elevations[0]), slope_assessment=classify_slope(elevations))
        log.debug(
            f"Elevation at ({coords.latitude:.4f}, {coords.longitude:.4f}): "
            f"{data.elevation_m}m, {data.slope_assessment.value}"
        )
        return AdapterResult(
            data=data,
            source=DataSourceRecord(
                source=self.NAME, endpoint=endpoint, fetched_at=fetched_at, status=SourceStatus.SUCCESS
            ),
        )

    def _fetch_single(self, coords: Coordinates, fetched_at: str) -> Optional[AdapterResult]:
        """Single-point elevation; None if this fails too."""
        endpoint = self.build_endpoint([(coords.latitude, coords.longitude)])
        try:
            response = self.session.get(endpoint, timeout=self.timeout)
            response.raise_for_status()
            elevation = _elevations(response.json())[0]
        except (requests.RequestException, ValueError, TypeError, AttributeError) as e:
            log.debug(f"Single-point elevation fallback failed: {e}")
            return None

        return AdapterResult(
            data=TerrainData(elevation_m=round_half_up(elevation), slope_assessment=SlopeAssessment.FLAT),
            source=DataSourceRecord(
                source=self.NAME,
                endpoint=endpoint,
                fetched_at=fetched_at,
                status=SourceStatus.FALLBACK,
                error=SLOPE_FALLBACK_NOTE,
            ),
        )


# Singleton
_loader: Optional[ElevationLoader] = None

def get_elevation_loader() -> ElevationLoader:
    """Get singleton elevation loader."""
    global _loader
    if _loader is None:
        _loader = ElevationLoader()
    return _loader
