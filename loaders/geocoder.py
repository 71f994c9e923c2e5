"""
Geocoder - Reverse geocode coordinates using Nominatim.

Features:
- Rate limiting (1 request/second per Nominatim policy)
- Retry with exponential backoff
- Approximate coastal detection from the address tags

Nothing is cached: coordinates are never stored.
"""

import time
import logging
from typing import Dict, Optional

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from core.config import get_settings
from core.models import Coordinates, DataSourceRecord, LocationData, SourceStatus
from loaders.base import AdapterResult, failed_result, utc_timestamp

log = logging.getLogger(__name__)

# Rate limiter - tracks last request time
_last_request_time = 0.0

COASTAL_KEYWORDS = ("coast", "sea", "ocean", "bay")


def detect_coastal(address: Optional[Dict], place_type: Optional[str]) -> bool:
    """
    Keyword match over the natural/coastline/water tags and the place type.
    Approximate: a proper coastline dataset would be authoritative.
    """
    if not address:
        return False
    fields = " ".join(
        str(v) for v in (address.get("natural"), address.get("coastline"), address.get("water"), place_type)
        if v
    ).lower()
    return any(word in fields for word in COASTAL_KEYWORDS)


def parse_location(payload: Dict, coords: Coordinates) -> LocationData:
    address = payload.get("address") or {}
    return LocationData(
        display_name=payload.get("display_name") or f"{coords.latitude}, {coords.longitude}",
        country=address.get("country") or "Unknown",
        country_code=(address.get("country_code") or "xx").lower(),
        region=address.get("state") or address.get("region") or address.get("county") or "Unknown",
        is_coastal=detect_coastal(address, payload.get("type")),
    )


class Geocoder:
    """
    Reverse geocoder using OpenStreetMap Nominatim API.

    Respects rate limits: max 1 request per second.
    """

    NAME = "nominatim"
    NOMINATIM_URL = "https://nominatim.openstreetmap.org/reverse"

    def __init__(self, timeout: Optional[float] = None, min_interval: Optional[float] = None):
        settings = get_settings()
        self.timeout = timeout or settings.http_timeout
        self.min_interval = settings.nominatim_interval if min_interval is None else min_interval
        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": settings.user_agent,
            "Accept": "application/json",
        })

    def _rate_limit(self):
        """Ensure we don't exceed 1 request per second."""
        global _last_request_time
        elapsed = time.time() - _last_request_time
        if elapsed < self.min_interval:
            time.sleep(self.min_interval - elapsed)
        _last_request_time = time.time()

    @retry(
        retry=retry_if_exception_type(requests.RequestException),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=2, min=2, max=10),
        reraise=True,
    )
    def _make_request(self, params: Dict) -> Dict:
        """Make a rate-limited request with retry."""
        self._rate_limit()
        response = self.session.get(self.NOMINATIM_URL, params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def fetch(self, coords: Coordinates) -> AdapterResult:
        """
        Convert coordinates to a place description.

        Returns:
            AdapterResult with LocationData, or data=None and a failed record
        """
        fetched_at = utc_timestamp()
        params = {
            "lat": coords.latitude,
            "lon": coords.longitude,
            "format": "json",
            "zoom": 10,
        }
        endpoint = f"{self.NOMINATIM_URL}?lat={coords.latitude}&lon={coords.longitude}&format=json&zoom=10"

        try:
            location = parse_location(self._make_request(params), coords)
        except (requests.RequestException, ValueError, TypeError, AttributeError) as e:
            log.error(f"Reverse geocoding failed for ({coords.latitude}, {coords.longitude}): {e}")
            return failed_result(self.NAME, endpoint, fetched_at, e)

        log.info(f"Reverse geocoded: ({coords.latitude}, {coords.longitude}) -> {location.display_name}")
        return AdapterResult(
            data=location,
            source=DataSourceRecord(
                source=self.NAME, endpoint=endpoint, fetched_at=fetched_at, status=SourceStatus.SUCCESS
            ),
        )


# Singleton instance
_geocoder: Optional[Geocoder] = None

def get_geocoder() -> Geocoder:
    """Get the singleton geocoder instance."""
    global _geocoder
    if _geocoder is None:
        _geocoder = Geocoder()
    return _geocoder
