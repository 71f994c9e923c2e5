"""
Climate Loader - Fetch a year of daily weather from Open-Meteo.

Aggregates 365 days of dailies into annual figures and derives the climate
zone and seasonal variation labels. Free API, no key required.
"""

import logging
from typing import Dict, List, Optional
from urllib.parse import urlencode

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from core.classifiers import (
    derive_climate_zone,
    derive_seasonal_variation,
    dominant_wind_direction,
    round_half_up,
)
from core.config import get_settings
from core.models import ClimateData, Coordinates, DataSourceRecord, SourceStatus
from loaders.base import AdapterResult, failed_result, utc_timestamp

log = logging.getLogger(__name__)

DEFAULT_HUMIDITY_PERCENT = 60  # free tier has no daily humidity

DAILY_FIELDS = (
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
    "wind_speed_10m_max",
    "wind_direction_10m_dominant",
    "sunshine_duration",
)


def _values(daily: Dict, key: str) -> List[Optional[float]]:
    return list(daily.get(key) or [])


def _mean(values: List[Optional[float]], count: int) -> float:
    # Missing days count as zero, over the full day count
    return sum(v or 0 for v in values) / count


def aggregate_daily(daily: Dict) -> ClimateData:
    """
    Collapse Open-Meteo daily arrays into annual climate figures.

    Raises:
        ValueError: the response holds no daily rows
    """
    count = len(daily.get("time") or [])
    if count == 0:
        raise ValueError("Empty daily data returned")

    t_max = _values(daily, "temperature_2m_max")
    t_min = _values(daily, "temperature_2m_min")
    total_rain = sum(v or 0 for v in _values(daily, "precipitation_sum"))
    avg_temp = (_mean(t_max, count) + _mean(t_min, count)) / 2

    valid_max = [v for v in t_max if v is not None]
    valid_min = [v for v in t_min if v is not None]
    if not valid_max or not valid_min:
        raise ValueError("No temperature values in daily data")
    max_overall = max(valid_max)
    min_overall = min(valid_min)

    avg_wind = _mean(_values(daily, "wind_speed_10m_max"), count)
    sunshine_hours = sum(v or 0 for v in _values(daily, "sunshine_duration")) / 3600

    return ClimateData(
        annual_rainfall_mm=round_half_up(total_rain),
        avg_temperature_c=round_half_up(avg_temp, 1),
        min_temperature_c=round_half_up(min_overall, 1),
        max_temperature_c=round_half_up(max_overall, 1),
        dominant_wind_direction=dominant_wind_direction(_values(daily, "wind_direction_10m_dominant")),
        avg_wind_speed_kmh=round_half_up(avg_wind, 1),
        humidity_percent=DEFAULT_HUMIDITY_PERCENT,
        sunshine_hours_annual=round_half_up(sunshine_hours),
        climate_zone=derive_climate_zone(avg_temp, min_overall, max_overall, total_rain),
        seasonal_variation=derive_seasonal_variation(min_overall, max_overall),
    )


class ClimateLoader:
    """
    Open-Meteo forecast API with 365 past days.

    API Documentation:
    https://open-meteo.com/en/docs
    """

    NAME = "open-meteo"
    OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"

    def __init__(self, timeout: Optional[float] = None):
        settings = get_settings()
        self.timeout = timeout or settings.climate_timeout
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": settings.user_agent})

    def build_endpoint(self, coords: Coordinates) -> str:
        params = {
            "latitude": coords.latitude,
            "longitude": coords.longitude,
            "daily": ",".join(DAILY_FIELDS),
            "timezone": "auto",
            "past_days": 365,
            "forecast_days": 1,
        }
        return f"{self.OPEN_METEO_URL}?{urlencode(params, safe=',')}"

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
        Fetch and aggregate a year of climate data.

        Returns:
            AdapterResult with ClimateData, or data=None and a failed record
        """
        fetched_at = utc_timestamp()
        endpoint = self.build_endpoint(coords)

        try:
            payload = self._make_request(endpoint)
            data = aggregate_daily(payload.get("daily") or {})
        except (requests.RequestException, ValueError, TypeError, KeyError, AttributeError) as e:
            log.error(f"Climate request failed for ({coords.latitude}, {coords.longitude}): {e}")
            return failed_result(self.NAME, endpoint, fetched_at, e)

        log.debug(
            f"Climate at ({coords.latitude:.4f}, {coords.longitude:.4f}): "
            f"{data.annual_rainfall_mm}mm, zone={data.climate_zone.value}"
        )
        return AdapterResult(
            data=data,
            source=DataSourceRecord(
                source=self.NAME, endpoint=endpoint, fetched_at=fetched_at, status=SourceStatus.SUCCESS
            ),
        )


# Singleton
_loader: Optional[ClimateLoader] = None

def get_climate_loader() -> ClimateLoader:
    """Get singleton climate loader."""
    global _loader
    if _loader is None:
        _loader = ClimateLoader()
    return _loader
