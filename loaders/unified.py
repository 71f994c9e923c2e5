"""
Unified Data Fetcher - Combines all data sources into one snapshot.

Fetches:
- Climate from Open-Meteo
- Elevation and slope from Open Elevation
- Place name and coastal flag from Nominatim

A source that fails never aborts the request: its section is filled with
conservative fallback values and a warning is recorded instead.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from core.config import get_settings
from core.models import (
    ClimateData,
    ClimateZone,
    Coordinates,
    DataSourceRecord,
    EnvironmentalSnapshot,
    LocationData,
    SeasonalVariation,
    SlopeAssessment,
    TerrainData,
)
from loaders.base import AdapterResult
from loaders.climate import get_climate_loader
from loaders.elevation import get_elevation_loader
from loaders.geocoder import get_geocoder

log = logging.getLogger(__name__)

# Global averages used when Open-Meteo is unavailable
FALLBACK_CLIMATE = ClimateData(
    annual_rainfall_mm=700,
    avg_temperature_c=15,
    min_temperature_c=0,
    max_temperature_c=30,
    dominant_wind_direction="unknown",
    avg_wind_speed_kmh=10,
    humidity_percent=60,
    sunshine_hours_annual=2000,
    climate_zone=ClimateZone.TEMPERATE,
    seasonal_variation=SeasonalVariation.MODERATE,
)

FALLBACK_TERRAIN = TerrainData(elevation_m=200, slope_assessment=SlopeAssessment.FLAT)


def fallback_location(coords: Coordinates) -> LocationData:
    return LocationData(
        display_name=f"{coords.latitude:.4f}, {coords.longitude:.4f}",
        country="Unknown",
        country_code="xx",
        region="Unknown",
        is_coastal=False,
    )


SOURCE_COUNT = 3


@dataclass
class FetchResult:
    """Snapshot plus whatever went wrong while building it."""
    snapshot: EnvironmentalSnapshot
    warnings: List[str] = field(default_factory=list)

    @property
    def all_failed(self) -> bool:
        return len(self.warnings) == SOURCE_COUNT


class UnifiedDataFetcher:
    """
    Combines all data sources into a single interface.

    Usage:
        fetcher = UnifiedDataFetcher()
        result = fetcher.fetch_all(Coordinates(-1.2921, 36.8219))
        blueprint = generate_blueprint(result.snapshot, result.warnings)
    """

    def __init__(self, climate=None, elevation=None, geocoder=None):
        self.climate = climate or get_climate_loader()
        self.elevation = elevation or get_elevation_loader()
        self.geocoder = geocoder or get_geocoder()

    def fetch_all(self, coords: Coordinates, parallel: Optional[bool] = None) -> FetchResult:
        """
        Fetch data from all sources for a location.

        Args:
            coords: Point that already passed the guardrail
            parallel: Fetch concurrently; defaults to REGEN_PARALLEL_FETCH

        Returns:
            FetchResult with a complete snapshot (fallbacks filled in)
        """
        if parallel is None:
            parallel = get_settings().parallel_fetch

        tasks: Dict[str, Callable[[Coordinates], AdapterResult]] = {
            "climate": self.climate.fetch,
            "terrain": self.elevation.fetch,
            "location": self.geocoder.fetch,
        }

        if parallel:
            outcomes = self._fetch_parallel(coords, tasks)
        else:
            outcomes = self._fetch_sequential(coords, tasks)

        return self._assemble(coords, outcomes)

    def _fetch_parallel(self, coords: Coordinates, tasks: Dict) -> Dict[str, object]:
        """Fetch from all sources in parallel."""
        outcomes = {}
        with ThreadPoolExecutor(max_workers=SOURCE_COUNT) as executor:
            futures = {name: executor.submit(fn, coords) for name, fn in tasks.items()}
            for name, future in futures.items():
                try:
                    outcomes[name] = future.result()
                except Exception as e:
                    log.error(f"Error fetching {name}: {e}")
                    outcomes[name] = e
        return outcomes

    def _fetch_sequential(self, coords: Coordinates, tasks: Dict) -> Dict[str, object]:
        """Fetch from sources one after another."""
        outcomes = {}
        for name, fn in tasks.items():
            try:
                outcomes[name] = fn(coords)
            except Exception as e:
                log.error(f"Error fetching {name}: {e}")
                outcomes[name] = e
        return outcomes

    def _assemble(self, coords: Coordinates, outcomes: Dict[str, object]) -> FetchResult:
        """Merge loader outcomes, substituting fallbacks for failed sources."""
        warnings: List[str] = []
        sources: List[DataSourceRecord] = []

        climate = _take(outcomes["climate"], sources)
        if climate is None:
            warnings.append(
                f"Climate data unavailable: {_reason(outcomes['climate'])}. "
                "Using global average fallback values."
            )
            climate = FALLBACK_CLIMATE

        terrain = _take(outcomes["terrain"], sources)
        if terrain is None:
            warnings.append(
                f"Terrain data unavailable: {_reason(outcomes['terrain'])}. "
                "Using flat/200m fallback."
            )
            terrain = FALLBACK_TERRAIN

        location = _take(outcomes["location"], sources)
        if location is None:
            warnings.append(
                f"Location data unavailable: {_reason(outcomes['location'])}. "
                "Using coordinate string as location name."
            )
            location = fallback_location(coords)

        for warning in warnings:
            log.warning(warning)

        snapshot = EnvironmentalSnapshot(
            coordinates=coords,
            climate=climate,
            terrain=terrain,
            location=location,
            data_sources=tuple(sources),
        )
        return FetchResult(snapshot=snapshot, warnings=warnings)


def _take(outcome: object, sources: List[DataSourceRecord]):
    """Record the source (if any) and return the loader's data or None."""
    if isinstance(outcome, AdapterResult):
        sources.append(outcome.source)
        return outcome.data if outcome.ok else None
    return None


def _reason(outcome: object) -> str:
    if isinstance(outcome, AdapterResult):
        return outcome.source.error or "no data returned"
    return str(outcome) or type(outcome).__name__


# Singleton
_fetcher: Optional[UnifiedDataFetcher] = None

def get_data_fetcher() -> UnifiedDataFetcher:
    """Get singleton data fetcher."""
    global _fetcher
    if _fetcher is None:
        _fetcher = UnifiedDataFetcher()
    return _fetcher
