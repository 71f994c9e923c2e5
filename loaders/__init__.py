"""
Data loaders for the Blueprint Engine.

Includes:
- Climate (Open-Meteo)
- Elevation and slope (Open Elevation)
- Reverse geocoding (Nominatim)
- Unified fetcher (combines all sources into a snapshot)
"""

from loaders.base import AdapterResult
from loaders.climate import ClimateLoader, get_climate_loader
from loaders.elevation import ElevationLoader, get_elevation_loader
from loaders.geocoder import Geocoder, get_geocoder
from loaders.unified import UnifiedDataFetcher, FetchResult, get_data_fetcher

__all__ = [
    "AdapterResult",
    "ClimateLoader",
    "get_climate_loader",
    "ElevationLoader",
    "get_elevation_loader",
    "Geocoder",
    "get_geocoder",
    # Unified
    "UnifiedDataFetcher",
    "FetchResult",
    "get_data_fetcher",
]
