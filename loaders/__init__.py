"""
Data loaders for the Comfrey site designer.

Includes:
- Geocoding (Nominatim)
- Climate (Open-Meteo archive)
- Elevation, slope and aspect (Open-Meteo)
- Sun path (pvlib)
- Site analyzer (combines all sources)
"""

from loaders.geocoder import Geocoder, get_geocoder, GeocodedLocation
from loaders.climate import (
    ClimateLoader,
    ClimateSummary,
    ClimateFetchError,
    get_climate_loader,
    derive_climate_type,
)
from loaders.elevation import ElevationLoader, ElevationSample, ElevationFetchError, get_elevation_loader
from loaders.sun import compute_sun_path
from loaders.site_analysis import (
    SiteAnalyzer,
    get_site_analyzer,
    format_wind_label,
    format_aspect_label,
)

__all__ = [
    "Geocoder",
    "get_geocoder",
    "GeocodedLocation",
    "ClimateLoader",
    "ClimateSummary",
    "ClimateFetchError",
    "get_climate_loader",
    "derive_climate_type",
    "ElevationLoader",
    "ElevationSample",
    "ElevationFetchError",
    "get_elevation_loader",
    "compute_sun_path",
    "SiteAnalyzer",
    "get_site_analyzer",
    "format_wind_label",
    "format_aspect_label",
]
