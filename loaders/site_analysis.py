"""
Site Analyzer - Climate, sun and terrain for a location in one call.

Climate is required: without it there is no analysis. Elevation and sun
are nice-to-have and fall back to placeholders when they fail, so a
flaky elevation API never blocks the design workflow.
"""

import math
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Optional

from core.errors import AnalysisError
from core.models import (
    ClimateInfo,
    ElevationSummary,
    SiteAnalysis,
    SunSummary,
    WindSummary,
)
from core.settings import Settings, get_settings
from loaders.climate import ClimateLoader, ClimateSummary, derive_climate_type
from loaders.elevation import ElevationLoader, ElevationSample
from loaders.sun import compute_sun_path

log = logging.getLogger(__name__)

ANALYSIS_FAILED_MESSAGE = (
    "We couldn't analyze this site right now. Check your internet connection and try again."
)

WIND_DIRECTIONS = ["north", "north-east", "east", "south-east", "south", "south-west", "west", "north-west"]
ASPECT_DIRECTIONS = ["North", "North-east", "East", "South-east", "South", "South-west", "West", "North-west"]

STRONG_WIND_KMH = 20
MODERATE_WIND_KMH = 10


def _compass_index(degrees: float) -> int:
    # Half-up rounding to the nearest of 8 points
    return int(math.floor(degrees / 45 + 0.5)) % 8


def format_wind_label(degrees: float, speed: float) -> str:
    """e.g. (225, 12) -> 'Moderate south-west wind'"""
    if speed >= STRONG_WIND_KMH:
        strength = "Strong"
    elif speed >= MODERATE_WIND_KMH:
        strength = "Moderate"
    else:
        strength = "Light"
    return f"{strength} {WIND_DIRECTIONS[_compass_index(degrees)]} wind"


def format_aspect_label(degrees: float) -> str:
    """e.g. 0 -> 'North facing'"""
    return f"{ASPECT_DIRECTIONS[_compass_index(degrees)]} facing"


def build_site_analysis(
    lat: float,
    climate: ClimateSummary,
    sun: Optional[SunSummary] = None,
    elevation: Optional[ElevationSample] = None,
) -> SiteAnalysis:
    """Assemble a SiteAnalysis, substituting placeholders for missing parts."""
    climate_type, hemisphere = derive_climate_type(
        climate.coldest_month_temp,
        climate.warmest_month_temp,
        climate.annual_rainfall,
        lat,
    )

    if elevation is not None:
        elevation_summary = ElevationSummary(
            min=elevation.min,
            max=elevation.max,
            slope=elevation.slope,
            aspect=elevation.aspect,
            aspect_label=format_aspect_label(elevation.aspect),
        )
    else:
        elevation_summary = ElevationSummary.placeholder()

    return SiteAnalysis(
        climate=ClimateInfo(
            type=climate_type,
            hemisphere=hemisphere,
            avg_rainfall=climate.annual_rainfall,
            summer_temp=climate.warmest_month_temp,
            winter_temp=climate.coldest_month_temp,
            frost_free_days=climate.frost_free_days,
            monsoon_months=climate.monsoon_months,
        ),
        sun=sun or SunSummary.placeholder(),
        wind=WindSummary(
            prevailing=climate.dominant_wind_dir,
            avg_speed=climate.avg_wind_speed,
            label=format_wind_label(climate.dominant_wind_dir, climate.avg_wind_speed),
        ),
        elevation=elevation_summary,
    )


class SiteAnalyzer:
    """
    Runs the climate, elevation and sun lookups in parallel.

    Usage:
        analyzer = SiteAnalyzer()
        analysis = analyzer.analyze(-41.27, 173.28)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        climate_loader: Optional[ClimateLoader] = None,
        elevation_loader: Optional[ElevationLoader] = None,
    ):
        self.settings = settings or get_settings()
        self.climate_loader = climate_loader or ClimateLoader(self.settings)
        self.elevation_loader = elevation_loader or ElevationLoader(self.settings)

    def analyze(self, lat: float, lng: float) -> SiteAnalysis:
        """
        Analyze a site.

        Raises:
            AnalysisError: If climate data could not be fetched
        """
        log.info(f"Analyzing site at ({lat:.4f}, {lng:.4f})")

        results = {}
        errors = {}

        with ThreadPoolExecutor(max_workers=3) as executor:
            futures = {
                executor.submit(self.climate_loader.fetch_climate, lat, lng): "climate",
                executor.submit(self.elevation_loader.fetch_elevation, lat, lng): "elevation",
                executor.submit(compute_sun_path, lat, lng, self.settings.sun_reference_year): "sun",
            }

            for future in as_completed(futures):
                source = futures[future]
                try:
                    results[source] = future.result()
                except Exception as e:
                    errors[source] = e

        if "climate" in errors:
            log.error(f"Climate lookup failed: {errors['climate']}")
            raise AnalysisError(ANALYSIS_FAILED_MESSAGE) from errors["climate"]

        for source in ("elevation", "sun"):
            if source in errors:
                log.warning(f"{source.capitalize()} lookup failed, using placeholder: {errors[source]}")

        analysis = build_site_analysis(
            lat,
            results["climate"],
            sun=results.get("sun"),
            elevation=results.get("elevation"),
        )
        log.info(
            f"Site is {analysis.climate.type.value}, {analysis.climate.hemisphere.value} hemisphere"
        )
        return analysis


# Singleton instance
_analyzer: Optional[SiteAnalyzer] = None

def get_site_analyzer() -> SiteAnalyzer:
    global _analyzer
    if _analyzer is None:
        _analyzer = SiteAnalyzer()
    return _analyzer
