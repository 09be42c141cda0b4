"""
Elevation Loader - Slope and aspect from the Open-Meteo elevation API.

Samples five points (centre plus ~50 m north, south, east and west) in a
single request and derives min/max elevation, slope and aspect.
"""

import math
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import requests

from core.errors import ComfreyError
from core.settings import Settings, get_settings

log = logging.getLogger(__name__)

# ~50 m of latitude in degrees
SAMPLE_OFFSET_DEG = 0.00045
# Distance between opposite sample points in meters
SAMPLE_RUN_M = 100.0

UNAVAILABLE_MESSAGE = "Elevation data unavailable for this location."


class ElevationFetchError(ComfreyError):
    """Elevation could not be fetched. Analysis continues without it."""


@dataclass
class ElevationSample:
    """Terrain summary around a point."""
    min: float
    max: float
    slope: float  # degrees
    aspect: float  # downhill compass direction, 0 = north


def sample_points(lat: float, lng: float) -> List[Tuple[float, float]]:
    """(lat, lng) for centre, north, south, east, west."""
    d_lat = SAMPLE_OFFSET_DEG
    d_lng = SAMPLE_OFFSET_DEG / math.cos(math.radians(lat))
    return [
        (lat, lng),
        (lat + d_lat, lng),
        (lat - d_lat, lng),
        (lat, lng + d_lng),
        (lat, lng - d_lng),
    ]


def slope_and_aspect(north: float, south: float, east: float, west: float) -> Tuple[float, float]:
    """
    Slope in degrees and downhill aspect from four cardinal samples.

    Aspect is snapped to the steeper axis. Flat ground reports aspect 0.
    """
    ns_rise = north - south
    ew_rise = east - west

    slope = math.degrees(math.atan(math.hypot(ns_rise, ew_rise) / SAMPLE_RUN_M))

    if ns_rise == 0 and ew_rise == 0:
        aspect = 0.0
    elif abs(ns_rise) >= abs(ew_rise):
        # North higher -> faces south
        aspect = 180.0 if ns_rise > 0 else 0.0
    else:
        # East higher -> faces west
        aspect = 270.0 if ew_rise > 0 else 90.0
    return slope, aspect


class ElevationLoader:
    """
    Fetch terrain elevation from Open-Meteo.

    API Documentation:
    https://open-meteo.com/en/docs/elevation-api
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": self.settings.user_agent})

    def fetch_elevation(self, lat: float, lng: float) -> ElevationSample:
        """
        Sample terrain around a point.

        Raises:
            ElevationFetchError: On timeout, HTTP error or incomplete data
        """
        points = sample_points(lat, lng)
        params = {
            "latitude": ",".join(f"{p[0]:.6f}" for p in points),
            "longitude": ",".join(f"{p[1]:.6f}" for p in points),
        }

        try:
            response = self.session.get(
                self.settings.elevation_url, params=params, timeout=self.settings.http_timeout
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            log.error(f"Elevation request failed for ({lat}, {lng}): {e}")
            raise ElevationFetchError(UNAVAILABLE_MESSAGE) from e

        elevations = data.get("elevation") if isinstance(data, dict) else None
        if not elevations or len(elevations) < 5:
            log.error(f"Incomplete elevation data for ({lat}, {lng}): {data}")
            raise ElevationFetchError(UNAVAILABLE_MESSAGE)

        try:
            center, north, south, east, west = (float(v) for v in elevations[:5])
        except (TypeError, ValueError) as e:
            raise ElevationFetchError(UNAVAILABLE_MESSAGE) from e

        slope, aspect = slope_and_aspect(north, south, east, west)
        sample = ElevationSample(
            min=min(center, north, south, east, west),
            max=max(center, north, south, east, west),
            slope=slope,
            aspect=aspect,
        )
        log.debug(f"Elevation at ({lat:.4f}, {lng:.4f}): slope {slope:.1f} deg, aspect {aspect:.0f}")
        return sample


# Singleton instance
_loader: Optional[ElevationLoader] = None

def get_elevation_loader() -> ElevationLoader:
    global _loader
    if _loader is None:
        _loader = ElevationLoader()
    return _loader
