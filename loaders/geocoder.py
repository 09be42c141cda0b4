"""
Geocoder - Address search and reverse lookup using Nominatim.

Features:
- Rate limiting (1 request/second per Nominatim policy)
- In-memory caching to avoid repeated lookups
- Retry with exponential backoff
"""

import time
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from core.settings import Settings, get_settings

log = logging.getLogger(__name__)

# Rate limiter - tracks last request time
_last_request_time = 0.0
_MIN_REQUEST_INTERVAL = 1.1  # slightly over 1 request per second

MAX_SEARCH_RESULTS = 5


@dataclass
class GeocodedLocation:
    """One search result."""
    query: str
    latitude: float
    longitude: float
    display_name: str
    place_type: str
    bounding_box: Optional[Tuple[float, float, float, float]] = None

    @property
    def center(self) -> Tuple[float, float]:
        """(lng, lat) for use as a project location."""
        return (self.longitude, self.latitude)

    def to_dict(self) -> Dict:
        return {
            "query": self.query,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "display_name": self.display_name,
            "place_type": self.place_type,
            "bounding_box": self.bounding_box,
        }


class Geocoder:
    """
    Geocoder using the OpenStreetMap Nominatim API.

    Respects rate limits: max 1 request per second.
    Failures are logged and reported as empty results.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": self.settings.user_agent})
        self._cache: Dict[str, object] = {}

    def _rate_limit(self):
        """Ensure we don't exceed 1 request per second."""
        global _last_request_time
        elapsed = time.time() - _last_request_time
        if elapsed < _MIN_REQUEST_INTERVAL:
            time.sleep(_MIN_REQUEST_INTERVAL - elapsed)
        _last_request_time = time.time()

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=2, min=2, max=10),
        retry=retry_if_exception_type(requests.RequestException),
        reraise=True,
    )
    def _make_request(self, endpoint: str, params: Dict):
        """Make a rate-limited request with retry."""
        self._rate_limit()
        url = f"{self.settings.nominatim_url}/{endpoint}"
        response = self.session.get(url, params=params, timeout=self.settings.http_timeout)
        response.raise_for_status()
        return response.json()

    def search(self, query: str, limit: int = MAX_SEARCH_RESULTS) -> List[GeocodedLocation]:
        """
        Search for places matching a free-form address.

        Args:
            query: e.g. "12 Orchard Lane, Nelson"
            limit: Maximum results (Nominatim caps this too)

        Returns:
            Up to ``limit`` locations, or an empty list if none or on failure
        """
        query = query.strip()
        if not query:
            return []

        cache_key = f"search:{query.lower()}:{limit}"
        if cache_key in self._cache:
            log.debug(f"Cache hit for: {query}")
            return self._cache[cache_key]

        params = {
            "q": query,
            "format": "jsonv2",
            "limit": limit,
        }

        try:
            results = self._make_request("search", params)
        except (requests.RequestException, ValueError) as e:
            log.error(f"Geocoding failed for '{query}': {e}")
            return []

        if not isinstance(results, list) or not results:
            log.warning(f"No results for: {query}")
            return []

        locations = []
        for result in results[:limit]:
            bbox = None
            if "boundingbox" in result:
                bb = result["boundingbox"]
                bbox = (float(bb[0]), float(bb[1]), float(bb[2]), float(bb[3]))
            locations.append(GeocodedLocation(
                query=query,
                latitude=float(result["lat"]),
                longitude=float(result["lon"]),
                display_name=result.get("display_name", ""),
                place_type=result.get("type", "unknown"),
                bounding_box=bbox,
            ))

        self._cache[cache_key] = locations
        log.info(f"Geocoded: {query} -> {len(locations)} result(s)")
        return locations

    def reverse(self, lat: float, lng: float) -> Optional[str]:
        """
        Convert coordinates to a place name.

        Returns:
            Display name string, or None if not found or on failure
        """
        cache_key = f"reverse:{lat:.6f},{lng:.6f}"
        if cache_key in self._cache:
            return self._cache[cache_key]

        params = {
            "lat": lat,
            "lon": lng,
            "format": "jsonv2",
        }

        try:
            result = self._make_request("reverse", params)
        except (requests.RequestException, ValueError) as e:
            log.error(f"Reverse geocoding failed: {e}")
            return None

        display_name = result.get("display_name") if isinstance(result, dict) else None
        if display_name:
            self._cache[cache_key] = display_name
        return display_name


# Singleton instance
_geocoder: Optional[Geocoder] = None

def get_geocoder() -> Geocoder:
    """Get the singleton geocoder instance."""
    global _geocoder
    if _geocoder is None:
        _geocoder = Geocoder()
    return _geocoder
