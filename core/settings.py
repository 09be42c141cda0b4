"""
Runtime configuration.

Every value can be overridden through a ``COMFREY_*`` environment
variable. Loaders take a Settings instance and fall back to the
process-wide one from ``get_settings()``.
"""

import os
from dataclasses import dataclass, asdict
from typing import Dict, Optional


@dataclass
class Settings:
    """
    All configurable settings for the site designer.

    Every value has an explicit meaning. No magic numbers.
    """

    http_timeout: float = 10.0
    """Seconds to wait for any external data request before giving up."""

    user_agent: str = "ComfreySiteDesigner/1.0"
    """User-Agent header sent to public APIs (Nominatim requires one)."""

    climate_archive_url: str = "https://archive-api.open-meteo.com/v1/archive"
    """Open-Meteo historical weather endpoint used for climate summaries."""

    elevation_url: str = "https://api.open-meteo.com/v1/elevation"
    """Open-Meteo elevation endpoint used for slope and aspect."""

    nominatim_url: str = "https://nominatim.openstreetmap.org"
    """Base URL for address search and reverse geocoding."""

    sun_reference_year: int = 2026
    """Year whose solstices and equinox are used for the sun summary."""

    log_level: str = "INFO"
    """Logging level for the demo entry point."""

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from defaults overridden by COMFREY_* variables."""
        defaults = cls()
        return cls(
            http_timeout=float(os.environ.get("COMFREY_HTTP_TIMEOUT", defaults.http_timeout)),
            user_agent=os.environ.get("COMFREY_USER_AGENT", defaults.user_agent),
            climate_archive_url=os.environ.get("COMFREY_CLIMATE_URL", defaults.climate_archive_url),
            elevation_url=os.environ.get("COMFREY_ELEVATION_URL", defaults.elevation_url),
            nominatim_url=os.environ.get("COMFREY_NOMINATIM_URL", defaults.nominatim_url),
            sun_reference_year=int(os.environ.get("COMFREY_SUN_YEAR", defaults.sun_reference_year)),
            log_level=os.environ.get("COMFREY_LOG_LEVEL", defaults.log_level).upper(),
        )


# Singleton
_settings: Optional[Settings] = None

def get_settings() -> Settings:
    """Get the process-wide settings, reading the environment once."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
