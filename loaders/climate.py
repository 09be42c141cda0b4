"""
Climate Loader - One year of daily weather from the Open-Meteo archive.

The daily series is reduced with pandas to the handful of numbers the
designer needs: coldest and warmest month, rainfall, frost-free days,
wind, and an optional monsoon window.
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Optional, Tuple

import numpy as np
import pandas as pd
import requests

from core.errors import ComfreyError
from core.models import ClimateType, Hemisphere
from core.settings import Settings, get_settings

log = logging.getLogger(__name__)

DAILY_FIELDS = (
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
    "wind_speed_10m_max",
    "wind_direction_10m_dominant",
)

TIMEOUT_MESSAGE = "Climate data request timed out. Please try again."
CONNECTION_MESSAGE = "Unable to fetch climate data. Please check your internet connection and try again."
STATUS_MESSAGE = "Failed to fetch climate data (status {status}). Please try again later."
INVALID_MESSAGE = "Received invalid climate data from the server. Please try again."
NO_DATA_MESSAGE = "No climate data available for this location. Please try a different location."

# A monsoon month gets at least this multiple of the average monthly rain
MONSOON_FACTOR = 2.0


class ClimateFetchError(ComfreyError):
    """Climate data could not be fetched. Message is user-facing."""


@dataclass
class ClimateSummary:
    """One year of weather reduced to design-relevant figures."""
    coldest_month_temp: float  # celsius, mean of daily (max+min)/2
    warmest_month_temp: float
    annual_rainfall: float  # mm
    frost_free_days: int  # days with min > 0
    avg_wind_speed: float  # km/h
    dominant_wind_dir: float  # degrees, one of 8 compass points
    monsoon_months: Optional[Tuple[int, int]] = None


# ═══════════════════════════════════════════════════════════════════════════
# CLASSIFICATION
# ═══════════════════════════════════════════════════════════════════════════
def derive_climate_type(
    coldest_month: float,
    warmest_month: float,
    annual_rainfall: float,
    latitude: float,
) -> Tuple[ClimateType, Hemisphere]:
    """
    Classify a climate from temperature extremes and rainfall.

    Returns:
        (climate type, hemisphere). Latitude 0 counts as northern.
    """
    hemisphere = Hemisphere.NORTHERN if latitude >= 0 else Hemisphere.SOUTHERN

    if annual_rainfall < 250:
        return ClimateType.ARID, hemisphere

    # Hot deserts with cool winters (e.g. Alice Springs)
    mean_temp = (coldest_month + warmest_month) / 2
    if annual_rainfall < 500 and mean_temp >= 18:
        return ClimateType.ARID, hemisphere

    if coldest_month >= 18:
        return ClimateType.TROPICAL, hemisphere
    if coldest_month >= 10 and warmest_month >= 22:
        return ClimateType.SUBTROPICAL, hemisphere
    return ClimateType.TEMPERATE, hemisphere


# ═══════════════════════════════════════════════════════════════════════════
# DAILY SERIES REDUCTION
# ═══════════════════════════════════════════════════════════════════════════
def _series(daily: Dict, key: str, length: int) -> pd.Series:
    values = daily.get(key) or [None] * length
    return pd.to_numeric(pd.Series(values[:length], dtype="object"), errors="coerce")


def find_monsoon(monthly_rain: pd.Series, annual_rainfall: float) -> Optional[Tuple[int, int]]:
    """
    Wettest pair of consecutive months where both months get at least
    twice the average monthly rainfall. December wraps to January.
    """
    if len(monthly_rain) < 2:
        return None

    threshold = annual_rainfall / len(monthly_rain) * MONSOON_FACTOR
    best = None
    best_total = 0.0
    for month in range(1, 13):
        following = 1 if month == 12 else month + 1
        first = monthly_rain.get(month, 0.0)
        second = monthly_rain.get(following, 0.0)
        if first >= threshold and second >= threshold and first + second > best_total:
            best_total = first + second
            best = (month, following)
    return best


def summarize_daily(daily: Dict) -> ClimateSummary:
    """
    Reduce an Open-Meteo ``daily`` block to a ClimateSummary.

    Null readings are skipped.

    Raises:
        ClimateFetchError: If there are no days or no temperature readings
    """
    times = daily.get("time") if isinstance(daily, dict) else None
    if not times:
        raise ClimateFetchError(NO_DATA_MESSAGE)

    n = len(times)
    df = pd.DataFrame({
        "month": pd.to_datetime(pd.Series(times)).dt.month,
        "t_max": _series(daily, "temperature_2m_max", n),
        "t_min": _series(daily, "temperature_2m_min", n),
        "precip": _series(daily, "precipitation_sum", n),
        "wind_speed": _series(daily, "wind_speed_10m_max", n),
        "wind_dir": _series(daily, "wind_direction_10m_dominant", n),
    })

    df["t_mean"] = (df["t_max"] + df["t_min"]) / 2
    monthly_temp = df.groupby("month")["t_mean"].mean().dropna()
    if monthly_temp.empty:
        raise ClimateFetchError(NO_DATA_MESSAGE)

    annual_rainfall = float(df["precip"].sum())
    monthly_rain = df.dropna(subset=["precip"]).groupby("month")["precip"].sum()

    avg_wind = df["wind_speed"].mean()
    if pd.isna(avg_wind):
        avg_wind = 0.0

    # Bucket wind to 8 compass points, take the most common
    directions = df["wind_dir"].dropna()
    dominant_dir = 0.0
    if not directions.empty:
        buckets = (np.floor(directions / 45 + 0.5) % 8) * 45
        dominant_dir = float(buckets.value_counts(sort=False).idxmax())

    return ClimateSummary(
        coldest_month_temp=round(float(monthly_temp.min()), 1),
        warmest_month_temp=round(float(monthly_temp.max()), 1),
        annual_rainfall=round(annual_rainfall, 1),
        frost_free_days=int((df["t_min"] > 0).sum()),
        avg_wind_speed=round(float(avg_wind), 1),
        dominant_wind_dir=dominant_dir,
        monsoon_months=find_monsoon(monthly_rain, annual_rainfall),
    )


# ═══════════════════════════════════════════════════════════════════════════
# LOADER
# ═══════════════════════════════════════════════════════════════════════════
class ClimateLoader:
    """
    Fetch the last 365 days of daily weather from Open-Meteo.

    API Documentation:
    https://open-meteo.com/en/docs/historical-weather-api
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": self.settings.user_agent})

    @staticmethod
    def date_range(today: Optional[date] = None) -> Tuple[date, date]:
        """365 days ending yesterday."""
        end = (today or date.today()) - timedelta(days=1)
        start = end - timedelta(days=364)
        return start, end

    def fetch_climate(self, lat: float, lng: float) -> ClimateSummary:
        """
        Fetch and summarize one year of weather for a location.

        Raises:
            ClimateFetchError: With a user-facing message on any failure
        """
        start, end = self.date_range()
        params = {
            "latitude": lat,
            "longitude": lng,
            "daily": ",".join(DAILY_FIELDS),
            "timezone": "auto",
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
        }

        try:
            response = self.session.get(
                self.settings.climate_archive_url, params=params, timeout=self.settings.http_timeout
            )
        except requests.Timeout as e:
            log.error(f"Climate request timed out for ({lat}, {lng})")
            raise ClimateFetchError(TIMEOUT_MESSAGE) from e
        except requests.RequestException as e:
            log.error(f"Climate request failed for ({lat}, {lng}): {e}")
            raise ClimateFetchError(CONNECTION_MESSAGE) from e

        if not response.ok:
            log.error(f"Climate request returned status {response.status_code}")
            raise ClimateFetchError(STATUS_MESSAGE.format(status=response.status_code))

        try:
            data = response.json()
        except ValueError as e:
            raise ClimateFetchError(INVALID_MESSAGE) from e

        if not isinstance(data, dict):
            raise ClimateFetchError(INVALID_MESSAGE)

        summary = summarize_daily(data.get("daily") or {})
        log.info(
            f"Climate for ({lat:.3f}, {lng:.3f}): {summary.coldest_month_temp}/"
            f"{summary.warmest_month_temp} C, {summary.annual_rainfall} mm"
        )
        return summary


# Singleton instance
_loader: Optional[ClimateLoader] = None

def get_climate_loader() -> ClimateLoader:
    global _loader
    if _loader is None:
        _loader = ClimateLoader()
    return _loader
