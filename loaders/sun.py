"""
Sun path - solar noon position and day length at the solstices and equinox.

Uses pvlib's NREL SPA implementation. Times are reported in local mean
time (longitude / 15 hours from UTC), which is close enough for layout
decisions and needs no timezone database lookup by location.
"""

import logging
from datetime import date
from typing import Optional

import pandas as pd
from pvlib import solarposition

from core.models import SunPosition, SunSummary

log = logging.getLogger(__name__)

JUNE_SOLSTICE = (6, 21)
DECEMBER_SOLSTICE = (12, 21)
MARCH_EQUINOX = (3, 20)


def local_timezone(lng: float) -> str:
    """Fixed-offset zone for a longitude, e.g. 174.8 -> 'Etc/GMT-12'."""
    offset = int(round(lng / 15))
    # Etc/GMT zones use inverted signs
    return f"Etc/GMT{-offset:+d}"


def _format_time(ts) -> str:
    if ts is None or pd.isna(ts):
        return "--:--"
    return ts.strftime("%H:%M")


def sun_position_on(day: date, lat: float, lng: float) -> SunPosition:
    """
    Sun at solar noon on ``day``, with sunrise, sunset and day length.

    During polar day or night there is no sunrise or sunset; the day
    length is then 24 or 0 hours.
    """
    tz = local_timezone(lng)
    # Local noon keeps the UTC date equal to the local date
    times = pd.DatetimeIndex([pd.Timestamp(day.year, day.month, day.day, 12)]).tz_localize(tz)

    events = solarposition.sun_rise_set_transit_spa(times, lat, lng)
    sunrise = events["sunrise"].iloc[0]
    sunset = events["sunset"].iloc[0]
    transit = events["transit"].iloc[0]
    if pd.isna(transit):
        transit = times[0]

    noon = solarposition.get_solarposition(pd.DatetimeIndex([transit]), lat, lng)
    altitude = float(noon["apparent_elevation"].iloc[0])
    azimuth = float(noon["azimuth"].iloc[0]) % 360

    if pd.isna(sunrise) or pd.isna(sunset):
        daylength = 24.0 if altitude > 0 else 0.0
    else:
        # Events can straddle the UTC day; only the span matters
        daylength = ((sunset - sunrise).total_seconds() / 3600) % 24

    return SunPosition(
        altitude=altitude,
        azimuth=azimuth,
        sunrise=_format_time(sunrise),
        sunset=_format_time(sunset),
        daylength=daylength,
    )


def compute_sun_path(lat: float, lng: float, year: Optional[int] = None) -> SunSummary:
    """
    Sun summary for a location.

    Summer and winter follow the hemisphere: the June solstice is summer
    in the north and winter in the south.
    """
    if year is None:
        year = date.today().year

    june = sun_position_on(date(year, *JUNE_SOLSTICE), lat, lng)
    december = sun_position_on(date(year, *DECEMBER_SOLSTICE), lat, lng)
    equinox = sun_position_on(date(year, *MARCH_EQUINOX), lat, lng)

    summer, winter = (june, december) if lat >= 0 else (december, june)
    log.debug(f"Sun at ({lat:.3f}, {lng:.3f}): {summer.daylength:.1f}h / {winter.daylength:.1f}h days")

    return SunSummary(
        summer_solstice=summer,
        winter_solstice=winter,
        equinox=equinox,
        longest_day=summer.daylength,
        shortest_day=winter.daylength,
    )
