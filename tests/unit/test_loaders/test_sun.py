import re
from unittest.mock import patch

import pytest

from core.models import SunPosition
from loaders.sun import compute_sun_path, local_timezone

NELSON = (-41.2706, 173.2840)
LONDON = (51.5072, -0.1276)
TROMSO = (69.6496, 18.9560)

TIME_PATTERN = re.compile(r"^\d{2}:\d{2}$")


@pytest.mark.parametrize("lng,expected", [
    (173.28, "Etc/GMT-12"),
    (-122.05, "Etc/GMT+8"),
    (0.0, "Etc/GMT+0"),
    (7.4, "Etc/GMT+0"),
    (7.6, "Etc/GMT-1"),
])
def test_local_timezone(lng, expected):
    assert local_timezone(lng) == expected


def test_southern_hemisphere_summer_is_december():
    sun = compute_sun_path(*NELSON, year=2026)

    assert 14.8 < sun.summer_solstice.daylength < 15.6
    assert 8.8 < sun.winter_solstice.daylength < 9.6
    assert 11.8 < sun.equinox.daylength < 12.5
    assert sun.longest_day == sun.summer_solstice.daylength
    assert sun.shortest_day == sun.winter_solstice.daylength

    # Noon sun is in the north, high in summer
    assert sun.summer_solstice.altitude == pytest.approx(90 - 41.27 + 23.44, abs=1.0)
    azimuth = sun.summer_solstice.azimuth
    assert min(azimuth, 360 - azimuth) < 2


def test_northern_hemisphere_summer_is_june():
    sun = compute_sun_path(*LONDON, year=2026)

    assert 16.2 < sun.longest_day < 17.0
    assert 7.5 < sun.shortest_day < 8.2
    assert sun.winter_solstice.altitude == pytest.approx(90 - 51.51 - 23.44, abs=1.0)
    assert sun.summer_solstice.azimuth == pytest.approx(180, abs=2)


def test_times_are_formatted():
    sun = compute_sun_path(*LONDON, year=2026)
    for position in (sun.summer_solstice, sun.winter_solstice, sun.equinox):
        assert TIME_PATTERN.match(position.sunrise)
        assert TIME_PATTERN.match(position.sunset)
        assert position.sunrise < position.sunset


def test_polar_day_and_night():
    sun = compute_sun_path(*TROMSO, year=2026)

    assert sun.summer_solstice.daylength == 24.0
    assert sun.summer_solstice.sunrise == "--:--"
    assert sun.winter_solstice.daylength == 0.0
    assert sun.winter_solstice.sunset == "--:--"
    assert TIME_PATTERN.match(sun.equinox.sunrise)


def test_hemisphere_swap_uses_solstice_dates():
    calls = []

    def fake_position(day, lat, lng):
        calls.append(day)
        return SunPosition(altitude=float(day.month), azimuth=0.0, sunrise="06:00",
                           sunset="18:00", daylength=float(day.month))

    with patch("loaders.sun.sun_position_on", side_effect=fake_position):
        south = compute_sun_path(-30.0, 150.0, year=2026)
        north = compute_sun_path(30.0, 150.0, year=2026)

    assert [(d.month, d.day) for d in calls[:3]] == [(6, 21), (12, 21), (3, 20)]
    assert south.summer_solstice.altitude == 12.0
    assert south.winter_solstice.altitude == 6.0
    assert north.summer_solstice.altitude == 6.0
    assert north.equinox.altitude == 3.0
