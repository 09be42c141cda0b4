from datetime import date
from unittest.mock import MagicMock, patch

import pandas as pd
import pytest
import requests

from core.models import ClimateType, Hemisphere
from loaders.climate import (
    CONNECTION_MESSAGE,
    INVALID_MESSAGE,
    NO_DATA_MESSAGE,
    TIMEOUT_MESSAGE,
    ClimateFetchError,
    ClimateLoader,
    derive_climate_type,
    find_monsoon,
    summarize_daily,
)
from core.settings import Settings


@pytest.fixture
def mock_loader():
    with patch('requests.Session') as mock_session:
        loader = ClimateLoader(Settings())
        loader.session = mock_session.return_value
        yield loader


def make_daily():
    """One year: monthly means 16..27 C, wet July/August, westerly wind."""
    days = pd.date_range("2025-01-01", "2025-12-31", freq="D")
    t_max = [20.0 + d.month for d in days]
    t_min = [10.0 + d.month for d in days]
    t_min[0] = None
    precip = [10.0 if d.month in (7, 8) else 1.0 for d in days]
    wind_dir = [10.0 if i % 5 == 0 else 250.0 for i in range(len(days))]
    return {
        "time": [d.strftime("%Y-%m-%d") for d in days],
        "temperature_2m_max": t_max,
        "temperature_2m_min": t_min,
        "precipitation_sum": precip,
        "wind_speed_10m_max": [12.0] * len(days),
        "wind_direction_10m_dominant": wind_dir,
    }


# ─── Classification ─────────────────────────────────────────────────────
@pytest.mark.parametrize("coldest,warmest,rain,lat,expected", [
    # Real-world locations
    (25, 29, 1800, 10.8, (ClimateType.TROPICAL, Hemisphere.NORTHERN)),      # Ho Chi Minh City
    (6, 17, 640, -43.5, (ClimateType.TEMPERATE, Hemisphere.SOUTHERN)),      # Christchurch
    (15, 25, 1150, -27.5, (ClimateType.SUBTROPICAL, Hemisphere.SOUTHERN)),  # Brisbane
    (12, 36, 280, -23.7, (ClimateType.ARID, Hemisphere.SOUTHERN)),          # Alice Springs
    (11, 37, 240, 31.6, (ClimateType.ARID, Hemisphere.NORTHERN)),           # Marrakech
    (17, 29, 1700, 21.0, (ClimateType.SUBTROPICAL, Hemisphere.NORTHERN)),   # Hanoi
    # Boundaries
    (18, 30, 1500, 10, (ClimateType.TROPICAL, Hemisphere.NORTHERN)),
    (17.9, 30, 1500, 10, (ClimateType.SUBTROPICAL, Hemisphere.NORTHERN)),
    (10, 25, 800, -30, (ClimateType.SUBTROPICAL, Hemisphere.SOUTHERN)),
    (9.9, 25, 800, -30, (ClimateType.TEMPERATE, Hemisphere.SOUTHERN)),
    (12, 21.9, 900, 45, (ClimateType.TEMPERATE, Hemisphere.NORTHERN)),
    (12, 22, 900, 45, (ClimateType.SUBTROPICAL, Hemisphere.NORTHERN)),
    (8, 20, 250, 45, (ClimateType.TEMPERATE, Hemisphere.NORTHERN)),
    (20, 35, 249, 10, (ClimateType.ARID, Hemisphere.NORTHERN)),
    (12, 36, 499, 10, (ClimateType.ARID, Hemisphere.NORTHERN)),
    (18, 35, 500, 10, (ClimateType.TROPICAL, Hemisphere.NORTHERN)),
    (25, 28, 2000, 0, (ClimateType.TROPICAL, Hemisphere.NORTHERN)),
    (25, 28, 2000, -0.01, (ClimateType.TROPICAL, Hemisphere.SOUTHERN)),
])
def test_derive_climate_type(coldest, warmest, rain, lat, expected):
    assert derive_climate_type(coldest, warmest, rain, lat) == expected


# ─── Daily summary ──────────────────────────────────────────────────────
def test_summarize_daily():
    summary = summarize_daily(make_daily())

    assert summary.coldest_month_temp == 16.0
    assert summary.warmest_month_temp == 27.0
    assert summary.annual_rainfall == pytest.approx(303 + 620)
    assert summary.frost_free_days == 364
    assert summary.avg_wind_speed == 12.0
    assert summary.dominant_wind_dir == 270.0
    assert summary.monsoon_months == (7, 8)


def test_summarize_daily_without_monsoon():
    daily = make_daily()
    daily["precipitation_sum"] = [2.0] * len(daily["time"])
    assert summarize_daily(daily).monsoon_months is None


def test_summarize_daily_missing_wind():
    daily = make_daily()
    del daily["wind_speed_10m_max"]
    daily["wind_direction_10m_dominant"] = [None] * len(daily["time"])

    summary = summarize_daily(daily)
    assert summary.avg_wind_speed == 0.0
    assert summary.dominant_wind_dir == 0.0


def test_summarize_daily_no_days():
    with pytest.raises(ClimateFetchError, match="No climate data"):
        summarize_daily({"time": []})


def test_summarize_daily_no_temperatures():
    daily = make_daily()
    daily["temperature_2m_max"] = [None] * len(daily["time"])
    with pytest.raises(ClimateFetchError):
        summarize_daily(daily)


def test_monsoon_wraps_year_end():
    rain = pd.Series([300.0, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 300.0], index=range(1, 13))
    assert find_monsoon(rain, float(rain.sum())) == (12, 1)


def test_monsoon_picks_wettest_pair():
    rain = pd.Series([10.0, 10, 200, 250, 10, 10, 10, 10, 220, 240, 10, 10], index=range(1, 13))
    assert find_monsoon(rain, float(rain.sum())) == (9, 10)


# ─── Fetching ───────────────────────────────────────────────────────────
def test_date_range_is_365_days_ending_yesterday():
    start, end = ClimateLoader.date_range(date(2026, 3, 1))
    assert end == date(2026, 2, 28)
    assert start == date(2025, 3, 1)
    assert (end - start).days == 364


def test_fetch_climate_success(mock_loader):
    mock_response = MagicMock()
    mock_response.ok = True
    mock_response.json.return_value = {"daily": make_daily()}
    mock_loader.session.get.return_value = mock_response

    summary = mock_loader.fetch_climate(-41.27, 173.28)
    assert summary.warmest_month_temp == 27.0

    _, kwargs = mock_loader.session.get.call_args
    assert kwargs["params"]["latitude"] == -41.27
    assert "precipitation_sum" in kwargs["params"]["daily"]
    assert kwargs["timeout"] == 10.0


def test_fetch_climate_timeout(mock_loader):
    mock_loader.session.get.side_effect = requests.Timeout("slow")
    with pytest.raises(ClimateFetchError) as exc:
        mock_loader.fetch_climate(0, 0)
    assert str(exc.value) == TIMEOUT_MESSAGE


def test_fetch_climate_connection_error(mock_loader):
    mock_loader.session.get.side_effect = requests.ConnectionError("down")
    with pytest.raises(ClimateFetchError) as exc:
        mock_loader.fetch_climate(0, 0)
    assert str(exc.value) == CONNECTION_MESSAGE


def test_fetch_climate_bad_status(mock_loader):
    mock_response = MagicMock()
    mock_response.ok = False
    mock_response.status_code = 503
    mock_loader.session.get.return_value = mock_response

    with pytest.raises(ClimateFetchError, match="status 503"):
        mock_loader.fetch_climate(0, 0)


def test_fetch_climate_invalid_json(mock_loader):
    mock_response = MagicMock()
    mock_response.ok = True
    mock_response.json.side_effect = ValueError("not json")
    mock_loader.session.get.return_value = mock_response

    with pytest.raises(ClimateFetchError) as exc:
        mock_loader.fetch_climate(0, 0)
    assert str(exc.value) == INVALID_MESSAGE


def test_fetch_climate_non_object_body(mock_loader):
    mock_response = MagicMock()
    mock_response.ok = True
    mock_response.json.return_value = ["unexpected"]
    mock_loader.session.get.return_value = mock_response

    with pytest.raises(ClimateFetchError) as exc:
        mock_loader.fetch_climate(0, 0)
    assert str(exc.value) == INVALID_MESSAGE


def test_fetch_climate_empty_daily(mock_loader):
    mock_response = MagicMock()
    mock_response.ok = True
    mock_response.json.return_value = {"daily": {"time": []}}
    mock_loader.session.get.return_value = mock_response

    with pytest.raises(ClimateFetchError) as exc:
        mock_loader.fetch_climate(0, 0)
    assert str(exc.value) == NO_DATA_MESSAGE
