from unittest.mock import MagicMock, patch

import pytest

from core.errors import AnalysisError
from core.models import ClimateType, Hemisphere, SunPosition, SunSummary
from core.settings import Settings
from loaders.climate import ClimateFetchError, ClimateSummary
from loaders.elevation import ElevationFetchError, ElevationSample
from loaders.site_analysis import (
    ANALYSIS_FAILED_MESSAGE,
    SiteAnalyzer,
    build_site_analysis,
    format_aspect_label,
    format_wind_label,
)

CLIMATE = ClimateSummary(
    coldest_month_temp=6.5,
    warmest_month_temp=18.2,
    annual_rainfall=960.0,
    frost_free_days=290,
    avg_wind_speed=14.0,
    dominant_wind_dir=225.0,
)

SUN = SunSummary(
    summer_solstice=SunPosition(72.2, 0.0, "05:45", "20:57", 15.2),
    winter_solstice=SunPosition(25.3, 0.0, "07:55", "17:12", 9.3),
    equinox=SunPosition(48.7, 0.0, "06:35", "18:44", 12.1),
    longest_day=15.2,
    shortest_day=9.3,
)


@pytest.fixture
def loaders():
    climate_loader = MagicMock()
    climate_loader.fetch_climate.return_value = CLIMATE
    elevation_loader = MagicMock()
    elevation_loader.fetch_elevation.return_value = ElevationSample(min=40.0, max=52.0, slope=6.8, aspect=0.0)
    return climate_loader, elevation_loader


@pytest.fixture
def analyzer(loaders):
    climate_loader, elevation_loader = loaders
    return SiteAnalyzer(Settings(), climate_loader=climate_loader, elevation_loader=elevation_loader)


# ─── Labels ─────────────────────────────────────────────────────────────
@pytest.mark.parametrize("degrees,speed,expected", [
    (0, 5, "Light north wind"),
    (225, 14, "Moderate south-west wind"),
    (270, 20, "Strong west wind"),
    (350, 9.9, "Light north wind"),
    (22.5, 10, "Moderate north-east wind"),
])
def test_format_wind_label(degrees, speed, expected):
    assert format_wind_label(degrees, speed) == expected


@pytest.mark.parametrize("degrees,expected", [
    (0, "North facing"),
    (90, "East facing"),
    (180, "South facing"),
    (315, "North-west facing"),
    (359, "North facing"),
])
def test_format_aspect_label(degrees, expected):
    assert format_aspect_label(degrees) == expected


# ─── Assembly ───────────────────────────────────────────────────────────
def test_build_site_analysis_full():
    analysis = build_site_analysis(-41.27, CLIMATE, sun=SUN, elevation=ElevationSample(40, 52, 6.8, 0.0))

    assert analysis.climate.type == ClimateType.TEMPERATE
    assert analysis.climate.hemisphere == Hemisphere.SOUTHERN
    assert analysis.climate.summer_temp == 18.2
    assert analysis.climate.winter_temp == 6.5
    assert analysis.climate.avg_rainfall == 960.0
    assert analysis.wind.label == "Moderate south-west wind"
    assert analysis.elevation.aspect_label == "North facing"
    assert analysis.elevation.available
    assert analysis.sun == SUN


def test_build_site_analysis_placeholders():
    analysis = build_site_analysis(10.0, CLIMATE)
    assert not analysis.elevation.available
    assert analysis.elevation.aspect_label == "Elevation data unavailable"
    assert analysis.sun == SunSummary.placeholder()


# ─── Analyzer ───────────────────────────────────────────────────────────
@patch("loaders.site_analysis.compute_sun_path", return_value=SUN)
def test_analyze_success(mock_sun, analyzer, loaders):
    analysis = analyzer.analyze(-41.27, 173.28)

    assert analysis.climate.type == ClimateType.TEMPERATE
    assert analysis.elevation.slope == 6.8
    assert analysis.sun == SUN
    loaders[0].fetch_climate.assert_called_once_with(-41.27, 173.28)
    loaders[1].fetch_elevation.assert_called_once_with(-41.27, 173.28)
    mock_sun.assert_called_once_with(-41.27, 173.28, 2026)


@patch("loaders.site_analysis.compute_sun_path", return_value=SUN)
def test_climate_failure_is_fatal(mock_sun, analyzer, loaders):
    loaders[0].fetch_climate.side_effect = ClimateFetchError("Climate data request timed out. Please try again.")

    with pytest.raises(AnalysisError) as exc:
        analyzer.analyze(0.0, 0.0)
    assert str(exc.value) == ANALYSIS_FAILED_MESSAGE


@patch("loaders.site_analysis.compute_sun_path", return_value=SUN)
def test_elevation_failure_uses_placeholder(mock_sun, analyzer, loaders, caplog):
    loaders[1].fetch_elevation.side_effect = ElevationFetchError("Elevation data unavailable for this location.")

    analysis = analyzer.analyze(-41.27, 173.28)
    assert not analysis.elevation.available
    assert analysis.sun == SUN
    assert "Elevation lookup failed" in caplog.text


@patch("loaders.site_analysis.compute_sun_path", side_effect=ValueError("bad timezone"))
def test_sun_failure_uses_placeholder(mock_sun, analyzer):
    analysis = analyzer.analyze(-41.27, 173.28)
    assert analysis.sun == SunSummary.placeholder()
    assert analysis.elevation.available
