import pytest

from core.models import (
    AdvisorState,
    ClimateInfo,
    ClimateType,
    Element,
    ElementProperties,
    ElevationSummary,
    Geometry,
    Hemisphere,
    LayerType,
    SiteAnalysis,
    SunPosition,
    SunSummary,
    WindSummary,
    Zone,
)
from core.settings import Settings
from core.units import feet_to_meters, format_area, meters_to_feet, sq_meters_to_acres, sq_meters_to_hectares


def test_geometry_polygon_closes_ring():
    geometry = Geometry.polygon([(0, 0), (1, 0), (1, 1)])
    assert geometry.coordinates[0] == geometry.coordinates[-1]
    assert len(geometry.coordinates) == 4


def test_point_representative_point():
    assert Geometry.point(173.2, -41.2).representative_point == (173.2, -41.2)


def test_polygon_representative_point_is_vertex_average():
    geometry = Geometry("Polygon", [(0, 0), (2, 0), (2, 2), (0, 2)])
    assert geometry.representative_point == (1, 1)
    assert Geometry("Polygon", []).representative_point is None


def test_element_properties_normalize():
    props = ElementProperties(rotation=370, layer="water")
    assert props.rotation == 10
    assert props.layer == LayerType.WATER


def test_element_properties_reject_negative_scale():
    with pytest.raises(ValueError):
        ElementProperties(scale=-1)


def test_element_round_trip():
    element = Element(
        id="e1",
        type_id="pond",
        geometry=Geometry.point(1.0, 2.0),
        properties=ElementProperties(zone=2, layer=LayerType.WATER, meta={"lined": True}),
    )
    data = element.to_dict()
    assert data["properties"]["layer"] == "water"

    restored = Element.from_dict(data)
    assert restored == element


def test_zone_round_trip():
    zone = Zone("zone-1", 1, [[(0, 0), (1, 0), (1, 1), (0, 0)]], "rgba(34,139,34,0.2)", "Daily use")
    assert Zone.from_dict(zone.to_dict()) == zone
    assert zone.exterior == zone.geometry[0]


def test_advisor_state_records():
    state = AdvisorState()
    state.dismiss("a")
    state.dismiss("a")
    state.apply("b")

    assert state.dismissed_tips == ["a"]
    assert state.applied_tips == ["b"]
    assert state.seen_tips == ["a", "b"]
    assert state.is_dismissed("a")
    assert not state.is_dismissed("b")
    assert AdvisorState.from_dict(state.to_dict()) == state


def test_elevation_placeholder_is_unavailable():
    assert not ElevationSummary.placeholder().available
    assert ElevationSummary(1, 2, 3, 0, "North facing").available


def test_site_analysis_round_trip():
    sun = SunPosition(altitude=72.0, azimuth=0.0, sunrise="05:50", sunset="20:50", daylength=15.0)
    analysis = SiteAnalysis(
        climate=ClimateInfo(
            type=ClimateType.SUBTROPICAL,
            hemisphere=Hemisphere.SOUTHERN,
            avg_rainfall=1200.0,
            summer_temp=24.0,
            winter_temp=12.0,
            frost_free_days=365,
            monsoon_months=(1, 2),
        ),
        sun=SunSummary(sun, SunPosition.placeholder(), sun, 15.0, 9.0),
        wind=WindSummary(prevailing=45.0, avg_speed=21.0, label="Strong north-east wind"),
        elevation=ElevationSummary.placeholder(),
    )
    restored = SiteAnalysis.from_dict(analysis.to_dict())
    assert restored == analysis
    assert restored.climate.type is ClimateType.SUBTROPICAL


# ─── Units ──────────────────────────────────────────────────────────────
def test_unit_conversions():
    assert sq_meters_to_hectares(25_000) == 2.5
    assert sq_meters_to_acres(4046.86) == pytest.approx(1)
    assert feet_to_meters(meters_to_feet(12.5)) == pytest.approx(12.5)


@pytest.mark.parametrize("sqm,system,expected", [
    (850, "metric", "850 sqm"),
    (25_000, "metric", "2.50 ha"),
    (100, "imperial", "1076 sq ft"),
    (8_093.72, "imperial", "2.00 acres"),
])
def test_format_area(sqm, system, expected):
    assert format_area(sqm, system) == expected


# ─── Settings ───────────────────────────────────────────────────────────
def test_settings_defaults():
    settings = Settings()
    assert settings.http_timeout == 10.0
    assert settings.sun_reference_year == 2026


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("COMFREY_HTTP_TIMEOUT", "3.5")
    monkeypatch.setenv("COMFREY_SUN_YEAR", "2030")
    monkeypatch.setenv("COMFREY_LOG_LEVEL", "debug")

    settings = Settings.from_env()
    assert settings.http_timeout == 3.5
    assert settings.sun_reference_year == 2030
    assert settings.log_level == "DEBUG"
    assert settings.to_dict()["nominatim_url"] == "https://nominatim.openstreetmap.org"
