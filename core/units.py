"""
Unit conversion helpers for areas and distances.
"""

SQM_PER_HECTARE = 10_000
SQM_PER_ACRE = 4046.86
FEET_PER_METER = 3.28084
SQFT_PER_SQM = 10.7639


def sq_meters_to_hectares(sqm: float) -> float:
    return sqm / SQM_PER_HECTARE


def sq_meters_to_acres(sqm: float) -> float:
    return sqm / SQM_PER_ACRE


def meters_to_feet(m: float) -> float:
    return m * FEET_PER_METER


def feet_to_meters(ft: float) -> float:
    return ft / FEET_PER_METER


def format_area(sqm: float, system: str = "metric") -> str:
    """
    Human-readable area.

    Metric switches from square meters to hectares at 1 ha; imperial
    switches from square feet to acres at 1 acre.
    """
    if system == "imperial":
        acres = sq_meters_to_acres(sqm)
        if acres >= 1:
            return f"{acres:.2f} acres"
        return f"{round(sqm * SQFT_PER_SQM)} sq ft"
    hectares = sq_meters_to_hectares(sqm)
    if hectares >= 1:
        return f"{hectares:.2f} ha"
    return f"{round(sqm)} sqm"
