"""
Zone presets and buffer radii.

Radii are keyed by property-area bracket. A zone 3 radius of None means
zone 3 extends to the boundary edge.
"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class ZonePreset:
    level: int
    color: str  # hex
    opacity: float
    description: str

    @property
    def rgba(self) -> str:
        r = int(self.color[1:3], 16)
        g = int(self.color[3:5], 16)
        b = int(self.color[5:7], 16)
        return f"rgba({r},{g},{b},{self.opacity})"


@dataclass(frozen=True)
class ZoneRadii:
    zone1: float
    zone2: float
    zone3: Optional[float]  # None = remaining boundary


ZONE_PRESETS: Dict[int, ZonePreset] = {
    0: ZonePreset(0, "#1a1a1a", 0.4, "Home / center of activity"),
    1: ZonePreset(1, "#228B22", 0.2, "Daily use - herbs, salad greens, clothesline"),
    2: ZonePreset(2, "#32CD32", 0.15, "Frequent use - orchard, main garden beds, chickens"),
    3: ZonePreset(3, "#90EE90", 0.1, "Occasional - large crops, pasture, food forest"),
    4: ZonePreset(4, "#D2B48C", 0.1, "Minimal management - timber, foraging, windbreak"),
    5: ZonePreset(5, "#808080", 0.05, "Wild - unmanaged, wildlife habitat, conservation"),
}

# (max area in sqm inclusive, radii). Areas below 2 000 sqm are the tiny bracket.
TINY_MAX_AREA = 2_000
SMALL_MAX_AREA = 10_000
MEDIUM_MAX_AREA = 50_000

TINY_RADII = ZoneRadii(zone1=8, zone2=20, zone3=None)
SMALL_RADII = ZoneRadii(zone1=15, zone2=40, zone3=80)
MEDIUM_RADII = ZoneRadii(zone1=20, zone2=60, zone3=150)
LARGE_RADII = ZoneRadii(zone1=25, zone2=80, zone3=200)

# Zone 0 is the house footprint
HOUSE_FOOTPRINT = (12.0, 10.0)  # width, height in meters


def get_zone_radii(property_area: float) -> ZoneRadii:
    """Buffer radii for a property of ``property_area`` square meters."""
    if property_area < TINY_MAX_AREA:
        return TINY_RADII
    if property_area <= SMALL_MAX_AREA:
        return SMALL_RADII
    if property_area <= MEDIUM_MAX_AREA:
        return MEDIUM_RADII
    return LARGE_RADII


def get_zone_preset(level: int) -> ZonePreset:
    return ZONE_PRESETS[level]
