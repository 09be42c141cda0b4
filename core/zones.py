"""
Zone Generator for permaculture site design.

Builds concentric management zones around the house, clipped to the
property boundary:

  Zone 0 - house footprint
  Zone 1 - daily use (herbs, salad greens, clothesline)
  Zone 2 - frequent use (orchard, main garden beds, chickens)
  Zone 3 - occasional (large crops, pasture, food forest)
  Zone 4 - minimal management (timber, foraging, windbreak)

All polygon work happens in a local meter grid centred on the house.
"""

import logging
from typing import List, Optional

from shapely.errors import GEOSException
from shapely.geometry import Point, Polygon
from shapely.geometry.base import BaseGeometry

from catalog.zones import HOUSE_FOOTPRINT, get_zone_preset, get_zone_radii
from core.geo import (
    buffer_around,
    largest_polygon,
    point_in_polygon,
    polygon_rings,
    rectangle_around,
    to_lnglat,
    to_local,
)
from core.models import Element, Position, Ring, Zone
from core.validation import ensure_valid_boundary

log = logging.getLogger(__name__)

# Residual zone 4 slivers at or below this area are dropped
MIN_RESIDUAL_AREA_SQM = 1.0


class ZoneGenerator:
    """
    Derives zones 0-4 from a house position and a property boundary.

    Each ring is the buffered disk at that level clipped to the boundary,
    minus the previous level's disk. Any area the rings do not reach is
    the zone 4 residual.
    """

    def __init__(self, buffer_steps: int = 64):
        self.buffer_steps = buffer_steps

    def generate(
        self,
        house_position: Position,
        boundary: Ring,
        property_area: float,
    ) -> List[Zone]:
        """
        Generate zones for one design.

        Args:
            house_position: (lng, lat) of the house center
            boundary: Closed property boundary ring
            property_area: Property area in square meters (selects radii)

        Returns:
            Zones ordered by level. Empty levels are omitted.
        """
        ensure_valid_boundary(boundary)

        origin = tuple(house_position)
        radii = get_zone_radii(property_area)
        log.debug(
            f"Zone radii for {property_area:.0f} sqm: "
            f"{radii.zone1}/{radii.zone2}/{radii.zone3 or 'edge'} m"
        )

        site = to_local(boundary, origin)
        if not site.is_valid:
            site = largest_polygon(site.buffer(0)) or site

        zones: List[Zone] = []

        # Zone 0 - house footprint clipped to the boundary
        footprint = rectangle_around((0.0, 0.0), *HOUSE_FOOTPRINT)
        zone0 = self._intersect(footprint, site)
        if zone0 is None:
            zone0 = footprint
        zones.append(self._make_zone(0, zone0, origin))

        # Zone 1 - daily orbit
        zone1 = self._intersect(self._disk(radii.zone1), site)
        if zone1 is not None:
            zones.append(self._make_zone(1, zone1, origin))

        # Zone 2 - ring between the zone 1 and zone 2 radii
        zone2_disk = self._intersect(self._disk(radii.zone2), site)
        if zone2_disk is not None and zone1 is not None:
            zone2 = self._difference(zone2_disk, zone1)
            if zone2 is not None:
                zones.append(self._make_zone(2, zone2, origin))
        elif zone2_disk is not None:
            zones.append(self._make_zone(2, zone2_disk, origin))

        # Zone 3 - ring out to the zone 3 radius, or to the boundary edge
        outer_zone2 = self._first(zone2_disk, zone1, zone0)
        if radii.zone3 is not None:
            zone3_disk = self._intersect(self._disk(radii.zone3), site)
            zone3 = self._difference(zone3_disk, outer_zone2) if zone3_disk is not None else None
            outer_zone3 = zone3_disk if zone3 is not None else outer_zone2
        else:
            zone3 = self._difference(site, outer_zone2)
            outer_zone3 = site if zone3 is not None else outer_zone2

        if zone3 is not None:
            zones.append(self._make_zone(3, zone3, origin))

        # Zone 4 - whatever the rings did not reach
        zone4 = self._difference(site, outer_zone3)
        if zone4 is not None and zone4.area > MIN_RESIDUAL_AREA_SQM:
            zones.append(self._make_zone(4, zone4, origin))

        log.info(
            f"Generated {len(zones)} zones (levels {[z.level for z in zones]}) "
            f"for {property_area:.0f} sqm property"
        )
        return zones

    # ───────────────────────────────────────────────────────────────────
    # Safe polygon operations
    # ───────────────────────────────────────────────────────────────────
    def _disk(self, radius_m: float) -> Polygon:
        return buffer_around((0.0, 0.0), radius_m, self.buffer_steps)

    def _intersect(self, a: BaseGeometry, b: BaseGeometry) -> Optional[Polygon]:
        """Intersection collapsed to its largest part, None if empty or failed."""
        try:
            return largest_polygon(a.intersection(b))
        except (GEOSException, ValueError) as e:
            log.debug(f"Intersection failed: {e}")
            return None

    def _difference(self, a: BaseGeometry, b: BaseGeometry) -> Optional[Polygon]:
        """``a`` minus ``b`` collapsed to its largest part, None if empty or failed."""
        try:
            return largest_polygon(a.difference(b))
        except (GEOSException, ValueError) as e:
            log.debug(f"Difference failed: {e}")
            return None

    @staticmethod
    def _first(*candidates: Optional[Polygon]) -> Optional[Polygon]:
        for candidate in candidates:
            if candidate is not None:
                return candidate
        return None

    @staticmethod
    def _make_zone(level: int, local_geometry: Polygon, origin: Position) -> Zone:
        preset = get_zone_preset(level)
        return Zone(
            id=f"zone-{level}",
            level=level,
            geometry=polygon_rings(to_lnglat(local_geometry, origin)),
            color=preset.rgba,
            description=preset.description,
        )


def generate_zones(house_position: Position, boundary: Ring, property_area: float) -> List[Zone]:
    """Generate permaculture zones 0-4. See ZoneGenerator.generate."""
    return ZoneGenerator().generate(house_position, boundary, property_area)


# ═══════════════════════════════════════════════════════════════════════════
# ZONE ASSIGNMENT
# ═══════════════════════════════════════════════════════════════════════════
def assign_zone_level(position: Optional[Position], zones: List[Zone]) -> Optional[int]:
    """
    Zone level for a point.

    The lowest level whose polygon contains the point wins (zone 0 sits
    inside zone 1). Points outside every zone take the nearest zone.
    """
    if position is None or not zones:
        return None

    containing = [z.level for z in zones if point_in_polygon(position, z.geometry)]
    if containing:
        return min(containing)

    here = Point(0.0, 0.0)
    nearest = min(zones, key=lambda z: to_local(z.geometry, position).distance(here))
    return nearest.level


def assign_zones(elements: List[Element], zones: List[Zone]) -> List[Element]:
    """Stamp ``properties.zone`` on every element from the current zones."""
    for element in elements:
        element.properties.zone = assign_zone_level(element.position, zones)
    return elements
