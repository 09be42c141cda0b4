"""
Static reference data for the site designer.

Includes:
- Element types (fixed types plus ``plant:<id>`` catalog plants)
- Plants with companion / antagonist relationships
- Advisor tips
- Zone presets and buffer radii
"""

from catalog.zones import ZONE_PRESETS, ZonePreset, ZoneRadii, get_zone_preset, get_zone_radii
from catalog.plants import PLANTS, PLANT_LAYERS, Plant, get_plant
from catalog.elements import ELEMENT_TYPES, get_element_type
from catalog.tips import ADVISOR_TIPS, get_tip

__all__ = [
    "ZONE_PRESETS",
    "ZonePreset",
    "ZoneRadii",
    "get_zone_preset",
    "get_zone_radii",
    "PLANTS",
    "PLANT_LAYERS",
    "Plant",
    "get_plant",
    "ELEMENT_TYPES",
    "get_element_type",
    "ADVISOR_TIPS",
    "get_tip",
]
