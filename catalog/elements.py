"""
Element type catalog.

Fixed element types are declared here. Individual plants from the plant
catalog are placeable too, under type ids of the form ``plant:<plant id>``.
"""

from functools import lru_cache
from typing import Dict, Optional, Tuple

from catalog.plants import Plant, get_plant
from core.models import ElementCategory, ElementType, FieldDef

PLANT_TYPE_PREFIX = "plant:"

ELEMENT_TYPES: Tuple[ElementType, ...] = (
    ElementType(
        id="house",
        name="House",
        category=ElementCategory.STRUCTURE,
        default_size=(12, 10),
        can_rotate=True,
        can_resize=False,
        implementation_phase=1,
        meta_schema={
            "bedrooms": FieldDef("number", "Bedrooms", default=3, min=1, max=10),
            "stories": FieldDef("number", "Stories", default=1, min=1, max=3),
        },
    ),
    ElementType(
        id="shed",
        name="Shed",
        category=ElementCategory.STRUCTURE,
        default_size=(4, 3),
        can_rotate=True,
        can_resize=False,
        implementation_phase=1,
        meta_schema={
            "purpose": FieldDef("select", "Purpose", default="tools",
                                options=("tools", "storage", "workshop")),
        },
    ),
    ElementType(
        id="greenhouse",
        name="Greenhouse",
        category=ElementCategory.STRUCTURE,
        default_size=(6, 3),
        can_rotate=True,
        can_resize=True,
        implementation_phase=3,
        meta_schema={
            "heated": FieldDef("boolean", "Heated", default=False),
        },
    ),
    ElementType(
        id="garden-bed",
        name="Garden Bed",
        category=ElementCategory.PLANT,
        default_size=(3, 1.2),
        can_rotate=True,
        can_resize=False,
        implementation_phase=2,
        meta_schema={
            "raised": FieldDef("boolean", "Raised bed", default=False),
            "irrigated": FieldDef("boolean", "Irrigated", default=False),
        },
    ),
    ElementType(
        id="fruit-tree",
        name="Fruit Tree",
        category=ElementCategory.PLANT,
        default_size=(4, 4),
        can_rotate=False,
        can_resize=False,
        implementation_phase=2,
        meta_schema={
            "species": FieldDef("string", "Species"),
            "yearsToFruit": FieldDef("number", "Years to fruit", default=3, min=1, max=20),
        },
    ),
    ElementType(
        id="windbreak",
        name="Windbreak",
        category=ElementCategory.PLANT,
        default_size=(20, 3),
        can_rotate=True,
        can_resize=True,
        implementation_phase=1,
        meta_schema={
            "rows": FieldDef("number", "Rows", default=2, min=1, max=5),
        },
    ),
    ElementType(
        id="water-tank",
        name="Water Tank",
        category=ElementCategory.WATER,
        default_size=(2.5, 2.5),
        can_rotate=False,
        can_resize=False,
        implementation_phase=1,
        meta_schema={
            "capacityLiters": FieldDef("number", "Capacity", default=5000,
                                       min=500, max=100000, unit="liters"),
        },
    ),
    ElementType(
        id="pond",
        name="Pond",
        category=ElementCategory.WATER,
        default_size=(6, 4),
        can_rotate=True,
        can_resize=True,
        implementation_phase=2,
        meta_schema={
            "depthMeters": FieldDef("number", "Depth", default=1.0, min=0.3, max=4, unit="meters"),
            "lined": FieldDef("boolean", "Lined", default=True),
        },
    ),
    ElementType(
        id="swale",
        name="Swale",
        category=ElementCategory.WATER,
        default_size=(30, 2),
        can_rotate=True,
        can_resize=True,
        implementation_phase=1,
    ),
    ElementType(
        id="chicken-coop",
        name="Chicken Coop",
        category=ElementCategory.ANIMAL,
        default_size=(3, 2),
        can_rotate=True,
        can_resize=False,
        implementation_phase=3,
        meta_schema={
            "maxChickens": FieldDef("number", "Max chickens", default=6, min=2, max=50),
        },
    ),
    ElementType(
        id="beehive",
        name="Beehive",
        category=ElementCategory.ANIMAL,
        default_size=(0.6, 0.5),
        can_rotate=True,
        can_resize=False,
        implementation_phase=3,
        meta_schema={
            "hiveType": FieldDef("select", "Hive type", default="langstroth",
                                 options=("langstroth", "top-bar", "warre")),
        },
    ),
    ElementType(
        id="compost",
        name="Compost",
        category=ElementCategory.UTILITY,
        default_size=(1.5, 1.5),
        can_rotate=False,
        can_resize=False,
        implementation_phase=2,
        meta_schema={
            "compostType": FieldDef("select", "Type", default="bin",
                                    options=("bin", "tumbler", "pile")),
        },
    ),
    ElementType(
        id="path",
        name="Path",
        category=ElementCategory.PATH,
        default_size=(1, 1),
        can_rotate=False,
        can_resize=False,
        implementation_phase=1,
        meta_schema={
            "surface": FieldDef("select", "Surface", default="gravel",
                                options=("gravel", "mulch", "concrete", "dirt")),
        },
    ),
)

_TYPES_BY_ID: Dict[str, ElementType] = {t.id: t for t in ELEMENT_TYPES}

# Footprint (width, height) by food forest layer
_PLANT_SIZES = {
    "canopy": (8, 8),
    "understory": (5, 5),
    "shrub": (2, 2),
    "herbaceous": (1, 1),
    "groundcover": (1, 1),
    "root": (0.5, 0.5),
    "vine": (2, 1),
}


@lru_cache(maxsize=None)
def plant_element_type(plant: Plant) -> ElementType:
    """Element type for placing a single catalog plant."""
    return ElementType(
        id=plant.type_id,
        name=plant.name,
        category=ElementCategory.PLANT,
        default_size=_PLANT_SIZES.get(plant.layer, (1, 1)),
        can_rotate=False,
        can_resize=True,
        implementation_phase=2,
    )


def is_plant_type(type_id: str) -> bool:
    return type_id.startswith(PLANT_TYPE_PREFIX)


def plant_id_from_type(type_id: str) -> Optional[str]:
    """``plant:apple`` -> ``apple``; None for non-plant ids."""
    if not is_plant_type(type_id):
        return None
    return type_id[len(PLANT_TYPE_PREFIX):]


def get_element_type(type_id: str) -> Optional[ElementType]:
    """
    Look up an element type by id.

    Returns None for unknown ids (callers skip those elements).
    """
    if is_plant_type(type_id):
        plant = get_plant(plant_id_from_type(type_id))
        return plant_element_type(plant) if plant else None
    return _TYPES_BY_ID.get(type_id)
