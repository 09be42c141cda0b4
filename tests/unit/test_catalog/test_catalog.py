import pytest

from catalog.elements import (
    ELEMENT_TYPES,
    get_element_type,
    is_plant_type,
    plant_element_type,
    plant_id_from_type,
)
from catalog.plants import PLANT_LAYERS, PLANTS, get_plant, plants_in_layer
from catalog.tips import ADVISOR_TIPS, get_tip
from core.models import (
    ALL_CLIMATES,
    ClimateType,
    ElementCategory,
    ElementNearTrigger,
    ElementPlacedTrigger,
    ElementPositionTrigger,
    ElevationCompareCondition,
    LayerType,
)


# ─── Element types ──────────────────────────────────────────────────────
def test_element_type_ids_unique():
    ids = [t.id for t in ELEMENT_TYPES]
    assert len(ids) == len(set(ids))


def test_element_phases_in_range():
    for element_type in ELEMENT_TYPES:
        assert element_type.implementation_phase in (1, 2, 3)


def test_get_element_type():
    tank = get_element_type("water-tank")
    assert tank.name == "Water Tank"
    assert tank.category == ElementCategory.WATER
    assert tank.default_layer == LayerType.WATER
    assert tank.meta_schema["capacityLiters"].unit == "liters"
    assert get_element_type("spaceship") is None


def test_default_meta_skips_fields_without_default():
    tree = get_element_type("fruit-tree")
    assert tree.default_meta() == {"yearsToFruit": 3}


def test_plant_type_ids():
    assert is_plant_type("plant:apple")
    assert not is_plant_type("house")
    assert plant_id_from_type("plant:pigeon-pea") == "pigeon-pea"
    assert plant_id_from_type("house") is None


def test_plant_element_type():
    apple = get_element_type("plant:apple")
    assert apple.name == "Apple"
    assert apple.category == ElementCategory.PLANT
    assert apple.implementation_phase == 2
    assert apple.default_size == (8, 8)
    assert apple is plant_element_type(get_plant("apple"))
    assert get_element_type("plant:dragonfruit") is None


# ─── Plants ─────────────────────────────────────────────────────────────
def test_plant_ids_unique():
    ids = [p.id for p in PLANTS]
    assert len(ids) == len(set(ids))


def test_plant_layers_valid():
    for plant in PLANTS:
        assert plant.layer in PLANT_LAYERS


def test_relationships_reference_known_plants():
    for plant in PLANTS:
        for other in plant.companions + plant.antagonists:
            assert get_plant(other) is not None, f"{plant.id} -> {other}"


def test_no_plant_is_both_companion_and_antagonist():
    for plant in PLANTS:
        assert not set(plant.companions) & set(plant.antagonists)


def test_plant_lookups():
    assert get_plant("comfrey").dynamic_accumulator
    assert get_plant("clover").nitrogen_fixer
    assert get_plant("nope") is None
    assert {p.id for p in plants_in_layer("vine")} >= {"grape", "kiwi"}


def test_grows_in():
    mango = get_plant("mango")
    assert mango.grows_in([ClimateType.TROPICAL])
    assert mango.grows_in(["subtropical"])
    assert not mango.grows_in(["temperate", "arid"])


# ─── Tips ───────────────────────────────────────────────────────────────
def test_tip_ids_unique():
    ids = [t.id for t in ADVISOR_TIPS]
    assert len(ids) == len(set(ids))


def test_tip_priorities_in_range():
    for tip in ADVISOR_TIPS:
        assert 1 <= tip.priority <= 100


def test_tip_climate_scope_valid():
    allowed = {ALL_CLIMATES} | set(ClimateType)
    for tip in ADVISOR_TIPS:
        assert tip.climate in allowed


def test_tip_text_present():
    for tip in ADVISOR_TIPS:
        assert tip.headline and tip.explanation and tip.short_reminder


def test_element_triggers_reference_catalog_types():
    for tip in ADVISOR_TIPS:
        trigger = tip.trigger
        if isinstance(trigger, (ElementPlacedTrigger, ElementPositionTrigger)):
            assert get_element_type(trigger.element_type) is not None
        elif isinstance(trigger, ElementNearTrigger):
            assert get_element_type(trigger.element_a) is not None
            assert get_element_type(trigger.element_b) is not None
            assert trigger.max_distance > 0


def test_elevation_conditions_well_formed():
    for tip in ADVISOR_TIPS:
        if isinstance(tip.condition, ElevationCompareCondition):
            assert tip.condition.expected in ("higher", "lower")


@pytest.mark.parametrize("tip_id", ["water-tank-placed", "tank-near-garden", "design-review-zones"])
def test_get_tip(tip_id):
    assert get_tip(tip_id).id == tip_id


def test_get_unknown_tip():
    assert get_tip("nope") is None
