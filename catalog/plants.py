"""
Plant catalog - food forest species with companion relationships.

Relationships are declared per plant and are not always mirrored on the
other side; lookups must check both directions.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from core.models import ClimateType

TROPICAL = ClimateType.TROPICAL
SUBTROPICAL = ClimateType.SUBTROPICAL
TEMPERATE = ClimateType.TEMPERATE
ARID = ClimateType.ARID

# Food forest layers, tallest first
PLANT_LAYERS = (
    "canopy",
    "understory",
    "shrub",
    "herbaceous",
    "groundcover",
    "root",
    "vine",
)


@dataclass(frozen=True)
class Plant:
    id: str
    name: str
    scientific_name: str
    layer: str  # one of PLANT_LAYERS
    climates: Tuple[ClimateType, ...]
    companions: Tuple[str, ...] = ()
    antagonists: Tuple[str, ...] = ()
    nitrogen_fixer: bool = False
    dynamic_accumulator: bool = False

    @property
    def type_id(self) -> str:
        """Element type id used when this plant is placed on a design."""
        return f"plant:{self.id}"

    def grows_in(self, climates) -> bool:
        return any(c in self.climates for c in climates)


PLANTS: Tuple[Plant, ...] = (
    # ─── Canopy ────────────────────────────────────────────────────────
    Plant("apple", "Apple", "Malus domestica", "canopy", (TEMPERATE,),
          companions=("comfrey", "chives", "nasturtium", "clover", "garlic", "yarrow"),
          antagonists=("walnut",)),
    Plant("pear", "Pear", "Pyrus communis", "canopy", (TEMPERATE,),
          companions=("comfrey", "clover", "chives")),
    Plant("walnut", "Walnut", "Juglans regia", "canopy", (TEMPERATE,),
          antagonists=("apple", "tomato", "blueberry", "potato")),
    Plant("mango", "Mango", "Mangifera indica", "canopy", (TROPICAL, SUBTROPICAL),
          companions=("pigeon-pea", "sweet-potato", "ginger", "lemongrass")),
    Plant("avocado", "Avocado", "Persea americana", "canopy", (TROPICAL, SUBTROPICAL),
          companions=("comfrey", "pigeon-pea", "nasturtium")),
    Plant("olive", "Olive", "Olea europaea", "canopy", (ARID, SUBTROPICAL),
          companions=("rosemary", "thyme")),
    Plant("mesquite", "Mesquite", "Prosopis glandulosa", "canopy", (ARID,),
          nitrogen_fixer=True),

    # ─── Understory ────────────────────────────────────────────────────
    Plant("fig", "Fig", "Ficus carica", "understory", (TEMPERATE, SUBTROPICAL, ARID),
          companions=("comfrey", "nasturtium")),
    Plant("lemon", "Lemon", "Citrus limon", "understory", (SUBTROPICAL, TROPICAL),
          companions=("comfrey", "nasturtium", "pigeon-pea", "lemongrass")),
    Plant("peach", "Peach", "Prunus persica", "understory", (TEMPERATE, SUBTROPICAL),
          companions=("garlic", "chives", "clover")),
    Plant("pomegranate", "Pomegranate", "Punica granatum", "understory", (ARID, SUBTROPICAL),
          companions=("rosemary",)),
    Plant("banana", "Banana", "Musa acuminata", "understory", (TROPICAL,),
          companions=("sweet-potato", "pigeon-pea", "comfrey", "turmeric")),

    # ─── Shrub ─────────────────────────────────────────────────────────
    Plant("blueberry", "Blueberry", "Vaccinium corymbosum", "shrub", (TEMPERATE,),
          companions=("strawberry", "thyme")),
    Plant("currant", "Currant", "Ribes nigrum", "shrub", (TEMPERATE,),
          companions=("comfrey", "chives")),
    Plant("goumi", "Goumi", "Elaeagnus multiflora", "shrub", (TEMPERATE,),
          nitrogen_fixer=True),
    Plant("pigeon-pea", "Pigeon Pea", "Cajanus cajan", "shrub", (TROPICAL, SUBTROPICAL, ARID),
          nitrogen_fixer=True),
    Plant("rosemary", "Rosemary", "Salvia rosmarinus", "shrub", (ARID, SUBTROPICAL, TEMPERATE),
          companions=("beans", "carrot")),
    Plant("goji", "Goji", "Lycium barbarum", "shrub", (ARID, TEMPERATE)),

    # ─── Herbaceous ────────────────────────────────────────────────────
    Plant("comfrey", "Comfrey", "Symphytum officinale", "herbaceous", (TEMPERATE, SUBTROPICAL),
          dynamic_accumulator=True),
    Plant("yarrow", "Yarrow", "Achillea millefolium", "herbaceous", (TEMPERATE, ARID),
          dynamic_accumulator=True),
    Plant("borage", "Borage", "Borago officinalis", "herbaceous", (TEMPERATE, SUBTROPICAL),
          companions=("tomato", "strawberry", "squash"),
          dynamic_accumulator=True),
    Plant("tomato", "Tomato", "Solanum lycopersicum", "herbaceous",
          (TEMPERATE, SUBTROPICAL, TROPICAL),
          companions=("basil", "carrot", "chives", "onion", "garlic"),
          antagonists=("potato",)),
    Plant("basil", "Basil", "Ocimum basilicum", "herbaceous", (TEMPERATE, SUBTROPICAL, TROPICAL),
          companions=("tomato",)),
    Plant("beans", "Beans", "Phaseolus vulgaris", "herbaceous", (TEMPERATE, SUBTROPICAL, TROPICAL),
          companions=("carrot", "squash", "corn", "potato"),
          antagonists=("onion", "garlic", "chives"),
          nitrogen_fixer=True),
    Plant("corn", "Corn", "Zea mays", "herbaceous", (TEMPERATE, SUBTROPICAL, TROPICAL),
          companions=("beans", "squash")),
    Plant("fennel", "Fennel", "Foeniculum vulgare", "herbaceous", (TEMPERATE, SUBTROPICAL, ARID),
          antagonists=("tomato", "beans", "basil", "carrot")),
    Plant("chives", "Chives", "Allium schoenoprasum", "herbaceous", (TEMPERATE,),
          companions=("carrot", "apple")),
    Plant("lemongrass", "Lemongrass", "Cymbopogon citratus", "herbaceous", (TROPICAL, SUBTROPICAL)),

    # ─── Groundcover ───────────────────────────────────────────────────
    Plant("strawberry", "Strawberry", "Fragaria x ananassa", "groundcover", (TEMPERATE, SUBTROPICAL),
          companions=("borage", "thyme", "beans")),
    Plant("clover", "White Clover", "Trifolium repens", "groundcover", (TEMPERATE, SUBTROPICAL),
          nitrogen_fixer=True),
    Plant("nasturtium", "Nasturtium", "Tropaeolum majus", "groundcover",
          (TEMPERATE, SUBTROPICAL, TROPICAL),
          companions=("squash", "apple")),
    Plant("thyme", "Thyme", "Thymus vulgaris", "groundcover", (TEMPERATE, ARID, SUBTROPICAL)),

    # ─── Root ──────────────────────────────────────────────────────────
    Plant("garlic", "Garlic", "Allium sativum", "root", (TEMPERATE, SUBTROPICAL, ARID),
          companions=("tomato", "carrot")),
    Plant("onion", "Onion", "Allium cepa", "root", (TEMPERATE, SUBTROPICAL, ARID),
          companions=("carrot",)),
    Plant("carrot", "Carrot", "Daucus carota", "root", (TEMPERATE, SUBTROPICAL),
          companions=("onion", "chives", "tomato")),
    Plant("potato", "Potato", "Solanum tuberosum", "root", (TEMPERATE,),
          companions=("beans",)),
    Plant("sweet-potato", "Sweet Potato", "Ipomoea batatas", "root", (TROPICAL, SUBTROPICAL)),
    Plant("ginger", "Ginger", "Zingiber officinale", "root", (TROPICAL,),
          companions=("turmeric",)),
    Plant("turmeric", "Turmeric", "Curcuma longa", "root", (TROPICAL,)),

    # ─── Vine ──────────────────────────────────────────────────────────
    Plant("grape", "Grape", "Vitis vinifera", "vine", (TEMPERATE, ARID, SUBTROPICAL),
          companions=("clover",)),
    Plant("passionfruit", "Passionfruit", "Passiflora edulis", "vine", (TROPICAL, SUBTROPICAL)),
    Plant("kiwi", "Kiwifruit", "Actinidia deliciosa", "vine", (TEMPERATE,)),
    Plant("squash", "Squash", "Cucurbita pepo", "vine", (TEMPERATE, SUBTROPICAL, TROPICAL),
          companions=("corn", "beans"),
          antagonists=("potato",)),
)

_PLANTS_BY_ID: Dict[str, Plant] = {p.id: p for p in PLANTS}


def get_plant(plant_id: str) -> Optional[Plant]:
    """Look up a plant by id. Returns None for unknown ids."""
    return _PLANTS_BY_ID.get(plant_id)


def plants_in_layer(layer: str) -> List[Plant]:
    return [p for p in PLANTS if p.layer == layer]
