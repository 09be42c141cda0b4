"""
Companion planting: pairwise checks over placed plants and guild suggestions.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from catalog.elements import plant_id_from_type
from catalog.plants import PLANTS, Plant, get_plant
from core.models import Element

log = logging.getLogger(__name__)

# Layers offered around a guild centre (the canopy is the centre itself)
GUILD_LAYERS = ("understory", "shrub", "herbaceous", "groundcover", "root", "vine")
MAX_PER_LAYER = 3


@dataclass(frozen=True)
class CompanionPair:
    plant_a: Plant
    plant_b: Plant
    reason: str


@dataclass
class CompanionCheck:
    good: List[CompanionPair] = field(default_factory=list)
    bad: List[CompanionPair] = field(default_factory=list)


@dataclass
class GuildLayer:
    layer: str
    suggestions: List[Plant]


@dataclass
class GuildSuggestion:
    center_plant: Plant
    layers: List[GuildLayer] = field(default_factory=list)


def are_companions(a: Plant, b: Plant) -> bool:
    return b.id in a.companions or a.id in b.companions


def are_antagonists(a: Plant, b: Plant) -> bool:
    return b.id in a.antagonists or a.id in b.antagonists


def check_companions(elements: Sequence[Element]) -> CompanionCheck:
    """
    Report good and bad pairings among placed plants.

    Each unordered species pair is reported once, however many instances of
    it are placed. Unknown plant ids are skipped.
    """
    plants = []
    for element in elements:
        plant_id = plant_id_from_type(element.type_id)
        if plant_id is None:
            continue
        plant = get_plant(plant_id)
        if plant is None:
            log.debug(f"Skipping unknown plant {plant_id}")
            continue
        plants.append(plant)

    result = CompanionCheck()
    seen = set()

    for i, plant_a in enumerate(plants):
        for plant_b in plants[i + 1:]:
            key = tuple(sorted((plant_a.id, plant_b.id)))
            if key in seen:
                continue
            seen.add(key)

            # Both checks run; the data may in principle contain both
            if are_companions(plant_a, plant_b):
                result.good.append(CompanionPair(
                    plant_a, plant_b, f"{plant_a.name} and {plant_b.name} grow well together"
                ))
            if are_antagonists(plant_a, plant_b):
                result.bad.append(CompanionPair(
                    plant_a, plant_b, f"{plant_a.name} and {plant_b.name} should be kept apart"
                ))

    return result


def suggest_guild(center_id: str, climates: Optional[Iterable[str]] = None) -> Optional[GuildSuggestion]:
    """
    Suggest a food forest guild around ``center_id``.

    For every layer other than the centre's own, up to three plants are
    offered: companions of the centre first, then nitrogen fixers.
    Antagonists of the centre are never offered.
    """
    center = get_plant(center_id)
    if center is None:
        return None

    climates = list(climates) if climates is not None else None
    suggestion = GuildSuggestion(center_plant=center)

    for layer in GUILD_LAYERS:
        if layer == center.layer:
            continue

        candidates = [
            p for p in PLANTS
            if p.id != center.id
            and p.layer == layer
            and p.id not in center.antagonists
            and (climates is None or p.grows_in(climates))
        ]

        def score(p: Plant) -> int:
            return (2 if p.id in center.companions else 0) + (1 if p.nitrogen_fixer else 0)

        candidates.sort(key=score, reverse=True)
        suggestion.layers.append(GuildLayer(layer=layer, suggestions=candidates[:MAX_PER_LAYER]))

    return suggestion
