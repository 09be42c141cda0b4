"""
Action plan: turns placed elements into a phased implementation list.

The plan is derived on demand from the current design and never stored.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence

from catalog.elements import get_element_type
from core.models import (
    ActionItem,
    ActionPhase,
    ActionPlan,
    ClimateType,
    Element,
    ElementCategory,
    ElementType,
    SiteAnalysis,
)

log = logging.getLogger(__name__)

PHASE_TITLES = {
    1: "Foundation & Infrastructure",
    2: "Productive Systems",
    3: "Fine-Tuning & Expansion",
}

PRIORITY_ORDER = {
    "essential": 0,
    "recommended": 1,
    "optional": 2,
}

CATEGORY_VERBS = {
    ElementCategory.STRUCTURE: "Build",
    ElementCategory.WATER: "Install",
    ElementCategory.PLANT: "Plant",
    ElementCategory.ANIMAL: "Set up",
    ElementCategory.PATH: "Lay out",
    ElementCategory.UTILITY: "Establish",
}


def priority_for_category(category: ElementCategory) -> str:
    if category in (ElementCategory.STRUCTURE, ElementCategory.WATER):
        return "essential"
    if category == ElementCategory.PLANT:
        return "recommended"
    return "optional"


def phase_title(year: int) -> str:
    return PHASE_TITLES.get(year, f"Year {year}")


def site_qualifiers(element_type: ElementType, analysis: Optional[SiteAnalysis]) -> List[str]:
    """Site-specific phrases appended to an item description."""
    if analysis is None:
        return []

    qualifiers = []
    if analysis.elevation.available:
        qualifiers.append(f"on the {analysis.elevation.aspect_label.lower()} slope")

    # Climate only narrows the advice for these two combinations
    climate = analysis.climate.type
    if climate == ClimateType.ARID and element_type.category == ElementCategory.WATER:
        qualifiers.append("to maximize water harvesting in the arid climate")
    elif climate == ClimateType.TROPICAL and element_type.category == ElementCategory.PLANT:
        qualifiers.append("suited to the tropical climate")
    return qualifiers


def describe_item(element_type: ElementType, element: Element, analysis: Optional[SiteAnalysis]) -> str:
    """e.g. ``Install Water Tank in zone 2 on the north facing slope``."""
    verb = CATEGORY_VERBS.get(element_type.category, "Add")
    label = element.properties.label or element_type.name
    zone = element.properties.zone or 0

    description = f"{verb} {label}"
    if zone > 0:
        description += f" in zone {zone}"

    qualifiers = site_qualifiers(element_type, analysis)
    if qualifiers:
        description += " " + ", ".join(qualifiers)
    return description


def generate_action_plan(elements: Sequence[Element], analysis: Optional[SiteAnalysis]) -> ActionPlan:
    """
    Group elements into yearly phases of action items.

    Elements whose type is not in the catalog are skipped. Items within a
    phase are ordered by zone, then by priority.
    """
    by_phase: Dict[int, List[ActionItem]] = defaultdict(list)

    for element in elements:
        element_type = get_element_type(element.type_id)
        if element_type is None:
            log.debug(f"Skipping element {element.id}: unknown type {element.type_id}")
            continue

        by_phase[element_type.implementation_phase].append(ActionItem(
            description=describe_item(element_type, element, analysis),
            category=element.properties.layer,
            zone=element.properties.zone or 0,
            priority=priority_for_category(element_type.category),
            element_id=element.id,
        ))

    phases = []
    for year in sorted(by_phase):
        items = sorted(by_phase[year], key=lambda i: (i.zone, PRIORITY_ORDER[i.priority]))
        phases.append(ActionPhase(year=year, title=phase_title(year), items=items))

    return ActionPlan(phases=phases)
