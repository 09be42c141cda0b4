"""
Advisor: matches design events against the tip catalog.

process_event() is a pure query. It filters the catalog by dismissal
state, trigger, climate, hemisphere and condition, and returns the
surviving tips highest priority first. Recording what the user did with
a tip is the caller's job (see AdvisorQueue).
"""

import math
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from catalog.tips import ADVISOR_TIPS
from core.geo import METERS_PER_DEGREE, distance_between
from core.models import (
    ALL_CLIMATES,
    AdvisorState,
    AdvisorTip,
    AnalysisCompleteTrigger,
    ClimateIsCondition,
    DesignReviewTrigger,
    DistanceFromHouseCondition,
    Element,
    ElementNearTrigger,
    ElementPlacedTrigger,
    ElementPositionTrigger,
    ElevationCompareCondition,
    Hemisphere,
    HemisphereIsCondition,
    Position,
    SiteAnalysis,
    SunExposureCondition,
    TipCondition,
    TipTrigger,
    WizardStepTrigger,
    Zone,
    ZoneCreatedTrigger,
)

log = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# DESIGN EVENTS
# ═══════════════════════════════════════════════════════════════════════════
@dataclass(frozen=True)
class ElementPlaced:
    element: Element
    analysis: Optional[SiteAnalysis] = None


@dataclass(frozen=True)
class ElementMoved:
    element: Element
    previous_position: Position
    analysis: Optional[SiteAnalysis] = None


@dataclass(frozen=True)
class ElementDeleted:
    element: Element


@dataclass(frozen=True)
class ZoneCreated:
    zone: Zone


@dataclass(frozen=True)
class AnalysisComplete:
    analysis: SiteAnalysis


@dataclass(frozen=True)
class WizardStepEntered:
    step: str


@dataclass(frozen=True)
class DesignReviewRequested:
    pass


DesignEvent = Union[
    ElementPlaced,
    ElementMoved,
    ElementDeleted,
    ZoneCreated,
    AnalysisComplete,
    WizardStepEntered,
    DesignReviewRequested,
]


# ═══════════════════════════════════════════════════════════════════════════
# MATCHING ENGINE
# ═══════════════════════════════════════════════════════════════════════════
def process_event(
    event: DesignEvent,
    advisor_state: AdvisorState,
    elements: Sequence[Element],
    zones: Sequence[Zone],
    tips: Sequence[AdvisorTip] = ADVISOR_TIPS,
) -> List[AdvisorTip]:
    """
    Tips that apply to ``event``, highest priority first.

    Args:
        event: The design event that just happened
        advisor_state: Seen / dismissed / applied tip ids (read only)
        elements: Every element currently in the design
        zones: Current zones of the design
        tips: Catalog to match against

    Returns:
        Matching tips. Equal priorities keep catalog order.
    """
    analysis = extract_analysis(event)
    dismissed = set(advisor_state.dismissed_tips)

    matched = [
        tip for tip in tips
        if tip.id not in dismissed
        and trigger_matches(tip.trigger, event)
        and climate_matches(tip, analysis)
        and hemisphere_matches(tip, analysis)
        and condition_met(tip, event, elements, analysis)
    ]

    log.debug(f"{type(event).__name__}: {len(matched)} tip(s) matched {[t.id for t in matched]}")
    return sorted(matched, key=lambda t: t.priority, reverse=True)


def trigger_matches(trigger: TipTrigger, event: DesignEvent) -> bool:
    """Whether ``trigger`` fires for ``event``."""
    element = event_element(event)

    if isinstance(trigger, (ElementPlacedTrigger, ElementPositionTrigger)):
        # The position check of ElementPositionTrigger is informational only
        return element is not None and element.type_id == trigger.element_type
    if isinstance(trigger, ElementNearTrigger):
        # Proximity is verified during condition evaluation
        return element is not None
    if isinstance(trigger, ZoneCreatedTrigger):
        return isinstance(event, ZoneCreated) and event.zone.level == trigger.zone_level
    if isinstance(trigger, AnalysisCompleteTrigger):
        return isinstance(event, AnalysisComplete)
    if isinstance(trigger, WizardStepTrigger):
        return isinstance(event, WizardStepEntered) and event.step == trigger.step
    if isinstance(trigger, DesignReviewTrigger):
        return isinstance(event, DesignReviewRequested)
    return False


def climate_matches(tip: AdvisorTip, analysis: Optional[SiteAnalysis]) -> bool:
    """Climate scope filter. Passes when there is no analysis to check against."""
    if tip.climate == ALL_CLIMATES:
        return True
    if analysis is None:
        return True
    return tip.climate == analysis.climate.type


def hemisphere_matches(tip: AdvisorTip, analysis: Optional[SiteAnalysis]) -> bool:
    if tip.hemisphere is None or analysis is None:
        return True
    return tip.hemisphere == analysis.climate.hemisphere


def condition_met(
    tip: AdvisorTip,
    event: DesignEvent,
    elements: Sequence[Element],
    analysis: Optional[SiteAnalysis],
) -> bool:
    """
    Evaluate the tip's condition.

    Without a condition, proximity triggers verify the paired element is
    within range. An explicit condition replaces that check.
    """
    condition = tip.condition
    if condition is None:
        if isinstance(tip.trigger, ElementNearTrigger):
            return element_near_check(tip.trigger, event, elements)
        return True

    if isinstance(condition, ElevationCompareCondition):
        return check_elevation_compare(condition, event, elements, analysis)
    if isinstance(condition, DistanceFromHouseCondition):
        return check_distance_from_house(condition, event, elements)
    if isinstance(condition, SunExposureCondition):
        return check_sun_exposure(condition, analysis)
    if isinstance(condition, ClimateIsCondition):
        return analysis is not None and analysis.climate.type == condition.climate
    if isinstance(condition, HemisphereIsCondition):
        return analysis is not None and analysis.climate.hemisphere == condition.hemisphere

    log.warning(f"Unknown condition {condition!r} on tip {tip.id}")
    return True


# ───────────────────────────────────────────────────────────────────────────
# Condition checks
# ───────────────────────────────────────────────────────────────────────────
def element_near_check(
    trigger: ElementNearTrigger,
    event: DesignEvent,
    elements: Sequence[Element],
) -> bool:
    """
    True when the event's element is one side of the pair and an element of
    the other type (not itself) lies within ``max_distance``.
    """
    element = event_element(event)
    if element is None:
        return False

    if element.type_id == trigger.element_a:
        paired_type = trigger.element_b
    elif element.type_id == trigger.element_b:
        paired_type = trigger.element_a
    else:
        return False

    here = element.position
    if here is None:
        return False

    for other in elements:
        if other.id == element.id or other.type_id != paired_type:
            continue
        there = other.position
        if there is not None and distance_between(here, there) <= trigger.max_distance:
            return True
    return False


def check_elevation_compare(
    condition: ElevationCompareCondition,
    event: DesignEvent,
    elements: Sequence[Element],
    analysis: Optional[SiteAnalysis],
) -> bool:
    if analysis is None:
        return False

    element_a = find_element_by_type(condition.element_a, event, elements)
    element_b = find_element_by_type(condition.element_b, event, elements)
    if element_a is None or element_b is None:
        return False

    pos_a = element_a.position
    pos_b = element_b.position
    if pos_a is None or pos_b is None:
        return False

    elevation_a = estimate_relative_elevation(pos_a, analysis)
    elevation_b = estimate_relative_elevation(pos_b, analysis)

    if condition.expected == "higher":
        return elevation_a > elevation_b
    return elevation_a < elevation_b


def check_distance_from_house(
    condition: DistanceFromHouseCondition,
    event: DesignEvent,
    elements: Sequence[Element],
) -> bool:
    """Passes when there is nothing to measure (no house, or no placed element)."""
    element = event_element(event)
    if element is None:
        return True

    house = next((e for e in elements if e.type_id == "house"), None)
    if house is None:
        return True

    house_pos = house.position
    element_pos = element.position
    if house_pos is None or element_pos is None:
        return True

    return distance_between(house_pos, element_pos) <= condition.max_meters


def check_sun_exposure(condition: SunExposureCondition, analysis: Optional[SiteAnalysis]) -> bool:
    if analysis is None:
        return False

    aspect = analysis.elevation.aspect
    # Equator-facing slopes are sunny
    if analysis.climate.hemisphere == Hemisphere.NORTHERN:
        is_sunny = 90 <= aspect <= 270
    else:
        is_sunny = aspect >= 270 or aspect <= 90

    if condition.aspect == "sunny":
        return is_sunny
    return not is_sunny


# ───────────────────────────────────────────────────────────────────────────
# Helpers
# ───────────────────────────────────────────────────────────────────────────
def event_element(event: DesignEvent) -> Optional[Element]:
    """The placed or moved element, None for every other event."""
    if isinstance(event, (ElementPlaced, ElementMoved)):
        return event.element
    return None


def extract_analysis(event: DesignEvent) -> Optional[SiteAnalysis]:
    if isinstance(event, (ElementPlaced, ElementMoved, AnalysisComplete)):
        return event.analysis
    return None


def find_element_by_type(
    type_id: str,
    event: DesignEvent,
    elements: Sequence[Element],
) -> Optional[Element]:
    """The event's own element when its type matches, else the first of that type."""
    element = event_element(event)
    if element is not None and element.type_id == type_id:
        return element
    return next((e for e in elements if e.type_id == type_id), None)


def estimate_relative_elevation(position: Position, analysis: SiteAnalysis) -> float:
    """
    Relative height of ``position`` on a uniformly tilted plane.

    The position is projected onto the downhill unit vector (from the
    aspect) in meters and scaled by tan(slope). Larger means further uphill.
    A flat site (slope 0) puts every point at the same height.
    """
    aspect = math.radians(analysis.elevation.aspect)
    slope = math.radians(analysis.elevation.slope)

    lng, lat = position
    east = lng * math.cos(math.radians(lat)) * METERS_PER_DEGREE
    north = lat * METERS_PER_DEGREE

    downhill = east * math.sin(aspect) + north * math.cos(aspect)
    return -downhill * math.tan(slope)


# ═══════════════════════════════════════════════════════════════════════════
# ADVISOR QUEUE
# ═══════════════════════════════════════════════════════════════════════════
class AdvisorQueue:
    """
    Presentation queue of matched tips for one project session.

    The head of the queue is the active tip. Dismissing, applying or
    skipping it records the outcome in the AdvisorState and moves on.

    Usage:
        queue = AdvisorQueue(project.advisor_state)
        queue.enqueue(process_event(event, queue.state, elements, zones))
        tip = queue.active_tip
        queue.dismiss()
    """

    MAX_QUEUE = 10

    def __init__(self, state: Optional[AdvisorState] = None):
        self.state = state if state is not None else AdvisorState()
        self.queue: List[AdvisorTip] = []

    @property
    def active_tip(self) -> Optional[AdvisorTip]:
        return self.queue[0] if self.queue else None

    def __len__(self) -> int:
        return len(self.queue)

    def enqueue(self, tips: Sequence[AdvisorTip]) -> None:
        """Add new tips, skipping dismissed and already queued ones."""
        queued = {t.id for t in self.queue}
        fresh = [
            t for t in tips
            if not self.state.is_dismissed(t.id) and t.id not in queued
        ]
        if not fresh:
            return
        merged = sorted(self.queue + fresh, key=lambda t: t.priority, reverse=True)
        self.queue = merged[:self.MAX_QUEUE]

    def dismiss(self) -> Optional[AdvisorTip]:
        tip = self._pop()
        if tip:
            self.state.dismiss(tip.id)
        return tip

    def apply(self) -> Optional[AdvisorTip]:
        tip = self._pop()
        if tip:
            self.state.apply(tip.id)
        return tip

    def next(self) -> Optional[AdvisorTip]:
        """Mark the active tip as seen and advance."""
        tip = self._pop()
        if tip:
            self.state.mark_seen(tip.id)
        return tip

    def reset(self) -> None:
        self.state = AdvisorState()
        self.queue = []

    def _pop(self) -> Optional[AdvisorTip]:
        if not self.queue:
            return None
        return self.queue.pop(0)
