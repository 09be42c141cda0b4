"""
Core module for the Comfrey site designer.
Contains the data model, geometry, zone generation, the advisor engine,
action plans, companion checks and project management.

Engines live in their own modules (core.zones, core.advisor,
core.action_plan, core.companions) and are imported from there.
"""

from core.models import (
    Element,
    ElementProperties,
    Geometry,
    Zone,
    SiteAnalysis,
    AdvisorTip,
    AdvisorState,
    ActionPlan,
    ClimateType,
    Hemisphere,
    LayerType,
)
from core.errors import ComfreyError, BoundaryValidationError, AnalysisError
from core.settings import Settings, get_settings

__all__ = [
    # Models
    "Element",
    "ElementProperties",
    "Geometry",
    "Zone",
    "SiteAnalysis",
    "AdvisorTip",
    "AdvisorState",
    "ActionPlan",
    "ClimateType",
    "Hemisphere",
    "LayerType",
    # Errors
    "ComfreyError",
    "BoundaryValidationError",
    "AnalysisError",
    # Config
    "Settings",
    "get_settings",
]
