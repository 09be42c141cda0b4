"""
Boundary polygon validation rules.

Hard failures (too few vertices, crossing edges) make a boundary invalid.
Out-of-range areas are accepted with a warning.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from shapely.geometry import Polygon
from shapely.validation import explain_validity

from core.errors import BoundaryValidationError
from core.geo import calculate_area
from core.models import Ring

log = logging.getLogger(__name__)

MIN_AREA_SQM = 50
MAX_AREA_SQM = 500_000  # 50 hectares


@dataclass
class ValidationResult:
    valid: bool
    error: Optional[str] = None
    warning: Optional[str] = None


def vertex_count(ring: Ring) -> int:
    """Distinct vertices in a ring, not counting the closing repeat."""
    if not ring:
        return 0
    if len(ring) > 1 and tuple(ring[0]) == tuple(ring[-1]):
        return len(ring) - 1
    return len(ring)


def ensure_valid_boundary(ring: Ring) -> None:
    """
    Raise BoundaryValidationError if ``ring`` cannot describe an area.

    This is the cheap structural check run before any geometry work.
    """
    if ring is None or vertex_count(ring) < 3:
        raise BoundaryValidationError("Boundary must have at least 3 vertices.")


def validate_boundary(ring: Ring) -> ValidationResult:
    """
    Validate a boundary ring.

    Checks: minimum vertices, self-intersection, area bounds.
    """
    if not ring:
        return ValidationResult(valid=False, error="Boundary has no coordinates.")

    if vertex_count(ring) < 3:
        return ValidationResult(valid=False, error="Boundary must have at least 3 vertices.")

    shape = Polygon(ring)
    if not shape.is_valid:
        log.debug(f"Invalid boundary: {explain_validity(shape)}")
        return ValidationResult(
            valid=False,
            error="Your boundary lines cross each other. Please redraw without crossing lines.",
        )

    area = calculate_area(ring)

    if area < MIN_AREA_SQM:
        return ValidationResult(
            valid=True,
            warning="This property is very small. Zone suggestions may not be meaningful.",
        )

    if area > MAX_AREA_SQM:
        return ValidationResult(
            valid=True,
            warning="This property is very large for detailed permaculture design. Results may be less useful.",
        )

    return ValidationResult(valid=True)
