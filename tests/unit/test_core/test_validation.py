import pytest

from core.errors import BoundaryValidationError
from core.geo import square_around
from core.validation import ensure_valid_boundary, validate_boundary, vertex_count

NELSON = (173.284, -41.2706)


def test_vertex_count_ignores_closing_vertex():
    assert vertex_count([(0, 0), (1, 0), (1, 1), (0, 0)]) == 3
    assert vertex_count([(0, 0), (1, 0), (1, 1)]) == 3
    assert vertex_count([]) == 0


def test_valid_boundary():
    result = validate_boundary(square_around(NELSON, 100))
    assert result.valid
    assert result.error is None
    assert result.warning is None


def test_empty_boundary_is_invalid():
    result = validate_boundary([])
    assert not result.valid
    assert result.error == "Boundary has no coordinates."


def test_too_few_vertices():
    result = validate_boundary([(0, 0), (0.001, 0), (0, 0)])
    assert not result.valid
    assert "at least 3 vertices" in result.error


def test_self_intersecting_boundary():
    """A bow-tie crosses itself."""
    bowtie = [(0, 0), (0.001, 0.001), (0.001, 0), (0, 0.001), (0, 0)]
    result = validate_boundary(bowtie)
    assert not result.valid
    assert "cross each other" in result.error


def test_small_property_warns():
    result = validate_boundary(square_around(NELSON, 5))
    assert result.valid
    assert "very small" in result.warning


def test_large_property_warns():
    result = validate_boundary(square_around(NELSON, 1000))
    assert result.valid
    assert "very large" in result.warning


def test_ensure_valid_boundary_raises():
    with pytest.raises(BoundaryValidationError):
        ensure_valid_boundary([(0, 0), (1, 1)])
    with pytest.raises(BoundaryValidationError):
        ensure_valid_boundary(None)


def test_boundary_validation_error_is_value_error():
    with pytest.raises(ValueError):
        ensure_valid_boundary([])
