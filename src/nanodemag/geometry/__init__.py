"""Demagnetization factors for the canonical shapes."""

from .factors import (
    axis_factors,
    check_factors,
    compute_factors,
    cylinder_factors,
    geometry_volume,
    infinite_rod_factors,
    n_cylinder,
    n_prism,
    prism_factors,
    sphere_factors,
    thin_film_factors,
)
from .validation import DEFAULT_LIMITS, DimensionLimits, validate_dimensions

__all__ = [
    "DimensionLimits",
    "DEFAULT_LIMITS",
    "validate_dimensions",
    "n_prism",
    "n_cylinder",
    "prism_factors",
    "cylinder_factors",
    "sphere_factors",
    "thin_film_factors",
    "infinite_rod_factors",
    "compute_factors",
    "check_factors",
    "geometry_volume",
    "axis_factors",
]
