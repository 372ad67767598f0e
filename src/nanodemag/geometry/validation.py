"""Dimension validation shared by the finite geometries."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..core.constants import MAX_ASPECT_RATIO, MAX_DIMENSION, MIN_DIMENSION
from ..core.errors import ExtremeAspectRatioError, InvalidDimensionError, OutOfRangeError


@dataclass(frozen=True)
class DimensionLimits:
    """Supported window for the analytical formulas (nm)."""

    min_dimension: float = MIN_DIMENSION
    max_dimension: float = MAX_DIMENSION
    max_aspect_ratio: float = MAX_ASPECT_RATIO


DEFAULT_LIMITS = DimensionLimits()


def validate_dimensions(
    *dims: float,
    limits: DimensionLimits = DEFAULT_LIMITS,
    names: tuple[str, ...] | None = None,
) -> tuple[float, ...]:
    """Check positivity, aspect ratio and range of a set of lengths.

    The aspect ratio is checked before the per-dimension range so that a
    structure that is simply too elongated is pointed at the thin-film /
    infinite-rod geometries.

    Returns:
        The dimensions as floats.

    Raises:
        InvalidDimensionError: A dimension is <= 0 or not finite.
        ExtremeAspectRatioError: max/min exceeds ``limits.max_aspect_ratio``.
        OutOfRangeError: A dimension is outside [min_dimension, max_dimension].
    """
    names = names or tuple(f"d{i}" for i in range(len(dims)))
    values = tuple(float(d) for d in dims)
    context = dict(zip(names, values))

    for name, value in context.items():
        if not (math.isfinite(value) and value > 0):
            raise InvalidDimensionError(f"{name} must be a positive length, got {value}", **context)

    aspect_ratio = max(values) / min(values)
    if aspect_ratio > limits.max_aspect_ratio:
        raise ExtremeAspectRatioError(
            f"Aspect ratio too extreme ({aspect_ratio:.3g} > {limits.max_aspect_ratio:.3g}). "
            "Use thin film or infinite rod models instead.",
            aspect_ratio=aspect_ratio,
            max_aspect_ratio=limits.max_aspect_ratio,
            **context,
        )

    for name, value in context.items():
        if value < limits.min_dimension:
            raise OutOfRangeError(
                f"{name} must be at least {limits.min_dimension} nm, got {value}",
                min_dimension=limits.min_dimension,
                **context,
            )
        if value > limits.max_dimension:
            raise OutOfRangeError(
                f"{name} must be at most {limits.max_dimension} nm, got {value}",
                max_dimension=limits.max_dimension,
                **context,
            )

    return values
