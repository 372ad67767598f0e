"""Demagnetization factors for the canonical nanostructure geometries.

References:
    A. Aharoni, J. Appl. Phys. 83, 3432 (1998) -- rectangular prism.
    R. I. Joseph, J. Appl. Phys. 37, 4639 (1966) -- circular cylinder.

All lengths are in nanometres; factors are dimensionless and returned as
``DemagFactors(nx, ny, nz)`` with nx + ny + nz = 1.
"""

from __future__ import annotations

import math

from ..core.constants import (
    FACTOR_BOUND_TOLERANCE,
    FACTOR_SUM_TOLERANCE,
    LONG_LIMIT_RATIO,
    NM3_TO_M3,
    THIN_LIMIT_RATIO,
)
from ..core.errors import InvalidDimensionError, NumericalError
from ..core.types import (
    AxisFactor,
    Cylinder,
    DemagFactors,
    GeometryDimensions,
    InfiniteRod,
    Prism,
    Sphere,
    ThinFilm,
)
from ..special.elliptic import k_minus_e
from .validation import DEFAULT_LIMITS, DimensionLimits, validate_dimensions


def _bounded(value: float, name: str, **context: float) -> float:
    """Clamp rounding overshoot of a factor into [0, 1]; reject anything else."""
    if not math.isfinite(value):
        raise NumericalError(f"Non-finite demagnetization factor {name}", value=value, **context)
    if value < -FACTOR_BOUND_TOLERANCE or value > 1.0 + FACTOR_BOUND_TOLERANCE:
        raise NumericalError(
            f"Unphysical demagnetization factor {name}={value:.6g}", value=value, **context
        )
    return min(max(value, 0.0), 1.0)


def _limiting_nz(a: float, b: float, c: float) -> float | None:
    """Thin-film / long-rod asymptotes for Nz, or None if no limit applies."""
    # film normal along z, or along x/y
    if c <= THIN_LIMIT_RATIO * min(a, b):
        return 1.0
    if a <= THIN_LIMIT_RATIO * min(b, c) or b <= THIN_LIMIT_RATIO * min(a, c):
        return 0.0
    # rod along z, or along x/y
    if c >= LONG_LIMIT_RATIO * max(a, b):
        return 0.0
    if a >= LONG_LIMIT_RATIO * max(b, c) or b >= LONG_LIMIT_RATIO * max(a, c):
        return 0.5
    return None


def _log_ratio(numerator: float, denominator: float, **context: float) -> float:
    ratio = numerator / denominator
    if not (math.isfinite(ratio) and ratio > 0.0):
        raise NumericalError("Invalid logarithm argument in prism calculation", ratio=ratio, **context)
    return math.log(ratio)


def n_prism(a: float, b: float, c: float, limits: DimensionLimits = DEFAULT_LIMITS) -> float:
    """Demagnetization factor along c for an a x b x c rectangular prism.

    Aharoni's expression on half-lengths. Differences of nearly equal norms
    (r - a, r_bc - b, ...) are rewritten as quotients, e.g.
    r - a = (b^2 + c^2) / (r + a), and the cubic terms are regrouped into
    positive sums, so elongated prisms lose no more than ~ratio*eps.

    Args:
        a: Edge along x (nm).
        b: Edge along y (nm).
        c: Edge along z (nm).
        limits: Supported dimension window.

    Returns:
        Nz in [0, 1].
    """
    a, b, c = validate_dimensions(a, b, c, limits=limits, names=("a", "b", "c"))

    limit = _limiting_nz(a, b, c)
    if limit is not None:
        return limit

    ctx = {"a": a, "b": b, "c": c}

    # half-lengths
    a, b, c = 0.5 * a, 0.5 * b, 0.5 * c
    a2, b2, c2 = a * a, b * b, c * c
    abc = a * b * c

    r = math.sqrt(a2 + b2 + c2)
    r_ab = math.sqrt(a2 + b2)
    r_bc = math.sqrt(b2 + c2)
    r_ac = math.sqrt(a2 + c2)

    # (r - a)/(r + a), (r - b)/(r + b), (r_ab + a)/(r_ab - a), ...
    log_terms = (
        (b2 - c2) / (2 * b * c) * _log_ratio(b2 + c2, (r + a) ** 2, **ctx)
        + (a2 - c2) / (2 * a * c) * _log_ratio(a2 + c2, (r + b) ** 2, **ctx)
        + b / c * _log_ratio(r_ab + a, b, **ctx)
        + a / c * _log_ratio(r_ab + b, a, **ctx)
        + c / a * _log_ratio(c, r_bc + b, **ctx)
        + c / b * _log_ratio(c, r_ac + a, **ctx)
    )

    # a^3 + b^3 - r_ab^3
    big, small = max(a, b), min(a, b)
    cube_ab = small**3 - small * small * (r_ab * r_ab + big * r_ab + big * big) / (r_ab + big)
    # a^2 (r - r_ac) + b^2 (r - r_bc)
    cross = a2 * b2 * (1.0 / (r + r_ac) + 1.0 / (r + r_bc))
    # 2 c^2 (r_ac + r_bc - r - c)
    axial = (
        2.0 * c2 * a2 * b2 * (1.0 / (r + r_bc) + 1.0 / (r_ac + c)) / ((r_bc + c) * (r + r_ac))
    )
    cubic_terms = (cube_ab + cross + axial) / (3.0 * abc)

    pi_nz = log_terms + 2.0 * math.atan2(a * b, c * r) + cubic_terms
    return _bounded(pi_nz / math.pi, "Nz", **ctx)


def prism_factors(a: float, b: float, c: float, limits: DimensionLimits = DEFAULT_LIMITS) -> DemagFactors:
    """(Nx, Ny, Nz) for a rectangular prism; Ny closes the sum exactly."""
    nz = n_prism(a, b, c, limits=limits)
    nx = n_prism(b, c, a, limits=limits)
    ny = _bounded(1.0 - nx - nz, "Ny", a=a, b=b, c=c)
    return DemagFactors(nx, ny, nz)


def n_cylinder(thickness: float, diameter: float, limits: DimensionLimits = DEFAULT_LIMITS) -> float:
    """Axial demagnetization factor of a circular cylinder.

    Nz = 1 - (2/pi) (p/k) (K(k^2) - E(k^2)),  k^2 = 1 / (1 + p^2/4),  p = t/d
    """
    thickness, diameter = validate_dimensions(
        thickness, diameter, limits=limits, names=("thickness", "diameter")
    )
    p = thickness / diameter

    # thin-disk asymptote
    if p < THIN_LIMIT_RATIO:
        return 1.0 - 2.0 * p / math.pi
    if p > LONG_LIMIT_RATIO:
        return 0.0

    k2 = 1.0 / (1.0 + 0.25 * p * p)
    if not (0.0 < k2 < 1.0):
        raise NumericalError(
            "Invalid parameter for elliptic integrals", k2=k2, thickness=thickness, diameter=diameter
        )
    k = math.sqrt(k2)

    nz = 1.0 - (2.0 / math.pi) * (p / k) * k_minus_e(k2)
    return _bounded(nz, "Nz", thickness=thickness, diameter=diameter)


def cylinder_factors(
    thickness: float, diameter: float, limits: DimensionLimits = DEFAULT_LIMITS
) -> DemagFactors:
    nz = n_cylinder(thickness, diameter, limits=limits)
    nxy = 0.5 * (1.0 - nz)
    return DemagFactors(nxy, nxy, nz)


def sphere_factors(diameter: float) -> DemagFactors:
    """Isotropic factors, independent of size."""
    diameter = float(diameter)
    if not (math.isfinite(diameter) and diameter > 0):
        raise InvalidDimensionError(f"diameter must be a positive length, got {diameter}", diameter=diameter)
    third = 1.0 / 3.0
    return DemagFactors(third, third, third)


def thin_film_factors() -> DemagFactors:
    """Infinite film: all demagnetization out of plane."""
    return DemagFactors(0.0, 0.0, 1.0)


def infinite_rod_factors() -> DemagFactors:
    """Infinite rod along z: none along the axis, half across it."""
    return DemagFactors(0.5, 0.5, 0.0)


def check_factors(factors: DemagFactors, **context: object) -> DemagFactors:
    """Reject a triple with a component outside [0, 1] or a sum off 1."""
    for name, value in factors._asdict().items():
        if not math.isfinite(value) or value < 0.0 or value > 1.0:
            raise NumericalError(f"Invalid demagnetization factor {name}={value}", **context)
    total = factors.total
    if abs(total - 1.0) > FACTOR_SUM_TOLERANCE:
        raise NumericalError(
            f"Demagnetization factors don't sum to 1 (sum = {total:.8f})", total=total, **context
        )
    return factors


def compute_factors(
    dimensions: GeometryDimensions, limits: DimensionLimits = DEFAULT_LIMITS
) -> DemagFactors:
    """Demagnetization factors for any supported geometry.

    Args:
        dimensions: One of Prism, Cylinder, Sphere, ThinFilm, InfiniteRod.
        limits: Supported dimension window for the finite geometries.

    Returns:
        Checked DemagFactors.

    Raises:
        GeometryError: Invalid, out-of-range or too elongated dimensions.
        NumericalError: Unphysical result.
    """
    if isinstance(dimensions, Prism):
        factors = prism_factors(dimensions.a, dimensions.b, dimensions.c, limits=limits)
    elif isinstance(dimensions, Cylinder):
        factors = cylinder_factors(dimensions.thickness, dimensions.diameter, limits=limits)
    elif isinstance(dimensions, Sphere):
        factors = sphere_factors(dimensions.diameter)
    elif isinstance(dimensions, ThinFilm):
        factors = thin_film_factors()
    elif isinstance(dimensions, InfiniteRod):
        factors = infinite_rod_factors()
    else:
        raise TypeError(f"Unsupported geometry: {type(dimensions).__name__}")

    return check_factors(factors, geometry=dimensions.kind)


def geometry_volume(dimensions: GeometryDimensions) -> float | None:
    """Volume in m^3, or None for the infinite geometries."""
    if isinstance(dimensions, Prism):
        return dimensions.a * dimensions.b * dimensions.c * NM3_TO_M3
    if isinstance(dimensions, Cylinder):
        radius = 0.5 * dimensions.diameter
        return math.pi * radius * radius * dimensions.thickness * NM3_TO_M3
    if isinstance(dimensions, Sphere):
        radius = 0.5 * dimensions.diameter
        return 4.0 / 3.0 * math.pi * radius**3 * NM3_TO_M3
    return None


def axis_factors(dimensions: GeometryDimensions, factors: DemagFactors) -> list[AxisFactor]:
    """Labeled axes handed to the anisotropy analyzer.

    The cylinder's in-plane pair is degenerate by symmetry and enters as a
    single "x,y" axis.
    """
    if isinstance(dimensions, Cylinder):
        return [AxisFactor("x,y", factors.nx), AxisFactor("z", factors.nz)]
    return [AxisFactor("x", factors.nx), AxisFactor("y", factors.ny), AxisFactor("z", factors.nz)]
