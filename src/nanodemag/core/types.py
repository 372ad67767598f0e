"""Core types for geometry inputs, material constants and results.

This module defines the canonical value types that flow between the factor
formulas, the anisotropy analyzer and the calculation engine.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple, Union

import numpy as np

from .constants import (
    AMPERE_PER_METER_PER_OERSTED,
    MU0,
    THERMAL_STABILITY_THRESHOLD,
)
from .errors import DemagError, InvalidMaterialError

# ---------------------------------------------------------------------------
# Geometry dimensions (nm)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Prism:
    """Rectangular prism with edges a (x), b (y), c (z)."""

    a: float
    b: float
    c: float

    kind = "prism"

    def values(self) -> tuple[float, ...]:
        return (float(self.a), float(self.b), float(self.c))


@dataclass(frozen=True)
class Cylinder:
    """Circular cylinder with its axis along z."""

    thickness: float
    diameter: float

    kind = "cylinder"

    def values(self) -> tuple[float, ...]:
        return (float(self.thickness), float(self.diameter))


@dataclass(frozen=True)
class Sphere:
    diameter: float

    kind = "sphere"

    def values(self) -> tuple[float, ...]:
        return (float(self.diameter),)


@dataclass(frozen=True)
class ThinFilm:
    """Film of infinite lateral extent, normal along z."""

    kind = "thin-film"

    def values(self) -> tuple[float, ...]:
        return ()


@dataclass(frozen=True)
class InfiniteRod:
    """Rod of infinite length along z."""

    kind = "infinite-rod"

    def values(self) -> tuple[float, ...]:
        return ()


GeometryDimensions = Union[Prism, Cylinder, Sphere, ThinFilm, InfiniteRod]

GEOMETRY_KINDS: dict[str, type] = {
    cls.kind: cls for cls in (Prism, Cylinder, Sphere, ThinFilm, InfiniteRod)
}


# ---------------------------------------------------------------------------
# Material
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MaterialProperties:
    """Material constants in SI units.

    Attributes:
        ms: Saturation magnetization (A/m).
        ku: Uniaxial magnetocrystalline anisotropy (J/m^3).
        a: Exchange stiffness (J/m).
        t: Temperature (K).
    """

    ms: float
    ku: float
    a: float
    t: float

    @classmethod
    def from_display_units(
        cls,
        ms_ka_per_m: float,
        ku_mj_per_m3: float,
        a_pj_per_m: float,
        t_k: float,
    ) -> MaterialProperties:
        """Build from kA/m, MJ/m^3, pJ/m and K."""
        return cls(
            ms=float(ms_ka_per_m) * 1e3,
            ku=float(ku_mj_per_m3) * 1e6,
            a=float(a_pj_per_m) * 1e-12,
            t=float(t_k),
        )

    def validate(self) -> MaterialProperties:
        """Raise InvalidMaterialError unless Ms, A, T > 0 and Ku >= 0."""
        for name in ("ms", "a", "t"):
            value = getattr(self, name)
            if not (math.isfinite(value) and value > 0):
                raise InvalidMaterialError(f"{name} must be positive and finite", **{name: value})
        if not (math.isfinite(self.ku) and self.ku >= 0):
            raise InvalidMaterialError("ku must be non-negative and finite", ku=self.ku)
        return self

    def to_dict(self) -> dict[str, float]:
        return {"ms": self.ms, "ku": self.ku, "a": self.a, "t": self.t}


# ---------------------------------------------------------------------------
# Factors
# ---------------------------------------------------------------------------


class DemagFactors(NamedTuple):
    """Demagnetization factor triple (Nx, Ny, Nz)."""

    nx: float
    ny: float
    nz: float

    @property
    def total(self) -> float:
        return self.nx + self.ny + self.nz

    def as_array(self) -> np.ndarray:
        return np.array([self.nx, self.ny, self.nz], dtype=np.float64)


class AxisFactor(NamedTuple):
    """Demagnetization factor paired with its axis label."""

    name: str
    value: float


# ---------------------------------------------------------------------------
# Anisotropy
# ---------------------------------------------------------------------------


class AnisotropyClass(str, Enum):
    ISOTROPIC = "Isotropic"
    CRYSTALLINE_DOMINATED = "Magnetocrystalline-dominated"
    SHAPE_DOMINATED = "Shape-dominated"


class Direction(str, Enum):
    IN_PLANE = "In-plane"
    OUT_OF_PLANE = "Out-of-plane"
    NONE = "None"


@dataclass(frozen=True)
class AnisotropyAnalysis:
    """Result of combining demagnetization factors with material constants.

    Attributes:
        easy_axis: Axis with the smallest factor.
        hard_axis: Axis with the largest factor.
        k_shape: Shape anisotropy (J/m^3), always >= 0.
        k_eff: Effective anisotropy (J/m^3); sign follows the crystalline/shape table.
        h_c: Coercive field (A/m).
        delta: Thermal stability factor, None when the volume is undefined.
        classification: Which contribution dominates.
        preferred_direction: Preferred magnetization direction.
        crystalline_easy_axis: Orientation of the crystalline easy axis.
    """

    easy_axis: AxisFactor
    hard_axis: AxisFactor
    k_shape: float
    k_eff: float
    h_c: float
    delta: float | None
    classification: AnisotropyClass
    preferred_direction: Direction
    crystalline_easy_axis: Direction

    @property
    def n_easy(self) -> float:
        return self.easy_axis.value

    @property
    def n_hard(self) -> float:
        return self.hard_axis.value

    @property
    def h_c_ka_per_m(self) -> float:
        return self.h_c / 1e3

    @property
    def h_c_mt(self) -> float:
        """Coercive field as mu0*Hc in mT."""
        return MU0 * self.h_c * 1e3

    @property
    def h_c_oe(self) -> float:
        return self.h_c / AMPERE_PER_METER_PER_OERSTED

    @property
    def is_thermally_stable(self) -> bool | None:
        if self.delta is None:
            return None
        return self.delta > THERMAL_STABILITY_THRESHOLD

    def exchange_length(self, a: float) -> float | None:
        """Exchange length sqrt(A/|K_eff|) in nm, None when K_eff == 0."""
        if self.k_eff == 0:
            return None
        return math.sqrt(a / abs(self.k_eff)) * 1e9

    def to_dict(self) -> dict[str, Any]:
        return {
            "easy_axis": self.easy_axis._asdict(),
            "hard_axis": self.hard_axis._asdict(),
            "n_easy": self.n_easy,
            "n_hard": self.n_hard,
            "k_shape": self.k_shape,
            "k_eff": self.k_eff,
            "h_c": self.h_c,
            "h_c_mt": self.h_c_mt,
            "h_c_oe": self.h_c_oe,
            "delta": self.delta,
            "thermally_stable": self.is_thermally_stable,
            "classification": self.classification.value,
            "preferred_direction": self.preferred_direction.value,
            "crystalline_easy_axis": self.crystalline_easy_axis.value,
        }


# ---------------------------------------------------------------------------
# Engine result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CalculationResult:
    """Composed output of one engine calculation.

    Exactly one of ``analysis`` and ``error`` is set: a failed calculation
    carries no factors and no analysis. Cached results are handed out as
    copies with their own ``diag``.
    """

    dimensions: GeometryDimensions
    material: MaterialProperties
    factors: DemagFactors | None = None
    analysis: AnisotropyAnalysis | None = None
    volume_m3: float | None = None
    error: DemagError | None = None
    diag: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def geometry(self) -> str:
        return self.dimensions.kind

    @property
    def exchange_length_nm(self) -> float | None:
        if self.analysis is None:
            return None
        return self.analysis.exchange_length(self.material.a)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        out: dict[str, Any] = {
            "geometry": self.geometry,
            "dimensions_nm": list(self.dimensions.values()),
            "material": self.material.to_dict(),
            "ok": self.ok,
        }
        if self.error is not None:
            out["error"] = self.error.to_dict()
            return out
        out["factors"] = self.factors._asdict() if self.factors is not None else None
        out["volume_m3"] = self.volume_m3
        out["analysis"] = self.analysis.to_dict() if self.analysis is not None else None
        out["exchange_length_nm"] = self.exchange_length_nm
        return out
