"""Shape and effective anisotropy from demagnetization factors.

Flow:
    1. Sort the labeled factors; easy axis = smallest N, hard axis = largest N
    2. K_shape = 1/2 mu0 Ms^2 (N_hard - N_easy)
    3. K_eff = Ku +/- K_shape (sign table below)
    4. H_c = 2 |K_eff| / (mu0 Ms)
    5. Delta = |K_eff| V / (kB T)
    6. Classify which contribution dominates

Sign table, keyed by (crystalline easy axis in plane, shape easy axis is z):

    (False, True)  -> Ku + K_shape
    (False, False) -> Ku - K_shape
    (True,  True)  -> Ku - K_shape
    (True,  False) -> Ku + K_shape
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from ..core.constants import ISOTROPIC_THRESHOLD, KB, MU0
from ..core.errors import InvalidMaterialError, NumericalError
from ..core.types import AnisotropyAnalysis, AnisotropyClass, AxisFactor, Direction

_SHAPE_SIGN: dict[tuple[bool, bool], float] = {
    (False, True): 1.0,
    (False, False): -1.0,
    (True, True): -1.0,
    (True, False): 1.0,
}


def _finite(value: float, name: str) -> float:
    if not math.isfinite(value):
        raise NumericalError(f"Non-finite {name} in anisotropy analysis", **{name: value})
    return value


def easy_hard_axes(factors: Sequence[AxisFactor]) -> tuple[AxisFactor, AxisFactor]:
    """Return (easy, hard) axes.

    Ties keep input order: the first of several equal minima is the easy
    axis and the last of several equal maxima is the hard axis.
    """
    ordered = sorted(factors, key=lambda f: f.value)
    return ordered[0], ordered[-1]


def analyze(
    factors: Sequence[AxisFactor],
    ms: float,
    ku: float,
    t: float,
    volume: float | None,
    crystalline_easy_axis_in_plane: bool = False,
) -> AnisotropyAnalysis:
    """Combine demagnetization factors with material constants.

    Args:
        factors: Two or three labeled axis factors.
        ms: Saturation magnetization (A/m).
        ku: Uniaxial crystalline anisotropy (J/m^3).
        t: Temperature (K).
        volume: Particle volume (m^3), or None where the volume is undefined
            (thin film, infinite rod); Delta is then None.
        crystalline_easy_axis_in_plane: Orientation of the crystalline easy axis.

    Returns:
        AnisotropyAnalysis.

    Raises:
        ValueError: Fewer than two or more than three factors.
        InvalidMaterialError: Ms or T not positive.
        NumericalError: Non-finite intermediate result.
    """
    factors = [AxisFactor(*f) for f in factors]
    if not 2 <= len(factors) <= 3:
        raise ValueError(f"Expected 2 or 3 axis factors, got {len(factors)}")
    if not ms > 0:
        raise InvalidMaterialError("ms must be positive", ms=ms)
    if not t > 0:
        raise InvalidMaterialError("t must be positive", t=t)

    easy, hard = easy_hard_axes(factors)
    easy_is_z = easy.name == "z"
    in_plane = bool(crystalline_easy_axis_in_plane)

    k_shape = _finite(0.5 * MU0 * ms * ms * (hard.value - easy.value), "k_shape")
    k_eff = _finite(ku + _SHAPE_SIGN[(in_plane, easy_is_z)] * k_shape, "k_eff")
    h_c = _finite(2.0 * abs(k_eff) / (MU0 * ms), "h_c")

    delta = None
    if volume is not None:
        delta = _finite(abs(k_eff) * volume / (KB * t), "delta")

    crystalline = Direction.IN_PLANE if in_plane else Direction.OUT_OF_PLANE
    if abs(k_eff) < ISOTROPIC_THRESHOLD:
        classification = AnisotropyClass.ISOTROPIC
        preferred = Direction.NONE
    elif k_eff > 0:
        classification = AnisotropyClass.CRYSTALLINE_DOMINATED
        preferred = crystalline
    else:
        # shape wins: magnetization follows the shape easy axis
        classification = AnisotropyClass.SHAPE_DOMINATED
        preferred = Direction.OUT_OF_PLANE if easy_is_z else Direction.IN_PLANE

    return AnisotropyAnalysis(
        easy_axis=easy,
        hard_axis=hard,
        k_shape=k_shape,
        k_eff=k_eff,
        h_c=h_c,
        delta=delta,
        classification=classification,
        preferred_direction=preferred,
        crystalline_easy_axis=crystalline,
    )
