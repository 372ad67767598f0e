"""Tests for shape/effective anisotropy analysis."""

import math

import pytest

from nanodemag.anisotropy import analyze, easy_hard_axes
from nanodemag.core.constants import KB, MU0
from nanodemag.core.errors import InvalidMaterialError, NumericalError
from nanodemag.core.types import AnisotropyClass, AxisFactor, Direction

FILM = [AxisFactor("x", 0.0), AxisFactor("y", 0.0), AxisFactor("z", 1.0)]
DISK = [AxisFactor("x,y", 0.4), AxisFactor("z", 0.2)]
PLATE = [AxisFactor("x,y", 0.1), AxisFactor("z", 0.8)]


def test_shape_only_film():
    """Ms = 1e6 A/m, Ku = 0: shape anisotropy alone pulls M into the plane."""
    ms = 1e6
    result = analyze(FILM, ms=ms, ku=0.0, t=300.0, volume=None)

    k_shape = 0.5 * MU0 * ms * ms
    assert result.easy_axis == AxisFactor("x", 0.0)
    assert result.hard_axis == AxisFactor("z", 1.0)
    assert result.k_shape == pytest.approx(k_shape)
    assert result.k_eff == pytest.approx(-k_shape)
    assert result.h_c == pytest.approx(ms)
    assert result.delta is None
    assert result.is_thermally_stable is None
    assert result.classification is AnisotropyClass.SHAPE_DOMINATED
    assert result.preferred_direction is Direction.IN_PLANE
    assert result.crystalline_easy_axis is Direction.OUT_OF_PLANE


@pytest.mark.parametrize(
    "factors,in_plane,sign",
    [
        (DISK, False, 1.0),  # shape easy z, crystalline out of plane
        (PLATE, False, -1.0),  # shape easy in plane, crystalline out of plane
        (DISK, True, -1.0),
        (PLATE, True, 1.0),
    ],
)
def test_effective_anisotropy_sign_table(factors, in_plane, sign):
    ms, ku = 8e5, 1e6
    result = analyze(factors, ms=ms, ku=ku, t=300.0, volume=None, crystalline_easy_axis_in_plane=in_plane)

    assert result.k_shape >= 0.0
    assert result.k_eff == pytest.approx(ku + sign * result.k_shape)


def test_easy_and_hard_axes_follow_factor_order():
    easy, hard = easy_hard_axes(DISK)
    assert easy.name == "z"
    assert hard.name == "x,y"


def test_ties_keep_input_order():
    easy, hard = easy_hard_axes(
        [AxisFactor("x", 1 / 3), AxisFactor("y", 1 / 3), AxisFactor("z", 1 / 3)]
    )
    assert easy.name == "x"
    assert hard.name == "z"


def test_sphere_with_weak_crystalline_anisotropy_is_isotropic():
    third = 1.0 / 3.0
    sphere = [AxisFactor("x", third), AxisFactor("y", third), AxisFactor("z", third)]

    result = analyze(sphere, ms=1e6, ku=5e3, t=300.0, volume=1e-24)

    assert result.k_shape == 0.0
    assert result.k_eff == pytest.approx(5e3)
    assert result.classification is AnisotropyClass.ISOTROPIC
    assert result.preferred_direction is Direction.NONE


def test_crystalline_dominated_film():
    ms, ku, volume, t = 5e5, 1e6, 1e-24, 300.0
    result = analyze(FILM, ms=ms, ku=ku, t=t, volume=volume)

    k_eff = ku - 0.5 * MU0 * ms * ms
    assert result.k_eff == pytest.approx(k_eff)
    assert result.classification is AnisotropyClass.CRYSTALLINE_DOMINATED
    assert result.preferred_direction is Direction.OUT_OF_PLANE
    assert result.delta == pytest.approx(k_eff * volume / (KB * t))
    assert result.is_thermally_stable


def test_crystalline_in_plane_preference():
    result = analyze(PLATE, ms=5e5, ku=1e6, t=300.0, volume=None, crystalline_easy_axis_in_plane=True)

    assert result.classification is AnisotropyClass.CRYSTALLINE_DOMINATED
    assert result.preferred_direction is Direction.IN_PLANE
    assert result.crystalline_easy_axis is Direction.IN_PLANE


def test_shape_dominated_along_z():
    # elongated along z, crystalline axis in plane, weak Ku
    rod = [AxisFactor("x,y", 0.45), AxisFactor("z", 0.1)]
    result = analyze(rod, ms=1e6, ku=1e4, t=300.0, volume=None, crystalline_easy_axis_in_plane=True)

    assert result.k_eff < 0
    assert result.classification is AnisotropyClass.SHAPE_DOMINATED
    assert result.preferred_direction is Direction.OUT_OF_PLANE


def test_small_volume_is_thermally_unstable():
    result = analyze(DISK, ms=8e5, ku=1e5, t=300.0, volume=1e-27)

    assert result.delta < 60.0
    assert result.is_thermally_stable is False


def test_derived_units():
    result = analyze(FILM, ms=1e6, ku=0.0, t=300.0, volume=None)

    assert result.h_c_ka_per_m == pytest.approx(1e3)
    assert result.h_c_mt == pytest.approx(MU0 * 1e6 * 1e3)
    assert result.h_c_oe == pytest.approx(1e6 / 79.5774715459)


def test_exchange_length():
    result = analyze(FILM, ms=5e5, ku=1e6, t=300.0, volume=None)
    a = 15e-12

    assert result.exchange_length(a) == pytest.approx(math.sqrt(a / abs(result.k_eff)) * 1e9)


def test_exchange_length_undefined_without_anisotropy():
    third = 1.0 / 3.0
    sphere = [AxisFactor("x", third), AxisFactor("y", third), AxisFactor("z", third)]
    result = analyze(sphere, ms=1e6, ku=0.0, t=300.0, volume=None)

    assert result.k_eff == 0.0
    assert result.exchange_length(15e-12) is None


def test_accepts_plain_tuples():
    result = analyze([("x,y", 0.4), ("z", 0.2)], ms=8e5, ku=0.0, t=300.0, volume=None)
    assert result.easy_axis == AxisFactor("z", 0.2)


@pytest.mark.parametrize("count", [1, 4])
def test_rejects_wrong_factor_count(count):
    factors = [AxisFactor(f"a{i}", 0.1 * i) for i in range(count)]
    with pytest.raises(ValueError):
        analyze(factors, ms=1e6, ku=0.0, t=300.0, volume=None)


@pytest.mark.parametrize("ms,t", [(0.0, 300.0), (-1.0, 300.0), (1e6, 0.0), (float("nan"), 300.0)])
def test_rejects_non_positive_material(ms, t):
    with pytest.raises(InvalidMaterialError):
        analyze(FILM, ms=ms, ku=0.0, t=t, volume=None)


@pytest.mark.parametrize("ku", [float("nan"), float("inf")])
def test_non_finite_anisotropy_is_numerical_error(ku):
    with pytest.raises(NumericalError):
        analyze(FILM, ms=1e6, ku=ku, t=300.0, volume=None)


def test_to_dict_uses_display_labels():
    out = analyze(FILM, ms=1e6, ku=0.0, t=300.0, volume=None).to_dict()

    assert out["classification"] == "Shape-dominated"
    assert out["preferred_direction"] == "In-plane"
    assert out["easy_axis"] == {"name": "x", "value": 0.0}
