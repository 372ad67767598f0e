"""Tests for demagnetization factors of the supported geometries."""

import math

import numpy as np
import pytest

from nanodemag.core.errors import (
    ExtremeAspectRatioError,
    GeometryError,
    InvalidDimensionError,
    OutOfRangeError,
)
from nanodemag.core.types import (
    AxisFactor,
    Cylinder,
    DemagFactors,
    InfiniteRod,
    Prism,
    Sphere,
    ThinFilm,
)
from nanodemag.geometry import (
    DimensionLimits,
    axis_factors,
    compute_factors,
    cylinder_factors,
    geometry_volume,
    n_cylinder,
    n_prism,
    prism_factors,
    validate_dimensions,
)


def test_cube_is_isotropic():
    factors = compute_factors(Prism(10, 10, 10))

    for value in factors:
        assert value == pytest.approx(1.0 / 3.0, abs=1e-4)
    assert factors.total == pytest.approx(1.0, abs=1e-6)


def test_thin_square_plate_matches_aharoni():
    # 1 x 1 x 0.01 plate, scaled into the supported range
    nx, ny, nz = compute_factors(Prism(100, 100, 1))

    assert nz == pytest.approx(0.9660395821578994, rel=1e-9)
    assert nx == pytest.approx(0.01698020892105028, rel=1e-9)
    assert ny == pytest.approx(nx, rel=1e-9)


@pytest.mark.parametrize(
    "dims",
    [(20, 20, 2), (50, 10, 5), (3, 7, 11), (1000, 1, 1), (1e5, 1, 1), (1, 1e5, 1e5)],
)
def test_prism_factors_sum_to_one(dims):
    factors = prism_factors(*dims)

    assert factors.total == pytest.approx(1.0, abs=1e-6)
    assert all(0.0 <= value <= 1.0 for value in factors)


def test_prism_ordering_follows_edges():
    nx, ny, nz = prism_factors(50, 20, 5)

    # shortest edge carries the largest factor
    assert nz > ny > nx


def test_prism_nz_is_permutation_symmetric():
    assert n_prism(20, 40, 5) == pytest.approx(n_prism(40, 20, 5), rel=1e-10)


def test_long_prism_approaches_rod():
    nx, ny, nz = prism_factors(1e5, 1, 1)

    assert nx < 1e-3
    assert ny == pytest.approx(0.5, abs=1e-3)
    assert nz == pytest.approx(0.5, abs=1e-3)


def test_prism_thin_film_limit():
    assert compute_factors(Prism(1e5, 1e5, 0.01)) == DemagFactors(0.0, 0.0, 1.0)


def test_prism_long_rod_limit_at_max_aspect_ratio():
    assert compute_factors(Prism(1e5, 0.01, 0.01)) == DemagFactors(0.0, 0.5, 0.5)


def test_extreme_aspect_ratio_rejected():
    with pytest.raises(ExtremeAspectRatioError) as excinfo:
        compute_factors(Prism(2e5, 0.01, 0.01))

    err = excinfo.value
    assert err.kind == "extreme_aspect_ratio"
    assert err.context["aspect_ratio"] == pytest.approx(2e7)
    assert "thin-film" in err.suggestion


def test_aspect_ratio_checked_before_range():
    # 2e7 also exceeds MAX_DIMENSION, but the elongation is reported
    with pytest.raises(ExtremeAspectRatioError):
        compute_factors(Prism(2e7, 1, 1))


@pytest.mark.parametrize("dims", [(2e6, 1e6, 1e6), (0.005, 0.01, 0.01)])
def test_out_of_range_rejected(dims):
    with pytest.raises(OutOfRangeError) as excinfo:
        compute_factors(Prism(*dims))

    assert not isinstance(excinfo.value, ExtremeAspectRatioError)
    assert excinfo.value.suggestion is not None


@pytest.mark.parametrize(
    "dims",
    [Prism(0, 1, 1), Prism(-1, 1, 1), Prism(1, float("nan"), 1), Cylinder(float("inf"), 10), Sphere(0)],
)
def test_invalid_dimensions_rejected(dims):
    with pytest.raises(InvalidDimensionError):
        compute_factors(dims)


def test_geometry_errors_are_value_errors():
    with pytest.raises(ValueError):
        compute_factors(Prism(-1, 1, 1))
    assert issubclass(ExtremeAspectRatioError, GeometryError)


def test_custom_limits():
    limits = DimensionLimits(max_aspect_ratio=100.0)

    with pytest.raises(ExtremeAspectRatioError):
        compute_factors(Prism(1000, 1, 1), limits=limits)

    assert validate_dimensions(1, 2, limits=limits) == (1.0, 2.0)


def test_cylinder_factors_sum_and_symmetry():
    for thickness, diameter in [(2, 30), (10, 10), (100, 10), (1, 1000)]:
        nx, ny, nz = cylinder_factors(thickness, diameter)

        assert nx == ny
        assert nx + ny + nz == pytest.approx(1.0, abs=1e-6)
        assert 0.0 <= nz <= 1.0


def test_cylinder_nz_decreases_with_aspect_ratio():
    ratios = [0.01, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 100.0]
    nz = [n_cylinder(10.0 * p, 10.0) for p in ratios]

    assert np.all(np.diff(nz) < 0)


def test_long_cylinder_tail():
    # Nz ~ 1/(2 p^2) for a long cylinder
    p = 100.0
    nz = n_cylinder(p * 10.0, 10.0)
    assert nz == pytest.approx(1.0 / (2.0 * p * p), rel=0.05)


def test_cylinder_limits():
    p = 1e-7
    assert n_cylinder(0.01, 1e5) == pytest.approx(1.0 - 2.0 * p / math.pi, rel=1e-12)
    assert cylinder_factors(1e5, 0.01) == DemagFactors(0.5, 0.5, 0.0)


@pytest.mark.parametrize("diameter", [1e-3, 20.0, 1e9])
def test_sphere_is_size_independent(diameter):
    third = 1.0 / 3.0
    assert compute_factors(Sphere(diameter)) == DemagFactors(third, third, third)


def test_infinite_geometries():
    assert compute_factors(ThinFilm()) == DemagFactors(0.0, 0.0, 1.0)
    assert compute_factors(InfiniteRod()) == DemagFactors(0.5, 0.5, 0.0)


def test_unknown_geometry_type():
    with pytest.raises(TypeError):
        compute_factors((10, 10, 10))


def test_geometry_volume():
    assert geometry_volume(Prism(10, 10, 10)) == pytest.approx(1e-24)
    assert geometry_volume(Cylinder(2, 30)) == pytest.approx(math.pi * 225 * 2 * 1e-27)
    assert geometry_volume(Sphere(20)) == pytest.approx(4.0 / 3.0 * math.pi * 1000 * 1e-27)
    assert geometry_volume(ThinFilm()) is None
    assert geometry_volume(InfiniteRod()) is None


def test_axis_factors_labels():
    disk = Cylinder(2, 30)
    labeled = axis_factors(disk, compute_factors(disk))
    assert [f.name for f in labeled] == ["x,y", "z"]

    prism = Prism(20, 10, 5)
    factors = compute_factors(prism)
    assert axis_factors(prism, factors) == [
        AxisFactor("x", factors.nx),
        AxisFactor("y", factors.ny),
        AxisFactor("z", factors.nz),
    ]
