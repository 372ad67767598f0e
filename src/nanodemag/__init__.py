"""nanodemag — demagnetization factors and shape anisotropy of nanostructures."""

from .anisotropy import analyze
from .core import (
    AnisotropyAnalysis,
    AnisotropyClass,
    AxisFactor,
    CalculationResult,
    ComputationCache,
    Cylinder,
    DemagError,
    DemagFactors,
    Direction,
    DomainError,
    ExtremeAspectRatioError,
    GeometryError,
    InfiniteRod,
    InvalidDimensionError,
    InvalidMaterialError,
    MaterialProperties,
    NumericalError,
    OutOfRangeError,
    Prism,
    Sphere,
    ThinFilm,
)
from .core.engine import DemagCalculator
from .geometry import compute_factors, geometry_volume
from .special import ellipe, ellipe_inc, ellipf_inc, ellipk

__version__ = "0.1.0"

__all__ = [
    "Prism",
    "Cylinder",
    "Sphere",
    "ThinFilm",
    "InfiniteRod",
    "MaterialProperties",
    "DemagFactors",
    "AxisFactor",
    "AnisotropyAnalysis",
    "AnisotropyClass",
    "Direction",
    "CalculationResult",
    "ComputationCache",
    "DemagCalculator",
    "compute_factors",
    "geometry_volume",
    "analyze",
    "ellipk",
    "ellipe",
    "ellipf_inc",
    "ellipe_inc",
    "DemagError",
    "GeometryError",
    "InvalidDimensionError",
    "OutOfRangeError",
    "ExtremeAspectRatioError",
    "DomainError",
    "NumericalError",
    "InvalidMaterialError",
]
