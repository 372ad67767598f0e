"""Core value types, errors and caching."""

from .cache import ComputationCache, FactorKey, ResultKey
from .errors import (
    DemagError,
    DomainError,
    ExtremeAspectRatioError,
    GeometryError,
    InvalidDimensionError,
    InvalidMaterialError,
    NumericalError,
    OutOfRangeError,
)
from .types import (
    AnisotropyAnalysis,
    AnisotropyClass,
    AxisFactor,
    CalculationResult,
    Cylinder,
    DemagFactors,
    Direction,
    InfiniteRod,
    MaterialProperties,
    Prism,
    Sphere,
    ThinFilm,
)

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
    "FactorKey",
    "ResultKey",
    "DemagError",
    "GeometryError",
    "InvalidDimensionError",
    "OutOfRangeError",
    "ExtremeAspectRatioError",
    "DomainError",
    "NumericalError",
    "InvalidMaterialError",
]
