"""Calculation engine — the interface between callers and the numerical core.

Interface:
    DemagCalculator(config).calculate(dimensions, material) -> CalculationResult

Flow:
    1. Look up the composed result in the result cache (expires after ttl_s);
       callers always get a copy with its own diag
    2. compute_factors(dimensions) through the factor cache (never expires)
    3. analyze(axis factors, Ms, Ku, T, V, crystalline orientation)
    4. Assemble CalculationResult and store it in the result cache

Errors from the numerical core are returned in ``CalculationResult.error``;
failed calculations are never cached.
"""

from __future__ import annotations

import copy
import dataclasses
import time
from collections.abc import Callable

from ..anisotropy.analyzer import analyze
from ..geometry.factors import axis_factors, compute_factors, geometry_volume
from .cache import ComputationCache, make_factor_key, make_result_key, memoize
from .config import NanodemagConfig, default_config
from .errors import DemagError
from .logging import get_logger
from .types import (
    AnisotropyAnalysis,
    CalculationResult,
    DemagFactors,
    GeometryDimensions,
    MaterialProperties,
)

logger = get_logger(__name__)


def _detached(result: CalculationResult) -> CalculationResult:
    """Copy of a cached result whose diag can be changed freely."""
    return dataclasses.replace(result, diag=copy.deepcopy(result.diag))


class DemagCalculator:
    """Owns the factor/result caches and the crystalline easy-axis setting."""

    def __init__(
        self,
        config: NanodemagConfig | None = None,
        factor_cache: ComputationCache[DemagFactors] | None = None,
        result_cache: ComputationCache[CalculationResult] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or default_config()
        self.limits = self.config.limits.to_limits()
        if factor_cache is None:
            factor_cache = ComputationCache(
                max_size=self.config.cache.max_size, ttl=None, clock=clock, name="factors"
            )
        if result_cache is None:
            result_cache = ComputationCache(
                max_size=self.config.cache.max_size,
                ttl=self.config.cache.ttl_s,
                clock=clock,
                name="results",
            )
        self.factor_cache = factor_cache
        self.result_cache = result_cache
        self._easy_axis_in_plane = bool(self.config.crystalline_easy_axis_in_plane)

    @property
    def crystalline_easy_axis_in_plane(self) -> bool:
        return self._easy_axis_in_plane

    def set_easy_axis_direction(self, in_plane: bool) -> None:
        """Change the crystalline easy-axis orientation.

        Every cached result depends on the orientation, so the result cache
        is cleared whenever it changes.
        """
        in_plane = bool(in_plane)
        if in_plane == self._easy_axis_in_plane:
            return
        self._easy_axis_in_plane = in_plane
        self.result_cache.clear()
        logger.info("easy axis changed; result cache cleared", in_plane=in_plane)

    def compute_factors(self, dimensions: GeometryDimensions) -> DemagFactors:
        """Demagnetization factors through the factor cache.

        Raises:
            GeometryError, NumericalError: Propagated from the formulas.
        """
        key = make_factor_key(dimensions)

        def _compute() -> DemagFactors:
            with logger.timer("compute_factors", geometry=dimensions.kind):
                return compute_factors(dimensions, limits=self.limits)

        return memoize(self.factor_cache, key, _compute)

    def analyze(
        self,
        dimensions: GeometryDimensions,
        factors: DemagFactors,
        material: MaterialProperties,
    ) -> AnisotropyAnalysis:
        return analyze(
            axis_factors(dimensions, factors),
            ms=material.ms,
            ku=material.ku,
            t=material.t,
            volume=geometry_volume(dimensions),
            crystalline_easy_axis_in_plane=self._easy_axis_in_plane,
        )

    def calculate(
        self,
        dimensions: GeometryDimensions,
        material: MaterialProperties | None = None,
    ) -> CalculationResult:
        """Run factors + anisotropy analysis for one geometry.

        Args:
            dimensions: Geometry variant (lengths in nm).
            material: Material constants; the configured default when None.

        Returns:
            CalculationResult; ``result.error`` is set instead of raising when
            the inputs are invalid or the computation is unphysical.
        """
        material = material or self.config.material.to_material()
        log = logger.bind(geometry=dimensions.kind, dims=list(dimensions.values()))

        key = make_result_key(dimensions, material)
        cached = self.result_cache.get(key)
        if cached is not None:
            log.debug("result cache hit")
            return _detached(cached)

        try:
            with log.timer("calculate") as timing:
                material.validate()
                factors = self.compute_factors(dimensions)
                analysis = self.analyze(dimensions, factors, material)
        except DemagError as exc:
            log.warn("calculation failed", error=exc.to_dict())
            return CalculationResult(dimensions=dimensions, material=material, error=exc)

        result = CalculationResult(
            dimensions=dimensions,
            material=material,
            factors=factors,
            analysis=analysis,
            volume_m3=geometry_volume(dimensions),
            diag={"elapsed_ms": timing.elapsed_ms, "factor_cache": self.factor_cache.stats},
        )
        self.result_cache.set(key, result)
        return _detached(result)

    def cleanup(self) -> int:
        """Sweep expired results; return how many were removed."""
        removed = self.result_cache.cleanup()
        if removed:
            logger.debug("expired results removed", removed=removed)
        return removed

    def clear_caches(self) -> None:
        self.factor_cache.clear()
        self.result_cache.clear()
        logger.info("caches cleared")
