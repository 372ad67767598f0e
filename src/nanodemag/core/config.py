"""Configuration management with pydantic and YAML support."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, model_validator

from ..geometry.validation import DimensionLimits
from .constants import CACHE_TTL_S, MAX_ASPECT_RATIO, MAX_CACHE_SIZE, MAX_DIMENSION, MIN_DIMENSION
from .types import MaterialProperties


class LimitsConfig(BaseModel):
    """Supported dimension window for the analytical formulas."""

    min_dimension_nm: float = Field(default=MIN_DIMENSION, gt=0)
    max_dimension_nm: float = Field(default=MAX_DIMENSION, gt=0)
    max_aspect_ratio: float = Field(default=MAX_ASPECT_RATIO, ge=1)

    @model_validator(mode="after")
    def _check_window(self) -> LimitsConfig:
        if self.min_dimension_nm >= self.max_dimension_nm:
            raise ValueError("min_dimension_nm must be below max_dimension_nm")
        return self

    def to_limits(self) -> DimensionLimits:
        return DimensionLimits(
            min_dimension=self.min_dimension_nm,
            max_dimension=self.max_dimension_nm,
            max_aspect_ratio=self.max_aspect_ratio,
        )


class CacheConfig(BaseModel):
    """Cache sizing and result expiry."""

    max_size: int = Field(default=MAX_CACHE_SIZE, ge=1, le=100_000)
    ttl_s: float = Field(default=CACHE_TTL_S, gt=0)


class MaterialConfig(BaseModel):
    """Default material, in the calculator's display units."""

    ms_ka_per_m: float = Field(default=1000.0, gt=0)
    ku_mj_per_m3: float = Field(default=0.8, ge=0)
    exchange_pj_per_m: float = Field(default=15.0, gt=0)
    temperature_k: float = Field(default=300.0, gt=0)

    def to_material(self) -> MaterialProperties:
        return MaterialProperties.from_display_units(
            self.ms_ka_per_m,
            self.ku_mj_per_m3,
            self.exchange_pj_per_m,
            self.temperature_k,
        )


class NanodemagConfig(BaseModel):
    """Root configuration object."""

    limits: LimitsConfig = Field(default_factory=LimitsConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    material: MaterialConfig = Field(default_factory=MaterialConfig)
    crystalline_easy_axis_in_plane: bool = False
    log_level: Literal["DEBUG", "INFO", "WARN", "ERROR"] = "INFO"


def load_config(path: str | Path) -> NanodemagConfig:
    """Load a YAML file; keys it omits keep their defaults.

    Raises:
        FileNotFoundError: ``path`` does not exist.
        ValueError: The top level of the file is not a mapping.
        pydantic.ValidationError: A value is out of bounds.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = yaml.safe_load(path.read_text()) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    return NanodemagConfig.model_validate(data)


def save_config(config: NanodemagConfig, path: str | Path) -> None:
    """Write ``config`` as YAML, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(config.model_dump(), sort_keys=False))


def default_config() -> NanodemagConfig:
    return NanodemagConfig()


def _expand_dotted(overrides: dict[str, Any]) -> dict[str, Any]:
    """{"material.ms_ka_per_m": 800} -> {"material": {"ms_ka_per_m": 800}}"""
    nested: dict[str, Any] = {}
    for key, value in overrides.items():
        *parents, leaf = key.split(".")
        node = nested
        for part in parents:
            node = node.setdefault(part, {})
        if isinstance(value, dict) and isinstance(node.get(leaf), dict):
            node[leaf].update(_expand_dotted(value))
        else:
            node[leaf] = _expand_dotted(value) if isinstance(value, dict) else value
    return nested


def _deep_update(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    out = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _deep_update(out[key], value)
        else:
            out[key] = value
    return out


def merge_config(base: NanodemagConfig, overrides: dict[str, Any]) -> NanodemagConfig:
    """Apply overrides to a configuration and re-validate.

    Overrides may be nested (``{"material": {"ku_mj_per_m3": 1.2}}``) or use
    dotted keys (``{"material.ku_mj_per_m3": 1.2}``); ``None`` values are
    skipped so unset CLI flags can be passed straight through.

    Returns:
        New configuration; ``base`` is not modified.
    """
    present = {k: v for k, v in overrides.items() if v is not None}
    merged = _deep_update(base.model_dump(), _expand_dotted(present))
    return NanodemagConfig.model_validate(merged)
