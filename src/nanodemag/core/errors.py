"""Error taxonomy for factor and anisotropy calculations.

Every error carries a machine-readable ``kind`` and a ``context`` dict with the
offending parameters, so callers can format messages without parsing strings.
"""

from __future__ import annotations

from typing import Any


class DemagError(Exception):
    """Base class for all calculation errors."""

    kind = "demag_error"
    suggestion: str | None = None

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        out: dict[str, Any] = {
            "kind": self.kind,
            "message": self.message,
            "context": dict(self.context),
        }
        if self.suggestion:
            out["suggestion"] = self.suggestion
        return out


class GeometryError(DemagError, ValueError):
    """Invalid geometry input."""

    kind = "geometry_error"


class InvalidDimensionError(GeometryError):
    """A dimension is zero, negative or not a number."""

    kind = "invalid_dimension"


class OutOfRangeError(GeometryError):
    """A dimension lies outside the supported [min, max] window."""

    kind = "out_of_range"
    suggestion = "Use dimensions between 0.01 nm and 1,000,000 nm for reliable calculations."


class ExtremeAspectRatioError(OutOfRangeError):
    """Largest/smallest dimension ratio exceeds the supported maximum."""

    kind = "extreme_aspect_ratio"
    suggestion = (
        "For very thin films use the thin-film geometry; "
        "for very long rods use the infinite-rod geometry."
    )


class DomainError(DemagError, ValueError):
    """Elliptic-integral parameter outside [0, 1)."""

    kind = "domain_error"


class NumericalError(DemagError, ArithmeticError):
    """Non-finite or unphysical intermediate or final result."""

    kind = "numerical_error"
    suggestion = (
        "This usually indicates extreme aspect ratios. "
        "Try more balanced dimensions or a specialized geometry."
    )


class InvalidMaterialError(DemagError, ValueError):
    """Material constants are missing, non-finite or non-positive."""

    kind = "invalid_material"
