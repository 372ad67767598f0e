"""Shape and effective anisotropy from demagnetization factors."""

from .analyzer import analyze, easy_hard_axes

__all__ = ["analyze", "easy_hard_axes"]
