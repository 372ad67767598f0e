"""Special functions used by the analytical factor formulas."""

from .elliptic import ellipe, ellipe_inc, ellipf_inc, ellipk, k_minus_e

__all__ = ["ellipk", "ellipe", "ellipf_inc", "ellipe_inc", "k_minus_e"]
