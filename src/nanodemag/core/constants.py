"""Core constants and configuration defaults for nanodemag.

This module defines system-wide invariants such as:
- Physical constants (SI)
- Dimension and aspect-ratio limits for the analytical formulas
- Model version (for caching)
- Cache sizing and expiry
"""

from __future__ import annotations

import math

# Model Versioning for Caching
# Update when any factor formula or the anisotropy convention changes
MODEL_VERSION = "v1.0_20261019_aharoni_joseph"

# Physical constants (SI)
MU0 = 4.0 * math.pi * 1e-7  # H/m
KB = 1.380649e-23  # J/K

# Unit conversions
AMPERE_PER_METER_PER_OERSTED = 79.5774715459
NM3_TO_M3 = 1e-27

# Dimension limits (nm)
MIN_DIMENSION = 0.01
MAX_DIMENSION = 1e6
MAX_ASPECT_RATIO = 1e7

# Limiting-case shortcuts for the closed forms
THIN_LIMIT_RATIO = 1e-6
LONG_LIMIT_RATIO = 1e6

# Tolerances
FACTOR_SUM_TOLERANCE = 1e-6
FACTOR_BOUND_TOLERANCE = 1e-7

# Anisotropy classification
ISOTROPIC_THRESHOLD = 0.01e6  # J/m^3
THERMAL_STABILITY_THRESHOLD = 60.0

# Cache
CACHE_TTL_S = 30.0
MAX_CACHE_SIZE = 100
