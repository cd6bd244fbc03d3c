"""Central module containing default values for the biarc approximation"""

from __future__ import annotations

# Distance between two sampling points used to estimate the approximation error
DEFAULT_SAMPLING_STEP: float = 5.0

# Maximum accepted deviation between a cubic curve and its biarc
DEFAULT_TOLERANCE: float = 1.0

# Maximum number of nested splits of a single fragment
DEFAULT_MAX_DEPTH: int = 32

# Maximum number of splits during one approximation call
DEFAULT_MAX_SUBDIVISIONS: int = 2048

# Threshold for parallel lines and zero-length vectors (relative where a scale exists)
GEOM_EPS: float = 1.0e-9

# Maximum number of sampling steps per fragment, smaller sampling steps are clamped
DEFAULT_MAX_SAMPLES: int = 100_000
