"""
===============================================================================
ATTITUDE - Numerical Constants
===============================================================================
Central repository for the constants shared by the quaternion, vector and
matrix types. Angles are in radians throughout.
===============================================================================
"""

import numpy as np


# =============================================================================
# MATHEMATICAL CONSTANTS
# =============================================================================
PI = np.pi
TWO_PI = 2.0 * np.pi
DEG2RAD = PI / 180.0
RAD2DEG = 180.0 / PI

# =============================================================================
# QUATERNION DEFAULTS
# =============================================================================
# Scalar-first identity [w, x, y, z]
IDENTITY_COMPONENTS = (1.0, 0.0, 0.0, 0.0)

# Component used when a scalar part is missing from an array or record
DEFAULT_W = 1.0
# Component used when a vector part is missing from an array or record
DEFAULT_XYZ = 0.0

# =============================================================================
# INTERPOLATION
# =============================================================================
# Below this |sin(halfTheta)| the slerp axis is undefined (antipodal inputs)
# and a per-component average is returned instead.
SLERP_LINEAR_THRESHOLD = 0.001

# =============================================================================
# COMPARISON
# =============================================================================
UNIT_NORM_TOLERANCE = 1e-8
