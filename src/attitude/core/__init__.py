"""
===============================================================================
ATTITUDE - Core Value Types
===============================================================================
Submodules:
    constants  -- Mathematical constants and numerical thresholds
    vec3       -- Immutable 3-vector
    mat33      -- Immutable 3x3 matrix (row-major construction)
    quaternion -- Immutable quaternion for orientations
===============================================================================
"""
