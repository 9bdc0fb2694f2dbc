"""
===============================================================================
ATTITUDE - Quaternion Orientation Toolkit
===============================================================================
Immutable quaternion, 3-vector and 3x3 matrix value types for representing
and applying 3D rotations.

Modules:
    core.quaternion -- Quaternion: composition, rotation, slerp, axis-angle
    core.vec3       -- Vec3 rotation operand and axis type
    core.mat33      -- Mat33 row-major rotation matrix
    config          -- YAML-backed configuration for the command line
    main            -- Command-line front end
===============================================================================
"""

from attitude.core.mat33 import Mat33
from attitude.core.quaternion import Quaternion
from attitude.core.vec3 import Vec3

__all__ = ['Mat33', 'Quaternion', 'Vec3']
__version__ = '0.1.0'
