"""
===============================================================================
ATTITUDE - Three-Component Vector
===============================================================================

Immutable 3-vector used as the rotation axis and as the operand of
quaternion rotation. Components are stored in a read-only float64 array and
exposed as plain Python floats.

Zero-length vectors are legal everywhere: normalizing one yields the zero
vector again rather than NaN, so callers that build a rotation from a
degenerate axis get a defined (identity) rotation.
===============================================================================
"""

import logging
from typing import List, Optional, Sequence

import numpy as np


logger = logging.getLogger(__name__)


class Vec3:
    """
    Immutable 3D vector.

    Attributes
    ----------
    x : float
        First component.
    y : float
        Second component.
    z : float
        Third component.

    Examples
    --------
    >>> v = Vec3(3.0, 0.0, 4.0)
    >>> v.length()
    5.0
    >>> v.normalize().to_array()
    [0.6, 0.0, 0.8]
    """

    __slots__ = ('_v',)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        v = np.array([x, y, z], dtype=np.float64)
        v.flags.writeable = False
        object.__setattr__(self, '_v', v)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (Vec3, (self.x, self.y, self.z))

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def x(self) -> float:
        return float(self._v[0])

    @property
    def y(self) -> float:
        return float(self._v[1])

    @property
    def z(self) -> float:
        return float(self._v[2])

    # =========================================================================
    # FACTORIES
    # =========================================================================

    @staticmethod
    def from_array(values: Sequence[float]) -> 'Vec3':
        """
        Build a vector from an ordered sequence.

        Missing trailing elements default to 0.0 individually; elements past
        the third are ignored.

        Parameters
        ----------
        values : sequence of float
            Up to three components [x, y, z].

        Returns
        -------
        Vec3
            The new vector.
        """
        values = list(values)
        padded = [values[i] if i < len(values) else 0.0 for i in range(3)]
        return Vec3(padded[0], padded[1], padded[2])

    @staticmethod
    def random(rng: Optional[np.random.Generator] = None) -> 'Vec3':
        """
        Draw a uniformly distributed unit vector.

        Three standard-normal samples are normalized, which gives a uniform
        distribution over the unit sphere.

        Parameters
        ----------
        rng : numpy.random.Generator, optional
            Random source. A fresh default generator is used when omitted.

        Returns
        -------
        Vec3
            Random vector of unit length.
        """
        if rng is None:
            rng = np.random.default_rng()
        sample = rng.standard_normal(3)
        return Vec3(sample[0], sample[1], sample[2]).normalize()

    # =========================================================================
    # VECTOR ALGEBRA
    # =========================================================================

    def length(self) -> float:
        """Euclidean length sqrt(x^2 + y^2 + z^2)."""
        return float(np.sqrt(np.dot(self._v, self._v)))

    def normalize(self) -> 'Vec3':
        """
        Return a unit-length copy of the vector.

        Returns
        -------
        Vec3
            The normalized vector, or the zero vector if this vector has
            zero length.
        """
        mag = self.length()
        if mag == 0.0:
            logger.debug("Normalizing a zero-length vector; returning zero vector")
            return Vec3()
        v = self._v / mag
        return Vec3(v[0], v[1], v[2])

    def dot(self, other: 'Vec3') -> float:
        return float(np.dot(self._v, other._v))

    def cross(self, other: 'Vec3') -> 'Vec3':
        c = np.cross(self._v, other._v)
        return Vec3(c[0], c[1], c[2])

    # =========================================================================
    # COMPARISON & EXPORT
    # =========================================================================

    def equals(self, other: 'Vec3', epsilon: float = 0.0) -> bool:
        """
        Component-wise comparison with an optional absolute tolerance.

        Parameters
        ----------
        other : Vec3
            Vector to compare against.
        epsilon : float, optional
            Largest accepted absolute difference per component.

        Returns
        -------
        bool
            True if every component matches.
        """
        return all(a == b or abs(a - b) <= epsilon
                   for a, b in zip(self.to_array(), other.to_array()))

    def to_array(self) -> List[float]:
        return [self.x, self.y, self.z]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    def __repr__(self) -> str:
        return f"Vec3(x={self.x!r}, y={self.y!r}, z={self.z!r})"

    def __str__(self) -> str:
        return f"{self.x}, {self.y}, {self.z}"
