"""
===============================================================================
ATTITUDE - 3x3 Matrix
===============================================================================

Immutable 3x3 float64 matrix, built from a flat sequence of nine numbers in
row-major order:

    [m00, m01, m02,
     m10, m11, m12,
     m20, m21, m22]

Quaternion.matrix() produces one of these. Matrix-vector products use the
column-vector convention, v' = M v.
===============================================================================
"""

from typing import List, Optional, Sequence

import numpy as np

from attitude.core.vec3 import Vec3


class Mat33:
    """
    Immutable 3x3 matrix.

    Parameters
    ----------
    values : sequence of float, optional
        Nine entries in row-major order. Identity when omitted.

    Raises
    ------
    ValueError
        If ``values`` does not hold exactly nine numbers.
    """

    __slots__ = ('_m',)

    def __init__(self, values: Optional[Sequence[float]] = None) -> None:
        if values is None:
            m = np.eye(3, dtype=np.float64)
        else:
            flat = np.asarray(values, dtype=np.float64).ravel()
            if flat.size != 9:
                raise ValueError(
                    f"Mat33 needs exactly 9 row-major values, got {flat.size}"
                )
            m = flat.reshape(3, 3).copy()
        m.flags.writeable = False
        object.__setattr__(self, '_m', m)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (Mat33, (self.to_array(),))

    @staticmethod
    def identity() -> 'Mat33':
        return Mat33()

    # =========================================================================
    # ACCESS
    # =========================================================================

    def row(self, i: int) -> Vec3:
        r = self._m[i]
        return Vec3(r[0], r[1], r[2])

    def col(self, j: int) -> Vec3:
        c = self._m[:, j]
        return Vec3(c[0], c[1], c[2])

    def __getitem__(self, index):
        """``m[i]`` is row ``i`` as a Vec3; ``m[i, j]`` is a single entry."""
        if isinstance(index, tuple) and len(index) == 2:
            return float(self._m[index])
        if isinstance(index, (int, np.integer)):
            return self.row(index)
        raise TypeError(
            f"Mat33 indices must be an int or an (i, j) pair, got {index!r}"
        )

    # =========================================================================
    # ALGEBRA
    # =========================================================================

    def mult_vector(self, v: Vec3) -> Vec3:
        """
        Multiply a column vector: v' = M v.

        Parameters
        ----------
        v : Vec3
            Vector to transform.

        Returns
        -------
        Vec3
            The transformed vector.
        """
        r = self._m @ np.array([v.x, v.y, v.z], dtype=np.float64)
        return Vec3(r[0], r[1], r[2])

    def mult(self, other: 'Mat33') -> 'Mat33':
        """Matrix product self @ other."""
        return Mat33(self._m @ other._m)

    def transpose(self) -> 'Mat33':
        return Mat33(self._m.T)

    def determinant(self) -> float:
        return float(np.linalg.det(self._m))

    # =========================================================================
    # COMPARISON & EXPORT
    # =========================================================================

    def equals(self, other: 'Mat33', epsilon: float = 0.0) -> bool:
        """True if every entry matches exactly or within ``epsilon``."""
        diff = np.abs(self._m - other._m)
        return bool(np.all((self._m == other._m) | (diff <= epsilon)))

    def to_array(self) -> List[float]:
        """Flat row-major list of the nine entries."""
        return [float(e) for e in self._m.ravel()]

    def as_ndarray(self) -> np.ndarray:
        """Writable (3, 3) copy of the matrix."""
        return self._m.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mat33):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(tuple(self.to_array()))

    def __repr__(self) -> str:
        return f"Mat33({self.to_array()!r})"

    def __str__(self) -> str:
        return "\n".join(
            "[" + ", ".join(f"{e:+.6f}" for e in row) + "]" for row in self._m
        )
