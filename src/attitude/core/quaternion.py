"""
===============================================================================
ATTITUDE - Quaternion Mathematics Library
===============================================================================

Immutable quaternion value type for representing 3D orientations and
rotations. Every operation returns a new Quaternion; nothing mutates its
receiver or its arguments, so instances can be shared freely between
threads.

Convention
----------
Scalar-first:

    q = [w, x, y, z] = w + x*i + y*j + z*k

where w is the scalar (real) part and [x, y, z] is the vector (imaginary)
part. Array input and output follow this order; only the string form
(``to_string`` / ``str``) lists the vector part first: "x, y, z, w".

A unit quaternion represents a rotation. Vectors are rotated with the
sandwich product

    v' = q * [0, v] * q^-1

and composition ``a.mult(b)`` applies ``b`` first, then ``a``.

Degenerate inputs never raise. A zero-magnitude quaternion normalizes to
the identity, slerp between equal or antipodal inputs returns a defined
fallback, and a zero-length rotation axis yields the identity rotation.

References
----------
    [1] Shoemake, "Animating Rotation with Quaternion Curves",
        SIGGRAPH 1985.
    [2] Kuipers, "Quaternions and Rotation Sequences", Princeton, 1999.

===============================================================================
"""

import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Sequence

import numpy as np

from attitude.core.constants import (
    DEFAULT_W,
    DEFAULT_XYZ,
    DEG2RAD,
    IDENTITY_COMPONENTS,
    SLERP_LINEAR_THRESHOLD,
    TWO_PI,
    UNIT_NORM_TOLERANCE,
)
from attitude.core.mat33 import Mat33
from attitude.core.vec3 import Vec3


logger = logging.getLogger(__name__)


class Quaternion:
    """
    Quaternion representing an orientation.

    A unit quaternion q = [w, x, y, z] parameterizes a rotation by angle
    theta about unit axis n as:

        q = [cos(theta/2), sin(theta/2) * n_x, sin(theta/2) * n_y, sin(theta/2) * n_z]

    Non-unit quaternions are permitted as intermediate values; rotation and
    matrix conversion assume unit magnitude.

    Attributes
    ----------
    w : float
        Scalar (real) component.
    x : float
        First imaginary component (i-axis).
    y : float
        Second imaginary component (j-axis).
    z : float
        Third imaginary component (k-axis).

    Examples
    --------
    >>> q = Quaternion()  # identity
    >>> q_rot = Quaternion.rotation_degrees(90.0, Vec3(0.0, 0.0, 1.0))
    >>> v_rotated = q_rot.rotate(Vec3(1.0, 0.0, 0.0))  # ~ Vec3(0, 1, 0)
    """

    __slots__ = ('_q',)

    def __init__(self, w: float = 1.0, x: float = 0.0, y: float = 0.0,
                 z: float = 0.0) -> None:
        """
        Initialize a quaternion from its four components.

        Called with no arguments this is the identity quaternion.

        Parameters
        ----------
        w : float
            Scalar part (cos(theta/2) for a rotation by angle theta).
        x : float
            i-component of the vector part.
        y : float
            j-component of the vector part.
        z : float
            k-component of the vector part.
        """
        q = np.array([w, x, y, z], dtype=np.float64)
        q.flags.writeable = False
        object.__setattr__(self, '_q', q)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (Quaternion, (self.w, self.x, self.y, self.z))

    # =========================================================================
    # PROPERTIES - Read access to quaternion components
    # =========================================================================

    @property
    def w(self) -> float:
        """Scalar (real) part of the quaternion."""
        return float(self._q[0])

    @property
    def x(self) -> float:
        """First imaginary component (i-axis)."""
        return float(self._q[1])

    @property
    def y(self) -> float:
        """Second imaginary component (j-axis)."""
        return float(self._q[2])

    @property
    def z(self) -> float:
        """Third imaginary component (k-axis)."""
        return float(self._q[3])

    @property
    def norm(self) -> float:
        """
        L2 norm (magnitude) of the quaternion.

        Returns
        -------
        float
            Euclidean norm sqrt(w^2 + x^2 + y^2 + z^2).
        """
        return float(np.sqrt(np.dot(self._q, self._q)))

    # =========================================================================
    # NAMED CONSTRUCTORS
    # =========================================================================

    @staticmethod
    def identity() -> 'Quaternion':
        """
        Create the identity quaternion [1, 0, 0, 0].

        The identity represents zero rotation and is the multiplicative
        identity element: q * identity = identity * q = q.

        Returns
        -------
        Quaternion
            The identity quaternion.
        """
        return Quaternion(*IDENTITY_COMPONENTS)

    @staticmethod
    def from_components(w: float, x: float, y: float, z: float) -> 'Quaternion':
        """Create a quaternion by direct assignment of all four components."""
        return Quaternion(w, x, y, z)

    @staticmethod
    def from_array(values: Sequence[float]) -> 'Quaternion':
        """
        Create a quaternion from a scalar-first sequence [w, x, y, z].

        Each missing trailing element defaults on its own: w to 1.0 and
        x, y, z to 0.0. Elements past the fourth are ignored.

        Parameters
        ----------
        values : sequence of float
            Up to four components.

        Returns
        -------
        Quaternion
            The new quaternion.

        Examples
        --------
        >>> Quaternion.from_array([0.5, 0.5]).to_array()
        [0.5, 0.5, 0.0, 0.0]
        >>> Quaternion.from_array([]).to_array()
        [1.0, 0.0, 0.0, 0.0]
        """
        values = list(values)
        defaults = (DEFAULT_W, DEFAULT_XYZ, DEFAULT_XYZ, DEFAULT_XYZ)
        w, x, y, z = (values[i] if i < len(values) else defaults[i]
                      for i in range(4))
        return Quaternion(w, x, y, z)

    @staticmethod
    def from_record(record: Any) -> 'Quaternion':
        """
        Create a quaternion from an object or mapping with w, x, y, z fields.

        Accepts another Quaternion, any object exposing ``w/x/y/z``
        attributes, or a mapping such as a JSON-decoded dict. Fields are
        checked for presence individually: an absent (or ``None``) w
        becomes 1.0 and an absent x, y or z becomes 0.0. A field that is
        present with the value 0 keeps that value.

        Parameters
        ----------
        record : object or Mapping
            Source of the four components.

        Returns
        -------
        Quaternion
            The new quaternion.
        """
        return Quaternion(
            _record_field(record, 'w', DEFAULT_W),
            _record_field(record, 'x', DEFAULT_XYZ),
            _record_field(record, 'y', DEFAULT_XYZ),
            _record_field(record, 'z', DEFAULT_XYZ),
        )

    @staticmethod
    def rotation_degrees(angle: float, axis: Vec3) -> 'Quaternion':
        """
        Create the rotation of ``angle`` degrees about ``axis``.

        Parameters
        ----------
        angle : float
            Rotation angle in degrees.
        axis : Vec3
            Rotation axis; normalized internally.

        Returns
        -------
        Quaternion
            Unit quaternion representing the rotation.
        """
        return Quaternion.rotation_radians(angle * DEG2RAD, axis)

    @staticmethod
    def rotation_radians(angle: float, axis: Vec3) -> 'Quaternion':
        """
        Create the rotation of ``angle`` radians about ``axis``.

        The angle is first wrapped with a truncating remainder: positive
        angles modulo 2*pi, all others modulo -2*pi, so the wrapped angle
        keeps the sign of the input and lies in (-2*pi, 2*pi). The axis is
        normalized; a zero-length axis produces the identity rotation.

            q = normalize([cos(a/2), n_x sin(a/2), n_y sin(a/2), n_z sin(a/2)])

        Parameters
        ----------
        angle : float
            Rotation angle in radians.
        axis : Vec3
            Rotation axis.

        Returns
        -------
        Quaternion
            Unit quaternion representing the rotation.
        """
        if angle > 0:
            angle = np.fmod(angle, TWO_PI)
        else:
            angle = np.fmod(angle, -TWO_PI)

        n = axis.normalize()
        if n.length() == 0.0:
            logger.debug("Zero-length rotation axis; rotation degenerates to identity")

        half_angle = angle / 2.0
        sin_half = np.sin(half_angle)
        cos_half = np.cos(half_angle)

        return Quaternion(
            cos_half,
            n.x * sin_half,
            n.y * sin_half,
            n.z * sin_half,
        ).normalize()

    @staticmethod
    def random(rng: Optional[np.random.Generator] = None) -> 'Quaternion':
        """
        Generate a random unit quaternion.

        Draws a uniformly distributed unit axis and an angle uniform in
        [0, 1) radians. The result is NOT uniformly distributed over SO(3);
        it is a light-weight generator of small random rotations.

        Parameters
        ----------
        rng : numpy.random.Generator, optional
            Random source shared by the axis and angle draws. Pass a seeded
            generator for reproducible output.

        Returns
        -------
        Quaternion
            A random unit quaternion.
        """
        if rng is None:
            rng = np.random.default_rng()
        axis = Vec3.random(rng).normalize()
        angle = float(rng.random())
        return Quaternion.rotation_radians(angle, axis)

    # =========================================================================
    # QUATERNION ARITHMETIC
    # =========================================================================

    def mult(self, other: 'Quaternion') -> 'Quaternion':
        """
        Concatenate the rotations of two quaternions (Hamilton product).

        Multiplication is NOT commutative. ``self.mult(other)`` represents
        the rotation ``other`` followed by ``self``.

        Parameters
        ----------
        other : Quaternion
            The right-hand quaternion in the product. Convert raw sequences
            with ``Quaternion.from_array`` first.

        Returns
        -------
        Quaternion
            The Hamilton product self * other.
        """
        aw, ax, ay, az = self._q
        bw, bx, by, bz = other._q

        w = bw * aw - bx * ax - by * ay - bz * az
        x = ay * bz - az * by + aw * bx + ax * bw
        y = az * bx - ax * bz + aw * by + ay * bw
        z = ax * by - ay * bx + aw * bz + az * bw

        return Quaternion(w, x, y, z)

    def conjugate(self) -> 'Quaternion':
        """
        Return the quaternion conjugate [w, -x, -y, -z].

        For unit quaternions the conjugate is the inverse rotation.
        """
        return Quaternion(self.w, -self.x, -self.y, -self.z)

    def inverse(self) -> 'Quaternion':
        """
        Return the inverse rotation.

        This is the conjugate, which is the true inverse only for unit
        quaternions; no division by the squared norm takes place.
        """
        return self.conjugate()

    def normalize(self) -> 'Quaternion':
        """
        Return a new quaternion of unit length.

        Returns
        -------
        Quaternion
            This quaternion divided by its magnitude, or the identity if the
            magnitude is exactly zero.
        """
        mag = self.norm
        if mag == 0.0:
            logger.debug("Normalizing a zero-magnitude quaternion; returning identity")
            return Quaternion.identity()
        q = self._q / mag
        return Quaternion(q[0], q[1], q[2], q[3])

    def dot(self, other: 'Quaternion') -> float:
        """4D inner product w1*w2 + x1*x2 + y1*y2 + z1*z2."""
        return float(np.dot(self._q, other._q))

    def is_unit(self, tolerance: float = UNIT_NORM_TOLERANCE) -> bool:
        """True if |q| is within ``tolerance`` of 1.0."""
        return abs(self.norm - 1.0) < tolerance

    # =========================================================================
    # ROTATION OPERATIONS
    # =========================================================================

    def rotate(self, v: Vec3) -> Vec3:
        """
        Rotate a 3D vector by this quaternion.

        Applies the sandwich product

            v' = q * [0, v] * q^-1

        and returns the vector part of the result. The quaternion is assumed
        to be unit length; this is not checked.

        Parameters
        ----------
        v : Vec3
            Vector to rotate. Convert raw sequences with ``Vec3.from_array``.

        Returns
        -------
        Vec3
            The rotated vector.
        """
        vq = Quaternion(0.0, v.x, v.y, v.z)
        r = self.mult(vq).mult(self.inverse())
        return Vec3(r.x, r.y, r.z)

    def matrix(self) -> Mat33:
        """
        Return the rotation matrix this quaternion represents.

        The matrix M satisfies M v = q.rotate(v) for a unit quaternion:

            M = | 1-2(y^2+z^2)    2(xy-wz)      2(xz+wy)   |
                | 2(xy+wz)      1-2(x^2+z^2)    2(yz-wx)   |
                | 2(xz-wy)      2(yz+wx)      1-2(x^2+y^2) |

        No normalization is applied first.

        Returns
        -------
        Mat33
            The rotation matrix, built from its row-major entries.
        """
        w, x, y, z = self.w, self.x, self.y, self.z

        xx = x * x
        yy = y * y
        zz = z * z
        xy = x * y
        xz = x * z
        xw = x * w
        yz = y * z
        yw = y * w
        zw = z * w

        return Mat33([
            1.0 - 2.0 * yy - 2.0 * zz, 2.0 * xy - 2.0 * zw, 2.0 * xz + 2.0 * yw,
            2.0 * xy + 2.0 * zw, 1.0 - 2.0 * xx - 2.0 * zz, 2.0 * yz - 2.0 * xw,
            2.0 * xz - 2.0 * yw, 2.0 * yz + 2.0 * xw, 1.0 - 2.0 * xx - 2.0 * yy,
        ])

    # =========================================================================
    # INTERPOLATION
    # =========================================================================

    @staticmethod
    def slerp(from_q: 'Quaternion', to_q: 'Quaternion', t: float) -> 'Quaternion':
        """
        Spherical linear interpolation between two quaternions.

            slerp(q1, q2, t) = q1 * sin((1-t)*h) / sin(h) + q2 * sin(t*h) / sin(h)

        where h = arccos(q1 . q2) is the half angle between the rotations.

        Parameters
        ----------
        from_q : Quaternion
            Rotation at t = 0.
        to_q : Quaternion
            Rotation at t = 1.
        t : float
            Interpolation parameter, nominally in [0, 1]. Not clamped.

        Returns
        -------
        Quaternion
            The interpolated quaternion. It is not renormalized.

        Notes
        -----
        - If |q1 . q2| >= 1 the inputs are equal (or exact negatives) and a
          copy of ``from_q`` is returned.
        - If |sin(h)| < SLERP_LINEAR_THRESHOLD the rotations are 180 degrees
          apart, the interpolation axis is undefined, and the per-component
          average of the inputs is returned.
        - The input with a negative dot product is NOT flipped, so the path
          is not forced onto the short arc.
        """
        cos_half_theta = from_q.dot(to_q)

        if abs(cos_half_theta) >= 1.0:
            return Quaternion(from_q.w, from_q.x, from_q.y, from_q.z)

        half_theta = np.arccos(cos_half_theta)
        sin_half_theta = np.sqrt(1.0 - cos_half_theta * cos_half_theta)

        if abs(sin_half_theta) < SLERP_LINEAR_THRESHOLD:
            logger.debug("Slerp between opposed rotations (sin=%.3e); averaging",
                         sin_half_theta)
            mid = from_q._q * 0.5 + to_q._q * 0.5
            return Quaternion(mid[0], mid[1], mid[2], mid[3])

        ratio_a = np.sin((1.0 - t) * half_theta) / sin_half_theta
        ratio_b = np.sin(t * half_theta) / sin_half_theta

        result = from_q._q * ratio_a + to_q._q * ratio_b
        return Quaternion(result[0], result[1], result[2], result[3])

    # =========================================================================
    # COMPARISON
    # =========================================================================

    def equals(self, other: 'Quaternion', epsilon: float = 0.0) -> bool:
        """
        Compare components with an optional absolute tolerance.

        Parameters
        ----------
        other : Quaternion
            Quaternion to compare against.
        epsilon : float, optional
            Largest accepted absolute difference per component. Default 0,
            i.e. exact comparison.

        Returns
        -------
        bool
            True if all four components match.
        """
        return all(a == b or abs(a - b) <= epsilon
                   for a, b in zip(self.to_array(), other.to_array()))

    # =========================================================================
    # OPERATOR OVERLOADS
    # =========================================================================

    def __mul__(self, other: 'Quaternion') -> 'Quaternion':
        """Quaternion * Quaternion -> Hamilton product (see ``mult``)."""
        if isinstance(other, Quaternion):
            return self.mult(other)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        """Exact component-wise equality."""
        if not isinstance(other, Quaternion):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(tuple(self.to_array()))

    # =========================================================================
    # EXPORT
    # =========================================================================

    def to_string(self) -> str:
        """
        String form, vector part first: "x, y, z, w".

        Note that this order differs from ``to_array``.
        """
        return f"{self.x}, {self.y}, {self.z}, {self.w}"

    def to_array(self) -> List[float]:
        """Scalar-first list [w, x, y, z]."""
        return [self.w, self.x, self.y, self.z]

    def __repr__(self) -> str:
        return (f"Quaternion(w={self.w!r}, x={self.x!r}, "
                f"y={self.y!r}, z={self.z!r})")

    def __str__(self) -> str:
        return self.to_string()


def _record_field(record: Any, name: str, default: float) -> float:
    """Look up ``name`` on a mapping or object, falling back when absent."""
    if isinstance(record, Mapping):
        value = record.get(name)
    else:
        value = getattr(record, name, None)
    return default if value is None else value
