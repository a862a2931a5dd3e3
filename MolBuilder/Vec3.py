"""
3-D vector value type used for atom positions, shifts and rotation vectors.
Components are addressed with 1-based axis indices X, Y, Z.
"""

import numpy as np

X, Y, Z = 1, 2, 3

# absolute tolerance of the approximate geometric predicates
TOLERANCE = 0.001


class Vec3:
    __slots__ = ('_v',)
    __hash__ = None
    # numpy scalars must defer to __rmul__ instead of broadcasting
    __array_ufunc__ = None

    def __init__(self, x=0.0, y=0.0, z=0.0):
        self._v = np.array([x, y, z], dtype=np.float64)

    @classmethod
    def from_array(cls, arr):
        arr = np.asarray(arr, dtype=np.float64)
        if arr.shape != (3,):
            raise ValueError(f"Vec3 needs exactly 3 components, got shape {arr.shape}")
        return cls(arr[0], arr[1], arr[2])

    @classmethod
    def one(cls, idx, val):
        """Vector with a single non-zero component at axis idx."""
        vec = cls()
        vec._v[idx - 1] = val
        return vec

    @staticmethod
    def is_close(f1, f2):
        """Tests how close two numbers are."""
        return abs(f1 - f2) < TOLERANCE

    def component(self, idx):
        return float(self._v[idx - 1])

    @property
    def x(self):
        return float(self._v[0])

    @property
    def y(self):
        return float(self._v[1])

    @property
    def z(self):
        return float(self._v[2])

    def __array__(self, dtype=None, copy=None):
        return np.array(self._v, dtype=dtype)

    def __iter__(self):
        return iter(self._v.tolist())

    def __len__(self):
        return 3

    def len2(self):
        return float(np.dot(self._v, self._v))

    def len(self):
        return float(np.sqrt(self.len2()))

    def normalize(self):
        return self / self.len()

    def normalize_z(self):
        """Like normalize(), but the zero vector maps to itself."""
        length = self.len()
        if length != 0:
            return self / length
        return Vec3()

    def __neg__(self):
        return Vec3.from_array(-self._v)

    def __add__(self, other):
        return Vec3.from_array(self._v + other._v)

    def __sub__(self, other):
        return Vec3.from_array(self._v - other._v)

    def __isub__(self, other):
        self._v -= other._v
        return self

    def __mul__(self, other):
        # Vec3 * Vec3 is the scalar product
        if isinstance(other, Vec3):
            return float(np.dot(self._v, other._v))
        return Vec3.from_array(self._v * other)

    def __rmul__(self, other):
        return Vec3.from_array(self._v * other)

    def __truediv__(self, m):
        return Vec3.from_array(self._v / m)

    def __eq__(self, other):
        if not isinstance(other, Vec3):
            return NotImplemented
        return bool(np.array_equal(self._v, other._v))

    def cross(self, v):
        return Vec3.from_array(np.cross(self._v, v._v))

    def project(self, direction):
        # direction is assumed to be a unit vector or the zero vector
        return direction * (self * direction)

    def orthogonal(self, direction):
        # direction is assumed to be a unit vector or the zero vector
        return self - self.project(direction)

    ortho_component_to = orthogonal

    def div_one_by_one(self, d):
        return Vec3.from_array(self._v / d._v)

    def is_parallel(self, other):
        return Vec3.is_close(self.normalize() * other.normalize(), 1)

    def is_orthogonal(self, other):
        return Vec3.is_close(self.normalize() * other.normalize(), 0)

    def close_to(self, other):
        return all(Vec3.is_close(a, b) for a, b in zip(self._v, other._v))

    def __repr__(self):
        return f"Vec3({self.x!r}, {self.y!r}, {self.z!r})"

    def __str__(self):
        return "{{{:g},{:g},{:g}}}".format(self.x, self.y, self.z)
