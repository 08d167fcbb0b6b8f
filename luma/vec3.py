"""
Three-component vector used for points, directions and linear colors.

Vectors are immutable values backed by a float64 numpy array. Colors are
stored linear; `linearize` and `gamma_correct` convert to and from the
display curve.
"""

from __future__ import annotations
from typing import TypeVar, Union
import numpy as np

# sRGB transfer approximated with a pure power curve
GAMMA = 2.2

Operand = Union['Vec3', float]


def _components(value: Operand):
    """Unwrap a vector operand; scalars broadcast as they are."""
    return value._data if isinstance(value, Vec3) else value


class Vec3:
    """An immutable 3D vector.

    Every operation returns a new instance, so vectors can be shared
    freely between render threads.
    """

    __slots__ = ('_data',)

    # Equality is tolerance based, so vectors are not hashable
    __hash__ = None

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self._data = np.array([x, y, z], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Vec3:
        """Wrap a length-3 array without copying."""
        v = cls.__new__(cls)
        v._data = np.asarray(arr, dtype=np.float64)
        return v

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    def __repr__(self) -> str:
        x, y, z = self._data
        return f"Vec3({x:.4f}, {y:.4f}, {z:.4f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return bool(np.allclose(self._data, other._data))

    def __neg__(self) -> Vec3:
        return Vec3.from_array(-self._data)

    def __add__(self, other: Operand) -> Vec3:
        return Vec3.from_array(self._data + _components(other))

    __radd__ = __add__

    def __sub__(self, other: Operand) -> Vec3:
        return Vec3.from_array(self._data - _components(other))

    def __rsub__(self, other: float) -> Vec3:
        return Vec3.from_array(other - self._data)

    def __mul__(self, other: Operand) -> Vec3:
        return Vec3.from_array(self._data * _components(other))

    __rmul__ = __mul__

    def __truediv__(self, other: Operand) -> Vec3:
        return Vec3.from_array(self._data / _components(other))

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def __iter__(self):
        return iter(self._data.tolist())

    def length_squared(self) -> float:
        return float(self._data @ self._data)

    def length(self) -> float:
        return float(np.sqrt(self.length_squared()))

    def normalize(self) -> Vec3:
        """Unit vector in the same direction. Zero vectors are a caller error."""
        length = self.length()
        assert length > 0.0, "cannot normalize a zero-length vector"
        return Vec3.from_array(self._data / length)

    def dot(self, other: Vec3) -> float:
        return float(self._data @ other._data)

    def near_zero(self, epsilon: float = 1e-8) -> bool:
        """True when every component is within epsilon of zero."""
        return bool(np.all(np.abs(self._data) < epsilon))

    def to_array(self) -> np.ndarray:
        """Copy of the components as a numpy array."""
        return self._data.copy()

    def clamp(self, min_val: float = 0.0, max_val: float = 1.0) -> Vec3:
        return Vec3.from_array(np.clip(self._data, min_val, max_val))

    def linearize(self, gamma: float = GAMMA) -> Vec3:
        """Convert an sRGB color to linear space for rendering math.

        Source colors authored in sRGB must pass through here before they
        take part in lighting. Negative components clamp to zero.
        """
        return Vec3.from_array(np.clip(self._data, 0.0, None) ** gamma)

    def gamma_correct(self, gamma: float = GAMMA) -> Vec3:
        """Inverse of `linearize`: linear radiance to display values."""
        return Vec3.from_array(np.clip(self._data, 0.0, None) ** (1.0 / gamma))


Point3 = Vec3
Color = Vec3

T = TypeVar('T', float, Vec3)


def dot(a: Vec3, b: Vec3) -> float:
    return a.dot(b)


def lerp(a: T, b: T, t: float) -> T:
    """Linear interpolation a + t * (b - a), for scalars and vectors."""
    return a + (b - a) * t


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a scalar to [min_val, max_val]."""
    return max(min_val, min(value, max_val))
