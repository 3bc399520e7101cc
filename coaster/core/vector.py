# 3D vector value type
# FORBIDDEN: logging, any I/O

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

# Below this length a vector has no usable direction
NORMALIZE_EPSILON = 1e-10


@dataclass(frozen=True)
class Vec3:
    """Immutable 3D point or direction.

    All operations return new values; y is the world up axis.
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def zero(cls) -> "Vec3":
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def up(cls) -> "Vec3":
        return cls(0.0, 1.0, 0.0)

    @classmethod
    def from_array(cls, arr: Sequence[float]) -> "Vec3":
        """Build from any 3-element sequence (list, tuple, ndarray)."""
        assert len(arr) == 3, f"Expected 3 components, got {len(arr)}"
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def add(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def sub(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, s: float) -> "Vec3":
        return Vec3(self.x * s, self.y * s, self.z * s)

    def dot(self, other: "Vec3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vec3") -> "Vec3":
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def normalized(self) -> "Vec3":
        """Unit vector in the same direction.

        Near-zero vectors return world up (0, 1, 0) instead of NaN.
        """
        length = self.length()
        if length < NORMALIZE_EPSILON:
            return Vec3.up()
        return Vec3(self.x / length, self.y / length, self.z / length)

    def distance_to(self, other: "Vec3") -> float:
        return self.sub(other).length()

    def lerp(self, other: "Vec3", t: float) -> "Vec3":
        """Linear interpolation, t=0 gives self and t=1 gives other."""
        return self.scale(1.0 - t).add(other.scale(t))

    def is_close(self, other: "Vec3", tol: float = 1e-9) -> bool:
        return self.distance_to(other) <= tol
