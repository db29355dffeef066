# MIT License (see LICENSE)
"""
Three-component vector algebra.

Vector3 is an immutable value: every operation returns a new vector and
equality is componentwise. It is the only vector type used by the public
API; numpy arrays appear only at the edges (to_array / Vector3.of) where
bulk data is exchanged with callers.

Conventions:
    - cross() is right-handed: x × y = z.
    - normalize() of the zero vector is the zero vector.
    - Division by a zero scalar raises InvalidOperation instead of
      returning inf/NaN components.
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterator

import numpy as np

from .errors import InvalidOperation
from .util import f64


@dataclass(frozen=True)
class Vector3:
    """
    Immutable 3D vector.

    Attributes:
        x, y, z: Components, stored as Python floats.
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __post_init__(self) -> None:
        """Coerce components to float so ints and numpy scalars compare equal."""
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    @classmethod
    def zero(cls) -> Vector3:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def of(cls, value) -> Vector3:
        """
        Build a Vector3 from any length-3 vector-like value.

        Accepts an existing Vector3 (returned as is), a tuple/list, or a
        numpy array of shape (3,).
        """
        if isinstance(value, Vector3):
            return value
        arr = f64(value)
        if arr.shape != (3,):
            raise ValueError(f"Expected 3 components, got shape {arr.shape}")
        return cls(arr[0], arr[1], arr[2])

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3:
        if isinstance(scalar, Vector3):
            # Ambiguous between dot, cross and Hadamard; callers must pick one.
            return NotImplemented
        s = float(scalar)
        return Vector3(self.x * s, self.y * s, self.z * s)

    def __rmul__(self, scalar: float) -> Vector3:
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> Vector3:
        s = float(scalar)
        if s == 0.0:
            raise InvalidOperation(f"division by zero: {self!r} / {scalar!r}")
        return Vector3(self.x / s, self.y / s, self.z / s)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    # -------------------------------------------------------------------------
    # Named operations
    # -------------------------------------------------------------------------

    def invert(self) -> Vector3:
        """Return the vector pointing the opposite way."""
        return -self

    def magnitude(self) -> float:
        """Euclidean length |v|."""
        return math.sqrt(self.square_magnitude())

    def square_magnitude(self) -> float:
        """Squared length |v|². Avoids sqrt when only comparing lengths."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def normalize(self) -> Vector3:
        """
        Return the unit vector in the same direction.

        The zero vector has no direction and is returned unchanged, so
        normalize() never divides by zero and is idempotent.
        """
        m = self.magnitude()
        if m > 0:
            return self * (1.0 / m)
        return self

    def dot(self, other: Vector3) -> float:
        """Scalar product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        """Right-handed vector product self × other."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def component_product(self, other: Vector3) -> Vector3:
        """Elementwise (Hadamard) product."""
        return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)

    def add_scaled(self, other: Vector3, scale: float) -> Vector3:
        """Return self + other * scale."""
        s = float(scale)
        return Vector3(
            self.x + other.x * s,
            self.y + other.y * s,
            self.z + other.z * s,
        )

    def to_array(self) -> np.ndarray:
        """Components as a float64 array of shape (3,)."""
        return f64((self.x, self.y, self.z))
