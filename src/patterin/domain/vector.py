"""Immutable 2D vector used for points and directions.

Every operation returns a new Vector; nothing mutates its receiver.
"""

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Vector:
    """A point or direction in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def add(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def subtract(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y)

    def multiply(self, scalar: float) -> "Vector":
        return Vector(self.x * scalar, self.y * scalar)

    def divide(self, scalar: float) -> "Vector":
        """Divide by a scalar.

        Division by zero yields the zero vector instead of raising.
        """
        if scalar == 0:
            return Vector(0.0, 0.0)
        return Vector(self.x / scalar, self.y / scalar)

    def normalize(self) -> "Vector":
        """Return the unit vector in the same direction (zero stays zero)."""
        length = self.length()
        if length == 0:
            return Vector(0.0, 0.0)
        return self.divide(length)

    def dot(self, other: "Vector") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Vector") -> float:
        """Z component of the 3D cross product of the two vectors."""
        return self.x * other.y - self.y * other.x

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def angle(self) -> float:
        """Angle in radians from the positive x-axis."""
        return math.atan2(self.y, self.x)

    def distance_to(self, other: "Vector") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def rotate(self, angle: float) -> "Vector":
        """Rotate counter-clockwise by angle (radians) about the origin."""
        cos = math.cos(angle)
        sin = math.sin(angle)
        return Vector(self.x * cos - self.y * sin, self.x * sin + self.y * cos)

    def perpendicular(self) -> "Vector":
        """90 degree counter-clockwise rotation."""
        return Vector(-self.y, self.x)

    def perpendicular_cw(self) -> "Vector":
        """90 degree clockwise rotation."""
        return Vector(self.y, -self.x)

    def lerp(self, other: "Vector", t: float) -> "Vector":
        return Vector(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t,
        )

    def negate(self) -> "Vector":
        return Vector(-self.x, -self.y)

    def equals(self, other: "Vector", epsilon: float = 1e-10) -> bool:
        """Check equality within epsilon on each axis."""
        return abs(self.x - other.x) < epsilon and abs(self.y - other.y) < epsilon

    def __add__(self, other: "Vector") -> "Vector":
        return self.add(other)

    def __sub__(self, other: "Vector") -> "Vector":
        return self.subtract(other)

    def __mul__(self, scalar: float) -> "Vector":
        return self.multiply(scalar)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector":
        return self.negate()

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Vector":
        return cls(x=float(data["x"]), y=float(data["y"]))

    @classmethod
    def zero(cls) -> "Vector":
        return cls(0.0, 0.0)

    @classmethod
    def from_angle(cls, angle: float) -> "Vector":
        """Unit vector pointing at angle (radians)."""
        return cls(math.cos(angle), math.sin(angle))
