"""
Plane geometry value types — immutable points and circles.

Every operation returns a new value; nothing here is mutated after
construction, so a point or circle can be shared freely between frames.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace


# ---------------------------------------------------------------------------
# Point
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Point:
    """A 2-D coordinate, also used as a vector."""
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_polar(cls, angle: float, length: float) -> "Point":
        """Vector of *length* pointing along *angle* (radians)."""
        return cls(math.cos(angle) * length, math.sin(angle) * length)

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> "Point":
        return Point(self.x * k, self.y * k)

    __rmul__ = __mul__

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def angle_to(self, other: "Point") -> float:
        """Direction from this point towards *other*, in radians."""
        return math.atan2(other.y - self.y, other.x - self.x)

    def lerp(self, other: "Point", t: float) -> "Point":
        return Point(self.x + (other.x - self.x) * t,
                     self.y + (other.y - self.y) * t)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


# ---------------------------------------------------------------------------
# Circle
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Circle:
    """A circle; radius 0 means "not visible yet"."""
    center: Point
    radius: float = 0.0

    def __post_init__(self):
        if not math.isfinite(self.radius) or self.radius < 0:
            raise ValueError(f"Circle radius must be finite and >= 0, got {self.radius!r}")

    def with_radius(self, radius: float) -> "Circle":
        return replace(self, radius=radius)

    def with_center(self, center: Point) -> "Circle":
        return replace(self, center=center)

    def point_at(self, angle: float) -> Point:
        """Point on the circumference at *angle*."""
        return self.center + Point.from_polar(angle, self.radius)


# ---------------------------------------------------------------------------
# Numeric helpers
# ---------------------------------------------------------------------------

def clamped_acos(value: float) -> float:
    """``acos`` with its argument clamped to [-1, 1]."""
    return math.acos(max(-1.0, min(1.0, value)))


def acos_ratio(numerator: float, denominator: float) -> float:
    """``acos(numerator / denominator)`` that tolerates a zero denominator.

    A zero denominator takes the limit of the ratio: ±1 following the
    sign of the numerator, or 0 when both are zero.
    """
    if denominator == 0:
        ratio = math.copysign(1.0, numerator) if numerator != 0 else 0.0
    else:
        ratio = numerator / denominator
    return clamped_acos(ratio)


def cubic_point(p0: Point, p1: Point, p2: Point, p3: Point, s: float) -> Point:
    """Evaluate a cubic Bézier at parameter *s* in [0, 1]."""
    u = 1.0 - s
    a = u * u * u
    b = 3.0 * u * u * s
    c = 3.0 * u * s * s
    d = s * s * s
    return Point(
        a * p0.x + b * p1.x + c * p2.x + d * p3.x,
        a * p0.y + b * p1.y + c * p2.y + d * p3.y,
    )
