"""
Blob path generator — fuses two circles into one metaball-style shape.

Given an origin and a destination circle this computes the closed outline
that joins them: two anchor points on each circle, linked by two cubic
Bézier curves, so the pair reads as a single stretching drop of liquid.

The math follows the classic paper.js "meta-balls" construction:

  - law of cosines gives the half-angle of the region where the circles
    overlap (zero once they are apart)
  - four anchor angles are blended between the overlap edge and the
    tangent direction with a fixed tension
  - handle lengths shrink with the anchor spread and with heavy overlap

``compute`` is a pure function; call it once per animation frame.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .geometry import Circle, Point, acos_ratio

logger = logging.getLogger(__name__)

HALF_PI = math.pi / 2


# ---------------------------------------------------------------------------
# Path segments
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MoveTo:
    point: Point


@dataclass(frozen=True)
class CubicTo:
    control1: Point
    control2: Point
    end: Point


@dataclass(frozen=True)
class LineTo:
    point: Point


@dataclass(frozen=True)
class Close:
    pass


Segment = Union[MoveTo, CubicTo, LineTo, Close]


@dataclass(frozen=True)
class ClosedPath:
    """Ordered outline: one ``MoveTo`` first, ``Close`` last."""
    segments: Tuple[Segment, ...]

    def __post_init__(self):
        segs = self.segments
        if not segs or not isinstance(segs[0], MoveTo):
            raise ValueError("ClosedPath must start with a MoveTo segment")
        if not isinstance(segs[-1], Close):
            raise ValueError("ClosedPath must end with a Close segment")
        if any(isinstance(s, MoveTo) for s in segs[1:]):
            raise ValueError("ClosedPath accepts a single MoveTo segment")

    def __iter__(self):
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def kinds(self) -> Tuple[str, ...]:
        return tuple(type(s).__name__ for s in self.segments)

    def anchors(self) -> Tuple[Point, ...]:
        """On-curve points in drawing order (control points excluded)."""
        pts = []
        for s in self.segments:
            if isinstance(s, (MoveTo, LineTo)):
                pts.append(s.point)
            elif isinstance(s, CubicTo):
                pts.append(s.end)
        return tuple(pts)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TwoCircles:
    """Circles drawn on their own, no connecting outline."""
    origin: Circle
    destination: Circle


@dataclass(frozen=True)
class FusedBlob:
    """Both circles plus the outline that joins them."""
    origin: Circle
    destination: Circle
    path: ClosedPath


BlendResult = Union[TwoCircles, FusedBlob]


# ---------------------------------------------------------------------------
# Parameters and input
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BlobParams:
    """Shape constants.

    Attributes:
        tension:         Blend between overlap edge and tangent angle (0.5 = midway).
        handle_len_rate: Upper bound of the Bézier handle length, in radii per unit tension.
    """
    tension: float = 0.5
    handle_len_rate: float = 2.4

    def validate(self) -> None:
        if not self.tension > 0:
            raise ValueError("tension must be positive")
        if not self.handle_len_rate > 0:
            raise ValueError("handle_len_rate must be positive")


DEFAULT_PARAMS = BlobParams()


def clamp_unit(t: float) -> float:
    if math.isnan(t):
        return 0.0
    return max(0.0, min(1.0, t))


@dataclass(frozen=True)
class BlendInput:
    """One frame's worth of input; ``t`` is clamped to [0, 1]."""
    origin: Circle
    destination: Circle
    t: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "t", clamp_unit(self.t))


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------

def arc_half_angles(r1: float, r2: float, d: float) -> Tuple[float, float]:
    """Half-widths of the overlap region seen from each center.

    Returns ``(0.0, 0.0)`` when the circles do not overlap.
    """
    if d >= r1 + r2:
        return 0.0, 0.0
    arc1 = acos_ratio(r1 * r1 + d * d - r2 * r2, 2 * r1 * d)
    arc2 = acos_ratio(r2 * r2 + d * d - r1 * r1, 2 * r2 * d)
    return arc1, arc2


def tangent_angle(r1: float, r2: float, d: float) -> float:
    """Angle subtended by the radius difference; pi/2 for coincident centers."""
    if d == 0:
        return HALF_PI
    return acos_ratio(r1 - r2, d)


def compute(
    origin: Circle,
    destination: Circle,
    t: float = 0.0,
    params: Optional[BlobParams] = None,
) -> BlendResult:
    """Build the blob joining *origin* and *destination* for this frame.

    ``t`` is the transition progress; it is clamped to [0, 1] and only
    informs logging, since the caller has already folded it into the
    circles' radii and centers.
    """
    p = params or DEFAULT_PARAMS
    t = clamp_unit(t)

    r1 = origin.radius
    r2 = destination.radius
    if r1 == 0 or r2 == 0:
        return TwoCircles(origin, destination)

    c1 = origin.center
    c2 = destination.center
    d = c1.distance_to(c2)
    radius_sum = r1 + r2
    v = p.tension

    arc1, arc2 = arc_half_angles(r1, r2, d)
    angle1 = c1.angle_to(c2)
    angle2 = tangent_angle(r1, r2, d)

    # ── anchor angles ──
    spread1 = (angle2 - arc1) * v
    spread2 = (math.pi - arc2 - angle2) * v
    angle1a = angle1 + arc1 + spread1
    angle1b = angle1 - arc1 - spread1
    angle2a = angle1 + math.pi - arc2 - spread2
    angle2b = angle1 - math.pi + arc2 + spread2

    p1a = origin.point_at(angle1a)
    p1b = origin.point_at(angle1b)
    p2a = destination.point_at(angle2a)
    p2b = destination.point_at(angle2b)

    # ── handle lengths ──
    min_dist = min(v * p.handle_len_rate, (p1a - p2a).length() / radius_sum)
    # Overlapping circles get shorter handles
    min_dist *= min(1.0, (2 * d) / radius_sum)
    handle1 = r1 * min_dist
    handle2 = r2 * min_dist

    h1 = Point.from_polar(angle1a - HALF_PI, handle1)
    h2 = Point.from_polar(angle2a + HALF_PI, handle2)
    h3 = Point.from_polar(angle2b - HALF_PI, handle2)
    h4 = Point.from_polar(angle1b + HALF_PI, handle1)

    path = ClosedPath((
        MoveTo(p1a),
        CubicTo(p1a + h1, p2a + h2, p2a),
        LineTo(p2b),
        CubicTo(p2b + h3, p1b + h4, p1b),
        LineTo(p1a),
        Close(),
    ))

    logger.debug(
        "blob t=%.3f d=%.2f r1=%.2f r2=%.2f arcs=(%.3f, %.3f) handles=%.3f",
        t, d, r1, r2, arc1, arc2, min_dist,
    )
    return FusedBlob(origin, destination, path)


def compute_input(blend_input: BlendInput, params: Optional[BlobParams] = None) -> BlendResult:
    return compute(blend_input.origin, blend_input.destination, blend_input.t, params)
