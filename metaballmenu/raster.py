"""
Numpy rasteriser — vectorised fill of circles and blob outlines.

Returns (H, W, 4) RGBA uint8 arrays suitable for a QImage, or a plain
boolean coverage mask.  Pixels are sampled at their centers; paths are
flattened to polygons and filled with the even-odd rule.
"""

from __future__ import annotations

import logging
from typing import Sequence, Tuple

import numpy as np

from .blob import ClosedPath, CubicTo, LineTo, MoveTo
from .render import DrawCommand, FillCircle, FillPath

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]
RGBA = Tuple[int, int, int, int]


def flatten_path(path: ClosedPath, samples: int = 16) -> np.ndarray:
    """Polygon approximating *path* → (N, 2) float array.

    Each cubic is sampled at *samples* steps (end point included, start
    point omitted since it is the previous segment's end).
    """
    if samples < 1:
        raise ValueError("samples must be at least 1")

    s = np.linspace(0.0, 1.0, samples + 1)[1:, np.newaxis]  # (samples, 1)
    u = 1.0 - s
    # Bernstein weights, one column per control point
    w = np.hstack([u ** 3, 3.0 * u * u * s, 3.0 * u * s * s, s ** 3])

    pts = []
    cursor = None
    for seg in path:
        if isinstance(seg, MoveTo):
            cursor = (seg.point.x, seg.point.y)
            pts.append(np.array([cursor]))
        elif isinstance(seg, LineTo):
            cursor = (seg.point.x, seg.point.y)
            pts.append(np.array([cursor]))
        elif isinstance(seg, CubicTo):
            cp = np.array([
                cursor,
                (seg.control1.x, seg.control1.y),
                (seg.control2.x, seg.control2.y),
                (seg.end.x, seg.end.y),
            ])
            pts.append(w @ cp)
            cursor = (seg.end.x, seg.end.y)
    return np.vstack(pts)


def _polygon_mask(poly: np.ndarray, px: np.ndarray, py: np.ndarray) -> np.ndarray:
    """Even-odd inside test for every pixel against *poly*."""
    inside = np.zeros(px.shape, dtype=bool)
    x0 = poly[:, 0]
    y0 = poly[:, 1]
    x1 = np.roll(x0, -1)
    y1 = np.roll(y0, -1)
    for ax, ay, bx, by in zip(x0, y0, x1, y1):
        if ay == by:
            continue
        crosses = (ay > py) != (by > py)
        x_at = ax + (py - ay) * (bx - ax) / (by - ay)
        inside ^= crosses & (px < x_at)
    return inside


def fill_mask(
    commands: Sequence[DrawCommand],
    width: int,
    height: int,
    samples: int = 16,
) -> np.ndarray:
    """Union of everything *commands* fills → (height, width) bool array."""
    if width <= 0 or height <= 0:
        raise ValueError("Canvas dimensions must be positive integers")

    py, px = np.meshgrid(np.arange(height) + 0.5, np.arange(width) + 0.5, indexing="ij")
    mask = np.zeros((height, width), dtype=bool)

    for cmd in commands:
        if isinstance(cmd, FillCircle):
            c = cmd.circle
            if c.radius <= 0:
                continue
            dx = px - c.center.x
            dy = py - c.center.y
            mask |= dx * dx + dy * dy <= c.radius * c.radius
        elif isinstance(cmd, FillPath):
            poly = flatten_path(cmd.path, samples)
            if not np.isfinite(poly).all():
                logger.warning("Skipping path with non-finite points")
                continue
            mask |= _polygon_mask(poly, px, py)
    return mask


def rasterize(
    commands: Sequence[DrawCommand],
    width: int,
    height: int,
    color: RGB = (255, 255, 255),
    background: RGBA = (0, 0, 0, 0),
    samples: int = 16,
) -> np.ndarray:
    """Render *commands* → (height, width, 4) uint8 RGBA array."""
    mask = fill_mask(commands, width, height, samples)
    img = np.empty((height, width, 4), dtype=np.uint8)
    img[...] = np.array(background, dtype=np.uint8)
    img[mask, :3] = np.array(color, dtype=np.uint8)
    img[mask, 3] = 255
    return img
