"""
Qt renderer — paints draw commands with QPainter.

``paint_commands`` works on any paint device (a widget in ``paintEvent``
or an offscreen QImage); ``render_image`` wraps the offscreen case.
"""

from __future__ import annotations

import logging
from typing import Sequence, Tuple

import numpy as np
from PyQt5.QtCore import QPointF, Qt
from PyQt5.QtGui import QColor, QImage, QPainter, QPainterPath

from .blob import ClosedPath, Close, CubicTo, LineTo, MoveTo
from .render import DrawCommand, FillCircle, FillPath

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]
RGBA = Tuple[int, int, int, int]


def to_qpainter_path(path: ClosedPath) -> QPainterPath:
    qpath = QPainterPath()
    for seg in path:
        if isinstance(seg, MoveTo):
            qpath.moveTo(seg.point.x, seg.point.y)
        elif isinstance(seg, CubicTo):
            qpath.cubicTo(
                seg.control1.x, seg.control1.y,
                seg.control2.x, seg.control2.y,
                seg.end.x, seg.end.y,
            )
        elif isinstance(seg, LineTo):
            qpath.lineTo(seg.point.x, seg.point.y)
        elif isinstance(seg, Close):
            qpath.closeSubpath()
    return qpath


def paint_commands(painter: QPainter, commands: Sequence[DrawCommand], color: QColor) -> None:
    """Fill every command with *color*; the painter state is restored afterwards."""
    painter.save()
    painter.setRenderHint(QPainter.Antialiasing)
    painter.setPen(Qt.NoPen)
    painter.setBrush(color)
    for cmd in commands:
        if isinstance(cmd, FillCircle):
            c = cmd.circle
            if c.radius > 0:
                painter.drawEllipse(QPointF(c.center.x, c.center.y), c.radius, c.radius)
        elif isinstance(cmd, FillPath):
            painter.drawPath(to_qpainter_path(cmd.path))
    painter.restore()


def render_image(
    commands: Sequence[DrawCommand],
    width: int,
    height: int,
    color: RGB = (255, 255, 255),
    background: RGBA = (0, 0, 0, 0),
) -> QImage:
    """Paint *commands* onto a fresh ARGB image."""
    if width <= 0 or height <= 0:
        raise ValueError("Canvas dimensions must be positive integers")
    img = QImage(width, height, QImage.Format_ARGB32)
    img.fill(QColor(*background))
    painter = QPainter(img)
    paint_commands(painter, commands, QColor(*color))
    painter.end()
    return img


def array_to_qimage(img: np.ndarray) -> QImage:
    """(H, W, 4) uint8 RGBA array → detached QImage."""
    if img.ndim != 3 or img.shape[2] != 4 or img.dtype != np.uint8:
        raise ValueError(f"Expected (H, W, 4) uint8 array, got {img.shape} {img.dtype}")
    img = np.ascontiguousarray(img)
    h, w, ch = img.shape
    bytes_per_line = ch * w
    return QImage(img.data, w, h, bytes_per_line, QImage.Format_RGBA8888).copy()
