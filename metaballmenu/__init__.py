"""
Metaball Menu
=============

The liquid selector of a menu bar: when a new item is picked, the
selector circle stretches out of the old item and flows into the new one
as a single blob.

  - ``blob``:       pure geometry, two circles → closed Bézier outline
  - ``transition``: host-side frame driver and selection state
  - ``render``:     draw primitives handed to a renderer
  - ``raster``:     numpy rasteriser for those primitives
  - ``qt_render``:  QPainter renderer and QImage helpers
"""

from .blob import (
    BlendInput,
    BlobParams,
    ClosedPath,
    FusedBlob,
    TwoCircles,
    compute,
)
from .geometry import Circle, Point

__version__ = "1.0.0"
__author__ = "Metaball Menu"

__all__ = [
    "BlendInput",
    "BlobParams",
    "Circle",
    "ClosedPath",
    "FusedBlob",
    "Point",
    "TwoCircles",
    "compute",
]
