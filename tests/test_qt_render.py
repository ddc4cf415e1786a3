import numpy as np
import pytest
from PyQt5.QtCore import QPointF
from PyQt5.QtGui import QColor

from metaballmenu.blob import compute
from metaballmenu.geometry import Circle, Point
from metaballmenu.qt_render import array_to_qimage, render_image, to_qpainter_path
from metaballmenu.raster import rasterize
from metaballmenu.render import draw_commands


def _bridge():
    return compute(Circle(Point(20.0, 20.0), 10.0), Circle(Point(45.0, 20.0), 10.0), 0.5)


def test_qpainter_path_matches_outline(qapp) -> None:
    result = _bridge()
    qpath = to_qpainter_path(result.path)
    p1a = result.path.anchors()[0]
    start = qpath.elementAt(0)
    assert (start.x, start.y) == pytest.approx((p1a.x, p1a.y))
    assert qpath.contains(QPointF(32.5, 20.0))
    assert not qpath.contains(QPointF(32.5, 10.0))


def test_render_image_paints_blob(qapp) -> None:
    img = render_image(draw_commands(_bridge()), 64, 40, color=(255, 0, 0))
    assert img.width() == 64
    assert img.height() == 40
    assert img.pixelColor(20, 20) == QColor(255, 0, 0, 255)
    assert img.pixelColor(32, 20).alpha() == 255
    assert img.pixelColor(0, 0).alpha() == 0


def test_render_image_rejects_empty_canvas(qapp) -> None:
    with pytest.raises(ValueError):
        render_image([], 10, 0)


def test_array_to_qimage(qapp) -> None:
    arr = rasterize(draw_commands(_bridge()), 64, 40, color=(0, 255, 0))
    img = array_to_qimage(arr)
    assert (img.width(), img.height()) == (64, 40)
    assert img.pixelColor(20, 20) == QColor(0, 255, 0, 255)
    with pytest.raises(ValueError):
        array_to_qimage(np.zeros((4, 4, 3), dtype=np.uint8))
