import numpy as np
import pytest

pytest.importorskip("PySide6.QtGui")

from spirodesign.model.view_transform import ViewTransform  # noqa: E402
from spirodesign.view.widgets.grid_manager import GridPainter  # noqa: E402


def test_grid_coordinates_cover_bounds():
    xs, ys = GridPainter.grid_coordinates((-3.0, 12.0, 0.5, 4.5), 5.0)
    np.testing.assert_allclose(xs, [-5.0, 0.0, 5.0, 10.0, 15.0])
    np.testing.assert_allclose(ys, [0.0, 5.0])


@pytest.mark.parametrize("scale, minor", [(1.0, 50.0), (2.0, 20.0), (0.1, 500.0), (10.0, 5.0)])
def test_spacing_follows_zoom(scale, minor):
    painter = GridPainter()
    view = ViewTransform(scale=scale)
    got_minor, got_major = painter.spacing_for(view)
    assert got_minor == pytest.approx(minor)
    assert got_major == pytest.approx(minor * painter.major_every)
