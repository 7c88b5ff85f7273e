import math

import numpy as np
import pytest

from spirodesign.model.geometry_primitives import Point, Vector


def test_point_minus_point_is_vector():
    v = Point(5.0, 7.0) - Point(2.0, 3.0)
    assert isinstance(v, Vector)
    assert (v.x, v.y) == (3.0, 4.0)
    assert v.magnitude == pytest.approx(5.0)


def test_point_translation_and_inverse():
    p = Point(1.0, 1.0) + Vector(2.0, -1.0)
    assert p == Point(3.0, 0.0)
    assert p - Vector(2.0, -1.0) == Point(1.0, 1.0)


def test_point_rejects_adding_a_point():
    with pytest.raises(TypeError):
        Point(0.0, 0.0) + Point(1.0, 1.0)


def test_vector_arithmetic():
    v = Vector(1.0, 2.0)
    assert 2 * v == Vector(2.0, 4.0)
    assert v * 2 == Vector(2.0, 4.0)
    assert -v == Vector(-1.0, -2.0)
    assert v / 2 == Vector(0.5, 1.0)
    with pytest.raises(ZeroDivisionError):
        v / 0.0


def test_from_polar_and_rotate():
    v = Vector.from_polar(2.0, math.pi / 2)
    assert v.x == pytest.approx(0.0, abs=1e-12)
    assert v.y == pytest.approx(2.0)
    assert v.angle == pytest.approx(math.pi / 2)

    r = Vector(1.0, 0.0).rotate(math.pi)
    assert r.x == pytest.approx(-1.0)
    assert r.y == pytest.approx(0.0, abs=1e-12)


def test_distance_and_is_close():
    a = Point(0.0, 0.0)
    assert a.distance_to(Point(3.0, 4.0)) == pytest.approx(5.0)
    assert a.is_close(Point(1e-12, 0.0))
    assert not a.is_close(Point(1e-3, 0.0))


def test_array_conversion():
    p = Point.from_array(np.array([[1.5, -2.5]]))
    assert p == Point(1.5, -2.5)
    np.testing.assert_allclose(p.to_array(), [1.5, -2.5])


def test_copy_is_independent():
    p = Point(1.0, 2.0)
    q = p.copy()
    q.x = 9.0
    assert p.x == 1.0


@pytest.mark.parametrize("other", [Point(1.0, 1.0), 3.0, (1.0, 1.0)])
def test_vector_add_and_sub_reject_other_types(other):
    v = Vector(1.0, 2.0)
    with pytest.raises(TypeError):
        v + other
    with pytest.raises(TypeError):
        v - other


def test_vector_scaling_needs_a_number():
    v = Vector(1.0, 2.0)
    with pytest.raises(TypeError):
        v * Vector(1.0, 1.0)
    with pytest.raises(TypeError):
        v / "2"
    assert v * np.float64(2.0) == Vector(2.0, 4.0)
