import numpy as np
import pytest

from spirodesign.model.geometry_primitives import Point
from spirodesign.model.locus import Locus, PathSegment


def _points(n, start=0.0):
    return [Point(start + i, 2.0 * i) for i in range(n)]


def test_new_locus_has_one_empty_segment():
    locus = Locus("#000000", 2.0)
    assert len(locus) == 1
    assert locus.is_empty()
    assert locus.current_style == ("#000000", 2.0)


def test_style_change_splits_segments():
    locus = Locus("#000000", 2.0)
    for p in _points(3):
        locus.append_point(p)
    locus.set_style("#ff0000", 2.0)
    for p in _points(2, start=10.0):
        locus.append_point(p)

    segments = locus.segments()
    assert [len(s) for s in segments] == [3, 2]
    assert segments[0].style == ("#000000", 2.0)
    assert segments[1].style == ("#ff0000", 2.0)
    assert locus.point_count == 5


def test_set_style_restyles_empty_last_segment():
    locus = Locus("#000000", 2.0)
    locus.set_style("#00ff00", 4.0)
    assert len(locus) == 1
    assert locus.current_style == ("#00ff00", 4.0)


def test_set_style_with_same_style_keeps_segment():
    locus = Locus("#000000", 2.0)
    locus.append_point(Point(0.0, 0.0))
    locus.set_style("#000000", 2)
    assert len(locus) == 1


def test_start_new_segment_always_appends():
    locus = Locus("#123456", 1.0)
    locus.start_new_segment()
    locus.start_new_segment()
    assert len(locus) == 3
    assert all(s.style == ("#123456", 1.0) for s in locus.segments())


def test_clear_keeps_current_style():
    locus = Locus("#000000", 2.0)
    locus.append_point(Point(1.0, 1.0))
    locus.set_style("#ff0000", 4.0)
    locus.append_point(Point(2.0, 2.0))
    locus.clear()
    assert len(locus) == 1
    assert locus.is_empty()
    assert locus.current_style == ("#ff0000", 4.0)


def test_segments_view_cannot_grow_the_store():
    locus = Locus("#000000", 2.0)
    segments = locus.segments()
    assert isinstance(segments, tuple)
    with pytest.raises(AttributeError):
        segments.append(PathSegment("#ffffff", 1.0))


def test_appended_points_are_copies():
    locus = Locus("#000000", 2.0)
    p = Point(1.0, 1.0)
    locus.append_point(p)
    p.x = 99.0
    assert locus.segments()[0].points[0] == Point(1.0, 1.0)


def test_from_segments():
    segments = [
        PathSegment("#000000", 2.0, _points(2)),
        PathSegment("#ff0000", 1.0, _points(1)),
    ]
    locus = Locus.from_segments(segments)
    assert [len(s) for s in locus.segments()] == [2, 1]
    assert locus.current_style == ("#ff0000", 1.0)

    locus.append_point(Point(5.0, 5.0))
    assert len(segments[1]) == 1

    with pytest.raises(ValueError):
        Locus.from_segments([])


def test_segment_array_conversion():
    segment = PathSegment("#000000", 2.0, _points(4))
    arr = segment.as_array()
    assert arr.shape == (4, 2)
    np.testing.assert_allclose(arr[:, 1], [0.0, 2.0, 4.0, 6.0])

    assert PathSegment("#000000", 2.0).as_array().shape == (0, 2)
    rebuilt = PathSegment.from_array("#000000", 2.0, arr)
    assert rebuilt == segment
