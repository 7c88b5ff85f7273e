import pytest

from spirodesign.controller.interaction import DragMode, MouseButton
from spirodesign.model.geometry_primitives import Point, Vector

# With the default view, screen and world coordinates coincide.
PEN = Point(500.0, 400.0)
PINION_CENTER = Point(470.0, 400.0)
SPUR_CENTER = Point(400.0, 400.0)
SPUR_RIM = Point(300.0, 400.0)
EMPTY = Point(100.0, 100.0)


@pytest.mark.parametrize(
    "point, mode",
    [
        (PEN, DragMode.DEFINE_PEN),
        (Point(505.0, 400.0), DragMode.DEFINE_PEN),
        (PINION_CENTER, DragMode.MOVE_PINION),
        (SPUR_CENTER, DragMode.MOVE_SPIRO),
        (SPUR_RIM, DragMode.RESIZE_SPUR),
        (Point(400.0, 295.0), DragMode.RESIZE_SPUR),
        (EMPTY, DragMode.PAN),
    ],
)
def test_hit_priority(controller, point, mode):
    assert controller.press(point) == mode
    assert controller.mode == mode


def test_pen_wins_over_pinion_and_rim(controller):
    # The default pen sits on the pinion rim, which touches the spur rim
    assert controller.simulation.pinion.contains(PEN)
    assert controller.hit_test(PEN) == DragMode.DEFINE_PEN


def test_other_buttons_always_pan(controller):
    assert controller.press(PEN, MouseButton.RIGHT) == DragMode.PAN
    controller.release(PEN)
    assert controller.press(SPUR_CENTER, MouseButton.MIDDLE) == DragMode.PAN


def test_define_pen_commits_on_release(controller):
    controller.press(PEN)
    assert controller.preview_pen == PEN

    controller.drag(Point(490.0, 400.0))
    assert controller.preview_pen == Point(490.0, 400.0)
    # Nothing is committed while dragging
    assert controller.simulation.pen.position == PEN

    controller.release(Point(480.0, 400.0))
    assert controller.simulation.pen.position.is_close(Point(480.0, 400.0), tol=1e-9)
    assert controller.mode == DragMode.NONE
    assert controller.preview_pen is None


def test_define_pen_outside_pinion_is_ignored(controller):
    controller.press(PEN)
    controller.release(Point(600.0, 400.0))
    assert controller.simulation.pen.position == PEN
    assert controller.mode == DragMode.NONE


def test_move_pinion(controller):
    controller.press(PINION_CENTER)
    controller.drag(Point(400.0, 300.0))
    assert controller.simulation.pinion.center.is_close(Point(400.0, 330.0), tol=1e-9)
    controller.release(Point(400.0, 300.0))
    assert controller.simulation.pinion.center.is_close(Point(400.0, 330.0), tol=1e-9)


def test_move_spiro(controller):
    controller.press(SPUR_CENTER)
    controller.drag(Point(410.0, 395.0))
    controller.release(Point(410.0, 395.0))
    assert controller.simulation.spur.center == Point(410.0, 395.0)
    assert controller.simulation.pinion.center.is_close(Point(480.0, 395.0))


def test_move_spiro_respects_zoom(controller):
    controller.view.set_scale(2.0)
    controller.press(Point(800.0, 800.0))  # spur center on screen
    assert controller.mode == DragMode.MOVE_SPIRO
    controller.drag(Point(820.0, 800.0))
    assert controller.simulation.spur.center == Point(410.0, 400.0)


def test_resize_spur(controller):
    controller.press(SPUR_RIM)
    controller.drag(Point(280.0, 400.0))
    assert controller.simulation.spur.radius == pytest.approx(120.0)


def test_rejected_resize_keeps_state_and_gesture(controller):
    controller.press(SPUR_RIM)
    controller.drag(Point(410.0, 400.0))  # radius 10 < pinion radius
    assert controller.simulation.spur.radius == 100.0
    assert controller.mode == DragMode.RESIZE_SPUR

    controller.drag(Point(250.0, 400.0))
    assert controller.simulation.spur.radius == pytest.approx(150.0)


def test_pan(controller):
    controller.press(EMPTY)
    controller.drag(Point(110.0, 120.0))
    controller.drag(Point(115.0, 120.0))
    controller.release(Point(115.0, 120.0))
    assert controller.view.offset == Vector(15.0, 20.0)
    assert controller.mode == DragMode.NONE


def test_drag_without_press_does_nothing(controller):
    controller.drag(Point(10.0, 10.0))
    assert controller.view.offset == Vector(0.0, 0.0)
    assert controller.simulation.spur.center == SPUR_CENTER


def test_wheel_zooms_around_cursor(controller):
    cursor = Point(250.0, 150.0)
    before = controller.view.screen_to_world(cursor)
    controller.wheel(cursor, 1)
    assert controller.view.scale == pytest.approx(1.1)
    assert controller.view.screen_to_world(cursor).is_close(before, tol=1e-9)

    controller.wheel(cursor, -2)
    assert controller.view.scale == pytest.approx(1.1 / 1.21)


def test_zero_wheel_is_ignored(controller):
    controller.wheel(Point(0.0, 0.0), 0)
    assert controller.view.scale == 1.0


def test_hit_tolerance_is_in_screen_pixels(controller):
    controller.view.set_scale(4.0)
    # 6 px on screen is 1.5 world units
    pen_screen = controller.view.world_to_screen(PEN)
    assert controller.hit_test(Point(pen_screen.x + 6.0, pen_screen.y)) == DragMode.DEFINE_PEN
    assert controller.hit_test(Point(pen_screen.x + 12.0, pen_screen.y)) != DragMode.DEFINE_PEN
