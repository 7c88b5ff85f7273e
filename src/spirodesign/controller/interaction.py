"""
Pointer Interaction
===================
Turns screen-space pointer gestures into world-space edits on the Simulation
and pan/zoom changes on the ViewTransform.

The controller is toolkit-free: the canvas translates Qt mouse events into
`press` / `drag` / `release` / `wheel` calls, which keeps the routing testable
without a QApplication.

Hit priority on a left press:
    1. Pen tip        -> DEFINE_PEN   (commit on release)
    2. Pinion body    -> MOVE_PINION  (roll along the spur)
    3. Spur center    -> MOVE_SPIRO   (move the whole assembly)
    4. Spur rim       -> RESIZE_SPUR
    5. Anything else  -> PAN
Middle and right buttons always pan.
"""
from __future__ import annotations

from enum import StrEnum
import logging
from typing import Optional

from spirodesign import config
from spirodesign.model.errors import SpiroError
from spirodesign.model.geometry_primitives import Point
from spirodesign.model.simulation import Simulation
from spirodesign.model.view_transform import ViewTransform

logger = logging.getLogger(__name__)


class DragMode(StrEnum):
    NONE = "none"
    DEFINE_PEN = "define_pen"
    MOVE_PINION = "move_pinion"
    MOVE_SPIRO = "move_spiro"
    RESIZE_SPUR = "resize_spur"
    PAN = "pan"


class MouseButton(StrEnum):
    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"


class InteractionController:
    def __init__(
        self,
        simulation: Simulation,
        view: ViewTransform,
        hit_tolerance_px: float = config.HIT_TOLERANCE_PX,
        wheel_step: float = config.WHEEL_ZOOM_STEP,
    ) -> None:
        self.simulation = simulation
        self.view = view
        self.hit_tolerance_px = float(hit_tolerance_px)
        self.wheel_step = float(wheel_step)

        self._mode: DragMode = DragMode.NONE
        self._last_screen: Optional[Point] = None
        self._preview_pen: Optional[Point] = None

    @property
    def mode(self) -> DragMode:
        return self._mode

    @property
    def preview_pen(self) -> Optional[Point]:
        """World position of the pen being defined, or None outside DEFINE_PEN."""
        return self._preview_pen

    # ------------------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------------------

    def press(self, screen_point: Point, button: MouseButton = MouseButton.LEFT) -> DragMode:
        self._last_screen = screen_point
        if button != MouseButton.LEFT:
            self._mode = DragMode.PAN
        else:
            self._mode = self.hit_test(screen_point)

        if self._mode == DragMode.DEFINE_PEN:
            self._preview_pen = self.view.screen_to_world(screen_point)
        logger.debug(f"Press at ({screen_point.x:.0f}, {screen_point.y:.0f}) -> {self._mode.value}")
        return self._mode

    def drag(self, screen_point: Point) -> None:
        if self._mode == DragMode.NONE or self._last_screen is None:
            return

        dx = screen_point.x - self._last_screen.x
        dy = screen_point.y - self._last_screen.y
        self._last_screen = screen_point
        world = self.view.screen_to_world(screen_point)

        match self._mode:
            case DragMode.PAN:
                self.view.pan(dx, dy)
            case DragMode.DEFINE_PEN:
                self._preview_pen = world
            case DragMode.MOVE_PINION:
                self._apply(self.simulation.move_pinion_to, world)
            case DragMode.MOVE_SPIRO:
                scale = self.view.scale
                self._apply(self.simulation.move_spur_by, dx / scale, dy / scale)
            case DragMode.RESIZE_SPUR:
                self._apply(self.simulation.resize_spur_to, world)

    def release(self, screen_point: Point) -> None:
        if self._mode == DragMode.DEFINE_PEN:
            self._apply(self.simulation.move_pen_to, self.view.screen_to_world(screen_point))
        elif self._mode != DragMode.NONE:
            self.drag(screen_point)

        self._mode = DragMode.NONE
        self._last_screen = None
        self._preview_pen = None

    def wheel(self, screen_point: Point, notches: float) -> None:
        """Zoom by `wheel_step` per notch around the cursor; positive notches zoom in."""
        if notches == 0:
            return
        self.view.zoom_at(screen_point, self.wheel_step ** notches)
        logger.debug(f"Zoom {self.view.scale_percent}")

    # ------------------------------------------------------------------------------
    # Hit testing
    # ------------------------------------------------------------------------------

    def hit_test(self, screen_point: Point) -> DragMode:
        """Drag mode a left press at `screen_point` would start."""
        world = self.view.screen_to_world(screen_point)
        tol = self.view.screen_length_to_world(self.hit_tolerance_px)
        sim = self.simulation

        if world.distance_to(sim.pen.position) <= tol:
            return DragMode.DEFINE_PEN
        if sim.pinion.contains(world):
            return DragMode.MOVE_PINION

        to_spur = world.distance_to(sim.spur.center)
        if to_spur <= tol:
            return DragMode.MOVE_SPIRO
        if abs(to_spur - sim.spur.radius) <= tol:
            return DragMode.RESIZE_SPUR
        return DragMode.PAN

    def _apply(self, edit, *args) -> None:
        try:
            edit(*args)
        except SpiroError as e:
            logger.warning(f"Rejected {self._mode.value} edit: {e}")
