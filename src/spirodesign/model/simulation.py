"""
Simulation Facade
=================
Orchestrates the kinematics engine and the locus store per tick and per user
edit. Views read from it; the tick source and the interaction controller
write to it.

Threading:
    All calls must come from one thread (the Qt event loop). Hosts that tick
    from another thread must guard every call with their own lock.
"""
from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional

from spirodesign import config
from spirodesign.model.errors import ContractViolationError
from spirodesign.model.gears import Gear, Pen, validate_pair, validate_radius
from spirodesign.model.geometry_primitives import Point, Vector
from spirodesign.model.locus import PathSegment
from spirodesign.model.state import SimulationSnapshot, SimulationState

logger = logging.getLogger(__name__)

Listener = Callable[["Simulation"], None]


class Simulation:
    def __init__(self, settings: Optional[config.SimulationSettings] = None) -> None:
        self.settings = settings or config.SimulationSettings()
        if self.settings.max_substep_ms <= 0:
            raise ContractViolationError("max_substep_ms must be positive.")
        self.state: SimulationState = SimulationState.default(self.settings)
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------------------

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ------------------------------------------------------------------------------
    # Time
    # ------------------------------------------------------------------------------

    def advance(self, elapsed_ms: int) -> None:
        """
        Move the simulation forward by `elapsed_ms` of running time.

        The interval is split into sub-steps of at most `max_substep_ms` and the
        pen position after every sub-step is appended to the locus.

        Raises:
            ContractViolationError: If `elapsed_ms` is not a non-negative whole number.
        """
        try:
            whole = float(elapsed_ms).is_integer()
        except (TypeError, ValueError):
            whole = False
        if not whole or elapsed_ms < 0:
            raise ContractViolationError(
                f"Elapsed time must be a non-negative whole number of milliseconds, got {elapsed_ms!r}."
            )
        elapsed_ms = int(elapsed_ms)
        if elapsed_ms == 0 or not self.state.running:
            return

        kinematics = self.state.kinematics
        n_steps = max(1, math.ceil(elapsed_ms / self.settings.max_substep_ms))
        step = elapsed_ms / n_steps
        start_theta = kinematics.theta
        for i in range(1, n_steps + 1):
            # Recompute from the start angle so sub-stepping never accumulates drift.
            kinematics.set_theta(start_theta + kinematics.speed * step * i)
            self.state.locus.append_point(self.state.pen.position)

        self.state.elapsed_ms += elapsed_ms
        self._notify()

    def start(self) -> None:
        if self.state.running:
            return
        locus = self.state.locus
        if locus.segments()[-1].points:
            locus.start_new_segment()
        locus.append_point(self.state.pen.position)
        self.state.running = True
        logger.info(f"Simulation started at {self.state.elapsed_ms} ms.")
        self._notify()

    def stop(self) -> None:
        if not self.state.running:
            return
        self.state.running = False
        logger.info(f"Simulation stopped at {self.state.elapsed_ms} ms.")
        self._notify()

    @property
    def is_running(self) -> bool:
        return self.state.running

    @property
    def elapsed_ms(self) -> int:
        return self.state.elapsed_ms

    # ------------------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------------------

    def reset_gears(self) -> None:
        """Restore default gears and pen, clear the locus and the elapsed time."""
        self.state = SimulationState.default(self.settings)
        logger.info("Gears reset to defaults.")
        self._notify()

    def clear_locus(self) -> None:
        self.state.locus.clear()
        self._notify()

    # ------------------------------------------------------------------------------
    # Pen edits
    # ------------------------------------------------------------------------------

    def set_pen_position(self, position: Point) -> None:
        """Mount the pen tip at `position` and record it in the current segment."""
        self.state.kinematics.place_pen(position)
        self.state.locus.append_point(self.state.pen.position)
        logger.debug(f"Pen set to ({position.x:.2f}, {position.y:.2f}).")
        self._notify()

    def move_pen_to(self, position: Point) -> None:
        """Mount the pen tip at `position` as a jump: the trace restarts there."""
        self.state.kinematics.place_pen(position)
        self._restart_trace()
        self._notify()

    def move_pen_by(self, dx: float, dy: float) -> None:
        """Shift the pen tip by (dx, dy) on the pinion; the trace restarts there."""
        self.move_pen_to(self.state.pen.position + Vector(dx, dy))

    def change_pen_color(self, color: str) -> None:
        pen = self.state.pen
        pen.change_color(color)
        self.state.locus.set_style(*pen.style)
        logger.debug(f"Pen colour changed to {pen.color}.")
        self._notify()

    def change_pen_size(self, size: float) -> None:
        pen = self.state.pen
        pen.change_size(size)
        self.state.locus.set_style(*pen.style)
        logger.debug(f"Pen size changed to {pen.size:g}.")
        self._notify()

    def change_pen_size_preset(self, name: str) -> None:
        try:
            size = self.settings.pen_sizes[name]
        except KeyError:
            raise ContractViolationError(f"Unknown pen size preset '{name}'.") from None
        self.change_pen_size(size)

    # ------------------------------------------------------------------------------
    # Gear edits
    # ------------------------------------------------------------------------------

    def change_speed(self, speed: float) -> None:
        self.state.kinematics.change_speed(speed)
        logger.debug(f"Speed changed to {self.state.kinematics.speed:g} rad/ms.")
        self._notify()

    def change_spur_radius(self, radius: float) -> None:
        radius = validate_radius(radius, "Spur radius")
        validate_pair(radius, self.state.pinion.radius)
        self.state.spur.resize(radius)
        self._geometry_changed()

    def resize_spur_to(self, point: Point) -> None:
        """Spur radius from a dragged rim point (distance to the spur center)."""
        self.change_spur_radius(self.state.spur.center.distance_to(point))

    def change_pinion_radius(self, radius: float) -> None:
        radius = validate_radius(radius, "Pinion radius")
        validate_pair(self.state.spur.radius, radius)
        self.state.pinion.resize(radius)
        self._geometry_changed()

    def move_spur_to(self, position: Point) -> None:
        self.state.spur.move_to(position)
        self._geometry_changed()

    def move_spur_by(self, dx: float, dy: float) -> None:
        self.state.spur.move_by(Vector(dx, dy))
        self._geometry_changed()

    def move_pinion_to(self, point: Point) -> None:
        """Roll the pinion along the spur to face `point`."""
        kinematics = self.state.kinematics
        kinematics.set_theta(kinematics.orbit_angle_of(point))
        self._restart_trace()
        self._notify()

    def _geometry_changed(self) -> None:
        self.state.kinematics.update_positions()
        self._restart_trace()
        logger.debug(
            f"Geometry: spur r={self.state.spur.radius:g} at ({self.state.spur.center.x:.1f}, "
            f"{self.state.spur.center.y:.1f}), pinion r={self.state.pinion.radius:g}."
        )
        self._notify()

    def _restart_trace(self) -> None:
        """Start a fresh segment at the current pen tip if the trace has points."""
        locus = self.state.locus
        if locus.segments()[-1].points:
            locus.start_new_segment()
            if self.state.running:
                locus.append_point(self.state.pen.position)

    # ------------------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------------------

    @property
    def spur(self) -> Gear:
        return self.state.spur

    @property
    def pinion(self) -> Gear:
        return self.state.pinion

    @property
    def pen(self) -> Pen:
        return self.state.pen

    @property
    def theta(self) -> float:
        return self.state.kinematics.theta

    @property
    def speed(self) -> float:
        return self.state.kinematics.speed

    def segments(self) -> tuple[PathSegment, ...]:
        return self.state.locus.segments()

    def scene_bounds(self) -> tuple[float, float, float, float]:
        """(x_min, x_max, y_min, y_max) of the spur circle."""
        c, r = self.spur.center, self.spur.radius
        return c.x - r, c.x + r, c.y - r, c.y + r

    # ------------------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------------------

    def snapshot(self) -> SimulationSnapshot:
        return self.state.snapshot()

    def restore(self, snapshot: SimulationSnapshot) -> None:
        """
        Replace the whole state with `snapshot`, or leave it untouched on failure.

        The restored simulation is stopped.
        """
        self.state = snapshot.to_state()
        logger.info(
            f"Restored snapshot: {len(self.state.locus)} segments, "
            f"{self.state.locus.point_count} points, {self.state.elapsed_ms} ms."
        )
        self._notify()
