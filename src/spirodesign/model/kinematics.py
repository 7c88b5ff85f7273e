"""
Kinematics Engine
=================
Rolling-without-slipping motion of the pinion inside the spur.

The pinion center orbits the spur center on a circle of radius (R - r) at
orbital angle -theta. No slip at the contact point fixes the pinion's spin
rate at -(R - r) / r times the orbital rate, so the pen tip ends up at

    pen = pinion_center + reach * r * (cos(phi), sin(phi))
    phi = alpha + theta * (R / r - 1)

which is the classic hypotrochoid with pen distance d = reach * r.
"""
from __future__ import annotations

from fractions import Fraction
import logging
import math
from typing import Optional

from spirodesign.model.errors import ContractViolationError, GearConfigurationError
from spirodesign.model.gears import Gear, Pen, validate_pair
from spirodesign.model.geometry_primitives import Point, Vector

logger = logging.getLogger(__name__)


class Kinematics:
    """
    Advances the pinion along the spur and keeps the pen on the pinion.

    Only the pinion and pen are ever mutated here; the spur is read-only.
    Time is pulled in through `advance`, never read from a wall clock.
    """

    def __init__(self, spur: Gear, pinion: Gear, pen: Pen, speed: float, theta: float = 0.0) -> None:
        validate_pair(spur.radius, pinion.radius)
        self.spur = spur
        self.pinion = pinion
        self.pen = pen
        self.speed: float = self._checked_speed(speed)
        self.theta: float = float(theta)
        self.update_positions()

    # ------------------------------------------------------------------------------
    # Motion
    # ------------------------------------------------------------------------------

    def advance(self, elapsed_ms: float) -> None:
        """Roll the pinion forward by `elapsed_ms` milliseconds."""
        if not math.isfinite(elapsed_ms) or elapsed_ms < 0:
            raise ContractViolationError(f"Elapsed time must be finite and non-negative, got {elapsed_ms}.")
        if elapsed_ms == 0:
            return
        self.theta += self.speed * elapsed_ms
        self.update_positions()

    def update_positions(self) -> None:
        """Recompute pinion center and pen tip from theta and the current geometry."""
        R = self.spur.radius
        r = self.pinion.radius
        self.pinion.move_to(self.spur.center + Vector.from_polar(R - r, -self.theta))
        self.pen.set_position(self.pinion.center + Vector.from_polar(self.pen.reach * r, self.pen_angle))

    @property
    def ratio(self) -> float:
        return self.spur.radius / self.pinion.radius

    @property
    def pen_angle(self) -> float:
        """World-frame direction from pinion center to pen tip."""
        return self.pen.alpha + self.theta * (self.ratio - 1.0)

    @property
    def spin_angle(self) -> float:
        """Rotation of the pinion about its own center, positive in the orbital (-theta) sense."""
        return -self.theta * (self.ratio - 1.0)

    # ------------------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------------------

    def validate(self) -> None:
        validate_pair(self.spur.radius, self.pinion.radius)

    def set_theta(self, theta: float) -> None:
        self.theta = float(theta)
        self.update_positions()

    def change_speed(self, speed: float) -> None:
        self.speed = self._checked_speed(speed)

    def orbit_angle_of(self, point: Point) -> float:
        """Theta that places the pinion center in the direction of `point` from the spur center."""
        direction = point - self.spur.center
        if direction.magnitude == 0.0:
            return self.theta
        return -direction.angle

    def place_pen(self, point: Point) -> None:
        """
        Mount the pen so that, at the current theta, its tip is at `point`.

        Raises:
            GearConfigurationError: If `point` lies outside the pinion or on its center.
        """
        offset = point - self.pinion.center
        reach = offset.magnitude / self.pinion.radius
        if reach > 1.0 + 1e-9:
            raise GearConfigurationError("The pen must be placed inside the pinion.")
        if reach == 0.0:
            raise GearConfigurationError("The pen cannot sit on the pinion center.")
        self.pen.reach = min(reach, 1.0)
        self.pen.alpha = offset.angle - self.theta * (self.ratio - 1.0)
        self.update_positions()

    def period_ms(self) -> Optional[float]:
        """
        Time until the pen retraces its curve, or None when the pinion does not move.

        For R/r = p/q in lowest terms the curve closes after q full orbits.
        """
        if self.speed == 0.0:
            return None
        ratio = Fraction(self.spur.radius / self.pinion.radius).limit_denominator(1000)
        return 2.0 * math.pi * ratio.denominator / abs(self.speed)

    @staticmethod
    def _checked_speed(speed: float) -> float:
        speed = float(speed)
        if not math.isfinite(speed):
            raise GearConfigurationError(f"Speed must be a finite number, got {speed}.")
        return speed
