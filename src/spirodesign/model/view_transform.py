"""
View Transform
==============
World <-> screen mapping used by the canvas and the pointer controller.

    screen = world * scale + offset
    world  = (screen - offset) / scale

`offset` is the screen position of the world origin.
"""
from __future__ import annotations

import logging
import math

from spirodesign import config
from spirodesign.model.errors import ContractViolationError
from spirodesign.model.geometry_primitives import Point, Vector

logger = logging.getLogger(__name__)


class ViewTransform:
    def __init__(
        self,
        scale: float = 1.0,
        offset: Vector | None = None,
        min_scale: float = config.MIN_SCALE,
        max_scale: float = config.MAX_SCALE,
    ) -> None:
        if not 0.0 < min_scale <= max_scale:
            raise ContractViolationError(f"Invalid scale bounds [{min_scale}, {max_scale}].")
        self.min_scale = float(min_scale)
        self.max_scale = float(max_scale)
        self._scale = self._clamp(scale)
        self.offset: Vector = offset if offset is not None else Vector(0.0, 0.0)

    # ------------------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------------------

    def screen_to_world(self, screen_point: Point) -> Point:
        return Point(
            (screen_point.x - self.offset.x) / self._scale,
            (screen_point.y - self.offset.y) / self._scale,
        )

    def world_to_screen(self, world_point: Point) -> Point:
        return Point(
            world_point.x * self._scale + self.offset.x,
            world_point.y * self._scale + self.offset.y,
        )

    def screen_length_to_world(self, length_px: float) -> float:
        return length_px / self._scale

    # ------------------------------------------------------------------------------
    # Scale / offset
    # ------------------------------------------------------------------------------

    @property
    def scale(self) -> float:
        return self._scale

    def get_scale(self) -> float:
        return self._scale

    def set_scale(self, scale: float) -> None:
        """Set the scale directly; requests outside [min, max] are ignored."""
        if not self.min_scale <= scale <= self.max_scale:
            logger.debug(f"Ignoring out-of-range scale {scale:g}.")
            return
        self._scale = float(scale)

    @property
    def scale_percent(self) -> str:
        return f"{int(round(self._scale * 100))}%"

    def zoom_at(self, screen_point: Point, factor: float) -> None:
        """Scale by `factor` keeping the world point under `screen_point` fixed."""
        if not math.isfinite(factor) or factor <= 0.0:
            raise ContractViolationError(f"Zoom factor must be positive, got {factor}.")
        old = self._scale
        new = self._clamp(old * factor)
        if new == old:
            return
        ratio = new / old
        self.offset = Vector(
            screen_point.x - (screen_point.x - self.offset.x) * ratio,
            screen_point.y - (screen_point.y - self.offset.y) * ratio,
        )
        self._scale = new

    def pan(self, dx: float, dy: float) -> None:
        self.offset = Vector(self.offset.x + dx, self.offset.y + dy)

    def reset(self) -> None:
        self._scale = self._clamp(1.0)
        self.offset = Vector(0.0, 0.0)

    # ------------------------------------------------------------------------------
    # Viewport helpers
    # ------------------------------------------------------------------------------

    def visible_world_bounds(self, width_px: int, height_px: int) -> tuple[float, float, float, float]:
        """(x_min, x_max, y_min, y_max) of the world area covered by a viewport."""
        top_left = self.screen_to_world(Point(0.0, 0.0))
        bottom_right = self.screen_to_world(Point(float(max(1, width_px)), float(max(1, height_px))))
        return top_left.x, bottom_right.x, top_left.y, bottom_right.y

    def fit(
        self,
        bounds: tuple[float, float, float, float],
        width_px: int,
        height_px: int,
        margin: float = 0.25,
    ) -> None:
        """Centre the world rectangle `bounds` in the viewport, scaled to fit with `margin`."""
        x_min, x_max, y_min, y_max = bounds
        dx, dy = max(1e-6, x_max - x_min), max(1e-6, y_max - y_min)
        w, h = max(1, width_px), max(1, height_px)
        self._scale = self._clamp(min(w / dx, h / dy) / (1.0 + margin))
        cx, cy = (x_min + x_max) / 2, (y_min + y_max) / 2
        self.offset = Vector(w / 2 - cx * self._scale, h / 2 - cy * self._scale)

    def _clamp(self, scale: float) -> float:
        return min(self.max_scale, max(self.min_scale, float(scale)))
