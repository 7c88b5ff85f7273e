"""
Grid Manager
Handles the dynamic 2D background grid and rulers of the canvas.
"""
import math
from typing import Callable

import numpy as np
from PySide6.QtCore import QLineF, QPointF
from PySide6.QtGui import QColor, QPainter, QPen

from spirodesign.model.geometry_primitives import Point
from spirodesign.model.view_transform import ViewTransform


class GridPainter:
    def __init__(self) -> None:
        # Target on-screen spacing of minor lines
        self.target_minor_px: float = 25.0
        self.major_every: int = 5
        self.minor_color = QColor("#E0E0E0")
        self.major_color = QColor("#B0B0B0")
        self.label_color = QColor("#707070")
        self.label_formatter: Callable[[float], str] = lambda v: f"{v:g}"

    def spacing_for(self, view: ViewTransform) -> tuple[float, float]:
        """(minor, major) world spacing giving roughly `target_minor_px` between minor lines."""
        raw = view.screen_length_to_world(self.target_minor_px)
        exponent = math.floor(math.log10(raw))
        base = 10.0 ** exponent
        for step in (1.0, 2.0, 5.0, 10.0):
            if base * step >= raw:
                minor = base * step
                break
        return minor, minor * self.major_every

    def paint(self, painter: QPainter, view: ViewTransform, width_px: int, height_px: int) -> None:
        """Re-calculates grid lines based on current zoom/pan and draws them."""
        bounds = view.visible_world_bounds(width_px, height_px)
        minor, major = self.spacing_for(view)

        painter.save()
        self._draw_lines(painter, view, bounds, minor, QPen(self.minor_color, 1))
        self._draw_lines(painter, view, bounds, major, QPen(self.major_color, 1))
        self._axis_labels_edge(painter, view, bounds, major)
        painter.restore()

    @staticmethod
    def grid_coordinates(bounds, spacing) -> tuple[np.ndarray, np.ndarray]:
        """
        World x and y coordinates of the grid lines covering `bounds`.

        Args:
            bounds: (x_min, x_max, y_min, y_max)
            spacing: Grid spacing in both directions.
        """
        x_min, x_max, y_min, y_max = bounds
        xs = np.arange(np.floor(x_min / spacing) * spacing, np.ceil(x_max / spacing) * spacing + spacing, spacing)
        ys = np.arange(np.floor(y_min / spacing) * spacing, np.ceil(y_max / spacing) * spacing + spacing, spacing)
        return xs, ys

    def _draw_lines(self, painter: QPainter, view: ViewTransform, bounds, spacing, pen: QPen) -> None:
        x_min, x_max, y_min, y_max = bounds
        xs, ys = self.grid_coordinates(bounds, spacing)

        lines = []
        for x in xs:
            p0 = view.world_to_screen(Point(float(x), y_min))
            p1 = view.world_to_screen(Point(float(x), y_max))
            lines.append(QLineF(p0.x, p0.y, p1.x, p1.y))
        for y in ys:
            p0 = view.world_to_screen(Point(x_min, float(y)))
            p1 = view.world_to_screen(Point(x_max, float(y)))
            lines.append(QLineF(p0.x, p0.y, p1.x, p1.y))

        painter.setPen(pen)
        painter.drawLines(lines)

    def _axis_labels_edge(self, painter: QPainter, view: ViewTransform, bounds, spacing) -> None:
        """Draw labels for the major lines along the top and left edges."""
        xs, ys = self.grid_coordinates(bounds, spacing)
        pad = 4

        painter.setPen(QPen(self.label_color))
        metrics = painter.fontMetrics()
        for x in xs:
            sx = view.world_to_screen(Point(float(x), 0.0)).x
            painter.drawText(QPointF(sx + pad, metrics.ascent() + pad), self.label_formatter(float(x)))
        for y in ys:
            sy = view.world_to_screen(Point(0.0, float(y))).y
            painter.drawText(QPointF(pad, sy - pad), self.label_formatter(float(y)))
