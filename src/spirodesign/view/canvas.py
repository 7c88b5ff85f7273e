"""
Spiro Canvas
============
The drawing surface of the application.

Why is this file needed?
------------------------
1. Rendering: It paints the grid, both gears, the recorded locus and the pen
   from the data exposed by the Simulation facade. It never mutates the model.
2. Input: It converts Qt mouse and wheel events into calls on the
   InteractionController.
"""
import logging
from typing import Optional

from PySide6.QtCore import QPointF, QRectF, Qt, Signal
from PySide6.QtGui import QColor, QMouseEvent, QPainter, QPainterPath, QPen, QWheelEvent
from PySide6.QtWidgets import QWidget

from spirodesign.controller.interaction import DragMode, InteractionController, MouseButton
from spirodesign.model.gears import Gear
from spirodesign.model.geometry_primitives import Point
from spirodesign.model.simulation import Simulation
from spirodesign.model.view_transform import ViewTransform
from spirodesign.view.widgets.grid_manager import GridPainter

logger = logging.getLogger(__name__)

_BUTTONS = {
    Qt.LeftButton: MouseButton.LEFT,
    Qt.MiddleButton: MouseButton.MIDDLE,
    Qt.RightButton: MouseButton.RIGHT,
}

_CURSORS = {
    DragMode.PAN: Qt.ClosedHandCursor,
    DragMode.MOVE_SPIRO: Qt.SizeAllCursor,
    DragMode.MOVE_PINION: Qt.SizeAllCursor,
    DragMode.RESIZE_SPUR: Qt.SizeFDiagCursor,
    DragMode.DEFINE_PEN: Qt.CrossCursor,
}


class SpiroCanvas(QWidget):
    # Emitted after a pointer gesture edited the model (not for pure pan/zoom)
    edited = Signal()
    # Emitted whenever the view transform changed
    view_changed = Signal()

    def __init__(self, simulation: Simulation, view: ViewTransform, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.simulation = simulation
        self.view = view
        settings = simulation.settings
        self.interaction = InteractionController(
            simulation,
            view,
            hit_tolerance_px=settings.hit_tolerance_px,
            wheel_step=settings.wheel_zoom_step,
        )
        self.grid = GridPainter()
        self.show_grid: bool = True
        self._fitted = False

        self.setMinimumSize(400, 300)
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setAutoFillBackground(True)

        simulation.add_listener(self._on_simulation_changed)

    # ------------------------------------------------------------------------------
    # View helpers
    # ------------------------------------------------------------------------------

    def reset_view(self) -> None:
        """Fit the spur into the widget."""
        self.view.fit(self.simulation.scene_bounds(), self.width(), self.height())
        self.view_changed.emit()
        self.update()

    def _on_simulation_changed(self, _simulation: Simulation) -> None:
        self.update()

    # ------------------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------------------

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.fillRect(self.rect(), Qt.white)

        if self.show_grid:
            self.grid.paint(painter, self.view, self.width(), self.height())

        sim = self.simulation
        self._draw_gear(painter, sim.spur, width=2.0)
        self._draw_locus(painter)
        self._draw_gear(painter, sim.pinion, width=1.5)
        self._draw_pinion_spoke(painter)
        self._draw_pen(painter)
        self._draw_preview(painter)
        self._draw_scale_label(painter)
        painter.end()

    def _draw_gear(self, painter: QPainter, gear: Gear, width: float) -> None:
        center = self.view.world_to_screen(gear.center)
        radius = gear.radius * self.view.scale
        painter.setPen(QPen(QColor(gear.color), width))
        painter.setBrush(Qt.NoBrush)
        painter.drawEllipse(QPointF(center.x, center.y), radius, radius)
        # Center mark
        painter.drawEllipse(QPointF(center.x, center.y), 2.0, 2.0)

    def _draw_pinion_spoke(self, painter: QPainter) -> None:
        pinion = self.view.world_to_screen(self.simulation.pinion.center)
        pen = self.view.world_to_screen(self.simulation.pen.position)
        painter.setPen(QPen(QColor(self.simulation.pinion.color), 1.0, Qt.DashLine))
        painter.drawLine(QPointF(pinion.x, pinion.y), QPointF(pen.x, pen.y))

    def _draw_locus(self, painter: QPainter) -> None:
        scale = self.view.scale
        for segment in self.simulation.segments():
            if len(segment) < 2:
                continue
            path = QPainterPath()
            first, *rest = segment.points
            p = self.view.world_to_screen(first)
            path.moveTo(p.x, p.y)
            for point in rest:
                p = self.view.world_to_screen(point)
                path.lineTo(p.x, p.y)
            stroke = QPen(QColor(segment.color), max(1.0, segment.size * scale))
            stroke.setCapStyle(Qt.RoundCap)
            stroke.setJoinStyle(Qt.RoundJoin)
            painter.setPen(stroke)
            painter.setBrush(Qt.NoBrush)
            painter.drawPath(path)

    def _draw_pen(self, painter: QPainter) -> None:
        pen = self.simulation.pen
        p = self.view.world_to_screen(pen.position)
        radius = max(3.0, pen.size * self.view.scale)
        painter.setPen(QPen(Qt.black, 1.0))
        painter.setBrush(QColor(pen.color))
        painter.drawEllipse(QPointF(p.x, p.y), radius, radius)

    def _draw_preview(self, painter: QPainter) -> None:
        preview = self.interaction.preview_pen
        if preview is None:
            return
        p = self.view.world_to_screen(preview)
        inside = self.simulation.pinion.contains(preview)
        painter.setPen(QPen(QColor("#00a000") if inside else QColor("#d00000"), 1.0, Qt.DashLine))
        painter.setBrush(Qt.NoBrush)
        painter.drawEllipse(QPointF(p.x, p.y), 6.0, 6.0)

    def _draw_scale_label(self, painter: QPainter) -> None:
        text = self.view.scale_percent
        metrics = painter.fontMetrics()
        w = metrics.horizontalAdvance(text) + 12
        h = metrics.height() + 6
        rect = QRectF(self.width() - w - 8, self.height() - h - 8, w, h)
        painter.setPen(Qt.NoPen)
        painter.setBrush(QColor(255, 255, 255, 200))
        painter.drawRoundedRect(rect, 4, 4)
        painter.setPen(Qt.black)
        painter.drawText(rect, Qt.AlignCenter, text)

    # ------------------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------------------

    def showEvent(self, event) -> None:
        super().showEvent(event)
        if not self._fitted:
            self._fitted = True
            self.reset_view()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        button = _BUTTONS.get(event.button())
        if button is None:
            return super().mousePressEvent(event)
        mode = self.interaction.press(self._event_point(event), button)
        self.setCursor(_CURSORS.get(mode, Qt.ArrowCursor))
        self.update()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        mode = self.interaction.mode
        if mode == DragMode.NONE:
            # Hover feedback only
            hover = self.interaction.hit_test(self._event_point(event))
            self.setCursor(Qt.OpenHandCursor if hover == DragMode.PAN else _CURSORS.get(hover, Qt.ArrowCursor))
            return
        self.interaction.drag(self._event_point(event))
        self._after_gesture(mode)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        mode = self.interaction.mode
        if mode == DragMode.NONE:
            return super().mouseReleaseEvent(event)
        self.interaction.release(self._event_point(event))
        self.setCursor(Qt.ArrowCursor)
        self._after_gesture(mode)

    def wheelEvent(self, event: QWheelEvent) -> None:
        # One notch is 120 units of angleDelta
        notches = event.angleDelta().y() / 120.0
        if notches == 0:
            return
        pos = event.position()
        self.interaction.wheel(Point(pos.x(), pos.y()), notches)
        self.view_changed.emit()
        self.update()

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self.update()

    def _after_gesture(self, mode: DragMode) -> None:
        if mode == DragMode.PAN:
            self.view_changed.emit()
        elif mode != DragMode.NONE:
            self.edited.emit()
        self.update()

    @staticmethod
    def _event_point(event: QMouseEvent) -> Point:
        pos = event.position()
        return Point(pos.x(), pos.y())
