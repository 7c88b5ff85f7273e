"""
Simulation Control Panel
"""
import logging

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QDoubleSpinBox, QGroupBox,
    QFormLayout, QComboBox, QColorDialog
)

from spirodesign.controller.ticker import TickSource
from spirodesign.model.errors import SpiroError
from spirodesign.model.simulation import Simulation

logger = logging.getLogger(__name__)


class ControlPanel(QWidget):
    # Signal emitted when the user changed the design (marks the document dirty)
    data_changed = Signal()

    def __init__(self, simulation: Simulation, ticker: TickSource) -> None:
        super().__init__()
        self.simulation = simulation
        self.ticker = ticker

        layout = QVBoxLayout(self)

        # --- Run Group ---
        grp_run = QGroupBox("Simulation")
        run_layout = QHBoxLayout(grp_run)

        self.btn_start = QPushButton("Start")
        self.btn_start.clicked.connect(self.on_start_clicked)
        run_layout.addWidget(self.btn_start)

        self.btn_stop = QPushButton("Stop")
        self.btn_stop.clicked.connect(self.on_stop_clicked)
        run_layout.addWidget(self.btn_stop)

        self.btn_clear = QPushButton("Clear")
        self.btn_clear.clicked.connect(self.on_clear_clicked)
        run_layout.addWidget(self.btn_clear)

        layout.addWidget(grp_run)

        # --- Gears Group ---
        grp_gears = QGroupBox("Gears")
        form = QFormLayout(grp_gears)

        # 1. Speed
        self.speed_spin = QDoubleSpinBox()
        self.speed_spin.setKeyboardTracking(False)
        self.speed_spin.setRange(-0.05, 0.05)
        self.speed_spin.setDecimals(4)
        self.speed_spin.setSingleStep(0.0005)
        self.speed_spin.setSuffix(" rad/ms")
        self.speed_spin.valueChanged.connect(self.on_speed_changed)
        form.addRow("Speed:", self.speed_spin)

        # 2. Spur radius
        self.spur_spin = QDoubleSpinBox()
        self.spur_spin.setKeyboardTracking(False)
        self.spur_spin.setRange(1.0, 5000.0)
        self.spur_spin.setDecimals(1)
        self.spur_spin.setSingleStep(5.0)
        self.spur_spin.valueChanged.connect(self.on_spur_radius_changed)
        form.addRow("Spur radius:", self.spur_spin)

        # 3. Pinion radius
        self.pinion_spin = QDoubleSpinBox()
        self.pinion_spin.setKeyboardTracking(False)
        self.pinion_spin.setRange(1.0, 5000.0)
        self.pinion_spin.setDecimals(1)
        self.pinion_spin.setSingleStep(1.0)
        self.pinion_spin.valueChanged.connect(self.on_pinion_radius_changed)
        form.addRow("Pinion radius:", self.pinion_spin)

        layout.addWidget(grp_gears)

        # --- Pen Group ---
        grp_pen = QGroupBox("Pen")
        pen_form = QFormLayout(grp_pen)

        self.size_combo = QComboBox()
        self.size_combo.addItems(list(simulation.settings.pen_sizes))
        self.size_combo.currentTextChanged.connect(self.on_pen_size_changed)
        pen_form.addRow("Size:", self.size_combo)

        self.btn_color = QPushButton()
        self.btn_color.clicked.connect(self.on_color_clicked)
        pen_form.addRow("Colour:", self.btn_color)

        layout.addWidget(grp_pen)

        # --- Status Info ---
        self.lbl_status = QLabel("")
        self.lbl_status.setAlignment(Qt.AlignCenter)
        self.lbl_status.setWordWrap(True)
        self.lbl_status.setStyleSheet("color: gray;")
        layout.addWidget(self.lbl_status)

        self.lbl_hint = QLabel(
            "Drag the pen to re-mount it, the pinion to roll it, the spur center to move "
            "the assembly and the spur rim to resize it. Drag empty space to pan, scroll to zoom."
        )
        self.lbl_hint.setWordWrap(True)
        self.lbl_hint.setStyleSheet("color: gray;")
        layout.addWidget(self.lbl_hint)

        layout.addStretch()

        self.load_from_state()

    # --- STATE SYNC ---

    def load_from_state(self) -> None:
        """Push the simulation values into the widgets without re-triggering edits."""
        sim = self.simulation
        widgets = (self.speed_spin, self.spur_spin, self.pinion_spin, self.size_combo)
        for w in widgets:
            w.blockSignals(True)
        try:
            self.speed_spin.setValue(sim.speed)
            self.spur_spin.setValue(sim.spur.radius)
            self.pinion_spin.setValue(sim.pinion.radius)
            for name, size in sim.settings.pen_sizes.items():
                if size == sim.pen.size:
                    self.size_combo.setCurrentText(name)
                    break
        finally:
            for w in widgets:
                w.blockSignals(False)

        self._update_color_button(sim.pen.color)
        self.update_run_buttons()

    def update_run_buttons(self) -> None:
        running = self.simulation.is_running
        self.btn_start.setEnabled(not running)
        self.btn_stop.setEnabled(running)

    def _update_color_button(self, color: str) -> None:
        self.btn_color.setText(color)
        text_color = "white" if QColor(color).lightness() < 128 else "black"
        self.btn_color.setStyleSheet(f"background-color: {color}; color: {text_color};")

    def _set_status(self, text: str, color: str = "gray") -> None:
        self.lbl_status.setText(text)
        self.lbl_status.setStyleSheet(f"color: {color};")

    def _apply(self, edit, *args) -> bool:
        """Run a model edit; on rejection show why and restore the widgets."""
        try:
            edit(*args)
        except SpiroError as e:
            logger.warning(f"Edit rejected: {e}")
            self._set_status(str(e), color="#d00000")
            self.load_from_state()
            return False
        self._set_status("")
        self.data_changed.emit()
        return True

    # --- SLOTS ---

    def on_start_clicked(self) -> None:
        self.ticker.start()
        self.update_run_buttons()

    def on_stop_clicked(self) -> None:
        self.ticker.stop()
        self.update_run_buttons()

    def on_clear_clicked(self) -> None:
        self._apply(self.simulation.clear_locus)

    def on_speed_changed(self, value: float) -> None:
        self._apply(self.simulation.change_speed, value)

    def on_spur_radius_changed(self, value: float) -> None:
        self._apply(self.simulation.change_spur_radius, value)

    def on_pinion_radius_changed(self, value: float) -> None:
        self._apply(self.simulation.change_pinion_radius, value)

    def on_pen_size_changed(self, name: str) -> None:
        if name:
            self._apply(self.simulation.change_pen_size_preset, name)

    def on_color_clicked(self) -> None:
        color = QColorDialog.getColor(QColor(self.simulation.pen.color), self, "Pen Colour")
        if not color.isValid():
            return
        if self._apply(self.simulation.change_pen_color, color.name()):
            self._update_color_button(self.simulation.pen.color)
