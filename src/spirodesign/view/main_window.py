"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, the Control Panel and the
Canvas.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects global actions (like File -> Save) to the model and
   the persistence layer.
"""
import logging
import os
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QFileDialog, QMainWindow, QMessageBox, QSplitter

from spirodesign import config
from spirodesign.controller.ticker import TickSource
from spirodesign.model.errors import SpiroError
from spirodesign.model.io import IOManager
from spirodesign.model.simulation import Simulation
from spirodesign.model.view_transform import ViewTransform
from spirodesign.view.canvas import SpiroCanvas
from spirodesign.view.control_panel import ControlPanel

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "SpiroDesign"


class MainWindow(QMainWindow):
    def __init__(self, simulation: Simulation) -> None:
        super().__init__()
        self.simulation: Simulation = simulation
        self.filepath: Optional[str] = None
        self.is_modified: bool = False

        settings = simulation.settings
        self.view = ViewTransform(min_scale=settings.min_scale, max_scale=settings.max_scale)
        self.ticker = TickSource(simulation, settings.tick_interval_ms, self)

        self.update_window_title()
        self.resize(1200, 800)

        # --- SPLITTER (CONTENT AREA) ---
        splitter = QSplitter(Qt.Horizontal)
        self.setCentralWidget(splitter)

        # --- LEFT SIDE: Control Panel ---
        self.panel = ControlPanel(simulation, self.ticker)
        splitter.addWidget(self.panel)

        # --- RIGHT SIDE: Canvas ---
        self.canvas = SpiroCanvas(simulation, self.view)
        splitter.addWidget(self.canvas)

        # Set initial proportions (1 part sidebar : 4 parts canvas)
        splitter.setSizes([280, 920])

        # --- SIGNAL CONNECTIONS ---
        self.panel.data_changed.connect(self.on_data_changed)
        self.canvas.edited.connect(self.on_canvas_edited)
        self.ticker.ticked.connect(self.on_tick)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        self.statusBar().showMessage("Ready")

    def _create_actions(self) -> None:
        # File Actions
        self.act_new = QAction("New", self)
        self.act_new.setShortcut("Ctrl+N")
        self.act_new.triggered.connect(self.on_file_new)

        self.act_open = QAction("Open...", self)
        self.act_open.setShortcut("Ctrl+O")
        self.act_open.triggered.connect(self.on_file_open)

        self.act_save = QAction("Save", self)
        self.act_save.setShortcut("Ctrl+S")
        self.act_save.triggered.connect(self.on_file_save)

        self.act_save_as = QAction("Save As...", self)
        self.act_save_as.setShortcut("Ctrl+Shift+S")
        self.act_save_as.triggered.connect(self.on_file_save_as)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

        # View Actions
        self.act_reset_view = QAction("Reset View", self)
        self.act_reset_view.setShortcut("Ctrl+0")
        self.act_reset_view.triggered.connect(self.canvas.reset_view)

        self.act_toggle_grid = QAction("Show Grid", self)
        self.act_toggle_grid.setCheckable(True)
        self.act_toggle_grid.setChecked(True)
        self.act_toggle_grid.toggled.connect(self.on_toggle_grid)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_new)
        file_menu.addSeparator()
        file_menu.addAction(self.act_open)
        file_menu.addSeparator()
        file_menu.addAction(self.act_save)
        file_menu.addAction(self.act_save_as)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        view_menu = menu_bar.addMenu("&View")
        view_menu.addAction(self.act_reset_view)
        view_menu.addAction(self.act_toggle_grid)

    # --- HELPER METHODS ---
    def update_window_title(self) -> None:
        """Updates the window title based on filename and dirty state."""
        filename = self.filepath if self.filepath else "Untitled"
        title = f"{VISIBLE_APP_NAME} - [{os.path.basename(filename)}"
        if self.is_modified:
            title += "*"
        title += "]"
        self.setWindowTitle(title)

    def set_modified(self, modified: bool) -> None:
        """Sets the dirty flag and updates title if changed."""
        if self.is_modified != modified:
            self.is_modified = modified
            self.update_window_title()

    def on_data_changed(self) -> None:
        self.set_modified(True)
        self.canvas.update()

    def on_canvas_edited(self) -> None:
        self.set_modified(True)
        # Drag edits change radii and positions shown in the panel
        self.panel.load_from_state()

    def on_tick(self, _elapsed_ms: int) -> None:
        self.set_modified(True)
        self.statusBar().showMessage(
            f"t = {self.simulation.elapsed_ms / 1000:.1f} s   zoom {self.view.scale_percent}"
        )

    def on_toggle_grid(self, checked: bool) -> None:
        self.canvas.show_grid = checked
        self.canvas.update()

    def refresh_ui_from_state(self) -> None:
        """
        After loading a file, the Simulation is replaced, but the Widgets are old.
        Force them to read from the Simulation again.
        """
        self.panel.load_from_state()
        self.canvas.reset_view()

    # --- FILE SLOTS ---

    def on_file_new(self) -> None:
        if not self._confirm_discard():
            return
        self.ticker.stop()
        self.simulation.reset_gears()
        self.filepath = None

        # Reset dirty flag (updates title)
        self.set_modified(False)
        self.update_window_title()
        self.refresh_ui_from_state()

    def on_file_open(self) -> None:
        if not self._confirm_discard():
            return
        fname, _ = QFileDialog.getOpenFileName(
            self, "Open Design", "", config.FILE_FILTER
        )
        if fname:
            self.ticker.stop()
            try:
                IOManager.load_into(self.simulation, fname)
            except (SpiroError, OSError, ValueError) as e:
                QMessageBox.critical(self, "Error", f"Could not open file:\n{e}")
                self.panel.update_run_buttons()
                return

            self.filepath = fname
            # Reset dirty flag
            self.is_modified = False
            # Explicitly update title to show new filename
            self.update_window_title()
            self.refresh_ui_from_state()
            self.statusBar().showMessage(f"Opened {os.path.basename(fname)}")

    def on_file_save(self) -> bool:
        if not self.filepath:
            return self.on_file_save_as()
        return self._save_to(self.filepath)

    def on_file_save_as(self) -> bool:
        fname, _ = QFileDialog.getSaveFileName(
            self, "Save Design", "", config.FILE_FILTER
        )
        if not fname:
            return False
        # Ensure extension
        if not fname.endswith(config.FILE_SUFFIX):
            fname += config.FILE_SUFFIX
        return self._save_to(fname)

    def _save_to(self, fname: str) -> bool:
        try:
            IOManager.save_snapshot(self.simulation.snapshot(), fname)
        except (OSError, ValueError) as e:
            QMessageBox.critical(self, "Error", f"Could not save file:\n{e}")
            return False

        self.filepath = fname
        self.is_modified = False
        self.update_window_title()
        self.statusBar().showMessage(f"Saved {os.path.basename(fname)}")
        return True

    def _confirm_discard(self) -> bool:
        """Ask to save a modified design. Returns False if the user cancelled."""
        if not self.is_modified:
            return True

        reply = QMessageBox.question(
            self,
            "Save changes?",
            "The design has been modified. Do you want to save your changes?",
            QMessageBox.Save | QMessageBox.Discard | QMessageBox.Cancel
        )
        if reply == QMessageBox.Save:
            return self.on_file_save()
        return reply == QMessageBox.Discard

    def closeEvent(self, event, /) -> None:
        """Handle window close event to prompt for saving if modified."""
        if not self._confirm_discard():
            event.ignore()  # Don't close window
            return

        self.ticker.stop()
        event.accept()
