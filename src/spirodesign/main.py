"""
Application Initialization
==========================
This module constructs the MVC (Model-View-Controller) architecture and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the Simulation facade (Model).
2. Instantiates the Main Window (View), which owns the controllers.
3. Passes the Model into the View so they can communicate.
4. Prevents circular import errors by being the orchestrator.
"""
import logging
import os
import sys

from PySide6.QtWidgets import QApplication

from spirodesign.config import SimulationSettings
from spirodesign.logging_config import level_from_name, setup_logging
from spirodesign.model.simulation import Simulation
from spirodesign.view.main_window import MainWindow


def main() -> None:
    # 1. Setup Logging (Console + Optional File)
    # SPIRO_LOG_LEVEL=DEBUG shows every edit
    setup_logging(
        level=level_from_name(os.environ.get("SPIRO_LOG_LEVEL")),
        log_file=os.environ.get("SPIRO_LOG_FILE"),
    )

    # 2. Create the Qt Application
    app = QApplication(sys.argv)
    app.setApplicationName("SpiroDesign")

    # 3. Initialize the Data Model
    simulation = Simulation(SimulationSettings.from_env())

    # 4. Initialize the Main Window, passing the model
    window = MainWindow(simulation)
    window.show()

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
