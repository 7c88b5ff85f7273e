import math

import pytest

from spirodesign.config import SimulationSettings
from spirodesign.controller.interaction import InteractionController
from spirodesign.model.gears import default_pen, pinion_gear, spur_gear
from spirodesign.model.kinematics import Kinematics
from spirodesign.model.simulation import Simulation
from spirodesign.model.view_transform import ViewTransform


@pytest.fixture
def settings():
    # Spur R=100 at (400, 400), pinion r=30, pen on the pinion rim.
    return SimulationSettings()


@pytest.fixture
def kinematics(settings):
    spur = spur_gear(settings)
    pinion = pinion_gear(settings)
    pen = default_pen(settings)
    return Kinematics(spur, pinion, pen, speed=math.pi / 2000)


@pytest.fixture
def simulation(settings):
    return Simulation(settings)


@pytest.fixture
def view():
    return ViewTransform()


@pytest.fixture
def controller(simulation, view):
    return InteractionController(simulation, view, hit_tolerance_px=8.0, wheel_step=1.1)
