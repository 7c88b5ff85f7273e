import pytest

from spirodesign.config import SimulationSettings
from spirodesign.model.errors import GearConfigurationError, SpiroError
from spirodesign.model.gears import (
    Gear, GearKind, Pen, default_pen, normalize_color, pinion_gear, spur_gear,
    validate_pair, validate_radius,
)
from spirodesign.model.geometry_primitives import Point, Vector


def test_error_taxonomy():
    assert issubclass(GearConfigurationError, SpiroError)
    assert issubclass(GearConfigurationError, ValueError)


def test_normalize_color():
    assert normalize_color("#FFaa00") == "#ffaa00"
    for bad in ("red", "#fff", "#gggggg", "", None):
        with pytest.raises(GearConfigurationError):
            normalize_color(bad)


def test_validate_radius():
    assert validate_radius(3) == 3.0
    for bad in (0, -1, float("nan"), float("inf")):
        with pytest.raises(GearConfigurationError):
            validate_radius(bad)


def test_validate_pair_requires_smaller_pinion():
    validate_pair(100.0, 30.0)
    with pytest.raises(GearConfigurationError):
        validate_pair(100.0, 100.0)
    with pytest.raises(GearConfigurationError):
        validate_pair(30.0, 100.0)


def test_default_gears(settings):
    spur = spur_gear(settings)
    pinion = pinion_gear(settings)
    assert spur.kind == GearKind.SPUR
    assert pinion.kind == GearKind.PINION
    assert spur.center == Point(400.0, 400.0)
    assert spur.radius == 100.0
    # The pinion touches the spur rim on the +X side
    assert pinion.center == Point(470.0, 400.0)
    assert pinion.radius == 30.0


def test_gear_edits():
    gear = spur_gear(SimulationSettings())
    gear.move_by(Vector(5.0, -5.0))
    assert gear.center == Point(405.0, 395.0)
    gear.move_to(Point(0.0, 0.0))
    assert gear.center == Point(0.0, 0.0)
    gear.resize(50)
    assert gear.radius == 50.0
    gear.change_color("#00FF00")
    assert gear.color == "#00ff00"
    assert gear.contains(Point(30.0, 40.0))
    assert not gear.contains(Point(30.0, 41.0))


def test_gear_rejects_bad_resize_and_keeps_radius():
    gear = pinion_gear(SimulationSettings())
    with pytest.raises(GearConfigurationError):
        gear.resize(-5)
    assert gear.radius == 30.0


def test_gear_dict_round_trip():
    gear = pinion_gear(SimulationSettings())
    restored = Gear.from_dict(gear.to_dict())
    assert restored == gear
    assert restored is not gear


def test_gear_copy_is_deep():
    gear = spur_gear(SimulationSettings())
    other = gear.copy()
    other.move_to(Point(1.0, 1.0))
    assert gear.center == Point(400.0, 400.0)


def test_default_pen(settings):
    pen = default_pen(settings)
    assert pen.style == ("#000000", 2.0)
    assert pen.reach == 1.0
    assert pen.alpha == 0.0


def test_pen_edits():
    pen = Pen()
    pen.change_color("#ABCDEF")
    pen.change_size(4)
    assert pen.style == ("#abcdef", 4.0)
    with pytest.raises(GearConfigurationError):
        pen.change_size(0)
    with pytest.raises(GearConfigurationError):
        pen.change_color("blue")
    assert pen.style == ("#abcdef", 4.0)


def test_pen_from_dict_validates_reach():
    data = Pen().to_dict()
    data["reach"] = 0.0
    with pytest.raises(GearConfigurationError):
        Pen.from_dict(data)
    data["reach"] = 1.5
    with pytest.raises(GearConfigurationError):
        Pen.from_dict(data)
    data["reach"] = 0.5
    assert Pen.from_dict(data).reach == 0.5
