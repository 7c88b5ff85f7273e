"""
Gears and Pen
=============
Data structures for the two circles of the spirograph and the pen.

Classes:
    Circle: Center, radius and colour shared by both gear variants.
    GearKind: Tag distinguishing the fixed spur from the rolling pinion.
    Gear: A tagged circle that can be moved and resized.
    Pen: Stroke style and pen-tip placement on the pinion.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
import logging
import math
import re

from spirodesign import config
from spirodesign.model.errors import GearConfigurationError
from spirodesign.model.geometry_primitives import Point, Vector

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def normalize_color(color: str) -> str:
    """Return `color` as lower-case `#rrggbb`, or raise GearConfigurationError."""
    if not isinstance(color, str) or not _HEX_COLOR.match(color):
        raise GearConfigurationError(f"Invalid colour {color!r}, expected '#rrggbb'.")
    return color.lower()


def validate_radius(radius: float, what: str = "Radius") -> float:
    radius = float(radius)
    if not math.isfinite(radius) or radius <= 0.0:
        raise GearConfigurationError(f"{what} must be positive, got {radius}.")
    return radius


def validate_pair(spur_radius: float, pinion_radius: float) -> None:
    """A pinion can only roll inside a strictly larger spur."""
    validate_radius(spur_radius, "Spur radius")
    validate_radius(pinion_radius, "Pinion radius")
    if pinion_radius >= spur_radius:
        raise GearConfigurationError(
            f"Pinion radius ({pinion_radius:g}) must be smaller than spur radius ({spur_radius:g})."
        )


class GearKind(StrEnum):
    SPUR = "spur"
    PINION = "pinion"


@dataclass
class Circle:
    center: Point
    radius: float
    color: str = "#000000"


@dataclass
class Gear:
    """
    One gear of the spirograph.

    Spur and pinion share this record; only `kind` tells them apart. The
    kinematics engine decides which one is fixed and which one is driven.
    """
    kind: GearKind
    circle: Circle

    @property
    def center(self) -> Point:
        return self.circle.center

    @property
    def radius(self) -> float:
        return self.circle.radius

    @property
    def color(self) -> str:
        return self.circle.color

    def move_to(self, position: Point) -> None:
        self.circle.center = Point(float(position.x), float(position.y))

    def move_by(self, delta: Vector) -> None:
        self.circle.center = self.circle.center + delta

    def resize(self, radius: float) -> None:
        self.circle.radius = validate_radius(radius, f"{self.kind.value.capitalize()} radius")

    def change_color(self, color: str) -> None:
        self.circle.color = normalize_color(color)

    def contains(self, point: Point) -> bool:
        return self.center.distance_to(point) <= self.radius

    def copy(self) -> Gear:
        return Gear(self.kind, Circle(self.center.copy(), self.radius, self.color))

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "center": [self.center.x, self.center.y],
            "radius": self.radius,
            "color": self.color,
        }

    @staticmethod
    def from_dict(data: dict) -> Gear:
        kind = GearKind(data["kind"])
        cx, cy = data["center"]
        return Gear(
            kind,
            Circle(
                center=Point(float(cx), float(cy)),
                radius=validate_radius(data["radius"], f"{kind.value.capitalize()} radius"),
                color=normalize_color(data.get("color", "#000000")),
            ),
        )


def spur_gear(settings: config.SimulationSettings | None = None) -> Gear:
    settings = settings or config.SimulationSettings()
    cx, cy = settings.spur_center
    return Gear(GearKind.SPUR, Circle(Point(cx, cy), settings.spur_radius, settings.spur_color))


def pinion_gear(settings: config.SimulationSettings | None = None) -> Gear:
    """Default pinion, touching the spur at orbital angle 0 (to the right of its center)."""
    settings = settings or config.SimulationSettings()
    cx, cy = settings.spur_center
    center = Point(cx + settings.spur_radius - settings.pinion_radius, cy)
    return Gear(GearKind.PINION, Circle(center, settings.pinion_radius, settings.pinion_color))


@dataclass
class Pen:
    """
    The pen mounted on the pinion.

    `alpha` is the pen's phase on the pinion at theta == 0, `reach` the
    fraction of the pinion radius at which the tip sits (1.0 = on the rim).
    """
    position: Point = field(default_factory=lambda: Point(0.0, 0.0))
    size: float = config.DEFAULT_PEN_SIZE
    color: str = config.DEFAULT_PEN_COLOR
    alpha: float = config.DEFAULT_PEN_ALPHA
    reach: float = config.DEFAULT_PEN_REACH

    @property
    def style(self) -> tuple[str, float]:
        return self.color, self.size

    def change_color(self, color: str) -> None:
        self.color = normalize_color(color)

    def change_size(self, size: float) -> None:
        self.size = validate_radius(size, "Pen size")

    def set_position(self, position: Point) -> None:
        self.position = Point(float(position.x), float(position.y))

    def copy(self) -> Pen:
        return Pen(self.position.copy(), self.size, self.color, self.alpha, self.reach)

    def to_dict(self) -> dict:
        return {
            "position": [self.position.x, self.position.y],
            "size": self.size,
            "color": self.color,
            "alpha": self.alpha,
            "reach": self.reach,
        }

    @staticmethod
    def from_dict(data: dict) -> Pen:
        px, py = data.get("position", (0.0, 0.0))
        reach = float(data.get("reach", config.DEFAULT_PEN_REACH))
        if not 0.0 < reach <= 1.0:
            raise GearConfigurationError(f"Pen reach must be in (0, 1], got {reach}.")
        return Pen(
            position=Point(float(px), float(py)),
            size=validate_radius(data.get("size", config.DEFAULT_PEN_SIZE), "Pen size"),
            color=normalize_color(data.get("color", config.DEFAULT_PEN_COLOR)),
            alpha=float(data.get("alpha", config.DEFAULT_PEN_ALPHA)),
            reach=reach,
        )


def default_pen(settings: config.SimulationSettings | None = None) -> Pen:
    settings = settings or config.SimulationSettings()
    return Pen(
        size=settings.pen_size,
        color=normalize_color(settings.pen_color),
        alpha=settings.pen_alpha,
        reach=settings.pen_reach,
    )
