"""
Simulation State (Data Model)
=============================
This module defines the central data structures for the running application.

Why is this file needed?
------------------------
1. State Management: It holds the gears, the pen, the recorded locus and the
   timing bookkeeping in one place.
2. Persistence: The snapshot is what gets serialized when saving a design.
3. Decoupling: Views read from the facade; the facade writes to this object.

Classes:
    SimulationState: The live container owned by the Simulation facade.
    SimulationSnapshot: Detached copy handed to and from the persistence layer.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from typing import Any, Dict, List

from spirodesign import config
from spirodesign.model.gears import (
    Gear, GearKind, Pen, default_pen, normalize_color, pinion_gear, spur_gear, validate_pair, validate_radius
)
from spirodesign.model.errors import GearConfigurationError
from spirodesign.model.kinematics import Kinematics
from spirodesign.model.locus import Locus, PathSegment

logger = logging.getLogger(__name__)


@dataclass
class SimulationState:
    """
    Everything the facade mutates. Pass the owning Simulation around, not this.
    """
    spur: Gear
    pinion: Gear
    pen: Pen
    kinematics: Kinematics
    locus: Locus
    elapsed_ms: int = 0
    running: bool = False

    @classmethod
    def default(cls, settings: config.SimulationSettings) -> SimulationState:
        spur = spur_gear(settings)
        pinion = pinion_gear(settings)
        pen = default_pen(settings)
        kinematics = Kinematics(spur, pinion, pen, speed=settings.speed)
        locus = Locus(pen.color, pen.size)
        logger.debug("Created default simulation state.")
        return cls(spur=spur, pinion=pinion, pen=pen, kinematics=kinematics, locus=locus)

    def snapshot(self) -> SimulationSnapshot:
        return SimulationSnapshot(
            spur=self.spur.copy(),
            pinion=self.pinion.copy(),
            pen=self.pen.copy(),
            theta=self.kinematics.theta,
            speed=self.kinematics.speed,
            elapsed_ms=self.elapsed_ms,
            segments=[PathSegment(s.color, s.size, [p.copy() for p in s.points]) for s in self.locus.segments()],
        )


@dataclass
class SimulationSnapshot:
    """
    Opaque-to-the-core copy of the persisted fields: Spur, Pinion + Pen, Locus, elapsed time.
    """
    spur: Gear
    pinion: Gear
    pen: Pen
    theta: float = 0.0
    speed: float = config.DEFAULT_SPEED
    elapsed_ms: int = 0
    segments: List[PathSegment] = field(default_factory=list)

    def validate(self) -> None:
        """Raise GearConfigurationError if this snapshot cannot become a live state."""
        if self.spur.kind != GearKind.SPUR or self.pinion.kind != GearKind.PINION:
            raise GearConfigurationError("Snapshot gears have the wrong kind.")
        validate_pair(self.spur.radius, self.pinion.radius)
        if self.elapsed_ms < 0:
            raise GearConfigurationError(f"Snapshot elapsed time is negative ({self.elapsed_ms}).")
        if not (math.isfinite(self.theta) and math.isfinite(self.speed)):
            raise GearConfigurationError("Snapshot angle and speed must be finite.")

        validate_radius(self.pen.size, "Pen size")
        normalize_color(self.pen.color)
        if not 0.0 < self.pen.reach <= 1.0:
            raise GearConfigurationError(f"Pen reach must be in (0, 1], got {self.pen.reach}.")
        if not math.isfinite(self.pen.alpha):
            raise GearConfigurationError("Pen phase must be finite.")

        for i, segment in enumerate(self.segments):
            validate_radius(segment.size, f"Segment {i} size")
            normalize_color(segment.color)

    def to_state(self) -> SimulationState:
        """Build a fresh live state; the snapshot itself is left untouched."""
        self.validate()
        spur = self.spur.copy()
        pinion = self.pinion.copy()
        pen = self.pen.copy()
        kinematics = Kinematics(spur, pinion, pen, speed=self.speed, theta=self.theta)
        if self.segments:
            locus = Locus.from_segments(self.segments)
            locus.set_style(pen.color, pen.size)
        else:
            locus = Locus(pen.color, pen.size)
        return SimulationState(
            spur=spur,
            pinion=pinion,
            pen=pen,
            kinematics=kinematics,
            locus=locus,
            elapsed_ms=int(self.elapsed_ms),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "spur": self.spur.to_dict(),
            "pinion": self.pinion.to_dict(),
            "pen": self.pen.to_dict(),
            "theta": self.theta,
            "speed": self.speed,
            "elapsed_ms": self.elapsed_ms,
            "segments": [
                {"color": s.color, "size": s.size, "points": s.as_array().tolist()}
                for s in self.segments
            ],
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> SimulationSnapshot:
        return SimulationSnapshot(
            spur=Gear.from_dict(data["spur"]),
            pinion=Gear.from_dict(data["pinion"]),
            pen=Pen.from_dict(data["pen"]),
            theta=float(data.get("theta", 0.0)),
            speed=float(data.get("speed", config.DEFAULT_SPEED)),
            elapsed_ms=int(data.get("elapsed_ms", 0)),
            segments=[
                PathSegment.from_array(s["color"], s["size"], s["points"])
                for s in data.get("segments", [])
            ],
        )
