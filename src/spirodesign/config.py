"""
Configuration & Defaults
========================
This module serves as the central registry for global constants and defaults.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (default radii, scale bounds, tick
   cadence) from being scattered throughout the code.
2. Overrides: It reads environment overrides so a session can be tuned
   without touching code.

Exports:
    SimulationSettings: Tunable defaults handed to the Simulation facade.
    PEN_SIZES: Named pen size presets.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


# Gear geometry (world units)
DEFAULT_SPUR_CENTER: tuple[float, float] = (400.0, 400.0)
DEFAULT_SPUR_RADIUS: float = 100.0
DEFAULT_SPUR_COLOR: str = "#000000"

DEFAULT_PINION_RADIUS: float = 30.0
DEFAULT_PINION_COLOR: str = "#0000ff"

# Pen
DEFAULT_PEN_COLOR: str = "#000000"
DEFAULT_PEN_SIZE: float = 2.0
DEFAULT_PEN_ALPHA: float = 0.0
DEFAULT_PEN_REACH: float = 1.0
PEN_SIZES: dict[str, float] = {
    "Small": 1.0,
    "Medium": 2.0,
    "Large": 4.0,
}

# Motion
DEFAULT_SPEED: float = 0.002  # rad/ms
TICK_INTERVAL_MS: int = 1000 // 60  # 60 FPS
MAX_SUBSTEP_MS: float = 2.0

# View
MIN_SCALE: float = 0.1
MAX_SCALE: float = 10.0
WHEEL_ZOOM_STEP: float = 1.1
HIT_TOLERANCE_PX: float = 8.0

FILE_FILTER: str = "Spiro Files (*.h5)"
FILE_SUFFIX: str = ".h5"


@dataclass
class SimulationSettings:
    """Defaults for a fresh simulation. Pass a modified copy to the facade to override."""
    spur_center: tuple[float, float] = DEFAULT_SPUR_CENTER
    spur_radius: float = DEFAULT_SPUR_RADIUS
    spur_color: str = DEFAULT_SPUR_COLOR
    pinion_radius: float = DEFAULT_PINION_RADIUS
    pinion_color: str = DEFAULT_PINION_COLOR

    pen_color: str = DEFAULT_PEN_COLOR
    pen_size: float = DEFAULT_PEN_SIZE
    pen_alpha: float = DEFAULT_PEN_ALPHA
    pen_reach: float = DEFAULT_PEN_REACH

    speed: float = DEFAULT_SPEED
    tick_interval_ms: int = TICK_INTERVAL_MS
    max_substep_ms: float = MAX_SUBSTEP_MS

    min_scale: float = MIN_SCALE
    max_scale: float = MAX_SCALE
    wheel_zoom_step: float = WHEEL_ZOOM_STEP
    hit_tolerance_px: float = HIT_TOLERANCE_PX

    pen_sizes: dict[str, float] = field(default_factory=lambda: dict(PEN_SIZES))

    @classmethod
    def from_env(cls) -> SimulationSettings:
        """
        Build settings honouring environment overrides.

        SPIRO_SPEED: pinion angular speed in rad/ms.
        SPIRO_TICK_MS: tick interval of the GUI timer in ms.
        """
        settings = cls()
        speed = os.environ.get("SPIRO_SPEED")
        if speed:
            try:
                settings.speed = float(speed)
            except ValueError:
                logger.warning(f"Ignoring invalid SPIRO_SPEED={speed!r}")
        tick = os.environ.get("SPIRO_TICK_MS")
        if tick:
            try:
                settings.tick_interval_ms = max(1, int(tick))
            except ValueError:
                logger.warning(f"Ignoring invalid SPIRO_TICK_MS={tick!r}")
        return settings
