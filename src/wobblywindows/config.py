"""
Configuration & Global Constants
================================
This module serves as the central registry for effect settings and the fixed
constants shared by the wobbly and resize effects.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (intensity, multipliers, timeline
   durations) being scattered throughout the effect code.
2. Validation: The settings bundle is checked once, at construction, so the
   simulation never has to guard against NaN/Infinity inside its step loop.

Exports:
    EffectSettings: The scalar configuration bundle supplied by the host.
    SETTINGS_KEYS: Mapping of the host settings keys to field names.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, fields
import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)


# Wobbly model
GRID_WIDTH: int = 4
GRID_HEIGHT: int = 4
IMPULSE_INTENSITY: float = 0.8
MOVEMENT_THRESHOLD: float = 1.0
MASS_CEILING: float = 100.0
WOBBLY_SPRING_SCALE: float = 0.5
MAXIMIZED_TILES: int = 10
WOBBLY_TIMELINE_DURATION: float = 1000.0 * 1000.0

# Resize effect
RESIZE_SPRING_SCALE: float = 0.2
CORNER_RESIZING_DIVIDER: float = 6.0
SETTLE_OVERSHOOT: float = 1.5
SETTLE_DURATION: float = 1000.0
SETTLE_FRICTION_GAIN: float = 10.0
SETTLE_BASE_FREQUENCY: float = 10.0

# Host settings keys (as stored by the preferences backend) -> field names
SETTINGS_KEYS: Dict[str, str] = {
    "friction": "friction",
    "spring-k": "spring_k",
    "speedup-factor-divider": "speedup_factor",
    "mass": "mass",
    "x-tiles": "x_tiles",
    "y-tiles": "y_tiles",
    "maximize-effect": "maximize_effect",
    "resize-effect": "resize_effect",
}


def _as_tile_count(name: str, value: Any) -> int:
    """Accept ints and integral floats (the settings backend stores doubles)."""
    if isinstance(value, bool):
        raise ValueError(f"'{name}' must be an integer >= 1, got {value!r}.")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"'{name}' must be an integer >= 1, got {value!r}.")
        value = int(value)
    if not isinstance(value, int) or value < 1:
        raise ValueError(f"'{name}' must be an integer >= 1, got {value!r}.")
    return value


@dataclass
class EffectSettings:
    """
    Scalar configuration bundle for both effects.

    Defaults match the values the preferences dialog resets to.
    """
    friction: float = 3.5
    spring_k: float = 3.8
    speedup_factor: float = 12.0
    mass: float = 70.0
    x_tiles: int = 6
    y_tiles: int = 6
    maximize_effect: bool = True
    resize_effect: bool = False

    def __post_init__(self) -> None:
        for name in ("friction", "spring_k", "speedup_factor"):
            value = getattr(self, name)
            if not value > 0.0:
                raise ValueError(f"'{name}' must be greater than zero, got {value!r}.")

        if not 0.0 < self.mass < MASS_CEILING:
            raise ValueError(f"'mass' must lie in (0, {MASS_CEILING:g}), got {self.mass!r}.")

        self.x_tiles = _as_tile_count("x_tiles", self.x_tiles)
        self.y_tiles = _as_tile_count("y_tiles", self.y_tiles)
        self.maximize_effect = bool(self.maximize_effect)
        self.resize_effect = bool(self.resize_effect)

    @property
    def effective_mass(self) -> float:
        """Mass used by the integrator (heavier setting -> lighter divisor)."""
        return MASS_CEILING - self.mass

    @property
    def wobbly_stiffness(self) -> float:
        return self.spring_k * WOBBLY_SPRING_SCALE

    @property
    def resize_spring_factor(self) -> float:
        return self.spring_k * RESIZE_SPRING_SCALE

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> EffectSettings:
        """
        Build settings from a plain dictionary.

        Both the field names and the host settings keys are accepted.

        Raises:
            ValueError: On unknown keys or invalid values.
        """
        field_names = {f.name for f in fields(EffectSettings)}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = SETTINGS_KEYS.get(key, key)
            if name not in field_names:
                raise ValueError(f"Unknown setting: '{key}'")
            kwargs[name] = value

        settings = EffectSettings(**kwargs)
        logger.debug(f"Loaded effect settings: {settings}")
        return settings
