from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt

from wobblywindows.config import (
    SETTLE_DURATION, SETTLE_OVERSHOOT, SETTLE_FRICTION_GAIN, SETTLE_BASE_FREQUENCY,
)
from wobblywindows.utils import ease_out_cubic

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class SettleAnimator:
    """
    Decaying oscillation that replaces the pointer-driven resize delta after release.
    """

    def __init__(
        self,
        delta_x: float,
        delta_y: float,
        friction: float,
        duration: float = SETTLE_DURATION,
    ) -> None:
        """
        Initialize the animator from the delta at release time.

        Args:
            delta_x, delta_y: Resize delta when the gesture ended.
            friction: Friction setting; higher friction oscillates faster.
            duration: Length of the settle timeline.

        Raises:
            ValueError: If `duration` is not positive.
        """
        if not duration > 0.0:
            raise ValueError(f"'duration' must be greater than zero, got {duration!r}.")

        self.stop_delta_x = delta_x * SETTLE_OVERSHOOT
        self.stop_delta_y = delta_y * SETTLE_OVERSHOOT
        self.frequency = friction * SETTLE_FRICTION_GAIN + SETTLE_BASE_FREQUENCY
        self.duration = float(duration)

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(stop=({self.stop_delta_x:g}, {self.stop_delta_y:g}), "
                f"frequency={self.frequency:g}, duration={self.duration:g})")

    def progress(self, elapsed: float) -> float:
        """Normalized timeline progress in [0, 1]."""
        return min(max(elapsed / self.duration, 0.0), 1.0)

    def is_complete(self, elapsed: float) -> bool:
        return elapsed >= self.duration

    def delta_at(self, progress: float) -> tuple[float, float]:
        """
        Delta for a given progress.

        The result is truncated toward zero, which gives the visible stair-step
        at low amplitude.
        """
        wave = ease_out_cubic(progress) * math.sin(progress * self.frequency)
        return (
            float(math.trunc(self.stop_delta_x * wave)),
            float(math.trunc(self.stop_delta_y * wave)),
        )

    def curve(self, samples: int = 200) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """
        Sample the x delta over the whole timeline.

        Returns:
            (progress, delta_x) arrays.
        """
        progress = np.linspace(0.0, 1.0, samples)
        deltas = np.array([self.delta_at(p)[0] for p in progress], dtype=np.float64)
        return progress, deltas

    def plot(self) -> None:
        """
        Plot the settle curve.
        """
        progress, deltas = self.curve(500)

        plt.rcParams["figure.constrained_layout.use"] = True
        fig = plt.figure(figsize=(7, 5))

        plt.plot(progress * self.duration, deltas, 'r', lw=2)

        plt.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)
        plt.minorticks_on()
        plt.grid(visible=True, which='minor', axis='both', linestyle=':', color='gray', lw=0.5)

        plt.title("Resize settle")
        plt.xlabel("Time since release")
        plt.ylabel("Delta")
        plt.show()
