"""
Wobbly Model
============
Spring grid + solver + the gestures that perturb it.

Gestures pin one or more grid points (immobile anchors) and inject velocity
impulses into their spring neighbours; the solver then lets the rest of the net
lag elastically behind.
"""
from __future__ import annotations

import logging
from typing import Optional

from wobblywindows.config import GRID_WIDTH, GRID_HEIGHT, IMPULSE_INTENSITY
from wobblywindows.model.grid import SpringGrid
from wobblywindows.solvers.solver import SpringSolver

logger = logging.getLogger(__name__)


class WobblyModel:
    """
    Spring-mass simulation of a window's control net.
    """

    def __init__(
        self,
        width: float,
        height: float,
        friction: float,
        stiffness: float,
        mass: float,
        grid_width: int = GRID_WIDTH,
        grid_height: int = GRID_HEIGHT,
    ) -> None:
        """
        Initialize the model with the net at rest.

        Args:
            width: Surface width.
            height: Surface height.
            friction: Velocity damping coefficient.
            stiffness: Spring constant.
            mass: Configured mass in (0, 100).
            grid_width: Points per row.
            grid_height: Points per column.

        Raises:
            ValueError: On an empty surface or invalid material constants.
        """
        self.grid: Optional[SpringGrid] = SpringGrid(width, height, grid_width, grid_height)
        self.solver: Optional[SpringSolver] = SpringSolver(self.grid, friction, stiffness, mass)
        self.immobile_object: Optional[int] = None
        self.intensity = IMPULSE_INTENSITY

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(grid={self.grid!r}, movement={self.movement})"

    @property
    def disposed(self) -> bool:
        return self.grid is None

    @property
    def width(self) -> float:
        return self.grid.width

    @property
    def height(self) -> float:
        return self.grid.height

    @property
    def movement(self) -> bool:
        """Whether the last step left any mobile point above the force threshold."""
        return self.solver.movement if self.solver is not None else False

    def dispose(self) -> None:
        """Release the grid; safe to call more than once."""
        self.grid = None
        self.solver = None
        self.immobile_object = None

    def _pin(self, index: int) -> None:
        self.grid.immobile[index] = True

    def _push_neighbours(self, pinned: list[int]) -> None:
        """Kick the free end of every spring attached to a pinned point back along its rest offset."""
        grid = self.grid
        for spring, other in grid.springs_touching(pinned):
            grid.velocities[other] -= grid.spring_offsets[spring] * self.intensity

    def grab(self, x: float, y: float) -> int:
        """
        Pin the point nearest to (x, y) and make it follow `move`.

        Args:
            x, y: Grab position relative to the surface's top-left corner.

        Returns:
            Index of the grabbed point.
        """
        index = self.grid.nearest_point(x, y)
        self.immobile_object = index
        self._pin(index)
        logger.debug(f"Grabbed point {index} at ({x:.1f}, {y:.1f}).")
        return index

    def maximize(self) -> list[int]:
        """
        Pin the four corner points and push the net inwards.

        Returns:
            Indices of the pinned corners (top-left, top-right, bottom-left, bottom-right).
        """
        if self.immobile_object is not None:
            self.grid.immobile[self.immobile_object] = False
        self.immobile_object = None

        w, h = self.width, self.height
        corners = [
            self.grid.nearest_point(0.0, 0.0),
            self.grid.nearest_point(w, 0.0),
            self.grid.nearest_point(0.0, h),
            self.grid.nearest_point(w, h),
        ]
        for index in corners:
            self._pin(index)

        self._push_neighbours(corners)
        self.step(0)
        logger.debug(f"Maximize impulse applied, corners pinned: {corners}.")
        return corners

    def unmaximize(self) -> int:
        """
        Pin the centre point and push its neighbours.

        Returns:
            Index of the pinned centre point.
        """
        index = self.grid.nearest_point(self.width / 2, self.height / 2)
        self.immobile_object = index
        self._pin(index)

        self._push_neighbours([index])
        self.step(0)
        logger.debug(f"Unmaximize impulse applied, centre point {index} pinned.")
        return index

    def move(self, delta_x: float, delta_y: float) -> None:
        """Drag the immobile object (if any) by the given delta."""
        if self.immobile_object is None or self.grid is None:
            return
        self.grid.positions[self.immobile_object, 0] += delta_x
        self.grid.positions[self.immobile_object, 1] += delta_y

    def step(self, sub_steps: int) -> bool:
        """Advance the simulation; see SpringSolver.step."""
        return self.solver.step(sub_steps)
