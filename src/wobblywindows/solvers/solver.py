"""
Spring-Mass Solver
==================
Time integration for the wobbly control net.

Why is this file needed?
------------------------
1. Physics: It implements Hooke's law on the rest-offset violation of every
   spring, velocity damping and semi-implicit Euler integration.
2. Time-Stepping: It advances the grid a whole number of fixed sub-steps per
   animation tick and reports whether the net is still in motion.

Note: This module should be pure Python/NumPy/Numba and should NOT know about
the compositor or the renderer.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
import numba as nb

from wobblywindows.config import MOVEMENT_THRESHOLD, MASS_CEILING

if TYPE_CHECKING:
    import numpy.typing as npt

    from wobblywindows.model.grid import SpringGrid

logger = logging.getLogger(__name__)


@nb.jit(cache=True)
def _step_kernel(
    positions: npt.NDArray[np.float64],
    velocities: npt.NDArray[np.float64],
    forces: npt.NDArray[np.float64],
    immobile: npt.NDArray[np.bool_],
    spring_indices: npt.NDArray[np.int64],
    spring_offsets: npt.NDArray[np.float64],
    stiffness: float,
    friction: float,
    mass: float,
    sub_steps: int,
    threshold: float,
) -> bool:
    """
    Run `sub_steps + 1` passes over the grid, in place.

    Args:
        positions, velocities, forces: (N, 2) point state arrays.
        immobile: (N, ) pin flags.
        spring_indices: (S, 2) endpoint indices.
        spring_offsets: (S, 2) rest offset of b relative to a.
        stiffness, friction, mass: Material constants.
        sub_steps: Number of extra passes.
        threshold: Force magnitude above which a point counts as moving.

    Returns:
        True if any mobile point exceeded the threshold during any pass.
    """
    movement = False
    n_points = positions.shape[0]
    n_springs = spring_indices.shape[0]

    for _ in range(sub_steps + 1):
        # Hooke's law along both axes
        for s in range(n_springs):
            a = spring_indices[s, 0]
            b = spring_indices[s, 1]

            fx = stiffness * (positions[b, 0] - positions[a, 0] - spring_offsets[s, 0])
            forces[a, 0] += fx
            forces[b, 0] -= fx

            fy = stiffness * (positions[b, 1] - positions[a, 1] - spring_offsets[s, 1])
            forces[a, 1] += fy
            forces[b, 1] -= fy

        for i in range(n_points):
            if not immobile[i]:
                forces[i, 0] -= friction * velocities[i, 0]
                forces[i, 1] -= friction * velocities[i, 1]

                velocities[i, 0] += forces[i, 0] / mass
                velocities[i, 1] += forces[i, 1] / mass

                positions[i, 0] += velocities[i, 0]
                positions[i, 1] += velocities[i, 1]

                if abs(forces[i, 0]) > threshold or abs(forces[i, 1]) > threshold:
                    movement = True

            forces[i, 0] = 0.0
            forces[i, 1] = 0.0

    return movement


class SpringSolver:
    """
    Semi-implicit Euler integrator for a SpringGrid.
    """

    def __init__(
        self,
        grid: SpringGrid,
        friction: float,
        stiffness: float,
        mass: float,
    ) -> None:
        """
        Initialize the solver.

        Args:
            grid: The grid to advance (mutated in place).
            friction: Velocity damping coefficient, > 0.
            stiffness: Spring constant, > 0.
            mass: Configured mass in (0, 100); the integrator divides by `100 - mass`.

        Raises:
            ValueError: If a constant is outside its valid range.
        """
        if not friction > 0.0:
            raise ValueError(f"'friction' must be greater than zero, got {friction!r}.")
        if not stiffness > 0.0:
            raise ValueError(f"'stiffness' must be greater than zero, got {stiffness!r}.")
        if not 0.0 < mass < MASS_CEILING:
            raise ValueError(f"'mass' must lie in (0, {MASS_CEILING:g}), got {mass!r}.")

        self.grid = grid
        self.friction = float(friction)
        self.stiffness = float(stiffness)
        self.mass = MASS_CEILING - float(mass)
        self.movement: bool = False

    def step(self, sub_steps: int) -> bool:
        """
        Advance the grid by `sub_steps + 1` passes.

        Calling with 0 still performs exactly one pass.

        Args:
            sub_steps: Non-negative number of extra passes.

        Raises:
            ValueError: If `sub_steps` is negative or not integral.

        Returns:
            The movement flag of this call.
        """
        if isinstance(sub_steps, float):
            if not sub_steps.is_integer():
                raise ValueError(f"'sub_steps' must be integral, got {sub_steps!r}.")
            sub_steps = int(sub_steps)
        if sub_steps < 0:
            raise ValueError(f"'sub_steps' must be non-negative, got {sub_steps!r}.")

        grid = self.grid
        self.movement = bool(_step_kernel(
            grid.positions,
            grid.velocities,
            grid.forces,
            grid.immobile,
            grid.spring_indices,
            grid.spring_offsets,
            self.stiffness,
            self.friction,
            self.mass,
            int(sub_steps),
            MOVEMENT_THRESHOLD,
        ))
        return self.movement

    def spring_forces(self) -> npt.NDArray[np.float64]:
        """
        Net spring force on every point for the current positions, without integrating.

        Returns:
            (N, 2) array.
        """
        grid = self.grid
        a = grid.spring_indices[:, 0]
        b = grid.spring_indices[:, 1]
        f = self.stiffness * (grid.positions[b] - grid.positions[a] - grid.spring_offsets)

        net = np.zeros_like(grid.positions)
        np.add.at(net, a, f)
        np.subtract.at(net, b, f)
        return net
