"""
Bicubic Surface Evaluator
=========================
Maps the 4x4 control net onto the fine tessellation sampled by the renderer.

Why is this file needed?
------------------------
1. Precompute: The Bezier weight of every control point at every tile vertex
   only depends on the tile counts, so it is computed once per activation.
2. Per-frame: Each tick the 16 live control points are recombined through the
   weight table into the displaced-position table.
3. Sampling: The renderer queries the table once per mesh vertex with
   normalized (u, v) coordinates.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt

from wobblywindows.analysis.bezier import basis_weight_table
from wobblywindows.utils import clamp, round_half_up

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

CONTROL_POINTS: int = 16


class SurfaceEvaluator:
    """
    Evaluates the displaced tile vertices of a bicubic Bezier patch.
    """

    def __init__(self, tiles_x: int, tiles_y: int, width: float, height: float) -> None:
        """
        Initialize the weight table and the rest/displaced tables.

        Args:
            tiles_x: Number of tiles along x.
            tiles_y: Number of tiles along y.
            width: Width of the undeformed surface.
            height: Height of the undeformed surface.

        Raises:
            ValueError: On invalid tile counts or an empty surface.
        """
        if not (width > 0.0 and height > 0.0):
            raise ValueError(f"Surface size must be positive, got {width!r} x {height!r}.")

        self.weights: npt.NDArray[np.float64] = basis_weight_table(tiles_x, tiles_y)
        self.tiles_x = int(tiles_x)
        self.tiles_y = int(tiles_y)
        self.width = float(width)
        self.height = float(height)

        tx = np.arange(self.tiles_x + 1) / self.tiles_x
        ty = np.arange(self.tiles_y + 1) / self.tiles_y
        gx, gy = np.meshgrid(tx * self.width, ty * self.height)
        self.rest: npt.NDArray[np.float64] = np.stack([gx, gy], axis=-1)
        self.displaced: npt.NDArray[np.float64] = self.rest.copy()

        logger.debug(f"Surface weights precomputed for {self.tiles_x}x{self.tiles_y} tiles.")

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(tiles={self.tiles_x}x{self.tiles_y}, "
                f"size={self.width:g}x{self.height:g})")

    def evaluate(self, control_points: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        """
        Recompute the displaced-position table from the live control points.

        Args:
            control_points: (16, 2) positions in row-major order.

        Raises:
            ValueError: If the array is not (16, 2).

        Returns:
            The displaced table, shape (tiles_y + 1, tiles_x + 1, 2).
        """
        control_points = np.asarray(control_points, dtype=np.float64)
        if control_points.shape != (CONTROL_POINTS, 2):
            raise ValueError(f"Expected shape ({CONTROL_POINTS}, 2), got {control_points.shape}.")

        np.matmul(self.weights, control_points, out=self.displaced)
        return self.displaced

    def tile_index(self, u: float, v: float) -> tuple[int, int]:
        """Nearest tile vertex (ix, iy) for normalized coordinates."""
        ix = clamp(round_half_up(u * self.tiles_x), 0, self.tiles_x)
        iy = clamp(round_half_up(v * self.tiles_y), 0, self.tiles_y)
        return ix, iy

    def sample(self, u: float, v: float) -> tuple[float, float]:
        """Displaced position of the tile vertex nearest to (u, v)."""
        ix, iy = self.tile_index(u, v)
        x, y = self.displaced[iy, ix]
        return float(x), float(y)

    def displacement_at(self, u: float, v: float) -> tuple[float, float]:
        """Offset of the nearest tile vertex from its undeformed position."""
        ix, iy = self.tile_index(u, v)
        dx, dy = self.displaced[iy, ix] - self.rest[iy, ix]
        return float(dx), float(dy)

    def vertex(
        self,
        u: float,
        v: float,
        paint_width: float,
        paint_height: float,
        offset: tuple[float, float] = (0.0, 0.0),
    ) -> tuple[float, float]:
        """
        Paint-space vertex for (u, v).

        The displaced position is shifted by `offset` and scaled by the ratio of
        the current paint size to the simulated size, so concurrent resizing stays
        consistent.
        """
        x, y = self.sample(u, v)
        return (
            (x + offset[0]) * (paint_width / self.width),
            (y + offset[1]) * (paint_height / self.height),
        )

    def plot(self, control_points: npt.NDArray[np.float64] | None = None) -> None:
        """
        Plot the displaced tile mesh (and optionally the control net).
        """
        mesh = self.displaced

        plt.rcParams["figure.constrained_layout.use"] = True
        fig = plt.figure(figsize=(7, 5))

        for row in mesh:
            plt.plot(row[:, 0], row[:, 1], 'b', lw=0.8)
        for col in mesh.transpose(1, 0, 2):
            plt.plot(col[:, 0], col[:, 1], 'b', lw=0.8)

        if control_points is not None:
            plt.plot(control_points[:, 0], control_points[:, 1], 'ro', ms=4)

        plt.gca().invert_yaxis()
        plt.gca().set_aspect("equal")
        plt.title(f"Deformed surface ({self.tiles_x}x{self.tiles_y} tiles)")
        plt.xlabel("x")
        plt.ylabel("y")
        plt.show()
