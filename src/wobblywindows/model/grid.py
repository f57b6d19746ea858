from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from wobblywindows.config import GRID_WIDTH, GRID_HEIGHT

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class GridPoint:
    """
    Read-only snapshot of one point-mass of the control net.
    """
    index: int
    x: float
    y: float
    velocity_x: float
    velocity_y: float
    force_x: float
    force_y: float
    immobile: bool


@dataclass(frozen=True)
class Spring:
    """
    Read-only snapshot of one spring: endpoint indices and rest offset of b relative to a.
    """
    a: int
    b: int
    offset_x: float
    offset_y: float

    @property
    def is_horizontal(self) -> bool:
        return self.offset_y == 0.0


class SpringGrid:
    """
    Fixed-topology arena of point-masses connected by axis-aligned springs.

    Points are stored row-major in numpy arrays; springs reference points by index.
    """
    def __init__(
        self,
        width: float,
        height: float,
        grid_width: int = GRID_WIDTH,
        grid_height: int = GRID_HEIGHT,
    ) -> None:
        """
        Initialize the grid in its undeformed rectangular layout.

        Args:
            width: Width of the surface.
            height: Height of the surface.
            grid_width: Number of points per row.
            grid_height: Number of points per column.

        Raises:
            ValueError: If the surface is empty or the grid has fewer than 2 points per axis.
        """
        if not (width > 0.0 and height > 0.0):
            raise ValueError(f"Surface size must be positive, got {width!r} x {height!r}.")
        if grid_width < 2 or grid_height < 2:
            raise ValueError(f"Grid needs at least 2x2 points, got {grid_width}x{grid_height}.")

        self.width = float(width)
        self.height = float(height)
        self.grid_width = grid_width
        self.grid_height = grid_height

        n = grid_width * grid_height
        self.positions: npt.NDArray[np.float64] = np.zeros((n, 2), dtype=np.float64)
        self.velocities: npt.NDArray[np.float64] = np.zeros((n, 2), dtype=np.float64)
        self.forces: npt.NDArray[np.float64] = np.zeros((n, 2), dtype=np.float64)
        self.immobile: npt.NDArray[np.bool_] = np.zeros(n, dtype=np.bool_)

        self.spring_indices: npt.NDArray[np.int64] = np.empty((0, 2), dtype=np.int64)
        self.spring_offsets: npt.NDArray[np.float64] = np.empty((0, 2), dtype=np.float64)

        self._initialize_positions()
        self._initialize_springs()

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}({self.grid_width}x{self.grid_height}, "
                f"size={self.width:g}x{self.height:g}, springs={self.number_of_springs})")

    @property
    def number_of_points(self) -> int:
        return len(self.positions)

    @property
    def number_of_springs(self) -> int:
        return len(self.spring_indices)

    @property
    def horizontal_padding(self) -> float:
        """Rest length of a horizontal spring."""
        return self.width / (self.grid_width - 1)

    @property
    def vertical_padding(self) -> float:
        """Rest length of a vertical spring."""
        return self.height / (self.grid_height - 1)

    def _initialize_positions(self) -> None:
        gx, gy = np.meshgrid(
            np.arange(self.grid_width, dtype=np.float64),
            np.arange(self.grid_height, dtype=np.float64),
        )
        self.positions[:, 0] = (gx.ravel() * self.width) / (self.grid_width - 1)
        self.positions[:, 1] = (gy.ravel() * self.height) / (self.grid_height - 1)

    def _initialize_springs(self) -> None:
        """Build the springs; each rest offset is the difference of the laid-out endpoint positions."""
        positions = self.positions

        indices: list[tuple[int, int]] = []
        offsets: list[tuple[float, float]] = []

        # Row-major scan; horizontal spring to the left neighbour first, then vertical to the one above
        i = 0
        for grid_y in range(self.grid_height):
            for grid_x in range(self.grid_width):
                if grid_x > 0:
                    indices.append((i - 1, i))
                    offsets.append((float(positions[i, 0] - positions[i - 1, 0]), 0.0))
                if grid_y > 0:
                    indices.append((i - self.grid_width, i))
                    offsets.append((0.0, float(positions[i, 1] - positions[i - self.grid_width, 1])))
                i += 1

        self.spring_indices = np.array(indices, dtype=np.int64)
        self.spring_offsets = np.array(offsets, dtype=np.float64)

    def point(self, index: int) -> GridPoint:
        """Return a snapshot of the point at a row-major index."""
        return GridPoint(
            index=index,
            x=float(self.positions[index, 0]),
            y=float(self.positions[index, 1]),
            velocity_x=float(self.velocities[index, 0]),
            velocity_y=float(self.velocities[index, 1]),
            force_x=float(self.forces[index, 0]),
            force_y=float(self.forces[index, 1]),
            immobile=bool(self.immobile[index]),
        )

    def spring(self, index: int) -> Spring:
        a, b = self.spring_indices[index]
        offset_x, offset_y = self.spring_offsets[index]
        return Spring(a=int(a), b=int(b), offset_x=float(offset_x), offset_y=float(offset_y))

    def nearest_point(self, x: float, y: float) -> int:
        """
        Index of the point nearest to (x, y) by Manhattan distance.

        Ties resolve to the first point in row-major order.
        """
        distance = np.abs(self.positions[:, 0] - x) + np.abs(self.positions[:, 1] - y)
        return int(np.argmin(distance))

    def springs_touching(self, indices: list[int]) -> list[tuple[int, int]]:
        """
        List (spring, other endpoint) for every spring with an endpoint in `indices`.

        Endpoint a is checked first; a spring joining two listed points reports b.
        """
        selected = set(indices)
        touching: list[tuple[int, int]] = []
        for k, (a, b) in enumerate(self.spring_indices.tolist()):
            if a in selected:
                touching.append((k, b))
            elif b in selected:
                touching.append((k, a))
        return touching
