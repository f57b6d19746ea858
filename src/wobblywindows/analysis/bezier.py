from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


def bernstein_basis(t: float | npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """
    Evaluate the four cubic Bernstein polynomials.

    Args:
        t: Curve parameter(s) in [0, 1].

    Returns:
        Array of shape (..., 4): [(1-t)^3, 3t(1-t)^2, 3t^2(1-t), t^3].
    """
    t = np.asarray(t, dtype=np.float64)
    s = 1.0 - t
    return np.stack([s**3, 3.0 * t * s**2, 3.0 * t**2 * s, t**3], axis=-1)


def basis_weight_table(tiles_x: int, tiles_y: int) -> npt.NDArray[np.float64]:
    """
    Bicubic Bezier weights of the 4x4 control net at every tile vertex.

    Entry [y, x, 4*i + j] is By[i] * Bx[j], matching the row-major order of the
    control points.

    Args:
        tiles_x: Number of tiles along x.
        tiles_y: Number of tiles along y.

    Raises:
        ValueError: If a tile count is not an integer >= 1.

    Returns:
        Array of shape (tiles_y + 1, tiles_x + 1, 16).
    """
    for name, value in (("tiles_x", tiles_x), ("tiles_y", tiles_y)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
            raise ValueError(f"'{name}' must be an integer >= 1, got {value!r}.")

    bx = bernstein_basis(np.arange(tiles_x + 1) / tiles_x)  # (X+1, 4)
    by = bernstein_basis(np.arange(tiles_y + 1) / tiles_y)  # (Y+1, 4)

    weights = np.einsum("yi,xj->yxij", by, bx)
    return weights.reshape(tiles_y + 1, tiles_x + 1, 16)
