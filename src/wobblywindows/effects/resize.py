"""
Resize Effect
=============
Closed-form "elastic resize" deformation.

Why is this file needed?
------------------------
1. Physics-free: Unlike the wobbly effect there is no mesh simulation; every
   vertex is displaced directly by a polynomial bow keyed on the dragged
   edge or corner.
2. Feel: The bow amplitude is a delta integrated from pointer motion while
   dragging, and a decaying oscillation (SettleAnimator) after release.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional, TYPE_CHECKING

import numpy as np

from wobblywindows.config import EffectSettings, CORNER_RESIZING_DIVIDER
from wobblywindows.effects.base import Effect, FrameResult, DEAD_FRAME
from wobblywindows.effects.settle import SettleAnimator
from wobblywindows.model.operations import Operation

if TYPE_CHECKING:
    import numpy.typing as npt

    from wobblywindows.model.geometry import Rect

    Scalar = float | npt.NDArray[np.float64]

logger = logging.getLogger(__name__)


def _pow2(a: Scalar) -> Scalar:
    return a * a


def deform(
    operation: Operation,
    x: Scalar,
    y: Scalar,
    width: float,
    height: float,
    delta_x: float,
    delta_y: float,
    pickup_x: float,
    pickup_y: float,
) -> tuple[Scalar, Scalar]:
    """
    Displace a vertex (or arrays of vertices) for a resize gesture.

    Straight edges bow quadratically away from the pick-up line; corners apply
    a softened bow on both axes, windowed toward the two adjacent edges.

    Args:
        operation: One of the eight RESIZE_* operations.
        x, y: Vertex position in paint space.
        width, height: Paint surface size.
        delta_x, delta_y: Current resize delta.
        pickup_x, pickup_y: Grab point relative to the surface's top-left corner.

    Raises:
        ValueError: If `operation` is not a resize operation.

    Returns:
        The displaced (x, y).
    """
    w, h = width, height
    c = CORNER_RESIZING_DIVIDER

    match operation:
        case Operation.RESIZE_W:
            return x + delta_x * (w - x) * _pow2(y - pickup_y) / (h * h * w), y
        case Operation.RESIZE_E:
            return x + delta_x * x * _pow2(y - pickup_y) / (h * h * w), y
        case Operation.RESIZE_S:
            return x, y + delta_y * y * _pow2(x - pickup_x) / (w * w * h)
        case Operation.RESIZE_N:
            return x, y + delta_y * (h - y) * _pow2(x - pickup_x) / (w * w * h)
        case Operation.RESIZE_NW:
            return (
                x + (delta_x / c) * (w - x) * _pow2(y) / (h * h * w),
                y + (delta_y / c) * (h - y) * _pow2(x) / (w * w * h),
            )
        case Operation.RESIZE_NE:
            return (
                x + (delta_x / c) * x * _pow2(y) / (h * h * w),
                y + (delta_y / c) * (h - y) * _pow2(w - x) / (w * w * h),
            )
        case Operation.RESIZE_SE:
            return (
                x + (delta_x / c) * x * _pow2(h - y) / (h * h * w),
                y + (delta_y / c) * y * _pow2(w - x) / (w * w * h),
            )
        case Operation.RESIZE_SW:
            return (
                x + (delta_x / c) * (w - x) * _pow2(y - h) / (h * h * w),
                y + (delta_y / c) * y * _pow2(x) / (w * w * h),
            )
        case _:
            raise ValueError(f"Not a resize operation: '{operation}'")


@dataclass
class ResizeState:
    """
    Mutable record of one resize gesture.
    """
    operation: Operation
    pickup_x: float
    pickup_y: float
    pointer_x: float
    pointer_y: float
    spring_factor: float
    delta_x: float = 0.0
    delta_y: float = 0.0

    def accumulate(self, pointer_x: float, pointer_y: float) -> None:
        """Integrate pointer motion into the delta: delta += (old - new) * spring_factor."""
        self.delta_x += (self.pointer_x - pointer_x) * self.spring_factor
        self.delta_y += (self.pointer_y - pointer_y) * self.spring_factor
        self.pointer_x, self.pointer_y = pointer_x, pointer_y

    def deform(self, x: Scalar, y: Scalar, width: float, height: float) -> tuple[Scalar, Scalar]:
        return deform(
            self.operation, x, y, width, height,
            self.delta_x, self.delta_y, self.pickup_x, self.pickup_y,
        )


class ResizeEffect(Effect):
    """
    Elastic bow while an edge or corner is dragged, then a settle oscillation.
    """

    def __init__(
        self,
        operation: Operation,
        settings: EffectSettings,
        surface: Rect,
        pointer: tuple[float, float],
    ) -> None:
        """
        Initialize the resize state at grab time.

        Args:
            operation: One of the RESIZE_* operations.
            settings: Effect configuration.
            surface: Frame of the surface at activation (screen coordinates).
            pointer: Pointer position at activation (screen coordinates).

        Raises:
            ValueError: On a non-resize operation or an empty surface.
        """
        if not operation.is_resize:
            raise ValueError(f"Unsupported operation for {self.__class__.__name__}: '{operation}'")
        if not (surface.width > 0.0 and surface.height > 0.0):
            raise ValueError(f"Surface size must be positive, got {surface.width!r} x {surface.height!r}.")

        super().__init__(operation)

        pickup_x, pickup_y = surface.local(*pointer)
        self.state = ResizeState(
            operation=operation,
            pickup_x=pickup_x,
            pickup_y=pickup_y,
            pointer_x=pointer[0],
            pointer_y=pointer[1],
            spring_factor=settings.resize_spring_factor,
        )
        self.friction = settings.friction
        self.width, self.height = surface.size

        self.settle: Optional[SettleAnimator] = None
        self._released_at: float = 0.0
        self._elapsed: float = 0.0
        self._dirty: bool = False

        logger.debug(f"ResizeEffect started: op={operation}, pickup=({pickup_x:.1f}, {pickup_y:.1f})")

    @property
    def delta(self) -> tuple[float, float]:
        return self.state.delta_x, self.state.delta_y

    def _release(self) -> None:
        self.settle = None

    def on_move(self, pointer_x: float, pointer_y: float) -> None:
        """Pointer moved while resizing (ignored once the settle phase started)."""
        if not self.is_alive or self.settle is not None:
            return
        self.state.accumulate(pointer_x, pointer_y)
        self._dirty = True

    def on_resize(self, width: float, height: float) -> None:
        """The surface was resized; used by `displacement_at`."""
        if width > 0.0 and height > 0.0:
            self.width, self.height = width, height

    def end(self) -> None:
        """Gesture released: start the settle timeline from the current delta."""
        if not self.is_alive or self.settle is not None:
            return
        self.settle = SettleAnimator(self.state.delta_x, self.state.delta_y, self.friction)
        self._released_at = self._elapsed
        logger.debug(f"ResizeEffect released, settling from {self.settle!r}.")

    def advance(self, elapsed: float) -> FrameResult:
        """
        Update the delta for this frame.

        While dragging the delta only changes through `on_move`; after release it
        follows the settle curve until the timeline completes.
        """
        if not self.is_alive:
            return DEAD_FRAME
        self._elapsed = elapsed

        if self.settle is None:
            needs_redraw, self._dirty = self._dirty, False
            return FrameResult(still_animating=True, needs_redraw=needs_redraw)

        since_release = elapsed - self._released_at
        if self.settle.is_complete(since_release):
            logger.debug("ResizeEffect settle completed.")
            self.destroy()
            return DEAD_FRAME

        self.state.delta_x, self.state.delta_y = self.settle.delta_at(self.settle.progress(since_release))
        return FrameResult(still_animating=True, needs_redraw=True)

    def deform_vertex(self, u: float, v: float, paint_width: float, paint_height: float) -> tuple[float, float]:
        x, y = u * paint_width, v * paint_height
        if not self.is_alive:
            return x, y
        return self.state.deform(x, y, paint_width, paint_height)

    def displacement_at(self, u: float, v: float) -> tuple[float, float]:
        x, y = self.deform_vertex(u, v, self.width, self.height)
        return x - u * self.width, y - v * self.height
