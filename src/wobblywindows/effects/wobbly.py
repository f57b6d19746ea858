"""
Wobbly Effect
=============
Drives a WobblyModel from the host's frame clock and exposes the deformed
surface to the renderer.

The effect is activated by one of three gestures:

* MOVE: the grabbed point follows the window; the rest of the net lags behind.
  The effect keeps running until the grab is released and the net settles.
* MAXIMIZED: the corners are pinned and the net snaps inwards.
* UNMAXIMIZED: the centre is pinned and the net springs outwards.
"""
from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

from wobblywindows.analysis.surface import SurfaceEvaluator
from wobblywindows.config import EffectSettings, MAXIMIZED_TILES, WOBBLY_TIMELINE_DURATION
from wobblywindows.effects.base import Effect, FrameResult, DEAD_FRAME
from wobblywindows.model.operations import Operation
from wobblywindows.solvers.wobbly_model import WobblyModel

if TYPE_CHECKING:
    from wobblywindows.model.geometry import Rect

logger = logging.getLogger(__name__)


class WobblyEffect(Effect):
    """
    Spring-mass wobble of a whole surface.
    """

    def __init__(
        self,
        operation: Operation,
        settings: EffectSettings,
        surface: Rect,
        pointer: Optional[tuple[float, float]] = None,
    ) -> None:
        """
        Initialize the simulation and apply the activating gesture.

        Args:
            operation: MOVE, MAXIMIZED or UNMAXIMIZED.
            settings: Effect configuration.
            surface: Frame of the surface at activation (screen coordinates).
            pointer: Pointer position at activation (screen coordinates); required for MOVE.

        Raises:
            ValueError: On an unsupported operation, a missing pointer for MOVE,
                or an invalid surface.
        """
        if not operation.is_wobbly:
            raise ValueError(f"Unsupported operation for {self.__class__.__name__}: '{operation}'")
        if operation == Operation.MOVE and pointer is None:
            raise ValueError("A pointer position is required to grab the surface.")

        super().__init__(operation)

        self.speedup_factor = settings.speedup_factor
        self.width, self.height = surface.size

        if operation == Operation.MAXIMIZED:
            tiles_x = tiles_y = MAXIMIZED_TILES
        else:
            tiles_x, tiles_y = settings.x_tiles, settings.y_tiles

        self.evaluator: Optional[SurfaceEvaluator] = SurfaceEvaluator(tiles_x, tiles_y, self.width, self.height)
        self.model: Optional[WobblyModel] = WobblyModel(
            width=self.width,
            height=self.height,
            friction=settings.friction,
            stiffness=settings.wobbly_stiffness,
            mass=settings.mass,
        )

        # Last position delivered through on_move, and the accumulated inverse translation
        self.position: tuple[float, float] = surface.position
        self.offset_x: float = 0.0
        self.offset_y: float = 0.0

        self._elapsed_old: float = 0.0
        self.ended: bool = False

        match operation:
            case Operation.UNMAXIMIZED:
                self.model.unmaximize()
                self.ended = True
            case Operation.MAXIMIZED:
                self.model.maximize()
                self.ended = True
            case Operation.MOVE:
                self.model.grab(*surface.local(*pointer))

        logger.debug(f"WobblyEffect started: op={operation}, size={self.width:g}x{self.height:g}, "
                     f"tiles={tiles_x}x{tiles_y}")

    @property
    def movement(self) -> bool:
        return self.model.movement if self.model is not None else False

    def _release(self) -> None:
        if self.model is not None:
            self.model.dispose()
        self.model = None
        self.evaluator = None

    def end(self) -> None:
        """Grab released: let the net settle, then terminate."""
        if not self.is_alive:
            return
        self.ended = True
        logger.debug("WobblyEffect grab released.")

    def on_move(self, x: float, y: float) -> None:
        """
        The surface moved to (x, y) in screen coordinates.

        The grabbed point is dragged along; the painted mesh is shifted back by the
        same amount so only the lag of the rest of the net is visible.
        """
        if self.model is None:
            return

        delta_x = x - self.position[0]
        delta_y = y - self.position[1]
        self.position = (x, y)

        self.offset_x -= delta_x
        self.offset_y -= delta_y
        self.model.move(delta_x, delta_y)

    def advance(self, elapsed: float, actor_position: Optional[tuple[float, float]] = None) -> FrameResult:
        """
        Step the simulation up to `elapsed` and re-evaluate the surface.

        Args:
            elapsed: Time units since activation (monotonic).
            actor_position: Where the surface is currently painted. When given for
                a MOVE effect, no redraw is requested while a move notification is
                still in flight.

        Returns:
            The frame result; `still_animating` is False once the effect terminated.
        """
        if self.model is None:
            return DEAD_FRAME

        if elapsed >= WOBBLY_TIMELINE_DURATION:
            logger.debug("WobblyEffect timeline completed.")
            self.destroy()
            return DEAD_FRAME

        if self.ended and not self.model.movement:
            logger.debug("WobblyEffect settled.")
            self.destroy()
            return DEAD_FRAME

        sub_steps = max(0, int((elapsed - self._elapsed_old) / self.speedup_factor))
        self.model.step(sub_steps)
        self._elapsed_old = elapsed

        self.evaluator.evaluate(self.model.grid.positions)

        needs_redraw = (
            self.operation != Operation.MOVE
            or actor_position is None
            or tuple(actor_position) == self.position
        )
        return FrameResult(still_animating=True, needs_redraw=needs_redraw)

    def deform_vertex(self, u: float, v: float, paint_width: float, paint_height: float) -> tuple[float, float]:
        if self.evaluator is None:
            return u * paint_width, v * paint_height
        return self.evaluator.vertex(u, v, paint_width, paint_height, offset=(self.offset_x, self.offset_y))

    def displacement_at(self, u: float, v: float) -> tuple[float, float]:
        if self.evaluator is None:
            return 0.0, 0.0
        dx, dy = self.evaluator.displacement_at(u, v)
        return dx + self.offset_x, dy + self.offset_y
