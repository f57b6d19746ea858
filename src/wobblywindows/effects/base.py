from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging

from wobblywindows.model.operations import Operation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameResult:
    """
    Outcome of one animation tick.

    Attributes:
        still_animating: False once the effect has torn itself down.
        needs_redraw: Whether the host should repaint the surface this frame.
    """
    still_animating: bool
    needs_redraw: bool = False


DEAD_FRAME = FrameResult(still_animating=False, needs_redraw=False)


class Effect(ABC):
    """
    Abstract base class for per-gesture deformation effects.

    The host owns the frame loop: it calls `advance` once per frame and queries
    `deform_vertex`/`displacement_at` while painting.
    """

    def __init__(self, operation: Operation) -> None:
        self.operation = operation
        self._destroyed = False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(operation='{self.operation}', alive={self.is_alive})"

    @property
    def is_alive(self) -> bool:
        return not self._destroyed

    def destroy(self) -> None:
        """Tear the effect down; further calls are no-ops."""
        if self._destroyed:
            return
        self._destroyed = True
        self._release()
        logger.debug(f"{self.__class__.__name__} ({self.operation}) destroyed.")

    @abstractmethod
    def _release(self) -> None:
        """Drop timers, simulations and subscriptions."""
        pass

    @abstractmethod
    def advance(self, elapsed: float) -> FrameResult:
        """Advance to `elapsed` time units since activation."""
        pass

    @abstractmethod
    def end(self) -> None:
        """The gesture was released."""
        pass

    @abstractmethod
    def deform_vertex(self, u: float, v: float, paint_width: float, paint_height: float) -> tuple[float, float]:
        """Paint-space position for a vertex at normalized (u, v) on a paint surface of the given size."""
        pass

    @abstractmethod
    def displacement_at(self, u: float, v: float) -> tuple[float, float]:
        """Offset of the vertex at normalized (u, v) from its undeformed position."""
        pass
