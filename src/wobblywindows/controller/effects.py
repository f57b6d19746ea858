"""
Effect Coordination
===================
This module owns the active effect of every surface on behalf of the host.

Why is this file needed?
------------------------
1. Supersession: Two effects must never deform the same surface at once, so a
   new activation always destroys the previous effect first.
2. Policy: It decides which gestures start which effect (move vs. resize vs.
   maximize) according to the settings and the vertical-maximize rules.
3. Clock: It forwards the host's frame clock to every effect as time elapsed
   since that effect's activation, and forgets effects that terminated.

Classes:
    EffectManager: Per-surface effect registry.
"""
from __future__ import annotations

import logging
from typing import Dict, Hashable, Mapping, Optional

from wobblywindows.config import EffectSettings
from wobblywindows.effects.base import Effect, FrameResult
from wobblywindows.effects.resize import ResizeEffect
from wobblywindows.effects.wobbly import WobblyEffect
from wobblywindows.model.geometry import Rect
from wobblywindows.model.operations import Operation, MaximizeFlags

logger = logging.getLogger(__name__)


def should_animate_maximize(
    flags: MaximizeFlags,
    source: Rect,
    target: Rect,
    monitor: Rect,
) -> bool:
    """
    Decide whether a maximize transition deserves the maximize wobble.

    A full maximize always does. A vertical-only maximize only does when the
    frame visibly jumped: its top or bottom edge moved, or either side changed
    whether it is snapped to the monitor edge.

    Args:
        flags: Maximize state after the size change.
        source: Frame before the size change.
        target: Frame after the size change.
        monitor: Bounds of the monitor holding the window.
    """
    if flags == MaximizeFlags.BOTH:
        return True
    if flags != MaximizeFlags.VERTICAL:
        return False

    left_snap_changed = (source.left == monitor.left) != (target.left == monitor.left)
    right_snap_changed = (source.right == monitor.right) != (target.right == monitor.right)

    return (
        source.top != target.top
        or source.bottom != target.bottom
        or left_snap_changed
        or right_snap_changed
    )


class EffectManager:
    """
    Keeps at most one live effect per surface.
    """

    def __init__(self, settings: Optional[EffectSettings] = None) -> None:
        self.settings = settings if settings is not None else EffectSettings()
        self.effects: Dict[Hashable, Effect] = {}
        self._started_at: Dict[Hashable, float] = {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(active={len(self.effects)})"

    def get(self, surface_id: Hashable) -> Optional[Effect]:
        return self.effects.get(surface_id)

    def _install(self, surface_id: Hashable, effect: Effect, now: float) -> Effect:
        self.effects[surface_id] = effect
        self._started_at[surface_id] = now
        logger.info(f"Surface {surface_id!r}: {effect.__class__.__name__} ({effect.operation}) installed.")
        return effect

    def destroy_effect(self, surface_id: Hashable) -> None:
        """Destroy and forget the surface's effect, if any."""
        effect = self.effects.pop(surface_id, None)
        self._started_at.pop(surface_id, None)
        if effect is not None:
            effect.destroy()

    def grab_begin(
        self,
        surface_id: Hashable,
        operation: Operation,
        surface: Rect,
        pointer: tuple[float, float],
        now: float,
    ) -> Optional[Effect]:
        """
        A move or resize grab started.

        Returns:
            The new effect, or None if the gesture does not get one.
        """
        effect_class: type[WobblyEffect] | type[ResizeEffect]
        if operation == Operation.MOVE:
            effect_class = WobblyEffect
        elif operation.is_resize and self.settings.resize_effect:
            effect_class = ResizeEffect
        else:
            logger.debug(f"Surface {surface_id!r}: no effect for grab '{operation}'.")
            return None

        self.destroy_effect(surface_id)
        return self._install(surface_id, effect_class(operation, self.settings, surface, pointer), now)

    def grab_end(self, surface_id: Hashable) -> None:
        effect = self.effects.get(surface_id)
        if effect is not None:
            effect.end()

    def surface_moved(
        self,
        surface_id: Hashable,
        position: tuple[float, float],
        pointer: tuple[float, float],
    ) -> None:
        """
        Forward a move notification.

        Wobbly effects follow the surface position; resize effects follow the pointer.
        """
        effect = self.effects.get(surface_id)
        if isinstance(effect, WobblyEffect):
            effect.on_move(*position)
        elif isinstance(effect, ResizeEffect):
            effect.on_move(*pointer)

    def unmaximize_begin(
        self,
        surface_id: Hashable,
        surface: Rect,
        now: float,
    ) -> Optional[Effect]:
        """
        The surface is being unmaximized.

        A move wobble in progress (drag-to-unmaximize) is left alone.
        """
        effect = self.effects.get(surface_id)
        if effect is not None and effect.operation == Operation.MOVE:
            return None

        self.destroy_effect(surface_id)
        return self._install(
            surface_id, WobblyEffect(Operation.UNMAXIMIZED, self.settings, surface), now
        )

    def size_changed(
        self,
        surface_id: Hashable,
        flags: MaximizeFlags,
        source: Rect,
        target: Rect,
        monitor: Rect,
        pointer: tuple[float, float],
        now: float,
    ) -> Optional[Effect]:
        """
        A size change completed.

        Args:
            surface_id: The surface.
            flags: Maximize state after the change.
            source: Frame before the change.
            target: Frame after the change.
            monitor: Bounds of the surface's monitor.
            pointer: Current pointer position (used to re-grab a moving surface).
            now: Host clock.

        Returns:
            The newly installed effect, if any.
        """
        if flags:
            self.destroy_effect(surface_id)
            if not self.settings.maximize_effect:
                return None
            if not should_animate_maximize(flags, source, target, monitor):
                logger.debug(f"Surface {surface_id!r}: maximize without visible jump, no effect.")
                return None
            return self._install(
                surface_id, WobblyEffect(Operation.MAXIMIZED, self.settings, target), now
            )

        effect = self.effects.get(surface_id)
        if isinstance(effect, ResizeEffect):
            effect.on_resize(target.width, target.height)
            return None

        # Moved surface changed size (e.g. tiled while dragged): restart at the new geometry
        if effect is not None and effect.operation == Operation.MOVE:
            self.destroy_effect(surface_id)
            return self._install(
                surface_id, WobblyEffect(Operation.MOVE, self.settings, target, pointer), now
            )
        return None

    def surface_destroyed(self, surface_id: Hashable) -> None:
        self.destroy_effect(surface_id)

    def disable(self) -> None:
        """Destroy every effect; safe to call repeatedly."""
        for surface_id in list(self.effects):
            self.destroy_effect(surface_id)
        logger.info("All effects disabled.")

    def advance(
        self,
        now: float,
        actor_positions: Optional[Mapping[Hashable, tuple[float, float]]] = None,
    ) -> Dict[Hashable, FrameResult]:
        """
        Tick every effect.

        Args:
            now: Host clock.
            actor_positions: Where each surface is currently painted, if known.
                A move wobble does not request a redraw while its surface still
                lags behind the last delivered move.

        Returns:
            Frame result per surface. Surfaces whose effect terminated report
            `still_animating=False` once and are then forgotten.
        """
        results: Dict[Hashable, FrameResult] = {}
        for surface_id, effect in list(self.effects.items()):
            elapsed = now - self._started_at[surface_id]
            if isinstance(effect, WobblyEffect) and actor_positions is not None:
                result = effect.advance(elapsed, actor_position=actor_positions.get(surface_id))
            else:
                result = effect.advance(elapsed)
            results[surface_id] = result
            if not result.still_animating:
                self.effects.pop(surface_id, None)
                self._started_at.pop(surface_id, None)
        return results
