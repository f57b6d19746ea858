"""Headless demo: drive a move wobble and a resize settle with a synthetic frame clock."""
import logging

from wobblywindows.config import EffectSettings
from wobblywindows.controller.effects import EffectManager
from wobblywindows.logging_config import setup_logging
from wobblywindows.model.geometry import Rect
from wobblywindows.model.operations import Operation

logger = logging.getLogger("wobblywindows.demo")

FRAME = 16.0  # ~60 fps


def run_until_settled(manager: EffectManager, surface_id: str, start: float, limit: int = 10_000) -> tuple[int, float]:
    """Tick the manager until the surface's effect terminates; returns (frames, clock)."""
    now = start
    for frame in range(1, limit + 1):
        now += FRAME
        result = manager.advance(now).get(surface_id)
        if result is None or not result.still_animating:
            return frame, now
    raise RuntimeError(f"Effect on {surface_id!r} did not settle after {limit} frames.")


def main() -> None:
    settings = EffectSettings(resize_effect=True)
    manager = EffectManager(settings)
    now = 0.0

    # Drag a window 120 px to the right over 10 frames, then let go
    frame = Rect(100.0, 100.0, 640.0, 480.0)
    manager.grab_begin("window", Operation.MOVE, frame, pointer=(420.0, 110.0), now=now)
    for i in range(1, 11):
        now += FRAME
        manager.surface_moved("window", position=(100.0 + 12.0 * i, 100.0), pointer=(420.0 + 12.0 * i, 110.0))
        manager.advance(now)
    effect = manager.get("window")
    logger.info(f"Corner displacement while dragging: {effect.displacement_at(0.0, 1.0)}")
    manager.grab_end("window")
    frames, now = run_until_settled(manager, "window", now)
    logger.info(f"Move wobble settled after {frames} frames.")

    # Drag the east edge outwards by 80 px, then let go
    frame = Rect(220.0, 100.0, 640.0, 480.0)
    manager.grab_begin("window", Operation.RESIZE_E, frame, pointer=(860.0, 340.0), now=now)
    for i in range(1, 9):
        now += FRAME
        manager.surface_moved("window", position=frame.position, pointer=(860.0 + 10.0 * i, 340.0))
        manager.advance(now)
    logger.info(f"Resize delta at release: {manager.get('window').delta}")
    manager.grab_end("window")
    frames, now = run_until_settled(manager, "window", now)
    logger.info(f"Resize settle finished after {frames} frames.")


if __name__ == "__main__":
    setup_logging(logging.DEBUG)
    main()
