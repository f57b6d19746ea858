"""
Wobbly windows deformation core.

Computes the per-frame deformation of a window surface for move, maximize,
unmaximize and resize gestures. The compositor glue, settings storage and the
renderer are supplied by the host.
"""
from wobblywindows.config import EffectSettings
from wobblywindows.controller.effects import EffectManager, should_animate_maximize
from wobblywindows.effects.base import Effect, FrameResult
from wobblywindows.effects.resize import ResizeEffect
from wobblywindows.effects.wobbly import WobblyEffect
from wobblywindows.model.geometry import Rect
from wobblywindows.model.operations import Operation, MaximizeFlags

__all__ = [
    "EffectSettings",
    "EffectManager",
    "should_animate_maximize",
    "Effect",
    "FrameResult",
    "ResizeEffect",
    "WobblyEffect",
    "Rect",
    "Operation",
    "MaximizeFlags",
]
