"""Gesture classification tags handed over by the window manager glue."""
from enum import IntFlag, StrEnum


class Operation(StrEnum):
    """The gesture that activated an effect."""
    MOVE = "move"
    RESIZE_W = "resize-w"
    RESIZE_E = "resize-e"
    RESIZE_S = "resize-s"
    RESIZE_N = "resize-n"
    RESIZE_NW = "resize-nw"
    RESIZE_NE = "resize-ne"
    RESIZE_SE = "resize-se"
    RESIZE_SW = "resize-sw"
    MAXIMIZED = "maximized"
    UNMAXIMIZED = "unmaximized"

    @property
    def is_resize(self) -> bool:
        return self in RESIZE_OPERATIONS

    @property
    def is_wobbly(self) -> bool:
        return self in (Operation.MOVE, Operation.MAXIMIZED, Operation.UNMAXIMIZED)


RESIZE_OPERATIONS: frozenset[Operation] = frozenset({
    Operation.RESIZE_W,
    Operation.RESIZE_E,
    Operation.RESIZE_S,
    Operation.RESIZE_N,
    Operation.RESIZE_NW,
    Operation.RESIZE_NE,
    Operation.RESIZE_SE,
    Operation.RESIZE_SW,
})


class MaximizeFlags(IntFlag):
    """Which axes a window is maximized along."""
    NONE = 0
    HORIZONTAL = 1
    VERTICAL = 2
    BOTH = HORIZONTAL | VERTICAL
