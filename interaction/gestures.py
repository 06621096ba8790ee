"""Pointer bookkeeping for drag (one pointer) and pinch (two pointers) gestures."""
from dataclasses import dataclass
import math
import numpy as np

MAX_POINTERS = 2


@dataclass(frozen=True)
class GestureDescriptor:
    """Summary of the active pointers.

    focus is the centered screen position the gesture holds on to.
    relative_scale is the distance between the two pointers of a pinch,
    and always 1 for a single-pointer drag.
    """
    focus: np.ndarray
    relative_scale: float


class GestureTracker:
    """Tracks at most MAX_POINTERS pointers by id.

    Pointers beyond the limit are ignored for as long as they stay down, so
    moves and releases of untracked ids are no-ops.
    """

    def __init__(self):
        # Pointer id -> centered screen position
        self.pointers: dict = {}

    def __len__(self):
        return len(self.pointers)

    def __contains__(self, pointer_id):
        return pointer_id in self.pointers

    def on_pointer_down(self, pointer_id, screen_pos) -> bool:
        if len(self.pointers) >= MAX_POINTERS:
            return False
        self.pointers[pointer_id] = np.array(screen_pos, dtype=np.float64)
        return True

    def on_pointer_move(self, pointer_id, screen_pos) -> bool:
        if pointer_id not in self.pointers:
            return False
        self.pointers[pointer_id] = np.array(screen_pos, dtype=np.float64)
        return True

    def on_pointer_up(self, pointer_id) -> bool:
        return self.pointers.pop(pointer_id, None) is not None

    on_pointer_cancel = on_pointer_up

    def current_gesture(self) -> GestureDescriptor | None:
        """Describe the current gesture, or None when no pointer is down."""
        positions = list(self.pointers.values())
        if len(positions) == 2:
            first, second = positions
            focus = (first + second) / 2
            distance = math.hypot(second[0] - first[0], second[1] - first[1])
            return GestureDescriptor(focus, distance)
        if len(positions) == 1:
            return GestureDescriptor(positions[0].copy(), 1.0)
        return None
