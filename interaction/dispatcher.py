import time
from typing import Callable
import numpy as np
from interaction.animator import CameraAnimator
from interaction.gestures import GestureTracker
from interaction.transform import center_pointer


def default_clock() -> float:
    return time.perf_counter() * 1000.0


class InteractionDispatcher:
    """
    Routes raw input events to the gesture tracker and camera animator, then
    hands the camera to the render callback.

    Raw positions are offsets from the top-left of the viewport, in the same
    units as viewport_size(). Everything past this class works in centered
    screen coordinates.
    """

    def __init__(self, animator: CameraAnimator, tracker: GestureTracker,
                 render: Callable[[np.ndarray, float], None],
                 viewport_size: Callable[[], tuple],
                 request_frame: Callable[[Callable[[float], None]], None],
                 clock: Callable[[], float] = default_clock):
        self.animator = animator
        self.tracker = tracker
        self.render = render
        self.viewport_size = viewport_size
        self.request_frame = request_frame
        self.clock = clock

    @property
    def camera(self):
        return self.animator.camera

    def center(self, raw_pos) -> np.ndarray:
        return center_pointer(raw_pos, self.viewport_size())

    def on_pointer_down(self, pointer_id, raw_pos) -> None:
        self.tracker.on_pointer_down(pointer_id, self.center(raw_pos))
        self._render()

    def on_pointer_move(self, pointer_id, raw_pos) -> None:
        if pointer_id not in self.tracker:
            return
        prev_gesture = self.tracker.current_gesture()
        self.tracker.on_pointer_move(pointer_id, self.center(raw_pos))
        self.animator.apply_gesture(prev_gesture, self.tracker.current_gesture())
        self._render()

    def on_pointer_up(self, pointer_id) -> None:
        self.tracker.on_pointer_up(pointer_id)
        self._render()

    def on_pointer_cancel(self, pointer_id) -> None:
        self.tracker.on_pointer_cancel(pointer_id)
        self._render()

    def on_wheel(self, raw_pos, delta_y: float) -> None:
        if self.animator.on_wheel(self.center(raw_pos), delta_y, self.clock()):
            self.request_frame(self.on_animation_frame)
        self._render()

    def on_animation_frame(self, now: float) -> None:
        """Frame callback. A no-op once the animation has gone idle."""
        if not self.animator.animating:
            return
        gesture = self.tracker.current_gesture()
        focus = gesture.focus if gesture is not None else None
        if self.animator.on_animation_frame(now, focus):
            self.request_frame(self.on_animation_frame)
        self._render()

    def on_resize(self) -> None:
        # Camera is unchanged, only the picture needs repainting
        self._render()

    def reset_view(self, scale: float) -> None:
        self.animator.reset(scale)
        self._render()

    def _render(self) -> None:
        camera = self.animator.camera
        self.render(camera.position.copy(), camera.scale)
