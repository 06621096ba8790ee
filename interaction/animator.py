"""
Camera updates that keep a focus point fixed on screen.

Gestures (drag/pinch) move the camera directly. The wheel only moves a
target scale; the camera eases towards it over the following frames.
"""
from dataclasses import replace
import math
import numpy as np
from state import CameraState, AnimationState
from interaction.gestures import GestureDescriptor
from interaction.transform import screen_to_plane, anchored_position

EASING_RATE = 0.01  # Proportion of the remaining distance covered per millisecond
WHEEL_ZOOM_BASE = 1.001
SCALE_EPSILON = np.finfo(np.float64).eps


def next_value(prev: float, target: float, elapsed: float, rate: float = EASING_RATE) -> float:
    """Value an eased quantity should have after `elapsed` ms, starting at `prev`."""
    # dx/dt = rate * (target - x), x(0) = prev
    # x(t) = target - (target - prev) * e^(-rate * t)
    return target - (target - prev) * math.exp(-rate * elapsed)


def has_converged(scale: float, target: float) -> bool:
    """True once scale is within machine epsilon of target."""
    return abs(scale - target) < SCALE_EPSILON


def rescale_for_gesture(camera: CameraState, prev_gesture: GestureDescriptor,
                        new_gesture: GestureDescriptor) -> CameraState:
    """
    Move the camera so the plane point under the previous gesture focus
    ends up under the new focus.

    A higher distance between pointers means more zoomed in, whereas a higher
    scale means more zoomed out, so the scale is multiplied by the inverse of
    the change in pointer distance.
    """
    anchor = screen_to_plane(prev_gesture.focus, camera)

    scale = camera.scale
    # A zero-distance pinch carries no scale information
    if prev_gesture.relative_scale > 0 and new_gesture.relative_scale > 0:
        scale *= prev_gesture.relative_scale / new_gesture.relative_scale

    return CameraState(anchored_position(anchor, new_gesture.focus, scale), scale)


def retarget_zoom(animation: AnimationState, anchor_screen_pos, delta_y: float, now: float,
                  base: float = WHEEL_ZOOM_BASE) -> tuple[AnimationState, bool]:
    """
    Apply a wheel event to the animation.

    Positive delta_y (scrolling down) zooms out. Returns the new state and
    whether a frame has to be requested, which is only the case when the
    animation was idle.
    """
    try:
        target = animation.target_scale * base ** delta_y
    except OverflowError:
        target = math.inf
    # Keep the old target rather than leave the float range
    if not 0 < target < math.inf:
        target = animation.target_scale

    start = not animation.animating
    animation = replace(
        animation,
        target_scale=target,
        anchor_screen_pos=np.array(anchor_screen_pos, dtype=np.float64),
        last_frame_time=now if start else animation.last_frame_time,
    )
    return animation, start


def advance_zoom(camera: CameraState, animation: AnimationState, focus, now: float,
                 rate: float = EASING_RATE) -> tuple[CameraState, AnimationState, bool]:
    """
    One animation step at timestamp `now` (ms).

    The camera scale eases towards the target while the plane point under
    `focus` stays put. Returns the new camera, the new animation state and
    whether another frame should be requested. Idle animations are returned
    unchanged.
    """
    if not animation.animating:
        return camera, animation, False

    elapsed = now - animation.last_frame_time
    anchor = screen_to_plane(focus, camera)
    scale = next_value(camera.scale, animation.target_scale, elapsed, rate)
    if scale == camera.scale and elapsed > 0:
        # The remaining distance is below float spacing for this step
        scale = animation.target_scale
    camera = CameraState(anchored_position(anchor, focus, scale), scale)

    if has_converged(scale, animation.target_scale):
        return camera, replace(animation, last_frame_time=None), False
    return camera, replace(animation, last_frame_time=now), True


class CameraAnimator:
    """Owns the camera and its zoom animation."""

    def __init__(self, initial_scale: float = 0.01, rate: float = EASING_RATE,
                 wheel_zoom_base: float = WHEEL_ZOOM_BASE):
        self.camera = CameraState(scale=initial_scale)
        self.animation = AnimationState(target_scale=initial_scale)
        self.rate = rate
        self.wheel_zoom_base = wheel_zoom_base

    @property
    def animating(self) -> bool:
        return self.animation.animating

    def apply_gesture(self, prev_gesture: GestureDescriptor | None,
                      new_gesture: GestureDescriptor | None) -> bool:
        """Direct (non-animated) drag/pinch update. Returns whether the camera moved."""
        if prev_gesture is None or new_gesture is None:
            return False
        self.camera = rescale_for_gesture(self.camera, prev_gesture, new_gesture)
        return True

    def on_wheel(self, anchor_screen_pos, delta_y: float, now: float) -> bool:
        """Retarget the zoom. Returns True when a frame has to be requested."""
        self.animation, start = retarget_zoom(
            self.animation, anchor_screen_pos, delta_y, now, self.wheel_zoom_base)
        return start

    def on_animation_frame(self, now: float, gesture_focus=None) -> bool:
        """
        Step the zoom animation.

        An active gesture's focus takes priority over the last wheel position.
        Returns True while another frame is needed.
        """
        focus = gesture_focus
        if focus is None:
            focus = self.animation.anchor_screen_pos
        if focus is None:
            focus = np.zeros(2)
        self.camera, self.animation, reschedule = advance_zoom(
            self.camera, self.animation, focus, now, self.rate)
        return reschedule

    def reset(self, scale: float) -> None:
        """Return to the origin at `scale` and stop any running animation."""
        self.camera = CameraState(scale=scale)
        self.animation = AnimationState(target_scale=scale)
