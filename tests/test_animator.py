import math

import numpy as np
import pytest

from state import CameraState, AnimationState
from interaction.gestures import GestureDescriptor
from interaction.transform import screen_to_plane
from interaction.animator import (
    CameraAnimator,
    EASING_RATE,
    SCALE_EPSILON,
    advance_zoom,
    next_value,
    rescale_for_gesture,
    retarget_zoom,
)


def drag(x, y):
    return GestureDescriptor(np.array([x, y]), 1.0)


class TestNextValue:

    def test_no_time_no_change(self):
        assert next_value(2.0, 5.0, 0.0) == 2.0

    def test_closed_form(self):
        expected = 5.0 - 3.0 * math.exp(-EASING_RATE * 16.0)
        assert math.isclose(next_value(2.0, 5.0, 16.0), expected)

    def test_moves_towards_target_without_overshoot(self):
        value = next_value(10.0, 1.0, 50.0)
        assert 1.0 < value < 10.0

    def test_frame_rate_independent(self):
        one_step = next_value(1.0, 3.0, 40.0)
        two_steps = next_value(next_value(1.0, 3.0, 20.0), 3.0, 20.0)
        assert math.isclose(one_step, two_steps, rel_tol=1e-12)


class TestGestureUpdate:

    def test_drag_scenario(self):
        camera = CameraState(np.array([0.0, 0.0]), 1.0)
        after = rescale_for_gesture(camera, drag(100.0, 0.0), drag(150.0, 0.0))

        np.testing.assert_array_equal(after.position, [-50.0, 0.0])
        assert after.scale == 1.0
        np.testing.assert_array_equal(screen_to_plane((150.0, 0.0), after), [100.0, 0.0])

    def test_drag_keeps_point_under_pointer(self):
        camera = CameraState(np.array([3.0, -7.0]), 0.01)
        before = screen_to_plane((-20.0, 35.0), camera)
        after = rescale_for_gesture(camera, drag(-20.0, 35.0), drag(64.0, -12.0))

        np.testing.assert_allclose(screen_to_plane((64.0, -12.0), after), before)
        assert after.scale == camera.scale

    def test_pinch_scenario(self):
        camera = CameraState(np.array([2.0, 1.0]), 0.5)
        prev = GestureDescriptor(np.array([0.0, 0.0]), 100.0)
        new = GestureDescriptor(np.array([0.0, 0.0]), 50.0)
        midpoint_plane = screen_to_plane((0.0, 0.0), camera)

        after = rescale_for_gesture(camera, prev, new)

        assert after.scale == pytest.approx(2 * camera.scale)
        np.testing.assert_allclose(screen_to_plane((0.0, 0.0), after), midpoint_plane)

    def test_pinch_with_moving_midpoint(self):
        camera = CameraState(np.array([0.0, 0.0]), 1.0)
        prev = GestureDescriptor(np.array([10.0, 20.0]), 80.0)
        new = GestureDescriptor(np.array([-30.0, 5.0]), 160.0)
        anchor = screen_to_plane(prev.focus, camera)

        after = rescale_for_gesture(camera, prev, new)

        assert after.scale / camera.scale == pytest.approx(80.0 / 160.0)
        np.testing.assert_allclose(screen_to_plane(new.focus, after), anchor)

    @pytest.mark.parametrize("prev_distance, new_distance", [(0.0, 40.0), (40.0, 0.0), (0.0, 0.0)])
    def test_degenerate_pinch_keeps_scale(self, prev_distance, new_distance):
        camera = CameraState(np.array([1.0, 1.0]), 0.25)
        prev = GestureDescriptor(np.array([5.0, 5.0]), prev_distance)
        new = GestureDescriptor(np.array([9.0, 1.0]), new_distance)

        after = rescale_for_gesture(camera, prev, new)

        assert after.scale == 0.25
        np.testing.assert_allclose(screen_to_plane(new.focus, after), screen_to_plane(prev.focus, camera))

    def test_input_camera_untouched(self):
        camera = CameraState(np.array([0.0, 0.0]), 1.0)
        rescale_for_gesture(camera, drag(0.0, 0.0), drag(10.0, 10.0))
        np.testing.assert_array_equal(camera.position, [0.0, 0.0])


class TestWheel:

    def test_positive_delta_zooms_out(self):
        animation = AnimationState(target_scale=1.0)
        animation, _ = retarget_zoom(animation, (0.0, 0.0), 100.0, now=0.0)
        assert animation.target_scale == pytest.approx(1.001 ** 100)

    def test_monotonic(self):
        animation = AnimationState(target_scale=1.0)
        previous = animation.target_scale
        for _ in range(20):
            animation, _ = retarget_zoom(animation, (0.0, 0.0), 53.0, now=0.0)
            assert animation.target_scale > previous
            previous = animation.target_scale
        for _ in range(40):
            animation, _ = retarget_zoom(animation, (0.0, 0.0), -53.0, now=0.0)
            assert animation.target_scale < previous
            previous = animation.target_scale

    def test_only_first_event_starts_animation(self):
        animation = AnimationState(target_scale=1.0)
        animation, start = retarget_zoom(animation, (1.0, 2.0), 100.0, now=5.0)
        assert start
        assert animation.last_frame_time == 5.0

        animation, start = retarget_zoom(animation, (3.0, 4.0), 100.0, now=9.0)
        assert not start
        assert animation.last_frame_time == 5.0
        np.testing.assert_array_equal(animation.anchor_screen_pos, [3.0, 4.0])

    def test_target_stays_in_float_range(self):
        animation = AnimationState(target_scale=1.0)
        animation, _ = retarget_zoom(animation, (0.0, 0.0), 1e9, now=0.0)
        assert animation.target_scale == 1.0
        animation, _ = retarget_zoom(animation, (0.0, 0.0), -1e9, now=0.0)
        assert animation.target_scale == 1.0


class TestAdvanceZoom:

    def test_idle_is_a_no_op(self):
        camera = CameraState(np.array([1.0, 2.0]), 3.0)
        animation = AnimationState(target_scale=6.0)

        new_camera, new_animation, reschedule = advance_zoom(camera, animation, (0.0, 0.0), now=100.0)

        assert new_camera is camera
        assert new_animation is animation
        assert not reschedule

    def test_step_keeps_focus_fixed(self):
        camera = CameraState(np.array([1.0, 2.0]), 1.0)
        animation = AnimationState(target_scale=2.0, anchor_screen_pos=np.array([40.0, -10.0]), last_frame_time=0.0)
        focus = np.array([40.0, -10.0])
        before = screen_to_plane(focus, camera)

        new_camera, new_animation, reschedule = advance_zoom(camera, animation, focus, now=16.0)

        assert new_camera.scale == pytest.approx(next_value(1.0, 2.0, 16.0))
        np.testing.assert_allclose(screen_to_plane(focus, new_camera), before)
        assert new_animation.last_frame_time == 16.0
        assert reschedule
        # Inputs are not mutated
        assert camera.scale == 1.0
        assert animation.last_frame_time == 0.0

    @pytest.mark.parametrize("start, target", [(1.0, 2.0), (0.01, 0.001), (5.0, 400.0), (1e-6, 1e6)])
    @pytest.mark.parametrize("elapsed", [[16.7], [1.0, 33.0, 7.5], [250.0]])
    def test_converges_and_goes_idle(self, start, target, elapsed):
        camera = CameraState(np.array([0.0, 0.0]), start)
        animation = AnimationState(target_scale=target, anchor_screen_pos=np.zeros(2), last_frame_time=0.0)
        now = 0.0
        reschedule = True
        for step in range(100000):
            now += elapsed[step % len(elapsed)]
            camera, animation, reschedule = advance_zoom(camera, animation, np.zeros(2), now)
            if not reschedule:
                break
            # Still animating exactly while the threshold has not been crossed
            assert abs(camera.scale - target) >= SCALE_EPSILON

        assert not reschedule
        assert not animation.animating
        assert abs(camera.scale - target) < SCALE_EPSILON


class TestCameraAnimator:

    def test_wheel_then_frames_reach_target(self):
        animator = CameraAnimator(initial_scale=0.01)
        assert animator.on_wheel((100.0, 50.0), 200.0, now=0.0)
        anchor_plane = screen_to_plane((100.0, 50.0), animator.camera)

        now = 0.0
        while animator.on_animation_frame(now + 16.0):
            now += 16.0

        assert not animator.animating
        assert animator.camera.scale == pytest.approx(0.01 * 1.001 ** 200)
        np.testing.assert_allclose(screen_to_plane((100.0, 50.0), animator.camera), anchor_plane)

    def test_gesture_focus_overrides_wheel_anchor(self):
        animator = CameraAnimator(initial_scale=1.0)
        animator.on_wheel((100.0, 0.0), 100.0, now=0.0)
        gesture_focus = np.array([-50.0, 25.0])
        before = screen_to_plane(gesture_focus, animator.camera)

        animator.on_animation_frame(20.0, gesture_focus)

        np.testing.assert_allclose(screen_to_plane(gesture_focus, animator.camera), before)

    def test_apply_gesture_without_descriptor_does_nothing(self):
        animator = CameraAnimator(initial_scale=1.0)
        assert not animator.apply_gesture(None, drag(1.0, 1.0))
        assert not animator.apply_gesture(drag(1.0, 1.0), None)
        np.testing.assert_array_equal(animator.camera.position, [0.0, 0.0])

    def test_reset_stops_animation(self):
        animator = CameraAnimator(initial_scale=1.0)
        animator.apply_gesture(drag(0.0, 0.0), drag(30.0, 30.0))
        animator.on_wheel((0.0, 0.0), 500.0, now=0.0)

        animator.reset(0.5)

        assert not animator.animating
        assert animator.camera.scale == 0.5
        assert animator.animation.target_scale == 0.5
        np.testing.assert_array_equal(animator.camera.position, [0.0, 0.0])
        assert not animator.on_animation_frame(10.0)


def test_stalled_step_snaps_to_target():
    # Two ulps away from the target: a 16ms step rounds back onto the same float
    target = 1.5
    start = target - 2 * math.ulp(target)
    camera = CameraState(np.array([0.0, 0.0]), start)
    animation = AnimationState(target_scale=target, anchor_screen_pos=np.zeros(2), last_frame_time=0.0)

    camera, animation, reschedule = advance_zoom(camera, animation, np.zeros(2), now=16.0)

    assert camera.scale == target
    assert not reschedule


def test_zero_elapsed_frame_does_not_snap():
    camera = CameraState(np.array([0.0, 0.0]), 1.0)
    animation = AnimationState(target_scale=2.0, anchor_screen_pos=np.zeros(2), last_frame_time=10.0)

    camera, animation, reschedule = advance_zoom(camera, animation, np.zeros(2), now=10.0)

    assert camera.scale == 1.0
    assert reschedule


def test_goes_idle_once_within_machine_epsilon():
    target = 0.01
    camera = CameraState(np.array([0.0, 0.0]), target + 1e-16)
    animation = AnimationState(target_scale=target, anchor_screen_pos=np.zeros(2), last_frame_time=0.0)

    camera, animation, reschedule = advance_zoom(camera, animation, np.zeros(2), now=1.0)

    assert 0 < abs(camera.scale - target) < SCALE_EPSILON
    assert not reschedule
    assert not animation.animating


def test_keeps_animating_just_outside_machine_epsilon():
    target = 0.01
    camera = CameraState(np.array([0.0, 0.0]), target + 1e-15)
    animation = AnimationState(target_scale=target, anchor_screen_pos=np.zeros(2), last_frame_time=0.0)

    camera, animation, reschedule = advance_zoom(camera, animation, np.zeros(2), now=1.0)

    assert abs(camera.scale - target) >= SCALE_EPSILON
    assert reschedule
