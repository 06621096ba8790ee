from .transform import screen_to_plane, plane_to_screen, anchored_position, center_pointer
from .gestures import GestureTracker, GestureDescriptor, MAX_POINTERS
from .animator import CameraAnimator, next_value, rescale_for_gesture, retarget_zoom, advance_zoom
from .dispatcher import InteractionDispatcher
from .scheduler import FrameScheduler

__all__ = ['screen_to_plane', 'plane_to_screen', 'anchored_position', 'center_pointer',
           'GestureTracker', 'GestureDescriptor', 'MAX_POINTERS',
           'CameraAnimator', 'next_value', 'rescale_for_gesture', 'retarget_zoom', 'advance_zoom',
           'InteractionDispatcher', 'FrameScheduler']
