from .camera_state import CameraState, AnimationState
from .preferences_state import PreferencesState, save_preferences, load_preferences, DEFAULT_EXPRESSION

__all__ = ['CameraState', 'AnimationState', 'PreferencesState', 'save_preferences', 'load_preferences', 'DEFAULT_EXPRESSION']
