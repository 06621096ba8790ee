"""
Mapping between centered screen coordinates and plane coordinates.

Screen positions are in logical pixels relative to the center of the
viewport, with y pointing up. A camera maps them onto the plane as

    plane = camera.position + screen * camera.scale
"""
import numpy as np
from state import CameraState


def screen_to_plane(screen_pos, camera: CameraState) -> np.ndarray:
    """Convert a centered screen position to the corresponding position on the plane."""
    return camera.position + np.asarray(screen_pos, dtype=np.float64) * camera.scale


def plane_to_screen(plane_pos, camera: CameraState) -> np.ndarray:
    """Convert a plane position to the centered screen position it is drawn at."""
    return (np.asarray(plane_pos, dtype=np.float64) - camera.position) / camera.scale


def anchored_position(plane_pos, screen_pos, scale: float) -> np.ndarray:
    """Camera position that puts plane_pos under screen_pos at the given scale."""
    # plane_pos = position + screen_pos * scale
    # position = plane_pos - screen_pos * scale
    return np.asarray(plane_pos, dtype=np.float64) - np.asarray(screen_pos, dtype=np.float64) * scale


def center_pointer(raw_pos, viewport_size) -> np.ndarray:
    """
    Center a raw pointer offset on the viewport.

    Args:
        raw_pos: (x, y) offset where (0, 0) is the top-left of the viewport
        viewport_size: (width, height) in the same units as raw_pos

    Returns:
        (x, y) relative to the viewport center, y up
    """
    x, y = raw_pos
    width, height = viewport_size
    return np.array([x - width / 2, -(y - height / 2)], dtype=np.float64)
