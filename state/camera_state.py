from dataclasses import dataclass, field
import math
import numpy as np


@dataclass
class CameraState:
    """Plane position of the viewport center and plane units per screen pixel."""
    position: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.0]))
    scale: float = 0.01  # Larger = more zoomed out

    def __post_init__(self):
        self.position = np.array(self.position, dtype=np.float64)
        if not math.isfinite(self.scale) or self.scale <= 0:
            raise ValueError(f"Camera scale must be positive and finite, got {self.scale}")


@dataclass
class AnimationState:
    """State for the wheel-driven zoom animation.

    last_frame_time is None while idle; while animating it holds the
    timestamp (ms) of the last animation step.
    """
    target_scale: float = 0.01
    anchor_screen_pos: np.ndarray | None = None  # Set by the last wheel event
    last_frame_time: float | None = None

    @property
    def animating(self) -> bool:
        return self.last_frame_time is not None
