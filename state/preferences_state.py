from dataclasses import dataclass, asdict
from pathlib import Path
import json
import math

DEFAULT_EXPRESSION = """\
bool test(vec2 p) {
    // Unit circle
    return approx_eq(p.x * p.x + p.y * p.y, 1.0);
}
"""


@dataclass
class PreferencesState:
    """User preferences that persist between program sessions."""

    # Window
    window_width: int = 1024
    window_height: int = 768
    show_panel: bool = True  # Expression editor panel

    # Camera
    initial_scale: float = 0.01  # Plane units per logical pixel at startup
    easing_rate: float = 0.01  # Proportion of remaining zoom covered per millisecond
    wheel_zoom_base: float = 1.001  # target_scale *= base ** delta_y
    wheel_notch_delta: float = 100.0  # Pixel delta reported for one wheel notch

    # Plot
    threshold: float = 0.02  # Tolerance used by approx_eq in the plotted expression
    expression: str = DEFAULT_EXPRESSION

    def __post_init__(self):
        for name in ('initial_scale', 'easing_rate', 'wheel_zoom_base'):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"{name} must be positive and finite, got {value}")


def save_preferences(prefs: PreferencesState, filepath: Path | str = "preferences.config") -> None:
    """Save preferences to a JSON file."""
    filepath = Path(filepath)
    data = asdict(prefs)
    filepath.write_text(json.dumps(data, indent=2))


def load_preferences(filepath: Path | str = "preferences.config") -> PreferencesState:
    """Load preferences from a JSON file. Returns default preferences if file doesn't exist."""
    filepath = Path(filepath)
    if not filepath.exists():
        return PreferencesState()

    try:
        data = json.loads(filepath.read_text())
        # Filter out any fields that are no longer in PreferencesState (backward compat)
        valid_fields = set(PreferencesState.__dataclass_fields__.keys())
        filtered_data = {k: v for k, v in data.items() if k in valid_fields}
        return PreferencesState(**filtered_data)
    except (json.JSONDecodeError, TypeError, ValueError, AttributeError) as e:
        print(f"Warning: Failed to load preferences from {filepath}: {e}")
        print("Using default preferences")
        return PreferencesState()
