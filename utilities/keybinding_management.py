"""
Keybinding Management

Loads keyboard controls from keyboard_controls.json and maps the
human-readable key names in it to GLFW key codes.
"""

import json
import shutil
import glfw
from pathlib import Path
from typing import Dict


class KeybindingManager:
    """Manages keyboard bindings loaded from JSON configuration."""

    KEY_NAME_TO_GLFW = {
        'A': glfw.KEY_A, 'C': glfw.KEY_C, 'H': glfw.KEY_H, 'P': glfw.KEY_P,
        'Q': glfw.KEY_Q, 'R': glfw.KEY_R, 'S': glfw.KEY_S,

        'SPACE': glfw.KEY_SPACE,
        'ESCAPE': glfw.KEY_ESCAPE,
        'ESC': glfw.KEY_ESCAPE,
        'TAB': glfw.KEY_TAB,
        'HOME': glfw.KEY_HOME,

        'F1': glfw.KEY_F1, 'F2': glfw.KEY_F2, 'F5': glfw.KEY_F5, 'F12': glfw.KEY_F12,
    }

    def __init__(self, config_path: str = "keyboard_controls.json",
                 default_config_path: str | Path | None = None):
        """
        Args:
            config_path: Path to the active keyboard controls JSON file
            default_config_path: File copied to config_path when it is missing.
                Defaults to default_keyboard_controls.json next to the project root.
        """
        if default_config_path is None:
            default_config_path = Path(__file__).resolve().parent.parent / "default_keyboard_controls.json"
        self.config_path = Path(config_path)
        self.default_config_path = Path(default_config_path)
        self.bindings: Dict[str, int] = {}

        self._load_bindings()

    def _load_bindings(self):
        """Load keybindings from JSON file, creating from default if needed."""
        if not self.config_path.exists():
            if self.default_config_path.exists():
                shutil.copy(self.default_config_path, self.config_path)
                print(f"Created {self.config_path} from {self.default_config_path}")
            else:
                print(f"Warning: Neither {self.config_path} nor {self.default_config_path} found!")
                return

        try:
            config = json.loads(self.config_path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            print(f"Error loading keybindings from {self.config_path}: {e}")
            return

        for action, key_name in config.items():
            key_name_upper = str(key_name).upper()
            if key_name_upper in self.KEY_NAME_TO_GLFW:
                self.bindings[action] = self.KEY_NAME_TO_GLFW[key_name_upper]
            else:
                print(f"Warning: Unknown key name '{key_name}' for action '{action}'")

        print(f"Loaded {len(self.bindings)} keybindings from {self.config_path}")

    def action_for(self, key: int) -> str | None:
        for action, bound_key in self.bindings.items():
            if bound_key == key:
                return action
        return None
