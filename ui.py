import glfw
from imgui_bundle import imgui
from imgui_bundle.python_backends import glfw_backend
from state import PreferencesState
from interaction import InteractionDispatcher
from utilities.keybinding_management import KeybindingManager

ERROR_COLOR = imgui.ImVec4(0.8, 0.1, 0.1, 1.0)


class UI:
    """
    Expression editor panel, and the bridge from GLFW input callbacks to the
    interaction dispatcher.

    Input that imgui wants (clicks and scrolls over the panel, typing in the
    editor) is not forwarded. Pointer releases always are, since releasing a
    pointer that was never tracked is harmless.
    """

    def __init__(self, window, dispatcher: InteractionDispatcher, preferences: PreferencesState):
        self.window = window
        self.dispatcher = dispatcher
        self.preferences = preferences

        self.keybindings = KeybindingManager()

        imgui.create_context()
        self.imgui_renderer = glfw_backend.GlfwRenderer(window)

        self.setup_callbacks()

        # Cursor position in window coordinates, top-left origin
        self._cursor_pos = glfw.get_cursor_pos(window)

        # Plot status (received from App)
        self.error_log = ""
        self.scale = preferences.initial_scale

        # One-shot flags (reset after take_requests)
        self._expression_changed = False
        self._threshold_changed = False
        self._request_reload = False
        self._request_reset_view = False
        self._request_screenshot = False

    def setup_callbacks(self):
        self.imgui_mouse_callback = glfw.set_mouse_button_callback(self.window, None)
        self.imgui_cursor_callback = glfw.set_cursor_pos_callback(self.window, None)
        self.imgui_scroll_callback = glfw.set_scroll_callback(self.window, None)
        self.imgui_key_callback = glfw.set_key_callback(self.window, None)
        self.imgui_char_callback = glfw.set_char_callback(self.window, None)

        glfw.set_mouse_button_callback(self.window, self.mouse_button_callback)
        glfw.set_cursor_pos_callback(self.window, self.cursor_pos_callback)
        glfw.set_scroll_callback(self.window, self.scroll_callback)
        glfw.set_key_callback(self.window, self.key_callback)
        glfw.set_char_callback(self.window, self.char_callback)
        glfw.set_framebuffer_size_callback(self.window, self.framebuffer_size_callback)

    def framebuffer_size_callback(self, window, width, height):
        self.dispatcher.on_resize()

    def mouse_button_callback(self, window, button, action, mods):
        if self.imgui_mouse_callback:
            self.imgui_mouse_callback(window, button, action, mods)

        # The button number doubles as the pointer id
        if button != glfw.MOUSE_BUTTON_LEFT:
            return

        if action == glfw.RELEASE:
            self.dispatcher.on_pointer_up(button)
        elif action == glfw.PRESS and not imgui.get_io().want_capture_mouse:
            self.dispatcher.on_pointer_down(button, self._cursor_pos)

    def cursor_pos_callback(self, window, xpos, ypos):
        if self.imgui_cursor_callback:
            self.imgui_cursor_callback(window, xpos, ypos)
        self._cursor_pos = (xpos, ypos)
        # Moves of pointers that aren't down are ignored by the dispatcher
        self.dispatcher.on_pointer_move(glfw.MOUSE_BUTTON_LEFT, self._cursor_pos)

    def scroll_callback(self, window, xoffset, yoffset):
        if self.imgui_scroll_callback:
            self.imgui_scroll_callback(window, xoffset, yoffset)

        if imgui.get_io().want_capture_mouse:
            return
        # GLFW reports scrolling up as positive; wheel deltas are positive when scrolling down
        delta_y = -yoffset * self.preferences.wheel_notch_delta
        self.dispatcher.on_wheel(self._cursor_pos, delta_y)

    def key_callback(self, window, key, scancode, action, mods):
        if self.imgui_key_callback:
            self.imgui_key_callback(window, key, scancode, action, mods)

        if imgui.get_io().want_capture_keyboard or action != glfw.PRESS:
            return

        command = self.keybindings.action_for(key)
        if command == "reset_view":
            self._request_reset_view = True
        elif command == "reload_shader":
            self._request_reload = True
        elif command == "screenshot":
            self._request_screenshot = True
        elif command == "toggle_panel":
            self.preferences.show_panel = not self.preferences.show_panel
        elif command == "exit_keybinding":
            glfw.set_window_should_close(window, True)

    def char_callback(self, window, char):
        if self.imgui_char_callback:
            self.imgui_char_callback(window, char)

    def take_requests(self) -> dict:
        """Return pending one-shot requests and reset them."""
        requests = {
            'expression_changed': self._expression_changed,
            'threshold_changed': self._threshold_changed,
            'reload': self._request_reload,
            'reset_view': self._request_reset_view,
            'screenshot': self._request_screenshot,
        }
        self._expression_changed = False
        self._threshold_changed = False
        self._request_reload = False
        self._request_reset_view = False
        self._request_screenshot = False
        return requests

    def update_display_info(self, scale: float, error_log: str) -> None:
        self.scale = scale
        self.error_log = error_log

    def render(self):
        """Render ImGui widgets - edits self.preferences based on widget interactions."""
        self.imgui_renderer.process_inputs()
        imgui.new_frame()

        if self.preferences.show_panel:
            self.render_panel()

        imgui.render()
        self.imgui_renderer.render(imgui.get_draw_data())

    def render_panel(self):
        imgui.set_next_window_pos(imgui.ImVec2(10, 10), imgui.Cond_.first_use_ever)
        imgui.set_next_window_size(imgui.ImVec2(380, 320), imgui.Cond_.first_use_ever)
        imgui.begin("Plot")

        imgui.text("bool test(vec2 p) in GLSL:")
        changed, self.preferences.expression = imgui.input_text_multiline(
            "##expression", self.preferences.expression, imgui.ImVec2(-1, 160)
        )
        if changed:
            self._expression_changed = True

        changed, self.preferences.threshold = imgui.slider_float(
            "Threshold", self.preferences.threshold, 0.0, 0.2, "%.4f"
        )
        if changed:
            self._threshold_changed = True

        imgui.text(f"Scale: {self.scale:.4g} units/px")

        if self.error_log:
            imgui.separator()
            imgui.push_text_wrap_pos(0.0)
            imgui.text_colored(ERROR_COLOR, self.error_log)
            imgui.pop_text_wrap_pos()

        imgui.end()

    def cleanup(self):
        self.imgui_renderer.shutdown()
