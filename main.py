import glfw
import moderngl
from plotter import Plotter
from ui import UI
from interaction import CameraAnimator, GestureTracker, InteractionDispatcher, FrameScheduler
from utilities.save_frame import save_screenshot
from state import load_preferences, save_preferences

IDLE_WAIT = 0.5  # seconds to block for input when nothing is animating


class App:
    """Main application: owns the window, the plotter and the interaction engine."""

    def __init__(self, preferences_path: str = "preferences.config"):
        self.preferences_path = preferences_path
        self.preferences = load_preferences(preferences_path)

        # Initialize GLFW
        if not glfw.init():
            raise RuntimeError("Failed to initialize GLFW")

        glfw.window_hint(glfw.CONTEXT_VERSION_MAJOR, 3)
        glfw.window_hint(glfw.CONTEXT_VERSION_MINOR, 3)
        glfw.window_hint(glfw.OPENGL_PROFILE, glfw.OPENGL_CORE_PROFILE)
        glfw.window_hint(glfw.OPENGL_FORWARD_COMPAT, True)
        glfw.window_hint(glfw.SAMPLES, 4)

        self.window = glfw.create_window(
            self.preferences.window_width, self.preferences.window_height, "Implicit Plotter", None, None)
        if not self.window:
            glfw.terminate()
            raise RuntimeError("Failed to create GLFW window")

        glfw.make_context_current(self.window)
        glfw.swap_interval(1)  # Enable vsync

        self.ctx = moderngl.create_context()
        self.plotter = Plotter(self.ctx, self.preferences.expression, self.preferences.threshold)

        # Interaction engine
        self.scheduler = FrameScheduler()
        self.animator = CameraAnimator(
            initial_scale=self.preferences.initial_scale,
            rate=self.preferences.easing_rate,
            wheel_zoom_base=self.preferences.wheel_zoom_base,
        )
        self.dispatcher = InteractionDispatcher(
            self.animator,
            GestureTracker(),
            render=self.on_camera_changed,
            viewport_size=lambda: glfw.get_window_size(self.window),
            request_frame=self.scheduler.request,
            clock=self.clock,
        )

        # Latest camera handed to the render callback
        self.view_position = self.animator.camera.position.copy()
        self.view_scale = self.animator.camera.scale

        self.ui = UI(self.window, self.dispatcher, self.preferences)

    @staticmethod
    def clock() -> float:
        return glfw.get_time() * 1000.0

    def on_camera_changed(self, position, scale: float) -> None:
        """Render callback: remember the camera, it is painted on the next loop iteration."""
        self.view_position = position
        self.view_scale = scale

    def pixel_ratio(self) -> float:
        width, _ = glfw.get_window_size(self.window)
        fb_width, _ = glfw.get_framebuffer_size(self.window)
        return fb_width / width if width > 0 else 1.0

    def run(self):
        while not glfw.window_should_close(self.window):
            # Block while idle; poll while a zoom animation needs frames
            if self.scheduler.has_pending():
                glfw.poll_events()
            else:
                glfw.wait_events_timeout(IDLE_WAIT)
            self.scheduler.run_pending(self.clock())
            self.orchestrate_frame()
            glfw.swap_buffers(self.window)

        self.cleanup()

    def orchestrate_frame(self):
        """Apply UI requests, then paint the plot and the panel."""
        requests = self.ui.take_requests()

        if requests['expression_changed']:
            self.plotter.set_expression(self.preferences.expression)
        if requests['reload']:
            self.plotter.reload()
        if requests['threshold_changed']:
            self.plotter.threshold = self.preferences.threshold
        if requests['reset_view']:
            self.dispatcher.reset_view(self.preferences.initial_scale)

        width, height = glfw.get_framebuffer_size(self.window)
        if width == 0 or height == 0:
            # Minimized
            return

        self.plotter.plot(self.view_position, self.view_scale, (width, height), self.pixel_ratio())

        # Capture before the panel is drawn on top
        if requests['screenshot']:
            try:
                filename = save_screenshot(self.ctx, (width, height))
                print(f"Screenshot saved: {filename}")
            except OSError as e:
                print(f"Failed to save screenshot: {e}")

        self.ui.update_display_info(self.view_scale, self.plotter.error_log)
        self.ui.render()

    def cleanup(self):
        # Save preferences before cleanup
        width, height = glfw.get_window_size(self.window)
        if width > 0 and height > 0:
            self.preferences.window_width = width
            self.preferences.window_height = height
        save_preferences(self.preferences, self.preferences_path)

        self.ui.cleanup()
        glfw.terminate()


def main():
    app = App()
    app.run()


if __name__ == "__main__":
    main()
