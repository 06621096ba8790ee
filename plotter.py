import moderngl
from gl_utils import read_shader, shader_path, compose_fragment_source, tryset

BACKGROUND_COLOR = (1.0, 1.0, 1.0)


class Plotter:
    """Paints the set where the user's `test(vec2 p)` holds, for a given camera."""

    def __init__(self, ctx: moderngl.Context, expression: str, threshold: float = 0.02):
        self.ctx = ctx
        self.threshold = threshold
        self.program = None
        self.vao = None
        self.error_log = ""

        self.vertex_source = read_shader(shader_path('plot.vert'))
        self.header_source = read_shader(shader_path('plot_header.glsl'))
        self.footer_source = read_shader(shader_path('plot_footer.glsl'))

        self.set_expression(expression)

    def set_expression(self, expression: str) -> bool:
        """Recompile with a new expression. Keeps the previous program if it fails."""
        self.expression = expression
        fragment_source = compose_fragment_source(self.header_source, expression, self.footer_source)
        try:
            new_program = self.ctx.program(
                vertex_shader=self.vertex_source,
                fragment_shader=fragment_source
            )
        except moderngl.Error as e:
            self.error_log = str(e)
            print(f"Failed to compile plot shader: {e}")
            return False

        # Only replace program if compilation succeeded
        if self.vao is not None:
            self.vao.release()
            self.program.release()
        self.program = new_program
        self.vao = self.ctx.vertex_array(self.program, [])
        self.error_log = ""
        return True

    def reload(self) -> bool:
        """Re-read shader files from disk and recompile the current expression."""
        self.vertex_source = read_shader(shader_path('plot.vert'))
        self.header_source = read_shader(shader_path('plot_header.glsl'))
        self.footer_source = read_shader(shader_path('plot_footer.glsl'))
        success = self.set_expression(self.expression)
        if success:
            print("Plot shaders reloaded successfully")
        return success

    def plot(self, position, scale: float, framebuffer_size: tuple, pixel_ratio: float = 1.0):
        """
        Draw the plane as seen by a camera at `position` with `scale` plane
        units per logical pixel.

        pixel_ratio is framebuffer pixels per logical pixel; gl_FragCoord is in
        framebuffer pixels, so the shader's scale is divided by it.
        """
        width, height = framebuffer_size
        self.ctx.screen.use()
        self.ctx.viewport = (0, 0, width, height)
        self.ctx.clear(*BACKGROUND_COLOR, 1.0)

        if self.program is None or self.vao is None:
            return

        tryset(self.program, 'threshold', self.threshold)
        tryset(self.program, 'pos', (float(position[0]), float(position[1])))
        tryset(self.program, 'scale', scale / pixel_ratio)
        tryset(self.program, 'center', (width / 2, height / 2))

        self.vao.render(moderngl.TRIANGLE_STRIP, vertices=4)
