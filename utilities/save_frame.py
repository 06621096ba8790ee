import datetime
from pathlib import Path
import moderngl
from PIL import Image


def save_screenshot(ctx: moderngl.Context, size: tuple, directory: Path | str = "Screenshots",
                    prefix: str = "plot") -> Path:
    """Read the default framebuffer back and write it as a timestamped PNG."""
    width, height = size
    data = ctx.screen.read(viewport=(0, 0, width, height), components=3)
    image = Image.frombytes('RGB', (width, height), data)
    # OpenGL rows start at the bottom, PIL rows at the top
    image = image.transpose(Image.Transpose.FLIP_TOP_BOTTOM)

    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = directory / f"{prefix}_{timestamp}.png"
    image.save(filename)
    return filename
