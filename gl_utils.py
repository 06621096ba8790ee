from pathlib import Path
import moderngl

SHADER_DIR = Path(__file__).resolve().parent / 'shaders'


def read_shader(path: str):
    result = ""
    with open(path, 'r') as file:
        result = file.read()
    return result


def shader_path(name: str) -> str:
    return str(SHADER_DIR / name)


def compose_fragment_source(header: str, expression: str, footer: str) -> str:
    """
    Splice the user's expression between the fixed header and footer.

    The header declares the camera uniforms and approx_eq(); the expression
    must define `bool test(vec2 p)`, which the footer's main() calls for every
    fragment.
    """
    return header + expression + "\n" + footer


MUTED_TRYSET_WARNINGS = {}


def tryset(program: moderngl.Program, uniform, value):
    """
    Gracefully handle a uniform that doesn't appear in program.
    Uniforms are frequently optimized out if they are not used in the current version of the shader.
    """
    if uniform in program:
        program[uniform] = value
    else:
        global MUTED_TRYSET_WARNINGS
        if uniform not in MUTED_TRYSET_WARNINGS:
            MUTED_TRYSET_WARNINGS[uniform] = 0
        MUTED_TRYSET_WARNINGS[uniform] += 1
        if MUTED_TRYSET_WARNINGS[uniform] < 10:
            print('Warning: ', uniform, ' not present in ', program)
