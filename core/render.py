"""
LayerLab — Renderer
Executes a compiled program against a raster and returns a new raster.

render() validates the raster up front, so a bad raster fails
before any pixel work and the caller's buffer is never touched.
"""

import numpy as np

from core.compiler import compile as compile_preset
from core.image_io import from_rgba_bytes, to_rgba_bytes
from core.safety import validate_raster
from effects import apply_chain


def render(pixels: np.ndarray, operations=()) -> np.ndarray:
    """Apply a program to a raster.

    Args:
        pixels: (H, W, 4) RGBA or (H, W, 3) RGB uint8 array. Not modified.
        operations: Sequence of operations, applied left to right.

    Returns:
        New array with the same shape and dtype as pixels.

    Raises:
        InvalidDimensions: If pixels isn't a renderable raster.
    """
    validate_raster(pixels)
    operations = tuple(operations)

    if pixels.size == 0 or not operations:
        return pixels.copy()

    return apply_chain(pixels, operations)


def render_preset(pixels: np.ndarray, name: str, intensity: float = 100) -> np.ndarray:
    """Compile a preset at an intensity and render it."""
    return render(pixels, compile_preset(name, intensity))


def render_bytes(width: int, height: int, data: bytes, operations=()) -> bytes:
    """Render a raw RGBA byte buffer (row-major, 4 bytes per pixel).

    Raises:
        InvalidDimensions: On negative sizes or a buffer of the wrong length.
    """
    pixels = from_rgba_bytes(width, height, data)
    return to_rgba_bytes(render(pixels, operations))
