"""
LayerLab — Preview Grid
Renders one thumbnail per preset for the filter picker.

Rendering is pure, so presets are rendered in parallel worker threads
with no locking. Results come back in catalog order regardless of which
worker finishes first.
"""

from concurrent.futures import ThreadPoolExecutor

import numpy as np
import cv2

from core.render import render_preset
from core.safety import validate_raster
from presets import list_preset_names

THUMBNAIL_SIZE = 160  # longest side, px


def make_thumbnail(pixels: np.ndarray, max_side: int = THUMBNAIL_SIZE) -> np.ndarray:
    """Downscale so the longest side is at most max_side. Never upscales."""
    validate_raster(pixels)
    h, w = pixels.shape[:2]
    if h == 0 or w == 0 or max(h, w) <= max_side:
        return pixels.copy()
    scale = max_side / max(h, w)
    new_w = max(1, int(round(w * scale)))
    new_h = max(1, int(round(h * scale)))
    return cv2.resize(pixels, (new_w, new_h), interpolation=cv2.INTER_AREA)


def render_preview_grid(
    pixels: np.ndarray,
    intensity: float = 100,
    names=None,
    max_side: int = THUMBNAIL_SIZE,
    workers: int | None = None,
) -> dict:
    """Render a thumbnail of pixels for each preset.

    Args:
        pixels: Source raster (H, W, 3|4) uint8.
        intensity: Intensity for every preset (0-100).
        names: Preset names to render (default: whole catalog).
        max_side: Thumbnail longest side.
        workers: Thread count (default: ThreadPoolExecutor's default).

    Returns:
        dict preset name -> thumbnail array, in the order of names.
    """
    names = list(names) if names is not None else list_preset_names()
    thumb = make_thumbnail(pixels, max_side)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(render_preset, thumb, name, intensity) for name in names]
        return {name: future.result() for name, future in zip(names, futures)}
