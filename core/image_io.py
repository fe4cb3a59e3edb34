"""
LayerLab — Image I/O
Decode images into RGBA rasters and encode rasters back, using Pillow.
Kept outside the core: compile() and render() never touch files.
"""

from io import BytesIO

import numpy as np
from PIL import Image, UnidentifiedImageError

from core.safety import InvalidDimensions, validate_raster, validate_size


def load_image(path: str) -> np.ndarray:
    """Load an image file as a numpy array (H, W, 4) uint8 RGBA."""
    img = Image.open(str(path)).convert("RGBA")
    return np.array(img)


def save_image(array: np.ndarray, output_path: str):
    """Save an (H, W, 3|4) uint8 array. Format follows the file extension."""
    validate_raster(array)
    img = Image.fromarray(array)
    if str(output_path).lower().endswith((".jpg", ".jpeg")):
        img = img.convert("RGB")
    img.save(str(output_path))


def decode_image(data: bytes) -> np.ndarray:
    """Decode encoded image bytes (PNG, JPEG, ...) into RGBA.

    Raises:
        ValueError: If the bytes aren't a readable image.
    """
    try:
        img = Image.open(BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Could not decode image: {e}") from e
    return np.array(img.convert("RGBA"))


def encode_png(array: np.ndarray) -> bytes:
    """Encode an (H, W, 3|4) uint8 array as PNG bytes."""
    validate_raster(array)
    buf = BytesIO()
    Image.fromarray(array).save(buf, format="PNG")
    return buf.getvalue()


def from_rgba_bytes(width: int, height: int, data: bytes) -> np.ndarray:
    """Wrap a raw row-major RGBA byte buffer as an (H, W, 4) array (copied).

    Raises:
        InvalidDimensions: On negative sizes or a length mismatch.
    """
    validate_size(width, height)
    expected = width * height * 4
    if len(data) != expected:
        raise InvalidDimensions(
            f"RGBA buffer is {len(data)} bytes, expected {expected} for {width}x{height}"
        )
    return np.frombuffer(bytes(data), dtype=np.uint8).reshape((height, width, 4)).copy()


def to_rgba_bytes(array: np.ndarray) -> bytes:
    """Flatten an RGBA (or RGB, padded with opaque alpha) raster to raw bytes."""
    validate_raster(array)
    if array.shape[2] == 3:
        alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
        array = np.concatenate([array, alpha], axis=2)
    return np.ascontiguousarray(array).tobytes()
