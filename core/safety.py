"""
LayerLab — Safety & Resource Guards
Centralized preflight checks run before any pixels are touched.
Prevents corrupt buffers, oversized rasters, and runaway chains.
"""

import os
from pathlib import Path

import numpy as np

# --- Configurable Limits ---
MAX_FILE_MB = 50           # Maximum input image file size
MAX_PIXELS = 50_000_000    # Maximum raster area (width * height)
MAX_CHAIN_DEPTH = 16       # Maximum operations in one program accepted over HTTP
ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".webp", ".bmp", ".tif", ".tiff"}


class SafetyError(Exception):
    """Raised when a preflight check fails."""
    pass


class InvalidDimensions(SafetyError, ValueError):
    """Raised for rasters with a bad shape, dtype, or size."""
    pass


def preflight(input_path: str) -> dict:
    """Run all safety checks before loading an image file.

    Args:
        input_path: Path to the input file.

    Returns:
        dict with file metadata (path, size_mb, extension).

    Raises:
        SafetyError: If any check fails.
        FileNotFoundError: If input doesn't exist.
    """
    input_path = str(input_path)
    real_path = os.path.realpath(input_path)

    if not os.path.isfile(real_path):
        raise FileNotFoundError(f"Input file not found: {input_path}")

    size_mb = os.path.getsize(real_path) / (1024 * 1024)
    if size_mb > MAX_FILE_MB:
        raise SafetyError(
            f"Input file is {size_mb:.0f}MB, exceeds {MAX_FILE_MB}MB limit."
        )

    ext = Path(real_path).suffix.lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise SafetyError(
            f"File type '{ext}' not allowed. "
            f"Supported: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
        )

    return {
        "path": real_path,
        "size_mb": size_mb,
        "extension": ext,
    }


def validate_chain_depth(operations) -> None:
    """Check that a program isn't too long.

    Raises:
        SafetyError: If the program exceeds MAX_CHAIN_DEPTH.
    """
    if len(operations) > MAX_CHAIN_DEPTH:
        raise SafetyError(
            f"Program has {len(operations)} operations, max is {MAX_CHAIN_DEPTH}."
        )


def validate_size(width: int, height: int) -> None:
    """Check raster dimensions. Zero is allowed (empty raster), negative is not.

    Raises:
        InvalidDimensions: On negative or oversized dimensions.
    """
    if not isinstance(width, (int, np.integer)) or not isinstance(height, (int, np.integer)):
        raise InvalidDimensions(f"Dimensions must be integers, got {width!r}x{height!r}")
    if width < 0 or height < 0:
        raise InvalidDimensions(f"Negative raster dimensions: {width}x{height}")
    if width * height > MAX_PIXELS:
        raise InvalidDimensions(
            f"Raster is {width}x{height} ({width * height} px), max is {MAX_PIXELS} px."
        )


def validate_raster(pixels) -> None:
    """Check that pixels is an (H, W, 3|4) uint8 array within limits.

    Raises:
        InvalidDimensions: If the array can't be rendered.
    """
    if not isinstance(pixels, np.ndarray):
        raise InvalidDimensions(f"Expected numpy array, got {type(pixels).__name__}")
    if pixels.dtype != np.uint8:
        raise InvalidDimensions(f"Expected uint8 raster, got {pixels.dtype}")
    if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
        raise InvalidDimensions(
            f"Expected (H, W, 4) RGBA or (H, W, 3) RGB raster, got shape {pixels.shape}"
        )
    height, width = pixels.shape[:2]
    validate_size(width, height)
