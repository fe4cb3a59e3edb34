"""
LayerLab — Color Operation Kernels
Brightness, contrast, saturate, hue-rotate, grayscale, sepia.

Formulas follow the W3C Filter Effects shorthand filters, so a program
rendered here matches the same program handed to a browser as a CSS
filter string. Every kernel takes and returns (H, W, 3) uint8 RGB and is
the identity at its identity parameter.
"""

import math

import numpy as np
import cv2


# Rec.709 luma weights used by the grayscale matrix
LUMA_709 = (0.2126, 0.7152, 0.0722)


def _to_uint8(f: np.ndarray) -> np.ndarray:
    """Quantize a 0-255 float image back to uint8 (round half up, clamped)."""
    return np.clip(np.floor(f + 0.5), 0, 255).astype(np.uint8)


def _apply_matrix(frame: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """Multiply every RGB pixel by a 3x3 color matrix."""
    f = frame.astype(np.float32)
    out = cv2.transform(f, matrix.astype(np.float32))
    return _to_uint8(out)


def saturate_matrix(s: float) -> np.ndarray:
    return np.array([
        [0.213 + 0.787 * s, 0.715 - 0.715 * s, 0.072 - 0.072 * s],
        [0.213 - 0.213 * s, 0.715 + 0.285 * s, 0.072 - 0.072 * s],
        [0.213 - 0.213 * s, 0.715 - 0.715 * s, 0.072 + 0.928 * s],
    ], dtype=np.float64)


def hue_rotate_matrix(radians: float) -> np.ndarray:
    c = math.cos(radians)
    s = math.sin(radians)
    return np.array([
        [0.213 + c * 0.787 - s * 0.213, 0.715 - c * 0.715 - s * 0.715, 0.072 - c * 0.072 + s * 0.928],
        [0.213 - c * 0.213 + s * 0.143, 0.715 + c * 0.285 + s * 0.140, 0.072 - c * 0.072 - s * 0.283],
        [0.213 - c * 0.213 - s * 0.787, 0.715 - c * 0.715 + s * 0.715, 0.072 + c * 0.928 + s * 0.072],
    ], dtype=np.float64)


def grayscale_matrix(amount: float) -> np.ndarray:
    g = 1.0 - amount
    r, gr, b = LUMA_709
    return np.array([
        [r + (1 - r) * g, gr - gr * g, b - b * g],
        [r - r * g, gr + (1 - gr) * g, b - b * g],
        [r - r * g, gr - gr * g, b + (1 - b) * g],
    ], dtype=np.float64)


def sepia_matrix(amount: float) -> np.ndarray:
    g = 1.0 - amount
    return np.array([
        [0.393 + 0.607 * g, 0.769 - 0.769 * g, 0.189 - 0.189 * g],
        [0.349 - 0.349 * g, 0.686 + 0.314 * g, 0.168 - 0.168 * g],
        [0.272 - 0.272 * g, 0.534 - 0.534 * g, 0.131 + 0.869 * g],
    ], dtype=np.float64)


def brightness(frame: np.ndarray, factor: float = 1.0) -> np.ndarray:
    """Scale every channel linearly.

    Args:
        frame: (H, W, 3) uint8 RGB array.
        factor: 0.0 (black) and up. 1.0 = no change.

    Returns:
        Brightness-adjusted frame.
    """
    factor = max(0.0, float(factor))
    if factor == 1.0:
        return frame.copy()
    return _to_uint8(frame.astype(np.float32) * factor)


def contrast(frame: np.ndarray, factor: float = 1.0) -> np.ndarray:
    """Stretch or flatten channels around mid-gray.

    Args:
        frame: (H, W, 3) uint8 RGB array.
        factor: 0.0 (flat gray) and up. 1.0 = no change.

    Returns:
        Contrast-adjusted frame.
    """
    factor = max(0.0, float(factor))
    if factor == 1.0:
        return frame.copy()
    f = frame.astype(np.float32)
    return _to_uint8((f - 127.5) * factor + 127.5)


def saturate(frame: np.ndarray, factor: float = 1.0) -> np.ndarray:
    """Boost or reduce saturation while keeping luminance.

    Args:
        frame: (H, W, 3) uint8 RGB array.
        factor: 0.0 (gray) and up. 1.0 = no change.
    """
    factor = max(0.0, float(factor))
    if factor == 1.0:
        return frame.copy()
    return _apply_matrix(frame, saturate_matrix(factor))


def hue_rotate(frame: np.ndarray, radians: float = 0.0) -> np.ndarray:
    """Rotate hues by an angle in radians (0 = no change)."""
    radians = float(radians)
    if radians == 0.0:
        return frame.copy()
    return _apply_matrix(frame, hue_rotate_matrix(radians))


def grayscale(frame: np.ndarray, amount: float = 0.0) -> np.ndarray:
    """Luminance-preserving desaturation.

    Args:
        frame: (H, W, 3) uint8 RGB array.
        amount: 0.0 (no change) to 1.0 (fully gray).
    """
    amount = max(0.0, min(1.0, float(amount)))
    if amount == 0.0:
        return frame.copy()
    return _apply_matrix(frame, grayscale_matrix(amount))


def sepia(frame: np.ndarray, amount: float = 0.0) -> np.ndarray:
    """Mix in a sepia tone.

    Args:
        frame: (H, W, 3) uint8 RGB array.
        amount: 0.0 (no change) to 1.0 (full sepia).
    """
    amount = max(0.0, min(1.0, float(amount)))
    if amount == 0.0:
        return frame.copy()
    return _apply_matrix(frame, sepia_matrix(amount))
