"""
LayerLab — Operation Registry
Maps every operation kind to its pixel kernel and provides a uniform
interface. Every kernel is a function: (frame: np.ndarray, value) -> np.ndarray
"""

import numpy as np

from effects.color import brightness, contrast, saturate, hue_rotate, grayscale, sepia
from effects.blend import color_overlay, list_blend_modes
from core.operations import ColorOverlay

# Master registry: kind -> kernel, identity value, description
OPERATIONS = {
    "brightness": {
        "fn": brightness,
        "identity": 1.0,
        "description": "Linear channel scale (1.0 = unchanged)",
    },
    "contrast": {
        "fn": contrast,
        "identity": 1.0,
        "description": "Scale around mid-gray (1.0 = unchanged)",
    },
    "saturate": {
        "fn": saturate,
        "identity": 1.0,
        "description": "Luminance-preserving saturation (0 = gray, 1.0 = unchanged)",
    },
    "hue-rotate": {
        "fn": hue_rotate,
        "identity": 0.0,
        "description": "Rotate hues by an angle in radians",
    },
    "grayscale": {
        "fn": grayscale,
        "identity": 0.0,
        "description": "Desaturate toward Rec.709 luminance (1.0 = fully gray)",
    },
    "sepia": {
        "fn": sepia,
        "identity": 0.0,
        "description": "Mix in a sepia tone (1.0 = full sepia)",
    },
    "color-overlay": {
        "fn": color_overlay,
        "identity": 0.0,
        "description": "Solid color fill composited with a blend mode",
    },
}


def get_operation(kind: str):
    """Get a kernel by operation kind.

    Raises ValueError if the kind doesn't exist.
    """
    if kind not in OPERATIONS:
        available = ", ".join(sorted(OPERATIONS.keys()))
        raise ValueError(f"Unknown operation: {kind}. Available: {available}")
    return OPERATIONS[kind]["fn"]


def list_operations() -> list[dict]:
    """List all operation kinds with descriptions."""
    return [
        {"kind": kind, "identity": entry["identity"], "description": entry["description"]}
        for kind, entry in OPERATIONS.items()
    ]


def apply_operation(frame: np.ndarray, op) -> np.ndarray:
    """Apply one operation to a frame, returning a new frame.

    Color kernels work on RGB. For RGBA input the alpha channel is split off
    before the kernel and reattached after it, so only ColorOverlay (which
    composites) can change alpha.
    """
    fn = get_operation(op.kind)

    if isinstance(op, ColorOverlay):
        return fn(frame, rgb=op.rgb, alpha=op.alpha, blend_mode=op.blend_mode)

    # RGBA normalization gate: strip alpha, reattach after the kernel
    input_alpha = None
    if frame.ndim == 3 and frame.shape[2] == 4:
        input_alpha = frame[:, :, 3].copy()
        frame = frame[:, :, :3]

    out = fn(np.ascontiguousarray(frame), op.value)

    if input_alpha is not None:
        return np.dstack([out, input_alpha])
    return out


def apply_chain(frame: np.ndarray, operations) -> np.ndarray:
    """Apply a sequence of operations left to right.

    Each operation reads the previous operation's output. The input frame is
    never written to; the result is always a new array.
    """
    result = frame.copy()
    for op in operations:
        result = apply_operation(result, op)
    return result


__all__ = [
    "OPERATIONS",
    "apply_chain",
    "apply_operation",
    "get_operation",
    "list_blend_modes",
    "list_operations",
]
