"""
LayerLab — Blend Modes & Color Overlay
Separable W3C compositing blend modes and a solid-fill overlay used for
the warmth/coolness tint.

Blend functions take backdrop (b) and source (s) as float arrays in 0-1.
"""

import numpy as np


def _screen(b, s):
    return b + s - b * s


def _hard_light(b, s):
    return np.where(s <= 0.5, b * 2.0 * s, _screen(b, 2.0 * s - 1.0))


def _soft_light(b, s):
    d = np.where(b <= 0.25, ((16.0 * b - 12.0) * b + 4.0) * b, np.sqrt(b))
    return np.where(
        s <= 0.5,
        b - (1.0 - 2.0 * s) * b * (1.0 - b),
        b + (2.0 * s - 1.0) * (d - b),
    )


BLEND_FNS = {
    "normal": lambda b, s: np.broadcast_to(s, b.shape),
    "multiply": lambda b, s: b * s,
    "screen": _screen,
    "overlay": lambda b, s: _hard_light(s, b),
    "darken": np.minimum,
    "lighten": np.maximum,
    "hard-light": _hard_light,
    "soft-light": _soft_light,
    "difference": lambda b, s: np.abs(b - s),
}


def list_blend_modes() -> list[str]:
    return list(BLEND_FNS.keys())


def get_blend_fn(mode: str):
    """Return the blend function for a mode name.

    Raises:
        ValueError: If mode is unknown.
    """
    fn = BLEND_FNS.get(mode)
    if fn is None:
        available = ", ".join(BLEND_FNS)
        raise ValueError(f"Unknown blend mode: {mode}. Available: {available}")
    return fn


def color_overlay(frame: np.ndarray, rgb=(255, 165, 0), alpha: float = 0.2,
                  blend_mode: str = "overlay") -> np.ndarray:
    """Composite a solid color over the whole frame (source-over + blend mode).

    Args:
        frame: (H, W, 3) or (H, W, 4) uint8 array.
        rgb: Fill color, 0-255 per channel.
        alpha: Fill opacity 0.0-1.0.
        blend_mode: Any mode from BLEND_FNS.

    Returns:
        Frame with the same shape. Alpha of RGBA input follows source-over.
    """
    blend_fn = get_blend_fn(blend_mode)
    a_s = max(0.0, min(1.0, float(alpha)))
    if a_s == 0.0:
        return frame.copy()

    has_alpha = frame.ndim == 3 and frame.shape[2] == 4
    cb = frame[:, :, :3].astype(np.float32) / 255.0
    if has_alpha:
        a_b = frame[:, :, 3:4].astype(np.float32) / 255.0
    else:
        a_b = np.ones(cb.shape[:2] + (1,), dtype=np.float32)

    cs = np.clip(np.asarray(rgb, dtype=np.float32) / 255.0, 0.0, 1.0).reshape(1, 1, 3)
    blended = blend_fn(cb, cs)

    co = a_s * (1.0 - a_b) * cs + a_s * a_b * blended + (1.0 - a_s) * a_b * cb
    a_o = a_s + a_b * (1.0 - a_s)
    color = np.divide(co, a_o, out=np.zeros_like(co), where=a_o > 0)

    out_rgb = np.clip(np.floor(color * 255.0 + 0.5), 0, 255).astype(np.uint8)
    if not has_alpha:
        return out_rgb
    out_a = np.clip(np.floor(a_o * 255.0 + 0.5), 0, 255).astype(np.uint8)
    return np.dstack([out_rgb, out_a])
