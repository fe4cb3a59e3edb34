"""
LayerLab — Transform Compiler
Turns (preset name, intensity 0-100) into an ordered tuple of operations,
and converts programs to and from CSS filter strings.

Intensity-scaled programs come from each preset's own curve table; no
formula is shared between presets. compile_settings() is the separate
full-strength path that reads the preset's base settings instead.
"""

import logging
import math
import re

from core.operations import (
    Brightness,
    Contrast,
    Saturate,
    HueRotate,
    ColorOverlay,
    SCALAR_KINDS,
    make_operation,
)
from presets import ORIGINAL, PresetNotFound, lookup

logger = logging.getLogger(__name__)

WARM_RGB = (255, 165, 0)   # orange
COOL_RGB = (0, 0, 255)     # blue

# Unit suffix per CSS primitive; primitive names equal operation kinds
CSS_UNITS = {
    "brightness": "",
    "contrast": "",
    "saturate": "",
    "hue-rotate": "rad",
    "grayscale": "",
    "sepia": "",
}

_ANGLE_TO_RAD = {
    "rad": 1.0,
    "deg": math.pi / 180.0,
    "grad": math.pi / 200.0,
    "turn": 2.0 * math.pi,
    "": 1.0,
}

_CSS_TOKEN = re.compile(r"\s*([a-z-]+)\(\s*([^)]*?)\s*\)\s*")
_CSS_VALUE = re.compile(r"^([+-]?(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?)([a-z%]*)$", re.IGNORECASE)


class DescriptorError(ValueError):
    """Raised when a program can't be expressed as, or parsed from, a CSS filter string."""
    pass


def clamp_intensity(intensity) -> float:
    """Clamp intensity into [0, 100]. NaN and non-numbers count as 0."""
    try:
        value = float(intensity)
    except (TypeError, ValueError):
        return 0.0
    if value != value:
        return 0.0
    return max(0.0, min(100.0, value))


def compile(name: str, intensity: float = 100) -> tuple:
    """Compile a preset at an intensity into an operation tuple.

    Args:
        name: Preset name. Unknown names fall back to "original".
        intensity: 0-100; out-of-range values are clamped.

    Returns:
        Tuple of operations in application order. Empty for the identity
        transform ("original", intensity 0, or an unknown preset).
    """
    intensity = clamp_intensity(intensity)
    if name == ORIGINAL or intensity == 0.0:
        return ()

    try:
        preset = lookup(name)
    except PresetNotFound:
        logger.debug("Unknown preset %r, falling back to %r", name, ORIGINAL)
        return ()

    t = intensity / 100.0
    return tuple(make_operation(row.kind, row.at(t)) for row in preset.curve)


def compile_settings(name: str) -> tuple:
    """Compile a preset's base settings at full strength.

    Always brightness, contrast, saturate, hue-rotate (identity values
    included, so the descriptor text is stable per preset), then the warmth
    overlay when warmth is non-zero. Secondary settings (highlights,
    shadows, clarity, tint) have no operation and are ignored.
    """
    if name == ORIGINAL:
        return ()
    try:
        settings = lookup(name).settings
    except PresetNotFound:
        logger.debug("Unknown preset %r, falling back to %r", name, ORIGINAL)
        return ()

    ops = [
        Brightness(float(settings.brightness)),
        Contrast(float(settings.contrast)),
        Saturate(float(settings.saturate)),
        HueRotate(float(settings.hue)),
    ]

    warmth = float(settings.warmth)
    if warmth != 0.0:
        rgb = WARM_RGB if warmth > 0 else COOL_RGB
        ops.append(ColorOverlay(rgb, min(1.0, abs(warmth)), "overlay"))
    return tuple(ops)


def _format_number(value: float) -> str:
    """Shortest string that parses back to exactly the same float."""
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def to_css(operations) -> str:
    """Render a program as a CSS filter string, in program order.

    Raises:
        DescriptorError: If an operation has no CSS filter primitive.
    """
    parts = []
    for op in operations:
        if op.kind not in CSS_UNITS:
            raise DescriptorError(
                f"'{op.kind}' has no CSS filter equivalent; render it per-pixel instead."
            )
        parts.append(f"{op.kind}({_format_number(op.value)}{CSS_UNITS[op.kind]})")
    return " ".join(parts) if parts else "none"


def compile_css(name: str, intensity: float = 100) -> str:
    """CSS filter string for a preset at an intensity ("none" for identity)."""
    return to_css(compile(name, intensity))


def settings_css(name: str) -> str:
    """CSS filter string for a preset's base settings, without the warmth overlay.

    The overlay has no filter primitive; canvas callers composite it
    separately (see compile_settings).
    """
    ops = tuple(op for op in compile_settings(name) if not isinstance(op, ColorOverlay))
    return to_css(ops)


def _parse_value(kind: str, raw: str) -> float:
    match = _CSS_VALUE.match(raw.strip())
    if not match:
        raise DescriptorError(f"Invalid value for {kind}: '{raw}'")
    number = float(match.group(1))
    unit = match.group(2).lower()

    if kind == "hue-rotate":
        if unit not in _ANGLE_TO_RAD or (unit == "" and number != 0.0):
            raise DescriptorError(f"Invalid angle for hue-rotate: '{raw}'")
        return number * _ANGLE_TO_RAD[unit]

    if unit == "%":
        return number / 100.0
    if unit:
        raise DescriptorError(f"Unexpected unit '{unit}' for {kind}")
    return number


def parse_css(descriptor: str) -> tuple:
    """Parse a CSS filter string back into operations.

    Accepts the primitives to_css() emits, with deg/grad/rad/turn angles
    and percentage amounts. "none" and the empty string mean no operations.

    Raises:
        DescriptorError: On unknown primitives or malformed values.
    """
    text = (descriptor or "").strip()
    if text in ("", "none"):
        return ()

    ops = []
    pos = 0
    while pos < len(text):
        match = _CSS_TOKEN.match(text, pos)
        if not match:
            raise DescriptorError(f"Malformed filter string near: '{text[pos:]}'")
        kind, raw = match.group(1), match.group(2)
        if kind not in SCALAR_KINDS:
            raise DescriptorError(f"Unsupported filter primitive: '{kind}'")
        ops.append(make_operation(kind, _parse_value(kind, raw)))
        pos = match.end()
    return tuple(ops)
