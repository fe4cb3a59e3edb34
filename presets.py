"""
LayerLab -- Built-in Filter Presets
Approximate ratios to match Apple's Photos filters.

Each preset carries two things:
    settings -- the base parameter set shown to users and used by the
                full-strength canvas path (contrast, saturate, brightness,
                hue, warmth, plus optional secondary parameters).
    curve    -- the hand-tuned intensity table: which operations the preset
                uses, in which order, and how each one scales with t = 0..1.
                A row (kind, start, full) runs linearly from start at t = 0
                to the literal full-strength value at t = 1.

The coefficients are visual tuning, not a formula. Keep them literal.
"""

import math
from dataclasses import dataclass, field
from types import MappingProxyType


class PresetNotFound(KeyError):
    """Raised when a preset name is not in the catalog."""
    pass


@dataclass(frozen=True)
class FilterSettings:
    """Base parameters. Secondary parameters are None when a preset doesn't use them."""
    contrast: float = 1.0
    saturate: float = 1.0
    brightness: float = 1.0
    hue: float = 0.0          # radians
    warmth: float = 0.0       # -1 (cool/blue) .. 1 (warm/orange)
    highlights: float | None = None
    shadows: float | None = None
    clarity: float | None = None
    tint: float | None = None

    def as_dict(self) -> dict:
        """Settings as a dict, secondary parameters only when present."""
        result = {
            "contrast": self.contrast,
            "saturate": self.saturate,
            "brightness": self.brightness,
            "hue": self.hue,
            "warmth": self.warmth,
        }
        for key in ("highlights", "shadows", "clarity", "tint"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        return result


@dataclass(frozen=True)
class OpCurve:
    """One row of a preset's intensity table: value at t = 0 and at t = 1."""
    kind: str
    start: float
    full: float

    def at(self, t: float) -> float:
        """Linear from start to full. t = 1 returns full exactly."""
        if t >= 1.0:
            return self.full
        return self.start + (self.full - self.start) * t


@dataclass(frozen=True)
class FilterPreset:
    name: str
    label: str
    settings: FilterSettings
    curve: tuple = field(default_factory=tuple)
    description: str = ""


def _deg(degrees: float) -> float:
    return math.radians(degrees)


_CATALOG = (
    FilterPreset(
        name="original",
        label="Original",
        settings=FilterSettings(),
        curve=(),
        description="No filter.",
    ),
    FilterPreset(
        name="vivid",
        label="Vivid",
        settings=FilterSettings(contrast=1.25, saturate=1.3, brightness=1.05),
        curve=(
            OpCurve("saturate", 1.0, 1.3),
            OpCurve("contrast", 1.0, 1.25),
            OpCurve("brightness", 1.0, 1.05),
        ),
        description="Enhances contrast and saturation for a vibrant look.",
    ),
    FilterPreset(
        name="vivid-warm",
        label="Vivid Warm",
        settings=FilterSettings(contrast=1.25, saturate=1.3, brightness=1.0, hue=0.03, warmth=0.2),
        curve=(
            OpCurve("saturate", 1.0, 1.3),
            OpCurve("contrast", 1.0, 1.25),
            OpCurve("hue-rotate", 0.0, 0.03),
            OpCurve("sepia", 0.0, 0.2),
        ),
        description="Adds a warm, sunny tone to the vibrant base.",
    ),
    FilterPreset(
        name="vivid-cool",
        label="Vivid Cool",
        settings=FilterSettings(contrast=1.25, saturate=1.3, brightness=1.0, hue=-0.03, warmth=-0.2),
        curve=(
            OpCurve("saturate", 1.0, 1.3),
            OpCurve("contrast", 1.0, 1.25),
            OpCurve("hue-rotate", 0.0, -0.03),
        ),
        description="Adds a cool, bluish tone to the vibrant base.",
    ),
    FilterPreset(
        name="dramatic",
        label="Dramatic",
        settings=FilterSettings(contrast=1.35, saturate=0.8, brightness=0.9),
        curve=(
            OpCurve("contrast", 1.0, 1.35),
            OpCurve("saturate", 1.0, 0.8),
            OpCurve("brightness", 1.0, 0.9),
        ),
        description="High contrast and muted colors for a moody, intense feel.",
    ),
    FilterPreset(
        name="dramaticWarm",
        label="Dramatic Warm",
        settings=FilterSettings(
            contrast=1.4,        # punchier midtone contrast
            brightness=0.93,
            saturate=0.85,
            hue=5.0,             # tilt hues toward orange
            warmth=0.25,         # golden temperature
            highlights=0.88,     # soft rolloff
            shadows=1.1,         # mild shadow lift
            clarity=1.07,
            tint=-0.02,          # slight green to keep warmth off pink
        ),
        curve=(
            OpCurve("contrast", 1.0, 1.4),
            OpCurve("brightness", 1.0, 0.93),
            OpCurve("saturate", 1.0, 0.85),
            OpCurve("sepia", 0.0, 0.12),
        ),
        description="High contrast with golden highlights and soft blacks.",
    ),
    FilterPreset(
        name="dramatic-cool",
        label="Dramatic Cool",
        settings=FilterSettings(contrast=1.35, saturate=0.8, brightness=0.9, warmth=-0.2),
        curve=(
            OpCurve("contrast", 1.0, 1.35),
            OpCurve("saturate", 1.0, 0.75),   # more desaturation for the cooler look
            OpCurve("brightness", 1.0, 0.9),
            OpCurve("hue-rotate", 0.0, _deg(15)),  # shift toward cyan/blue
        ),
        description="A cooler variant of the high-contrast Dramatic filter.",
    ),
    FilterPreset(
        name="mono",
        label="Mono",
        settings=FilterSettings(saturate=0.0),
        curve=(
            OpCurve("grayscale", 0.0, 1.0),
        ),
        description="A classic black and white filter.",
    ),
    FilterPreset(
        name="silvertone",
        label="Silvertone",
        settings=FilterSettings(contrast=1.1, saturate=0.1, brightness=1.05),
        curve=(
            OpCurve("grayscale", 0.1, 1.0),
            OpCurve("contrast", 1.0, 1.1),
            OpCurve("brightness", 1.0, 1.05),
        ),
        description="Black and white with enhanced contrast, inspired by silver gelatin prints.",
    ),
    FilterPreset(
        name="noir",
        label="Noir",
        settings=FilterSettings(contrast=1.25, saturate=0.0, brightness=0.95),
        curve=(
            OpCurve("grayscale", 0.0, 1.0),
            OpCurve("contrast", 1.0, 1.25),
            OpCurve("brightness", 1.0, 0.95),
        ),
        description="High-contrast black and white for a gritty, cinematic look.",
    ),
)

# Read-only name -> preset view, insertion order = display order
PRESETS = MappingProxyType({p.name: p for p in _CATALOG})

ORIGINAL = "original"


def lookup(name: str) -> FilterPreset:
    """Look up a preset by its exact name.

    Raises:
        PresetNotFound: If no preset has this name.
    """
    try:
        return PRESETS[name]
    except (KeyError, TypeError):
        raise PresetNotFound(name) from None


def get_preset(name: str) -> FilterPreset | None:
    """Look up a preset, returning None for unknown names."""
    return PRESETS.get(name) if isinstance(name, str) else None


def list_all() -> tuple:
    """All presets in display order."""
    return _CATALOG


def list_preset_names() -> list[str]:
    """Return all preset names in display order."""
    return [p.name for p in _CATALOG]
