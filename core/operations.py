"""
LayerLab — Elementary Color Operations
The closed set of adjustments a compiled filter program is made of.

Every operation is an immutable value. A program is a tuple of operations,
applied left to right; order matters (saturate then hue-rotate differs from
hue-rotate then saturate).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Brightness:
    """Linear channel scale. 1.0 = no change."""
    factor: float
    kind = "brightness"

    @property
    def value(self) -> float:
        return self.factor

    @property
    def identity(self) -> bool:
        return self.factor == 1.0


@dataclass(frozen=True)
class Contrast:
    """Scale around mid-gray. 1.0 = no change."""
    factor: float
    kind = "contrast"

    @property
    def value(self) -> float:
        return self.factor

    @property
    def identity(self) -> bool:
        return self.factor == 1.0


@dataclass(frozen=True)
class Saturate:
    """Luminance-preserving saturation. 1.0 = no change, 0.0 = gray."""
    factor: float
    kind = "saturate"

    @property
    def value(self) -> float:
        return self.factor

    @property
    def identity(self) -> bool:
        return self.factor == 1.0


@dataclass(frozen=True)
class HueRotate:
    """Hue rotation in radians. 0.0 = no change."""
    radians: float
    kind = "hue-rotate"

    @property
    def value(self) -> float:
        return self.radians

    @property
    def identity(self) -> bool:
        return self.radians == 0.0


@dataclass(frozen=True)
class Grayscale:
    """Desaturate toward luminance. 0.0 = no change, 1.0 = fully gray."""
    amount: float
    kind = "grayscale"

    @property
    def value(self) -> float:
        return self.amount

    @property
    def identity(self) -> bool:
        return self.amount == 0.0


@dataclass(frozen=True)
class SepiaOverlay:
    """Sepia tone mixed in by amount. 0.0 = no change."""
    amount: float
    kind = "sepia"

    @property
    def value(self) -> float:
        return self.amount

    @property
    def identity(self) -> bool:
        return self.amount == 0.0


@dataclass(frozen=True)
class ColorOverlay:
    """Solid color composited over the image with a blend mode.

    Used for warmth: orange for warm presets, blue for cool ones, with
    alpha equal to the magnitude of the warmth setting.
    """
    rgb: tuple[int, int, int]
    alpha: float
    blend_mode: str = "overlay"
    kind = "color-overlay"

    @property
    def value(self) -> float:
        return self.alpha

    @property
    def identity(self) -> bool:
        return self.alpha == 0.0


Operation = Brightness | Contrast | Saturate | HueRotate | Grayscale | SepiaOverlay | ColorOverlay

# Scalar operations keyed by kind, used by the curve evaluator and CSS parser
SCALAR_KINDS = {
    "brightness": Brightness,
    "contrast": Contrast,
    "saturate": Saturate,
    "hue-rotate": HueRotate,
    "grayscale": Grayscale,
    "sepia": SepiaOverlay,
}

# Value each scalar kind takes when it has no visible effect
IDENTITY_VALUES = {
    "brightness": 1.0,
    "contrast": 1.0,
    "saturate": 1.0,
    "hue-rotate": 0.0,
    "grayscale": 0.0,
    "sepia": 0.0,
}


def make_operation(kind: str, value: float):
    """Build a scalar operation from its kind name.

    Raises:
        ValueError: If kind is not a scalar operation.
    """
    cls = SCALAR_KINDS.get(kind)
    if cls is None:
        available = ", ".join(sorted(SCALAR_KINDS))
        raise ValueError(f"Unknown operation kind: {kind}. Available: {available}")
    return cls(float(value))


def describe(op) -> dict:
    """JSON-friendly view of an operation."""
    if isinstance(op, ColorOverlay):
        return {
            "kind": op.kind,
            "value": op.alpha,
            "rgb": list(op.rgb),
            "blend_mode": op.blend_mode,
        }
    return {"kind": op.kind, "value": op.value}
