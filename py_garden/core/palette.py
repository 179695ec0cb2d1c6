"""
Valence-driven color palette.

Each palette slot blends linearly between a cold and a warm endpoint,
with valence as the blend factor. Valence is not clamped: values outside
[0, 1] extrapolate past the endpoints.
"""

import colorsys
from dataclasses import dataclass, fields
from typing import Dict, NamedTuple, Tuple


class Color(NamedTuple):
    """RGB color with float channels, nominally in [0, 1]."""

    r: float
    g: float
    b: float

    @classmethod
    def from_hex(cls, value: int) -> "Color":
        return cls(
            ((value >> 16) & 0xFF) / 255.0,
            ((value >> 8) & 0xFF) / 255.0,
            (value & 0xFF) / 255.0,
        )

    def to_hex(self) -> str:
        """Format as #rrggbb, clamping channels for display."""
        channels = [max(0, min(255, round(c * 255))) for c in self]
        return "#{:02x}{:02x}{:02x}".format(*channels)

    def lerp(self, other: "Color", t: float) -> "Color":
        return Color(
            self.r + (other.r - self.r) * t,
            self.g + (other.g - self.g) * t,
            self.b + (other.b - self.b) * t,
        )

    def offset_hsl(self, dh: float, ds: float, dl: float) -> "Color":
        """Shift hue, saturation and lightness; hue wraps, the rest clamp."""
        r, g, b = (max(0.0, min(1.0, c)) for c in self)
        h, l, s = colorsys.rgb_to_hls(r, g, b)
        h = (h + dh) % 1.0
        s = max(0.0, min(1.0, s + ds))
        l = max(0.0, min(1.0, l + dl))
        return Color(*colorsys.hls_to_rgb(h, l, s))


@dataclass(frozen=True)
class ColorPalette:
    """The nine colors a garden scene is painted with."""

    sky: Color
    sand: Color
    grass: Color
    grass2: Color
    rock: Color
    mountain: Color
    snow: Color
    tree: Color
    ocean: Color

    def as_hex(self) -> Dict[str, str]:
        return {f.name: getattr(self, f.name).to_hex() for f in fields(self)}


# (cold, warm) endpoints per slot
PALETTE_ENDPOINTS: Dict[str, Tuple[Color, Color]] = {
    "sky": (Color.from_hex(0x7A8B9C), Color.from_hex(0xFFB584)),  # gray-blue / peach
    "sand": (Color.from_hex(0xA0A8B0), Color.from_hex(0xE8C170)),
    "grass": (Color.from_hex(0x5B8B7D), Color.from_hex(0xA8C256)),
    "grass2": (Color.from_hex(0x4A6B5B), Color.from_hex(0x7B8E3D)),
    "rock": (Color.from_hex(0x6B7B8C), Color.from_hex(0xA0653F)),  # slate / terracotta
    "mountain": (Color.from_hex(0x3D4A5C), Color.from_hex(0x5C3D2E)),
    "snow": (Color.from_hex(0xD5E5F0), Color.from_hex(0xFFEBD9)),
    "tree": (Color.from_hex(0x2B5F5F), Color.from_hex(0x6B8E23)),
    "ocean": (Color.from_hex(0x2B5876), Color.from_hex(0x48C9B0)),
}


def palette_from_valence(valence: float) -> ColorPalette:
    """Blend every slot between its cold and warm endpoint."""
    return ColorPalette(
        **{slot: cold.lerp(warm, valence) for slot, (cold, warm) in PALETTE_ENDPOINTS.items()}
    )
