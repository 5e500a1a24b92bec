"""CSS color parsing and WCAG luminance math."""

from __future__ import annotations

import colorsys
import math
import re
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RGBA:
    r: int
    g: int
    b: int
    a: float = 1.0

    @property
    def is_transparent(self) -> bool:
        return self.a <= 0.0

    def to_hex(self) -> str:
        return "#" + "".join(f"{c:02x}" for c in (self.r, self.g, self.b))

    def over(self, backdrop: "RGBA") -> "RGBA":
        """Alpha-composite this color over an opaque backdrop."""
        if self.a >= 1.0:
            return self
        a = max(0.0, self.a)
        return RGBA(
            round(self.r * a + backdrop.r * (1 - a)),
            round(self.g * a + backdrop.g * (1 - a)),
            round(self.b * a + backdrop.b * (1 - a)),
            1.0,
        )


WHITE = RGBA(255, 255, 255)
BLACK = RGBA(0, 0, 0)
TRANSPARENT = RGBA(0, 0, 0, 0.0)

NAMED_COLORS: dict[str, str] = {
    "aliceblue": "#f0f8ff", "antiquewhite": "#faebd7", "aqua": "#00ffff",
    "aquamarine": "#7fffd4", "azure": "#f0ffff", "beige": "#f5f5dc",
    "bisque": "#ffe4c4", "black": "#000000", "blanchedalmond": "#ffebcd",
    "blue": "#0000ff", "blueviolet": "#8a2be2", "brown": "#a52a2a",
    "burlywood": "#deb887", "cadetblue": "#5f9ea0", "chartreuse": "#7fff00",
    "chocolate": "#d2691e", "coral": "#ff7f50", "cornflowerblue": "#6495ed",
    "cornsilk": "#fff8dc", "crimson": "#dc143c", "cyan": "#00ffff",
    "darkblue": "#00008b", "darkcyan": "#008b8b", "darkgoldenrod": "#b8860b",
    "darkgray": "#a9a9a9", "darkgreen": "#006400", "darkgrey": "#a9a9a9",
    "darkkhaki": "#bdb76b", "darkmagenta": "#8b008b", "darkolivegreen": "#556b2f",
    "darkorange": "#ff8c00", "darkorchid": "#9932cc", "darkred": "#8b0000",
    "darksalmon": "#e9967a", "darkseagreen": "#8fbc8f", "darkslateblue": "#483d8b",
    "darkslategray": "#2f4f4f", "darkslategrey": "#2f4f4f", "darkturquoise": "#00ced1",
    "darkviolet": "#9400d3", "deeppink": "#ff1493", "deepskyblue": "#00bfff",
    "dimgray": "#696969", "dimgrey": "#696969", "dodgerblue": "#1e90ff",
    "firebrick": "#b22222", "floralwhite": "#fffaf0", "forestgreen": "#228b22",
    "fuchsia": "#ff00ff", "gainsboro": "#dcdcdc", "ghostwhite": "#f8f8ff",
    "gold": "#ffd700", "goldenrod": "#daa520", "gray": "#808080",
    "green": "#008000", "greenyellow": "#adff2f", "grey": "#808080",
    "honeydew": "#f0fff0", "hotpink": "#ff69b4", "indianred": "#cd5c5c",
    "indigo": "#4b0082", "ivory": "#fffff0", "khaki": "#f0e68c",
    "lavender": "#e6e6fa", "lavenderblush": "#fff0f5", "lawngreen": "#7cfc00",
    "lemonchiffon": "#fffacd", "lightblue": "#add8e6", "lightcoral": "#f08080",
    "lightcyan": "#e0ffff", "lightgoldenrodyellow": "#fafad2", "lightgray": "#d3d3d3",
    "lightgreen": "#90ee90", "lightgrey": "#d3d3d3", "lightpink": "#ffb6c1",
    "lightsalmon": "#ffa07a", "lightseagreen": "#20b2aa", "lightskyblue": "#87cefa",
    "lightslategray": "#778899", "lightslategrey": "#778899", "lightsteelblue": "#b0c4de",
    "lightyellow": "#ffffe0", "lime": "#00ff00", "limegreen": "#32cd32",
    "linen": "#faf0e6", "magenta": "#ff00ff", "maroon": "#800000",
    "mediumaquamarine": "#66cdaa", "mediumblue": "#0000cd", "mediumorchid": "#ba55d3",
    "mediumpurple": "#9370db", "mediumseagreen": "#3cb371", "mediumslateblue": "#7b68ee",
    "mediumspringgreen": "#00fa9a", "mediumturquoise": "#48d1cc",
    "mediumvioletred": "#c71585", "midnightblue": "#191970", "mintcream": "#f5fffa",
    "mistyrose": "#ffe4e1", "moccasin": "#ffe4b5", "navajowhite": "#ffdead",
    "navy": "#000080", "oldlace": "#fdf5e6", "olive": "#808000",
    "olivedrab": "#6b8e23", "orange": "#ffa500", "orangered": "#ff4500",
    "orchid": "#da70d6", "palegoldenrod": "#eee8aa", "palegreen": "#98fb98",
    "paleturquoise": "#afeeee", "palevioletred": "#db7093", "papayawhip": "#ffefd5",
    "peachpuff": "#ffdab9", "peru": "#cd853f", "pink": "#ffc0cb",
    "plum": "#dda0dd", "powderblue": "#b0e0e6", "purple": "#800080",
    "rebeccapurple": "#663399", "red": "#ff0000", "rosybrown": "#bc8f8f",
    "royalblue": "#4169e1", "saddlebrown": "#8b4513", "salmon": "#fa8072",
    "sandybrown": "#f4a460", "seagreen": "#2e8b57", "seashell": "#fff5ee",
    "sienna": "#a0522d", "silver": "#c0c0c0", "skyblue": "#87ceeb",
    "slateblue": "#6a5acd", "slategray": "#708090", "slategrey": "#708090",
    "snow": "#fffafa", "springgreen": "#00ff7f", "steelblue": "#4682b4",
    "tan": "#d2b48c", "teal": "#008080", "thistle": "#d8bfd8",
    "tomato": "#ff6347", "turquoise": "#40e0d0", "violet": "#ee82ee",
    "wheat": "#f5deb3", "white": "#ffffff", "whitesmoke": "#f5f5f5",
    "yellow": "#ffff00", "yellowgreen": "#9acd32",
}

_FUNC_RE = re.compile(r"^(rgba?|hsla?)\(\s*(.*?)\s*\)$", re.IGNORECASE)


def parse_color(value: Optional[str]) -> Optional[RGBA]:
    """Parse a CSS color value.

    Returns None for values that are not colors (``inherit``, ``var(...)``,
    malformed input).
    """
    if value is None:
        return None
    text = value.strip().lower()
    if not text:
        return None
    if text == "transparent":
        return TRANSPARENT
    if text in NAMED_COLORS:
        text = NAMED_COLORS[text]
    if text.startswith("#"):
        return _parse_hex(text[1:])
    match = _FUNC_RE.match(text)
    if match:
        func, body = match.group(1), match.group(2)
        parts = _split_args(body)
        if parts is None:
            return None
        if func.startswith("rgb"):
            return _parse_rgb(parts)
        return _parse_hsl(parts)
    return None


def _parse_hex(digits: str) -> Optional[RGBA]:
    if not re.fullmatch(r"[0-9a-f]+", digits):
        return None
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) == 6:
        return RGBA(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
    if len(digits) == 8:
        return RGBA(
            int(digits[0:2], 16),
            int(digits[2:4], 16),
            int(digits[4:6], 16),
            round(int(digits[6:8], 16) / 255, 4),
        )
    return None


def _split_args(body: str) -> Optional[list[str]]:
    """Split ``rgb()`` arguments in comma or space/slash syntax."""
    if "," in body:
        parts = [p.strip() for p in body.split(",")]
    else:
        main, _, alpha = body.partition("/")
        parts = main.split()
        if alpha.strip():
            parts.append(alpha.strip())
    if len(parts) not in (3, 4) or any(not p for p in parts):
        return None
    return parts


def _channel(token: str) -> int:
    if token.endswith("%"):
        return round(max(0.0, min(100.0, float(token[:-1]))) * 2.55)
    return round(max(0.0, min(255.0, float(token))))


def _alpha(token: str) -> float:
    if token.endswith("%"):
        return max(0.0, min(1.0, float(token[:-1]) / 100))
    return max(0.0, min(1.0, float(token)))


def _parse_rgb(parts: list[str]) -> Optional[RGBA]:
    try:
        r, g, b = (_channel(p) for p in parts[:3])
        a = _alpha(parts[3]) if len(parts) == 4 else 1.0
    except ValueError:
        return None
    return RGBA(r, g, b, a)


def _parse_hsl(parts: list[str]) -> Optional[RGBA]:
    try:
        hue = float(parts[0].removesuffix("deg")) % 360
        sat = float(parts[1].rstrip("%")) / 100
        light = float(parts[2].rstrip("%")) / 100
        a = _alpha(parts[3]) if len(parts) == 4 else 1.0
    except ValueError:
        return None
    if not all(math.isfinite(v) for v in (hue, sat, light)):
        return None
    r, g, b = colorsys.hls_to_rgb(hue / 360, max(0.0, min(1.0, light)), max(0.0, min(1.0, sat)))
    return RGBA(round(r * 255), round(g * 255), round(b * 255), a)


def _linearize(channel: int) -> float:
    c = channel / 255
    return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(color: RGBA) -> float:
    """WCAG relative luminance in [0, 1]."""
    return (
        0.2126 * _linearize(color.r)
        + 0.7152 * _linearize(color.g)
        + 0.0722 * _linearize(color.b)
    )


def contrast_ratio(foreground: RGBA, background: RGBA) -> float:
    """Contrast ratio between two colors, in [1, 21] and symmetric."""
    l1 = relative_luminance(foreground)
    l2 = relative_luminance(background)
    return (max(l1, l2) + 0.05) / (min(l1, l2) + 0.05)
