from __future__ import annotations
import math
import re
from typing import Tuple

_HEX_RE = re.compile(r"#?([0-9a-fA-F]{6})")


def _channels01(hex_color: str) -> Tuple[float, float, float]:
    m = _HEX_RE.fullmatch(str(hex_color or "").strip())
    if m is None:
        raise ValueError(f"not a #rrggbb color: {hex_color!r}")
    h = m.group(1)
    return (int(h[0:2], 16) / 255, int(h[2:4], 16) / 255, int(h[4:6], 16) / 255)


def hex_to_rgb(hex_color: str) -> Tuple[str, str, str]:
    """'#ff8000' -> ('1.00', '0.50', '0.00'), the form dust/entity_effect take."""
    r, g, b = _channels01(hex_color)
    return (f"{r:.2f}", f"{g:.2f}", f"{b:.2f}")


def hex_to_hue(hex_color: str) -> str:
    """Hue of the color normalized to 0..1, two decimals (note pitch argument)."""
    r, g, b = _channels01(hex_color)
    mx = max(r, g, b)
    mn = min(r, g, b)
    d = mx - mn
    if d == 0:
        h = 0.0
    elif mx == r:
        h = ((g - b) / d) % 6
    elif mx == g:
        h = (b - r) / d + 2
    else:
        h = (r - g) / d + 4
    deg = int(math.floor(h * 60 + 0.5)) % 360
    return f"{deg / 360:.2f}"
