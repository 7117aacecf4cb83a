"""CSS-style color string parsing."""

from __future__ import annotations

import re
from functools import lru_cache

_RGBA_RE = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*([0-9]*\.?[0-9]+)\s*)?\)$"
)

_NAMED = {
    "transparent": (0, 0, 0, 0),
    "black": (0, 0, 0, 255),
    "white": (255, 255, 255, 255),
    "red": (255, 0, 0, 255),
    "green": (0, 128, 0, 255),
    "blue": (0, 0, 255, 255),
    "yellow": (255, 255, 0, 255),
    "cyan": (0, 255, 255, 255),
    "magenta": (255, 0, 255, 255),
}


@lru_cache(maxsize=512)
def parse_color(value: str) -> tuple[int, int, int, int]:
    """Parse '#rgb', '#rrggbb', '#rrggbbaa', 'rgb()/rgba()' or a basic name → (r, g, b, a).

    Raises ValueError for anything else.
    """
    text = value.strip().lower()
    if text in _NAMED:
        return _NAMED[text]
    if text.startswith("#"):
        digits = text[1:]
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        if len(digits) == 6:
            digits += "ff"
        if len(digits) != 8:
            raise ValueError(f"Invalid hex color: {value}")
        r, g, b, a = (int(digits[i:i + 2], 16) for i in range(0, 8, 2))
        return r, g, b, a
    m = _RGBA_RE.match(text)
    if m:
        r, g, b = (min(255, int(m.group(i))) for i in range(1, 4))
        alpha = float(m.group(4)) if m.group(4) is not None else 1.0
        return r, g, b, round(max(0.0, min(1.0, alpha)) * 255)
    raise ValueError(f"Unsupported color: {value}")
