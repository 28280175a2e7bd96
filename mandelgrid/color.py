from __future__ import annotations

from typing import Callable, Dict, Tuple, Union

import numpy as np

from mandelgrid.errors import ConfigurationError
from mandelgrid.numeric.escape import Bounded, EscapeResult

RGB = Tuple[int, int, int]
Color = Union[str, RGB]
ColorPolicy = Callable[[EscapeResult, int], Color]

INTERIOR = "black"
SATURATION = 30
LIGHTNESS = 60

def hsl_color(result: EscapeResult, max_iterations: int) -> Color:
    if isinstance(result, Bounded):
        return INTERIOR
    return f"hsl({result.iterations}, {SATURATION}%, {LIGHTNESS}%)"

def normalized_hsl_color(result: EscapeResult, max_iterations: int) -> Color:
    """Spread the hue wheel over the whole iteration range."""
    if isinstance(result, Bounded):
        return INTERIOR
    hue = int(round(result.iterations / max_iterations * 360)) % 360
    return f"hsl({hue}, {SATURATION}%, {LIGHTNESS}%)"

def sine_palette_color(result: EscapeResult, max_iterations: int) -> Color:
    """
    Three phase-shifted sine waves over t = (n / max_iterations) ** 0.7.
    The exponent stretches low escape counts for contrast.
    """
    if isinstance(result, Bounded):
        return (0, 0, 0)
    t = (result.iterations / max_iterations) ** 0.7
    r = int(255 * (0.5 + 0.5 * np.sin(6 * np.pi * t)))
    g = int(255 * (0.5 + 0.5 * np.sin(6 * np.pi * t + 2 * np.pi / 3)))
    b = int(255 * (0.5 + 0.5 * np.sin(6 * np.pi * t + 4 * np.pi / 3)))
    return (r, g, b)

COLOR_POLICIES: Dict[str, ColorPolicy] = {
    "hsl": hsl_color,
    "normalized-hsl": normalized_hsl_color,
    "sine": sine_palette_color,
}

def get_color_policy(name: str) -> ColorPolicy:
    try:
        return COLOR_POLICIES[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown color policy {name!r}; expected one of: {', '.join(sorted(COLOR_POLICIES))}"
        ) from None
