from __future__ import annotations

from typing import List, Protocol, Tuple

import numpy as np
from PIL import Image, ImageColor

from mandelgrid.color import RGB, Color

class DrawingSurface(Protocol):
    width: int
    height: int

    def set_pixel(self, x: int, y: int, color: Color) -> None: ...

def to_rgb(color: Color) -> RGB:
    if isinstance(color, str):
        return ImageColor.getrgb(color)[:3]
    r, g, b = color
    return (int(r), int(g), int(b))

class ImageSurface:
    """In-memory RGB raster. Nothing is written to disk."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._buf = np.zeros((height, width, 3), dtype=np.uint8)

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        self._buf[y, x] = to_rgb(color)

    def pixels(self) -> np.ndarray:
        return self._buf.copy()

    def image(self) -> Image.Image:
        return Image.fromarray(self._buf)

    def to_ansi(self) -> str:
        # two pixel rows per text line: upper half block, fg = top, bg = bottom
        lines = []
        for y in range(0, self.height, 2):
            cells = []
            for x in range(self.width):
                tr, tg, tb = self._buf[y, x]
                if y + 1 < self.height:
                    br, bg, bb = self._buf[y + 1, x]
                    cells.append(f"\033[38;2;{tr};{tg};{tb}m\033[48;2;{br};{bg};{bb}m▀")
                else:
                    cells.append(f"\033[38;2;{tr};{tg};{tb}m\033[49m▀")
            lines.append("".join(cells) + "\033[0m")
        return "\n".join(lines)

class RecordingSurface:
    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.writes: List[Tuple[int, int, Color]] = []

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x},{y}) outside {self.width}x{self.height} surface")
        self.writes.append((x, y, color))
