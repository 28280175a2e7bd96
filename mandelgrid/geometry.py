from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple, Sequence

from mandelgrid.errors import ConfigurationError
from mandelgrid.numeric.complex_number import ComplexNumber

class GridCoordinate(NamedTuple):
    row: int
    col: int

@dataclass(frozen=True)
class PlaneRegion:
    top_left: ComplexNumber
    bottom_right: ComplexNumber

    @classmethod
    def from_pairs(cls, top_left: Sequence[float], bottom_right: Sequence[float]) -> "PlaneRegion":
        for name, pair in (("top_left", top_left), ("bottom_right", bottom_right)):
            if not (isinstance(pair, (list, tuple)) and len(pair) == 2):
                raise ConfigurationError(f"{name} must be [re, im].")
        try:
            return cls(
                ComplexNumber(float(top_left[0]), float(top_left[1])),
                ComplexNumber(float(bottom_right[0]), float(bottom_right[1])),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Region corners must be numeric: {e}") from e

    @property
    def real_extent(self) -> float:
        return self.bottom_right.re - self.top_left.re

    @property
    def imag_extent(self) -> float:
        # negative for the usual orientation where row 0 is the top edge
        return self.bottom_right.im - self.top_left.im

    def validate(self) -> "PlaneRegion":
        values = (self.top_left.re, self.top_left.im, self.bottom_right.re, self.bottom_right.im,
                  self.real_extent, self.imag_extent)
        if not all(math.isfinite(v) for v in values):
            raise ConfigurationError(
                f"Plane region {self.top_left} .. {self.bottom_right} must have finite corners and extents."
            )
        if self.real_extent == 0 or self.imag_extent == 0:
            raise ConfigurationError(
                f"Degenerate plane region {self.top_left} .. {self.bottom_right}: "
                "real and imaginary extents must be non-zero."
            )
        return self

def pixel_to_complex(coord: GridCoordinate, region: PlaneRegion, width: int, height: int) -> ComplexNumber:
    # samples the cell's top-left corner, not its center
    row, col = coord
    amount_x = col / width
    amount_y = row / height
    return ComplexNumber(
        region.top_left.re + region.real_extent * amount_x,
        region.top_left.im + region.imag_extent * amount_y,
    )
