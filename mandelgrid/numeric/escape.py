from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from mandelgrid.errors import ConfigurationError
from mandelgrid.numeric.complex_number import ComplexNumber, norm_squared
from mandelgrid.numeric.series import IterationSeries, Step, quadratic_step

# radius 2 in the plane
ESCAPE_NORM_SQUARED = 4.0

@dataclass(frozen=True)
class Escaped:
    iterations: int

class Bounded:
    _instance = None

    def __new__(cls) -> "Bounded":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "BOUNDED"

    def __reduce__(self):
        return (Bounded, ())

BOUNDED = Bounded()

EscapeResult = Union[Escaped, Bounded]

def validate_max_iterations(max_iterations: int) -> int:
    if isinstance(max_iterations, bool) or not isinstance(max_iterations, int):
        raise ConfigurationError(f"max_iterations must be an integer, got {max_iterations!r}")
    if max_iterations < 1:
        raise ConfigurationError(f"max_iterations must be >= 1, got {max_iterations}")
    return max_iterations

def classify_escape(series: IterationSeries, max_iterations: int) -> EscapeResult:
    """Consume up to ``max_iterations`` iterates, counting from 1.

    Returns ``Escaped(it)`` for the first iterate whose squared norm exceeds
    4 (or is not finite), otherwise ``BOUNDED``.
    """
    validate_max_iterations(max_iterations)
    for it in range(1, max_iterations + 1):
        n2 = norm_squared(series.next_iterate())
        if n2 > ESCAPE_NORM_SQUARED or not math.isfinite(n2):
            return Escaped(it)
    return BOUNDED

def escape_time(c: ComplexNumber, max_iterations: int, step: Step = quadratic_step) -> EscapeResult:
    return classify_escape(IterationSeries(c, step), max_iterations)
