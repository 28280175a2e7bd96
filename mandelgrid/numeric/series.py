from __future__ import annotations

from typing import Callable

from mandelgrid.numeric.complex_number import ComplexNumber, add, multiply

Step = Callable[[ComplexNumber, ComplexNumber], ComplexNumber]

def quadratic_step(x: ComplexNumber, c: ComplexNumber) -> ComplexNumber:
    return add(multiply(x, x), c)

class IterationSeries:
    """Unbounded iterates of ``x -> step(x, c)`` starting from ``x0 = c``.

    The series never stops by itself; callers decide how many iterates to
    consume. Build a new series to start again from ``x0``.
    """

    __slots__ = ("c", "current", "_step")

    def __init__(self, c: ComplexNumber, step: Step = quadratic_step) -> None:
        self.c = c
        self.current = c
        self._step = step

    def next_iterate(self) -> ComplexNumber:
        self.current = self._step(self.current, self.c)
        return self.current

    def __iter__(self) -> "IterationSeries":
        return self

    def __next__(self) -> ComplexNumber:
        return self.next_iterate()
