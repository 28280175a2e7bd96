"""Escape-time probes approaching known points on the set's boundary.

Approaching the neck at ``-0.75`` vertically, ``escape_time * eps`` tends
to pi. Approaching the cusp at ``0.25`` from the right,
``escape_time * sqrt(eps)`` does too.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional

from mandelgrid.errors import ConfigurationError
from mandelgrid.numeric.complex_number import ComplexNumber, add
from mandelgrid.numeric.escape import Escaped, escape_time
from mandelgrid.util.logging_setup import get_logger

PROBE_MAX_ITERATIONS = 10 ** 11

@dataclass(frozen=True)
class ProbeSample:
    epsilon: float
    escape_time: Optional[int]
    scaled: Optional[float]

@dataclass(frozen=True)
class BoundaryProbe:
    end: ComplexNumber
    direction: ComplexNumber
    scale: Callable[[float], float]
    default_steps: int

PROBES: Dict[str, BoundaryProbe] = {
    "seahorses": BoundaryProbe(ComplexNumber(-0.75, 0.0), ComplexNumber(0.0, 1.0), lambda eps: eps, 8),
    "butt": BoundaryProbe(ComplexNumber(0.25, 0.0), ComplexNumber(1.0, 0.0), math.sqrt, 15),
}

def iter_probe_boundary(
    probe: BoundaryProbe,
    steps: int,
    max_iterations: int = PROBE_MAX_ITERATIONS,
) -> Iterator[ProbeSample]:
    if steps < 1:
        raise ConfigurationError(f"steps must be >= 1, got {steps}")
    logger = get_logger("diagnostics")
    for k in range(steps):
        epsilon = 10.0 ** -k
        c = add(probe.end, ComplexNumber(probe.direction.re * epsilon, probe.direction.im * epsilon))
        result = escape_time(c, max_iterations)
        if isinstance(result, Escaped):
            t = result.iterations
            sample = ProbeSample(epsilon, t, t * probe.scale(epsilon))
        else:
            sample = ProbeSample(epsilon, None, None)
        logger.debug("probe end=%s eps=%s -> %s", probe.end, epsilon, sample.escape_time)
        yield sample

def probe_boundary(probe: BoundaryProbe, steps: int, max_iterations: int = PROBE_MAX_ITERATIONS) -> List[ProbeSample]:
    return list(iter_probe_boundary(probe, steps, max_iterations))

def dive_into_seahorses(steps: int = 8, max_iterations: int = PROBE_MAX_ITERATIONS) -> List[ProbeSample]:
    return probe_boundary(PROBES["seahorses"], steps, max_iterations)

def dive_into_butt(steps: int = 15, max_iterations: int = PROBE_MAX_ITERATIONS) -> List[ProbeSample]:
    return probe_boundary(PROBES["butt"], steps, max_iterations)
