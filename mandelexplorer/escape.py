"""Escape-time evaluation of the Mandelbrot recurrence for a single point."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral
from typing import Union

ESCAPE_RADIUS = 2.0


@dataclass(frozen=True)
class Escaped:
    """The orbit left the disc of radius 2 at step ``iteration`` (1-based)."""

    iteration: int

    @property
    def escaped(self) -> bool:
        return True

    @property
    def intensity(self) -> int:
        return self.iteration


@dataclass(frozen=True)
class Bounded:
    """The orbit stayed inside the disc for all ``max_iter`` steps."""

    max_iter: int

    @property
    def escaped(self) -> bool:
        return False

    @property
    def intensity(self) -> int:
        return self.max_iter


EscapeResult = Union[Escaped, Bounded]


def escape_time(c: complex, max_iter: int) -> EscapeResult:
    """Iterate z -> z**2 + c from z = 0 and report when |z| first exceeds 2.

    Returns ``Escaped(n)`` at the first step n where the modulus passes the
    escape radius, otherwise ``Bounded(max_iter)``.
    """
    if isinstance(max_iter, bool) or not isinstance(max_iter, Integral) or max_iter < 1:
        raise ValueError(f"max_iter must be a positive integer, got {max_iter!r}")

    z = 0j
    for n in range(1, max_iter + 1):
        z = z * z + c
        if abs(z) > ESCAPE_RADIUS:
            return Escaped(n)
    return Bounded(max_iter)
