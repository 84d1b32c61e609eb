"""Small 2D math helpers: vectors, integer points, frame timing and clamping."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from typing import Callable, Iterator


@dataclass(frozen=True)
class Vector2:
    """An immutable 2D vector of floats."""

    x: float = 0.0
    y: float = 0.0

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalised(self) -> Vector2:
        """Return the unit vector in this direction, or the zero vector."""
        length = self.length()
        if length == 0.0:
            return ZERO2
        return self / length

    def dot(self, other: Vector2) -> float:
        return self.x * other.x + self.y * other.y

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> Vector2:
        return Vector2(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __truediv__(self, k: float) -> Vector2:
        return Vector2(self.x / k, self.y / k)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


ZERO2 = Vector2(0.0, 0.0)
ONE2 = Vector2(1.0, 1.0)


@dataclass(frozen=True)
class Point2:
    """An immutable 2D point of integers, used for cells and screen pixels."""

    x: int = 0
    y: int = 0

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y


@dataclass
class DeltaClock:
    """Measures the time in seconds between successive ticks."""

    clock: Callable[[], float] = time.perf_counter
    _last: float = field(init=False)

    def __post_init__(self) -> None:
        self._last = self.clock()

    def tick(self) -> float:
        """Return the seconds elapsed since the previous tick (or creation)."""
        now = self.clock()
        delta = now - self._last
        self._last = now
        return delta


def get_unit_vector(p0: Vector2, p1: Vector2) -> Vector2:
    """Return the unit vector pointing from p0 to p1 (zero if they coincide)."""
    return (p1 - p0).normalised()


def clamp(low: float, high: float, x: float) -> float:
    """Limit x to the range [low, high]."""
    if x < low:
        return low
    return high if high < x else x