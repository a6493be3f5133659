"""Counting helpers: permutations, combinations, Pascal's triangle, pigeonhole."""

from __future__ import annotations

from dataclasses import dataclass

from signalflow import defaults
from signalflow.discrete.validation import require_int
from signalflow.errors import InputValidationError


def _check_selection(n, r) -> tuple[int, int]:
    n = require_int("n", n, minimum=0)
    r = require_int("r", r, minimum=0)
    if r > n:
        raise InputValidationError(f"r must not exceed n, got n={n}, r={r}")
    return n, r


def permutations(n: int, r: int) -> int:
    """Ordered selections P(n, r) = n! / (n - r)!."""
    n, r = _check_selection(n, r)
    result = 1
    for i in range(n, n - r, -1):
        result *= i
    return result


def combinations(n: int, r: int) -> int:
    """Unordered selections C(n, r) = n! / (r! (n - r)!)."""
    n, r = _check_selection(n, r)
    r = min(r, n - r)
    result = 1
    for i in range(1, r + 1):
        # Exact at every step: the running product is C(n - r + i, i)
        result = result * (n - r + i) // i
    return result


def pascal_triangle(rows: int) -> list[list[int]]:
    """First ``rows`` rows of Pascal's triangle; row i holds C(i, 0..i)."""
    rows = require_int("rows", rows, minimum=1, maximum=defaults.MAX_PASCAL_ROWS)
    triangle: list[list[int]] = []
    for i in range(rows):
        row = [1] * (i + 1)
        for j in range(1, i):
            row[j] = triangle[i - 1][j - 1] + triangle[i - 1][j]
        triangle.append(row)
    return triangle


@dataclass(frozen=True)
class PigeonholeResult:
    minimum_per_hole: int
    holes_with_extra: int
    distribution: tuple[int, ...]

    @property
    def guaranteed_collision(self) -> bool:
        """True when some hole must hold more than one object."""
        return max(self.distribution) > 1


def pigeonhole(pigeons: int, holes: int) -> PigeonholeResult:
    """Spread ``pigeons`` as evenly as possible over ``holes``.

    The first ``pigeons % holes`` holes receive one extra object.
    """
    pigeons = require_int("pigeons", pigeons, minimum=1)
    holes = require_int("holes", holes, minimum=1)
    base, extra = divmod(pigeons, holes)
    distribution = tuple(base + (1 if i < extra else 0) for i in range(holes))
    return PigeonholeResult(minimum_per_hole=base, holes_with_extra=extra, distribution=distribution)
