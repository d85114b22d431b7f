"""Integer slope helpers for line-based constraints.

A slope is a direction vector ``(dx, dy)`` in lowest terms. Every family of
parallel lines on the grid is identified by exactly one irreducible slope, so
enumerating them once up front lets the constraints sweep each line family a
single time.
"""

from __future__ import annotations

from typing import List, Tuple

Slope = Tuple[int, int]


def gcd(a: int, b: int) -> int:
    """Return the greatest common divisor of two non-negative integers."""
    while b != 0:
        a, b = b, a % b
    return a


def irreducible_slopes(limit: int) -> List[Slope]:
    """Enumerate every slope ``(dx, dy)`` with ``1 <= dx, dy < limit`` in lowest terms.

    Pairs sharing a common factor are skipped since they trace the same lines
    as a smaller slope. Ordering is dx-major, dy-minor, so ``(1, 1)`` always
    comes first when ``limit > 1``; callers that already cover the diagonal
    drop it with ``[1:]``.
    """
    slopes: List[Slope] = []
    for dx in range(1, limit):
        for dy in range(1, limit):
            if gcd(dx, dy) != 1:
                continue
            slopes.append((dx, dy))
    return slopes
