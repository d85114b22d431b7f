"""Independent validation helpers for finished boards.

These functions recompute properties of a placement directly from the row
list, without going through constraints or ``NQueens``. The analysis pipeline
and the tests use them to double check what the solver reports.

Representation
--------------
Boards are encoded as a 1D sequence where ``rows[col] = row``.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Sequence, Set, Tuple

from .geometry import gcd


def attack_pairs(rows: Sequence[int]) -> int:
    """Compute the number of attacking queen pairs in O(N).

    Uses hash maps to count occurrences per row and diagonals. Columns never
    clash because each column holds exactly one queen.
    """
    row_count: Counter[int] = Counter()
    diag1: Counter[int] = Counter()
    diag2: Counter[int] = Counter()

    for column, row in enumerate(rows):
        row_count[row] += 1
        diag1[row - column] += 1
        diag2[row + column] += 1

    def _pairs(counter: Counter[int]) -> int:
        total = 0
        for count in counter.values():
            if count > 1:
                total += count * (count - 1) // 2
        return total

    return _pairs(row_count) + _pairs(diag1) + _pairs(diag2)


def is_valid_solution(rows: Sequence[int]) -> bool:
    """Return True if ``rows`` is a complete, non-attacking placement.

    Contract
    - Input: sequence of length N where rows[col] = row (0-based indices)
    - Valid if: all 0 <= row < N and no pairs of queens attack each other
    """
    n = len(rows)
    if n == 0:
        return False
    for row in rows:
        if not isinstance(row, int):
            return False
        if row < 0 or row >= n:
            return False
    return attack_pairs(rows) == 0


def max_collinear(rows: Sequence[int]) -> int:
    """Return the most queens found on one line, ignoring attack lines.

    Rows, columns and the two 45 degree diagonals are skipped; those belong to
    the attack rules. Lines are keyed by reduced direction plus intercept, so
    the scan is O(N^2).
    """
    lines: Dict[Tuple[int, int, int], Set[int]] = {}
    for x1 in range(len(rows)):
        for x2 in range(x1 + 1, len(rows)):
            dx, dy = x2 - x1, rows[x2] - rows[x1]
            if dy == 0 or abs(dy) == dx:
                continue
            d = gcd(dx, abs(dy))
            dx, dy = dx // d, dy // d
            key = (dx, dy, dy * x1 - dx * rows[x1])
            lines.setdefault(key, set()).update((x1, x2))
    if not lines:
        return min(1, len(rows))
    return max(len(points) for points in lines.values())


def max_on_origin_line(rows: Sequence[int]) -> int:
    """Return the most queens on a single line through cell (0, 0).

    The x and y axes are skipped. A queen on the origin counts towards every
    line.
    """
    if not rows:
        return 0
    origin = 1 if rows[0] == 0 else 0
    slopes: Counter[Tuple[int, int]] = Counter()
    for x, y in enumerate(rows):
        if x == 0 or y <= 0:
            continue
        d = gcd(x, y)
        slopes[(x // d, y // d)] += 1
    return origin + max(slopes.values(), default=0)
