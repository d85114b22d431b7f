"""Constraint factories for the N-Queens board.

Each factory returns a ``Constraint``: a callable ``(board, x, y) -> int``
scoring a hypothetical queen at column ``x``, row ``y`` against the rest of
the board. Constraints only read the board. Totals are summed over the active
constraint set, so any combination can be layered on a board.

Factories raise ``NoSolutionError`` for parameter combinations known to be
unsatisfiable. The checks cover the small boards listed below; they are not a
general satisfiability test.

- attack: queens may not share a row, column or diagonal. Unsatisfiable for
  N = 2 and N = 3.
- collinear: at most ``max_points`` queens on any straight line of the grid
  other than rows, columns and the 45 degree diagonals. Unsatisfiable for
  N in {2, 3, 5, 6, 7} when ``max_points <= 2``.
- angle: at most ``max_points`` queens on any line through the origin cell
  ``(0, 0)``.
"""

from __future__ import annotations

from typing import Dict, List

from .board import Constraint, NQueens
from .geometry import gcd, irreducible_slopes


class NoSolutionError(ValueError):
    """Raised when a constraint cannot be satisfied on a board of the given size."""


def _no_conflicts(board: NQueens, x: int, y: int) -> int:
    return 0


def _check_max_points(max_points: int) -> None:
    if max_points < 1:
        raise ValueError(f"max_points must be at least 1, got {max_points}")


def attack_constraint(n: int) -> Constraint:
    """Return the classic queen attack constraint (rows, columns, diagonals)."""
    if n in (2, 3):
        raise NoSolutionError(f"no solution: queens always attack on a {n}x{n} board")

    def attack(board: NQueens, x: int, y: int) -> int:
        return (
            board.line_count(x, y, 1, 0)
            + board.line_count(x, y, 0, 1)
            + board.line_count(x, y, 1, 1)
            + board.line_count(x, y, -1, 1)
        )

    return attack


def collinear_constraint(max_points: int, n: int) -> Constraint:
    """Return a constraint allowing at most ``max_points`` queens per line.

    Only slopes up to ``1 + n // max_points`` are checked: steeper lines cannot
    hold ``max_points`` cells on an NxN board. The diagonal slope (1, 1) is
    left to the attack constraint.
    """
    _check_max_points(max_points)
    if n == 1:
        return _no_conflicts
    if n in (2, 3, 5, 6, 7) and max_points <= 2:
        raise NoSolutionError(
            f"no solution: a {n}x{n} board always has {max_points + 1} collinear queens"
        )

    slopes = irreducible_slopes(1 + n // max_points)[1:]
    # (x, y) itself is one of the points on the line.
    allowed = max_points - 1

    def collinear(board: NQueens, x: int, y: int) -> int:
        excess = 0
        for dx, dy in slopes:
            for points in (board.line_count(x, y, dx, dy), board.line_count(x, y, -dx, dy)):
                if points > allowed:
                    excess += points - allowed
        return excess

    return collinear


def angle_constraint(max_points: int, n: int) -> Constraint:
    """Return a constraint allowing at most ``max_points`` queens per ray from the origin."""
    _check_max_points(max_points)
    if n == 1:
        return _no_conflicts

    slopes = irreducible_slopes(1 + n // max_points)[1:]
    allowed = max_points - 1

    def angle(board: NQueens, x: int, y: int) -> int:
        if x == 0 and y == 0:
            # The origin sees every slope.
            excess = 0
            for dx, dy in slopes:
                points = board.line_count(0, 0, dx, dy)
                if points > allowed:
                    excess += points - allowed
            return excess
        if x == 0 or y == 0:
            # Axis lines are rows and columns.
            return 0

        d = gcd(x, y)
        points = board.line_count(0, 0, x // d, y // d)
        if board.row_of(0) == 0:
            # line_count skips the origin.
            points += 1
        if board.row_of(x) == y:
            # Count the origin instead of (x, y) itself.
            points -= 1
        if points > allowed:
            return points - allowed
        return 0

    return angle


def build_constraints(
    n: int,
    attack: bool = True,
    collinear: bool = False,
    angle: bool = True,
    max_points: int = 2,
) -> List[Constraint]:
    """Build the ordered constraint list (attack, collinear, angle).

    Raises
    ------
    NoSolutionError
        If any selected constraint is unsatisfiable for ``n``.
    """
    constraints: List[Constraint] = []
    if attack:
        constraints.append(attack_constraint(n))
    if collinear:
        constraints.append(collinear_constraint(max_points, n))
    if angle:
        constraints.append(angle_constraint(max_points, n))
    return constraints


# Named combinations used by the analysis pipeline.
PROFILES: List[str] = [
    "attack",
    "attack+angle",
    "attack+collinear",
    "attack+collinear+angle",
    "collinear+angle",
]


def parse_profile(label: str) -> Dict[str, bool]:
    """Turn a label such as ``"attack+angle"`` into ``build_constraints`` flags."""
    names = {"attack", "collinear", "angle"}
    parts = [part.strip().lower() for part in label.split("+") if part.strip()]
    unknown = set(parts).difference(names)
    if unknown or not parts:
        raise ValueError(
            f"Unknown constraint profile '{label}'. Combine: " + ", ".join(sorted(names))
        )
    return {name: name in parts for name in ("attack", "collinear", "angle")}
