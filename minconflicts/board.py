"""N-Queens board model for the min-conflicts solver.

Representation
--------------
Boards are encoded as a 1D list where ``rows[col] = row``: columns are the CSP
variables and rows are their values. One queen per column is therefore built
into the representation; every other restriction comes from the injected
constraint set. ``UNASSIGNED`` (-1) marks a column that is briefly empty while
the solver swaps values.

A fresh board places every queen on row 0, a deliberately inconsistent start
so the first repair steps have real work to do.

Concurrency
-----------
``all_conflicts`` and ``best_value_for`` evaluate up to N independent cells.
When an ``executor`` is supplied, the evaluations are fanned out with
``executor.map``, which keeps input order and only returns once every task is
done. The board is never mutated while a scan is in flight: mutations happen on
the calling thread after the fan-in, and random tie-breaking draws from the
board's own random source after all costs are known.

The scanned callables are closures over the board and its constraints, so the
executor must share memory with the caller: use a ``ThreadPoolExecutor``.
Process pools cannot pickle the work items and are rejected.
"""

from __future__ import annotations

import random
from concurrent.futures import Executor, ProcessPoolExecutor
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar

from .search import Conflict

UNASSIGNED = -1

# A constraint scores a hypothetical queen at (x, y) against the board.
Constraint = Callable[["NQueens", int, int], int]

_T = TypeVar("_T")


class NQueens:
    """State of an N-Queens problem under a replaceable constraint set.

    Parameters
    ----------
    n : int
        Board dimension N (N >= 1).
    *constraints : Constraint
        Initial constraint set; conflict counts are summed across it.
    rng : random.Random | None
        Random source used to break ties in ``best_value_for``.
    executor : concurrent.futures.Executor | None
        Optional thread pool for the read-only scans. The caller owns its
        lifetime. A ``ProcessPoolExecutor`` raises ``TypeError``.
    """

    def __init__(
        self,
        n: int,
        *constraints: Constraint,
        rng: Optional[random.Random] = None,
        executor: Optional[Executor] = None,
    ):
        if n < 1:
            raise ValueError(f"Board size must be positive, got {n}")
        self._n = n
        self._rows: List[int] = [0] * n
        self._constraints: Tuple[Constraint, ...] = tuple(constraints)
        self._rng = rng if rng is not None else random
        if isinstance(executor, ProcessPoolExecutor):
            raise TypeError("NQueens scans need a thread pool; process pools cannot run closures")
        self._executor = executor

    @property
    def n(self) -> int:
        return self._n

    @property
    def rows(self) -> Tuple[int, ...]:
        """Snapshot of the current assignment."""
        return tuple(self._rows)

    @property
    def constraints(self) -> Tuple[Constraint, ...]:
        return self._constraints

    def set_constraints(self, *constraints: Constraint) -> None:
        """Replace the constraint set; the assignment is left as is."""
        self._constraints = tuple(constraints)

    def set_rows(self, rows: Sequence[int]) -> None:
        """Load a complete assignment, one row per column."""
        if len(rows) != self._n:
            raise ValueError(f"Expected {self._n} rows, got {len(rows)}")
        for row in rows:
            if not 0 <= row < self._n:
                raise ValueError(f"Row {row} out of range for N={self._n}")
        self._rows = list(rows)

    def row_of(self, col: int) -> int:
        return self._rows[col]

    # MinConflict capabilities ------------------------------------------------

    def size(self) -> int:
        return self._n

    def assign(self, col: int, row: int) -> None:
        if not 0 <= row < self._n:
            raise ValueError(f"Row {row} out of range for N={self._n}")
        self._rows[self._column(col)] = row

    def unassign(self, col: int) -> int:
        col = self._column(col)
        previous = self._rows[col]
        self._rows[col] = UNASSIGNED
        return previous

    def all_conflicts(self) -> List[Conflict]:
        """Return a ``Conflict`` for every queen that scores non-zero, by column."""
        current = list(self._rows)
        counts = self._scan(lambda col: self.conflict_count(col, current[col]), range(self._n))
        return [Conflict(col, count) for col, count in enumerate(counts) if count != 0]

    def best_value_for(self, col: int) -> Tuple[int, int]:
        """Return the row with the fewest conflicts for ``col`` and that count.

        All rows are scored; when several share the minimum one of them is
        picked uniformly at random.
        """
        col = self._column(col)
        costs = self._scan(lambda row: self.conflict_count(col, row), range(self._n))
        best = min(costs)
        candidates = [row for row, cost in enumerate(costs) if cost == best]
        if len(candidates) == 1:
            return candidates[0], best
        return candidates[self._rng.randrange(len(candidates))], best

    conflicts = all_conflicts
    heuristic = best_value_for

    # Conflict evaluation -----------------------------------------------------

    def conflict_count(self, x: int, y: int) -> int:
        """Count conflicts for a queen placed at column ``x``, row ``y``."""
        total = 0
        for constraint in self._constraints:
            total += constraint(self, x, y)
        return total

    def line_count(self, x: int, y: int, dx: int, dy: int) -> int:
        """Count queens on ``(x + t*dx, y + t*dy)`` for every ``t != 0``."""
        return self.ray_count(x, y, dx, dy) + self.ray_count(x, y, -dx, -dy)

    def ray_count(self, x: int, y: int, dx: int, dy: int) -> int:
        """Count queens on ``(x + t*dx, y + t*dy)`` for ``t >= 1``."""
        count = 0
        i, j = x + dx, y + dy
        while 0 <= i < self._n and 0 <= j < self._n:
            if self._rows[i] == j:
                count += 1
            i += dx
            j += dy
        return count

    # Rendering ---------------------------------------------------------------

    def render(self) -> str:
        """Return the board as N lines of ``Q``/``_`` cells, row 0 first."""
        lines = []
        for y in range(self._n):
            lines.append("".join("Q" if self._rows[x] == y else "_" for x in range(self._n)))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"NQueens(n={self._n}, rows={self._rows})"

    # Internals ---------------------------------------------------------------

    def _column(self, col: int) -> int:
        if not 0 <= col < self._n:
            raise IndexError(f"Column {col} out of range for N={self._n}")
        return col

    def _scan(self, fn: Callable[[int], _T], items: Iterable[int]) -> List[_T]:
        if self._executor is None:
            return [fn(item) for item in items]
        return list(self._executor.map(fn, items))
