"""Min-conflicts heuristic repair for constraint satisfaction problems.

This module implements the domain-independent half of the solver: a single
repair step of the min-conflicts method. It knows nothing about queens or
boards; any object providing the ``MinConflict`` capability set can be solved.

Contract (public API)
---------------------
- ``step(problem, rng=None) -> bool`` performs exactly one repair attempt and
  returns True iff the problem currently has no conflicts.
- ``problem`` must satisfy ``MinConflict``: ``conflicts()``, ``heuristic(var)``,
  ``assign(var, value)``, ``unassign(var)`` and ``size()``. Variables and
  values are plain integers.

Algorithm
---------
1. Compute the conflict report; an empty report means solved.
2. Starting at a random offset, scan the conflicting variables (wrapping
   around) and commit the first reassignment that strictly lowers the
   variable's conflict count.
3. When nothing improves (plateau or local minimum), swap the values of two
   distinct variables unconditionally. The anchor is the last scanned
   conflicting variable half of the time, otherwise any variable.

Determinism
-----------
Every random decision goes through ``rng``. Pass a seeded ``random.Random``
for reproducible runs; by default the module-level ``random`` functions are
used, so ``random.seed`` also works.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple


@dataclass(frozen=True)
class Conflict:
    """A variable whose current value violates at least one constraint."""

    var: int
    conflicts: int


class MinConflict(Protocol):
    """Capabilities required by ``step``."""

    def conflicts(self) -> List[Conflict]:
        """Return every variable with a non-zero conflict count."""
        ...

    def heuristic(self, var: int) -> Tuple[int, int]:
        """Return the best value for ``var`` and the cost of choosing it."""
        ...

    def assign(self, var: int, value: int) -> None:
        ...

    def unassign(self, var: int) -> int:
        """Clear ``var`` and return the value it held."""
        ...

    def size(self) -> int:
        ...


def step(problem: MinConflict, rng: Optional[random.Random] = None) -> bool:
    """Run one iteration of the heuristic repair method.

    Parameters
    ----------
    problem : MinConflict
        The CSP to repair in place.
    rng : random.Random | None
        Random source for the scan offset and the escape move.

    Returns
    -------
    bool
        True when the conflict report was empty (nothing was changed),
        False after a repair or escape move.
    """
    source = rng if rng is not None else random
    report = problem.conflicts()
    if not report:
        return True

    offset = source.randrange(len(report))
    last = report[offset]
    for index in range(len(report)):
        last = report[(index + offset) % len(report)]
        previous = problem.unassign(last.var)
        value, cost = problem.heuristic(last.var)
        if cost < last.conflicts:
            problem.assign(last.var, value)
            return False
        # No strict improvement; put it back and try the next one.
        problem.assign(last.var, previous)

    size = problem.size()
    if size < 2:
        return False

    # Plateau: swap two values to break out of the local minimum.
    first = last.var
    if source.randrange(2) == 0:
        first = source.randrange(size)
    second = first
    while second == first:
        second = source.randrange(size)
    first_value = problem.unassign(first)
    second_value = problem.unassign(second)
    problem.assign(first, second_value)
    problem.assign(second, first_value)
    return False
