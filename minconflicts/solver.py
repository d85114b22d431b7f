"""Restarting driver around the min-conflicts step.

``step`` has no notion of giving up; this module supplies the budget. Each
attempt starts from a fresh board (all queens on row 0) and layers the
constraints one at a time: the board is first solved under ``constraints[:1]``,
then under ``constraints[:2]`` and so on. Every call to ``step`` counts as one
iteration. An attempt that uses up ``max_iter`` iterations without a solution
is abandoned and a new attempt begins; a step that solves the current layer
is never discarded, so even a budget of one iteration finishes N = 1.

Contract (public API)
---------------------
- Input: board size ``n >= 1``, an ordered constraint list, an iteration
  budget (``0``/``None`` means ``default_max_iter(n)``) and optional random
  source, executor, wall-clock ``time_limit`` and ``max_retries``.
- Output: a ``SolveResult``. Without ``time_limit``/``max_retries`` the call
  only returns once a solution is found.

Non-convergence is never an error: it shows up as ``solved=False`` with
``timeout=True`` when one of the optional limits ended the run.
"""

from __future__ import annotations

import random
from concurrent.futures import Executor
from dataclasses import dataclass
from time import perf_counter
from typing import Optional, Sequence

from .board import Constraint, NQueens
from .search import step


@dataclass
class SolveResult:
    """Outcome of a ``solve`` run.

    ``iterations`` counts steps in the final attempt, ``steps`` across all
    attempts.
    """

    board: NQueens
    solved: bool
    iterations: int
    retries: int
    steps: int
    elapsed: float
    timeout: bool = False


def default_max_iter(n: int) -> int:
    """Default per-attempt iteration budget, ``n**3 / 2`` but never below 1."""
    return max(1, n * n * n // 2)


def solve(
    n: int,
    constraints: Sequence[Constraint],
    max_iter: Optional[int] = 0,
    rng: Optional[random.Random] = None,
    executor: Optional[Executor] = None,
    time_limit: Optional[float] = None,
    max_retries: Optional[int] = None,
) -> SolveResult:
    """Step fresh boards until every constraint layer is satisfied.

    Parameters
    ----------
    n : int
        Board dimension N.
    constraints : Sequence[Constraint]
        Constraints in the order they are layered.
    max_iter : int | None
        Iterations per attempt before restarting.
    rng : random.Random | None
        Shared by the board's tie-breaking and the step's random choices.
    executor : concurrent.futures.ThreadPoolExecutor | None
        Passed to each board for its conflict scans (thread pools only).
    time_limit : float | None
        Optional wall-clock limit in seconds, checked between steps.
    max_retries : int | None
        Optional cap on restarts.
    """
    budget = max_iter or default_max_iter(n)
    start = perf_counter()
    retries = 0
    steps = 0

    while True:
        board = NQueens(n, rng=rng, executor=executor)
        iterations = 0
        solved = True
        for layer in range(1, len(constraints) + 1):
            board.set_constraints(*constraints[:layer])
            solved = False
            while not solved:
                if time_limit is not None and (perf_counter() - start) > time_limit:
                    return SolveResult(board, False, iterations, retries, steps, perf_counter() - start, True)
                iterations += 1
                solved = step(board, rng)
                steps += 1
                if not solved and iterations >= budget:
                    retries += 1
                    break
            if not solved:
                break

        if solved:
            return SolveResult(board, True, iterations, retries, steps, perf_counter() - start)
        if max_retries is not None and retries > max_retries:
            return SolveResult(board, False, iterations, retries, steps, perf_counter() - start, True)
