"""Benchmark runners for the min-conflicts solver (sequential and parallel).

These routines execute repeatable batches of ``solve`` runs for a set of board
sizes and constraint profiles. A profile is a label such as ``"attack+angle"``
naming the constraints to layer, in the fixed order attack, collinear, angle.

Outputs are nested dictionaries ``results[profile][N]`` suitable for CSV export
and plotting. Profiles that are unsatisfiable for a given N (for example the
attack constraint on a 3x3 board) are recorded as skipped instead of raising.
Validation hooks optionally re-check every solved board with the independent
helpers in ``minconflicts.utils``.
"""
from __future__ import annotations

import random
from concurrent.futures import ProcessPoolExecutor
from time import perf_counter
from typing import Any, Dict, List, Optional, Tuple

from . import settings
from .stats import (
    ExperimentResults,
    ProfileEntry,
    ProgressPrinter,
    RunRecord,
    compute_grouped_statistics,
)
from minconflicts.constraints import NoSolutionError, build_constraints, parse_profile
from minconflicts.solver import solve
from minconflicts.utils import is_valid_solution, max_collinear, max_on_origin_line

# (N, profile, max_points, max_iter, time_limit, seed, validate)
RunParams = Tuple[int, str, int, int, Optional[float], Optional[int], bool]


# Reusable worker ------------------------------------------------------------

def run_single_experiment(params: RunParams) -> RunRecord:
    """Worker wrapper to invoke a single solver run (for parallel mapping).

    Constraints are built inside the worker since they are closures and do
    not pickle.
    """
    N, profile, max_points, max_iter, time_limit, seed, validate = params
    flags = parse_profile(profile)
    constraints = build_constraints(N, max_points=max_points, **flags)
    result = solve(
        N,
        constraints,
        max_iter=max_iter,
        rng=random.Random(seed),
        time_limit=time_limit,
    )
    if validate and result.solved:
        validate_solution(list(result.board.rows), profile, max_points)
    return {
        "success": result.solved,
        "steps": result.steps,
        "iterations": result.iterations,
        "retries": result.retries,
        "time": result.elapsed,
        "timeout": result.timeout,
        "final_conflicts": sum(c.conflicts for c in result.board.all_conflicts()),
    }


def validate_solution(rows: List[int], profile: str, max_points: int) -> None:
    """Re-check a solved board against the rules its profile names.

    Raises
    ------
    AssertionError
        If the placement breaks any selected rule.
    """
    flags = parse_profile(profile)
    if flags["attack"] and not is_valid_solution(rows):
        raise AssertionError(f"Attacking queens in solution for {profile}: {rows}")
    if flags["collinear"] and max_collinear(rows) > max_points:
        raise AssertionError(f"More than {max_points} collinear queens for {profile}: {rows}")
    if flags["angle"] and max_on_origin_line(rows) > max_points:
        raise AssertionError(f"More than {max_points} queens on an origin line for {profile}: {rows}")


def check_profile(N: int, profile: str, max_points: int) -> Optional[str]:
    """Return the reason a profile cannot be solved for ``N``, or None."""
    try:
        build_constraints(N, max_points=max_points, **parse_profile(profile))
    except NoSolutionError as exc:
        return str(exc)
    return None


def _build_params(
    N: int,
    profile: str,
    runs: int,
    max_points: int,
    max_iter: int,
    time_limit: Optional[float],
    base_seed: Optional[int],
    validate: bool,
) -> List[RunParams]:
    return [
        (
            N,
            profile,
            max_points,
            max_iter,
            time_limit,
            None if base_seed is None else base_seed + index,
            validate,
        )
        for index in range(runs)
    ]


def _summarize(runs: List[RunRecord]) -> ProfileEntry:
    entry: Dict[str, Any] = dict(compute_grouped_statistics(list(runs)))
    entry["skipped"] = False
    entry["raw_runs"] = list(runs)
    return entry  # type: ignore[return-value]


def _skipped(reason: str) -> ProfileEntry:
    return {
        "skipped": True,
        "reason": reason,
        "success_rate": 0.0,
        "timeout_rate": 0.0,
        "total_runs": 0,
        "successes": 0,
        "timeouts": 0,
        "raw_runs": [],
    }


# Runners --------------------------------------------------------------------

def run_experiments(
    N_values: List[int],
    profiles: List[str],
    runs: int,
    max_points: int = 2,
    max_iter: int = 0,
    time_limit: Optional[float] = None,
    base_seed: Optional[int] = None,
    progress_label: Optional[str] = None,
    validate: bool = False,
    experiment_timeout: Optional[float] = None,
) -> ExperimentResults:
    """Run sequential benchmarks for every (profile, N) pair.

    Each pair gets ``runs`` independent ``solve`` calls. When
    ``experiment_timeout`` elapses, remaining sizes are not scheduled and
    partial results are returned.
    """
    results: ExperimentResults = {profile: {} for profile in profiles}
    progress = ProgressPrinter(len(N_values), progress_label) if progress_label else None
    start = perf_counter()

    try:
        for index, N in enumerate(N_values, start=1):
            if experiment_timeout is not None and (perf_counter() - start) > experiment_timeout:
                print(f"Experiment timeout reached after {perf_counter() - start:.1f}s; stopping before N={N}.")
                break
            if progress:
                progress.update(index, f"N={N}")

            for profile in profiles:
                reason = check_profile(N, profile, max_points)
                if reason:
                    print(f"  Skipping {profile} at N={N}: {reason}")
                    results[profile][N] = _skipped(reason)
                    continue

                print(f"=== N = {N}, profile {profile} ===")
                params = _build_params(N, profile, runs, max_points, max_iter, time_limit, base_seed, validate)
                records = [run_single_experiment(p) for p in params]
                results[profile][N] = _summarize(records)
    except KeyboardInterrupt:
        print("\nInterrupted by user (sequential). Returning partial results...")

    return results


def run_experiments_parallel(
    N_values: List[int],
    profiles: List[str],
    runs: int,
    max_points: int = 2,
    max_iter: int = 0,
    time_limit: Optional[float] = None,
    base_seed: Optional[int] = None,
    progress_label: Optional[str] = None,
    validate: bool = False,
    experiment_timeout: Optional[float] = None,
    num_processes: Optional[int] = None,
) -> ExperimentResults:
    """Process-parallel variant of ``run_experiments``.

    Runs for one (profile, N) pair are spread over a ``ProcessPoolExecutor``;
    ``executor.map`` keeps submission order so results are independent of
    which worker finishes first.
    """
    results: ExperimentResults = {profile: {} for profile in profiles}
    progress = ProgressPrinter(len(N_values), progress_label) if progress_label else None
    workers = num_processes or settings.NUM_PROCESSES
    start = perf_counter()

    with ProcessPoolExecutor(max_workers=workers) as executor:
        for index, N in enumerate(N_values, start=1):
            if experiment_timeout is not None and (perf_counter() - start) > experiment_timeout:
                print(f"Experiment timeout reached after {perf_counter() - start:.1f}s; stopping before N={N}.")
                break
            if progress:
                progress.update(index, f"N={N}")

            for profile in profiles:
                reason = check_profile(N, profile, max_points)
                if reason:
                    print(f"  Skipping {profile} at N={N}: {reason}")
                    results[profile][N] = _skipped(reason)
                    continue

                params = _build_params(N, profile, runs, max_points, max_iter, time_limit, base_seed, validate)
                pair_start = perf_counter()
                records = list(executor.map(run_single_experiment, params))
                results[profile][N] = _summarize(records)
                print(
                    f"  N={N} {profile}: {runs} runs in {perf_counter() - pair_start:.1f}s"
                    f" - success rate {results[profile][N]['success_rate']:.3f}"
                )

    return results
