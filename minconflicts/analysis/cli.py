"""Command-line interface and high-level pipelines for solver benchmarks.

This module wires together configuration loading and execution of benchmark
suites (sequential or process-parallel) followed by CSV export and charts. It
isolates I/O, argument parsing, and progress reporting from the solver modules
so that the rest of the codebase remains easy to test programmatically.
"""
from __future__ import annotations

import argparse
import os
import random
import tempfile
from pathlib import Path
from time import perf_counter
from typing import List, Optional, Tuple

from . import settings
from .experiments import run_experiments, run_experiments_parallel
from .reporting import save_raw_data_to_csv, save_results_to_csv
from .stats import ExperimentResults
from config_manager import ConfigManager
from minconflicts.constraints import build_constraints, parse_profile
from minconflicts.solver import solve
from minconflicts.utils import is_valid_solution, max_on_origin_line


# ------------- Utils --------------------------------------------------------

def parse_profile_filters(profile_args: Optional[List[str]]) -> Optional[List[str]]:
    """Normalize profile filter CLI inputs into a flat list of labels.

    Accepts repeated flags (e.g., ``-p attack -p attack+angle``) and
    comma-separated lists (e.g., ``-p attack,attack+angle``). Returns ``None``
    when no filter is provided so that callers can fall back to the configured
    default set.

    Raises
    ------
    ValueError
        If a label names an unknown constraint.
    """
    if not profile_args:
        return None
    selected: List[str] = []
    for entry in profile_args:
        for token in entry.split(","):
            token = token.strip().lower()
            if token:
                parse_profile(token)
                selected.append(token)
    unique = list(dict.fromkeys(selected))  # first occurrence wins
    return unique or None


def apply_configuration(
    config_path: str, profile_filter: Optional[List[str]] = None
) -> Tuple[ConfigManager, List[str]]:
    """Load configuration and apply optional profile filtering.

    Values from the JSON file (``config.json`` unless another path is given)
    overwrite the matching ``settings`` globals. Returns the
    ``ConfigManager`` used and the list of selected profiles.
    """
    config_mgr = ConfigManager(config_path)

    solver_settings = config_mgr.get_solver_settings()
    if solver_settings:
        settings.MAX_POINTS = int(solver_settings.get("max_points", settings.MAX_POINTS))
        settings.MAX_ITER = int(solver_settings.get("max_iter", settings.MAX_ITER))
        seed = solver_settings.get("seed", settings.BASE_SEED)
        settings.BASE_SEED = None if seed is None else int(seed)

    experiment_settings = config_mgr.get_experiment_settings()
    if experiment_settings:
        settings.N_VALUES = [int(n) for n in experiment_settings.get("N_values", settings.N_VALUES)]
        settings.RUNS_FINAL = int(experiment_settings.get("runs_final", settings.RUNS_FINAL))
        settings.OUT_DIR = experiment_settings.get("output_dir", settings.OUT_DIR)

    timeout_settings = config_mgr.get_timeout_settings()
    if timeout_settings:
        settings.set_timeouts(
            solve_timeout=timeout_settings.get("solve_time_limit", settings.SOLVE_TIME_LIMIT),
            experiment_timeout=timeout_settings.get("experiment_timeout", settings.EXPERIMENT_TIMEOUT),
        )

    profiles_cfg = [label.strip().lower() for label in config_mgr.get_profiles()]
    for label in profiles_cfg:
        parse_profile(label)

    if profile_filter:
        unknown = set(profile_filter).difference(profiles_cfg)
        if unknown:
            raise ValueError("Profiles not present in configuration: " + ", ".join(sorted(unknown)))
        selected = [label for label in profiles_cfg if label in profile_filter]
    else:
        selected = profiles_cfg

    if not selected:
        raise ValueError("No constraint profiles selected after applying filters.")

    settings.PROFILES = selected
    return config_mgr, selected


def _print_timeouts() -> None:
    print("Configured timeouts:")
    print(f"   - Solve: {settings.SOLVE_TIME_LIMIT}s" if settings.SOLVE_TIME_LIMIT else "   - Solve: unlimited")
    print(
        f"   - Experiment: {settings.EXPERIMENT_TIMEOUT}s"
        if settings.EXPERIMENT_TIMEOUT
        else "   - Experiment: unlimited"
    )


def _export(results: ExperimentResults, plots: bool) -> None:
    save_results_to_csv(results, settings.N_VALUES, settings.OUT_DIR)
    save_raw_data_to_csv(results, settings.OUT_DIR)
    if plots:
        # local import to avoid loading matplotlib when charts are disabled
        from .plots import plot_and_save

        plot_and_save(results, settings.N_VALUES, settings.OUT_DIR)


# ------------- Pipelines ----------------------------------------------------

def main_sequential(
    profiles: Optional[List[str]] = None,
    validate: bool = False,
    plots: bool = True,
) -> ExperimentResults:
    """Run every benchmark in this process, in a deterministic order.

    Suitable when parallel resources are limited or when step timings should
    not be disturbed by other workers.
    """
    os.makedirs(settings.OUT_DIR, exist_ok=True)
    selected = profiles or settings.PROFILES

    print("\n============================================")
    print("SEQUENTIAL MIN-CONFLICTS BENCHMARK")
    print("============================================")
    print(f"Profiles: {selected}")
    _print_timeouts()

    results = run_experiments(
        settings.N_VALUES,
        selected,
        runs=settings.RUNS_FINAL,
        max_points=settings.MAX_POINTS,
        max_iter=settings.MAX_ITER,
        time_limit=settings.SOLVE_TIME_LIMIT,
        base_seed=settings.BASE_SEED,
        progress_label="Benchmark",
        validate=validate,
        experiment_timeout=settings.EXPERIMENT_TIMEOUT,
    )
    _export(results, plots)
    print("\nSequential benchmark finished.")
    return results


def main_parallel(
    profiles: Optional[List[str]] = None,
    validate: bool = False,
    plots: bool = True,
) -> ExperimentResults:
    """Run benchmarks leveraging process-level parallelism."""
    os.makedirs(settings.OUT_DIR, exist_ok=True)
    selected = profiles or settings.PROFILES

    print(f"\nStarting parallel benchmark with {settings.NUM_PROCESSES} worker processes")
    print(f"Available CPU cores: {os.cpu_count()}")
    print(f"Profiles: {selected}")
    _print_timeouts()

    start_total = perf_counter()
    results = run_experiments_parallel(
        settings.N_VALUES,
        selected,
        runs=settings.RUNS_FINAL,
        max_points=settings.MAX_POINTS,
        max_iter=settings.MAX_ITER,
        time_limit=settings.SOLVE_TIME_LIMIT,
        base_seed=settings.BASE_SEED,
        progress_label="Benchmark",
        validate=validate,
        experiment_timeout=settings.EXPERIMENT_TIMEOUT,
        num_processes=settings.NUM_PROCESSES,
    )

    print("Generating charts and CSV reports...")
    _export(results, plots)

    total_time = perf_counter() - start_total
    print("\nParallel benchmark finished.")
    print(f"Wall time: {total_time:.1f}s, {settings.NUM_PROCESSES} worker processes")
    return results


# ------------- Quick regression -------------------------------------------

def run_quick_regression_tests() -> None:
    """Execute a fast, deterministic smoke test at N=8.

    Verifies that:
    - The solver finds valid boards for the attack and attack+angle profiles
      under fixed seeds.
    - The benchmark runner produces a non-empty CSV in a temporary folder.
    """
    print("Running quick regression tests (N=8)...")

    rng = random.Random(42)
    result = solve(8, build_constraints(8, angle=False), rng=rng, time_limit=10.0)
    if not result.solved or not is_valid_solution(list(result.board.rows)):
        raise AssertionError(f"Attack profile did not produce a valid board for N=8: {result.board.rows}")
    print(f"  attack: solved in {result.steps} steps, {result.elapsed:.4f}s")

    rng = random.Random(42)
    result = solve(8, build_constraints(8), rng=rng, time_limit=10.0)
    rows = list(result.board.rows)
    if not result.solved or not is_valid_solution(rows) or max_on_origin_line(rows) > 2:
        raise AssertionError(f"attack+angle profile did not produce a valid board for N=8: {rows}")
    print(f"  attack+angle: solved in {result.steps} steps, {result.elapsed:.4f}s")

    results = run_experiments(
        [8],
        ["attack", "attack+angle"],
        runs=3,
        time_limit=10.0,
        base_seed=7,
        progress_label="Quick regression experiments",
        validate=True,
    )

    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(save_results_to_csv(results, [8], tmpdir))
        if not csv_path.exists() or csv_path.stat().st_size == 0:
            raise AssertionError(f"Quick regression wrote no aggregate CSV at {csv_path}")

    print("Quick regression OK.")


# ------------- CLI wiring --------------------------------------------------

def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the CLI entry point."""
    parser = argparse.ArgumentParser(description="Benchmark the min-conflicts N-Queens solver.")
    parser.add_argument(
        "--mode",
        choices=["sequential", "parallel"],
        default="parallel",
        help="Execution mode: sequential or process-parallel (default).",
    )
    parser.add_argument(
        "--profile",
        "-p",
        action="append",
        help="Filter constraint profiles (accepts comma-separated values or multiple flags).",
    )
    parser.add_argument("--config", default="config.json", help="JSON settings file (default: config.json).")
    parser.add_argument("--quick-test", action="store_true", help="Run the N=8 smoke checks and exit.")
    parser.add_argument("--validate", action="store_true", help="Re-check every solved board with independent validators.")
    parser.add_argument("--no-plots", action="store_true", help="Skip chart generation.")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point of ``nqueens-mc-analysis``."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.quick_test:
        run_quick_regression_tests()
        return

    try:
        profile_filter = parse_profile_filters(args.profile)
        _, selected = apply_configuration(args.config, profile_filter)
    except FileNotFoundError as exc:
        print(f"Missing configuration: {exc}")
        raise SystemExit(1) from exc
    except ValueError as exc:
        print(f"Invalid configuration: {exc}")
        raise SystemExit(1) from exc

    print(f"Selected profiles: {selected}")

    try:
        if args.mode == "sequential":
            main_sequential(selected, validate=args.validate, plots=not args.no_plots)
        else:
            main_parallel(selected, validate=args.validate, plots=not args.no_plots)
    except KeyboardInterrupt:
        print("\nInterrupted; worker processes are being shut down.")
        raise SystemExit(130) from None


if __name__ == "__main__":
    main()
