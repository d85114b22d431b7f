"""Command-line entry point: solve one N-Queens board and print it.

Usage::

    nqueens-mc [flags] <n>

The board is printed as N lines of ``Q``/``_`` cells. Argument errors exit with
argparse's usage status; an invalid board size or an unsatisfiable constraint
selection exits with status 1.
"""
from __future__ import annotations

import argparse
import random
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from .constraints import build_constraints
from .solver import default_max_iter, solve


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Place N queens with the min-conflicts heuristic."
    )
    parser.add_argument("n", type=int, help="Board size.")
    parser.add_argument(
        "--constrain-attack",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Constrain queen attacks (default: on).",
    )
    parser.add_argument(
        "--constrain-colinear",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Constrain co-linear points (default: off).",
    )
    parser.add_argument(
        "--constrain-angle",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Constrain points coincident with the origin (default: on).",
    )
    parser.add_argument(
        "--max-points",
        type=int,
        default=2,
        help="Most queens allowed on one line for the colinear/angle constraints (default: 2).",
    )
    parser.add_argument(
        "--retry",
        type=int,
        default=0,
        help="Number of iterations before retrying (default: n^3/2).",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs.")
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Threads used for conflict scans (default: 1, no pool).",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output.")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: parse arguments, solve, print the board."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.n < 1:
        print(f"Board size must be positive, got {args.n}", file=sys.stderr)
        raise SystemExit(1)

    try:
        constraints = build_constraints(
            args.n,
            attack=args.constrain_attack,
            collinear=args.constrain_colinear,
            angle=args.constrain_angle,
            max_points=args.max_points,
        )
    except ValueError as exc:
        print(f"Constraint error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    max_iter = args.retry or default_max_iter(args.n)
    rng = random.Random(args.seed)

    if args.workers > 1:
        with ThreadPoolExecutor(max_workers=args.workers) as executor:
            result = solve(args.n, constraints, max_iter=max_iter, rng=rng, executor=executor)
    else:
        result = solve(args.n, constraints, max_iter=max_iter, rng=rng)

    print(result.board.render())
    if args.verbose:
        print(f"iterations: {result.iterations}. retries: {result.retries}")
        print(f"total steps: {result.steps}. time: {result.elapsed:.4f}s")


if __name__ == "__main__":
    main()
