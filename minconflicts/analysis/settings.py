"""Global settings and timeouts for the min-conflicts analysis pipeline.

This module centralizes tunable constants used across the orchestration code.
Values can be overridden at runtime via the configuration loader in
`minconflicts.analysis.cli.apply_configuration`.
"""
from __future__ import annotations

import multiprocessing
from typing import List, Optional
from datetime import datetime

# Board sizes to evaluate (in ascending order) for scalability analysis
N_VALUES: List[int] = [8, 12, 16, 24, 32]

# Number of independent solver runs per (N, profile)
RUNS_FINAL: int = 20

# Constraint profiles to benchmark (see minconflicts.constraints.PROFILES)
PROFILES: List[str] = ["attack", "attack+angle", "attack+collinear"]

# Line capacity for the collinear and angle constraints
MAX_POINTS: int = 2

# Iterations per attempt before a restart (0 = n^3/2)
MAX_ITER: int = 0

# Base seed; run k of each (profile, N) uses BASE_SEED + k (None = unseeded)
BASE_SEED: Optional[int] = None

# Solver time limit in seconds per run (None = no limit)
SOLVE_TIME_LIMIT: Optional[float] = 30.0

# Global timeout per experiment bundle (None = no limit)
EXPERIMENT_TIMEOUT: Optional[float] = 600.0

# Output directory for CSV and charts
OUT_DIR: str = "results_minconflicts"

# Number of worker processes to use (leave one core for the OS)
NUM_PROCESSES: int = max(1, multiprocessing.cpu_count() - 1)

# Output naming policy --------------------------------------------------------

# When True, results and plots include a datestamp suffix (e.g., _20251113-142530)
DATE_IN_FILENAMES: bool = True

# Unique run identifier used for filename stamping; set once at import time.
RUN_ID: str = datetime.now().strftime("%Y%m%d-%H%M%S")

# Optional run labeling to avoid overwriting outputs
RUN_TAG: Optional[str] = None


def set_timeouts(
        solve_timeout: Optional[float] = 30.0,
        experiment_timeout: Optional[float] = 600.0,
) -> None:
        """Configure the per-run solver limit and the experiment wrapper limit.

        Parameters
        - solve_timeout: wall-clock limit for one solver run in seconds (None
            disables the limit; runs then only end when solved).
        - experiment_timeout: Hard cap for a whole experiment bundle in seconds
            (None disables). When reached, outer loops stop scheduling new
            work.

        Side effects
        - Updates module-level globals and prints a concise summary to stdout to
            make the active limits explicit at run start.
        """
        global SOLVE_TIME_LIMIT, EXPERIMENT_TIMEOUT
        SOLVE_TIME_LIMIT = solve_timeout
        EXPERIMENT_TIMEOUT = experiment_timeout

        print("Timeout settings configured:")
        print(f"   - Solve: {SOLVE_TIME_LIMIT}s" if SOLVE_TIME_LIMIT else "   - Solve: unlimited")
        print(
                f"   - Experiment: {EXPERIMENT_TIMEOUT}s"
                if EXPERIMENT_TIMEOUT
                else "   - Experiment: unlimited"
        )
