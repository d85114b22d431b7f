"""
Benchmark tooling for the min-conflicts solver.

Modules:
- settings: tunable constants and timeouts, overridable from config.json
- stats: run record shapes, progress output and summary statistics
- experiments: per-run worker plus sequential and process-pool runners
- reporting: aggregate and per-run CSV files
- plots: PNG charts (loaded only when charts are requested)
- cli: the ``nqueens-mc-analysis`` entry point
"""

from . import settings as settings
from .stats import (
    METRICS,
    ExperimentResults,
    ProfileEntry,
    ProgressPrinter,
    RunRecord,
    StatsSummary,
    compute_detailed_statistics,
    compute_grouped_statistics,
)

__all__ = [
    "settings",
    "METRICS",
    "ExperimentResults",
    "ProfileEntry",
    "RunRecord",
    "StatsSummary",
    "ProgressPrinter",
    "compute_detailed_statistics",
    "compute_grouped_statistics",
]
