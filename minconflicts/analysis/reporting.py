"""CSV export utilities for benchmark outputs (aggregates and raw runs).

These helpers materialize a concise per-(profile, N) CSV summary as well as
the full per-run raw data for downstream analysis or spreadsheet inspection.
"""
from __future__ import annotations

import csv
import os
from typing import Any, Dict, List, Optional

import pandas as pd

from . import settings
from .stats import ExperimentResults, StatsSummary


def build_suffix() -> str:
    """Build the optional filename suffix (run tag and/or datestamp).

    Returns an empty string if no suffixing is configured.
    """
    parts: List[str] = []
    run_tag = getattr(settings, "RUN_TAG", None)
    if run_tag:
        parts.append(str(run_tag))
    if getattr(settings, "DATE_IN_FILENAMES", False):
        run_id = getattr(settings, "RUN_ID", None)
        if run_id:
            parts.append(str(run_id))
    return ("_" + "_".join(parts)) if parts else ""


def _stat(entry: Dict[str, Any], key: str, field: str) -> Optional[float]:
    summary: StatsSummary = entry.get(key, {})
    return summary.get(field)  # type: ignore[return-value]


def save_results_to_csv(results: ExperimentResults, N_values: List[int], out_dir: str) -> str:
    """Write compact per-(profile, N) aggregate metrics to CSV.

    Column names follow lowercase snake_case. Skipped profiles keep their row
    with ``skipped=True`` and empty metrics.

    Returns
    -------
    str
        Path of the written file.
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"results_minconflicts{build_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "profile",
            "n",
            "skipped",
            "total_runs",
            "successes",
            "timeouts",
            "success_rate",
            "timeout_rate",
            "steps_mean",
            "steps_median",
            "steps_std",
            "retries_mean",
            "time_mean_seconds",
            "time_median_seconds",
            "timeout_final_conflicts_mean",
        ])
        for profile, per_n in results.items():
            for N in N_values:
                entry = per_n.get(N)
                if entry is None:
                    continue
                writer.writerow([
                    profile,
                    N,
                    entry.get("skipped", False),
                    entry.get("total_runs", 0),
                    entry.get("successes", 0),
                    entry.get("timeouts", 0),
                    entry.get("success_rate", 0.0),
                    entry.get("timeout_rate", 0.0),
                    _stat(entry, "success_steps", "mean"),
                    _stat(entry, "success_steps", "median"),
                    _stat(entry, "success_steps", "std"),
                    _stat(entry, "success_retries", "mean"),
                    _stat(entry, "success_time", "mean"),
                    _stat(entry, "success_time", "median"),
                    _stat(entry, "timeout_final_conflicts", "mean"),
                ])

    print(f"Aggregate results saved: {filename}")
    return filename


def raw_runs_frame(results: ExperimentResults) -> pd.DataFrame:
    """Flatten every raw run into one DataFrame with ``profile`` and ``n`` columns."""
    rows: List[Dict[str, Any]] = []
    for profile, per_n in results.items():
        for N, entry in per_n.items():
            for run_index, run in enumerate(entry.get("raw_runs", [])):
                rows.append({"profile": profile, "n": N, "run": run_index, **run})
    columns = [
        "profile",
        "n",
        "run",
        "success",
        "timeout",
        "steps",
        "iterations",
        "retries",
        "time",
        "final_conflicts",
    ]
    return pd.DataFrame(rows, columns=columns)


def save_raw_data_to_csv(results: ExperimentResults, out_dir: str) -> str:
    """Write every individual run to CSV (one row per run).

    Returns
    -------
    str
        Path of the written file.
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"raw_runs_minconflicts{build_suffix()}.csv")
    frame = raw_runs_frame(results)
    frame.to_csv(filename, index=False)
    print(f"Raw run data saved: {filename} ({len(frame)} runs)")
    return filename
