"""Typed result shapes and statistics helpers for the analysis pipeline.

Defines ``TypedDict`` structures for benchmark outputs and provides utilities
to aggregate per-run solver records into summary statistics.
"""
from __future__ import annotations

import statistics
from time import perf_counter
from typing import Any, Dict, List, Optional, TypedDict

# Numeric fields of a RunRecord that get summarized.
METRICS: List[str] = ["time", "steps", "iterations", "retries", "final_conflicts"]


class StatsSummary(TypedDict, total=False):
    count: int
    mean: Optional[float]
    median: Optional[float]
    std: Optional[float]
    min: Optional[float]
    max: Optional[float]
    q25: Optional[float]
    q75: Optional[float]
    range: Optional[float]


class RunRecord(TypedDict):
    success: bool
    steps: int
    iterations: int
    retries: int
    time: float
    timeout: bool
    final_conflicts: int


class ProfileEntry(TypedDict, total=False):
    skipped: bool
    reason: str
    success_rate: float
    timeout_rate: float
    total_runs: int
    successes: int
    timeouts: int
    success_time: StatsSummary
    success_steps: StatsSummary
    success_iterations: StatsSummary
    success_retries: StatsSummary
    timeout_final_conflicts: StatsSummary
    all_time: StatsSummary
    all_steps: StatsSummary
    all_iterations: StatsSummary
    all_retries: StatsSummary
    all_final_conflicts: StatsSummary
    raw_runs: List[RunRecord]


# profile label -> N -> aggregated entry
ExperimentResults = Dict[str, Dict[int, ProfileEntry]]


class ProgressPrinter:
    """Print one ``[label] i/total`` line per unit of work, with elapsed time.

    ``total`` below 1 is treated as 1 so the percentage is always defined.
    """

    def __init__(self, total: int, label: str):
        self.total = total if total > 0 else 1
        self.label = label
        self.started = perf_counter()

    def update(self, index: int, detail: str = "") -> None:
        elapsed = perf_counter() - self.started
        line = f"[{self.label}] {index}/{self.total} ({100 * index / self.total:.0f}%, {elapsed:.1f}s)"
        print(f"{line} - {detail}" if detail else line)


_SUMMARY_FIELDS = ("mean", "median", "std", "min", "max", "q25", "q75", "range")


def compute_detailed_statistics(values: List[float]) -> StatsSummary:
    """Summarize ``values``: mean, median, population std, extremes, quartiles, range.

    Quartiles are taken by index into the sorted values (``n // 4`` and
    ``3n // 4``) and fall back to the extremes below four samples. An empty
    input yields ``count=0`` with every other field set to None, which keeps
    CSV columns aligned.
    """
    if not values:
        empty: Dict[str, Any] = dict.fromkeys(_SUMMARY_FIELDS)
        empty["count"] = 0
        return empty  # type: ignore[return-value]

    ordered = sorted(values)
    count = len(ordered)
    low, high = ordered[0], ordered[-1]
    four_or_more = count >= 4
    return {
        "count": count,
        "mean": statistics.mean(ordered),
        "median": statistics.median(ordered),
        "std": statistics.pstdev(ordered) if count > 1 else 0,
        "min": low,
        "max": high,
        "q25": ordered[count // 4] if four_or_more else low,
        "q75": ordered[3 * count // 4] if four_or_more else high,
        "range": high - low,
    }


def compute_grouped_statistics(runs: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Aggregate run records by outcome (all runs, successes, timeouts).

    Returns rates (``success_rate``, ``timeout_rate``), counters
    (``total_runs``, ``successes``, ``timeouts``) and a ``StatsSummary`` per
    group and metric, keyed ``<group>_<metric>``. Metrics absent from a group
    are omitted.
    """
    successes = [r for r in runs if r.get("success", False)]
    timeouts = [r for r in runs if r.get("timeout", False)]
    total = len(runs)

    stats: Dict[str, Any] = {
        "total_runs": total,
        "successes": len(successes),
        "timeouts": len(timeouts),
        "success_rate": len(successes) / total if total else 0,
        "timeout_rate": len(timeouts) / total if total else 0,
    }

    for group, records in (("all", runs), ("success", successes), ("timeout", timeouts)):
        for metric in METRICS:
            values = [r[metric] for r in records if metric in r]
            if values:
                stats[f"{group}_{metric}"] = compute_detailed_statistics(values)

    return stats
