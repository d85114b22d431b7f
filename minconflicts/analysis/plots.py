"""Visualization utilities for benchmark outputs.

Overview
--------
Plotting helpers that turn ``ExperimentResults`` (``results[profile][N]``)
into PNG charts. matplotlib runs on the non-interactive Agg backend so the
pipeline works on headless machines.

Chart map
---------
- 01_success_rate_vs_N.png: Success rate per profile vs N.
    - Y: successes / total_runs in [0, 1]. Skipped profiles are left out.
- 02_steps_vs_N_log_scale.png: Mean step calls (successful runs) vs N.
    - Hardware-independent effort proxy; includes steps of abandoned attempts.
- 03_time_vs_N_log_scale.png: Mean wall-clock time (successful runs) vs N.
- 04_steps_boxplot.png: Distribution of steps per N and profile (seaborn).
- 05_steps_vs_time.png: Steps vs time scatter with a least-squares trend
  line per profile; near-linearity means per-step cost dominates.
"""
from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import seaborn as sns  # noqa: E402

from .reporting import build_suffix, raw_runs_frame  # noqa: E402
from .stats import ExperimentResults  # noqa: E402


def _series(
    results: ExperimentResults, profile: str, N_values: List[int], key: str, field: Optional[str] = None
) -> List[Any]:
    """Collect one value per N for a profile, ``nan`` where missing or skipped."""
    values: List[Any] = []
    for N in N_values:
        entry: Dict[str, Any] = results.get(profile, {}).get(N, {})  # type: ignore[assignment]
        if not entry or entry.get("skipped"):
            values.append(float("nan"))
            continue
        value = entry.get(key)
        if field is not None:
            value = (value or {}).get(field)
        values.append(float("nan") if value is None else value)
    return values


def _save(fig: Any, out_dir: str, name: str) -> str:
    path = os.path.join(out_dir, f"{name}{build_suffix()}.png")
    fig.tight_layout()
    fig.savefig(path, dpi=120)
    plt.close(fig)
    return path


def plot_success_rate(results: ExperimentResults, N_values: List[int], out_dir: str) -> str:
    fig, ax = plt.subplots(figsize=(8, 5))
    for profile in results:
        ax.plot(N_values, _series(results, profile, N_values, "success_rate"), marker="o", label=profile)
    ax.set_xlabel("N (board size)")
    ax.set_ylabel("Success rate")
    ax.set_ylim(-0.05, 1.05)
    ax.set_title("Success rate vs N")
    ax.grid(True, alpha=0.3)
    ax.legend()
    return _save(fig, out_dir, "01_success_rate_vs_N")


def plot_mean_vs_N(
    results: ExperimentResults, N_values: List[int], out_dir: str, metric: str, ylabel: str, name: str
) -> str:
    """Line chart of the mean of ``success_<metric>`` per profile, log scale."""
    fig, ax = plt.subplots(figsize=(8, 5))
    for profile in results:
        ax.plot(
            N_values,
            _series(results, profile, N_values, f"success_{metric}", "mean"),
            marker="o",
            label=profile,
        )
    ax.set_xlabel("N (board size)")
    ax.set_ylabel(ylabel)
    ax.set_yscale("log")
    ax.set_title(f"{ylabel} vs N (successful runs)")
    ax.grid(True, alpha=0.3, which="both")
    ax.legend()
    return _save(fig, out_dir, name)


def plot_steps_boxplot(results: ExperimentResults, out_dir: str) -> Optional[str]:
    """Box plot of steps per N, one hue per profile. None if there are no successes."""
    frame = raw_runs_frame(results)
    frame = frame[frame["success"].astype(bool)]
    if frame.empty:
        print("  No successful runs to plot in the steps box plot.")
        return None
    fig, ax = plt.subplots(figsize=(10, 5))
    sns.boxplot(data=frame, x="n", y="steps", hue="profile", ax=ax)
    ax.set_yscale("log")
    ax.set_xlabel("N (board size)")
    ax.set_ylabel("Steps")
    ax.set_title("Steps distribution (successful runs)")
    return _save(fig, out_dir, "04_steps_boxplot")


def plot_steps_vs_time(results: ExperimentResults, out_dir: str) -> Optional[str]:
    """Scatter steps against time with a linear trend per profile."""
    frame = raw_runs_frame(results)
    frame = frame[frame["success"].astype(bool)]
    if frame.empty:
        print("  No successful runs to plot in the steps/time scatter.")
        return None
    fig, ax = plt.subplots(figsize=(8, 5))
    for profile, group in frame.groupby("profile"):
        steps = group["steps"].to_numpy(dtype=float)
        times = group["time"].to_numpy(dtype=float)
        ax.scatter(steps, times, alpha=0.6, label=profile)
        if len(steps) >= 2 and np.ptp(steps) > 0:
            slope, intercept = np.polyfit(steps, times, 1)
            x_trend = np.linspace(steps.min(), steps.max(), 100)
            ax.plot(x_trend, slope * x_trend + intercept, linestyle="--", alpha=0.8)
    ax.set_xlabel("Steps")
    ax.set_ylabel("Time [s]")
    ax.set_title("Steps vs time (successful runs)")
    ax.grid(True, alpha=0.3)
    ax.legend()
    return _save(fig, out_dir, "05_steps_vs_time")


def plot_and_save(results: ExperimentResults, N_values: List[int], out_dir: str) -> List[str]:
    """Generate every chart into ``out_dir`` and return the written paths."""
    os.makedirs(out_dir, exist_ok=True)
    sns.set_theme(style="whitegrid")
    paths = [
        plot_success_rate(results, N_values, out_dir),
        plot_mean_vs_N(results, N_values, out_dir, "steps", "Mean steps", "02_steps_vs_N_log_scale"),
        plot_mean_vs_N(results, N_values, out_dir, "time", "Mean time [s]", "03_time_vs_N_log_scale"),
    ]
    for path in (plot_steps_boxplot(results, out_dir), plot_steps_vs_time(results, out_dir)):
        if path is not None:
            paths.append(path)
    print(f"Charts saved in {out_dir} ({len(paths)} files)")
    return paths
