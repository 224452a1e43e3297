
from __future__ import annotations

from typing import Dict, Optional
import os
import matplotlib.pyplot as plt

from .simulator import SimulationResult
from .utils import format_average

_PALETTE = plt.get_cmap("tab20")


def ensure_dir(path: str) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)


def _finish(fig, out_path: Optional[str]) -> None:
    fig.tight_layout()
    if out_path:
        ensure_dir(out_path)
        fig.savefig(out_path, dpi=150)
        plt.close(fig)
    else:
        plt.show()


def plot_gantt(result: SimulationResult, out_path: Optional[str] = None) -> None:
    fig, ax = plt.subplots(figsize=(12, 2 + 0.4 * max(1, len(result.processes))))

    pids_order = [p.pid for p in result.processes]
    y_positions: Dict[str, int] = {pid: i for i, pid in enumerate(pids_order)}

    for seg in result.logger.timeline:
        pid = seg["pid"]
        start = seg["start"]
        end = seg["end"]
        ax.barh(y_positions[pid], end - start, left=start, color=_PALETTE(y_positions[pid] % 20), edgecolor="black", alpha=0.9)
        ax.text(start + (end - start) / 2, y_positions[pid], f"{pid}{end - start}", ha="center", va="center", fontsize=8)

    # arrivals
    for p in result.processes:
        ax.plot(p.arrival_time, y_positions[p.pid], marker="v", color="#444444")

    ax.set_yticks([y_positions[pid] for pid in pids_order])
    ax.set_yticklabels(pids_order)
    ax.invert_yaxis()
    ax.set_xlabel("Time")
    ax.set_title(f"{result.policy} schedule (avg waiting {format_average(result.avg_waiting_time)})")
    ax.grid(True, axis="x", linestyle=":", alpha=0.5)
    _finish(fig, out_path)


def plot_waiting_comparison(results: Dict[str, SimulationResult], out_path: Optional[str] = None) -> None:
    fig, ax = plt.subplots(figsize=(6, 4))
    policies = list(results)
    values = [results[p].avg_waiting_time for p in policies]
    bars = ax.bar(policies, values, color=[_PALETTE(i * 2) for i in range(len(policies))], edgecolor="black")
    for bar, value in zip(bars, values):
        ax.text(bar.get_x() + bar.get_width() / 2, bar.get_height(), format_average(value), ha="center", va="bottom", fontsize=9)
    ax.set_ylabel("Average waiting time")
    ax.set_title("Average waiting time by policy")
    ax.grid(True, axis="y", linestyle=":", alpha=0.5)
    _finish(fig, out_path)
