"""
Tabular summaries of simulation results.
"""

from __future__ import annotations

from typing import Dict
import pandas as pd

from .simulator import SimulationResult
from .utils import format_schedule


def results_frame(results: Dict[str, SimulationResult]) -> pd.DataFrame:
    """One row per policy, in the order the results were produced."""
    rows = {
        policy: {
            "avg_waiting_time": r.avg_waiting_time,
            "avg_turnaround_time": r.avg_turnaround_time,
            "avg_response_time": r.avg_response_time,
            "throughput": r.throughput,
            "context_switches": r.context_switches,
            "total_time": r.total_time,
            "schedule": format_schedule(r.schedule),
        }
        for policy, r in results.items()
    }
    df = pd.DataFrame(rows).T
    df.index.name = "policy"
    numeric = ["avg_waiting_time", "avg_turnaround_time", "avg_response_time", "throughput"]
    df[numeric] = df[numeric].astype(float)
    df[["context_switches", "total_time"]] = df[["context_switches", "total_time"]].astype(int)
    return df


def process_frame(result: SimulationResult) -> pd.DataFrame:
    df = pd.DataFrame([
        {
            "pid": p.pid,
            "arrival_time": p.arrival_time,
            "burst_length": p.burst_length,
            "waiting_time": p.waiting_time,
            "turnaround_time": p.turnaround_time,
            "response_time": p.response_time,
            "completion_time": p.completion_time,
        }
        for p in result.processes
    ])
    return df.set_index("pid") if not df.empty else df


def best_policy(results: Dict[str, SimulationResult]) -> str:
    """Policy with the lowest average waiting time (first one on ties)."""
    return results_frame(results)["avg_waiting_time"].idxmin()
