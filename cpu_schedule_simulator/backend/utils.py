from __future__ import annotations

from typing import List, Dict, Optional, Any, Sequence, Tuple, Union, Iterable
import json
import csv
import random

from .core import Process, WorkloadValidationError


class EventLogger:
    def __init__(self) -> None:
        self.process_events: List[Dict[str, Any]] = []
        self.timeline: List[Dict[str, Any]] = []

    def log_process_event(self, time_s: int, pid: str, event: str) -> None:
        self.process_events.append({
            "time": time_s,
            "pid": pid,
            "event": event,
        })

    def log_timeline_tick(self, tick: int, pid: str, policy: str) -> None:
        """Record one busy tick, extending the last slice when it continues it."""
        if self.timeline:
            last = self.timeline[-1]
            if last["pid"] == pid and last["end"] == tick and last["policy"] == policy:
                last["end"] = tick + 1
                return
        self.timeline.append({
            "start": tick,
            "end": tick + 1,
            "pid": pid,
            "policy": policy,
        })

    def events_for(self, pid: str) -> List[Dict[str, Any]]:
        return [e for e in self.process_events if e["pid"] == pid]

    def export_json(self, path: str) -> None:
        data = {
            "process_events": self.process_events,
            "timeline": self.timeline,
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def export_csv(self, base_path_no_ext: str) -> None:
        with open(f"{base_path_no_ext}_events.csv", "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=["time", "pid", "event"])
            writer.writeheader()
            for row in self.process_events:
                writer.writerow(row)
        with open(f"{base_path_no_ext}_timeline.csv", "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=["start", "end", "pid", "policy"])
            writer.writeheader()
            for row in self.timeline:
                writer.writerow(row)


def parse_workload(raw: Union[str, Sequence[str]]) -> List[Tuple[int, int]]:
    """Turn "0 7 2 4" (or its tokens) into [(0, 7), (2, 4)].

    Raises WorkloadValidationError describing the first problem found.
    """
    tokens = raw.split() if isinstance(raw, str) else [str(t).strip() for t in raw]
    tokens = [t for t in tokens if t]
    if not tokens:
        raise WorkloadValidationError("No processes given. Enter arrival time and CPU burst length pairs.")
    if len(tokens) % 2 != 0:
        raise WorkloadValidationError("Every Process needs an arrival time and a CPU burst length! Try again!")

    values: List[int] = []
    for pos, tok in enumerate(tokens, start=1):
        try:
            values.append(int(tok))
        except ValueError:
            raise WorkloadValidationError(f"Token {pos} ({tok!r}) is not an integer.") from None

    pairs: List[Tuple[int, int]] = []
    for i in range(0, len(values), 2):
        arrival, burst = values[i], values[i + 1]
        n = i // 2 + 1
        if arrival < 0:
            raise WorkloadValidationError(f"Process {n} has a negative arrival time ({arrival}).")
        if burst < 0:
            raise WorkloadValidationError(f"Process {n} has a negative CPU burst length ({burst}).")
        if burst == 0:
            raise WorkloadValidationError(f"Process {n} has a CPU burst length of zero.")
        pairs.append((arrival, burst))
    return pairs


def format_schedule(schedule: Sequence[str]) -> str:
    """Run-length encode a trace: [A, A, B] -> "A2 B1"."""
    groups: List[str] = []
    prev: Optional[str] = None
    count = 0
    for pid in schedule:
        if pid == prev:
            count += 1
            continue
        if prev is not None:
            groups.append(f"{prev}{count}")
        prev, count = pid, 1
    if prev is not None:
        groups.append(f"{prev}{count}")
    return " ".join(groups)


def format_average(value: float, precision: int = 2) -> str:
    return f"{value:.{precision}f}"


def count_context_switches(schedule: Sequence[str]) -> int:
    return sum(1 for a, b in zip(schedule, schedule[1:]) if a != b)


def compute_waiting_times(processes: Iterable[Process]) -> Dict[str, int]:
    return {p.pid: p.waiting_time for p in processes}


def compute_turnaround_times(processes: Iterable[Process]) -> Dict[str, int]:
    tat: Dict[str, int] = {}
    for p in processes:
        if p.turnaround_time is None:
            continue
        tat[p.pid] = p.turnaround_time
    return tat


def compute_response_times(processes: Iterable[Process]) -> Dict[str, int]:
    return {p.pid: p.response_time for p in processes if p.response_time is not None}


def compute_avg(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def compute_throughput(processes: Iterable[Process], total_time: int) -> float:
    if total_time <= 0:
        return 0.0
    completed = len([p for p in processes if p.completion_time is not None])
    return completed / total_time


def generate_workload(n: int, seed: int = 42, max_gap: int = 3, max_burst: int = 8) -> List[Tuple[int, int]]:
    """Reproducible synthetic (arrival, burst) pairs with increasing arrivals."""
    if n < 1:
        raise WorkloadValidationError("A generated workload needs at least one process.")
    rng = random.Random(seed)
    pairs: List[Tuple[int, int]] = []
    time = 0
    for i in range(n):
        if i > 0:
            time += rng.randint(1, max(1, max_gap))
        pairs.append((time, rng.randint(1, max(1, max_burst))))
    return pairs
