"""
Core data structures for the CPU schedule simulator.
Includes the Process record, the ReadyQueue and the Workload.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple, Any
import heapq


class WorkloadValidationError(ValueError):
    """Raised when a workload description is malformed."""


class SchedulerInvariantError(RuntimeError):
    """Raised when the simulation reaches a state correct scheduling never produces."""


class ProcessState(Enum):
    """Process states in the system."""
    NEW = "NEW"
    READY = "READY"
    RUNNING = "RUNNING"
    # Single-burst workloads never block, so nothing enters this state.
    WAITING = "WAITING"
    TERMINATED = "TERMINATED"


_IMMUTABLE_FIELDS = ("pid", "arrival_time", "burst_length", "index")


def process_id(index: int) -> str:
    """Return the identifier for the index-th process: A..Z, AA, AB, ..."""
    if index < 0:
        raise ValueError(f"process index must be non-negative, got {index}")
    letters = ""
    n = index + 1
    while n > 0:
        n, rem = divmod(n - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


@dataclass
class Process:
    """One schedulable unit of work with a single CPU burst."""
    pid: str
    arrival_time: int
    burst_length: int
    index: int = 0
    remaining_time: int = field(init=False)
    waiting_time: int = 0
    state: ProcessState = ProcessState.NEW
    first_run_time: Optional[int] = None
    completion_time: Optional[int] = None

    def __post_init__(self) -> None:
        self.remaining_time = self.burst_length

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _IMMUTABLE_FIELDS and name in self.__dict__:
            raise AttributeError(f"Process.{name} cannot be changed after creation")
        super().__setattr__(name, value)

    def advance(self) -> None:
        """Execute for one unit of time."""
        if self.remaining_time <= 0:
            raise SchedulerInvariantError(f"process {self.pid} advanced with no remaining time")
        self.remaining_time -= 1

    def is_exhausted(self) -> bool:
        return self.remaining_time == 0

    def tick_waiting(self) -> None:
        self.waiting_time += 1

    @property
    def turnaround_time(self) -> Optional[int]:
        if self.completion_time is None:
            return None
        return self.completion_time - self.arrival_time

    @property
    def response_time(self) -> Optional[int]:
        if self.first_run_time is None:
            return None
        return self.first_run_time - self.arrival_time


class ReadyQueue:
    """Priority queue of READY processes ordered by a policy key.

    Entries carry an insertion counter after the key so that equal keys
    always come out in the order they went in.
    """

    def __init__(self, key: Callable[[Process], Tuple]):
        self._key = key
        self._heap: List[Tuple[Tuple, int, Process]] = []
        self._entry_count = 0

    def push(self, process: Process) -> None:
        """Add a process to the ready queue and mark it READY."""
        if process in self:
            raise SchedulerInvariantError(f"process {process.pid} is already queued")
        process.state = ProcessState.READY
        heapq.heappush(self._heap, (self._key(process), self._entry_count, process))
        self._entry_count += 1

    def pop(self) -> Optional[Process]:
        """Remove and return the highest-priority process."""
        if not self._heap:
            return None
        _, _, process = heapq.heappop(self._heap)
        return process

    def peek(self) -> Optional[Process]:
        if not self._heap:
            return None
        return self._heap[0][2]

    def is_empty(self) -> bool:
        return not self._heap

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __iter__(self) -> Iterator[Process]:
        return iter([entry[2] for entry in self._heap])

    def __contains__(self, process: object) -> bool:
        return any(entry[2] is process for entry in self._heap)


@dataclass(frozen=True)
class Workload:
    """Ordered, fixed collection of processes built once from input pairs."""
    processes: Tuple[Process, ...]
    total_execution_time: int
    process_count: int

    @classmethod
    def from_pairs(cls, pairs: Iterable[Sequence[int]]) -> "Workload":
        processes: List[Process] = []
        for i, pair in enumerate(pairs):
            if len(pair) != 2:
                raise WorkloadValidationError(
                    f"process {i + 1} needs exactly an arrival time and a CPU burst length, got {tuple(pair)!r}"
                )
            arrival, burst = pair
            if isinstance(arrival, bool) or isinstance(burst, bool) or not isinstance(arrival, int) or not isinstance(burst, int):
                raise WorkloadValidationError(f"process {i + 1} must use integer times, got {tuple(pair)!r}")
            if arrival < 0:
                raise WorkloadValidationError(f"process {i + 1} has a negative arrival time ({arrival})")
            if burst < 1:
                raise WorkloadValidationError(f"process {i + 1} needs a positive CPU burst length, got {burst}")
            processes.append(Process(pid=process_id(i), arrival_time=arrival, burst_length=burst, index=i))
        return cls(
            processes=tuple(processes),
            total_execution_time=sum(p.burst_length for p in processes),
            process_count=len(processes),
        )

    @classmethod
    def from_tokens(cls, tokens) -> "Workload":
        """Build a workload from raw input tokens or a whitespace-separated line."""
        from .utils import parse_workload
        return cls.from_pairs(parse_workload(tokens))

    @property
    def pairs(self) -> List[Tuple[int, int]]:
        return [(p.arrival_time, p.burst_length) for p in self.processes]

    def fresh(self) -> "Workload":
        """Return an untouched copy, ready for another simulation run."""
        return Workload.from_pairs(self.pairs)

    def arrivals_at(self, tick: int) -> List[Process]:
        return [p for p in self.processes if p.arrival_time == tick and p.state == ProcessState.NEW]

    def all_terminated(self) -> bool:
        return all(p.state == ProcessState.TERMINATED for p in self.processes)

    def get(self, pid: str) -> Process:
        for p in self.processes:
            if p.pid == pid:
                return p
        raise KeyError(pid)

    def __iter__(self) -> Iterator[Process]:
        return iter(self.processes)

    def __len__(self) -> int:
        return self.process_count
