"""
Scheduling policies: FCFS, non-preemptive SJF and SRTF.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple, Union

from .core import Process, ReadyQueue


class Scheduler:
    FCFS = "FCFS"   # non-preemptive First-Come, First-Served
    SJF = "SJF"     # non-preemptive Shortest Job First
    SRTF = "SRTF"   # preemptive SJF

    ALL = (SRTF, SJF, FCFS)


_ALIASES = {
    "FCFS": Scheduler.FCFS,
    "SJF": Scheduler.SJF,
    "SJFNP": Scheduler.SJF,
    "SJF-NP": Scheduler.SJF,
    "SJF_NP": Scheduler.SJF,
    "SRTF": Scheduler.SRTF,
}


class BaseScheduler(ABC):
    """Abstract base class for all scheduling policies."""

    name: str = ""
    preemptive: bool = False

    @abstractmethod
    def ordering_key(self, process: Process) -> Tuple:
        """Sort key for the ready queue; smaller runs first."""
        pass

    def make_ready_queue(self) -> ReadyQueue:
        return ReadyQueue(self.ordering_key)

    def select(self, ready_queue: ReadyQueue, holder: Optional[Process]) -> Optional[Process]:
        """Pick the process that runs this tick.

        Non-preemptive policies keep the current holder until it releases
        the CPU; preemptive ones always take the queue head.
        """
        if holder is not None and not self.preemptive:
            return holder
        return ready_queue.pop()

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class FCFSScheduler(BaseScheduler):
    """First Come First Serve scheduler."""

    name = Scheduler.FCFS

    def ordering_key(self, process: Process) -> Tuple:
        return (process.arrival_time, process.index)


class SJFScheduler(BaseScheduler):
    """Shortest Job First scheduler (non-preemptive)."""

    name = Scheduler.SJF

    def ordering_key(self, process: Process) -> Tuple:
        # shortest remaining time first, tie-breaker by arrival order
        return (process.remaining_time, process.arrival_time, process.index)


class SRTFScheduler(SJFScheduler):
    """Shortest Remaining Time First (preemptive SJF) scheduler."""

    name = Scheduler.SRTF
    preemptive = True


_SCHEDULERS = {
    Scheduler.FCFS: FCFSScheduler,
    Scheduler.SJF: SJFScheduler,
    Scheduler.SRTF: SRTFScheduler,
}


def normalize_policy(policy: str) -> str:
    key = str(policy).strip().upper()
    if key not in _ALIASES:
        raise ValueError(f"Unknown scheduling policy {policy!r}; expected one of {', '.join(Scheduler.ALL)}")
    return _ALIASES[key]


def get_scheduler(policy: Union[str, BaseScheduler]) -> BaseScheduler:
    if isinstance(policy, BaseScheduler):
        return policy
    return _SCHEDULERS[normalize_policy(policy)]()
