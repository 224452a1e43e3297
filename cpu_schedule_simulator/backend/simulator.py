from __future__ import annotations

from typing import List, Optional, Dict, Union
from dataclasses import dataclass

from .core import Process, ProcessState, Workload, SchedulerInvariantError
from .schedulers import BaseScheduler, get_scheduler
from .utils import (
    EventLogger,
    compute_waiting_times,
    compute_turnaround_times,
    compute_response_times,
    compute_avg,
    compute_throughput,
    count_context_switches,
)


@dataclass
class SimulationResult:
    policy: str
    processes: List[Process]
    schedule: List[str]
    total_time: int
    waiting_times: Dict[str, int]
    turnaround_times: Dict[str, int]
    response_times: Dict[str, int]
    avg_waiting_time: float
    avg_turnaround_time: float
    avg_response_time: float
    throughput: float
    context_switches: int
    logger: EventLogger


class SchedulingEngine:
    """Runs one workload to completion under one scheduling policy.

    Time advances one tick per loop iteration. At most one process holds
    the CPU during a tick; non-preemptive policies keep the holder until
    it terminates, the preemptive policy re-decides every tick.
    """

    def __init__(self, workload: Workload, policy: Union[str, BaseScheduler]):
        self.workload = workload
        self.scheduler = get_scheduler(policy)
        self.ready_queue = self.scheduler.make_ready_queue()
        self.logger = EventLogger()
        self.time_now = 0
        self._schedule: List[str] = []

    @classmethod
    def from_tokens(cls, tokens, policy: Union[str, BaseScheduler]) -> "SchedulingEngine":
        """Validate raw input before any engine exists."""
        return cls(Workload.from_tokens(tokens), policy)

    @property
    def policy(self) -> str:
        return self.scheduler.name

    def simulate(self) -> List[str]:
        """Run until every process terminates; a finished workload adds nothing."""
        before = len(self._schedule)
        if self.scheduler.preemptive:
            self._preemptive_schedule_and_execute()
        else:
            self._non_preemptive_schedule_and_execute()
        added = len(self._schedule) - before
        if added not in (0, self.workload.total_execution_time):
            raise SchedulerInvariantError(
                f"trace grew by {added} ticks, expected {self.workload.total_execution_time}"
            )
        return self.get_schedule()

    def _admit(self, time_now: int) -> None:
        for p in self.workload.arrivals_at(time_now):
            self.ready_queue.push(p)
            self.logger.log_process_event(time_now, p.pid, "arrive")

    def _dispatch(self, process: Process, time_now: int) -> None:
        process.state = ProcessState.RUNNING
        if process.first_run_time is None:
            process.first_run_time = time_now
        self.logger.log_process_event(time_now, process.pid, "dispatch")

    def _execute(self, holder: Process, time_now: int) -> None:
        holder.advance()
        self._schedule.append(holder.pid)
        self.logger.log_timeline_tick(time_now, holder.pid, self.policy)
        # everyone still on the ready queue waited through this tick
        for p in self.ready_queue:
            p.tick_waiting()

    def _terminate(self, process: Process, time_now: int) -> None:
        process.state = ProcessState.TERMINATED
        process.completion_time = time_now + 1
        self.logger.log_process_event(time_now + 1, process.pid, "complete")

    def _non_preemptive_schedule_and_execute(self) -> None:
        time_now = 0
        holder: Optional[Process] = None

        while not self.workload.all_terminated():
            self._admit(time_now)

            # Scheduling decisions only happen once the CPU is released.
            if holder is None and self.ready_queue:
                holder = self.scheduler.select(self.ready_queue, holder)
                self._dispatch(holder, time_now)

            if holder is not None:
                self._execute(holder, time_now)
                if holder.is_exhausted():
                    self._terminate(holder, time_now)
                    holder = None

            time_now += 1
        self.time_now = max(self.time_now, time_now)

    def _preemptive_schedule_and_execute(self) -> None:
        time_now = 0
        previous: Optional[Process] = None

        while not self.workload.all_terminated():
            self._admit(time_now)

            holder: Optional[Process] = None
            if self.ready_queue:
                holder = self.scheduler.select(self.ready_queue, None)
                if previous is not None and previous is not holder and previous.state == ProcessState.READY:
                    self.logger.log_process_event(time_now, previous.pid, "preempt")
                if holder is not previous:
                    self._dispatch(holder, time_now)
                else:
                    holder.state = ProcessState.RUNNING

            if holder is not None:
                self._execute(holder, time_now)
                if holder.is_exhausted():
                    self._terminate(holder, time_now)
                    previous = None
                else:
                    self.ready_queue.push(holder)
                    previous = holder
            else:
                previous = None

            time_now += 1
        self.time_now = max(self.time_now, time_now)

    def get_schedule(self) -> List[str]:
        return list(self._schedule)

    def get_average_waiting_time(self) -> float:
        if self.workload.process_count == 0:
            raise SchedulerInvariantError("average waiting time of an empty workload is undefined")
        return sum(p.waiting_time for p in self.workload) / self.workload.process_count

    def result(self) -> SimulationResult:
        processes = list(self.workload)
        avg_wait = self.get_average_waiting_time()
        turnaround_times = compute_turnaround_times(processes)
        response_times = compute_response_times(processes)
        return SimulationResult(
            policy=self.policy,
            processes=processes,
            schedule=self.get_schedule(),
            total_time=self.time_now,
            waiting_times=compute_waiting_times(processes),
            turnaround_times=turnaround_times,
            response_times=response_times,
            avg_waiting_time=avg_wait,
            avg_turnaround_time=compute_avg(list(turnaround_times.values())),
            avg_response_time=compute_avg(list(response_times.values())),
            throughput=compute_throughput(processes, self.time_now),
            context_switches=count_context_switches(self._schedule),
            logger=self.logger,
        )


def simulate(workload: Workload, policy: Union[str, BaseScheduler]) -> SimulationResult:
    engine = SchedulingEngine(workload, policy)
    engine.simulate()
    return engine.result()
