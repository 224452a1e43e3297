"""
Tests for the process record, the ready queue and the workload.
"""

import pytest

from cpu_schedule_simulator.backend.core import (
    Process, ProcessState, ReadyQueue, Workload,
    WorkloadValidationError, SchedulerInvariantError, process_id,
)


@pytest.fixture
def sample_processes():
    """Create a set of test processes."""
    return [
        Process(pid="A", arrival_time=0, burst_length=4, index=0),
        Process(pid="B", arrival_time=1, burst_length=3, index=1),
        Process(pid="C", arrival_time=2, burst_length=1, index=2),
        Process(pid="D", arrival_time=3, burst_length=3, index=3),
    ]


class TestProcess:
    """Test the Process record."""

    def test_initial_values(self):
        p = Process(pid="A", arrival_time=2, burst_length=5)
        assert p.remaining_time == 5
        assert p.waiting_time == 0
        assert p.state == ProcessState.NEW
        assert p.turnaround_time is None
        assert p.response_time is None

    def test_advance_until_exhausted(self):
        p = Process(pid="A", arrival_time=0, burst_length=2)
        p.advance()
        assert p.remaining_time == 1
        assert not p.is_exhausted()
        p.advance()
        assert p.is_exhausted()

    def test_advance_past_zero_is_an_invariant_violation(self):
        p = Process(pid="A", arrival_time=0, burst_length=1)
        p.advance()
        with pytest.raises(SchedulerInvariantError):
            p.advance()
        assert p.remaining_time == 0

    def test_tick_waiting(self):
        p = Process(pid="A", arrival_time=0, burst_length=1)
        p.tick_waiting()
        p.tick_waiting()
        assert p.waiting_time == 2

    @pytest.mark.parametrize("name", ["pid", "arrival_time", "burst_length", "index"])
    def test_identity_fields_are_immutable(self, name):
        p = Process(pid="A", arrival_time=0, burst_length=3)
        with pytest.raises(AttributeError):
            setattr(p, name, 7)

    def test_derived_times(self):
        p = Process(pid="B", arrival_time=2, burst_length=3)
        p.first_run_time = 4
        p.completion_time = 9
        assert p.response_time == 2
        assert p.turnaround_time == 7


def test_process_ids():
    assert [process_id(i) for i in range(3)] == ["A", "B", "C"]
    assert process_id(25) == "Z"
    assert process_id(26) == "AA"
    assert process_id(27) == "AB"
    assert process_id(26 + 26 * 26) == "AAA"


class TestReadyQueue:
    """Test the ReadyQueue implementation."""

    def test_push_marks_ready(self, sample_processes):
        queue = ReadyQueue(lambda p: (p.arrival_time, p.index))
        queue.push(sample_processes[0])
        assert sample_processes[0].state == ProcessState.READY
        assert sample_processes[0] in queue
        assert len(queue) == 1

    def test_pop_order_follows_key(self, sample_processes):
        queue = ReadyQueue(lambda p: (p.remaining_time, p.arrival_time, p.index))
        for p in reversed(sample_processes):
            queue.push(p)
        order = []
        while queue:
            order.append(queue.pop().pid)
        assert order == ["C", "B", "D", "A"]

    def test_equal_keys_keep_insertion_order(self, sample_processes):
        queue = ReadyQueue(lambda p: 0)
        for p in [sample_processes[2], sample_processes[0], sample_processes[3]]:
            queue.push(p)
        assert [queue.pop().pid for _ in range(3)] == ["C", "A", "D"]

    def test_empty_queue(self):
        queue = ReadyQueue(lambda p: 0)
        assert queue.pop() is None
        assert queue.peek() is None
        assert queue.is_empty()
        assert not queue

    def test_double_push_rejected(self, sample_processes):
        queue = ReadyQueue(lambda p: 0)
        queue.push(sample_processes[0])
        with pytest.raises(SchedulerInvariantError):
            queue.push(sample_processes[0])

    def test_iteration_does_not_consume(self, sample_processes):
        queue = ReadyQueue(lambda p: p.index)
        for p in sample_processes:
            queue.push(p)
        assert {p.pid for p in queue} == {"A", "B", "C", "D"}
        assert len(queue) == 4
        assert queue.peek().pid == "A"


class TestWorkload:
    """Test Workload construction and validation."""

    def test_from_pairs(self):
        workload = Workload.from_pairs([(0, 3), (1, 2), (4, 5)])
        assert [p.pid for p in workload] == ["A", "B", "C"]
        assert [p.index for p in workload] == [0, 1, 2]
        assert workload.process_count == 3
        assert len(workload) == 3
        assert workload.total_execution_time == 10
        assert workload.pairs == [(0, 3), (1, 2), (4, 5)]

    def test_from_tokens(self):
        workload = Workload.from_tokens("0 7 2 4")
        assert workload.pairs == [(0, 7), (2, 4)]

    @pytest.mark.parametrize("pairs", [
        [(-1, 3)],
        [(0, 0)],
        [(0, -2)],
        [(0, 1.5)],
        [(0, 3, 1)],
    ])
    def test_invalid_pairs(self, pairs):
        with pytest.raises(WorkloadValidationError):
            Workload.from_pairs(pairs)

    def test_odd_token_count(self):
        with pytest.raises(WorkloadValidationError, match="arrival time and a CPU burst length"):
            Workload.from_tokens(["0", "3", "1"])

    def test_fresh_copy_is_independent(self):
        workload = Workload.from_pairs([(0, 2)])
        workload.processes[0].advance()
        copy = workload.fresh()
        assert copy.processes[0].remaining_time == 2
        assert copy.processes[0] is not workload.processes[0]

    def test_counters_are_frozen(self):
        workload = Workload.from_pairs([(0, 2)])
        with pytest.raises(AttributeError):
            workload.total_execution_time = 5

    def test_arrivals_and_termination(self):
        workload = Workload.from_pairs([(0, 1), (0, 2), (3, 1)])
        assert [p.pid for p in workload.arrivals_at(0)] == ["A", "B"]
        assert workload.arrivals_at(1) == []
        assert not workload.all_terminated()
        for p in workload:
            p.state = ProcessState.TERMINATED
        assert workload.all_terminated()
        assert workload.get("C").arrival_time == 3
        with pytest.raises(KeyError):
            workload.get("Z")
