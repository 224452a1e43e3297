"""
Simulation backend: process records, scheduling policies and the tick engine.
"""

from .core import Process, ProcessState, ReadyQueue, Workload, WorkloadValidationError, SchedulerInvariantError
from .schedulers import Scheduler, get_scheduler
from .simulator import SchedulingEngine, SimulationResult, simulate

__all__ = [
    'Process',
    'ProcessState',
    'ReadyQueue',
    'Workload',
    'WorkloadValidationError',
    'SchedulerInvariantError',
    'Scheduler',
    'get_scheduler',
    'SchedulingEngine',
    'SimulationResult',
    'simulate',
]
