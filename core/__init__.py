"""
Core modules for CPU Scheduling Simulator
"""

from .errors import (SchedulerError, EmptyWorkloadError, WorkloadFormatError,
                     UnknownAlgorithmError, ConfigurationError)
from .process import Process, ProcessState, create_process_copy, clone_workload, sort_workload
from .ready_queue import (FIFOQueue, PriorityQueue, DurationQueue, RemainingTimeQueue,
                          ArrivalQueue, LevelQueues)
from .scheduler_base import (BaseScheduler, SchedulerStats, GanttEntry, IDLE_PID,
                             avg_turnaround, avg_response, avg_waiting)

__all__ = [
    'SchedulerError',
    'EmptyWorkloadError',
    'WorkloadFormatError',
    'UnknownAlgorithmError',
    'ConfigurationError',
    'Process',
    'ProcessState',
    'create_process_copy',
    'clone_workload',
    'sort_workload',
    'FIFOQueue',
    'PriorityQueue',
    'DurationQueue',
    'RemainingTimeQueue',
    'ArrivalQueue',
    'LevelQueues',
    'BaseScheduler',
    'SchedulerStats',
    'GanttEntry',
    'IDLE_PID',
    'avg_turnaround',
    'avg_response',
    'avg_waiting'
]
