"""
CPU Scheduling Algorithms
"""

from typing import Dict, Iterable

from core.errors import UnknownAlgorithmError
from core.process import Process

from .basic_schedulers import (FIFOScheduler, SJFScheduler, STCFScheduler, RoundRobinScheduler,
                               fifo, sjf, stcf, rr)
from .advanced_schedulers import MLFQScheduler, MLFQConfig, mlfq


# 사용 가능한 알고리즘 정의
ALGORITHMS = {
    'fifo': {
        'name': 'FIFO (First-In, First-Out)',
        'class': FIFOScheduler
    },
    'sjf': {
        'name': 'SJF (Shortest Job First)',
        'class': SJFScheduler
    },
    'stcf': {
        'name': 'STCF (Shortest Time-to-Completion First)',
        'class': STCFScheduler
    },
    'rr': {
        'name': 'Round Robin (Quantum = 1)',
        'class': RoundRobinScheduler
    },
    'mlfq': {
        'name': 'Multi-Level Feedback Queue',
        'class': MLFQScheduler
    },
}


def get_scheduler_class(name: str):
    """알고리즘 이름으로 스케줄러 클래스 조회 (대소문자 무시)"""
    key = name.strip().lower() if isinstance(name, str) else name
    if key not in ALGORITHMS:
        raise UnknownAlgorithmError(name, ALGORITHMS.keys())
    return ALGORITHMS[key]['class']


def run_algorithm(name: str, workload: Iterable[Process], verbose: bool = False,
                  **params) -> Dict:
    """
    알고리즘 실행

    Args:
        name: 알고리즘 이름 (fifo, sjf, stcf, rr, mlfq)
        workload: 프로세스 목록
        verbose: 이벤트 로그 출력 여부
        params: 스케줄러 설정 (MLFQ 전용: boost_interval, num_levels, trace, front_admission)

    Returns:
        시뮬레이션 결과 딕셔너리
    """
    scheduler_class = get_scheduler_class(name)
    scheduler = scheduler_class(workload, **params)
    return scheduler.run(verbose=verbose)


__all__ = [
    'ALGORITHMS',
    'get_scheduler_class',
    'run_algorithm',
    'FIFOScheduler',
    'SJFScheduler',
    'STCFScheduler',
    'RoundRobinScheduler',
    'MLFQScheduler',
    'MLFQConfig',
    'fifo',
    'sjf',
    'stcf',
    'rr',
    'mlfq'
]
