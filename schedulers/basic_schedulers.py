"""
기본 스케줄링 알고리즘 구현
- FIFO (First-In, First-Out)
- SJF (Shortest Job First - 비선점형)
- STCF (Shortest Time-to-Completion First - 선점형)
- Round Robin (타임 퀀텀 = 1)
"""

from typing import Iterable, List

from core.process import Process
from core.ready_queue import FIFOQueue, DurationQueue, RemainingTimeQueue
from core.scheduler_base import BaseScheduler

# 선점형 스케줄러의 타임 퀀텀
TIME_QUANTUM = 1


class FIFOScheduler(BaseScheduler):
    """
    FIFO (First-In, First-Out) 스케줄러
    비선점형: 먼저 도착한 프로세스를 완료될 때까지 실행
    """

    def __init__(self, processes: Iterable[Process]):
        super().__init__(processes, "FIFO", ready_queue=FIFOQueue())

    def execute_one_step(self) -> bool:
        """프로세스 하나를 완료될 때까지 실행"""
        if self.is_simulation_complete():
            return True

        self.handle_process_arrival()

        if not self.ready_queue:
            self.advance_to_next_arrival()
            return False

        process = self.ready_queue.pop()
        self.run_process(process, process.remaining_time)

        return self.is_simulation_complete()


class SJFScheduler(BaseScheduler):
    """
    SJF (Shortest Job First) 스케줄러
    비선점형: 도착한 프로세스 중 서비스 시간이 가장 짧은 프로세스를 완료될 때까지 실행

    서비스 시간이 같으면 먼저 도착한 프로세스, 도착 시간도 같으면
    입력 순서가 빠른 프로세스를 선택한다.
    """

    def __init__(self, processes: Iterable[Process]):
        super().__init__(processes, "SJF", ready_queue=DurationQueue())

    def execute_one_step(self) -> bool:
        if self.is_simulation_complete():
            return True

        self.handle_process_arrival()

        if not self.ready_queue:
            self.advance_to_next_arrival()
            return False

        process = self.ready_queue.pop()
        self.run_process(process, process.remaining_time)

        return self.is_simulation_complete()


class STCFScheduler(BaseScheduler):
    """
    STCF (Shortest Time-to-Completion First) 스케줄러
    선점형: 매 타임 퀀텀마다 남은 시간이 가장 짧은 프로세스를 실행
    """

    preemptive = True

    def __init__(self, processes: Iterable[Process]):
        super().__init__(processes, "STCF", ready_queue=RemainingTimeQueue())

    def execute_one_step(self) -> bool:
        """한 타임 퀀텀 실행"""
        if self.is_simulation_complete():
            return True

        # 1. 프로세스 도착 처리
        self.handle_process_arrival()

        if not self.ready_queue:
            self.advance_to_next_arrival()
            return False

        # 2. 남은 시간이 가장 짧은 프로세스 선택
        process = self.ready_queue.pop()
        if self.previous_process is not None and self.previous_process is not process \
                and not self.previous_process.is_completed():
            self.log_event(f"P{self.previous_process.pid} preempted by P{process.pid}")

        # 3. CPU 실행
        if not self.run_process(process, TIME_QUANTUM):
            self.preempt(process)
            self.ready_queue.push(process)

        return self.is_simulation_complete()


class RoundRobinScheduler(BaseScheduler):
    """
    Round Robin 스케줄러
    선점형: 타임 퀀텀(1)마다 Ready 큐의 맨 뒤로 이동

    같은 시간에 도착한 프로세스는 방금 실행된 프로세스보다 앞에 놓인다.
    """

    preemptive = True

    def __init__(self, processes: Iterable[Process]):
        super().__init__(processes, "Round Robin", ready_queue=FIFOQueue())

    def execute_one_step(self) -> bool:
        """한 타임 퀀텀 실행"""
        if self.is_simulation_complete():
            return True

        # 1. 프로세스 도착 처리 (Ready 큐 맨 뒤)
        self.handle_process_arrival()

        if not self.ready_queue:
            self.advance_to_next_arrival()
            return False

        # 2. 맨 앞 프로세스 실행
        process = self.ready_queue.pop()

        # 3. 완료되지 않았으면 맨 뒤로
        if not self.run_process(process, TIME_QUANTUM):
            self.preempt(process)
            self.ready_queue.push(process)

        return self.is_simulation_complete()


def fifo(workload: Iterable[Process]) -> List[Process]:
    """FIFO 실행 후 완료 순서대로 프로세스 반환"""
    return FIFOScheduler(workload).run()['processes']


def sjf(workload: Iterable[Process]) -> List[Process]:
    """SJF 실행 후 완료 순서대로 프로세스 반환"""
    return SJFScheduler(workload).run()['processes']


def stcf(workload: Iterable[Process]) -> List[Process]:
    """STCF 실행 후 완료 순서대로 프로세스 반환"""
    return STCFScheduler(workload).run()['processes']


def rr(workload: Iterable[Process]) -> List[Process]:
    """Round Robin 실행 후 완료 순서대로 프로세스 반환"""
    return RoundRobinScheduler(workload).run()['processes']
