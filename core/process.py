"""
프로세스 및 PCB (Process Control Block) 관리 모듈
"""

from enum import Enum
from typing import Iterable, List, Optional
from copy import deepcopy

from .errors import EmptyWorkloadError


class ProcessState(Enum):
    """프로세스 상태"""
    NEW = "New"
    READY = "Ready"
    RUNNING = "Running"
    TERMINATED = "Terminated"


class Process:
    """
    프로세스 제어 블록 (PCB)
    도착 시간과 서비스 시간만으로 정의되는 시뮬레이션 작업
    """

    def __init__(self, pid: int, arrival: int, duration: int):
        """
        프로세스 초기화

        Args:
            pid: 프로세스 ID (입력 순서, 1부터 시작)
            arrival: 도착 시간 (0 이상)
            duration: 총 서비스 시간 (양수)
        """
        if arrival < 0:
            raise ValueError(f"도착 시간은 0 이상이어야 합니다: {arrival}")
        if duration <= 0:
            raise ValueError(f"서비스 시간은 양수여야 합니다: {duration}")

        self.pid = pid
        self._arrival = arrival
        self._duration = duration

        # 실행 상태 추적
        self.state = ProcessState.NEW
        self.remaining_time = duration

        # 통계 정보 (None = 아직 설정되지 않음)
        self.first_run: Optional[int] = None
        self.completion: Optional[int] = None

        # MLFQ용 큐 레벨
        self.queue_level = 0

    @property
    def arrival(self) -> int:
        return self._arrival

    @property
    def duration(self) -> int:
        return self._duration

    @property
    def has_run(self) -> bool:
        return self.first_run is not None

    def mark_first_run(self, current_time: int):
        """첫 실행 시간 기록 (최초 1회만)"""
        if self.first_run is None:
            self.first_run = current_time

    def execute(self, time_units: int = 1) -> bool:
        """
        프로세스 실행 (남은 시간 감소)

        Args:
            time_units: 실행할 시간 단위

        Returns:
            프로세스가 완료되었는지 여부
        """
        if self.is_completed():
            raise ValueError(f"P{self.pid}는 이미 완료된 프로세스입니다")
        if time_units <= 0 or time_units > self.remaining_time:
            raise ValueError(f"P{self.pid} 실행 시간이 잘못되었습니다: "
                             f"{time_units} (남은 시간 {self.remaining_time})")

        self.remaining_time -= time_units
        return self.remaining_time == 0

    def complete(self, current_time: int):
        """완료 시간 기록 및 종료 상태로 전환"""
        if self.completion is not None:
            raise ValueError(f"P{self.pid}의 완료 시간은 이미 기록되었습니다")
        if self.remaining_time != 0:
            raise ValueError(f"P{self.pid}는 아직 {self.remaining_time}만큼 남아있습니다")

        self.completion = current_time
        self.state = ProcessState.TERMINATED

    def reset(self):
        """실행 상태를 초기값으로 되돌림 (도착 시간과 서비스 시간은 유지)"""
        self.state = ProcessState.NEW
        self.remaining_time = self._duration
        self.first_run = None
        self.completion = None
        self.queue_level = 0

    def is_completed(self) -> bool:
        """프로세스가 완료되었는지 확인"""
        return self.remaining_time == 0

    @property
    def turnaround_time(self) -> Optional[int]:
        """반환 시간 = 완료 시간 - 도착 시간"""
        if self.completion is None:
            return None
        return self.completion - self.arrival

    @property
    def response_time(self) -> Optional[int]:
        """응답 시간 = 첫 실행 시간 - 도착 시간"""
        if self.first_run is None:
            return None
        return self.first_run - self.arrival

    @property
    def waiting_time(self) -> Optional[int]:
        """대기 시간 = 반환 시간 - 서비스 시간"""
        if self.completion is None:
            return None
        return self.turnaround_time - self.duration

    def to_dict(self) -> dict:
        return {
            'pid': self.pid,
            'arrival': self.arrival,
            'duration': self.duration,
            'first_run': self.first_run,
            'completion': self.completion,
            'turnaround_time': self.turnaround_time,
            'response_time': self.response_time,
            'waiting_time': self.waiting_time,
        }

    def __repr__(self):
        return f"P{self.pid}[{self.state.value}]"

    def __str__(self):
        return f"Process {self.pid}: State={self.state.value}, Arrival={self.arrival}, " \
               f"Remaining={self.remaining_time}"


def create_process_copy(process: Process) -> Process:
    """
    프로세스의 깊은 복사본 생성
    각 스케줄링 알고리즘 시뮬레이션을 독립적으로 수행하기 위함
    """
    return deepcopy(process)


def sort_workload(processes: Iterable[Process]) -> List[Process]:
    """도착 시간 기준 안정 정렬 (같은 도착 시간은 입력 순서 유지)"""
    return sorted(processes, key=lambda p: p.arrival)


def clone_workload(processes: Iterable[Process]) -> List[Process]:
    """
    스케줄러 전용 워크로드 사본 생성

    호출자의 프로세스 객체는 변경되지 않는다.

    Raises:
        EmptyWorkloadError: 프로세스가 하나도 없는 경우
    """
    workload = sort_workload(create_process_copy(p) for p in processes)
    if not workload:
        raise EmptyWorkloadError()

    for process in workload:
        process.reset()
    return workload
