"""
스케줄러 기본 프레임워크 및 통계 계산
"""

from typing import Dict, Iterable, List, Optional, Sequence
from dataclasses import dataclass

from .errors import SchedulerError
from .process import Process, ProcessState, clone_workload
from .ready_queue import ArrivalQueue

# Gantt Chart 특수 PID
IDLE_PID = -1


@dataclass
class GanttEntry:
    """Gantt Chart 엔트리"""
    pid: int
    start_time: int
    end_time: int
    state: ProcessState

    @property
    def is_idle(self) -> bool:
        return self.pid == IDLE_PID

    def to_dict(self) -> Dict:
        return {
            'pid': self.pid,
            'start_time': self.start_time,
            'end_time': self.end_time,
            'state': self.state.value,
        }


def avg_turnaround(processes: Sequence[Process]) -> float:
    """평균 반환 시간 (완료 시간 - 도착 시간)"""
    if not processes:
        return 0.0
    return sum(p.completion - p.arrival for p in processes) / len(processes)


def avg_response(processes: Sequence[Process]) -> float:
    """평균 응답 시간 (첫 실행 시간 - 도착 시간)"""
    if not processes:
        return 0.0
    return sum(p.first_run - p.arrival for p in processes) / len(processes)


def avg_waiting(processes: Sequence[Process]) -> float:
    """평균 대기 시간 (반환 시간 - 서비스 시간)"""
    if not processes:
        return 0.0
    return sum(p.completion - p.arrival - p.duration for p in processes) / len(processes)


class SchedulerStats:
    """스케줄링 통계"""

    def __init__(self):
        self.context_switches = 0
        self.cpu_busy_time = 0
        self.total_simulation_time = 0
        self.process_count = 0
        self.avg_waiting_time = 0.0
        self.avg_turnaround_time = 0.0
        self.avg_response_time = 0.0

    def update(self, processes: Sequence[Process], simulation_time: int):
        """완료된 프로세스 목록으로 평균값 갱신"""
        self.total_simulation_time = simulation_time
        self.process_count = len(processes)
        self.avg_waiting_time = avg_waiting(processes)
        self.avg_turnaround_time = avg_turnaround(processes)
        self.avg_response_time = avg_response(processes)

    def calculate_averages(self) -> Dict:
        """평균 계산"""
        return {
            'avg_waiting_time': self.avg_waiting_time,
            'avg_turnaround_time': self.avg_turnaround_time,
            'avg_response_time': self.avg_response_time,
            'cpu_utilization': (self.cpu_busy_time / self.total_simulation_time * 100)
                               if self.total_simulation_time > 0 else 0,
            'context_switches': self.context_switches
        }


class BaseScheduler:
    """
    기본 스케줄러 클래스
    모든 스케줄링 알고리즘의 공통 기능 제공

    시뮬레이션 시계, 프로세스 도착 처리, 실행/종료 처리, 이벤트 로그,
    Gantt Chart 및 통계는 여기서 관리하고, 하위 클래스는 Ready 큐와
    execute_one_step()의 선택/선점 정책만 구현한다.
    """

    preemptive = False

    def __init__(self, processes: Iterable[Process], name: str = "Base Scheduler",
                 ready_queue=None):
        self.processes: List[Process] = clone_workload(processes)
        self.name = name
        self.ready_queue = ready_queue

        # 시계는 가장 먼저 도착한 프로세스의 도착 시간에서 시작
        self.start_time = self.processes[0].arrival
        self.current_time = self.start_time

        # 아직 도착하지 않은 프로세스
        self.arrival_queue = ArrivalQueue()
        for process in self.processes:
            self.arrival_queue.push(process)

        self.running_process: Optional[Process] = None
        self.previous_process: Optional[Process] = None
        self.terminated_processes: List[Process] = []

        # Gantt Chart 데이터
        self.gantt_chart: List[GanttEntry] = []

        # 통계
        self.stats = SchedulerStats()

        # 이벤트 로그
        self.event_log: List[str] = []

    def log_event(self, message: str):
        """이벤트 로그 기록"""
        log_entry = f"[T={self.current_time:3d}] {message}"
        self.event_log.append(log_entry)

    def add_to_gantt_chart(self, pid: int, start: int, end: int, state: ProcessState):
        """Gantt Chart에 엔트리 추가 (이어지는 같은 프로세스 구간은 병합)"""
        if start >= end:
            return

        if self.gantt_chart:
            last = self.gantt_chart[-1]
            if last.pid == pid and last.state == state and last.end_time == start:
                last.end_time = end
                return

        self.gantt_chart.append(GanttEntry(pid, start, end, state))

    def admit(self, process: Process):
        """도착한 프로세스를 Ready 큐에 삽입 (하위 클래스에서 재정의 가능)"""
        self.ready_queue.push(process)

    def handle_process_arrival(self) -> List[Process]:
        """현재 시간까지 도착한 프로세스 처리"""
        arrived = self.arrival_queue.pop_arrived(self.current_time)
        for process in arrived:
            process.state = ProcessState.READY
            self.admit(process)
            self.log_event(f"P{process.pid} arrived → Ready Queue")
        return arrived

    def has_pending_arrivals(self) -> bool:
        return bool(self.arrival_queue)

    def advance_to_next_arrival(self):
        """Ready 큐가 비었을 때 다음 도착 시간까지 CPU 유휴 처리"""
        next_arrival = self.arrival_queue.next_arrival()
        if next_arrival is None:
            raise SchedulerError(f"{self.name}: 실행할 프로세스도, 도착 예정 프로세스도 없습니다")

        if next_arrival > self.current_time:
            self.log_event(f"CPU idle until T={next_arrival}")
            self.add_to_gantt_chart(IDLE_PID, self.current_time, next_arrival, ProcessState.READY)
            self.current_time = next_arrival

    def dispatch(self, process: Process):
        """
        프로세스에 CPU 할당

        실행 중인 프로세스가 바뀔 때만 문맥 전환으로 카운트한다.
        """
        if self.previous_process is not None and self.previous_process.pid != process.pid:
            self.stats.context_switches += 1
            self.log_event(f"Context Switch: P{self.previous_process.pid} → P{process.pid}")
        if self.previous_process is None or self.previous_process.pid != process.pid:
            self.log_event(f"P{process.pid} → Running")

        self.previous_process = process
        self.running_process = process
        process.state = ProcessState.RUNNING
        process.mark_first_run(self.current_time)

    def run_process(self, process: Process, time_units: int) -> bool:
        """
        프로세스를 time_units만큼 실행하고 시계를 진행

        Returns:
            프로세스가 완료되었는지 여부
        """
        self.dispatch(process)

        start = self.current_time
        completed = process.execute(time_units)
        self.stats.cpu_busy_time += time_units
        self.current_time += time_units
        self.add_to_gantt_chart(process.pid, start, self.current_time, ProcessState.RUNNING)

        if completed:
            self.terminate_process(process)
        return completed

    def preempt(self, process: Process):
        """실행 중인 프로세스를 Ready 상태로 되돌림"""
        process.state = ProcessState.READY
        self.running_process = None

    def terminate_process(self, process: Process):
        """프로세스 종료 처리"""
        process.complete(self.current_time)
        self.running_process = None
        self.terminated_processes.append(process)
        self.log_event(f"P{process.pid} → Terminated "
                       f"(TT={process.turnaround_time}, RT={process.response_time})")

    def is_simulation_complete(self) -> bool:
        """시뮬레이션 완료 여부 확인"""
        return len(self.terminated_processes) >= len(self.processes)

    def execute_one_step(self) -> bool:
        """
        한 스케줄링 단계 실행 (하위 클래스에서 구현)

        Returns:
            시뮬레이션 완료 여부
        """
        raise NotImplementedError("Subclasses must implement execute_one_step()")

    def get_current_snapshot(self) -> Dict:
        """
        현재 시뮬레이션 상태 스냅샷 반환 (실시간 뷰어용)

        Returns:
            현재 상태 딕셔너리
        """
        return {
            'time': self.current_time,
            'running': self.running_process,
            'ready_queue': list(self.ready_queue),
            'terminated': list(self.terminated_processes),
            'context_switches': self.stats.context_switches,
            'cpu_busy_time': self.stats.cpu_busy_time,
            'latest_gantt_entry': self.gantt_chart[-1] if self.gantt_chart else None,
            'latest_log': self.event_log[-1] if self.event_log else ""
        }

    def run(self, verbose: bool = False) -> Dict:
        """
        스케줄링 시뮬레이션 실행

        Args:
            verbose: 상세 로그 출력 여부

        Returns:
            시뮬레이션 결과 딕셔너리
        """
        self.log_event(f"===== {self.name} Scheduling Started =====")

        while not self.is_simulation_complete():
            self.execute_one_step()

        self.log_event(f"===== {self.name} Scheduling Completed =====")

        if verbose:
            for log in self.event_log:
                print(log)

        return self.get_results()

    def update_statistics(self):
        """최종 통계 업데이트"""
        self.stats.update(self.terminated_processes, self.current_time - self.start_time)

    def get_results(self) -> Dict:
        """
        시뮬레이션 결과 반환

        Returns:
            결과 딕셔너리 (통계, Gantt Chart, 로그 등)
        """
        self.update_statistics()

        return {
            'algorithm': self.name,
            'statistics': self.stats.calculate_averages(),
            'gantt_chart': self.gantt_chart,
            'event_log': self.event_log,
            'processes': self.terminated_processes
        }
