"""
고급 스케줄링 알고리즘 구현
- Multi-Level Feedback Queue (MLFQ) with Priority Boost
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from core.errors import ConfigurationError
from core.process import Process, ProcessState
from core.ready_queue import LevelQueues
from core.scheduler_base import BaseScheduler

DEFAULT_BOOST_INTERVAL = 10
DEFAULT_NUM_LEVELS = 4


@dataclass
class MLFQConfig:
    """
    MLFQ 설정

    Attributes:
        boost_interval: 모든 프로세스를 레벨 0으로 올리는 주기 (틱 수)
        num_levels: 우선순위 큐 레벨 수
        trace: 매 틱마다 큐 상태 스냅샷 기록 여부 (스케줄링 결과에는 영향 없음)
        front_admission: 새로 도착한 프로세스를 레벨 0 큐의 맨 앞에 삽입할지 여부
    """
    boost_interval: int = DEFAULT_BOOST_INTERVAL
    num_levels: int = DEFAULT_NUM_LEVELS
    trace: bool = False
    front_admission: bool = True

    def __post_init__(self):
        if isinstance(self.boost_interval, bool) or not isinstance(self.boost_interval, int) \
                or self.boost_interval < 1:
            raise ConfigurationError(f"boost_interval은 양의 정수여야 합니다: {self.boost_interval!r}")
        if isinstance(self.num_levels, bool) or not isinstance(self.num_levels, int) \
                or self.num_levels < 1:
            raise ConfigurationError(f"num_levels는 1 이상의 정수여야 합니다: {self.num_levels!r}")


class MLFQScheduler(BaseScheduler):
    """
    Multi-Level Feedback Queue 스케줄러
    - 모든 레벨의 타임 퀀텀은 1틱
    - 퀀텀 안에 끝나지 않은 프로세스는 한 레벨 아래로 강등 (최하위 레벨은 유지)
    - boost_interval 틱마다 모든 프로세스를 레벨 0으로 승격
    - 새로 도착한 프로세스는 레벨 0에 삽입 (기본값: 큐의 맨 앞)
    """

    preemptive = True

    def __init__(self, processes: Iterable[Process], config: Optional[MLFQConfig] = None,
                 **params):
        if config is None:
            config = MLFQConfig(**params)
        elif params:
            raise ConfigurationError("config와 개별 설정값을 함께 지정할 수 없습니다")

        self.config = config
        super().__init__(processes, "MLFQ", ready_queue=LevelQueues(config.num_levels))

        self.tick = 1
        self.last_boost_tick: Optional[int] = None
        self.current_level = 0
        self.trace: List[Dict] = []

    @property
    def queues(self) -> LevelQueues:
        return self.ready_queue

    def handle_process_arrival(self) -> List[Process]:
        """
        프로세스 도착 처리 - 모두 레벨 0에 삽입

        front_admission이면 이미 대기 중인 레벨 0 프로세스보다 앞에 놓이며,
        같은 틱에 도착한 프로세스끼리는 도착 순서를 유지한다.
        프로세스를 하나씩 맨 앞에 넣는 방식과 달리 동시 도착 묶음이 역순이 되지 않는다.
        """
        arrived = self.arrival_queue.pop_arrived(self.current_time)
        if not arrived:
            return arrived

        if self.config.front_admission:
            for process in reversed(arrived):
                self.queues.push_front(0, process)
        else:
            for process in arrived:
                self.queues.push(0, process)

        for process in arrived:
            process.state = ProcessState.READY
            self.log_event(f"P{process.pid} arrived → Queue 0")

        self.current_level = 0
        return arrived

    def apply_boost(self):
        """우선순위 부스트: 하위 레벨의 프로세스를 모두 레벨 0으로 이동"""
        moved = self.queues.boost()
        self.last_boost_tick = self.tick
        self.current_level = 0
        self.log_event(f"Priority boost (tick {self.tick}): {moved} process(es) → Queue 0")

    def select_level(self) -> int:
        """
        현재 서비스할 레벨 결정

        커서가 가리키는 레벨이 비어 있으면 그 아래의 비어있지 않은 레벨로,
        아래에도 없으면 가장 높은 비어있지 않은 레벨로 이동한다.
        """
        if self.queues[self.current_level]:
            return self.current_level

        level = self.queues.first_non_empty(self.current_level)
        if level is None:
            level = self.queues.first_non_empty(0)
        self.current_level = level
        return level

    def record_trace(self):
        """틱별 큐 상태 스냅샷"""
        snapshot = self.queues.snapshot()
        self.trace.append({
            'tick': self.tick,
            'time': self.current_time,
            'current_level': self.current_level,
            'levels': snapshot,
        })
        for level, pids in enumerate(snapshot):
            queue_str = ', '.join(f"P{pid}" for pid in pids)
            self.log_event(f"tick {self.tick} MLFQ Level {level}: [{queue_str}]")

    def execute_one_step(self) -> bool:
        """한 틱 실행"""
        if self.is_simulation_complete():
            return True

        # 1. 부스트 (유휴 구간에서는 틱이 그대로이므로 같은 틱에 한 번만)
        if self.tick % self.config.boost_interval == 0 and self.tick != self.last_boost_tick:
            self.apply_boost()

        # 2. 프로세스 도착 처리
        self.handle_process_arrival()

        if not self.queues:
            self.advance_to_next_arrival()
            return False

        if self.config.trace:
            self.record_trace()

        # 3. 프로세스 선택
        level = self.select_level()
        process = self.queues.pop(level)

        # 4. CPU 실행
        completed = self.run_process(process, 1)

        # 5. 서비스한 레벨이 비었으면 커서를 한 단계 아래로
        changed = False
        if not self.queues[level] and level + 1 < self.queues.num_levels:
            self.current_level = level + 1
            changed = True

        # 6. 재삽입: 커서가 이미 내려갔거나 최하위면 현재 레벨, 아니면 한 단계 아래
        if not completed:
            if changed or self.current_level >= self.queues.bottom:
                target = self.current_level
            else:
                target = self.current_level + 1

            self.preempt(process)
            self.queues.push(target, process)
            if target > level:
                self.log_event(f"P{process.pid} demoted → Queue {target}")

        self.tick += 1
        return self.is_simulation_complete()

    def get_current_snapshot(self) -> Dict:
        snapshot = super().get_current_snapshot()
        snapshot['queues'] = self.queues.snapshot()
        snapshot['current_level'] = self.current_level
        snapshot['tick'] = self.tick
        return snapshot


def mlfq(workload: Iterable[Process], config: Optional[MLFQConfig] = None) -> List[Process]:
    """MLFQ 실행 후 완료 순서대로 프로세스 반환"""
    return MLFQScheduler(workload, config).run()['processes']
