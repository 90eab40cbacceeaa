"""
Ready 큐 자료구조
- FIFOQueue: 도착 순서 (FIFO, RR)
- DurationQueue: 서비스 시간 최소 힙 (SJF)
- RemainingTimeQueue: 남은 시간 최소 힙 (STCF)
- ArrivalQueue: 도착 시간 최소 힙 (미도착 프로세스 관리)
- LevelQueues: 단계별 FIFO 큐 배열 (MLFQ)

힙 큐의 동순위 처리 규칙: 키가 같으면 도착 시간이 빠른 프로세스,
도착 시간도 같으면 큐에 먼저 들어온 프로세스가 먼저 나온다.
"""

import heapq
from collections import deque
from itertools import count
from typing import Callable, Deque, Iterator, List, Optional, Tuple

from .process import Process


class FIFOQueue:
    """선입선출 큐"""

    def __init__(self):
        self._queue: Deque[Process] = deque()

    def push(self, process: Process):
        self._queue.append(process)

    def push_front(self, process: Process):
        self._queue.appendleft(process)

    def pop(self) -> Process:
        if not self._queue:
            raise IndexError("pop from an empty ready queue")
        return self._queue.popleft()

    def peek(self) -> Optional[Process]:
        return self._queue[0] if self._queue else None

    def __len__(self):
        return len(self._queue)

    def __bool__(self):
        return bool(self._queue)

    def __iter__(self) -> Iterator[Process]:
        return iter(self._queue)

    def __repr__(self):
        return f"{type(self).__name__}({list(self._queue)!r})"


class PriorityQueue:
    """
    키 함수 기반 최소 힙

    push 시점의 키 값으로 정렬되므로, 키 값이 바뀌는 프로세스는
    pop 후 다시 push 해야 한다.
    """

    def __init__(self, key: Callable[[Process], int]):
        self._key = key
        self._heap: List[Tuple[int, int, int, Process]] = []
        self._counter = count()

    def push(self, process: Process):
        entry = (self._key(process), process.arrival, next(self._counter), process)
        heapq.heappush(self._heap, entry)

    def pop(self) -> Process:
        if not self._heap:
            raise IndexError("pop from an empty ready queue")
        return heapq.heappop(self._heap)[-1]

    def peek(self) -> Optional[Process]:
        return self._heap[0][-1] if self._heap else None

    def __len__(self):
        return len(self._heap)

    def __bool__(self):
        return bool(self._heap)

    def __iter__(self) -> Iterator[Process]:
        # 선택 순서대로 순회
        return (entry[-1] for entry in sorted(self._heap))

    def __repr__(self):
        return f"{type(self).__name__}({list(self)!r})"


class DurationQueue(PriorityQueue):
    """총 서비스 시간이 짧은 순서 (SJF)"""

    def __init__(self):
        super().__init__(key=lambda p: p.duration)


class RemainingTimeQueue(PriorityQueue):
    """남은 서비스 시간이 짧은 순서 (STCF)"""

    def __init__(self):
        super().__init__(key=lambda p: p.remaining_time)


class ArrivalQueue(PriorityQueue):
    """도착 시간이 빠른 순서 (같은 도착 시간은 입력 순서)"""

    def __init__(self):
        super().__init__(key=lambda p: p.arrival)

    def pop_arrived(self, current_time: int) -> List[Process]:
        """현재 시간까지 도착한 프로세스를 모두 꺼냄"""
        arrived = []
        while self._heap and self._heap[0][0] <= current_time:
            arrived.append(self.pop())
        return arrived

    def next_arrival(self) -> Optional[int]:
        return self._heap[0][0] if self._heap else None


class LevelQueues:
    """
    MLFQ 단계별 큐

    레벨 0이 최상위 우선순위, 레벨 num_levels - 1이 최하위이다.
    """

    def __init__(self, num_levels: int):
        if num_levels < 1:
            raise ValueError(f"큐 레벨 수는 1 이상이어야 합니다: {num_levels}")
        self.levels: List[FIFOQueue] = [FIFOQueue() for _ in range(num_levels)]

    @property
    def num_levels(self) -> int:
        return len(self.levels)

    @property
    def bottom(self) -> int:
        return len(self.levels) - 1

    def push(self, level: int, process: Process):
        process.queue_level = level
        self.levels[level].push(process)

    def push_front(self, level: int, process: Process):
        process.queue_level = level
        self.levels[level].push_front(process)

    def pop(self, level: int) -> Process:
        return self.levels[level].pop()

    def boost(self) -> int:
        """
        하위 레벨의 모든 프로세스를 레벨 0으로 이동 (상대 순서 유지)

        Returns:
            이동한 프로세스 수
        """
        moved = 0
        for queue in self.levels[1:]:
            while queue:
                self.push(0, queue.pop())
                moved += 1
        return moved

    def first_non_empty(self, start: int = 0) -> Optional[int]:
        """start 레벨부터 아래로 비어있지 않은 첫 레벨"""
        for level in range(start, len(self.levels)):
            if self.levels[level]:
                return level
        return None

    def snapshot(self) -> List[List[int]]:
        """레벨별 PID 목록"""
        return [[p.pid for p in queue] for queue in self.levels]

    def __iter__(self) -> Iterator[Process]:
        # 상위 레벨부터 순회
        for queue in self.levels:
            yield from queue

    def __len__(self):
        return sum(len(queue) for queue in self.levels)

    def __bool__(self):
        return any(self.levels)

    def __getitem__(self, level: int) -> FIFOQueue:
        return self.levels[level]
