"""
입력 데이터 파서 및 프로세스 생성 모듈
"""

import random
from typing import Iterable, List, Optional

from core.errors import EmptyWorkloadError, WorkloadFormatError
from core.process import Process, sort_workload

FIELDS = ('arrival', 'duration')


class InputParser:
    """워크로드 파일 파서"""

    @staticmethod
    def parse_file(filename: str) -> List[Process]:
        """
        워크로드 파일에서 프로세스 정보 읽기

        파일 형식: 한 줄에 프로세스 하나, "도착시간 서비스시간"
        예: 0 5

        Args:
            filename: 입력 파일 경로

        Returns:
            도착 시간 순으로 정렬된 프로세스 리스트

        Raises:
            WorkloadFormatError: 형식이 잘못된 라인이 있는 경우
            EmptyWorkloadError: 프로세스가 하나도 없는 경우
        """
        with open(filename, 'r', encoding='utf-8') as f:
            return InputParser.parse_lines(f)

    @staticmethod
    def parse_lines(lines: Iterable[str]) -> List[Process]:
        """
        라인 목록 파싱 (빈 줄과 '#' 주석은 무시)

        PID는 입력 순서대로 1부터 부여되며, 결과는 도착 시간 기준으로
        안정 정렬된다.
        """
        processes = []

        for line_number, raw_line in enumerate(lines, 1):
            line = raw_line.strip()

            # 주석 및 빈 줄 제거
            if not line or line.startswith('#'):
                continue

            arrival, duration = InputParser._parse_line(line, line_number)
            processes.append(Process(len(processes) + 1, arrival, duration))

        if not processes:
            raise EmptyWorkloadError("워크로드에 프로세스가 없습니다")

        return sort_workload(processes)

    @staticmethod
    def _parse_line(line: str, line_number: Optional[int] = None):
        """한 라인을 (도착시간, 서비스시간)으로 변환"""
        parts = line.split()
        if len(parts) != len(FIELDS):
            raise WorkloadFormatError(
                f"2개 필드(arrival duration)가 필요하지만 {len(parts)}개가 있습니다",
                line_number=line_number, line=line)

        values = []
        for field, text in zip(FIELDS, parts):
            try:
                value = int(text)
            except ValueError:
                raise WorkloadFormatError(f"정수가 아닙니다: {text!r}",
                                          line_number=line_number, field=field,
                                          line=line) from None
            values.append(value)

        arrival, duration = values

        # 검증: 음수 및 0 체크
        if arrival < 0:
            raise WorkloadFormatError(f"도착 시간은 0 이상이어야 합니다: {arrival}",
                                      line_number=line_number, field='arrival', line=line)
        if duration <= 0:
            raise WorkloadFormatError(f"서비스 시간은 양수여야 합니다: {duration}",
                                      line_number=line_number, field='duration', line=line)

        return arrival, duration

    @staticmethod
    def generate_random_processes(num_processes: int = 10,
                                  max_arrival: int = 20,
                                  max_duration: int = 10,
                                  seed: int = None) -> List[Process]:
        """
        랜덤 프로세스 생성

        Args:
            num_processes: 생성할 프로세스 수
            max_arrival: 최대 도착 시간
            max_duration: 최대 서비스 시간
            seed: 랜덤 시드

        Returns:
            도착 시간 순으로 정렬된 프로세스 리스트
        """
        if num_processes < 1:
            raise EmptyWorkloadError(f"프로세스 수는 1 이상이어야 합니다: {num_processes}")

        rng = random.Random(seed)

        processes = [
            Process(pid, rng.randint(0, max_arrival), rng.randint(1, max_duration))
            for pid in range(1, num_processes + 1)
        ]
        return sort_workload(processes)

    @staticmethod
    def save_processes_to_file(processes: List[Process], filename: str):
        """
        프로세스 리스트를 워크로드 파일로 저장

        Args:
            processes: 저장할 프로세스 리스트
            filename: 출력 파일 경로
        """
        with open(filename, 'w', encoding='utf-8') as f:
            f.write("# CPU Scheduling Simulator Workload\n")
            f.write("# Format: arrival duration\n")

            for process in processes:
                f.write(f"{process.arrival} {process.duration}\n")

    @staticmethod
    def print_process_summary(processes: List[Process]):
        """프로세스 요약 정보 출력"""
        print("\n" + "="*50)
        print("프로세스 요약")
        print("="*50)
        print(f"{'PID':<6} {'도착시간':>10} {'서비스시간':>12}")
        print("-"*50)

        for p in sorted(processes, key=lambda x: x.pid):
            print(f"{p.pid:<6} {p.arrival:>10} {p.duration:>12}")

        print("="*50)
        print(f"전체 프로세스: {len(processes)}개, "
              f"총 서비스 시간: {sum(p.duration for p in processes)}\n")
