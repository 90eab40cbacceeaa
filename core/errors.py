"""
시뮬레이터 예외 정의
"""

from typing import Optional


class SchedulerError(Exception):
    """시뮬레이터 예외의 최상위 클래스"""


class EmptyWorkloadError(SchedulerError, ValueError):
    """스케줄링할 프로세스가 하나도 없는 경우"""

    def __init__(self, message: str = "워크로드가 비어있습니다: 최소 1개의 프로세스가 필요합니다"):
        super().__init__(message)


class WorkloadFormatError(SchedulerError, ValueError):
    """
    워크로드 레코드 형식 오류

    어느 라인의 어느 필드가 잘못되었는지를 함께 보관한다.
    """

    def __init__(self, message: str, line_number: Optional[int] = None,
                 field: Optional[str] = None, line: Optional[str] = None):
        self.line_number = line_number
        self.field = field
        self.line = line

        location = []
        if line_number is not None:
            location.append(f"line {line_number}")
        if field is not None:
            location.append(f"field '{field}'")

        if location:
            message = f"{', '.join(location)}: {message}"
        if line is not None:
            message = f"{message} (입력: {line!r})"

        super().__init__(message)


class UnknownAlgorithmError(SchedulerError, ValueError):
    """등록되지 않은 알고리즘 이름"""

    def __init__(self, name: str, available=()):
        self.name = name
        self.available = list(available)
        message = f"알 수 없는 알고리즘: {name!r}"
        if self.available:
            message += f" (사용 가능: {', '.join(self.available)})"
        super().__init__(message)


class ConfigurationError(SchedulerError, ValueError):
    """잘못된 스케줄러 설정값"""
