from core.process import Process


def make_workload(pairs):
    """(arrival, duration) 목록으로 프로세스 생성 (PID는 입력 순서)"""
    return [Process(pid, arrival, duration) for pid, (arrival, duration) in enumerate(pairs, 1)]


def timeline(processes):
    """완료 순서대로 (pid, first_run, completion)"""
    return [(p.pid, p.first_run, p.completion) for p in processes]
