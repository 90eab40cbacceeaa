import pytest

from core.scheduler_base import SchedulerStats, avg_response, avg_turnaround, avg_waiting
from schedulers import fifo, stcf, FIFOScheduler
from helpers import make_workload


def test_fifo_averages():
    completed = fifo(make_workload([(0, 5), (1, 3)]))
    assert avg_turnaround(completed) == pytest.approx((5 + 7) / 2)
    assert avg_response(completed) == pytest.approx((0 + 4) / 2)
    assert avg_waiting(completed) == pytest.approx((0 + 4) / 2)


def test_averages_tolerate_any_completion_order():
    completed = stcf(make_workload([(0, 8), (1, 4)]))
    assert avg_turnaround(list(reversed(completed))) == avg_turnaround(completed)
    assert avg_turnaround(completed) == pytest.approx((12 + 4) / 2)
    assert avg_response(completed) == pytest.approx(0.0)


def test_metrics_are_idempotent():
    completed = fifo(make_workload([(0, 3), (2, 6), (4, 4)]))
    assert avg_turnaround(completed) == avg_turnaround(completed)
    assert avg_response(completed) == avg_response(completed)
    assert [p.completion for p in completed] == [3, 9, 13]


def test_empty_sequence_averages_to_zero():
    assert avg_turnaround([]) == 0.0
    assert avg_response([]) == 0.0
    assert avg_waiting([]) == 0.0


def test_statistics_from_scheduler_results():
    scheduler = FIFOScheduler(make_workload([(0, 2), (4, 2)]))
    stats = scheduler.run()['statistics']

    assert stats['avg_turnaround_time'] == pytest.approx(2.0)
    assert stats['cpu_utilization'] == pytest.approx(4 / 6 * 100)
    assert stats['context_switches'] == 1

    # 재계산해도 값이 누적되지 않음
    assert scheduler.get_results()['statistics'] == stats


def test_empty_stats_have_zero_utilization():
    assert SchedulerStats().calculate_averages()['cpu_utilization'] == 0
