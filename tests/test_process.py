import pytest

from core.errors import EmptyWorkloadError
from core.process import Process, ProcessState, clone_workload, create_process_copy


def test_new_process_is_unset():
    p = Process(1, 2, 5)
    assert p.arrival == 2
    assert p.duration == 5
    assert p.remaining_time == 5
    assert p.first_run is None
    assert p.completion is None
    assert p.state == ProcessState.NEW
    assert not p.has_run


def test_arrival_and_duration_are_read_only():
    p = Process(1, 0, 3)
    with pytest.raises(AttributeError):
        p.arrival = 4
    with pytest.raises(AttributeError):
        p.duration = 1


@pytest.mark.parametrize("arrival, duration", [(-1, 3), (0, 0), (0, -2)])
def test_invalid_process_rejected(arrival, duration):
    with pytest.raises(ValueError):
        Process(1, arrival, duration)


def test_first_run_is_set_once():
    p = Process(1, 0, 3)
    p.mark_first_run(4)
    p.mark_first_run(7)
    assert p.first_run == 4


def test_execute_until_completion():
    p = Process(1, 0, 3)
    assert p.execute(1) is False
    assert p.execute(2) is True
    assert p.remaining_time == 0
    with pytest.raises(ValueError):
        p.execute(1)


def test_execute_more_than_remaining_rejected():
    p = Process(1, 0, 2)
    with pytest.raises(ValueError):
        p.execute(3)
    assert p.remaining_time == 2


def test_complete_requires_zero_remaining_and_only_once():
    p = Process(1, 1, 2)
    with pytest.raises(ValueError):
        p.complete(3)

    p.mark_first_run(1)
    p.execute(2)
    p.complete(3)
    assert p.state == ProcessState.TERMINATED
    assert p.turnaround_time == 2
    assert p.response_time == 0
    assert p.waiting_time == 0
    with pytest.raises(ValueError):
        p.complete(5)


def test_clone_workload_sorts_stably_and_does_not_mutate_input():
    original = [Process(1, 3, 1), Process(2, 0, 4), Process(3, 3, 2), Process(4, 0, 1)]
    original[0].mark_first_run(9)

    cloned = clone_workload(original)

    assert [p.pid for p in cloned] == [2, 4, 1, 3]
    assert all(c is not o for c in cloned for o in original)
    assert cloned[2].first_run is None
    assert original[0].first_run == 9


def test_clone_empty_workload_rejected():
    with pytest.raises(EmptyWorkloadError):
        clone_workload([])


def test_create_process_copy_is_independent():
    p = Process(1, 0, 3)
    copy = create_process_copy(p)
    copy.execute(1)
    assert p.remaining_time == 3
