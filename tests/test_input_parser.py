import pytest

from core.errors import EmptyWorkloadError, WorkloadFormatError
from utils.input_parser import InputParser


def test_parse_file_sorts_stably_by_arrival(workload_file):
    path = workload_file("3 2\n0 5\n# comment\n\n3 1\n1 4\n")
    processes = InputParser.parse_file(path)

    assert [(p.pid, p.arrival, p.duration) for p in processes] == [
        (2, 0, 5), (4, 1, 4), (1, 3, 2), (3, 3, 1)
    ]


def test_parse_lines_accepts_extra_whitespace():
    processes = InputParser.parse_lines(["  0\t 5  ", "2   3"])
    assert [(p.arrival, p.duration) for p in processes] == [(0, 5), (2, 3)]


@pytest.mark.parametrize("line, field", [
    ("x 5", "arrival"),
    ("0 five", "duration"),
    ("-1 5", "arrival"),
    ("0 0", "duration"),
    ("0 -3", "duration"),
    ("1.5 2", "arrival"),
])
def test_malformed_field_reports_line_and_field(line, field):
    with pytest.raises(WorkloadFormatError) as exc_info:
        InputParser.parse_lines(["0 1", "# skip", line])

    error = exc_info.value
    assert error.line_number == 3
    assert error.field == field
    assert error.line == line
    assert "line 3" in str(error)
    assert f"field '{field}'" in str(error)


@pytest.mark.parametrize("line", ["5", "1 2 3"])
def test_wrong_field_count_rejected(line):
    with pytest.raises(WorkloadFormatError) as exc_info:
        InputParser.parse_lines([line])
    assert exc_info.value.line_number == 1
    assert exc_info.value.field is None


def test_format_error_is_a_value_error():
    with pytest.raises(ValueError):
        InputParser.parse_lines(["a b"])


def test_empty_workload_rejected(workload_file):
    with pytest.raises(EmptyWorkloadError):
        InputParser.parse_file(workload_file("# nothing here\n\n"))


def test_missing_file_raises():
    with pytest.raises(FileNotFoundError):
        InputParser.parse_file("/nonexistent/workload.txt")


def test_random_processes_are_reproducible():
    first = InputParser.generate_random_processes(num_processes=6, seed=42)
    second = InputParser.generate_random_processes(num_processes=6, seed=42)

    assert [(p.pid, p.arrival, p.duration) for p in first] == \
           [(p.pid, p.arrival, p.duration) for p in second]
    assert [p.arrival for p in first] == sorted(p.arrival for p in first)
    assert all(p.duration >= 1 for p in first)


def test_saved_workload_parses_back(tmp_path):
    processes = InputParser.generate_random_processes(num_processes=5, seed=1)
    path = tmp_path / "saved.txt"
    InputParser.save_processes_to_file(processes, str(path))

    loaded = InputParser.parse_file(str(path))
    assert [(p.arrival, p.duration) for p in loaded] == \
           [(p.arrival, p.duration) for p in processes]


def test_print_process_summary(capsys):
    InputParser.print_process_summary(InputParser.parse_lines(["0 5", "1 3"]))
    out = capsys.readouterr().out
    assert "전체 프로세스: 2개" in out
    assert "총 서비스 시간: 8" in out
