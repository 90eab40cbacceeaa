import pytest
from fastapi.testclient import TestClient

from web.backend.app import app


@pytest.fixture
def client():
    return TestClient(app)


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["version"] == "1.0.0"


def test_algorithms_listing(client):
    algorithms = client.get("/algorithms").json()["algorithms"]
    assert [a["id"] for a in algorithms] == ["fifo", "sjf", "stcf", "rr", "mlfq"]
    assert {a["id"]: a["preemptive"] for a in algorithms} == {
        "fifo": False, "sjf": False, "stcf": True, "rr": True, "mlfq": True}


def test_simulate_stcf(client):
    response = client.post("/simulate", json={
        "processes": [{"arrival": 0, "duration": 8}, {"arrival": 1, "duration": 4}],
        "algorithms": ["stcf"],
    })
    assert response.status_code == 200

    (result,) = response.json()["results"]
    assert result["algorithm"] == "STCF"
    assert [(p["pid"], p["first_run"], p["completion"]) for p in result["processes"]] == [
        (2, 1, 5), (1, 0, 12)
    ]
    assert result["statistics"]["avg_turnaround_time"] == pytest.approx(8.0)


def test_simulate_mlfq_options(client):
    response = client.post("/simulate", json={
        "processes": [{"arrival": 0, "duration": 2}, {"arrival": 0, "duration": 2},
                      {"arrival": 1, "duration": 1}],
        "algorithms": ["mlfq"],
        "mlfq": {"front_admission": False, "trace": True},
    })
    assert response.status_code == 200

    result = response.json()["results"][0]
    assert [p["completion"] for p in result["processes"]] == [3, 4, 5]
    assert any("MLFQ Level 0" in line for line in result["event_log"])


def test_compare(client):
    response = client.post("/simulate/compare", json={
        "processes": [{"arrival": 0, "duration": 3}, {"arrival": 0, "duration": 3}],
        "algorithms": ["fifo", "rr"],
    })
    comparison = response.json()["comparison"]
    assert comparison["algorithms"] == ["FIFO", "Round Robin"]
    assert comparison["avg_turnaround_time"] == [pytest.approx(4.5), pytest.approx(5.5)]


def test_unknown_algorithm_is_bad_request(client):
    response = client.post("/simulate", json={
        "processes": [{"arrival": 0, "duration": 1}],
        "algorithms": ["lottery"],
    })
    assert response.status_code == 400
    assert "lottery" in response.json()["detail"]


def test_empty_workload_is_bad_request(client):
    response = client.post("/simulate", json={"processes": [], "algorithms": ["fifo"]})
    assert response.status_code == 400


@pytest.mark.parametrize("process", [{"arrival": -1, "duration": 1},
                                     {"arrival": 0, "duration": 0}])
def test_invalid_process_fails_validation(client, process):
    response = client.post("/simulate", json={"processes": [process], "algorithms": ["fifo"]})
    assert response.status_code == 422


def test_sample_workloads_are_runnable(client):
    samples = client.get("/sample-workloads").json()["samples"]
    for sample in samples:
        response = client.post("/simulate", json={
            "processes": sample["processes"],
            "algorithms": ["fifo", "sjf", "stcf", "rr", "mlfq"],
        })
        assert response.status_code == 200


def test_realtime_websocket_steps_until_complete(client):
    with client.websocket_connect("/ws/realtime") as websocket:
        websocket.send_json({
            "action": "init",
            "algorithm": "rr",
            "processes": [{"arrival": 0, "duration": 2}, {"arrival": 0, "duration": 1}],
        })
        assert websocket.receive_json() == {
            "type": "initialized", "algorithm": "Round Robin", "process_count": 2
        }

        websocket.send_json({"action": "step"})
        first = websocket.receive_json()
        assert first["type"] == "step_result"
        assert first["complete"] is False
        assert first["last_run"] == {"pid": 1, "remaining": 1}

        websocket.send_json({"action": "run", "speed": 1000})
        messages = [websocket.receive_json(), websocket.receive_json()]
        assert messages[-1]["complete"] is True
        assert messages[-1]["stats"]["final"]["avg_turnaround_time"] == pytest.approx(2.5)


def test_realtime_websocket_reports_errors(client):
    with client.websocket_connect("/ws/realtime") as websocket:
        websocket.send_json({"action": "step"})
        assert websocket.receive_json()["type"] == "error"

        websocket.send_json({"action": "init", "algorithm": "lottery",
                             "processes": [{"arrival": 0, "duration": 1}]})
        assert "lottery" in websocket.receive_json()["message"]


def test_realtime_websocket_rejects_malformed_process_entries(client):
    with client.websocket_connect("/ws/realtime") as websocket:
        websocket.send_json({"action": "init", "algorithm": "fifo", "processes": [5]})
        assert websocket.receive_json()["type"] == "error"

        # 연결은 유지됨
        websocket.send_json({"action": "init", "algorithm": "fifo",
                             "processes": [{"arrival": 0, "duration": 1}]})
        assert websocket.receive_json()["type"] == "initialized"
