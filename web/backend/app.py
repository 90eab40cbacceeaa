"""
CPU 스케줄러 시뮬레이터 - FastAPI 백엔드
"""

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import List, Optional, Dict
import asyncio

from core.errors import SchedulerError
from core.process import Process
from schedulers import ALGORITHMS, get_scheduler_class
from schedulers.advanced_schedulers import DEFAULT_BOOST_INTERVAL, DEFAULT_NUM_LEVELS

app = FastAPI(
    title="CPU Scheduler Simulator",
    description="FIFO, SJF, STCF, RR, MLFQ 스케줄링 정책 시뮬레이터",
    version="1.0.0"
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Pydantic 모델
class ProcessInput(BaseModel):
    arrival: int = Field(ge=0)
    duration: int = Field(gt=0)


class MLFQOptions(BaseModel):
    boost_interval: int = Field(default=DEFAULT_BOOST_INTERVAL, ge=1)
    num_levels: int = Field(default=DEFAULT_NUM_LEVELS, ge=1)
    trace: bool = False
    front_admission: bool = True


class SimulationRequest(BaseModel):
    processes: List[ProcessInput]
    algorithms: List[str]
    mlfq: MLFQOptions = MLFQOptions()


class GanttEntry(BaseModel):
    pid: int
    start_time: int
    end_time: int
    state: str


class ProcessResult(BaseModel):
    pid: int
    arrival: int
    duration: int
    first_run: int
    completion: int
    turnaround_time: int
    response_time: int
    waiting_time: int


class SimulationResult(BaseModel):
    algorithm: str
    gantt_chart: List[GanttEntry]
    processes: List[ProcessResult]
    statistics: Dict[str, float]
    event_log: List[str]


class SimulationResponse(BaseModel):
    success: bool
    results: List[SimulationResult]


class ComparisonResponse(SimulationResponse):
    comparison: Dict[str, List]


def create_process_objects(process_inputs: List[ProcessInput]) -> List[Process]:
    """ProcessInput을 Process 객체로 변환 (PID는 입력 순서)"""
    return [
        Process(pid, p.arrival, p.duration)
        for pid, p in enumerate(process_inputs, 1)
    ]


def create_scheduler(processes: List[Process], algorithm: str, mlfq: MLFQOptions):
    scheduler_class = get_scheduler_class(algorithm)
    params = mlfq.model_dump() if algorithm.strip().lower() == 'mlfq' else {}
    return scheduler_class(processes, **params)


def run_scheduler(processes: List[Process], algorithm: str, mlfq: MLFQOptions) -> Dict:
    """스케줄러 실행 및 결과 반환"""
    result = create_scheduler(processes, algorithm, mlfq).run()

    return {
        'algorithm': result['algorithm'],
        'gantt_chart': [entry.to_dict() for entry in result['gantt_chart']],
        'processes': [p.to_dict() for p in result['processes']],
        'statistics': result['statistics'],
        'event_log': result['event_log']
    }


def simulate_all(request: SimulationRequest) -> List[Dict]:
    try:
        processes = create_process_objects(request.processes)
        return [run_scheduler(processes, algorithm, request.mlfq)
                for algorithm in request.algorithms]
    except SchedulerError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/")
async def root():
    return {"message": "CPU Scheduler Simulator API", "version": app.version}


@app.get("/algorithms")
async def get_algorithms():
    """사용 가능한 알고리즘 목록 반환"""
    return {
        "algorithms": [
            {"id": key, "name": info['name'], "preemptive": info['class'].preemptive}
            for key, info in ALGORITHMS.items()
        ]
    }


@app.post("/simulate", response_model=SimulationResponse)
async def simulate(request: SimulationRequest):
    """스케줄링 시뮬레이션 실행"""
    return {"success": True, "results": simulate_all(request)}


@app.post("/simulate/compare", response_model=ComparisonResponse)
async def compare_algorithms(request: SimulationRequest):
    """여러 알고리즘 비교 시뮬레이션"""
    results = simulate_all(request)

    comparison = {
        'algorithms': [],
        'avg_turnaround_time': [],
        'avg_response_time': [],
        'avg_waiting_time': [],
        'context_switches': []
    }
    for result in results:
        stats = result['statistics']
        comparison['algorithms'].append(result['algorithm'])
        for key in ('avg_turnaround_time', 'avg_response_time', 'avg_waiting_time',
                    'context_switches'):
            comparison[key].append(stats[key])

    return {"success": True, "results": results, "comparison": comparison}


# WebSocket을 통한 실시간 시뮬레이션
class RealtimeSimulator:
    def __init__(self, processes: List[Process], algorithm: str,
                 mlfq: Optional[MLFQOptions] = None):
        self.algorithm = algorithm
        self.scheduler = create_scheduler(processes, algorithm, mlfq or MLFQOptions())
        self.is_complete = False
        self.last_gantt_index = 0
        self.last_log_index = 0

    def step(self) -> Dict:
        """한 스텝 실행 및 상태 반환"""
        if self.is_complete:
            return {'complete': True}

        is_complete = self.scheduler.execute_one_step()

        # 새로운 Gantt 엔트리 (마지막 엔트리는 병합으로 늘어날 수 있으므로 다시 전송)
        gantt_chart = self.scheduler.gantt_chart
        start = max(0, self.last_gantt_index - 1)
        new_gantt = [entry.to_dict() for entry in gantt_chart[start:]]
        self.last_gantt_index = len(gantt_chart)

        # 새로운 로그
        new_logs = self.scheduler.event_log[self.last_log_index:]
        self.last_log_index = len(self.scheduler.event_log)

        snapshot = self.scheduler.get_current_snapshot()
        last_run = self.scheduler.previous_process

        stats = {
            'current_time': self.scheduler.current_time,
            'context_switches': self.scheduler.stats.context_switches,
            'cpu_busy_time': self.scheduler.stats.cpu_busy_time,
            'completed': len(self.scheduler.terminated_processes),
            'total': len(self.scheduler.processes)
        }

        if is_complete:
            self.is_complete = True
            self.scheduler.update_statistics()
            stats['final'] = self.scheduler.stats.calculate_averages()

        return {
            'complete': is_complete,
            'last_run': {'pid': last_run.pid, 'remaining': last_run.remaining_time}
                        if last_run else None,
            'ready_queue': [{'pid': p.pid, 'remaining': p.remaining_time}
                            for p in snapshot['ready_queue']],
            'queues': snapshot.get('queues'),
            'new_gantt': new_gantt,
            'new_logs': new_logs,
            'stats': stats
        }


@app.websocket("/ws/realtime")
async def websocket_realtime(websocket: WebSocket):
    """실시간 시뮬레이션 WebSocket 엔드포인트"""
    await websocket.accept()
    simulator = None

    try:
        while True:
            message = await websocket.receive_json()
            action = message.get('action')

            try:
                if action == 'init':
                    processes = create_process_objects(
                        [ProcessInput(**p) for p in message['processes']])
                    simulator = RealtimeSimulator(
                        processes,
                        message['algorithm'],
                        MLFQOptions(**message.get('mlfq', {}))
                    )
                    await websocket.send_json({
                        'type': 'initialized',
                        'algorithm': simulator.scheduler.name,
                        'process_count': len(processes)
                    })

                elif action in ('step', 'run'):
                    if simulator is None:
                        await websocket.send_json({'type': 'error',
                                                   'message': "init을 먼저 요청하세요"})
                        continue

                    # run: 완료될 때까지 자동 실행 (속도 조절 가능)
                    speed = float(message.get('speed', 1.0))
                    if speed <= 0:
                        raise ValueError(f"speed는 양수여야 합니다: {speed}")
                    delay = 1.0 / speed if action == 'run' else 0
                    while True:
                        result = simulator.step()
                        await websocket.send_json({'type': 'step_result', **result})
                        if action == 'step' or result['complete']:
                            break
                        await asyncio.sleep(delay)

                else:
                    await websocket.send_json({'type': 'error',
                                               'message': f"알 수 없는 action: {action!r}"})

            except (SchedulerError, ValueError, KeyError, TypeError) as e:
                await websocket.send_json({'type': 'error', 'message': str(e)})

    except WebSocketDisconnect:
        pass


@app.get("/sample-workloads")
async def get_sample_workloads():
    """샘플 워크로드 반환"""
    return {
        "samples": [
            {
                "name": "FIFO 기본 (2개 프로세스)",
                "processes": [{"arrival": 0, "duration": 5}, {"arrival": 1, "duration": 3}]
            },
            {
                "name": "STCF 선점 (긴 작업 뒤에 짧은 작업 도착)",
                "processes": [{"arrival": 0, "duration": 8}, {"arrival": 1, "duration": 4}]
            },
            {
                "name": "Round Robin 공정성 (동시 도착)",
                "processes": [{"arrival": 0, "duration": 3}, {"arrival": 0, "duration": 3}]
            },
            {
                "name": "MLFQ 강등/부스트 (장기 실행 작업)",
                "processes": [{"arrival": 0, "duration": 15}, {"arrival": 2, "duration": 2},
                              {"arrival": 4, "duration": 1}]
            }
        ]
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
