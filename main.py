#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CPU 스케줄링 시뮬레이터 - 메인 실행 파일

사용법: python main.py [fifo|sjf|stcf|rr|mlfq|all] workload_file [옵션]
"""

import argparse
import os
import sys

from core.errors import SchedulerError
from schedulers import ALGORITHMS, run_algorithm
from schedulers.advanced_schedulers import DEFAULT_BOOST_INTERVAL, DEFAULT_NUM_LEVELS
from utils.input_parser import InputParser
from utils.visualization import Visualizer

USAGE = "usage: python main.py [fifo|sjf|stcf|rr|mlfq|all] workload_file"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="main.py",
        description="CPU 스케줄링 정책 시뮬레이터",
    )
    parser.add_argument('algorithm', help="fifo, sjf, stcf, rr, mlfq 또는 all")
    parser.add_argument('workload_file', help="워크로드 파일 (한 줄에 'arrival duration')")
    parser.add_argument('--boost', type=int, default=DEFAULT_BOOST_INTERVAL,
                        help=f"MLFQ 부스트 주기 (기본값 {DEFAULT_BOOST_INTERVAL})")
    parser.add_argument('--levels', type=int, default=DEFAULT_NUM_LEVELS,
                        help=f"MLFQ 큐 레벨 수 (기본값 {DEFAULT_NUM_LEVELS})")
    parser.add_argument('--trace', action='store_true',
                        help="MLFQ 틱별 큐 상태 기록")
    parser.add_argument('--back-admission', action='store_true',
                        help="MLFQ에서 새 프로세스를 레벨 0 큐의 맨 뒤에 삽입")
    parser.add_argument('--verbose', '-v', action='store_true',
                        help="이벤트 로그 출력")
    parser.add_argument('--charts', metavar='DIR', default=None,
                        help="Gantt/비교 차트와 결과 파일을 저장할 디렉토리")
    return parser


def algorithm_params(algorithm_key: str, args) -> dict:
    """알고리즘별 설정값 (MLFQ만 설정을 받음)"""
    if algorithm_key != 'mlfq':
        return {}
    return {
        'boost_interval': args.boost,
        'num_levels': args.levels,
        'trace': args.trace,
        'front_admission': not args.back_admission,
    }


def run_single_algorithm(algorithm_key, processes, args):
    """단일 알고리즘 실행 및 결과 출력"""
    algo_info = ALGORITHMS[algorithm_key]

    print(f"\n{'='*80}")
    print(f"실행 중: {algo_info['name']}")
    print(f"{'='*80}\n")

    result = run_algorithm(algorithm_key, processes, verbose=args.verbose,
                           **algorithm_params(algorithm_key, args))
    if algorithm_key == 'mlfq' and args.trace and not args.verbose:
        # verbose면 이벤트 로그 전체가 이미 출력됨
        for line in result['event_log']:
            if "MLFQ Level" in line:
                print(line)
    Visualizer.show_metrics(result['processes'])
    return result


def run_all_algorithms(processes, args):
    """모든 알고리즘 실행"""
    results = []

    for index, key in enumerate(ALGORITHMS, 1):
        print(f"[{index}/{len(ALGORITHMS)}] {ALGORITHMS[key]['name']}")
        results.append(run_single_algorithm(key, processes, args))

    Visualizer().print_statistics_table(results)
    return results


def save_results(results, output_dir):
    """Gantt 차트, 비교 차트, 상세 결과 저장"""
    os.makedirs(output_dir, exist_ok=True)

    visualizer = Visualizer()

    for result in results:
        save_path = os.path.join(output_dir, f"gantt_{result['algorithm'].replace(' ', '_')}.png")
        visualizer.draw_gantt_chart(result['gantt_chart'], result['algorithm'],
                                    save_path=save_path, show=False)

    # 비교 그래프 (2개 이상일 때만)
    if len(results) > 1:
        visualizer.compare_algorithms(results, save_path=os.path.join(output_dir, "comparison.png"),
                                      show=False)

    save_results_to_file(results, os.path.join(output_dir, "results.txt"))


def save_results_to_file(results, filename):
    """결과를 텍스트 파일로 저장"""
    with open(filename, 'w', encoding='utf-8') as f:
        f.write("="*100 + "\n")
        f.write("CPU 스케줄링 시뮬레이션 결과\n")
        f.write("="*100 + "\n\n")

        for result in results:
            stats = result['statistics']
            f.write(f"알고리즘: {result['algorithm']}\n")
            f.write(f"{'PID':<6} {'arrival':>8} {'duration':>9} {'first_run':>10} {'completion':>11}\n")
            for process in result['processes']:
                f.write(f"{process.pid:<6} {process.arrival:>8} {process.duration:>9} "
                        f"{process.first_run:>10} {process.completion:>11}\n")
            f.write(f"Average Turnaround Time: {stats['avg_turnaround_time']:.2f}\n")
            f.write(f"Average Response Time:   {stats['avg_response_time']:.2f}\n\n")

    print(f"[완료] 결과가 {filename}에 저장되었습니다")


def main(argv=None) -> int:
    """메인 함수"""
    args = build_parser().parse_args(argv)
    algorithm = args.algorithm.lower()

    if algorithm != 'all' and algorithm not in ALGORITHMS:
        print(f"Error: Unknown algorithm: {args.algorithm}")
        print(USAGE)
        return 2

    try:
        processes = InputParser.parse_file(args.workload_file)
    except FileNotFoundError:
        print(f"[오류] 파일 '{args.workload_file}'을 찾을 수 없습니다")
        return 1
    except SchedulerError as e:
        print(f"[오류] 워크로드 파싱 실패: {e}")
        return 1

    try:
        if algorithm == 'all':
            results = run_all_algorithms(processes, args)
        else:
            results = [run_single_algorithm(algorithm, processes, args)]
    except SchedulerError as e:
        print(f"[오류] 시뮬레이션 실패: {e}")
        return 1

    if args.charts:
        save_results(results, args.charts)

    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\n사용자에 의해 시뮬레이션이 중단되었습니다.")
        sys.exit(130)
