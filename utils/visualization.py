"""
시각화 모듈: 결과 출력, Gantt Chart 및 통계 그래프 생성
"""

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
from typing import List, Dict, Sequence

from core.process import Process
from core.scheduler_base import GanttEntry, avg_turnaround, avg_response


class Visualizer:
    """스케줄링 결과 시각화"""

    def __init__(self):
        # 프로세스별 색상 설정
        self.colors = plt.cm.Set3.colors
        self.idle_color = '#CCCCCC'

    @staticmethod
    def show_processes(processes: Sequence[Process]):
        """완료 순서대로 프로세스 레코드 출력"""
        print("Processes:")
        for p in processes:
            print(f"\tpid={p.pid}, arrival={p.arrival}, duration={p.duration}, "
                  f"first_run={p.first_run}, completion={p.completion}")

    @staticmethod
    def show_metrics(processes: Sequence[Process]):
        """프로세스 레코드와 평균 반환/응답 시간 출력"""
        turnaround = avg_turnaround(processes)
        response = avg_response(processes)
        Visualizer.show_processes(processes)
        print(f"Average Turnaround Time: {turnaround:.2f}")
        print(f"Average Response Time:   {response:.2f}")

    def draw_gantt_chart(self, gantt_data: List[GanttEntry], algorithm_name: str,
                         save_path: str = None, show: bool = False):
        """
        Gantt Chart 그리기

        Args:
            gantt_data: Gantt Chart 데이터
            algorithm_name: 알고리즘 이름
            save_path: 저장 경로 (None이면 저장 안 함)
            show: 화면에 표시할지 여부
        """
        if not gantt_data:
            print(f"{algorithm_name}에 대한 Gantt 차트 데이터가 없습니다")
            return

        fig, ax = plt.subplots(figsize=(16, 6))

        # 프로세스 ID 추출 (유일한 값만)
        unique_pids = sorted(set(entry.pid for entry in gantt_data if not entry.is_idle))
        pid_to_y = {pid: idx for idx, pid in enumerate(unique_pids)}

        for entry in gantt_data:
            duration = entry.end_time - entry.start_time

            if entry.is_idle:
                # CPU 유휴 시간은 모든 행에 걸쳐 음영 처리
                ax.axvspan(entry.start_time, entry.end_time, color=self.idle_color, alpha=0.4)
                continue

            y_pos = pid_to_y[entry.pid]
            color = self.colors[entry.pid % len(self.colors)]
            ax.barh(y_pos, duration, left=entry.start_time, height=0.8,
                    color=color, edgecolor='black', linewidth=0.5)

            # 프로세스 ID 표시
            if duration > 1:  # 충분히 긴 경우만 텍스트 표시
                ax.text(entry.start_time + duration/2, y_pos, f'P{entry.pid}',
                        ha='center', va='center', fontsize=8, fontweight='bold')

        # 축 설정
        ax.set_yticks(range(len(unique_pids)))
        ax.set_yticklabels([f'P{pid}' for pid in unique_pids])
        ax.set_xlabel('Time', fontsize=12)
        ax.set_ylabel('Process', fontsize=12)
        ax.set_title(f'Gantt Chart - {algorithm_name}', fontsize=14, fontweight='bold')
        ax.grid(axis='x', alpha=0.3)

        legend_elements = [
            mpatches.Patch(color=self.colors[1], label='Running'),
            mpatches.Patch(color=self.idle_color, alpha=0.4, label='Idle')
        ]
        ax.legend(handles=legend_elements, loc='upper right')

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"Gantt 차트가 {save_path}에 저장되었습니다")

        if show:
            plt.show()
        else:
            plt.close(fig)

    def compare_algorithms(self, results: List[Dict], save_path: str = None, show: bool = False):
        """
        여러 알고리즘의 성능 비교 그래프

        Args:
            results: 각 알고리즘의 결과 리스트
            save_path: 저장 경로
            show: 화면에 표시할지 여부
        """
        if not results:
            print("비교할 결과가 없습니다")
            return

        algorithms = [r['algorithm'] for r in results]

        panels = [
            ('avg_turnaround_time', 'Average Turnaround Time', 'lightcoral', '{:.2f}'),
            ('avg_response_time', 'Average Response Time', 'skyblue', '{:.2f}'),
            ('avg_waiting_time', 'Average Waiting Time', 'lightgreen', '{:.2f}'),
            ('context_switches', 'Context Switches', 'plum', '{:.0f}'),
        ]

        # 2x2 서브플롯 생성
        fig, axes = plt.subplots(2, 2, figsize=(16, 12))
        fig.suptitle('Scheduling Algorithms Performance Comparison',
                     fontsize=16, fontweight='bold')

        for ax, (key, title, color, fmt) in zip(axes.flat, panels):
            values = [r['statistics'][key] for r in results]
            bars = ax.bar(range(len(algorithms)), values, color=color, edgecolor='black')
            ax.set_xticks(range(len(algorithms)))
            ax.set_xticklabels(algorithms, rotation=45, ha='right', fontsize=9)
            ax.set_ylabel(title, fontsize=11)
            ax.set_title(f'{title} Comparison', fontsize=12, fontweight='bold')
            ax.grid(axis='y', alpha=0.3)

            # 값 표시
            for bar, value in zip(bars, values):
                ax.text(bar.get_x() + bar.get_width()/2., bar.get_height(),
                        fmt.format(value), ha='center', va='bottom', fontsize=9)

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"비교 차트가 {save_path}에 저장되었습니다")

        if show:
            plt.show()
        else:
            plt.close(fig)

    def print_statistics_table(self, results: List[Dict]):
        """
        통계를 표 형식으로 출력

        Args:
            results: 각 알고리즘의 결과 리스트
        """
        print("\n" + "="*110)
        print("스케줄링 알고리즘 성능 비교")
        print("="*110)
        print(f"{'알고리즘':<30} {'평균 반환':>12} {'평균 응답':>12} {'평균 대기':>12} "
              f"{'CPU 이용률(%)':>15} {'문맥전환':>10}")
        print("-"*110)

        for result in results:
            algo = result['algorithm']
            stats = result['statistics']
            print(f"{algo:<30} "
                  f"{stats['avg_turnaround_time']:>12.2f} "
                  f"{stats['avg_response_time']:>12.2f} "
                  f"{stats['avg_waiting_time']:>12.2f} "
                  f"{stats['cpu_utilization']:>15.2f} "
                  f"{stats['context_switches']:>10}")

        print("="*110 + "\n")

    def print_process_details(self, results: Dict):
        """
        개별 프로세스의 상세 정보 출력

        Args:
            results: 알고리즘 실행 결과
        """
        print(f"\n{'='*80}")
        print(f"프로세스 상세 - {results['algorithm']}")
        print(f"{'='*80}")
        print(f"{'PID':<6} {'도착':>8} {'서비스':>8} {'첫 실행':>8} {'완료':>8} "
              f"{'대기':>8} {'반환':>8} {'응답':>8}")
        print(f"{'-'*80}")

        for process in results['processes']:
            print(f"{process.pid:<6} "
                  f"{process.arrival:>8} "
                  f"{process.duration:>8} "
                  f"{process.first_run:>8} "
                  f"{process.completion:>8} "
                  f"{process.waiting_time:>8} "
                  f"{process.turnaround_time:>8} "
                  f"{process.response_time:>8}")

        print(f"{'='*80}\n")
