#!filepath: kfold_cv/observability/timeline_reporter.py
from typing import Dict
from kfold_cv import logs


class TimelineReporter:
    """
    Run timeline: leaf timer → seconds
    """

    def __init__(self, timeline: Dict[str, float], run_key: str):
        self.timeline = timeline
        self.run_key = run_key

    def print(self):
        logs.info(f"[Timeline] ===== Cross-validation timeline for {self.run_key} =====")

        total = 0.0
        for name, sec in self.timeline.items():
            logs.info(f"[Timeline] {str(name):<30} {sec:>8.3f}s")
            total += sec

        logs.info(f"[Timeline] Total{'':<27} {total:>8.3f}s")
        logs.info("[Timeline] ===========================================")
