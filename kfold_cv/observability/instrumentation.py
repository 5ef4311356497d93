#!filepath: kfold_cv/observability/instrumentation.py
from __future__ import annotations

from dataclasses import dataclass
from contextlib import contextmanager
from collections import OrderedDict
from typing import Dict

from kfold_cv.observability.timer import Timer
from kfold_cv.observability.metrics import MetricRecorder
from kfold_cv.observability.timeline_reporter import TimelineReporter


@dataclass
class Instrumentation:
    """
    Leaf-only accounting + parent scope.

    Rules:
    1. the timeline only records leaf timers (record=True)
    2. step-level timers are scope boundaries only (record=False)
    3. record=False timers have no side effects
    """

    enabled: bool = True

    def __post_init__(self):
        self._timer = Timer(enabled=self.enabled)
        self.metrics = MetricRecorder(enabled=self.enabled)

        # leaf name → elapsed seconds
        self.timeline: Dict[str, float] = OrderedDict()

    def timer(self, name: str, *, record: bool = True):
        inst = self

        @contextmanager
        def _ctx():
            if not inst.enabled:
                yield
                return

            inst._timer.start(name)
            try:
                yield
            finally:
                elapsed = inst._timer.end(name)
                if record:
                    inst.timeline[name] = elapsed

        return _ctx()

    def generate_timeline_report(self, run_key: str):
        TimelineReporter(self.timeline, run_key).print()


class NoOpInstrumentation:
    """Used when observability is disabled."""

    def __init__(self):
        self.metrics = MetricRecorder(enabled=False)
        self.timeline: Dict[str, float] = OrderedDict()

    def timer(self, name: str, *, record: bool = True):
        return _NoOpTimer()

    def generate_timeline_report(self, run_key: str):
        pass


class _NoOpTimer:
    def __enter__(self):
        pass

    def __exit__(self, exc_type, exc, tb):
        pass
