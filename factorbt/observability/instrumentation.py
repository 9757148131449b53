#!filepath: factorbt/observability/instrumentation.py
from __future__ import annotations

from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass
from time import perf_counter
from typing import Dict

from factorbt import logs


@dataclass
class Instrumentation:
    """
    Step 计时（Leaf-only accounting）

    - timeline 只记录 record=True 的叶子节点
    - record=False 仅定义 wall-time 边界，不产生副作用
    - Instrumentation 本身不在热路径打日志
    """

    enabled: bool = True

    def __post_init__(self):
        self.timeline: Dict[str, float] = OrderedDict()

    def timer(self, name: str, *, record: bool = True):
        inst = self

        @contextmanager
        def _ctx():
            if not inst.enabled:
                yield
                return

            start = perf_counter()
            try:
                yield
            finally:
                elapsed = perf_counter() - start
                if record:
                    inst.timeline[name] = elapsed

        return _ctx()

    def report_timeline(self, run_name: str) -> None:
        logs.info(f"[Timeline] ===== {run_name} =====")

        total = 0.0
        for name, sec in self.timeline.items():
            logs.info(f"[Timeline] {name:<30} {sec:>8.3f}s")
            total += sec

        logs.info(f"[Timeline] Total{'':<27} {total:>8.3f}s")


class NoOpInstrumentation:
    """Instrumentation disabled 时使用。"""

    timeline: Dict[str, float] = {}

    def timer(self, name: str, *, record: bool = True):
        return _NoOpTimer()

    def report_timeline(self, run_name: str) -> None:
        pass


class _NoOpTimer:
    def __enter__(self):
        pass

    def __exit__(self, exc_type, exc, tb):
        pass
