# factorbt/report/base.py
from __future__ import annotations
from abc import ABC, abstractmethod

from factorbt.pipeline.context import BacktestContext


class Report(ABC):
    """
    Report

    BacktestContext -> side effects (console, files)

    - 只读 ctx.index / ctx.reports
    - 所有数值在 metrics 层算好，Report 只负责呈现
    - 删除任何 Report 不影响结果
    """

    @abstractmethod
    def render(self, ctx: BacktestContext) -> None:
        ...


class ReportPipeline:
    def __init__(self, reports: list[Report]):
        self._reports = reports

    def render_all(self, ctx: BacktestContext) -> None:
        for r in self._reports:
            r.render(ctx)
