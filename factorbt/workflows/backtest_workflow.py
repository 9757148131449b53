#!filepath: factorbt/workflows/backtest_workflow.py
from __future__ import annotations

from typing import Optional

from factorbt import logs
from factorbt.config.app_config import AppConfig
from factorbt.core.panel import Panel
from factorbt.observability.instrumentation import Instrumentation
from factorbt.pipeline.context import BacktestContext
from factorbt.pipeline.pipeline import BacktestPipeline
from factorbt.report.base import Report
from factorbt.steps.benchmark_step import BenchmarkStep
from factorbt.steps.load_panel_step import LoadPanelStep
from factorbt.steps.performance_step import PerformanceStep
from factorbt.steps.report_step import ReportStep
from factorbt.steps.return_step import ReturnStep
from factorbt.steps.selection_step import SelectionStep


def build_backtest_pipeline(
    inst: Optional[Instrumentation] = None,
    console_report: Optional[Report] = None,
) -> BacktestPipeline:
    return BacktestPipeline(
        steps=[
            LoadPanelStep(inst=inst),
            ReturnStep(inst=inst),
            BenchmarkStep(inst=inst),
            SelectionStep(inst=inst),
            PerformanceStep(inst=inst),
            ReportStep(console_report=console_report, inst=inst),
        ],
        inst=inst,
    )


@logs.catch(msg="backtest failed")
def run_backtest(
    cfg: AppConfig,
    panel: Optional[Panel] = None,
    console_report: Optional[Report] = None,
) -> BacktestContext:
    """
    一次完整查询：load -> returns -> benchmark -> selection -> performance -> report

    panel 可直接注入（已在内存中时跳过文件读取）。
    """
    inst = Instrumentation()
    pipeline = build_backtest_pipeline(inst=inst, console_report=console_report)

    ctx = BacktestContext(cfg=cfg.backtest, data=cfg.data, panel=panel)
    return pipeline.run(ctx)
