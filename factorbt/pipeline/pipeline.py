#!filepath: factorbt/pipeline/pipeline.py
from __future__ import annotations

from factorbt import logs
from factorbt.observability.instrumentation import Instrumentation, NoOpInstrumentation
from factorbt.pipeline.context import BacktestContext
from factorbt.pipeline.step import PipelineStep


class BacktestPipeline:
    """
    BacktestPipeline = 调度器

    - Pipeline 负责顺序 / 上下文
    - Pipeline 不负责 Step 级计时（Step.timed）
    - 任一 Step 抛出 ContractViolation -> 本次查询中止，Panel 不受影响
    """

    def __init__(
        self,
        steps: list[PipelineStep],
        inst: Instrumentation | NoOpInstrumentation | None = None,
    ):
        self.steps = steps
        self.inst = inst if inst is not None else NoOpInstrumentation()

    def run(self, ctx: BacktestContext) -> BacktestContext:
        logs.info(f"[Pipeline] ====== START {ctx.cfg.name} ======")

        for step in self.steps:
            ctx = step.run(ctx)

        self.inst.report_timeline(ctx.cfg.name)
        logs.info(f"[Pipeline] ====== DONE {ctx.cfg.name} ======")
        return ctx
