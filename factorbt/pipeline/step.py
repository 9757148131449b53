#!filepath: factorbt/pipeline/step.py
from __future__ import annotations

from factorbt.observability.instrumentation import (
    Instrumentation,
    NoOpInstrumentation,
)
from factorbt.pipeline.context import BacktestContext


class PipelineStep:
    """
    Pipeline Step 基类

    职责：
      1. 读 ctx，写回本 Step 负责的字段
      2. 提供 Step 级时间边界（timed）

    - Step 行为不依赖 inst 是否存在
    """

    stage: str = ""

    def __init__(self, inst: Instrumentation | None = None):
        self.inst: Instrumentation | NoOpInstrumentation = (
            inst if inst is not None else NoOpInstrumentation()
        )

    @property
    def step_name(self) -> str:
        return self.__class__.__name__

    def timed(self):
        return self.inst.timer(self.step_name)

    def run(self, ctx: BacktestContext) -> BacktestContext:
        raise NotImplementedError
