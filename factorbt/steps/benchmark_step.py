# factorbt/steps/benchmark_step.py
from factorbt.config.backtest_config import BENCHMARK_LABEL
from factorbt.engines.index_engine import IndexEngine
from factorbt.metrics.performance import PerformanceEvaluator
from factorbt.pipeline.step import PipelineStep


class BenchmarkStep(PipelineStep):
    """
    BenchmarkStep

    职责：
      - panel -> IndexSeries（固定初始股数）
      - IndexSeries.returns -> benchmark PerformanceReport
    """

    stage = "benchmark"

    def run(self, ctx):
        with self.timed():
            ctx.index = IndexEngine().execute(ctx.panel)

            evaluator = PerformanceEvaluator(missing_returns=ctx.cfg.missing_returns)
            ctx.reports[BENCHMARK_LABEL] = evaluator.evaluate_index(ctx.index, label=BENCHMARK_LABEL)
            return ctx
