# factorbt/steps/performance_step.py
from factorbt.metrics.performance import PerformanceEvaluator, PerformancePipeline
from factorbt.pipeline.step import PipelineStep


class PerformanceStep(PipelineStep):
    """ctx.portfolios + ctx.returns -> ctx.reports"""

    stage = "performance"

    def run(self, ctx):
        with self.timed():
            evaluator = PerformanceEvaluator(missing_returns=ctx.cfg.missing_returns)
            ctx.reports.update(
                PerformancePipeline(evaluator).compute(ctx.portfolios.values(), ctx.returns)
            )
            return ctx
