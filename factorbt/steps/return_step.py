# factorbt/steps/return_step.py
from factorbt.engines.return_engine import ReturnEngine
from factorbt.pipeline.step import PipelineStep


class ReturnStep(PipelineStep):
    """panel -> ctx.returns"""

    stage = "returns"

    def run(self, ctx):
        with self.timed():
            ctx.returns = ReturnEngine().execute(ctx.panel)
            return ctx
