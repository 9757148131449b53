# factorbt/steps/selection_step.py
from factorbt.config.backtest_config import UNIVERSE_LABEL
from factorbt.engines.selection_engine import SelectionEngine
from factorbt.pipeline.step import PipelineStep
from factorbt.portfolio.weighting import EqualWeighter, WeighterFactory


class SelectionStep(PipelineStep):
    """
    SelectionStep

    职责：
      - factor 分位选股 -> ctx.selection
      - 配置的 Weighter -> ctx.portfolios[cfg.name]
      - as_of 全市场，始终等权 -> ctx.portfolios["equal_weight_all"]
    """

    stage = "selection"

    def run(self, ctx):
        cfg = ctx.cfg
        with self.timed():
            engine = SelectionEngine()
            ctx.selection = engine.select(
                ctx.panel,
                cfg.factor,
                cfg.window_start,
                cfg.as_of,
                cfg.lower,
                cfg.upper,
            )

            weighter = WeighterFactory.create({"type": cfg.weighting, "returns": ctx.returns})
            ctx.portfolios[cfg.name] = weighter.weigh(ctx.selection, label=cfg.name)

            universe = engine.select(
                ctx.panel, cfg.factor, cfg.window_start, cfg.as_of, 0.0, 1.0
            )
            ctx.portfolios[UNIVERSE_LABEL] = EqualWeighter().weigh(universe, label=UNIVERSE_LABEL)
            return ctx
