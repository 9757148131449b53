# factorbt/steps/load_panel_step.py
from factorbt import logs
from factorbt.dataloader.panel_loader import PanelLoader
from factorbt.pipeline.step import PipelineStep


class LoadPanelStep(PipelineStep):
    """
    LoadPanelStep

    职责：
      - 文件 -> Panel（ctx.panel 已注入时跳过读取）
      - 完整性契约校验（不满足 -> ContractViolation）
    """

    stage = "load"

    def run(self, ctx):
        with self.timed():
            if ctx.panel is None:
                ctx.panel = PanelLoader(ctx.data).load()
            else:
                logs.info(f"[LoadPanel] using injected panel rows={len(ctx.panel)}")

            ctx.panel.validate_complete()
            return ctx
