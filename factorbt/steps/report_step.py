# factorbt/steps/report_step.py
from pathlib import Path

from factorbt import logs
from factorbt.pipeline.step import PipelineStep
from factorbt.report.base import Report, ReportPipeline
from factorbt.report.table import IndexReport, MetricsReport, ReportTable


class ReportStep(PipelineStep):
    """
    ReportStep

    职责：
      - 只读 ctx.index + ctx.reports
      - 控制台表格；配置了 output_dir 时落 metrics.json / index.csv
    """

    stage = "report"

    def __init__(self, *, console_report: Report | None = None, inst=None):
        super().__init__(inst=inst)
        self._console_report = console_report if console_report is not None else ReportTable()

    def run(self, ctx):
        with self.timed():
            reports: list[Report] = [self._console_report]

            if ctx.cfg.output_dir:
                out_dir = Path(ctx.cfg.output_dir)
                out_dir.mkdir(parents=True, exist_ok=True)
                reports += [
                    MetricsReport(out_dir / "metrics.json"),
                    IndexReport(out_dir / "index.csv"),
                ]
                logs.info(f"[Report] writing artifacts to {out_dir}")

            ReportPipeline(reports).render_all(ctx)
            return ctx
