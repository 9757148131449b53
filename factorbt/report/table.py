# factorbt/report/table.py
from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Mapping

from rich.console import Console
from rich.table import Table

from factorbt.core.types import PerformanceReport
from factorbt.pipeline.context import BacktestContext
from factorbt.report.base import Report


def _fmt(value: float, pct: bool = False) -> str:
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return f"{value:.2%}" if pct else f"{value:.4f}"


def _json_value(value):
    # strict JSON: NaN / ±inf -> null
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def build_table(reports: Mapping[str, PerformanceReport], title: str = "Backtest") -> Table:
    table = Table(title=title)
    table.add_column("portfolio", style="cyan")
    table.add_column("periods", justify="right")
    table.add_column("avg return", justify="right")
    table.add_column("volatility", justify="right")
    table.add_column("sharpe", justify="right")
    table.add_column("VaR 5%", justify="right")

    for label, r in reports.items():
        table.add_row(
            label,
            str(r.n_periods),
            _fmt(r.average_return, pct=True),
            _fmt(r.volatility, pct=True),
            _fmt(r.sharpe_ratio),
            _fmt(r.value_at_risk_5pct, pct=True),
        )
    return table


class ReportTable(Report):
    def __init__(self, console: Console | None = None):
        self._console = console if console is not None else Console()

    def render(self, ctx: BacktestContext) -> None:
        self._console.print(build_table(ctx.reports, title=f"Backtest: {ctx.cfg.name}"))


class MetricsReport(Report):
    def __init__(self, output_path: Path):
        self._path = Path(output_path)

    def render(self, ctx: BacktestContext) -> None:
        payload = {
            label: {k: _json_value(v) for k, v in r.to_dict().items()}
            for label, r in ctx.reports.items()
        }
        self._path.write_text(json.dumps(payload, indent=2, allow_nan=False), encoding="utf-8")


class IndexReport(Report):
    def __init__(self, output_path: Path):
        self._path = Path(output_path)

    def render(self, ctx: BacktestContext) -> None:
        if ctx.index is None or len(ctx.index) == 0:
            return
        ctx.index.to_frame().to_csv(self._path)
