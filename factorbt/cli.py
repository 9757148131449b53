#!filepath: factorbt/cli.py
from typing import Optional

import typer
from pydantic import ValidationError
from rich import print
from rich.console import Console
from rich.markup import escape

from factorbt import __version__, logs
from factorbt.config.app_config import AppConfig
from factorbt.config.backtest_config import BacktestConfig
from factorbt.dataloader.panel_loader import PanelLoader
from factorbt.engines.index_engine import IndexEngine
from factorbt.utils.errors import ContractViolation

app = typer.Typer(help="Factor quantile backtest CLI")

CONTRACT_EXIT_CODE = 2


def _fail(err: ContractViolation) -> None:
    logs.error(f"[CLI] {err}")
    print(f"[red]Contract violation:[/red] {escape(str(err))}")
    raise typer.Exit(code=CONTRACT_EXIT_CODE)


@app.command()
def version():
    print(f"v{__version__}")


@app.command("run-backtest")
def run_backtest(
    factor: str = typer.Option(..., help="factor column to sort on"),
    lower: float = typer.Option(0.0, help="lower quantile in [0, 1]"),
    upper: float = typer.Option(1.0, help="upper quantile in [0, 1]"),
    window_start: str = typer.Option(..., help="factor window starts after this date"),
    as_of: str = typer.Option(..., help="selection date"),
    panel: Optional[str] = typer.Option(None, help="panel file (csv / parquet)"),
    weighting: str = typer.Option("equal", help="weighting scheme"),
    missing_returns: str = typer.Option("complete", help="complete | zero"),
    name: str = typer.Option("selection", help="portfolio label"),
    output_dir: Optional[str] = typer.Option(None, help="write metrics.json / index.csv here"),
    config: Optional[str] = typer.Option(None, help="YAML config (log / data sections)"),
):
    """
    Select a factor quantile band, weight it, and report against the benchmark.
    """
    from factorbt.workflows.backtest_workflow import run_backtest as run

    cfg = AppConfig.load(config)
    logs.configure(cfg.log)

    if panel is not None:
        cfg.data.panel_path = panel

    if missing_returns not in ("complete", "zero"):
        _fail(ContractViolation(f"unknown missing-return policy {missing_returns!r}"))

    try:
        cfg.backtest = BacktestConfig(
            name=name,
            factor=factor,
            lower=lower,
            upper=upper,
            window_start=window_start,
            as_of=as_of,
            weighting=weighting,
            missing_returns=missing_returns,
            output_dir=output_dir,
        )
    except ValidationError as err:
        _fail(ContractViolation(f"invalid backtest options: {err.errors()[0]['msg']}"))

    try:
        run(cfg)
    except ContractViolation as err:
        _fail(err)


@app.command("build-index")
def build_index(
    panel: Optional[str] = typer.Option(None, help="panel file (csv / parquet)"),
    tail: int = typer.Option(12, help="rows to print"),
    config: Optional[str] = typer.Option(None, help="YAML config"),
):
    """
    Print the fixed-share benchmark index.
    """
    cfg = AppConfig.load(config)
    logs.configure(cfg.log)

    try:
        loaded = PanelLoader(cfg.data).load(panel)
        loaded.validate_complete()
    except ContractViolation as err:
        _fail(err)

    index = IndexEngine().execute(loaded)
    Console().print(index.to_frame().tail(tail).to_string())


if __name__ == "__main__":
    app()

# python -m factorbt.cli run-backtest --panel data/panel.csv --factor p2b --upper 0.2 \
#     --window-start 2015-01-01 --as-of 2019-12-31
