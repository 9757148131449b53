# tests/conftest.py
from __future__ import annotations

import pandas as pd
import pytest
from loguru import logger

from factorbt.core.panel import Panel


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


def make_panel(prices: dict[str, list[float]], dates: list[str], **factors: dict[str, list[float]]) -> Panel:
    """
    prices  : instrument -> close per date
    factors : factor name -> {instrument -> values per date}
    None 表示该 (instrument, date) 无观测
    """
    rows = []
    for inst, closes in prices.items():
        for i, (d, c) in enumerate(zip(dates, closes)):
            if c is None:
                continue
            row = {"instrument_id": inst, "date": d, "close": c}
            for name, by_inst in factors.items():
                row[name] = by_inst[inst][i]
            rows.append(row)
    return Panel(pd.DataFrame(rows), factors=list(factors))


@pytest.fixture
def panel_factory():
    return make_panel


@pytest.fixture
def two_stock_panel() -> Panel:
    """[10, 10] -> [11, 9]"""
    return make_panel(
        {"AAA": [10.0, 11.0], "BBB": [10.0, 9.0]},
        ["2020-01-31", "2020-02-29"],
    )


@pytest.fixture
def month_ends() -> list[str]:
    return ["2019-10-31", "2019-11-30", "2019-12-31", "2020-01-31", "2020-02-29"]


@pytest.fixture
def factor_panel(month_ends) -> Panel:
    """
    5 instruments × 5 month-ends, complete.

    p2b window means (dates > 2019-10-31):
      A=1.0  B=2.0  C=3.0  D=4.0  E=5.0
    """
    prices = {
        "A": [10.0, 10.5, 10.2, 10.8, 11.0],
        "B": [20.0, 19.0, 19.5, 20.5, 21.0],
        "C": [5.0, 5.2, 5.1, 4.9, 5.3],
        "D": [50.0, 51.0, 49.0, 52.0, 53.0],
        "E": [8.0, 7.5, 7.8, 8.2, 8.1],
    }
    p2b = {
        "A": [9.0, 0.5, 1.5, 1.0, 1.0],
        "B": [9.0, 2.0, 2.0, 2.0, 2.0],
        "C": [0.0, 3.0, 3.0, 2.5, 3.5],
        "D": [0.0, 4.0, 4.0, 4.0, 4.0],
        "E": [0.0, 5.0, 5.0, 5.0, 5.0],
    }
    d2e = {k: [0.3] * 5 for k in prices}
    return make_panel(prices, month_ends, p2b=p2b, d2e=d2e)
