#!filepath: tests/engines/test_index_engine.py
from __future__ import annotations

import math
import statistics

import pandas as pd
import pytest

from factorbt.engines.index_engine import IndexEngine, build_index


# -----------------------------------------------------------------------------
# 1. 基准值：min_date == 100 × |U|
# -----------------------------------------------------------------------------
def test_two_stock_balanced_index(two_stock_panel):
    idx = build_index(two_stock_panel)

    assert idx.values[0] == 200.0
    assert idx.values[1] == 200.0
    assert idx.n_constituents == 2


def test_first_value_exact_for_awkward_prices(panel_factory):
    panel = panel_factory(
        {"A": [3.0, 3.3], "B": [7.0, 6.9], "C": [0.1, 0.11]},
        ["2020-01-31", "2020-02-29"],
    )
    idx = build_index(panel)

    assert idx.values[0] == 300.0


def test_index_value_is_fixed_share_sum(factor_panel):
    idx = build_index(factor_panel)
    close = factor_panel.close_matrix()
    shares = 100.0 / close.iloc[0]

    for d, v in zip(idx.dates, idx.values):
        assert v == pytest.approx(float((close.loc[d] * shares).sum()))


# -----------------------------------------------------------------------------
# 2. 首期 return：其余 return 的中位数（两遍）
# -----------------------------------------------------------------------------
def test_first_return_is_median_of_rest(factor_panel):
    idx = build_index(factor_panel)

    rest = list(idx.returns[1:])
    assert idx.returns[0] == pytest.approx(statistics.median(rest))

    for i in range(1, len(idx)):
        assert idx.returns[i] == pytest.approx(idx.values[i] / idx.values[i - 1] - 1)


def test_single_date_panel_has_undefined_first_return(panel_factory):
    panel = panel_factory({"A": [10.0], "B": [20.0]}, ["2020-01-31"])
    idx = build_index(panel)

    assert idx.values == (200.0,)
    assert math.isnan(idx.returns[0])


# -----------------------------------------------------------------------------
# 3. exact-match：缺失 instrument 不 forward-fill；后入者不进指数
# -----------------------------------------------------------------------------
def test_missing_instrument_excluded_from_that_date(panel_factory):
    panel = panel_factory(
        {"A": [10.0, 11.0, 12.0], "B": [20.0, None, 22.0]},
        ["2020-01-31", "2020-02-29", "2020-03-31"],
    )
    idx = build_index(panel)

    assert idx.values[1] == pytest.approx(110.0)
    assert idx.values[2] == pytest.approx(120.0 + 110.0)


def test_late_entrant_never_enters_index(panel_factory):
    panel = panel_factory(
        {"A": [10.0, 11.0], "B": [None, 50.0]},
        ["2020-01-31", "2020-02-29"],
    )
    idx = build_index(panel)

    assert idx.n_constituents == 1
    assert idx.values == pytest.approx((100.0, 110.0))


def test_empty_panel_gives_empty_index():
    from factorbt.core.panel import Panel

    idx = IndexEngine().execute(Panel(pd.DataFrame(columns=["instrument_id", "date", "close"])))
    assert len(idx) == 0


def test_custom_base(two_stock_panel):
    idx = IndexEngine(base=1.0).execute(two_stock_panel)
    assert idx.values[0] == 2.0
