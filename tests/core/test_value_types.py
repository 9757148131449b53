#!filepath: tests/core/test_value_types.py
from __future__ import annotations

import dataclasses

import pandas as pd
import pytest

from factorbt.core.types import IndexSeries, Portfolio, ReturnSeries
from factorbt.utils.errors import ContractViolation


def test_portfolio_orders_weights_by_instrument():
    p = Portfolio({"B": 0.5, "A": 0.5})
    assert p.instruments == ("A", "B")


def test_portfolio_weights_are_read_only():
    p = Portfolio({"A": 1.0})
    with pytest.raises(TypeError):
        p.weights["A"] = 0.5  # type: ignore[index]
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.label = "x"  # type: ignore[misc]


def test_portfolio_rejects_weights_not_summing_to_one():
    with pytest.raises(ContractViolation, match="sum"):
        Portfolio({"A": 0.5, "B": 0.4})


def test_portfolio_rejects_negative_weight():
    with pytest.raises(ContractViolation, match="invalid weight"):
        Portfolio({"A": 1.5, "B": -0.5})


def test_empty_portfolio_is_valid():
    p = Portfolio({})
    assert p.is_empty
    assert len(p) == 0


def test_return_series_length_mismatch():
    with pytest.raises(ValueError):
        ReturnSeries("A", dates=(pd.Timestamp("2020-01-31"),), values=())


def test_index_series_frame():
    idx = IndexSeries(
        dates=(pd.Timestamp("2020-01-31"), pd.Timestamp("2020-02-29")),
        values=(200.0, 210.0),
        returns=(0.05, 0.05),
        n_constituents=2,
    )
    frame = idx.to_frame()

    assert list(frame.columns) == ["index_value", "period_return"]
    assert frame.index.name == "date"
    assert frame["index_value"].iloc[-1] == 210.0
