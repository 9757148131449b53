#!filepath: tests/core/test_panel.py
from __future__ import annotations

import pandas as pd
import pytest

from factorbt.core.panel import Observation, Panel
from factorbt.utils.errors import ContractViolation


# -----------------------------------------------------------------------------
# 构造
# -----------------------------------------------------------------------------
def test_panel_sorted_by_date_then_instrument():
    frame = pd.DataFrame(
        {
            "instrument_id": ["B", "A", "B", "A"],
            "date": ["2020-02-29", "2020-02-29", "2020-01-31", "2020-01-31"],
            "close": [2.0, 1.0, 2.0, 1.0],
            "p2b": [0.2, 0.1, 0.2, 0.1],
        }
    )
    panel = Panel(frame)

    out = panel.to_frame()
    assert list(out["instrument_id"]) == ["A", "B", "A", "B"]
    assert panel.min_date == pd.Timestamp("2020-01-31")
    assert panel.factors == ("p2b",)
    assert panel.instruments == ("A", "B")


def test_missing_key_column_raises():
    with pytest.raises(ContractViolation, match="missing required columns"):
        Panel(pd.DataFrame({"instrument_id": ["A"], "date": ["2020-01-31"]}))


def test_duplicate_observation_raises():
    frame = pd.DataFrame(
        {
            "instrument_id": ["A", "A"],
            "date": ["2020-01-31", "2020-01-31"],
            "close": [1.0, 1.1],
        }
    )
    with pytest.raises(ContractViolation, match="duplicate"):
        Panel(frame)


def test_unknown_factor_raises():
    frame = pd.DataFrame({"instrument_id": ["A"], "date": ["2020-01-31"], "close": [1.0]})
    with pytest.raises(ContractViolation, match="unknown factor"):
        Panel(frame, factors=["p2b"])


def test_from_observations_roundtrip_fields():
    obs = [
        Observation("A", pd.Timestamp("2020-01-31"), 10.0, {"p2b": 1.5}),
        Observation("B", pd.Timestamp("2020-01-31"), 20.0, {"p2b": 2.5}),
    ]
    panel = Panel.from_observations(obs)

    assert panel.factors == ("p2b",)
    assert list(panel.observations()) == obs


# -----------------------------------------------------------------------------
# 只读语义
# -----------------------------------------------------------------------------
def test_accessors_return_copies(two_stock_panel):
    frame = two_stock_panel.to_frame()
    frame.loc[:, "close"] = -1.0

    close = two_stock_panel.close_matrix()
    close.iloc[:, :] = -1.0

    assert (two_stock_panel.to_frame()["close"] > 0).all()
    assert (two_stock_panel.close_matrix() > 0).all().all()


def test_at_and_after_queries(factor_panel):
    at = factor_panel.at("2019-12-31")
    assert len(at) == 5
    assert set(at["date"]) == {pd.Timestamp("2019-12-31")}

    after = factor_panel.after("2019-12-31")
    assert after["date"].min() == pd.Timestamp("2020-01-31")

    assert len(factor_panel.for_instrument("C")) == 5


# -----------------------------------------------------------------------------
# 完整性契约
# -----------------------------------------------------------------------------
def test_validate_complete_passes(factor_panel):
    factor_panel.validate_complete()


def test_validate_complete_reports_missing_pair(panel_factory):
    panel = panel_factory(
        {"A": [1.0, 1.1], "B": [2.0, None]},
        ["2020-01-31", "2020-02-29"],
    )

    assert panel.missing_pairs() == [("B", pd.Timestamp("2020-02-29"))]
    with pytest.raises(ContractViolation, match="B@2020-02-29"):
        panel.validate_complete()


def test_empty_panel_is_complete():
    panel = Panel(pd.DataFrame(columns=["instrument_id", "date", "close"]))

    assert panel.is_empty
    assert panel.min_date is None
    panel.validate_complete()
