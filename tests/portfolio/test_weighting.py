#!filepath: tests/portfolio/test_weighting.py
from __future__ import annotations

import copy
import math

import pandas as pd
import pytest

from factorbt.core.types import ReturnSeries
from factorbt.portfolio.weighting import (
    EqualWeighter,
    InverseVolatilityWeighter,
    Weighter,
    WeighterFactory,
    equal_weight,
)
from factorbt.utils.errors import ContractViolation


def _rs(inst: str, values: list[float]) -> ReturnSeries:
    dates = tuple(pd.date_range("2020-01-01", periods=len(values), freq="D"))
    return ReturnSeries(inst, dates=dates, values=tuple(values))


# -----------------------------------------------------------------------------
# equal weight
# -----------------------------------------------------------------------------
@pytest.mark.parametrize("n", [1, 2, 3, 7, 11, 97])
def test_equal_weights_sum_to_one(n):
    p = equal_weight({f"S{i:03d}" for i in range(n)})

    assert len(p) == n
    assert math.fsum(p.weights.values()) == pytest.approx(1.0, abs=1e-9)
    assert len(set(p.weights.values())) == 1


def test_empty_selection_gives_empty_portfolio():
    p = equal_weight(set(), label="nothing")

    assert p.is_empty
    assert p.label == "nothing"


def test_equal_weight_is_bit_identical_across_calls():
    ids = {"C", "A", "B"}
    assert equal_weight(ids) == equal_weight(set(ids))
    assert list(equal_weight(ids).weights.items()) == list(equal_weight(ids).weights.items())


# -----------------------------------------------------------------------------
# inverse volatility
# -----------------------------------------------------------------------------
def test_inverse_volatility_weights():
    returns = {
        "LOW": _rs("LOW", [0.01, -0.01, 0.01, -0.01]),
        "HIGH": _rs("HIGH", [0.02, -0.02, 0.02, -0.02]),
    }
    p = InverseVolatilityWeighter(returns).weigh({"LOW", "HIGH"})

    assert p.weights["LOW"] == pytest.approx(2.0 / 3.0)
    assert p.weights["HIGH"] == pytest.approx(1.0 / 3.0)


def test_inverse_volatility_drops_undefined_volatility():
    returns = {
        "OK": _rs("OK", [0.01, -0.01]),
        "FLAT": _rs("FLAT", [0.0, 0.0]),
        "SHORT": _rs("SHORT", [0.01]),
    }
    p = InverseVolatilityWeighter(returns).weigh({"OK", "FLAT", "SHORT", "MISSING"})

    assert p.instruments == ("OK",)
    assert p.weights["OK"] == 1.0


def test_inverse_volatility_requires_returns():
    with pytest.raises(ContractViolation, match="requires"):
        InverseVolatilityWeighter()


# -----------------------------------------------------------------------------
# factory
# -----------------------------------------------------------------------------
def test_factory_builds_registered_weighters():
    assert isinstance(WeighterFactory.create({"type": "equal", "returns": None}), EqualWeighter)
    w = WeighterFactory.create({"type": "inverse_volatility", "returns": {}})
    assert isinstance(w, InverseVolatilityWeighter)
    assert all(issubclass(c, Weighter) for c in WeighterFactory._REGISTRY.values())


def test_factory_missing_type_raises():
    with pytest.raises(ContractViolation, match="missing 'type'"):
        WeighterFactory.create({})


def test_factory_unknown_type_raises():
    with pytest.raises(ContractViolation, match="unknown weighting type"):
        WeighterFactory.create({"type": "mean_variance"})


def test_factory_does_not_mutate_cfg():
    cfg = {"type": "equal"}
    cfg_copy = copy.deepcopy(cfg)
    WeighterFactory.create(cfg)

    assert cfg == cfg_copy
