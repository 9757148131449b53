#!filepath: tests/metrics/test_stats.py
import math

import pytest

from factorbt.metrics.stats import quantile, safe_ratio


def test_quantile_type7_linear_interpolation():
    values = [1.0, 2.0, 3.0, 4.0, 5.0]

    assert quantile(values, 0.0) == 1.0
    assert quantile(values, 1.0) == 5.0
    assert quantile(values, 0.2) == pytest.approx(1.8)
    assert quantile([10.0, 20.0], 0.05) == pytest.approx(10.5)


def test_quantile_empty_and_nan():
    assert math.isnan(quantile([], 0.5))
    assert math.isnan(quantile([1.0, math.nan], 0.5))


def test_safe_ratio_ieee_semantics():
    assert safe_ratio(1.0, 2.0) == 0.5
    assert safe_ratio(1.0, 0.0) == math.inf
    assert safe_ratio(-1.0, 0.0) == -math.inf
    assert math.isnan(safe_ratio(0.0, 0.0))
    assert math.isnan(safe_ratio(1.0, math.nan))
