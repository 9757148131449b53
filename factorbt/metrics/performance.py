#!filepath: factorbt/metrics/performance.py
from __future__ import annotations

import math
from typing import Dict, Iterable, Mapping

import numpy as np
import pandas as pd

from factorbt import logs
from factorbt.core.types import IndexSeries, PerformanceReport, Portfolio, ReturnSeries
from factorbt.metrics.stats import quantile, safe_ratio
from factorbt.utils.errors import ContractViolation

VAR_LEVEL = 0.05

MISSING_RETURN_POLICIES = ("complete", "zero")


class PerformanceEvaluator:
    """
    PerformanceEvaluator

    Portfolio + per-instrument ReturnSeries -> PerformanceReport

    Missing-return policy (a constituent without a return on date d):
      - "complete": keep only dates on which EVERY constituent reports
      - "zero"    : keep the union of dates, missing return contributes 0

    Degenerate inputs never raise:
      - empty portfolio / empty series -> all NaN
      - one period                      -> volatility / sharpe NaN
      - zero volatility                 -> sharpe ±inf (or NaN if mean is 0)
    """

    def __init__(self, missing_returns: str = "complete"):
        if missing_returns not in MISSING_RETURN_POLICIES:
            raise ContractViolation(
                f"[PerformanceEvaluator] unknown missing-return policy {missing_returns!r}"
            )
        self.missing_returns = missing_returns

    # --------------------------------------------------
    def portfolio_returns(
        self,
        portfolio: Portfolio,
        returns_by_instrument: Mapping[str, ReturnSeries],
    ) -> pd.Series:
        name = portfolio.label or "portfolio"
        if portfolio.is_empty:
            return pd.Series(dtype=float, index=pd.DatetimeIndex([], name="date"), name=name)

        columns = {
            inst: returns_by_instrument.get(inst, ReturnSeries(inst)).to_series()
            for inst in portfolio.instruments
        }
        # union of dates
        frame = pd.concat(columns, axis=1).sort_index()

        if self.missing_returns == "complete":
            aligned = frame.dropna(how="any")
            dropped = len(frame) - len(aligned)
            if dropped:
                logs.warning(
                    f"[PerformanceEvaluator] {name}: dropped {dropped}/{len(frame)} "
                    f"date(s) with incomplete constituent returns"
                )
        else:
            aligned = frame.fillna(0.0)

        weights = portfolio.to_series().reindex(aligned.columns).to_numpy()
        values = aligned.to_numpy(dtype=float) @ weights
        return pd.Series(values, index=aligned.index, name=name)

    # --------------------------------------------------
    def evaluate_returns(self, returns: Iterable[float], label: str = "") -> PerformanceReport:
        arr = np.asarray(list(returns), dtype=float)
        n = int(arr.size)

        if n == 0:
            logs.warning(f"[PerformanceEvaluator] {label or 'series'}: no periods -> NaN report")
            return PerformanceReport(
                label=label,
                average_return=math.nan,
                volatility=math.nan,
                sharpe_ratio=math.nan,
                value_at_risk_5pct=math.nan,
                n_periods=0,
            )

        mean = float(np.mean(arr))
        vol = float(np.std(arr, ddof=1)) if n > 1 else math.nan

        return PerformanceReport(
            label=label,
            average_return=mean,
            volatility=vol,
            sharpe_ratio=safe_ratio(mean, vol),
            value_at_risk_5pct=quantile(arr, VAR_LEVEL),
            n_periods=n,
        )

    def evaluate(
        self,
        portfolio: Portfolio,
        returns_by_instrument: Mapping[str, ReturnSeries],
    ) -> PerformanceReport:
        series = self.portfolio_returns(portfolio, returns_by_instrument)
        report = self.evaluate_returns(series.to_numpy(), label=portfolio.label)
        logs.info(
            f"[PerformanceEvaluator] {portfolio.label or 'portfolio'}: "
            f"n={report.n_periods} mean={report.average_return:.6g} "
            f"vol={report.volatility:.6g} sharpe={report.sharpe_ratio:.6g}"
        )
        return report

    def evaluate_index(self, index: IndexSeries, label: str = "benchmark") -> PerformanceReport:
        return self.evaluate_returns(index.returns, label=label)


class PerformancePipeline:
    """Evaluate several labelled portfolios against the same return table."""

    def __init__(self, evaluator: PerformanceEvaluator):
        self._evaluator = evaluator

    def compute(
        self,
        portfolios: Iterable[Portfolio],
        returns_by_instrument: Mapping[str, ReturnSeries],
    ) -> Dict[str, PerformanceReport]:
        return {
            p.label: self._evaluator.evaluate(p, returns_by_instrument)
            for p in portfolios
        }


def evaluate(
    portfolio: Portfolio,
    return_series_by_instrument: Mapping[str, ReturnSeries],
) -> PerformanceReport:
    return PerformanceEvaluator().evaluate(portfolio, return_series_by_instrument)
