#!filepath: factorbt/engines/index_engine.py
from __future__ import annotations

import math

from factorbt import logs
from factorbt.core.panel import Panel
from factorbt.core.types import IndexSeries


class IndexEngine:
    """
    IndexEngine (buy-and-hold benchmark)

    ======================================
    Construction
    ======================================

      U            = instruments observed at min_date
      shares[i]    = base / close[i, min_date]
      value[d]     = Σ_{i ∈ U, observed at d} shares[i] × close[i, d]

    - exact-match per date: an instrument absent at d drops out of that
      date's sum (no forward fill)
      instruments first seen after min_date never enter the index
    - value[min_date] == base × |U| by construction

    ======================================
    Returns (two passes)
    ======================================

    1. return[d] = value[d] / value[d-1] - 1 for d > min_date
    2. return[min_date] = median(return[d] for d > min_date)
    """

    def __init__(self, base: float = 100.0):
        if base <= 0:
            raise ValueError("base must be positive")
        self.base = float(base)

    def execute(self, panel: Panel) -> IndexSeries:
        if panel.is_empty:
            logs.warning("[IndexEngine] empty panel -> empty index")
            return IndexSeries(dates=(), values=(), returns=(), n_constituents=0)

        close = panel.close_matrix()
        first = close.iloc[0].dropna()
        universe = list(first.index)
        shares = self.base / first

        # 单次向量化按日归约
        values = close[universe].mul(shares, axis=1).sum(axis=1, min_count=1)
        values.iloc[0] = self.base * len(universe)

        # pass 1
        returns = values / values.shift(1) - 1.0
        # pass 2：全序列完成后再回填首期
        rest = returns.iloc[1:]
        returns.iloc[0] = float(rest.median()) if len(rest) else math.nan

        logs.info(
            f"[IndexEngine] dates={len(values)} universe={len(universe)} "
            f"first={values.iloc[0]:.4f} last={values.iloc[-1]:.4f}"
        )

        return IndexSeries(
            dates=tuple(values.index),
            values=tuple(float(v) for v in values),
            returns=tuple(float(r) for r in returns),
            n_constituents=len(universe),
        )


def build_index(panel: Panel) -> IndexSeries:
    return IndexEngine().execute(panel)
