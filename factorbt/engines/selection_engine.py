#!filepath: factorbt/engines/selection_engine.py
from __future__ import annotations

import math
import numbers
from typing import FrozenSet

import pandas as pd

from factorbt import logs
from factorbt.core.panel import INSTRUMENT, Panel
from factorbt.metrics.stats import quantile
from factorbt.utils.datetime_utils import DateLike
from factorbt.utils.errors import ContractViolation


class SelectionEngine:
    """
    SelectionEngine (factor quantile band)

    1. window      = observations with date > window_start
    2. window mean = per-instrument arithmetic mean of the factor
                     (side table, NaN propagates)
    3. candidates  = instruments observed at as_of that have a window mean
    4. cut points  = type-7 quantiles of the candidates' window means
    5. selected    = candidates with lo <= mean <= hi

    Empty as_of / empty window -> empty set, never an error.
    """

    @staticmethod
    def validate_bounds(lower: float, upper: float) -> None:
        ok = (
            isinstance(lower, numbers.Real)
            and isinstance(upper, numbers.Real)
            and not isinstance(lower, bool)
            and not isinstance(upper, bool)
            and 0.0 <= lower <= upper <= 1.0
        )
        if not ok:
            raise ContractViolation(
                f"[Selection] quantile bounds must satisfy 0 <= lower <= upper <= 1, "
                f"got lower={lower} upper={upper}"
            )

    def window_means(self, panel: Panel, factor_name: str, window_start: DateLike) -> pd.Series:
        if not panel.has_factor(factor_name):
            raise ContractViolation(
                f"[Selection] unknown factor {factor_name!r}, panel has {list(panel.factors)}"
            )

        window = panel.after(window_start)
        if window.empty:
            return pd.Series(dtype=float, name=factor_name)

        return (
            window.groupby(INSTRUMENT, sort=True)[factor_name]
            .agg(lambda s: s.mean(skipna=False))
            .astype(float)
        )

    def select(
        self,
        panel: Panel,
        factor_name: str,
        window_start: DateLike,
        as_of: DateLike,
        lower: float,
        upper: float,
    ) -> FrozenSet[str]:
        self.validate_bounds(lower, upper)
        means = self.window_means(panel, factor_name, window_start)

        as_of_rows = panel.at(as_of)
        if as_of_rows.empty:
            logs.warning(f"[Selection] no observations at as_of={as_of} -> empty selection")
            return frozenset()
        if means.empty:
            logs.warning(f"[Selection] window after {window_start} is empty -> empty selection")
            return frozenset()

        present = sorted(set(as_of_rows[INSTRUMENT]) & set(means.index))
        candidates = means.loc[present]

        lo = quantile(candidates.to_numpy(), lower)
        hi = quantile(candidates.to_numpy(), upper)
        if math.isnan(lo) or math.isnan(hi):
            logs.warning(f"[Selection] undefined cut points for {factor_name} -> empty selection")
            return frozenset()

        mask = (candidates >= lo) & (candidates <= hi)
        selected = frozenset(candidates.index[mask.to_numpy()])

        logs.info(
            f"[Selection] factor={factor_name} q=[{lower}, {upper}] "
            f"cut=[{lo:.6g}, {hi:.6g}] selected={len(selected)}/{len(candidates)}"
        )
        return selected


def select(
    panel: Panel,
    factor_name: str,
    window_start_date: DateLike,
    as_of_date: DateLike,
    lower_quantile: float,
    upper_quantile: float,
) -> FrozenSet[str]:
    return SelectionEngine().select(
        panel,
        factor_name,
        window_start_date,
        as_of_date,
        lower_quantile,
        upper_quantile,
    )
