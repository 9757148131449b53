#!filepath: factorbt/core/types.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

import pandas as pd

from factorbt.utils.errors import ContractViolation

WEIGHT_TOLERANCE = 1e-9


@dataclass(frozen=True)
class ReturnSeries:
    """
    单 instrument 的 period return（首个观测日无前值，已剔除）。
    """

    instrument_id: str
    dates: Tuple[pd.Timestamp, ...] = ()
    values: Tuple[float, ...] = ()

    def __post_init__(self):
        if len(self.dates) != len(self.values):
            raise ValueError("dates / values length mismatch")

    def __len__(self) -> int:
        return len(self.values)

    @property
    def is_empty(self) -> bool:
        return len(self.values) == 0

    def to_series(self) -> pd.Series:
        return pd.Series(
            list(self.values),
            index=pd.DatetimeIndex(list(self.dates), name="date"),
            name=self.instrument_id,
            dtype=float,
        )


@dataclass(frozen=True)
class IndexSeries:
    """
    IndexSeries（benchmark）

    - values[0] == 100 × |universe at min date|
    - returns[0] 为其余 period return 的中位数（两遍计算后回填）
    """

    dates: Tuple[pd.Timestamp, ...]
    values: Tuple[float, ...]
    returns: Tuple[float, ...]
    n_constituents: int

    def __len__(self) -> int:
        return len(self.dates)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "index_value": list(self.values),
                "period_return": list(self.returns),
            },
            index=pd.DatetimeIndex(list(self.dates), name="date"),
        )


@dataclass(frozen=True)
class Portfolio:
    """
    instrument_id -> weight

    冻结规则：
      - weight 非负
      - 非空时 Σ weight == 1（±1e-9）
      - 空 Portfolio 合法，表示 “不持仓”
    """

    weights: Mapping[str, float] = field(default_factory=dict)
    label: str = ""

    def __post_init__(self):
        ordered: Dict[str, float] = {
            str(k): float(self.weights[k]) for k in sorted(self.weights)
        }

        for inst, w in ordered.items():
            if not math.isfinite(w) or w < 0:
                raise ContractViolation(f"[Portfolio] invalid weight {w} for {inst}")

        if ordered:
            total = math.fsum(ordered.values())
            if abs(total - 1.0) > WEIGHT_TOLERANCE:
                raise ContractViolation(f"[Portfolio] weights sum to {total}, expected 1.0")

        object.__setattr__(self, "weights", MappingProxyType(ordered))

    def __len__(self) -> int:
        return len(self.weights)

    @property
    def is_empty(self) -> bool:
        return len(self.weights) == 0

    @property
    def instruments(self) -> Tuple[str, ...]:
        return tuple(self.weights)

    def to_series(self) -> pd.Series:
        return pd.Series(dict(self.weights), dtype=float, name="weight")


@dataclass(frozen=True)
class PerformanceReport:
    label: str
    average_return: float
    volatility: float
    sharpe_ratio: float
    value_at_risk_5pct: float
    n_periods: int

    def to_dict(self) -> Dict[str, float]:
        return {
            "label": self.label,
            "average_return": self.average_return,
            "volatility": self.volatility,
            "sharpe_ratio": self.sharpe_ratio,
            "value_at_risk_5pct": self.value_at_risk_5pct,
            "n_periods": self.n_periods,
        }
