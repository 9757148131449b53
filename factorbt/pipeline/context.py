#!filepath: factorbt/pipeline/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional

from factorbt.config.backtest_config import BacktestConfig
from factorbt.config.data_config import DataConfig
from factorbt.core.panel import Panel
from factorbt.core.types import IndexSeries, PerformanceReport, Portfolio, ReturnSeries


@dataclass
class BacktestContext:
    """
    BacktestContext

    设计原则：
      - Step 之间唯一通信载体
      - 只存“事实 / 中间态”，不存业务逻辑
      - panel 一经载入只读
    """

    # -------------------------
    # identity
    # -------------------------
    cfg: BacktestConfig
    data: DataConfig = field(default_factory=DataConfig)

    # -------------------------
    # data layer
    # -------------------------
    panel: Optional[Panel] = None
    returns: Optional[Dict[str, ReturnSeries]] = None

    # -------------------------
    # benchmark / selection
    # -------------------------
    index: Optional[IndexSeries] = None
    selection: Optional[FrozenSet[str]] = None
    portfolios: Dict[str, Portfolio] = field(default_factory=dict)

    # -------------------------
    # result layer
    # -------------------------
    reports: Dict[str, PerformanceReport] = field(default_factory=dict)
