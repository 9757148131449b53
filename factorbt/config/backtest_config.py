#!filepath: factorbt/config/backtest_config.py
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, field_validator

# 报告中固定占用的 label
BENCHMARK_LABEL = "benchmark"
UNIVERSE_LABEL = "equal_weight_all"
RESERVED_LABELS = (BENCHMARK_LABEL, UNIVERSE_LABEL)


class BacktestConfig(BaseModel):
    """
    BacktestConfig（实验定义）

    语义：
      - 一次 factor / quantile / window 查询
      - quantile 边界在 selector 内校验（ContractViolation），这里不做
      - 不定义数据路径（见 DataConfig）
      - name 是所选组合在报告中的 label，不能与 benchmark / universe 重名
    """

    name: str = "default"

    factor: str
    lower: float = 0.0
    upper: float = 1.0

    window_start: str
    as_of: str

    weighting: str = "equal"
    missing_returns: Literal["complete", "zero"] = "complete"

    # None = 只打印，不落盘
    output_dir: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name_not_reserved(cls, v: str) -> str:
        if v in RESERVED_LABELS:
            raise ValueError(f"portfolio name {v!r} is reserved for {list(RESERVED_LABELS)}")
        return v
