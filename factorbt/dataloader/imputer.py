#!filepath: factorbt/dataloader/imputer.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Sequence, Type

import pandas as pd

from factorbt import logs
from factorbt.utils.errors import ContractViolation


class Imputer(ABC):
    """
    Imputer（上游协作者接口）

    raw frame -> new frame
      - 不修改输入
      - 只补 factor 缺失值，不补缺失的 (instrument, date) 行
    """

    @abstractmethod
    def apply(self, frame: pd.DataFrame, factors: Sequence[str], date_col: str) -> pd.DataFrame:
        ...


class NoOpImputer(Imputer):
    def apply(self, frame: pd.DataFrame, factors: Sequence[str], date_col: str) -> pd.DataFrame:
        return frame.copy()


class CrossSectionalMedianImputer(Imputer):
    """
    缺失 factor -> 同一日期截面中位数

    整个截面都缺失时保持 NaN（交给下游按 undefined 处理）。
    """

    def apply(self, frame: pd.DataFrame, factors: Sequence[str], date_col: str) -> pd.DataFrame:
        out = frame.copy()
        for f in factors:
            n_missing = int(out[f].isna().sum())
            if not n_missing:
                continue
            medians = out.groupby(date_col)[f].transform("median")
            out[f] = out[f].fillna(medians)
            logs.info(
                f"[Imputer] {f}: filled {n_missing - int(out[f].isna().sum())}/{n_missing} "
                f"with cross-sectional median"
            )
        return out


_REGISTRY: Dict[str, Type[Imputer]] = {
    "none": NoOpImputer,
    "median": CrossSectionalMedianImputer,
}


def make_imputer(name: str) -> Imputer:
    if name not in _REGISTRY:
        raise ContractViolation(f"[Imputer] unknown imputer: {name}")
    return _REGISTRY[name]()
