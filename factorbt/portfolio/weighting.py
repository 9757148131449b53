#!filepath: factorbt/portfolio/weighting.py
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Dict, Iterable, Mapping, Optional, Type

import numpy as np

from factorbt import logs
from factorbt.core.types import Portfolio, ReturnSeries
from factorbt.utils.errors import ContractViolation


class Weighter(ABC):
    """
    Weighter (pluggable)

    纯函数：instrument set -> Portfolio
      - 空集合 -> 空 Portfolio（不持仓，不报错）
      - 输出按 instrument_id 排序，重复调用结果逐位一致
    """

    @abstractmethod
    def weigh(self, instruments: Iterable[str], label: str = "") -> Portfolio:
        ...

    @classmethod
    def from_params(cls, **params) -> "Weighter":
        return cls()


class EqualWeighter(Weighter):
    def weigh(self, instruments: Iterable[str], label: str = "") -> Portfolio:
        ids = sorted({str(i) for i in instruments})
        if not ids:
            return Portfolio({}, label=label)

        w = 1.0 / len(ids)
        return Portfolio({i: w for i in ids}, label=label)


class InverseVolatilityWeighter(Weighter):
    """
    w[i] ∝ 1 / std(returns[i])  (sample std)

    instruments whose volatility is undefined or zero are left out.
    """

    def __init__(self, returns: Optional[Mapping[str, ReturnSeries]] = None):
        if returns is None:
            raise ContractViolation("[InverseVolatilityWeighter] requires per-instrument returns")
        self._returns = returns

    @classmethod
    def from_params(cls, returns=None, **params) -> "Weighter":
        return cls(returns=returns)

    def _volatility(self, instrument_id: str) -> float:
        rs = self._returns.get(instrument_id)
        if rs is None or len(rs) < 2:
            return math.nan
        return float(np.std(np.asarray(rs.values, dtype=float), ddof=1))

    def weigh(self, instruments: Iterable[str], label: str = "") -> Portfolio:
        raw: Dict[str, float] = {}
        for inst in sorted({str(i) for i in instruments}):
            vol = self._volatility(inst)
            if math.isfinite(vol) and vol > 0:
                raw[inst] = 1.0 / vol
            else:
                logs.warning(f"[InverseVolatilityWeighter] drop {inst}: volatility={vol}")

        if not raw:
            return Portfolio({}, label=label)

        total = math.fsum(raw.values())
        return Portfolio({k: v / total for k, v in raw.items()}, label=label)


class WeighterFactory:
    """
    注册式 Weighter 构造器

    All weighters must be explicitly registered in WeighterFactory._REGISTRY.
    Adding a weighting scheme requires a deliberate code change here.
    """

    _REGISTRY: Dict[str, Type[Weighter]] = {
        "equal": EqualWeighter,
        "inverse_volatility": InverseVolatilityWeighter,
    }

    @classmethod
    def create(cls, cfg: Dict) -> Weighter:
        """
        cfg:
          {"type": "equal"}
          {"type": "inverse_volatility", "returns": {...}}

        冻结规则：
          - cfg["type"] 必须存在
          - 未注册 type -> ContractViolation
          - 各 Weighter 只取自己需要的参数（from_params）
        """
        if "type" not in cfg:
            raise ContractViolation("[WeighterFactory] missing 'type' in weighting config")

        typ = cfg["type"]
        if typ not in cls._REGISTRY:
            raise ContractViolation(
                f"[WeighterFactory] unknown weighting type: {typ}, "
                f"registered={sorted(cls._REGISTRY)}"
            )

        weighter_cls = cls._REGISTRY[typ]
        params = {k: v for k, v in cfg.items() if k != "type"}

        return weighter_cls.from_params(**params)


def equal_weight(instrument_set: Iterable[str], label: str = "") -> Portfolio:
    return EqualWeighter().weigh(instrument_set, label=label)
