#!filepath: factorbt/engines/return_engine.py
from __future__ import annotations

from typing import Dict

from factorbt import logs
from factorbt.core.panel import CLOSE, DATE, INSTRUMENT, Panel
from factorbt.core.types import ReturnSeries


class ReturnEngine:
    """
    ReturnEngine

    Panel -> {instrument_id: ReturnSeries}

      r[t] = close[t] / close[t-1] - 1     (t > 首个观测日)

    - 首个观测日无前值，直接剔除（不插补）
    - 只有一个观测的 instrument -> 空 ReturnSeries，不报错
    - 不做 forward-fill：前值 = 该 instrument 上一个观测
    """

    def execute(self, panel: Panel) -> Dict[str, ReturnSeries]:
        df = panel.to_frame()[[INSTRUMENT, DATE, CLOSE]]
        df = df.sort_values([INSTRUMENT, DATE], kind="mergesort")

        out: Dict[str, ReturnSeries] = {}
        for inst, g in df.groupby(INSTRUMENT, sort=True):
            close = g[CLOSE].to_numpy()
            rets = close[1:] / close[:-1] - 1.0
            out[inst] = ReturnSeries(
                instrument_id=inst,
                dates=tuple(g[DATE].iloc[1:]),
                values=tuple(float(r) for r in rets),
            )

        logs.debug(f"[ReturnEngine] instruments={len(out)} rows={len(df)}")
        return out


def derive_returns(panel: Panel) -> Dict[str, ReturnSeries]:
    return ReturnEngine().execute(panel)
