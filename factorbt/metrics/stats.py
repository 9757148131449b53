#!filepath: factorbt/metrics/stats.py
from __future__ import annotations

from typing import Iterable

import numpy as np

# Type-7 (linear interpolation) quantile, shared by selection cut points
# and Value-at-Risk so the two stay comparable.
QUANTILE_METHOD = "linear"


def quantile(values: Iterable[float], q: float) -> float:
    """
    Empty input -> NaN. NaN in input -> NaN (no skipping).
    """
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0:
        return float("nan")
    return float(np.quantile(arr, q, method=QUANTILE_METHOD))


def safe_ratio(num: float, den: float) -> float:
    """num / den with IEEE semantics: x/0 -> ±inf, 0/0 -> nan."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(num) / np.float64(den))
