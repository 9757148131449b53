"""
{#!filepath: factorbt/core/panel.py}

Panel (FROZEN after construction)

Answers ONE question:
- For instrument i at date d, what was observed (close + factors)?

Contract:
- Rows ordered by (date, instrument_id)
- At most one row per (instrument_id, date)
- Accessors return copies; the internal frame is never handed out

Completeness (every instrument at every date) is the upstream
collaborator's job; validate_complete() checks it on demand.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from factorbt.utils.datetime_utils import DateLike, DateTimeUtils
from factorbt.utils.errors import ContractViolation

INSTRUMENT = "instrument_id"
DATE = "date"
CLOSE = "close"
KEY_COLUMNS = (INSTRUMENT, DATE, CLOSE)


@dataclass(frozen=True)
class Observation:
    instrument_id: str
    date: pd.Timestamp
    close: float
    factors: Mapping[str, float] = field(default_factory=dict)


class Panel:
    def __init__(self, frame: pd.DataFrame, factors: Optional[Sequence[str]] = None):
        missing = [c for c in KEY_COLUMNS if c not in frame.columns]
        if missing:
            raise ContractViolation(f"[Panel] missing required columns: {missing}")

        if factors is None:
            factors = [
                c for c in frame.columns
                if c not in KEY_COLUMNS and pd.api.types.is_numeric_dtype(frame[c])
            ]
        else:
            unknown = [f for f in factors if f not in frame.columns]
            if unknown:
                raise ContractViolation(f"[Panel] unknown factor columns: {unknown}")

        df = frame.loc[:, [*KEY_COLUMNS, *factors]].copy()
        df[INSTRUMENT] = df[INSTRUMENT].astype(str)
        df[DATE] = pd.to_datetime(df[DATE]).dt.normalize()
        df[CLOSE] = df[CLOSE].astype(float)
        for f in factors:
            df[f] = df[f].astype(float)

        dup = df.duplicated(subset=[INSTRUMENT, DATE])
        if dup.any():
            first = df.loc[dup, [INSTRUMENT, DATE]].iloc[0]
            raise ContractViolation(
                f"[Panel] duplicate observation: {first[INSTRUMENT]} @ {first[DATE].date()}"
            )

        self._frame = df.sort_values([DATE, INSTRUMENT], kind="mergesort").reset_index(drop=True)
        self._factors: Tuple[str, ...] = tuple(factors)
        self._close: Optional[pd.DataFrame] = None

    # --------------------------------------------------
    @classmethod
    def from_observations(cls, observations: Iterable[Observation]) -> "Panel":
        rows: List[dict] = []
        factor_names: List[str] = []
        for ob in observations:
            for name in ob.factors:
                if name not in factor_names:
                    factor_names.append(name)
            rows.append(
                {
                    INSTRUMENT: ob.instrument_id,
                    DATE: ob.date,
                    CLOSE: ob.close,
                    **ob.factors,
                }
            )

        frame = pd.DataFrame(rows, columns=[*KEY_COLUMNS, *factor_names])
        return cls(frame, factors=factor_names)

    # --------------------------------------------------
    # shape
    # --------------------------------------------------
    def __len__(self) -> int:
        return len(self._frame)

    @property
    def is_empty(self) -> bool:
        return self._frame.empty

    @property
    def factors(self) -> Tuple[str, ...]:
        return self._factors

    @property
    def dates(self) -> pd.DatetimeIndex:
        return pd.DatetimeIndex(self._frame[DATE].unique(), name=DATE)

    @property
    def instruments(self) -> Tuple[str, ...]:
        return tuple(sorted(self._frame[INSTRUMENT].unique()))

    @property
    def min_date(self) -> Optional[pd.Timestamp]:
        if self.is_empty:
            return None
        return self._frame[DATE].iloc[0]

    def has_factor(self, name: str) -> bool:
        return name in self._factors

    # --------------------------------------------------
    # queries（全部返回副本）
    # --------------------------------------------------
    def to_frame(self) -> pd.DataFrame:
        return self._frame.copy()

    def at(self, date: DateLike) -> pd.DataFrame:
        d = DateTimeUtils.to_date(date)
        return self._frame.loc[self._frame[DATE] == d].reset_index(drop=True)

    def after(self, date: DateLike) -> pd.DataFrame:
        """rows with date strictly after `date`"""
        d = DateTimeUtils.to_date(date)
        return self._frame.loc[self._frame[DATE] > d].reset_index(drop=True)

    def for_instrument(self, instrument_id: str) -> pd.DataFrame:
        return self._frame.loc[self._frame[INSTRUMENT] == str(instrument_id)].reset_index(drop=True)

    def close_matrix(self) -> pd.DataFrame:
        """date x instrument close prices; NaN where no observation."""
        if self._close is None:
            self._close = self._frame.pivot(index=DATE, columns=INSTRUMENT, values=CLOSE).sort_index()
        return self._close.copy()

    def observations(self) -> Iterator[Observation]:
        columns = list(self._frame.columns)
        for row in self._frame.itertuples(index=False, name=None):
            rec = dict(zip(columns, row))
            yield Observation(
                instrument_id=rec[INSTRUMENT],
                date=rec[DATE],
                close=rec[CLOSE],
                factors={f: rec[f] for f in self._factors},
            )

    # --------------------------------------------------
    # contract
    # --------------------------------------------------
    def missing_pairs(self) -> List[Tuple[str, pd.Timestamp]]:
        """(instrument, date) pairs absent from the full universe × calendar grid."""
        if self.is_empty:
            return []
        grid = pd.MultiIndex.from_product(
            [self.instruments, self.dates], names=[INSTRUMENT, DATE]
        )
        present = pd.MultiIndex.from_frame(self._frame[[INSTRUMENT, DATE]])
        return list(grid.difference(present))

    def validate_complete(self) -> None:
        """
        Every instrument of the universe must have exactly one observation
        at every date (duplicates are already rejected at construction).
        """
        missing = self.missing_pairs()
        if missing:
            head = ", ".join(f"{i}@{d.date()}" for i, d in missing[:5])
            raise ContractViolation(
                f"[Panel] incomplete: {len(missing)} missing observation(s), e.g. {head}"
            )
