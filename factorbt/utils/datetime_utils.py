#!filepath: factorbt/utils/datetime_utils.py
from __future__ import annotations

from datetime import date, datetime
from typing import Union

import pandas as pd

from factorbt.utils.errors import ContractViolation

DateLike = Union[str, date, datetime, pd.Timestamp]


class DateTimeUtils:
    """
    Panel 日期统一为 tz-naive、归一到零点的 pd.Timestamp（日历日）。
    """

    _FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%Y%m%d")

    @classmethod
    def to_date(cls, value: DateLike) -> pd.Timestamp:
        """
        输入可能为：
            "2019-12-31"
            "2019/12/31"
            "20191231"
            date / datetime / pd.Timestamp
        """
        if isinstance(value, pd.Timestamp):
            return value.tz_localize(None).normalize() if value.tzinfo else value.normalize()

        if isinstance(value, datetime):
            return pd.Timestamp(value.date())

        if isinstance(value, date):
            return pd.Timestamp(value)

        s = str(value).strip()
        for fmt in cls._FORMATS:
            try:
                return pd.Timestamp(datetime.strptime(s[:10], fmt).date())
            except ValueError:
                pass

        raise ContractViolation(f"cannot parse date: {value!r}")
