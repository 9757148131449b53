#!filepath: factorbt/dataloader/panel_loader.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

import pandas as pd

from factorbt import logs
from factorbt.config.data_config import DataConfig
from factorbt.core.panel import CLOSE, DATE, INSTRUMENT, KEY_COLUMNS, Panel
from factorbt.dataloader.imputer import Imputer, make_imputer
from factorbt.utils.errors import ContractViolation


class PanelLoader:
    """
    PanelLoader

    file (csv / parquet) -> Panel

    - 列名映射来自 DataConfig.schema
    - factors 为空时：除 key 列外的所有数值列
    - 可选 Imputer（默认不补）
    """

    def __init__(self, cfg: DataConfig, imputer: Optional[Imputer] = None):
        self.cfg = cfg
        self.imputer = imputer if imputer is not None else make_imputer(cfg.impute)

    @staticmethod
    def read(path: Path) -> pd.DataFrame:
        suffix = path.suffix.lower()
        if suffix == ".parquet":
            return pd.read_parquet(path, engine="pyarrow")
        if suffix in (".csv", ".txt"):
            return pd.read_csv(path)
        raise ContractViolation(f"[PanelLoader] unsupported panel format: {path.name}")

    def load(self, path: str | Path | None = None) -> Panel:
        path = path if path is not None else self.cfg.panel_path
        if path is None:
            raise ContractViolation("[PanelLoader] no panel path configured")

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Panel file not found: {path}")

        raw = self.read(path)
        schema = self.cfg.schema_
        frame = raw.rename(
            columns={
                schema.instrument: INSTRUMENT,
                schema.date: DATE,
                schema.close: CLOSE,
            }
        )

        missing = [c for c in KEY_COLUMNS if c not in frame.columns]
        if missing:
            raise ContractViolation(f"[PanelLoader] {path.name} missing columns: {missing}")

        factors = list(self.cfg.factors) or [
            c for c in frame.columns
            if c not in KEY_COLUMNS and pd.api.types.is_numeric_dtype(frame[c])
        ]
        unknown = [f for f in factors if f not in frame.columns]
        if unknown:
            raise ContractViolation(f"[PanelLoader] {path.name} missing factor columns: {unknown}")

        frame = self.imputer.apply(frame, factors, DATE)
        panel = Panel(frame, factors=factors)

        logs.info(
            f"[PanelLoader] {path.name}: rows={len(panel)} "
            f"instruments={len(panel.instruments)} dates={len(panel.dates)} factors={list(panel.factors)}"
        )
        return panel
