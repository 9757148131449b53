#!filepath: factorbt/config/data_config.py
from pydantic import BaseModel, Field
from typing import List, Literal, Optional


class SchemaConfig(BaseModel):
    """原始列名 -> Panel 列名"""
    instrument: str = "instrument_id"
    date: str = "date"
    close: str = "close"


class DataConfig(BaseModel):
    panel_path: Optional[str] = None
    # 为空 = 除 schema 外的所有数值列都视为 factor
    factors: List[str] = Field(default_factory=list)
    schema_: SchemaConfig = Field(default_factory=SchemaConfig, alias="schema")
    impute: Literal["none", "median"] = "none"

    model_config = {"populate_by_name": True}
