#!filepath: factorbt/config/log_config.py
from pydantic import BaseModel, field_validator

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class LogConfig(BaseModel):
    """
    日志落盘配置

    - 文件名：{dir}/{file_prefix}_{YYYY-MM-DD}.log
    - level 大小写不敏感（FACTORBT_LOG_LEVEL=debug 亦可）
    """

    dir: str = "logs"
    file_prefix: str = "factorbt"
    rotation: str = "1 day"
    retention: str = "30 days"
    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"unknown log level {v!r}, expected one of {list(LOG_LEVELS)}")
        return v
