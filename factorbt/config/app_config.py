#!filepath: factorbt/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .log_config import LogConfig
from .data_config import DataConfig
from .backtest_config import BacktestConfig


def project_root() -> str:
    """
    返回项目根目录（基于当前文件位置推导）:
    factorbt/config/app_config.py → factorbt/config → factorbt → project_root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


def default_config_path() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "base.yml")


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    data: DataConfig = Field(default_factory=DataConfig)
    backtest: BacktestConfig

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用 factorbt/config/base.yml
        - 环境变量覆盖：FACTORBT_PANEL_PATH / FACTORBT_LOG_LEVEL
        """
        load_dotenv(os.path.join(project_root(), ".env"))

        if path is None:
            path = default_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        panel_path = os.getenv("FACTORBT_PANEL_PATH")
        if panel_path:
            raw.setdefault("data", {})["panel_path"] = panel_path

        log_level = os.getenv("FACTORBT_LOG_LEVEL")
        if log_level:
            raw.setdefault("log", {})["level"] = log_level

        return cls(**raw)
