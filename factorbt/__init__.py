#!filepath: factorbt/__init__.py

from .utils.logger import Logging, logs
from .utils.errors import FactorBacktestError, ContractViolation

__version__ = "0.1.0"

__all__ = [
    "logs", "Logging",
    "FactorBacktestError",
    "ContractViolation",
    "__version__",
]
