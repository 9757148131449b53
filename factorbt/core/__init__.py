"""
Core data model

Defines WHAT a backtest reads and produces, independent of any engine,
pipeline, or file format.

Invariants:
- Panel is read-only once constructed.
- Every derived structure (IndexSeries, ReturnSeries, Portfolio,
  PerformanceReport) is a frozen value object with no reference back
  into the Panel.
"""
from factorbt.core.panel import Observation, Panel
from factorbt.core.types import (
    IndexSeries,
    ReturnSeries,
    Portfolio,
    PerformanceReport,
)

__all__ = [
    "Observation",
    "Panel",
    "IndexSeries",
    "ReturnSeries",
    "Portfolio",
    "PerformanceReport",
]
