"""Domain services package."""

from .alignment import AlignedSeries, SeriesAlignmentService
from .allocation import WeightAllocationService
from .backtest import BacktestService
from .screening import ScreeningService
from .simulation import PortfolioSimulator, SimulationResult
from .statistics import StatisticsService
from .validation import RebalanceValidationService

__all__ = [
    "AlignedSeries",
    "BacktestService",
    "PortfolioSimulator",
    "RebalanceValidationService",
    "ScreeningService",
    "SeriesAlignmentService",
    "SimulationResult",
    "StatisticsService",
    "WeightAllocationService",
]
