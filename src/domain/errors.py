"""Engine error types.

The engine has a single fatal precondition (a missing benchmark series);
every other data gap is recovered by policy.  Callers can catch
IndexEngineError to distinguish engine failures from a normal result.
"""

from __future__ import annotations


class IndexEngineError(Exception):
    """Base class for all engine errors."""


class MissingBenchmarkError(IndexEngineError, LookupError):
    """Raised when the benchmark series is absent; no backtest is possible."""

    def __init__(self, benchmark_symbol: str) -> None:
        super().__init__(
            f"{benchmark_symbol} data required for benchmark: "
            "no reference calendar is available"
        )
        self.benchmark_symbol = benchmark_symbol


class SeriesFileError(IndexEngineError, ValueError):
    """Raised when a series document cannot be read or parsed."""
