"""Backtest orchestration service.

Pipeline:
    run
        → _benchmark             (master calendar; MissingBenchmarkError)
        → trim_calendar          (explicit range or trailing window)
        → align_all              (carry-forward onto the calendar)
        → PortfolioSimulator.run (rebalance / drift / NAV)
        → _universe_stats        (window-average volume eligibility)
        → _constituents          (assets held at least once)
        → BacktestResult

sweep runs the strategy grid (interval × num_assets × max_weight) over the
same inputs and ranks the configurations by index Sharpe ratio.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import date

from src.domain.errors import MissingBenchmarkError
from src.domain.models.assets import AssetDefinition, AssetUniverse
from src.domain.models.backtest import (
    AssetHistory,
    BacktestConfig,
    BacktestResult,
    Constituent,
    SeriesData,
    SweepResult,
    UniverseStats,
)
from src.domain.models.enums import RebalanceInterval
from src.domain.models.market_data import DailyAssetSeries
from src.domain.models.screening import ScreeningRules
from src.domain.universe import DEFAULT_UNIVERSE

from .alignment import AlignedSeries, SeriesAlignmentService
from .screening import ScreeningService
from .simulation import PortfolioSimulator, SimulationResult
from .statistics import StatisticsService

logger = logging.getLogger(__name__)

DEFAULT_INDEX_CODE = "SOLECO"

SWEEP_INTERVALS: tuple[RebalanceInterval, ...] = (
    RebalanceInterval.WEEKLY,
    RebalanceInterval.BIWEEKLY,
    RebalanceInterval.MONTHLY,
)
SWEEP_NUM_ASSETS: tuple[int, ...] = (5, 10, 15, 20, 25)
SWEEP_MAX_WEIGHTS: tuple[float, ...] = (0.10, 0.20, 0.30, 0.50)
SWEEP_MIN_WEIGHT = 0.01


class BacktestService:
    """Composes alignment, simulation and statistics into one backtest.

    Stateless between calls: every input arrives through run() / sweep(),
    so one instance may serve concurrent runs.
    """

    def __init__(
        self,
        alignment: SeriesAlignmentService | None = None,
        simulator: PortfolioSimulator | None = None,
        statistics: StatisticsService | None = None,
        screening: ScreeningService | None = None,
    ) -> None:
        self._screening = screening or ScreeningService()
        self._alignment = alignment or SeriesAlignmentService()
        self._simulator = simulator or PortfolioSimulator(screening=self._screening)
        self._statistics = statistics or StatisticsService()

    # ------------------------------------------------------------------ #
    # Public API                                                           #
    # ------------------------------------------------------------------ #

    def run(
        self,
        config: BacktestConfig,
        series: Mapping[str, DailyAssetSeries],
        universe: AssetUniverse = DEFAULT_UNIVERSE,
        rules: ScreeningRules | None = None,
        index_code: str = DEFAULT_INDEX_CODE,
    ) -> BacktestResult:
        """Run one backtest.

        Args:
            config: strategy parameters.
            series: symbol → daily history; must contain the benchmark.
            universe: asset definitions; only those with a series take part.
            rules: screening parameters; ScreeningRules.default() when None.
            index_code: label of the index NAV series.

        Raises:
            MissingBenchmarkError: the benchmark series is absent.
        """
        rules = rules or ScreeningRules.default()
        benchmark = self._benchmark(series, rules.benchmark_symbol)
        calendar = self._alignment.trim_calendar(benchmark.dates, config)

        assets = [a for a in universe if a.symbol in series]
        logger.info(
            "Backtest %s over %d dates (%s..%s), %d of %d universe assets with data.",
            "fixed-weight" if config.uses_fixed_weights else config.rebalance_interval.value,
            len(calendar),
            calendar[0] if calendar else None,
            calendar[-1] if calendar else None,
            len(assets),
            len(universe),
        )

        aligned = self._alignment.align_all({a.symbol: series[a.symbol] for a in assets}, calendar)
        benchmark_aligned = aligned.get(rules.benchmark_symbol)
        if benchmark_aligned is None:
            benchmark_aligned = self._alignment.align(benchmark, calendar)

        simulation = self._simulator.run(calendar, aligned, assets, config, rules)

        benchmark_nav = self._statistics.to_nav(benchmark_aligned.prices.tolist())
        return BacktestResult(
            config=config,
            index=SeriesData(
                code=index_code,
                dates=tuple(calendar),
                nav=tuple(simulation.nav),
                stats=self._statistics.compute(simulation.nav),
            ),
            benchmark=SeriesData(
                code=rules.benchmark_symbol,
                dates=tuple(calendar),
                nav=tuple(benchmark_nav),
                stats=self._statistics.compute(benchmark_nav),
            ),
            constituents=tuple(self._constituents(simulation, aligned, assets, calendar, rules)),
            rebalance_history=tuple(simulation.rebalance_history),
            universe_stats=self._universe_stats(assets, aligned, config, rules),
        )

    def sweep(
        self,
        base_config: BacktestConfig,
        series: Mapping[str, DailyAssetSeries],
        universe: AssetUniverse = DEFAULT_UNIVERSE,
        rules: ScreeningRules | None = None,
        max_workers: int | None = None,
    ) -> list[SweepResult]:
        """Run the parameter grid and rank it by index Sharpe ratio (descending).

        The base config contributes the window / date range; fixed weights
        are ignored.  max_workers > 1 fans the runs out over a thread pool.
        """
        configs = self.sweep_configs(base_config)
        logger.info("Sweeping %d configurations.", len(configs))

        def evaluate(config: BacktestConfig) -> SweepResult:
            result = self.run(config, series, universe, rules)
            return SweepResult(
                id=f"{config.rebalance_interval.value}-{config.num_assets}-{config.max_weight}",
                config=config,
                stats=result.index.stats,
            )

        if max_workers and max_workers > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                results = list(pool.map(evaluate, configs))
        else:
            results = [evaluate(c) for c in configs]

        return sorted(results, key=lambda r: r.stats.sharpe_ratio, reverse=True)

    def sweep_configs(self, base_config: BacktestConfig) -> list[BacktestConfig]:
        return [
            BacktestConfig(
                rebalance_interval=interval,
                num_assets=num_assets,
                max_weight=max_weight,
                min_weight=SWEEP_MIN_WEIGHT,
                backtest_window=base_config.backtest_window,
                start_date=base_config.start_date,
                end_date=base_config.end_date,
            )
            for interval, num_assets, max_weight in itertools.product(
                SWEEP_INTERVALS, SWEEP_NUM_ASSETS, SWEEP_MAX_WEIGHTS
            )
        ]

    # ------------------------------------------------------------------ #
    # Pipeline stages                                                      #
    # ------------------------------------------------------------------ #

    def _benchmark(self, series: Mapping[str, DailyAssetSeries], symbol: str) -> DailyAssetSeries:
        benchmark = series.get(symbol)
        if benchmark is None:
            raise MissingBenchmarkError(symbol)
        return benchmark

    def _universe_stats(
        self,
        assets: Sequence[AssetDefinition],
        aligned: Mapping[str, AlignedSeries],
        config: BacktestConfig,
        rules: ScreeningRules,
    ) -> UniverseStats:
        """Eligibility counts from each asset's average volume over the window."""
        eligible_vol = [
            a
            for a in assets
            if len(aligned[a.symbol]) > 0
            and float(aligned[a.symbol].volumes.mean()) >= rules.min_avg_daily_volume_usd
        ]
        failed_native = sum(1 for a in eligible_vol if not a.is_native)
        return UniverseStats(
            total_evaluated=len(assets),
            failed_volume=len(assets) - len(eligible_vol),
            failed_native=failed_native,
            eligible_count=len(eligible_vol) - failed_native,
            final_selected=config.num_assets,
        )

    def _constituents(
        self,
        simulation: SimulationResult,
        aligned: Mapping[str, AlignedSeries],
        assets: Sequence[AssetDefinition],
        calendar: Sequence[date],
        rules: ScreeningRules,
    ) -> list[Constituent]:
        by_symbol = {a.symbol: a for a in assets}
        last = len(calendar) - 1
        constituents = []
        for symbol in simulation.held_symbols():
            asset, series = by_symbol[symbol], aligned[symbol]
            weights = simulation.weight_history[symbol]
            constituents.append(
                Constituent(
                    id=asset.asset_id,
                    symbol=symbol,
                    name=asset.name,
                    current_weight=float(weights[-1]),
                    history=AssetHistory(
                        dates=tuple(calendar),
                        prices=tuple(series.prices.tolist()),
                        market_caps=tuple(series.market_caps.tolist()),
                        weights=tuple(weights.tolist()),
                    ),
                    stats=self._statistics.compute(series.prices.tolist()),
                    active_discrepancies=tuple(
                        self._screening.data_quality_flags(
                            series.market_data(last, rules.volume_lookback_days), rules
                        )
                    ),
                )
            )
        constituents.sort(key=lambda c: c.current_weight, reverse=True)
        return constituents
