"""Command-line surface for the index engine.

    index-engine backtest SERIES_JSON [options]   run one backtest, print/write JSON
    index-engine sweep SERIES_JSON [--workers N]  rank the parameter grid
    index-engine compliance                       audit the default universe
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from src.config import EngineSettings, configure_logging
from src.domain.errors import IndexEngineError
from src.domain.models.backtest import BacktestConfig
from src.domain.models.enums import BacktestWindow, RebalanceInterval
from src.domain.services.backtest import BacktestService
from src.domain.services.validation import RebalanceValidationService
from src.domain.universe import DEFAULT_UNIVERSE
from src.infrastructure.series_files import JsonSeriesRepository

app = typer.Typer(no_args_is_help=True)

_DATE_FORMATS = ["%Y-%m-%d"]


def _settings() -> EngineSettings:
    settings = EngineSettings()
    configure_logging(settings.log_level)
    return settings


def _parse_fixed_weights(raw: Optional[str]) -> Optional[dict[str, float]]:
    if raw is None:
        return None
    try:
        weights = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"--fixed-weights is not valid JSON: {exc}") from exc
    if not isinstance(weights, dict):
        raise typer.BadParameter("--fixed-weights must be a JSON object of symbol → weight")
    return {str(k): float(v) for k, v in weights.items()}


@app.command()
def backtest(
    series_file: Path = typer.Argument(..., help="JSON document of per-asset daily series."),
    interval: RebalanceInterval = typer.Option(RebalanceInterval.WEEKLY, "--interval"),
    assets: int = typer.Option(10, "--assets", help="Target constituent count."),
    max_weight: float = typer.Option(0.25, "--max-weight"),
    min_weight: float = typer.Option(0.01, "--min-weight"),
    window: BacktestWindow = typer.Option(BacktestWindow.TWELVE_MONTHS, "--window"),
    start: Optional[datetime] = typer.Option(None, "--start", formats=_DATE_FORMATS),
    end: Optional[datetime] = typer.Option(None, "--end", formats=_DATE_FORMATS),
    fixed_weights: Optional[str] = typer.Option(None, "--fixed-weights", help='e.g. \'{"JUP": 0.5, "RAY": 0.5}\''),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the result here instead of stdout."),
) -> None:
    """Run one backtest and emit the result in its camelCase JSON shape."""
    try:
        settings = _settings()
        config = BacktestConfig(
            rebalance_interval=interval,
            num_assets=assets,
            max_weight=max_weight,
            min_weight=min_weight,
            backtest_window=window,
            start_date=start.date() if start else None,
            end_date=end.date() if end else None,
            fixed_weights=_parse_fixed_weights(fixed_weights),
        )
        series = JsonSeriesRepository(series_file).load()
        result = BacktestService().run(
            config,
            series,
            DEFAULT_UNIVERSE,
            settings.screening_rules(),
            index_code=settings.index_code,
        )
    except (IndexEngineError, ValidationError, ValueError) as e:
        typer.echo(f"Backtest failed: {e}", err=True)
        raise typer.Exit(code=1)

    document = json.dumps(result.to_wire(), indent=2)
    if output is None:
        typer.echo(document)
    else:
        output.write_text(document, encoding="utf-8")
        typer.echo(f"Wrote backtest result to {output}")


@app.command()
def sweep(
    series_file: Path = typer.Argument(..., help="JSON document of per-asset daily series."),
    window: BacktestWindow = typer.Option(BacktestWindow.TWELVE_MONTHS, "--window"),
    workers: int = typer.Option(1, "--workers", min=1, help="Thread-pool size for the grid."),
    top: int = typer.Option(10, "--top", min=1, help="Rows to print."),
) -> None:
    """Rank the rebalance × size × cap grid by index Sharpe ratio."""
    try:
        settings = _settings()
        series = JsonSeriesRepository(series_file).load()
        results = BacktestService().sweep(
            BacktestConfig(backtest_window=window),
            series,
            DEFAULT_UNIVERSE,
            settings.screening_rules(),
            max_workers=workers,
        )
    except (IndexEngineError, ValidationError, ValueError) as e:
        typer.echo(f"Sweep failed: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"{'config':<18} {'sharpe':>8} {'ann.ret':>9} {'ann.vol':>9} {'max.dd':>9}")
    typer.echo("-" * 57)
    for r in results[:top]:
        s = r.stats
        typer.echo(
            f"{r.id:<18} {s.sharpe_ratio:>8.2f} {s.annualized_return:>9.2%} "
            f"{s.annualized_volatility:>9.2%} {s.max_drawdown:>9.2%}"
        )


@app.command()
def compliance() -> None:
    """Report which universe assets satisfy the static selection criteria."""
    settings = _settings()
    report = RebalanceValidationService().compliance_report(DEFAULT_UNIVERSE, settings.screening_rules())

    typer.echo(f"Compliant: {report.compliant}/{report.total}")
    for symbol in report.compliant_assets:
        typer.echo(f"  OK   {symbol}")
    for entry in report.non_compliant_assets:
        typer.echo(f"  FAIL {entry.symbol}: {'; '.join(entry.issues)}")
    if report.non_compliant:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
