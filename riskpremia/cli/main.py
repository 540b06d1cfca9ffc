"""
Command-line interface for the Risk Premia engine.

Usage:
    # Show today's desired positions (nothing is submitted)
    riskpremia preview --config config/portfolio.yaml --capital 27000

    # Evaluate with current holdings and submit orders (paper CSV by default)
    riskpremia rebalance --positions positions.yaml --phase live

    # Use local CSV history instead of Yahoo Finance
    riskpremia preview --source csv --data-dir data/
"""
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv
from requests.exceptions import ConnectionError as DataSourceConnectionError

from riskpremia.data.fetchers.base import DataFetcher
from riskpremia.live.daily_runner import DailyRebalanceRunner
from riskpremia.live.exceptions import CriticalFailure
from riskpremia.live.market_calendar import get_last_trading_day
from riskpremia.live.mode import RunPhase
from riskpremia.live.positions import PositionProvider, StaticPositionProvider, YamlPositionProvider
from riskpremia.performance.diagnostics_logger import DiagnosticsLogger
from riskpremia.utils.config import get_run_phase_name, load_config
from riskpremia.utils.logging_config import setup_logger

load_dotenv()


def _build_fetcher(source: str, data_dir: Optional[str]) -> DataFetcher:
    if source == 'csv':
        if not data_dir:
            raise click.UsageError("--data-dir is required with --source csv")
        from riskpremia.data.handlers.csv import CSVDataHandler
        return CSVDataHandler(data_dir=data_dir)

    from riskpremia.data.fetchers.yahoo import YahooDataFetcher
    return YahooDataFetcher()


def _build_positions(positions: Optional[str]) -> PositionProvider:
    if positions:
        return YamlPositionProvider(Path(positions))
    return StaticPositionProvider()


def _resolve_date(as_of: Optional[datetime]) -> date:
    return get_last_trading_day(as_of.date() if as_of else None)


def _run(
    phase: RunPhase,
    config_path: str,
    source: str,
    data_dir: Optional[str],
    capital: Optional[float],
    positions: Optional[str],
    as_of: Optional[datetime],
    diagnostics_log: Optional[str],
    verbose: bool,
) -> None:
    logger = setup_logger('', level=logging.DEBUG if verbose else logging.INFO, log_to_console=verbose)

    try:
        config = load_config(Path(config_path))
        if capital is not None:
            config = config.with_capital_exposure(capital)

        runner = DailyRebalanceRunner(
            config=config,
            data_fetcher=_build_fetcher(source, data_dir),
            position_provider=_build_positions(positions),
            phase=phase,
            diagnostics_logger=DiagnosticsLogger(Path(diagnostics_log)) if diagnostics_log else None,
        )

        evaluation_date = _resolve_date(as_of)
        decision = runner.run_day(evaluation_date)

    except (FileNotFoundError, ValueError, CriticalFailure, DataSourceConnectionError) as e:
        logger.error(f"Daily run failed: {e}")
        raise click.ClickException(str(e))

    click.echo(f"\n#####\n{runner.engine.trigger.describe()}\n#####")
    click.echo(f"USD exposure: {decision.capital_exposure:,.0f}")

    if decision.is_warmup:
        click.echo(f"{evaluation_date}: warm-up period, not enough price history yet")
        return

    click.echo(runner.last_report)

    for instrument in decision.instruments:
        state = decision.rebalance_states[instrument.symbol]
        click.echo(
            f"{instrument.symbol}: current {instrument.current_position}, "
            f"desired {instrument.target_position} ({state.value})"
        )

    if phase.is_live:
        if not runner.last_orders:
            click.echo("No orders submitted")
        for order in runner.last_orders:
            click.echo(
                f"{order['action']} {order['qty']} {order['symbol']} "
                f"@ {order['price']:.2f} ({order['order_type']})"
            )


def common_options(func):
    """Options shared by every evaluation command."""
    options = [
        click.option('--config', 'config_path', default='config/portfolio.yaml',
                     show_default=True, help='Portfolio configuration YAML'),
        click.option('--source', type=click.Choice(['yahoo', 'csv']), default='yahoo',
                     show_default=True, help='Daily price source'),
        click.option('--data-dir', default=None, help='Directory of <SYMBOL>.csv files (--source csv)'),
        click.option('--capital', type=float, default=None,
                     help='USD exposure override (default: config / RISKPREMIA_CAPITAL_EXPOSURE)'),
        click.option('--positions', default=None, help='YAML file of current {symbol: shares}'),
        click.option('--as-of', type=click.DateTime(formats=['%Y-%m-%d']), default=None,
                     help='Evaluation date (default: last trading day)'),
        click.option('--diagnostics-log', default=None, help='Append daily diagnostics to this CSV'),
        click.option('--verbose', '-v', is_flag=True, help='Log to console at DEBUG level'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.version_option(version='0.1.0', prog_name='riskpremia')
def cli():
    """
    Risk Premia - volatility-targeted daily rebalancing.

    Sizes a small ETF portfolio by inverse volatility under a leverage cap
    and rebalances on tracking error or on a trading day of the month.
    """
    pass


@cli.command()
@common_options
def preview(**kwargs):
    """Show desired positions without submitting anything."""
    _run(RunPhase.PREVIEW, **kwargs)


@cli.command()
@click.option('--phase', default=None,
              help='Run phase: preview or live (default: RISKPREMIA_RUN_PHASE or preview)')
@common_options
def rebalance(phase, **kwargs):
    """Evaluate rebalance triggers and submit orders in live phase."""
    try:
        run_phase = RunPhase.from_string(phase or get_run_phase_name())
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--phase")
    _run(run_phase, **kwargs)


if __name__ == '__main__':
    cli()
