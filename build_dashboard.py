#!/usr/bin/env python
"""
Dashboard data pipeline for the synthetic ETH volatility dashboard.
Simulates one price path and feeds it to the on-chain deriver, the
volatility forecaster and the regime segmenter.
"""
import sys
import json
import argparse
import logging
import traceback
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np

from config import DEFAULT_FORECAST
from models import (
    DailyObservation,
    ForecastPoint,
    ModelDescriptor,
    OnChainObservation,
    PerformanceRecord,
    VolatilityRegime,
    records_to_dicts,
)
from simulation import PricePathSimulator, OnChainDeriver, SeriesValidator
from forecasting import (
    VolatilityForecaster,
    RegimeSegmenter,
    ModelActivity,
    list_models,
    list_performance,
    best_models,
)
from utils.summary import headline_metrics, regime_statistics, forecast_summary


@dataclass
class DashboardSnapshot:
    """Everything the dashboard renders, generated from a single price path"""
    prices: List[DailyObservation]
    onchain: List[OnChainObservation]
    forecasts: List[ForecastPoint]
    regimes: List[VolatilityRegime]
    models: List[ModelDescriptor]
    performance: List[PerformanceRecord]
    activity: ModelActivity
    summary: Dict = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return {
            'priceData': records_to_dicts(self.prices),
            'onChainData': records_to_dicts(self.onchain),
            'forecasts': records_to_dicts(self.forecasts),
            'volatilityRegimes': records_to_dicts(self.regimes),
            'bayesianModels': records_to_dicts(self.models),
            'modelPerformance': records_to_dicts(self.performance),
            'activeModels': self.activity.to_dict(),
            'summary': self.summary,
        }


def setup_logging(log_dir: Optional[Path] = None, level: int = logging.INFO) -> logging.Logger:
    """
    Configure logging with a console handler and, when log_dir is given,
    a timestamped file handler

    Parameters:
    -----------
    log_dir : Path, optional
        Directory for the log file
    level : int
        Logging level for both handlers

    Returns:
    --------
    logging.Logger
        Configured logger
    """
    logger = logging.getLogger("dashboard")
    logger.setLevel(level)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        file_handler = logging.FileHandler(log_dir / f"dashboard_{timestamp}.log")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        )
        logger.addHandler(file_handler)

    # stdout carries the JSON payload
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(console_handler)

    return logger


def run_pipeline(days: int = 365,
                 horizon_days: int = DEFAULT_FORECAST.default_horizon,
                 seed: Optional[int] = None,
                 today: Optional[date] = None,
                 now: Optional[datetime] = None,
                 logger: Optional[logging.Logger] = None) -> DashboardSnapshot:
    """Generate a complete dashboard snapshot"""
    if logger is None:
        logger = logging.getLogger('dashboard')

    random_state = np.random.RandomState(seed)

    logger.info(f"Simulating {days} days of price data...")
    prices = PricePathSimulator(random_state=random_state).simulate(days, today=today)

    logger.info("Deriving on-chain metrics...")
    onchain = OnChainDeriver(random_state=random_state).derive(prices)
    SeriesValidator().require_valid(prices, onchain)

    logger.info(f"Forecasting volatility {horizon_days} days ahead...")
    forecasts = VolatilityForecaster().forecast(prices, horizon_days)

    logger.info("Segmenting volatility regimes...")
    regimes = RegimeSegmenter(random_state=random_state).segment(prices)

    models = list_models(now=now)
    performance = list_performance()
    activity = ModelActivity(models)

    summary = {
        'headline': headline_metrics(prices, activity),
        'regimes': regime_statistics(regimes),
        'forecast': forecast_summary(prices, forecasts),
        'bestModels': best_models(performance),
    }
    logger.info(
        f"Snapshot ready: {len(prices)} days, {len(regimes)} regimes, "
        f"current regime {summary['regimes']['current_classification']}"
    )

    return DashboardSnapshot(
        prices=prices,
        onchain=onchain,
        forecasts=forecasts,
        regimes=regimes,
        models=models,
        performance=performance,
        activity=activity,
        summary=summary,
    )


def save_plots(snapshot: DashboardSnapshot, plot_dir: Path) -> List[Path]:
    """Render the snapshot figures into plot_dir"""
    import matplotlib
    matplotlib.use('Agg')
    from utils.visualization import DashboardVisualizer

    plot_dir = Path(plot_dir)
    paths = {
        'price': plot_dir / 'price_path.png',
        'forecast': plot_dir / 'volatility_forecast.png',
        'onchain': plot_dir / 'onchain_metrics.png',
        'regimes': plot_dir / 'regime_timeline.png',
    }

    with DashboardVisualizer() as viz:
        viz.plot_price_path(snapshot.prices, title='ETH Price', save_path=paths['price'])
        viz.plot_volatility_forecast(snapshot.prices, snapshot.forecasts,
                                     title='Volatility Forecast', save_path=paths['forecast'])
        viz.plot_onchain_metrics(snapshot.onchain, title='On-Chain Metrics',
                                 save_path=paths['onchain'])
        viz.plot_regime_timeline(snapshot.prices, snapshot.regimes,
                                 title='Volatility Regime Timeline', save_path=paths['regimes'])

    return list(paths.values())


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate synthetic ETH dashboard data")
    parser.add_argument('--days', type=int, default=365, help="Days of simulated history")
    parser.add_argument('--horizon', type=int, default=DEFAULT_FORECAST.default_horizon,
                        help="Forecast horizon in days")
    parser.add_argument('--seed', type=int, default=None, help="Random seed for reproducible output")
    parser.add_argument('--plots', type=Path, default=None, help="Directory to write PNG figures")
    parser.add_argument('--log-dir', type=Path, default=None, help="Directory for log files")
    parser.add_argument('--indent', type=int, default=None, help="JSON indentation")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = parse_args(argv)
    logger = setup_logging(args.log_dir)

    try:
        snapshot = run_pipeline(
            days=args.days,
            horizon_days=args.horizon,
            seed=args.seed,
            logger=logger,
        )

        if args.plots is not None:
            logger.info(f"Writing figures to {args.plots}...")
            save_plots(snapshot, args.plots)

        json.dump(snapshot.to_dict(), sys.stdout, indent=args.indent)
        sys.stdout.write("\n")
        return 0

    except Exception as e:
        logger.error(f"Pipeline failed: {str(e)}")
        logger.error(f"Traceback: {traceback.format_exc()}")
        raise


if __name__ == '__main__':
    sys.exit(main())
