from typing import List, Optional
from datetime import timedelta
import logging
import math
import numpy as np
import pandas as pd

from config import ForecastConfig, DEFAULT_FORECAST
from models import DailyObservation, ForecastPoint, observations_to_frame

logger = logging.getLogger(__name__)


class VolatilityForecaster:
    """Mean-reverting volatility forecast with widening credible intervals"""

    def __init__(self, config: Optional[ForecastConfig] = None):
        """Initialize forecaster with fixed mean-reversion constants"""
        self.config = config or DEFAULT_FORECAST
        self.logger = logging.getLogger('forecasting.forecaster')
        self.forecasts: List[ForecastPoint] = []

    def recent_volatility(self, series: List[DailyObservation]) -> float:
        """Mean volatility over the trailing lookback window"""
        if not series:
            raise ValueError("Cannot forecast from an empty history")

        lookback = self.config.lookback
        if len(series) < lookback:
            self.logger.warning(
                f"History shorter than lookback window: {len(series)} < {lookback}, "
                f"averaging all available observations"
            )
        return float(np.mean([obs.volatility for obs in series[-lookback:]]))

    def point_forecast(self, avg_volatility: float, step: int) -> float:
        """Geometric decay from avg_volatility toward the long-term mean"""
        decay = self.config.mean_reversion_rate ** step
        return avg_volatility * decay + self.config.long_term_mean * (1 - decay)

    def uncertainty(self, step: int, horizon_days: int) -> float:
        """Band half-width unit; grows with sqrt of the horizon fraction"""
        time_factor = math.sqrt(step / horizon_days)
        return self.config.time_uncertainty * time_factor + self.config.base_uncertainty

    def forecast(self, series: List[DailyObservation],
                 horizon_days: Optional[int] = None) -> List[ForecastPoint]:
        """
        Forecast volatility for the days following the last observation.

        Args:
            series: Historical observations in date order, must be non-empty
            horizon_days: Number of forecast days, defaults to config.default_horizon

        Returns:
            List of ForecastPoint, one per forecast day
        """
        if horizon_days is None:
            horizon_days = self.config.default_horizon
        if horizon_days < 1:
            raise ValueError(f"Forecast horizon must be positive, got {horizon_days}")

        avg_volatility = self.recent_volatility(series)
        last_date = series[-1].date
        z_95, z_50 = self.config.z_95, self.config.z_50

        self.forecasts = []
        for step in range(1, horizon_days + 1):
            predicted = self.point_forecast(avg_volatility, step)
            u = self.uncertainty(step, horizon_days)

            self.forecasts.append(ForecastPoint(
                date=last_date + timedelta(days=step),
                predicted=round(predicted, 4),
                lower95=round(predicted - z_95 * u, 4),
                upper95=round(predicted + z_95 * u, 4),
                lower50=round(predicted - z_50 * u, 4),
                upper50=round(predicted + z_50 * u, 4),
            ))

        logger.info(
            f"Forecast {horizon_days} days from {last_date}: "
            f"start vol {avg_volatility:.4f}, final {self.forecasts[-1].predicted:.4f}"
        )
        return self.forecasts

    def to_dataframe(self) -> pd.DataFrame:
        """Convert the last forecast to a DataFrame indexed by date"""
        if not self.forecasts:
            raise ValueError("No forecasts available")
        return observations_to_frame(self.forecasts)


def forecast(series: List[DailyObservation],
             horizon_days: Optional[int] = None,
             config: Optional[ForecastConfig] = None) -> List[ForecastPoint]:
    """Forecast volatility (see VolatilityForecaster.forecast)"""
    return VolatilityForecaster(config=config).forecast(series, horizon_days)
