"""
Synthetic ETH price path with volatility clustering and cyclical drift.
"""

from typing import List, Optional
from datetime import date, timedelta
import logging
import math
import numpy as np
import pandas as pd

from config import SimulationConfig, DEFAULT_SIMULATION
from models import DailyObservation, observations_to_frame


class PricePathSimulator:
    """Simulates a daily price/volatility/return series"""

    def __init__(self, config: Optional[SimulationConfig] = None,
                 random_state: Optional[np.random.RandomState] = None):
        """
        Initialize simulator

        Args:
            config: Simulation constants, defaults to DEFAULT_SIMULATION
            random_state: Source of uniform draws; pass a seeded RandomState
                for reproducible paths
        """
        self.config = config or DEFAULT_SIMULATION
        self.random_state = random_state if random_state is not None else np.random.RandomState()
        self.logger = logging.getLogger('simulation.price')

    def _next_volatility(self, volatility: float) -> float:
        cfg = self.config
        shock = self.random_state.uniform(-cfg.shock_half_width, cfg.shock_half_width)
        return max(
            cfg.volatility_floor,
            cfg.persistence * volatility + (1 - cfg.persistence) * cfg.long_run_volatility + shock
        )

    def _base_drift(self, day_index: int) -> float:
        """Bull drift while the cyclical regime signal is above threshold"""
        cfg = self.config
        regime_prob = cfg.regime_center + cfg.regime_amplitude * math.sin(day_index / cfg.regime_period)
        return cfg.bull_drift if regime_prob > cfg.regime_threshold else cfg.bear_drift

    def simulate(self, days: int, today: Optional[date] = None) -> List[DailyObservation]:
        """
        Generate `days` consecutive observations ending the day before `today`.

        Args:
            days: Number of daily observations, must be >= 1
            today: Reference date, defaults to the current date

        Returns:
            List of DailyObservation in date order
        """
        if days < 1:
            raise ValueError(f"Number of days must be positive, got {days}")

        cfg = self.config
        today = today or date.today()
        start_date = today - timedelta(days=days)
        dates = pd.date_range(start=start_date, periods=days, freq='D')

        price = cfg.initial_price
        volatility = cfg.initial_volatility
        low_volume, high_volume = cfg.volume_range
        series = []

        for i, day in enumerate(dates):
            volatility = self._next_volatility(volatility)
            returns = self._base_drift(i) + self.random_state.uniform(-0.5, 0.5) * volatility
            price = price * (1 + returns)
            volume = self.random_state.uniform(low_volume, high_volume)
            market_cap = price * cfg.circulating_supply

            series.append(DailyObservation(
                date=day.date(),
                price=round(price, 2),
                volume=float(round(volume)),
                market_cap=float(round(market_cap)),
                returns=round(returns, 4),
                volatility=round(volatility, 4),
            ))

        self.logger.debug(
            f"Simulated {days} days from {series[0].date} to {series[-1].date}, "
            f"final price {series[-1].price:.2f}"
        )
        return series

    def to_dataframe(self, series: List[DailyObservation]) -> pd.DataFrame:
        """Convert a simulated series to a DataFrame indexed by date"""
        return observations_to_frame(series)


def simulate(days: int,
             random_state: Optional[np.random.RandomState] = None,
             today: Optional[date] = None,
             config: Optional[SimulationConfig] = None) -> List[DailyObservation]:
    """Simulate a daily price path (see PricePathSimulator.simulate)"""
    return PricePathSimulator(config=config, random_state=random_state).simulate(days, today=today)
