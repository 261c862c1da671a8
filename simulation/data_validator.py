"""
Consistency checks for generated price and on-chain series.
"""

from typing import List, Optional, Tuple
from datetime import timedelta
import pandas as pd

from config import SimulationConfig, DEFAULT_SIMULATION
from models import DailyObservation, OnChainObservation


class SeriesValidator:
    """Validates generated series before they are handed to consumers."""

    def __init__(self, config: Optional[SimulationConfig] = None,
                 price_tolerance: float = 1e-3):
        self.config = config or DEFAULT_SIMULATION
        # Relative tolerance for price(t) == price(t-1) * (1 + returns(t));
        # returns are stored at 4 dp so exact equality never holds
        self.price_tolerance = price_tolerance

        self.validation_bounds = {
            'price': {'min': 0, 'max': float('inf')},
            'volume': {'min': 0, 'max': float('inf')},
            'volatility': {'min': self.config.volatility_floor, 'max': 1.0},
        }

    def validate_series(self, series: List[DailyObservation]) -> Tuple[bool, List[str]]:
        """
        Validates a simulated price series.

        Args:
            series: Price observations in date order

        Returns:
            Tuple of (is_valid, list_of_issues)
        """
        if not series:
            return False, ["Series is empty"]

        issues = []
        df = pd.DataFrame({
            'price': [o.price for o in series],
            'volume': [o.volume for o in series],
            'volatility': [o.volatility for o in series],
            'returns': [o.returns for o in series],
        }, index=pd.DatetimeIndex([pd.Timestamp(o.date) for o in series]))

        issues.extend(self._validate_dates(df.index))

        for col, bounds in self.validation_bounds.items():
            issues.extend(self._validate_bounds(df[col], bounds['min'], bounds['max'], col))

        if (df['price'] <= 0).any():
            issues.append("price: non-positive values found")

        # Price recurrence
        implied = df['price'].shift(1) * (1 + df['returns'])
        rel_error = ((df['price'] - implied).abs() / df['price']).iloc[1:]
        broken = rel_error[rel_error > self.price_tolerance]
        if not broken.empty:
            issues.append(
                f"price/returns mismatch on {len(broken)} days "
                f"(first occurrence at {broken.index[0].date()})"
            )

        return len(issues) == 0, issues

    def validate_alignment(self, series: List[DailyObservation],
                           onchain: List[OnChainObservation]) -> Tuple[bool, List[str]]:
        """Checks on-chain metrics join 1:1 on date with the price series."""
        issues = []
        if len(series) != len(onchain):
            issues.append(f"Length mismatch: {len(series)} price vs {len(onchain)} on-chain records")

        for price_obs, chain_obs in zip(series, onchain):
            if price_obs.date != chain_obs.date:
                issues.append(f"Date mismatch: {price_obs.date} vs {chain_obs.date}")
                break

        negatives = [
            o.date for o in onchain
            if min(o.gas_used, o.active_addresses, o.transaction_count,
                   o.network_value, o.hash_rate) < 0
        ]
        if negatives:
            issues.append(f"Negative on-chain values on {len(negatives)} days (first {negatives[0]})")

        return len(issues) == 0, issues

    def require_valid(self, series: List[DailyObservation],
                      onchain: Optional[List[OnChainObservation]] = None) -> None:
        """Raises ValueError listing every issue found."""
        _, issues = self.validate_series(series)
        if onchain is not None:
            _, alignment_issues = self.validate_alignment(series, onchain)
            issues.extend(alignment_issues)

        if issues:
            raise ValueError("Invalid series:\n  " + "\n  ".join(issues))

    def _validate_dates(self, dates: pd.DatetimeIndex) -> List[str]:
        """Dates must be consecutive calendar days."""
        issues = []
        gaps = dates.to_series().diff().iloc[1:]
        bad = gaps[gaps != timedelta(days=1)]
        if not bad.empty:
            issues.append(
                f"dates: {len(bad)} non-consecutive steps "
                f"(first occurrence at {bad.index[0].date()})"
            )
        return issues

    def _validate_bounds(self, series: pd.Series, min_val: float, max_val: float, name: str) -> List[str]:
        """Validates that values fall within expected bounds."""
        issues = []

        below_min = series[series < min_val]
        if not below_min.empty:
            issues.append(
                f"{name}: {len(below_min)} values below minimum of {min_val} "
                f"(first occurrence at {below_min.index[0].date()})"
            )

        above_max = series[series > max_val]
        if not above_max.empty:
            issues.append(
                f"{name}: {len(above_max)} values above maximum of {max_val} "
                f"(first occurrence at {above_max.index[0].date()})"
            )

        return issues
