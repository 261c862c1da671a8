"""
Segments a volatility series into contiguous labelled regimes.
"""

from typing import List, Optional
import logging
import numpy as np

from config import RegimeConfig, DEFAULT_REGIME
from models import DailyObservation, VolatilityRegime, REGIME_CLASSES


def classify_volatility(volatility: float, config: Optional[RegimeConfig] = None) -> str:
    """Map a volatility level to low/medium/high/extreme, thresholds checked in order"""
    cfg = config or DEFAULT_REGIME
    if volatility < cfg.low_threshold:
        return 'low'
    if volatility < cfg.medium_threshold:
        return 'medium'
    if volatility < cfg.high_threshold:
        return 'high'
    return 'extreme'


class RegimeSegmenter:
    """Splits a series into maximal runs of constant volatility classification"""

    def __init__(self, config: Optional[RegimeConfig] = None,
                 random_state: Optional[np.random.RandomState] = None):
        self.config = config or DEFAULT_REGIME
        self.random_state = random_state if random_state is not None else np.random.RandomState()
        self.logger = logging.getLogger('forecasting.regimes')

    def _sample_probability(self) -> float:
        # uniform() is [low, high), so 1 - draw lands in (floor, 1.0]
        return 1.0 - self.random_state.uniform(0, 1.0 - self.config.probability_floor)

    def _open_regime(self, obs: DailyObservation, classification: str, number: int) -> VolatilityRegime:
        return VolatilityRegime(
            id=f"regime-{number}",
            name=f"{classification.capitalize()} Volatility Period",
            classification=classification,
            start_date=obs.date,
            end_date=obs.date,
            avg_volatility=obs.volatility,
            probability=self._sample_probability(),
        )

    def segment(self, series: List[DailyObservation]) -> List[VolatilityRegime]:
        """
        Segment `series` into regimes covering its full date range.

        Args:
            series: Observations in date order, must be non-empty

        Returns:
            List of VolatilityRegime, contiguous and non-overlapping
        """
        if not series:
            raise ValueError("Cannot segment an empty series")

        regimes: List[VolatilityRegime] = []
        current: Optional[VolatilityRegime] = None
        start_index = 0

        for i, obs in enumerate(series):
            classification = classify_volatility(obs.volatility, self.config)

            if current is None or current.classification != classification:
                if current is not None:
                    current.end_date = series[i - 1].date
                    regimes.append(current)
                current = self._open_regime(obs, classification, len(regimes) + 1)
                start_index = i
            else:
                current.end_date = obs.date
                current.avg_volatility = float(np.mean(
                    [o.volatility for o in series[start_index:i + 1]]
                ))

        regimes.append(current)

        self.logger.info(
            f"Segmented {len(series)} days into {len(regimes)} regimes "
            f"({', '.join(f'{c}={sum(r.classification == c for r in regimes)}' for c in REGIME_CLASSES)})"
        )
        return regimes


def segment(series: List[DailyObservation],
            random_state: Optional[np.random.RandomState] = None,
            config: Optional[RegimeConfig] = None) -> List[VolatilityRegime]:
    """Segment a series into volatility regimes (see RegimeSegmenter.segment)"""
    return RegimeSegmenter(config=config, random_state=random_state).segment(series)
