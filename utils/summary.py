"""Headline figures derived from the generated series"""

from typing import Dict, List, Optional, Sequence
import math
import numpy as np

from models import DailyObservation, ForecastPoint, VolatilityRegime


def _percent_change(current: float, previous: float) -> float:
    if previous == 0:
        return 0.0
    return (current - previous) / previous * 100


def headline_metrics(series: List[DailyObservation], activity=None) -> Dict[str, float]:
    """Current price/volatility and their day-over-day percent changes"""
    if not series:
        raise ValueError("Cannot summarize an empty series")

    current = series[-1]
    previous = series[-2] if len(series) > 1 else current

    metrics = {
        'current_price': current.price,
        'price_change_pct': _percent_change(current.price, previous.price),
        'current_volatility': current.volatility,
        'volatility_change_pct': _percent_change(current.volatility, previous.volatility),
    }
    if activity is not None:
        metrics['active_models'] = activity.active_count()
    return metrics


def regime_duration(regime: VolatilityRegime) -> int:
    """Whole days between a regime's start and end dates"""
    return (regime.end_date - regime.start_date).days


def regime_statistics(regimes: List[VolatilityRegime]) -> Dict:
    """
    Timeline statistics: regime count, classification of the longest
    regime, mean duration and the current classification.
    """
    if not regimes:
        raise ValueError("No regimes to summarize")

    durations = [regime_duration(r) for r in regimes]
    longest = regimes[int(np.argmax(durations))]  # argmax keeps the first of equal maxima

    return {
        'total_regimes': len(regimes),
        'longest_classification': longest.classification,
        # Half-up like the dashboard, not banker's rounding
        'avg_duration_days': int(math.floor(np.mean(durations) + 0.5)),
        'current_classification': regimes[-1].classification,
    }


def forecast_summary(series: List[DailyObservation],
                     forecasts: List[ForecastPoint]) -> Dict[str, float]:
    """Current volatility against the end-of-horizon forecast and its 95% band"""
    if not series or not forecasts:
        raise ValueError("Forecast summary needs both history and forecasts")

    final = forecasts[-1]
    return {
        'current_volatility': series[-1].volatility,
        'final_predicted': final.predicted,
        'final_lower95': final.lower95,
        'final_upper95': final.upper95,
        'horizon_days': len(forecasts),
    }


def metric_trend(values: Sequence[float]) -> Optional[Dict[str, float]]:
    """Latest value and percent change versus the previous one"""
    if len(values) == 0:
        return None
    latest = float(values[-1])
    change = _percent_change(latest, float(values[-2])) if len(values) > 1 else 0.0
    return {'latest': latest, 'change_pct': change}
