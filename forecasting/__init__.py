"""
Volatility forecasting package.
Mean-reverting forecasts, regime segmentation and the static model catalog.
"""

from .forecaster import VolatilityForecaster, forecast
from .regimes import RegimeSegmenter, classify_volatility, segment
from .catalog import (
    ModelActivity,
    list_models,
    list_performance,
    best_model,
    best_models,
    format_metric,
)

__all__ = [
    'VolatilityForecaster', 'forecast',
    'RegimeSegmenter', 'classify_volatility', 'segment',
    'ModelActivity', 'list_models', 'list_performance',
    'best_model', 'best_models', 'format_metric',
]
