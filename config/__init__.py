"""Configuration defaults for the dashboard data generators."""

from .model_config import (
    SimulationConfig,
    OnChainConfig,
    ForecastConfig,
    RegimeConfig,
    DEFAULT_SIMULATION,
    DEFAULT_ONCHAIN,
    DEFAULT_FORECAST,
    DEFAULT_REGIME,
)

__all__ = [
    'SimulationConfig', 'OnChainConfig', 'ForecastConfig', 'RegimeConfig',
    'DEFAULT_SIMULATION', 'DEFAULT_ONCHAIN', 'DEFAULT_FORECAST', 'DEFAULT_REGIME',
]
