"""
Generator constants for the synthetic ETH dashboard.

Every component takes one of these dataclasses and falls back to the
module-level defaults, so scenarios can tweak a single constant without
touching the generators.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SimulationConfig:
    """Price path simulator settings"""
    initial_price: float = 2500.0
    initial_volatility: float = 0.03

    # Volatility clustering: v = max(floor, persistence*v + (1-persistence)*long_run + shock)
    persistence: float = 0.95
    long_run_volatility: float = 0.03
    shock_half_width: float = 0.005
    volatility_floor: float = 0.01

    # Cyclical bull/bear drift
    regime_center: float = 0.7
    regime_amplitude: float = 0.3
    regime_period: float = 50.0
    regime_threshold: float = 0.6
    bull_drift: float = 0.001
    bear_drift: float = -0.0005

    volume_range: Tuple[float, float] = (50_000.0, 250_000.0)
    circulating_supply: float = 120_000_000.0


@dataclass(frozen=True)
class OnChainConfig:
    """On-chain metric baselines and sensitivities"""
    base_gas: float = 15_000_000.0
    gas_per_abs_return: float = 500_000_000.0
    gas_noise_half_width: float = 2_500_000.0

    base_addresses: float = 400_000.0
    volume_per_address: float = 1_000.0
    address_noise: float = 100_000.0

    base_transactions: float = 1_000_000.0
    volume_per_transaction: float = 200.0
    transaction_noise: float = 200_000.0

    network_value_ratio: float = 0.8
    hash_rate_range: Tuple[float, float] = (200.0, 250.0)  # TH/s


@dataclass(frozen=True)
class ForecastConfig:
    """Mean-reverting volatility forecast settings"""
    lookback: int = 30
    mean_reversion_rate: float = 0.95
    long_term_mean: float = 0.025
    base_uncertainty: float = 0.002
    time_uncertainty: float = 0.005
    z_95: float = 1.96
    z_50: float = 0.67
    default_horizon: int = 30


@dataclass(frozen=True)
class RegimeConfig:
    """Volatility regime thresholds, checked in order"""
    low_threshold: float = 0.02
    medium_threshold: float = 0.03
    high_threshold: float = 0.05
    probability_floor: float = 0.7


DEFAULT_SIMULATION = SimulationConfig()
DEFAULT_ONCHAIN = OnChainConfig()
DEFAULT_FORECAST = ForecastConfig()
DEFAULT_REGIME = RegimeConfig()
