"""
Synthetic market data package.
Simulates the ETH price path and the on-chain metrics derived from it.
"""

from .price_simulator import PricePathSimulator, simulate
from .onchain import OnChainDeriver, derive
from .data_validator import SeriesValidator

__all__ = ['PricePathSimulator', 'simulate', 'OnChainDeriver', 'derive', 'SeriesValidator']
