"""
On-chain activity metrics correlated with the simulated price path.
"""

from typing import List, Optional
import logging
import numpy as np

from config import OnChainConfig, DEFAULT_ONCHAIN
from models import DailyObservation, OnChainObservation


class OnChainDeriver:
    """Derives gas, address, transaction and hash-rate series from price data"""

    def __init__(self, config: Optional[OnChainConfig] = None,
                 random_state: Optional[np.random.RandomState] = None):
        self.config = config or DEFAULT_ONCHAIN
        self.random_state = random_state if random_state is not None else np.random.RandomState()
        self.logger = logging.getLogger('simulation.onchain')

    def derive_one(self, obs: DailyObservation) -> OnChainObservation:
        """Derive metrics for a single day; no state carried between days"""
        cfg = self.config
        rs = self.random_state

        # Larger absolute moves burn more gas
        gas_used = (cfg.base_gas
                    + abs(obs.returns) * cfg.gas_per_abs_return
                    + rs.uniform(-cfg.gas_noise_half_width, cfg.gas_noise_half_width))
        active_addresses = (cfg.base_addresses
                            + obs.volume / cfg.volume_per_address
                            + rs.uniform(0, cfg.address_noise))
        transaction_count = (cfg.base_transactions
                             + obs.volume / cfg.volume_per_transaction
                             + rs.uniform(0, cfg.transaction_noise))
        hash_rate = rs.uniform(*cfg.hash_rate_range)

        return OnChainObservation(
            date=obs.date,
            gas_used=int(round(gas_used)),
            active_addresses=int(round(active_addresses)),
            transaction_count=int(round(transaction_count)),
            network_value=int(round(obs.market_cap * cfg.network_value_ratio)),
            hash_rate=int(round(hash_rate)),
        )

    def derive(self, series: List[DailyObservation]) -> List[OnChainObservation]:
        """Derive an on-chain series aligned 1:1 with the price series"""
        metrics = [self.derive_one(obs) for obs in series]
        self.logger.debug(f"Derived on-chain metrics for {len(metrics)} days")
        return metrics


def derive(series: List[DailyObservation],
           random_state: Optional[np.random.RandomState] = None,
           config: Optional[OnChainConfig] = None) -> List[OnChainObservation]:
    """Derive on-chain metrics for every observation in `series`"""
    return OnChainDeriver(config=config, random_state=random_state).derive(series)
