"""Common data models used across the project."""

from dataclasses import dataclass, field, asdict
from datetime import date, datetime
from typing import Dict, List, Sequence
import pandas as pd

DATE_FORMAT = '%Y-%m-%d'
TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'

REGIME_CLASSES = ('low', 'medium', 'high', 'extreme')
MODEL_TYPES = ('ARCH', 'GARCH', 'Kalman', 'GP', 'RegimeSwitching')


def format_date(value: date) -> str:
    """ISO calendar date (YYYY-MM-DD)"""
    return value.strftime(DATE_FORMAT)


@dataclass(frozen=True)
class DailyObservation:
    """One simulated trading day"""
    date: date
    price: float
    volume: float
    market_cap: float
    returns: float  # Fractional change from the prior day
    volatility: float

    def to_dict(self) -> Dict:
        return {
            'date': format_date(self.date),
            'price': self.price,
            'volume': self.volume,
            'marketCap': self.market_cap,
            'returns': self.returns,
            'volatility': self.volatility,
        }


@dataclass(frozen=True)
class OnChainObservation:
    """On-chain activity joined 1:1 to a DailyObservation by date"""
    date: date
    gas_used: int
    active_addresses: int
    transaction_count: int
    network_value: int
    hash_rate: int  # TH/s

    def to_dict(self) -> Dict:
        return {
            'date': format_date(self.date),
            'gasUsed': self.gas_used,
            'activeAddresses': self.active_addresses,
            'transactionCount': self.transaction_count,
            'networkValue': self.network_value,
            'hashRate': self.hash_rate,
        }


@dataclass(frozen=True)
class ForecastPoint:
    """Point forecast with nested 50% and 95% intervals"""
    date: date
    predicted: float
    lower95: float
    upper95: float
    lower50: float
    upper50: float

    @property
    def width95(self) -> float:
        return self.upper95 - self.lower95

    def to_dict(self) -> Dict:
        return {
            'date': format_date(self.date),
            'predicted': self.predicted,
            'lower95': self.lower95,
            'upper95': self.upper95,
            'lower50': self.lower50,
            'upper50': self.upper50,
        }


@dataclass
class VolatilityRegime:
    """Contiguous interval with a constant volatility classification"""
    id: str
    name: str
    classification: str  # One of: 'low', 'medium', 'high', 'extreme'
    start_date: date
    end_date: date
    avg_volatility: float
    probability: float  # Placeholder confidence in (0.7, 1.0]

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'startDate': format_date(self.start_date),
            'endDate': format_date(self.end_date),
            'avgVolatility': self.avg_volatility,
            'classification': self.classification,
            'probability': self.probability,
        }


@dataclass(frozen=True)
class ModelDescriptor:
    """Static catalog entry for a volatility model"""
    id: str
    name: str
    type: str  # One of MODEL_TYPES
    description: str
    parameters: Dict[str, float] = field(default_factory=dict)
    is_active: bool = True  # Default only; live state lives in ModelActivity
    last_updated: datetime = None

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'type': self.type,
            'description': self.description,
            'parameters': dict(self.parameters),
            'isActive': self.is_active,
            'lastUpdated': self.last_updated.strftime(TIMESTAMP_FORMAT) if self.last_updated else None,
        }


@dataclass(frozen=True)
class PerformanceRecord:
    """Fixed evaluation metrics for a model"""
    model_name: str
    rmse: float
    log_likelihood: float
    aic: float
    bic: float
    interval_accuracy_95: float
    interval_accuracy_50: float

    def to_dict(self) -> Dict:
        return {
            'modelName': self.model_name,
            'rmse': self.rmse,
            'logLikelihood': self.log_likelihood,
            'aic': self.aic,
            'bic': self.bic,
            'intervalAccuracy95': self.interval_accuracy_95,
            'intervalAccuracy50': self.interval_accuracy_50,
        }


def observations_to_frame(records: Sequence, index_col: str = 'date') -> pd.DataFrame:
    """Convert a list of dated records to a DataFrame indexed by index_col"""
    if not records:
        raise ValueError("No records to convert")

    df = pd.DataFrame([asdict(r) for r in records])
    df[index_col] = pd.to_datetime(df[index_col])
    return df.set_index(index_col)


def records_to_dicts(records: Sequence) -> List[Dict]:
    return [r.to_dict() for r in records]
