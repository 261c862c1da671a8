"""
Static model catalog and performance records shown on the dashboard.
"""

from typing import Dict, Iterable, List, Optional
from datetime import datetime, timedelta
import logging

from models import ModelDescriptor, PerformanceRecord

# Metric -> True when lower values are better
PERFORMANCE_METRICS = {
    'rmse': True,
    'log_likelihood': False,
    'aic': True,
    'bic': True,
    'interval_accuracy_95': False,
    'interval_accuracy_50': False,
}


def list_models(now: Optional[datetime] = None) -> List[ModelDescriptor]:
    """Return the fixed model descriptors, stamped relative to `now`"""
    now = (now or datetime.now()).replace(microsecond=0)
    return [
        ModelDescriptor(
            id='garch',
            name='Bayesian GARCH(1,1)',
            type='GARCH',
            description='Generalized Autoregressive Conditional Heteroskedasticity with Bayesian inference',
            parameters={'alpha': 0.085, 'beta': 0.891, 'omega': 0.000023},
            is_active=True,
            last_updated=now,
        ),
        ModelDescriptor(
            id='kalman',
            name='Kalman Filter + ARCH',
            type='Kalman',
            description='State-space model with time-varying volatility using Kalman filtering',
            parameters={'processNoise': 0.001, 'observationNoise': 0.025, 'initialState': 0.03},
            is_active=True,
            last_updated=now - timedelta(days=1),
        ),
        ModelDescriptor(
            id='gp',
            name='Gaussian Process',
            type='GP',
            description='Non-parametric Bayesian approach with RBF kernel for volatility modeling',
            parameters={'lengthScale': 12.5, 'outputScale': 0.008, 'noiseLevel': 0.002},
            is_active=False,
            last_updated=now - timedelta(days=3),
        ),
        ModelDescriptor(
            id='regime',
            name='Markov Regime Switching',
            type='RegimeSwitching',
            description='Two-state Markov model capturing volatility regime changes',
            parameters={'lowVolRegime': 0.018, 'highVolRegime': 0.045, 'transitionProb': 0.95},
            is_active=True,
            last_updated=now - timedelta(days=2),
        ),
    ]


def list_performance() -> List[PerformanceRecord]:
    """Return the fixed model performance records"""
    return [
        PerformanceRecord('Bayesian GARCH(1,1)', 0.0087, 2847.3, -5686.6, -5671.2, 0.943, 0.487),
        PerformanceRecord('Kalman Filter + ARCH', 0.0092, 2831.7, -5655.4, -5640.1, 0.931, 0.502),
        PerformanceRecord('Gaussian Process', 0.0095, 2823.1, -5638.2, -5615.8, 0.925, 0.518),
        PerformanceRecord('Regime Switching', 0.0089, 2841.9, -5673.8, -5651.4, 0.937, 0.493),
    ]


def best_model(records: List[PerformanceRecord], metric: str) -> str:
    """Name of the best model for `metric`; the first record wins ties"""
    if metric not in PERFORMANCE_METRICS:
        raise ValueError(f"Unknown performance metric: {metric}")
    if not records:
        raise ValueError("No performance records")

    best = records[0]
    lower_is_better = PERFORMANCE_METRICS[metric]
    for record in records[1:]:
        value, best_value = getattr(record, metric), getattr(best, metric)
        if (value < best_value) if lower_is_better else (value > best_value):
            best = record
    return best.model_name


def best_models(records: List[PerformanceRecord]) -> Dict[str, str]:
    """Best model name for every performance metric"""
    return {metric: best_model(records, metric) for metric in PERFORMANCE_METRICS}


def format_metric(value: float, metric: str) -> str:
    """Render a metric value the way the performance table displays it"""
    if metric == 'rmse':
        return f"{value:.4f}"
    if metric in ('log_likelihood', 'aic', 'bic'):
        return f"{value:.1f}"
    if metric in ('interval_accuracy_95', 'interval_accuracy_50'):
        return f"{value * 100:.1f}%"
    return str(value)


class ModelActivity:
    """
    Activity toggles for catalog models, owned by the presentation layer.

    Seeded from each descriptor's default `is_active` flag and keyed by
    model id. Descriptors are frozen and never touched; all toggling happens
    here.
    """

    def __init__(self, models: Iterable[ModelDescriptor]):
        self._active: Dict[str, bool] = {m.id: m.is_active for m in models}
        self.logger = logging.getLogger('forecasting.catalog')

    def _check(self, model_id: str):
        if model_id not in self._active:
            raise KeyError(f"Unknown model id: {model_id}")

    def is_active(self, model_id: str) -> bool:
        self._check(model_id)
        return self._active[model_id]

    def set_active(self, model_id: str, active: bool):
        self._check(model_id)
        self._active[model_id] = bool(active)
        self.logger.debug(f"Model {model_id} active={active}")

    def toggle(self, model_id: str) -> bool:
        """Flip a model's flag and return the new value"""
        self.set_active(model_id, not self.is_active(model_id))
        return self._active[model_id]

    def active_ids(self) -> List[str]:
        return [model_id for model_id, active in self._active.items() if active]

    def active_count(self) -> int:
        return len(self.active_ids())

    def to_dict(self) -> Dict[str, bool]:
        return dict(self._active)
