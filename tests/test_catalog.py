import pytest
from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta

from models import MODEL_TYPES
from forecasting import (
    ModelActivity,
    list_models,
    list_performance,
    best_model,
    best_models,
    format_metric,
)

NOW = datetime(2024, 6, 15, 9, 30, 0)


@pytest.fixture
def models():
    return list_models(now=NOW)


def test_model_catalog(models):
    assert [m.id for m in models] == ['garch', 'kalman', 'gp', 'regime']
    assert [m.type for m in models] == ['GARCH', 'Kalman', 'GP', 'RegimeSwitching']
    assert all(m.type in MODEL_TYPES for m in models)
    assert [m.is_active for m in models] == [True, True, False, True]

    garch = models[0]
    assert garch.name == 'Bayesian GARCH(1,1)'
    assert garch.parameters == {'alpha': 0.085, 'beta': 0.891, 'omega': 0.000023}
    assert models[3].parameters == {'lowVolRegime': 0.018, 'highVolRegime': 0.045, 'transitionProb': 0.95}


def test_last_updated(models):
    assert [NOW - m.last_updated for m in models] == [
        timedelta(0), timedelta(days=1), timedelta(days=3), timedelta(days=2)
    ]
    assert models[1].to_dict()['lastUpdated'] == '2024-06-14 09:30:00'


def test_descriptors_are_immutable(models):
    with pytest.raises(FrozenInstanceError):
        models[0].is_active = False


def test_performance_records():
    records = list_performance()
    assert [r.model_name for r in records] == [
        'Bayesian GARCH(1,1)', 'Kalman Filter + ARCH', 'Gaussian Process', 'Regime Switching'
    ]
    assert records[0].to_dict() == {
        'modelName': 'Bayesian GARCH(1,1)',
        'rmse': 0.0087,
        'logLikelihood': 2847.3,
        'aic': -5686.6,
        'bic': -5671.2,
        'intervalAccuracy95': 0.943,
        'intervalAccuracy50': 0.487,
    }


def test_best_models():
    assert best_models(list_performance()) == {
        'rmse': 'Bayesian GARCH(1,1)',
        'log_likelihood': 'Bayesian GARCH(1,1)',
        'aic': 'Bayesian GARCH(1,1)',
        'bic': 'Bayesian GARCH(1,1)',
        'interval_accuracy_95': 'Bayesian GARCH(1,1)',
        'interval_accuracy_50': 'Gaussian Process',
    }


def test_best_model_errors():
    with pytest.raises(ValueError, match="Unknown performance metric"):
        best_model(list_performance(), 'sharpe')
    with pytest.raises(ValueError):
        best_model([], 'rmse')


@pytest.mark.parametrize("value,metric,expected", [
    (0.0087, 'rmse', '0.0087'),
    (2847.3, 'log_likelihood', '2847.3'),
    (-5686.6, 'aic', '-5686.6'),
    (0.943, 'interval_accuracy_95', '94.3%'),
])
def test_format_metric(value, metric, expected):
    assert format_metric(value, metric) == expected


def test_model_activity(models):
    activity = ModelActivity(models)
    assert activity.active_ids() == ['garch', 'kalman', 'regime']
    assert activity.active_count() == 3

    assert activity.toggle('gp') is True
    assert activity.toggle('garch') is False
    assert activity.active_ids() == ['kalman', 'gp', 'regime']

    activity.set_active('garch', True)
    assert activity.is_active('garch')

    # Catalog entries keep their defaults
    assert models[2].is_active is False


def test_model_activity_unknown_id(models):
    activity = ModelActivity(models)
    with pytest.raises(KeyError):
        activity.toggle('lstm')
