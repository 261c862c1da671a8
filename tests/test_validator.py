import pytest
import numpy as np
from dataclasses import replace
from datetime import timedelta

from simulation import SeriesValidator, derive


@pytest.fixture
def validator():
    return SeriesValidator()


def test_simulated_series_is_valid(validator, price_series):
    is_valid, issues = validator.validate_series(price_series)
    assert is_valid, issues


def test_empty_series(validator):
    is_valid, issues = validator.validate_series([])
    assert not is_valid
    assert issues == ["Series is empty"]


def test_detects_date_gap(validator, price_series):
    broken = list(price_series)
    broken[10] = replace(broken[10], date=broken[10].date + timedelta(days=3))
    is_valid, issues = validator.validate_series(broken)
    assert not is_valid
    assert any(issue.startswith("dates:") for issue in issues)


def test_detects_volatility_below_floor(validator, series_factory):
    is_valid, issues = validator.validate_series(series_factory([0.02, 0.005, 0.02]))
    assert not is_valid
    assert any(issue.startswith("volatility:") for issue in issues)


def test_detects_price_return_mismatch(validator, price_series):
    broken = list(price_series)
    broken[5] = replace(broken[5], price=broken[5].price * 1.5)
    is_valid, issues = validator.validate_series(broken)
    assert not is_valid
    assert any("mismatch" in issue for issue in issues)


def test_alignment(validator, price_series):
    onchain = derive(price_series, random_state=np.random.RandomState(0))
    assert validator.validate_alignment(price_series, onchain) == (True, [])

    is_valid, issues = validator.validate_alignment(price_series, onchain[:-1])
    assert not is_valid
    assert "Length mismatch" in issues[0]


def test_require_valid_raises(validator, price_series):
    validator.require_valid(price_series)

    with pytest.raises(ValueError, match="Invalid series"):
        validator.require_valid([])
