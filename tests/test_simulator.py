import pytest
import numpy as np
import pandas as pd
from datetime import timedelta

from config import SimulationConfig
from simulation import PricePathSimulator, simulate


def test_length_and_dates(price_series, today):
    """One observation per day, consecutive, ending yesterday"""
    assert len(price_series) == 365
    assert price_series[0].date == today - timedelta(days=365)
    assert price_series[-1].date == today - timedelta(days=1)

    for prev, curr in zip(price_series, price_series[1:]):
        assert curr.date - prev.date == timedelta(days=1)


def test_volatility_floor(price_series):
    assert all(obs.volatility >= 0.01 for obs in price_series)


def test_price_recurrence(price_series):
    """price(t) == price(t-1) * (1 + returns(t)) within rounding"""
    for prev, curr in zip(price_series, price_series[1:]):
        assert curr.price == pytest.approx(prev.price * (1 + curr.returns), rel=1e-4)


def test_first_price_follows_initial_price(price_series):
    first = price_series[0]
    assert first.price == pytest.approx(2500 * (1 + first.returns), rel=1e-4)


def test_derived_fields(price_series):
    for obs in price_series:
        assert obs.price > 0
        assert 50000 <= obs.volume <= 250000
        assert obs.market_cap == pytest.approx(obs.price * 120_000_000, rel=1e-4)
        assert obs.returns == round(obs.returns, 4)
        assert obs.volatility == round(obs.volatility, 4)


def test_five_day_scenario(today):
    """simulate(5) starts five days back and ends yesterday near 2500"""
    series = simulate(5, random_state=np.random.RandomState(7), today=today)

    assert [obs.date for obs in series] == [today - timedelta(days=d) for d in range(5, 0, -1)]
    assert 2400 < series[0].price < 2600

    price = 2500.0
    for obs in series:
        price = price * (1 + obs.returns)
        assert obs.price == pytest.approx(price, rel=1e-3)


def test_seeded_runs_are_reproducible(today):
    first = simulate(50, random_state=np.random.RandomState(1), today=today)
    second = simulate(50, random_state=np.random.RandomState(1), today=today)
    assert first == second


def test_single_day(today):
    series = simulate(1, random_state=np.random.RandomState(0), today=today)
    assert len(series) == 1
    assert series[0].date == today - timedelta(days=1)


@pytest.mark.parametrize("days", [0, -3])
def test_non_positive_days(days):
    with pytest.raises(ValueError, match="must be positive"):
        simulate(days)


def test_floor_holds_under_large_shocks(today):
    """Shocks wider than the mean level must still respect the floor"""
    config = SimulationConfig(initial_volatility=0.011, shock_half_width=0.05)
    series = simulate(200, random_state=np.random.RandomState(3), today=today, config=config)
    assert min(obs.volatility for obs in series) >= 0.01


def test_drift_follows_regime_cycle(today):
    """With no noise, returns equal the bull/bear drift of the sine cycle"""
    config = SimulationConfig(shock_half_width=0.0)

    class NoNoise(np.random.RandomState):
        def uniform(self, low=0.0, high=1.0, size=None):
            return (low + high) / 2

    series = PricePathSimulator(config=config, random_state=NoNoise()).simulate(400, today=today)

    # sin(i/50) drops below -1/3 for i around 174..297
    assert series[0].returns == 0.001
    assert series[200].returns == -0.0005
    assert series[350].returns == 0.001


def test_to_dataframe(price_series):
    df = PricePathSimulator().to_dataframe(price_series)
    assert isinstance(df, pd.DataFrame)
    assert len(df) == len(price_series)
    assert pd.api.types.is_datetime64_any_dtype(df.index)
    assert {'price', 'volume', 'market_cap', 'returns', 'volatility'} <= set(df.columns)
