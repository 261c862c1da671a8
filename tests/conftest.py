import sys
import os
from datetime import date, timedelta

import matplotlib
matplotlib.use('Agg')

import numpy as np
import pytest

# Add project root to Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.append(project_root)

from models import DailyObservation
from simulation import simulate

TODAY = date(2024, 6, 15)


def make_series(volatilities, start=date(2024, 1, 1), price=2500.0, returns=0.0):
    """Build a flat-price series with the given daily volatilities"""
    return [
        DailyObservation(
            date=start + timedelta(days=i),
            price=price,
            volume=100000.0,
            market_cap=round(price * 120_000_000),
            returns=returns,
            volatility=vol,
        )
        for i, vol in enumerate(volatilities)
    ]


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def random_state():
    return np.random.RandomState(42)


@pytest.fixture
def price_series(today):
    """One year of simulated prices from a fixed seed"""
    return simulate(365, random_state=np.random.RandomState(42), today=today)


@pytest.fixture
def series_factory():
    return make_series
