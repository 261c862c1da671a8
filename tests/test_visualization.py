import pytest
import numpy as np
import matplotlib.pyplot as plt

from simulation import derive
from forecasting import forecast, segment
from utils.visualization import DashboardVisualizer


@pytest.fixture
def visualizer():
    """Create visualizer instance"""
    viz = DashboardVisualizer()
    yield viz
    viz.close_all()


@pytest.fixture
def dashboard_data(price_series):
    rs = np.random.RandomState(42)
    return {
        'prices': price_series,
        'onchain': derive(price_series, random_state=rs),
        'forecasts': forecast(price_series, horizon_days=30),
        'regimes': segment(price_series, random_state=rs),
    }


def test_initialization(visualizer):
    assert hasattr(visualizer, 'colors')
    assert len(visualizer.colors) > 0


def test_unknown_style_falls_back():
    viz = DashboardVisualizer(style='no-such-style')
    assert len(viz.colors) > 0


def test_price_path_plot(visualizer, dashboard_data, tmp_path):
    save_path = tmp_path / "price.png"
    fig = visualizer.plot_price_path(dashboard_data['prices'], title="Test Prices", save_path=save_path)

    assert isinstance(fig, plt.Figure)
    assert len(fig.axes) == 2
    assert save_path.exists()


def test_volatility_forecast_plot(visualizer, dashboard_data, tmp_path):
    save_path = tmp_path / "nested" / "forecast.png"
    fig = visualizer.plot_volatility_forecast(
        dashboard_data['prices'],
        dashboard_data['forecasts'],
        title="Test Forecast",
        save_path=save_path,
    )

    ax = fig.axes[0]
    labels = [line.get_label() for line in ax.get_lines()]
    assert 'Realized' in labels and 'Predicted' in labels
    assert save_path.exists()


def test_onchain_plot(visualizer, dashboard_data):
    fig = visualizer.plot_onchain_metrics(
        dashboard_data['onchain'],
        metrics=['gas_used', 'transaction_count', 'hash_rate'],
    )
    assert len(fig.axes[0].get_lines()) == 3


def test_onchain_unknown_metric(visualizer, dashboard_data):
    with pytest.raises(ValueError, match="Unknown on-chain metrics"):
        visualizer.plot_onchain_metrics(dashboard_data['onchain'], metrics=['volatility'])


def test_regime_timeline_plot(visualizer, dashboard_data, tmp_path):
    save_path = tmp_path / "regimes.png"
    fig = visualizer.plot_regime_timeline(
        dashboard_data['prices'],
        dashboard_data['regimes'],
        title="Test Regimes",
        save_path=save_path,
    )
    assert len(fig.axes) >= 2
    assert save_path.exists()


def test_empty_inputs(visualizer):
    with pytest.raises(ValueError, match="Empty input data"):
        visualizer.plot_price_path([])
    with pytest.raises(ValueError, match="Empty input data"):
        visualizer.plot_volatility_forecast([], [])
    with pytest.raises(ValueError, match="Empty input data"):
        visualizer.plot_regime_timeline([], [])


def test_context_manager(dashboard_data):
    with DashboardVisualizer() as viz:
        viz.plot_price_path(dashboard_data['prices'])
        assert plt.get_fignums()
    assert not plt.get_fignums()
