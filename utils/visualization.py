from typing import List, Optional, Sequence
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
from pathlib import Path
import logging

from models import (
    DailyObservation,
    ForecastPoint,
    OnChainObservation,
    VolatilityRegime,
    observations_to_frame,
)

logger = logging.getLogger(__name__)

REGIME_COLORS = {
    'low': '#2e7d32',
    'medium': '#f9a825',
    'high': '#ef6c00',
    'extreme': '#c62828',
}

ONCHAIN_METRICS = ['gas_used', 'active_addresses', 'transaction_count', 'network_value', 'hash_rate']


class DashboardVisualizer:
    """Static figures for the generated dashboard data"""

    def __init__(self, style: str = 'seaborn-v0_8-whitegrid'):
        """
        Initialize visualizer

        Parameters:
        -----------
        style : str
            Matplotlib style to use. Falls back to matplotlib's default
            when the style is not installed.
        """
        try:
            plt.style.use(style)
        except OSError:
            plt.style.use('default')
            logger.warning(f"Style '{style}' not found, using default style")

        self.colors = plt.rcParams['axes.prop_cycle'].by_key()['color']

    def _save(self, fig: plt.Figure, save_path: Optional[Path]):
        if save_path:
            save_path = Path(save_path)
            save_path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(save_path)
            logger.info(f"Saved figure to {save_path}")

    def plot_price_path(self,
                        series: List[DailyObservation],
                        title: Optional[str] = None,
                        save_path: Optional[Path] = None) -> plt.Figure:
        """
        Plot simulated price with realized volatility underneath

        Parameters:
        -----------
        series : list of DailyObservation
            Simulated price path
        title : str, optional
            Plot title
        save_path : Path, optional
            Path to save figure
        """
        if not series:
            raise ValueError("Empty input data")

        df = observations_to_frame(series)
        fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(12, 8), sharex=True)

        ax1.plot(df.index, df['price'], color=self.colors[0])
        ax1.set_ylabel('Price (USD)')
        ax1.grid(True)

        ax2.plot(df.index, df['volatility'] * 100, color=self.colors[1])
        ax2.set_xlabel('Date')
        ax2.set_ylabel('Volatility (%)')
        ax2.grid(True)

        if title:
            fig.suptitle(title)

        plt.tight_layout()
        self._save(fig, save_path)
        return fig

    def plot_volatility_forecast(self,
                                 series: List[DailyObservation],
                                 forecasts: List[ForecastPoint],
                                 history_days: int = 60,
                                 title: Optional[str] = None,
                                 save_path: Optional[Path] = None) -> plt.Figure:
        """
        Plot recent volatility followed by the forecast and its 50%/95% bands

        Parameters:
        -----------
        series : list of DailyObservation
            Historical observations
        forecasts : list of ForecastPoint
            Forecast following the history
        history_days : int
            Number of trailing history days to show
        """
        if not series or not forecasts:
            raise ValueError("Empty input data")

        history = observations_to_frame(series[-history_days:])
        fc = observations_to_frame(forecasts)

        fig, ax = plt.subplots(figsize=(12, 6))
        ax.plot(history.index, history['volatility'] * 100,
                label='Realized', color=self.colors[0])
        ax.fill_between(fc.index, fc['lower95'] * 100, fc['upper95'] * 100,
                        alpha=0.15, color=self.colors[1], label='95% interval')
        ax.fill_between(fc.index, fc['lower50'] * 100, fc['upper50'] * 100,
                        alpha=0.3, color=self.colors[1], label='50% interval')
        ax.plot(fc.index, fc['predicted'] * 100,
                linestyle='--', color=self.colors[1], label='Predicted')
        ax.axvline(x=history.index[-1], color='k', linestyle=':', alpha=0.5)

        ax.set_xlabel('Date')
        ax.set_ylabel('Volatility (%)')
        if title:
            ax.set_title(title)
        ax.legend()
        ax.grid(True)

        self._save(fig, save_path)
        return fig

    def plot_onchain_metrics(self,
                             onchain: List[OnChainObservation],
                             metrics: Sequence[str] = ('gas_used', 'active_addresses'),
                             title: Optional[str] = None,
                             save_path: Optional[Path] = None) -> plt.Figure:
        """
        Plot selected on-chain metrics, each scaled to its own first value
        """
        if not onchain or not metrics:
            raise ValueError("Empty input data")

        unknown = [m for m in metrics if m not in ONCHAIN_METRICS]
        if unknown:
            raise ValueError(f"Unknown on-chain metrics: {unknown}")

        df = observations_to_frame(onchain)
        fig, ax = plt.subplots(figsize=(12, 6))

        for i, metric in enumerate(metrics):
            base = df[metric].iloc[0] or 1
            ax.plot(df.index, df[metric] / base * 100,
                    label=metric, color=self.colors[i % len(self.colors)])

        ax.set_xlabel('Date')
        ax.set_ylabel('Index (first day = 100)')
        if title:
            ax.set_title(title)
        ax.legend()
        ax.grid(True)

        self._save(fig, save_path)
        return fig

    def plot_regime_timeline(self,
                             series: List[DailyObservation],
                             regimes: List[VolatilityRegime],
                             title: Optional[str] = None,
                             save_path: Optional[Path] = None) -> plt.Figure:
        """
        Plot volatility with each regime shaded by classification, and the
        volatility distribution per classification underneath
        """
        if not series or not regimes:
            raise ValueError("Empty input data")

        df = observations_to_frame(series)
        fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(12, 9))

        ax1.plot(df.index, df['volatility'] * 100, color='k', linewidth=1)
        for regime in regimes:
            # Shade through the end of the last day in the regime
            ax1.axvspan(pd.Timestamp(regime.start_date),
                        pd.Timestamp(regime.end_date) + pd.Timedelta(days=1),
                        color=REGIME_COLORS[regime.classification], alpha=0.25, linewidth=0)
        ax1.set_xlabel('Date')
        ax1.set_ylabel('Volatility (%)')
        ax1.grid(True)

        labels = pd.Series('', index=df.index)
        for regime in regimes:
            labels.loc[pd.Timestamp(regime.start_date):pd.Timestamp(regime.end_date)] = regime.classification
        dist = pd.DataFrame({'volatility': df['volatility'] * 100, 'classification': labels})
        present = [c for c in REGIME_COLORS if c in set(dist['classification'])]
        sns.histplot(data=dist, x='volatility', hue='classification', hue_order=present,
                     palette=REGIME_COLORS, bins=30, ax=ax2)
        ax2.set_xlabel('Volatility (%)')
        ax2.set_title('Volatility Distribution by Regime')

        if title:
            fig.suptitle(title)

        plt.tight_layout()
        self._save(fig, save_path)
        return fig

    def close_all(self):
        """Close all open figures"""
        plt.close('all')

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close_all()
