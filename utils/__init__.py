"""Summaries and plotting for the generated dashboard data"""

from .visualization import DashboardVisualizer

__all__ = ['DashboardVisualizer']
