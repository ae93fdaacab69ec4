# src/data/__init__.py
"""Data loading and aggregation modules."""

from .loader import DataLoader, DataFetchError
from .aggregator import MonthlyAggregator, MonthlyPoint

__all__ = ['DataLoader', 'DataFetchError', 'MonthlyAggregator', 'MonthlyPoint']
