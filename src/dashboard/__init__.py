# src/dashboard/__init__.py
"""Dashboard state machine and chart modules."""

from .state import DashboardController, Idle, Loading, Ready, Error, InvalidTransitionError
from .charts import monthly_bar_chart

__all__ = [
    'DashboardController',
    'Idle',
    'Loading',
    'Ready',
    'Error',
    'InvalidTransitionError',
    'monthly_bar_chart',
]
