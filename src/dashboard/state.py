"""
Dashboard state machine: Idle -> Loading -> (Ready | Error).
"""
import logging
from dataclasses import dataclass
from typing import Optional, Union

import pandas as pd

from src.data.aggregator import MonthlyAggregator
from src.data.loader import DataLoader

logger = logging.getLogger(__name__)

ERROR_MESSAGE = "Something went wrong. Check again at a later time"


@dataclass(frozen=True)
class Idle:
    """Nothing requested yet."""


@dataclass(frozen=True)
class Loading:
    """The single fetch is in flight."""


@dataclass(frozen=True, eq=False)
class Ready:
    """Monthly series available for the chart (possibly empty)."""

    data: pd.DataFrame


@dataclass(frozen=True)
class Error:
    """Fetch or parse failed; ``message`` is what the user sees."""

    message: str


DashboardState = Union[Idle, Loading, Ready, Error]

TRANSITIONS = {
    Idle: (Loading,),
    Loading: (Ready, Error),
    Ready: (),
    Error: (),
}


class InvalidTransitionError(RuntimeError):
    """Raised when the controller is asked to make a state change it does not allow."""


class DashboardController:
    """Owns the dashboard state and runs the single fetch-and-aggregate attempt."""

    def __init__(
        self,
        loader: Optional[DataLoader] = None,
        aggregator: Optional[MonthlyAggregator] = None,
    ):
        self.loader = loader or DataLoader()
        self.aggregator = aggregator or MonthlyAggregator()
        self._state: DashboardState = Idle()

    @property
    def state(self) -> DashboardState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return isinstance(self._state, Loading)

    def _transition(self, new_state: DashboardState):
        allowed = TRANSITIONS[type(self._state)]
        if not isinstance(new_state, allowed):
            raise InvalidTransitionError(
                f"Cannot move from {type(self._state).__name__} to {type(new_state).__name__}"
            )
        logger.debug(f"State {type(self._state).__name__} -> {type(new_state).__name__}")
        self._state = new_state

    def start_loading(self):
        """Enter the loading state. Only valid once, from Idle."""
        self._transition(Loading())

    def load(self) -> DashboardState:
        """
        Fetch the historical series, aggregate it and settle in Ready or Error.

        There is no retry: a controller makes exactly one attempt, and calling
        this again raises InvalidTransitionError.
        """
        self.start_loading()

        try:
            payload = self.loader.load_historical()
            monthly = self.aggregator.aggregate(payload['cases'], payload['deaths'])
        except Exception as e:
            logger.error(f"Dashboard data load failed: {e}", exc_info=True)
            self._transition(Error(ERROR_MESSAGE))
        else:
            logger.info(f"Dashboard ready with {len(monthly)} monthly points")
            self._transition(Ready(monthly))
        finally:
            # interrupted runs (e.g. a Streamlit rerun) must not leave loading set
            if self.is_loading:
                self._state = Error(ERROR_MESSAGE)

        return self._state
