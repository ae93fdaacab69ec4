"""
Unit tests for the dashboard state machine.
"""
import pytest
import requests
import sys
from pathlib import Path
from unittest.mock import MagicMock

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.data.aggregator import MonthlyAggregator
from src.data.loader import DataLoader, DataFetchError
from src.dashboard.state import (
    DashboardController,
    Error,
    ERROR_MESSAGE,
    Idle,
    InvalidTransitionError,
    Loading,
    Ready,
)


class TestDashboardController:
    """Test suite for DashboardController class."""

    @pytest.fixture
    def loader(self):
        loader = MagicMock(spec=DataLoader)
        loader.load_historical.return_value = {
            'cases': {'1/1/21': 10, '1/15/21': 5, '2/1/21': 3},
            'deaths': {'1/1/21': 1, '1/15/21': 1, '2/1/21': 0},
        }
        return loader

    def test_starts_idle(self, loader):
        controller = DashboardController(loader=loader)

        assert isinstance(controller.state, Idle)
        assert not controller.is_loading
        loader.load_historical.assert_not_called()

    def test_success_moves_to_ready(self, loader):
        controller = DashboardController(loader=loader)

        state = controller.load()

        assert isinstance(state, Ready)
        assert state.data['date'].tolist() == ['1/21', '2/21']
        assert state.data['cases'].tolist() == [15, 3]
        assert not controller.is_loading
        loader.load_historical.assert_called_once()

    def test_loading_is_visible_during_fetch(self, loader):
        controller = DashboardController(loader=loader)
        seen = []
        loader.load_historical.side_effect = lambda: seen.append(controller.state) or {
            'cases': {}, 'deaths': {},
        }

        controller.load()

        assert len(seen) == 1
        assert isinstance(seen[0], Loading)

    def test_non_2xx_moves_to_error(self):
        """A failed status goes through the real loader and ends in Error."""
        response = MagicMock(spec=requests.Response)
        response.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
        session = MagicMock(spec=requests.Session)
        session.get.return_value = response

        controller = DashboardController(loader=DataLoader(session=session))
        state = controller.load()

        assert isinstance(state, Error)
        assert not isinstance(state, Ready)
        assert state.message == ERROR_MESSAGE

    def test_fetch_error_moves_to_error(self, loader):
        loader.load_historical.side_effect = DataFetchError("timed out")
        controller = DashboardController(loader=loader)

        state = controller.load()

        assert state == Error("Something went wrong. Check again at a later time")
        assert not controller.is_loading

    def test_aggregation_failure_moves_to_error(self, loader):
        aggregator = MagicMock(spec=MonthlyAggregator)
        aggregator.aggregate.side_effect = TypeError("unsupported operand")
        controller = DashboardController(loader=loader, aggregator=aggregator)

        assert isinstance(controller.load(), Error)

    def test_zero_dates_is_ready_with_empty_series(self, loader):
        loader.load_historical.return_value = {'cases': {}, 'deaths': {}}
        controller = DashboardController(loader=loader)

        state = controller.load()

        assert isinstance(state, Ready)
        assert state.data.empty

    def test_single_attempt_per_controller(self, loader):
        controller = DashboardController(loader=loader)
        controller.load()

        with pytest.raises(InvalidTransitionError):
            controller.load()

        assert isinstance(controller.state, Ready)
        loader.load_historical.assert_called_once()

    def test_no_retry_after_error(self, loader):
        loader.load_historical.side_effect = DataFetchError("boom")
        controller = DashboardController(loader=loader)
        controller.load()

        with pytest.raises(InvalidTransitionError):
            controller.load()

        assert loader.load_historical.call_count == 1

    def test_start_loading_only_from_idle(self, loader):
        controller = DashboardController(loader=loader)
        controller.start_loading()

        assert controller.is_loading
        with pytest.raises(InvalidTransitionError):
            controller.start_loading()

        with pytest.raises(InvalidTransitionError):
            controller.load()
        loader.load_historical.assert_not_called()

    def test_unexpected_exception_moves_to_error(self, loader):
        """Any failure during fetch ends in Error after a single call."""
        loader.load_historical.side_effect = KeyError("cases")
        controller = DashboardController(loader=loader)

        state = controller.load()

        assert isinstance(state, Error)
        assert state.message == ERROR_MESSAGE
        assert not controller.is_loading
        with pytest.raises(InvalidTransitionError):
            controller.load()
        assert loader.load_historical.call_count == 1

    def test_interrupted_load_clears_loading(self, loader):
        """A BaseException escaping the fetch still leaves loading cleared."""
        loader.load_historical.side_effect = KeyboardInterrupt
        controller = DashboardController(loader=loader)

        with pytest.raises(KeyboardInterrupt):
            controller.load()

        assert isinstance(controller.state, Error)
        assert not controller.is_loading


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
