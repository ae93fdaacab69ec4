"""
Data loading module for fetching historical COVID-19 counts from disease.sh.
"""
import logging
import os
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

API_URL = os.getenv("COVID_API_URL", "https://disease.sh/v3/covid-19/historical/all")
LAST_DAYS = os.getenv("COVID_LASTDAYS", "all")
REQUEST_TIMEOUT = float(os.getenv("COVID_REQUEST_TIMEOUT", "30"))


class DataFetchError(Exception):
    """Raised when the historical data cannot be fetched or parsed."""


class DataLoader:
    """Handles loading of the global historical case and death series."""

    def __init__(
        self,
        api_url: str = API_URL,
        last_days: str = LAST_DAYS,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url
        self.last_days = last_days
        self.timeout = timeout
        self.session = session or requests.Session()

    def load_historical(self) -> Dict[str, Any]:
        """
        Load the historical series for all available days.

        Returns:
            Parsed JSON body with at least the keys ``cases`` and ``deaths``,
            each a mapping of ``M/D/YY`` date strings to counts.

        Raises:
            DataFetchError: on a network failure, a non-2xx status, an
                unparseable body or a body without both series.
        """
        params = {"lastdays": self.last_days}
        logger.info(f"Loading historical data from {self.api_url} (lastdays={self.last_days})")

        try:
            response = self.session.get(self.api_url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to load historical data: {e}")
            raise DataFetchError(f"There was a problem hitting the endpoint: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Response body is not valid JSON: {e}")
            raise DataFetchError("Response body is not valid JSON") from e

        self._validate(payload)

        logger.info(f"Loaded {len(payload['cases'])} daily records")
        return payload

    def _validate(self, payload: Any):
        """Check that both daily series are present and are mappings."""
        if not isinstance(payload, dict):
            raise DataFetchError(f"Expected a JSON object, got {type(payload).__name__}")

        for key in ("cases", "deaths"):
            series = payload.get(key)
            if not isinstance(series, dict):
                raise DataFetchError(f"Response is missing the '{key}' series")
