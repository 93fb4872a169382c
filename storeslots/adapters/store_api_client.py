"""
Store API client for fetching weekly hours and date overrides.
"""

import logging
from typing import Any, Dict, List

import requests

from ..domain.exceptions import StoreAPIError
from .schedule_adapter import StoreData

logger = logging.getLogger(__name__)


class StoreAPIClient:
    """
    Client for the store schedule REST API.

    Endpoints:
    - GET /store-times/      weekly hours, one record per weekday
    - GET /store-overrides/  date exceptions (day + month)
    """

    STORE_TIMES_ENDPOINT = "/store-times/"
    STORE_OVERRIDES_ENDPOINT = "/store-overrides/"

    def __init__(self, base_url: str, timeout_seconds: float = 10.0, session: requests.Session | None = None):
        """
        Initialize the store API client.

        Args:
            base_url: API root, without trailing slash
            timeout_seconds: Per-request timeout
            session: Optional requests session (tests inject one)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()
        self.headers = {"Content-Type": "application/json"}

    def get_store_times(self) -> List[Dict[str, Any]]:
        """Fetch the weekly-hours records."""
        return self._get_list(self.STORE_TIMES_ENDPOINT)

    def get_store_overrides(self) -> List[Dict[str, Any]]:
        """Fetch the override records."""
        return self._get_list(self.STORE_OVERRIDES_ENDPOINT)

    def fetch_store_data(self) -> StoreData:
        """
        Fetch both weekly hours and overrides.

        Returns:
            StoreData with the raw records

        Raises:
            StoreAPIError: If either request fails or returns unexpected data
        """
        logger.info("Fetching store configuration from %s", self.base_url)

        store_data = StoreData(
            weekly_records=self.get_store_times(),
            override_records=self.get_store_overrides(),
        )

        logger.debug(
            "Fetched %d weekly records and %d overrides",
            len(store_data.weekly_records),
            len(store_data.override_records),
        )
        return store_data

    def check_health(self) -> bool:
        """Check if the API is reachable."""
        try:
            self.get_store_times()
        except StoreAPIError as exc:
            logger.warning("Store API health check failed: %s", exc)
            return False
        return True

    def _get_list(self, endpoint: str) -> List[Dict[str, Any]]:
        url = f"{self.base_url}{endpoint}"
        logger.debug("GET %s", url)

        try:
            response = self.session.get(url, headers=self.headers, timeout=self.timeout_seconds)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as exc:
            raise StoreAPIError(f"Failed to fetch {endpoint} from store API: {exc}") from exc
        except ValueError as exc:
            raise StoreAPIError(f"Store API returned invalid JSON for {endpoint}: {exc}") from exc

        if not isinstance(data, list):
            raise StoreAPIError(
                f"Store API returned {type(data).__name__} for {endpoint}, expected a list"
            )

        return data
