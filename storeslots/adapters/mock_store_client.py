"""
Mock store API client for running without network access.
"""

import json
import logging
from pathlib import Path

from ..domain.exceptions import StoreAPIError
from .schedule_adapter import StoreData

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = Path(__file__).parent / "mock_store_data.json"


class MockStoreClient:
    """
    Mock client that serves store data from a JSON file.

    The file holds the same records the real API returns, under the keys
    ``store_times`` and ``store_overrides``.
    """

    def __init__(self, data_file: Path | None = None, fail: bool = False):
        """
        Initialize the mock client.

        Args:
            data_file: JSON file with mock records (defaults to the packaged one)
            fail: Simulate an unreachable API
        """
        self.data_file = data_file or DEFAULT_DATA_FILE
        self.fail = fail

    def fetch_store_data(self) -> StoreData:
        """
        Load store data from the mock JSON file.

        Raises:
            StoreAPIError: If failure is simulated or the file is unusable
        """
        if self.fail:
            raise StoreAPIError("Mock store API is configured to fail")

        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise StoreAPIError(f"Could not load mock store data from {self.data_file}: {exc}") from exc

        logger.debug("Loaded mock store data from %s", self.data_file)

        return StoreData(
            weekly_records=list(data.get("store_times", [])),
            override_records=list(data.get("store_overrides", [])),
        )

    def check_health(self) -> bool:
        return not self.fail
