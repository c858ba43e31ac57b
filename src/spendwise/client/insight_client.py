"""Client for the insight service."""
from typing import Any, Dict, List, Optional, Sequence

import requests

from spendwise.utils.logger import get_logger
from spendwise.utils.exceptions import InsightRequestError

logger = get_logger()

INSIGHTS_PATH = "/api/getInsights"
SUMMARY_PATH = "/api/analytics/summary"
OVERVIEW_PATH = "/api/analytics/overview"


class InsightClient:
    """Submits the caller's transactions to the insight service."""

    def __init__(self, base_url: str, timeout: Optional[float] = None):
        """
        Initialize client.

        Args:
            base_url: Service root, e.g. http://127.0.0.1:8000
            timeout: Seconds to wait for a response, None waits indefinitely
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def fetch_insights(self, records: Sequence[Dict[str, Any]]) -> List[Dict[str, str]]:
        """
        Request insights for the full list of records.

        No request is made for an empty list.

        Raises:
            InsightRequestError: on a non-success response or transport failure
        """
        if not records:
            logger.info("No expenses loaded, skipping insight request")
            return []

        logger.info(f"Sending {len(records)} expenses for insights")
        return self._post(INSIGHTS_PATH, {"expenses": list(records)}, "Failed to fetch insights")

    def fetch_summary(self, records: Sequence[Dict[str, Any]]) -> Dict[str, list]:
        """Request monthly and category totals for the records."""
        if not records:
            return {"monthly": [], "categories": []}

        return self._post(SUMMARY_PATH, {"expenses": list(records)}, "Failed to fetch summary")

    def fetch_overview(self, records: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
        """Request dashboard totals, budget usage and recent transactions."""
        return self._post(OVERVIEW_PATH, {"expenses": list(records)}, "Failed to fetch overview")

    def _post(self, path: str, payload: dict, failure_message: str) -> Any:
        url = f"{self.base_url}{path}"
        try:
            r = requests.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"{failure_message}: {e}")
            raise InsightRequestError(failure_message) from e

        if not r.ok:
            logger.error(f"{failure_message}: HTTP {r.status_code} {r.text[:200]}")
            raise InsightRequestError(failure_message, status_code=r.status_code)

        try:
            return r.json()
        except ValueError as e:
            raise InsightRequestError(failure_message, status_code=r.status_code) from e
