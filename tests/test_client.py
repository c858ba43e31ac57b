"""Tests for the insight service client."""
import unittest
from unittest.mock import Mock, patch

import requests

from spendwise.client.insight_client import InsightClient
from spendwise.utils.exceptions import InsightRequestError

FOOD = {"category": "Food", "amount": 42, "date": "2025-06-01", "type": "expense"}


def _response(status_code=200, payload=None):
    r = Mock()
    r.status_code = status_code
    r.ok = status_code < 400
    r.text = str(payload)
    r.json.return_value = payload
    return r


class TestInsightClient(unittest.TestCase):
    """Test InsightClient functionality."""

    def setUp(self):
        self.client = InsightClient("http://insights.local/")

    @patch("spendwise.client.insight_client.requests.post")
    def test_empty_list_sends_nothing(self, post):
        self.assertEqual(self.client.fetch_insights([]), [])
        post.assert_not_called()

    @patch("spendwise.client.insight_client.requests.post")
    def test_posts_all_records_once(self, post):
        records = [FOOD] * 30
        insights = [{"title": "t", "description": "d", "impact": "Low", "type": "positive", "savings": "$0"}]
        post.return_value = _response(200, insights)

        result = self.client.fetch_insights(records)

        self.assertEqual(result, insights)
        post.assert_called_once_with(
            "http://insights.local/api/getInsights",
            json={"expenses": records},
            timeout=None,
        )

    @patch("spendwise.client.insight_client.requests.post")
    def test_error_status_raises(self, post):
        post.return_value = _response(500, {"error": "Internal error generating insights", "details": "x"})

        with self.assertRaises(InsightRequestError) as ctx:
            self.client.fetch_insights([FOOD])
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(str(ctx.exception), "Failed to fetch insights")
        post.assert_called_once()

    @patch("spendwise.client.insight_client.requests.post")
    def test_transport_error_raises(self, post):
        post.side_effect = requests.ConnectionError("refused")

        with self.assertRaises(InsightRequestError):
            self.client.fetch_insights([FOOD])
        post.assert_called_once()

    @patch("spendwise.client.insight_client.requests.post")
    def test_timeout_passed_through(self, post):
        post.return_value = _response(200, [])

        InsightClient("http://insights.local", timeout=30).fetch_insights([FOOD])

        self.assertEqual(post.call_args.kwargs["timeout"], 30)

    @patch("spendwise.client.insight_client.requests.post")
    def test_fetch_summary(self, post):
        summary = {"monthly": [{"month": "2025-06", "income": 0.0, "expense": 42.0}],
                   "categories": [{"name": "Food", "value": 42.0}]}
        post.return_value = _response(200, summary)

        self.assertEqual(self.client.fetch_summary([FOOD]), summary)
        self.assertEqual(post.call_args.args[0], "http://insights.local/api/analytics/summary")

    @patch("spendwise.client.insight_client.requests.post")
    def test_fetch_overview(self, post):
        overview = {"total_expense": 42.0, "total_income": 0.0, "daily_spend": 42.0,
                    "budget_limit": 5000.0, "budget_used": 0.84, "remaining_budget": 4958.0,
                    "recent": [FOOD]}
        post.return_value = _response(200, overview)

        self.assertEqual(self.client.fetch_overview([FOOD]), overview)
        post.assert_called_once_with(
            "http://insights.local/api/analytics/overview",
            json={"expenses": [FOOD]},
            timeout=None,
        )

    @patch("spendwise.client.insight_client.requests.post")
    def test_fetch_summary_empty(self, post):
        self.assertEqual(self.client.fetch_summary([]), {"monthly": [], "categories": []})
        post.assert_not_called()


if __name__ == "__main__":
    unittest.main()
