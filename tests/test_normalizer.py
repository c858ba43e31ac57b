"""Tests for completion normalization."""
import json
import re
import unittest

from spendwise.llm.models import Insight
from spendwise.llm.normalizer import (
    SAVINGS_KEYS,
    fallback_insight,
    format_savings,
    is_valid_entry,
    normalize_completion,
    parse_savings_text,
    resolve_savings,
)

SAVINGS_PATTERN = re.compile(r"^\$-?\d+(\.\d+)?$")


def _entry(**overrides):
    entry = {
        "title": "Cut dining",
        "description": "Eat out less often",
        "impact": "High",
        "type": "warning",
        "potential_savings": "$120.50",
    }
    entry.update(overrides)
    return entry


class TestNormalizeCompletion(unittest.TestCase):
    """Test end-to-end normalization of completion text."""

    def test_alias_resolved_and_currency_stripped(self):
        raw = json.dumps([_entry()])

        insights = normalize_completion(raw)

        self.assertEqual(insights, [Insight(
            title="Cut dining",
            description="Eat out less often",
            impact="High",
            type="warning",
            savings="$120.5",
        )])

    def test_empty_array_is_not_fallback(self):
        self.assertEqual(normalize_completion("[]"), [])

    def test_invalid_json_returns_fallback(self):
        insights = normalize_completion("not json {")

        self.assertEqual(len(insights), 1)
        self.assertEqual(insights[0].to_dict(), {
            "title": "AI Suggestion",
            "description": "not json {",
            "impact": "Medium",
            "type": "opportunity",
            "savings": "$0",
        })

    def test_non_array_json_returns_fallback(self):
        raw = json.dumps({"insights": [_entry()]})

        insights = normalize_completion(raw)

        self.assertEqual(insights, [fallback_insight(raw)])

    def test_markdown_fenced_array_returns_fallback(self):
        raw = "```json\n[]\n```"
        self.assertEqual(normalize_completion(raw)[0].description, raw)

    def test_nan_literal_returns_fallback(self):
        self.assertEqual(normalize_completion("NaN")[0].title, "AI Suggestion")

    def test_malformed_entries_dropped(self):
        raw = json.dumps([
            _entry(title="kept"),
            _entry(title=None),
            _entry(impact=3),
            {k: v for k, v in _entry().items() if k != "description"},
            {k: v for k, v in _entry().items() if k != "potential_savings"},
            _entry(potential_savings=True),
            "just a string",
            None,
            42,
        ])

        insights = normalize_completion(raw)

        self.assertEqual([i.title for i in insights], ["kept"])

    def test_all_entries_rejected_yields_empty(self):
        raw = json.dumps([{"title": "only a title"}])
        self.assertEqual(normalize_completion(raw), [])

    def test_savings_always_dollar_number(self):
        raw = json.dumps([
            _entry(potential_savings=50),
            _entry(potential_savings=12.25),
            _entry(potential_savings="around $1,200/month"),
            _entry(potential_savings="none"),
            _entry(potential_savings="-30"),
            _entry(potential_savings=75.0),
        ])

        savings = [i.savings for i in normalize_completion(raw)]

        self.assertEqual(savings, ["$50", "$12.25", "$1200", "$0", "$-30", "$75"])
        for value in savings:
            self.assertRegex(value, SAVINGS_PATTERN)

    def test_extra_fields_ignored(self):
        raw = json.dumps([_entry(confidence=0.9)])
        self.assertEqual(set(normalize_completion(raw)[0].to_dict()), {
            "title", "description", "impact", "type", "savings",
        })


class TestSavingsAliases(unittest.TestCase):
    """Test savings alias lookup."""

    def test_alias_priority_order(self):
        self.assertEqual(SAVINGS_KEYS, ("potential_savings", "potentialSavings", "potential savings"))

    def test_each_alias_accepted(self):
        for key in SAVINGS_KEYS:
            entry = _entry()
            del entry["potential_savings"]
            entry[key] = 10
            self.assertTrue(is_valid_entry(entry), key)
            self.assertEqual(resolve_savings(entry), 10)

    def test_first_alias_wins(self):
        entry = _entry(potential_savings="$5", potentialSavings=99)
        entry["potential savings"] = 1
        self.assertEqual(resolve_savings(entry), "$5")

    def test_null_alias_skipped(self):
        entry = _entry(potential_savings=None, potentialSavings="$7")

        self.assertTrue(is_valid_entry(entry))
        self.assertEqual(normalize_completion(json.dumps([entry]))[0].savings, "$7")

    def test_non_scalar_resolved_value_becomes_zero(self):
        entry = _entry(potential_savings={"amount": 5}, potentialSavings="5")

        self.assertTrue(is_valid_entry(entry))
        self.assertEqual(normalize_completion(json.dumps([entry]))[0].savings, "$0")


class TestSavingsParsing(unittest.TestCase):
    """Test savings text parsing and formatting."""

    def test_parse_savings_text(self):
        self.assertEqual(parse_savings_text("$120.50"), 120.5)
        self.assertEqual(parse_savings_text("1.2.3"), 1.2)
        self.assertEqual(parse_savings_text(".5"), 0.5)
        self.assertIsNone(parse_savings_text("-"))
        self.assertIsNone(parse_savings_text(""))
        self.assertIsNone(parse_savings_text("--5"))

    def test_format_savings(self):
        self.assertEqual(format_savings(0), "$0")
        self.assertEqual(format_savings(120.5), "$120.5")
        self.assertEqual(format_savings(1500.0), "$1500")
        self.assertEqual(format_savings(7), "$7")


if __name__ == "__main__":
    unittest.main()
