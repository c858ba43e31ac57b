"""Normalization of free-form model output into Insight records."""
import json
import math
import re
from typing import Any, List, Mapping, Optional, Union

from .models import Insight
from spendwise.utils.logger import get_logger

logger = get_logger()

REQUIRED_TEXT_FIELDS = ("title", "description", "impact", "type")

# Savings aliases in lookup priority order
SAVINGS_KEYS = ("potential_savings", "potentialSavings", "potential savings")

FALLBACK_TITLE = "AI Suggestion"
FALLBACK_IMPACT = "Medium"
FALLBACK_TYPE = "opportunity"
ZERO_SAVINGS = "$0"

_NON_NUMERIC_CHARS = re.compile(r"[^0-9.\-]")
_LEADING_NUMBER = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")

Number = Union[int, float]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _reject_constant(name: str):
    raise ValueError(f"Invalid JSON constant: {name}")


def parse_completion(raw: str) -> Optional[list]:
    """
    Parse completion text as a strict JSON array.

    Returns:
        The parsed list, or None when the text is not JSON or not an array
    """
    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except ValueError as e:
        logger.warning(f"Completion is not valid JSON: {e}")
        return None

    if not isinstance(data, list):
        logger.warning(f"Completion parsed to {type(data).__name__}, expected a list")
        return None
    return data


def is_valid_entry(entry: Any) -> bool:
    """Check an entry has the four text fields and a usable savings alias."""
    # Non-object entries such as null are dropped rather than triggering the fallback
    if not isinstance(entry, Mapping):
        return False
    if not all(isinstance(entry.get(key), str) for key in REQUIRED_TEXT_FIELDS):
        return False
    return any(
        _is_number(entry.get(key)) or isinstance(entry.get(key), str)
        for key in SAVINGS_KEYS
    )


def resolve_savings(entry: Mapping[str, Any]) -> Any:
    """Return the value of the first savings alias that is not null."""
    for key in SAVINGS_KEYS:
        value = entry.get(key)
        if value is not None:
            return value
    return None


def parse_savings_text(text: str) -> Optional[float]:
    """
    Strip everything but digits, periods and minus signs, then read the
    leading number.

    "$1,200.50/mo" -> 1200.5, "about 50" -> 50.0, "n/a" -> None
    """
    match = _LEADING_NUMBER.match(_NON_NUMERIC_CHARS.sub("", text))
    if not match:
        return None
    return float(match.group(0))


def savings_amount(value: Any) -> Number:
    """Turn a resolved savings value into a number, 0 when unusable."""
    if isinstance(value, str):
        number = parse_savings_text(value)
    elif _is_number(value):
        number = value
    else:
        number = None

    if number is None or (isinstance(number, float) and not math.isfinite(number)):
        return 0
    return number


def format_savings(amount: Number) -> str:
    """Dollar-prefix a number without grouping or fixed decimals."""
    if isinstance(amount, float) and amount.is_integer():
        return f"${int(amount)}"
    return f"${amount}"


def normalize_entry(entry: Mapping[str, Any]) -> Insight:
    return Insight(
        title=entry["title"],
        description=entry["description"],
        impact=entry["impact"],
        type=entry["type"],
        savings=format_savings(savings_amount(resolve_savings(entry)))
    )


def fallback_insight(raw: str) -> Insight:
    """Single insight carrying the raw completion text."""
    return Insight(
        title=FALLBACK_TITLE,
        description=raw,
        impact=FALLBACK_IMPACT,
        type=FALLBACK_TYPE,
        savings=ZERO_SAVINGS
    )


def normalize_completion(raw: str) -> List[Insight]:
    """
    Normalize raw completion text into insights.

    A JSON array yields one insight per well-formed entry; malformed entries
    are dropped, so an array may yield an empty list. Anything that is not a
    JSON array yields the single fallback insight.

    Args:
        raw: Completion text as returned by the model

    Returns:
        List of Insight objects
    """
    entries = parse_completion(raw)
    if entries is None:
        logger.warning("Returning fallback insight for unstructured completion")
        logger.debug(f"Unstructured completion: {raw[:500]}")
        return [fallback_insight(raw)]

    insights = [normalize_entry(entry) for entry in entries if is_valid_entry(entry)]

    dropped = len(entries) - len(insights)
    if dropped:
        logger.debug(f"Dropped {dropped} malformed insight entries")
    logger.info(f"Parsed {len(insights)} valid insights")
    return insights
