"""Prompt construction for insight generation."""
from typing import Any, List, Mapping, Sequence

DEFAULT_MAX_RECORDS = 20
DEFAULT_INSIGHT_COUNT = 3

# Per-field fallbacks for absent or empty values
FIELD_DEFAULTS = (
    ("category", "Unknown"),
    ("amount", 0),
    ("date", "N/A"),
    ("type", "N/A"),
)

PROMPT_TEMPLATE = """You are a financial advisor AI. Based on the following expense data, generate {count} smart insights.

Each insight must include:
- title
- description
- impact (High, Medium, Low)
- potential savings (in dollars)
- type (warning, opportunity, positive)

Respond ONLY with a JSON array. No explanation, no markdown.

Here is the data:
{records}"""


def _render_value(value: Any) -> str:
    """Render a field the way it prints in a template string: true, 1,2, 30."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list):
        return ",".join("" if item is None else _render_value(item) for item in value)
    return str(value)


def format_record(record: Any) -> str:
    """Render one record as a pipe-delimited line, substituting defaults per field."""
    if not isinstance(record, Mapping):
        record = {}

    fields = []
    for key, default in FIELD_DEFAULTS:
        value = record.get(key)
        fields.append(_render_value(value if value else default))
    return " | ".join(fields)


def format_records(expenses: Sequence[Any], max_records: int = DEFAULT_MAX_RECORDS) -> List[str]:
    """Render the first max_records records; the rest are dropped."""
    return [format_record(record) for record in list(expenses)[:max_records]]


def build_prompt(
    expenses: Sequence[Any],
    max_records: int = DEFAULT_MAX_RECORDS,
    insight_count: int = DEFAULT_INSIGHT_COUNT
) -> str:
    """Build the insight prompt from raw expense records."""
    lines = format_records(expenses, max_records)
    return PROMPT_TEMPLATE.format(count=insight_count, records="\n".join(lines))
