"""Data models for insight generation and aggregation."""
from dataclasses import dataclass, asdict
from decimal import Decimal
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class TransactionRecord:
    """Transaction data as supplied by the persistence layer."""
    category: Optional[str]
    amount: Any
    date: Optional[str]
    kind: Optional[str]  # "income" or "expense", carried as "type" on the wire

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "amount": self.amount,
            "date": self.date,
            "type": self.kind
        }


@dataclass(frozen=True)
class Insight:
    """Normalized insight returned to the caller."""
    title: str
    description: str
    impact: str  # High, Medium, Low
    type: str  # warning, opportunity, positive
    savings: str  # "$" followed by a number

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class MonthlyStat:
    """Income and expense totals for one YYYY-MM month."""
    month: str
    income: Decimal
    expense: Decimal


@dataclass(frozen=True)
class CategoryTotal:
    """Total expense amount for one category."""
    name: str
    value: Decimal


@dataclass(frozen=True)
class DashboardStats:
    """Financial overview shown on the dashboard."""
    total_expense: Decimal
    total_income: Decimal
    daily_spend: Decimal
    budget_limit: Decimal
    budget_used: Decimal  # percent of budget_limit, capped at 100
    remaining_budget: Decimal
    recent: List[TransactionRecord]
