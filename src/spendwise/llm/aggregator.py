"""Transaction aggregation for the analytics summary and dashboard overview."""
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional, Sequence

from .models import TransactionRecord, MonthlyStat, CategoryTotal, DashboardStats
from spendwise.utils.logger import get_logger

logger = get_logger()

DEFAULT_BUDGET_LIMIT = Decimal(5000)
RECENT_LIMIT = 10


def _to_decimal(amount) -> Optional[Decimal]:
    if isinstance(amount, bool):
        return None
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        return None
    return value if value.is_finite() else None


class Aggregator:
    """Aggregates transactions by month and by category."""

    def monthly_stats(self, transactions: Sequence[TransactionRecord]) -> List[MonthlyStat]:
        """
        Total income and expense per month.

        Months keep the order in which they first appear. Anything not marked
        as income counts as an expense.

        Args:
            transactions: List of transactions

        Returns:
            List of MonthlyStat objects
        """
        totals: Dict[str, Dict[str, Decimal]] = {}

        for txn in transactions:
            if not isinstance(txn.date, str) or len(txn.date) < 7:
                logger.warning(f"Invalid date: {txn.date!r}, skipping transaction")
                continue
            amount = _to_decimal(txn.amount)
            if amount is None:
                logger.warning(f"Invalid amount: {txn.amount!r}, skipping transaction")
                continue

            month = txn.date[:7]
            bucket = totals.setdefault(month, {"income": Decimal(0), "expense": Decimal(0)})
            if txn.kind == "income":
                bucket["income"] += amount
            else:
                bucket["expense"] += amount

        logger.info(f"Aggregated {len(transactions)} transactions into {len(totals)} months")

        return [
            MonthlyStat(month=month, income=bucket["income"], expense=bucket["expense"])
            for month, bucket in totals.items()
        ]

    def category_breakdown(self, transactions: Sequence[TransactionRecord]) -> List[CategoryTotal]:
        """Total expense amount per category, in first-seen order."""
        totals: Dict[str, Decimal] = {}

        for txn in transactions:
            if txn.kind != "expense":
                continue
            amount = _to_decimal(txn.amount)
            if amount is None:
                logger.warning(f"Invalid amount: {txn.amount!r}, skipping transaction")
                continue
            totals[txn.category] = totals.get(txn.category, Decimal(0)) + amount

        logger.info(f"Aggregated expenses into {len(totals)} categories")

        return [CategoryTotal(name=name, value=value) for name, value in totals.items()]

    def overview(self, transactions: Sequence[TransactionRecord]) -> DashboardStats:
        """
        Dashboard totals and budget usage.

        Without any income the budget falls back to DEFAULT_BUDGET_LIMIT.
        Daily spend divides total expense by the number of distinct dates
        across all transactions.

        Args:
            transactions: List of transactions

        Returns:
            DashboardStats object
        """
        total_expense = Decimal(0)
        total_income = Decimal(0)

        for txn in transactions:
            if txn.kind not in ("income", "expense"):
                continue
            amount = _to_decimal(txn.amount)
            if amount is None:
                logger.warning(f"Invalid amount: {txn.amount!r}, skipping transaction")
                continue
            if txn.kind == "income":
                total_income += amount
            else:
                total_expense += amount

        distinct_dates = {txn.date for txn in transactions}
        daily_spend = total_expense / len(distinct_dates) if distinct_dates else Decimal(0)

        budget_limit = total_income or DEFAULT_BUDGET_LIMIT
        budget_used = min(total_expense / budget_limit * 100, Decimal(100))
        remaining_budget = max(budget_limit - total_expense, Decimal(0))

        logger.info(
            f"Overview: expense {total_expense}, income {total_income}, "
            f"budget used {budget_used:.1f}%"
        )

        return DashboardStats(
            total_expense=total_expense,
            total_income=total_income,
            daily_spend=daily_spend,
            budget_limit=budget_limit,
            budget_used=budget_used,
            remaining_budget=remaining_budget,
            recent=self.recent(transactions)
        )

    def recent(self, transactions: Sequence[TransactionRecord], limit: int = RECENT_LIMIT) -> List[TransactionRecord]:
        """Most recent transactions by date, newest first; undated ones sort last."""
        return sorted(
            transactions,
            key=lambda txn: (isinstance(txn.date, str), txn.date if isinstance(txn.date, str) else ""),
            reverse=True
        )[:limit]

