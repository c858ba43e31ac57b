from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

from spendwise.llm.models import TransactionRecord, MonthlyStat, CategoryTotal, DashboardStats

TransactionKind = Literal["income", "expense"]


class TransactionIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    category: str
    amount: float = Field(allow_inf_nan=False)
    date: str
    kind: TransactionKind = Field(alias="type")
    # Extra persistence columns are accepted and ignored
    id: Optional[int | str] = None

    def to_record(self) -> TransactionRecord:
        return TransactionRecord(
            category=self.category,
            amount=self.amount,
            date=self.date,
            kind=self.kind
        )


class SummaryReq(BaseModel):
    expenses: List[TransactionIn]


class MonthlyStatOut(BaseModel):
    month: str
    income: float
    expense: float

    @classmethod
    def from_stat(cls, stat: MonthlyStat) -> "MonthlyStatOut":
        return cls(month=stat.month, income=float(stat.income), expense=float(stat.expense))


class CategoryTotalOut(BaseModel):
    name: str
    value: float

    @classmethod
    def from_total(cls, total: CategoryTotal) -> "CategoryTotalOut":
        return cls(name=total.name, value=float(total.value))


class SummaryResponse(BaseModel):
    monthly: List[MonthlyStatOut]
    categories: List[CategoryTotalOut]


class RecentTransactionOut(BaseModel):
    category: str
    amount: float
    date: str
    type: TransactionKind


class OverviewResponse(BaseModel):
    total_expense: float
    total_income: float
    daily_spend: float
    budget_limit: float
    budget_used: float
    remaining_budget: float
    recent: List[RecentTransactionOut]

    @classmethod
    def from_stats(cls, stats: DashboardStats) -> "OverviewResponse":
        return cls(
            total_expense=float(stats.total_expense),
            total_income=float(stats.total_income),
            daily_spend=float(stats.daily_spend),
            budget_limit=float(stats.budget_limit),
            budget_used=float(stats.budget_used),
            remaining_budget=float(stats.remaining_budget),
            recent=[RecentTransactionOut(**txn.to_dict()) for txn in stats.recent],
        )


class InsightOut(BaseModel):
    title: str
    description: str
    impact: str
    type: str
    savings: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
