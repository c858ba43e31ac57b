from fastapi import APIRouter

from spendwise.api.schemas import (
    SummaryReq,
    SummaryResponse,
    MonthlyStatOut,
    CategoryTotalOut,
    OverviewResponse,
)
from spendwise.llm.aggregator import Aggregator

router = APIRouter(prefix="/api/analytics", tags=["analytics"])

aggregator = Aggregator()


@router.post("/summary", response_model=SummaryResponse)
def summary(body: SummaryReq):
    records = [txn.to_record() for txn in body.expenses]
    return SummaryResponse(
        monthly=[MonthlyStatOut.from_stat(s) for s in aggregator.monthly_stats(records)],
        categories=[CategoryTotalOut.from_total(c) for c in aggregator.category_breakdown(records)],
    )


@router.post("/overview", response_model=OverviewResponse)
def overview(body: SummaryReq):
    records = [txn.to_record() for txn in body.expenses]
    return OverviewResponse.from_stats(aggregator.overview(records))
