from typing import List

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from spendwise.api.schemas import InsightOut, ErrorResponse
from spendwise.utils.logger import get_logger
from spendwise.utils.exceptions import ValidationError

logger = get_logger()

router = APIRouter(prefix="/api", tags=["insights"])

NO_EXPENSES_MESSAGE = "No valid expenses provided"
INTERNAL_ERROR_MESSAGE = "Internal error generating insights"


async def _read_expenses(request: Request) -> list:
    """Pull a non-empty expenses list out of the request body."""
    try:
        body = await request.json()
    except ValueError:
        raise ValidationError(NO_EXPENSES_MESSAGE)

    expenses = body.get("expenses") if isinstance(body, dict) else None
    if not isinstance(expenses, list) or not expenses:
        raise ValidationError(NO_EXPENSES_MESSAGE)
    return expenses


@router.post(
    "/getInsights",
    response_model=List[InsightOut],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_insights(request: Request):
    try:
        expenses = await _read_expenses(request)
        logger.info(f"Expenses received: {len(expenses)}")

        generator = request.app.state.insight_generator
        insights = await run_in_threadpool(generator.generate, expenses)

        logger.info(f"Returning {len(insights)} insights")
        return [insight.to_dict() for insight in insights]

    except ValidationError as e:
        logger.warning(f"Rejected insight request: {e}")
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception as e:
        logger.exception(f"Insight generation failed: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": INTERNAL_ERROR_MESSAGE, "details": str(e) or "Unknown error"},
        )
