"""
Spendwise: Insight Service
Purpose: turn a user's transactions into spending insights and summaries.
"""
import uuid
from typing import Optional

from fastapi import FastAPI, Request

from spendwise.api.routers import insights, analytics
from spendwise.config import AppSettings, Config, get_settings
from spendwise.llm.insight_generator import InsightGenerator
from spendwise.utils.logger import get_logger, set_request_context, reset_request_context

logger = get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


def create_app(
    config: Optional[Config] = None,
    settings: Optional[AppSettings] = None,
    generator: Optional[InsightGenerator] = None,
) -> FastAPI:
    """Build the service with its insight generator wired in."""
    settings = settings or get_settings()
    if generator is None:
        generator = InsightGenerator(config, settings)

    app = FastAPI(title=f"{settings.app_name} API", version=settings.app_version)
    app.state.insight_generator = generator

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        token = set_request_context(request_id)
        try:
            logger.debug(f"{request.method} {request.url.path}")
            response = await call_next(request)
        finally:
            reset_request_context(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    # -------- Health --------
    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(insights.router)
    app.include_router(analytics.router)
    return app
