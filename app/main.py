"""
Main entry point for FastAPI application.
"""
from contextlib import asynccontextmanager
from typing import Optional

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from app.config import Settings
from app.errors import ApiError
from app.logging_config import setup_logging
from app.repositories.database import create_database_repository
from app.repositories.email import create_email_repository
from app.repositories.notifications import create_notification_repository
from app.routes import feedback, news, notifications, subscriptions

logger = logging.getLogger(__name__)


async def _handle_api_error(request: Request, exc: ApiError) -> PlainTextResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return PlainTextResponse(str(exc), status_code=exc.status_code)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database = app.state.database
    logger.info("Running init_schema()…")
    try:
        await database.init_schema()
        logger.info("DB ready.")
    except Exception:
        logger.exception("init_schema failed")
        raise

    # Hand control to the application
    yield

    for name in ("email_repository", "notification_repository"):
        repository = getattr(app.state, name)
        if repository is not None:
            await repository.aclose()

    try:
        logger.info("Disposing DB engine…")
        await database.dispose()
        logger.info("DB engine disposed.")
    except Exception:
        logger.exception("Failed to dispose DB engine")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application and its collaborators from one Settings object."""
    settings = settings or Settings()
    setup_logging(
        level=settings.log_level,
        access_log=settings.access_log,
        production=settings.production,
    )

    app = FastAPI(title="News Backend", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = create_database_repository(settings)
    app.state.email_repository = create_email_repository(settings)
    app.state.notification_repository = create_notification_repository(settings)

    app.add_exception_handler(ApiError, _handle_api_error)  # type: ignore[arg-type]
    app.include_router(news.router)
    app.include_router(feedback.router)
    app.include_router(notifications.router)
    app.include_router(subscriptions.router)

    @app.get("/health")
    async def health_check():
        """Health Check Endpoint"""
        return {"status": "ok"}

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host="0.0.0.0", port=8080)
