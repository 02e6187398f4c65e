"""Fixtures that wire the FastAPI app to the test database and fake providers."""

from typing import AsyncGenerator

import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.main import create_app


@pytest_asyncio.fixture()
async def app(settings: Settings) -> AsyncGenerator[FastAPI, None]:
    """Application with its schema created; outbound providers unset."""
    application = create_app(settings)
    await application.state.database.init_schema()
    try:
        yield application
    finally:
        await application.state.database.dispose()


@pytest_asyncio.fixture()
async def app_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Provide an HTTP client bound to the application."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture()
async def configured_app(app: FastAPI, email_repository, notification_repository) -> FastAPI:
    """Application with fake email and push repositories installed."""
    app.state.email_repository = email_repository
    app.state.notification_repository = notification_repository
    return app

