"""Pytest fixtures backed by a throwaway embedded SQLite database."""

from dataclasses import dataclass, field
from typing import AsyncGenerator, Sequence

import pytest
import pytest_asyncio

from app.config import Settings
from app.models.notifications import PushResult
from app.repositories.database import SqlDatabaseRepository, create_database_repository

TEST_SECRET = "test-secret"
ADMIN_EMAIL = "admin@example.com"
SITE_URL = "https://news.example.com"


@dataclass
class FakeEmailRepository:
    """Records every message instead of calling Resend."""

    sent: list[tuple[str, str, list[str]]] = field(default_factory=list)

    async def send(self, subject: str, body: str, recipients: Sequence[str]) -> None:
        self.sent.append((subject, body, list(recipients)))

    async def aclose(self) -> None:
        return None


@dataclass
class FakeNotificationRepository:
    """Records every broadcast and reports all tokens as delivered."""

    pushes: list[tuple[str, str, list[str]]] = field(default_factory=list)

    async def send_push(self, text: str, url: str, tokens: Sequence[str]) -> PushResult:
        self.pushes.append((text, url, list(tokens)))
        return PushResult(success=len(tokens), failure=0)

    async def aclose(self) -> None:
        return None


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a per-test SQLite file, with no outbound providers."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        database_url=None,
        embedded_database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        pool_size=2,
        secret_hash=TEST_SECRET,
        production=False,
        resend_api_key=None,
        firebase_server_key=None,
        admin_email=ADMIN_EMAIL,
        site_url=SITE_URL,
    )


@pytest_asyncio.fixture()
async def database(settings: Settings) -> AsyncGenerator[SqlDatabaseRepository, None]:
    """Yield a repository with the schema created."""
    repository = create_database_repository(settings)
    await repository.init_schema()
    try:
        yield repository
    finally:
        await repository.dispose()


@pytest.fixture
def email_repository() -> FakeEmailRepository:
    return FakeEmailRepository()


@pytest.fixture
def notification_repository() -> FakeNotificationRepository:
    return FakeNotificationRepository()


@pytest.fixture
def secret_headers() -> dict[str, str]:
    return {"Secret-hash": TEST_SECRET}
