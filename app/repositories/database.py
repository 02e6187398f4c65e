"""Persistence repository for news, feedback, push tokens and subscriptions.

Each public coroutine runs in its own session and transaction. Any SQLAlchemy
failure surfaces as `StorageError`; a missing news id surfaces as
`NotFoundError`.
"""

from __future__ import annotations

import logging
import secrets
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Protocol

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.config import Settings
from app.errors import NotFoundError, StorageError
from app.models.feedback import Feedback
from app.models.news import News
from app.models.notifications import FirebaseTokenData, FirebaseTokenType
from app.models.subscriptions import Subscription
from app.schemas.feedback import FeedbackRow
from app.schemas.news import NewsRow
from app.schemas.subscriptions import SubscriptionRow
from app.schemas.tokens import TokenRow
from app.utils.dates import format_date, parse_date, utc_now
from app.utils.db_async import create_engine, describe_database_url, init_db

logger = logging.getLogger(__name__)


class DatabaseRepository(Protocol):
    """Storage contract used by the use cases."""

    async def get_news(self) -> list[News]: ...

    async def get_news_item(self, news_id: int) -> News: ...

    async def add_news(self, news: News) -> None: ...

    async def update_news(self, news_id: int, news: News) -> None: ...

    async def get_feedback(self) -> list[Feedback]: ...

    async def add_feedback(self, feedback: Feedback) -> None: ...

    async def get_all_tokens(self) -> list[FirebaseTokenData]: ...

    async def add_token(self, token: str, token_type: FirebaseTokenType) -> None: ...

    async def get_email_subscriptions(self) -> list[Subscription]: ...

    async def add_email_subscription(self, email: str) -> Subscription: ...

    async def remove_email_subscription(self, key: str) -> None: ...


def _news_from_row(row: NewsRow) -> News:
    return News(
        id=row.id,
        title=row.title,
        subtitle=row.subtitle,
        image_url=row.image_url,
        url=row.url,
        occurrence=parse_date(row.occurrence),
    )


def _generate_key() -> str:
    # Wide-range random value; collisions are not checked.
    return str(secrets.randbits(63))


class SqlDatabaseRepository:
    """`DatabaseRepository` backed by an async SQLAlchemy engine."""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self._sessions = async_sessionmaker(
            bind=engine, expire_on_commit=False, class_=AsyncSession
        )

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self._sessions() as session, session.begin():
                yield session
        except SQLAlchemyError as exc:
            logger.exception("Database operation failed")
            raise StorageError(f"Database error: {exc.__class__.__name__}") from exc

    async def init_schema(self) -> None:
        """Create missing tables (idempotent)."""
        try:
            await init_db(self.engine)
        except SQLAlchemyError as exc:
            raise StorageError(f"Schema initialization failed: {exc}") from exc

    async def dispose(self) -> None:
        await self.engine.dispose()

    # News

    async def get_news(self) -> list[News]:
        """All news, newest (highest id) first."""
        async with self._transaction() as session:
            result = await session.execute(
                select(NewsRow).order_by(NewsRow.id.desc())  # type: ignore[union-attr]
            )
            return [_news_from_row(row) for row in result.scalars().all()]

    async def get_news_item(self, news_id: int) -> News:
        async with self._transaction() as session:
            row = await session.get(NewsRow, news_id)
            if row is None:
                raise NotFoundError(f"News {news_id} not found")
            return _news_from_row(row)

    async def add_news(self, news: News) -> None:
        async with self._transaction() as session:
            session.add(
                NewsRow(
                    title=news.title,
                    subtitle=news.subtitle,
                    image_url=news.image_url,
                    url=news.url,
                    occurrence=format_date(news.occurrence),
                )
            )

    async def update_news(self, news_id: int, news: News) -> None:
        async with self._transaction() as session:
            count = await session.scalar(
                select(func.count()).select_from(NewsRow).where(NewsRow.id == news_id)
            )
            if count != 1:
                raise NotFoundError("News id not found")
            await session.execute(
                update(NewsRow)
                .where(NewsRow.id == news_id)  # type: ignore[arg-type]
                .values(
                    {
                        NewsRow.title: news.title,
                        NewsRow.subtitle: news.subtitle,
                        NewsRow.image_url: news.image_url,
                        NewsRow.url: news.url,
                        NewsRow.occurrence: format_date(news.occurrence),
                    }
                )
            )

    # Feedback

    async def get_feedback(self) -> list[Feedback]:
        async with self._transaction() as session:
            result = await session.execute(
                select(
                    FeedbackRow.news_id,
                    FeedbackRow.rating,
                    FeedbackRow.comment_text,
                    FeedbackRow.suggestions_text,
                ).distinct()
            )
            return [
                Feedback(
                    news_id=news_id,
                    rating=rating,
                    comment=comment,
                    suggestions=suggestions,
                )
                for news_id, rating, comment, suggestions in result.all()
            ]

    async def add_feedback(self, feedback: Feedback) -> None:
        async with self._transaction() as session:
            session.add(
                FeedbackRow(
                    news_id=feedback.news_id,
                    rating=feedback.rating,
                    comment_text=feedback.comment,
                    suggestions_text=feedback.suggestions,
                )
            )

    # Push tokens

    async def get_all_tokens(self) -> list[FirebaseTokenData]:
        async with self._transaction() as session:
            result = await session.execute(
                select(TokenRow.token, TokenRow.type).order_by(TokenRow.id)  # type: ignore[arg-type]
            )
            rows = result.all()
        tokens = []
        for token, type_name in rows:
            try:
                token_type = FirebaseTokenType.from_value_name(type_name)
            except ValueError as exc:
                raise StorageError(str(exc)) from exc
            tokens.append(FirebaseTokenData(token=token, type=token_type))
        return tokens

    async def add_token(self, token: str, token_type: FirebaseTokenType) -> None:
        async with self._transaction() as session:
            session.add(TokenRow(token=token, type=token_type.value_name))

    # Email subscriptions

    async def get_email_subscriptions(self) -> list[Subscription]:
        async with self._transaction() as session:
            result = await session.execute(
                select(SubscriptionRow).order_by(SubscriptionRow.id)  # type: ignore[arg-type]
            )
            return [
                Subscription(
                    email=row.email,
                    key=row.key,
                    creation_time=parse_date(row.creation_time),
                )
                for row in result.scalars().all()
            ]

    async def add_email_subscription(self, email: str) -> Subscription:
        key = _generate_key()
        created = utc_now()
        async with self._transaction() as session:
            session.add(
                SubscriptionRow(
                    email=email, key=key, creation_time=format_date(created)
                )
            )
        return Subscription(email=email, key=key, creation_time=created)

    async def remove_email_subscription(self, key: str) -> None:
        async with self._transaction() as session:
            await session.execute(
                delete(SubscriptionRow).where(SubscriptionRow.key == key)  # type: ignore[arg-type]
            )


def create_database_repository(settings: Settings) -> SqlDatabaseRepository:
    """Select the storage backend from configuration and wrap it."""
    engine = create_engine(settings)
    logger.info("DB target: %s", describe_database_url(str(engine.url)))
    return SqlDatabaseRepository(engine)
