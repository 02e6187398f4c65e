"""News use cases."""

import logging
from typing import Optional

from app.models.news import News
from app.repositories.database import DatabaseRepository
from app.repositories.email import EmailRepository
from app.repositories.notifications import NotificationRepository

logger = logging.getLogger(__name__)


async def get_all_news(db: DatabaseRepository) -> list[News]:
    return await db.get_news()


async def add_or_update_news(
    news: News,
    db: DatabaseRepository,
    notifications: Optional[NotificationRepository],
    email: Optional[EmailRepository],
    *,
    admin_email: Optional[str] = None,
) -> None:
    """Update the item when the payload carries an id, otherwise insert it.

    Only a newly inserted item is announced: a push broadcast to every
    registered token and an email to the admin, each when configured.
    """
    if news.id is not None:
        await db.update_news(news.id, news)
        return None

    await db.add_news(news)
    logger.info("Added news %r", news.title)

    if notifications is not None:
        tokens = [data.token for data in await db.get_all_tokens()]
        if tokens:
            await notifications.send_push(news.title, news.url, tokens)

    if email is not None and admin_email:
        await email.send(
            f"New article published: {news.title}",
            f"{news.title}\n{news.subtitle}\n\n{news.url}",
            [admin_email],
        )
