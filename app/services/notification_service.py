"""Push-notification use cases: token registration and broadcasts."""

import logging
from typing import Optional

from app.errors import MissingElementError
from app.models.notifications import FirebaseTokenData
from app.repositories.database import DatabaseRepository
from app.repositories.email import EmailRepository
from app.repositories.notifications import NotificationRepository

logger = logging.getLogger(__name__)


async def get_token_data(db: DatabaseRepository) -> list[FirebaseTokenData]:
    return await db.get_all_tokens()


async def add_token(data: FirebaseTokenData, db: DatabaseRepository) -> None:
    await db.add_token(data.token, data.type)


async def send_notifications(
    text: str,
    url: str,
    db: DatabaseRepository,
    notifications: Optional[NotificationRepository],
    email: Optional[EmailRepository],
    *,
    admin_email: Optional[str] = None,
) -> None:
    """Broadcast `text` to every registered token and report to the admin.

    Raises:
        MissingElementError: no notification repository is configured.
    """
    if notifications is None:
        raise MissingElementError("NotificationRepository")

    tokens = [data.token for data in await db.get_all_tokens()]
    result = await notifications.send_push(text, url, tokens)
    logger.info("Broadcast to %d token(s)", len(tokens))

    if email is not None and admin_email:
        await email.send(
            "Notifications sent",
            f"Text: {text}\nSucceeded: {result.success}\nFailed: {result.failure}",
            [admin_email],
        )
