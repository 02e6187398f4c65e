"""Email subscription and mailing use cases."""

from typing import Optional

from app.errors import MissingElementError
from app.models.subscriptions import Subscription
from app.repositories.database import DatabaseRepository
from app.repositories.email import EmailRepository


def build_unsubscribe_link(site_url: str, key: str) -> str:
    return f"{site_url.rstrip('/')}/unsubscribe?key={key}"


def build_mailing_body(message: str, unsubscribe_link: str) -> str:
    return f"{message}\n\n--\nTo unsubscribe, open: {unsubscribe_link}"


async def get_subscriptions(db: DatabaseRepository) -> list[Subscription]:
    return await db.get_email_subscriptions()


async def add_subscription(
    email: str,
    db: DatabaseRepository,
    email_repository: Optional[EmailRepository],
    *,
    site_url: str,
) -> Subscription:
    """Store the subscription and send a confirmation to the subscriber.

    Raises:
        MissingElementError: no email repository is configured; nothing is
            written in that case.
    """
    if email_repository is None:
        raise MissingElementError("EmailRepository")

    subscription = await db.add_email_subscription(email)
    link = build_unsubscribe_link(site_url, subscription.key)
    await email_repository.send(
        "Subscription confirmed",
        build_mailing_body("You are now subscribed to our newsletter.", link),
        [subscription.email],
    )
    return subscription


async def remove_subscription(key: str, db: DatabaseRepository) -> None:
    await db.remove_email_subscription(key)


async def send_mailing(
    title: str,
    message: str,
    email_repository: Optional[EmailRepository],
    db: DatabaseRepository,
    *,
    site_url: str,
) -> int:
    """Email `message` to every subscriber, each with their own unsubscribe link.

    Returns the number of messages sent.
    """
    if email_repository is None:
        raise MissingElementError("EmailRepository")

    subscriptions = await db.get_email_subscriptions()
    for subscription in subscriptions:
        link = build_unsubscribe_link(site_url, subscription.key)
        await email_repository.send(
            title, build_mailing_body(message, link), [subscription.email]
        )
    return len(subscriptions)
