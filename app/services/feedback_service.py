"""Feedback use cases."""

from typing import Optional

from app.models.feedback import Feedback
from app.repositories.database import DatabaseRepository
from app.repositories.email import EmailRepository


def build_feedback_email(feedback: Feedback) -> str:
    """Plain-text body of the internal feedback notification."""
    return (
        f"News id: {feedback.news_id}\n"
        f"Rating: {feedback.rating}\n"
        f"Comment: {feedback.comment}\n"
        f"Suggestions: {feedback.suggestions}"
    )


async def get_all_feedback(db: DatabaseRepository) -> list[Feedback]:
    return await db.get_feedback()


async def add_feedback(
    feedback: Feedback,
    email: Optional[EmailRepository],
    db: DatabaseRepository,
    *,
    admin_email: Optional[str] = None,
) -> None:
    await db.add_feedback(feedback)
    if email is not None and admin_email:
        await email.send("New feedback", build_feedback_email(feedback), [admin_email])
