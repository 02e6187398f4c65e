"""Feedback API routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Response

from app.config import Settings
from app.models.feedback import Feedback, FeedbackData
from app.repositories.database import DatabaseRepository
from app.repositories.email import EmailRepository
from app.routes.deps import (
    get_database,
    get_email_repository,
    get_settings,
    receive_object,
    require_secret,
)
from app.services.feedback_service import add_feedback, get_all_feedback

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.get("", response_model=FeedbackData, dependencies=[Depends(require_secret)])
async def list_feedback(db: DatabaseRepository = Depends(get_database)) -> FeedbackData:
    return FeedbackData(feedback=await get_all_feedback(db))


@router.post("")
async def post_feedback(
    feedback: Feedback = Depends(receive_object(Feedback)),
    db: DatabaseRepository = Depends(get_database),
    email: Optional[EmailRepository] = Depends(get_email_repository),
    settings: Settings = Depends(get_settings),
) -> Response:
    await add_feedback(feedback, email, db, admin_email=settings.admin_email)
    return Response(status_code=200)
