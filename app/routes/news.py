"""News API routes.

- GET /news: public list, newest first
- PUT /news: publish a new item or update an existing one (secret required)
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response

from app.config import Settings
from app.models.news import News, NewsData
from app.repositories.database import DatabaseRepository
from app.repositories.email import EmailRepository
from app.repositories.notifications import NotificationRepository
from app.routes.deps import (
    get_database,
    get_email_repository,
    get_notification_repository,
    get_settings,
    receive_object,
    require_secret,
)
from app.services.news_service import add_or_update_news, get_all_news

router = APIRouter(prefix="/news", tags=["news"])


@router.get("", response_model=NewsData)
async def list_news(db: DatabaseRepository = Depends(get_database)) -> NewsData:
    return NewsData(news=await get_all_news(db))


@router.put("", dependencies=[Depends(require_secret)])
async def put_news(
    news: News = Depends(receive_object(News)),
    db: DatabaseRepository = Depends(get_database),
    notifications: Optional[NotificationRepository] = Depends(get_notification_repository),
    email: Optional[EmailRepository] = Depends(get_email_repository),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Insert when the payload has no id, update the matching row otherwise."""
    await add_or_update_news(
        news, db, notifications, email, admin_email=settings.admin_email
    )
    return Response(status_code=200)
