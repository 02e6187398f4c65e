"""Push-notification API routes: token registration and broadcast."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Response

from app.config import Settings
from app.models.notifications import FirebaseTokenData
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
from app.services.notification_service import add_token, get_token_data, send_notifications

router = APIRouter(prefix="/notification", tags=["notifications"])


@router.get(
    "/register",
    response_model=List[FirebaseTokenData],
    dependencies=[Depends(require_secret)],
)
async def list_tokens(
    db: DatabaseRepository = Depends(get_database),
) -> List[FirebaseTokenData]:
    return await get_token_data(db)


@router.post("/register")
async def register_token(
    data: FirebaseTokenData = Depends(receive_object(FirebaseTokenData)),
    db: DatabaseRepository = Depends(get_database),
) -> Response:
    await add_token(data, db)
    return Response(status_code=200)


@router.post("/send", dependencies=[Depends(require_secret)])
async def send(
    text: str = Depends(receive_object(str, "String")),
    db: DatabaseRepository = Depends(get_database),
    notifications: Optional[NotificationRepository] = Depends(get_notification_repository),
    email: Optional[EmailRepository] = Depends(get_email_repository),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Broadcast `text` to every registered device (503 when push is unconfigured)."""
    await send_notifications(
        text,
        settings.notification_url,
        db,
        notifications,
        email,
        admin_email=settings.admin_email,
    )
    return Response(status_code=200)
