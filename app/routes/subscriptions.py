"""Email subscription and mailing routes.

Parameters are read from the form body (query string accepted as fallback).
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Request, Response

from app.config import Settings
from app.models.subscriptions import Subscription
from app.repositories.database import DatabaseRepository
from app.repositories.email import EmailRepository
from app.routes.deps import (
    get_database,
    get_email_repository,
    get_param,
    get_settings,
    require_secret,
)
from app.services.subscription_service import (
    add_subscription,
    get_subscriptions,
    remove_subscription,
    send_mailing,
)

router = APIRouter(tags=["subscriptions"])


@router.get(
    "/subscription",
    response_model=List[Subscription],
    dependencies=[Depends(require_secret)],
)
async def list_subscriptions(
    db: DatabaseRepository = Depends(get_database),
) -> List[Subscription]:
    return await get_subscriptions(db)


@router.post("/subscription")
async def subscribe(
    request: Request,
    db: DatabaseRepository = Depends(get_database),
    email_repository: Optional[EmailRepository] = Depends(get_email_repository),
    settings: Settings = Depends(get_settings),
) -> Response:
    email = await get_param(request, "email")
    await add_subscription(email, db, email_repository, site_url=settings.site_url)
    return Response(status_code=200)


@router.delete("/subscription")
async def unsubscribe(
    request: Request,
    db: DatabaseRepository = Depends(get_database),
) -> Response:
    key = await get_param(request, "key")
    await remove_subscription(key, db)
    return Response(status_code=200)


@router.post("/sendMailing", dependencies=[Depends(require_secret)])
async def post_mailing(
    request: Request,
    db: DatabaseRepository = Depends(get_database),
    email_repository: Optional[EmailRepository] = Depends(get_email_repository),
    settings: Settings = Depends(get_settings),
) -> Response:
    title = await get_param(request, "title")
    message = await get_param(request, "message")
    await send_mailing(title, message, email_repository, db, site_url=settings.site_url)
    return Response(status_code=200)
