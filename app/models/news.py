"""Request/response models for news."""

from datetime import datetime
from typing import Optional

from app.models.base import ApiModel


class News(ApiModel):
    """A news item. `id` is absent until storage assigns one."""

    id: Optional[int] = None
    title: str
    subtitle: str
    image_url: str
    url: str
    occurrence: datetime


class NewsData(ApiModel):
    """Response wrapper for GET /news."""

    news: list[News]
