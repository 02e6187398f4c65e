"""Email subscription model."""

from datetime import datetime

from app.models.base import ApiModel


class Subscription(ApiModel):
    email: str
    key: str
    creation_time: datetime
