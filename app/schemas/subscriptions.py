"""Email subscriptions table."""

from typing import Optional

from sqlalchemy import Column, String
from sqlmodel import Field, SQLModel


class SubscriptionRow(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "subscriptions"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str
    key: str = Field(index=True)
    creation_time: str = Field(sa_column=Column("creationTime", String, nullable=False))
