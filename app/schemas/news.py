"""News table."""

from typing import Optional

from sqlalchemy import Column, String
from sqlmodel import Field, SQLModel


class NewsRow(SQLModel, table=True):  # type: ignore[call-arg]
    """Published news item.

    `occurrence` is stored as a formatted string (see `app.utils.dates`).
    """

    __tablename__ = "news"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    subtitle: str
    image_url: str = Field(sa_column=Column("imageUrl", String, nullable=False))
    url: str
    occurrence: str
