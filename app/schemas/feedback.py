"""Feedback table (append-only)."""

from typing import Optional

from sqlalchemy import Column, Integer, String
from sqlmodel import Field, SQLModel


class FeedbackRow(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "feedback"

    # Surrogate key; feedback rows carry no identity of their own.
    id: Optional[int] = Field(default=None, primary_key=True)
    news_id: int = Field(sa_column=Column("newsId", Integer, nullable=False))
    rating: int
    comment_text: str = Field(sa_column=Column("commentText", String, nullable=False))
    suggestions_text: str = Field(
        sa_column=Column("suggestionsText", String, nullable=False)
    )
