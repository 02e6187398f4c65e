"""Push-notification token registrations."""

from typing import Optional

from sqlmodel import Field, SQLModel


class TokenRow(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "tokens"

    id: Optional[int] = Field(default=None, primary_key=True)
    token: str
    type: str  # "web" | "android"
