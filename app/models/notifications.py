"""Request/response models for push-notification registration."""

from enum import Enum

from app.models.base import ApiModel


class FirebaseTokenType(str, Enum):
    """Client platform a Firebase token was issued for."""

    WEB = "Web"
    ANDROID = "Android"

    @property
    def value_name(self) -> str:
        """Name persisted in the tokens table."""
        return self.value.lower()

    @classmethod
    def from_value_name(cls, name: str) -> "FirebaseTokenType":
        for member in cls:
            if member.value_name == name:
                return member
        raise ValueError(f"Illegal type {name} set as firebase token type")


class FirebaseTokenData(ApiModel):
    token: str
    type: FirebaseTokenType


class PushResult(ApiModel):
    """Delivery counts reported by the push provider."""

    success: int = 0
    failure: int = 0
