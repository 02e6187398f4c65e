# app/config.py
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Networked database; when set it wins over the embedded file database.
    database_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("jdbc_database_url", "database_url"),
    )
    embedded_database_url: str = "sqlite+aiosqlite:///./news.db"
    pool_size: int = Field(default=5, ge=1)

    secret_hash: Optional[str] = None
    production: bool = False

    log_level: str = "INFO"
    access_log: bool = True
    sql_echo: bool = False

    # Email (Resend)
    resend_api_key: Optional[str] = None
    resend_base_url: str = "https://api.resend.com"
    email_from_address: str = "noreply@example.com"
    admin_email: Optional[str] = None

    # Push notifications (Firebase Cloud Messaging)
    firebase_server_key: Optional[str] = None
    firebase_base_url: str = "https://fcm.googleapis.com"
    notification_url: str = "https://blog.kotlin-academy.com/"

    site_url: str = "http://localhost:8080"

    @property
    def networked_database_url(self) -> Optional[str]:
        url = (self.database_url or "").strip()
        return url or None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )
