"""Email repository backed by the Resend API."""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

import httpx

from app.config import Settings
from app.errors import OutboundError
from app.repositories.http import make_http_client

logger = logging.getLogger(__name__)


class EmailRepository(Protocol):
    async def send(self, subject: str, body: str, recipients: Sequence[str]) -> None: ...


class ResendEmailRepository:
    """Sends plain-text email through `POST /emails`."""

    def __init__(
        self,
        *,
        api_key: str,
        from_address: str,
        base_url: str = "https://api.resend.com",
        production: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.from_address = from_address
        self._client = make_http_client(
            base_url,
            production=production,
            headers={"Authorization": f"Bearer {api_key}"},
            transport=transport,
        )

    async def send(self, subject: str, body: str, recipients: Sequence[str]) -> None:
        """Send one message to `recipients`.

        Raises:
            OutboundError: Resend was unreachable or rejected the message.
        """
        to = list(recipients)
        if not to:
            return None

        try:
            response = await self._client.post(
                "/emails",
                json={
                    "from": self.from_address,
                    "to": to,
                    "subject": subject,
                    "text": body,
                },
            )
        except httpx.RequestError as exc:
            logger.error("HTTP error sending email to %s: %s", to, exc)
            raise OutboundError(f"Email provider unreachable: {exc}") from exc

        if response.status_code not in (200, 201, 202):
            logger.error(
                "Failed to send email to %s: %s %s",
                to,
                response.status_code,
                response.text,
            )
            raise OutboundError(
                f"Email provider returned {response.status_code}: {response.text[:300]}"
            )
        logger.info("Email %r sent to %d recipient(s)", subject, len(to))

    async def aclose(self) -> None:
        await self._client.aclose()


def create_email_repository(settings: Settings) -> Optional[ResendEmailRepository]:
    """Return the email repository, or None when no API key is configured."""
    if not settings.resend_api_key:
        logger.warning("Resend API key not configured, email features disabled")
        return None
    return ResendEmailRepository(
        api_key=settings.resend_api_key,
        from_address=settings.email_from_address,
        base_url=settings.resend_base_url,
        production=settings.production,
    )
