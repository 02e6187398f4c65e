"""Push-notification repository backed by Firebase Cloud Messaging.

Uses the legacy HTTP endpoint:
- POST /fcm/send  -> {"success": int, "failure": int, "results": [...]}
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, Sequence

import httpx

from app.config import Settings
from app.errors import OutboundError
from app.models.notifications import PushResult
from app.repositories.http import make_http_client

logger = logging.getLogger(__name__)

# FCM accepts at most this many registration ids per request.
MAX_TOKENS_PER_REQUEST = 1000


class NotificationRepository(Protocol):
    async def send_push(self, text: str, url: str, tokens: Sequence[str]) -> PushResult: ...


def _batches(items: Sequence[str], size: int) -> list[list[str]]:
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


class FirebaseNotificationRepository:
    def __init__(
        self,
        *,
        server_key: str,
        base_url: str = "https://fcm.googleapis.com",
        production: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = make_http_client(
            base_url,
            production=production,
            headers={"Authorization": f"key={server_key}"},
            transport=transport,
        )

    async def send_push(self, text: str, url: str, tokens: Sequence[str]) -> PushResult:
        """Broadcast `text` linking to `url` to every token."""
        success = 0
        failure = 0
        for batch in _batches(tokens, MAX_TOKENS_PER_REQUEST):
            data = await self._post(
                {
                    "registration_ids": batch,
                    "notification": {"body": text, "click_action": url},
                    "data": {"text": text, "url": url},
                }
            )
            success += int(data.get("success") or 0)
            failure += int(data.get("failure") or 0)

        logger.info("Push sent: %d succeeded, %d failed", success, failure)
        return PushResult(success=success, failure=failure)

    async def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            resp = await self._client.post("/fcm/send", json=payload)
        except httpx.RequestError as exc:
            logger.error("HTTP error calling FCM: %s", exc)
            raise OutboundError(f"Push provider unreachable: {exc}") from exc

        if resp.status_code != 200:
            # Avoid dumping huge bodies; include a small snippet.
            body = resp.text[:500]
            raise OutboundError(f"FCM send failed: {resp.status_code} {body}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise OutboundError("FCM returned a non-JSON response.") from exc
        return data if isinstance(data, dict) else {}

    async def aclose(self) -> None:
        await self._client.aclose()


def create_notification_repository(
    settings: Settings,
) -> Optional[FirebaseNotificationRepository]:
    """Return the push repository, or None when no server key is configured."""
    if not settings.firebase_server_key:
        logger.warning("Firebase server key not configured, push features disabled")
        return None
    return FirebaseNotificationRepository(
        server_key=settings.firebase_server_key,
        base_url=settings.firebase_base_url,
        production=settings.production,
    )
