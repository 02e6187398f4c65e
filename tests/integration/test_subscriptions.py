"""Integration tests for subscriptions and mailing."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
class TestSubscribe:
    async def test_missing_email_repository_returns_503_without_writing(
        self, app, app_client: AsyncClient
    ):
        response = await app_client.post("/subscription", data={"email": "a@b.com"})

        assert response.status_code == 503
        assert response.text == "Missing element: EmailRepository"
        assert await app.state.database.get_email_subscriptions() == []

    async def test_missing_email_param_returns_400(
        self, app_client: AsyncClient, configured_app
    ):
        response = await app_client.post("/subscription", data={})
        assert response.status_code == 400
        assert response.text == "Missing parameter: email"

    async def test_subscribe_sends_confirmation(
        self, app_client: AsyncClient, configured_app, email_repository
    ):
        response = await app_client.post("/subscription", data={"email": "a@b.com"})
        assert response.status_code == 200

        (subscription,) = await configured_app.state.database.get_email_subscriptions()
        subject, body, recipients = email_repository.sent[0]
        assert recipients == ["a@b.com"]
        assert f"unsubscribe?key={subscription.key}" in body


@pytest.mark.asyncio
class TestUnsubscribe:
    async def test_delete_removes_subscription(
        self, app_client: AsyncClient, configured_app, secret_headers
    ):
        await app_client.post("/subscription", data={"email": "a@b.com"})
        listing = await app_client.get("/subscription", headers=secret_headers)
        (created,) = listing.json()
        key = created["key"]

        response = await app_client.delete(f"/subscription?key={key}")
        assert response.status_code == 200

        listing = await app_client.get("/subscription", headers=secret_headers)
        assert all(item["key"] != key for item in listing.json())

    async def test_delete_accepts_form_body(self, app, app_client: AsyncClient):
        subscription = await app.state.database.add_email_subscription("a@b.com")

        response = await app_client.request(
            "DELETE", "/subscription", data={"key": subscription.key}
        )

        assert response.status_code == 200
        assert await app.state.database.get_email_subscriptions() == []

    async def test_delete_unknown_key_is_ok(self, app_client: AsyncClient):
        response = await app_client.delete("/subscription?key=missing")
        assert response.status_code == 200

    async def test_delete_without_key_returns_400(self, app_client: AsyncClient):
        response = await app_client.delete("/subscription")
        assert response.status_code == 400
        assert response.text == "Missing parameter: key"

    async def test_listing_requires_secret(self, app_client: AsyncClient):
        response = await app_client.get("/subscription")
        assert response.status_code == 403


@pytest.mark.asyncio
class TestSendMailing:
    async def test_sends_to_every_subscriber(
        self, app, app_client: AsyncClient, configured_app, secret_headers, email_repository
    ):
        await app.state.database.add_email_subscription("a@b.com")
        await app.state.database.add_email_subscription("c@d.com")

        response = await app_client.post(
            "/sendMailing",
            data={"title": "Digest", "message": "News of the week"},
            headers=secret_headers,
        )

        assert response.status_code == 200
        assert [recipients for _, _, recipients in email_repository.sent] == [
            ["a@b.com"],
            ["c@d.com"],
        ]
        assert all("News of the week" in body for _, body, _ in email_repository.sent)

    async def test_requires_secret(
        self, app_client: AsyncClient, configured_app, email_repository
    ):
        await configured_app.state.database.add_email_subscription("a@b.com")
        response = await app_client.post(
            "/sendMailing", data={"title": "Digest", "message": "Hi"}
        )
        assert response.status_code == 403
        assert email_repository.sent == []

    async def test_missing_message_returns_400(
        self, app_client: AsyncClient, configured_app, secret_headers
    ):
        response = await app_client.post(
            "/sendMailing", data={"title": "Digest"}, headers=secret_headers
        )
        assert response.status_code == 400
        assert response.text == "Missing parameter: message"

    async def test_missing_email_repository_returns_503(
        self, app_client: AsyncClient, secret_headers
    ):
        response = await app_client.post(
            "/sendMailing",
            data={"title": "Digest", "message": "Hi"},
            headers=secret_headers,
        )
        assert response.status_code == 503
