"""Integration tests for the SQL repository against an embedded SQLite file."""

from datetime import datetime, timezone

import pytest

from app.errors import NotFoundError, StorageError
from app.models.feedback import Feedback
from app.models.news import News
from app.models.notifications import FirebaseTokenData, FirebaseTokenType
from app.schemas.tokens import TokenRow
from app.utils.dates import format_date

OCCURRENCE = datetime(2018, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def _news(title: str, **overrides) -> News:
    values = {
        "title": title,
        "subtitle": f"{title} subtitle",
        "image_url": f"https://example.com/{title}.png",
        "url": f"https://example.com/{title}",
        "occurrence": OCCURRENCE,
    }
    values.update(overrides)
    return News(**values)


@pytest.mark.asyncio
class TestNews:
    async def test_lists_newest_first(self, database):
        """Items with a larger storage-assigned id come first."""
        await database.add_news(_news("first"))
        await database.add_news(_news("second"))
        await database.add_news(_news("third"))

        news = await database.get_news()

        assert [item.title for item in news] == ["third", "second", "first"]
        ids = [item.id for item in news]
        assert ids == sorted(ids, reverse=True)

    async def test_ignores_incoming_id_on_insert(self, database):
        await database.add_news(_news("only", id=42))
        (stored,) = await database.get_news()
        assert stored.id != 42

    async def test_round_trips_all_fields(self, database):
        await database.add_news(_news("article"))
        (stored,) = await database.get_news()

        assert stored.subtitle == "article subtitle"
        assert stored.image_url == "https://example.com/article.png"
        assert stored.url == "https://example.com/article"
        assert stored.occurrence == OCCURRENCE

    async def test_get_news_item_by_id(self, database):
        await database.add_news(_news("article"))
        (stored,) = await database.get_news()
        assert await database.get_news_item(stored.id) == stored

    async def test_get_news_item_missing_raises_not_found(self, database):
        with pytest.raises(NotFoundError):
            await database.get_news_item(123)

    async def test_update_overwrites_fields(self, database):
        await database.add_news(_news("old"))
        (stored,) = await database.get_news()

        later = datetime(2019, 6, 7, 8, 9, 10, tzinfo=timezone.utc)
        await database.update_news(stored.id, _news("new", occurrence=later))

        updated = await database.get_news_item(stored.id)
        assert updated.title == "new"
        assert updated.image_url == "https://example.com/new.png"
        assert updated.occurrence == later

    async def test_update_of_missing_id_leaves_storage_unchanged(self, database):
        await database.add_news(_news("kept"))
        before = await database.get_news()

        with pytest.raises(NotFoundError, match="News id not found"):
            await database.update_news(before[0].id + 100, _news("intruder"))

        assert await database.get_news() == before


@pytest.mark.asyncio
class TestFeedback:
    async def test_duplicate_rows_are_listed_once(self, database):
        feedback = Feedback(news_id=1, rating=4, comment="Nice", suggestions="None")
        other = Feedback(news_id=2, rating=1, comment="Meh", suggestions="Shorter")

        await database.add_feedback(feedback)
        await database.add_feedback(feedback)
        await database.add_feedback(other)

        listed = await database.get_feedback()
        assert len(listed) == 2
        assert feedback in listed
        assert other in listed


@pytest.mark.asyncio
class TestTokens:
    async def test_add_and_list_tokens(self, database):
        await database.add_token("web-token", FirebaseTokenType.WEB)
        await database.add_token("android-token", FirebaseTokenType.ANDROID)
        await database.add_token("web-token", FirebaseTokenType.WEB)

        assert await database.get_all_tokens() == [
            FirebaseTokenData(token="web-token", type=FirebaseTokenType.WEB),
            FirebaseTokenData(token="android-token", type=FirebaseTokenType.ANDROID),
            FirebaseTokenData(token="web-token", type=FirebaseTokenType.WEB),
        ]

    async def test_unknown_stored_type_raises_storage_error(self, database):
        async with database._transaction() as session:
            session.add(TokenRow(token="t", type="ios"))

        with pytest.raises(StorageError, match="ios"):
            await database.get_all_tokens()


@pytest.mark.asyncio
class TestSubscriptions:
    async def test_add_returns_created_record(self, database):
        subscription = await database.add_email_subscription("a@b.com")

        assert subscription.email == "a@b.com"
        assert subscription.key
        assert await database.get_email_subscriptions() == [subscription]

    async def test_keys_differ_between_subscriptions(self, database):
        first = await database.add_email_subscription("a@b.com")
        second = await database.add_email_subscription("a@b.com")
        assert first.key != second.key

    async def test_remove_by_key(self, database):
        subscription = await database.add_email_subscription("a@b.com")
        kept = await database.add_email_subscription("c@d.com")

        await database.remove_email_subscription(subscription.key)

        assert await database.get_email_subscriptions() == [kept]

    async def test_remove_missing_key_is_noop(self, database):
        kept = await database.add_email_subscription("c@d.com")
        await database.remove_email_subscription("does-not-exist")
        assert await database.get_email_subscriptions() == [kept]


@pytest.mark.asyncio
async def test_init_schema_is_idempotent(database):
    await database.add_news(_news("survivor"))
    await database.init_schema()
    assert [item.title for item in await database.get_news()] == ["survivor"]


def test_occurrence_format_matches_stored_string():
    assert format_date(OCCURRENCE) == "2018-01-02T03:04:05"
