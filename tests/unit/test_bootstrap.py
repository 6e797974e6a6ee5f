"""
Unit tests for Bootstrapper and the final schema checks.
"""
import pytest
from pymongo.errors import OperationFailure

from chatstore.migrations import (
    FINAL_SCHEMA,
    LATEST_REVISION,
    BootstrapFailure,
    Bootstrapper,
    FinalSchema,
    IndexSpec,
    check_schema,
)
from chatstore.migrations.schema import MESSAGE_CONTENT_INDEX, USERNAME_INDEX, ensure_collection


@pytest.fixture
def db(mongo_client):
    return mongo_client["chatstore"]


class TestIndexSpec:

    def test_to_command(self):
        assert USERNAME_INDEX.to_command() == {
            "createIndexes": "users",
            "indexes": [
                {
                    "key": {"username": 1},
                    "name": "username",
                    "unique": True,
                    "collation": {"locale": "en", "strength": 2},
                }
            ],
        }

    def test_to_command_minimal(self):
        assert MESSAGE_CONTENT_INDEX.to_command() == {
            "createIndexes": "messages",
            "indexes": [{"key": {"content": "text"}, "name": "content"}],
        }


class TestEnsureCollection:

    @pytest.mark.asyncio
    async def test_creates_once(self, db):
        assert await ensure_collection(db, "bots") is True
        assert await ensure_collection(db, "bots") is False


class TestBootstrapper:
    """Fresh database creation."""

    @pytest.mark.asyncio
    async def test_creates_final_schema(self, db):
        record = await Bootstrapper(LATEST_REVISION).create_fresh(db)

        assert record.revision == LATEST_REVISION
        assert set(await db.list_collection_names()) == set(FINAL_SCHEMA.collections)
        assert db["migrations"].documents == [{"_id": 0, "revision": LATEST_REVISION}]
        assert await check_schema(db) == []

    @pytest.mark.asyncio
    async def test_custom_schema(self, db):
        schema = FinalSchema(
            collections=("messages", "migrations"),
            indexes=(IndexSpec("messages", (("channel", 1),), "channel"),),
        )

        await Bootstrapper(3, schema).create_fresh(db)

        assert await db.list_collection_names() == ["messages", "migrations"]
        assert db["messages"].indexes["channel"]["key"] == [("channel", 1)]
        assert db["migrations"].documents == [{"_id": 0, "revision": 3}]

    @pytest.mark.asyncio
    async def test_failure_is_wrapped(self, db):
        db.fail_next("create_collection", OperationFailure("no space"))

        with pytest.raises(BootstrapFailure) as exc_info:
            await Bootstrapper(LATEST_REVISION).create_fresh(db)

        assert isinstance(exc_info.value.cause, OperationFailure)


class TestCheckSchema:
    """Post-condition violations."""

    @pytest.mark.asyncio
    async def test_empty_database_reports_everything_missing(self, db):
        violations = await check_schema(db)

        assert "missing collection messages" in violations
        assert "missing index messages.content" in violations
        assert "missing index users.username" in violations

    @pytest.mark.asyncio
    async def test_legacy_field_reported(self, db):
        await Bootstrapper(LATEST_REVISION).create_fresh(db)
        db["messages"].seed({"_id": "m1", "attachment": {"url": "x"}})

        assert await check_schema(db) == ["legacy field messages.attachment still present"]
