"""
Unit tests for RevisionStore and MigrationRecord.
"""
import pytest
from pymongo.errors import OperationFailure

from chatstore.migrations import (
    CommitFailure,
    MigrationRecord,
    RecordLoadFailure,
    RecordMalformed,
    RecordMissing,
    RevisionStore,
)


@pytest.fixture
def db(mongo_client):
    return mongo_client["chatstore"]


class TestMigrationRecord:
    """Parsing of the raw record document."""

    def test_from_document(self):
        record = MigrationRecord.from_document({"_id": 0, "revision": 4})
        assert record == MigrationRecord(id=0, revision=4)
        assert record.to_document() == {"_id": 0, "revision": 4}

    @pytest.mark.parametrize(
        "doc",
        [
            {"revision": 1},
            {"_id": 0},
            {"_id": 0, "revision": "1"},
            {"_id": 0, "revision": -1},
            {"_id": 0, "revision": True},
            {"_id": 0, "revision": 1.5},
        ],
    )
    def test_malformed_documents(self, doc):
        with pytest.raises(RecordMalformed):
            MigrationRecord.from_document(doc)


class TestRevisionStore:
    """Load and commit against the migrations collection."""

    @pytest.mark.asyncio
    async def test_load(self, db):
        db["migrations"].seed({"_id": 0, "revision": 6})

        record = await RevisionStore(db).load()

        assert record.revision == 6
        assert record.id == 0

    @pytest.mark.asyncio
    async def test_load_missing(self, db):
        with pytest.raises(RecordMissing):
            await RevisionStore(db).load()

    @pytest.mark.asyncio
    async def test_load_driver_failure(self, db):
        db["migrations"].fail_next("find_one", OperationFailure("boom"))

        with pytest.raises(RecordLoadFailure) as exc_info:
            await RevisionStore(db).load()

        assert isinstance(exc_info.value.cause, OperationFailure)

    @pytest.mark.asyncio
    async def test_commit_overwrites_revision(self, db):
        db["migrations"].seed({"_id": 0, "revision": 2})
        store = RevisionStore(db)

        await store.commit(0, 8)

        assert db["migrations"].documents == [{"_id": 0, "revision": 8}]

    @pytest.mark.asyncio
    async def test_commit_never_creates_a_record(self, db):
        with pytest.raises(CommitFailure):
            await RevisionStore(db).commit(0, 8)

        assert db["migrations"].documents == []

    @pytest.mark.asyncio
    async def test_commit_driver_failure(self, db):
        db["migrations"].seed({"_id": 0, "revision": 2})
        db["migrations"].fail_next("update_one", OperationFailure("not primary"))

        with pytest.raises(CommitFailure):
            await RevisionStore(db).commit(0, 8)

        assert db["migrations"].documents == [{"_id": 0, "revision": 2}]

    @pytest.mark.asyncio
    async def test_create(self, db):
        record = await RevisionStore(db).create(8)

        assert record == MigrationRecord(id=0, revision=8)
        assert db["migrations"].documents == [{"_id": 0, "revision": 8}]
