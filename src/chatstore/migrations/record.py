"""Revision store: the singleton migration record."""

from dataclasses import dataclass
from typing import Any

import structlog
from pymongo.errors import PyMongoError

from chatstore.core.storage import StorageDatabase
from chatstore.migrations.errors import (
    CommitFailure,
    RecordLoadFailure,
    RecordMalformed,
    RecordMissing,
)

log = structlog.get_logger()

MIGRATIONS_COLLECTION = "migrations"
RECORD_ID = 0


@dataclass(frozen=True)
class MigrationRecord:
    """The applied revision of a database.

    Attributes:
        id: Key of the single record document.
        revision: Revision the stored data is shaped for.
    """

    id: Any
    revision: int

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "MigrationRecord":
        """Parse a raw record document.

        Raises:
            RecordMalformed: If ``_id`` is absent or ``revision`` is not a
                non-negative integer.
        """
        if "_id" not in doc:
            raise RecordMalformed("Migration record has no _id.")

        revision = doc.get("revision")
        if isinstance(revision, bool) or not isinstance(revision, int) or revision < 0:
            raise RecordMalformed(
                f"Migration record has invalid revision: {revision!r}."
            )

        return cls(id=doc["_id"], revision=revision)

    def to_document(self) -> dict[str, Any]:
        return {"_id": self.id, "revision": self.revision}


class RevisionStore:
    """Reads and updates the migration record of one database.

    The record is only ever created by the bootstrapper; an existing
    database without one was not initialised by this system.
    """

    def __init__(self, db: StorageDatabase, collection: str = MIGRATIONS_COLLECTION):
        self._db = db
        self._collection = db.get_collection(collection)
        self._log = log.bind(component="revision_store", database=db.name)

    async def load(self) -> MigrationRecord:
        """Read the migration record.

        Raises:
            RecordMissing: The collection holds no record.
            RecordMalformed: The record cannot be parsed.
            RecordLoadFailure: The read itself failed.
        """
        try:
            doc = await self._collection.find_one({})
        except PyMongoError as e:
            raise RecordLoadFailure("Failed to fetch migration data.", cause=e) from e

        if doc is None:
            raise RecordMissing(
                f"Database {self._db.name} was configured incorrectly, "
                "possibly because initialisation failed."
            )

        record = MigrationRecord.from_document(doc)
        self._log.debug("migration_record_loaded", revision=record.revision)
        return record

    async def commit(self, record_id: Any, revision: int) -> None:
        """Overwrite the stored revision of an existing record.

        Never inserts: a record that vanished between load and commit is a
        failure, not something to recreate here.

        Raises:
            CommitFailure: The update failed or matched no record.
        """
        try:
            result = await self._collection.update_one(
                {"_id": record_id},
                {"$set": {"revision": revision}},
            )
        except PyMongoError as e:
            raise CommitFailure(
                "Failed to commit migration information.", cause=e
            ) from e

        if result.matched_count == 0:
            raise CommitFailure(
                f"Migration record {record_id!r} disappeared before commit."
            )

        self._log.debug("migration_record_committed", revision=revision)

    async def create(self, revision: int, record_id: Any = RECORD_ID) -> MigrationRecord:
        """Insert the record of a freshly bootstrapped database.

        Driver errors propagate; the bootstrapper wraps them.
        """
        record = MigrationRecord(id=record_id, revision=revision)
        await self._collection.insert_one(record.to_document())
        return record
