"""Fresh-install path: build the final schema directly."""

import structlog
from pymongo.errors import PyMongoError

from chatstore.core.storage import StorageDatabase
from chatstore.migrations.errors import BootstrapFailure
from chatstore.migrations.record import MigrationRecord, RevisionStore
from chatstore.migrations.schema import FINAL_SCHEMA, FinalSchema, ensure_collection

log = structlog.get_logger()


class Bootstrapper:
    """Creates a database that has never existed at ``latest_revision``.

    Historical steps are not replayed: they describe how to reshape old
    data, and a new database has none.
    """

    def __init__(self, latest_revision: int, schema: FinalSchema = FINAL_SCHEMA):
        self._latest_revision = latest_revision
        self._schema = schema

    async def create_fresh(self, db: StorageDatabase) -> MigrationRecord:
        """Create collections, indexes and the migration record.

        Raises:
            BootstrapFailure: Any storage operation failed. Nothing is
                rolled back.
        """
        logger = log.bind(component="bootstrapper", database=db.name)
        logger.info("bootstrapping_database", revision=self._latest_revision)

        try:
            for name in self._schema.collections:
                await ensure_collection(db, name)

            for index in self._schema.indexes:
                await db.command(index.to_command())

            record = await RevisionStore(db).create(self._latest_revision)
        except PyMongoError as e:
            logger.error("bootstrap_failed", error=str(e))
            raise BootstrapFailure(
                f"Failed to create database {db.name}.", cause=e
            ) from e

        logger.info(
            "database_created",
            collections=len(self._schema.collections),
            indexes=len(self._schema.indexes),
        )
        return record
