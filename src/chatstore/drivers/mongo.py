"""MongoDB driver - async pymongo persistence layer.

This driver:
- Owns the client connection to MongoDB
- Migrates (or bootstraps) the database before serving any query
- Maps documents to entities
"""

from typing import Any, Optional

import structlog
from pymongo import AsyncMongoClient
from pymongo.collation import Collation
from pymongo.errors import PyMongoError

from chatstore.core.config import DEFAULT_DATABASE_NAME, DatabaseSettings
from chatstore.core.errors import DatabaseError, NotFound
from chatstore.core.storage import StorageClient, StorageDatabase
from chatstore.entities import User
from chatstore.migrations import MigrationResult, ensure_latest

log = structlog.get_logger()

CASE_INSENSITIVE = Collation(locale="en", strength=2)


class MongoDriver:
    """Queries backed by a MongoDB database.

    Usage:
        driver = MongoDriver(settings=DatabaseSettings(uri="mongodb://..."))
        await driver.connect()
        user = await driver.get_user_by_id("01FD...")
    """

    def __init__(
        self,
        settings: Optional[DatabaseSettings] = None,
        client: Optional[StorageClient] = None,
    ):
        """Initialize the driver.

        Args:
            settings: Connection and migration settings.
            client: Pre-built client (takes precedence over settings.uri).
        """
        self._settings = settings or DatabaseSettings()
        self._client = client
        self._owns_client = client is None
        self._db: Optional[StorageDatabase] = None
        self._log = log.bind(component="mongo_driver", database=self._settings.name)

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    @property
    def database_name(self) -> str:
        return self._settings.name or DEFAULT_DATABASE_NAME

    async def connect(self) -> MigrationResult:
        """Open the connection and bring the database to the latest revision.

        Raises:
            MigrationError: The database could not be migrated; the driver
                stays disconnected.
        """
        if self._client is None:
            self._client = AsyncMongoClient(self._settings.uri)

        self._log.info("connecting_mongo")

        result = await ensure_latest(
            self._client,
            self.database_name,
            probe_retry=self._settings.probe_retry,
            verify_schema=self._settings.verify_schema,
        )
        self._db = self._client.get_database(self.database_name)

        self._log.info(
            "mongo_connected",
            revision=result.revision,
            bootstrapped=result.bootstrapped,
        )
        return result

    async def close(self) -> None:
        """Close the client if this driver created it."""
        if self._owns_client and self._client is not None:
            await self._client.close()
            self._client = None
        self._db = None
        self._log.info("mongo_closed")

    def _collection(self, name: str) -> Any:
        if self._db is None:
            raise RuntimeError("MongoDriver not connected")
        return self._db.get_collection(name)

    # ============ Users ============

    async def get_user_by_id(self, id: str) -> User:
        try:
            doc = await self._collection("users").find_one({"_id": id})
        except PyMongoError as e:
            raise DatabaseError("find_one", "user", cause=e) from e

        if doc is None:
            raise NotFound()
        return User.from_document(doc)

    async def get_user_by_username(self, username: str) -> User:
        try:
            doc = await self._collection("users").find_one(
                {"username": username},
                collation=CASE_INSENSITIVE,
            )
        except PyMongoError as e:
            raise DatabaseError("find_one", "user", cause=e) from e

        if doc is None:
            raise NotFound()
        return User.from_document(doc)

    async def get_users(self, user_ids: list[str]) -> list[User]:
        users = []
        try:
            async for doc in self._collection("users").find({"_id": {"$in": list(user_ids)}}):
                users.append(User.from_document(doc))
        except PyMongoError as e:
            raise DatabaseError("find", "users", cause=e) from e
        return users
