"""Driver selection and dispatch."""

from pathlib import Path
from typing import Optional

from chatstore.core.config import ConfigManager, DatabaseSettings
from chatstore.core.logging import configure_logging
from chatstore.drivers import MockupDriver, MongoDriver
from chatstore.entities import User
from chatstore.queries import Queries


class Database:
    """Entry point for application code; forwards every query to its driver.

    Usage:
        db = await Database.from_mongo(DatabaseSettings(uri="mongodb://..."))
        user = await db.get_user_by_id("01FD...")
    """

    def __init__(self, driver: Queries):
        self._driver = driver

    @classmethod
    async def from_mongo(cls, settings: Optional[DatabaseSettings] = None) -> "Database":
        """Connect to MongoDB and migrate before returning.

        Raises:
            MigrationError: Startup must be aborted.
        """
        driver = MongoDriver(settings)
        try:
            await driver.connect()
        except Exception:
            await driver.close()
            raise
        return cls(driver)

    @classmethod
    async def from_config(cls, config_path: Optional[Path] = None) -> "Database":
        """Configure logging, then connect using a TOML file and CHATSTORE_* env."""
        config = ConfigManager(config_path)
        configure_logging(config)
        return await cls.from_mongo(DatabaseSettings.from_config(config))

    @classmethod
    def from_mockup(cls) -> "Database":
        return cls(MockupDriver())

    @property
    def driver(self) -> Queries:
        return self._driver

    async def close(self) -> None:
        if isinstance(self._driver, MongoDriver):
            await self._driver.close()

    async def get_user_by_id(self, id: str) -> User:
        return await self._driver.get_user_by_id(id)

    async def get_user_by_username(self, username: str) -> User:
        return await self._driver.get_user_by_username(username)

    async def get_users(self, user_ids: list[str]) -> list[User]:
        return await self._driver.get_users(user_ids)
