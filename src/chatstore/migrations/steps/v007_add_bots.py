"""Migration R007: Add bots collection."""

from chatstore.core.storage import StorageDatabase
from chatstore.migrations.schema import ensure_collection

REVISION = 7
DATE = "2021-08-11"
DESCRIPTION = "Add bots collection."


async def apply(db: StorageDatabase) -> None:
    await ensure_collection(db, "bots")
