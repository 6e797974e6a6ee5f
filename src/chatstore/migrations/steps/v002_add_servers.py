"""Migration R002: Add servers collection."""

from chatstore.core.storage import StorageDatabase
from chatstore.migrations.schema import ensure_collection

REVISION = 2
DATE = "2021-05-08"
DESCRIPTION = "Add servers collection."


async def apply(db: StorageDatabase) -> None:
    await ensure_collection(db, "servers")
