"""Migration R006: Add message text index.

createIndexes is a no-op when an identical index already exists.
"""

from chatstore.core.storage import StorageDatabase
from chatstore.migrations.schema import MESSAGE_CONTENT_INDEX

REVISION = 6
DATE = "2021-07-09"
DESCRIPTION = "Add message text index."


async def apply(db: StorageDatabase) -> None:
    await db.command(MESSAGE_CONTENT_INDEX.to_command())
