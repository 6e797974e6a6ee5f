"""Migration R004: Add more server collections."""

from chatstore.core.storage import StorageDatabase
from chatstore.migrations.schema import ensure_collection

REVISION = 4
DATE = "2021-06-01"
DESCRIPTION = "Add more server collections."


async def apply(db: StorageDatabase) -> None:
    for name in ("server_members", "server_bans", "channel_invites"):
        await ensure_collection(db, name)
