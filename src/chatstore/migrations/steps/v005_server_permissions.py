"""Migration R005: Add permissions.

Backfills ``default_permissions`` as a ``[server, channel]`` pair on servers
that predate permissions. Servers that already have a value keep it.
"""

from chatstore.core.storage import StorageDatabase
from chatstore.permissions import default_server_permissions

REVISION = 5
DATE = "2021-06-26"
DESCRIPTION = "Add permissions."


async def apply(db: StorageDatabase) -> None:
    await db.get_collection("servers").update_many(
        {"default_permissions": {"$exists": False}},
        {"$set": {"default_permissions": default_server_permissions()}},
    )
