"""Migration R001: Migrate to Autumn v1.0.0.

Files gained a ``tag`` naming their bucket and a ``size`` in bytes. Files
uploaded before this are all in the "attachments" bucket and their size
was never recorded, so it is set to 0.
"""

from chatstore.core.storage import StorageDatabase

REVISION = 1
DATE = "2021-04-24"
DESCRIPTION = "Migrate to Autumn v1.0.0."


async def apply(db: StorageDatabase) -> None:
    await db.get_collection("messages").update_many(
        {"attachment": {"$exists": True}, "attachment.tag": {"$exists": False}},
        {"$set": {"attachment.tag": "attachments", "attachment.size": 0}},
    )

    await db.get_collection("attachments").update_many(
        {"tag": {"$exists": False}},
        {"$set": {"tag": "attachments", "size": 0}},
    )
