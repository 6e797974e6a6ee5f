"""Migration R003: Support multiple file uploads.

Messages carried at most one ``attachment``; they now carry an
``attachments`` list. Each legacy message is rewritten individually, and a
message already rewritten by an interrupted run no longer matches the
legacy query.

Also adds the channel_unreads and user_settings collections.
"""

import structlog

from chatstore.core.storage import StorageDatabase
from chatstore.migrations.schema import ensure_collection

REVISION = 3
DATE = "2021-05-25"
DESCRIPTION = "Support multiple file uploads, add channel_unreads and user_settings."

log = structlog.get_logger()


async def apply(db: StorageDatabase) -> None:
    messages = db.get_collection("messages")
    legacy = {"attachment": {"$exists": True}}

    rewritten = 0
    async for doc in messages.find(legacy, projection={"_id": 1, "attachment": 1}):
        await messages.update_one(
            {"_id": doc["_id"], **legacy},
            {
                "$unset": {"attachment": 1},
                "$set": {"attachments": [doc["attachment"]]},
            },
        )
        rewritten += 1

    if rewritten:
        log.info("messages_rewritten", count=rewritten, revision=REVISION)

    await ensure_collection(db, "channel_unreads")
    await ensure_collection(db, "user_settings")
