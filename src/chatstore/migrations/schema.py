"""Final schema shape and its post-conditions.

Both the bootstrapper (fresh database) and the step catalog (existing
database) must end with a database satisfying check_schema(FINAL_SCHEMA).
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from pymongo.errors import CollectionInvalid

from chatstore.core.storage import StorageDatabase
from chatstore.migrations.record import MIGRATIONS_COLLECTION


@dataclass(frozen=True)
class IndexSpec:
    """An index the final schema requires.

    Attributes:
        collection: Collection the index lives on.
        keys: (field, direction) pairs; direction is 1, -1 or "text".
        name: Index name, used to detect whether it exists.
        unique: Whether the index enforces uniqueness.
        collation: Optional collation document, e.g. {"locale": "en", "strength": 2}.
    """

    collection: str
    keys: tuple[tuple[str, Any], ...]
    name: str
    unique: bool = False
    collation: Optional[dict[str, Any]] = None

    def to_command(self) -> dict[str, Any]:
        """Render as a createIndexes database command."""
        index: dict[str, Any] = {"key": dict(self.keys), "name": self.name}
        if self.unique:
            index["unique"] = True
        if self.collation:
            index["collation"] = dict(self.collation)
        return {"createIndexes": self.collection, "indexes": [index]}


@dataclass(frozen=True)
class FinalSchema:
    """Collections, indexes and forbidden legacy fields of the latest revision."""

    collections: tuple[str, ...]
    indexes: tuple[IndexSpec, ...] = ()
    legacy_fields: dict[str, tuple[str, ...]] = field(default_factory=dict)


MESSAGE_CONTENT_INDEX = IndexSpec(
    collection="messages",
    keys=(("content", "text"),),
    name="content",
)

USERNAME_INDEX = IndexSpec(
    collection="users",
    keys=(("username", 1),),
    name="username",
    unique=True,
    collation={"locale": "en", "strength": 2},
)

FINAL_SCHEMA = FinalSchema(
    collections=(
        "accounts",
        "users",
        "channels",
        "messages",
        "attachments",
        "servers",
        "server_members",
        "server_bans",
        "channel_invites",
        "channel_unreads",
        "user_settings",
        "bots",
        MIGRATIONS_COLLECTION,
    ),
    indexes=(USERNAME_INDEX, MESSAGE_CONTENT_INDEX),
    legacy_fields={"messages": ("attachment",)},
)


async def ensure_collection(db: StorageDatabase, name: str) -> bool:
    """Create a collection unless it already exists.

    Returns:
        True if the collection was created by this call.
    """
    if name in await db.list_collection_names():
        return False

    try:
        await db.create_collection(name)
    except CollectionInvalid:
        # Created implicitly in the meantime, e.g. by createIndexes
        return False
    return True


async def check_schema(db: StorageDatabase, schema: FinalSchema = FINAL_SCHEMA) -> list[str]:
    """List every way the database deviates from ``schema``.

    Returns:
        Human-readable violations; empty when the database conforms.
    """
    violations: list[str] = []
    existing = set(await db.list_collection_names())

    for name in schema.collections:
        if name not in existing:
            violations.append(f"missing collection {name}")

    for index in schema.indexes:
        if index.collection not in existing:
            violations.append(f"missing index {index.collection}.{index.name}")
            continue
        info = await db.get_collection(index.collection).index_information()
        if index.name not in info:
            violations.append(f"missing index {index.collection}.{index.name}")

    for collection, fields in schema.legacy_fields.items():
        for name in fields:
            leftover = await db.get_collection(collection).find_one(
                {name: {"$exists": True}}
            )
            if leftover is not None:
                violations.append(f"legacy field {collection}.{name} still present")

    return violations
