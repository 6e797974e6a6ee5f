"""Entity models read from the document store."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class User:
    """A user account as stored in the ``users`` collection."""

    id: str
    username: str
    avatar: Optional[dict[str, Any]] = None
    relations: Optional[list[dict[str, Any]]] = None
    badges: Optional[int] = None
    status: Optional[dict[str, Any]] = None
    profile: Optional[dict[str, Any]] = None
    flags: Optional[int] = None
    bot: Optional[dict[str, Any]] = None

    # Computed per request, never stored
    relationship: Optional[str] = None
    online: Optional[bool] = None

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "User":
        """Build a User from a raw ``users`` document."""
        return cls(
            id=doc["_id"],
            username=doc["username"],
            avatar=doc.get("avatar"),
            relations=doc.get("relations"),
            badges=doc.get("badges"),
            status=doc.get("status"),
            profile=doc.get("profile"),
            flags=doc.get("flags"),
            bot=doc.get("bot"),
        )

    @classmethod
    def blank(cls) -> "User":
        return cls(id="", username="")
