"""Query surface shared by every driver."""

from typing import Protocol, runtime_checkable

from chatstore.entities import User


@runtime_checkable
class Queries(Protocol):
    """Entity queries served once the database is migrated."""

    async def get_user_by_id(self, id: str) -> User:
        """Raises NotFound if no user has this id."""
        ...

    async def get_user_by_username(self, username: str) -> User:
        """Case-insensitive lookup. Raises NotFound."""
        ...

    async def get_users(self, user_ids: list[str]) -> list[User]:
        """Users among ``user_ids`` that exist, in no particular order."""
        ...
