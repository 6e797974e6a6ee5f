"""
Storage handle protocols.

The migration engine only needs a small slice of the driver: listing
databases on the client, and listing/creating collections and reaching
collections on a database. pymongo's AsyncMongoClient and AsyncDatabase
satisfy these structurally; tests pass an in-memory double.
"""
from typing import Any, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class StorageDatabase(Protocol):
    """A named database holding document collections."""

    @property
    def name(self) -> str:
        """Database name."""
        ...

    async def list_collection_names(self) -> list[str]:
        """Names of the collections that currently exist."""
        ...

    async def create_collection(self, name: str, **kwargs: Any) -> Any:
        """Create a collection.

        Raises:
            pymongo.errors.CollectionInvalid: If it already exists.
        """
        ...

    async def command(self, command: Mapping[str, Any], **kwargs: Any) -> Mapping[str, Any]:
        """Run an arbitrary database command."""
        ...

    def get_collection(self, name: str, **kwargs: Any) -> Any:
        """Get a collection handle (does not create it)."""
        ...


@runtime_checkable
class StorageClient(Protocol):
    """A connection able to enumerate and open databases."""

    async def list_database_names(self, session: Optional[Any] = None) -> list[str]:
        """Names of every database on the server."""
        ...

    def get_database(self, name: Optional[str] = None, **kwargs: Any) -> StorageDatabase:
        """Open a database handle by name."""
        ...
