"""chatstore - persistence layer and schema migrations for a chat backend."""

__version__ = "0.1.0"

from chatstore.database import Database
from chatstore.migrations import LATEST_REVISION, ensure_latest

__all__ = ["Database", "LATEST_REVISION", "ensure_latest", "__version__"]
