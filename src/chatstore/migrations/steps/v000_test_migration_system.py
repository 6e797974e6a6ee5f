"""Migration R000: Exercise the migration system.

Has no storage effect; it only proves the runner reaches step bodies.
"""

import structlog

from chatstore.core.storage import StorageDatabase

REVISION = 0
DATE = "2021-04-24"
DESCRIPTION = "Test migration system."

log = structlog.get_logger()


async def apply(db: StorageDatabase) -> None:
    log.debug("migration_system_reachable", database=db.name)
