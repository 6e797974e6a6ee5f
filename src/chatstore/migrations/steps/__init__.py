"""Migration steps, one module per revision.

Each module exports:
- REVISION: int - Floor the step brings data up to
- DATE: str - Release date of the step
- DESCRIPTION: str - Human-readable description
- apply(db): coroutine performing the transformation

New steps are appended to STEP_MODULES and never removed or renumbered.
"""

from chatstore.migrations.catalog import MigrationCatalog
from chatstore.migrations.steps import (
    v000_test_migration_system,
    v001_autumn_attachments,
    v002_add_servers,
    v003_multiple_attachments,
    v004_server_collections,
    v005_server_permissions,
    v006_message_text_index,
    v007_add_bots,
)

STEP_MODULES = (
    v000_test_migration_system,
    v001_autumn_attachments,
    v002_add_servers,
    v003_multiple_attachments,
    v004_server_collections,
    v005_server_permissions,
    v006_message_text_index,
    v007_add_bots,
)

DEFAULT_CATALOG = MigrationCatalog.from_modules(STEP_MODULES)

# Derived, so the catalog and the stored value cannot drift apart.
LATEST_REVISION = DEFAULT_CATALOG.latest_revision
