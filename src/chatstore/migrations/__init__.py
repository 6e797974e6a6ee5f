"""Schema migrations for the chat database.

The single entry point is ensure_latest(), called once at startup before
any query is served.
"""

from chatstore.migrations.bootstrap import Bootstrapper
from chatstore.migrations.catalog import MigrationCatalog, MigrationStep
from chatstore.migrations.errors import (
    BootstrapFailure,
    CommitFailure,
    MigrationError,
    ProbeFailure,
    RecordLoadFailure,
    RecordMalformed,
    RecordMissing,
    StepFailure,
)
from chatstore.migrations.record import (
    MIGRATIONS_COLLECTION,
    MigrationRecord,
    RevisionStore,
)
from chatstore.migrations.runner import (
    MigrationResult,
    MigrationRunner,
    MigrationState,
    ensure_latest,
)
from chatstore.migrations.schema import FINAL_SCHEMA, FinalSchema, IndexSpec, check_schema
from chatstore.migrations.steps import DEFAULT_CATALOG, LATEST_REVISION

__all__ = [
    "Bootstrapper",
    "MigrationCatalog",
    "MigrationStep",
    "DEFAULT_CATALOG",
    "LATEST_REVISION",
    # Errors
    "BootstrapFailure",
    "CommitFailure",
    "MigrationError",
    "ProbeFailure",
    "RecordLoadFailure",
    "RecordMalformed",
    "RecordMissing",
    "StepFailure",
    # Record
    "MIGRATIONS_COLLECTION",
    "MigrationRecord",
    "RevisionStore",
    # Runner
    "MigrationResult",
    "MigrationRunner",
    "MigrationState",
    "ensure_latest",
    # Schema
    "FINAL_SCHEMA",
    "FinalSchema",
    "IndexSpec",
    "check_schema",
]
