"""Migration runner - brings a database to the latest revision at startup.

Flow:
    INIT -> PROBING -> BOOTSTRAPPING -> DONE                       (fresh)
    INIT -> PROBING -> LOADING_RECORD -> APPLYING_STEPS
         -> COMMITTING -> DONE                                     (existing)

Any failure moves the runner to FAILED and is re-raised; the caller must
abort startup. Runs are single-process and sequential: nothing here guards
against two runners working on the same database.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import structlog
from bson.errors import BSONError
from pymongo.errors import PyMongoError

from chatstore.core.errors import ChatstoreError, wrap_external_error
from chatstore.core.retry import RetryConfig, retry_with_config
from chatstore.core.storage import StorageClient, StorageDatabase
from chatstore.migrations.bootstrap import Bootstrapper
from chatstore.migrations.catalog import MigrationCatalog
from chatstore.migrations.errors import ProbeFailure, StepFailure
from chatstore.migrations.record import RevisionStore
from chatstore.migrations.schema import FINAL_SCHEMA, FinalSchema, check_schema
from chatstore.migrations.steps import DEFAULT_CATALOG

log = structlog.get_logger()


class MigrationState(str, Enum):
    """Lifecycle of a single migration run."""

    INIT = "init"
    PROBING = "probing"
    BOOTSTRAPPING = "bootstrapping"
    LOADING_RECORD = "loading_record"
    APPLYING_STEPS = "applying_steps"
    COMMITTING = "committing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class MigrationResult:
    """Outcome of a successful run.

    Attributes:
        database: Name of the migrated database.
        revision: Revision stored at the end of the run.
        bootstrapped: True if the database was created from scratch.
        previous_revision: Revision loaded before applying steps (None when
            bootstrapped).
        applied: Floors of the steps whose body ran.
        skipped: Floors of the steps whose guard was false.
        violations: Schema post-condition violations, if verification ran.
    """

    database: str
    revision: int
    bootstrapped: bool = False
    previous_revision: Optional[int] = None
    applied: list[int] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)
    violations: list[str] = field(default_factory=list)


class MigrationRunner:
    """Ensures one database is at the catalog's latest revision.

    A runner performs a single run; create a new one per startup.
    """

    def __init__(
        self,
        client: StorageClient,
        database_name: str,
        catalog: Optional[MigrationCatalog] = None,
        schema: FinalSchema = FINAL_SCHEMA,
        probe_retry: Optional[RetryConfig] = None,
        verify_schema: bool = False,
    ):
        """Initialize the runner.

        Args:
            client: Client used for the database-existence probe.
            database_name: Database to migrate.
            catalog: Steps to apply (default: the built-in catalog).
            schema: Final shape used for bootstrap and verification.
            probe_retry: Backoff for transient probe failures.
            verify_schema: Check schema post-conditions after the run.
        """
        self._client = client
        self._database_name = database_name
        self._catalog = catalog or DEFAULT_CATALOG
        self._schema = schema
        self._probe_retry = probe_retry or RetryConfig()
        self._verify_schema = verify_schema
        self._state = MigrationState.INIT
        self._log = log.bind(component="migration_runner", database=database_name)

    @property
    def state(self) -> MigrationState:
        return self._state

    @property
    def latest_revision(self) -> int:
        return self._catalog.latest_revision

    def _transition(self, state: MigrationState) -> None:
        self._log.debug("migration_state", previous=self._state.value, state=state.value)
        self._state = state

    async def run(self) -> MigrationResult:
        """Bootstrap or migrate the database, then record the new revision.

        Raises:
            MigrationError: Any failure; the database may be partially
                migrated and the service must not start.
            RuntimeError: The runner was already used.
        """
        if self._state != MigrationState.INIT:
            raise RuntimeError(
                f"MigrationRunner already ran (state: {self._state.value})."
            )

        try:
            result = await self._run()
        except BaseException as e:
            self._transition(MigrationState.FAILED)
            self._log.error(
                "migration_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        self._transition(MigrationState.DONE)
        return result

    async def _run(self) -> MigrationResult:
        self._transition(MigrationState.PROBING)
        exists = await self._probe()
        db = self._client.get_database(self._database_name)

        if not exists:
            self._transition(MigrationState.BOOTSTRAPPING)
            record = await Bootstrapper(self.latest_revision, self._schema).create_fresh(db)
            result = MigrationResult(
                database=self._database_name,
                revision=record.revision,
                bootstrapped=True,
            )
        else:
            result = await self._migrate(db)

        if self._verify_schema:
            result.violations = await check_schema(db, self._schema)
            for violation in result.violations:
                self._log.warning("schema_violation", violation=violation)

        return result

    async def _probe(self) -> bool:
        """Check whether the target database already exists.

        Raises:
            ProbeFailure: Databases could not be listed, even after retrying
                transient errors.
        """

        @retry_with_config(self._probe_retry, log_context={"database": self._database_name})
        async def list_database_names() -> list[str]:
            try:
                return await self._client.list_database_names()
            except PyMongoError as e:
                raise wrap_external_error(e, "Failed to fetch database names") from e

        try:
            names = await list_database_names()
        except ChatstoreError as e:
            raise ProbeFailure("Failed to fetch database names.", cause=e) from e

        exists = self._database_name in names
        self._log.info("database_probe", exists=exists)
        return exists

    async def _migrate(self, db: StorageDatabase) -> MigrationResult:
        store = RevisionStore(db)

        self._transition(MigrationState.LOADING_RECORD)
        record = await store.load()
        current = record.revision

        self._transition(MigrationState.APPLYING_STEPS)
        self._log.info("migration_started", revision=current, latest=self.latest_revision)

        result = MigrationResult(
            database=self._database_name,
            revision=current,
            previous_revision=current,
        )

        for step in self._catalog:
            if not step.should_run(current):
                self._log.debug("skipping_migration", revision=step.revision_floor)
                result.skipped.append(step.revision_floor)
                continue

            self._log.info(
                "running_migration",
                step=step.label,
                revision=step.revision_floor,
                description=step.description,
            )
            try:
                await step.apply(db)
            except (PyMongoError, BSONError) as e:
                raise StepFailure(step.revision_floor, step.description, cause=e) from e
            result.applied.append(step.revision_floor)

        # An older build must never lower a revision written by a newer one
        revision = max(current, self.latest_revision)
        if current > self.latest_revision:
            self._log.warning(
                "database_ahead_of_catalog",
                revision=current,
                latest=self.latest_revision,
            )

        self._transition(MigrationState.COMMITTING)
        await store.commit(record.id, revision)
        result.revision = revision

        self._log.info("migration_complete", revision=revision, applied=len(result.applied))
        return result


async def ensure_latest(
    client: StorageClient,
    database_name: str,
    **kwargs,
) -> MigrationResult:
    """Bring ``database_name`` to the latest revision, or raise.

    Keyword arguments are passed to MigrationRunner.
    """
    return await MigrationRunner(client, database_name, **kwargs).run()
