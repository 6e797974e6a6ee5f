"""Migration failures.

Every failure here aborts startup: the service must not serve traffic
against a database in an unknown shape.
"""

from typing import Optional

from chatstore.core.errors import PermanentError


class MigrationError(PermanentError):
    """Base class for schema migration failures."""


class ProbeFailure(MigrationError):
    """Could not list databases, so bootstrap vs. incremental is unknown."""


class RecordMissing(MigrationError):
    """The database exists but holds no migration record."""


class RecordMalformed(MigrationError):
    """The migration record exists but its fields are unreadable."""


class RecordLoadFailure(MigrationError):
    """Reading the migration record failed at the driver level."""


class StepFailure(MigrationError):
    """A migration step's storage operation failed.

    Attributes:
        revision: Floor of the failing step.
        description: Description of the failing step.
    """

    def __init__(
        self,
        revision: int,
        description: str,
        cause: Optional[Exception] = None,
    ):
        super().__init__(
            f"Migration [revision {revision}] failed: {description}", cause
        )
        self.revision = revision
        self.description = description


class CommitFailure(MigrationError):
    """Steps ran but the new revision could not be stored.

    The next startup re-runs the outstanding steps, which tolerate it.
    """


class BootstrapFailure(MigrationError):
    """Creating a fresh database failed part way.

    The half-created database has to be dropped by hand before retrying.
    """
