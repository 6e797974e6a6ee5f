"""Ordered catalog of migration steps.

A step with floor N brings data written by any revision below N into the
shape expected at revision N. The runner invokes a step only while the
stored revision is at or below its floor, and stores
``latest_revision = max(floor) + 1`` afterwards.
"""

from dataclasses import dataclass
from types import ModuleType
from typing import Any, Awaitable, Callable, Iterable, Iterator, Optional

from chatstore.core.storage import StorageDatabase

StepBody = Callable[[StorageDatabase], Awaitable[Any]]


@dataclass(frozen=True)
class MigrationStep:
    """A single catalog entry.

    Attributes:
        revision_floor: Revision this step brings data up to.
        description: Human-readable description for logs.
        apply: Coroutine function performing the transformation.
        date: Release date of the step, informational.
    """

    revision_floor: int
    description: str
    apply: StepBody
    date: Optional[str] = None

    def should_run(self, current_revision: int) -> bool:
        """Guard: run while the stored revision has not passed this floor."""
        return current_revision <= self.revision_floor

    @classmethod
    def from_module(cls, module: ModuleType) -> "MigrationStep":
        """Build a step from a module exporting REVISION, DESCRIPTION and apply."""
        return cls(
            revision_floor=module.REVISION,
            description=module.DESCRIPTION,
            apply=module.apply,
            date=getattr(module, "DATE", None),
        )

    @property
    def label(self) -> str:
        if self.date:
            return f"revision {self.revision_floor} / {self.date}"
        return f"revision {self.revision_floor}"


class MigrationCatalog:
    """Immutable, ascending sequence of migration steps.

    Iterating is restartable. Floors must be strictly increasing in the
    order given, which keeps the catalog append-only in practice: a new
    step can only go at the end.
    """

    def __init__(self, steps: Iterable[MigrationStep]):
        self._steps = tuple(steps)

        if not self._steps:
            raise ValueError("A migration catalog needs at least one step.")

        previous: Optional[int] = None
        for step in self._steps:
            if step.revision_floor < 0:
                raise ValueError(
                    f"Negative revision floor {step.revision_floor} in catalog."
                )
            if previous is not None and step.revision_floor <= previous:
                raise ValueError(
                    f"Catalog floors must strictly increase: "
                    f"{step.revision_floor} follows {previous}."
                )
            previous = step.revision_floor

    @classmethod
    def from_modules(cls, modules: Iterable[ModuleType]) -> "MigrationCatalog":
        return cls(MigrationStep.from_module(module) for module in modules)

    def __iter__(self) -> Iterator[MigrationStep]:
        return iter(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    @property
    def floors(self) -> list[int]:
        return [step.revision_floor for step in self._steps]

    @property
    def latest_revision(self) -> int:
        """Revision stored after every step has been applied."""
        return self._steps[-1].revision_floor + 1
